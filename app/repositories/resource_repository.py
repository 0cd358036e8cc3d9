from typing import Any, List
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.content import PastRecording, Resource, ResourceCategory


class ResourceRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_categories(self) -> List[ResourceCategory]:
        stmt = select(ResourceCategory).order_by(ResourceCategory.name.asc())
        return list(self.db.execute(stmt).scalars().all())

    def get_category_by_id(self, category_id: UUID) -> ResourceCategory | None:
        stmt = select(ResourceCategory).where(ResourceCategory.id == category_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def create_category(self, category: ResourceCategory) -> ResourceCategory:
        self.db.add(category)
        self.db.flush()
        self.db.refresh(category)
        return category

    def get_resources(self, category_id: UUID | None = None) -> List[Resource]:
        stmt = select(Resource)
        if category_id is not None:
            stmt = stmt.where(Resource.category_id == category_id)
        stmt = stmt.order_by(Resource.created_at.desc())
        return list(self.db.execute(stmt).scalars().all())

    def get_by_id(self, resource_id: UUID) -> Resource | None:
        stmt = select(Resource).where(Resource.id == resource_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def create_resource(self, resource: Resource) -> Resource:
        self.db.add(resource)
        self.db.flush()
        self.db.refresh(resource)
        return resource

    def update_resource(self, resource: Resource, changes: dict[str, Any]) -> Resource:
        for field, value in changes.items():
            setattr(resource, field, value)
        self.db.flush()
        self.db.refresh(resource)
        return resource

    def delete_resource(self, resource: Resource) -> None:
        self.db.delete(resource)
        self.db.flush()


class RecordingRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_all(self, public_only: bool = True) -> List[PastRecording]:
        """녹화 목록 (녹화일 최신순)"""
        stmt = select(PastRecording)
        if public_only:
            stmt = stmt.where(PastRecording.is_public.is_(True))
        stmt = stmt.order_by(PastRecording.recorded_at.desc(), PastRecording.created_at.desc())
        return list(self.db.execute(stmt).scalars().all())

    def get_by_id(self, recording_id: UUID) -> PastRecording | None:
        stmt = select(PastRecording).where(PastRecording.id == recording_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_most_viewed(self) -> PastRecording | None:
        stmt = select(PastRecording).order_by(PastRecording.view_count.desc()).limit(1)
        return self.db.execute(stmt).scalars().first()

    def create_recording(self, recording: PastRecording) -> PastRecording:
        self.db.add(recording)
        self.db.flush()
        self.db.refresh(recording)
        return recording

    def update_recording(self, recording: PastRecording, changes: dict[str, Any]) -> PastRecording:
        for field, value in changes.items():
            setattr(recording, field, value)
        self.db.flush()
        self.db.refresh(recording)
        return recording

    def delete_recording(self, recording: PastRecording) -> None:
        self.db.delete(recording)
        self.db.flush()

    def count_all(self) -> int:
        return self.db.execute(select(func.count(PastRecording.id))).scalar_one()

    def sum_views(self) -> int:
        stmt = select(func.coalesce(func.sum(PastRecording.view_count), 0))
        return int(self.db.execute(stmt).scalar_one())
