import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.content import PastRecording, Resource, ResourceCategory
from app.repositories.counter_repository import CounterRepository
from app.repositories.resource_repository import RecordingRepository, ResourceRepository
from app.schemas.auth import CurrentUser
from app.schemas.content import (
    RecordingCreateRequest,
    RecordingResponse,
    RecordingStatsResponse,
    RecordingUpdateRequest,
    ResourceCategoryCreateRequest,
    ResourceCreateRequest,
    ResourceUpdateRequest,
)
from app.services.base import BaseService
from app.services.storage_service import StorageService
from app.utils.transaction import transaction

logger = logging.getLogger(__name__)

RECORDING_THUMBNAIL_BUCKET = "recordings"


class ResourceService(BaseService):
    """자료실 (카테고리, 자료)"""

    def __init__(self, db: Session, resource_repo: ResourceRepository, counter_repo: CounterRepository):
        super().__init__(db)
        self.resource_repo = resource_repo
        self.counter_repo = counter_repo

    def get_categories(self) -> List[ResourceCategory]:
        return self.resource_repo.get_categories()

    def create_category(self, request: ResourceCategoryCreateRequest, current_user: CurrentUser) -> ResourceCategory:
        self.verify_admin(current_user, "create resource categories")
        category = ResourceCategory(**request.model_dump())
        with transaction(self.db):
            self.resource_repo.create_category(category)
        return category

    def get_resources(self, category_id: Optional[UUID] = None) -> List[Resource]:
        return self.resource_repo.get_resources(category_id)

    def get_resource(self, resource_id: UUID) -> Resource:
        """자료 조회 (조회수 1 증가)"""
        resource = self._require(self.resource_repo.get_by_id(resource_id), "Resource", resource_id)
        with transaction(self.db):
            self.counter_repo.increment(Resource, Resource.view_count, resource_id)
        self.db.refresh(resource)
        return resource

    def _check_category(self, category_id: Optional[UUID]) -> None:
        if category_id is not None:
            self._require(self.resource_repo.get_category_by_id(category_id), "Resource category", category_id)

    def create_resource(self, request: ResourceCreateRequest, current_user: CurrentUser) -> Resource:
        self.verify_admin(current_user, "create resources")
        self._check_category(request.category_id)
        resource = Resource(**request.model_dump(), created_by=current_user.id, view_count=0)
        with transaction(self.db):
            self.resource_repo.create_resource(resource)
        return resource

    def update_resource(
        self, resource_id: UUID, request: ResourceUpdateRequest, current_user: CurrentUser
    ) -> Resource:
        self.verify_admin(current_user, "update resources")
        resource = self._require(self.resource_repo.get_by_id(resource_id), "Resource", resource_id)
        changes = self._changes(request)
        self._check_category(changes.get("category_id"))
        with transaction(self.db):
            self.resource_repo.update_resource(resource, changes)
        return resource

    def delete_resource(self, resource_id: UUID, current_user: CurrentUser) -> None:
        self.verify_admin(current_user, "delete resources")
        resource = self._require(self.resource_repo.get_by_id(resource_id), "Resource", resource_id)
        with transaction(self.db):
            self.resource_repo.delete_resource(resource)


class RecordingService(BaseService):
    """지난 이벤트 녹화본"""

    def __init__(
        self,
        db: Session,
        recording_repo: RecordingRepository,
        counter_repo: CounterRepository,
        storage_service: StorageService,
    ):
        super().__init__(db)
        self.recording_repo = recording_repo
        self.counter_repo = counter_repo
        self.storage_service = storage_service

    def get_recordings(self) -> List[PastRecording]:
        """공개 녹화본 (녹화일 최신순)"""
        return self.recording_repo.get_all(public_only=True)

    def get_recording(self, recording_id: UUID) -> PastRecording:
        return self._require(self.recording_repo.get_by_id(recording_id), "Recording", recording_id)

    def create_recording(self, request: RecordingCreateRequest, current_user: CurrentUser) -> PastRecording:
        self.verify_admin(current_user, "create recordings")
        recording = PastRecording(**request.model_dump(), view_count=0)
        with transaction(self.db):
            self.recording_repo.create_recording(recording)
        return recording

    def update_recording(
        self, recording_id: UUID, request: RecordingUpdateRequest, current_user: CurrentUser
    ) -> PastRecording:
        self.verify_admin(current_user, "update recordings")
        recording = self.get_recording(recording_id)
        with transaction(self.db):
            self.recording_repo.update_recording(recording, self._changes(request))
        return recording

    def delete_recording(self, recording_id: UUID, current_user: CurrentUser) -> None:
        self.verify_admin(current_user, "delete recordings")
        recording = self.get_recording(recording_id)
        with transaction(self.db):
            self.recording_repo.delete_recording(recording)

    def increment_view_count(self, recording_id: UUID) -> int:
        """조회수 +1 (UPDATE view_count = view_count + 1), 새 조회수 반환"""
        self.get_recording(recording_id)
        with transaction(self.db):
            self.counter_repo.increment(PastRecording, PastRecording.view_count, recording_id)
        return self.get_recording(recording_id).view_count

    def get_recording_stats(self) -> RecordingStatsResponse:
        most_viewed = self.recording_repo.get_most_viewed()
        return RecordingStatsResponse(
            total_recordings=self.recording_repo.count_all(),
            total_views=self.recording_repo.sum_views(),
            most_viewed=RecordingResponse.model_validate(most_viewed) if most_viewed else None,
        )

    def upload_thumbnail(
        self,
        recording_id: UUID,
        filename: str | None,
        content: bytes,
        content_type: str | None,
        current_user: CurrentUser,
    ) -> PastRecording:
        self.verify_admin(current_user, "update recordings")
        recording = self.get_recording(recording_id)
        _, url = self.storage_service.upload_image(
            RECORDING_THUMBNAIL_BUCKET, str(recording_id), filename, content, content_type
        )
        with transaction(self.db):
            self.recording_repo.update_recording(recording, {"thumbnail_url": url})
        logger.info(f"Thumbnail uploaded for recording {recording_id}")
        return recording
