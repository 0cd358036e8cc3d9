from typing import Any, List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.content import SuccessStory


class SuccessStoryRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> List[SuccessStory]:
        """추천 우선, 그 다음 최신순"""
        stmt = select(SuccessStory).order_by(
            SuccessStory.featured.desc(), SuccessStory.created_at.desc()
        )
        return list(self.db.execute(stmt).scalars().all())

    def get_featured(self) -> List[SuccessStory]:
        stmt = (
            select(SuccessStory)
            .where(SuccessStory.featured.is_(True))
            .order_by(SuccessStory.created_at.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def get_recent(self, limit: int) -> List[SuccessStory]:
        stmt = select(SuccessStory).order_by(SuccessStory.created_at.desc()).limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def get_by_id(self, story_id: UUID) -> SuccessStory | None:
        stmt = select(SuccessStory).where(SuccessStory.id == story_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def create_story(self, story: SuccessStory) -> SuccessStory:
        self.db.add(story)
        self.db.flush()
        self.db.refresh(story)
        return story

    def update_story(self, story: SuccessStory, changes: dict[str, Any]) -> SuccessStory:
        for field, value in changes.items():
            setattr(story, field, value)
        self.db.flush()
        self.db.refresh(story)
        return story

    def delete_story(self, story: SuccessStory) -> None:
        self.db.delete(story)
        self.db.flush()
