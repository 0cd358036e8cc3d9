from typing import List
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.content import SuccessStory
from app.repositories.success_story_repository import SuccessStoryRepository
from app.schemas.auth import CurrentUser
from app.schemas.content import SuccessStoryCreateRequest, SuccessStoryUpdateRequest
from app.services.base import BaseService
from app.services.storage_service import StorageService
from app.utils.transaction import transaction

SUCCESS_STORY_BUCKET = "success-stories"

DEFAULT_RECENT_LIMIT = 3


class SuccessStoryService(BaseService):
    def __init__(self, db: Session, story_repo: SuccessStoryRepository, storage_service: StorageService):
        super().__init__(db)
        self.story_repo = story_repo
        self.storage_service = storage_service

    def get_success_stories(self) -> List[SuccessStory]:
        """추천 사례 먼저, 그 다음 최신순"""
        return self.story_repo.get_all()

    def get_success_story(self, story_id: UUID) -> SuccessStory:
        return self._require(self.story_repo.get_by_id(story_id), "Success story", story_id)

    def get_featured_success_stories(self) -> List[SuccessStory]:
        return self.story_repo.get_featured()

    def get_recent_success_stories(self, limit: int = DEFAULT_RECENT_LIMIT) -> List[SuccessStory]:
        return self.story_repo.get_recent(limit)

    def create_success_story(self, request: SuccessStoryCreateRequest, current_user: CurrentUser) -> SuccessStory:
        self.verify_admin(current_user, "create success stories")
        story = SuccessStory(**request.model_dump(), user_id=current_user.id)
        with transaction(self.db):
            self.story_repo.create_story(story)
        return story

    def update_success_story(
        self, story_id: UUID, request: SuccessStoryUpdateRequest, current_user: CurrentUser
    ) -> SuccessStory:
        self.verify_admin(current_user, "update success stories")
        story = self.get_success_story(story_id)
        with transaction(self.db):
            self.story_repo.update_story(story, self._changes(request))
        return story

    def delete_success_story(self, story_id: UUID, current_user: CurrentUser) -> None:
        self.verify_admin(current_user, "delete success stories")
        story = self.get_success_story(story_id)
        with transaction(self.db):
            self.story_repo.delete_story(story)

    def upload_story_image(
        self,
        story_id: UUID,
        filename: str | None,
        content: bytes,
        content_type: str | None,
        current_user: CurrentUser,
    ) -> SuccessStory:
        """success-stories 버킷에 업로드 후 image_url 갱신"""
        self.verify_admin(current_user, "update success stories")
        story = self.get_success_story(story_id)
        _, url = self.storage_service.upload_image(
            SUCCESS_STORY_BUCKET, str(story_id), filename, content, content_type
        )
        with transaction(self.db):
            self.story_repo.update_story(story, {"image_url": url})
        return story
