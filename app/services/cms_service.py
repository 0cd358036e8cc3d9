import logging
from typing import Any, List
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.dependencies.aggregate_repositories import CmsAggregateRepositories
from app.exceptions import ConflictError, NotFoundError, ValidationError
from app.models.cms import ForumCategory, ImportantMember, SlideImage, Sponsor, SystemConfig
from app.repositories.cms_repository import DisplayOrderRepository
from app.schemas.auth import CurrentUser
from app.schemas.cms import (
    ForumCategoryCreateRequest,
    ForumCategoryUpdateRequest,
    ImportantMemberCreateRequest,
    ImportantMemberUpdateRequest,
    ReorderRequest,
    SlideCreateRequest,
    SlideUpdateRequest,
    SponsorCreateRequest,
    SponsorUpdateRequest,
    SystemConfigUpdateRequest,
)
from app.services.base import BaseService
from app.services.storage_service import StorageService
from app.utils.transaction import transaction

logger = logging.getLogger(__name__)

SLIDE_BUCKET = "slides"
SPONSOR_BUCKET = "sponsors"
MEMBER_BUCKET = "members"

DEFAULT_SYSTEM_CONFIG = {
    "maintenance_mode": False,
    "registration_open": True,
    "allow_guest_access": True,
    "footer_text": "SR University Startup Club",
    "primary_color": "#4f46e5",
    "contact_email": None,
}


class CmsService(BaseService):
    """
    관리자 CMS (홈 슬라이드, 스폰서, 운영진 카드, 포럼 카테고리, 사이트 설정)
    - 조회는 공개, 변경은 관리자만
    - 순서가 있는 항목은 display_order 오름차순, 새 항목은 맨 뒤에 추가
    - 이미지가 교체/삭제되면 우리 버킷에 있던 이전 파일도 삭제
    """

    def __init__(self, db: Session, repos: CmsAggregateRepositories, storage_service: StorageService):
        super().__init__(db)
        self.repos = repos
        self.storage_service = storage_service

    # ------------------------------------------------------------------
    # 공통
    # ------------------------------------------------------------------

    def _create_ordered(self, repo: DisplayOrderRepository, item: Any) -> Any:
        with transaction(self.db):
            if item.display_order is None:
                item.display_order = repo.next_display_order()
            repo.create(item)
        return item

    def _update_with_image(
        self, repo: DisplayOrderRepository, item: Any, changes: dict[str, Any], image_field: str, bucket: str
    ) -> Any:
        old_url = getattr(item, image_field)
        with transaction(self.db):
            repo.update(item, changes)
        if image_field in changes and changes[image_field] != old_url:
            self.storage_service.remove_public_object(bucket, old_url)
        return item

    def _delete_with_image(self, repo: DisplayOrderRepository, item: Any, image_field: str, bucket: str) -> None:
        old_url = getattr(item, image_field)
        with transaction(self.db):
            repo.delete(item)
        self.storage_service.remove_public_object(bucket, old_url)

    def _reorder(self, repo: DisplayOrderRepository, request: ReorderRequest, name: str) -> List[Any]:
        """요청 순서대로 display_order = 1, 2, 3 ... (한 트랜잭션)"""
        if len(set(request.ids)) != len(request.ids):
            raise ValidationError(
                message="Duplicate ids",
                detail=f"Each {name.lower()} may appear only once in the new order"
            )
        items = repo.get_by_ids(request.ids)
        missing = [str(item_id) for item_id in request.ids if item_id not in items]
        if missing:
            raise NotFoundError(
                message=f"{name} not found",
                detail=f"{name} ids not found: {', '.join(missing)}"
            )

        with transaction(self.db):
            for position, item_id in enumerate(request.ids, start=1):
                repo.update(items[item_id], {"display_order": position})

        logger.info(f"Reordered {len(request.ids)} {name.lower()} item(s)")
        return repo.get_all()

    # ------------------------------------------------------------------
    # Home slides
    # ------------------------------------------------------------------

    def get_slides(self, active_only: bool = True) -> List[SlideImage]:
        return self.repos.slide.get_all(active_only=active_only)

    def get_slide(self, slide_id: UUID) -> SlideImage:
        return self._require(self.repos.slide.get_by_id(slide_id), "Slide", slide_id)

    def create_slide(self, request: SlideCreateRequest, current_user: CurrentUser) -> SlideImage:
        self.verify_admin(current_user, "manage slides")
        return self._create_ordered(self.repos.slide, SlideImage(**request.model_dump()))

    def update_slide(self, slide_id: UUID, request: SlideUpdateRequest, current_user: CurrentUser) -> SlideImage:
        self.verify_admin(current_user, "manage slides")
        slide = self.get_slide(slide_id)
        return self._update_with_image(self.repos.slide, slide, self._changes(request), "image_url", SLIDE_BUCKET)

    def toggle_slide_active(self, slide_id: UUID, current_user: CurrentUser) -> SlideImage:
        self.verify_admin(current_user, "manage slides")
        slide = self.get_slide(slide_id)
        with transaction(self.db):
            self.repos.slide.update(slide, {"is_active": not slide.is_active})
        return slide

    def delete_slide(self, slide_id: UUID, current_user: CurrentUser) -> None:
        """슬라이드 삭제, slides 버킷의 이미지 파일도 삭제"""
        self.verify_admin(current_user, "manage slides")
        slide = self.get_slide(slide_id)
        self._delete_with_image(self.repos.slide, slide, "image_url", SLIDE_BUCKET)

    def reorder_slides(self, request: ReorderRequest, current_user: CurrentUser) -> List[SlideImage]:
        self.verify_admin(current_user, "manage slides")
        return self._reorder(self.repos.slide, request, "Slide")

    def upload_slide_image(
        self, filename: str | None, content: bytes, content_type: str | None, current_user: CurrentUser
    ) -> tuple[str, str]:
        """슬라이드 생성 전에 이미지만 먼저 업로드, (path, public_url) 반환"""
        self.verify_admin(current_user, "manage slides")
        return self.storage_service.upload_image(SLIDE_BUCKET, "slide", filename, content, content_type)

    # ------------------------------------------------------------------
    # Sponsors
    # ------------------------------------------------------------------

    def get_sponsors(self, active_only: bool = True) -> List[Sponsor]:
        return self.repos.sponsor.get_all(active_only=active_only)

    def get_sponsor(self, sponsor_id: UUID) -> Sponsor:
        return self._require(self.repos.sponsor.get_by_id(sponsor_id), "Sponsor", sponsor_id)

    def create_sponsor(self, request: SponsorCreateRequest, current_user: CurrentUser) -> Sponsor:
        self.verify_admin(current_user, "manage sponsors")
        return self._create_ordered(self.repos.sponsor, Sponsor(**request.model_dump()))

    def update_sponsor(self, sponsor_id: UUID, request: SponsorUpdateRequest, current_user: CurrentUser) -> Sponsor:
        self.verify_admin(current_user, "manage sponsors")
        sponsor = self.get_sponsor(sponsor_id)
        changes = self._changes(request)

        start = changes.get("partnership_start_date", sponsor.partnership_start_date)
        end = changes.get("partnership_end_date", sponsor.partnership_end_date)
        if start is not None and end is not None and end < start:
            raise ValidationError(
                message="Invalid partnership period",
                detail="partnership_end_date must not be before partnership_start_date"
            )

        return self._update_with_image(self.repos.sponsor, sponsor, changes, "logo_url", SPONSOR_BUCKET)

    def toggle_sponsor_active(self, sponsor_id: UUID, current_user: CurrentUser) -> Sponsor:
        self.verify_admin(current_user, "manage sponsors")
        sponsor = self.get_sponsor(sponsor_id)
        with transaction(self.db):
            self.repos.sponsor.update(sponsor, {"is_active": not sponsor.is_active})
        return sponsor

    def delete_sponsor(self, sponsor_id: UUID, current_user: CurrentUser) -> None:
        self.verify_admin(current_user, "manage sponsors")
        sponsor = self.get_sponsor(sponsor_id)
        self._delete_with_image(self.repos.sponsor, sponsor, "logo_url", SPONSOR_BUCKET)

    def reorder_sponsors(self, request: ReorderRequest, current_user: CurrentUser) -> List[Sponsor]:
        self.verify_admin(current_user, "manage sponsors")
        return self._reorder(self.repos.sponsor, request, "Sponsor")

    def upload_sponsor_logo(
        self,
        sponsor_id: UUID,
        filename: str | None,
        content: bytes,
        content_type: str | None,
        current_user: CurrentUser,
    ) -> Sponsor:
        self.verify_admin(current_user, "manage sponsors")
        sponsor = self.get_sponsor(sponsor_id)
        _, url = self.storage_service.upload_image(
            SPONSOR_BUCKET, str(sponsor_id), filename, content, content_type
        )
        return self._update_with_image(self.repos.sponsor, sponsor, {"logo_url": url}, "logo_url", SPONSOR_BUCKET)

    # ------------------------------------------------------------------
    # Important members
    # ------------------------------------------------------------------

    def get_important_members(self, active_only: bool = True) -> List[ImportantMember]:
        return self.repos.important_member.get_all(active_only=active_only)

    def get_important_member(self, member_id: UUID) -> ImportantMember:
        return self._require(self.repos.important_member.get_by_id(member_id), "Important member", member_id)

    def create_important_member(
        self, request: ImportantMemberCreateRequest, current_user: CurrentUser
    ) -> ImportantMember:
        self.verify_admin(current_user, "manage important members")
        return self._create_ordered(self.repos.important_member, ImportantMember(**request.model_dump()))

    def update_important_member(
        self, member_id: UUID, request: ImportantMemberUpdateRequest, current_user: CurrentUser
    ) -> ImportantMember:
        self.verify_admin(current_user, "manage important members")
        member = self.get_important_member(member_id)
        return self._update_with_image(
            self.repos.important_member, member, self._changes(request), "avatar_url", MEMBER_BUCKET
        )

    def delete_important_member(self, member_id: UUID, current_user: CurrentUser) -> None:
        self.verify_admin(current_user, "manage important members")
        member = self.get_important_member(member_id)
        self._delete_with_image(self.repos.important_member, member, "avatar_url", MEMBER_BUCKET)

    def reorder_important_members(self, request: ReorderRequest, current_user: CurrentUser) -> List[ImportantMember]:
        self.verify_admin(current_user, "manage important members")
        return self._reorder(self.repos.important_member, request, "Important member")

    def upload_member_avatar(
        self,
        member_id: UUID,
        filename: str | None,
        content: bytes,
        content_type: str | None,
        current_user: CurrentUser,
    ) -> ImportantMember:
        """members 버킷에 업로드 후 avatar_url 교체, 이전 아바타 파일 삭제"""
        self.verify_admin(current_user, "manage important members")
        member = self.get_important_member(member_id)
        _, url = self.storage_service.upload_image(
            MEMBER_BUCKET, str(member_id), filename, content, content_type
        )
        return self._update_with_image(
            self.repos.important_member, member, {"avatar_url": url}, "avatar_url", MEMBER_BUCKET
        )

    # ------------------------------------------------------------------
    # Forum categories
    # ------------------------------------------------------------------

    def get_forum_categories(self) -> List[ForumCategory]:
        return self.repos.forum_category.get_all()

    def get_forum_category(self, category_id: UUID) -> ForumCategory:
        return self._require(self.repos.forum_category.get_by_id(category_id), "Forum category", category_id)

    def _save_forum_category(self, write, name: str | None) -> None:
        try:
            with transaction(self.db):
                write()
        except IntegrityError as e:
            raise ConflictError(
                message="Forum category already exists",
                detail=f"Forum category '{name}' already exists"
            ) from e

    def create_forum_category(self, request: ForumCategoryCreateRequest, current_user: CurrentUser) -> ForumCategory:
        self.verify_admin(current_user, "manage forum categories")
        category = ForumCategory(**request.model_dump())
        self._save_forum_category(lambda: self.repos.forum_category.create_category(category), request.name)
        return category

    def update_forum_category(
        self, category_id: UUID, request: ForumCategoryUpdateRequest, current_user: CurrentUser
    ) -> ForumCategory:
        self.verify_admin(current_user, "manage forum categories")
        category = self.get_forum_category(category_id)
        changes = self._changes(request)
        self._save_forum_category(
            lambda: self.repos.forum_category.update_category(category, changes), changes.get("name")
        )
        return category

    def delete_forum_category(self, category_id: UUID, current_user: CurrentUser) -> None:
        self.verify_admin(current_user, "manage forum categories")
        category = self.get_forum_category(category_id)
        with transaction(self.db):
            self.repos.forum_category.delete_category(category)

    # ------------------------------------------------------------------
    # System config
    # ------------------------------------------------------------------

    def get_system_config(self) -> SystemConfig:
        """설정 행 조회, 없으면 기본값으로 생성"""
        config = self.repos.system_config.get()
        if config is not None:
            return config

        try:
            with transaction(self.db):
                config = self.repos.system_config.create(SystemConfig(id=1, **DEFAULT_SYSTEM_CONFIG))
        except IntegrityError:
            # 동시 요청이 먼저 생성
            config = self.repos.system_config.get()
            if config is None:
                raise
            return config

        logger.info("Created default system config")
        return config

    def update_system_config(self, request: SystemConfigUpdateRequest, current_user: CurrentUser) -> SystemConfig:
        self.verify_admin(current_user, "update system config")
        config = self.get_system_config()
        changes = self._changes(request)
        with transaction(self.db):
            self.repos.system_config.update(config, changes)
        logger.info(f"System config updated by {current_user.id}: {', '.join(sorted(changes)) or 'no changes'}")
        return config
