import logging
from typing import List
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.networking import Startup
from app.repositories.startup_repository import StartupRepository
from app.schemas.auth import CurrentUser
from app.schemas.networking import StartupCreateRequest, StartupUpdateRequest
from app.services.base import BaseService
from app.services.storage_service import StorageService
from app.exceptions import ForbiddenError
from app.utils.transaction import transaction

logger = logging.getLogger(__name__)

STARTUP_LOGO_BUCKET = "startups"


class StartupService(BaseService):
    def __init__(self, db: Session, startup_repo: StartupRepository, storage_service: StorageService):
        super().__init__(db)
        self.startup_repo = startup_repo
        self.storage_service = storage_service

    def _verify_founder_or_admin(self, startup: Startup, current_user: CurrentUser, operation: str) -> None:
        if current_user.is_admin or startup.founder_id == current_user.id:
            return
        raise ForbiddenError(
            message="Forbidden",
            detail=f"Only the founder or an administrator can {operation}"
        )

    def get_startups(self) -> List[Startup]:
        """스타트업 목록 (최신순)"""
        return self.startup_repo.get_all()

    def get_startup(self, startup_id: UUID) -> Startup:
        return self._require(self.startup_repo.get_by_id(startup_id), "Startup", startup_id)

    def get_startup_with_founder(self, startup_id: UUID) -> Startup:
        startup = self.startup_repo.get_by_id(startup_id, with_founder=True)
        return self._require(startup, "Startup", startup_id)

    def create_startup(self, request: StartupCreateRequest, current_user: CurrentUser) -> Startup:
        """스타트업 등록 (founder_id 생략 시 요청자가 창업자)"""
        values = request.model_dump()
        if values["founder_id"] is None:
            values["founder_id"] = current_user.id
        elif values["founder_id"] != current_user.id:
            self.verify_admin(current_user, "register startups for other founders")

        startup = Startup(**values, is_featured=False)
        with transaction(self.db):
            self.startup_repo.create_startup(startup)
        return startup

    def update_startup(
        self, startup_id: UUID, request: StartupUpdateRequest, current_user: CurrentUser
    ) -> Startup:
        startup = self.get_startup(startup_id)
        self._verify_founder_or_admin(startup, current_user, "update this startup")
        with transaction(self.db):
            self.startup_repo.update_startup(startup, self._changes(request))
        return startup

    def delete_startup(self, startup_id: UUID, current_user: CurrentUser) -> None:
        startup = self.get_startup(startup_id)
        self._verify_founder_or_admin(startup, current_user, "delete this startup")
        with transaction(self.db):
            self.startup_repo.delete_startup(startup)
        logger.info(f"Startup {startup_id} deleted by {current_user.id}")

    def toggle_featured(self, startup_id: UUID, current_user: CurrentUser) -> Startup:
        """추천 여부 토글 (관리자)"""
        self.verify_admin(current_user, "feature startups")
        startup = self.get_startup(startup_id)
        with transaction(self.db):
            self.startup_repo.update_startup(startup, {"is_featured": not startup.is_featured})
        return startup

    def upload_logo(
        self,
        startup_id: UUID,
        filename: str | None,
        content: bytes,
        content_type: str | None,
        current_user: CurrentUser,
    ) -> Startup:
        """로고 업로드 후 logo_url 갱신"""
        startup = self.get_startup(startup_id)
        self._verify_founder_or_admin(startup, current_user, "update this startup")

        _, url = self.storage_service.upload_image(
            STARTUP_LOGO_BUCKET, str(startup_id), filename, content, content_type
        )
        with transaction(self.db):
            self.startup_repo.update_startup(startup, {"logo_url": url})
        return startup
