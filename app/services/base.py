from typing import Any

from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.exceptions import ForbiddenError, NotFoundError
from app.schemas.auth import CurrentUser


class BaseService:
    """서비스 공통 로직 (권한 확인, 조회 실패 처리)"""

    def __init__(self, db: Session):
        self.db = db

    def verify_admin(self, current_user: CurrentUser, operation: str) -> None:
        """관리자 권한 확인"""
        if not current_user.is_admin:
            raise ForbiddenError(
                message="Forbidden",
                detail=f"Only administrators can {operation}"
            )

    def _require(self, entity: Any, name: str, entity_id: Any) -> Any:
        """조회 결과가 없으면 NotFoundError"""
        if entity is None:
            raise NotFoundError(
                message=f"{name} not found",
                detail=f"{name} with id {entity_id} not found"
            )
        return entity

    @staticmethod
    def _changes(payload: BaseModel) -> dict[str, Any]:
        """요청에 실제로 포함된 필드만 추출 (PATCH 용)"""
        return payload.model_dump(exclude_unset=True)
