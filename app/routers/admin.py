from typing import List

from fastapi import APIRouter, Depends, Query

from app.dependencies.auth import require_admin
from app.dependencies.services import get_admin_service
from app.schemas.admin import ActivityResponse, AdminStatsResponse, ProfilesDataResponse
from app.schemas.auth import CurrentUser
from app.services.admin_service import AdminService


router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/stats", response_model=AdminStatsResponse)
def get_admin_stats(
    current_user: CurrentUser = Depends(require_admin),
    admin_service: AdminService = Depends(get_admin_service),
) -> AdminStatsResponse:
    """관리자 대시보드 카운트"""
    return admin_service.get_admin_stats(current_user)


@router.get("/activity", response_model=List[ActivityResponse])
def get_recent_activity(
    limit: int = Query(default=5, ge=1, le=50),
    current_user: CurrentUser = Depends(require_admin),
    admin_service: AdminService = Depends(get_admin_service),
) -> List[ActivityResponse]:
    return admin_service.get_recent_activity(current_user, limit)


@router.get("/profiles", response_model=ProfilesDataResponse)
def get_profiles_data(
    current_user: CurrentUser = Depends(require_admin),
    admin_service: AdminService = Depends(get_admin_service),
) -> ProfilesDataResponse:
    return admin_service.get_profiles_data(current_user)
