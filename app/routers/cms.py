from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, File, Response, UploadFile, status

from app.dependencies.auth import require_admin
from app.dependencies.services import get_cms_service
from app.schemas.auth import CurrentUser
from app.schemas.cms import (
    ForumCategoryCreateRequest,
    ForumCategoryResponse,
    ForumCategoryUpdateRequest,
    ImportantMemberCreateRequest,
    ImportantMemberResponse,
    ImportantMemberUpdateRequest,
    ReorderRequest,
    SlideCreateRequest,
    SlideResponse,
    SlideUpdateRequest,
    SponsorCreateRequest,
    SponsorResponse,
    SponsorUpdateRequest,
    SystemConfigResponse,
    SystemConfigUpdateRequest,
)
from app.schemas.storage import UploadResponse
from app.services.cms_service import SLIDE_BUCKET, CmsService


router = APIRouter(tags=["cms"])


# ----------------------------------------------------------------------
# Public
# ----------------------------------------------------------------------

@router.get("/slides", response_model=List[SlideResponse])
def list_slides(cms_service: CmsService = Depends(get_cms_service)) -> List[SlideResponse]:
    """홈 화면 슬라이드 (활성만, display_order 순)"""
    return [SlideResponse.model_validate(s) for s in cms_service.get_slides()]


@router.get("/sponsors", response_model=List[SponsorResponse])
def list_sponsors(cms_service: CmsService = Depends(get_cms_service)) -> List[SponsorResponse]:
    return [SponsorResponse.model_validate(s) for s in cms_service.get_sponsors()]


@router.get("/important-members", response_model=List[ImportantMemberResponse])
def list_important_members(cms_service: CmsService = Depends(get_cms_service)) -> List[ImportantMemberResponse]:
    return [ImportantMemberResponse.model_validate(m) for m in cms_service.get_important_members()]


@router.get("/forum-categories", response_model=List[ForumCategoryResponse])
def list_forum_categories(cms_service: CmsService = Depends(get_cms_service)) -> List[ForumCategoryResponse]:
    return [ForumCategoryResponse.model_validate(c) for c in cms_service.get_forum_categories()]


@router.get("/system-config", response_model=SystemConfigResponse)
def get_system_config(cms_service: CmsService = Depends(get_cms_service)) -> SystemConfigResponse:
    """사이트 설정 (최초 조회 시 기본값 생성)"""
    return SystemConfigResponse.model_validate(cms_service.get_system_config())


# ----------------------------------------------------------------------
# Admin: slides
# ----------------------------------------------------------------------

@router.get("/admin/slides", response_model=List[SlideResponse])
def admin_list_slides(
    current_user: CurrentUser = Depends(require_admin),
    cms_service: CmsService = Depends(get_cms_service),
) -> List[SlideResponse]:
    """비활성 포함 전체 슬라이드"""
    return [SlideResponse.model_validate(s) for s in cms_service.get_slides(active_only=False)]


@router.post("/admin/slides", response_model=SlideResponse, status_code=status.HTTP_201_CREATED)
def create_slide(
    request: SlideCreateRequest,
    current_user: CurrentUser = Depends(require_admin),
    cms_service: CmsService = Depends(get_cms_service),
) -> SlideResponse:
    return SlideResponse.model_validate(cms_service.create_slide(request, current_user))


@router.post("/admin/slides/reorder", response_model=List[SlideResponse])
def reorder_slides(
    request: ReorderRequest,
    current_user: CurrentUser = Depends(require_admin),
    cms_service: CmsService = Depends(get_cms_service),
) -> List[SlideResponse]:
    return [SlideResponse.model_validate(s) for s in cms_service.reorder_slides(request, current_user)]


@router.post("/admin/slides/image", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_slide_image(
    file: UploadFile = File(...),
    current_user: CurrentUser = Depends(require_admin),
    cms_service: CmsService = Depends(get_cms_service),
) -> UploadResponse:
    """
    슬라이드 이미지 업로드
    - 반환된 public_url을 슬라이드 생성/수정 시 image_url로 전달
    """
    content = await file.read()
    path, url = cms_service.upload_slide_image(file.filename, content, file.content_type, current_user)
    return UploadResponse(bucket=SLIDE_BUCKET, path=path, public_url=url)


@router.patch("/admin/slides/{slide_id}", response_model=SlideResponse)
def update_slide(
    slide_id: UUID,
    request: SlideUpdateRequest,
    current_user: CurrentUser = Depends(require_admin),
    cms_service: CmsService = Depends(get_cms_service),
) -> SlideResponse:
    return SlideResponse.model_validate(cms_service.update_slide(slide_id, request, current_user))


@router.post("/admin/slides/{slide_id}/toggle", response_model=SlideResponse)
def toggle_slide(
    slide_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    cms_service: CmsService = Depends(get_cms_service),
) -> SlideResponse:
    return SlideResponse.model_validate(cms_service.toggle_slide_active(slide_id, current_user))


@router.delete("/admin/slides/{slide_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_slide(
    slide_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    cms_service: CmsService = Depends(get_cms_service),
) -> Response:
    cms_service.delete_slide(slide_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ----------------------------------------------------------------------
# Admin: sponsors
# ----------------------------------------------------------------------

@router.get("/admin/sponsors", response_model=List[SponsorResponse])
def admin_list_sponsors(
    current_user: CurrentUser = Depends(require_admin),
    cms_service: CmsService = Depends(get_cms_service),
) -> List[SponsorResponse]:
    return [SponsorResponse.model_validate(s) for s in cms_service.get_sponsors(active_only=False)]


@router.post("/admin/sponsors", response_model=SponsorResponse, status_code=status.HTTP_201_CREATED)
def create_sponsor(
    request: SponsorCreateRequest,
    current_user: CurrentUser = Depends(require_admin),
    cms_service: CmsService = Depends(get_cms_service),
) -> SponsorResponse:
    return SponsorResponse.model_validate(cms_service.create_sponsor(request, current_user))


@router.post("/admin/sponsors/reorder", response_model=List[SponsorResponse])
def reorder_sponsors(
    request: ReorderRequest,
    current_user: CurrentUser = Depends(require_admin),
    cms_service: CmsService = Depends(get_cms_service),
) -> List[SponsorResponse]:
    return [SponsorResponse.model_validate(s) for s in cms_service.reorder_sponsors(request, current_user)]


@router.patch("/admin/sponsors/{sponsor_id}", response_model=SponsorResponse)
def update_sponsor(
    sponsor_id: UUID,
    request: SponsorUpdateRequest,
    current_user: CurrentUser = Depends(require_admin),
    cms_service: CmsService = Depends(get_cms_service),
) -> SponsorResponse:
    return SponsorResponse.model_validate(cms_service.update_sponsor(sponsor_id, request, current_user))


@router.post("/admin/sponsors/{sponsor_id}/toggle", response_model=SponsorResponse)
def toggle_sponsor(
    sponsor_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    cms_service: CmsService = Depends(get_cms_service),
) -> SponsorResponse:
    return SponsorResponse.model_validate(cms_service.toggle_sponsor_active(sponsor_id, current_user))


@router.post("/admin/sponsors/{sponsor_id}/logo", response_model=SponsorResponse)
async def upload_sponsor_logo(
    sponsor_id: UUID,
    file: UploadFile = File(...),
    current_user: CurrentUser = Depends(require_admin),
    cms_service: CmsService = Depends(get_cms_service),
) -> SponsorResponse:
    content = await file.read()
    sponsor = cms_service.upload_sponsor_logo(sponsor_id, file.filename, content, file.content_type, current_user)
    return SponsorResponse.model_validate(sponsor)


@router.delete("/admin/sponsors/{sponsor_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_sponsor(
    sponsor_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    cms_service: CmsService = Depends(get_cms_service),
) -> Response:
    cms_service.delete_sponsor(sponsor_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ----------------------------------------------------------------------
# Admin: important members
# ----------------------------------------------------------------------

@router.get("/admin/important-members", response_model=List[ImportantMemberResponse])
def admin_list_important_members(
    current_user: CurrentUser = Depends(require_admin),
    cms_service: CmsService = Depends(get_cms_service),
) -> List[ImportantMemberResponse]:
    return [ImportantMemberResponse.model_validate(m) for m in cms_service.get_important_members(active_only=False)]


@router.post(
    "/admin/important-members", response_model=ImportantMemberResponse, status_code=status.HTTP_201_CREATED
)
def create_important_member(
    request: ImportantMemberCreateRequest,
    current_user: CurrentUser = Depends(require_admin),
    cms_service: CmsService = Depends(get_cms_service),
) -> ImportantMemberResponse:
    return ImportantMemberResponse.model_validate(cms_service.create_important_member(request, current_user))


@router.post("/admin/important-members/reorder", response_model=List[ImportantMemberResponse])
def reorder_important_members(
    request: ReorderRequest,
    current_user: CurrentUser = Depends(require_admin),
    cms_service: CmsService = Depends(get_cms_service),
) -> List[ImportantMemberResponse]:
    members = cms_service.reorder_important_members(request, current_user)
    return [ImportantMemberResponse.model_validate(m) for m in members]


@router.patch("/admin/important-members/{member_id}", response_model=ImportantMemberResponse)
def update_important_member(
    member_id: UUID,
    request: ImportantMemberUpdateRequest,
    current_user: CurrentUser = Depends(require_admin),
    cms_service: CmsService = Depends(get_cms_service),
) -> ImportantMemberResponse:
    member = cms_service.update_important_member(member_id, request, current_user)
    return ImportantMemberResponse.model_validate(member)


@router.post("/admin/important-members/{member_id}/avatar", response_model=ImportantMemberResponse)
async def upload_important_member_avatar(
    member_id: UUID,
    file: UploadFile = File(...),
    current_user: CurrentUser = Depends(require_admin),
    cms_service: CmsService = Depends(get_cms_service),
) -> ImportantMemberResponse:
    content = await file.read()
    member = cms_service.upload_member_avatar(member_id, file.filename, content, file.content_type, current_user)
    return ImportantMemberResponse.model_validate(member)


@router.delete("/admin/important-members/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_important_member(
    member_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    cms_service: CmsService = Depends(get_cms_service),
) -> Response:
    cms_service.delete_important_member(member_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ----------------------------------------------------------------------
# Admin: forum categories
# ----------------------------------------------------------------------

@router.post("/admin/forum-categories", response_model=ForumCategoryResponse, status_code=status.HTTP_201_CREATED)
def create_forum_category(
    request: ForumCategoryCreateRequest,
    current_user: CurrentUser = Depends(require_admin),
    cms_service: CmsService = Depends(get_cms_service),
) -> ForumCategoryResponse:
    return ForumCategoryResponse.model_validate(cms_service.create_forum_category(request, current_user))


@router.patch("/admin/forum-categories/{category_id}", response_model=ForumCategoryResponse)
def update_forum_category(
    category_id: UUID,
    request: ForumCategoryUpdateRequest,
    current_user: CurrentUser = Depends(require_admin),
    cms_service: CmsService = Depends(get_cms_service),
) -> ForumCategoryResponse:
    return ForumCategoryResponse.model_validate(
        cms_service.update_forum_category(category_id, request, current_user)
    )


@router.delete("/admin/forum-categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_forum_category(
    category_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    cms_service: CmsService = Depends(get_cms_service),
) -> Response:
    cms_service.delete_forum_category(category_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ----------------------------------------------------------------------
# Admin: system config
# ----------------------------------------------------------------------

@router.patch("/admin/system-config", response_model=SystemConfigResponse)
def update_system_config(
    request: SystemConfigUpdateRequest,
    current_user: CurrentUser = Depends(require_admin),
    cms_service: CmsService = Depends(get_cms_service),
) -> SystemConfigResponse:
    return SystemConfigResponse.model_validate(cms_service.update_system_config(request, current_user))
