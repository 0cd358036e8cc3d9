from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Query, Response, UploadFile, status

from app.dependencies.auth import get_current_user, require_admin
from app.dependencies.services import (
    get_recording_service,
    get_resource_service,
    get_success_story_service,
)
from app.schemas.auth import CurrentUser
from app.schemas.content import (
    RecordingCreateRequest,
    RecordingResponse,
    RecordingStatsResponse,
    RecordingUpdateRequest,
    ResourceCategoryCreateRequest,
    ResourceCategoryResponse,
    ResourceCreateRequest,
    ResourceResponse,
    ResourceUpdateRequest,
    SuccessStoryCreateRequest,
    SuccessStoryResponse,
    SuccessStoryUpdateRequest,
)
from app.services.resource_service import RecordingService, ResourceService
from app.services.success_story_service import SuccessStoryService


router = APIRouter(tags=["content"])


# ----------------------------------------------------------------------
# Success stories
# ----------------------------------------------------------------------

@router.get("/success-stories", response_model=List[SuccessStoryResponse])
def list_success_stories(
    story_service: SuccessStoryService = Depends(get_success_story_service),
) -> List[SuccessStoryResponse]:
    """추천 사례 먼저, 그 다음 최신순"""
    return [SuccessStoryResponse.model_validate(s) for s in story_service.get_success_stories()]


@router.get("/success-stories/featured", response_model=List[SuccessStoryResponse])
def list_featured_success_stories(
    story_service: SuccessStoryService = Depends(get_success_story_service),
) -> List[SuccessStoryResponse]:
    return [SuccessStoryResponse.model_validate(s) for s in story_service.get_featured_success_stories()]


@router.get("/success-stories/recent", response_model=List[SuccessStoryResponse])
def list_recent_success_stories(
    limit: int = Query(default=3, ge=1, le=50),
    story_service: SuccessStoryService = Depends(get_success_story_service),
) -> List[SuccessStoryResponse]:
    return [SuccessStoryResponse.model_validate(s) for s in story_service.get_recent_success_stories(limit)]


@router.get("/success-stories/{story_id}", response_model=SuccessStoryResponse)
def get_success_story(
    story_id: UUID,
    story_service: SuccessStoryService = Depends(get_success_story_service),
) -> SuccessStoryResponse:
    return SuccessStoryResponse.model_validate(story_service.get_success_story(story_id))


@router.post("/success-stories", response_model=SuccessStoryResponse, status_code=status.HTTP_201_CREATED)
def create_success_story(
    request: SuccessStoryCreateRequest,
    current_user: CurrentUser = Depends(require_admin),
    story_service: SuccessStoryService = Depends(get_success_story_service),
) -> SuccessStoryResponse:
    return SuccessStoryResponse.model_validate(story_service.create_success_story(request, current_user))


@router.patch("/success-stories/{story_id}", response_model=SuccessStoryResponse)
def update_success_story(
    story_id: UUID,
    request: SuccessStoryUpdateRequest,
    current_user: CurrentUser = Depends(require_admin),
    story_service: SuccessStoryService = Depends(get_success_story_service),
) -> SuccessStoryResponse:
    return SuccessStoryResponse.model_validate(
        story_service.update_success_story(story_id, request, current_user)
    )


@router.delete("/success-stories/{story_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_success_story(
    story_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    story_service: SuccessStoryService = Depends(get_success_story_service),
) -> Response:
    story_service.delete_success_story(story_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/success-stories/{story_id}/image", response_model=SuccessStoryResponse)
async def upload_success_story_image(
    story_id: UUID,
    file: UploadFile = File(...),
    current_user: CurrentUser = Depends(require_admin),
    story_service: SuccessStoryService = Depends(get_success_story_service),
) -> SuccessStoryResponse:
    content = await file.read()
    story = story_service.upload_story_image(story_id, file.filename, content, file.content_type, current_user)
    return SuccessStoryResponse.model_validate(story)


# ----------------------------------------------------------------------
# Resources
# ----------------------------------------------------------------------

@router.get("/resources/categories", response_model=List[ResourceCategoryResponse])
def list_resource_categories(
    resource_service: ResourceService = Depends(get_resource_service),
) -> List[ResourceCategoryResponse]:
    return [ResourceCategoryResponse.model_validate(c) for c in resource_service.get_categories()]


@router.post("/resources/categories", response_model=ResourceCategoryResponse, status_code=status.HTTP_201_CREATED)
def create_resource_category(
    request: ResourceCategoryCreateRequest,
    current_user: CurrentUser = Depends(require_admin),
    resource_service: ResourceService = Depends(get_resource_service),
) -> ResourceCategoryResponse:
    return ResourceCategoryResponse.model_validate(resource_service.create_category(request, current_user))


@router.get("/resources", response_model=List[ResourceResponse])
def list_resources(
    category_id: Optional[UUID] = Query(default=None),
    current_user: CurrentUser = Depends(get_current_user),
    resource_service: ResourceService = Depends(get_resource_service),
) -> List[ResourceResponse]:
    return [ResourceResponse.model_validate(r) for r in resource_service.get_resources(category_id)]


@router.get("/resources/{resource_id}", response_model=ResourceResponse)
def get_resource(
    resource_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    resource_service: ResourceService = Depends(get_resource_service),
) -> ResourceResponse:
    """자료 조회 (조회수 증가)"""
    return ResourceResponse.model_validate(resource_service.get_resource(resource_id))


@router.post("/resources", response_model=ResourceResponse, status_code=status.HTTP_201_CREATED)
def create_resource(
    request: ResourceCreateRequest,
    current_user: CurrentUser = Depends(require_admin),
    resource_service: ResourceService = Depends(get_resource_service),
) -> ResourceResponse:
    return ResourceResponse.model_validate(resource_service.create_resource(request, current_user))


@router.patch("/resources/{resource_id}", response_model=ResourceResponse)
def update_resource(
    resource_id: UUID,
    request: ResourceUpdateRequest,
    current_user: CurrentUser = Depends(require_admin),
    resource_service: ResourceService = Depends(get_resource_service),
) -> ResourceResponse:
    return ResourceResponse.model_validate(resource_service.update_resource(resource_id, request, current_user))


@router.delete("/resources/{resource_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_resource(
    resource_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    resource_service: ResourceService = Depends(get_resource_service),
) -> Response:
    resource_service.delete_resource(resource_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ----------------------------------------------------------------------
# Past recordings
# ----------------------------------------------------------------------

@router.get("/recordings", response_model=List[RecordingResponse])
def list_recordings(
    recording_service: RecordingService = Depends(get_recording_service),
) -> List[RecordingResponse]:
    return [RecordingResponse.model_validate(r) for r in recording_service.get_recordings()]


@router.get("/recordings/stats", response_model=RecordingStatsResponse)
def get_recording_stats(
    current_user: CurrentUser = Depends(require_admin),
    recording_service: RecordingService = Depends(get_recording_service),
) -> RecordingStatsResponse:
    return recording_service.get_recording_stats()


@router.get("/recordings/{recording_id}", response_model=RecordingResponse)
def get_recording(
    recording_id: UUID,
    recording_service: RecordingService = Depends(get_recording_service),
) -> RecordingResponse:
    return RecordingResponse.model_validate(recording_service.get_recording(recording_id))


@router.post("/recordings/{recording_id}/view", response_model=RecordingResponse)
def record_recording_view(
    recording_id: UUID,
    recording_service: RecordingService = Depends(get_recording_service),
) -> RecordingResponse:
    """조회수 +1"""
    recording_service.increment_view_count(recording_id)
    return RecordingResponse.model_validate(recording_service.get_recording(recording_id))


@router.post("/recordings", response_model=RecordingResponse, status_code=status.HTTP_201_CREATED)
def create_recording(
    request: RecordingCreateRequest,
    current_user: CurrentUser = Depends(require_admin),
    recording_service: RecordingService = Depends(get_recording_service),
) -> RecordingResponse:
    return RecordingResponse.model_validate(recording_service.create_recording(request, current_user))


@router.patch("/recordings/{recording_id}", response_model=RecordingResponse)
def update_recording(
    recording_id: UUID,
    request: RecordingUpdateRequest,
    current_user: CurrentUser = Depends(require_admin),
    recording_service: RecordingService = Depends(get_recording_service),
) -> RecordingResponse:
    return RecordingResponse.model_validate(
        recording_service.update_recording(recording_id, request, current_user)
    )


@router.delete("/recordings/{recording_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_recording(
    recording_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    recording_service: RecordingService = Depends(get_recording_service),
) -> Response:
    recording_service.delete_recording(recording_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/recordings/{recording_id}/thumbnail", response_model=RecordingResponse)
async def upload_recording_thumbnail(
    recording_id: UUID,
    file: UploadFile = File(...),
    current_user: CurrentUser = Depends(require_admin),
    recording_service: RecordingService = Depends(get_recording_service),
) -> RecordingResponse:
    content = await file.read()
    recording = recording_service.upload_thumbnail(
        recording_id, file.filename, content, file.content_type, current_user
    )
    return RecordingResponse.model_validate(recording)
