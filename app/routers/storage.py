from typing import List

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import FileResponse

from app.dependencies.auth import require_admin
from app.dependencies.services import get_storage_service
from app.schemas.auth import CurrentUser
from app.schemas.storage import BucketCreateRequest, BucketResponse, UploadResponse
from app.services.storage_service import DEFAULT_FILE_SIZE_LIMIT, StorageService


router = APIRouter(tags=["storage"])

# 공개 객체 URL: <PUBLIC_BASE_URL>/storage/v1/object/public/<bucket>/<path>
public_router = APIRouter(prefix="/storage/v1", tags=["storage"])


@router.get("/storage/buckets", response_model=List[BucketResponse])
def list_buckets(
    current_user: CurrentUser = Depends(require_admin),
    storage_service: StorageService = Depends(get_storage_service),
) -> List[BucketResponse]:
    return [BucketResponse.model_validate(b) for b in storage_service.list_buckets()]


@router.post("/storage/buckets", response_model=BucketResponse, status_code=status.HTTP_201_CREATED)
def create_bucket(
    request: BucketCreateRequest,
    current_user: CurrentUser = Depends(require_admin),
    storage_service: StorageService = Depends(get_storage_service),
) -> BucketResponse:
    bucket = storage_service.create_bucket(
        request.name,
        public=request.public,
        allowed_mime_types=request.allowed_mime_types,
        file_size_limit=request.file_size_limit or DEFAULT_FILE_SIZE_LIMIT,
    )
    return BucketResponse.model_validate(bucket)


@router.post("/storage/{bucket}/upload", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_object(
    bucket: str,
    path: str = Form(...),
    file: UploadFile = File(...),
    current_user: CurrentUser = Depends(require_admin),
    storage_service: StorageService = Depends(get_storage_service),
) -> UploadResponse:
    """
    버킷에 파일 업로드 (같은 경로는 덮어씀)
    - 버킷이 없으면 404
    """
    content = await file.read()
    stored_path = storage_service.upload(bucket, path, content, file.content_type, upsert=True)
    return UploadResponse(
        bucket=bucket,
        path=stored_path,
        public_url=storage_service.get_public_url(bucket, stored_path),
    )


@public_router.get("/object/public/{bucket}/{path:path}")
def get_public_object(
    bucket: str,
    path: str,
    storage_service: StorageService = Depends(get_storage_service),
) -> FileResponse:
    return FileResponse(storage_service.open_object(bucket, path))
