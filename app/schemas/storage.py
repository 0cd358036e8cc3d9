from datetime import datetime

from pydantic import BaseModel, Field


class BucketCreateRequest(BaseModel):
    """버킷 생성 (관리자)"""
    name: str = Field(..., min_length=1, max_length=100, pattern=r"^[a-z0-9][a-z0-9_-]*$")
    public: bool = True
    allowed_mime_types: list[str] | None = None
    file_size_limit: int | None = Field(default=None, gt=0)


class BucketResponse(BaseModel):
    name: str
    public: bool
    allowed_mime_types: list[str] | None
    file_size_limit: int | None
    created_at: datetime

    class Config:
        from_attributes = True


class UploadResponse(BaseModel):
    """업로드된 객체 경로와 공개 URL"""
    bucket: str
    path: str
    public_url: str
