import logging
import os
import time
from pathlib import Path
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import BucketNotFoundError, ConflictError, NotFoundError, ValidationError
from app.models.storage import StorageBucket
from app.repositories.storage_repository import StorageBucketRepository
from app.services.base import BaseService
from app.utils.transaction import transaction

logger = logging.getLogger(__name__)

IMAGE_MIME_TYPES = ["image/png", "image/jpeg", "image/gif", "image/webp"]

# 모든 버킷 공통 업로드 한도 15MB
DEFAULT_FILE_SIZE_LIMIT = 15 * 1024 * 1024


def storage_root() -> Path:
    return Path(os.getenv("STORAGE_ROOT", "./storage"))


def public_base_url() -> str:
    return os.getenv("PUBLIC_BASE_URL", "http://localhost:8000").rstrip("/")


def file_extension(filename: Optional[str], content_type: Optional[str]) -> str:
    """파일명 확장자, 없으면 MIME subtype (image/png -> png)"""
    if filename and "." in filename:
        return filename.rsplit(".", 1)[-1].lower()
    if content_type and "/" in content_type:
        return content_type.split("/", 1)[1].lower()
    return "bin"


class StorageService(BaseService):
    """
    버킷 단위 파일 저장소
    - 버킷 메타데이터(공개 여부, 허용 MIME, 크기 제한)는 storage_buckets 테이블
    - 파일은 STORAGE_ROOT/<bucket>/<path> 에 저장
    """

    def __init__(self, db: Session, bucket_repo: StorageBucketRepository):
        super().__init__(db)
        self.bucket_repo = bucket_repo

    # ------------------------------------------------------------------
    # Buckets
    # ------------------------------------------------------------------

    def list_buckets(self) -> List[StorageBucket]:
        return self.bucket_repo.get_all()

    def get_bucket(self, name: str) -> StorageBucket:
        bucket = self.bucket_repo.get_by_name(name)
        if bucket is None:
            raise BucketNotFoundError(name)
        return bucket

    def create_bucket(
        self,
        name: str,
        public: bool = True,
        allowed_mime_types: Optional[List[str]] = None,
        file_size_limit: int = DEFAULT_FILE_SIZE_LIMIT,
    ) -> StorageBucket:
        """버킷 생성, 이미 있으면 ConflictError"""
        bucket = StorageBucket(
            name=name,
            public=public,
            allowed_mime_types=allowed_mime_types,
            file_size_limit=file_size_limit,
        )
        try:
            with transaction(self.db):
                self.bucket_repo.create_bucket(bucket)
        except IntegrityError as e:
            raise ConflictError(
                message="Bucket already exists",
                detail=f"Storage bucket '{name}' already exists"
            ) from e

        logger.info(f"Created storage bucket '{name}' (public={public})")
        return bucket

    def ensure_image_bucket(self, name: str) -> StorageBucket:
        """이미지 버킷 조회, 없으면 공개 이미지 버킷으로 생성"""
        try:
            return self.get_bucket(name)
        except BucketNotFoundError:
            logger.info(f"Bucket '{name}' not found, creating it")
            try:
                return self.create_bucket(
                    name,
                    public=True,
                    allowed_mime_types=IMAGE_MIME_TYPES,
                    file_size_limit=DEFAULT_FILE_SIZE_LIMIT,
                )
            except ConflictError:
                # 다른 요청이 먼저 생성
                return self.get_bucket(name)

    # ------------------------------------------------------------------
    # Objects
    # ------------------------------------------------------------------

    @staticmethod
    def _is_safe_path(path: str) -> bool:
        return bool(path) and not path.startswith("/") and ".." not in Path(path).parts

    def _object_path(self, bucket: str, path: str) -> Path:
        if not self._is_safe_path(path):
            raise ValidationError(
                message="Invalid object path",
                detail=f"Object path '{path}' is not allowed"
            )
        return storage_root() / bucket / path

    def upload(
        self,
        bucket_name: str,
        path: str,
        content: bytes,
        content_type: Optional[str],
        upsert: bool = True,
    ) -> str:
        """버킷 규칙(MIME, 크기) 검증 후 저장, 저장된 경로 반환"""
        bucket = self.get_bucket(bucket_name)

        if bucket.allowed_mime_types and content_type not in bucket.allowed_mime_types:
            raise ValidationError(
                message="Unsupported file type",
                detail=f"'{content_type}' is not allowed in bucket '{bucket_name}'. "
                       f"Allowed: {', '.join(bucket.allowed_mime_types)}"
            )

        if bucket.file_size_limit is not None and len(content) > bucket.file_size_limit:
            raise ValidationError(
                message="File too large",
                detail=f"File size {len(content)} exceeds limit of {bucket.file_size_limit} bytes"
            )

        target = self._object_path(bucket_name, path)
        if target.exists() and not upsert:
            raise ConflictError(
                message="Object already exists",
                detail=f"'{path}' already exists in bucket '{bucket_name}'"
            )

        os.makedirs(target.parent, exist_ok=True)
        with open(target, "wb") as out:
            out.write(content)

        return path

    def get_public_url(self, bucket_name: str, path: str) -> str:
        return f"{public_base_url()}/storage/v1/object/public/{bucket_name}/{path}"

    def open_object(self, bucket_name: str, path: str) -> Path:
        """공개 버킷 객체의 파일 경로 (서빙용)"""
        bucket = self.get_bucket(bucket_name)
        target = self._object_path(bucket_name, path)
        if not bucket.public or not target.is_file():
            raise NotFoundError(
                message="Object not found",
                detail=f"'{path}' not found in bucket '{bucket_name}'"
            )
        return target

    def remove_public_object(self, bucket_name: str, public_url: Optional[str]) -> bool:
        """
        공개 URL이 가리키는 버킷 객체 삭제
        - 이 버킷의 공개 URL이 아니면(외부 링크 등) 아무것도 하지 않음
        - 반환: 실제로 파일을 지웠는지
        """
        prefix = self.get_public_url(bucket_name, "")
        if not public_url or not public_url.startswith(prefix):
            return False
        path = public_url[len(prefix):]
        if not self._is_safe_path(path):
            logger.warning(f"Refusing to remove '{path}' from bucket '{bucket_name}'")
            return False

        target = storage_root() / bucket_name / path
        if not target.is_file():
            return False
        target.unlink()
        logger.info(f"Removed '{path}' from bucket '{bucket_name}'")
        return True

    def upload_image(
        self,
        bucket_name: str,
        key_prefix: str,
        filename: Optional[str],
        content: bytes,
        content_type: Optional[str],
    ) -> tuple[str, str]:
        """
        이미지 업로드 공통 흐름
        - 버킷이 없으면 생성
        - 키: <key_prefix>-<밀리초>.<확장자>
        - 반환: (path, public_url)
        """
        self.ensure_image_bucket(bucket_name)
        ext = file_extension(filename, content_type)
        path = f"{key_prefix}-{int(time.time() * 1000)}.{ext}"
        self.upload(bucket_name, path, content, content_type, upsert=True)
        return path, self.get_public_url(bucket_name, path)
