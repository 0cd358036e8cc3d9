from datetime import datetime
from sqlalchemy import String, Boolean, Integer, DateTime, JSON, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db import Base


class StorageBucket(Base):
    """업로드 버킷 등록 정보 (파일 자체는 STORAGE_ROOT 아래에 저장)"""
    __tablename__ = "storage_buckets"

    name: Mapped[str] = mapped_column(String(100), primary_key=True)
    public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    allowed_mime_types: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    file_size_limit: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
