import uuid
from datetime import datetime
from enum import Enum as PyEnum
from sqlalchemy import (
    String, Boolean, Integer, DateTime, ForeignKey, Text, JSON, Uuid,
    CheckConstraint, UniqueConstraint, Index, func
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db import Base
from app.models.types import enum_type


class LocationType(PyEnum):
    VIRTUAL = "virtual"
    PHYSICAL = "physical"
    HYBRID = "hybrid"


class RegistrationStatusType(PyEnum):
    REGISTERED = "registered"
    CANCELED = "canceled"
    ATTENDED = "attended"
    NO_SHOW = "no-show"


class Event(Base):
    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint("attendees_count >= 0", name="ck_events_attendees_count_non_negative"),
        Index("idx_events_start_datetime", "start_datetime"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_datetime: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_datetime: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    location_type: Mapped[LocationType] = mapped_column(
        enum_type(LocationType, "location_type"),
        nullable=False,
        default=LocationType.PHYSICAL,
    )
    physical_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    virtual_meeting_url: Mapped[str | None] = mapped_column(String, nullable=True)

    # 카테고리 태그 (general, workshop, ...)
    event_type: Mapped[str] = mapped_column(String(50), nullable=False, default="general")
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    attendees_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    image_url: Mapped[str | None] = mapped_column(String, nullable=True)
    highlights: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)

    created_by: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, onupdate=func.now()
    )

    registrations = relationship("EventRegistration", back_populates="event")


class EventRegistration(Base):
    __tablename__ = "event_registrations"
    __table_args__ = (
        UniqueConstraint("event_id", "user_id", name="uq_event_registrations_event_user"),
        Index("idx_event_registrations_user_id", "user_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    event_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("events.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    status: Mapped[RegistrationStatusType] = mapped_column(
        enum_type(RegistrationStatusType, "registration_status_type"),
        nullable=False,
        default=RegistrationStatusType.REGISTERED,
    )
    role: Mapped[str] = mapped_column(String(50), nullable=False, default="attendee")
    user_company: Mapped[str | None] = mapped_column(String, nullable=True)
    registered_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    event = relationship("Event", back_populates="registrations")
    user = relationship("User")
