from fastapi import Depends
from sqlalchemy.orm import Session

from app.db import get_db
from app.dependencies.aggregate_repositories import (
    CmsAggregateRepositories,
    EventAggregateRepositories,
    MembershipAggregateRepositories,
    NetworkingAggregateRepositories,
)
from app.repositories.chat_repository import ChatRepository
from app.repositories.counter_repository import CounterRepository
from app.repositories.event_repository import EventRepository
from app.repositories.mentorship_repository import MentorProfileRepository, MentorSessionRepository
from app.repositories.notification_repository import NotificationRepository
from app.repositories.resource_repository import RecordingRepository, ResourceRepository
from app.repositories.startup_repository import StartupRepository
from app.repositories.storage_repository import StorageBucketRepository
from app.repositories.success_story_repository import SuccessStoryRepository


# Aggregate 의존성
def get_event_aggregate_repositories(db: Session = Depends(get_db)) -> EventAggregateRepositories:
    """Event 관련 Repository들의 Aggregate 의존성 주입"""
    return EventAggregateRepositories(db)


def get_membership_aggregate_repositories(db: Session = Depends(get_db)) -> MembershipAggregateRepositories:
    return MembershipAggregateRepositories(db)


def get_networking_aggregate_repositories(db: Session = Depends(get_db)) -> NetworkingAggregateRepositories:
    return NetworkingAggregateRepositories(db)


def get_cms_aggregate_repositories(db: Session = Depends(get_db)) -> CmsAggregateRepositories:
    return CmsAggregateRepositories(db)


# 개별 Repository 의존성
def get_event_repository(db: Session = Depends(get_db)) -> EventRepository:
    """EventRepository 의존성 주입"""
    return EventRepository(db)


def get_counter_repository(db: Session = Depends(get_db)) -> CounterRepository:
    return CounterRepository(db)


def get_chat_repository(db: Session = Depends(get_db)) -> ChatRepository:
    """ChatRepository 의존성 주입"""
    return ChatRepository(db)


def get_storage_bucket_repository(db: Session = Depends(get_db)) -> StorageBucketRepository:
    return StorageBucketRepository(db)


def get_startup_repository(db: Session = Depends(get_db)) -> StartupRepository:
    return StartupRepository(db)


def get_notification_repository(db: Session = Depends(get_db)) -> NotificationRepository:
    return NotificationRepository(db)


def get_success_story_repository(db: Session = Depends(get_db)) -> SuccessStoryRepository:
    return SuccessStoryRepository(db)


def get_mentor_profile_repository(db: Session = Depends(get_db)) -> MentorProfileRepository:
    return MentorProfileRepository(db)


def get_mentor_session_repository(db: Session = Depends(get_db)) -> MentorSessionRepository:
    return MentorSessionRepository(db)


def get_resource_repository(db: Session = Depends(get_db)) -> ResourceRepository:
    return ResourceRepository(db)


def get_recording_repository(db: Session = Depends(get_db)) -> RecordingRepository:
    return RecordingRepository(db)
