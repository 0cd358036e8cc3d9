from fastapi import Depends
from sqlalchemy.orm import Session

from app.db import get_db
from app.dependencies.aggregate_repositories import (
    CmsAggregateRepositories,
    EventAggregateRepositories,
    MembershipAggregateRepositories,
    NetworkingAggregateRepositories,
)
from app.dependencies.auth import get_user_repository
from app.dependencies.repositories import (
    get_cms_aggregate_repositories,
    get_chat_repository,
    get_counter_repository,
    get_event_aggregate_repositories,
    get_event_repository,
    get_membership_aggregate_repositories,
    get_mentor_profile_repository,
    get_mentor_session_repository,
    get_networking_aggregate_repositories,
    get_notification_repository,
    get_recording_repository,
    get_resource_repository,
    get_startup_repository,
    get_storage_bucket_repository,
    get_success_story_repository,
)
from app.repositories.auth import UserRepository
from app.repositories.chat_repository import ChatRepository
from app.repositories.counter_repository import CounterRepository
from app.repositories.event_repository import EventRepository
from app.repositories.mentorship_repository import MentorProfileRepository, MentorSessionRepository
from app.repositories.notification_repository import NotificationRepository
from app.repositories.resource_repository import RecordingRepository, ResourceRepository
from app.repositories.startup_repository import StartupRepository
from app.repositories.storage_repository import StorageBucketRepository
from app.repositories.success_story_repository import SuccessStoryRepository
from app.services.admin_service import AdminService
from app.services.chat_service import ChatService
from app.services.cms_service import CmsService
from app.services.connection_service import ConnectionService
from app.services.event import EventAdminService, EventService, RegistrationService
from app.services.membership_service import MembershipService
from app.services.mentorship_service import MentorshipService
from app.services.notification_service import NotificationService
from app.services.resource_service import RecordingService, ResourceService
from app.services.startup_service import StartupService
from app.services.storage_service import StorageService
from app.services.success_story_service import SuccessStoryService


def get_storage_service(
    db: Session = Depends(get_db),
    bucket_repo: StorageBucketRepository = Depends(get_storage_bucket_repository),
) -> StorageService:
    """StorageService 의존성 주입"""
    return StorageService(db=db, bucket_repo=bucket_repo)


def get_event_service(
    db: Session = Depends(get_db),
    repos: EventAggregateRepositories = Depends(get_event_aggregate_repositories),
    storage_service: StorageService = Depends(get_storage_service),
) -> EventService:
    """EventService 의존성 주입"""
    return EventService(db=db, repos=repos, storage_service=storage_service)


def get_registration_service(
    db: Session = Depends(get_db),
    repos: EventAggregateRepositories = Depends(get_event_aggregate_repositories),
) -> RegistrationService:
    """RegistrationService 의존성 주입"""
    return RegistrationService(db=db, repos=repos)


def get_event_admin_service(
    db: Session = Depends(get_db),
    repos: EventAggregateRepositories = Depends(get_event_aggregate_repositories),
) -> EventAdminService:
    return EventAdminService(db=db, repos=repos)


def get_chat_service(
    db: Session = Depends(get_db),
    chat_repo: ChatRepository = Depends(get_chat_repository),
    user_repo: UserRepository = Depends(get_user_repository),
) -> ChatService:
    """ChatService 의존성 주입"""
    return ChatService(db=db, chat_repo=chat_repo, user_repo=user_repo)


def get_membership_service(
    db: Session = Depends(get_db),
    repos: MembershipAggregateRepositories = Depends(get_membership_aggregate_repositories),
) -> MembershipService:
    """MembershipService 의존성 주입"""
    return MembershipService(db=db, repos=repos)


def get_notification_service(
    db: Session = Depends(get_db),
    notification_repo: NotificationRepository = Depends(get_notification_repository),
) -> NotificationService:
    return NotificationService(db=db, notification_repo=notification_repo)


def get_connection_service(
    db: Session = Depends(get_db),
    repos: NetworkingAggregateRepositories = Depends(get_networking_aggregate_repositories),
    notification_service: NotificationService = Depends(get_notification_service),
) -> ConnectionService:
    return ConnectionService(db=db, repos=repos, notification_service=notification_service)


def get_startup_service(
    db: Session = Depends(get_db),
    startup_repo: StartupRepository = Depends(get_startup_repository),
    storage_service: StorageService = Depends(get_storage_service),
) -> StartupService:
    return StartupService(db=db, startup_repo=startup_repo, storage_service=storage_service)


def get_success_story_service(
    db: Session = Depends(get_db),
    story_repo: SuccessStoryRepository = Depends(get_success_story_repository),
    storage_service: StorageService = Depends(get_storage_service),
) -> SuccessStoryService:
    return SuccessStoryService(db=db, story_repo=story_repo, storage_service=storage_service)


def get_mentorship_service(
    db: Session = Depends(get_db),
    profile_repo: MentorProfileRepository = Depends(get_mentor_profile_repository),
    session_repo: MentorSessionRepository = Depends(get_mentor_session_repository),
) -> MentorshipService:
    return MentorshipService(db=db, profile_repo=profile_repo, session_repo=session_repo)


def get_resource_service(
    db: Session = Depends(get_db),
    resource_repo: ResourceRepository = Depends(get_resource_repository),
    counter_repo: CounterRepository = Depends(get_counter_repository),
) -> ResourceService:
    return ResourceService(db=db, resource_repo=resource_repo, counter_repo=counter_repo)


def get_recording_service(
    db: Session = Depends(get_db),
    recording_repo: RecordingRepository = Depends(get_recording_repository),
    counter_repo: CounterRepository = Depends(get_counter_repository),
    storage_service: StorageService = Depends(get_storage_service),
) -> RecordingService:
    return RecordingService(
        db=db,
        recording_repo=recording_repo,
        counter_repo=counter_repo,
        storage_service=storage_service,
    )


def get_admin_service(
    db: Session = Depends(get_db),
    user_repo: UserRepository = Depends(get_user_repository),
    event_repo: EventRepository = Depends(get_event_repository),
    startup_repo: StartupRepository = Depends(get_startup_repository),
    mentor_repo: MentorProfileRepository = Depends(get_mentor_profile_repository),
    recording_repo: RecordingRepository = Depends(get_recording_repository),
) -> AdminService:
    """AdminService 의존성 주입"""
    return AdminService(
        db=db,
        user_repo=user_repo,
        event_repo=event_repo,
        startup_repo=startup_repo,
        mentor_repo=mentor_repo,
        recording_repo=recording_repo,
    )


def get_cms_service(
    db: Session = Depends(get_db),
    repos: CmsAggregateRepositories = Depends(get_cms_aggregate_repositories),
    storage_service: StorageService = Depends(get_storage_service),
) -> CmsService:
    return CmsService(db=db, repos=repos, storage_service=storage_service)
