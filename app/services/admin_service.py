from collections import Counter
from datetime import timedelta
from typing import List

from sqlalchemy.orm import Session

from app.models.auth import UserRoleType
from app.repositories.auth import UserRepository
from app.repositories.event_repository import EventRepository
from app.repositories.mentorship_repository import MentorProfileRepository
from app.repositories.resource_repository import RecordingRepository
from app.repositories.startup_repository import StartupRepository
from app.schemas.admin import ActivityResponse, AdminStatsResponse, ProfilesDataResponse
from app.schemas.auth import CurrentUser
from app.services.base import BaseService
from app.utils.security import utcnow

NEW_USER_WINDOW = timedelta(days=30)
UNSPECIFIED = "Unspecified"


class AdminService(BaseService):
    """관리자 대시보드 집계"""

    def __init__(
        self,
        db: Session,
        user_repo: UserRepository,
        event_repo: EventRepository,
        startup_repo: StartupRepository,
        mentor_repo: MentorProfileRepository,
        recording_repo: RecordingRepository,
    ):
        super().__init__(db)
        self.user_repo = user_repo
        self.event_repo = event_repo
        self.startup_repo = startup_repo
        self.mentor_repo = mentor_repo
        self.recording_repo = recording_repo

    def get_admin_stats(self, current_user: CurrentUser) -> AdminStatsResponse:
        """
        대시보드 카운트
        - 지난 이벤트: end_datetime < now
        - 신규 사용자: 최근 30일 가입
        """
        self.verify_admin(current_user, "view admin statistics")
        now = utcnow()
        return AdminStatsResponse(
            total_users=self.user_repo.count_all(),
            new_users_last_30_days=self.user_repo.count_created_since(now - NEW_USER_WINDOW),
            admin_users=self.user_repo.count_by_role(UserRoleType.ADMIN),
            total_events=self.event_repo.count_all(),
            past_events=self.event_repo.count_ended_before(now),
            total_startups=self.startup_repo.count_all(),
            approved_mentors=self.mentor_repo.count_approved(),
            total_recordings=self.recording_repo.count_all(),
        )

    def get_recent_activity(self, current_user: CurrentUser, limit: int = 5) -> List[ActivityResponse]:
        """최근 생성된 이벤트를 활동 기록으로"""
        self.verify_admin(current_user, "view recent activity")
        return [
            ActivityResponse(
                id=event.id,
                activity_type="event_created",
                description=f"New event created: {event.title}",
                created_at=event.created_at,
            )
            for event in self.event_repo.get_recent(limit)
        ]

    def get_profiles_data(self, current_user: CurrentUser) -> ProfilesDataResponse:
        """역할/지역/회사/가입일별 사용자 수"""
        self.verify_admin(current_user, "view profile data")
        users = self.user_repo.list_all()

        by_role = Counter(user.role.value for user in users)
        by_location = Counter(user.location or UNSPECIFIED for user in users)
        by_company = Counter(user.company or UNSPECIFIED for user in users)
        by_signup_date = Counter(
            user.created_at.date().isoformat() for user in users if user.created_at is not None
        )

        return ProfilesDataResponse(
            total_profiles=len(users),
            by_role=dict(by_role),
            by_location=dict(by_location),
            by_company=dict(by_company),
            by_signup_date=dict(sorted(by_signup_date.items())),
        )
