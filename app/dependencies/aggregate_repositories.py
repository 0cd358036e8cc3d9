"""
Repository Aggregate 패턴 구현
의존성 주입을 위해 관련 Repository들을 하나로 묶은 Aggregate 클래스들
"""
from sqlalchemy.orm import Session

from app.repositories.auth import UserRepository
from app.repositories.counter_repository import CounterRepository
from app.repositories.event_repository import EventRepository
from app.repositories.registration_repository import RegistrationRepository
from app.repositories.membership_repository import MemberRepository, MembershipApplicationRepository
from app.repositories.connection_repository import ConnectionRepository, IntroductionRepository
from app.repositories.notification_repository import NotificationRepository
from app.repositories.cms_repository import (
    ForumCategoryRepository,
    ImportantMemberRepository,
    SlideRepository,
    SponsorRepository,
    SystemConfigRepository,
)


class EventAggregateRepositories:
    """Event/등록/카운터 Repository 묶음"""

    def __init__(self, db: Session):
        self.event = EventRepository(db)
        self.registration = RegistrationRepository(db)
        self.counter = CounterRepository(db)
        self.user = UserRepository(db)


class MembershipAggregateRepositories:
    """회원/가입 신청 Repository 묶음"""

    def __init__(self, db: Session):
        self.member = MemberRepository(db)
        self.application = MembershipApplicationRepository(db)
        self.user = UserRepository(db)


class NetworkingAggregateRepositories:
    """연결/소개 요청/알림 Repository 묶음"""

    def __init__(self, db: Session):
        self.connection = ConnectionRepository(db)
        self.introduction = IntroductionRepository(db)
        self.notification = NotificationRepository(db)
        self.user = UserRepository(db)


class CmsAggregateRepositories:
    """슬라이드/스폰서/운영진/포럼 카테고리/사이트 설정 Repository 묶음"""

    def __init__(self, db: Session):
        self.slide = SlideRepository(db)
        self.sponsor = SponsorRepository(db)
        self.important_member = ImportantMemberRepository(db)
        self.forum_category = ForumCategoryRepository(db)
        self.system_config = SystemConfigRepository(db)
