# Models package
from app.models.auth import User, RefreshToken, UserRoleType
from app.models.event import Event, EventRegistration, LocationType, RegistrationStatusType
from app.models.chat import ChatRoom, ChatMessage
from app.models.membership import Member, MembershipApplication, ApplicationStatusType
from app.models.networking import (
    Startup, Connection, IntroductionRequest, Notification,
    ConnectionStatusType, IntroductionStatusType,
)
from app.models.mentorship import MentorProfile, MentorSession, SessionStatusType
from app.models.content import SuccessStory, ResourceCategory, Resource, PastRecording
from app.models.storage import StorageBucket
from app.models.cms import SlideImage, Sponsor, ImportantMember, ForumCategory, SystemConfig

__all__ = [
    # Auth
    "User", "RefreshToken", "UserRoleType",
    # Event
    "Event", "EventRegistration", "LocationType", "RegistrationStatusType",
    # Chat
    "ChatRoom", "ChatMessage",
    # Membership
    "Member", "MembershipApplication", "ApplicationStatusType",
    # Networking
    "Startup", "Connection", "IntroductionRequest", "Notification",
    "ConnectionStatusType", "IntroductionStatusType",
    # Mentorship
    "MentorProfile", "MentorSession", "SessionStatusType",
    # Content
    "SuccessStory", "ResourceCategory", "Resource", "PastRecording",
    # Storage
    "StorageBucket",
    # CMS
    "SlideImage", "Sponsor", "ImportantMember", "ForumCategory", "SystemConfig",
]
