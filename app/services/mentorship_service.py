import logging
from typing import List
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.mentorship import MentorProfile, MentorSession, SessionStatusType
from app.repositories.mentorship_repository import MentorProfileRepository, MentorSessionRepository
from app.schemas.auth import CurrentUser
from app.schemas.mentorship import (
    MentorApplicationRequest,
    MentorProfileResponse,
    MentorSessionCreateRequest,
    MentorSessionUpdateRequest,
)
from app.services.base import BaseService
from app.exceptions import ConflictError, ForbiddenError, ValidationError
from app.utils.transaction import transaction

logger = logging.getLogger(__name__)


def to_mentor_response(profile: MentorProfile) -> MentorProfileResponse:
    """멘토 프로필 + 사용자 프로필 필드"""
    response = MentorProfileResponse.model_validate(profile)
    user = profile.user
    if user is not None:
        response.first_name = user.first_name
        response.last_name = user.last_name
        response.email = user.email
        response.photo_url = user.photo_url
        response.company = user.company
        response.profession = user.profession
    return response


class MentorshipService(BaseService):
    def __init__(
        self,
        db: Session,
        profile_repo: MentorProfileRepository,
        session_repo: MentorSessionRepository,
    ):
        super().__init__(db)
        self.profile_repo = profile_repo
        self.session_repo = session_repo

    # ------------------------------------------------------------------
    # Mentor profiles
    # ------------------------------------------------------------------

    def get_mentors(self) -> List[MentorProfileResponse]:
        """승인된 멘토만"""
        return [to_mentor_response(p) for p in self.profile_repo.get_by_approval(True)]

    def get_mentor(self, profile_id: UUID) -> MentorProfileResponse:
        profile = self._require(self.profile_repo.get_by_id(profile_id), "Mentor profile", profile_id)
        return to_mentor_response(profile)

    def apply_as_mentor(self, request: MentorApplicationRequest, current_user: CurrentUser) -> MentorProfile:
        """
        멘토 신청
        - 사용자당 프로필 하나, 이미 있으면 ConflictError
        - 미승인 상태로 생성
        """
        if self.profile_repo.get_by_user_id(current_user.id):
            raise ConflictError(
                message="Mentor profile already exists",
                detail=f"User {current_user.id} has already applied as a mentor"
            )

        profile = MentorProfile(**request.model_dump(), user_id=current_user.id, is_approved=False)
        try:
            with transaction(self.db):
                self.profile_repo.create_profile(profile)
        except IntegrityError:
            raise ConflictError(
                message="Mentor profile already exists",
                detail=f"User {current_user.id} has already applied as a mentor"
            )
        return profile

    def get_mentor_applications(self, current_user: CurrentUser) -> List[MentorProfileResponse]:
        """승인 대기 중인 멘토 신청 (관리자)"""
        self.verify_admin(current_user, "view mentor applications")
        return [to_mentor_response(p) for p in self.profile_repo.get_by_approval(False)]

    def approve_mentor_application(self, profile_id: UUID, current_user: CurrentUser) -> MentorProfileResponse:
        self.verify_admin(current_user, "approve mentor applications")
        profile = self._require(self.profile_repo.get_by_id(profile_id), "Mentor profile", profile_id)

        with transaction(self.db):
            if not self.profile_repo.approve_if_pending(profile_id):
                raise ConflictError(
                    message="Mentor already approved",
                    detail=f"Mentor profile {profile_id} is already approved"
                )

        self.db.refresh(profile)
        logger.info(f"Mentor profile {profile_id} approved")
        return to_mentor_response(profile)

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def get_mentee_sessions(self, mentee_id: UUID) -> List[MentorSession]:
        """멘티 세션 (예정 시간순)"""
        return self.session_repo.get_by_mentee(mentee_id)

    def create_session(self, request: MentorSessionCreateRequest, current_user: CurrentUser) -> MentorSession:
        mentor = self._require(self.profile_repo.get_by_id(request.mentor_id), "Mentor profile", request.mentor_id)
        if not mentor.is_approved:
            raise ValidationError(
                message="Mentor not available",
                detail=f"Mentor profile {request.mentor_id} is not approved"
            )
        if mentor.user_id == current_user.id:
            raise ValidationError(
                message="Invalid session",
                detail="Cannot book a session with yourself"
            )

        session = MentorSession(
            **request.model_dump(),
            mentee_id=current_user.id,
            status=SessionStatusType.SCHEDULED,
        )
        with transaction(self.db):
            self.session_repo.create_session(session)
        return session

    def update_session(
        self, session_id: UUID, request: MentorSessionUpdateRequest, current_user: CurrentUser
    ) -> MentorSession:
        """멘티, 해당 멘토 또는 관리자만"""
        session = self._require(self.session_repo.get_by_id(session_id), "Mentor session", session_id)
        mentor_user_id = session.mentor.user_id if session.mentor else None
        if not current_user.is_admin and current_user.id not in (session.mentee_id, mentor_user_id):
            raise ForbiddenError(
                message="Forbidden",
                detail="Only the session participants can update this session"
            )
        with transaction(self.db):
            self.session_repo.update_session(session, self._changes(request))
        return session
