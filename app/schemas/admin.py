from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class AdminStatsResponse(BaseModel):
    """관리자 대시보드 요약"""
    total_users: int
    new_users_last_30_days: int
    admin_users: int
    total_events: int
    past_events: int
    total_startups: int
    approved_mentors: int
    total_recordings: int


class ActivityResponse(BaseModel):
    id: UUID
    activity_type: str
    description: str
    created_at: datetime


class ProfilesDataResponse(BaseModel):
    """프로필 분포 (값 -> 사용자 수)"""
    total_profiles: int
    by_role: dict[str, int]
    by_location: dict[str, int]
    by_company: dict[str, int]
    by_signup_date: dict[str, int]
