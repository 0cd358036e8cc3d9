# app/schemas/auth.py

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.models.auth import UserRoleType


# -----------------------------
# Session / user-facing models
# -----------------------------

class CurrentUser(BaseModel):
    """
    Explicit session object passed into services.
    is_admin is derived from the profile role (role == "admin").
    """
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    first_name: str | None = None
    last_name: str | None = None
    is_admin: bool = False


class UserResponse(BaseModel):
    """Response model for GET /auth/me and profile updates."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    first_name: str | None = None
    last_name: str | None = None
    photo_url: str | None = None
    bio: str | None = None
    company: str | None = None
    profession: str | None = None
    location: str | None = None
    industry: str | None = None
    role: UserRoleType
    is_admin: bool
    is_active: bool
    created_at: datetime | None = None


# -----------------------------
# Requests (JSON body)
# -----------------------------

class SignupRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=64)
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)


class ProfileUpdateRequest(BaseModel):
    """PATCH /auth/me"""
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    photo_url: str | None = None
    bio: str | None = None
    company: str | None = None
    profession: str | None = None
    location: str | None = None
    industry: str | None = None


class PasswordChangeRequest(BaseModel):
    """POST /auth/me/password"""
    current_password: str = Field(min_length=1, max_length=128)
    new_password: str = Field(min_length=8, max_length=64)


# -----------------------------
# Responses
# -----------------------------

class TokenResponse(BaseModel):
    """
    Response for POST /signup, POST /login, POST /refresh.

    Refresh token is stored in an HttpOnly cookie, so it is NOT included here.
    """
    access_token: str
    token_type: str = "bearer"
    user: CurrentUser


class MessageResponse(BaseModel):
    message: str
