from __future__ import annotations

import logging
import os
from datetime import timedelta

from fastapi import APIRouter, Cookie, Depends, File, HTTPException, Response, UploadFile, status

from app.dependencies import get_auth_service, get_current_user, get_storage_service
from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    MessageResponse,
    PasswordChangeRequest,
    ProfileUpdateRequest,
    SignupRequest,
    TokenResponse,
    UserResponse,
)
from app.services.auth import (
    AuthService,
    EmailAlreadyExists,
    InactiveUser,
    InvalidCredentials,
    InvalidRefreshToken,
    UserNotFound,
)
from app.services.storage_service import StorageService

logger = logging.getLogger(__name__)

router = APIRouter()

REFRESH_COOKIE_NAME = "refresh_token"
REFRESH_COOKIE_PATH = "/auth"
PROFILE_PHOTO_BUCKET = "profiles"


def _cookie_secure() -> bool:
    """
    For local HTTP dev, Secure cookies won't be set by the browser.
    Use COOKIE_SECURE=true in production (HTTPS).
    """
    return os.getenv("COOKIE_SECURE", "false").lower() == "true"


def _refresh_cookie_max_age_seconds() -> int:
    days = int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", "7"))
    return int(timedelta(days=days).total_seconds())


def _set_refresh_cookie(response: Response, refresh_token: str) -> None:
    response.set_cookie(
        key=REFRESH_COOKIE_NAME,
        value=refresh_token,
        httponly=True,
        secure=_cookie_secure(),
        samesite="lax",
        # Only sent to /auth/refresh and /auth/logout
        path=REFRESH_COOKIE_PATH,
        max_age=_refresh_cookie_max_age_seconds(),
    )


def _clear_refresh_cookie(response: Response) -> None:
    # Path must match the one used to set it
    response.delete_cookie(key=REFRESH_COOKIE_NAME, path=REFRESH_COOKIE_PATH)


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def signup(
    req: SignupRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    try:
        result = service.signup(
            email=req.email,
            password=req.password,
            first_name=req.first_name,
            last_name=req.last_name,
        )
    except EmailAlreadyExists:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email is already registered")

    _set_refresh_cookie(response, result.refresh_token)

    return TokenResponse(
        access_token=result.access_token,
        token_type="bearer",
        user=result.user,
    )


@router.post("/login", response_model=TokenResponse)
def login(
    req: LoginRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    try:
        result = service.login(email=req.email, password=req.password)
    except InvalidCredentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")
    except InactiveUser:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User is inactive")

    _set_refresh_cookie(response, result.refresh_token)

    return TokenResponse(
        access_token=result.access_token,
        token_type="bearer",
        user=result.user,
    )


@router.post("/refresh", response_model=TokenResponse)
def refresh(
    response: Response,
    refresh_token: str | None = Cookie(default=None, alias=REFRESH_COOKIE_NAME),
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    if not refresh_token:
        # Missing cookie => not authenticated
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")

    try:
        result = service.refresh(refresh_token=refresh_token)
    except InvalidRefreshToken:
        # Clear cookie to prevent client retry loops
        _clear_refresh_cookie(response)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid refresh token")

    # Rotation: replace cookie with new refresh token
    _set_refresh_cookie(response, result.refresh_token)

    return TokenResponse(
        access_token=result.access_token,
        token_type="bearer",
        user=result.user,
    )


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    refresh_token: str | None = Cookie(default=None, alias=REFRESH_COOKIE_NAME),
    service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    # Best-effort logout: do not leak token existence/validity
    if refresh_token:
        try:
            service.logout(refresh_token=refresh_token)
        except Exception:
            logger.warning("Refresh token revocation failed during logout", exc_info=True)

    _clear_refresh_cookie(response)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserResponse)
def me(
    current_user: CurrentUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
) -> UserResponse:
    user = service.user_repo.get_by_id(current_user.id)
    return UserResponse.model_validate(user)


@router.patch("/me", response_model=UserResponse)
def update_me(
    req: ProfileUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
) -> UserResponse:
    try:
        user = service.update_profile(user_id=current_user.id, changes=req.model_dump(exclude_unset=True))
    except UserNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return UserResponse.model_validate(user)


@router.post("/me/photo", response_model=UserResponse)
async def upload_my_photo(
    file: UploadFile = File(...),
    current_user: CurrentUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
    storage_service: StorageService = Depends(get_storage_service),
) -> UserResponse:
    """Upload a profile photo to the profiles bucket and store its public URL."""
    content = await file.read()
    _, url = storage_service.upload_image(
        PROFILE_PHOTO_BUCKET, str(current_user.id), file.filename, content, file.content_type
    )
    user = service.update_profile(user_id=current_user.id, changes={"photo_url": url})
    return UserResponse.model_validate(user)


@router.post("/me/password", response_model=MessageResponse)
def change_password(
    req: PasswordChangeRequest,
    response: Response,
    current_user: CurrentUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    try:
        service.change_password(
            user_id=current_user.id,
            current_password=req.current_password,
            new_password=req.new_password,
        )
    except InvalidCredentials:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Current password is incorrect")
    except UserNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    # Every refresh token was revoked; drop the stale cookie too
    _clear_refresh_cookie(response)
    return MessageResponse(message="Password changed successfully")
