from __future__ import annotations

import hashlib
import os
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Literal, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

# ---------------------------------------------------------------------
# Password hashing (bcrypt via passlib)
# ---------------------------------------------------------------------

_pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

TokenType = Literal["access", "refresh"]

_RESERVED_CLAIMS = {"sub", "type", "iat", "exp", "jti"}


def hash_password(password: str) -> str:
    """Hash a raw password using bcrypt."""
    if not isinstance(password, str) or not password:
        raise ValueError("password must be a non-empty string")
    return _pwd_context.hash(password)


def verify_password(password: str, password_hash: str | None) -> bool:
    """
    Verify a raw password against the stored hash.
    Malformed or missing hashes never match.
    """
    if not password or not password_hash:
        return False
    try:
        return _pwd_context.verify(password, password_hash)
    except ValueError:
        return False


def utcnow() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------
# JWT helpers
# ---------------------------------------------------------------------

def _load_jwt_settings() -> tuple[str, str]:
    secret_key = os.getenv("SECRET_KEY")
    algorithm = os.getenv("ALGORITHM", "HS256")

    if not secret_key or len(secret_key) < 32:
        raise RuntimeError("SECRET_KEY environment variable is not set (or too short; use 32+ chars)")

    return secret_key, algorithm


def _token_ttl(token_type: TokenType) -> timedelta:
    if token_type == "access":
        return timedelta(minutes=int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "15")))
    return timedelta(days=int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", "7")))


def _encode(
    token_type: TokenType,
    subject: str,
    expires_delta: Optional[timedelta],
    claims: Dict[str, Any],
) -> str:
    secret_key, algorithm = _load_jwt_settings()

    if not subject or not isinstance(subject, str):
        raise ValueError("subject must be a non-empty string")

    for key in claims:
        if key in _RESERVED_CLAIMS:
            raise ValueError(f"claims must not override reserved claim: {key}")

    now = utcnow()
    expire = now + (expires_delta or _token_ttl(token_type))
    payload: Dict[str, Any] = {
        **claims,
        "sub": subject,
        "type": token_type,
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
    }
    if token_type == "refresh":
        payload["jti"] = str(uuid.uuid4())

    return jwt.encode(payload, secret_key, algorithm=algorithm)


def create_access_token(
    *,
    subject: str,
    email: Optional[str] = None,
    role: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Signed access token.

    Claims: sub (user id), type="access", iat, exp, plus email/role when given.
    The role claim is informational; authorization always re-reads the user row.
    """
    claims: Dict[str, Any] = {}
    if email is not None:
        claims["email"] = email
    if role is not None:
        claims["role"] = role
    return _encode("access", subject, expires_delta, claims)


def create_refresh_token(*, subject: str, expires_delta: Optional[timedelta] = None) -> str:
    """Signed refresh token with a random jti so every issued token hashes uniquely."""
    return _encode("refresh", subject, expires_delta, {})


def verify_token(token: str, *, expected_type: Optional[TokenType] = None) -> Dict[str, Any]:
    """
    Verify signature/exp and the sub/type claims, returning the payload.
    Raises ValueError on any failure. Does not check DB state (revocation).
    """
    secret_key, algorithm = _load_jwt_settings()

    if not token or not isinstance(token, str):
        raise ValueError("token must be a non-empty string")

    try:
        payload = jwt.decode(token, secret_key, algorithms=[algorithm])
    except JWTError as e:
        raise ValueError("Invalid token") from e

    sub = payload.get("sub")
    token_type = payload.get("type")

    if not sub or not isinstance(sub, str):
        raise ValueError("Invalid token: missing/invalid 'sub'")

    if token_type not in ("access", "refresh"):
        raise ValueError("Invalid token: missing/invalid 'type'")

    if expected_type is not None and token_type != expected_type:
        raise ValueError(f"Invalid token type: expected '{expected_type}', got '{token_type}'")

    return payload


def hash_refresh_token(token: str) -> str:
    """Deterministic sha256 of a refresh token for refresh_tokens.token_hash."""
    if not token or not isinstance(token, str):
        raise ValueError("token must be a non-empty string")
    return hashlib.sha256(token.encode("utf-8")).hexdigest()
