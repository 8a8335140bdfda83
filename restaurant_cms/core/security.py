"""Security utilities for password hashing and signed admin tokens."""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from restaurant_cms.core.config import settings

logger = logging.getLogger(__name__)

pwd_context: CryptContext = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def get_password_hash(password: str) -> str:
    """Hash a plaintext password."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """Verify a plaintext password against its hash."""
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def generate_session_token() -> str:
    """Return an opaque, URL-safe token for server-side sessions."""
    return secrets.token_urlsafe(32)


def create_access_token(*, subject: str, email: str, role: str, expires_in: timedelta | None = None) -> str:
    """Create a signed JWT carrying the admin identity."""
    issued_at: datetime = datetime.now(timezone.utc)
    lifetime = expires_in if expires_in is not None else timedelta(hours=settings.auth_token_max_age_hours)
    payload: dict[str, Any] = {
        "sub": subject,
        "email": email,
        "role": role,
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> dict[str, Any] | None:
    """Decode and validate a JWT; return None for any invalid or expired token."""
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as exc:
        logger.info("[AUTH] Rejected signed token: %s", exc)
        return None

    if not payload.get("sub") or not payload.get("email"):
        return None
    return payload
