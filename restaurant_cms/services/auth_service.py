"""Admin sign-in, token issuing and token validation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from restaurant_cms.core.config import settings
from restaurant_cms.core.security import (
    create_access_token,
    generate_session_token,
    get_password_hash,
    verify_password,
    verify_token,
)
from restaurant_cms.models import AdminUser, AuthSession

logger = logging.getLogger(__name__)

SESSION_STRATEGY: str = "session"
JWT_STRATEGY: str = "jwt"


@dataclass(frozen=True)
class IdentityProfile:
    """Verified identity handed over by an identity provider or password check."""

    email: str
    name: str | None = None


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored in UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def get_admin_by_email(db: Session, email: str) -> AdminUser | None:
    return db.scalar(select(AdminUser).where(AdminUser.email == email.strip().lower()).limit(1))


def is_email_allowed(email: str) -> bool:
    """Apply the configured allowlist; an empty allowlist defers to the AdminUser table."""
    allowed_emails = settings.admin_allowed_emails
    allowed_domains = settings.admin_allowed_domains
    if not allowed_emails and not allowed_domains:
        return True
    normalized = email.strip().lower()
    domain = normalized.rpartition("@")[2]
    return normalized in allowed_emails or domain in allowed_domains


def issue_auth_token(
    db: Session,
    admin: AdminUser,
    *,
    ip_address: str | None = None,
    user_agent: str | None = None,
) -> str:
    """Create the ``auth-token`` value for the configured strategy."""
    lifetime = timedelta(hours=settings.auth_token_max_age_hours)
    if settings.auth_strategy == JWT_STRATEGY:
        return create_access_token(subject=str(admin.id), email=admin.email, role=admin.role, expires_in=lifetime)

    token = generate_session_token()
    db.add(
        AuthSession(
            token=token,
            admin_user_id=admin.id,
            expires_at=datetime.now(timezone.utc) + lifetime,
            ip_address=ip_address,
            user_agent=(user_agent or "")[:500] or None,
        )
    )
    db.commit()
    return token


def complete_sign_in(
    db: Session,
    profile: IdentityProfile,
    *,
    ip_address: str | None = None,
    user_agent: str | None = None,
) -> tuple[AdminUser, str] | None:
    """Admit an authenticated identity only if it is allowlisted and an ACTIVE admin.

    Returns the admin and a freshly issued token, or None when rejected.
    """
    email = profile.email.strip().lower()
    if not email or not is_email_allowed(email):
        logger.warning("[AUTH] Sign-in rejected for %s: not allowlisted", email or "<empty>")
        return None

    admin = get_admin_by_email(db, email)
    if admin is None:
        logger.warning("[AUTH] Sign-in rejected for %s: no admin account", email)
        return None
    if admin.status != "ACTIVE":
        logger.warning("[AUTH] Sign-in rejected for %s: status=%s", email, admin.status)
        return None

    admin.last_login_at = datetime.now(timezone.utc)
    if profile.name and not admin.name:
        admin.name = profile.name
    db.commit()
    db.refresh(admin)
    token = issue_auth_token(db, admin, ip_address=ip_address, user_agent=user_agent)
    logger.info("[AUTH] Admin signed in: %s", email)
    return admin, token


def authenticate_password(
    db: Session,
    email: str,
    password: str,
    *,
    ip_address: str | None = None,
    user_agent: str | None = None,
) -> tuple[AdminUser, str] | None:
    admin = get_admin_by_email(db, email)
    if admin is None or not verify_password(password, admin.password_hash):
        logger.info("[AUTH] Password login failed for %s", email.strip().lower())
        return None
    return complete_sign_in(
        db,
        IdentityProfile(email=admin.email, name=admin.name),
        ip_address=ip_address,
        user_agent=user_agent,
    )


def _validate_session_token(db: Session, token: str) -> AdminUser | None:
    session = db.scalar(select(AuthSession).where(AuthSession.token == token).limit(1))
    if session is None:
        return None
    now = datetime.now(timezone.utc)
    if _as_utc(session.expires_at) <= now:
        db.delete(session)
        db.commit()
        return None
    session.last_activity_at = now
    db.commit()
    return db.get(AdminUser, session.admin_user_id)


def _validate_jwt(db: Session, token: str) -> AdminUser | None:
    payload = verify_token(token)
    if payload is None:
        return None
    try:
        admin_id = int(payload["sub"])
    except (TypeError, ValueError):
        return None
    admin = db.get(AdminUser, admin_id)
    if admin is None or admin.email != payload.get("email"):
        return None
    return admin


def validate_auth_token(db: Session, token: str | None) -> AdminUser | None:
    """Resolve a token to an ACTIVE admin, or None for anything else."""
    if not token:
        return None
    if settings.auth_strategy == JWT_STRATEGY:
        admin = _validate_jwt(db, token)
    else:
        admin = _validate_session_token(db, token)
    if admin is None or admin.status != "ACTIVE":
        return None
    return admin


def revoke_auth_token(db: Session, token: str) -> None:
    """Delete the server-side session; signed tokens simply expire."""
    if settings.auth_strategy == JWT_STRATEGY:
        return
    db.execute(delete(AuthSession).where(AuthSession.token == token))
    db.commit()


def revoke_admin_sessions(db: Session, admin_id: int) -> int:
    result = db.execute(delete(AuthSession).where(AuthSession.admin_user_id == admin_id))
    return int(result.rowcount or 0)


def ensure_dev_admin(db: Session) -> bool:
    """Ensure the development admin exists and is active.

    Returns:
        bool: True when the account existed before this call.
    """
    email = settings.admin_email.strip().lower()
    existing = get_admin_by_email(db, email)
    if existing is not None:
        if existing.status != "ACTIVE" or existing.role != "ADMIN":
            existing.status = "ACTIVE"
            existing.role = "ADMIN"
            db.commit()
            logger.info("[BOOTSTRAP] Development admin re-activated.")
        logger.info("[BOOTSTRAP] Development admin exists")
        return True

    db.add(
        AdminUser(
            email=email,
            name="Development Admin",
            role="ADMIN",
            status="ACTIVE",
            password_hash=get_password_hash(settings.admin_password),
        )
    )
    db.commit()
    logger.warning("[SECURITY] Development admin created: %s. Never enable it in production.", email)
    return False
