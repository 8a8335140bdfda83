"""Admin account management."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from restaurant_cms.core.security import get_password_hash
from restaurant_cms.models.admin_user import ADMIN_STATUSES, AdminUser, normalize_admin_role
from restaurant_cms.services.auth_service import get_admin_by_email, revoke_admin_sessions

logger = logging.getLogger(__name__)


def list_admin_users(db: Session) -> list[AdminUser]:
    return list(db.scalars(select(AdminUser).order_by(AdminUser.email.asc())).all())


def get_admin_user(db: Session, admin_id: int) -> AdminUser | None:
    return db.get(AdminUser, admin_id)


def invite_admin_user(
    db: Session,
    *,
    email: str,
    role: str,
    name: str | None = None,
    password: str | None = None,
) -> AdminUser:
    """Create an ACTIVE admin.

    Raises:
        ValueError: for an unknown role, a malformed email or a duplicate account.
    """
    normalized_email = email.strip().lower()
    if "@" not in normalized_email:
        raise ValueError("A valid email address is required")
    canonical_role = normalize_admin_role(role)
    if get_admin_by_email(db, normalized_email) is not None:
        raise ValueError(f"Admin {normalized_email} already exists")

    admin = AdminUser(
        email=normalized_email,
        name=name,
        role=canonical_role,
        status="ACTIVE",
        password_hash=get_password_hash(password) if password else None,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info("[ADMIN] Invited %s as %s", normalized_email, canonical_role)
    return admin


def set_admin_status(db: Session, admin: AdminUser, status: str) -> AdminUser:
    """Change an admin's status; leaving ACTIVE revokes every server-side session.

    Raises:
        ValueError: for an unknown status.
    """
    normalized = str(status or "").strip().upper()
    if normalized not in ADMIN_STATUSES:
        raise ValueError(f"Unsupported admin status: {status}")
    admin.status = normalized
    revoked = 0
    if normalized != "ACTIVE":
        revoked = revoke_admin_sessions(db, admin.id)
    db.commit()
    db.refresh(admin)
    logger.info("[ADMIN] %s status=%s revoked_sessions=%s", admin.email, normalized, revoked)
    return admin
