"""Admin account and server-side session ORM models."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from restaurant_cms.db.base import Base

ADMIN_ROLES = ("ADMIN", "EDITOR", "VIEWER")
ADMIN_STATUSES = ("ACTIVE", "INACTIVE", "SUSPENDED")


def normalize_admin_role(role: str | None) -> str:
    """Return canonical uppercase role or raise ValueError."""
    normalized = str(role or "").strip().upper()
    if normalized not in ADMIN_ROLES:
        raise ValueError(f"Unsupported admin role: {role}")
    return normalized


class AdminUser(Base):
    """Staff identity allowed to hold an admin session."""

    __tablename__ = "admin_users"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    role: Mapped[str] = mapped_column(Enum(*ADMIN_ROLES, name="admin_role"), nullable=False, default="EDITOR")
    status: Mapped[str] = mapped_column(Enum(*ADMIN_STATUSES, name="admin_status"), nullable=False, default="ACTIVE")
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    last_login_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    sessions: Mapped[list["AuthSession"]] = relationship(back_populates="admin_user")


class AuthSession(Base):
    """Opaque auth-token session issued after a successful sign-in."""

    __tablename__ = "auth_sessions"

    id: Mapped[int] = mapped_column(primary_key=True)
    token: Mapped[str] = mapped_column(String(128), nullable=False, unique=True, index=True)
    admin_user_id: Mapped[int] = mapped_column(ForeignKey("admin_users.id"), nullable=False, index=True)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    last_activity_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    ip_address: Mapped[str | None] = mapped_column(String(64), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(String(500), nullable=True)

    admin_user: Mapped[AdminUser] = relationship(back_populates="sessions")
