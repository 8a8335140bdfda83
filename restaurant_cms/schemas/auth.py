"""Authentication-related request and response schemas."""

from datetime import datetime

from pydantic import BaseModel

from restaurant_cms.schemas.base import CamelModel


class LoginRequest(BaseModel):
    """Payload for admin password login."""

    email: str
    password: str


class AdminUserResponse(CamelModel):
    """Admin identity returned by auth and user-management endpoints."""

    id: int
    email: str
    name: str | None = None
    role: str
    status: str
    last_login_at: datetime | None = None


class AdminUserInvite(CamelModel):
    email: str
    name: str | None = None
    role: str = "EDITOR"
    password: str | None = None


class AdminStatusUpdate(CamelModel):
    status: str
