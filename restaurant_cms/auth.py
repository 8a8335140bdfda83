"""Request context, admin identity and route-protection helpers."""

from __future__ import annotations

from collections.abc import Callable, Generator
from dataclasses import dataclass
from urllib.parse import quote

from fastapi import Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse, Response
from sqlalchemy.orm import Session

from restaurant_cms.core.config import settings
from restaurant_cms.db import session as db_session
from restaurant_cms.db.session import get_db
from restaurant_cms.models import AdminUser
from restaurant_cms.services.auth_service import validate_auth_token

AUTH_COOKIE: str = "auth-token"
DEV_BYPASS_COOKIE: str = "dev-bypass-active"
SESSION_HEADER: str = "x-session-id"
SIGNIN_PATH: str = "/auth/signin"

ADMIN_PREFIX: str = "/admin"
UNTRACKED_PREFIXES: tuple[str, ...] = ("/admin", "/auth")
CONTENT_WRITE_ROLES: frozenset[str] = frozenset({"ADMIN", "EDITOR"})


@dataclass(frozen=True)
class AdminIdentity:
    id: int
    email: str
    name: str | None
    role: str

    @classmethod
    def from_admin(cls, admin: AdminUser) -> "AdminIdentity":
        return cls(id=admin.id, email=admin.email, name=admin.name, role=admin.role)

    @property
    def can_write_content(self) -> bool:
        return self.role in CONTENT_WRITE_ROLES


@dataclass
class RequestContext:
    """Everything a handler needs from the request, passed explicitly to services."""

    db: Session
    restaurant_slug: str
    identity: AdminIdentity | None = None
    session_id: str | None = None
    auth_token: str | None = None

    def actor(self) -> AdminUser | None:
        if self.identity is None:
            return None
        return self.db.get(AdminUser, self.identity.id)


def _matches_prefix(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(f"{prefix}/")


def is_admin_path(path: str) -> bool:
    """True for ``/admin`` and everything below it, never for ``/administrator``."""
    return _matches_prefix(path, ADMIN_PREFIX)


def should_track_path(path: str) -> bool:
    return not any(_matches_prefix(path, prefix) for prefix in UNTRACKED_PREFIXES)


def signin_redirect(path: str) -> RedirectResponse:
    return RedirectResponse(url=f"{SIGNIN_PATH}?callbackUrl={quote(path, safe='/')}", status_code=303)


def safe_callback_url(value: str | None) -> str:
    """Allow only local absolute paths as post-login targets."""
    if value and value.startswith("/") and not value.startswith("//"):
        return value
    return ADMIN_PREFIX


def resolve_identity(db: Session, token: str | None) -> AdminIdentity | None:
    admin = validate_auth_token(db, token)
    return AdminIdentity.from_admin(admin) if admin is not None else None


def resolve_identity_standalone(token: str | None) -> AdminIdentity | None:
    """Resolve a token with a short-lived session, for middleware outside dependency injection."""
    if not token:
        return None
    with db_session.SessionLocal() as db:
        return resolve_identity(db, token)


def set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        AUTH_COOKIE,
        token,
        max_age=settings.auth_token_max_age_hours * 60 * 60,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
        path="/",
    )


def clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(AUTH_COOKIE, path="/", httponly=True, samesite="lax", secure=settings.is_production)
    response.delete_cookie(DEV_BYPASS_COOKIE, path="/")


def dev_banner_active(request: Request) -> bool:
    """The dev-bypass cookie only drives a warning banner, never authentication."""
    return not settings.is_production and request.cookies.get(DEV_BYPASS_COOKIE) == "true"


def get_request_context(request: Request, db: Session = Depends(get_db)) -> Generator[RequestContext, None, None]:
    token = request.cookies.get(AUTH_COOKIE)
    if hasattr(request.state, "identity"):
        identity = request.state.identity
    else:
        identity = resolve_identity(db, token)
        request.state.identity = identity
    yield RequestContext(
        db=db,
        restaurant_slug=settings.restaurant_slug,
        identity=identity,
        session_id=request.headers.get(SESSION_HEADER),
        auth_token=token,
    )


def require_admin(context: RequestContext = Depends(get_request_context)) -> RequestContext:
    """Any ACTIVE admin, whatever the role."""
    if context.identity is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return context


def require_roles(*roles: str) -> Callable[[RequestContext], RequestContext]:
    allowed = {role.upper() for role in roles}

    def _checker(context: RequestContext = Depends(require_admin)) -> RequestContext:
        if context.identity is None or context.identity.role not in allowed:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
        return context

    return _checker


require_editor = require_roles(*CONTENT_WRITE_ROLES)
require_role_admin = require_roles("ADMIN")
