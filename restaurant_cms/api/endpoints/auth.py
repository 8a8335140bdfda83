"""Admin authentication endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse

from restaurant_cms.api.responses import envelope, internal_error
from restaurant_cms.auth import (
    DEV_BYPASS_COOKIE,
    RequestContext,
    clear_auth_cookie,
    get_request_context,
    require_admin,
    set_auth_cookie,
)
from restaurant_cms.core.config import settings
from restaurant_cms.schemas.auth import AdminUserResponse, LoginRequest
from restaurant_cms.services.auth_service import (
    IdentityProfile,
    authenticate_password,
    complete_sign_in,
    ensure_dev_admin,
    revoke_auth_token,
)
from restaurant_cms.services.best_effort import SUCCESS, best_effort

router: APIRouter = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/login")
def login(payload: LoginRequest, request: Request, context: RequestContext = Depends(get_request_context)) -> JSONResponse:
    try:
        signed_in = authenticate_password(
            context.db,
            payload.email,
            payload.password,
            ip_address=request.client.host if request.client else None,
            user_agent=request.headers.get("user-agent"),
        )
    except Exception:
        return internal_error("Password login failed")
    if signed_in is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")
    admin, token = signed_in
    response = envelope(AdminUserResponse.model_validate(admin))
    set_auth_cookie(response, token)
    return response


@router.post("/logout")
def logout(context: RequestContext = Depends(get_request_context)) -> JSONResponse:
    """Always reports success and clears the cookie, even if revocation fails."""
    token = context.auth_token
    if token:
        best_effort(lambda: revoke_auth_token(context.db, token), label="revoke auth token", db=context.db)
    response = JSONResponse(content=dict(SUCCESS))
    clear_auth_cookie(response)
    return response


@router.get("/me")
def me(context: RequestContext = Depends(require_admin)) -> JSONResponse:
    admin = context.actor()
    if admin is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return envelope(AdminUserResponse.model_validate(admin))


@router.post("/dev-login")
def dev_login(request: Request, context: RequestContext = Depends(get_request_context)) -> JSONResponse:
    """Sign in as the seeded development admin; unavailable in production."""
    if settings.is_production:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    try:
        ensure_dev_admin(context.db)
        signed_in = complete_sign_in(
            context.db,
            IdentityProfile(email=settings.admin_email),
            ip_address=request.client.host if request.client else None,
            user_agent=request.headers.get("user-agent"),
        )
    except Exception:
        return internal_error("Development login failed")
    if signed_in is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Development admin is not allowed to sign in")
    admin, token = signed_in
    logger.warning("[SECURITY] Development login used for %s", admin.email)
    response = envelope(AdminUserResponse.model_validate(admin))
    set_auth_cookie(response, token)
    response.set_cookie(DEV_BYPASS_COOKIE, "true", max_age=settings.auth_token_max_age_hours * 60 * 60, samesite="lax", path="/")
    return response
