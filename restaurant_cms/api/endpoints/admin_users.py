"""Admin account management endpoints (ADMIN role only)."""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from restaurant_cms.api.deps import record_audit
from restaurant_cms.api.responses import envelope
from restaurant_cms.auth import RequestContext, require_role_admin
from restaurant_cms.schemas.auth import AdminStatusUpdate, AdminUserInvite, AdminUserResponse
from restaurant_cms.services.admin_user_service import (
    get_admin_user,
    invite_admin_user,
    list_admin_users,
    set_admin_status,
)

router: APIRouter = APIRouter()


@router.get("/users")
def read_users(context: RequestContext = Depends(require_role_admin)) -> JSONResponse:
    return envelope([AdminUserResponse.model_validate(admin) for admin in list_admin_users(context.db)])


@router.post("/users", status_code=status.HTTP_201_CREATED)
def invite_user(payload: AdminUserInvite, context: RequestContext = Depends(require_role_admin)) -> JSONResponse:
    try:
        admin = invite_admin_user(
            context.db,
            email=payload.email,
            role=payload.role,
            name=payload.name,
            password=payload.password,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    created = AdminUserResponse.model_validate(admin)
    record_audit(context, action_type="INVITE", entity_type="AdminUser", entity_id=admin.id, after=created.model_dump(mode="json"))
    return envelope(created, status_code=status.HTTP_201_CREATED)


@router.put("/users/{admin_id}/status")
def update_user_status(
    admin_id: int,
    payload: AdminStatusUpdate,
    context: RequestContext = Depends(require_role_admin),
) -> JSONResponse:
    admin = get_admin_user(context.db, admin_id)
    if admin is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Admin user not found")
    if context.identity is not None and admin.id == context.identity.id and payload.status.upper() != "ACTIVE":
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot deactivate your own account")
    before = {"status": admin.status}
    try:
        admin = set_admin_status(context.db, admin, payload.status)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    record_audit(
        context,
        action_type="STATUS_CHANGE",
        entity_type="AdminUser",
        entity_id=admin.id,
        before=before,
        after={"status": admin.status},
    )
    return envelope(AdminUserResponse.model_validate(admin))
