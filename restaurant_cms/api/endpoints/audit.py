"""Audit trail endpoint."""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from restaurant_cms.api.responses import envelope
from restaurant_cms.auth import RequestContext, require_admin
from restaurant_cms.schemas.audit import AuditLogRead
from restaurant_cms.services.audit_service import list_recent

router: APIRouter = APIRouter()


@router.get("/audit")
def read_audit(
    limit: int = Query(default=50, ge=1, le=500),
    context: RequestContext = Depends(require_admin),
) -> JSONResponse:
    return envelope([AuditLogRead.model_validate(row) for row in list_recent(context.db, limit)])
