"""Admin operating-hours endpoints."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from restaurant_cms.api.deps import record_audit, resolve_restaurant_id
from restaurant_cms.api.responses import envelope, internal_error
from restaurant_cms.auth import RequestContext, require_admin, require_editor
from restaurant_cms.schemas.hours import HoursUpdateRequest
from restaurant_cms.schemas.restaurant import HoursRead
from restaurant_cms.services.hours_service import list_hours, save_hours

router: APIRouter = APIRouter()


@router.get("/hours")
def read_hours(context: RequestContext = Depends(require_admin)) -> JSONResponse:
    restaurant_id = resolve_restaurant_id(context)
    return envelope([HoursRead.model_validate(row) for row in list_hours(context.db, restaurant_id)])


@router.put("/hours")
def update_hours(payload: HoursUpdateRequest, context: RequestContext = Depends(require_editor)) -> JSONResponse:
    restaurant_id = resolve_restaurant_id(context)
    before = [HoursRead.model_validate(row).model_dump(mode="json") for row in list_hours(context.db, restaurant_id)]
    try:
        rows = save_hours(context.db, restaurant_id, payload.hours)
    except Exception:
        return internal_error("Failed to update hours")
    after = [HoursRead.model_validate(row) for row in rows]
    record_audit(
        context,
        action_type="UPDATE",
        entity_type="OperatingHours",
        before={"hours": before},
        after={"hours": [row.model_dump(mode="json") for row in after]},
    )
    return envelope(after)
