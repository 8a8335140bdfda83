"""Admin contact (location) endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from restaurant_cms.api.deps import record_audit, resolve_restaurant_id
from restaurant_cms.api.responses import envelope, internal_error
from restaurant_cms.auth import RequestContext, require_admin, require_editor
from restaurant_cms.schemas.contact import ContactsUpdateRequest
from restaurant_cms.schemas.restaurant import ContactRead
from restaurant_cms.services.location_service import list_contacts, save_contacts

router: APIRouter = APIRouter()


@router.get("/contacts")
def read_contacts(context: RequestContext = Depends(require_admin)) -> JSONResponse:
    restaurant_id = resolve_restaurant_id(context)
    return envelope([ContactRead.model_validate(row) for row in list_contacts(context.db, restaurant_id)])


@router.put("/contacts")
def update_contacts(payload: ContactsUpdateRequest, context: RequestContext = Depends(require_editor)) -> JSONResponse:
    restaurant_id = resolve_restaurant_id(context)
    try:
        rows = save_contacts(context.db, restaurant_id, payload.contacts)
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except Exception:
        return internal_error("Failed to update contacts")
    contacts = [ContactRead.model_validate(row) for row in rows]
    record_audit(
        context,
        action_type="UPDATE",
        entity_type="Contact",
        after={"contacts": [contact.model_dump(mode="json") for contact in contacts]},
    )
    return envelope(contacts)
