"""Admin menu editing endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from restaurant_cms.api.deps import record_audit, resolve_restaurant_id
from restaurant_cms.api.responses import envelope, internal_error
from restaurant_cms.auth import RequestContext, require_admin, require_editor
from restaurant_cms.schemas.menu import MenuCreate, MenuItemCreate, MenuItemUpdate, MenuSaveRequest, MenuSummary
from restaurant_cms.schemas.restaurant import MenuItemRead
from restaurant_cms.services import menu_service

router: APIRouter = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/menu/sections")
def list_sections(context: RequestContext = Depends(require_admin)) -> JSONResponse:
    restaurant_id = resolve_restaurant_id(context)
    try:
        sections = menu_service.get_menu_sections(context.db, restaurant_id)
    except Exception:
        return internal_error("Failed to fetch menu sections")
    return envelope(sections)


@router.post("/menu/items", status_code=status.HTTP_201_CREATED)
def create_item(payload: MenuItemCreate, context: RequestContext = Depends(require_editor)) -> JSONResponse:
    restaurant_id = resolve_restaurant_id(context)
    if menu_service.get_section_for_restaurant(context.db, payload.section_id, restaurant_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Menu section not found")
    try:
        item = menu_service.create_menu_item(
            context.db,
            section_id=payload.section_id,
            name=payload.name,
            description=payload.description,
            price=payload.price,
            is_available=payload.is_available,
            sort_order=payload.sort_order,
        )
    except Exception:
        return internal_error("Failed to create menu item")
    created = MenuItemRead.model_validate(item)
    record_audit(context, action_type="CREATE", entity_type="MenuItem", entity_id=item.id, after=created.model_dump(mode="json"))
    return envelope(created, status_code=status.HTTP_201_CREATED)


@router.put("/menu")
def save_menu(payload: MenuSaveRequest, context: RequestContext = Depends(require_editor)) -> JSONResponse:
    """Bulk save from the menu editor."""
    restaurant_id = resolve_restaurant_id(context)
    try:
        written = menu_service.save_menu(context.db, restaurant_id, payload.sections)
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except Exception:
        return internal_error("Failed to save menu")
    record_audit(context, action_type="BULK_UPDATE", entity_type="Menu", after={"itemsWritten": written})
    return envelope(menu_service.get_menu_sections(context.db, restaurant_id))


@router.get("/menu/{item_id}")
def read_item(item_id: int, context: RequestContext = Depends(require_admin)) -> JSONResponse:
    restaurant_id = resolve_restaurant_id(context)
    item = menu_service.get_menu_item(context.db, item_id, restaurant_id)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Menu item not found")
    return envelope(MenuItemRead.model_validate(item))


@router.put("/menu/{item_id}")
def update_item(item_id: int, payload: MenuItemUpdate, context: RequestContext = Depends(require_editor)) -> JSONResponse:
    restaurant_id = resolve_restaurant_id(context)
    existing = menu_service.get_menu_item(context.db, item_id, restaurant_id)
    if existing is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Menu item not found")
    before = menu_service.snapshot_item(existing)
    try:
        item = menu_service.update_menu_item(
            context.db, item_id, restaurant_id, payload.model_dump(exclude_unset=True)
        )
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except Exception:
        return internal_error("Failed to update menu item")
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Menu item not found")
    after = menu_service.snapshot_item(item)
    record_audit(context, action_type="UPDATE", entity_type="MenuItem", entity_id=item.id, before=before, after=after)
    return envelope(MenuItemRead.model_validate(item))


@router.get("/menus")
def list_menus(context: RequestContext = Depends(require_admin)) -> JSONResponse:
    restaurant_id = resolve_restaurant_id(context)
    try:
        menus = menu_service.list_menus(context.db, restaurant_id)
    except Exception:
        return internal_error("Failed to fetch menus")
    return envelope([MenuSummary.model_validate(menu) for menu in menus])


@router.post("/menus", status_code=status.HTTP_201_CREATED)
def create_menu(payload: MenuCreate, context: RequestContext = Depends(require_editor)) -> JSONResponse:
    restaurant_id = resolve_restaurant_id(context)
    try:
        menu = menu_service.create_menu(
            context.db,
            restaurant_id=restaurant_id,
            name=payload.name,
            description=payload.description,
            is_active=payload.is_active,
        )
    except Exception:
        return internal_error("Failed to create menu")
    summary = MenuSummary.model_validate(menu)
    record_audit(context, action_type="CREATE", entity_type="Menu", entity_id=menu.id, after=summary.model_dump(mode="json"))
    return envelope(summary, status_code=status.HTTP_201_CREATED)


@router.post("/menus/{menu_id}/activate")
def activate_menu(menu_id: int, context: RequestContext = Depends(require_editor)) -> JSONResponse:
    restaurant_id = resolve_restaurant_id(context)
    try:
        menu = menu_service.activate_menu(context.db, restaurant_id, menu_id)
    except Exception:
        return internal_error("Failed to activate menu")
    if menu is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Menu not found")
    logger.info("[ADMIN] Menu %s activated by %s", menu_id, context.identity.email if context.identity else "?")
    record_audit(context, action_type="ACTIVATE", entity_type="Menu", entity_id=menu.id)
    return envelope(MenuSummary.model_validate(menu))
