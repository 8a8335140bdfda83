"""Wine list endpoints, public and admin."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse

from restaurant_cms.api.deps import record_audit, resolve_restaurant_id
from restaurant_cms.api.responses import envelope, internal_error
from restaurant_cms.auth import RequestContext, get_request_context, require_editor
from restaurant_cms.schemas.analytics import WineAnalyticsRequest
from restaurant_cms.schemas.wine import WineCreate, WineRead, WineUpdate
from restaurant_cms.services import wine_service
from restaurant_cms.services.best_effort import SUCCESS, best_effort

public_router: APIRouter = APIRouter()
admin_router: APIRouter = APIRouter()


@public_router.get("/wines")
def list_wines(
    type: str | None = None,
    min_price: float | None = Query(default=None, alias="minPrice", ge=0),
    max_price: float | None = Query(default=None, alias="maxPrice", ge=0),
    region: str | None = None,
    country: str | None = None,
    grape_variety: str | None = Query(default=None, alias="grapeVariety"),
    inventory_status: str | None = Query(default=None, alias="inventoryStatus"),
    featured: bool | None = None,
    search: str | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=200),
    context: RequestContext = Depends(get_request_context),
) -> JSONResponse:
    restaurant_id = resolve_restaurant_id(context)
    filters = wine_service.WineFilters(
        type=type,
        min_price=min_price,
        max_price=max_price,
        region=region,
        country=country,
        grape_variety=grape_variety,
        inventory_status=inventory_status,
        featured=featured,
        search=search,
    )
    try:
        wines, total = wine_service.get_wines(context.db, restaurant_id, filters, page=page, limit=limit)
    except Exception:
        return internal_error("Failed to fetch wines")
    return envelope(
        {
            "wines": [WineRead.model_validate(wine) for wine in wines],
            "total": total,
            "page": page,
            "limit": limit,
        }
    )


@public_router.get("/wines/popular")
def popular_wines(
    limit: int = Query(default=10, ge=1, le=50),
    context: RequestContext = Depends(get_request_context),
) -> JSONResponse:
    restaurant_id = resolve_restaurant_id(context)
    try:
        wines = wine_service.get_popular_wines(context.db, restaurant_id, limit=limit)
    except Exception:
        return internal_error("Failed to fetch popular wines")
    return envelope([WineRead.model_validate(wine) for wine in wines])


def _event_wine_id(value: int | str | None) -> int | None:
    """Coerce the loosely typed wine id; falsy or non-numeric values mean no event."""
    if not value:
        return None
    try:
        wine_id = int(value)
    except (TypeError, ValueError):
        return None
    return wine_id or None


@public_router.post("/wines/analytics")
def wine_analytics(
    payload: WineAnalyticsRequest,
    context: RequestContext = Depends(get_request_context),
) -> dict[str, bool]:
    """Best-effort wine event; without a wine id nothing is written."""
    wine_id = _event_wine_id(payload.wine_id)
    if wine_id is None:
        return dict(SUCCESS)
    return best_effort(
        lambda: wine_service.track_analytics(
            context.db,
            wine_id=wine_id,
            event_type=payload.event_type,
            metadata=payload.metadata,
            session_id=context.session_id,
        ),
        label="track wine analytics",
        db=context.db,
    )


@public_router.get("/wines/{wine_id}")
def read_wine(wine_id: int, context: RequestContext = Depends(get_request_context)) -> JSONResponse:
    restaurant_id = resolve_restaurant_id(context)
    wine = wine_service.get_wine_by_id(context.db, wine_id, restaurant_id)
    if wine is None or not wine.is_active:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Wine not found")
    return envelope(WineRead.model_validate(wine))


@admin_router.post("/wines", status_code=status.HTTP_201_CREATED)
def create_wine(payload: WineCreate, context: RequestContext = Depends(require_editor)) -> JSONResponse:
    restaurant_id = resolve_restaurant_id(context)
    try:
        wine = wine_service.create_wine(context.db, restaurant_id, payload.model_dump())
    except Exception:
        return internal_error("Failed to create wine")
    created = WineRead.model_validate(wine)
    record_audit(context, action_type="CREATE", entity_type="Wine", entity_id=wine.id, after=created.model_dump(mode="json"))
    return envelope(created, status_code=status.HTTP_201_CREATED)


@admin_router.put("/wines/{wine_id}")
def update_wine(wine_id: int, payload: WineUpdate, context: RequestContext = Depends(require_editor)) -> JSONResponse:
    restaurant_id = resolve_restaurant_id(context)
    wine = wine_service.get_wine_by_id(context.db, wine_id, restaurant_id)
    if wine is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Wine not found")
    before = WineRead.model_validate(wine).model_dump(mode="json")
    try:
        wine = wine_service.update_wine(context.db, wine, payload.model_dump(exclude_unset=True))
    except Exception:
        return internal_error("Failed to update wine")
    updated = WineRead.model_validate(wine)
    record_audit(
        context,
        action_type="UPDATE",
        entity_type="Wine",
        entity_id=wine.id,
        before=before,
        after=updated.model_dump(mode="json"),
    )
    return envelope(updated)


@admin_router.delete("/wines/{wine_id}")
def delete_wine(wine_id: int, context: RequestContext = Depends(require_editor)) -> JSONResponse:
    restaurant_id = resolve_restaurant_id(context)
    wine = wine_service.get_wine_by_id(context.db, wine_id, restaurant_id)
    if wine is None or not wine.is_active:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Wine not found")
    try:
        wine_service.deactivate_wine(context.db, wine)
    except Exception:
        return internal_error("Failed to delete wine")
    record_audit(context, action_type="DELETE", entity_type="Wine", entity_id=wine_id)
    return envelope()
