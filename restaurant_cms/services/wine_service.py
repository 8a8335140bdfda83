"""Wine list queries, admin writes and wine analytics."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from sqlalchemy import String, cast, func, or_, select
from sqlalchemy.orm import Session

from restaurant_cms.models.analytics import AnalyticsEvent
from restaurant_cms.models.wine import INVENTORY_STATUSES, WINE_TYPES, Wine
from restaurant_cms.utils.time import rolling_window_start

logger = logging.getLogger(__name__)

WINE_EVENT_TYPES: tuple[str, ...] = ("VIEW", "SEARCH", "FILTER", "CLICK", "SHARE")
POPULAR_WINDOW_DAYS: int = 30

_WINE_TYPE_LABELS: dict[str, str] = {
    "red": "RED",
    "white": "WHITE",
    "rose": "ROSE",
    "rosé": "ROSE",
    "sparkling": "SPARKLING",
    "dessert": "DESSERT",
    "fortified": "FORTIFIED",
}
_INVENTORY_LABELS: dict[str, str] = {
    "in stock": "IN_STOCK",
    "low stock": "LOW_STOCK",
    "out of stock": "OUT_OF_STOCK",
    "coming soon": "COMING_SOON",
    "seasonal": "SEASONAL",
}
_PRICE_FIELDS = ("glass_price", "bottle_price")


@dataclass
class WineFilters:
    type: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    region: str | None = None
    country: str | None = None
    grape_variety: str | None = None
    inventory_status: str | None = None
    featured: bool | None = None
    search: str | None = None


def map_wine_type(value: str | None) -> str:
    """Map a free-form label such as ``Rosé`` to a wine type, defaulting to OTHER."""
    if not value:
        return "OTHER"
    normalized = value.strip()
    if normalized.upper() in WINE_TYPES:
        return normalized.upper()
    return _WINE_TYPE_LABELS.get(normalized.lower(), "OTHER")


def map_inventory_status(value: str | None) -> str:
    """Map a free-form label such as ``low stock`` to an inventory status, defaulting to IN_STOCK."""
    if not value:
        return "IN_STOCK"
    normalized = value.strip()
    if normalized.upper() in INVENTORY_STATUSES:
        return normalized.upper()
    return _INVENTORY_LABELS.get(normalized.lower().replace("_", " "), "IN_STOCK")


def _contains(column: Any, value: str) -> Any:
    return func.lower(column).like(f"%{value.lower()}%")


def get_wines(
    db: Session,
    restaurant_id: int,
    filters: WineFilters | None = None,
    page: int = 1,
    limit: int = 50,
) -> tuple[list[Wine], int]:
    """Return one page of active wines and the total match count."""
    filters = filters or WineFilters()
    conditions: list[Any] = [Wine.restaurant_id == restaurant_id, Wine.is_active.is_(True)]

    if filters.type:
        conditions.append(Wine.type == map_wine_type(filters.type))
    if filters.min_price is not None:
        conditions.append(Wine.bottle_price >= filters.min_price)
    if filters.max_price is not None:
        conditions.append(Wine.bottle_price <= filters.max_price)
    if filters.region:
        conditions.append(_contains(Wine.region, filters.region))
    if filters.country:
        conditions.append(_contains(Wine.country, filters.country))
    if filters.grape_variety:
        # JSON list column; match the quoted element in its serialized form.
        conditions.append(_contains(cast(Wine.grape_varieties, String), f'"{filters.grape_variety}"'))
    if filters.inventory_status:
        conditions.append(Wine.inventory_status == map_inventory_status(filters.inventory_status))
    if filters.featured is not None:
        conditions.append(Wine.featured.is_(filters.featured))
    if filters.search:
        conditions.append(
            or_(
                _contains(Wine.name, filters.search),
                _contains(Wine.producer, filters.search),
                _contains(Wine.region, filters.search),
                _contains(Wine.country, filters.search),
                _contains(Wine.tasting_notes, filters.search),
            )
        )

    total = int(db.scalar(select(func.count(Wine.id)).where(*conditions)) or 0)
    wines = db.scalars(
        select(Wine)
        .where(*conditions)
        .order_by(Wine.featured.desc(), Wine.display_order.asc(), Wine.type.asc(), Wine.name.asc())
        .offset((max(page, 1) - 1) * limit)
        .limit(limit)
    ).all()
    return list(wines), total


def get_wine_by_id(db: Session, wine_id: int, restaurant_id: int | None = None) -> Wine | None:
    wine = db.get(Wine, wine_id)
    if wine is None or (restaurant_id is not None and wine.restaurant_id != restaurant_id):
        return None
    return wine


def _normalize_changes(data: dict[str, Any]) -> dict[str, Any]:
    changes = dict(data)
    if "type" in changes:
        changes["type"] = map_wine_type(changes["type"])
    if "inventory_status" in changes:
        changes["inventory_status"] = map_inventory_status(changes["inventory_status"])
    for field in _PRICE_FIELDS:
        if changes.get(field) is not None:
            changes[field] = Decimal(str(changes[field])).quantize(Decimal("0.01"))
    return changes


def create_wine(db: Session, restaurant_id: int, data: dict[str, Any]) -> Wine:
    changes = _normalize_changes({field: value for field, value in data.items() if value is not None})
    changes.setdefault("type", "RED")
    changes["grape_varieties"] = changes.get("grape_varieties") or []
    changes["food_pairings"] = changes.get("food_pairings") or []
    wine = Wine(restaurant_id=restaurant_id, **changes)
    db.add(wine)
    db.commit()
    db.refresh(wine)
    return wine


def update_wine(db: Session, wine: Wine, data: dict[str, Any]) -> Wine:
    for field, value in _normalize_changes(data).items():
        setattr(wine, field, value)
    db.commit()
    db.refresh(wine)
    return wine


def deactivate_wine(db: Session, wine: Wine) -> Wine:
    """Soft delete: the wine disappears from every listing but keeps its analytics."""
    wine.is_active = False
    db.commit()
    db.refresh(wine)
    return wine


def get_popular_wines(db: Session, restaurant_id: int, limit: int = 10) -> list[Wine]:
    """Return active wines with the most VIEW events in the last 30 days."""
    view_count = func.count(AnalyticsEvent.id).label("views")
    rows = db.execute(
        select(Wine, view_count)
        .join(AnalyticsEvent, AnalyticsEvent.wine_id == Wine.id)
        .where(
            Wine.restaurant_id == restaurant_id,
            Wine.is_active.is_(True),
            AnalyticsEvent.event_type == "VIEW",
            AnalyticsEvent.created_at >= rolling_window_start(POPULAR_WINDOW_DAYS),
        )
        .group_by(Wine.id)
        .order_by(view_count.desc(), Wine.name.asc())
        .limit(limit)
    ).all()
    return [row[0] for row in rows]


def track_analytics(
    db: Session,
    *,
    wine_id: int,
    event_type: str,
    metadata: Any = None,
    session_id: str | None = None,
) -> AnalyticsEvent:
    """Insert one wine analytics event.

    Raises:
        ValueError: for an unknown event type.
    """
    normalized = event_type.strip().upper()
    if normalized not in WINE_EVENT_TYPES:
        raise ValueError(f"Unsupported wine event type: {event_type}")
    event = AnalyticsEvent(
        event_type=normalized,
        wine_id=wine_id,
        event_metadata=metadata,
        session_id=session_id,
    )
    db.add(event)
    db.commit()
    logger.debug("[ANALYTICS] wine event %s recorded wine_id=%s", normalized, wine_id)
    return event
