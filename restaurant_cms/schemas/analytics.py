"""Analytics request and summary schemas."""

from datetime import datetime
from typing import Any

from restaurant_cms.schemas.base import CamelModel


class WineAnalyticsRequest(CamelModel):
    """Wine interaction; any metadata shape is stored, a falsy wine id means no event."""

    event_type: str = "VIEW"
    metadata: Any = None
    wine_id: int | str | None = None


class PageViewRequest(CamelModel):
    path: str | None = None


class PageViewRead(CamelModel):
    id: int
    path: str | None = None
    visitor_id: str | None = None
    referrer: str | None = None
    created_at: datetime


class TopPage(CamelModel):
    path: str
    views: int


class DailyStat(CamelModel):
    date: str
    views: int
    visitors: int


class AnalyticsSummary(CamelModel):
    days: int
    total_page_views: int
    unique_visitors: int
    today_page_views: int
    today_unique_visitors: int
    recent_page_views: list[PageViewRead]
    top_pages: list[TopPage]
    daily_stats: list[DailyStat]
    wine_events: dict[str, int]
