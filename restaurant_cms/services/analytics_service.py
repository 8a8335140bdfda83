"""Page-view tracking and analytics aggregation."""

from __future__ import annotations

import hashlib
import logging
from datetime import date, timedelta
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from restaurant_cms.models.analytics import AnalyticsEvent
from restaurant_cms.schemas.analytics import AnalyticsSummary, DailyStat, PageViewRead, TopPage
from restaurant_cms.utils.time import rolling_window_start, today_window_utc

logger = logging.getLogger(__name__)

PAGE_VIEW: str = "PAGE_VIEW"
RECENT_PAGE_VIEWS_LIMIT: int = 20
TOP_PAGES_LIMIT: int = 10


def visitor_id_for(ip_address: str | None, user_agent: str | None) -> str:
    """Derive a stable pseudonymous visitor id without storing the raw IP."""
    digest = hashlib.sha256(f"{ip_address or 'unknown'}{user_agent or 'unknown'}".encode("utf-8")).hexdigest()
    return digest[:16]


def track_page_view(
    db: Session,
    *,
    path: str,
    ip_address: str | None,
    user_agent: str | None,
    referrer: str | None = None,
    session_id: str | None = None,
) -> AnalyticsEvent:
    event = AnalyticsEvent(
        event_type=PAGE_VIEW,
        path=path,
        visitor_id=visitor_id_for(ip_address, user_agent),
        referrer=referrer,
        session_id=session_id,
        event_metadata={"userAgent": user_agent} if user_agent else None,
    )
    db.add(event)
    db.commit()
    logger.debug("[ANALYTICS] page view recorded path=%s", path)
    return event


def _count_page_views(db: Session, *conditions: Any) -> tuple[int, int]:
    views, visitors = db.execute(
        select(func.count(AnalyticsEvent.id), func.count(func.distinct(AnalyticsEvent.visitor_id))).where(
            AnalyticsEvent.event_type == PAGE_VIEW, *conditions
        )
    ).one()
    return int(views or 0), int(visitors or 0)


def get_analytics(db: Session, days: int = 30) -> AnalyticsSummary:
    """Aggregate the rolling ``days`` window with database-side grouping.

    Daily stats cover every day of the window, oldest first, with zero rows
    filled in for days without traffic.
    """
    window_start = rolling_window_start(days)
    today_start, today_end = today_window_utc()
    in_window = AnalyticsEvent.created_at >= window_start

    total_views, unique_visitors = _count_page_views(db, in_window)
    today_views, today_visitors = _count_page_views(
        db, AnalyticsEvent.created_at >= today_start, AnalyticsEvent.created_at < today_end
    )

    recent = db.scalars(
        select(AnalyticsEvent)
        .where(AnalyticsEvent.event_type == PAGE_VIEW, in_window)
        .order_by(AnalyticsEvent.created_at.desc(), AnalyticsEvent.id.desc())
        .limit(RECENT_PAGE_VIEWS_LIMIT)
    ).all()

    view_count = func.count(AnalyticsEvent.id).label("views")
    top_rows = db.execute(
        select(AnalyticsEvent.path, view_count)
        .where(AnalyticsEvent.event_type == PAGE_VIEW, AnalyticsEvent.path.is_not(None), in_window)
        .group_by(AnalyticsEvent.path)
        .order_by(view_count.desc(), AnalyticsEvent.path.asc())
        .limit(TOP_PAGES_LIMIT)
    ).all()

    day_column = func.date(AnalyticsEvent.created_at)
    daily_rows = db.execute(
        select(day_column, func.count(AnalyticsEvent.id), func.count(func.distinct(AnalyticsEvent.visitor_id)))
        .where(AnalyticsEvent.event_type == PAGE_VIEW, in_window)
        .group_by(day_column)
    ).all()
    by_day: dict[str, tuple[int, int]] = {str(row[0]): (int(row[1]), int(row[2])) for row in daily_rows}

    today: date = today_start.date()
    daily_stats: list[DailyStat] = []
    for offset in range(days - 1, -1, -1):
        day_key = (today - timedelta(days=offset)).isoformat()
        views, visitors = by_day.get(day_key, (0, 0))
        daily_stats.append(DailyStat(date=day_key, views=views, visitors=visitors))

    wine_rows = db.execute(
        select(AnalyticsEvent.event_type, func.count(AnalyticsEvent.id))
        .where(AnalyticsEvent.wine_id.is_not(None), in_window)
        .group_by(AnalyticsEvent.event_type)
    ).all()

    return AnalyticsSummary(
        days=days,
        total_page_views=total_views,
        unique_visitors=unique_visitors,
        today_page_views=today_views,
        today_unique_visitors=today_visitors,
        recent_page_views=[PageViewRead.model_validate(event) for event in recent],
        top_pages=[TopPage(path=path, views=int(views)) for path, views in top_rows],
        daily_stats=daily_stats,
        wine_events={event_type: int(count) for event_type, count in wine_rows},
    )
