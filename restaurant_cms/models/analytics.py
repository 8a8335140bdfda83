"""Append-only analytics event model."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from restaurant_cms.db.base import Base

EVENT_TYPES = ("PAGE_VIEW", "VIEW", "SEARCH", "FILTER", "CLICK", "SHARE")


class AnalyticsEvent(Base):
    """Page view or wine interaction recorded by the public site."""

    __tablename__ = "analytics_events"

    id: Mapped[int] = mapped_column(primary_key=True)
    event_type: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    # "metadata" is reserved on declarative classes.
    event_metadata: Mapped[Any] = mapped_column("metadata", JSON, nullable=True)
    wine_id: Mapped[int | None] = mapped_column(ForeignKey("wines.id"), nullable=True, index=True)
    path: Mapped[str | None] = mapped_column(String(500), nullable=True)
    session_id: Mapped[str | None] = mapped_column(String(128), nullable=True)
    visitor_id: Mapped[str | None] = mapped_column(String(32), nullable=True)
    referrer: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
        default=lambda: datetime.now(timezone.utc),
    )
