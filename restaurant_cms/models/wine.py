"""Wine list ORM model."""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from restaurant_cms.db.base import Base

WINE_TYPES = ("RED", "WHITE", "ROSE", "SPARKLING", "DESSERT", "FORTIFIED", "OTHER")
INVENTORY_STATUSES = ("IN_STOCK", "LOW_STOCK", "OUT_OF_STOCK", "COMING_SOON", "SEASONAL")


class Wine(Base):
    """Wine offered by the restaurant; is_active=False hides it everywhere."""

    __tablename__ = "wines"

    id: Mapped[int] = mapped_column(primary_key=True)
    restaurant_id: Mapped[int] = mapped_column(ForeignKey("restaurants.id"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    producer: Mapped[str | None] = mapped_column(String(255), nullable=True)
    vintage: Mapped[int | None] = mapped_column(Integer, nullable=True)
    region: Mapped[str | None] = mapped_column(String(255), nullable=True)
    country: Mapped[str | None] = mapped_column(String(128), nullable=True)
    grape_varieties: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    type: Mapped[str] = mapped_column(String(16), nullable=False, default="RED")
    glass_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    bottle_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    tasting_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    food_pairings: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    inventory_status: Mapped[str] = mapped_column(String(16), nullable=False, default="IN_STOCK")
    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
