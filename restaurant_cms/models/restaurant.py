"""Restaurant-related ORM models."""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from restaurant_cms.db.base import Base

CONTACT_TYPES = ("phone", "address", "email", "social")


class Restaurant(Base):
    """One tenant's marketing-site data, identified by slug."""

    __tablename__ = "restaurants"

    id: Mapped[int] = mapped_column(primary_key=True)
    slug: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    tagline: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    hours: Mapped[list["OperatingHours"]] = relationship(back_populates="restaurant")
    contacts: Mapped[list["Contact"]] = relationship(back_populates="restaurant")


class OperatingHours(Base):
    """Opening hours for one day of the week (0 = Sunday)."""

    __tablename__ = "operating_hours"
    __table_args__ = (
        UniqueConstraint("restaurant_id", "day_of_week", name="uq_operating_hours_restaurant_day"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    restaurant_id: Mapped[int] = mapped_column(ForeignKey("restaurants.id"), nullable=False, index=True)
    day_of_week: Mapped[int] = mapped_column(Integer, nullable=False)
    open_time: Mapped[str] = mapped_column(String(5), nullable=False, default="09:00")
    close_time: Mapped[str] = mapped_column(String(5), nullable=False, default="17:00")
    is_closed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    restaurant: Mapped[Restaurant] = relationship(back_populates="hours")


class Contact(Base):
    """Phone, address, email or social link shown in the location section."""

    __tablename__ = "contacts"

    id: Mapped[int] = mapped_column(primary_key=True)
    restaurant_id: Mapped[int] = mapped_column(ForeignKey("restaurants.id"), nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    label: Mapped[str | None] = mapped_column(String(128), nullable=True)
    value: Mapped[str] = mapped_column(String(500), nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    restaurant: Mapped[Restaurant] = relationship(back_populates="contacts")
