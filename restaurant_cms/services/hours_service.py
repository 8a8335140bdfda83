"""Operating hours reads and upserts."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from restaurant_cms.models.restaurant import OperatingHours
from restaurant_cms.schemas.hours import HoursEntry


def list_hours(db: Session, restaurant_id: int) -> list[OperatingHours]:
    return list(
        db.scalars(
            select(OperatingHours)
            .where(OperatingHours.restaurant_id == restaurant_id)
            .order_by(OperatingHours.day_of_week.asc())
        ).all()
    )


def save_hours(db: Session, restaurant_id: int, hours: list[HoursEntry]) -> list[OperatingHours]:
    """Upsert one row per (restaurant, day_of_week) and return the full week.

    A closed day keeps the submitted times so reopening restores them.
    """
    existing = {row.day_of_week: row for row in list_hours(db, restaurant_id)}
    for entry in hours:
        row = existing.get(entry.day_of_week)
        if row is None:
            row = OperatingHours(restaurant_id=restaurant_id, day_of_week=entry.day_of_week)
            db.add(row)
            existing[entry.day_of_week] = row
        row.open_time = entry.open_time
        row.close_time = entry.close_time
        row.is_closed = entry.is_closed
    db.commit()
    return list_hours(db, restaurant_id)
