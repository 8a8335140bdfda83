"""Contact (location section) reads and writes."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from restaurant_cms.models.restaurant import Contact
from restaurant_cms.schemas.contact import ContactEntry


def list_contacts(db: Session, restaurant_id: int) -> list[Contact]:
    return list(
        db.scalars(
            select(Contact)
            .where(Contact.restaurant_id == restaurant_id)
            .order_by(Contact.sort_order.asc(), Contact.id.asc())
        ).all()
    )


def save_contacts(db: Session, restaurant_id: int, contacts: list[ContactEntry]) -> list[Contact]:
    """Update contacts that carry an id and append the rest after the current last one.

    Raises:
        LookupError: when an id does not belong to the restaurant.
    """
    next_sort_order = (
        db.scalar(select(func.max(Contact.sort_order)).where(Contact.restaurant_id == restaurant_id)) or 0
    ) + 1
    for entry in contacts:
        if entry.id is None:
            db.add(
                Contact(
                    restaurant_id=restaurant_id,
                    type=entry.type,
                    label=entry.label,
                    value=entry.value,
                    sort_order=next_sort_order,
                )
            )
            next_sort_order += 1
            continue

        contact = db.scalar(
            select(Contact).where(Contact.id == entry.id, Contact.restaurant_id == restaurant_id).limit(1)
        )
        if contact is None:
            db.rollback()
            raise LookupError(f"Contact {entry.id} not found")
        contact.value = entry.value
        contact.label = entry.label
    db.commit()
    return list_contacts(db, restaurant_id)
