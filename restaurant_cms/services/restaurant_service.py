"""Restaurant aggregate reads shared by public pages and the API."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from restaurant_cms.models.menu import Menu, MenuItem, MenuSection
from restaurant_cms.models.restaurant import Contact, OperatingHours, Restaurant
from restaurant_cms.schemas.restaurant import (
    ContactRead,
    HoursRead,
    MenuItemRead,
    MenuRead,
    MenuSectionRead,
    RestaurantData,
)
from restaurant_cms.services.result import Failed, LoadResult, Loaded, Loading

DAY_NAMES: tuple[str, ...] = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


def get_restaurant_by_slug(db: Session, slug: str) -> Restaurant | None:
    return db.scalar(select(Restaurant).where(Restaurant.slug == slug).limit(1))


def get_restaurant_id(db: Session, slug: str) -> int:
    """Resolve the tenant id for admin writes, which need an existing tenant."""
    restaurant_id = db.scalar(select(Restaurant.id).where(Restaurant.slug == slug).limit(1))
    if restaurant_id is None:
        raise LookupError(f"Restaurant with slug {slug} not found")
    return int(restaurant_id)


def get_active_menu(db: Session, restaurant_id: int) -> Menu | None:
    """Return the first active menu; writes keep at most one active."""
    return db.scalar(
        select(Menu)
        .where(Menu.restaurant_id == restaurant_id, Menu.is_active.is_(True))
        .order_by(Menu.id.asc())
        .limit(1)
    )


def _build_menu(db: Session, menu: Menu) -> MenuRead:
    sections = db.scalars(
        select(MenuSection)
        .where(MenuSection.menu_id == menu.id)
        .order_by(MenuSection.sort_order.asc(), MenuSection.id.asc())
    ).all()
    section_ids = [section.id for section in sections]
    items_by_section: dict[int, list[MenuItemRead]] = {section_id: [] for section_id in section_ids}
    if section_ids:
        items = db.scalars(
            select(MenuItem)
            .where(MenuItem.section_id.in_(section_ids), MenuItem.is_available.is_(True))
            .order_by(MenuItem.sort_order.asc(), MenuItem.id.asc())
        ).all()
        for item in items:
            items_by_section[item.section_id].append(MenuItemRead.model_validate(item))

    return MenuRead(
        id=menu.id,
        name=menu.name,
        description=menu.description,
        is_active=menu.is_active,
        sections=[
            MenuSectionRead(
                id=section.id,
                menu_id=section.menu_id,
                name=section.name,
                description=section.description,
                sort_order=section.sort_order,
                items=items_by_section[section.id],
            )
            for section in sections
        ],
    )


def get_restaurant_data(db: Session, slug: str) -> RestaurantData | None:
    """Return the tenant with ordered hours, contacts and its active menu.

    Only available menu items are included. Returns None when the slug is
    unknown; callers must treat every nested collection as possibly empty.
    """
    restaurant = get_restaurant_by_slug(db, slug)
    if restaurant is None:
        return None

    hours = db.scalars(
        select(OperatingHours)
        .where(OperatingHours.restaurant_id == restaurant.id)
        .order_by(OperatingHours.day_of_week.asc())
    ).all()
    contacts = db.scalars(
        select(Contact)
        .where(Contact.restaurant_id == restaurant.id)
        .order_by(Contact.sort_order.asc(), Contact.id.asc())
    ).all()
    active_menu = get_active_menu(db, restaurant.id)

    return RestaurantData(
        id=restaurant.id,
        slug=restaurant.slug,
        name=restaurant.name,
        description=restaurant.description,
        tagline=restaurant.tagline,
        hours=[HoursRead.model_validate(row) for row in hours],
        contacts=[ContactRead.model_validate(row) for row in contacts],
        menus=[_build_menu(db, active_menu)] if active_menu is not None else [],
    )


def build_page_context(result: LoadResult[RestaurantData | None]) -> dict[str, Any]:
    """Flatten a load result into template variables with safe fallbacks."""
    context: dict[str, Any] = {
        "restaurant_id": "",
        "restaurant_name": "",
        "restaurant": None,
        "hours": [],
        "contacts": [],
        "menu": None,
        "sections": [],
        "load_error": None,
        "is_loading": False,
        "day_names": DAY_NAMES,
    }
    if isinstance(result, Loading):
        context["is_loading"] = True
        return context
    if isinstance(result, Failed):
        context["load_error"] = result.error
        return context
    if not isinstance(result, Loaded) or result.data is None:
        return context

    restaurant = result.data
    menu = restaurant.menus[0] if restaurant.menus else None
    context.update(
        {
            "restaurant_id": str(restaurant.id),
            "restaurant_name": restaurant.name,
            "restaurant": restaurant,
            "hours": restaurant.hours,
            "contacts": restaurant.contacts,
            "menu": menu,
            "sections": menu.sections if menu is not None else [],
        }
    )
    return context


def contacts_by_type(contacts: list[ContactRead]) -> dict[str, list[ContactRead]]:
    grouped: dict[str, list[ContactRead]] = {}
    for contact in contacts:
        grouped.setdefault(contact.type, []).append(contact)
    return grouped
