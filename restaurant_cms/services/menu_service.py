"""Menu service helpers shared by API and HTML routes."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from restaurant_cms.models.menu import Menu, MenuItem, MenuSection
from restaurant_cms.schemas.menu import MenuItemSave, MenuSectionSave
from restaurant_cms.schemas.restaurant import MenuItemRead, MenuSectionRead

DEFAULT_ITEM_SORT_ORDER: int = 999


def _to_price(value: float | Decimal | None) -> Decimal | None:
    if value is None:
        return None
    return Decimal(str(value)).quantize(Decimal("0.01"))


def list_menus(db: Session, restaurant_id: int) -> list[Menu]:
    """Return every menu for one restaurant, active and inactive."""
    return list(db.scalars(select(Menu).where(Menu.restaurant_id == restaurant_id).order_by(Menu.id.asc())).all())


def get_menu_sections(db: Session, restaurant_id: int) -> list[MenuSectionRead]:
    """Return all sections with all items, available or not, for admin editing."""
    sections = db.scalars(
        select(MenuSection)
        .join(Menu, MenuSection.menu_id == Menu.id)
        .where(Menu.restaurant_id == restaurant_id)
        .order_by(Menu.id.asc(), MenuSection.sort_order.asc(), MenuSection.id.asc())
    ).all()
    section_ids = [section.id for section in sections]
    items_by_section: dict[int, list[MenuItemRead]] = {section_id: [] for section_id in section_ids}
    if section_ids:
        for item in db.scalars(
            select(MenuItem)
            .where(MenuItem.section_id.in_(section_ids))
            .order_by(MenuItem.sort_order.asc(), MenuItem.id.asc())
        ).all():
            items_by_section[item.section_id].append(MenuItemRead.model_validate(item))

    return [
        MenuSectionRead(
            id=section.id,
            menu_id=section.menu_id,
            name=section.name,
            description=section.description,
            sort_order=section.sort_order,
            items=items_by_section[section.id],
        )
        for section in sections
    ]


def get_section_for_restaurant(db: Session, section_id: int, restaurant_id: int) -> MenuSection | None:
    return db.scalar(
        select(MenuSection)
        .join(Menu, MenuSection.menu_id == Menu.id)
        .where(MenuSection.id == section_id, Menu.restaurant_id == restaurant_id)
        .limit(1)
    )


def get_menu_item(db: Session, item_id: int, restaurant_id: int) -> MenuItem | None:
    """Return one item if it belongs to the restaurant."""
    return db.scalar(
        select(MenuItem)
        .join(MenuSection, MenuItem.section_id == MenuSection.id)
        .join(Menu, MenuSection.menu_id == Menu.id)
        .where(MenuItem.id == item_id, Menu.restaurant_id == restaurant_id)
        .limit(1)
    )


def create_menu_item(
    db: Session,
    *,
    section_id: int,
    name: str,
    description: str | None = None,
    price: float | Decimal | None = None,
    is_available: bool = True,
    sort_order: int | None = None,
    commit: bool = True,
) -> MenuItem:
    """Create and persist a menu item."""
    item = MenuItem(
        section_id=section_id,
        name=name,
        description=description,
        price=_to_price(price),
        is_available=is_available,
        sort_order=DEFAULT_ITEM_SORT_ORDER if sort_order is None else sort_order,
    )
    db.add(item)
    if commit:
        db.commit()
        db.refresh(item)
    return item


def update_menu_item(db: Session, item_id: int, restaurant_id: int, changes: dict[str, Any]) -> MenuItem | None:
    """Apply a partial update; keys absent from ``changes`` are left untouched.

    Returns None when the item does not exist for the restaurant.
    """
    item = get_menu_item(db, item_id, restaurant_id)
    if item is None:
        return None
    if changes.get("section_id") is not None and get_section_for_restaurant(db, changes["section_id"], restaurant_id) is None:
        raise LookupError(f"Menu section {changes['section_id']} not found")
    return _apply_item_changes(db, item, changes)


def _apply_item_changes(db: Session, item: MenuItem, changes: dict[str, Any], *, commit: bool = True) -> MenuItem:
    for field in ("name", "description", "is_available", "sort_order", "section_id"):
        if field in changes and (changes[field] is not None or field == "description"):
            setattr(item, field, changes[field])
    if "price" in changes:
        item.price = _to_price(changes["price"])
    db.add(item)
    if commit:
        db.commit()
        db.refresh(item)
    return item


def save_menu(db: Session, restaurant_id: int, sections: list[MenuSectionSave]) -> int:
    """Persist the bulk menu editor payload in one transaction.

    Items without an id are created in their section; items with an id are
    updated. Returns the number of items written.

    Raises:
        LookupError: when a section or item does not belong to the restaurant.
    """
    written: int = 0
    for section_payload in sections:
        section = get_section_for_restaurant(db, section_payload.id, restaurant_id)
        if section is None:
            db.rollback()
            raise LookupError(f"Menu section {section_payload.id} not found")
        for item_payload in section_payload.items:
            _save_item(db, restaurant_id, section.id, item_payload)
            written += 1
    db.commit()
    return written


def _save_item(db: Session, restaurant_id: int, section_id: int, payload: MenuItemSave) -> MenuItem:
    if payload.id is None:
        return create_menu_item(
            db,
            section_id=section_id,
            name=payload.name,
            description=payload.description,
            price=payload.price,
            is_available=payload.is_available,
            sort_order=payload.sort_order,
            commit=False,
        )
    item = get_menu_item(db, payload.id, restaurant_id)
    if item is None:
        db.rollback()
        raise LookupError(f"Menu item {payload.id} not found")
    return _apply_item_changes(db, item, payload.model_dump(exclude={"id"}, exclude_unset=True), commit=False)


def create_menu(
    db: Session,
    *,
    restaurant_id: int,
    name: str,
    description: str | None = None,
    is_active: bool = False,
) -> Menu:
    """Create a menu; an active menu replaces the previously active one."""
    if is_active:
        _deactivate_menus(db, restaurant_id)
    menu = Menu(restaurant_id=restaurant_id, name=name, description=description, is_active=is_active)
    db.add(menu)
    db.commit()
    db.refresh(menu)
    return menu


def activate_menu(db: Session, restaurant_id: int, menu_id: int) -> Menu | None:
    """Make ``menu_id`` the single active menu of the restaurant."""
    menu = db.scalar(select(Menu).where(Menu.id == menu_id, Menu.restaurant_id == restaurant_id).limit(1))
    if menu is None:
        return None
    _deactivate_menus(db, restaurant_id)
    menu.is_active = True
    db.commit()
    db.refresh(menu)
    return menu


def _deactivate_menus(db: Session, restaurant_id: int) -> None:
    db.execute(
        update(Menu)
        .where(Menu.restaurant_id == restaurant_id, Menu.is_active.is_(True))
        .values(is_active=False)
        .execution_options(synchronize_session="fetch")
    )


def create_menu_section(
    db: Session,
    *,
    menu_id: int,
    name: str,
    description: str | None = None,
    sort_order: int = 0,
) -> MenuSection:
    section = MenuSection(menu_id=menu_id, name=name, description=description, sort_order=sort_order)
    db.add(section)
    db.commit()
    db.refresh(section)
    return section


def snapshot_item(item: MenuItem) -> dict[str, Any]:
    """Return a JSON-safe snapshot for audit logging."""
    return MenuItemRead.model_validate(item).model_dump(mode="json")
