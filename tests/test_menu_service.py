"""Menu service behavior tests."""

import pytest
from sqlalchemy import func, select

from restaurant_cms.models import Menu, MenuItem, MenuSection, Restaurant
from restaurant_cms.schemas.menu import MenuItemSave, MenuSectionSave
from restaurant_cms.services import menu_service


def _menu_with_section(db, restaurant_id: int, *, is_active: bool = True) -> tuple[Menu, MenuSection]:
    menu = Menu(restaurant_id=restaurant_id, name="Menu", is_active=is_active)
    db.add(menu)
    db.flush()
    section = MenuSection(menu_id=menu.id, name="Section", sort_order=0)
    db.add(section)
    db.commit()
    return menu, section


def _active_count(db, restaurant_id: int) -> int:
    return db.scalar(
        select(func.count(Menu.id)).where(Menu.restaurant_id == restaurant_id, Menu.is_active.is_(True))
    )


def test_activate_menu_leaves_exactly_one_active(db, restaurant) -> None:
    """Activating a menu should deactivate every other menu of the tenant."""
    first = menu_service.create_menu(db, restaurant_id=restaurant, name="Lunch", is_active=True)
    second = menu_service.create_menu(db, restaurant_id=restaurant, name="Dinner")
    db.add(Menu(restaurant_id=restaurant, name="Legacy", is_active=True))
    db.commit()

    activated = menu_service.activate_menu(db, restaurant, second.id)

    assert activated is not None
    assert _active_count(db, restaurant) == 1
    db.refresh(first)
    assert first.is_active is False
    assert activated.is_active is True


def test_create_active_menu_replaces_previous(db, restaurant) -> None:
    """Creating an active menu should deactivate the previously active one."""
    menu_service.create_menu(db, restaurant_id=restaurant, name="Lunch", is_active=True)
    menu_service.create_menu(db, restaurant_id=restaurant, name="Dinner", is_active=True)

    assert _active_count(db, restaurant) == 1
    active = db.scalar(select(Menu).where(Menu.is_active.is_(True)))
    assert active.name == "Dinner"


def test_activate_menu_of_other_tenant_returns_none(db, restaurant) -> None:
    other = Restaurant(slug="other", name="Other")
    db.add(other)
    db.commit()
    foreign = menu_service.create_menu(db, restaurant_id=other.id, name="Foreign")

    assert menu_service.activate_menu(db, restaurant, foreign.id) is None


def test_create_menu_item_defaults(db, restaurant) -> None:
    """Items without sort_order go last (999) and are available by default."""
    _, section = _menu_with_section(db, restaurant)

    item = menu_service.create_menu_item(db, section_id=section.id, name="Soup", price=7.5)

    assert item.sort_order == 999
    assert item.is_available is True
    assert str(item.price) == "7.50"


def test_admin_sections_include_unavailable_items(db, restaurant) -> None:
    _, section = _menu_with_section(db, restaurant, is_active=False)
    db.add_all(
        [
            MenuItem(section_id=section.id, name="Hidden", is_available=False, sort_order=1),
            MenuItem(section_id=section.id, name="Shown", is_available=True, sort_order=0),
        ]
    )
    db.commit()

    sections = menu_service.get_menu_sections(db, restaurant)

    assert [item.name for item in sections[0].items] == ["Shown", "Hidden"]


def test_update_menu_item_partial_and_unknown(db, restaurant) -> None:
    """Partial updates keep untouched fields; unknown ids return None."""
    _, section = _menu_with_section(db, restaurant)
    item = menu_service.create_menu_item(db, section_id=section.id, name="Soup", description="Hot", price=7)

    updated = menu_service.update_menu_item(db, item.id, restaurant, {"price": 8.25})

    assert updated is not None
    assert updated.name == "Soup"
    assert updated.description == "Hot"
    assert str(updated.price) == "8.25"
    assert menu_service.update_menu_item(db, 9999, restaurant, {"name": "x"}) is None


def test_save_menu_creates_and_updates(db, restaurant) -> None:
    _, section = _menu_with_section(db, restaurant)
    existing = menu_service.create_menu_item(db, section_id=section.id, name="Old name", sort_order=1)

    written = menu_service.save_menu(
        db,
        restaurant,
        [
            MenuSectionSave(
                id=section.id,
                items=[
                    MenuItemSave(id=existing.id, name="New name"),
                    MenuItemSave(name="Brand new", price=4, sort_order=2),
                ],
            )
        ],
    )

    assert written == 2
    names = [item.name for item in menu_service.get_menu_sections(db, restaurant)[0].items]
    assert names == ["New name", "Brand new"]


def test_save_menu_rejects_foreign_section(db, restaurant) -> None:
    other = Restaurant(slug="other", name="Other")
    db.add(other)
    db.commit()
    _, foreign_section = _menu_with_section(db, other.id)

    with pytest.raises(LookupError):
        menu_service.save_menu(db, restaurant, [MenuSectionSave(id=foreign_section.id, items=[MenuItemSave(name="x")])])

    assert db.scalar(select(func.count(MenuItem.id))) == 0
