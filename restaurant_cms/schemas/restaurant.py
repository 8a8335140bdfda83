"""Public restaurant aggregate schemas."""

from restaurant_cms.schemas.base import CamelModel


class HoursRead(CamelModel):
    id: int
    day_of_week: int
    open_time: str
    close_time: str
    is_closed: bool


class ContactRead(CamelModel):
    id: int
    type: str
    label: str | None = None
    value: str
    sort_order: int


class MenuItemRead(CamelModel):
    id: int
    section_id: int
    name: str
    description: str | None = None
    price: float | None = None
    is_available: bool
    sort_order: int


class MenuSectionRead(CamelModel):
    id: int
    menu_id: int
    name: str
    description: str | None = None
    sort_order: int
    items: list[MenuItemRead] = []


class MenuRead(CamelModel):
    id: int
    name: str
    description: str | None = None
    is_active: bool
    sections: list[MenuSectionRead] = []


class RestaurantData(CamelModel):
    """Fully hydrated tenant aggregate consumed by public pages and the API."""

    id: int
    slug: str
    name: str
    description: str | None = None
    tagline: str | None = None
    hours: list[HoursRead] = []
    contacts: list[ContactRead] = []
    menus: list[MenuRead] = []
