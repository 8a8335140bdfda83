"""Menu editing request schemas."""

from pydantic import Field

from restaurant_cms.schemas.base import CamelModel


class MenuItemCreate(CamelModel):
    """Payload for creating a menu item in a section."""

    section_id: int
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    is_available: bool = True
    sort_order: int | None = None


class MenuItemUpdate(CamelModel):
    """Partial update; omitted fields keep their stored value."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    section_id: int | None = None
    is_available: bool | None = None
    sort_order: int | None = None


class MenuItemSave(CamelModel):
    """Item row from the bulk menu editor; no id means create."""

    id: int | None = None
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    is_available: bool = True
    sort_order: int | None = None


class MenuSectionSave(CamelModel):
    id: int
    items: list[MenuItemSave] = []


class MenuSaveRequest(CamelModel):
    """Bulk editor payload for the sections of one menu."""

    sections: list[MenuSectionSave]


class MenuCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    is_active: bool = False


class MenuSummary(CamelModel):
    id: int
    name: str
    description: str | None = None
    is_active: bool
