"""Location/contact request schemas."""

from typing import Literal

from pydantic import Field

from restaurant_cms.schemas.base import CamelModel


class ContactEntry(CamelModel):
    id: int | None = None
    type: Literal["phone", "address", "email", "social"] = "phone"
    label: str | None = None
    value: str = Field(min_length=1, max_length=500)


class ContactsUpdateRequest(CamelModel):
    contacts: list[ContactEntry]
