"""Wine list schemas."""

from pydantic import Field

from restaurant_cms.schemas.base import CamelModel


class WineRead(CamelModel):
    id: int
    name: str
    producer: str | None = None
    vintage: int | None = None
    region: str | None = None
    country: str | None = None
    grape_varieties: list[str] = []
    type: str
    glass_price: float | None = None
    bottle_price: float | None = None
    tasting_notes: str | None = None
    food_pairings: list[str] = []
    inventory_status: str
    featured: bool
    display_order: int


class WineCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    producer: str | None = None
    vintage: int | None = None
    region: str | None = None
    country: str | None = None
    grape_varieties: list[str] = []
    type: str | None = None
    glass_price: float | None = Field(default=None, ge=0)
    bottle_price: float | None = Field(default=None, ge=0)
    tasting_notes: str | None = None
    food_pairings: list[str] = []
    inventory_status: str | None = None
    featured: bool = False
    display_order: int = 0


class WineUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    producer: str | None = None
    vintage: int | None = None
    region: str | None = None
    country: str | None = None
    grape_varieties: list[str] | None = None
    type: str | None = None
    glass_price: float | None = Field(default=None, ge=0)
    bottle_price: float | None = Field(default=None, ge=0)
    tasting_notes: str | None = None
    food_pairings: list[str] | None = None
    inventory_status: str | None = None
    featured: bool | None = None
    display_order: int | None = None
