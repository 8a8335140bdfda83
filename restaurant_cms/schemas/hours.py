"""Operating hours request schemas."""

from pydantic import Field, field_validator

from restaurant_cms.schemas.base import CamelModel
from restaurant_cms.utils.time import parse_hhmm


class HoursEntry(CamelModel):
    day_of_week: int = Field(ge=0, le=6)
    open_time: str = "09:00"
    close_time: str = "17:00"
    is_closed: bool = False

    @field_validator("open_time", "close_time")
    @classmethod
    def _validate_time(cls, value: str) -> str:
        return parse_hhmm(value)


class HoursUpdateRequest(CamelModel):
    hours: list[HoursEntry]
