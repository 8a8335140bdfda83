"""Shared schema base with camelCase JSON keys."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serializes to camelCase and accepts camelCase or snake_case input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)
