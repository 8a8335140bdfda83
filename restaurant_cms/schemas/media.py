"""Media article schemas."""

from datetime import date, datetime

from pydantic import Field

from restaurant_cms.schemas.base import CamelModel


class MediaArticlePublic(CamelModel):
    """Public shape; publish flags and ordering stay admin-only."""

    id: int
    title: str
    description: str
    cover_image: str | None = None
    publish_date: date
    source: str | None = None
    author: str | None = None
    link: str | None = None
    is_premium: bool


class MediaArticleAdmin(MediaArticlePublic):
    is_published: bool
    sort_order: int
    created_at: datetime
    updated_at: datetime


class MediaArticleCreate(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = ""
    cover_image: str | None = None
    publish_date: date
    source: str | None = None
    author: str | None = None
    link: str | None = None
    is_premium: bool = False
    is_published: bool = True
    sort_order: int = 0


class MediaArticleUpdate(CamelModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    cover_image: str | None = None
    publish_date: date | None = None
    source: str | None = None
    author: str | None = None
    link: str | None = None
    is_premium: bool | None = None
    is_published: bool | None = None
    sort_order: int | None = None
