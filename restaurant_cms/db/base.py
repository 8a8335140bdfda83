"""Shared SQLAlchemy base declarative class and model imports."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for ORM models."""


# Import model modules so metadata is populated before create_all.
from restaurant_cms.models import admin_user as _admin_user  # noqa: E402,F401
from restaurant_cms.models import analytics as _analytics  # noqa: E402,F401
from restaurant_cms.models import audit_log as _audit_log  # noqa: E402,F401
from restaurant_cms.models import media as _media  # noqa: E402,F401
from restaurant_cms.models import menu as _menu  # noqa: E402,F401
from restaurant_cms.models import restaurant as _restaurant  # noqa: E402,F401
from restaurant_cms.models import wine as _wine  # noqa: E402,F401
