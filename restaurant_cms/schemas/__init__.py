"""Schema exports."""

from restaurant_cms.schemas.analytics import AnalyticsSummary, PageViewRequest, WineAnalyticsRequest
from restaurant_cms.schemas.auth import AdminUserResponse, LoginRequest
from restaurant_cms.schemas.contact import ContactEntry, ContactsUpdateRequest
from restaurant_cms.schemas.hours import HoursEntry, HoursUpdateRequest
from restaurant_cms.schemas.menu import MenuItemCreate, MenuItemUpdate, MenuSaveRequest
from restaurant_cms.schemas.restaurant import RestaurantData

__all__ = [
    "AnalyticsSummary",
    "PageViewRequest",
    "WineAnalyticsRequest",
    "AdminUserResponse",
    "LoginRequest",
    "ContactEntry",
    "ContactsUpdateRequest",
    "HoursEntry",
    "HoursUpdateRequest",
    "MenuItemCreate",
    "MenuItemUpdate",
    "MenuSaveRequest",
    "RestaurantData",
]
