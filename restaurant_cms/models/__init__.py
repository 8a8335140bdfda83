"""Application models package."""

from restaurant_cms.models.admin_user import AdminUser, AuthSession
from restaurant_cms.models.analytics import AnalyticsEvent
from restaurant_cms.models.audit_log import AuditLog
from restaurant_cms.models.media import MediaArticle
from restaurant_cms.models.menu import Menu, MenuItem, MenuSection
from restaurant_cms.models.restaurant import Contact, OperatingHours, Restaurant
from restaurant_cms.models.wine import Wine

__all__ = [
    "AdminUser", "AuthSession", "AnalyticsEvent", "AuditLog", "MediaArticle", "Menu", "MenuItem", "MenuSection",
    "Contact", "OperatingHours", "Restaurant", "Wine",
]
