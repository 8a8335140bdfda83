"""API router composition."""

from fastapi import APIRouter

from restaurant_cms.api.endpoints import (
    admin_contacts,
    admin_hours,
    admin_menu,
    admin_users,
    analytics,
    audit,
    auth,
    media,
    restaurant,
    wines,
)

api_router: APIRouter = APIRouter()
api_router.include_router(restaurant.router, tags=["restaurant"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(analytics.router, tags=["analytics"])
api_router.include_router(wines.public_router, tags=["wines"])
api_router.include_router(media.public_router, tags=["media"])
api_router.include_router(admin_menu.router, prefix="/admin", tags=["admin"])
api_router.include_router(admin_hours.router, prefix="/admin", tags=["admin"])
api_router.include_router(admin_contacts.router, prefix="/admin", tags=["admin"])
api_router.include_router(wines.admin_router, prefix="/admin", tags=["admin"])
api_router.include_router(media.admin_router, prefix="/admin", tags=["admin"])
api_router.include_router(admin_users.router, prefix="/admin", tags=["admin"])
api_router.include_router(audit.router, prefix="/admin", tags=["admin"])
