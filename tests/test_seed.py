"""Demo seed and development admin bootstrap tests."""

from fastapi.testclient import TestClient
from sqlalchemy import func, select

from restaurant_cms.core.config import settings
from restaurant_cms.core.security import verify_password
from restaurant_cms.db.seed import ensure_seed_data
from restaurant_cms.main import app
from restaurant_cms.models import AdminUser, MediaArticle, Menu, MenuItem, OperatingHours, Restaurant, Wine
from restaurant_cms.services.auth_service import ensure_dev_admin


def test_seed_is_idempotent(db) -> None:
    assert ensure_seed_data(db) is True
    assert ensure_seed_data(db) is False

    assert db.scalar(select(func.count(Restaurant.id))) == 1
    assert db.scalar(select(func.count(OperatingHours.id))) == 7
    assert db.scalar(select(func.count(Menu.id)).where(Menu.is_active.is_(True))) == 1
    assert db.scalar(select(func.count(Wine.id))) == 3
    assert db.scalar(select(func.count(MediaArticle.id)).where(MediaArticle.is_published.is_(True))) == 1
    assert db.scalar(select(func.count(MenuItem.id)).where(MenuItem.is_available.is_(False))) == 1


def test_seeded_tenant_serves_public_api(client, session_local) -> None:
    with session_local() as session:
        ensure_seed_data(session)

    body = client.get("/api/restaurant").json()

    assert body["slug"] == settings.restaurant_slug
    assert len(body["hours"]) == 7
    names = [item["name"] for section in body["menus"][0]["sections"] for item in section["items"]]
    assert "Seasonal Soup" not in names
    assert "Poke Bowl" in names


def test_startup_seeds_when_enabled(session_local, monkeypatch) -> None:
    monkeypatch.setattr(settings, "seed_demo_data", True)
    with TestClient(app):
        pass

    with session_local() as session:
        assert session.scalar(select(func.count(Restaurant.id))) == 1
        assert session.scalar(select(AdminUser).where(AdminUser.email == settings.admin_email)) is not None


def test_ensure_dev_admin_creates_and_reactivates(db) -> None:
    assert ensure_dev_admin(db) is False
    admin = db.scalar(select(AdminUser).where(AdminUser.email == settings.admin_email.lower()))
    assert admin.role == "ADMIN"
    assert verify_password(settings.admin_password, admin.password_hash)

    admin.status = "SUSPENDED"
    admin.role = "VIEWER"
    db.commit()

    assert ensure_dev_admin(db) is True
    db.refresh(admin)
    assert (admin.status, admin.role) == ("ACTIVE", "ADMIN")
