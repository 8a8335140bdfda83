"""Shared fixtures: a throwaway SQLite database per test and an app client bound to it."""

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from restaurant_cms import main as main_module
from restaurant_cms.core.config import settings
from restaurant_cms.core.security import get_password_hash
from restaurant_cms.db import session as db_session
from restaurant_cms.db.base import Base
from restaurant_cms.main import app
from restaurant_cms.models import AdminUser, Restaurant

TEST_SLUG = "testaurant"
TEST_PASSWORD = "secret-pass"


@pytest.fixture
def session_local(tmp_path: Path, monkeypatch) -> sessionmaker:
    url = f"sqlite:///{tmp_path / 'cms.db'}"
    engine = create_engine(url, **db_session.engine_options(url))
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)
    monkeypatch.setattr(main_module, "engine", engine)
    monkeypatch.setattr(main_module, "SessionLocal", testing_session_local)
    monkeypatch.setattr(settings, "seed_demo_data", False)
    monkeypatch.setattr(settings, "restaurant_slug", TEST_SLUG)
    monkeypatch.setattr(settings, "auth_strategy", "session")
    monkeypatch.setattr(settings, "app_env", "dev")
    monkeypatch.setattr(settings, "admin_allowed_emails", [])
    monkeypatch.setattr(settings, "admin_allowed_domains", [])
    return testing_session_local


@pytest.fixture
def db(session_local: sessionmaker) -> Iterator[Session]:
    with session_local() as session:
        yield session


@pytest.fixture
def client(session_local: sessionmaker) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def restaurant(session_local: sessionmaker) -> int:
    with session_local() as session:
        row = Restaurant(slug=TEST_SLUG, name="Testaurant", description="Test kitchen", tagline="Tested daily")
        session.add(row)
        session.commit()
        return row.id


@pytest.fixture
def create_admin(session_local: sessionmaker) -> Callable[..., int]:
    def _create(email: str = "admin@example.com", role: str = "ADMIN", status: str = "ACTIVE") -> int:
        with session_local() as session:
            admin = AdminUser(
                email=email,
                name=email.split("@")[0],
                role=role,
                status=status,
                password_hash=get_password_hash(TEST_PASSWORD),
            )
            session.add(admin)
            session.commit()
            return admin.id

    return _create


@pytest.fixture
def login(client: TestClient, create_admin: Callable[..., int]) -> Callable[..., TestClient]:
    """Create an admin with ``role`` and sign the shared client in as them."""

    def _login(email: str = "admin@example.com", role: str = "ADMIN") -> TestClient:
        create_admin(email=email, role=role)
        response = client.post("/api/auth/login", json={"email": email, "password": TEST_PASSWORD})
        assert response.status_code == 200, response.text
        return client

    return _login
