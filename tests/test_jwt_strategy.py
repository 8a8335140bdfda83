"""Signed-token strategy tests."""

from datetime import timedelta

import pytest
from jose import jwt
from sqlalchemy import func, select

from restaurant_cms.core.config import settings
from restaurant_cms.core.security import create_access_token, verify_token
from restaurant_cms.models import AdminUser, AuthSession
from restaurant_cms.services.auth_service import validate_auth_token


@pytest.fixture
def jwt_strategy(monkeypatch) -> None:
    monkeypatch.setattr(settings, "auth_strategy", "jwt")
    monkeypatch.setattr(settings, "jwt_secret_key", "test-signing-secret")


def test_round_trip_token_carries_identity(jwt_strategy) -> None:
    token = create_access_token(subject="7", email="a@example.com", role="ADMIN")

    payload = verify_token(token)

    assert payload is not None
    assert payload["sub"] == "7"
    assert payload["email"] == "a@example.com"
    assert payload["role"] == "ADMIN"


def test_expired_token_is_rejected(jwt_strategy) -> None:
    token = create_access_token(subject="7", email="a@example.com", role="ADMIN", expires_in=timedelta(seconds=-5))

    assert verify_token(token) is None


def test_token_signed_with_another_secret_is_rejected(jwt_strategy) -> None:
    forged = jwt.encode({"sub": "7", "email": "a@example.com", "role": "ADMIN"}, "attacker-secret", algorithm="HS256")

    assert verify_token(forged) is None


def test_tampered_token_is_rejected(jwt_strategy) -> None:
    token = create_access_token(subject="7", email="a@example.com", role="VIEWER")
    header, payload, signature = token.split(".")
    tampered = ".".join([header, payload[:-2] + ("AA" if not payload.endswith("AA") else "BB"), signature])

    assert verify_token(tampered) is None


def test_jwt_login_issues_no_server_session(client, login, db, jwt_strategy) -> None:
    """With the jwt strategy the cookie is self-contained and still gated on admin status."""
    login(email="jwt@example.com")

    assert client.get("/api/auth/me").status_code == 200
    assert db.scalar(select(func.count(AuthSession.id))) == 0

    admin = db.scalar(select(AdminUser).where(AdminUser.email == "jwt@example.com"))
    admin.status = "INACTIVE"
    db.commit()

    assert client.get("/api/auth/me").status_code == 401


def test_token_for_other_email_is_rejected(db, create_admin, jwt_strategy) -> None:
    admin_id = create_admin(email="real@example.com")
    token = create_access_token(subject=str(admin_id), email="someone-else@example.com", role="ADMIN")

    assert validate_auth_token(db, token) is None
