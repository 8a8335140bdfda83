"""Admin sign-in, route protection and sign-out tests."""

from sqlalchemy import func, select

from restaurant_cms.core.config import settings
from restaurant_cms.models import AdminUser, AuthSession
from restaurant_cms.services.auth_service import IdentityProfile, complete_sign_in

from conftest import TEST_PASSWORD


def _cleared_cookies(response) -> list[str]:
    return [header for header in response.headers.get_list("set-cookie") if "Max-Age=0" in header]


def test_login_sets_auth_cookie_and_me_returns_identity(client, create_admin) -> None:
    """A valid password login stores the token cookie used by later requests."""
    create_admin(email="chef@example.com", role="EDITOR")

    response = client.post("/api/auth/login", json={"email": "Chef@Example.com", "password": TEST_PASSWORD})

    assert response.status_code == 200
    assert response.json()["data"]["email"] == "chef@example.com"
    assert any(header.startswith("auth-token=") for header in response.headers.get_list("set-cookie"))

    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json()["data"]["role"] == "EDITOR"


def test_login_with_wrong_password_is_rejected(client, create_admin) -> None:
    create_admin()

    response = client.post("/api/auth/login", json={"email": "admin@example.com", "password": "nope"})

    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Invalid email or password"}
    assert "auth-token" not in client.cookies


def test_complete_sign_in_rejects_missing_and_inactive_admins(db, create_admin) -> None:
    """Identities without an ACTIVE admin record never get a session."""
    create_admin(email="gone@example.com", status="INACTIVE")
    create_admin(email="paused@example.com", status="SUSPENDED")

    assert complete_sign_in(db, IdentityProfile(email="stranger@example.com")) is None
    assert complete_sign_in(db, IdentityProfile(email="gone@example.com")) is None
    assert complete_sign_in(db, IdentityProfile(email="paused@example.com")) is None
    assert db.scalar(select(func.count(AuthSession.id))) == 0


def test_allowlist_blocks_active_admin_outside_it(db, create_admin, monkeypatch) -> None:
    create_admin(email="owner@restaurant.test")
    create_admin(email="outsider@elsewhere.test")
    monkeypatch.setattr(settings, "admin_allowed_domains", ["restaurant.test"])

    assert complete_sign_in(db, IdentityProfile(email="outsider@elsewhere.test")) is None
    signed_in = complete_sign_in(db, IdentityProfile(email="owner@restaurant.test", name="Owner"))

    assert signed_in is not None
    admin, token = signed_in
    assert admin.email == "owner@restaurant.test"
    assert token


def test_nested_admin_path_redirects_to_signin(client) -> None:
    """Anonymous visitors to any /admin page are sent to sign-in with a callback."""
    response = client.get("/admin/menu", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/auth/signin?callbackUrl=/admin/menu"


def test_similar_prefix_is_not_protected(client) -> None:
    response = client.get("/administrator", follow_redirects=False)

    assert response.status_code == 404


def test_admin_api_requires_session(client, restaurant) -> None:
    response = client.get("/api/admin/menu/sections")

    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Unauthorized"}


def test_logout_clears_cookie_and_revokes_session(client, login, db) -> None:
    login()
    assert db.scalar(select(func.count(AuthSession.id))) == 1

    response = client.post("/api/auth/logout")

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert any(header.startswith("auth-token=") for header in _cleared_cookies(response))
    assert db.scalar(select(func.count(AuthSession.id))) == 0
    assert client.get("/api/auth/me").status_code == 401


def test_logout_reports_success_when_revocation_fails(client, login, monkeypatch) -> None:
    """Sign-out cleanup failures are swallowed; the cookie is still cleared."""
    login()

    def _broken_revoke(*_args, **_kwargs):
        raise RuntimeError("session store unavailable")

    monkeypatch.setattr("restaurant_cms.api.endpoints.auth.revoke_auth_token", _broken_revoke)

    response = client.post("/api/auth/logout")

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert any(header.startswith("auth-token=") for header in _cleared_cookies(response))


def test_logout_without_session_still_succeeds(client) -> None:
    response = client.post("/api/auth/logout")

    assert response.status_code == 200
    assert response.json() == {"success": True}


def test_suspended_admin_loses_access_immediately(client, login, db) -> None:
    """Status is rechecked on every request, not only at sign-in."""
    login(email="temp@example.com", role="EDITOR")
    assert client.get("/api/auth/me").status_code == 200

    admin = db.scalar(select(AdminUser).where(AdminUser.email == "temp@example.com"))
    admin.status = "SUSPENDED"
    db.commit()

    assert client.get("/api/auth/me").status_code == 401
    assert client.get("/admin", follow_redirects=False).status_code == 303


def test_expired_session_is_rejected_and_removed(client, login, db) -> None:
    login()
    session = db.scalar(select(AuthSession))
    session.expires_at = session.expires_at.replace(year=2000)
    db.commit()

    assert client.get("/api/auth/me").status_code == 401
    db.expire_all()
    assert db.scalar(select(func.count(AuthSession.id))) == 0


def test_dev_login_outside_production_sets_banner_cookie(client) -> None:
    response = client.post("/api/auth/dev-login")

    assert response.status_code == 200
    assert response.json()["data"]["email"] == settings.admin_email
    assert client.cookies.get("dev-bypass-active") == "true"
    assert client.get("/api/auth/me").status_code == 200


def test_dev_login_is_hidden_in_production(client, monkeypatch) -> None:
    monkeypatch.setattr(settings, "app_env", "production")

    response = client.post("/api/auth/dev-login")

    assert response.status_code == 404
    assert "auth-token" not in client.cookies
