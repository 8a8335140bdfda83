"""Admin account management tests."""

from sqlalchemy import func, select

from restaurant_cms.models import AdminUser, AuthSession, AuditLog


def test_admin_can_invite_and_list(client, login) -> None:
    login()

    response = client.post("/api/admin/users", json={"email": " New.Editor@Example.com ", "role": "editor"})

    assert response.status_code == 201
    created = response.json()["data"]
    assert created["email"] == "new.editor@example.com"
    assert created["role"] == "EDITOR"
    assert created["status"] == "ACTIVE"
    emails = [user["email"] for user in client.get("/api/admin/users").json()["data"]]
    assert emails == ["admin@example.com", "new.editor@example.com"]


def test_invite_rejects_duplicates_and_bad_roles(client, login) -> None:
    login()

    duplicate = client.post("/api/admin/users", json={"email": "admin@example.com", "role": "EDITOR"})
    bad_role = client.post("/api/admin/users", json={"email": "x@example.com", "role": "OWNER"})
    bad_email = client.post("/api/admin/users", json={"email": "not-an-email", "role": "EDITOR"})

    assert duplicate.status_code == 400
    assert bad_role.status_code == 400
    assert bad_email.status_code == 400


def test_editor_cannot_manage_users(client, login) -> None:
    login(role="EDITOR")

    assert client.get("/api/admin/users").status_code == 403
    assert client.post("/api/admin/users", json={"email": "x@example.com"}).status_code == 403


def test_suspending_admin_revokes_their_sessions(client, login, create_admin, db) -> None:
    """A suspended admin is signed out everywhere at once."""
    other_id = create_admin(email="other@example.com", role="EDITOR")
    other_login = client.post("/api/auth/login", json={"email": "other@example.com", "password": "secret-pass"})
    assert other_login.status_code == 200
    client.cookies.clear()
    login()

    response = client.put(f"/api/admin/users/{other_id}/status", json={"status": "suspended"})

    assert response.status_code == 200
    assert response.json()["data"]["status"] == "SUSPENDED"
    remaining = db.scalar(select(func.count(AuthSession.id)).where(AuthSession.admin_user_id == other_id))
    assert remaining == 0
    audit = db.scalar(select(AuditLog).where(AuditLog.entity_type == "AdminUser"))
    assert audit.before_snapshot == {"status": "ACTIVE"}
    assert audit.after_snapshot == {"status": "SUSPENDED"}


def test_admin_cannot_deactivate_self(client, login, db) -> None:
    login()
    admin = db.scalar(select(AdminUser).where(AdminUser.email == "admin@example.com"))

    response = client.put(f"/api/admin/users/{admin.id}/status", json={"status": "INACTIVE"})

    assert response.status_code == 400
    assert client.get("/api/auth/me").status_code == 200


def test_unknown_status_and_user(client, login, create_admin) -> None:
    login()
    other_id = create_admin(email="other@example.com")

    assert client.put(f"/api/admin/users/{other_id}/status", json={"status": "BANNED"}).status_code == 400
    assert client.put("/api/admin/users/9999/status", json={"status": "ACTIVE"}).status_code == 404
