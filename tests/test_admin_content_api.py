"""Admin JSON API tests for hours, contacts, menu editing and the audit trail."""

from sqlalchemy import select

from restaurant_cms.models import AuditLog, Contact, Menu, MenuSection


def _week(open_time: str = "11:00", close_time: str = "22:00") -> list[dict]:
    return [
        {"dayOfWeek": day, "openTime": open_time, "closeTime": close_time, "isClosed": day == 1}
        for day in range(7)
    ]


def test_hours_upsert_keeps_one_row_per_day(client, login, restaurant) -> None:
    login(role="EDITOR")

    first = client.put("/api/admin/hours", json={"hours": _week()})
    second = client.put("/api/admin/hours", json={"hours": [{"dayOfWeek": 3, "openTime": "09:30", "closeTime": "14:00"}]})

    assert first.status_code == 200
    assert second.status_code == 200
    rows = second.json()["data"]
    assert [row["dayOfWeek"] for row in rows] == list(range(7))
    wednesday = rows[3]
    assert (wednesday["openTime"], wednesday["closeTime"], wednesday["isClosed"]) == ("09:30", "14:00", False)
    assert rows[1]["isClosed"] is True
    assert rows[1]["openTime"] == "11:00"


def test_hours_reject_invalid_times_and_days(client, login, restaurant) -> None:
    login()

    bad_time = client.put("/api/admin/hours", json={"hours": [{"dayOfWeek": 0, "openTime": "25:00", "closeTime": "12:00"}]})
    bad_day = client.put("/api/admin/hours", json={"hours": [{"dayOfWeek": 7, "openTime": "10:00", "closeTime": "12:00"}]})

    assert bad_time.status_code == 422
    assert bad_day.status_code == 422
    assert client.get("/api/admin/hours").json()["data"] == []


def test_contacts_update_and_append_after_last(client, login, restaurant, db) -> None:
    login()
    existing = Contact(restaurant_id=restaurant, type="phone", label="Main", value="555-0100", sort_order=4)
    db.add(existing)
    db.commit()

    response = client.put(
        "/api/admin/contacts",
        json={
            "contacts": [
                {"id": existing.id, "type": "phone", "label": "Reservations", "value": "555-0199"},
                {"type": "email", "label": "General", "value": "hello@example.com"},
            ]
        },
    )

    assert response.status_code == 200
    contacts = response.json()["data"]
    assert [(c["label"], c["value"], c["sortOrder"]) for c in contacts] == [
        ("Reservations", "555-0199", 4),
        ("General", "hello@example.com", 5),
    ]


def test_contacts_unknown_id_is_not_found(client, login, restaurant) -> None:
    login()

    response = client.put("/api/admin/contacts", json={"contacts": [{"id": 404, "value": "x"}]})

    assert response.status_code == 404
    assert response.json()["success"] is False


def test_viewer_can_read_but_not_write(client, login, restaurant) -> None:
    """VIEWER admins get read access to admin data but 403 on every write."""
    login(role="VIEWER")

    assert client.get("/api/admin/hours").status_code == 200
    assert client.get("/api/admin/menu/sections").status_code == 200
    response = client.put("/api/admin/hours", json={"hours": _week()})
    assert response.status_code == 403
    assert response.json() == {"success": False, "error": "Forbidden"}
    assert client.post("/api/admin/menus", json={"name": "Brunch"}).status_code == 403


def test_admin_api_without_tenant_is_not_found(client, login) -> None:
    login()

    response = client.get("/api/admin/hours")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Restaurant not found"}


def test_menu_item_lifecycle_writes_audit_rows(client, login, restaurant, db) -> None:
    login(email="editor@example.com", role="EDITOR")
    menu = Menu(restaurant_id=restaurant, name="Dinner", is_active=True)
    db.add(menu)
    db.flush()
    section = MenuSection(menu_id=menu.id, name="Mains")
    db.add(section)
    db.commit()

    created = client.post("/api/admin/menu/items", json={"sectionId": section.id, "name": "Loco Moco", "price": 24})
    assert created.status_code == 201
    item = created.json()["data"]
    assert item["sortOrder"] == 999

    updated = client.put(f"/api/admin/menu/{item['id']}", json={"isAvailable": False})
    assert updated.status_code == 200
    assert updated.json()["data"]["isAvailable"] is False
    assert updated.json()["data"]["name"] == "Loco Moco"

    public = client.get("/api/restaurant").json()
    assert public["menus"][0]["sections"][0]["items"] == []

    rows = db.scalars(select(AuditLog).order_by(AuditLog.id)).all()
    assert [(row.action_type, row.entity_type) for row in rows] == [("CREATE", "MenuItem"), ("UPDATE", "MenuItem")]
    assert rows[1].actor_identifier == "editor@example.com"
    assert rows[1].before_snapshot["is_available"] is True
    assert rows[1].after_snapshot["is_available"] is False

    trail = client.get("/api/admin/audit?limit=1").json()["data"]
    assert len(trail) == 1
    assert trail[0]["actionType"] == "UPDATE"


def test_create_item_in_unknown_section_is_not_found(client, login, restaurant) -> None:
    login()

    response = client.post("/api/admin/menu/items", json={"sectionId": 999, "name": "Ghost"})

    assert response.status_code == 404


def test_audit_failure_does_not_undo_write(client, login, restaurant, monkeypatch) -> None:
    login()

    def _broken_log(*_args, **_kwargs):
        raise RuntimeError("audit table locked")

    monkeypatch.setattr("restaurant_cms.api.deps.log_action", _broken_log)

    response = client.put("/api/admin/hours", json={"hours": _week()})

    assert response.status_code == 200
    assert len(client.get("/api/admin/hours").json()["data"]) == 7


def test_menus_create_and_activate(client, login, restaurant) -> None:
    login()

    lunch = client.post("/api/admin/menus", json={"name": "Lunch", "isActive": True}).json()["data"]
    dinner = client.post("/api/admin/menus", json={"name": "Dinner"}).json()["data"]
    activated = client.post(f"/api/admin/menus/{dinner['id']}/activate")

    assert activated.status_code == 200
    menus = {menu["name"]: menu["isActive"] for menu in client.get("/api/admin/menus").json()["data"]}
    assert menus == {"Lunch": False, "Dinner": True}
    assert lunch["isActive"] is True
    assert client.post("/api/admin/menus/9999/activate").status_code == 404


def _raise_secret(*_args, **_kwargs):
    raise RuntimeError("db password is hunter2")


def test_menu_sections_failure_is_generic_500(client, login, restaurant, monkeypatch) -> None:
    login()
    monkeypatch.setattr("restaurant_cms.services.menu_service.get_menu_sections", _raise_secret)

    response = client.get("/api/admin/menu/sections")

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Internal server error"}
    assert "hunter2" not in response.text


def test_menus_listing_failure_is_generic_500(client, login, restaurant, monkeypatch) -> None:
    login(role="VIEWER")
    monkeypatch.setattr("restaurant_cms.services.menu_service.list_menus", _raise_secret)

    response = client.get("/api/admin/menus")

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Internal server error"}
    assert "hunter2" not in response.text
