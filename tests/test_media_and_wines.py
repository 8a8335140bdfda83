"""Wine list and press article tests."""

from datetime import date
from decimal import Decimal

import pytest

from restaurant_cms.models import AnalyticsEvent, MediaArticle, Wine
from restaurant_cms.services.wine_service import map_inventory_status, map_wine_type


@pytest.fixture
def wines(db, restaurant) -> dict[str, int]:
    rows = {
        "sancerre": Wine(
            restaurant_id=restaurant,
            name="Sancerre",
            region="Loire Valley",
            country="France",
            grape_varieties=["Sauvignon Blanc"],
            type="WHITE",
            bottle_price=Decimal("64.00"),
            featured=True,
        ),
        "etna": Wine(
            restaurant_id=restaurant,
            name="Etna Rosso",
            region="Sicily",
            country="Italy",
            grape_varieties=["Nerello Mascalese"],
            type="RED",
            bottle_price=Decimal("58.00"),
        ),
        "cremant": Wine(
            restaurant_id=restaurant,
            name="Cremant",
            country="France",
            grape_varieties=["Chardonnay", "Pinot Noir"],
            type="SPARKLING",
            bottle_price=Decimal("40.00"),
            inventory_status="LOW_STOCK",
        ),
    }
    db.add_all(rows.values())
    db.commit()
    return {key: wine.id for key, wine in rows.items()}


def _names(response) -> list[str]:
    return [wine["name"] for wine in response.json()["data"]["wines"]]


@pytest.mark.parametrize(
    ("label", "expected"),
    [("Rosé", "ROSE"), ("red", "RED"), ("orange", "OTHER"), (None, "OTHER")],
)
def test_map_wine_type(label, expected) -> None:
    assert map_wine_type(label) == expected


def test_map_inventory_status() -> None:
    assert map_inventory_status("low stock") == "LOW_STOCK"
    assert map_inventory_status("OUT_OF_STOCK") == "OUT_OF_STOCK"
    assert map_inventory_status("unknown") == "IN_STOCK"


def test_wine_list_orders_featured_first(client, wines) -> None:
    response = client.get("/api/wines")

    assert response.status_code == 200
    body = response.json()["data"]
    assert body["total"] == 3
    assert _names(response)[0] == "Sancerre"


def test_wine_filters(client, wines) -> None:
    assert _names(client.get("/api/wines", params={"country": "france", "maxPrice": 50})) == ["Cremant"]
    assert _names(client.get("/api/wines", params={"grapeVariety": "Pinot Noir"})) == ["Cremant"]
    assert _names(client.get("/api/wines", params={"type": "red"})) == ["Etna Rosso"]
    assert _names(client.get("/api/wines", params={"inventoryStatus": "low stock"})) == ["Cremant"]
    assert _names(client.get("/api/wines", params={"search": "sicily"})) == ["Etna Rosso"]


def test_wine_pagination_reports_total(client, wines) -> None:
    response = client.get("/api/wines", params={"page": 2, "limit": 2})

    body = response.json()["data"]
    assert body["total"] == 3
    assert len(body["wines"]) == 1


def test_soft_deleted_wine_disappears(client, login, wines) -> None:
    login(role="EDITOR")

    response = client.delete(f"/api/admin/wines/{wines['etna']}")

    assert response.status_code == 200
    assert "Etna Rosso" not in _names(client.get("/api/wines"))
    assert client.get(f"/api/wines/{wines['etna']}").status_code == 404
    assert client.delete(f"/api/admin/wines/{wines['etna']}").status_code == 404


def test_create_and_update_wine(client, login, restaurant) -> None:
    login()

    created = client.post("/api/admin/wines", json={"name": "House Rosé", "type": "Rosé", "bottlePrice": 30})
    assert created.status_code == 201
    wine = created.json()["data"]
    assert wine["type"] == "ROSE"
    assert wine["inventoryStatus"] == "IN_STOCK"
    assert wine["grapeVarieties"] == []

    untyped = client.post("/api/admin/wines", json={"name": "Mystery"}).json()["data"]
    assert untyped["type"] == "RED"

    updated = client.put(f"/api/admin/wines/{wine['id']}", json={"inventoryStatus": "out of stock"})
    assert updated.json()["data"]["inventoryStatus"] == "OUT_OF_STOCK"
    assert updated.json()["data"]["bottlePrice"] == 30.0


def test_popular_wines_rank_by_recent_views(client, db, wines) -> None:
    for _ in range(3):
        db.add(AnalyticsEvent(event_type="VIEW", wine_id=wines["cremant"]))
    db.add(AnalyticsEvent(event_type="VIEW", wine_id=wines["etna"]))
    db.add(AnalyticsEvent(event_type="CLICK", wine_id=wines["sancerre"]))
    db.commit()

    response = client.get("/api/wines/popular")

    assert [wine["name"] for wine in response.json()["data"]] == ["Cremant", "Etna Rosso"]


def test_public_media_hides_drafts_and_admin_fields(client, db, restaurant) -> None:
    db.add_all(
        [
            MediaArticle(
                restaurant_id=restaurant,
                title="Second",
                description="b",
                publish_date=date(2024, 2, 1),
                sort_order=2,
            ),
            MediaArticle(
                restaurant_id=restaurant,
                title="First",
                description="a",
                publish_date=date(2024, 1, 1),
                sort_order=1,
            ),
            MediaArticle(
                restaurant_id=restaurant,
                title="Draft",
                description="c",
                publish_date=date(2024, 3, 1),
                is_published=False,
            ),
        ]
    )
    db.commit()

    response = client.get("/api/media")

    assert response.status_code == 200
    articles = response.json()["data"]
    assert [article["title"] for article in articles] == ["First", "Second"]
    assert "isPublished" not in articles[0]
    assert "sortOrder" not in articles[0]


def test_admin_media_crud(client, login, restaurant) -> None:
    login(role="EDITOR")

    created = client.post(
        "/api/admin/media",
        json={"title": "Review", "description": "Great", "publishDate": "2024-05-01", "isPublished": False},
    )
    assert created.status_code == 201
    article_id = created.json()["data"]["id"]
    assert client.get("/api/media").json()["data"] == []

    client.put(f"/api/admin/media/{article_id}", json={"isPublished": True})
    assert [a["title"] for a in client.get("/api/media").json()["data"]] == ["Review"]

    assert client.delete(f"/api/admin/media/{article_id}").status_code == 200
    assert client.get("/api/admin/media").json()["data"] == []


def test_admin_media_listing_failure_is_generic_500(client, login, restaurant, monkeypatch) -> None:
    login()

    def _broken(*_args, **_kwargs):
        raise RuntimeError("connection reset by peer")

    monkeypatch.setattr("restaurant_cms.services.media_service.get_articles", _broken)

    response = client.get("/api/admin/media")

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Internal server error"}
    assert "connection reset" not in response.text
