"""Load results, page-context fallbacks and best-effort execution."""

from unittest.mock import MagicMock

from restaurant_cms.schemas.restaurant import ContactRead, RestaurantData
from restaurant_cms.services.best_effort import best_effort
from restaurant_cms.services.restaurant_service import build_page_context, contacts_by_type
from restaurant_cms.services.result import Failed, Loaded, Loading, load


def test_load_wraps_success_and_failure() -> None:
    assert load(lambda: 42) == Loaded(42)

    def _fail() -> int:
        raise RuntimeError("connection refused")

    failed = load(_fail, label="hours")
    assert isinstance(failed, Failed)
    assert failed.error == "Could not load hours"
    assert "connection refused" not in failed.error


def test_page_context_defaults_for_each_state() -> None:
    """Loading, Failed and a missing tenant all yield empty, renderable values."""
    loading = build_page_context(Loading())
    failed = build_page_context(Failed("Could not load restaurant data"))
    missing = build_page_context(Loaded(None))

    assert loading["is_loading"] is True
    assert failed["load_error"] == "Could not load restaurant data"
    for context in (loading, failed, missing):
        assert context["restaurant_id"] == ""
        assert context["restaurant_name"] == ""
        assert context["hours"] == []
        assert context["contacts"] == []
        assert context["sections"] == []
        assert context["menu"] is None


def test_page_context_from_loaded_data() -> None:
    data = RestaurantData(
        id=3,
        slug="hulihuli",
        name="Huli Huli",
        contacts=[ContactRead(id=1, type="phone", value="555", sort_order=0)],
    )

    context = build_page_context(Loaded(data))

    assert context["restaurant_id"] == "3"
    assert context["restaurant_name"] == "Huli Huli"
    assert context["menu"] is None
    assert contacts_by_type(context["contacts"]) == {"phone": data.contacts}


def test_best_effort_swallows_and_rolls_back() -> None:
    db = MagicMock()
    failures: list[str] = []

    def _explode() -> None:
        raise RuntimeError("write failed")

    result = best_effort(_explode, label="audit", db=db, sink=lambda label, exc: failures.append(f"{label}: {exc}"))

    assert result == {"success": True}
    db.rollback.assert_called_once_with()
    assert failures == ["audit: write failed"]


def test_best_effort_runs_operation_once_on_success() -> None:
    calls: list[int] = []

    result = best_effort(lambda: calls.append(1), label="track", result={"success": True, "queued": False})

    assert calls == [1]
    assert result == {"success": True, "queued": False}
