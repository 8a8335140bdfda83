"""Best-effort operations whose failure never changes the caller-visible result."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from sqlalchemy.orm import Session

R = TypeVar("R")

logger = logging.getLogger(__name__)

SUCCESS: dict[str, Any] = {"success": True}


def log_failure(label: str, exc: Exception) -> None:
    """Default observability sink for swallowed failures."""
    logger.warning("[BEST-EFFORT] %s failed: %s", label, exc, exc_info=exc)


def best_effort(
    operation: Callable[[], object],
    *,
    label: str,
    result: R | None = None,
    db: Session | None = None,
    sink: Callable[[str, Exception], None] = log_failure,
) -> R:
    """Run ``operation`` once and return ``result`` (``{"success": True}`` by default) whatever happens.

    Failures are routed to ``sink`` only. When ``db`` is given the session is
    rolled back so the request can keep using it.
    """
    try:
        operation()
    except Exception as exc:
        if db is not None:
            db.rollback()
        sink(label, exc)
    return result if result is not None else dict(SUCCESS)
