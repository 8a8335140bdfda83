"""Shared helpers for admin API routes."""

from __future__ import annotations

from typing import Any

from fastapi import HTTPException, status

from restaurant_cms.auth import RequestContext
from restaurant_cms.services.audit_service import log_action
from restaurant_cms.services.best_effort import best_effort
from restaurant_cms.services.restaurant_service import get_restaurant_id


def resolve_restaurant_id(context: RequestContext) -> int:
    try:
        return get_restaurant_id(context.db, context.restaurant_slug)
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Restaurant not found") from exc


def record_audit(
    context: RequestContext,
    *,
    action_type: str,
    entity_type: str,
    entity_id: int | None = None,
    before: dict[str, Any] | None = None,
    after: dict[str, Any] | None = None,
) -> None:
    """Append an audit row after a committed write; a failure here never undoes the write."""

    def _write() -> None:
        log_action(
            context.db,
            actor=context.actor(),
            action_type=action_type,
            entity_type=entity_type,
            entity_id=entity_id,
            before_snapshot=before,
            after_snapshot=after,
        )
        context.db.commit()

    best_effort(_write, label=f"audit {action_type} {entity_type}", db=context.db)
