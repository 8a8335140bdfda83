"""Audit log helpers."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from restaurant_cms.models import AdminUser, AuditLog


def log_action(
    db: Session,
    *,
    actor: AdminUser | None,
    action_type: str,
    entity_type: str,
    entity_id: int | None = None,
    before_snapshot: dict[str, Any] | None = None,
    after_snapshot: dict[str, Any] | None = None,
) -> None:
    """Stage an audit row; the caller's commit persists it with the change."""
    actor_identifier = "anonymous"
    actor_id = None
    if actor is not None:
        actor_id = actor.id
        actor_identifier = actor.email

    db.add(
        AuditLog(
            actor_admin_id=actor_id,
            actor_identifier=actor_identifier,
            action_type=action_type,
            entity_type=entity_type,
            entity_id=entity_id,
            before_snapshot=before_snapshot,
            after_snapshot=after_snapshot,
        )
    )


def list_recent(db: Session, limit: int = 50) -> list[AuditLog]:
    return list(db.scalars(select(AuditLog).order_by(AuditLog.timestamp.desc(), AuditLog.id.desc()).limit(limit)).all())
