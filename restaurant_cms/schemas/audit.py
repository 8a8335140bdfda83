"""Audit trail schemas."""

from datetime import datetime
from typing import Any

from restaurant_cms.schemas.base import CamelModel


class AuditLogRead(CamelModel):
    id: int
    timestamp: datetime
    actor_admin_id: int | None = None
    actor_identifier: str
    action_type: str
    entity_type: str
    entity_id: int | None = None
    before_snapshot: dict[str, Any] | None = None
    after_snapshot: dict[str, Any] | None = None
