from __future__ import annotations

from typing import Any, Optional

import structlog

from ..core.enums import AuditAction
from .repository import AuditSink

logger = structlog.get_logger(__name__)


class AuditRecorder:
    """Fire-and-forget front for an AuditSink.

    A failing sink is logged and never fails the business operation.
    """

    def __init__(self, sink: AuditSink):
        self._sink = sink

    def record(
        self,
        *,
        actor_id: int,
        action: AuditAction,
        entity_type: str,
        entity_id: Any,
        before: Optional[dict] = None,
        after: Optional[dict] = None,
        reason: Optional[str] = None,
    ) -> None:
        try:
            self._sink.record(
                actor_id=int(actor_id),
                action=action.value,
                entity_type=entity_type,
                entity_id=entity_id,
                before=before,
                after=after,
                reason=reason,
            )
        except Exception as e:
            logger.error(
                "audit_write_failed",
                action=action.value,
                entity_type=entity_type,
                entity_id=entity_id,
                error=str(e),
            )
