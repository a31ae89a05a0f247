from __future__ import annotations

from typing import Any, Optional, Protocol


class AuditSink(Protocol):
    """Append-only audit trail."""

    def record(
        self,
        *,
        actor_id: int,
        action: str,
        entity_type: str,
        entity_id: Any,
        before: Optional[dict] = None,
        after: Optional[dict] = None,
        reason: Optional[str] = None,
    ) -> None:
        raise NotImplementedError
