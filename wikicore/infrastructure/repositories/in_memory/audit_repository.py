# =============================================================================
# FILE: infrastructure/repositories/in_memory/audit_repository.py
# =============================================================================
"""
In-Memory Audit Event Repository for testing and development.

NOT FOR PRODUCTION USE - data is lost on restart.
"""

from __future__ import annotations

from threading import Lock
from typing import List
from uuid import UUID

from ....domain.audit import AuditEvent


class InMemoryAuditEventRepository:
    """
    In-memory implementation of AuditEventRepository.

    Useful for:
      - Unit testing (asserting which actions were audited)
      - Local development without database
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._events: List[AuditEvent] = []

    def record_event(self, event: AuditEvent) -> None:
        with self._lock:
            self._events.append(event)

    def list_events(
        self,
        *,
        target_id: UUID | None = None,
        action_prefix: str | None = None,
        limit: int = 100,
    ) -> List[AuditEvent]:
        with self._lock:
            events = list(self._events)

        if target_id is not None:
            events = [e for e in events if e.target_id == target_id]
        if action_prefix:
            events = [e for e in events if e.action.startswith(action_prefix)]

        # Most recent first
        events.reverse()
        return events[: max(limit, 0)]
