"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/audit_event.py
============================================================
Class: PostgresAuditEventRepository

Responsibilities:
  - Persistir eventos de auditoría en PostgreSQL (tabla audit_events).
  - Listar eventos por target y prefijo de acción (orden estable).

Collaborators:
  - PostgresRepositoryBase
  - domain.audit.AuditEvent
  - psycopg.types.json.Json (JSONB metadata)

Constraints / Notes:
  - Append-only: no se edita, no se borra.
  - actor sigue la convención "user:<uuid>" / "anonymous".
  - metadata nunca contiene tokens ni passwords (lo garantiza emit_audit_event).
============================================================
"""

from __future__ import annotations

from uuid import UUID

from psycopg.types.json import Json

from ....domain.audit import AuditEvent
from .base import PostgresRepositoryBase


class PostgresAuditEventRepository(PostgresRepositoryBase):
    """Repositorio PostgreSQL para auditoría (audit_events)."""

    _SQL_INSERT = """
        INSERT INTO audit_events (id, actor, action, target_id, metadata)
        VALUES (%s, %s, %s, %s, %s)
    """

    def record_event(self, event: AuditEvent) -> None:
        self._write_rowcount(
            query=self._SQL_INSERT,
            params=[
                event.id,
                event.actor,
                event.action,
                event.target_id,
                Json(event.metadata or {}),
            ],
            context_msg="PostgresAuditEventRepository: Failed to record audit event",
            extra={"event_id": str(event.id), "action": event.action},
        )

    def list_events(
        self,
        *,
        target_id: UUID | None = None,
        action_prefix: str | None = None,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Lista eventos con filtros opcionales.

        - target_id: match exacto.
        - action_prefix: LIKE "<prefix>%" ("document.share" -> share y unshare no,
          sólo los que empiezan igual).
        Orden: created_at DESC, id DESC.
        """
        if limit <= 0:
            return []

        conditions: list[str] = []
        params: list[object] = []

        if target_id is not None:
            conditions.append("target_id = %s")
            params.append(target_id)

        if action_prefix:
            conditions.append("action LIKE %s")
            params.append(f"{action_prefix}%")

        where_clause = f"WHERE {' AND '.join(conditions)}" if conditions else ""

        query = f"""
            SELECT id, actor, action, target_id, metadata, created_at
            FROM audit_events
            {where_clause}
            ORDER BY created_at DESC, id DESC
            LIMIT %s
        """

        rows = self._fetchall(
            query=query,
            params=[*params, limit],
            context_msg="PostgresAuditEventRepository: Failed to list audit events",
            extra={
                "target_id": str(target_id) if target_id else None,
                "action_prefix": action_prefix,
                "limit": limit,
            },
        )

        return [
            AuditEvent(
                id=event_id,
                actor=actor,
                action=action,
                target_id=target,
                metadata=metadata or {},
                created_at=created_at,
            )
            for event_id, actor, action, target, metadata, created_at in rows
        ]
