"""
===============================================================================
TARJETA CRC — wikicore/audit.py (Emisión de auditoría)
===============================================================================

Responsabilidades:
  - Construir eventos de auditoría con formato consistente (actor/action/target/metadata).
  - Persistir vía AuditEventRepository (puerto del dominio).
  - “Best-effort”: si falla la persistencia, NO rompe el flujo de negocio.

Colaboradores:
  - wikicore.domain.audit.AuditEvent
  - wikicore.domain.repositories.AuditEventRepository
  - wikicore.crosscutting.logger.logger

Acciones emitidas:
  - document.grant / document.grant.update / document.grant.revoke
  - document.share / document.unshare
  - document.delete / document.move
  - wiki.member.add / wiki.member.remove

Decisiones de seguridad:
  - Nunca se guardan tokens de share ni passwords en metadata.
  - Metadata se sanitiza a valores serializables; lo no serializable se stringifica.
===============================================================================
"""

from __future__ import annotations

from typing import Any
from uuid import UUID, uuid4

from .crosscutting.logger import logger
from .domain.audit import AuditEvent
from .domain.entities import utcnow
from .domain.repositories import AuditEventRepository

_FORBIDDEN_METADATA_KEYS = {"token", "password", "password_hash", "share_token"}


def actor_label(actor_id: UUID | None) -> str:
    """
    Identificador de actor estable y fácil de consultar.

    Formato:
      - user:{uuid}
      - anonymous
    """
    if actor_id is None:
        return "anonymous"
    return f"user:{actor_id}"


def _sanitize(value: Any) -> Any:
    """
    Convierte valores a tipos serializables para JSON.
    - primitives -> OK
    - dict/list -> sanitiza recursivamente
    - otros -> str(value)
    """
    if value is None or isinstance(value, (str, int, float, bool)):
        return value

    if isinstance(value, dict):
        return {
            str(k): _sanitize(v)
            for k, v in value.items()
            if str(k).lower() not in _FORBIDDEN_METADATA_KEYS
        }

    if isinstance(value, (list, tuple)):
        return [_sanitize(v) for v in value]

    return str(value)


def emit_audit_event(
    repository: AuditEventRepository | None,
    *,
    action: str,
    actor_id: UUID | None,
    target_id: UUID | None = None,
    wiki_id: UUID | None = None,
    metadata: dict[str, Any] | None = None,
) -> None:
    """
    Emite un evento de auditoría.

    Regla clave:
      - Si repository es None o falla al escribir, NO se lanza excepción.
    """
    if repository is None:
        return

    payload: dict[str, Any] = dict(metadata or {})
    if wiki_id is not None:
        payload["wiki_id"] = str(wiki_id)

    event = AuditEvent(
        id=uuid4(),
        actor=actor_label(actor_id),
        action=action,
        target_id=target_id,
        metadata=_sanitize(payload),
        created_at=utcnow(),
    )

    try:
        repository.record_event(event)
    except Exception as exc:
        # Best-effort: logueamos y seguimos.
        logger.warning(
            "Falló la escritura del evento de auditoría",
            extra={"action": action, "error": str(exc)},
        )
