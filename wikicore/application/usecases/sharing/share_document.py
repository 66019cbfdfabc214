"""
===============================================================================
USE CASE: Share / Unshare Document
===============================================================================

Name:
    Share Document Use Case

Business Goal:
    Habilitar o deshabilitar el enlace público de un documento delegando la
    transición en ShareStateMachine (que exige `editable` vía resolver) y
    dejar rastro en auditoría.

Reglas:
  - password vacío se trata como "sin password".
  - expires_at se normaliza a UTC; sin zona horaria -> VALIDATION_ERROR.
  - Un no-op idempotente no emite auditoría.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....audit import emit_audit_event
from ....domain.repositories import AuditEventRepository
from ...sharing import ShareRequest, ShareStateMachine
from ..documents.document_access import authority_error, validation_error
from ..documents.document_results import ShareResult


class ShareDocumentUseCase:
    def __init__(
        self,
        share_machine: ShareStateMachine,
        audit_repository: AuditEventRepository | None = None,
    ) -> None:
        self._shares = share_machine
        self._audit = audit_repository

    def execute(
        self, document_id: UUID, request: ShareRequest, actor_id: UUID | None
    ) -> ShareResult:
        if request.expires_at is not None and request.expires_at.tzinfo is None:
            return ShareResult(
                error=validation_error("expires_at must include a timezone")
            )

        transition = self._shares.share(actor_id, document_id, request)
        error = authority_error(transition.authority)
        if error is not None:
            return ShareResult(error=error)

        document = transition.document
        if transition.changed:
            emit_audit_event(
                self._audit,
                action="document.share" if request.enable else "document.unshare",
                actor_id=actor_id,
                target_id=document_id,
                wiki_id=document.wiki_id,
                metadata={
                    "has_password": bool(
                        document.share_config and document.share_config.has_password
                    ),
                    "expires_at": document.share_config.expires_at
                    if document.share_config
                    else None,
                    "include_descendants": bool(
                        document.share_config
                        and document.share_config.include_descendants
                    ),
                    "token_rotated": request.regenerate_token,
                },
            )
        return ShareResult(document=document, changed=transition.changed)
