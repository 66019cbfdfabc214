"""
===============================================================================
USE CASE: Grant / Update Document Member
===============================================================================

Otorga (o cambia) la capacidad explícita de un usuario sobre un documento.

Reglas:
  - Gate ADD_MEMBER / UPDATE_MEMBER (`createUser` sobre el documento).
  - add: si el grant ya existe -> CONFLICT (usar update).
  - update: si el grant no existe -> NOT_FOUND.
  - El creador del documento no necesita grant (ya tiene createUser):
    otorgarle uno es VALIDATION_ERROR.
  - La escritura es visible para el próximo resolve() (sin caché).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from ....audit import emit_audit_event
from ....domain.capabilities import Capability
from ....domain.entities import DocAuthority, utcnow
from ....domain.repositories import AuditEventRepository, DocAuthorityRepository
from ...guard import Operation, RequestGuardPipeline
from ..documents.document_access import (
    RESOURCE_GRANT,
    conflict_error,
    guard_error,
    not_found_error,
    validation_error,
)
from ..documents.document_results import DocumentMemberResult


@dataclass(frozen=True)
class DocumentMemberInput:
    document_id: UUID
    user_id: UUID
    capability: Capability


class GrantDocumentMemberUseCase:
    """Agrega un grant nuevo."""

    _operation = Operation.ADD_MEMBER
    _audit_action = "document.grant"

    def __init__(
        self,
        authority_repository: DocAuthorityRepository,
        guard: RequestGuardPipeline,
        audit_repository: AuditEventRepository | None = None,
    ) -> None:
        self._grants = authority_repository
        self._guard = guard
        self._audit = audit_repository

    def execute(
        self, input_data: DocumentMemberInput, actor_id: UUID | None
    ) -> DocumentMemberResult:
        gate = self._guard.check(self._operation, actor_id, input_data.document_id)
        error = guard_error(gate)
        if error is not None:
            return DocumentMemberResult(error=error)

        if input_data.user_id == gate.document.creator_id:
            return DocumentMemberResult(
                error=validation_error(
                    "the document creator already holds every capability",
                    RESOURCE_GRANT,
                )
            )

        existing = self._grants.get_authority(input_data.document_id, input_data.user_id)
        error = self._check_existing(existing)
        if error is not None:
            return DocumentMemberResult(error=error)

        member = self._grants.upsert_authority(
            DocAuthority(
                document_id=input_data.document_id,
                user_id=input_data.user_id,
                capability=input_data.capability,
                granted_by=actor_id,
                created_at=existing.created_at if existing else utcnow(),
            )
        )

        emit_audit_event(
            self._audit,
            action=self._audit_action,
            actor_id=actor_id,
            target_id=input_data.document_id,
            wiki_id=gate.document.wiki_id,
            metadata={
                "user_id": input_data.user_id,
                "capability": input_data.capability.value,
            },
        )
        return DocumentMemberResult(member=member)

    def _check_existing(self, existing: DocAuthority | None):
        if existing is not None:
            return conflict_error("grant already exists", RESOURCE_GRANT)
        return None


class UpdateDocumentMemberUseCase(GrantDocumentMemberUseCase):
    """Cambia la capacidad de un grant existente."""

    _operation = Operation.UPDATE_MEMBER
    _audit_action = "document.grant.update"

    def _check_existing(self, existing: DocAuthority | None):
        if existing is None:
            return not_found_error(RESOURCE_GRANT)
        return None
