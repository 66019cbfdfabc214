"""
===============================================================================
USE CASE: Revoke Document Member
===============================================================================

Elimina el grant explícito (document_id, user_id).

Reglas:
  - Gate REMOVE_MEMBER (`createUser`).
  - Grant inexistente -> NOT_FOUND.
  - La revocación es visible para todo resolve() posterior: el usuario cae
    al grant del ancestro más cercano, a la membresía del wiki o a deny.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....audit import emit_audit_event
from ....domain.repositories import AuditEventRepository, DocAuthorityRepository
from ...guard import Operation, RequestGuardPipeline
from ..documents.document_access import RESOURCE_GRANT, guard_error, not_found_error
from ..documents.document_results import RemoveMemberResult


class RevokeDocumentMemberUseCase:
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
        self, document_id: UUID, user_id: UUID, actor_id: UUID | None
    ) -> RemoveMemberResult:
        gate = self._guard.check(Operation.REMOVE_MEMBER, actor_id, document_id)
        error = guard_error(gate)
        if error is not None:
            return RemoveMemberResult(error=error)

        if not self._grants.delete_authority(document_id, user_id):
            return RemoveMemberResult(error=not_found_error(RESOURCE_GRANT))

        emit_audit_event(
            self._audit,
            action="document.grant.revoke",
            actor_id=actor_id,
            target_id=document_id,
            wiki_id=gate.document.wiki_id,
            metadata={"user_id": user_id},
        )
        return RemoveMemberResult(removed=True)
