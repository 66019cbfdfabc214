"""
===============================================================================
USE CASE: List Document Members
===============================================================================

Lista los grants explícitos de un documento. Gate LIST_MEMBERS (`readable`).
No incluye grants heredados de ancestros (esos se ven en cada ancestro).
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.repositories import DocAuthorityRepository
from ...guard import Operation, RequestGuardPipeline
from ..documents.document_access import guard_error
from ..documents.document_results import DocumentMembersResult


class ListDocumentMembersUseCase:
    def __init__(
        self, authority_repository: DocAuthorityRepository, guard: RequestGuardPipeline
    ) -> None:
        self._grants = authority_repository
        self._guard = guard

    def execute(self, document_id: UUID, actor_id: UUID | None) -> DocumentMembersResult:
        gate = self._guard.check(Operation.LIST_MEMBERS, actor_id, document_id)
        error = guard_error(gate)
        if error is not None:
            return DocumentMembersResult(error=error)
        return DocumentMembersResult(members=self._grants.list_authorities(document_id))
