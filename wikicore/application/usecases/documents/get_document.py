"""
===============================================================================
USE CASE: Get Document
===============================================================================

Recupera el detalle de un documento. Gate: READ_DOCUMENT (`readable`).

El gate ya cargó el documento para decidir; se devuelve ese mismo snapshot
(sin segunda lectura). Una lectura autorizada de un actor autenticado
queda registrada como visita (alimenta "documentos recientes").
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.repositories import DocumentVisitRepository
from ...guard import Operation, RequestGuardPipeline
from .document_access import guard_error
from .document_results import DocumentResult


class GetDocumentUseCase:
    """Use Case (Query): detalle de documento."""

    def __init__(
        self,
        guard: RequestGuardPipeline,
        visit_repository: DocumentVisitRepository | None = None,
    ) -> None:
        self._guard = guard
        self._visits = visit_repository

    def execute(self, document_id: UUID, actor_id: UUID | None) -> DocumentResult:
        gate = self._guard.check(Operation.READ_DOCUMENT, actor_id, document_id)
        error = guard_error(gate)
        if error is not None:
            return DocumentResult(error=error)
        if self._visits is not None and actor_id is not None:
            self._visits.record_visit(actor_id, document_id)
        return DocumentResult(document=gate.document)
