"""
===============================================================================
USE CASES: Recent Documents / Document Version History
===============================================================================

- ListRecentDocumentsUseCase: últimos documentos visitados por el actor
  (las visitas las registra GetDocumentUseCase). Cada documento se vuelve a
  resolver con `readable`: una visita vieja no conserva acceso revocado.
- ListDocumentVersionsUseCase: gate READ_DOCUMENT_VERSIONS (`readable`);
  devuelve el historial más nuevo primero.

Un documento borrado o con árbol corrupto simplemente no aparece en la lista
de recientes (el resolver ya reportó la falla de integridad).
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.capabilities import Capability
from ....domain.repositories import (
    DocumentRepository,
    DocumentVersionRepository,
    DocumentVisitRepository,
)
from ...authority import AuthorityResolver
from ...guard import Operation, RequestGuardPipeline
from .document_access import guard_error, unauthenticated_error
from .document_results import DocumentListResult, DocumentVersionListResult


class ListRecentDocumentsUseCase:
    """Use Case (Query): documentos visitados recientemente, legibles hoy."""

    def __init__(
        self,
        *,
        visit_repository: DocumentVisitRepository,
        document_repository: DocumentRepository,
        resolver: AuthorityResolver,
        limit: int,
    ) -> None:
        self._visits = visit_repository
        self._documents = document_repository
        self._resolver = resolver
        self._limit = limit

    def execute(self, actor_id: UUID | None) -> DocumentListResult:
        if actor_id is None:
            return DocumentListResult(error=unauthenticated_error())

        visits = self._visits.list_recent_visits(actor_id, self._limit)
        by_id = {
            document.id: document
            for document in self._documents.list_documents_by_ids(
                [visit.document_id for visit in visits]
            )
        }
        recent = []
        for visit in visits:
            document = by_id.get(visit.document_id)
            if document is None:
                continue
            if self._resolver.resolve_document(
                actor_id, document, Capability.READABLE
            ).allowed:
                recent.append(document)
        return DocumentListResult(documents=recent)


class ListDocumentVersionsUseCase:
    """Use Case (Query): historial de versiones de un documento."""

    def __init__(
        self,
        *,
        version_repository: DocumentVersionRepository,
        guard: RequestGuardPipeline,
        limit: int,
    ) -> None:
        self._versions = version_repository
        self._guard = guard
        self._limit = limit

    def execute(
        self, document_id: UUID, actor_id: UUID | None
    ) -> DocumentVersionListResult:
        gate = self._guard.check(
            Operation.READ_DOCUMENT_VERSIONS, actor_id, document_id
        )
        error = guard_error(gate)
        if error is not None:
            return DocumentVersionListResult(error=error)
        return DocumentVersionListResult(
            versions=self._versions.list_versions(document_id, self._limit)
        )
