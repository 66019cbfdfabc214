"""
===============================================================================
USE CASE: Update Document (title / content)
===============================================================================

Gate: UPDATE_DOCUMENT (`editable`).

Reglas:
  - Al menos un campo (title o content) debe venir.
  - title, si viene, no puede quedar vacío.
  - Si el documento desaparece entre el gate y la escritura -> NOT_FOUND.
  - Cada edición exitosa agrega una versión (snapshot título/contenido
    con el actor como editor).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from ....domain.repositories import DocumentRepository, DocumentVersionRepository
from ...guard import Operation, RequestGuardPipeline
from .document_access import guard_error, not_found_error, validation_error
from .document_results import DocumentResult


@dataclass(frozen=True)
class UpdateDocumentInput:
    document_id: UUID
    title: str | None = None
    content: str | None = None


class UpdateDocumentUseCase:
    """Use Case (Command): edita título/contenido."""

    def __init__(
        self,
        document_repository: DocumentRepository,
        guard: RequestGuardPipeline,
        version_repository: DocumentVersionRepository | None = None,
    ) -> None:
        self._documents = document_repository
        self._guard = guard
        self._versions = version_repository

    def execute(
        self, input_data: UpdateDocumentInput, actor_id: UUID | None
    ) -> DocumentResult:
        if input_data.title is None and input_data.content is None:
            return DocumentResult(error=validation_error("nothing to update"))

        title = input_data.title.strip() if input_data.title is not None else None
        if title is not None and not title:
            return DocumentResult(error=validation_error("title can not be empty"))

        gate = self._guard.check(
            Operation.UPDATE_DOCUMENT, actor_id, input_data.document_id
        )
        error = guard_error(gate)
        if error is not None:
            return DocumentResult(error=error)

        updated = self._documents.update_document(
            input_data.document_id, title=title, content=input_data.content
        )
        if updated is None:
            return DocumentResult(error=not_found_error())
        if self._versions is not None:
            self._versions.append_version(updated, actor_id)
        return DocumentResult(document=updated)
