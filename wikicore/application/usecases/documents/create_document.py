"""
===============================================================================
USE CASE: Create Document (root or child)
===============================================================================

Name:
    Create Document Use Case

Business Goal:
    Crear un documento dentro de un wiki, como raíz o bajo un padre:
      - raíz: el actor debe ser owner o miembro del wiki
      - hijo: el actor debe tener `editable` sobre el padre (gate CREATE_CHILD)
      - el padre debe pertenecer al mismo wiki (el árbol nunca cruza wikis)

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    CreateDocumentUseCase

Responsibilities:
    - Validar input (título).
    - Autorizar vía RequestGuardPipeline (hijo) o AuthorityResolver (raíz).
    - Persistir el documento en estado PRIVATE, sin share.

Collaborators:
    - RequestGuardPipeline / AuthorityResolver
    - DocumentRepository.create_document
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID, uuid4

from ....domain.entities import Document, DocumentStatus, utcnow
from ....domain.repositories import DocumentRepository
from ...authority import AuthorityResolver
from ...guard import Operation, RequestGuardPipeline
from .document_access import (
    RESOURCE_WIKI,
    authority_error,
    guard_error,
    validation_error,
)
from .document_results import DocumentResult

_MAX_TITLE_LENGTH = 500


@dataclass(frozen=True)
class CreateDocumentInput:
    wiki_id: UUID
    title: str
    parent_id: UUID | None = None
    content: str | None = None


class CreateDocumentUseCase:
    """Crea un documento raíz o hijo."""

    def __init__(
        self,
        document_repository: DocumentRepository,
        resolver: AuthorityResolver,
        guard: RequestGuardPipeline,
    ) -> None:
        self._documents = document_repository
        self._resolver = resolver
        self._guard = guard

    def execute(
        self, input_data: CreateDocumentInput, actor_id: UUID | None
    ) -> DocumentResult:
        title = (input_data.title or "").strip()
        if not title:
            return DocumentResult(error=validation_error("title is required"))
        if len(title) > _MAX_TITLE_LENGTH:
            return DocumentResult(error=validation_error("title is too long"))

        if input_data.parent_id is None:
            decision = self._resolver.authorize_root_creation(
                actor_id, input_data.wiki_id
            )
            error = authority_error(decision, resource=RESOURCE_WIKI)
            if error is not None:
                return DocumentResult(error=error)
        else:
            gate = self._guard.check(
                Operation.CREATE_CHILD, actor_id, input_data.parent_id
            )
            error = guard_error(gate)
            if error is not None:
                return DocumentResult(error=error)
            if gate.document.wiki_id != input_data.wiki_id:
                return DocumentResult(
                    error=validation_error("parent belongs to another wiki")
                )

        now = utcnow()
        document = Document(
            id=uuid4(),
            wiki_id=input_data.wiki_id,
            creator_id=actor_id,
            title=title,
            parent_id=input_data.parent_id,
            status=DocumentStatus.PRIVATE,
            content=input_data.content,
            created_at=now,
            updated_at=now,
        )
        return DocumentResult(document=self._documents.create_document(document))
