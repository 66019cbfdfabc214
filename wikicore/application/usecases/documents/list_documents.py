"""
===============================================================================
USE CASES: List Child Documents / List Wiki Root Documents
===============================================================================

- ListChildDocumentsUseCase: gate LIST_CHILDREN (`readable` sobre el padre).
- ListRootDocumentsUseCase: lectura del wiki (owner, miembro o wiki público).

Cada hijo se vuelve a resolver con `readable`: leer al padre no implica
leer a todos sus hijos (ej. el creador del padre no es creador del hijo).
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.capabilities import Capability
from ....domain.repositories import DocumentRepository
from ...authority import AuthorityResolver
from ...guard import Operation, RequestGuardPipeline
from .document_access import RESOURCE_WIKI, authority_error, guard_error
from .document_results import DocumentListResult


class ListChildDocumentsUseCase:
    def __init__(
        self,
        document_repository: DocumentRepository,
        resolver: AuthorityResolver,
        guard: RequestGuardPipeline,
    ) -> None:
        self._documents = document_repository
        self._resolver = resolver
        self._guard = guard

    def execute(self, document_id: UUID, actor_id: UUID | None) -> DocumentListResult:
        gate = self._guard.check(Operation.LIST_CHILDREN, actor_id, document_id)
        error = guard_error(gate)
        if error is not None:
            return DocumentListResult(error=error)
        children = [
            child
            for child in self._documents.list_children(document_id)
            if self._resolver.resolve_document(
                actor_id, child, Capability.READABLE
            ).allowed
        ]
        return DocumentListResult(documents=children)


class ListRootDocumentsUseCase:
    def __init__(
        self, document_repository: DocumentRepository, resolver: AuthorityResolver
    ) -> None:
        self._documents = document_repository
        self._resolver = resolver

    def execute(self, wiki_id: UUID, actor_id: UUID | None) -> DocumentListResult:
        decision = self._resolver.authorize_wiki_read(actor_id, wiki_id)
        error = authority_error(decision, resource=RESOURCE_WIKI)
        if error is not None:
            return DocumentListResult(error=error)
        return DocumentListResult(
            documents=self._documents.list_root_documents(wiki_id)
        )
