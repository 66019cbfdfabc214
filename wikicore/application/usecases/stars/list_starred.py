"""
===============================================================================
USE CASES: List Starred Wikis / Documents
===============================================================================

- ListStarredWikisUseCase: wikis marcados (stars con document_id None),
  filtrados por lectura del wiki.
- ListStarredDocumentsUseCase: documentos marcados (todos o de un wiki),
  filtrados por `readable` vía AuthorityResolver: un usuario nunca ve un
  documento al que perdió acceso.

Un documento cuyo árbol está corrupto se omite del listado (el resolver ya
reportó la falla de integridad).
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.capabilities import Capability
from ....domain.repositories import DocumentRepository, StarRepository, WikiRepository
from ...authority import AuthorityResolver
from ..documents.document_access import unauthenticated_error
from ..documents.document_results import DocumentListResult
from ..wikis.wiki_results import WikiListResult


class ListStarredWikisUseCase:
    def __init__(
        self,
        *,
        star_repository: StarRepository,
        wiki_repository: WikiRepository,
        resolver: AuthorityResolver,
    ) -> None:
        self._stars = star_repository
        self._wikis = wiki_repository
        self._resolver = resolver

    def execute(self, actor_id: UUID | None) -> WikiListResult:
        if actor_id is None:
            return WikiListResult(error=unauthenticated_error("Star"))

        stars = self._stars.list_stars(actor_id, wikis_only=True)
        wikis = self._wikis.list_wikis_by_ids([star.wiki_id for star in stars])
        visible = [
            wiki
            for wiki in wikis
            if self._resolver.authorize_wiki_read(actor_id, wiki.id).allowed
        ]
        return WikiListResult(wikis=visible)


class ListStarredDocumentsUseCase:
    def __init__(
        self,
        *,
        star_repository: StarRepository,
        document_repository: DocumentRepository,
        resolver: AuthorityResolver,
    ) -> None:
        self._stars = star_repository
        self._documents = document_repository
        self._resolver = resolver

    def execute(
        self, actor_id: UUID | None, *, wiki_id: UUID | None = None
    ) -> DocumentListResult:
        if actor_id is None:
            return DocumentListResult(error=unauthenticated_error("Star"))

        stars = self._stars.list_stars(actor_id, wiki_id=wiki_id, documents_only=True)
        documents = self._documents.list_documents_by_ids(
            [star.document_id for star in stars]
        )
        visible = [
            document
            for document in documents
            if self._resolver.resolve_document(
                actor_id, document, Capability.READABLE
            ).allowed
        ]
        return DocumentListResult(documents=visible)
