"""
===============================================================================
USE CASE: Get Wiki
===============================================================================

Detalle de un wiki: owner, miembro o cualquier actor si el wiki es público.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.repositories import WikiRepository
from ...authority import AuthorityResolver
from ..documents.document_access import RESOURCE_WIKI, authority_error, not_found_error
from .wiki_results import WikiResult


class GetWikiUseCase:
    def __init__(self, wiki_repository: WikiRepository, resolver: AuthorityResolver) -> None:
        self._wikis = wiki_repository
        self._resolver = resolver

    def execute(self, wiki_id: UUID, actor_id: UUID | None) -> WikiResult:
        decision = self._resolver.authorize_wiki_read(actor_id, wiki_id)
        error = authority_error(decision, resource=RESOURCE_WIKI)
        if error is not None:
            return WikiResult(error=error)

        wiki = self._wikis.get_wiki(wiki_id)
        if wiki is None:
            return WikiResult(error=not_found_error(RESOURCE_WIKI))
        return WikiResult(wiki=wiki)
