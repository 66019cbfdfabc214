"""
===============================================================================
USE CASES: Toggle Star / Star Status
===============================================================================

Name:
    Star (bookmark) Use Cases

Business Goal:
    Marcar / desmarcar un wiki o un documento como favorito.

Reglas:
  - Actor autenticado requerido.
  - Star de wiki (document_id None): el actor debe poder leer el wiki.
  - Star de documento: `readable` sobre el documento (AuthorityResolver) y el
    documento debe pertenecer al wiki indicado.
  - Toggle: si existe se elimina, si no existe se crea.
  - Los stars no otorgan ningún acceso: listar stars vuelve a filtrar por
    el resolver (ver list_starred.py).
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.capabilities import Capability
from ....domain.entities import Star, utcnow
from ....domain.repositories import StarRepository
from ...authority import AuthorityResolver
from ..documents.document_access import (
    RESOURCE_WIKI,
    authority_error,
    unauthenticated_error,
    validation_error,
)
from ..documents.document_results import DocumentError
from .star_results import StarStatusResult, ToggleStarResult

_RESOURCE_STAR = "Star"


class ToggleStarUseCase:
    def __init__(
        self, star_repository: StarRepository, resolver: AuthorityResolver
    ) -> None:
        self._stars = star_repository
        self._resolver = resolver

    def execute(
        self,
        actor_id: UUID | None,
        wiki_id: UUID,
        document_id: UUID | None = None,
    ) -> ToggleStarResult:
        if actor_id is None:
            return ToggleStarResult(error=unauthenticated_error(_RESOURCE_STAR))

        error = self._authorize(actor_id, wiki_id, document_id)
        if error is not None:
            return ToggleStarResult(error=error)

        if self._stars.find_star(actor_id, wiki_id, document_id) is not None:
            self._stars.remove_star(actor_id, wiki_id, document_id)
            return ToggleStarResult(starred=False)

        star = self._stars.add_star(
            Star(
                user_id=actor_id,
                wiki_id=wiki_id,
                document_id=document_id,
                created_at=utcnow(),
            )
        )
        return ToggleStarResult(starred=True, star=star)

    def _authorize(
        self, actor_id: UUID, wiki_id: UUID, document_id: UUID | None
    ) -> DocumentError | None:
        if document_id is None:
            decision = self._resolver.authorize_wiki_read(actor_id, wiki_id)
            return authority_error(decision, resource=RESOURCE_WIKI)

        decision = self._resolver.resolve(actor_id, document_id, Capability.READABLE)
        error = authority_error(decision)
        if error is not None:
            return error
        if decision.document.wiki_id != wiki_id:
            return validation_error("document belongs to another wiki")
        return None


class GetStarStatusUseCase:
    def __init__(self, star_repository: StarRepository) -> None:
        self._stars = star_repository

    def execute(
        self,
        actor_id: UUID | None,
        wiki_id: UUID,
        document_id: UUID | None = None,
    ) -> StarStatusResult:
        if actor_id is None:
            return StarStatusResult(error=unauthenticated_error(_RESOURCE_STAR))
        star = self._stars.find_star(actor_id, wiki_id, document_id)
        return StarStatusResult(starred=star is not None)
