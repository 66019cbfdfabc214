"""
===============================================================================
USE CASE: Create Wiki
===============================================================================

Crea un wiki. El creador queda como owner (createUser sobre todo documento
del wiki) y además como miembro admin en el roster.

Reglas:
  - Actor autenticado requerido.
  - name obligatorio (trim), longitud acotada.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID, uuid4

from ....domain.entities import Wiki, WikiMember, WikiRole, WikiVisibility, utcnow
from ....domain.repositories import MembershipRepository, WikiRepository
from ..documents.document_access import (
    RESOURCE_WIKI,
    unauthenticated_error,
    validation_error,
)
from .wiki_results import WikiResult

_MAX_NAME_LENGTH = 200


@dataclass(frozen=True)
class CreateWikiInput:
    name: str
    visibility: WikiVisibility = WikiVisibility.PRIVATE
    description: str | None = None


class CreateWikiUseCase:
    def __init__(
        self,
        wiki_repository: WikiRepository,
        membership_repository: MembershipRepository,
    ) -> None:
        self._wikis = wiki_repository
        self._memberships = membership_repository

    def execute(self, input_data: CreateWikiInput, actor_id: UUID | None) -> WikiResult:
        if actor_id is None:
            return WikiResult(error=unauthenticated_error(RESOURCE_WIKI))

        name = (input_data.name or "").strip()
        if not name:
            return WikiResult(error=validation_error("name is required", RESOURCE_WIKI))
        if len(name) > _MAX_NAME_LENGTH:
            return WikiResult(error=validation_error("name is too long", RESOURCE_WIKI))

        now = utcnow()
        wiki = self._wikis.create_wiki(
            Wiki(
                id=uuid4(),
                name=name,
                creator_id=actor_id,
                visibility=input_data.visibility,
                description=input_data.description,
                created_at=now,
                updated_at=now,
            )
        )
        self._memberships.upsert_member(
            WikiMember(
                wiki_id=wiki.id, user_id=actor_id, role=WikiRole.ADMIN, created_at=now
            )
        )
        return WikiResult(wiki=wiki)
