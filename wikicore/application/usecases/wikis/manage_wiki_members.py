"""
===============================================================================
USE CASES: Wiki Members (add / update / remove / list)
===============================================================================

Roster del wiki (MembershipStore).

Reglas:
  - add/update/remove: owner o miembro admin (AuthorityResolver
    .authorize_wiki_management).
  - list: owner, miembro o wiki público.
  - El owner (creador del wiki) no puede ser removido ni degradado: su
    autoridad viene de la regla WIKI_OWNER, no de la fila de membresía.
  - Upsert: agregar un miembro existente actualiza su rol.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....audit import emit_audit_event
from ....domain.entities import WikiMember, WikiRole, utcnow
from ....domain.repositories import (
    AuditEventRepository,
    MembershipRepository,
    WikiRepository,
)
from ...authority import AuthorityResolver
from ..documents.document_access import (
    RESOURCE_WIKI,
    authority_error,
    conflict_error,
    not_found_error,
)
from .wiki_results import RemoveWikiMemberResult, WikiMemberResult, WikiMembersResult

_RESOURCE_MEMBER = "WikiMember"


class AddWikiMemberUseCase:
    def __init__(
        self,
        *,
        wiki_repository: WikiRepository,
        membership_repository: MembershipRepository,
        resolver: AuthorityResolver,
        audit_repository: AuditEventRepository | None = None,
    ) -> None:
        self._wikis = wiki_repository
        self._memberships = membership_repository
        self._resolver = resolver
        self._audit = audit_repository

    def execute(
        self,
        wiki_id: UUID,
        user_id: UUID,
        actor_id: UUID | None,
        *,
        role: WikiRole = WikiRole.MEMBER,
    ) -> WikiMemberResult:
        decision = self._resolver.authorize_wiki_management(actor_id, wiki_id)
        error = authority_error(decision, resource=RESOURCE_WIKI)
        if error is not None:
            return WikiMemberResult(error=error)

        wiki = self._wikis.get_wiki(wiki_id)
        if wiki is None:
            return WikiMemberResult(error=not_found_error(RESOURCE_WIKI))
        if user_id == wiki.creator_id and role != WikiRole.ADMIN:
            return WikiMemberResult(
                error=conflict_error("the wiki owner can not be demoted", _RESOURCE_MEMBER)
            )

        existing = self._memberships.get_membership(wiki_id, user_id)
        member = self._memberships.upsert_member(
            WikiMember(
                wiki_id=wiki_id,
                user_id=user_id,
                role=role,
                created_at=existing.created_at if existing else utcnow(),
            )
        )
        emit_audit_event(
            self._audit,
            action="wiki.member.add",
            actor_id=actor_id,
            target_id=user_id,
            wiki_id=wiki_id,
            metadata={"role": role.value},
        )
        return WikiMemberResult(member=member)


class RemoveWikiMemberUseCase:
    def __init__(
        self,
        *,
        wiki_repository: WikiRepository,
        membership_repository: MembershipRepository,
        resolver: AuthorityResolver,
        audit_repository: AuditEventRepository | None = None,
    ) -> None:
        self._wikis = wiki_repository
        self._memberships = membership_repository
        self._resolver = resolver
        self._audit = audit_repository

    def execute(
        self, wiki_id: UUID, user_id: UUID, actor_id: UUID | None
    ) -> RemoveWikiMemberResult:
        decision = self._resolver.authorize_wiki_management(actor_id, wiki_id)
        error = authority_error(decision, resource=RESOURCE_WIKI)
        if error is not None:
            return RemoveWikiMemberResult(error=error)

        wiki = self._wikis.get_wiki(wiki_id)
        if wiki is None:
            return RemoveWikiMemberResult(error=not_found_error(RESOURCE_WIKI))
        if user_id == wiki.creator_id:
            return RemoveWikiMemberResult(
                error=conflict_error("the wiki owner can not be removed", _RESOURCE_MEMBER)
            )

        if not self._memberships.remove_member(wiki_id, user_id):
            return RemoveWikiMemberResult(error=not_found_error(_RESOURCE_MEMBER))

        emit_audit_event(
            self._audit,
            action="wiki.member.remove",
            actor_id=actor_id,
            target_id=user_id,
            wiki_id=wiki_id,
        )
        return RemoveWikiMemberResult(removed=True)


class ListWikiMembersUseCase:
    def __init__(
        self, membership_repository: MembershipRepository, resolver: AuthorityResolver
    ) -> None:
        self._memberships = membership_repository
        self._resolver = resolver

    def execute(self, wiki_id: UUID, actor_id: UUID | None) -> WikiMembersResult:
        decision = self._resolver.authorize_wiki_read(actor_id, wiki_id)
        error = authority_error(decision, resource=RESOURCE_WIKI)
        if error is not None:
            return WikiMembersResult(error=error)
        return WikiMembersResult(members=self._memberships.list_members(wiki_id))
