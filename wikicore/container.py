"""
===============================================================================
TARJETA CRC — wikicore/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (repositorios, resolver, share machine, guard,
    casos de uso) siguiendo DIP.
  - Exponer factories para FastAPI (Depends).
  - Mantener singletons con caching (lru_cache).
  - Centralizar decisiones runtime basadas en Settings (config).

Colaboradores:
  - wikicore.crosscutting.config.get_settings
  - wikicore.domain.repositories.* (puertos)
  - wikicore.infrastructure.* (implementaciones)
  - wikicore.application.* (resolver, share machine, guard, casos de uso)
  - wikicore.identity.auth_users (hash/verify de passwords de share)

Patrones aplicados:
  - Composition Root
  - Dependency Inversion (use cases dependen de puertos)
  - Lazy singletons con lru_cache

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Este archivo NO depende de FastAPI (solo expone factories).
  - Todos los repositorios del mismo modo (in-memory o Postgres) se eligen
    juntos: mezclar stores rompería la visión consistente del árbol.
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application import (
    AuthorityResolver,
    RequestGuardPipeline,
    ShareStateMachine,
)
from .application.usecases import (
    AddWikiMemberUseCase,
    CreateDocumentUseCase,
    CreateWikiUseCase,
    DeleteDocumentUseCase,
    GetDocumentUseCase,
    GetEffectiveCapabilityUseCase,
    GetPublicDocumentUseCase,
    GetStarStatusUseCase,
    GetWikiUseCase,
    GrantDocumentMemberUseCase,
    ListChildDocumentsUseCase,
    ListDocumentMembersUseCase,
    ListDocumentVersionsUseCase,
    ListPublicChildrenUseCase,
    ListRecentDocumentsUseCase,
    ListRootDocumentsUseCase,
    ListStarredDocumentsUseCase,
    ListStarredWikisUseCase,
    ListWikiMembersUseCase,
    MoveDocumentUseCase,
    RemoveWikiMemberUseCase,
    RevokeDocumentMemberUseCase,
    ShareDocumentUseCase,
    ToggleStarUseCase,
    UpdateDocumentMemberUseCase,
    UpdateDocumentUseCase,
)
from .crosscutting.config import get_settings
from .domain.repositories import (
    AuditEventRepository,
    DocAuthorityRepository,
    DocumentRepository,
    DocumentVersionRepository,
    DocumentVisitRepository,
    MembershipRepository,
    StarRepository,
    WikiRepository,
)
from .identity.auth_users import hash_password, verify_password
from .infrastructure.repositories import (
    InMemoryAuditEventRepository,
    InMemoryDocAuthorityRepository,
    InMemoryDocumentRepository,
    InMemoryDocumentVersionRepository,
    InMemoryDocumentVisitRepository,
    InMemoryMembershipRepository,
    InMemoryStarRepository,
    InMemoryWikiRepository,
    PostgresAuditEventRepository,
    PostgresDocAuthorityRepository,
    PostgresDocumentRepository,
    PostgresDocumentVersionRepository,
    PostgresDocumentVisitRepository,
    PostgresMembershipRepository,
    PostgresStarRepository,
    PostgresWikiRepository,
)
from .infrastructure.services import generate_share_token

# =============================================================================
# Helpers internos
# =============================================================================


def use_in_memory_stores() -> bool:
    """
    Determina si se usan stores in-memory.

    Regla:
      - app_env ∈ {"test", "testing", "ci"} => in-memory.
      - Sin DATABASE_URL fuera de producción => in-memory (dev local).
    """
    settings = get_settings()
    if settings.uses_in_memory_stores():
        return True
    return not settings.database_url.strip() and not settings.is_production()


# =============================================================================
# Repositorios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_document_repository() -> DocumentRepository:
    if use_in_memory_stores():
        return InMemoryDocumentRepository()
    return PostgresDocumentRepository()


@lru_cache(maxsize=1)
def get_wiki_repository() -> WikiRepository:
    if use_in_memory_stores():
        return InMemoryWikiRepository()
    return PostgresWikiRepository()


@lru_cache(maxsize=1)
def get_membership_repository() -> MembershipRepository:
    if use_in_memory_stores():
        return InMemoryMembershipRepository()
    return PostgresMembershipRepository()


@lru_cache(maxsize=1)
def get_authority_repository() -> DocAuthorityRepository:
    if use_in_memory_stores():
        return InMemoryDocAuthorityRepository()
    return PostgresDocAuthorityRepository()


@lru_cache(maxsize=1)
def get_star_repository() -> StarRepository:
    if use_in_memory_stores():
        return InMemoryStarRepository()
    return PostgresStarRepository()


@lru_cache(maxsize=1)
def get_visit_repository() -> DocumentVisitRepository:
    if use_in_memory_stores():
        return InMemoryDocumentVisitRepository()
    return PostgresDocumentVisitRepository()


@lru_cache(maxsize=1)
def get_version_repository() -> DocumentVersionRepository:
    if use_in_memory_stores():
        return InMemoryDocumentVersionRepository()
    return PostgresDocumentVersionRepository()


@lru_cache(maxsize=1)
def get_audit_repository() -> AuditEventRepository:
    if use_in_memory_stores():
        return InMemoryAuditEventRepository()
    return PostgresAuditEventRepository()


# =============================================================================
# Motor de autoridad (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_authority_resolver() -> AuthorityResolver:
    return AuthorityResolver(
        documents=get_document_repository(),
        wikis=get_wiki_repository(),
        memberships=get_membership_repository(),
        grants=get_authority_repository(),
        max_depth=get_settings().document_tree_max_depth,
    )


@lru_cache(maxsize=1)
def get_share_state_machine() -> ShareStateMachine:
    return ShareStateMachine(
        documents=get_document_repository(),
        resolver=get_authority_resolver(),
        token_factory=generate_share_token,
        hash_password=hash_password,
        verify_password=verify_password,
        max_depth=get_settings().document_tree_max_depth,
    )


@lru_cache(maxsize=1)
def get_request_guard() -> RequestGuardPipeline:
    return RequestGuardPipeline(
        resolver=get_authority_resolver(),
        share_machine=get_share_state_machine(),
    )


def reset_container() -> None:
    """Limpia todos los singletons (tests: estado fresco por caso)."""
    for factory in (
        get_document_repository,
        get_wiki_repository,
        get_membership_repository,
        get_authority_repository,
        get_star_repository,
        get_visit_repository,
        get_version_repository,
        get_audit_repository,
        get_authority_resolver,
        get_share_state_machine,
        get_request_guard,
    ):
        factory.cache_clear()


# =============================================================================
# Casos de uso: documentos
# =============================================================================


def get_create_document_use_case() -> CreateDocumentUseCase:
    return CreateDocumentUseCase(
        document_repository=get_document_repository(),
        resolver=get_authority_resolver(),
        guard=get_request_guard(),
    )


def get_get_document_use_case() -> GetDocumentUseCase:
    return GetDocumentUseCase(
        guard=get_request_guard(),
        visit_repository=get_visit_repository(),
    )


def get_update_document_use_case() -> UpdateDocumentUseCase:
    return UpdateDocumentUseCase(
        document_repository=get_document_repository(),
        guard=get_request_guard(),
        version_repository=get_version_repository(),
    )


def get_list_child_documents_use_case() -> ListChildDocumentsUseCase:
    return ListChildDocumentsUseCase(
        document_repository=get_document_repository(),
        resolver=get_authority_resolver(),
        guard=get_request_guard(),
    )


def get_list_root_documents_use_case() -> ListRootDocumentsUseCase:
    return ListRootDocumentsUseCase(
        document_repository=get_document_repository(),
        resolver=get_authority_resolver(),
    )


def get_delete_document_use_case() -> DeleteDocumentUseCase:
    return DeleteDocumentUseCase(
        document_repository=get_document_repository(),
        authority_repository=get_authority_repository(),
        star_repository=get_star_repository(),
        guard=get_request_guard(),
        max_nodes=get_settings().document_subtree_max_nodes,
        audit_repository=get_audit_repository(),
        visit_repository=get_visit_repository(),
        version_repository=get_version_repository(),
    )


def get_move_document_use_case() -> MoveDocumentUseCase:
    return MoveDocumentUseCase(
        document_repository=get_document_repository(),
        resolver=get_authority_resolver(),
        guard=get_request_guard(),
        max_depth=get_settings().document_tree_max_depth,
        audit_repository=get_audit_repository(),
    )


def get_list_recent_documents_use_case() -> ListRecentDocumentsUseCase:
    return ListRecentDocumentsUseCase(
        visit_repository=get_visit_repository(),
        document_repository=get_document_repository(),
        resolver=get_authority_resolver(),
        limit=get_settings().recent_documents_limit,
    )


def get_list_document_versions_use_case() -> ListDocumentVersionsUseCase:
    return ListDocumentVersionsUseCase(
        version_repository=get_version_repository(),
        guard=get_request_guard(),
        limit=get_settings().document_versions_limit,
    )


def get_effective_capability_use_case() -> GetEffectiveCapabilityUseCase:
    return GetEffectiveCapabilityUseCase(resolver=get_authority_resolver())


# =============================================================================
# Casos de uso: grants por documento
# =============================================================================


def get_grant_document_member_use_case() -> GrantDocumentMemberUseCase:
    return GrantDocumentMemberUseCase(
        authority_repository=get_authority_repository(),
        guard=get_request_guard(),
        audit_repository=get_audit_repository(),
    )


def get_update_document_member_use_case() -> UpdateDocumentMemberUseCase:
    return UpdateDocumentMemberUseCase(
        authority_repository=get_authority_repository(),
        guard=get_request_guard(),
        audit_repository=get_audit_repository(),
    )


def get_revoke_document_member_use_case() -> RevokeDocumentMemberUseCase:
    return RevokeDocumentMemberUseCase(
        authority_repository=get_authority_repository(),
        guard=get_request_guard(),
        audit_repository=get_audit_repository(),
    )


def get_list_document_members_use_case() -> ListDocumentMembersUseCase:
    return ListDocumentMembersUseCase(
        authority_repository=get_authority_repository(),
        guard=get_request_guard(),
    )


# =============================================================================
# Casos de uso: share público
# =============================================================================


def get_share_document_use_case() -> ShareDocumentUseCase:
    return ShareDocumentUseCase(
        share_machine=get_share_state_machine(),
        audit_repository=get_audit_repository(),
    )


def get_public_document_use_case() -> GetPublicDocumentUseCase:
    return GetPublicDocumentUseCase(guard=get_request_guard())


def get_list_public_children_use_case() -> ListPublicChildrenUseCase:
    return ListPublicChildrenUseCase(
        guard=get_request_guard(),
        share_machine=get_share_state_machine(),
    )


# =============================================================================
# Casos de uso: wikis
# =============================================================================


def get_create_wiki_use_case() -> CreateWikiUseCase:
    return CreateWikiUseCase(
        wiki_repository=get_wiki_repository(),
        membership_repository=get_membership_repository(),
    )


def get_get_wiki_use_case() -> GetWikiUseCase:
    return GetWikiUseCase(
        wiki_repository=get_wiki_repository(),
        resolver=get_authority_resolver(),
    )


def get_add_wiki_member_use_case() -> AddWikiMemberUseCase:
    return AddWikiMemberUseCase(
        wiki_repository=get_wiki_repository(),
        membership_repository=get_membership_repository(),
        resolver=get_authority_resolver(),
        audit_repository=get_audit_repository(),
    )


def get_remove_wiki_member_use_case() -> RemoveWikiMemberUseCase:
    return RemoveWikiMemberUseCase(
        wiki_repository=get_wiki_repository(),
        membership_repository=get_membership_repository(),
        resolver=get_authority_resolver(),
        audit_repository=get_audit_repository(),
    )


def get_list_wiki_members_use_case() -> ListWikiMembersUseCase:
    return ListWikiMembersUseCase(
        membership_repository=get_membership_repository(),
        resolver=get_authority_resolver(),
    )


# =============================================================================
# Casos de uso: stars
# =============================================================================


def get_toggle_star_use_case() -> ToggleStarUseCase:
    return ToggleStarUseCase(
        star_repository=get_star_repository(),
        resolver=get_authority_resolver(),
    )


def get_star_status_use_case() -> GetStarStatusUseCase:
    return GetStarStatusUseCase(star_repository=get_star_repository())


def get_list_starred_wikis_use_case() -> ListStarredWikisUseCase:
    return ListStarredWikisUseCase(
        star_repository=get_star_repository(),
        wiki_repository=get_wiki_repository(),
        resolver=get_authority_resolver(),
    )


def get_list_starred_documents_use_case() -> ListStarredDocumentsUseCase:
    return ListStarredDocumentsUseCase(
        star_repository=get_star_repository(),
        document_repository=get_document_repository(),
        resolver=get_authority_resolver(),
    )
