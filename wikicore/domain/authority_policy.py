"""
===============================================================================
TARJETA CRC — domain/authority_policy.py
===============================================================================

Módulo:
    Reglas puras de autoridad sobre documentos y wikis

Responsabilidades:
    - Definir las reglas que NO requieren recorrer el árbol:
        * creador del documento  -> createUser
        * creador del wiki       -> createUser
        * membresía del wiki     -> editable (admin) / readable (member)
        * wiki público           -> readable
    - Definir quién puede gestionar un wiki y crear documentos raíz.
    - Ser 100% testeable: funciones puras, inputs explícitos.

Colaboradores:
    - domain.entities: Document, Wiki, WikiMember, WikiRole
    - domain.capabilities: Capability
    - application.authority.AuthorityResolver: orquesta estas reglas con
      grants explícitos y herencia por ancestro.
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple
from uuid import UUID

from .capabilities import Capability
from .entities import Document, Wiki, WikiMember, WikiRole


class MatchedRule(str, Enum):
    """Regla que produjo la capacidad (primera que matchea gana)."""

    CREATOR = "creator"
    WIKI_OWNER = "wiki_owner"
    EXPLICIT_GRANT = "explicit_grant"
    ANCESTOR_GRANT = "ancestor_grant"
    WIKI_ADMIN = "wiki_admin"
    WIKI_MEMBER = "wiki_member"
    PUBLIC_WIKI = "public_wiki"
    NONE = "none"


RuleMatch = Tuple[Optional[Capability], MatchedRule]


def ownership_capability(document: Document, wiki: Wiki, actor_id: UUID) -> RuleMatch:
    """Pasos 1 y 2: creador del documento, luego creador del wiki."""
    if document.creator_id == actor_id:
        return Capability.CREATE_USER, MatchedRule.CREATOR
    if wiki.creator_id == actor_id:
        return Capability.CREATE_USER, MatchedRule.WIKI_OWNER
    return None, MatchedRule.NONE


def membership_capability(wiki: Wiki, membership: WikiMember | None) -> RuleMatch:
    """
    Paso 5: fallback por membresía.

    Un admin del wiki cura contenido (editable) pero nunca obtiene createUser.
    """
    if membership is not None:
        if membership.role == WikiRole.ADMIN:
            return Capability.EDITABLE, MatchedRule.WIKI_ADMIN
        return Capability.READABLE, MatchedRule.WIKI_MEMBER
    if wiki.is_public:
        return Capability.READABLE, MatchedRule.PUBLIC_WIKI
    return None, MatchedRule.NONE


def can_manage_wiki(
    wiki: Wiki, actor_id: UUID | None, membership: WikiMember | None
) -> bool:
    """Owner o miembro admin pueden gestionar el roster del wiki."""
    if actor_id is None:
        return False
    if wiki.creator_id == actor_id:
        return True
    return membership is not None and membership.role == WikiRole.ADMIN


def can_create_root_document(
    wiki: Wiki, actor_id: UUID | None, membership: WikiMember | None
) -> bool:
    """Cualquier miembro (o el owner) puede crear documentos raíz."""
    if actor_id is None:
        return False
    return wiki.creator_id == actor_id or membership is not None
