"""
===============================================================================
TARJETA CRC — application/guard.py
===============================================================================

Módulo:
    RequestGuardPipeline (gate por operación)

Responsabilidades:
    - Tabla estática Operation -> GuardRule (modo + capacidad requerida).
    - Modo AUTHORITY: actor requerido, delega en AuthorityResolver.resolve.
    - Modo PUBLIC_SHARE: ignora al actor, delega en
      ShareStateMachine.resolve_public_access.
    - Devolver GuardDecision uniforme (allow / motivo de rechazo).

Colaboradores:
    - application.authority.AuthorityResolver
    - application.sharing.ShareStateMachine
    - interfaces/api/http/dependencies.py: invoca el pipeline antes de
      cualquier lógica de negocio.

Invariantes:
    - Es un gate puro: en ALLOW no muta estado.
    - La tabla es un lookup por enum; no hay reflexión en runtime.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional
from uuid import UUID

from ..domain.capabilities import Capability
from ..domain.entities import Document
from .authority import AuthorityDecision, AuthorityOutcome, AuthorityResolver
from .sharing import PublicAccessDecision, PublicAccessOutcome, ShareStateMachine


class GuardMode(str, Enum):
    AUTHORITY = "authority"
    PUBLIC_SHARE = "public_share"


@dataclass(frozen=True, slots=True)
class GuardRule:
    mode: GuardMode
    capability: Optional[Capability] = None


class Operation(str, Enum):
    """Operaciones protegidas sobre un documento existente."""

    READ_DOCUMENT = "read_document"
    READ_DOCUMENT_VERSIONS = "read_document_versions"
    UPDATE_DOCUMENT = "update_document"
    LIST_MEMBERS = "list_members"
    ADD_MEMBER = "add_member"
    UPDATE_MEMBER = "update_member"
    REMOVE_MEMBER = "remove_member"
    LIST_CHILDREN = "list_children"
    CREATE_CHILD = "create_child"
    DELETE_DOCUMENT = "delete_document"
    MOVE_DOCUMENT = "move_document"
    SHARE_DOCUMENT = "share_document"
    READ_PUBLIC_DOCUMENT = "read_public_document"
    LIST_PUBLIC_CHILDREN = "list_public_children"


def _authority(capability: Capability) -> GuardRule:
    return GuardRule(mode=GuardMode.AUTHORITY, capability=capability)


_PUBLIC = GuardRule(mode=GuardMode.PUBLIC_SHARE)

OPERATION_RULES: Mapping[Operation, GuardRule] = MappingProxyType(
    {
        Operation.READ_DOCUMENT: _authority(Capability.READABLE),
        Operation.READ_DOCUMENT_VERSIONS: _authority(Capability.READABLE),
        Operation.UPDATE_DOCUMENT: _authority(Capability.EDITABLE),
        Operation.LIST_MEMBERS: _authority(Capability.READABLE),
        Operation.ADD_MEMBER: _authority(Capability.CREATE_USER),
        Operation.UPDATE_MEMBER: _authority(Capability.CREATE_USER),
        Operation.REMOVE_MEMBER: _authority(Capability.CREATE_USER),
        Operation.LIST_CHILDREN: _authority(Capability.READABLE),
        Operation.CREATE_CHILD: _authority(Capability.EDITABLE),
        Operation.DELETE_DOCUMENT: _authority(Capability.CREATE_USER),
        Operation.MOVE_DOCUMENT: _authority(Capability.CREATE_USER),
        Operation.SHARE_DOCUMENT: _authority(Capability.EDITABLE),
        Operation.READ_PUBLIC_DOCUMENT: _PUBLIC,
        Operation.LIST_PUBLIC_CHILDREN: _PUBLIC,
    }
)


class GuardOutcome(str, Enum):
    ALLOW = "allow"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    EXPIRED = "expired"
    INTEGRITY_ERROR = "integrity_error"


_FROM_AUTHORITY: Mapping[AuthorityOutcome, GuardOutcome] = MappingProxyType(
    {
        AuthorityOutcome.ALLOW: GuardOutcome.ALLOW,
        AuthorityOutcome.FORBIDDEN: GuardOutcome.FORBIDDEN,
        AuthorityOutcome.UNAUTHENTICATED: GuardOutcome.UNAUTHENTICATED,
        AuthorityOutcome.NOT_FOUND: GuardOutcome.NOT_FOUND,
        AuthorityOutcome.INTEGRITY_ERROR: GuardOutcome.INTEGRITY_ERROR,
    }
)

_FROM_PUBLIC: Mapping[PublicAccessOutcome, GuardOutcome] = MappingProxyType(
    {
        PublicAccessOutcome.ALLOW: GuardOutcome.ALLOW,
        PublicAccessOutcome.FORBIDDEN: GuardOutcome.FORBIDDEN,
        PublicAccessOutcome.EXPIRED: GuardOutcome.EXPIRED,
        PublicAccessOutcome.INTEGRITY_ERROR: GuardOutcome.INTEGRITY_ERROR,
    }
)


@dataclass(frozen=True, slots=True)
class GuardDecision:
    """Resultado del gate + la decisión subyacente para el caso de uso."""

    operation: Operation
    outcome: GuardOutcome
    document: Optional[Document] = None
    authority: Optional[AuthorityDecision] = None
    public_access: Optional[PublicAccessDecision] = None

    @property
    def allowed(self) -> bool:
        return self.outcome == GuardOutcome.ALLOW


class RequestGuardPipeline:
    """Gate previo a la lógica de negocio de cada operación."""

    def __init__(
        self,
        *,
        resolver: AuthorityResolver,
        share_machine: ShareStateMachine,
        rules: Mapping[Operation, GuardRule] = OPERATION_RULES,
    ) -> None:
        self._resolver = resolver
        self._shares = share_machine
        self._rules = rules

    def rule_for(self, operation: Operation) -> GuardRule:
        return self._rules[operation]

    def check(
        self,
        operation: Operation,
        actor_id: UUID | None,
        document_id: UUID,
        *,
        token: str | None = None,
        password: str | None = None,
    ) -> GuardDecision:
        rule = self.rule_for(operation)

        if rule.mode == GuardMode.PUBLIC_SHARE:
            public = self._shares.resolve_public_access(document_id, token, password)
            return GuardDecision(
                operation=operation,
                outcome=_FROM_PUBLIC[public.outcome],
                document=public.document,
                public_access=public,
            )

        authority = self._resolver.resolve(actor_id, document_id, rule.capability)
        return GuardDecision(
            operation=operation,
            outcome=_FROM_AUTHORITY[authority.outcome],
            document=authority.document if authority.allowed else None,
            authority=authority,
        )
