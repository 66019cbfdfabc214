"""
===============================================================================
TARJETA CRC — application/authority.py
===============================================================================

Módulo:
    AuthorityResolver (motor único de decisiones de autoridad)

Responsabilidades:
    - Decidir (actor, documento, capacidad pedida) -> AuthorityDecision.
    - Aplicar el orden de resolución (primera regla que matchea gana):
        1. creador del documento          -> createUser
        2. creador del wiki               -> createUser
        3. grant explícito del documento  -> exactamente esa capacidad
        4. grant del ancestro más cercano -> esa capacidad
        5. membresía / wiki público       -> editable (admin) / readable
        6. deny
    - Exponer la capacidad efectiva con la MISMA evaluación (fuente única).
    - Decidir acciones a nivel wiki (gestionar roster, crear raíces, leer).
    - Convertir corrupción del árbol en INTEGRITY_ERROR (fail closed),
      logueada con alert=True y contada en métricas.

Colaboradores:
    - domain.repositories: DocumentRepository, WikiRepository,
      MembershipRepository, DocAuthorityRepository (solo lectura).
    - domain.document_tree: iter_ancestors, DocumentTreeIntegrityError.
    - domain.authority_policy: reglas puras (ownership / membership).
    - crosscutting.logger / crosscutting.metrics.

Invariantes:
    - Ningún otro componente combina grants + membresía + árbol para decidir.
    - resolve() es de solo lectura: nunca escribe en los stores.
    - Actor anónimo -> UNAUTHENTICATED sin leer ningún store.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional
from uuid import UUID

from ..crosscutting.logger import logger
from ..crosscutting.metrics import record_authority_decision, record_integrity_fault
from ..domain.authority_policy import (
    MatchedRule,
    RuleMatch,
    can_create_root_document,
    can_manage_wiki,
    membership_capability,
    ownership_capability,
)
from ..domain.capabilities import Capability
from ..domain.document_tree import (
    DocumentTreeIntegrityError,
    IntegrityFault,
    iter_ancestors,
)
from ..domain.entities import Document, Wiki, WikiMember
from ..domain.repositories import (
    DocAuthorityRepository,
    DocumentRepository,
    MembershipRepository,
    WikiRepository,
)


class AuthorityOutcome(str, Enum):
    """Resultado de una decisión de autoridad."""

    ALLOW = "allow"
    FORBIDDEN = "forbidden"
    UNAUTHENTICATED = "unauthenticated"
    NOT_FOUND = "not_found"
    INTEGRITY_ERROR = "integrity_error"


@dataclass(frozen=True, slots=True)
class AuthorityDecision:
    """
    Decisión del resolver.

    - granted: capacidad efectiva encontrada (None si ninguna regla matcheó).
    - document: documento evaluado (evita re-leerlo en el caso de uso).
    - fault: tipo de corrupción si outcome == INTEGRITY_ERROR.
    """

    outcome: AuthorityOutcome
    matched_rule: MatchedRule = MatchedRule.NONE
    requested: Optional[Capability] = None
    granted: Optional[Capability] = None
    document: Optional[Document] = None
    fault: Optional[IntegrityFault] = None

    @property
    def allowed(self) -> bool:
        return self.outcome == AuthorityOutcome.ALLOW


def report_integrity_fault(exc: DocumentTreeIntegrityError, *, operation: str) -> None:
    """Log ERROR con alert=True + métrica. Nunca se silencia."""
    record_integrity_fault(exc.kind.value)
    logger.error(
        "document tree integrity fault",
        extra={
            "alert": True,
            "integrity_fault": exc.kind.value,
            "document_id": str(exc.document_id),
            "operation": operation,
            "detail": exc.message,
        },
    )


class AuthorityResolver:
    """
    Motor de decisiones: combina ownership, grants, ancestros y membresía.

    Los stores se inyectan por constructor (composition root en container.py);
    los casos de uso dependen solo de esta interfaz angosta.
    """

    def __init__(
        self,
        *,
        documents: DocumentRepository,
        wikis: WikiRepository,
        memberships: MembershipRepository,
        grants: DocAuthorityRepository,
        max_depth: int,
    ) -> None:
        self._documents = documents
        self._wikis = wikis
        self._memberships = memberships
        self._grants = grants
        self._max_depth = max_depth

    # =========================================================================
    # Documentos
    # =========================================================================

    def resolve(
        self,
        actor_id: UUID | None,
        document_id: UUID,
        capability: Capability,
    ) -> AuthorityDecision:
        """¿Puede actor_id ejercer `capability` sobre document_id?"""
        if actor_id is None:
            return self._record(
                AuthorityDecision(
                    outcome=AuthorityOutcome.UNAUTHENTICATED, requested=capability
                )
            )

        document = self._documents.get_document(document_id)
        if document is None:
            return self._record(
                AuthorityDecision(
                    outcome=AuthorityOutcome.NOT_FOUND, requested=capability
                )
            )

        return self.resolve_document(actor_id, document, capability)

    def resolve_document(
        self,
        actor_id: UUID,
        document: Document,
        capability: Capability,
    ) -> AuthorityDecision:
        """Igual que resolve() pero con el documento ya cargado."""
        try:
            granted, rule = self._evaluate(actor_id, document)
        except DocumentTreeIntegrityError as exc:
            report_integrity_fault(exc, operation="resolve")
            return self._record(
                AuthorityDecision(
                    outcome=AuthorityOutcome.INTEGRITY_ERROR,
                    requested=capability,
                    document=document,
                    fault=exc.kind,
                )
            )

        allowed = granted is not None and granted.covers(capability)
        return self._record(
            AuthorityDecision(
                outcome=AuthorityOutcome.ALLOW if allowed else AuthorityOutcome.FORBIDDEN,
                matched_rule=rule,
                requested=capability,
                granted=granted,
                document=document,
            )
        )

    def effective_capability(
        self, actor_id: UUID | None, document_id: UUID
    ) -> AuthorityDecision:
        """
        Capacidad efectiva (para que la UI decida qué controles mostrar).

        Usa _evaluate, igual que resolve(): ALLOW si alguna regla otorgó
        algo, FORBIDDEN si ninguna.
        """
        if actor_id is None:
            return AuthorityDecision(outcome=AuthorityOutcome.UNAUTHENTICATED)

        document = self._documents.get_document(document_id)
        if document is None:
            return AuthorityDecision(outcome=AuthorityOutcome.NOT_FOUND)

        try:
            granted, rule = self._evaluate(actor_id, document)
        except DocumentTreeIntegrityError as exc:
            report_integrity_fault(exc, operation="effective_capability")
            return AuthorityDecision(
                outcome=AuthorityOutcome.INTEGRITY_ERROR,
                document=document,
                fault=exc.kind,
            )

        return AuthorityDecision(
            outcome=AuthorityOutcome.ALLOW if granted else AuthorityOutcome.FORBIDDEN,
            matched_rule=rule,
            granted=granted,
            document=document,
        )

    def _evaluate(self, actor_id: UUID, document: Document) -> RuleMatch:
        wiki = self._wikis.get_wiki(document.wiki_id)
        if wiki is None:
            raise DocumentTreeIntegrityError(
                IntegrityFault.MISSING_WIKI,
                document.id,
                f"Document references missing wiki {document.wiki_id}",
            )

        # 1-2) Ownership
        granted, rule = ownership_capability(document, wiki, actor_id)
        if granted is not None:
            return granted, rule

        # 3) Grant explícito: exactamente esa capacidad (sin escalar)
        direct = self._grants.get_authority(document.id, actor_id)
        if direct is not None:
            return direct.capability, MatchedRule.EXPLICIT_GRANT

        # 4) Ancestro más cercano con grant
        for ancestor in iter_ancestors(
            self._documents, document, max_depth=self._max_depth
        ):
            inherited = self._grants.get_authority(ancestor.id, actor_id)
            if inherited is not None:
                return inherited.capability, MatchedRule.ANCESTOR_GRANT

        # 5) Membresía / wiki público
        membership = self._memberships.get_membership(wiki.id, actor_id)
        return membership_capability(wiki, membership)

    # =========================================================================
    # Wikis
    # =========================================================================

    def authorize_wiki_management(
        self, actor_id: UUID | None, wiki_id: UUID
    ) -> AuthorityDecision:
        """Owner o admin: gestionar miembros del wiki."""
        return self._wiki_decision(actor_id, wiki_id, can_manage_wiki)

    def authorize_root_creation(
        self, actor_id: UUID | None, wiki_id: UUID
    ) -> AuthorityDecision:
        """Owner o cualquier miembro: crear un documento raíz."""
        return self._wiki_decision(actor_id, wiki_id, can_create_root_document)

    def authorize_wiki_read(
        self, actor_id: UUID | None, wiki_id: UUID
    ) -> AuthorityDecision:
        """Owner, miembro o wiki público: listar raíces y roster."""
        return self._wiki_decision(
            actor_id,
            wiki_id,
            lambda wiki, actor, membership: wiki.is_public
            or can_create_root_document(wiki, actor, membership),
        )

    def _wiki_decision(
        self,
        actor_id: UUID | None,
        wiki_id: UUID,
        predicate: Callable[[Wiki, UUID | None, WikiMember | None], bool],
    ) -> AuthorityDecision:
        if actor_id is None:
            return AuthorityDecision(outcome=AuthorityOutcome.UNAUTHENTICATED)

        wiki = self._wikis.get_wiki(wiki_id)
        if wiki is None:
            return AuthorityDecision(outcome=AuthorityOutcome.NOT_FOUND)

        membership = self._memberships.get_membership(wiki_id, actor_id)
        if not predicate(wiki, actor_id, membership):
            return AuthorityDecision(outcome=AuthorityOutcome.FORBIDDEN)

        if wiki.creator_id == actor_id:
            rule = MatchedRule.WIKI_OWNER
        elif membership is not None:
            _, rule = membership_capability(wiki, membership)
        else:
            rule = MatchedRule.PUBLIC_WIKI
        return AuthorityDecision(outcome=AuthorityOutcome.ALLOW, matched_rule=rule)

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _record(decision: AuthorityDecision) -> AuthorityDecision:
        record_authority_decision(decision.outcome.value, decision.matched_rule.value)
        if not decision.allowed:
            logger.debug(
                "authority denied",
                extra={
                    "outcome": decision.outcome.value,
                    "requested": decision.requested.value
                    if decision.requested
                    else None,
                },
            )
        return decision
