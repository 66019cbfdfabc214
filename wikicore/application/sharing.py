"""
===============================================================================
TARJETA CRC — application/sharing.py
===============================================================================

Módulo:
    ShareStateMachine (private <-> public + acceso por enlace público)

Responsabilidades:
    - Transición share(actor, documento, request):
        * enable  -> status PUBLIC + token (+ password hash / expiry opcionales)
        * disable -> status PRIVATE, sin token / password / expiry
      Requiere `editable` vía AuthorityResolver (no re-implementa reglas).
    - Idempotencia: habilitar un documento ya público conserva su token
      (salvo regenerate_token).
    - resolve_public_access(documento, token, password): camino de lectura
      sin capacidades, paralelo al resolver (nunca otorga edición).
    - Descendientes: decide el documento compartido más cercano en el camino
      a la raíz; un ancestro solo cubre su subárbol con include_descendants.

Colaboradores:
    - application.authority.AuthorityResolver (chequeo de `editable`).
    - domain.repositories.DocumentRepository (set_share_state / lecturas).
    - domain.document_tree.iter_ancestors (walk acotado, integridad).
    - token_factory / hash_password / verify_password (inyectados).
    - crosscutting.metrics.record_public_access.

Invariantes:
    - token presente <=> status PUBLIC (una sola escritura por transición).
    - Un token incorrecto nunca revela si el share expiró.
===============================================================================
"""

from __future__ import annotations

import hmac
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional
from uuid import UUID

from ..crosscutting.logger import logger
from ..crosscutting.metrics import record_public_access
from ..domain.capabilities import Capability
from ..domain.document_tree import DocumentTreeIntegrityError, iter_ancestors
from ..domain.entities import Document, DocumentStatus, ShareConfig, utcnow
from ..domain.repositories import DocumentRepository
from .authority import (
    AuthorityDecision,
    AuthorityOutcome,
    AuthorityResolver,
    report_integrity_fault,
)


@dataclass(frozen=True, slots=True)
class ShareRequest:
    """Parámetros de shareDocument."""

    enable: bool
    password: Optional[str] = None
    expires_at: Optional[datetime] = None
    include_descendants: bool = False
    regenerate_token: bool = False


@dataclass(frozen=True, slots=True)
class ShareTransition:
    """
    Resultado de una transición.

    - authority: decisión del resolver (outcome != ALLOW => sin cambios).
    - document: documento tal como quedó persistido.
    - changed: False si la transición fue un no-op idempotente.
    """

    authority: AuthorityDecision
    document: Optional[Document] = None
    changed: bool = False

    @property
    def allowed(self) -> bool:
        return self.authority.allowed and self.document is not None


class PublicAccessOutcome(str, Enum):
    ALLOW = "allow"
    FORBIDDEN = "forbidden"
    EXPIRED = "expired"
    INTEGRITY_ERROR = "integrity_error"


@dataclass(frozen=True, slots=True)
class PublicAccessDecision:
    """
    Decisión de acceso público.

    - document: documento pedido (solo si ALLOW).
    - share_source: documento cuyo share habilitó el acceso (él mismo o un
      ancestro con include_descendants).
    """

    outcome: PublicAccessOutcome
    document: Optional[Document] = None
    share_source: Optional[Document] = None

    @property
    def allowed(self) -> bool:
        return self.outcome == PublicAccessOutcome.ALLOW


class ShareStateMachine:
    """Gestiona el estado de share y valida accesos por enlace público."""

    def __init__(
        self,
        *,
        documents: DocumentRepository,
        resolver: AuthorityResolver,
        token_factory: Callable[[], str],
        hash_password: Callable[[str], str],
        verify_password: Callable[[str, str], bool],
        max_depth: int,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._documents = documents
        self._resolver = resolver
        self._token_factory = token_factory
        self._hash_password = hash_password
        self._verify_password = verify_password
        self._max_depth = max_depth
        self._clock = clock

    # =========================================================================
    # Transiciones
    # =========================================================================

    def share(
        self, actor_id: UUID | None, document_id: UUID, request: ShareRequest
    ) -> ShareTransition:
        """Habilita / deshabilita el share público de un documento."""
        authority = self._resolver.resolve(actor_id, document_id, Capability.EDITABLE)
        if not authority.allowed or authority.document is None:
            return ShareTransition(authority=authority)

        document = authority.document
        if request.enable:
            config = self._next_config(document, request)
            if document.is_public and config == document.share_config:
                return ShareTransition(authority=authority, document=document)
            stored = self._documents.set_share_state(
                document.id, status=DocumentStatus.PUBLIC, share_config=config
            )
        else:
            if not document.is_public:
                return ShareTransition(authority=authority, document=document)
            stored = self._documents.set_share_state(
                document.id, status=DocumentStatus.PRIVATE, share_config=None
            )

        if stored is None:
            # El documento desapareció entre la lectura y la escritura.
            return ShareTransition(
                authority=replace(authority, outcome=AuthorityOutcome.NOT_FOUND)
            )

        logger.info(
            "share state changed",
            extra={
                "document_id": str(document.id),
                "status": stored.status.value,
                "include_descendants": bool(
                    stored.share_config and stored.share_config.include_descendants
                ),
            },
        )
        return ShareTransition(authority=authority, document=stored, changed=True)

    def _next_config(self, document: Document, request: ShareRequest) -> ShareConfig:
        current = document.share_config if document.is_public else None

        if current is not None and not request.regenerate_token:
            token = current.token
            created_at = current.created_at
        else:
            token = self._token_factory()
            created_at = self._clock()

        password_hash: Optional[str] = None
        if request.password:
            # Argon2 usa salt: reusar el hash vigente si el password no cambió.
            if current is not None and current.password_hash and self._verify_password(
                request.password, current.password_hash
            ):
                password_hash = current.password_hash
            else:
                password_hash = self._hash_password(request.password)

        return ShareConfig(
            token=token,
            password_hash=password_hash,
            expires_at=request.expires_at,
            include_descendants=request.include_descendants,
            created_at=created_at,
        )

    # =========================================================================
    # Acceso público
    # =========================================================================

    def resolve_public_access(
        self,
        document_id: UUID,
        token: str | None,
        password: str | None = None,
    ) -> PublicAccessDecision:
        """
        Acceso por enlace: status público (propio o heredado), token,
        expiración y password, en ese orden.

        Un documento inexistente es FORBIDDEN: el camino anónimo no revela
        existencia.
        """
        document = self._documents.get_document(document_id)
        if document is None:
            return self._public(PublicAccessOutcome.FORBIDDEN)

        try:
            source = self._nearest_shared(document)
        except DocumentTreeIntegrityError as exc:
            report_integrity_fault(exc, operation="resolve_public_access")
            return self._public(PublicAccessOutcome.INTEGRITY_ERROR)

        if source is None:
            return self._public(PublicAccessOutcome.FORBIDDEN)

        outcome = self._check_share(source.share_config, token, password)
        if outcome != PublicAccessOutcome.ALLOW:
            return self._public(outcome)

        return self._public(
            PublicAccessOutcome.ALLOW, document=document, share_source=source
        )

    def visible_children(
        self,
        access: PublicAccessDecision,
        token: str | None,
        password: str | None = None,
    ) -> List[Document]:
        """
        Hijos visibles por el mismo enlace, dado el acceso ya concedido al padre.

        Un hijo es visible si su propio share acepta las credenciales, o si
        no tiene share propio y el share que habilitó al padre incluye
        descendientes.
        """
        if not access.allowed or access.document is None or access.share_source is None:
            return []

        inherits = bool(access.share_source.share_config.include_descendants)
        visible: List[Document] = []
        for child in self._documents.list_children(access.document.id):
            if child.is_public:
                own = self._check_share(child.share_config, token, password)
                if own == PublicAccessOutcome.ALLOW:
                    visible.append(child)
            elif inherits:
                visible.append(child)
        return visible

    def _nearest_shared(self, document: Document) -> Optional[Document]:
        if document.is_public:
            return document
        for ancestor in iter_ancestors(
            self._documents, document, max_depth=self._max_depth
        ):
            if ancestor.is_public:
                if ancestor.share_config.include_descendants:
                    return ancestor
                return None
        return None

    def _check_share(
        self,
        config: ShareConfig | None,
        token: str | None,
        password: str | None,
    ) -> PublicAccessOutcome:
        if config is None or not token:
            return PublicAccessOutcome.FORBIDDEN
        if not hmac.compare_digest(token.encode(), config.token.encode()):
            return PublicAccessOutcome.FORBIDDEN
        if config.is_expired(self._clock()):
            return PublicAccessOutcome.EXPIRED
        if config.has_password:
            if not password or not self._verify_password(
                password, config.password_hash
            ):
                return PublicAccessOutcome.FORBIDDEN
        return PublicAccessOutcome.ALLOW

    @staticmethod
    def _public(
        outcome: PublicAccessOutcome,
        *,
        document: Document | None = None,
        share_source: Document | None = None,
    ) -> PublicAccessDecision:
        record_public_access(outcome.value)
        return PublicAccessDecision(
            outcome=outcome, document=document, share_source=share_source
        )
