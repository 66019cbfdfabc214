"""
===============================================================================
USE CASE: Move Document (re-parent inside the same wiki)
===============================================================================

Reglas:
  - Gate MOVE_DOCUMENT (`createUser` sobre el documento movido).
  - Nuevo padre: `editable` sobre él; mover a raíz requiere poder crear
    raíces en el wiki.
  - El nuevo padre debe existir y pertenecer al mismo wiki (VALIDATION_ERROR).
  - El nuevo padre no puede estar dentro del subárbol movido (CONFLICT):
    eso crearía un ciclo.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....audit import emit_audit_event
from ....domain.capabilities import Capability
from ....domain.document_tree import DocumentTreeIntegrityError, is_within_subtree
from ....domain.repositories import AuditEventRepository, DocumentRepository
from ...authority import AuthorityResolver, report_integrity_fault
from ...guard import Operation, RequestGuardPipeline
from .document_access import (
    RESOURCE_WIKI,
    authority_error,
    conflict_error,
    guard_error,
    integrity_error,
    not_found_error,
    validation_error,
)
from .document_results import DocumentResult


class MoveDocumentUseCase:
    def __init__(
        self,
        *,
        document_repository: DocumentRepository,
        resolver: AuthorityResolver,
        guard: RequestGuardPipeline,
        max_depth: int,
        audit_repository: AuditEventRepository | None = None,
    ) -> None:
        self._documents = document_repository
        self._resolver = resolver
        self._guard = guard
        self._max_depth = max_depth
        self._audit = audit_repository

    def execute(
        self,
        document_id: UUID,
        new_parent_id: UUID | None,
        actor_id: UUID | None,
    ) -> DocumentResult:
        gate = self._guard.check(Operation.MOVE_DOCUMENT, actor_id, document_id)
        error = guard_error(gate)
        if error is not None:
            return DocumentResult(error=error)

        document = gate.document
        if document.parent_id == new_parent_id:
            return DocumentResult(document=document)

        if new_parent_id is None:
            decision = self._resolver.authorize_root_creation(actor_id, document.wiki_id)
            error = authority_error(decision, resource=RESOURCE_WIKI)
            if error is not None:
                return DocumentResult(error=error)
        else:
            target = self._resolver.resolve(actor_id, new_parent_id, Capability.EDITABLE)
            error = authority_error(target)
            if error is not None:
                return DocumentResult(error=error)

            new_parent = target.document
            if new_parent.wiki_id != document.wiki_id:
                return DocumentResult(
                    error=validation_error("can not move a document to another wiki")
                )
            try:
                inside = is_within_subtree(
                    self._documents, new_parent, document.id, max_depth=self._max_depth
                )
            except DocumentTreeIntegrityError as exc:
                report_integrity_fault(exc, operation="move_document")
                return DocumentResult(error=integrity_error())
            if inside:
                return DocumentResult(
                    error=conflict_error("can not move a document under itself")
                )

        moved = self._documents.move_document(document_id, new_parent_id)
        if moved is None:
            return DocumentResult(error=not_found_error())

        emit_audit_event(
            self._audit,
            action="document.move",
            actor_id=actor_id,
            target_id=document_id,
            wiki_id=document.wiki_id,
            metadata={
                "from_parent_id": document.parent_id,
                "to_parent_id": new_parent_id,
            },
        )
        return DocumentResult(document=moved)
