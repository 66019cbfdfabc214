"""
===============================================================================
USE CASE: Delete Document (cascade over the subtree)
===============================================================================

Name:
    Delete Document Use Case

Business Goal:
    Eliminar un documento y todo su subárbol:
      - gate DELETE_DOCUMENT (`createUser` sobre el documento raíz del borrado)
      - borrar los documentos del subárbol en UNA sola escritura
      - recién después, limpiar grants, stars, visitas y versiones del subárbol

Why (Context / Intención):
    - Política de borrado en cascada: ningún hijo queda con parent_id colgante.
      Un parent_id colgante encontrado después es INTEGRITY_ERROR.
    - El recorrido del subárbol está acotado y detecta ciclos: un árbol
      corrupto aborta el borrado sin efectos parciales.
    - Si falla el borrado de documentos, los dependientes siguen intactos.
      En Postgres el DELETE único arrastra grants, stars, visitas y
      versiones por ON DELETE CASCADE dentro de la misma transacción; la
      limpieza posterior es la que necesitan los stores sin FKs (in-memory).

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    DeleteDocumentUseCase

Collaborators:
    - RequestGuardPipeline
    - domain.document_tree.collect_subtree
    - DocumentRepository / DocAuthorityRepository / StarRepository
    - DocumentVisitRepository / DocumentVersionRepository (opcionales)
    - audit.emit_audit_event
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....audit import emit_audit_event
from ....domain.document_tree import DocumentTreeIntegrityError, collect_subtree
from ....domain.repositories import (
    AuditEventRepository,
    DocAuthorityRepository,
    DocumentRepository,
    DocumentVersionRepository,
    DocumentVisitRepository,
    StarRepository,
)
from ...authority import report_integrity_fault
from ...guard import Operation, RequestGuardPipeline
from .document_access import guard_error, integrity_error
from .document_results import DeleteDocumentResult


class DeleteDocumentUseCase:
    """Use Case (Command): borrado en cascada."""

    def __init__(
        self,
        *,
        document_repository: DocumentRepository,
        authority_repository: DocAuthorityRepository,
        star_repository: StarRepository,
        guard: RequestGuardPipeline,
        max_nodes: int,
        audit_repository: AuditEventRepository | None = None,
        visit_repository: DocumentVisitRepository | None = None,
        version_repository: DocumentVersionRepository | None = None,
    ) -> None:
        self._documents = document_repository
        self._grants = authority_repository
        self._stars = star_repository
        self._guard = guard
        self._max_nodes = max_nodes
        self._audit = audit_repository
        self._visits = visit_repository
        self._versions = version_repository

    def execute(self, document_id: UUID, actor_id: UUID | None) -> DeleteDocumentResult:
        # ---------------------------------------------------------------------
        # 1) Gate (createUser).
        # ---------------------------------------------------------------------
        gate = self._guard.check(Operation.DELETE_DOCUMENT, actor_id, document_id)
        error = guard_error(gate)
        if error is not None:
            return DeleteDocumentResult(error=error)

        # ---------------------------------------------------------------------
        # 2) Subárbol completo antes de escribir nada.
        # ---------------------------------------------------------------------
        try:
            subtree = collect_subtree(
                self._documents, gate.document, max_nodes=self._max_nodes
            )
        except DocumentTreeIntegrityError as exc:
            report_integrity_fault(exc, operation="delete_document")
            return DeleteDocumentResult(error=integrity_error())

        ids = [doc.id for doc in subtree]

        # ---------------------------------------------------------------------
        # 3) Documentos primero (una escritura); dependientes después.
        # ---------------------------------------------------------------------
        self._documents.delete_documents(list(reversed(ids)))
        self._grants.delete_authorities_for_documents(ids)
        self._stars.delete_stars_for_documents(ids)
        if self._visits is not None:
            self._visits.delete_visits_for_documents(ids)
        if self._versions is not None:
            self._versions.delete_versions_for_documents(ids)

        emit_audit_event(
            self._audit,
            action="document.delete",
            actor_id=actor_id,
            target_id=document_id,
            wiki_id=gate.document.wiki_id,
            metadata={"deleted_count": len(ids)},
        )
        return DeleteDocumentResult(deleted_ids=ids)
