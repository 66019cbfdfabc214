"""
===============================================================================
USE CASES: Public Document Detail / Public Children
===============================================================================

Camino de lectura por enlace público (sin actor, sin capacidades):
  - GetPublicDocumentUseCase: gate READ_PUBLIC_DOCUMENT.
  - ListPublicChildrenUseCase: gate LIST_PUBLIC_CHILDREN + hijos visibles
    por el mismo enlace (ShareStateMachine.visible_children).

Nunca habilita edición: solo devuelve snapshots de lectura.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ...guard import Operation, RequestGuardPipeline
from ...sharing import ShareStateMachine
from ..documents.document_access import guard_error
from ..documents.document_results import DocumentListResult, DocumentResult


class GetPublicDocumentUseCase:
    def __init__(self, guard: RequestGuardPipeline) -> None:
        self._guard = guard

    def execute(
        self, document_id: UUID, token: str | None, password: str | None = None
    ) -> DocumentResult:
        gate = self._guard.check(
            Operation.READ_PUBLIC_DOCUMENT,
            None,
            document_id,
            token=token,
            password=password,
        )
        error = guard_error(gate)
        if error is not None:
            return DocumentResult(error=error)
        return DocumentResult(document=gate.document)


class ListPublicChildrenUseCase:
    def __init__(
        self, guard: RequestGuardPipeline, share_machine: ShareStateMachine
    ) -> None:
        self._guard = guard
        self._shares = share_machine

    def execute(
        self, document_id: UUID, token: str | None, password: str | None = None
    ) -> DocumentListResult:
        gate = self._guard.check(
            Operation.LIST_PUBLIC_CHILDREN,
            None,
            document_id,
            token=token,
            password=password,
        )
        error = guard_error(gate)
        if error is not None:
            return DocumentListResult(error=error)
        return DocumentListResult(
            documents=self._shares.visible_children(
                gate.public_access, token, password
            )
        )
