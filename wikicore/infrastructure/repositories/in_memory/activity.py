"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/activity.py
============================================================
Classes: InMemoryDocumentVisitRepository, InMemoryDocumentVersionRepository

Responsibilities:
  - Visitas: una fila por (user, document); revisitar mueve visited_at.
  - Versiones: historial append-only por documento (1, 2, 3...).
  - Borrado por lista de documentos (cascada del caso de uso).

Constraints / Notes:
  - Thread-safe: un Lock por repositorio.
  - Orden de visitas: más reciente primero; a igual visited_at gana la
    última escritura (secuencia interna), como el reloj de Postgres.
  - Ninguno de los dos decide autoridad: los casos de uso re-filtran.
============================================================
"""

from __future__ import annotations

from itertools import count
from threading import Lock
from typing import Dict, List, Tuple
from uuid import UUID

from ....domain.entities import Document, DocumentVersion, DocumentVisit, utcnow
from ....domain.repositories import DocumentVersionRepository, DocumentVisitRepository

_VisitKey = Tuple[UUID, UUID]


class InMemoryDocumentVisitRepository(DocumentVisitRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._sequence = count()
        self._visits: Dict[_VisitKey, Tuple[int, DocumentVisit]] = {}

    def record_visit(self, user_id: UUID, document_id: UUID) -> DocumentVisit:
        visit = DocumentVisit(
            user_id=user_id, document_id=document_id, visited_at=utcnow()
        )
        with self._lock:
            self._visits[(user_id, document_id)] = (next(self._sequence), visit)
        return visit

    def list_recent_visits(self, user_id: UUID, limit: int) -> List[DocumentVisit]:
        with self._lock:
            rows = [row for key, row in self._visits.items() if key[0] == user_id]
        rows.sort(key=lambda row: (row[1].visited_at, row[0]), reverse=True)
        return [visit for _, visit in rows[: max(limit, 0)]]

    def delete_visits_for_documents(self, document_ids: List[UUID]) -> int:
        targets = set(document_ids)
        with self._lock:
            keys = [key for key in self._visits if key[1] in targets]
            for key in keys:
                del self._visits[key]
            return len(keys)


class InMemoryDocumentVersionRepository(DocumentVersionRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._versions: Dict[UUID, List[DocumentVersion]] = {}

    def append_version(
        self, document: Document, editor_id: UUID | None
    ) -> DocumentVersion:
        with self._lock:
            history = self._versions.setdefault(document.id, [])
            version = DocumentVersion(
                document_id=document.id,
                version=len(history) + 1,
                title=document.title,
                content=document.content,
                editor_id=editor_id,
                created_at=utcnow(),
            )
            history.append(version)
            return version

    def list_versions(self, document_id: UUID, limit: int) -> List[DocumentVersion]:
        with self._lock:
            history = list(self._versions.get(document_id, []))
        return list(reversed(history))[: max(limit, 0)]

    def delete_versions_for_documents(self, document_ids: List[UUID]) -> int:
        with self._lock:
            removed = 0
            for document_id in set(document_ids):
                removed += len(self._versions.pop(document_id, []))
            return removed
