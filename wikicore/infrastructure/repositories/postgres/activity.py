"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/activity.py
============================================================
Classes: PostgresDocumentVisitRepository, PostgresDocumentVersionRepository

Responsibilities:
  - document_visits: upsert por (user_id, document_id) con visited_at = NOW().
  - document_versions: append con version = MAX(version) + 1 en el mismo
    INSERT ... SELECT.

Collaborators:
  - PostgresRepositoryBase
  - domain.entities.DocumentVisit, DocumentVersion

Constraints / Notes:
  - Ambas tablas referencian documents con ON DELETE CASCADE: el DELETE del
    subárbol ya las limpia; delete_*_for_documents queda para stores sin FKs.
  - Dos appends concurrentes sobre el mismo documento chocan contra la PK
    (document_id, version): el segundo sale como DatabaseError, no pisa.
============================================================
"""

from __future__ import annotations

from typing import List
from uuid import UUID

from ....domain.entities import Document, DocumentVersion, DocumentVisit
from .base import PostgresRepositoryBase

_VISIT_COLUMNS = "user_id, document_id, visited_at"
_VERSION_COLUMNS = "document_id, version, title, content, editor_id, created_at"


def _row_to_visit(row: tuple) -> DocumentVisit:
    return DocumentVisit(user_id=row[0], document_id=row[1], visited_at=row[2])


def _row_to_version(row: tuple) -> DocumentVersion:
    return DocumentVersion(
        document_id=row[0],
        version=row[1],
        title=row[2] or "",
        content=row[3],
        editor_id=row[4],
        created_at=row[5],
    )


class PostgresDocumentVisitRepository(PostgresRepositoryBase):
    _SQL_UPSERT = f"""
        INSERT INTO document_visits (user_id, document_id, visited_at)
        VALUES (%s, %s, NOW())
        ON CONFLICT (user_id, document_id)
        DO UPDATE SET visited_at = EXCLUDED.visited_at
        RETURNING {_VISIT_COLUMNS}
    """

    _SQL_LIST_RECENT = f"""
        SELECT {_VISIT_COLUMNS}
        FROM document_visits
        WHERE user_id = %s
        ORDER BY visited_at DESC
        LIMIT %s
    """

    _SQL_DELETE_FOR_DOCUMENTS = "DELETE FROM document_visits WHERE document_id = ANY(%s)"

    def record_visit(self, user_id: UUID, document_id: UUID) -> DocumentVisit:
        row = self._write_returning(
            query=self._SQL_UPSERT,
            params=[user_id, document_id],
            context_msg="PostgresDocumentVisitRepository: Failed to record visit",
            extra={"user_id": str(user_id), "document_id": str(document_id)},
        )
        return _row_to_visit(row)

    def list_recent_visits(self, user_id: UUID, limit: int) -> List[DocumentVisit]:
        rows = self._fetchall(
            query=self._SQL_LIST_RECENT,
            params=[user_id, limit],
            context_msg="PostgresDocumentVisitRepository: Failed to list visits",
            extra={"user_id": str(user_id), "limit": limit},
        )
        return [_row_to_visit(row) for row in rows]

    def delete_visits_for_documents(self, document_ids: List[UUID]) -> int:
        unique_ids = list(dict.fromkeys(document_ids))
        if not unique_ids:
            return 0
        return self._write_rowcount(
            query=self._SQL_DELETE_FOR_DOCUMENTS,
            params=[unique_ids],
            context_msg="PostgresDocumentVisitRepository: Failed to delete visits",
            extra={"count": len(unique_ids)},
        )


class PostgresDocumentVersionRepository(PostgresRepositoryBase):
    _SQL_APPEND = f"""
        INSERT INTO document_versions (document_id, version, title, content, editor_id)
        SELECT %s, COALESCE(MAX(version), 0) + 1, %s, %s, %s
        FROM document_versions
        WHERE document_id = %s
        RETURNING {_VERSION_COLUMNS}
    """

    _SQL_LIST = f"""
        SELECT {_VERSION_COLUMNS}
        FROM document_versions
        WHERE document_id = %s
        ORDER BY version DESC
        LIMIT %s
    """

    _SQL_DELETE_FOR_DOCUMENTS = (
        "DELETE FROM document_versions WHERE document_id = ANY(%s)"
    )

    def append_version(
        self, document: Document, editor_id: UUID | None
    ) -> DocumentVersion:
        row = self._write_returning(
            query=self._SQL_APPEND,
            params=[document.id, document.title, document.content, editor_id, document.id],
            context_msg="PostgresDocumentVersionRepository: Failed to append version",
            extra={"document_id": str(document.id)},
        )
        return _row_to_version(row)

    def list_versions(self, document_id: UUID, limit: int) -> List[DocumentVersion]:
        rows = self._fetchall(
            query=self._SQL_LIST,
            params=[document_id, limit],
            context_msg="PostgresDocumentVersionRepository: Failed to list versions",
            extra={"document_id": str(document_id), "limit": limit},
        )
        return [_row_to_version(row) for row in rows]

    def delete_versions_for_documents(self, document_ids: List[UUID]) -> int:
        unique_ids = list(dict.fromkeys(document_ids))
        if not unique_ids:
            return 0
        return self._write_rowcount(
            query=self._SQL_DELETE_FOR_DOCUMENTS,
            params=[unique_ids],
            context_msg="PostgresDocumentVersionRepository: Failed to delete versions",
            extra={"count": len(unique_ids)},
        )
