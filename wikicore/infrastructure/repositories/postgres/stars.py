"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/stars.py
============================================================
Class: PostgresStarRepository

Responsibilities:
  - Persistir bookmarks (tabla stars): (user_id, wiki_id, document_id|NULL).
  - Listar con filtros (wiki, sólo documentos, sólo wikis).

Collaborators:
  - PostgresRepositoryBase
  - domain.entities.Star

Constraints / Notes:
  - Unicidad vía índice único sobre (user_id, wiki_id, COALESCE(document_id, nil-uuid)).
  - `IS NOT DISTINCT FROM` para comparar document_id nullable.
  - Orden: created_at DESC.
============================================================
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from ....domain.entities import Star
from .base import PostgresRepositoryBase

_COLUMNS = "user_id, wiki_id, document_id, created_at"


def _row_to_star(row: tuple) -> Star:
    return Star(user_id=row[0], wiki_id=row[1], document_id=row[2], created_at=row[3])


class PostgresStarRepository(PostgresRepositoryBase):
    _SQL_FIND = f"""
        SELECT {_COLUMNS}
        FROM stars
        WHERE user_id = %s AND wiki_id = %s AND document_id IS NOT DISTINCT FROM %s
    """

    _SQL_INSERT = f"""
        INSERT INTO stars (user_id, wiki_id, document_id)
        VALUES (%s, %s, %s)
        ON CONFLICT DO NOTHING
        RETURNING {_COLUMNS}
    """

    _SQL_DELETE = """
        DELETE FROM stars
        WHERE user_id = %s AND wiki_id = %s AND document_id IS NOT DISTINCT FROM %s
    """

    _SQL_LIST = f"""
        SELECT {_COLUMNS}
        FROM stars
        WHERE user_id = %s
          AND (%s::uuid IS NULL OR wiki_id = %s::uuid)
          AND (NOT %s OR document_id IS NOT NULL)
          AND (NOT %s OR document_id IS NULL)
        ORDER BY created_at DESC
    """

    _SQL_DELETE_FOR_DOCUMENTS = "DELETE FROM stars WHERE document_id = ANY(%s)"

    def find_star(
        self, user_id: UUID, wiki_id: UUID, document_id: UUID | None
    ) -> Optional[Star]:
        row = self._fetchone(
            query=self._SQL_FIND,
            params=[user_id, wiki_id, document_id],
            context_msg="PostgresStarRepository: Failed to find star",
            extra={"user_id": str(user_id), "wiki_id": str(wiki_id)},
        )
        return _row_to_star(row) if row else None

    def add_star(self, star: Star) -> Star:
        row = self._write_returning(
            query=self._SQL_INSERT,
            params=[star.user_id, star.wiki_id, star.document_id],
            context_msg="PostgresStarRepository: Failed to add star",
            extra={"user_id": str(star.user_id), "wiki_id": str(star.wiki_id)},
        )
        if row is None:
            # ON CONFLICT DO NOTHING: ya existía
            existing = self.find_star(star.user_id, star.wiki_id, star.document_id)
            return existing or star
        return _row_to_star(row)

    def remove_star(
        self, user_id: UUID, wiki_id: UUID, document_id: UUID | None
    ) -> bool:
        deleted = self._write_rowcount(
            query=self._SQL_DELETE,
            params=[user_id, wiki_id, document_id],
            context_msg="PostgresStarRepository: Failed to remove star",
            extra={"user_id": str(user_id), "wiki_id": str(wiki_id)},
        )
        return deleted > 0

    def list_stars(
        self,
        user_id: UUID,
        *,
        wiki_id: UUID | None = None,
        documents_only: bool = False,
        wikis_only: bool = False,
    ) -> List[Star]:
        rows = self._fetchall(
            query=self._SQL_LIST,
            params=[user_id, wiki_id, wiki_id, documents_only, wikis_only],
            context_msg="PostgresStarRepository: Failed to list stars",
            extra={"user_id": str(user_id)},
        )
        return [_row_to_star(row) for row in rows]

    def delete_stars_for_documents(self, document_ids: List[UUID]) -> int:
        unique_ids = list(dict.fromkeys(document_ids))
        if not unique_ids:
            return 0
        return self._write_rowcount(
            query=self._SQL_DELETE_FOR_DOCUMENTS,
            params=[unique_ids],
            context_msg="PostgresStarRepository: Failed to delete stars",
            extra={"count": len(unique_ids)},
        )
