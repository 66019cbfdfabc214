"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/wikis.py
============================================================
Classes:
  - PostgresWikiRepository (tabla wikis)
  - PostgresMembershipRepository (tabla wiki_members)

Responsibilities:
  - Persistir wikis y su roster (wiki_id, user_id) -> role.
  - Upsert de membresía vía ON CONFLICT sobre el PK compuesto.

Collaborators:
  - PostgresRepositoryBase
  - domain.entities.Wiki, WikiMember, WikiRole, WikiVisibility

Constraints / Notes:
  - Repo puro: NO aplica RBAC.
  - Orden: wikis por created_at DESC, name ASC; miembros por created_at ASC.
============================================================
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from ....crosscutting.exceptions import DatabaseError
from ....domain.entities import Wiki, WikiMember, WikiRole, WikiVisibility
from .base import PostgresRepositoryBase

_WIKI_COLUMNS = "id, name, creator_id, visibility, description, created_at, updated_at"


def _row_to_wiki(row: tuple) -> Wiki:
    return Wiki(
        id=row[0],
        name=row[1],
        creator_id=row[2],
        visibility=WikiVisibility(row[3]),
        description=row[4],
        created_at=row[5],
        updated_at=row[6],
    )


def _row_to_member(row: tuple) -> WikiMember:
    return WikiMember(
        wiki_id=row[0], user_id=row[1], role=WikiRole(row[2]), created_at=row[3]
    )


class PostgresWikiRepository(PostgresRepositoryBase):
    _SQL_GET = f"SELECT {_WIKI_COLUMNS} FROM wikis WHERE id = %s"

    _SQL_INSERT = f"""
        INSERT INTO wikis (id, name, creator_id, visibility, description)
        VALUES (%s, %s, %s, %s, %s)
        RETURNING {_WIKI_COLUMNS}
    """

    _SQL_LIST_BY_IDS = f"""
        SELECT {_WIKI_COLUMNS}
        FROM wikis
        WHERE id = ANY(%s)
        ORDER BY created_at DESC NULLS LAST, name ASC
    """

    def get_wiki(self, wiki_id: UUID) -> Optional[Wiki]:
        row = self._fetchone(
            query=self._SQL_GET,
            params=[wiki_id],
            context_msg="PostgresWikiRepository: Failed to get wiki",
            extra={"wiki_id": str(wiki_id)},
        )
        return _row_to_wiki(row) if row else None

    def create_wiki(self, wiki: Wiki) -> Wiki:
        row = self._write_returning(
            query=self._SQL_INSERT,
            params=[
                wiki.id,
                wiki.name,
                wiki.creator_id,
                wiki.visibility.value,
                wiki.description,
            ],
            context_msg="PostgresWikiRepository: Failed to create wiki",
            extra={"wiki_id": str(wiki.id)},
        )
        if row is None:  # pragma: no cover (RETURNING siempre devuelve fila)
            raise DatabaseError("Unexpected: RETURNING clause returned no rows")
        return _row_to_wiki(row)

    def list_wikis_by_ids(self, wiki_ids: List[UUID]) -> List[Wiki]:
        unique_ids = list(dict.fromkeys(wiki_ids))
        if not unique_ids:
            return []
        rows = self._fetchall(
            query=self._SQL_LIST_BY_IDS,
            params=[unique_ids],
            context_msg="PostgresWikiRepository: Failed to list wikis by ids",
            extra={"count": len(unique_ids)},
        )
        return [_row_to_wiki(row) for row in rows]


class PostgresMembershipRepository(PostgresRepositoryBase):
    _SQL_GET = """
        SELECT wiki_id, user_id, role, created_at
        FROM wiki_members
        WHERE wiki_id = %s AND user_id = %s
    """

    _SQL_UPSERT = """
        INSERT INTO wiki_members (wiki_id, user_id, role)
        VALUES (%s, %s, %s)
        ON CONFLICT (wiki_id, user_id)
        DO UPDATE SET role = EXCLUDED.role
        RETURNING wiki_id, user_id, role, created_at
    """

    _SQL_DELETE = "DELETE FROM wiki_members WHERE wiki_id = %s AND user_id = %s"

    _SQL_LIST = """
        SELECT wiki_id, user_id, role, created_at
        FROM wiki_members
        WHERE wiki_id = %s
        ORDER BY created_at ASC, user_id ASC
    """

    def get_membership(self, wiki_id: UUID, user_id: UUID) -> Optional[WikiMember]:
        row = self._fetchone(
            query=self._SQL_GET,
            params=[wiki_id, user_id],
            context_msg="PostgresMembershipRepository: Failed to get membership",
            extra={"wiki_id": str(wiki_id), "user_id": str(user_id)},
        )
        return _row_to_member(row) if row else None

    def upsert_member(self, member: WikiMember) -> WikiMember:
        row = self._write_returning(
            query=self._SQL_UPSERT,
            params=[member.wiki_id, member.user_id, member.role.value],
            context_msg="PostgresMembershipRepository: Failed to upsert member",
            extra={"wiki_id": str(member.wiki_id), "user_id": str(member.user_id)},
        )
        if row is None:  # pragma: no cover (RETURNING siempre devuelve fila)
            raise DatabaseError("Unexpected: RETURNING clause returned no rows")
        return _row_to_member(row)

    def remove_member(self, wiki_id: UUID, user_id: UUID) -> bool:
        deleted = self._write_rowcount(
            query=self._SQL_DELETE,
            params=[wiki_id, user_id],
            context_msg="PostgresMembershipRepository: Failed to remove member",
            extra={"wiki_id": str(wiki_id), "user_id": str(user_id)},
        )
        return deleted > 0

    def list_members(self, wiki_id: UUID) -> List[WikiMember]:
        rows = self._fetchall(
            query=self._SQL_LIST,
            params=[wiki_id],
            context_msg="PostgresMembershipRepository: Failed to list members",
            extra={"wiki_id": str(wiki_id)},
        )
        return [_row_to_member(row) for row in rows]
