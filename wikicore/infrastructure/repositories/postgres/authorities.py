"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/authorities.py
============================================================
Class: PostgresDocAuthorityRepository

Responsibilities:
  - Persistir grants explícitos (tabla document_authorities).
  - Upsert por PK compuesto (document_id, user_id).
  - Borrado masivo para el cascade de delete de subárbol.

Collaborators:
  - PostgresRepositoryBase
  - domain.entities.DocAuthority
  - domain.capabilities.Capability (persistida como texto)

Constraints / Notes:
  - Un DELETE commiteado es visible para toda lectura posterior del pool.
============================================================
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from ....crosscutting.exceptions import DatabaseError
from ....domain.capabilities import Capability
from ....domain.entities import DocAuthority
from .base import PostgresRepositoryBase

_COLUMNS = "document_id, user_id, capability, granted_by, created_at"


def _row_to_authority(row: tuple) -> DocAuthority:
    return DocAuthority(
        document_id=row[0],
        user_id=row[1],
        capability=Capability(row[2]),
        granted_by=row[3],
        created_at=row[4],
    )


class PostgresDocAuthorityRepository(PostgresRepositoryBase):
    _SQL_GET = f"""
        SELECT {_COLUMNS}
        FROM document_authorities
        WHERE document_id = %s AND user_id = %s
    """

    _SQL_UPSERT = f"""
        INSERT INTO document_authorities (document_id, user_id, capability, granted_by)
        VALUES (%s, %s, %s, %s)
        ON CONFLICT (document_id, user_id)
        DO UPDATE SET capability = EXCLUDED.capability,
                      granted_by = EXCLUDED.granted_by
        RETURNING {_COLUMNS}
    """

    _SQL_DELETE = """
        DELETE FROM document_authorities
        WHERE document_id = %s AND user_id = %s
    """

    _SQL_LIST = f"""
        SELECT {_COLUMNS}
        FROM document_authorities
        WHERE document_id = %s
        ORDER BY created_at ASC, user_id ASC
    """

    _SQL_DELETE_FOR_DOCUMENTS = (
        "DELETE FROM document_authorities WHERE document_id = ANY(%s)"
    )

    def get_authority(
        self, document_id: UUID, user_id: UUID
    ) -> Optional[DocAuthority]:
        row = self._fetchone(
            query=self._SQL_GET,
            params=[document_id, user_id],
            context_msg="PostgresDocAuthorityRepository: Failed to get grant",
            extra={"document_id": str(document_id), "user_id": str(user_id)},
        )
        return _row_to_authority(row) if row else None

    def upsert_authority(self, authority: DocAuthority) -> DocAuthority:
        row = self._write_returning(
            query=self._SQL_UPSERT,
            params=[
                authority.document_id,
                authority.user_id,
                authority.capability.value,
                authority.granted_by,
            ],
            context_msg="PostgresDocAuthorityRepository: Failed to upsert grant",
            extra={
                "document_id": str(authority.document_id),
                "user_id": str(authority.user_id),
            },
        )
        if row is None:  # pragma: no cover (RETURNING siempre devuelve fila)
            raise DatabaseError("Unexpected: RETURNING clause returned no rows")
        return _row_to_authority(row)

    def delete_authority(self, document_id: UUID, user_id: UUID) -> bool:
        deleted = self._write_rowcount(
            query=self._SQL_DELETE,
            params=[document_id, user_id],
            context_msg="PostgresDocAuthorityRepository: Failed to delete grant",
            extra={"document_id": str(document_id), "user_id": str(user_id)},
        )
        return deleted > 0

    def list_authorities(self, document_id: UUID) -> List[DocAuthority]:
        rows = self._fetchall(
            query=self._SQL_LIST,
            params=[document_id],
            context_msg="PostgresDocAuthorityRepository: Failed to list grants",
            extra={"document_id": str(document_id)},
        )
        return [_row_to_authority(row) for row in rows]

    def delete_authorities_for_documents(self, document_ids: List[UUID]) -> int:
        unique_ids = list(dict.fromkeys(document_ids))
        if not unique_ids:
            return 0
        return self._write_rowcount(
            query=self._SQL_DELETE_FOR_DOCUMENTS,
            params=[unique_ids],
            context_msg="PostgresDocAuthorityRepository: Failed to delete grants",
            extra={"count": len(unique_ids)},
        )
