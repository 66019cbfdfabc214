"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/documents.py
============================================================
Class: PostgresDocumentRepository

Responsibilities:
  - Persistir el bosque de documentos (tabla documents).
  - Navegación: hijos directos (idx parent_id) y raíces por wiki.
  - Escribir status + configuración de share en un solo UPDATE.
  - Borrado por lista de ids (el caso de uso arma el subárbol) en un solo
    DELETE: grants, stars, visitas y versiones caen por ON DELETE CASCADE.

Collaborators:
  - PostgresRepositoryBase (pool, retry de lecturas, DatabaseError)
  - domain.entities.Document, DocumentStatus, ShareConfig
  - psycopg.types.json.Json (metadata)

Constraints / Notes:
  - Repo puro: NO decide autoridad ni valida ciclos.
  - share_token es UNIQUE; las columnas share_* son NULL si status=private
    (CHECK constraint en la migración).
  - Orden determinístico: created_at ASC, id ASC.
============================================================
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from psycopg.types.json import Json

from ....crosscutting.exceptions import DatabaseError
from ....domain.entities import Document, DocumentStatus, ShareConfig
from .base import PostgresRepositoryBase

_COLUMNS = """
    id, wiki_id, creator_id, parent_id, title, content, status,
    share_token, share_password_hash, share_expires_at,
    share_include_descendants, share_created_at,
    metadata, created_at, updated_at
"""


def _row_to_document(row: tuple) -> Document:
    share_config = None
    if row[7] is not None:
        share_config = ShareConfig(
            token=row[7],
            password_hash=row[8],
            expires_at=row[9],
            include_descendants=bool(row[10]),
            created_at=row[11],
        )
    return Document(
        id=row[0],
        wiki_id=row[1],
        creator_id=row[2],
        parent_id=row[3],
        title=row[4] or "",
        content=row[5],
        status=DocumentStatus(row[6]),
        share_config=share_config,
        metadata=row[12] or {},
        created_at=row[13],
        updated_at=row[14],
    )


class PostgresDocumentRepository(PostgresRepositoryBase):
    _SQL_GET = f"SELECT {_COLUMNS} FROM documents WHERE id = %s"

    _SQL_INSERT = f"""
        INSERT INTO documents (
            id, wiki_id, creator_id, parent_id, title, content, status, metadata
        )
        VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
        RETURNING {_COLUMNS}
    """

    _SQL_UPDATE = f"""
        UPDATE documents
        SET title = COALESCE(%s, title),
            content = COALESCE(%s, content),
            updated_at = NOW()
        WHERE id = %s
        RETURNING {_COLUMNS}
    """

    _SQL_LIST_CHILDREN = f"""
        SELECT {_COLUMNS}
        FROM documents
        WHERE parent_id = %s
        ORDER BY created_at ASC, id ASC
    """

    _SQL_LIST_ROOTS = f"""
        SELECT {_COLUMNS}
        FROM documents
        WHERE wiki_id = %s AND parent_id IS NULL
        ORDER BY created_at ASC, id ASC
    """

    _SQL_LIST_BY_IDS = f"""
        SELECT {_COLUMNS}
        FROM documents
        WHERE id = ANY(%s)
        ORDER BY created_at ASC, id ASC
    """

    _SQL_SET_SHARE = f"""
        UPDATE documents
        SET status = %s,
            share_token = %s,
            share_password_hash = %s,
            share_expires_at = %s,
            share_include_descendants = %s,
            share_created_at = %s,
            updated_at = NOW()
        WHERE id = %s
        RETURNING {_COLUMNS}
    """

    _SQL_MOVE = f"""
        UPDATE documents
        SET parent_id = %s, updated_at = NOW()
        WHERE id = %s
        RETURNING {_COLUMNS}
    """

    _SQL_DELETE_MANY = "DELETE FROM documents WHERE id = ANY(%s)"

    # =========================================================
    # Public API
    # =========================================================
    def get_document(self, document_id: UUID) -> Optional[Document]:
        row = self._fetchone(
            query=self._SQL_GET,
            params=[document_id],
            context_msg="PostgresDocumentRepository: Failed to get document",
            extra={"document_id": str(document_id)},
        )
        return _row_to_document(row) if row else None

    def create_document(self, document: Document) -> Document:
        row = self._write_returning(
            query=self._SQL_INSERT,
            params=[
                document.id,
                document.wiki_id,
                document.creator_id,
                document.parent_id,
                document.title,
                document.content,
                document.status.value,
                Json(document.metadata or {}),
            ],
            context_msg="PostgresDocumentRepository: Failed to create document",
            extra={"document_id": str(document.id), "wiki_id": str(document.wiki_id)},
        )
        if row is None:  # pragma: no cover (RETURNING siempre devuelve fila)
            raise DatabaseError("Unexpected: RETURNING clause returned no rows")
        return _row_to_document(row)

    def update_document(
        self,
        document_id: UUID,
        *,
        title: str | None = None,
        content: str | None = None,
    ) -> Optional[Document]:
        row = self._write_returning(
            query=self._SQL_UPDATE,
            params=[title, content, document_id],
            context_msg="PostgresDocumentRepository: Failed to update document",
            extra={"document_id": str(document_id)},
        )
        return _row_to_document(row) if row else None

    def list_children(self, document_id: UUID) -> List[Document]:
        rows = self._fetchall(
            query=self._SQL_LIST_CHILDREN,
            params=[document_id],
            context_msg="PostgresDocumentRepository: Failed to list children",
            extra={"document_id": str(document_id)},
        )
        return [_row_to_document(row) for row in rows]

    def list_root_documents(self, wiki_id: UUID) -> List[Document]:
        rows = self._fetchall(
            query=self._SQL_LIST_ROOTS,
            params=[wiki_id],
            context_msg="PostgresDocumentRepository: Failed to list root documents",
            extra={"wiki_id": str(wiki_id)},
        )
        return [_row_to_document(row) for row in rows]

    def list_documents_by_ids(self, document_ids: List[UUID]) -> List[Document]:
        unique_ids = list(dict.fromkeys(document_ids))
        if not unique_ids:
            return []
        rows = self._fetchall(
            query=self._SQL_LIST_BY_IDS,
            params=[unique_ids],
            context_msg="PostgresDocumentRepository: Failed to list documents by ids",
            extra={"count": len(unique_ids)},
        )
        return [_row_to_document(row) for row in rows]

    def set_share_state(
        self,
        document_id: UUID,
        *,
        status: DocumentStatus,
        share_config: ShareConfig | None,
    ) -> Optional[Document]:
        if (status == DocumentStatus.PUBLIC) != (share_config is not None):
            raise ValueError("share_config must be present iff status is PUBLIC")
        config = share_config
        row = self._write_returning(
            query=self._SQL_SET_SHARE,
            params=[
                status.value,
                config.token if config else None,
                config.password_hash if config else None,
                config.expires_at if config else None,
                config.include_descendants if config else False,
                config.created_at if config else None,
                document_id,
            ],
            context_msg="PostgresDocumentRepository: Failed to set share state",
            extra={"document_id": str(document_id), "status": status.value},
        )
        return _row_to_document(row) if row else None

    def move_document(
        self, document_id: UUID, new_parent_id: UUID | None
    ) -> Optional[Document]:
        row = self._write_returning(
            query=self._SQL_MOVE,
            params=[new_parent_id, document_id],
            context_msg="PostgresDocumentRepository: Failed to move document",
            extra={
                "document_id": str(document_id),
                "new_parent_id": str(new_parent_id) if new_parent_id else None,
            },
        )
        return _row_to_document(row) if row else None

    def delete_documents(self, document_ids: List[UUID]) -> int:
        unique_ids = list(dict.fromkeys(document_ids))
        if not unique_ids:
            return 0
        return self._write_rowcount(
            query=self._SQL_DELETE_MANY,
            params=[unique_ids],
            context_msg="PostgresDocumentRepository: Failed to delete documents",
            extra={"count": len(unique_ids)},
        )
