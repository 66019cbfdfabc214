"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/documents.py
============================================================
Class: InMemoryDocumentRepository

Responsibilities:
  - Almacenar el bosque de documentos en memoria (tests / local dev).
  - Navegación: hijos directos y raíces por wiki.
  - Escrituras de share (status + share_config en una sola operación).
  - Borrado por lista explícita de ids (el caller arma el subárbol).

Collaborators:
  - domain.entities.Document, DocumentStatus, ShareConfig
  - domain.repositories.DocumentRepository (contrato)

Constraints / Notes:
  - Thread-safe: Lock protege el diccionario interno.
  - Repo puro: NO decide autoridad ni valida ciclos (move es "tonto").
  - Copias defensivas: se devuelven copias (Document es mutable).
  - Orden alineado con Postgres: created_at ASC NULLS LAST, id ASC.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from ....domain.entities import Document, DocumentStatus, ShareConfig, utcnow
from ....domain.repositories import DocumentRepository

_FAR_FUTURE = datetime.max.replace(tzinfo=timezone.utc)


class InMemoryDocumentRepository(DocumentRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._documents: Dict[UUID, Document] = {}

    # =========================================================
    # Helpers internos
    # =========================================================
    @staticmethod
    def _copy(document: Document) -> Document:
        return replace(document, metadata=dict(document.metadata))

    @classmethod
    def _sorted(cls, items: Iterable[Document]) -> List[Document]:
        return [
            cls._copy(doc)
            for doc in sorted(
                items,
                key=lambda d: (d.created_at or _FAR_FUTURE, str(d.id)),
            )
        ]

    # =========================================================
    # API del repositorio
    # =========================================================
    def get_document(self, document_id: UUID) -> Optional[Document]:
        with self._lock:
            document = self._documents.get(document_id)
            return self._copy(document) if document is not None else None

    def create_document(self, document: Document) -> Document:
        with self._lock:
            if document.id in self._documents:
                raise ValueError(f"document {document.id} already exists")
            stored = self._copy(document)
            if stored.created_at is None:
                stored.created_at = utcnow()
                stored.updated_at = stored.created_at
            self._documents[stored.id] = stored
            return self._copy(stored)

    def update_document(
        self,
        document_id: UUID,
        *,
        title: str | None = None,
        content: str | None = None,
    ) -> Optional[Document]:
        with self._lock:
            current = self._documents.get(document_id)
            if current is None:
                return None
            updated = replace(
                current,
                title=current.title if title is None else title,
                content=current.content if content is None else content,
                updated_at=utcnow(),
            )
            self._documents[document_id] = updated
            return self._copy(updated)

    def list_children(self, document_id: UUID) -> List[Document]:
        with self._lock:
            children = [
                doc for doc in self._documents.values() if doc.parent_id == document_id
            ]
            return self._sorted(children)

    def list_root_documents(self, wiki_id: UUID) -> List[Document]:
        with self._lock:
            roots = [
                doc
                for doc in self._documents.values()
                if doc.wiki_id == wiki_id and doc.parent_id is None
            ]
            return self._sorted(roots)

    def list_documents_by_ids(self, document_ids: List[UUID]) -> List[Document]:
        wanted = set(document_ids)
        if not wanted:
            return []
        with self._lock:
            return self._sorted(
                doc for doc_id, doc in self._documents.items() if doc_id in wanted
            )

    def set_share_state(
        self,
        document_id: UUID,
        *,
        status: DocumentStatus,
        share_config: ShareConfig | None,
    ) -> Optional[Document]:
        if (status == DocumentStatus.PUBLIC) != (share_config is not None):
            raise ValueError("share_config must be present iff status is PUBLIC")
        with self._lock:
            current = self._documents.get(document_id)
            if current is None:
                return None
            if share_config is not None:
                # token único entre documentos (UNIQUE en Postgres)
                for other in self._documents.values():
                    if (
                        other.id != document_id
                        and other.share_config is not None
                        and other.share_config.token == share_config.token
                    ):
                        raise ValueError("share token already in use")
            updated = replace(
                current,
                status=status,
                share_config=share_config,
                updated_at=utcnow(),
            )
            self._documents[document_id] = updated
            return self._copy(updated)

    def move_document(
        self, document_id: UUID, new_parent_id: UUID | None
    ) -> Optional[Document]:
        with self._lock:
            current = self._documents.get(document_id)
            if current is None:
                return None
            updated = replace(current, parent_id=new_parent_id, updated_at=utcnow())
            self._documents[document_id] = updated
            return self._copy(updated)

    def delete_documents(self, document_ids: List[UUID]) -> int:
        with self._lock:
            deleted = 0
            for document_id in document_ids:
                if self._documents.pop(document_id, None) is not None:
                    deleted += 1
            return deleted
