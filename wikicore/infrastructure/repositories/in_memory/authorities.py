"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/authorities.py
============================================================
Class: InMemoryDocAuthorityRepository

Responsibilities:
  - Almacenar grants explícitos (document_id, user_id) -> capability.
  - Upsert (replica el PK compuesto de Postgres: un grant por par).
  - Borrado masivo por lista de documentos (cascade de delete).

Constraints / Notes:
  - Thread-safe: Lock protege el diccionario interno.
  - Una revocación es visible de inmediato para toda lectura posterior.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from threading import Lock
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from ....domain.entities import DocAuthority, utcnow
from ....domain.repositories import DocAuthorityRepository


class InMemoryDocAuthorityRepository(DocAuthorityRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._grants: Dict[Tuple[UUID, UUID], DocAuthority] = {}

    def get_authority(
        self, document_id: UUID, user_id: UUID
    ) -> Optional[DocAuthority]:
        with self._lock:
            return self._grants.get((document_id, user_id))

    def upsert_authority(self, authority: DocAuthority) -> DocAuthority:
        stored = (
            authority
            if authority.created_at is not None
            else replace(authority, created_at=utcnow())
        )
        with self._lock:
            self._grants[(stored.document_id, stored.user_id)] = stored
        return stored

    def delete_authority(self, document_id: UUID, user_id: UUID) -> bool:
        with self._lock:
            return self._grants.pop((document_id, user_id), None) is not None

    def list_authorities(self, document_id: UUID) -> List[DocAuthority]:
        with self._lock:
            return [
                grant
                for (doc_id, _), grant in self._grants.items()
                if doc_id == document_id
            ]

    def delete_authorities_for_documents(self, document_ids: List[UUID]) -> int:
        targets = set(document_ids)
        with self._lock:
            keys = [key for key in self._grants if key[0] in targets]
            for key in keys:
                del self._grants[key]
            return len(keys)
