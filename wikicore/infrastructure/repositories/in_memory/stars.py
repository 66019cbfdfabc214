"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/stars.py
============================================================
Class: InMemoryStarRepository

Responsibilities:
  - Almacenar bookmarks (user, wiki, document|None) en memoria.
  - Filtros de listado: por wiki, sólo documentos o sólo wikis.

Constraints / Notes:
  - Thread-safe: Lock protege el diccionario interno.
  - Un star no otorga acceso: los casos de uso re-filtran por autoridad.
  - Orden: created_at DESC (más reciente primero), como el repo Postgres.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from ....domain.entities import Star, utcnow
from ....domain.repositories import StarRepository

_StarKey = Tuple[UUID, UUID, Optional[UUID]]


class InMemoryStarRepository(StarRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._stars: Dict[_StarKey, Star] = {}

    def find_star(
        self, user_id: UUID, wiki_id: UUID, document_id: UUID | None
    ) -> Optional[Star]:
        with self._lock:
            return self._stars.get((user_id, wiki_id, document_id))

    def add_star(self, star: Star) -> Star:
        key = (star.user_id, star.wiki_id, star.document_id)
        with self._lock:
            existing = self._stars.get(key)
            if existing is not None:
                return existing
            stored = star if star.created_at else replace(star, created_at=utcnow())
            self._stars[key] = stored
            return stored

    def remove_star(
        self, user_id: UUID, wiki_id: UUID, document_id: UUID | None
    ) -> bool:
        with self._lock:
            return self._stars.pop((user_id, wiki_id, document_id), None) is not None

    def list_stars(
        self,
        user_id: UUID,
        *,
        wiki_id: UUID | None = None,
        documents_only: bool = False,
        wikis_only: bool = False,
    ) -> List[Star]:
        with self._lock:
            stars = [s for s in self._stars.values() if s.user_id == user_id]

        if wiki_id is not None:
            stars = [s for s in stars if s.wiki_id == wiki_id]
        if documents_only:
            stars = [s for s in stars if s.document_id is not None]
        if wikis_only:
            stars = [s for s in stars if s.document_id is None]

        oldest = datetime.min.replace(tzinfo=timezone.utc)
        stars.sort(key=lambda s: s.created_at or oldest, reverse=True)
        return stars

    def delete_stars_for_documents(self, document_ids: List[UUID]) -> int:
        targets = set(document_ids)
        with self._lock:
            keys = [key for key in self._stars if key[2] in targets]
            for key in keys:
                del self._stars[key]
            return len(keys)
