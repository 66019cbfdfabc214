"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/wikis.py
============================================================
Classes:
  - InMemoryWikiRepository
  - InMemoryMembershipRepository

Responsibilities:
  - Almacenar wikis y su roster de miembros en memoria.
  - Membresía keyed por (wiki_id, user_id): upsert reemplaza el rol.

Constraints / Notes:
  - Thread-safe: Lock por repositorio.
  - Repo puro: NO decide RBAC.
  - Orden determinístico: wikis por created_at DESC, name ASC;
    miembros por insertion order.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from ....domain.entities import Wiki, WikiMember, utcnow
from ....domain.repositories import MembershipRepository, WikiRepository


class InMemoryWikiRepository(WikiRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._wikis: Dict[UUID, Wiki] = {}

    def get_wiki(self, wiki_id: UUID) -> Optional[Wiki]:
        with self._lock:
            wiki = self._wikis.get(wiki_id)
            return replace(wiki) if wiki is not None else None

    def create_wiki(self, wiki: Wiki) -> Wiki:
        with self._lock:
            if wiki.id in self._wikis:
                raise ValueError(f"wiki {wiki.id} already exists")
            stored = replace(wiki)
            if stored.created_at is None:
                stored.created_at = utcnow()
                stored.updated_at = stored.created_at
            self._wikis[stored.id] = stored
            return replace(stored)

    def list_wikis_by_ids(self, wiki_ids: List[UUID]) -> List[Wiki]:
        wanted = set(wiki_ids)
        with self._lock:
            found = [replace(w) for w_id, w in self._wikis.items() if w_id in wanted]
        oldest = datetime.min.replace(tzinfo=timezone.utc)
        found.sort(key=lambda w: w.name)
        found.sort(key=lambda w: w.created_at or oldest, reverse=True)
        return found


class InMemoryMembershipRepository(MembershipRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._members: Dict[Tuple[UUID, UUID], WikiMember] = {}

    def get_membership(self, wiki_id: UUID, user_id: UUID) -> Optional[WikiMember]:
        with self._lock:
            return self._members.get((wiki_id, user_id))

    def upsert_member(self, member: WikiMember) -> WikiMember:
        key = (member.wiki_id, member.user_id)
        with self._lock:
            existing = self._members.get(key)
            stored = replace(
                member,
                created_at=(existing.created_at if existing else None)
                or member.created_at
                or utcnow(),
            )
            self._members[key] = stored
            return stored

    def remove_member(self, wiki_id: UUID, user_id: UUID) -> bool:
        with self._lock:
            return self._members.pop((wiki_id, user_id), None) is not None

    def list_members(self, wiki_id: UUID) -> List[WikiMember]:
        with self._lock:
            return [m for (w_id, _), m in self._members.items() if w_id == wiki_id]
