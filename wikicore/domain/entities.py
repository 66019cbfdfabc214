"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (Wiki, WikiMember, Document, ShareConfig,
    DocAuthority, Star, DocumentVisit, DocumentVersion)

Responsabilidades:
    - Definir estructuras centrales del negocio (sin infraestructura).
    - Brindar helpers mínimos (métodos) para mantener invariantes simples:
        * is_public exige status PUBLIC y configuración de share
        * expiración del share evaluada contra un "now" explícito
    - Mantener tipos claros para casos de uso y repositorios.

Colaboradores:
    - domain.repositories: persisten/recuperan estas entidades.
    - domain.authority / domain.sharing: leen estas entidades para decidir.
    - interfaces/api: serializan DTOs basados en estas entidades.

Principios:
    - Sin dependencias a DB/FastAPI.
    - Datos + comportamiento mínimo.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional
from uuid import UUID

from .capabilities import Capability


def utcnow() -> datetime:
    """Fecha/hora UTC (fuente única de tiempo del dominio)."""
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Wiki
# ---------------------------------------------------------------------------


class WikiVisibility(str, Enum):
    """Visibilidad del wiki."""

    PRIVATE = "private"
    PUBLIC = "public"


class WikiRole(str, Enum):
    """Rol de un miembro dentro del wiki."""

    MEMBER = "member"
    ADMIN = "admin"


@dataclass
class Wiki:
    """Wiki: namespace de documentos con su propio roster de miembros."""

    id: UUID
    name: str
    creator_id: UUID
    visibility: WikiVisibility = WikiVisibility.PRIVATE
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_public(self) -> bool:
        return self.visibility == WikiVisibility.PUBLIC


@dataclass(frozen=True, slots=True)
class WikiMember:
    """Fila de membresía (wiki_id, user_id) -> rol."""

    wiki_id: UUID
    user_id: UUID
    role: WikiRole = WikiRole.MEMBER
    created_at: Optional[datetime] = None


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------


class DocumentStatus(str, Enum):
    """Estado de visibilidad del documento."""

    PRIVATE = "private"
    PUBLIC = "public"


@dataclass(frozen=True, slots=True)
class ShareConfig:
    """
    Configuración de share público.

    - token: secreto del enlace (único).
    - password_hash: Argon2 del password opcional (nunca el password plano).
    - expires_at: expiración opcional (UTC).
    - include_descendants: si el share se extiende al subárbol.
    """

    token: str
    password_hash: Optional[str] = None
    expires_at: Optional[datetime] = None
    include_descendants: bool = False
    created_at: Optional[datetime] = None

    @property
    def has_password(self) -> bool:
        return bool(self.password_hash)

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and now >= self.expires_at


@dataclass
class Document:
    """
    Documento: nodo de un bosque por wiki.

    Importante:
      - parent_id None => raíz del wiki.
      - content es opaco para el motor de autoridad.
      - share_config presente <=> status PUBLIC; la transición la hace
        DocumentRepository.set_share_state en una sola escritura.
    """

    id: UUID
    wiki_id: UUID
    creator_id: UUID
    title: str = ""
    parent_id: Optional[UUID] = None
    status: DocumentStatus = DocumentStatus.PRIVATE
    content: Optional[str] = None
    share_config: Optional[ShareConfig] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    @property
    def is_public(self) -> bool:
        return self.status == DocumentStatus.PUBLIC and self.share_config is not None


# ---------------------------------------------------------------------------
# Grants (DocAuthority)
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class DocAuthority:
    """Grant explícito: (document_id, user_id) -> capability. Único por par."""

    document_id: UUID
    user_id: UUID
    capability: Capability
    granted_by: Optional[UUID] = None
    created_at: Optional[datetime] = None


# ---------------------------------------------------------------------------
# Star
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Star:
    """
    Bookmark de usuario.

    - (user, wiki, None) => wiki marcado.
    - (user, wiki, document) => documento marcado dentro del wiki.
    """

    user_id: UUID
    wiki_id: UUID
    document_id: Optional[UUID] = None
    created_at: Optional[datetime] = None


# ---------------------------------------------------------------------------
# Actividad: visitas y versiones
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class DocumentVisit:
    """Última visita de un usuario a un documento (una fila por par)."""

    user_id: UUID
    document_id: UUID
    visited_at: Optional[datetime] = None


@dataclass(frozen=True, slots=True)
class DocumentVersion:
    """
    Snapshot de título/contenido tras una edición.

    - version: 1, 2, 3... por documento, sin huecos dentro de un store.
    - editor_id: actor que produjo esta versión.
    """

    document_id: UUID
    version: int
    title: str
    content: Optional[str] = None
    editor_id: Optional[UUID] = None
    created_at: Optional[datetime] = None
