"""
===============================================================================
DOCUMENT USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Name:
    Document Use Case Results

Business Goal:
    Proveer tipos consistentes de resultados y errores para casos de uso de:
      - Documentos (crear, leer, editar, mover, borrar en cascada)
      - Grants por documento (miembros del documento)
      - Share público y lectura por enlace
      - Wikis y stars

Why (Context / Intención):
    - Los use cases devuelven resultados tipados en lugar de propagar excepciones.
    - Facilita:
        * mapeo uniforme a HTTP (status codes y payloads)
        * testeo de flujos por resultado (sin mocks de HTTP)
    - El campo `resource` en DocumentError indica qué recurso falló
      (ej. "Wiki", "Document", "Grant").

-------------------------------------------------------------------------------
CRC CARD (Module-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    document_results models (module)

Responsibilities:
    - Definir DocumentErrorCode como conjunto estable de categorías de error.
    - Definir DocumentError como contrato mínimo de error.
    - Definir DTOs de resultados por caso de uso.

Collaborators:
    - domain.entities: Document, DocAuthority, Wiki, WikiMember, Star
    - domain.capabilities: Capability
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List
from uuid import UUID

from ....domain.capabilities import Capability
from ....domain.entities import DocAuthority, Document, DocumentVersion


class DocumentErrorCode(str, Enum):
    """
    Categorías de error para casos de uso de documentos.

    Códigos:
      - VALIDATION_ERROR: input inválido/incompleto.
      - UNAUTHENTICATED: ruta autenticada sin actor.
      - FORBIDDEN: actor sin la capacidad requerida (o enlace inválido).
      - NOT_FOUND: recurso inexistente.
      - CONFLICT: colisión de reglas de negocio (duplicado, ciclo en move).
      - INTEGRITY_ERROR: árbol corrupto detectado (fail closed, alertado).
      - EXPIRED: enlace público vencido.
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTEGRITY_ERROR = "INTEGRITY_ERROR"
    EXPIRED = "EXPIRED"


@dataclass(frozen=True)
class DocumentError:
    """
    Error de caso de uso.

    Campos:
      - code: DocumentErrorCode (categoría estable)
      - message: mensaje humano (UI/logs)
      - resource: nombre del recurso afectado (opcional)
    """

    code: DocumentErrorCode
    message: str
    resource: str | None = None


@dataclass
class DocumentResult:
    """
    Resultado con un documento (crear, leer, editar, mover, leer público).

    Contrato:
      - Éxito: document != None y error == None
      - Falla:  document == None y error != None
    """

    document: Document | None = None
    error: DocumentError | None = None


@dataclass
class DocumentListResult:
    """Resultado para listados de documentos (hijos, raíces, públicos, stars)."""

    documents: List[Document] = field(default_factory=list)
    error: DocumentError | None = None


@dataclass
class DocumentVersionListResult:
    """Historial de versiones (más nueva primero)."""

    versions: List[DocumentVersion] = field(default_factory=list)
    error: DocumentError | None = None


@dataclass
class DeleteDocumentResult:
    """
    Resultado del borrado en cascada.

    Campos:
      - deleted_ids: documento + descendientes eliminados.
      - error: error tipado si la operación falló.
    """

    deleted_ids: List[UUID] = field(default_factory=list)
    error: DocumentError | None = None

    @property
    def deleted(self) -> bool:
        return bool(self.deleted_ids)


@dataclass
class CapabilityResult:
    """Capacidad efectiva de un actor sobre un documento (None = ninguna)."""

    capability: Capability | None = None
    matched_rule: str | None = None
    error: DocumentError | None = None


@dataclass
class DocumentMemberResult:
    """Resultado sobre un grant individual."""

    member: DocAuthority | None = None
    error: DocumentError | None = None


@dataclass
class DocumentMembersResult:
    """Grants explícitos de un documento."""

    members: List[DocAuthority] = field(default_factory=list)
    error: DocumentError | None = None


@dataclass
class RemoveMemberResult:
    removed: bool = False
    error: DocumentError | None = None


@dataclass
class ShareResult:
    """
    Resultado de share/unshare.

    changed=False indica un no-op idempotente (mismo estado / mismos parámetros).
    """

    document: Document | None = None
    changed: bool = False
    error: DocumentError | None = None
