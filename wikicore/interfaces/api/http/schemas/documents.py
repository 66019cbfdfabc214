"""
===============================================================================
TARJETA CRC — schemas/documents.py
===============================================================================

Módulo:
    Schemas HTTP para Documentos, grants y share público

Responsabilidades:
    - Definir DTOs de request/response para endpoints de documentos.
    - Validar campos en el borde (títulos, passwords, capacidades).
    - Nunca exponer password_hash; el token de share sólo se devuelve en la
      respuesta de share (quien puede compartir).

Colaboradores:
    - domain.entities (Document, DocAuthority, DocumentStatus, DocumentVersion)
    - domain.capabilities.Capability
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from wikicore.domain.capabilities import Capability
from wikicore.domain.entities import (
    DocAuthority,
    Document,
    DocumentStatus,
    DocumentVersion,
)


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class CreateDocumentReq(BaseModel):
    """Request para crear documento (raíz si parent_id es None)."""

    title: Annotated[str, Field(..., min_length=1, max_length=500)]
    content: str | None = None
    parent_id: UUID | None = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        return v.strip()


class UpdateDocumentReq(BaseModel):
    """Request para editar documento (patch)."""

    title: str | None = Field(default=None, min_length=1, max_length=500)
    content: str | None = None


class MoveDocumentReq(BaseModel):
    """Nuevo padre dentro del mismo wiki (None => raíz)."""

    parent_id: UUID | None = None


class DocumentMemberReq(BaseModel):
    user_id: UUID
    capability: Capability


class UpdateDocumentMemberReq(BaseModel):
    capability: Capability


class ShareDocumentReq(BaseModel):
    """
    Request de share/unshare.

    - enable=False: vuelve a private (token/password/expiry se descartan).
    - password: texto plano; se guarda sólo su hash Argon2.
    - expires_at: debe incluir zona horaria.
    """

    enable: bool
    password: str | None = Field(default=None, min_length=1, max_length=256)
    expires_at: datetime | None = None
    include_descendants: bool = False
    regenerate_token: bool = False

    @field_validator("expires_at")
    @classmethod
    def require_timezone(cls, v: datetime | None) -> datetime | None:
        if v is not None and v.tzinfo is None:
            raise ValueError("expires_at debe incluir zona horaria")
        return v


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class ShareInfoRes(BaseModel):
    """Estado del share sin secretos."""

    has_password: bool = False
    expires_at: datetime | None = None
    include_descendants: bool = False


class DocumentRes(BaseModel):
    id: UUID
    wiki_id: UUID
    parent_id: UUID | None = None
    creator_id: UUID
    title: str
    content: str | None = None
    status: DocumentStatus
    share: ShareInfoRes | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, document: Document) -> "DocumentRes":
        config = document.share_config
        return cls(
            id=document.id,
            wiki_id=document.wiki_id,
            parent_id=document.parent_id,
            creator_id=document.creator_id,
            title=document.title,
            content=document.content,
            status=document.status,
            share=(
                ShareInfoRes(
                    has_password=config.has_password,
                    expires_at=config.expires_at,
                    include_descendants=config.include_descendants,
                )
                if config is not None
                else None
            ),
            created_at=document.created_at,
            updated_at=document.updated_at,
        )


class DocumentsListRes(BaseModel):
    documents: list[DocumentRes]


class DocumentVersionRes(BaseModel):
    version: int
    title: str
    content: str | None = None
    editor_id: UUID | None = None
    created_at: datetime | None = None

    @classmethod
    def from_entity(cls, version: DocumentVersion) -> "DocumentVersionRes":
        return cls(
            version=version.version,
            title=version.title,
            content=version.content,
            editor_id=version.editor_id,
            created_at=version.created_at,
        )


class DocumentVersionsRes(BaseModel):
    document_id: UUID
    versions: list[DocumentVersionRes]


class DeleteDocumentRes(BaseModel):
    deleted_ids: list[UUID]


class CapabilityRes(BaseModel):
    document_id: UUID
    capability: Capability | None = None
    matched_rule: str | None = None


class DocumentMemberRes(BaseModel):
    document_id: UUID
    user_id: UUID
    capability: Capability
    granted_by: UUID | None = None
    created_at: datetime | None = None

    @classmethod
    def from_entity(cls, grant: DocAuthority) -> "DocumentMemberRes":
        return cls(
            document_id=grant.document_id,
            user_id=grant.user_id,
            capability=grant.capability,
            granted_by=grant.granted_by,
            created_at=grant.created_at,
        )


class DocumentMembersRes(BaseModel):
    members: list[DocumentMemberRes]


class ShareDocumentRes(BaseModel):
    """Respuesta de share: incluye el token (solo la ve quien puede compartir)."""

    document: DocumentRes
    token: str | None = None
    changed: bool


class PublicDocumentRes(BaseModel):
    """Vista pública: sin creador, grants ni configuración de share."""

    id: UUID
    parent_id: UUID | None = None
    title: str
    content: str | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, document: Document) -> "PublicDocumentRes":
        return cls(
            id=document.id,
            parent_id=document.parent_id,
            title=document.title,
            content=document.content,
            updated_at=document.updated_at,
        )


class PublicDocumentsListRes(BaseModel):
    documents: list[PublicDocumentRes]
