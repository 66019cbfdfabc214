"""
===============================================================================
TARJETA CRC — schemas/wikis.py
===============================================================================

Módulo:
    Schemas HTTP para Wikis y su roster de miembros
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from wikicore.domain.entities import Wiki, WikiMember, WikiRole, WikiVisibility


class CreateWikiReq(BaseModel):
    """Request para crear wiki."""

    name: Annotated[str, Field(..., min_length=1, max_length=200)]
    description: str | None = Field(default=None, max_length=2000)
    visibility: WikiVisibility = Field(default=WikiVisibility.PRIVATE)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else None


class WikiMemberReq(BaseModel):
    role: WikiRole = WikiRole.MEMBER


class WikiRes(BaseModel):
    id: UUID
    name: str
    creator_id: UUID
    visibility: WikiVisibility
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, wiki: Wiki) -> "WikiRes":
        return cls(
            id=wiki.id,
            name=wiki.name,
            creator_id=wiki.creator_id,
            visibility=wiki.visibility,
            description=wiki.description,
            created_at=wiki.created_at,
            updated_at=wiki.updated_at,
        )


class WikiMemberRes(BaseModel):
    wiki_id: UUID
    user_id: UUID
    role: WikiRole
    created_at: datetime | None = None

    @classmethod
    def from_entity(cls, member: WikiMember) -> "WikiMemberRes":
        return cls(
            wiki_id=member.wiki_id,
            user_id=member.user_id,
            role=member.role,
            created_at=member.created_at,
        )


class WikiMembersRes(BaseModel):
    members: list[WikiMemberRes]
