"""
===============================================================================
TARJETA CRC — schemas/stars.py
===============================================================================

Módulo:
    Schemas HTTP para stars (bookmarks de wikis y documentos)
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel

from .wikis import WikiRes


class ToggleStarReq(BaseModel):
    wiki_id: UUID
    document_id: UUID | None = None


class ToggleStarRes(BaseModel):
    starred: bool


class StarStatusRes(BaseModel):
    starred: bool


class StarredWikisRes(BaseModel):
    wikis: list[WikiRes]
