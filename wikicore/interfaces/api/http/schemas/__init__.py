"""Pydantic DTOs for the HTTP layer."""

from .documents import (
    CapabilityRes,
    CreateDocumentReq,
    DeleteDocumentRes,
    DocumentMemberReq,
    DocumentMemberRes,
    DocumentMembersRes,
    DocumentRes,
    DocumentsListRes,
    DocumentVersionRes,
    DocumentVersionsRes,
    MoveDocumentReq,
    PublicDocumentRes,
    PublicDocumentsListRes,
    ShareDocumentReq,
    ShareDocumentRes,
    ShareInfoRes,
    UpdateDocumentMemberReq,
    UpdateDocumentReq,
)
from .stars import StarredWikisRes, StarStatusRes, ToggleStarReq, ToggleStarRes
from .wikis import (
    CreateWikiReq,
    WikiMemberReq,
    WikiMemberRes,
    WikiMembersRes,
    WikiRes,
)

__all__ = [
    "CapabilityRes",
    "CreateDocumentReq",
    "CreateWikiReq",
    "DeleteDocumentRes",
    "DocumentMemberReq",
    "DocumentMemberRes",
    "DocumentMembersRes",
    "DocumentRes",
    "DocumentsListRes",
    "DocumentVersionRes",
    "DocumentVersionsRes",
    "MoveDocumentReq",
    "PublicDocumentRes",
    "PublicDocumentsListRes",
    "ShareDocumentReq",
    "ShareDocumentRes",
    "ShareInfoRes",
    "StarStatusRes",
    "StarredWikisRes",
    "ToggleStarReq",
    "ToggleStarRes",
    "UpdateDocumentMemberReq",
    "UpdateDocumentReq",
    "WikiMemberReq",
    "WikiMemberRes",
    "WikiMembersRes",
    "WikiRes",
]
