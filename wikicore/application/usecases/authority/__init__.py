"""Explicit per-document grants (document members)."""

from .grant_document_member import (
    DocumentMemberInput,
    GrantDocumentMemberUseCase,
    UpdateDocumentMemberUseCase,
)
from .list_document_members import ListDocumentMembersUseCase
from .revoke_document_member import RevokeDocumentMemberUseCase

__all__ = [
    "DocumentMemberInput",
    "GrantDocumentMemberUseCase",
    "ListDocumentMembersUseCase",
    "RevokeDocumentMemberUseCase",
    "UpdateDocumentMemberUseCase",
]
