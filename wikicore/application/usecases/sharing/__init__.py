"""Public share transitions and public read path."""

from .public_documents import GetPublicDocumentUseCase, ListPublicChildrenUseCase
from .share_document import ShareDocumentUseCase

__all__ = [
    "GetPublicDocumentUseCase",
    "ListPublicChildrenUseCase",
    "ShareDocumentUseCase",
]
