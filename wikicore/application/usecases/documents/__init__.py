"""
===============================================================================
DOCUMENT USE CASES PACKAGE (Public API / Exports)
===============================================================================

Re-exporta los casos de uso de documentos y sus resultados/errores para que
el resto de la aplicación no dependa de la estructura interna del paquete.
===============================================================================
"""

from __future__ import annotations

from .create_document import CreateDocumentInput, CreateDocumentUseCase
from .delete_document import DeleteDocumentUseCase
from .document_activity import ListDocumentVersionsUseCase, ListRecentDocumentsUseCase
from .document_results import (
    CapabilityResult,
    DeleteDocumentResult,
    DocumentError,
    DocumentErrorCode,
    DocumentListResult,
    DocumentMemberResult,
    DocumentMembersResult,
    DocumentResult,
    DocumentVersionListResult,
    RemoveMemberResult,
    ShareResult,
)
from .get_document import GetDocumentUseCase
from .get_effective_capability import GetEffectiveCapabilityUseCase
from .list_documents import ListChildDocumentsUseCase, ListRootDocumentsUseCase
from .move_document import MoveDocumentUseCase
from .update_document import UpdateDocumentInput, UpdateDocumentUseCase

__all__ = [
    "CapabilityResult",
    "CreateDocumentInput",
    "CreateDocumentUseCase",
    "DeleteDocumentResult",
    "DeleteDocumentUseCase",
    "DocumentError",
    "DocumentErrorCode",
    "DocumentListResult",
    "DocumentMemberResult",
    "DocumentMembersResult",
    "DocumentResult",
    "DocumentVersionListResult",
    "GetDocumentUseCase",
    "GetEffectiveCapabilityUseCase",
    "ListChildDocumentsUseCase",
    "ListDocumentVersionsUseCase",
    "ListRecentDocumentsUseCase",
    "ListRootDocumentsUseCase",
    "MoveDocumentUseCase",
    "RemoveMemberResult",
    "ShareResult",
    "UpdateDocumentInput",
    "UpdateDocumentUseCase",
]
