"""
Use Cases Layer (Business Operations)

Structure
---------
usecases/
├── documents/   # Document tree CRUD, move, cascade delete, effective capability,
│                #   recent documents and version history
├── authority/   # Explicit per-document grants
├── sharing/     # Share / unshare and the public read path
├── wikis/       # Wiki namespace and roster
└── stars/       # Bookmarks filtered through the resolver

Usage
-----
    from wikicore.application.usecases import GetDocumentUseCase
"""

from .authority import (
    DocumentMemberInput,
    GrantDocumentMemberUseCase,
    ListDocumentMembersUseCase,
    RevokeDocumentMemberUseCase,
    UpdateDocumentMemberUseCase,
)
from .documents import (
    CreateDocumentInput,
    CreateDocumentUseCase,
    DeleteDocumentUseCase,
    DocumentError,
    DocumentErrorCode,
    GetDocumentUseCase,
    GetEffectiveCapabilityUseCase,
    ListChildDocumentsUseCase,
    ListDocumentVersionsUseCase,
    ListRecentDocumentsUseCase,
    ListRootDocumentsUseCase,
    MoveDocumentUseCase,
    UpdateDocumentInput,
    UpdateDocumentUseCase,
)
from .sharing import (
    GetPublicDocumentUseCase,
    ListPublicChildrenUseCase,
    ShareDocumentUseCase,
)
from .stars import (
    GetStarStatusUseCase,
    ListStarredDocumentsUseCase,
    ListStarredWikisUseCase,
    ToggleStarUseCase,
)
from .wikis import (
    AddWikiMemberUseCase,
    CreateWikiInput,
    CreateWikiUseCase,
    GetWikiUseCase,
    ListWikiMembersUseCase,
    RemoveWikiMemberUseCase,
)

__all__ = [
    "AddWikiMemberUseCase",
    "CreateDocumentInput",
    "CreateDocumentUseCase",
    "CreateWikiInput",
    "CreateWikiUseCase",
    "DeleteDocumentUseCase",
    "DocumentError",
    "DocumentErrorCode",
    "DocumentMemberInput",
    "GetDocumentUseCase",
    "GetEffectiveCapabilityUseCase",
    "GetPublicDocumentUseCase",
    "GetStarStatusUseCase",
    "GetWikiUseCase",
    "GrantDocumentMemberUseCase",
    "ListChildDocumentsUseCase",
    "ListDocumentMembersUseCase",
    "ListDocumentVersionsUseCase",
    "ListPublicChildrenUseCase",
    "ListRecentDocumentsUseCase",
    "ListRootDocumentsUseCase",
    "ListStarredDocumentsUseCase",
    "ListStarredWikisUseCase",
    "ListWikiMembersUseCase",
    "MoveDocumentUseCase",
    "RemoveWikiMemberUseCase",
    "RevokeDocumentMemberUseCase",
    "ShareDocumentUseCase",
    "ToggleStarUseCase",
    "UpdateDocumentInput",
    "UpdateDocumentMemberUseCase",
    "UpdateDocumentUseCase",
]
