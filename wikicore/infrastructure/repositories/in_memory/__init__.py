"""
In-Memory Repository Implementations.

For testing and local development. NOT FOR PRODUCTION.
Data is lost on process restart.
"""

from .activity import InMemoryDocumentVersionRepository, InMemoryDocumentVisitRepository
from .audit_repository import InMemoryAuditEventRepository
from .authorities import InMemoryDocAuthorityRepository
from .documents import InMemoryDocumentRepository
from .stars import InMemoryStarRepository
from .wikis import InMemoryMembershipRepository, InMemoryWikiRepository

__all__ = [
    # Document tree
    "InMemoryDocumentRepository",
    "InMemoryDocAuthorityRepository",
    # Activity
    "InMemoryDocumentVisitRepository",
    "InMemoryDocumentVersionRepository",
    # Wikis
    "InMemoryWikiRepository",
    "InMemoryMembershipRepository",
    # Stars & Audit
    "InMemoryStarRepository",
    "InMemoryAuditEventRepository",
]
