"""
Repository implementations.

- postgres/*: production stores (raw SQL over psycopg pool)
- in_memory/*: tests and local development
"""

from .in_memory import (
    InMemoryAuditEventRepository,
    InMemoryDocAuthorityRepository,
    InMemoryDocumentRepository,
    InMemoryDocumentVersionRepository,
    InMemoryDocumentVisitRepository,
    InMemoryMembershipRepository,
    InMemoryStarRepository,
    InMemoryWikiRepository,
)
from .postgres import (
    PostgresAuditEventRepository,
    PostgresDocAuthorityRepository,
    PostgresDocumentRepository,
    PostgresDocumentVersionRepository,
    PostgresDocumentVisitRepository,
    PostgresMembershipRepository,
    PostgresStarRepository,
    PostgresWikiRepository,
)

__all__ = [
    "InMemoryAuditEventRepository",
    "InMemoryDocAuthorityRepository",
    "InMemoryDocumentRepository",
    "InMemoryDocumentVersionRepository",
    "InMemoryDocumentVisitRepository",
    "InMemoryMembershipRepository",
    "InMemoryStarRepository",
    "InMemoryWikiRepository",
    "PostgresAuditEventRepository",
    "PostgresDocAuthorityRepository",
    "PostgresDocumentRepository",
    "PostgresDocumentVersionRepository",
    "PostgresDocumentVisitRepository",
    "PostgresMembershipRepository",
    "PostgresStarRepository",
    "PostgresWikiRepository",
]
