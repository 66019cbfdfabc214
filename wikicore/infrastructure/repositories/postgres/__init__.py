"""
PostgreSQL Repository Implementations.

Raw parameterized SQL over the shared psycopg pool (infrastructure/db/pool.py).
Reads retry transient failures; writes do not.
"""

from .activity import PostgresDocumentVersionRepository, PostgresDocumentVisitRepository
from .audit_event import PostgresAuditEventRepository
from .authorities import PostgresDocAuthorityRepository
from .documents import PostgresDocumentRepository
from .stars import PostgresStarRepository
from .wikis import PostgresMembershipRepository, PostgresWikiRepository

__all__ = [
    "PostgresAuditEventRepository",
    "PostgresDocAuthorityRepository",
    "PostgresDocumentRepository",
    "PostgresDocumentVersionRepository",
    "PostgresDocumentVisitRepository",
    "PostgresMembershipRepository",
    "PostgresStarRepository",
    "PostgresWikiRepository",
]
