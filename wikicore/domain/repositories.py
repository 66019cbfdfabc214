"""
CRC - domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define persistence contracts for the domain layer (ports): document tree,
  wikis, wiki membership, explicit grants, stars, document activity (visits
  and versions) and audit events.
- Keep the authority engine independent from infrastructure (PostgreSQL, in-memory).
- Enable dependency inversion and straightforward unit testing (fake repositories).

Collaborators
- domain.entities: Document, Wiki, WikiMember, DocAuthority, Star, ShareConfig,
  DocumentVisit, DocumentVersion
- domain.audit: AuditEvent
- infrastructure.repositories: postgres/* and in_memory/* implementations

Constraints
- Pure interfaces only: no side effects, no infrastructure imports, no SQL.
- Stores perform NO authorization: they are dumb persistence. Every decision
  goes through domain.authority.AuthorityResolver.
- Reads are not assumed transactionally consistent with each other: callers
  walking the tree must tolerate a node disappearing between two reads.

Notes
- We use typing.Protocol for structural subtyping ("duck typing").
- Outputs are concrete lists for predictable iteration/serialization.
"""

from typing import List, Optional, Protocol
from uuid import UUID

from .audit import AuditEvent
from .entities import (
    DocAuthority,
    Document,
    DocumentStatus,
    DocumentVersion,
    DocumentVisit,
    ShareConfig,
    Star,
    Wiki,
    WikiMember,
)


class DocumentRepository(Protocol):
    """
    R: Document tree store.

    Implementations must provide:
      - Document records (id, parent, wiki, creator, status, share config)
      - Child / root listings for tree navigation
      - Share state writes (status + share config in a single write)
      - Subtree deletion by explicit id list
    """

    def get_document(self, document_id: UUID) -> Optional[Document]:
        """R: Fetch a single document by ID (None if absent)."""
        ...

    def create_document(self, document: Document) -> Document:
        """R: Persist a new document."""
        ...

    def update_document(
        self,
        document_id: UUID,
        *,
        title: str | None = None,
        content: str | None = None,
    ) -> Optional[Document]:
        """R: Update title/content. None if the document vanished."""
        ...

    def list_children(self, document_id: UUID) -> List[Document]:
        """R: Direct children of a document, ordered by created_at ASC."""
        ...

    def list_root_documents(self, wiki_id: UUID) -> List[Document]:
        """R: Documents with parent_id NULL inside a wiki."""
        ...

    def list_documents_by_ids(self, document_ids: List[UUID]) -> List[Document]:
        """R: Documents for the given ids (missing ids are omitted)."""
        ...

    def set_share_state(
        self,
        document_id: UUID,
        *,
        status: DocumentStatus,
        share_config: ShareConfig | None,
    ) -> Optional[Document]:
        """
        R: Write status and share config together.

        Invariant: share_config is None iff status == PRIVATE.
        """
        ...

    def move_document(
        self, document_id: UUID, new_parent_id: UUID | None
    ) -> Optional[Document]:
        """R: Re-parent a document (no validation: callers check cycles)."""
        ...

    def delete_documents(self, document_ids: List[UUID]) -> int:
        """R: Hard delete the given documents in one write. Returns rows deleted.

        Grants and stars of those documents go with them where the store
        enforces ON DELETE CASCADE; callers still clean dependents after.
        """
        ...


class WikiRepository(Protocol):
    """R: Wiki namespace store."""

    def get_wiki(self, wiki_id: UUID) -> Optional[Wiki]:
        ...

    def create_wiki(self, wiki: Wiki) -> Wiki:
        ...

    def list_wikis_by_ids(self, wiki_ids: List[UUID]) -> List[Wiki]:
        ...


class MembershipRepository(Protocol):
    """R: Wiki membership rows keyed by (wiki_id, user_id)."""

    def get_membership(self, wiki_id: UUID, user_id: UUID) -> Optional[WikiMember]:
        ...

    def upsert_member(self, member: WikiMember) -> WikiMember:
        ...

    def remove_member(self, wiki_id: UUID, user_id: UUID) -> bool:
        """R: True if the row existed."""
        ...

    def list_members(self, wiki_id: UUID) -> List[WikiMember]:
        ...


class DocAuthorityRepository(Protocol):
    """
    R: Explicit per-document grants, unique per (document_id, user_id).

    A revocation (delete) must be visible to every subsequent read.
    """

    def get_authority(
        self, document_id: UUID, user_id: UUID
    ) -> Optional[DocAuthority]:
        ...

    def upsert_authority(self, authority: DocAuthority) -> DocAuthority:
        ...

    def delete_authority(self, document_id: UUID, user_id: UUID) -> bool:
        """R: True if the grant existed."""
        ...

    def list_authorities(self, document_id: UUID) -> List[DocAuthority]:
        ...

    def delete_authorities_for_documents(self, document_ids: List[UUID]) -> int:
        ...


class StarRepository(Protocol):
    """R: User bookmarks on wikis and documents."""

    def find_star(
        self, user_id: UUID, wiki_id: UUID, document_id: UUID | None
    ) -> Optional[Star]:
        ...

    def add_star(self, star: Star) -> Star:
        ...

    def remove_star(
        self, user_id: UUID, wiki_id: UUID, document_id: UUID | None
    ) -> bool:
        ...

    def list_stars(
        self,
        user_id: UUID,
        *,
        wiki_id: UUID | None = None,
        documents_only: bool = False,
        wikis_only: bool = False,
    ) -> List[Star]:
        ...

    def delete_stars_for_documents(self, document_ids: List[UUID]) -> int:
        ...


class DocumentVisitRepository(Protocol):
    """R: Last visit per (user_id, document_id); feeds the "recent" listing."""

    def record_visit(self, user_id: UUID, document_id: UUID) -> DocumentVisit:
        """R: Upsert: a repeated visit only moves visited_at forward."""
        ...

    def list_recent_visits(self, user_id: UUID, limit: int) -> List[DocumentVisit]:
        """R: Most recent first."""
        ...

    def delete_visits_for_documents(self, document_ids: List[UUID]) -> int:
        ...


class DocumentVersionRepository(Protocol):
    """
    R: Append-only history of title/content snapshots per document.

    Version numbers start at 1 and grow by one per append.
    """

    def append_version(
        self, document: Document, editor_id: UUID | None
    ) -> DocumentVersion:
        ...

    def list_versions(self, document_id: UUID, limit: int) -> List[DocumentVersion]:
        """R: Newest first."""
        ...

    def delete_versions_for_documents(self, document_ids: List[UUID]) -> int:
        ...


class AuditEventRepository(Protocol):
    """R: Append-only audit trail."""

    def record_event(self, event: AuditEvent) -> None:
        ...

    def list_events(
        self,
        *,
        target_id: UUID | None = None,
        action_prefix: str | None = None,
        limit: int = 100,
    ) -> List[AuditEvent]:
        ...
