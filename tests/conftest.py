"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configurar entorno de test (APP_ENV=test => stores in-memory)
  - Proveer stores in-memory y motores de autoridad cableados
  - Proveer factories de wikis/documentos/grants para los tests

Collaborators:
  - pytest
  - wikicore.infrastructure.repositories.in_memory
  - wikicore.application (AuthorityResolver, ShareStateMachine, RequestGuardPipeline)

Notes:
  - Los hashes de password de share son triviales (no Argon2) para que los
    tests de dominio sean rápidos; los tests de identity y de API usan Argon2 real.
"""

import os
from dataclasses import dataclass
from uuid import UUID, uuid4

import pytest

os.environ.setdefault("APP_ENV", "test")

from wikicore.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from wikicore.application import (  # noqa: E402
    AuthorityResolver,
    RequestGuardPipeline,
    ShareStateMachine,
)
from wikicore.domain.capabilities import Capability  # noqa: E402
from wikicore.domain.entities import (  # noqa: E402
    DocAuthority,
    Document,
    Wiki,
    WikiMember,
    WikiRole,
    WikiVisibility,
    utcnow,
)
from wikicore.infrastructure.repositories.in_memory import (  # noqa: E402
    InMemoryAuditEventRepository,
    InMemoryDocAuthorityRepository,
    InMemoryDocumentRepository,
    InMemoryDocumentVersionRepository,
    InMemoryDocumentVisitRepository,
    InMemoryMembershipRepository,
    InMemoryStarRepository,
    InMemoryWikiRepository,
)

MAX_DEPTH = 64


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


def fake_hash(password: str) -> str:
    return f"hashed::{password}"


def fake_verify(password: str, password_hash: str) -> bool:
    return password_hash == fake_hash(password)


class SequentialTokens:
    """token_factory determinístico: tok-1, tok-2, ..."""

    def __init__(self) -> None:
        self.issued = 0

    def __call__(self) -> str:
        self.issued += 1
        return f"tok-{self.issued}"


class FrozenClock:
    def __init__(self) -> None:
        self.now = utcnow()

    def __call__(self):
        return self.now


@dataclass
class Stores:
    documents: InMemoryDocumentRepository
    wikis: InMemoryWikiRepository
    memberships: InMemoryMembershipRepository
    grants: InMemoryDocAuthorityRepository
    stars: InMemoryStarRepository
    audit: InMemoryAuditEventRepository
    visits: InMemoryDocumentVisitRepository
    versions: InMemoryDocumentVersionRepository

    # -----------------------------------------------------------------
    # Factories
    # -----------------------------------------------------------------
    def add_wiki(
        self,
        creator_id: UUID,
        *,
        visibility: WikiVisibility = WikiVisibility.PRIVATE,
        name: str = "Team wiki",
    ) -> Wiki:
        return self.wikis.create_wiki(
            Wiki(
                id=uuid4(),
                name=name,
                creator_id=creator_id,
                visibility=visibility,
                created_at=utcnow(),
            )
        )

    def add_member(
        self, wiki: Wiki, user_id: UUID, role: WikiRole = WikiRole.MEMBER
    ) -> WikiMember:
        return self.memberships.upsert_member(
            WikiMember(wiki_id=wiki.id, user_id=user_id, role=role)
        )

    def add_document(
        self,
        wiki: Wiki,
        creator_id: UUID,
        *,
        parent: Document | None = None,
        title: str = "Doc",
        document_id: UUID | None = None,
        parent_id: UUID | None = None,
    ) -> Document:
        return self.documents.create_document(
            Document(
                id=document_id or uuid4(),
                wiki_id=wiki.id,
                creator_id=creator_id,
                title=title,
                parent_id=parent.id if parent is not None else parent_id,
            )
        )

    def grant(
        self, document: Document, user_id: UUID, capability: Capability
    ) -> DocAuthority:
        return self.grants.upsert_authority(
            DocAuthority(
                document_id=document.id, user_id=user_id, capability=capability
            )
        )


@dataclass
class Engine:
    stores: Stores
    resolver: AuthorityResolver
    shares: ShareStateMachine
    guard: RequestGuardPipeline
    tokens: SequentialTokens
    clock: FrozenClock


@pytest.fixture
def stores() -> Stores:
    return Stores(
        documents=InMemoryDocumentRepository(),
        wikis=InMemoryWikiRepository(),
        memberships=InMemoryMembershipRepository(),
        grants=InMemoryDocAuthorityRepository(),
        stars=InMemoryStarRepository(),
        audit=InMemoryAuditEventRepository(),
        visits=InMemoryDocumentVisitRepository(),
        versions=InMemoryDocumentVersionRepository(),
    )


@pytest.fixture
def engine(stores: Stores) -> Engine:
    tokens = SequentialTokens()
    clock = FrozenClock()
    resolver = AuthorityResolver(
        documents=stores.documents,
        wikis=stores.wikis,
        memberships=stores.memberships,
        grants=stores.grants,
        max_depth=MAX_DEPTH,
    )
    shares = ShareStateMachine(
        documents=stores.documents,
        resolver=resolver,
        token_factory=tokens,
        hash_password=fake_hash,
        verify_password=fake_verify,
        max_depth=MAX_DEPTH,
        clock=clock,
    )
    guard = RequestGuardPipeline(resolver=resolver, share_machine=shares)
    return Engine(
        stores=stores,
        resolver=resolver,
        shares=shares,
        guard=guard,
        tokens=tokens,
        clock=clock,
    )
