"""
Name: Document Use Case Tests

Responsibilities:
  - Validate create / read / update / list against the authority gate
  - Validate cascade delete (grants, stars, descendants) and its audit event
  - Validate move rules (cycle, cross-wiki, target capability)
  - Validate effective capability reporting
"""

from uuid import uuid4

import pytest

from wikicore.application.usecases import (
    CreateDocumentInput,
    CreateDocumentUseCase,
    DeleteDocumentUseCase,
    DocumentErrorCode,
    GetDocumentUseCase,
    GetEffectiveCapabilityUseCase,
    ListChildDocumentsUseCase,
    ListRootDocumentsUseCase,
    MoveDocumentUseCase,
    UpdateDocumentInput,
    UpdateDocumentUseCase,
)
from wikicore.crosscutting.exceptions import DatabaseError
from wikicore.domain.capabilities import Capability
from wikicore.domain.entities import Star, WikiRole

pytestmark = pytest.mark.unit


@pytest.fixture
def owner():
    return uuid4()


@pytest.fixture
def wiki(stores, owner):
    return stores.add_wiki(owner)


class TestCreateDocument:
    @pytest.fixture
    def use_case(self, engine):
        return CreateDocumentUseCase(
            engine.stores.documents, engine.resolver, engine.guard
        )

    def test_member_creates_root(self, use_case, stores, wiki):
        member = uuid4()
        stores.add_member(wiki, member)

        result = use_case.execute(
            CreateDocumentInput(wiki_id=wiki.id, title="  Home  "), member
        )

        assert result.error is None
        assert result.document.title == "Home"
        assert result.document.creator_id == member
        assert result.document.parent_id is None
        assert stores.documents.get_document(result.document.id) is not None

    def test_non_member_can_not_create_root(self, use_case, wiki):
        result = use_case.execute(CreateDocumentInput(wiki_id=wiki.id, title="x"), uuid4())

        assert result.error.code == DocumentErrorCode.FORBIDDEN
        assert result.error.resource == "Wiki"

    def test_child_requires_editable_on_parent(self, use_case, stores, wiki, owner):
        parent = stores.add_document(wiki, owner)
        reader, editor = uuid4(), uuid4()
        stores.grant(parent, reader, Capability.READABLE)
        stores.grant(parent, editor, Capability.EDITABLE)

        denied = use_case.execute(
            CreateDocumentInput(wiki_id=wiki.id, title="c", parent_id=parent.id), reader
        )
        created = use_case.execute(
            CreateDocumentInput(wiki_id=wiki.id, title="c", parent_id=parent.id), editor
        )

        assert denied.error.code == DocumentErrorCode.FORBIDDEN
        assert created.error is None
        assert created.document.parent_id == parent.id
        # El creador del hijo obtiene createUser sobre él.
        assert (
            stores.documents.get_document(created.document.id).creator_id == editor
        )

    def test_parent_from_another_wiki(self, use_case, stores, wiki, owner):
        other = stores.add_wiki(owner, name="other")
        parent = stores.add_document(other, owner)

        result = use_case.execute(
            CreateDocumentInput(wiki_id=wiki.id, title="c", parent_id=parent.id), owner
        )

        assert result.error.code == DocumentErrorCode.VALIDATION_ERROR

    def test_blank_title(self, use_case, wiki, owner):
        result = use_case.execute(CreateDocumentInput(wiki_id=wiki.id, title="   "), owner)

        assert result.error.code == DocumentErrorCode.VALIDATION_ERROR

    def test_anonymous(self, use_case, wiki):
        result = use_case.execute(CreateDocumentInput(wiki_id=wiki.id, title="x"), None)

        assert result.error.code == DocumentErrorCode.UNAUTHENTICATED


class TestReadAndUpdate:
    def test_get_document(self, engine, stores, wiki, owner):
        document = stores.add_document(wiki, owner)
        use_case = GetDocumentUseCase(engine.guard)

        assert use_case.execute(document.id, owner).document.id == document.id
        assert use_case.execute(document.id, uuid4()).error.code == (
            DocumentErrorCode.FORBIDDEN
        )
        assert use_case.execute(uuid4(), owner).error.code == (
            DocumentErrorCode.NOT_FOUND
        )

    def test_update_requires_editable(self, engine, stores, wiki, owner):
        document = stores.add_document(wiki, owner, title="old")
        admin, member = uuid4(), uuid4()
        stores.add_member(wiki, admin, WikiRole.ADMIN)
        stores.add_member(wiki, member)
        use_case = UpdateDocumentUseCase(stores.documents, engine.guard)

        denied = use_case.execute(
            UpdateDocumentInput(document_id=document.id, title="new"), member
        )
        updated = use_case.execute(
            UpdateDocumentInput(document_id=document.id, title="new", content="body"),
            admin,
        )

        assert denied.error.code == DocumentErrorCode.FORBIDDEN
        assert updated.document.title == "new"
        assert updated.document.content == "body"

    def test_update_without_fields(self, engine, stores, wiki, owner):
        document = stores.add_document(wiki, owner)
        use_case = UpdateDocumentUseCase(stores.documents, engine.guard)

        result = use_case.execute(UpdateDocumentInput(document_id=document.id), owner)

        assert result.error.code == DocumentErrorCode.VALIDATION_ERROR


class TestListing:
    def test_children_inherit_parent_grant(self, engine, stores, wiki, owner):
        parent = stores.add_document(wiki, owner)
        first = stores.add_document(wiki, owner, parent=parent, title="first")
        second = stores.add_document(wiki, owner, parent=parent, title="second")
        stores.add_document(wiki, owner, parent=first, title="grandchild")
        user = uuid4()
        stores.grant(parent, user, Capability.READABLE)
        use_case = ListChildDocumentsUseCase(
            stores.documents, engine.resolver, engine.guard
        )

        result = use_case.execute(parent.id, user)

        assert {doc.id for doc in result.documents} == {first.id, second.id}

    def test_children_require_readable_parent(self, engine, stores, wiki, owner):
        parent = stores.add_document(wiki, owner)
        use_case = ListChildDocumentsUseCase(
            stores.documents, engine.resolver, engine.guard
        )

        result = use_case.execute(parent.id, uuid4())

        assert result.error.code == DocumentErrorCode.FORBIDDEN

    def test_root_documents(self, engine, stores, wiki, owner):
        root = stores.add_document(wiki, owner)
        stores.add_document(wiki, owner, parent=root)
        member = uuid4()
        stores.add_member(wiki, member)
        use_case = ListRootDocumentsUseCase(stores.documents, engine.resolver)

        result = use_case.execute(wiki.id, member)

        assert [doc.id for doc in result.documents] == [root.id]
        assert use_case.execute(wiki.id, uuid4()).error.code == (
            DocumentErrorCode.FORBIDDEN
        )


class TestDeleteDocument:
    @pytest.fixture
    def use_case(self, engine):
        stores = engine.stores
        return DeleteDocumentUseCase(
            document_repository=stores.documents,
            authority_repository=stores.grants,
            star_repository=stores.stars,
            guard=engine.guard,
            max_nodes=100,
            audit_repository=stores.audit,
        )

    def test_cascade(self, use_case, stores, wiki, owner):
        root = stores.add_document(wiki, owner)
        child = stores.add_document(wiki, owner, parent=root)
        leaf = stores.add_document(wiki, owner, parent=child)
        sibling = stores.add_document(wiki, owner)
        user = uuid4()
        stores.grant(child, user, Capability.EDITABLE)
        stores.grant(sibling, user, Capability.EDITABLE)
        stores.stars.add_star(Star(user_id=user, wiki_id=wiki.id, document_id=leaf.id))

        result = use_case.execute(root.id, owner)

        assert result.error is None
        assert set(result.deleted_ids) == {root.id, child.id, leaf.id}
        for doc in (root, child, leaf):
            assert stores.documents.get_document(doc.id) is None
        assert stores.grants.get_authority(child.id, user) is None
        assert stores.grants.get_authority(sibling.id, user) is not None
        assert stores.stars.find_star(user, wiki.id, leaf.id) is None
        events = stores.audit.list_events(target_id=root.id)
        assert [event.action for event in events] == ["document.delete"]
        assert events[0].metadata["deleted_count"] == 3

    def test_failed_document_delete_keeps_grants_and_stars(
        self, use_case, stores, wiki, owner, monkeypatch
    ):
        root = stores.add_document(wiki, owner)
        child = stores.add_document(wiki, owner, parent=root)
        reader = uuid4()
        stores.grant(child, reader, Capability.READABLE)
        stores.stars.add_star(
            Star(user_id=reader, wiki_id=wiki.id, document_id=child.id)
        )

        def failing_delete(document_ids):
            raise DatabaseError("Error deleting documents")

        monkeypatch.setattr(stores.documents, "delete_documents", failing_delete)

        with pytest.raises(DatabaseError):
            use_case.execute(root.id, owner)

        assert stores.documents.get_document(child.id) is not None
        assert stores.grants.get_authority(child.id, reader) is not None
        assert stores.stars.find_star(reader, wiki.id, child.id) is not None
        assert stores.audit.list_events(target_id=root.id) == []

    def test_editor_can_not_delete(self, use_case, stores, wiki, owner):
        document = stores.add_document(wiki, owner)
        editor = uuid4()
        stores.grant(document, editor, Capability.EDITABLE)

        result = use_case.execute(document.id, editor)

        assert result.error.code == DocumentErrorCode.FORBIDDEN
        assert stores.documents.get_document(document.id) is not None

    def test_grantee_with_create_user_can_delete(self, use_case, stores, wiki, owner):
        document = stores.add_document(wiki, owner)
        manager = uuid4()
        stores.grant(document, manager, Capability.CREATE_USER)

        assert use_case.execute(document.id, manager).deleted

    def test_oversized_subtree_is_integrity_error(self, engine, stores, wiki, owner):
        root = stores.add_document(wiki, owner)
        for _ in range(3):
            stores.add_document(wiki, owner, parent=root)
        use_case = DeleteDocumentUseCase(
            document_repository=stores.documents,
            authority_repository=stores.grants,
            star_repository=stores.stars,
            guard=engine.guard,
            max_nodes=2,
        )

        result = use_case.execute(root.id, owner)

        assert result.error.code == DocumentErrorCode.INTEGRITY_ERROR
        assert stores.documents.get_document(root.id) is not None


class TestMoveDocument:
    @pytest.fixture
    def use_case(self, engine):
        return MoveDocumentUseCase(
            document_repository=engine.stores.documents,
            resolver=engine.resolver,
            guard=engine.guard,
            max_depth=64,
            audit_repository=engine.stores.audit,
        )

    def test_move_under_new_parent(self, use_case, stores, wiki, owner):
        a = stores.add_document(wiki, owner)
        b = stores.add_document(wiki, owner)

        result = use_case.execute(b.id, a.id, owner)

        assert result.document.parent_id == a.id
        events = stores.audit.list_events(target_id=b.id)
        assert events[0].action == "document.move"

    def test_move_under_own_descendant_is_conflict(self, use_case, stores, wiki, owner):
        root = stores.add_document(wiki, owner)
        child = stores.add_document(wiki, owner, parent=root)

        result = use_case.execute(root.id, child.id, owner)

        assert result.error.code == DocumentErrorCode.CONFLICT
        assert stores.documents.get_document(root.id).parent_id is None

    def test_move_under_itself_is_conflict(self, use_case, stores, wiki, owner):
        doc = stores.add_document(wiki, owner)

        result = use_case.execute(doc.id, doc.id, owner)

        assert result.error.code == DocumentErrorCode.CONFLICT

    def test_move_across_wikis(self, use_case, stores, wiki, owner):
        other = stores.add_wiki(owner, name="other")
        doc = stores.add_document(wiki, owner)
        target = stores.add_document(other, owner)

        result = use_case.execute(doc.id, target.id, owner)

        assert result.error.code == DocumentErrorCode.VALIDATION_ERROR

    def test_target_requires_editable(self, use_case, stores, wiki, owner):
        mover = uuid4()
        doc = stores.add_document(wiki, mover)
        target = stores.add_document(wiki, owner)
        stores.grant(target, mover, Capability.READABLE)

        result = use_case.execute(doc.id, target.id, mover)

        assert result.error.code == DocumentErrorCode.FORBIDDEN

    def test_move_to_root(self, use_case, stores, wiki, owner):
        parent = stores.add_document(wiki, owner)
        child = stores.add_document(wiki, owner, parent=parent)

        result = use_case.execute(child.id, None, owner)

        assert result.document.parent_id is None

    def test_same_parent_is_noop(self, use_case, stores, wiki, owner):
        parent = stores.add_document(wiki, owner)
        child = stores.add_document(wiki, owner, parent=parent)

        result = use_case.execute(child.id, parent.id, owner)

        assert result.document.parent_id == parent.id
        assert stores.audit.list_events(target_id=child.id) == []


class TestEffectiveCapability:
    def test_reports_capability_and_rule(self, engine, stores, wiki, owner):
        document = stores.add_document(wiki, owner)
        admin = uuid4()
        stores.add_member(wiki, admin, WikiRole.ADMIN)
        use_case = GetEffectiveCapabilityUseCase(engine.resolver)

        result = use_case.execute(document.id, admin)

        assert result.capability == Capability.EDITABLE
        assert result.matched_rule == "wiki_admin"

    def test_no_capability_is_not_an_error(self, engine, stores, wiki, owner):
        document = stores.add_document(wiki, owner)
        use_case = GetEffectiveCapabilityUseCase(engine.resolver)

        result = use_case.execute(document.id, uuid4())

        assert result.error is None
        assert result.capability is None

    def test_anonymous(self, engine, stores, wiki, owner):
        document = stores.add_document(wiki, owner)
        use_case = GetEffectiveCapabilityUseCase(engine.resolver)

        assert use_case.execute(document.id, None).error.code == (
            DocumentErrorCode.UNAUTHENTICATED
        )
