"""
Name: Grant and Share Use Case Tests

Responsibilities:
  - Validate grant add / update / revoke / list rules and audit events
  - Validate share use case (timezone validation, audit without secrets)
  - Validate the public read path (document + visible children)
"""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from wikicore.application import ShareRequest
from wikicore.application.usecases import (
    DocumentErrorCode,
    DocumentMemberInput,
    GetPublicDocumentUseCase,
    GrantDocumentMemberUseCase,
    ListDocumentMembersUseCase,
    ListPublicChildrenUseCase,
    RevokeDocumentMemberUseCase,
    ShareDocumentUseCase,
    UpdateDocumentMemberUseCase,
)
from wikicore.domain.capabilities import Capability
from wikicore.domain.entities import WikiRole

pytestmark = pytest.mark.unit


@pytest.fixture
def owner():
    return uuid4()


@pytest.fixture
def wiki(stores, owner):
    return stores.add_wiki(owner)


@pytest.fixture
def document(stores, wiki, owner):
    return stores.add_document(wiki, owner)


class TestGrants:
    @pytest.fixture
    def grant(self, engine):
        return GrantDocumentMemberUseCase(
            engine.stores.grants, engine.guard, engine.stores.audit
        )

    @pytest.fixture
    def update(self, engine):
        return UpdateDocumentMemberUseCase(
            engine.stores.grants, engine.guard, engine.stores.audit
        )

    @pytest.fixture
    def revoke(self, engine):
        return RevokeDocumentMemberUseCase(
            engine.stores.grants, engine.guard, engine.stores.audit
        )

    def test_creator_grants_capability(self, grant, stores, document, owner):
        user = uuid4()

        result = grant.execute(
            DocumentMemberInput(document.id, user, Capability.EDITABLE), owner
        )

        assert result.error is None
        assert result.member.capability == Capability.EDITABLE
        assert result.member.granted_by == owner
        event = stores.audit.list_events(target_id=document.id)[0]
        assert event.action == "document.grant"
        assert event.metadata["capability"] == "editable"
        assert event.metadata["user_id"] == str(user)

    def test_duplicate_grant_is_conflict(self, grant, document, owner):
        user = uuid4()
        grant.execute(DocumentMemberInput(document.id, user, Capability.READABLE), owner)

        result = grant.execute(
            DocumentMemberInput(document.id, user, Capability.EDITABLE), owner
        )

        assert result.error.code == DocumentErrorCode.CONFLICT

    def test_grant_to_creator_is_rejected(self, grant, stores, wiki, owner):
        author = uuid4()
        document = stores.add_document(wiki, author)

        result = grant.execute(
            DocumentMemberInput(document.id, author, Capability.READABLE), owner
        )

        assert result.error.code == DocumentErrorCode.VALIDATION_ERROR

    def test_editor_can_not_grant(self, grant, stores, document, owner):
        editor = uuid4()
        stores.grant(document, editor, Capability.EDITABLE)

        result = grant.execute(
            DocumentMemberInput(document.id, uuid4(), Capability.READABLE), editor
        )

        assert result.error.code == DocumentErrorCode.FORBIDDEN

    def test_wiki_admin_can_not_grant(self, grant, stores, wiki, document):
        admin = uuid4()
        stores.add_member(wiki, admin, WikiRole.ADMIN)

        result = grant.execute(
            DocumentMemberInput(document.id, uuid4(), Capability.READABLE), admin
        )

        assert result.error.code == DocumentErrorCode.FORBIDDEN

    def test_update_existing_grant(self, grant, update, stores, document, owner):
        user = uuid4()
        grant.execute(DocumentMemberInput(document.id, user, Capability.READABLE), owner)

        result = update.execute(
            DocumentMemberInput(document.id, user, Capability.CREATE_USER), owner
        )

        assert result.member.capability == Capability.CREATE_USER
        assert stores.grants.get_authority(document.id, user).capability == (
            Capability.CREATE_USER
        )

    def test_update_missing_grant_is_not_found(self, update, document, owner):
        result = update.execute(
            DocumentMemberInput(document.id, uuid4(), Capability.EDITABLE), owner
        )

        assert result.error.code == DocumentErrorCode.NOT_FOUND
        assert result.error.resource == "Grant"

    def test_revoke_removes_access(self, revoke, engine, stores, document, owner):
        user = uuid4()
        stores.grant(document, user, Capability.EDITABLE)

        result = revoke.execute(document.id, user, owner)

        assert result.removed
        assert not engine.resolver.resolve(
            user, document.id, Capability.READABLE
        ).allowed
        assert revoke.execute(document.id, user, owner).error.code == (
            DocumentErrorCode.NOT_FOUND
        )

    def test_list_members_requires_readable(self, engine, stores, document, owner):
        reader = uuid4()
        stores.grant(document, reader, Capability.READABLE)
        use_case = ListDocumentMembersUseCase(stores.grants, engine.guard)

        listed = use_case.execute(document.id, reader)

        assert [grant.user_id for grant in listed.members] == [reader]
        assert use_case.execute(document.id, uuid4()).error.code == (
            DocumentErrorCode.FORBIDDEN
        )


class TestShareDocument:
    @pytest.fixture
    def use_case(self, engine):
        return ShareDocumentUseCase(engine.shares, engine.stores.audit)

    def test_share_records_audit_without_secrets(
        self, use_case, stores, document, owner
    ):
        result = use_case.execute(
            document.id, ShareRequest(enable=True, password="pw"), owner
        )

        assert result.changed
        event = stores.audit.list_events(target_id=document.id)[0]
        assert event.action == "document.share"
        assert event.metadata["has_password"] is True
        assert "tok-1" not in str(event.metadata)
        assert "pw" not in str(event.metadata.values())

    def test_unshare_action(self, use_case, stores, document, owner):
        use_case.execute(document.id, ShareRequest(enable=True), owner)

        result = use_case.execute(document.id, ShareRequest(enable=False), owner)

        assert result.changed
        actions = [e.action for e in stores.audit.list_events(target_id=document.id)]
        assert actions == ["document.unshare", "document.share"]

    def test_idempotent_share_is_not_audited_twice(
        self, use_case, stores, document, owner
    ):
        use_case.execute(document.id, ShareRequest(enable=True), owner)
        second = use_case.execute(document.id, ShareRequest(enable=True), owner)

        assert not second.changed
        assert len(stores.audit.list_events(target_id=document.id)) == 1

    def test_naive_expiry_is_rejected(self, use_case, document, owner):
        result = use_case.execute(
            document.id,
            ShareRequest(enable=True, expires_at=datetime(2030, 1, 1)),
            owner,
        )

        assert result.error.code == DocumentErrorCode.VALIDATION_ERROR

    def test_reader_can_not_share(self, use_case, stores, document):
        reader = uuid4()
        stores.grant(document, reader, Capability.READABLE)

        result = use_case.execute(document.id, ShareRequest(enable=True), reader)

        assert result.error.code == DocumentErrorCode.FORBIDDEN


class TestPublicRead:
    def test_public_document_and_children(self, engine, stores, wiki, document, owner):
        child = stores.add_document(wiki, owner, parent=document)
        engine.shares.share(
            owner, document.id, ShareRequest(enable=True, include_descendants=True)
        )
        get_public = GetPublicDocumentUseCase(engine.guard)
        list_public = ListPublicChildrenUseCase(engine.guard, engine.shares)

        assert get_public.execute(document.id, "tok-1").document.id == document.id
        children = list_public.execute(document.id, "tok-1")
        assert [doc.id for doc in children.documents] == [child.id]

    def test_expired_link(self, engine, document, owner):
        engine.shares.share(
            owner,
            document.id,
            ShareRequest(enable=True, expires_at=engine.clock.now - timedelta(1)),
        )

        result = GetPublicDocumentUseCase(engine.guard).execute(document.id, "tok-1")

        assert result.error.code == DocumentErrorCode.EXPIRED

    def test_unknown_document_is_forbidden(self, engine):
        result = GetPublicDocumentUseCase(engine.guard).execute(uuid4(), "tok-1")

        assert result.error.code == DocumentErrorCode.FORBIDDEN
