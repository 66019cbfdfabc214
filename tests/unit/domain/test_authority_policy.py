"""
Name: Capability Lattice and Authority Policy Tests

Responsibilities:
  - Validate capability ordering (readable < editable < createUser)
  - Validate ownership and membership fallback rules
  - Validate wiki management / root creation predicates
"""

from uuid import uuid4

import pytest

from wikicore.domain.authority_policy import (
    MatchedRule,
    can_create_root_document,
    can_manage_wiki,
    membership_capability,
    ownership_capability,
)
from wikicore.domain.capabilities import Capability, parse_capability
from wikicore.domain.entities import (
    Document,
    DocumentStatus,
    ShareConfig,
    Wiki,
    WikiMember,
    WikiRole,
    WikiVisibility,
    utcnow,
)

pytestmark = pytest.mark.unit


def _wiki(creator_id=None, visibility=WikiVisibility.PRIVATE) -> Wiki:
    return Wiki(
        id=uuid4(), name="w", creator_id=creator_id or uuid4(), visibility=visibility
    )


def _member(wiki: Wiki, role: WikiRole = WikiRole.MEMBER) -> WikiMember:
    return WikiMember(wiki_id=wiki.id, user_id=uuid4(), role=role)


class TestCapabilityLattice:
    @pytest.mark.parametrize(
        "held,requested,expected",
        [
            (Capability.READABLE, Capability.READABLE, True),
            (Capability.READABLE, Capability.EDITABLE, False),
            (Capability.EDITABLE, Capability.READABLE, True),
            (Capability.EDITABLE, Capability.CREATE_USER, False),
            (Capability.CREATE_USER, Capability.EDITABLE, True),
            (Capability.CREATE_USER, Capability.CREATE_USER, True),
        ],
    )
    def test_covers(self, held, requested, expected):
        assert held.covers(requested) is expected

    def test_ranks_are_strictly_ordered(self):
        assert (
            Capability.READABLE.rank
            < Capability.EDITABLE.rank
            < Capability.CREATE_USER.rank
        )

    def test_wire_values(self):
        assert Capability.CREATE_USER.value == "createUser"

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("readable", Capability.READABLE),
            (" editable ", Capability.EDITABLE),
            ("createUser", Capability.CREATE_USER),
            ("owner", None),
            ("", None),
            (None, None),
        ],
    )
    def test_parse_capability(self, raw, expected):
        assert parse_capability(raw) == expected


class TestOwnership:
    def test_document_creator_wins(self):
        creator = uuid4()
        wiki = _wiki()
        document = Document(id=uuid4(), wiki_id=wiki.id, creator_id=creator)

        assert ownership_capability(document, wiki, creator) == (
            Capability.CREATE_USER,
            MatchedRule.CREATOR,
        )

    def test_wiki_owner_gets_create_user(self):
        wiki = _wiki()
        document = Document(id=uuid4(), wiki_id=wiki.id, creator_id=uuid4())

        assert ownership_capability(document, wiki, wiki.creator_id) == (
            Capability.CREATE_USER,
            MatchedRule.WIKI_OWNER,
        )

    def test_stranger_gets_nothing(self):
        wiki = _wiki()
        document = Document(id=uuid4(), wiki_id=wiki.id, creator_id=uuid4())

        assert ownership_capability(document, wiki, uuid4()) == (
            None,
            MatchedRule.NONE,
        )


class TestMembershipFallback:
    def test_admin_is_editable(self):
        wiki = _wiki()

        assert membership_capability(wiki, _member(wiki, WikiRole.ADMIN)) == (
            Capability.EDITABLE,
            MatchedRule.WIKI_ADMIN,
        )

    def test_member_is_readable(self):
        wiki = _wiki()

        assert membership_capability(wiki, _member(wiki)) == (
            Capability.READABLE,
            MatchedRule.WIKI_MEMBER,
        )

    def test_public_wiki_is_readable_for_non_members(self):
        wiki = _wiki(visibility=WikiVisibility.PUBLIC)

        assert membership_capability(wiki, None) == (
            Capability.READABLE,
            MatchedRule.PUBLIC_WIKI,
        )

    def test_private_wiki_denies_non_members(self):
        assert membership_capability(_wiki(), None) == (None, MatchedRule.NONE)


class TestWikiPredicates:
    def test_manage_requires_owner_or_admin(self):
        wiki = _wiki()

        assert can_manage_wiki(wiki, wiki.creator_id, None)
        admin = _member(wiki, WikiRole.ADMIN)
        assert can_manage_wiki(wiki, admin.user_id, admin)
        member = _member(wiki)
        assert not can_manage_wiki(wiki, member.user_id, member)
        assert not can_manage_wiki(wiki, None, None)

    def test_root_creation_requires_membership(self):
        wiki = _wiki(visibility=WikiVisibility.PUBLIC)
        member = _member(wiki)

        assert can_create_root_document(wiki, wiki.creator_id, None)
        assert can_create_root_document(wiki, member.user_id, member)
        assert not can_create_root_document(wiki, uuid4(), None)
        assert not can_create_root_document(wiki, None, None)


class TestShareConfig:
    def test_expiry_is_inclusive(self):
        now = utcnow()
        config = ShareConfig(token="t", expires_at=now)

        assert config.is_expired(now)

    def test_no_expiry_never_expires(self):
        assert not ShareConfig(token="t").is_expired(utcnow())

    def test_public_requires_status_and_config(self):
        config = ShareConfig(token="t", password_hash="h")
        base = dict(id=uuid4(), wiki_id=uuid4(), creator_id=uuid4())

        assert Document(**base, status=DocumentStatus.PUBLIC, share_config=config).is_public
        assert not Document(**base, share_config=config).is_public
        assert not Document(**base, status=DocumentStatus.PUBLIC).is_public
        assert config.has_password
