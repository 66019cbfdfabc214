"""
Name: Document Endpoint Tests

Responsibilities:
  - Validate HTTP mapping of authority outcomes (401/403/404/409/422/500)
  - Validate RFC 7807 shape of error responses
  - Validate grants, move, delete and effective capability over HTTP
  - Validate recent documents and version history over HTTP
"""

from uuid import UUID, uuid4

import pytest

from wikicore import container
from wikicore.domain.entities import Document

pytestmark = pytest.mark.unit

PROBLEM_JSON = "application/problem+json"


class TestReadDocument:
    def test_creator_reads_document(self, client, auth, owner, create_document):
        document_id = create_document("Home")

        response = client.get(f"/v1/documents/{document_id}", headers=auth(owner))

        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "Home"
        assert body["status"] == "private"
        assert body["share"] is None

    def test_anonymous_is_401(self, client, create_document):
        document_id = create_document()

        response = client.get(f"/v1/documents/{document_id}")

        assert response.status_code == 401
        assert response.headers["content-type"].startswith(PROBLEM_JSON)
        assert response.headers["www-authenticate"] == "Bearer"
        assert response.json()["code"] == "UNAUTHORIZED"

    def test_invalid_token_is_401(self, client, create_document):
        document_id = create_document()

        response = client.get(
            f"/v1/documents/{document_id}",
            headers={"Authorization": "Bearer not-a-jwt"},
        )

        assert response.status_code == 401

    def test_stranger_is_403(self, client, auth, create_document):
        document_id = create_document()

        response = client.get(f"/v1/documents/{document_id}", headers=auth(uuid4()))

        assert response.status_code == 403
        body = response.json()
        assert body["code"] == "FORBIDDEN"
        assert body["status"] == 403
        assert body["instance"].endswith(f"/v1/documents/{document_id}")

    def test_unknown_document_is_404(self, client, auth, owner):
        missing = uuid4()

        response = client.get(f"/v1/documents/{missing}", headers=auth(owner))

        assert response.status_code == 404
        assert str(missing) in response.json()["detail"]

    def test_corrupted_tree_is_500_integrity_error(
        self, client, auth, owner, wiki_id
    ):
        member = uuid4()
        client.put(f"/v1/wikis/{wiki_id}/members/{member}", json={}, headers=auth(owner))
        orphan = container.get_document_repository().create_document(
            Document(
                id=uuid4(),
                wiki_id=UUID(wiki_id),
                creator_id=owner,
                title="orphan",
                parent_id=uuid4(),
            )
        )

        response = client.get(f"/v1/documents/{orphan.id}", headers=auth(member))

        assert response.status_code == 500
        assert response.json()["code"] == "INTEGRITY_ERROR"


class TestUpdateAndChildren:
    def test_member_can_not_edit(self, client, auth, owner, wiki_id, create_document):
        document_id = create_document()
        member = uuid4()
        client.put(f"/v1/wikis/{wiki_id}/members/{member}", json={}, headers=auth(owner))

        response = client.patch(
            f"/v1/documents/{document_id}", json={"title": "x"}, headers=auth(member)
        )

        assert response.status_code == 403

    def test_admin_edits(self, client, auth, owner, wiki_id, create_document):
        document_id = create_document()
        admin = uuid4()
        client.put(
            f"/v1/wikis/{wiki_id}/members/{admin}",
            json={"role": "admin"},
            headers=auth(owner),
        )

        response = client.patch(
            f"/v1/documents/{document_id}",
            json={"content": "updated"},
            headers=auth(admin),
        )

        assert response.status_code == 200
        assert response.json()["content"] == "updated"

    def test_list_children(self, client, auth, owner, create_document):
        parent = create_document("parent")
        child = create_document("child", parent_id=parent)

        response = client.get(f"/v1/documents/{parent}/children", headers=auth(owner))

        assert response.status_code == 200
        assert [d["id"] for d in response.json()["documents"]] == [child]


class TestGrants:
    def test_grant_lifecycle(self, client, auth, owner, create_document):
        document_id = create_document()
        user = uuid4()
        members_url = f"/v1/documents/{document_id}/members"

        created = client.post(
            members_url,
            json={"user_id": str(user), "capability": "readable"},
            headers=auth(owner),
        )
        duplicate = client.post(
            members_url,
            json={"user_id": str(user), "capability": "editable"},
            headers=auth(owner),
        )
        readable = client.get(f"/v1/documents/{document_id}", headers=auth(user))
        capability = client.get(
            f"/v1/documents/{document_id}/capability", headers=auth(user)
        )

        assert created.status_code == 201
        assert created.json()["capability"] == "readable"
        assert duplicate.status_code == 409
        assert duplicate.json()["code"] == "CONFLICT"
        assert readable.status_code == 200
        assert capability.json() == {
            "document_id": document_id,
            "capability": "readable",
            "matched_rule": "explicit_grant",
        }

        updated = client.patch(
            f"{members_url}/{user}",
            json={"capability": "createUser"},
            headers=auth(owner),
        )
        assert updated.status_code == 200
        assert updated.json()["capability"] == "createUser"

        listed = client.get(members_url, headers=auth(user))
        assert [m["user_id"] for m in listed.json()["members"]] == [str(user)]

        removed = client.delete(f"{members_url}/{user}", headers=auth(owner))
        assert removed.status_code == 204
        assert (
            client.get(f"/v1/documents/{document_id}", headers=auth(user)).status_code
            == 403
        )

    def test_unknown_capability_is_422(self, client, auth, owner, create_document):
        document_id = create_document()

        response = client.post(
            f"/v1/documents/{document_id}/members",
            json={"user_id": str(uuid4()), "capability": "owner"},
            headers=auth(owner),
        )

        assert response.status_code == 422

    def test_grant_to_creator_is_422(self, client, auth, owner, create_document):
        document_id = create_document()

        response = client.post(
            f"/v1/documents/{document_id}/members",
            json={"user_id": str(owner), "capability": "readable"},
            headers=auth(owner),
        )

        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_no_capability_reports_null(self, client, auth, create_document):
        document_id = create_document()

        response = client.get(
            f"/v1/documents/{document_id}/capability", headers=auth(uuid4())
        )

        assert response.status_code == 200
        assert response.json()["capability"] is None


class TestMoveAndDelete:
    def test_move_under_descendant_is_409(self, client, auth, owner, create_document):
        root = create_document("root")
        child = create_document("child", parent_id=root)

        response = client.post(
            f"/v1/documents/{root}/move", json={"parent_id": child}, headers=auth(owner)
        )

        assert response.status_code == 409

    def test_move_to_root(self, client, auth, owner, create_document):
        root = create_document("root")
        child = create_document("child", parent_id=root)

        response = client.post(
            f"/v1/documents/{child}/move", json={"parent_id": None}, headers=auth(owner)
        )

        assert response.status_code == 200
        assert response.json()["parent_id"] is None

    def test_delete_cascades(self, client, auth, owner, create_document):
        root = create_document("root")
        child = create_document("child", parent_id=root)

        response = client.delete(f"/v1/documents/{root}", headers=auth(owner))

        assert response.status_code == 200
        assert set(response.json()["deleted_ids"]) == {root, child}
        assert (
            client.get(f"/v1/documents/{child}", headers=auth(owner)).status_code
            == 404
        )


class TestRecentAndVersions:
    def test_recent_lists_visited_documents(
        self, client, auth, owner, create_document
    ):
        first = create_document("First")
        second = create_document("Second")
        client.get(f"/v1/documents/{first}", headers=auth(owner))
        client.get(f"/v1/documents/{second}", headers=auth(owner))

        response = client.get("/v1/documents/recent", headers=auth(owner))

        assert response.status_code == 200
        assert [doc["id"] for doc in response.json()["documents"]] == [second, first]

    def test_recent_requires_actor(self, client):
        response = client.get("/v1/documents/recent")

        assert response.status_code == 401
        assert response.json()["code"] == "UNAUTHORIZED"

    def test_versions_follow_edits(self, client, auth, owner, create_document):
        document_id = create_document("Draft")
        client.patch(
            f"/v1/documents/{document_id}",
            json={"content": "first body"},
            headers=auth(owner),
        )
        client.patch(
            f"/v1/documents/{document_id}",
            json={"title": "Final"},
            headers=auth(owner),
        )

        response = client.get(
            f"/v1/documents/{document_id}/versions", headers=auth(owner)
        )

        assert response.status_code == 200
        body = response.json()
        assert body["document_id"] == document_id
        assert [v["version"] for v in body["versions"]] == [2, 1]
        assert body["versions"][0]["title"] == "Final"
        assert body["versions"][0]["content"] == "first body"
        assert body["versions"][0]["editor_id"] == str(owner)

    def test_versions_of_unreadable_document_is_403(
        self, client, auth, create_document
    ):
        document_id = create_document()

        response = client.get(
            f"/v1/documents/{document_id}/versions", headers=auth(uuid4())
        )

        assert response.status_code == 403
        assert response.json()["code"] == "FORBIDDEN"
