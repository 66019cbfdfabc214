"""
Name: Wiki and Star Endpoint Tests

Responsibilities:
  - Validate wiki creation, roster management and root listing
  - Validate stars toggle / status / listings over HTTP
"""

from uuid import uuid4

import pytest

pytestmark = pytest.mark.unit


class TestWikis:
    def test_create_and_get(self, client, auth, owner):
        created = client.post(
            "/v1/wikis",
            json={"name": "  Docs ", "visibility": "public"},
            headers=auth(owner),
        )

        assert created.status_code == 201
        body = created.json()
        assert body["name"] == "Docs"
        assert body["creator_id"] == str(owner)
        fetched = client.get(f"/v1/wikis/{body['id']}", headers=auth(uuid4()))
        assert fetched.status_code == 200

    def test_create_requires_auth(self, client):
        response = client.post("/v1/wikis", json={"name": "Docs"})

        assert response.status_code == 401

    def test_private_wiki_hidden_from_strangers(self, client, auth, wiki_id):
        assert client.get(f"/v1/wikis/{wiki_id}", headers=auth(uuid4())).status_code == 403

    def test_unknown_wiki_is_404(self, client, auth, owner):
        missing = uuid4()

        response = client.get(f"/v1/wikis/{missing}", headers=auth(owner))

        assert response.status_code == 404
        assert "Wiki" in response.json()["detail"]

    def test_roster(self, client, auth, owner, wiki_id):
        member = uuid4()

        added = client.put(
            f"/v1/wikis/{wiki_id}/members/{member}", json={}, headers=auth(owner)
        )
        roster = client.get(f"/v1/wikis/{wiki_id}/members", headers=auth(member))
        forbidden = client.put(
            f"/v1/wikis/{wiki_id}/members/{uuid4()}", json={}, headers=auth(member)
        )
        owner_removal = client.delete(
            f"/v1/wikis/{wiki_id}/members/{owner}", headers=auth(owner)
        )
        removed = client.delete(
            f"/v1/wikis/{wiki_id}/members/{member}", headers=auth(owner)
        )

        assert added.status_code == 200
        assert added.json()["role"] == "member"
        assert {m["user_id"] for m in roster.json()["members"]} == {
            str(owner),
            str(member),
        }
        assert forbidden.status_code == 403
        assert owner_removal.status_code == 409
        assert removed.status_code == 204

    def test_root_documents(self, client, auth, owner, wiki_id, create_document):
        root = create_document("root")
        create_document("child", parent_id=root)

        response = client.get(f"/v1/wikis/{wiki_id}/documents", headers=auth(owner))

        assert [d["id"] for d in response.json()["documents"]] == [root]

    def test_empty_title_is_422(self, client, auth, owner, wiki_id):
        response = client.post(
            f"/v1/wikis/{wiki_id}/documents", json={"title": ""}, headers=auth(owner)
        )

        assert response.status_code == 422


class TestStars:
    def test_toggle_and_list(self, client, auth, owner, wiki_id, create_document):
        document_id = create_document()

        on = client.post(
            "/v1/stars/toggle",
            json={"wiki_id": wiki_id, "document_id": document_id},
            headers=auth(owner),
        )
        status = client.get(
            "/v1/stars/status",
            params={"wiki_id": wiki_id, "document_id": document_id},
            headers=auth(owner),
        )
        starred = client.get("/v1/stars/documents", headers=auth(owner))

        assert on.json() == {"starred": True}
        assert status.json() == {"starred": True}
        assert [d["id"] for d in starred.json()["documents"]] == [document_id]

        off = client.post(
            "/v1/stars/toggle",
            json={"wiki_id": wiki_id, "document_id": document_id},
            headers=auth(owner),
        )
        assert off.json() == {"starred": False}

    def test_starred_wikis(self, client, auth, owner, wiki_id):
        client.post("/v1/stars/toggle", json={"wiki_id": wiki_id}, headers=auth(owner))

        response = client.get("/v1/stars/wikis", headers=auth(owner))

        assert [w["id"] for w in response.json()["wikis"]] == [wiki_id]

    def test_star_on_unreadable_document_is_403(
        self, client, auth, wiki_id, create_document
    ):
        document_id = create_document()

        response = client.post(
            "/v1/stars/toggle",
            json={"wiki_id": wiki_id, "document_id": document_id},
            headers=auth(uuid4()),
        )

        assert response.status_code == 403
