"""
Name: API Test Fixtures

Responsibilities:
  - Montar el router /v1 con los exception handlers (RFC 7807)
  - Aislar el estado del container (stores in-memory) por test
  - Emitir headers Authorization para actores de prueba
"""

from uuid import UUID, uuid4

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from wikicore import container
from wikicore.api.exception_handlers import register_exception_handlers
from wikicore.identity.auth_users import create_access_token
from wikicore.interfaces.api.http.router import build_router


def _auth_headers(user_id: UUID) -> dict[str, str]:
    token, _ = create_access_token(user_id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(autouse=True)
def fresh_container():
    container.reset_container()
    yield
    container.reset_container()


@pytest.fixture
def client() -> TestClient:
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(build_router(), prefix="/v1")
    return TestClient(app)


@pytest.fixture
def auth():
    return _auth_headers


@pytest.fixture
def owner() -> UUID:
    return uuid4()


@pytest.fixture
def wiki_id(client, owner) -> str:
    response = client.post(
        "/v1/wikis", json={"name": "Engineering"}, headers=_auth_headers(owner)
    )
    assert response.status_code == 201
    return response.json()["id"]


@pytest.fixture
def create_document(client, owner, wiki_id):
    def _create(title: str = "Doc", parent_id: str | None = None, actor=None) -> str:
        response = client.post(
            f"/v1/wikis/{wiki_id}/documents",
            json={"title": title, "parent_id": parent_id},
            headers=_auth_headers(actor or owner),
        )
        assert response.status_code == 201, response.text
        return response.json()["id"]

    return _create
