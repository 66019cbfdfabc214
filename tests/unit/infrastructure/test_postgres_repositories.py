"""
Name: Postgres Repository Tests (offline)

Responsibilities:
  - Validate row mapping for documents, grants, visits and versions
  - Validate read retries and DatabaseError wrapping
  - No real database: the pool is a MagicMock

Notes:
  - La política de retry usa los delays de Settings (pocas décimas de segundo).
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock
from uuid import uuid4

import psycopg
import pytest
from psycopg import errors as pg_errors

from wikicore.crosscutting.exceptions import DatabaseError
from wikicore.domain.capabilities import Capability
from wikicore.domain.entities import Document, DocumentStatus
from wikicore.infrastructure.repositories.postgres import (
    PostgresDocAuthorityRepository,
    PostgresDocumentRepository,
    PostgresDocumentVersionRepository,
    PostgresDocumentVisitRepository,
)

pytestmark = pytest.mark.unit

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _connection_context(conn):
    ctx = MagicMock()
    ctx.__enter__.return_value = conn
    ctx.__exit__.return_value = False
    return ctx


def _pool_returning(*, fetchone=None, fetchall=None):
    conn = MagicMock()
    conn.execute.return_value.fetchone.return_value = fetchone
    conn.execute.return_value.fetchall.return_value = fetchall or []
    pool = MagicMock()
    pool.connection.return_value = _connection_context(conn)
    return pool, conn


def _document_row(**overrides):
    row = {
        "id": uuid4(),
        "wiki_id": uuid4(),
        "creator_id": uuid4(),
        "parent_id": None,
        "title": "Home",
        "content": "body",
        "status": "private",
        "share_token": None,
        "share_password_hash": None,
        "share_expires_at": None,
        "share_include_descendants": False,
        "share_created_at": None,
        "metadata": None,
        "created_at": NOW,
        "updated_at": NOW,
    }
    row.update(overrides)
    return tuple(row.values())


class TestDocumentMapping:
    def test_private_document(self):
        row = _document_row()
        pool, conn = _pool_returning(fetchone=row)
        repo = PostgresDocumentRepository(pool=pool)

        document = repo.get_document(row[0])

        assert document.id == row[0]
        assert document.status == DocumentStatus.PRIVATE
        assert document.share_config is None
        assert document.metadata == {}
        assert conn.execute.call_args.args[1] == (row[0],)

    def test_shared_document(self):
        row = _document_row(
            status="public",
            share_token="tok",
            share_password_hash="hash",
            share_expires_at=NOW,
            share_include_descendants=True,
            share_created_at=NOW,
        )
        pool, _ = _pool_returning(fetchone=row)
        repo = PostgresDocumentRepository(pool=pool)

        document = repo.get_document(row[0])

        assert document.is_public
        assert document.share_config.token == "tok"
        assert document.share_config.include_descendants
        assert document.share_config.expires_at == NOW

    def test_missing_document(self):
        pool, _ = _pool_returning(fetchone=None)

        assert PostgresDocumentRepository(pool=pool).get_document(uuid4()) is None

    def test_list_by_ids_skips_query_when_empty(self):
        pool, conn = _pool_returning()

        assert PostgresDocumentRepository(pool=pool).list_documents_by_ids([]) == []
        conn.execute.assert_not_called()

    def test_subtree_delete_is_one_statement(self):
        pool, conn = _pool_returning()
        conn.execute.return_value.rowcount = 2
        ids = [uuid4(), uuid4()]

        deleted = PostgresDocumentRepository(pool=pool).delete_documents(ids + ids[:1])

        assert deleted == 2
        conn.execute.assert_called_once()
        query, params = conn.execute.call_args.args
        assert query.startswith("DELETE FROM documents WHERE id = ANY")
        assert params == (ids,)


class TestGrantRepository:
    def test_get_authority_maps_capability(self):
        document_id, user_id = uuid4(), uuid4()
        pool, _ = _pool_returning(
            fetchone=(document_id, user_id, "createUser", None, NOW)
        )

        grant = PostgresDocAuthorityRepository(pool=pool).get_authority(
            document_id, user_id
        )

        assert grant.capability == Capability.CREATE_USER
        assert grant.created_at == NOW

    def test_delete_for_no_documents_is_noop(self):
        pool, conn = _pool_returning()

        assert (
            PostgresDocAuthorityRepository(pool=pool).delete_authorities_for_documents(
                []
            )
            == 0
        )
        conn.execute.assert_not_called()


class TestActivityRepositories:
    def test_record_visit_is_an_upsert(self):
        user_id, document_id = uuid4(), uuid4()
        pool, conn = _pool_returning(fetchone=(user_id, document_id, NOW))

        visit = PostgresDocumentVisitRepository(pool=pool).record_visit(
            user_id, document_id
        )

        assert visit.visited_at == NOW
        query, params = conn.execute.call_args.args
        assert "ON CONFLICT (user_id, document_id)" in query
        assert params == (user_id, document_id)

    def test_recent_visits_pass_limit(self):
        user_id = uuid4()
        rows = [(user_id, uuid4(), NOW), (user_id, uuid4(), NOW)]
        pool, conn = _pool_returning(fetchall=rows)

        visits = PostgresDocumentVisitRepository(pool=pool).list_recent_visits(
            user_id, 2
        )

        assert [v.document_id for v in visits] == [rows[0][1], rows[1][1]]
        assert conn.execute.call_args.args[1] == (user_id, 2)

    def test_append_version_numbers_in_the_insert(self):
        document = Document(
            id=uuid4(), wiki_id=uuid4(), creator_id=uuid4(), title="T", content="c"
        )
        editor = uuid4()
        pool, conn = _pool_returning(
            fetchone=(document.id, 3, "T", "c", editor, NOW)
        )

        version = PostgresDocumentVersionRepository(pool=pool).append_version(
            document, editor
        )

        assert version.version == 3
        assert version.editor_id == editor
        query, params = conn.execute.call_args.args
        assert "COALESCE(MAX(version), 0) + 1" in query
        assert params == (document.id, "T", "c", editor, document.id)

    def test_delete_versions_for_no_documents_is_noop(self):
        pool, conn = _pool_returning()

        assert (
            PostgresDocumentVersionRepository(
                pool=pool
            ).delete_versions_for_documents([])
            == 0
        )
        conn.execute.assert_not_called()

class TestErrorHandling:
    def test_transient_read_error_is_retried(self):
        document_id, user_id = uuid4(), uuid4()
        conn = MagicMock()
        conn.execute.return_value.fetchone.return_value = (
            document_id,
            user_id,
            "readable",
            None,
            NOW,
        )
        pool = MagicMock()
        pool.connection.side_effect = [
            psycopg.OperationalError("connection reset"),
            _connection_context(conn),
        ]

        grant = PostgresDocAuthorityRepository(pool=pool).get_authority(
            document_id, user_id
        )

        assert grant.capability == Capability.READABLE
        assert pool.connection.call_count == 2

    def test_permanent_read_error_becomes_database_error(self):
        pool, conn = _pool_returning()
        conn.execute.side_effect = pg_errors.UndefinedTable("no table")

        with pytest.raises(DatabaseError):
            PostgresDocAuthorityRepository(pool=pool).list_authorities(uuid4())

        assert pool.connection.call_count == 1

    def test_write_errors_are_not_retried(self):
        pool, conn = _pool_returning()
        conn.execute.side_effect = psycopg.OperationalError("connection reset")

        with pytest.raises(DatabaseError):
            PostgresDocAuthorityRepository(pool=pool).delete_authority(
                uuid4(), uuid4()
            )

        assert pool.connection.call_count == 1
