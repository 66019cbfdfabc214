"""
Name: Database Pool Tests

Responsibilities:
  - Test pool lifecycle (init, get, close)
  - Test connection instrumentation (healthcheck, error translation)
  - Offline unit tests (no real DB)

Notes:
  - Uses mocking for ConnectionPool
"""

from unittest.mock import MagicMock, patch

import psycopg
import pytest

from wikicore.infrastructure.db.errors import (
    DatabaseConnectionError,
    PoolAlreadyInitializedError,
    PoolNotInitializedError,
)
from wikicore.infrastructure.db.instrumentation import InstrumentedConnectionPool
from wikicore.infrastructure.db.pool import close_pool, get_pool, init_pool


@pytest.fixture(autouse=True)
def clean_pool():
    close_pool()
    yield
    close_pool()


@pytest.mark.unit
class TestPoolLifecycle:
    def test_init_pool_wraps_connection_pool(self):
        with patch("wikicore.infrastructure.db.pool.ConnectionPool") as MockPool:
            pool = init_pool("postgresql://test", min_size=1, max_size=4)

            MockPool.assert_called_once()
            assert MockPool.call_args.kwargs["min_size"] == 1
            assert MockPool.call_args.kwargs["max_size"] == 4
            assert isinstance(pool, InstrumentedConnectionPool)
            assert get_pool() is pool

    def test_init_pool_twice_raises(self):
        with patch("wikicore.infrastructure.db.pool.ConnectionPool"):
            init_pool("postgresql://test", min_size=1, max_size=4)

            with pytest.raises(PoolAlreadyInitializedError):
                init_pool("postgresql://test", min_size=1, max_size=4)

    def test_get_pool_without_init_raises(self):
        with pytest.raises(PoolNotInitializedError):
            get_pool()

    def test_close_pool_is_idempotent(self):
        with patch("wikicore.infrastructure.db.pool.ConnectionPool") as MockPool:
            init_pool("postgresql://test", min_size=1, max_size=4)

            close_pool()
            close_pool()

            MockPool.return_value.close.assert_called_once()
            with pytest.raises(PoolNotInitializedError):
                get_pool()


@pytest.mark.unit
class TestInstrumentedConnectionPool:
    def _inner_pool(self, conn):
        ctx = MagicMock()
        ctx.__enter__.return_value = conn
        ctx.__exit__.return_value = False
        inner = MagicMock()
        inner.connection.return_value = ctx
        return inner

    def test_healthcheck_runs_select_one(self):
        conn = MagicMock()
        pool = InstrumentedConnectionPool(
            self._inner_pool(conn), slow_query_seconds=10.0, healthcheck=True
        )

        with pool.connection() as timed:
            timed.execute("SELECT * FROM wikis")

        executed = [c.args[0] for c in conn.execute.call_args_list]
        assert executed == ["SELECT 1", "SELECT * FROM wikis"]

    def test_connection_failure_is_translated(self):
        conn = MagicMock()
        conn.execute.side_effect = psycopg.OperationalError("down")
        pool = InstrumentedConnectionPool(
            self._inner_pool(conn), slow_query_seconds=10.0, healthcheck=True
        )

        with pytest.raises(DatabaseConnectionError):
            with pool.connection():
                pass
