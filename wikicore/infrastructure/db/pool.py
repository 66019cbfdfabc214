"""
===============================================================================
TARJETA CRC — infrastructure/db/pool.py
===============================================================================

Componente:
  Pool PostgreSQL del proceso (uno solo, instrumentado).

Responsabilidades:
  - init_pool / get_pool / close_pool con fail-fast ante mal uso.
  - Cada conexión nueva queda con statement_timeout y application_name,
    así una walk de árbol colgada no bloquea el pool.

Colaboradores:
  - psycopg_pool.ConnectionPool
  - InstrumentedConnectionPool
  - crosscutting.config (timeouts, slow query, healthcheck)
===============================================================================
"""

from __future__ import annotations

import threading
from typing import Optional

from psycopg_pool import ConnectionPool

from ...crosscutting.config import get_settings
from ...crosscutting.logger import logger
from .errors import PoolAlreadyInitializedError, PoolNotInitializedError
from .instrumentation import InstrumentedConnectionPool

APPLICATION_NAME = "wikicore"

_lock = threading.Lock()
_pool: Optional[InstrumentedConnectionPool] = None


def _configure_connection(conn) -> None:
    timeout_ms = max(int(get_settings().db_statement_timeout_ms), 0)
    conn.execute(
        "SELECT set_config('statement_timeout', %s, false),"
        " set_config('application_name', %s, false)",
        [str(timeout_ms), APPLICATION_NAME],
    )
    conn.commit()


def init_pool(
    database_url: str, min_size: int, max_size: int
) -> InstrumentedConnectionPool:
    global _pool

    settings = get_settings()
    with _lock:
        if _pool is not None:
            raise PoolAlreadyInitializedError("DB pool already initialized")

        inner = ConnectionPool(
            conninfo=database_url,
            min_size=min_size,
            max_size=max_size,
            configure=_configure_connection,
            open=True,
        )
        _pool = InstrumentedConnectionPool(
            inner,
            slow_query_seconds=settings.db_slow_query_seconds,
            healthcheck=settings.db_healthcheck_on_acquire,
        )

    logger.info(
        "DB pool ready",
        extra={"pool_min_size": min_size, "pool_max_size": max_size},
    )
    return _pool


def get_pool() -> InstrumentedConnectionPool:
    pool = _pool
    if pool is None:
        raise PoolNotInitializedError("DB pool not initialized; call init_pool()")
    return pool


def close_pool() -> None:
    """Idempotente."""
    global _pool

    with _lock:
        pool, _pool = _pool, None
    if pool is not None:
        pool.close()
        logger.info("DB pool closed")
