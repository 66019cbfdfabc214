"""
===============================================================================
TARJETA CRC — infrastructure/db/instrumentation.py
===============================================================================

Clases:
  - TimedConnection: proxy de conexión que cronometra execute().
  - InstrumentedConnectionPool: facade del pool real.

Responsabilidades:
  - Histograma de duración por tipo de statement (SELECT, UPDATE, ...).
  - Warning de slow query sin loguear SQL ni parámetros (pueden traer
    hashes de password de share).
  - Healthcheck opcional al adquirir (SELECT 1); psycopg.Error al adquirir
    se traduce a DatabaseConnectionError.

Colaboradores:
  - crosscutting.logger / crosscutting.metrics
  - psycopg_pool.ConnectionPool
===============================================================================
"""

from __future__ import annotations

import time
from contextlib import ExitStack, contextmanager
from typing import Any, Iterator

import psycopg

from ...crosscutting.logger import logger
from ...crosscutting.metrics import observe_db_query_duration
from .errors import DatabaseConnectionError


def _statement_kind(sql: Any) -> str:
    head = str(sql).lstrip()[:16].split(None, 1)
    return head[0].upper() if head else "UNKNOWN"


class TimedConnection:
    """Solo execute() está instrumentado; el resto se delega tal cual."""

    def __init__(self, inner_conn, *, slow_query_seconds: float) -> None:
        self._conn = inner_conn
        self._slow_query_seconds = slow_query_seconds

    def execute(self, sql, *args, **kwargs):
        started = time.perf_counter()
        try:
            return self._conn.execute(sql, *args, **kwargs)
        finally:
            self._observe(_statement_kind(sql), time.perf_counter() - started)

    def _observe(self, kind: str, elapsed: float) -> None:
        observe_db_query_duration(kind, elapsed)
        if elapsed >= self._slow_query_seconds:
            logger.warning(
                "Slow DB statement",
                extra={"statement_kind": kind, "elapsed_s": round(elapsed, 4)},
            )

    def __getattr__(self, item: str):
        return getattr(self._conn, item)


class InstrumentedConnectionPool:
    """
    Los repositorios usan `with pool.connection() as conn:` igual que con el
    pool de psycopg; reciben un TimedConnection.
    """

    def __init__(
        self,
        inner_pool,
        *,
        slow_query_seconds: float,
        healthcheck: bool,
    ) -> None:
        self._pool = inner_pool
        self._slow_query_seconds = slow_query_seconds
        self._healthcheck = healthcheck

    @contextmanager
    def connection(self, *args, **kwargs) -> Iterator[TimedConnection]:
        with ExitStack() as stack:
            try:
                conn = stack.enter_context(self._pool.connection(*args, **kwargs))
                if self._healthcheck:
                    conn.execute("SELECT 1")
            except psycopg.Error as exc:
                raise DatabaseConnectionError(
                    "Could not acquire a healthy DB connection"
                ) from exc
            yield TimedConnection(conn, slow_query_seconds=self._slow_query_seconds)

    def __getattr__(self, item: str):
        return getattr(self._pool, item)
