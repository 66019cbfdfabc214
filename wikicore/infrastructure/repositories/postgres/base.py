"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/base.py
============================================================
Class: PostgresRepositoryBase

Responsibilities:
  - Resolver el pool (inyectado o global, lazy).
  - Ejecutar SQL parametrizado y traducir cualquier falla a DatabaseError
    (logueada una sola vez, con el error_id de la excepción).
  - Retry (tenacity) SOLO en lecturas: el resolver camina ancestros con
    lecturas repetidas y un blip de red no debe volverse un 503.

Collaborators:
  - infrastructure.db.pool.get_pool
  - infrastructure.services.retry.with_retry
  - crosscutting.exceptions.DatabaseError

Constraints / Notes:
  - Escrituras nunca se reintentan.
  - El mensaje de DatabaseError es context_msg: el texto del driver solo
    va al log como tipo de error.
============================================================
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterable, Iterator, Optional

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ...services.retry import with_retry


class PostgresRepositoryBase:
    def __init__(self, pool: Optional[Any] = None):
        self._pool = pool

    def _get_pool(self):
        if self._pool is not None:
            return self._pool
        from ...db.pool import get_pool

        return get_pool()

    @contextmanager
    def _translating(self, context_msg: str, extra: dict) -> Iterator[None]:
        try:
            yield
        except DatabaseError:
            raise
        except Exception as exc:
            error = DatabaseError(context_msg)
            logger.exception(
                context_msg,
                extra={
                    **extra,
                    "error_id": error.error_id,
                    "error_type": type(exc).__name__,
                },
            )
            raise error from exc

    # --- lecturas ---------------------------------------------------------
    @with_retry
    def _read_all(self, query: str, params: tuple) -> list[tuple]:
        with self._get_pool().connection() as conn:
            return conn.execute(query, params).fetchall()

    @with_retry
    def _read_one(self, query: str, params: tuple) -> tuple | None:
        with self._get_pool().connection() as conn:
            return conn.execute(query, params).fetchone()

    def _fetchall(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> list[tuple]:
        with self._translating(context_msg, extra):
            return self._read_all(query, tuple(params))

    def _fetchone(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> tuple | None:
        with self._translating(context_msg, extra):
            return self._read_one(query, tuple(params))

    # --- escrituras -------------------------------------------------------
    def _write_returning(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> tuple | None:
        with self._translating(context_msg, extra):
            with self._get_pool().connection() as conn:
                return conn.execute(query, tuple(params)).fetchone()

    def _write_rowcount(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> int:
        with self._translating(context_msg, extra):
            with self._get_pool().connection() as conn:
                return conn.execute(query, tuple(params)).rowcount or 0
