"""
===============================================================================
MÓDULO: Excepciones internas (infraestructura)
===============================================================================

Las decisiones de autoridad NO usan excepciones: viajan como resultados
tipados (DocumentError). Lo que queda acá es lo que ningún caso de uso puede
resolver: fallas de store, que terminan en 503.

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  WikiCoreError + DatabaseError

Responsabilidades:
  - error_code estable + error_id para correlacionar respuesta y log.
  - message apta para el cliente: nunca incluye SQL, parámetros ni el texto
    del driver (podría contener tokens de share). La causa queda en
    __cause__ para el log.

Colaboradores:
  - api/exception_handlers.py
  - infrastructure/repositories/postgres/base.py
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class WikiCoreError(Exception):
    error_code: str = "WIKICORE_ERROR"

    def __init__(self, message: str, *, error_id: str | None = None):
        super().__init__(message)
        self.message = message
        self.error_id = error_id or uuid4().hex


class DatabaseError(WikiCoreError):
    """Store inaccesible o statement fallido."""

    error_code: str = "DATABASE_ERROR"
