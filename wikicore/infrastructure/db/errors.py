"""
===============================================================================
TARJETA CRC — infrastructure/db/errors.py
===============================================================================

Componente:
  Errores del ciclo de vida del pool y de la conectividad.

Responsabilidades:
  - Distinguir mal uso del pool (init doble, uso sin init) de fallas de red.
  - DatabaseConnectionError es la única falla transitoria: la política de
    retry de lecturas (infrastructure/services/retry.py) la reintenta.
===============================================================================
"""


class DatabasePoolError(Exception):
    """Base de los errores de pool."""


class PoolAlreadyInitializedError(DatabasePoolError):
    pass


class PoolNotInitializedError(DatabasePoolError):
    pass


class DatabaseConnectionError(DatabasePoolError):
    """No se pudo adquirir o validar una conexión."""
