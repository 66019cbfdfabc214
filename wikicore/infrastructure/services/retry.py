"""wikicore.infrastructure.services.retry

Name: Retry de lecturas de store (backoff exponencial + jitter)

El resolver camina la cadena de ancestros con una lectura por salto; un
corte de red a mitad de la walk no debe convertirse en un 503 ni, peor, en
una decisión distinta. Las lecturas se reintentan acá, por debajo del
resolver, que nunca ve el reintento.

CRC (Component Card)
--------------------
Component: retry policy
Responsibilities:
  - Clasificar errores: transitorio (reintentar) vs permanente (fail-fast).
  - Construir la política tenacity desde Settings (intentos, delays).
  - Loguear cada reintento (tipo de error, nunca parámetros).
Collaborators:
  - tenacity
  - psycopg / psycopg_pool (tipos de error)
  - crosscutting.config / crosscutting.logger
Constraints:
  - Escrituras NO usan este decorator: un INSERT de grant reintentado
    después de un commit perdido duplicaría el efecto.
"""

from __future__ import annotations

from functools import wraps
from typing import Callable, TypeVar

import psycopg
from psycopg import errors as pg_errors
from psycopg_pool import PoolTimeout
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from ...crosscutting.config import get_settings
from ...crosscutting.logger import logger
from ..db.errors import DatabaseConnectionError

T = TypeVar("T")

_TRANSIENT_TYPES: tuple[type[BaseException], ...] = (
    DatabaseConnectionError,
    PoolTimeout,
    psycopg.OperationalError,
    pg_errors.SerializationFailure,
    pg_errors.DeadlockDetected,
    pg_errors.QueryCanceled,
    pg_errors.AdminShutdown,
    TimeoutError,
    ConnectionError,
)


def is_transient_error(exception: BaseException) -> bool:
    return isinstance(exception, _TRANSIENT_TYPES)


def _before_sleep(state: RetryCallState) -> None:
    error = state.outcome.exception() if state.outcome is not None else None
    logger.warning(
        "Retrying store read",
        extra={
            "operation": getattr(state.fn, "__qualname__", "unknown"),
            "attempt": state.attempt_number,
            "sleep_s": round(state.next_action.sleep, 3) if state.next_action else 0.0,
            "error_type": type(error).__name__ if error is not None else None,
        },
    )


def create_retry_decorator(
    max_attempts: int | None = None,
    base_delay: float | None = None,
    max_delay: float | None = None,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Política tenacity; los None toman el valor de Settings."""
    settings = get_settings()
    attempts = settings.retry_max_attempts if max_attempts is None else max_attempts
    initial = settings.retry_base_delay_seconds if base_delay is None else base_delay
    ceiling = settings.retry_max_delay_seconds if max_delay is None else max_delay

    if attempts < 1:
        raise ValueError("max_attempts must be >= 1")
    if initial < 0 or ceiling <= 0:
        raise ValueError("retry delays must be non-negative and max_delay > 0")

    return retry(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential_jitter(initial=initial, max=ceiling, jitter=initial),
        retry=retry_if_exception(is_transient_error),
        before_sleep=_before_sleep,
        reraise=True,
    )


def with_retry(func: Callable[..., T]) -> Callable[..., T]:
    """Decorator con la política de Settings, construida en la primera llamada."""
    policy: dict[str, Callable[..., T]] = {}

    @wraps(func)
    def wrapper(*args, **kwargs) -> T:
        if "call" not in policy:
            policy["call"] = create_retry_decorator()(func)
        return policy["call"](*args, **kwargs)

    return wrapper
