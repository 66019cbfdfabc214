"""
Name: Retry Policy and Share Token Tests

Responsibilities:
  - Validate transient vs permanent error classification
  - Validate the tenacity decorator retries only transient errors
  - Validate share token generation
"""

import psycopg
import pytest
from psycopg import errors as pg_errors
from psycopg_pool import PoolTimeout

from wikicore.infrastructure.db.errors import DatabaseConnectionError
from wikicore.infrastructure.services import generate_share_token
from wikicore.infrastructure.services.retry import (
    create_retry_decorator,
    is_transient_error,
)


@pytest.mark.unit
class TestIsTransientError:
    @pytest.mark.parametrize(
        "exc",
        [
            DatabaseConnectionError("down"),
            PoolTimeout("pool exhausted"),
            psycopg.OperationalError("connection reset"),
            pg_errors.SerializationFailure("serialization"),
            pg_errors.DeadlockDetected("deadlock"),
            TimeoutError("timeout"),
            ConnectionError("reset"),
        ],
    )
    def test_transient(self, exc):
        assert is_transient_error(exc) is True

    @pytest.mark.parametrize(
        "exc",
        [
            ValueError("bad"),
            pg_errors.UniqueViolation("duplicate"),
            pg_errors.SyntaxError("syntax"),
        ],
    )
    def test_permanent(self, exc):
        assert is_transient_error(exc) is False


def _flaky(*outcomes):
    """Función que devuelve/lanza cada outcome en orden y cuenta llamadas."""
    calls = []

    def read():
        calls.append(1)
        outcome = outcomes[min(len(calls), len(outcomes)) - 1]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    return read, calls


def _fast_retry(max_attempts: int = 3):
    return create_retry_decorator(
        max_attempts=max_attempts, base_delay=0, max_delay=0.01
    )


@pytest.mark.unit
class TestRetryDecorator:
    def test_retries_transient_then_succeeds(self):
        read, calls = _flaky(ConnectionError("reset"), "ok")

        assert _fast_retry()(read)() == "ok"
        assert len(calls) == 2

    def test_permanent_error_is_not_retried(self):
        read, calls = _flaky(ValueError("bad"))

        with pytest.raises(ValueError):
            _fast_retry()(read)()
        assert len(calls) == 1

    def test_gives_up_after_max_attempts(self):
        read, calls = _flaky(TimeoutError("slow"))

        with pytest.raises(TimeoutError):
            _fast_retry(max_attempts=2)(read)()
        assert len(calls) == 2

    def test_invalid_config(self):
        with pytest.raises(ValueError, match="max_attempts"):
            create_retry_decorator(max_attempts=0)


@pytest.mark.unit
class TestShareTokens:
    def test_tokens_are_url_safe_and_unique(self):
        tokens = {generate_share_token() for _ in range(50)}

        assert len(tokens) == 50
        for token in tokens:
            assert "/" not in token and "+" not in token

    def test_size_follows_entropy(self):
        assert len(generate_share_token(16)) >= 21
