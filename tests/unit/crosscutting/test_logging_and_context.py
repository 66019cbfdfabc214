"""
Name: Structured Logging and Request Context Tests

Responsibilities:
  - JSONFormatter: extras, secret redaction, top-level alert flag
  - Request context: actor id added after the request context is opened
  - Settings validators
"""

import json
import logging

import pytest
from pydantic import ValidationError

from wikicore.context import (
    clear_context,
    get_context_dict,
    set_actor_context,
    set_request_context,
)
from wikicore.crosscutting.config import Settings
from wikicore.crosscutting.logger import JSONFormatter

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def fresh_context():
    clear_context()
    yield
    clear_context()


def _format(**attrs) -> dict:
    record = logging.makeLogRecord(
        {"name": "wikicore", "levelname": "ERROR", "levelno": logging.ERROR, **attrs}
    )
    return json.loads(JSONFormatter().format(record))


class TestJSONFormatter:
    def test_extras_and_message(self):
        entry = _format(msg="tree fault on %s", args=("read",), document_id="d-1")

        assert entry["msg"] == "tree fault on read"
        assert entry["level"] == "ERROR"
        assert entry["document_id"] == "d-1"

    def test_share_secrets_are_redacted(self):
        entry = _format(
            msg="share",
            share_token="tok-123",
            metadata={"password": "pw", "include_descendants": True},
        )

        assert entry["share_token"] == "[redacted]"
        assert entry["metadata"] == {
            "password": "[redacted]",
            "include_descendants": True,
        }
        assert "tok-123" not in json.dumps(entry)

    def test_alert_is_top_level_only_when_set(self):
        alerted = _format(msg="fault", alert=True, integrity_fault="cycle")
        quiet = _format(msg="fine")

        assert alerted["alert"] is True
        assert alerted["integrity_fault"] == "cycle"
        assert "alert" not in quiet

    def test_request_context_is_merged(self):
        set_request_context(request_id="req-1", method="GET", path="/v1/wikis")

        entry = _format(msg="hello")

        assert entry["request_id"] == "req-1"
        assert entry["path"] == "/v1/wikis"


class TestRequestContext:
    def test_actor_is_added_to_open_context(self):
        set_request_context(request_id="req-1", method="GET", path="")

        set_actor_context("user-1")

        assert get_context_dict() == {
            "request_id": "req-1",
            "method": "GET",
            "actor_id": "user-1",
        }

    def test_clear(self):
        set_request_context(request_id="req-1")
        set_actor_context("user-1")

        clear_context()

        assert get_context_dict() == {}


class TestSettings:
    def test_log_level_is_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"log_level": "verbose"},
            {"db_pool_min_size": 5, "db_pool_max_size": 2},
            {"retry_base_delay_seconds": 10, "retry_max_delay_seconds": 1},
            {"share_token_bytes": 8},
            {"document_tree_max_depth": 0},
            {"app_env": "production", "jwt_secret": "dev-secret"},
        ],
    )
    def test_invalid_settings(self, overrides):
        with pytest.raises(ValidationError):
            Settings(**overrides)

    def test_test_env_uses_in_memory_stores(self):
        production = Settings(
            app_env="production", jwt_secret="x" * 40, database_url="postgresql://db"
        )

        assert Settings(app_env="test").uses_in_memory_stores()
        assert not production.uses_in_memory_stores()
