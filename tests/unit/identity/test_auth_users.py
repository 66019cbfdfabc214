"""
Name: Identity Tests (JWT actor + Argon2 share passwords)

Responsibilities:
  - Argon2 hash/verify for share passwords (real hasher)
  - JWT decode: valid, expired, bad signature, wrong type, non-UUID sub
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
import pytest

from wikicore.crosscutting.config import get_settings
from wikicore.crosscutting.error_responses import AppHTTPException, ErrorCode
from wikicore.identity.auth_users import (
    JWT_ALGORITHM,
    create_access_token,
    decode_actor_id,
    hash_password,
    verify_password,
)

pytestmark = pytest.mark.unit


def _token(**claims) -> str:
    now = datetime.now(timezone.utc)
    payload = {"sub": str(uuid4()), "exp": now + timedelta(minutes=5), **claims}
    return jwt.encode(payload, get_settings().jwt_secret, algorithm=JWT_ALGORITHM)


class TestSharePasswords:
    def test_hash_is_argon2_and_verifies(self):
        hashed = hash_password("s3cret")

        assert hashed.startswith("$argon2")
        assert "s3cret" not in hashed
        assert verify_password("s3cret", hashed) is True
        assert verify_password("wrong", hashed) is False

    def test_corrupt_hash_does_not_raise(self):
        assert verify_password("s3cret", "not-a-hash") is False


class TestAccessTokens:
    def test_roundtrip(self):
        user_id = uuid4()

        token, expires_in = create_access_token(user_id)

        assert decode_actor_id(token) == user_id
        assert expires_in == get_settings().jwt_access_ttl_minutes * 60

    @pytest.mark.parametrize(
        "token",
        [
            pytest.param(
                _token(exp=datetime.now(timezone.utc) - timedelta(minutes=1)),
                id="expired",
            ),
            pytest.param(_token(typ="refresh"), id="wrong-type"),
            pytest.param(_token(sub="not-a-uuid"), id="sub-not-uuid"),
            pytest.param(
                jwt.encode(
                    {"sub": str(uuid4()), "exp": 9999999999},
                    "another-secret",
                    algorithm=JWT_ALGORITHM,
                ),
                id="bad-signature",
            ),
        ],
    )
    def test_rejected_tokens_are_401(self, token):
        with pytest.raises(AppHTTPException) as exc_info:
            decode_actor_id(token)

        assert exc_info.value.status_code == 401
        assert exc_info.value.code == ErrorCode.UNAUTHORIZED
