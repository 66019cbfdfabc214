"""
===============================================================================
TARJETA CRC — identity/auth_users.py
===============================================================================

Módulo:
    Identidad del actor (JWT) + hashing de passwords de share (Argon2)

Responsabilidades:
    - Hashear y verificar passwords de links públicos (Argon2id).
    - Extraer el actor del request: Authorization: Bearer o cookie.
    - Verificar el JWT (firma HS256, exp, sub = UUID del usuario).
    - Emitir JWT de acceso para tests y tooling.

Colaboradores:
    - crosscutting.config.get_settings: secreto, TTL, cookie.
    - crosscutting.error_responses.unauthorized
    - context.set_actor_context

Decisiones de diseño:
    - Sin lookup de usuarios: el servicio confía en el emisor del token.
    - Token ausente => actor anónimo (None). Token presente pero inválido =>
      401; nunca se degrada a anónimo, porque el camino anónimo podría
      terminar en un recurso público distinto del que el cliente pidió.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable
from uuid import UUID

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from fastapi import Header, Request

from ..context import set_actor_context
from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import unauthorized
from ..crosscutting.logger import logger

JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_TYPE = "access"

_hasher = PasswordHasher()


# ---------------------------------------------------------------------------
# Passwords de share (Argon2)
# ---------------------------------------------------------------------------
def hash_password(password: str) -> str:
    return _hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """False ante mismatch o hash corrupto; nunca levanta."""
    try:
        return _hasher.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


# ---------------------------------------------------------------------------
# JWT
# ---------------------------------------------------------------------------
def create_access_token(user_id: UUID) -> tuple[str, int]:
    """(token, expires_in_seconds). La emisión productiva vive fuera del servicio."""
    settings = get_settings()
    expires_in = int(settings.jwt_access_ttl_minutes) * 60
    issued_at = datetime.now(timezone.utc)
    claims = {
        "sub": str(user_id),
        "typ": ACCESS_TOKEN_TYPE,
        "iat": issued_at,
        "exp": issued_at + timedelta(seconds=expires_in),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=JWT_ALGORITHM), expires_in


def decode_actor_id(token: str) -> UUID:
    try:
        claims = jwt.decode(
            token,
            get_settings().jwt_secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise unauthorized("Token expirado.") from exc
    except jwt.InvalidTokenError as exc:
        raise unauthorized("Token inválido.") from exc

    if claims.get("typ", ACCESS_TOKEN_TYPE) != ACCESS_TOKEN_TYPE:
        raise unauthorized("Tipo de token inválido.")
    try:
        return UUID(str(claims["sub"]))
    except ValueError as exc:
        logger.warning("Rejected token: sub is not a UUID")
        raise unauthorized("Token inválido.") from exc


def _token_from(request: Request, authorization: str | None) -> str | None:
    if authorization:
        scheme, _, credentials = authorization.strip().partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
    cookie_name = get_settings().jwt_cookie_name.strip() or "access_token"
    return request.cookies.get(cookie_name) or None


# ---------------------------------------------------------------------------
# Dependencia FastAPI
# ---------------------------------------------------------------------------
def optional_actor() -> Callable:
    """Actor del JWT o None si el request es anónimo."""

    async def dependency(
        request: Request,
        authorization: str | None = Header(None, alias="Authorization"),
    ) -> UUID | None:
        token = _token_from(request, authorization)
        if token is None:
            return None
        actor_id = decode_actor_id(token)
        request.state.actor_id = actor_id
        set_actor_context(str(actor_id))
        return actor_id

    return dependency
