"""
===============================================================================
TARJETA CRC — dependencies.py (Dependencias y helpers comunes)
===============================================================================

Responsabilidades:
  - Resolver el actor del request (JWT opcional): los casos de uso deciden
    si un actor anónimo es UNAUTHENTICATED, así el orden de evaluación
    (anónimo antes de cualquier lectura) queda en el resolver.
  - Extraer credenciales de share público (token + password opcional).

Colaboradores:
  - identity.auth_users.optional_actor
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Header, Query

from wikicore.identity.auth_users import optional_actor

SHARE_PASSWORD_HEADER = "X-Share-Password"

# Dependency: UUID del actor o None (token inválido => 401)
current_actor = optional_actor()


@dataclass(frozen=True)
class ShareCredentials:
    token: str | None
    password: str | None


def share_credentials(
    token: str | None = Query(None, min_length=1, max_length=256),
    password: str | None = Header(None, alias=SHARE_PASSWORD_HEADER),
) -> ShareCredentials:
    """Token por query string; password por header (no queda en logs de URL)."""
    return ShareCredentials(token=token, password=password or None)
