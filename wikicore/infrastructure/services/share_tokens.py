"""
===============================================================================
TARJETA CRC — infrastructure/services/share_tokens.py
===============================================================================

Componente:
  Generador de tokens de share público

Responsabilidades:
  - Generar tokens URL-safe con entropía configurable (secrets).

Colaboradores:
  - crosscutting.config.get_settings: share_token_bytes
  - application.sharing.ShareStateMachine (vía token_factory inyectado)
===============================================================================
"""

from __future__ import annotations

import secrets

from ...crosscutting.config import get_settings


def generate_share_token(nbytes: int | None = None) -> str:
    """Token URL-safe; ~1.3 caracteres por byte de entropía."""
    size = get_settings().share_token_bytes if nbytes is None else nbytes
    return secrets.token_urlsafe(size)
