"""
===============================================================================
TARJETA CRC — error_mapping.py (UseCase Error -> HTTP RFC7807)
===============================================================================

Responsabilidades:
  - Traducir DocumentError (casos de uso) a HTTP Exceptions RFC7807.
  - Centralizar el mapeo para evitar duplicación en routers.
  - Mantener dominio y aplicación libres de HTTP.

Reglas:
  - UNAUTHENTICATED -> 401
  - FORBIDDEN -> 403
  - NOT_FOUND -> 404
  - CONFLICT -> 409
  - EXPIRED -> 410
  - VALIDATION_ERROR -> 422
  - INTEGRITY_ERROR -> 500 con code INTEGRITY_ERROR (nunca un 403 plano)

Colaboradores:
  - application.usecases (DocumentError, DocumentErrorCode)
  - crosscutting.error_responses (factories RFC7807)
===============================================================================
"""

from __future__ import annotations

from typing import NoReturn
from uuid import UUID

from wikicore.application.usecases import DocumentError, DocumentErrorCode
from wikicore.crosscutting.error_responses import (
    conflict,
    forbidden,
    integrity_error,
    internal_error,
    not_found,
    share_expired,
    unauthorized,
    validation_error,
)


def raise_document_error(
    error: DocumentError,
    *,
    document_id: UUID | None = None,
    wiki_id: UUID | None = None,
) -> NoReturn:
    """
    Traduce DocumentError -> HTTP.

    Convención:
      - NOT_FOUND con resource "Wiki" usa wiki_id; el resto usa document_id.
    """
    code = error.code
    if code == DocumentErrorCode.UNAUTHENTICATED:
        raise unauthorized(error.message)
    if code == DocumentErrorCode.FORBIDDEN:
        raise forbidden(error.message)
    if code == DocumentErrorCode.EXPIRED:
        raise share_expired(error.message)
    if code == DocumentErrorCode.INTEGRITY_ERROR:
        raise integrity_error()
    if code == DocumentErrorCode.CONFLICT:
        raise conflict(error.message)
    if code == DocumentErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message)
    if code == DocumentErrorCode.NOT_FOUND:
        target = error.resource or "Document"
        target_id = wiki_id if target == "Wiki" else document_id
        raise not_found(target, str(target_id or "-"))

    # Fallback: un código nuevo sin mapeo es un bug del servidor
    raise internal_error(error.message)
