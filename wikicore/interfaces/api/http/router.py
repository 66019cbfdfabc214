"""
===============================================================================
TARJETA CRC — router.py (Router raíz / Composición)
===============================================================================

Responsabilidades:
  - Definir el APIRouter raíz que se incluye en FastAPI (app.include_router).
  - Centralizar responses RFC7807 para OpenAPI.
  - Componer routers por feature (wikis/documents/public/stars).

Patrones aplicados:
  - Composition over inheritance: router raíz compone sub-routers.
  - Factory: build_router() para testear composición sin side-effects.

Notas:
  - Este router se incluye desde wikicore/api/main.py con prefix="/v1".
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter

from wikicore.crosscutting.error_responses import OPENAPI_ERROR_RESPONSES

from .routers.documents import router as documents_router
from .routers.public import router as public_router
from .routers.stars import router as stars_router
from .routers.wikis import router as wikis_router


def build_router() -> APIRouter:
    """Construye el router raíz v1."""
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)

    api_router.include_router(wikis_router)
    api_router.include_router(documents_router)
    api_router.include_router(stars_router)
    # Rutas públicas al final: no comparten dependencias de identidad.
    api_router.include_router(public_router)

    return api_router


router = build_router()

__all__ = ["router", "build_router"]
