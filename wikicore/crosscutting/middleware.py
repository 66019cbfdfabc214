"""
===============================================================================
MÓDULO: Middleware HTTP de contexto
===============================================================================

CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  RequestContextMiddleware

Responsabilidades:
  - Aceptar X-Request-Id (si es razonable) o generar uno; devolverlo.
  - Abrir/cerrar el contexto de logs del request.
  - Métricas por request etiquetadas con la plantilla de ruta
    (/v1/documents/{document_id}); sin ruta, con el path normalizado.
    Los ids de documento nunca son label.
  - Un log por request (salvo /healthz y /metrics).

Colaboradores:
  - wikicore/context.py
  - crosscutting/metrics.py
  - crosscutting/logger.py
===============================================================================
"""

from __future__ import annotations

import re
import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ..context import clear_context, set_request_context
from .logger import logger
from .metrics import record_request_metrics

_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")
_QUIET_PATHS = frozenset({"/healthz", "/metrics"})


def _route_template(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        incoming = (request.headers.get("x-request-id") or "").strip()
        request_id = incoming if _REQUEST_ID_RE.match(incoming) else uuid.uuid4().hex
        request.state.request_id = request_id
        set_request_context(
            request_id=request_id, method=request.method, path=request.url.path
        )

        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers["X-Request-Id"] = request_id
            return response
        finally:
            elapsed = time.perf_counter() - started
            record_request_metrics(
                endpoint=_route_template(request),
                method=request.method,
                status_code=status_code,
                latency_seconds=elapsed,
            )
            if request.url.path not in _QUIET_PATHS:
                logger.info(
                    "Request handled",
                    extra={
                        "status_code": status_code,
                        "latency_ms": round(elapsed * 1000, 2),
                    },
                )
            clear_context()
