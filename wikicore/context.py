"""
===============================================================================
TARJETA CRC — wikicore/context.py (Contexto por request)
===============================================================================

Responsabilidades:
  - Guardar el contexto del request (request_id, method, path, actor_id)
    para enriquecer logs sin pasarlo por parámetro.

Colaboradores:
  - crosscutting.middleware: abre y cierra el contexto.
  - crosscutting.logger: lee get_context_dict().
  - identity.auth_users: agrega actor_id al resolver el JWT.

Notas:
  - Un solo ContextVar con un dict mutable por request. Las dependencias
    sync de FastAPI corren en un threadpool con una COPIA del contexto: mutar
    el dict (en vez de hacer .set()) hace visible el actor_id a los logs del
    resto del request.
  - Valores vacíos no se guardan.
===============================================================================
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import Optional

_request_ctx: ContextVar[Optional[dict[str, str]]] = ContextVar(
    "wikicore_request_ctx", default=None
)


def set_request_context(
    *, request_id: str = "", method: str = "", path: str = ""
) -> None:
    """Abre un contexto nuevo (descarta el anterior)."""
    values = {"request_id": request_id, "method": method, "path": path}
    _request_ctx.set({k: v for k, v in values.items() if v})


def set_actor_context(actor_id: str = "") -> None:
    if not actor_id:
        return
    ctx = _request_ctx.get()
    if ctx is None:
        _request_ctx.set({"actor_id": actor_id})
    else:
        ctx["actor_id"] = actor_id


def get_context_dict() -> dict[str, str]:
    return dict(_request_ctx.get() or {})


def clear_context() -> None:
    _request_ctx.set(None)
