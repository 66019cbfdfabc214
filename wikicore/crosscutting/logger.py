"""
===============================================================================
MÓDULO: Logger estructurado (JSON) con contexto de request
===============================================================================

Objetivo
--------
Cada línea de log es un objeto JSON que se puede correlacionar por
request_id / actor_id y que nunca contiene secretos de share (token,
password, hash).

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  JSONFormatter + setup_logger()

Responsabilidades:
  - Serializar LogRecord -> JSON con los campos "extra" del caller.
  - Enriquecer con el contexto del request (wikicore/context.py).
  - Redactar secretos de share y credenciales; recortar payloads grandes.
  - Promover alert=True a un campo top-level para las fallas de integridad
    del árbol (los operadores alertan sobre ese campo).

Colaboradores:
  - wikicore/context.py (ContextVars)
  - crosscutting/config.py (log_level, log_json)
===============================================================================
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import Any

from ..context import get_context_dict
from .config import get_settings

# Atributos estándar de LogRecord: todo lo demás vino por extra=...
_RESERVED_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {
    "message",
    "asctime",
    "taskName",
}

_SECRET_KEYS = frozenset(
    {
        "password",
        "password_hash",
        "share_password",
        "share_password_hash",
        "token",
        "share_token",
        "access_token",
        "authorization",
        "jwt_secret",
        "x-share-password",
    }
)

_REDACTED = "[redacted]"
_MAX_STR = 2_000
_MAX_DEPTH = 4


def _scrub(value: Any, key: str | None = None, depth: int = 0) -> Any:
    """Deja el valor JSON-friendly y sin secretos."""
    if key is not None and key.lower() in _SECRET_KEYS:
        return _REDACTED
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        return value if len(value) <= _MAX_STR else value[:_MAX_STR] + "..."
    if depth >= _MAX_DEPTH:
        return "[depth]"
    if isinstance(value, dict):
        return {str(k): _scrub(v, str(k), depth + 1) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_scrub(v, key, depth + 1) for v in value]
    return str(value)


class JSONFormatter(logging.Formatter):
    """LogRecord -> JSON de una línea."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "src": f"{record.module}:{record.funcName}:{record.lineno}",
        }
        entry.update(get_context_dict())

        extras = {
            k: _scrub(v, k) for k, v in vars(record).items() if k not in _RESERVED_ATTRS
        }
        if extras.pop("alert", False):
            entry["alert"] = True
        entry.update(extras)

        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "detail": str(record.exc_info[1]),
                "trace": "".join(traceback.format_exception(*record.exc_info)),
            }

        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logger(name: str = "wikicore") -> logging.Logger:
    """Logger del paquete; idempotente frente a reimports."""
    settings = get_settings()
    log = logging.getLogger(name)
    log.setLevel(logging.getLevelName((settings.log_level or "INFO").upper()))

    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        if settings.log_json:
            handler.setFormatter(JSONFormatter())
        else:
            handler.setFormatter(
                logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
            )
        log.addHandler(handler)
    return log


logger = setup_logger()
