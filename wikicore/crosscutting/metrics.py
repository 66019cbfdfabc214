"""
===============================================================================
ARCHIVO: crosscutting/metrics.py
===============================================================================

CRC CARD (Módulo)
-------------------------------------------------------------------------------
Nombre:
    Métricas (Prometheus) de autorización y HTTP

Responsabilidades:
    - Definir métricas Prometheus en un registry propio.
    - Proveer funciones pequeñas para registrar decisiones de autoridad,
      accesos públicos y fallas de integridad del árbol.
    - Cuidar cardinalidad (NO user_id, NO document_id).
    - Exponer helpers para generar la respuesta /metrics.

Colaboradores:
    - crosscutting.middleware: latencia y conteo HTTP.
    - application.authority: decisiones del AuthorityResolver.
    - application.sharing: decisiones de acceso público.
    - infrastructure.db.instrumentation: duración de queries.
===============================================================================
"""

from __future__ import annotations

import re

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

_registry = CollectorRegistry()

# ------------------------
# HTTP
# ------------------------
_requests_total = Counter(
    "wiki_requests_total",
    "Total de requests HTTP",
    ["endpoint", "method", "status"],
    registry=_registry,
)

_request_latency = Histogram(
    "wiki_request_latency_seconds",
    "Latencia de requests HTTP (segundos)",
    ["endpoint", "method"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
    registry=_registry,
)

# ------------------------
# Autorización
# ------------------------
_authority_decisions_total = Counter(
    "wiki_authority_decisions_total",
    "Decisiones del resolver por resultado y regla aplicada",
    ["outcome", "rule"],
    registry=_registry,
)

_public_access_total = Counter(
    "wiki_public_access_total",
    "Decisiones de acceso por share público",
    ["outcome"],
    registry=_registry,
)

_integrity_faults_total = Counter(
    "wiki_tree_integrity_faults_total",
    "Fallas de integridad detectadas en el árbol de documentos",
    ["kind"],
    registry=_registry,
)

_db_query_duration = Histogram(
    "wiki_db_query_duration_seconds",
    "Duración de queries SQL por tipo de statement",
    ["kind"],
    buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
    registry=_registry,
)


def record_request_metrics(
    endpoint: str,
    method: str,
    status_code: int,
    latency_seconds: float,
) -> None:
    """Registra métricas HTTP (endpoint normalizado, status agrupado)."""
    normalized = _normalize_endpoint(endpoint)
    _requests_total.labels(
        endpoint=normalized,
        method=method,
        status=_status_bucket(status_code),
    ).inc()
    _request_latency.labels(endpoint=normalized, method=method).observe(
        latency_seconds
    )


def record_authority_decision(outcome: str, rule: str) -> None:
    _authority_decisions_total.labels(outcome=outcome, rule=rule).inc()


def record_public_access(outcome: str) -> None:
    _public_access_total.labels(outcome=outcome).inc()


def record_integrity_fault(kind: str) -> None:
    _integrity_faults_total.labels(kind=kind).inc()


def observe_db_query_duration(kind: str, seconds: float) -> None:
    _db_query_duration.labels(kind=kind).observe(seconds)


def _normalize_endpoint(path: str) -> str:
    """Normaliza paths para evitar cardinalidad alta (UUIDs / ids -> {id})."""
    path = re.sub(
        r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
        "{id}",
        path,
        flags=re.IGNORECASE,
    )
    path = re.sub(r"/\d+", "/{id}", path)
    return path


def _status_bucket(code: int) -> str:
    """Agrupa status code para baja cardinalidad."""
    if 200 <= code < 300:
        return "2xx"
    if 400 <= code < 500:
        return "4xx"
    if 500 <= code < 600:
        return "5xx"
    return "other"


def get_metrics_response() -> tuple[bytes, str]:
    """Genera el body y content-type para /metrics."""
    return generate_latest(_registry), CONTENT_TYPE_LATEST
