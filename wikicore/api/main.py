"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Build the wiki-core ASGI app (create_app) and expose it as `app`
  - Open/close the PostgreSQL pool when PostgreSQL stores are selected
  - Mount the v1 router (wikis, documents, public share links, stars)
  - Expose /healthz (store probe) and /metrics (Prometheus text)

Collaborators:
  - container.use_in_memory_stores: decides whether a pool is needed
  - crosscutting.middleware.RequestContextMiddleware: request id, logs, metrics
  - api.exception_handlers: problem+json for everything routers did not map

Notes:
  - X-Share-Password must be allowed by CORS: public links with a password
    are fetched cross-origin by the reader UI.
  - Run with: uvicorn wikicore.api.main:app
"""

from contextlib import asynccontextmanager

import psycopg
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from ..container import use_in_memory_stores
from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.metrics import get_metrics_response
from ..crosscutting.middleware import RequestContextMiddleware
from ..infrastructure.db import DatabasePoolError, close_pool, get_pool, init_pool
from ..interfaces.api.http.router import router
from .exception_handlers import register_exception_handlers

API_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    stores = "in_memory" if use_in_memory_stores() else "postgres"
    if stores == "postgres":
        init_pool(
            database_url=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
        )
    logger.info(
        "wiki-core starting",
        extra={
            "app_env": settings.app_env,
            "stores": stores,
            "tree_max_depth": settings.document_tree_max_depth,
        },
    )
    try:
        yield
    finally:
        if stores == "postgres":
            close_pool()
        logger.info("wiki-core stopped")


def _store_status() -> str:
    if use_in_memory_stores():
        return "in_memory"
    try:
        with get_pool().connection() as conn:
            conn.execute("SELECT 1")
    except (DatabasePoolError, psycopg.Error) as exc:
        logger.warning(
            "Health probe: store unavailable",
            extra={"error_type": type(exc).__name__},
        )
        return "disconnected"
    return "connected"


def healthz(request: Request) -> dict:
    status = _store_status()
    return {
        "ok": status != "disconnected",
        "db": status,
        "request_id": getattr(request.state, "request_id", None),
    }


def metrics() -> Response:
    body, content_type = get_metrics_response()
    return Response(content=body, media_type=content_type)


def create_app() -> FastAPI:
    application = FastAPI(
        title="Wiki Core API",
        version=API_VERSION,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "wikis", "description": "Wikis, roster and root documents"},
            {"name": "documents", "description": "Document tree, grants, sharing"},
            {"name": "public", "description": "Public share links (no auth)"},
            {"name": "stars", "description": "Starred wikis and documents"},
        ],
    )

    # Starlette ejecuta primero el último middleware agregado.
    application.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().get_allowed_origins_list(),
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-Id", "X-Share-Password"],
        expose_headers=["X-Request-Id"],
    )
    application.add_middleware(RequestContextMiddleware)

    application.include_router(router, prefix="/v1")
    application.add_api_route("/healthz", healthz, methods=["GET"], tags=["ops"])
    application.add_api_route(
        "/metrics", metrics, methods=["GET"], tags=["ops"], include_in_schema=False
    )
    register_exception_handlers(application)
    return application


app = create_app()
