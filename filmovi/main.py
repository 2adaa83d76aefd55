"""
Filmovi API — FastAPI Application Factory
==========================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes logging, middleware, exception handlers, routes and
       lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   uvicorn (filmovi.main:app, or `python -m filmovi`) and the tests.

Application Layout:
    Middleware:   RequestContext (ID + access log) → route
    Routes:       /filmovi CRUD, /, /health, /swagger.json, /api-docs
    Errors:       NotFoundError→404 │ DatabaseError→500 │ anything else→500

Lifecycle:
    Startup:   configure logging, log the server and Swagger UI URLs
    Shutdown:  dispose the connection pool
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from filmovi import __version__
from filmovi.config import settings
from filmovi.database import Database
from filmovi.exceptions import DatabaseError, FilmoviError, NotFoundError
from filmovi.middleware.request_context import RequestContextMiddleware, request_id_var
from filmovi.routes import docs, movies, system

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    When:    Called once during app startup.
    Format:  %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,  # Override any existing logging config
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging and the URLs the server answers on.
    Shutdown: close every pooled connection.
    """
    setup_logging()
    logger.info("Server pokrenut na http://localhost:%d", settings.port)
    logger.info("Swagger UI na http://localhost:%d/api-docs", settings.port)

    yield  # Application runs here

    logger.info("Filmovi API shutting down...")
    await app.state.database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and one JSON error envelope.

    Handler hierarchy:
        NotFoundError        → 404 Not Found
        DatabaseError        → 500 Internal Server Error
        FilmoviError (base)  → 500 Internal Server Error
        Exception (fallback) → 500 Internal Server Error

    Responses never include SQL, driver messages or stack traces; those are
    logged server-side.
    """

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        """Requested movie doesn't exist."""
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        """Generic message to the client; MovieRepository already logged the cause."""
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(FilmoviError)
    async def handle_app_error(request: Request, exc: FilmoviError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all for truly unexpected errors.

        Stack trace is logged server-side ONLY (never in response).
        Starlette answers this one outside the middleware stack, so the
        X-Request-ID header is set here as well.
        """
        rid = request_id_var.get("")
        logger.error(
            "[%s] Unexpected error: %s",
            rid,
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again later.",
                "request_id": rid,
            },
            headers={"X-Request-ID": rid} if rid else None,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database: Connection pool to serve from. When omitted, one is built
                  from `settings`. Tests pass a SQLite-backed Database.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Filmovi API",
        description="CRUD REST API za popis filmova, uz Swagger dokumentaciju",
        version=__version__,
        servers=[
            {"url": f"http://localhost:{settings.port}", "description": "Lokalni server"},
        ],
        # Documentation is published by filmovi.routes.docs
        openapi_url=None,
        docs_url=None,
        redoc_url=None,
        lifespan=lifespan,
    )

    if database is None:
        database = Database(settings.sqlalchemy_url, **settings.engine_options)
    app.state.database = database

    # ── Register Middleware ───────────────────────────────────────────────
    app.add_middleware(RequestContextMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(system.router)
    app.include_router(movies.router)
    app.include_router(docs.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `filmovi.main:app` to be importable
app = create_app()
