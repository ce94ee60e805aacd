"""
Flashdeck Backend — FastAPI Application Factory
=================================================

What:  Builds the ASGI application served by `uvicorn flashdeck.main:app`.
How:   create_app() stacks the middleware, maps exceptions to JSON error
       bodies and mounts one router per resource plus /health.

Request path:
    RequestID → AccessLog → GZip → CORS → router
        /cards, /cards/{id}          CardController      (seven operations)
        /cardsets, /cardsets/{id}    CardSetController   (seven operations)
        /users, /users/{id}          UserController      (index, show)
        /health                      database probe

Errors:
    ValidationError → 400, NotFoundError → 404, anything else → 500,
    always as an ErrorResponse body carrying the request ID.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import make_url

from flashdeck import __version__
from flashdeck.config import settings
from flashdeck.database import create_tables, dispose_engine
from flashdeck.exceptions import (
    DatabaseError,
    FlashdeckError,
    NotFoundError,
    ValidationError,
)
from flashdeck.middleware.logging import RequestLoggingMiddleware
from flashdeck.middleware.request_id import RequestIDMiddleware, request_id_var
from flashdeck.routes import card_sets, cards, health, users
from flashdeck.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Libraries that are chatty at INFO; the access middleware already logs requests.
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "aiosqlite")


# ══════════════════════════════════════════════════════════════════════════
# Logging
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: Optional[str] = None) -> None:
    """Route every logger to stdout at LOG_LEVEL (or `level` when given)."""
    logging.basicConfig(
        level=level or settings.log_level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%dT%H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("Flashdeck %s starting (database: %s)", __version__, _redacted_url())

    if settings.db_create_tables:
        await create_tables()

    logger.info("Listening on %s:%d", settings.backend_host, settings.backend_port)
    try:
        yield
    finally:
        await dispose_engine()
        logger.info("Database engine disposed; shutdown complete")


def _redacted_url() -> str:
    """DATABASE_URL with any password masked, safe for the log."""
    return make_url(settings.database_url).render_as_string(hide_password=True)


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_response(
    status_code: int,
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    """Render an ErrorResponse tagged with the current request's ID."""
    body = ErrorResponse(
        error=error,
        message=message,
        details=details or None,
        request_id=request_id_var.get(""),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map the exception hierarchy onto HTTP responses.

    Handler hierarchy (most specific class wins):
        ValidationError (MissingField, TypeMismatch) → 400 validation_error
        NotFoundError                                → 404 not_found
        DatabaseError                                → 500 server_error, generic message
        FlashdeckError                               → 500 server_error
        Exception                                    → 500 internal_server_error

    Response bodies never carry stack traces or SQL; those go to the log.
    """

    @app.exception_handler(ValidationError)
    async def on_validation_error(request: Request, exc: ValidationError):
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return error_response(400, "validation_error", exc.message, exc.context)

    @app.exception_handler(NotFoundError)
    async def on_not_found(request: Request, exc: NotFoundError):
        return error_response(404, "not_found", exc.message)

    @app.exception_handler(DatabaseError)
    async def on_database_error(request: Request, exc: DatabaseError):
        logger.error("Storage failure on %s %s | %s", request.method, request.url.path, exc.context)
        return error_response(500, "server_error", "An internal error occurred. Please try again later.")

    @app.exception_handler(FlashdeckError)
    async def on_app_error(request: Request, exc: FlashdeckError):
        logger.error("Application error: %s | %s", exc.message, exc.context)
        return error_response(500, "server_error", exc.message)

    @app.exception_handler(Exception)
    async def on_unexpected_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(500, "internal_server_error", "An unexpected error occurred.")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="Flashdeck API",
        description="Users, card sets and flashcards over a JSON REST interface.",
        version=__version__,
        lifespan=lifespan,
    )

    # add_middleware prepends, so RequestID ends up outermost.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["GET", "POST", "PATCH", "PUT", "DELETE"],
        allow_headers=["Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID", "X-Total-Count"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1024)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    for module in (cards, card_sets, users, health):
        app.include_router(module.router)

    return app


app = create_app()
