"""
Noteful Backend: FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn noteful.main:app).
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────┐ ┌──────┐ │
    │  │  Req ID  │→│  Access Logging │→│ GZip │→│ CORS │ │
    │  └──────────┘ └─────────────────┘ └──────┘ └──────┘ │
    │                                                     │
    │  Routes:                                            │
    │  /api/tags  /api/folders  /api/notes                │
    │  /api/users /api/login    /health                   │
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation→400 │ Auth→401 │ NotFound→404 │ *→500   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:   logging, create missing tables, log startup complete
    Shutdown:  dispose database engine (close all connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from noteful import __version__
from noteful.config import settings
from noteful.database import create_all, dispose_engine
from noteful.exceptions import (
    AuthenticationError,
    NotefulError,
    NotFoundError,
    ValidationError,
)
from noteful.middleware.logging import RequestLoggingMiddleware
from noteful.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from noteful.routes import folders, health, notes, tags, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Called once during app startup, before anything else logs.
    Format: 2024-01-15T12:00:00 [INFO] noteful.services.tag_service: Created tag ...
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party libraries that log every operation
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Code before yield runs on startup, code after yield on shutdown.

    Table creation is idempotent (CREATE IF NOT EXISTS); schema changes
    after the first deploy go through Alembic.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("%s %s starting up...", settings.app_name, __version__)

    await create_all()

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("%s shutting down...", settings.app_name)
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(error: str, message: str, details=None, request_id=None) -> dict:
    if request_id is None:
        request_id = request_id_var.get("")
    body = {"error": error, "message": message, "request_id": request_id}
    if details:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and one JSON error shape.

    Handler hierarchy:
        ValidationError         → 400 Bad Request (client can fix the input)
        RequestValidationError  → 400 Bad Request (body is not JSON / wrong shape)
        AuthenticationError     → 401 Unauthorized
        NotFoundError           → 404 Not Found
        HTTPException           → its own status (unknown route → 404)
        NotefulError (base)     → 500 Internal Server Error
        Exception (fallback)    → 500 Internal Server Error

    Responses never carry stack traces or SQL; those are logged server-side.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", exc.message, exc.context),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Malformed JSON or a body that is not an object."""
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        logger.warning("[%s] Request rejected: %s", request_id_var.get(""), message)
        return JSONResponse(
            status_code=400,
            content=_error_body(
                "validation_error",
                message,
                {"errors": [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in errors]},
            ),
        )

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        return JSONResponse(status_code=401, content=_error_body("unauthorized", exc.message))

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content=_error_body("not_found", exc.message))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        """Unknown routes and wrong methods use the same body as every other error."""
        if exc.status_code == 404:
            return JSONResponse(status_code=404, content=_error_body("not_found", "Not Found"))
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body("http_error", str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(NotefulError)
    async def handle_noteful_error(request: Request, exc: NotefulError):
        logger.error("[%s] Unhandled application error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(status_code=500, content=_error_body("server_error", exc.message))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all; the stack trace is logged, never returned.

        Runs outside the middleware stack, after RequestIDMiddleware has
        reset request_id_var, so the id is taken from request.state and the
        header is set here.
        """
        rid = getattr(request.state, "request_id", "")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "internal_server_error",
                "An unexpected error occurred. Please try again or contact support.",
                request_id=rid,
            ),
            headers={REQUEST_ID_HEADER: rid} if rid else None,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Assemble middleware, exception handlers and routers into a FastAPI app."""
    app = FastAPI(
        title="Noteful API",
        description="Notes organized into folders and labelled with tags.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Location"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # ── Mount Routes ──────────────────────────────────────────────────────
    app.include_router(tags.router)
    app.include_router(folders.router)
    app.include_router(notes.router)
    app.include_router(users.router)
    app.include_router(health.router)

    return app


app = create_app()
