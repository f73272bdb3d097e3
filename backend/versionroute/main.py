"""
versionroute — FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn versionroute.main:app).
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────┐ ┌─────────────────┐  │
    │  │  Req ID      │→│ Logging  │→│  CORS           │  │
    │  └──────────────┘ └──────────┘ └─────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────────┐ ┌────────────┐   │
    │  │ /api/hello   │ │ /api/routes  │ │ /health    │   │
    │  │ /api/goodbye │ │  (+/resolve) │ │            │   │
    │  └──────────────┘ └──────────────┘ └────────────┘   │
    │   versioned          plain            plain         │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ NoMatch→404 │ HTTP errors→status │ other→500 │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Import:   route modules register their versioned routes
    Factory:  routers are included; the route table is frozen
    Startup:  logging configured, route table summary logged
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from versionroute import __version__
from versionroute.config import settings
from versionroute.exceptions import NoMatchingRouteError, VersionRouteError
from versionroute.middleware.logging import RequestLoggingMiddleware
from versionroute.middleware.request_id import RequestIDMiddleware, request_id_var
from versionroute.routes import health, hello, introspection
from versionroute.routing.versioned_router import default_route_table

logger = logging.getLogger(__name__)

_HTTP_ERROR_CODES = {
    404: "not_found",
    405: "method_not_allowed",
}


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Level:  settings.log_level
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:  configure logging, log the route table summary.
    Shutdown: log shutdown. The resolver holds no resources to release.
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("%s %s starting up...", settings.app_name, __version__)
    logger.info("Version header: %s", settings.version_header)
    for (path, method), candidates in default_route_table.items():
        logger.info("  %s %s: %d candidate(s)", method, path, len(candidates))
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield  # Application runs here

    logger.info("%s shutting down...", settings.app_name)


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        NoMatchingRouteError    → 404 Not Found
        StarletteHTTPException  → its own status (404 when no versioned
                                  handler was selected, 405, ...)
        VersionRouteError       → 500 Internal Server Error
        Exception (fallback)    → 500 Internal Server Error

    Exception handlers never expose stack traces in the API response.
    """

    @app.exception_handler(NoMatchingRouteError)
    async def handle_no_matching_route(request: Request, exc: NoMatchingRouteError):
        """No handler accepts the requested version."""
        rid = request_id_var.get("")
        logger.info("[%s] %s", rid, exc.message)
        return JSONResponse(
            status_code=404,
            content={
                "error": "no_matching_route",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        """Router-level errors, including requests no versioned route accepted."""
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": _HTTP_ERROR_CODES.get(exc.status_code, "http_error"),
                "message": str(exc.detail),
                "request_id": rid,
            },
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(VersionRouteError)
    async def handle_version_route_error(request: Request, exc: VersionRouteError):
        """Any other routing error reaching a request is a server fault."""
        rid = request_id_var.get("")
        logger.error("[%s] Version routing error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: generic 500 body; stack trace logged server-side only."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again or contact support.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.

    Freezes the app-wide route table: versioned routes must be declared
    (at import time of their route modules) before the first app is created.
    RouteRegistrationError from a bad declaration surfaces at import, before
    this function runs.
    """
    app = FastAPI(
        title="versionroute API",
        description=(
            "Header-based API versioning: several handlers share a path and the "
            f"'{settings.version_header}' request header selects one of them."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(hello.router)
    app.include_router(hello.goodbye_router)
    app.include_router(introspection.router)
    app.include_router(health.router)

    default_route_table.freeze()

    return app


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `versionroute.main:app` to be importable
app = create_app()
