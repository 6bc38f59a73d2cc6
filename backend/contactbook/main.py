"""
Contactbook API — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       that owns its own ContactStore; run() serves the module-level app
       with uvicorn.
Who:   uvicorn (`uvicorn contactbook.main:app`), `python -m contactbook`,
       the `contactbook` console script, and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐                   │
    │  │  Req ID  │→│  Logging        │                   │
    │  └──────────┘ └─────────────────┘                   │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────┐ ┌──────────────┐ ┌──────────────────────┐ │
    │  │ ANY /│ │ GET/POST     │ │ GET /contacts/{id}   │ │
    │  │      │ │ /contacts    │ │                      │ │
    │  └──────┘ └──────────────┘ └──────────────────────┘ │
    │                                                     │
    │  State: app.state.contact_store (ContactStore)      │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from contactbook import __version__
from contactbook.config import settings
from contactbook.exceptions import (
    InvalidIdentifierError,
    InvalidPayloadError,
    NotFoundError,
    ResponseEncodingError,
)
from contactbook.middleware.logging import RequestLoggingMiddleware
from contactbook.middleware.request_id import RequestIDMiddleware, request_id_var
from contactbook.responses import JSONLineResponse
from contactbook.routes import contacts, greeting
from contactbook.store import ContactStore

logger = logging.getLogger(__name__)

METHOD_NOT_ALLOWED = "method not allowed"
PAGE_NOT_FOUND = "404 page not found\n"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Safe to call more than once; the last call wins.
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

    # The access middleware already logs every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Log startup state and shutdown. The store needs no cleanup."""
    setup_logging()
    logger.info(
        "Contactbook API %s starting with %d seeded contacts",
        __version__,
        len(app.state.contact_store),
    )
    if settings.strict_status_codes:
        logger.info("Strict status codes enabled: client errors answer 400/405")

    yield

    logger.info("Contactbook API shutting down (store size=%d)", len(app.state.contact_store))


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def client_error_status(strict_status: int) -> int:
    """Status for a client error: `strict_status` in strict mode, else 200."""
    return strict_status if settings.strict_status_codes else 200


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to the wire-level error responses.

    Handler table:
        InvalidPayloadError     → {"error": "invalid payload"}     200 (400 strict)
        InvalidIdentifierError  → {"error": "invalid id"}          200 (400 strict)
        NotFoundError           → {"error": "data not found"}      404
        HTTP 405 (router)       → {"error": "method not allowed"}  200 (405 strict)
        HTTP 404 (router)       → "404 page not found\\n" (text)    404
        ResponseEncodingError   → "error: <msg>" (text)            500
        Exception (fallback)    → {"error": "internal server error"} 500
    """

    @app.exception_handler(InvalidPayloadError)
    async def handle_invalid_payload(request: Request, exc: InvalidPayloadError):
        rid = request_id_var.get("")
        logger.warning("[%s] Invalid payload: %s", rid, exc.context)
        return JSONLineResponse(
            {"error": exc.message},
            status_code=client_error_status(400),
        )

    @app.exception_handler(InvalidIdentifierError)
    async def handle_invalid_identifier(request: Request, exc: InvalidIdentifierError):
        rid = request_id_var.get("")
        logger.warning("[%s] Invalid contact id: %r", rid, exc.raw_id)
        return JSONLineResponse(
            {"error": exc.message},
            status_code=client_error_status(400),
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONLineResponse({"error": exc.message}, status_code=404)

    @app.exception_handler(ResponseEncodingError)
    async def handle_encoding_error(request: Request, exc: ResponseEncodingError):
        rid = request_id_var.get("")
        logger.error("[%s] Response encoding failed: %s | Context: %s", rid, exc.detail, exc.context)
        return PlainTextResponse(exc.message, status_code=500)

    @app.exception_handler(StarletteHTTPException)
    async def handle_routing_error(request: Request, exc: StarletteHTTPException) -> Response:
        """Router-level failures: unknown path or method not registered for a path."""
        if exc.status_code == 405:
            headers = exc.headers if settings.strict_status_codes else None
            return JSONLineResponse(
                {"error": METHOD_NOT_ALLOWED},
                status_code=client_error_status(405),
                headers=headers,
            )
        if exc.status_code == 404:
            return PlainTextResponse(PAGE_NOT_FOUND, status_code=404)
        return await http_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all; the traceback is logged server-side only.

        Starlette runs this handler in ServerErrorMiddleware, outside the
        application middleware: no access-log line or X-Request-ID header is
        produced, and the exception is re-raised to the server after the
        response is sent.
        """
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONLineResponse({"error": "internal server error"}, status_code=500)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(store: Optional[ContactStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: Contact store to serve. A freshly seeded store is created
               when omitted, so every app instance starts from the seeds.
    """
    app = FastAPI(
        title="Contactbook API",
        description="In-memory contact list over a small JSON REST surface.",
        version=__version__,
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.contact_store = store if store is not None else ContactStore()

    # Middleware executes in REVERSE order of addition: RequestID → Logging
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.router.routes.append(greeting.route)
    app.include_router(contacts.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
app = create_app()


def run() -> None:
    """
    Serve the module-level app until interrupted.

    A failure to bind the listening socket is logged by uvicorn and ends the
    process with exit status 1.
    """
    setup_logging()
    logger.info("Server listening on %s...", settings.listen_address)

    config = uvicorn.Config(
        app,
        host=settings.backend_host,
        port=settings.backend_port,
        timeout_keep_alive=int(settings.read_timeout),
        log_config=None,
    )
    uvicorn.Server(config).run()

    logger.info("Done...")
