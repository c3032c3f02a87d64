"""
Dev Editor — FastAPI Application Factory
=========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() wires settings, services, middleware,
       exception handlers and routes, and returns a configured FastAPI app.
Who:   uvicorn (`dev_editor.main:app`, or `python -m dev_editor`) and tests.

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                    FastAPI App                       │
    │                                                      │
    │  Middleware:  Request ID → Logging → CORS            │
    │                                                      │
    │  Routes:                                             │
    │  ┌──────────────────────────┐ ┌───────────────────┐  │
    │  │ /__dev-editor/*          │ │ GET /health       │  │
    │  │ (development only)       │ │                   │  │
    │  └──────────────────────────┘ └───────────────────┘  │
    │                                                      │
    │  Exception Handlers:                                 │
    │  Validation→400 │ Forbidden→403 │ NotFound→404 │     │
    │  Conflict→409 │ Storage/Conversion/other→500         │
    └──────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from dev_editor import __version__
from dev_editor.config import Settings, settings as default_settings
from dev_editor.dependencies import build_services
from dev_editor.exceptions import DevEditorError, ValidationError
from dev_editor.middleware.logging import RequestLoggingMiddleware
from dev_editor.middleware.request_id import RequestIDMiddleware, request_id_var
from dev_editor.routes import editor, health
from dev_editor.services.image_converter import HEIF_SUPPORTED

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str) -> None:
    """
    Configure root logging for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # uvicorn's own access log duplicates RequestLoggingMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging and report the directories being served.
    Shutdown: log it. There are no pooled resources to release.
    """
    config: Settings = app.state.settings
    setup_logging(config.log_level)

    logger.info("=" * 60)
    logger.info("Dev Editor API %s starting up...", __version__)
    logger.info("Project root: %s", config.project_root)
    logger.info("Content directory: %s", config.content_dir)
    logger.info("Gallery directory: %s", config.gallery_dir)
    logger.info("Memes directory: %s", config.memes_dir)
    if not HEIF_SUPPORTED:
        logger.warning("pillow-heif not installed; HEIC conversion is unavailable (install the heic extra)")

    if not config.content_dir.is_dir():
        logger.warning(
            "Content directory does not exist; set PROJECT_ROOT to the site checkout"
        )
    if config.editor_enabled:
        logger.info("Editor routes mounted at %s/", editor.PREFIX)
    else:
        logger.warning(
            "ENVIRONMENT=%s: editor routes are disabled (development only)",
            config.environment,
        )

    logger.info("Server ready at http://%s:%d", config.backend_host, config.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Dev Editor API shut down.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to JSON error responses.

    Every body carries `error` (a human-readable message) and `request_id`.

    Handler hierarchy:
        ValidationError         → 400, with `details`
        RequestValidationError  → 400 (malformed JSON, missing/mistyped fields)
        HTTPException 405       → 404 Unknown endpoint under the editor prefix
        DevEditorError (base)   → the subclass's status_code (403/404/409/500)
        Exception (fallback)    → 500 with the stringified error
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.message,
                "details": jsonable_encoder(exc.context),
                "request_id": rid,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        errors = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
            for err in exc.errors()
        ]
        logger.warning("[%s] Invalid request body: %s", rid, errors)
        return JSONResponse(
            status_code=400,
            content={
                "error": "Invalid request body",
                "details": {"errors": jsonable_encoder(errors)},
                "request_id": rid,
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        # Methods outside the catch-all's list (OPTIONS, TRACE, ...) end in a 405 from routing
        if exc.status_code == 405 and request.url.path.startswith(f"{editor.PREFIX}/"):
            return JSONResponse(
                status_code=404,
                content={"error": "Unknown endpoint", "request_id": request_id_var.get("")},
            )
        return await http_exception_handler(request, exc)

    @app.exception_handler(DevEditorError)
    async def handle_dev_editor_error(request: Request, exc: DevEditorError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message, "request_id": rid},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": str(exc), "request_id": rid},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration to build services from; defaults to the
                  environment-loaded singleton.
    """
    config = settings or default_settings

    app = FastAPI(
        title="Dev Editor API",
        description=(
            "Local development endpoints for editing site content, managing the "
            "gallery and memes image libraries, and converting HEIC photos."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = config
    app.state.services = build_services(config)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    if config.editor_enabled:
        app.include_router(editor.router)

    return app


# Module-level instance for `uvicorn dev_editor.main:app`
app = create_app()
