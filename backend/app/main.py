"""
Aula Backend — FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires middleware, exception handlers and routers.
Who:   uvicorn (uvicorn app.main:app) and the test suite.

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                    FastAPI App                       │
    │                                                      │
    │  Middleware:  Request ID → Access Log → GZip → CORS  │
    │                                                      │
    │  Routes:                                             │
    │   /api/materias  /api/mensajes  /api/noticias        │
    │   /api/tareas    /api/upload    /api/files/{path}    │
    │   /health                                            │
    │                                                      │
    │  Exception Handlers (fallback only; services return  │
    │  Results that routes render):                        │
    │   RequestValidationError→400 │ AulaError→mapped      │
    │   Exception→500                                      │
    └──────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import settings
from app.database import dispose_engine
from app.exceptions import AulaError, MissingFieldsError, ValidationError
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.responses import error_response
from app.routes import health, materias, mensajes, noticias, tareas, upload

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: 2025-03-01T12:00:00 [INFO] app.services.resource_service: Created tareas row ...
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, storage directory.
    Shutdown: dispose the engine so pooled connections are closed cleanly.
    """
    setup_logging()
    logger.info("Aula Backend %s starting up...", __version__)

    storage = Path(settings.storage_root)
    storage.mkdir(parents=True, exist_ok=True)
    logger.info("Storage directory: %s", storage.resolve())
    logger.info("Public file URLs: %s/api/files/", settings.public_base_url)
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)

    yield

    logger.info("Aula Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


def _request_validation_to_error(exc: RequestValidationError) -> ValidationError:
    """
    Fold FastAPI's request validation errors (missing multipart `file`, bad
    query types) into our ValidationError so they get the 400 envelope.
    """
    errors = exc.errors()
    missing = [str(err["loc"][-1]) for err in errors if err.get("type") == "missing"]
    if missing:
        return MissingFieldsError(missing)

    fields = [str(err["loc"][-1]) for err in errors]
    first = errors[0] if errors else {"msg": "Invalid request"}
    prefix = f"{fields[0]}: " if fields else ""
    return ValidationError(message=f"{prefix}{first['msg']}", context={"fields": fields})


def register_exception_handlers(app: FastAPI) -> None:
    """
    Global handlers for anything that did not come back as a Result.

    Security: unexpected exceptions are logged with stack trace server-side;
    the client only gets a generic message and the request ID.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        return error_response(_request_validation_to_error(exc))

    @app.exception_handler(AulaError)
    async def handle_app_error(request: Request, exc: AulaError):
        return error_response(exc)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "An unexpected error occurred. Please try again.",
                "code": "internal_server_error",
                "details": None,
                "request_id": rid or None,
            },
        )


def create_app() -> FastAPI:
    """Assemble middleware, exception handlers and routers into a new app."""
    app = FastAPI(
        title="Aula API",
        description=(
            "Subjects, messages, news, tasks and file uploads for a classroom "
            "app. Every response uses the {success, data} / {success, error} envelope."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(materias.router)
    app.include_router(mensajes.router)
    app.include_router(noticias.router)
    app.include_router(tareas.router)
    app.include_router(upload.router)
    app.include_router(health.router)

    return app


app = create_app()
