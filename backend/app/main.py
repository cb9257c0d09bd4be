"""
Task Board Backend — FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn app.main:app).
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────┐ ┌──────┐ ┌────────┐   │
    │  │  Req ID  │→│  Logging    │→│ GZip │→│  CORS  │   │
    │  └──────────┘ └─────────────┘ └──────┘ └────────┘   │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────┐ ┌──────────────┐ ┌─────────────────┐  │
    │  │  /users  │ │   /tasks     │ │  / and /health  │  │
    │  └──────────┘ └──────────────┘ └─────────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ 400 │ 403 │ 404 │ 409 │ 500 │ 503 │ fallback  │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration (logged, not fatal)
    3. Connect the MongoStore and park it on app.state.store
       (on failure the app keeps serving; store routes answer 503)

    Shutdown:
    1. Close the MongoStore (all pooled connections)
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

from app import __version__
from app.config import settings
from app.database import create_store
from app.exceptions import (
    TaskBoardError,
    ValidationError,
    ForbiddenError,
    NotFoundError,
    ConflictError,
    DatabaseError,
    ServiceUnavailableError,
)
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.middleware.logging import RequestLoggingMiddleware
from app.routes import health, tasks, users

logger = logging.getLogger(__name__)

INTERNAL_ERROR_BODY = "Internal server error"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    When:   Called once during app startup, before the store connects.
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

    # Driver topology/heartbeat chatter
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Open the document store on startup and close it on shutdown.

    The store is created here (not at import) so importing app.main never
    touches the network; handlers receive it via Depends(get_store).
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Task Board Backend starting up...")

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    store = create_store()
    try:
        await store.connect()
    except Exception as e:
        # Keep serving: / and /health stay up, store routes answer 503
        logger.error("Mongo error: %s", str(e), exc_info=True)
    app.state.store = store

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Task Board Backend shutting down...")
    await store.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _client_error(exc: TaskBoardError, details: bool = False) -> JSONResponse:
    content = {
        "error": exc.message,
        "code": exc.code,
        "request_id": request_id_var.get(""),
    }
    if details:
        content["details"] = exc.context
    return JSONResponse(status_code=exc.status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ValidationError         → 400 (message + details)
        RequestValidationError  → 400 (malformed JSON / wrong body types)
        ForbiddenError          → 403
        NotFoundError           → 404
        ConflictError           → 409
        DatabaseError           → 500 (generic body, details logged)
        ServiceUnavailableError → 503
        TaskBoardError (base)   → its status_code
        Exception (fallback)    → 500 (generic body, stack trace logged)

    No handler exposes store error text or stack traces to the client.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _client_error(exc, details=True)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Malformed request on %s: %s", rid, request.url.path, exc.errors())
        return JSONResponse(
            status_code=400,
            content={
                "error": "Invalid request body",
                "code": "validation_error",
                "details": {
                    "errors": [
                        {
                            "field": ".".join(str(loc) for loc in e["loc"]),
                            "message": e["msg"],
                        }
                        for e in exc.errors()
                    ],
                },
                "request_id": rid,
            },
        )

    @app.exception_handler(ForbiddenError)
    async def handle_forbidden(request: Request, exc: ForbiddenError):
        return _client_error(exc)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _client_error(exc)

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        return _client_error(exc)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={"error": INTERNAL_ERROR_BODY, "request_id": rid},
        )

    @app.exception_handler(ServiceUnavailableError)
    async def handle_service_unavailable(request: Request, exc: ServiceUnavailableError):
        rid = request_id_var.get("")
        logger.error("[%s] %s", rid, exc.message)
        return JSONResponse(
            status_code=503,
            content={"error": exc.message, "request_id": rid},
        )

    @app.exception_handler(TaskBoardError)
    async def handle_app_error(request: Request, exc: TaskBoardError):
        rid = request_id_var.get("")
        logger.error("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        if exc.status_code >= 500:
            return JSONResponse(
                status_code=exc.status_code,
                content={"error": INTERNAL_ERROR_BODY, "request_id": rid},
            )
        return _client_error(exc)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": INTERNAL_ERROR_BODY, "request_id": rid},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    Tests build their own instance and override `get_store`.
    """
    app = FastAPI(
        title="Task Board API",
        description="Users and tasks with author-gated task updates, backed by MongoDB.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials="*" not in settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(tasks.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `app.main:app` to be importable
app = create_app()


def run() -> None:
    """Console entry point: serve on BACKEND_HOST:PORT."""
    import uvicorn

    uvicorn.run("app.main:app", host=settings.backend_host, port=settings.port)


if __name__ == "__main__":
    run()
