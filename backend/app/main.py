"""
Inventra Backend — FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() assembles middleware, exception handlers and routers and
       returns a configured FastAPI instance.
Who:   uvicorn (uvicorn app.main:app) and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌─────────────────────┐  │
    │  │  Req ID  │→│ Logging  │→│  Field Validation   │  │
    │  └──────────┘ └──────────┘ └─────────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────────────────┐ ┌──────────────┐  │
    │  │ /api/<resource> CRUD (x14)   │ │ GET /health  │  │
    │  └──────────────────────────────┘ └──────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ NotFound→404 │ body decode→400 │ other→500   │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Collaborators are injectable: the rule registry, the operation bindings and
the repository can all be passed to create_app(); the defaults are the
application's rule tables, its binding table and an in-memory repository.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app import __version__
from app.config import settings
from app.exceptions import InventraError, NotFoundError
from app.middleware.field_validation import FieldValidationMiddleware
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.responses import error_response, response_for_error
from app.routes import health
from app.routes.entities import build_entity_routers, operation_routes
from app.services.repository import EntityRepository, InMemoryRepository
from app.validation.bindings import OperationBindings
from app.validation.registry import RuleRegistry, rule_registry

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Request IDs are embedded in the messages by the loggers that have one.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # uvicorn's own access log duplicates RequestLoggingMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: logging and a summary of the validation setup. Shutdown: log."""
    setup_logging()
    logger.info("=" * 60)
    logger.info("%s %s starting up...", settings.app_name, __version__)

    registry: RuleRegistry = app.state.registry
    bindings: OperationBindings = app.state.bindings
    logger.info(
        "Validation: %d rule tables, %d bound operations",
        len(registry), len(bindings),
    )

    # A binding to an unregistered key fails every matching request with 400
    orphaned = sorted({key for key in bindings.operations().values() if key not in registry})
    if orphaned:
        logger.error("Bound entity keys with no rule table: %s", ", ".join(orphaned))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("%s shutting down...", settings.app_name)


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions raised inside routes to envelope responses.

    Handler hierarchy:
        NotFoundError           → 404
        InventraError (base)    → its status_code
        RequestValidationError  → 400 (path params or body schema decode)
        Exception (fallback)    → 500, stack trace logged server-side only

    Field validation failures never reach these handlers: the validation
    middleware answers them before routing.
    """

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        logger.info("[%s] Not found: %s", rid, exc.message)
        return response_for_error(exc)

    @app.exception_handler(InventraError)
    async def handle_app_error(request: Request, exc: InventraError):
        rid = request_id_var.get("")
        logger.warning("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        return response_for_error(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        details = [_describe_schema_error(error) for error in exc.errors()]
        logger.warning("[%s] Request decode failed: %s", rid, "; ".join(details))
        return error_response("Error de validación", 400, details)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return error_response("Error interno en el servidor", 500)


def _describe_schema_error(error: dict) -> str:
    """'body.fecha_creacion: Input should be a valid date' → 'fecha_creacion: ...'"""
    location = [str(part) for part in error.get("loc", ()) if part not in ("body", "path", "query")]
    field = ".".join(location)
    message = error.get("msg", "invalid value")
    return f"{field}: {message}" if field else message


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    registry: Optional[RuleRegistry] = None,
    bindings: Optional[OperationBindings] = None,
    repository: Optional[EntityRepository] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        registry:    Rule sets per entity key (default: application tables).
        bindings:    Operation → entity key table (default: OPERATION_BINDINGS).
        repository:  Persistence implementation (default: a fresh in-memory one).
    """
    registry = registry if registry is not None else rule_registry
    bindings = bindings if bindings is not None else OperationBindings()

    app = FastAPI(
        title=settings.app_name,
        description=(
            "Inventory and asset tracking API: users, inventories, locations, "
            "elements and reports. Create/update bodies are validated against "
            "per-entity field rules before they reach business logic."
        ),
        version=__version__,
        docs_url="/docs" if settings.docs_enabled else None,
        redoc_url="/redoc" if settings.docs_enabled else None,
        openapi_url="/openapi.json" if settings.docs_enabled else None,
        lifespan=lifespan,
    )

    app.state.registry = registry
    app.state.bindings = bindings
    app.state.repository = repository if repository is not None else InMemoryRepository()

    entity_routers = build_entity_routers(settings.api_prefix)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → FieldValidation → routes
    # The filter matches against the entity routes themselves, whatever
    # shape include_router() gives app.router.routes
    app.add_middleware(
        FieldValidationMiddleware,
        routes=operation_routes(entity_routers),
        registry=registry,
        bindings=bindings,
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    for router in entity_routers:
        app.include_router(router)
    app.include_router(health.router)

    return app


# uvicorn expects `app.main:app` to be importable
app = create_app()
