"""
MedMall Back Office - FastAPI Application Factory
==================================================

What:  Builds the FastAPI application: middleware, exception handlers,
       resource routers and the startup/shutdown lifecycle.
Who:   uvicorn (`uvicorn medmall.main:app`) and the test suite.

Application layout:
    Middleware chain (request direction):
        RateLimit -> RequestID -> Logging -> GZip -> CORS

    Routes:
        /api/orderitems  /api/payments  /api/refunds
        /api/productcategories  /api/productspecs
        /api/shipments  /api/shipmenttracks  /api/shipcompanies
        /api/useraddresses  /api/permissiontypedictionaries
        /health

    Exception handlers:
        ValidationError -> 400    AuthenticationError -> 401
        PermissionDeniedError -> 403    NotFoundError -> 404
        RateLimitExceededError -> 429    DatabaseError / other -> 500

Lifecycle:
    Startup:  configure logging, check settings, seed reference data when
              SEED_REFERENCE_DATA is set.
    Shutdown: dispose the database engine.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from medmall import __version__
from medmall.config import settings
from medmall.database import async_session_factory, dispose_engine
from medmall.exceptions import (
    AuthenticationError,
    DatabaseError,
    MedMallError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitExceededError,
    ValidationError,
)
from medmall.middleware.logging import RequestLoggingMiddleware
from medmall.middleware.rate_limit import RateLimitMiddleware
from medmall.middleware.request_id import RequestIDMiddleware, request_id_var
from medmall.routes import (
    health,
    order_items,
    payments,
    permission_types,
    product_categories,
    product_specs,
    refunds,
    ship_companies,
    shipment_tracks,
    shipments,
    user_addresses,
)
from medmall.services.permission_type_service import seed_permission_types

logger = logging.getLogger(__name__)

RESOURCE_ROUTERS = (
    order_items.router,
    payments.router,
    permission_types.router,
    product_categories.router,
    product_specs.router,
    refunds.router,
    shipments.router,
    shipment_tracks.router,
    ship_companies.router,
    user_addresses.router,
)


# ══════════════════════════════════════════════════════════════════════════
# Logging
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once for the whole process.

    Format: 2024-01-15T12:00:00 [INFO] medmall.access: GET /api/refunds 200 ...
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-statement and per-connection chatter.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Lifespan
# ══════════════════════════════════════════════════════════════════════════

async def seed_reference_data() -> None:
    """Insert the standard permission types into an empty dictionary table."""
    async with async_session_factory() as session:
        try:
            inserted = await seed_permission_types(session)
            await session.commit()
        except Exception:
            await session.rollback()
            raise
    logger.info("Reference data seed complete (%d permission types inserted)", inserted)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("=" * 60)
    logger.info("MedMall Back Office API %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving; /health stays reachable.
        logger.error("Configuration error: %s", str(e))

    if settings.seed_reference_data:
        await seed_reference_data()

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("MedMall Back Office API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map the MedMallError hierarchy to HTTP responses.

    Every body has the shape {error, message, details?, request_id}. Server
    side failures return a generic message; their context goes to the log
    only.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=401,
            content={
                "error": "unauthorized",
                "message": exc.message,
                "request_id": rid,
            },
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(PermissionDeniedError)
    async def handle_permission_denied(request: Request, exc: PermissionDeniedError):
        rid = request_id_var.get("")
        principal = getattr(request.state, "principal", None)
        logger.warning(
            "[%s] Permission denied for %s on %s %s: %s",
            rid,
            principal.user_id if principal is not None else "-",
            request.method,
            request.url.path,
            exc.message,
        )
        return JSONResponse(
            status_code=403,
            content={
                "error": "forbidden",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(RateLimitExceededError)
    async def handle_rate_limit(request: Request, exc: RateLimitExceededError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=429,
            content={
                "error": "rate_limit_exceeded",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
            headers={"Retry-After": str(exc.retry_after)},
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(MedMallError)
    async def handle_medmall_error(request: Request, exc: MedMallError):
        rid = request_id_var.get("")
        logger.error("[%s] Unhandled application error: %s | Context: %s", rid, exc.message, exc.context)
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
    app = FastAPI(
        title="MedMall Back Office API",
        description=(
            "Administrative API for the MedMall store: catalog, orders, payments, "
            "refunds, shipping and delivery addresses."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware runs in reverse order of addition: the last one added sees
    # the request first.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Total-Count", "Retry-After"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(RateLimitMiddleware)

    register_exception_handlers(app)

    for router in RESOURCE_ROUTERS:
        app.include_router(router)
    app.include_router(health.router)

    return app


app = create_app()
