"""
Main FastAPI Application

Entry point for the stable admin dashboard API.
Configures middleware, routes, error handlers, and startup/shutdown events.

Every error leaves the API in one shape:
{"success": false, "message": ..., "errors": [...], "type": ...}
"""
from contextlib import asynccontextmanager
from typing import Optional
import time

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from stable_admin import __version__
from stable_admin.api.deps import get_admin_session
from stable_admin.config import Settings, get_settings
from stable_admin.core.exceptions import AdminAPIError, BackendError, ProvisioningError, backend_message
from stable_admin.database import Database
from stable_admin.middleware.admin_session import AdminSessionMiddleware
from stable_admin.middleware.rate_limit import RateLimitMiddleware
from stable_admin.utils.logging import setup_logging, get_logger

# Import routers
from stable_admin.api.endpoints import (
    auth,
    business_setup,
    dashboard,
    members,
    organizations,
    profiles,
    roles,
    users,
)

logger = get_logger(__name__)


def error_body(message: str, errors: list, error_type: str) -> dict:
    return {"success": False, "message": message, "errors": errors, "type": error_type}


def _field_message(error: dict) -> str:
    """Render one pydantic error as 'field: message'."""
    location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(location)
    return f"{field}: {error.get('msg')}" if field else error.get("msg", "Invalid request")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events.
    """
    settings: Settings = app.state.settings
    logger.info(f"Starting application in {settings.ENVIRONMENT} mode")

    # Create tables outside production (production uses migrations)
    if settings.ENVIRONMENT in ("development", "test"):
        app.state.database.create_all()

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application")
    app.state.database.dispose()
    logger.info("Application shutdown complete")


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:

    @app.exception_handler(AdminAPIError)
    async def admin_api_error_handler(request: Request, exc: AdminAPIError):
        content = error_body(exc.message, exc.errors, exc.error_type)
        if isinstance(exc, ProvisioningError):
            content["failed_step"] = exc.failed_step
            content["rolled_back"] = exc.rolled_back
        if exc.status_code >= 500:
            logger.error(
                f"{exc.error_type}: {exc.message}",
                extra={"path": request.url.path, "method": request.method}
            )
        return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers or {})

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        """Malformed request bodies are client errors (400), not 422."""
        errors = [_field_message(error) for error in exc.errors()]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body("Validation errors found", errors, "validation_error")
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        """Database failures that escaped a handler, message passed through."""
        logger.error(
            f"Database error: {backend_message(exc)}",
            extra={"path": request.url.path, "method": request.method}
        )
        error = BackendError(backend_message(exc))
        return JSONResponse(
            status_code=error.status_code,
            content=error_body(error.message, error.errors, error.error_type)
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Catch-all exception handler.

        SECURITY: Don't expose internal errors in production.
        Log full details but return generic error to client.
        """
        logger.error(
            f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
            exc_info=True,
            extra={"path": request.url.path, "method": request.method}
        )

        if settings.DEBUG:
            return JSONResponse(
                status_code=500,
                content=error_body(str(exc), [str(exc)], type(exc).__name__)
            )
        return JSONResponse(
            status_code=500,
            content=error_body("Internal server error", ["Internal server error"], "internal_error")
        )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    Tests pass their own Settings; the module-level app uses the
    environment.
    """
    settings = settings or get_settings()

    setup_logging(
        log_level=settings.LOG_LEVEL,
        json_format=settings.is_production
    )

    app = FastAPI(
        title="Stable Admin API",
        description="Internal admin API for provisioning stables, trainers and enterprises",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.database = Database(settings)

    # ========================================================================
    # MIDDLEWARE CONFIGURATION
    # ========================================================================

    # Innermost first: the session gate runs after rate limiting and CORS
    app.add_middleware(AdminSessionMiddleware, settings=settings)

    if settings.RATE_LIMIT_ENABLED:
        app.add_middleware(RateLimitMiddleware, settings=settings)

    # Request timing middleware (for monitoring)
    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        """Add X-Process-Time header to track request duration."""
        start_time = time.time()
        response = await call_next(request)
        response.headers["X-Process-Time"] = str(time.time() - start_time)
        return response

    # The dashboard frontend sends the session cookie, so origins must be explicit
    allowed_origins = ["http://localhost:3000"]
    if not settings.is_production:
        allowed_origins.append("http://localhost:8000")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app, settings)

    # ========================================================================
    # ROUTES
    # ========================================================================

    @app.get("/health", tags=["health"])
    async def health_check():
        """Health check endpoint for load balancers."""
        return {
            "status": "healthy",
            "environment": settings.ENVIRONMENT,
            "version": __version__
        }

    @app.get("/", tags=["root"])
    async def root():
        """Root endpoint with API information."""
        return {
            "message": "Stable Admin API",
            "version": __version__,
            "docs": "/docs",
            "health": "/health"
        }

    app.include_router(auth.router)

    protected = [Depends(get_admin_session)]
    for module in (organizations, members, roles, profiles, users, business_setup, dashboard):
        app.include_router(module.router, dependencies=protected)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    logger.info("=" * 80)
    logger.info("Stable Admin API")
    logger.info("=" * 80)
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Debug: {settings.DEBUG}")
    logger.info(f"Database: {settings.DATABASE_URL.split('@')[1] if '@' in settings.DATABASE_URL else 'configured'}")
    logger.info("=" * 80)

    uvicorn.run(
        "stable_admin.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
