"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.exceptions import (
    PatbinError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ConflictError,
)
from modules.auth.routes import router as auth_router
from modules.pastes.routes import (
    router as pastes_router,
    listing_router as pastes_listing_router,
    raw_router as pastes_raw_router,
)

from .models.errors import ErrorResponse
from .routes import health, users

logger = logging.getLogger(__name__)

# Checked in order; the first matching base class decides the status
ERROR_STATUS_CODES: list[tuple[type[PatbinError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
]


def status_code_for(exc: PatbinError) -> int:
    for error_type, code in ERROR_STATUS_CODES:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(
        f"Starting {settings.app_name} on {settings.host}:{settings.port} "
        f"(storage={settings.storage_backend})"
    )
    if settings.uses_default_secret:
        logger.warning("JWT_SECRET is not set; using the built-in development secret")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain exceptions and request validation failures to JSON errors."""

    @app.exception_handler(PatbinError)
    async def patbin_error_handler(request: Request, exc: PatbinError):
        code = status_code_for(exc)
        if code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.code}: {exc.message}")
        headers = {"WWW-Authenticate": "Bearer"} if code == 401 else None
        return JSONResponse(status_code=code, content=exc.to_dict(), headers=headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = first.get("msg", "Invalid request")
        body = ErrorResponse(
            error="VALIDATION_ERROR",
            message=f"{field}: {message}" if field else message,
            details={"errors": [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in errors]},
        )
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Pastebin API with accounts, expiry and burn-after-read",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_exception_handlers(app)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(pastes_router, prefix="/api/paste", tags=["pastes"])
    app.include_router(pastes_listing_router, prefix="/api/pastes", tags=["pastes"])
    app.include_router(users.router, prefix="/api", tags=["users"])
    # Catch-all short URL goes last
    app.include_router(pastes_raw_router, tags=["pastes"])

    return app


# Application instance for uvicorn
app = create_app()
