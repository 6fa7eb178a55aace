"""
PlaceMate FastAPI application factory.

``create_app(settings)`` wires the database lifespan, middleware, error
handlers and routers. Nothing here reads the environment; the caller
constructs ``Settings`` and passes it in.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import DuplicateKeyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from common.auth.password import PasswordHasher
from common.database import MongoDB
from common.utils import APIException, error_response, success_response
from placemate.config import Settings
from placemate.dependencies import init_services
from placemate.middleware.request_logging import log_requests
from placemate.routers import auth_router, user_router
from placemate.services.user.user_repository import UserRepository

logger = logging.getLogger(__name__)

APP_VERSION = "1.0.0"

_REQUEST_LOCATIONS = ("body", "query", "path", "header", "cookie")


def _format_validation_errors(exc: RequestValidationError) -> list:
    formatted = []
    for error in exc.errors():
        loc = list(error.get("loc", ()))
        if loc and loc[0] in _REQUEST_LOCATIONS:
            loc = loc[1:]
        formatted.append({
            "field": ".".join(str(part) for part in loc),
            "message": error.get("msg", "Invalid value"),
        })
    return formatted


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Map exceptions to the ``{success: false, message, code, errors?}`` envelope."""

    @app.exception_handler(APIException)
    async def api_exception_handler(request: Request, exc: APIException):
        if not exc.is_operational:
            logger.error(f"{request.method} {request.url.path} failed: {exc}")
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(exc.message, code=exc.code, errors=exc.errors),
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422,
            content=error_response(
                "Validation failed",
                code="VALIDATION_ERROR",
                errors=_format_validation_errors(exc),
            ),
        )

    @app.exception_handler(DuplicateKeyError)
    async def duplicate_key_handler(request: Request, exc: DuplicateKeyError):
        logger.warning(f"Duplicate key on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=409,
            content=error_response("Resource already exists", code="CONFLICT"),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            message = f"Route {request.url.path} not found"
            code = "NOT_FOUND"
        else:
            message = str(exc.detail)
            code = None
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(message, code=code),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        message = "Internal server error" if settings.is_production() else str(exc)
        return JSONResponse(
            status_code=500,
            content=error_response(message, code="INTERNAL_ERROR"),
        )


def create_app(settings: Settings) -> FastAPI:
    """
    Build the PlaceMate application.

    Args:
        settings: Validated application settings

    Returns:
        Configured FastAPI app. The database connection and services are
        set up by the lifespan when the server starts.
    """
    mongodb = MongoDB()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting PlaceMate API...")

        await mongodb.connect(
            uri=settings.MONGODB_URI,
            database_name=settings.MONGODB_DATABASE,
        )

        user_repository = UserRepository(
            mongodb.db,
            PasswordHasher(rounds=settings.BCRYPT_ROUNDS),
        )
        await user_repository.ensure_indexes()

        init_services(app, settings, user_repository)
        logger.info("PlaceMate API started successfully")

        yield

        logger.info("Shutting down PlaceMate API...")
        await mongodb.disconnect()

    app = FastAPI(
        title="PlaceMate API",
        description="Job application tracker: authentication and accounts",
        version=APP_VERSION,
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development() else None,
        redoc_url="/redoc" if settings.is_development() else None,
    )
    app.state.settings = settings
    app.state.mongodb = mongodb

    # =========================================================================
    # Middleware
    # =========================================================================
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_requests)

    register_exception_handlers(app, settings)

    # =========================================================================
    # Routers
    # =========================================================================
    prefix = settings.api_prefix
    app.include_router(auth_router, prefix=prefix, tags=["Authentication"])
    app.include_router(user_router, prefix=prefix, tags=["User"])

    @app.get(f"{prefix}/health", tags=["Health"])
    async def health():
        """Health check endpoint."""
        return success_response({
            "status": "ok",
            "version": APP_VERSION,
            "database": mongodb.is_connected,
        })

    return app
