"""
Main entrypoint for the Wedding Planner API.

This module assembles the FastAPI application, sets up logging and
includes versioned routers.  The ``create_app`` function builds
and configures the app, which is then instantiated at module
import time as ``app``.  Run it with uvicorn or another ASGI server::

    uvicorn wedding_planner_api.app.main:app --reload

Every response, errors included, uses the ``{success, message, data?,
errors?}`` envelope; the exception handlers below translate domain
errors, request validation failures and HTTP errors into it.
"""

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import settings
from .core.logging_config import setup_logging
from .core.errors import ValidationError, WeddingPlannerError
from .schemas.common import field_errors
from .api.v1.router import router as v1_router
from .core.db import init_db

logger = logging.getLogger(__name__)


def _error_body(message: str, errors=None, data=None) -> dict:
    body = {"success": False, "message": message}
    if data is not None:
        body["data"] = data
    if errors:
        body["errors"] = errors
    return body


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(WeddingPlannerError)
    async def domain_error_handler(request: Request, exc: WeddingPlannerError) -> JSONResponse:
        if exc.status_code >= 500:
            # Detail goes to the log only
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
            return JSONResponse(status_code=exc.status_code, content=_error_body("Internal server error"))
        errors = exc.errors if isinstance(exc, ValidationError) else None
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.message, errors=errors, data=exc.to_data()),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content=_error_body("Validation failed", errors=field_errors(exc)),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content=_error_body("Internal server error"))


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    This function performs one-time setup tasks such as configuring
    logging, CORS and error handling and including versioned API
    routers.  It returns a fully configured FastAPI instance ready to
    be served.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that imports below can
    # safely log messages.
    setup_logging(settings.log_level, settings.log_file, settings.access_log_level)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    _register_exception_handlers(app)

    app.include_router(v1_router, prefix="/api/v1")

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file if needed and applies pending migrations.
        init_db()
        logger.info("%s %s started", settings.project_name, settings.api_version)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
