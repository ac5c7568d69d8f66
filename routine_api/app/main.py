"""
Main entrypoint for the Daily Routine API.

This module assembles the FastAPI application: it configures logging,
opens the document store, wires the services and includes the
versioned routers.  ``create_app`` accepts an explicit ``Settings``
object (and optionally replacement e‑mail/asset collaborators, which
the tests use); the module‑level ``app`` is built from the
environment so that it can be served directly, e.g.::

    uvicorn routine_api.app.main:app --reload

Every error leaves the API as ``{"status": "error", "message": ...}``.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.v1.router import router as v1_router
from .core.config import Settings
from .core.db import DocumentStore
from .core.deps import build_services
from .core.errors import GENERIC_MESSAGE, AppError
from .core.logging_config import setup_logging
from .services.asset_service import CloudinaryStorage
from .services.email_service import EmailTransport

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message},
        headers=headers,
    )


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"{location}: {first.get('msg')}" if location else str(first.get("msg"))


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error(400, _validation_message(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error(exc.status_code, str(exc.detail), getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(500, GENERIC_MESSAGE)


def create_app(
    settings: Optional[Settings] = None,
    *,
    mailer: Optional[EmailTransport] = None,
    assets: Optional[CloudinaryStorage] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Settings, optional
        Application settings.  Read from the environment when omitted.
    mailer, assets : optional
        Replacements for the e‑mail transport and image storage clients.

    Returns
    -------
    FastAPI
        A configured application whose ``state`` holds the settings, the
        document store and the service bundle.
    """
    settings = settings or Settings.from_env()
    settings.validate()
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    store = DocumentStore(settings.database_url)
    app.state.settings = settings
    app.state.store = store
    app.state.services = build_services(settings, store, mailer=mailer, assets=assets)

    register_exception_handlers(app)
    app.include_router(v1_router, prefix="/api/v1")
    return app


app = create_app()
