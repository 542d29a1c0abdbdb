"""
Main entrypoint for the Employee Directory API.

This module assembles the FastAPI application: it sets up logging,
builds the document collections and services from an explicit
``Settings`` value, registers the error handler and includes the
versioned routers.  The ``create_app`` function does the work and is
called once at import time to provide ``app`` for uvicorn, e.g.::

    uvicorn employee_directory_api.app.main:app --reload

Tests call ``create_app`` with their own ``Settings``.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.db import get_database_path, init_db
from .core.exceptions import AppError, StorageError
from .core.logging_config import configure_logging
from .repositories.sqlite_collection import SQLiteCollection
from .services.account_service import AccountService
from .services.employee_service import DUPLICATE_MESSAGE, EmployeeService

logger = logging.getLogger(__name__)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Turn a service error into ``{"detail": message}`` with its status code."""
    if isinstance(exc, StorageError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc)
    else:
        logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report a body or parameter pydantic rejected as a 400 with one readable message.

    Only the first error is reported, matching the fail-fast services.
    """
    errors = exc.errors()
    first = errors[0] if errors else {}
    # Locations look like ("body", "salary"); a JSON decode error adds a character offset
    field = ".".join(part for part in first.get("loc", ()) if isinstance(part, str) and part not in ("body", "query", "path"))
    message = f"Invalid {field or 'request body'}: {first.get('msg', 'malformed request')}"
    logger.info("%s %s -> 400: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=400, content={"detail": message})


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Configuration for this instance.  Defaults to the settings read
        from the environment at import time.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    app_settings = app_settings or default_settings
    configure_logging(app_settings)

    app = FastAPI(title=app_settings.project_name, version=app_settings.api_version, debug=app_settings.debug)

    database_path = get_database_path(app_settings.database_url)
    accounts = SQLiteCollection(database_path, "accounts", conflict_message="Email already in use")
    employees = SQLiteCollection(database_path, "employees", conflict_message=DUPLICATE_MESSAGE)

    app.state.settings = app_settings
    app.state.account_service = AccountService(accounts, app_settings)
    app.state.employee_service = EmployeeService(employees)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origin_list,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(v1_router, prefix="/api/v1")

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file if needed and brings the schema up to date
        version = init_db(database_path)
        logger.info("Document store ready at %s (schema version %s)", database_path, version)

    return app


app = create_app()
