"""FastAPI application with lifespan and router mounting."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from horizons.api.routes import health, reconcile
from horizons.core.config import AppSettings
from horizons.core.exceptions import (
    ConfigurationError,
    HorizonsError,
    SessionStateMissingError,
    SessionStoreError,
    SheetNotFoundError,
    TabularStoreError,
    WorkflowCancelled,
)
from horizons.core.logging_config import configure_logging
from horizons.workflow.controller import ReconciliationWorkflow, create_workflow

_STATUS_CODES: list[tuple[type[HorizonsError], int]] = [
    (SessionStateMissingError, 404),
    (SheetNotFoundError, 404),
    (WorkflowCancelled, 400),
    (ConfigurationError, 400),
    (TabularStoreError, 502),
    (SessionStoreError, 503),
]


def status_for(exc: HorizonsError) -> int:
    for exc_type, code in _STATUS_CODES:
        if isinstance(exc, exc_type):
            return code
    return 500


async def horizons_error_handler(request: Request, exc: HorizonsError) -> JSONResponse:
    return JSONResponse(status_code=status_for(exc), content={"detail": str(exc)})


def create_app(workflow: ReconciliationWorkflow | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Tests pass a pre-wired ``workflow``; otherwise one is built from settings
    at startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Initialize and tear down application resources."""
        settings = AppSettings()
        configure_logging(settings.log_level)
        app.state.settings = settings
        app.state.workflow = workflow or create_workflow(settings)
        yield

    app = FastAPI(
        title="Horizons Payroll Sync",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.add_exception_handler(HorizonsError, horizons_error_handler)
    app.include_router(health.router)
    app.include_router(reconcile.router, prefix="/reconcile")
    return app
