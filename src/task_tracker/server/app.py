"""FastAPI application bootstrap."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from task_tracker.config import Config, resolve_path
from task_tracker.tasks import NotFoundError, PersistenceError, TaskStore, ValidationError

from .dependencies import build_task_store, get_config
from .routes import register_task_routes

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_error_handlers(app: FastAPI) -> None:
    """Translate store exceptions into ``{"error": ...}`` responses."""

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(RequestValidationError)
    async def handle_bad_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        detail = errors[0].get("msg", "Invalid request body.") if errors else "Invalid request body."
        return _error(status.HTTP_400_BAD_REQUEST, detail)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(PersistenceError)
    async def handle_persistence_error(request: Request, exc: PersistenceError) -> JSONResponse:
        logger.error("Failed to persist tasks (%s %s): %s", request.method, request.url.path, exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to save tasks.")


def _mount_static(app: FastAPI, static_dir: Optional[str]) -> None:
    if not static_dir:
        return
    path = resolve_path(static_dir)
    if not path.is_dir():
        logger.info("Static directory %s not found, serving API only", path)
        return
    app.mount("/", StaticFiles(directory=path, html=True), name="static")


def create_app(store: Optional[TaskStore] = None, config: Optional[Config] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    The store is loaded from ``config.data_file`` unless one is passed in.
    """
    config = config or get_config()
    app = FastAPI(title="Task Tracker API", version="1.0.0")
    app.state.task_store = store if store is not None else build_task_store(config)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    register_task_routes(app)
    # mounted last so /api routes take precedence
    _mount_static(app, config.server.static_dir)

    return app
