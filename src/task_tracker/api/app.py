"""FastAPI application factory."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ..core.state import AppState
from .routes import health_router, router

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"


def create_app(state: AppState) -> FastAPI:
    """
    Build the HTTP app around an already-wired AppState.

    The store is shared by every request through app.state.task_store.
    """
    settings = state.settings
    app_name = str(getattr(settings, "app_name", "task-tracker"))
    prefix = str(getattr(settings, "api_prefix", "") or "")
    docs_enabled = bool(getattr(settings, "docs_enabled", True))

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Starting %s (tasks=%s)...", app_name, state.task_store.count_tasks())
        yield
        logger.info("Shutting down %s (tasks=%s).", app_name, state.task_store.count_tasks())

    app = FastAPI(
        title=app_name,
        description="Task tracking with dependency-aware completion",
        version=API_VERSION,
        lifespan=lifespan,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )
    app.state.settings = settings
    app.state.task_store = state.task_store

    app.include_router(health_router, prefix=prefix, tags=["health"])
    app.include_router(router, prefix=f"{prefix}/tasks", tags=["tasks"])
    return app
