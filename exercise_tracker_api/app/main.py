"""
Main entrypoint for the Exercise Tracker API.

This module assembles the FastAPI application and includes the
versioned routers.  The ``create_app`` function builds the app without
touching the filesystem; logging is configured and the store is
migrated when the application starts (its ``lifespan``).  The app is
instantiated at module import time as ``app``, e.g.::

    uvicorn exercise_tracker_api.app.main:app --reload

The application title and version are provided via ``Settings`` from
``core.config``.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.db import Database
from .core.logging_config import setup_logging


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging and apply pending migrations before serving."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_file)
    app.state.db.init()
    logger.info("Using database %s", app.state.db.path)
    yield


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Defaults to the module‑level settings
        read from the environment; tests pass their own instance to
        point the app at a temporary database.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)

    # One store handle per application, shared by all requests.
    app.state.db = Database(settings.database_url)
    app.state.settings = settings

    app.include_router(v1_router, prefix="/api")

    @app.get("/", include_in_schema=False)
    async def index() -> dict:
        return {"name": settings.project_name, "version": settings.api_version}

    return app


# Create the application instance at import time so that ASGI servers
# can reference ``exercise_tracker_api.app.main:app``.
app = create_app()
