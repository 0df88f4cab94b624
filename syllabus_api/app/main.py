"""
Main entrypoint for the Syllabus Hierarchy API.

This module assembles the FastAPI application, sets up logging and
includes versioned routers.  The ``create_app`` function builds and
configures the app from an explicit :class:`Settings` object; a
default instance built from the environment is created at module
import time as ``app`` so it can be served directly::

    uvicorn syllabus_api.app.main:app

The database is opened and pinged when the application starts.  A
failed ping aborts startup.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request

from .api.v1.router import router as v1_router
from .core.config import Settings
from .core.db import Database, init_db
from .core.logging_config import setup_logging
from .services.syllabus_service import SyllabusService

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Read from the environment when omitted.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    if settings is None:
        settings = Settings.from_env()

    # Logging first so that startup can report what it does.
    setup_logging(settings.log_level, settings.log_file or None)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        db = Database(settings)
        db.ping()
        if settings.db_migrate:
            version = init_db(db)
            logger.info("Database schema at version %s", version)
        app.state.db = db
        app.state.syllabus_service = SyllabusService(db)
        try:
            yield
        finally:
            logger.info("Shutdown in progress...")
            db.close()

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)
    app.state.settings = settings

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    app.include_router(v1_router, prefix="/v1")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
