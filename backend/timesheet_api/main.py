"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import Settings, get_settings
from .database import Database
from .errors import register_error_handlers
from .logging import setup_logging
from .routers.auth import router as auth_router
from .routers.system import router as system_router

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Build the API around an explicit settings object and database handle.

    When ``database`` is given the caller owns it and is responsible for
    creating the schema and disposing of the engine.
    """

    settings = settings or get_settings()
    owns_database = database is None
    database = database or Database.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if owns_database:
            await database.create_all()
        logger.info("Timesheet API ready (env=%s)", settings.app_env)
        try:
            yield
        finally:
            if owns_database:
                await database.dispose()

    app = FastAPI(title="Timesheet API", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)
    app.include_router(auth_router)
    app.include_router(system_router)
    return app


def run() -> None:
    """Console entry point: validate settings, then serve with uvicorn."""

    settings = get_settings()
    setup_logging(settings.log_level)
    uvicorn.run(
        "timesheet_api.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
