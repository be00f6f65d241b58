import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from diary import __version__
from diary.api.http import auth_router, entries_router, export_router, health_router
from diary.core.config import Settings, settings as default_settings
from diary.core.db import Database
from diary.core.errors import register_exception_handlers
from diary.core.logging import configure_logging
from diary.domains.export.renderer import PdfRenderer

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    database = Database(settings.database_url, echo=settings.database_echo)
    await database.connect(create_schema=settings.auto_create_schema)
    app.state.database = database
    logger.info("Diary API started")
    try:
        yield
    finally:
        await database.disconnect()
        logger.info("Diary API stopped")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application for the given settings"""
    settings = settings or default_settings
    configure_logging(settings)

    app = FastAPI(
        title="Diary",
        description="Personal diary with tagging, moods, passcodes and PDF export",
        version=__version__,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.renderer = PdfRenderer.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(export_router)
    app.include_router(entries_router)

    return app


app = create_app()
