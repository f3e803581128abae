"""
Mail Notes Backend Application

FastAPI application entrypoint with async lifespan management.
Startup waits for the database and brings the schema up to date before any
request is served; a failure at either stage aborts startup.
"""

import asyncio
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from mail_notes.api.notes import bulk_router
from mail_notes.api.notes import router as notes_router
from mail_notes.core.config import Settings, settings
from mail_notes.core.database import build_engine, build_session_factory
from mail_notes.core.exception_handlers import register_exception_handlers
from mail_notes.core.logging import setup_logging
from mail_notes.repositories.notes import NoteRepository
from mail_notes.services.notes import NotesService
from mail_notes.services.schema import ensure_schema

# Initialize logging before any log statements
setup_logging()
logger = logging.getLogger(__name__)


async def wait_for_db(
    engine: AsyncEngine, retries: int = 10, delay: float = 1
) -> bool:
    """
    Wait for PostgreSQL to become available.

    Useful in containerized environments where the database may start
    after the application. Implements retry logic with linear delay.

    Args:
        engine: Engine of the note store.
        retries: Maximum connection attempts.
        delay: Seconds between attempts.

    Returns:
        True if connection established, False if all retries exhausted.
    """
    for i in range(retries):
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
                logger.info("Postgres connection established")
                return True
        except Exception as e:
            logger.warning(f"Waiting for Postgres ({i + 1}/{retries})... Error: {e}")
            await asyncio.sleep(delay)

    return False


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        app_settings: Settings to use; defaults to the module-level settings.
            The database engine is built from these settings at startup.
    """
    app_settings = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan handler.

        Startup:
            - Builds the engine from app_settings
            - Validates database connectivity (blocks startup on failure)
            - Applies pending schema steps (blocks startup on failure)
            - Builds the NotesService used by the routes

        Shutdown:
            - Disposes the connection pool
        """
        logger.info(f"Starting {app_settings.PROJECT_NAME}...")
        logger.info(f"Log Level: {app_settings.LOG_LEVEL}")

        engine = build_engine(app_settings)

        if not await wait_for_db(
            engine,
            retries=app_settings.DB_CONNECT_RETRIES,
            delay=app_settings.DB_CONNECT_DELAY,
        ):
            logger.critical("Could not connect to Postgres. Shutting down.")
            await engine.dispose()
            raise RuntimeError("Database connection failed")

        try:
            await ensure_schema(engine)
        except Exception as e:
            logger.critical(f"Schema initialization failed: {e}. Shutting down.")
            await engine.dispose()
            raise RuntimeError("Schema initialization failed") from e

        app.state.notes_service = NotesService(
            NoteRepository(build_session_factory(engine))
        )

        yield  # Application runs here

        logger.info(f"Shutting down {app_settings.PROJECT_NAME}...")
        await engine.dispose()

    app = FastAPI(title=app_settings.PROJECT_NAME, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(notes_router, prefix="/notes", tags=["Notes"])
    if app_settings.bulk_delete_enabled:
        logger.warning("Bulk DELETE /notes is enabled. Never use this in production.")
        app.include_router(bulk_router, prefix="/notes", tags=["Notes"])
    elif app_settings.ENABLE_BULK_DELETE:
        logger.warning("ENABLE_BULK_DELETE ignored in production")

    @app.get("/health")
    async def health_check():
        """Static health status for load balancers and orchestrators."""
        return {
            "status": "ok",
            "service": "mail-notes",
            "environment": app_settings.ENVIRONMENT,
        }

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn on HOST:PORT."""
    uvicorn.run(
        "mail_notes.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,  # Keep the dictConfig from setup_logging
    )
