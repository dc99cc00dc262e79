import logging
import os
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager

from jobboard.core.config import settings
from jobboard.core.database import DataStore
from jobboard.core.errors import register_exception_handlers
from jobboard.core.logging_config import setup_logging
from jobboard.api.endpoints import admin, candidates, health, job_postings

logger = logging.getLogger(__name__)


def create_app(store: Optional[DataStore] = None) -> FastAPI:
    """
    Build the application around a data store.

    When no store is given one is created from settings and owned by the
    app, which disposes of it on shutdown.
    """
    setup_logging(settings.LOG_LEVEL, json_logs=settings.JSON_LOGS)

    owns_store = store is None
    if store is None:
        store = DataStore.from_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        logger.info(f"Starting up {settings.PROJECT_NAME}...")
        store.create_schema()
        logger.info("Database schema ready")

        yield

        # Shutdown
        logger.info(f"Shutting down {settings.PROJECT_NAME}...")
        if owns_store:
            store.dispose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="Job postings and their candidates",
        lifespan=lifespan
    )
    app.state.store = store

    register_exception_handlers(app)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(health.router)
    app.include_router(admin.router)
    app.include_router(job_postings.router)
    app.include_router(candidates.router)

    # Frontend assets; mounted last so API routes take precedence
    if os.path.isdir(settings.STATIC_DIR):
        app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower()
    )
