"""Local Library: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CatalogError to the rendered error page
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: cleaner startup/shutdown pairing
    - Three error handler layers: CatalogError (domain), RequestValidationError
      (FastAPI), Exception (catch-all), never leaks internal details
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from locallibrary.api.error_handlers import register_error_handlers
from locallibrary.api.routes import (
    authors, book_instances, books, genres, health, home,
)
from locallibrary.config import get_settings
from locallibrary.infrastructure.database import close_db, init_db
from locallibrary.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        echo=settings.database_echo,
    )
    logger.info("Local Library started")
    yield
    logger.info("Local Library shutting down")
    await close_db()


app = FastAPI(
    title=get_settings().site_title, version="1.0.0", lifespan=lifespan,
)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(home.router)
app.include_router(authors.router)
app.include_router(genres.router)
app.include_router(books.router)
app.include_router(book_instances.router)

register_error_handlers(app)
