"""PhoneBook API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PhoneBookError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database and Mediator initialized on startup via lifespan context manager

Design Decisions:
    - The Mediator is built once per process and stored on app.state; routes
      receive it through the get_mediator dependency
    - Volatile backend (use_in_memory_database) gets its schema from
      create_all; the durable backend is migrated with alembic
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from phonebook.api.error_handlers import register_error_handlers
from phonebook.api.routes import health, phonebook as phonebook_routes
from phonebook.config import get_settings
from phonebook.infrastructure.database import init_db
from phonebook.infrastructure.observability import setup_logging
from phonebook.services.mediator import build_mediator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.effective_database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if manager.in_memory:
        await manager.create_schema()
    app.state.mediator = build_mediator(
        manager.session, settings.request_timeout_seconds,
    )
    logger.info(
        f"PhoneBook API started (in_memory={manager.in_memory})",
    )
    yield
    logger.info("PhoneBook API shutting down")
    await manager.dispose()


settings = get_settings()
app = FastAPI(
    title=settings.api_title, version=settings.api_version, lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(phonebook_routes.router)

register_error_handlers(app)
