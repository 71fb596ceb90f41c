"""Portfolio API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly, one router per resource
    - Global error handlers map PortfolioError to structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan
    - The first admin is seeded on startup when the users table is empty

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Schema is owned by alembic; startup never creates tables
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portfolio.api.error_handlers import register_error_handlers
from portfolio.api.routes import (
    about, auth, certificates, configuration, contact, health, projects,
    skills, uploads, users,
)
from portfolio.config import get_settings
from portfolio.core.errors import PortfolioError
from portfolio.infrastructure.database import init_db
from portfolio.infrastructure.observability import setup_logging
from portfolio.services.seed import ensure_admin_user

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    try:
        async with manager.session() as db:
            await ensure_admin_user(db, settings)
    except PortfolioError as e:
        logger.error(f"Admin seeding skipped: {e.message}")
    logger.info("Portfolio API started")
    yield
    logger.info("Portfolio API shutting down")
    await manager.dispose()


app = FastAPI(title="Portfolio API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(projects.router)
app.include_router(certificates.router)
app.include_router(skills.router)
app.include_router(about.router)
app.include_router(configuration.router)
app.include_router(contact.router)
app.include_router(uploads.router)

register_error_handlers(app)
