"""LawConnect API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map LawConnectError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Admin bootstrap runs in lifespan only when both bootstrap settings are present
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lawconnect.api.error_handlers import register_error_handlers
from lawconnect.api.routes import auth, bids, cases, health, lawyers, reviews, users
from lawconnect.config import get_settings
from lawconnect.infrastructure.database import init_db
from lawconnect.infrastructure.observability import setup_logging
from lawconnect.services.handle_users import UserHandlers

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
    if settings.bootstrap_admin_email and settings.bootstrap_admin_password:
        async with manager.session() as db:
            await UserHandlers(db).ensure_admin(
                settings.bootstrap_admin_email,
                settings.bootstrap_admin_password,
                settings.bootstrap_admin_name,
            )
    logger.info("LawConnect API started")
    yield
    logger.info("LawConnect API shutting down")
    await manager.dispose()


app = FastAPI(
    title="LawConnect API", version="1.0.0", lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(cases.router)
app.include_router(bids.router)
app.include_router(reviews.router)
app.include_router(lawyers.router)

register_error_handlers(app)
