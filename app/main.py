"""FastAPI application — main entry point."""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI

from app.config import Settings, get_settings
from app.core.exceptions import register_exception_handlers
from app.core.logging import configure_logging
from app.core.middleware import setup_middleware
from app.infrastructure.database import create_db_engine, create_session_factory, init_db

# Import all models so SQLAlchemy knows about them
from app.domain.models.user import User
from app.domain.models.project import Project
from app.domain.models.task import Task
from app.domain.models.time_entry import TimeEntry
from app.domain.models.weekly_assignment import WeeklyAssignment

# Import routers
from app.interfaces.api.auth import router as auth_router
from app.interfaces.api.users import router as users_router
from app.interfaces.api.entries import router as entries_router
from app.interfaces.api.projects import router as projects_router, tasks_router
from app.interfaces.api.assignments import router as assignments_router
from app.interfaces.api.analytics import router as analytics_router

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    settings: Settings = app.state.settings
    logger.info("Starting Timetrack API...", env=settings.ENVIRONMENT)

    # Create DB tables (the setup script does the same for deployments)
    init_db(app.state.engine)
    logger.info("Database tables created/verified")

    from app.application.services.auth_service import ensure_default_admin
    from app.infrastructure.repositories.user_repository import SQLAlchemyUserRepository

    db = app.state.session_factory()
    try:
        ensure_default_admin(SQLAlchemyUserRepository(db, User), settings)
    finally:
        db.close()

    yield

    app.state.engine.dispose()
    logger.info("Timetrack API stopped")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build an application bound to `settings` (defaults to the environment)."""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Timetrack",
        description="Time tracking API — timers, manual entries, weekly assignments and analytics",
        version="1.0.0",
        lifespan=lifespan,
    )

    engine = create_db_engine(settings.DATABASE_URL)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    setup_middleware(app, settings)
    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(entries_router)
    app.include_router(projects_router)
    app.include_router(tasks_router)
    app.include_router(assignments_router)
    app.include_router(analytics_router)

    @app.get("/")
    def root():
        return {
            "name": "Timetrack",
            "version": "1.0.0",
            "status": "running",
            "docs": "/docs",
        }

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    return app


app = create_app()
