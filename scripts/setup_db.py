"""Create the database tables and optionally seed demo users and projects.

Usage:
    python scripts/setup_db.py            # create tables
    python scripts/setup_db.py --seed     # create tables + demo data
"""

import argparse
import sys
import os

# Add parent dir to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import structlog

from app.config import get_settings
from app.core.logging import configure_logging
from app.domain.models.project import Project
from app.domain.models.user import User
from app.infrastructure.database import create_db_engine, create_session_factory, init_db
from app.infrastructure.repositories.catalog_repository import SQLAlchemyProjectRepository
from app.infrastructure.repositories.user_repository import SQLAlchemyUserRepository
from app.application.services.auth_service import create_user

logger = structlog.get_logger("setup_db")

DEMO_USERS = [
    ("Admin User", "admin@example.com", "admin", "👨‍💼"),
    ("Max Dev", "max@example.com", "employee", "👨‍💻"),
    ("Lisa Design", "lisa@example.com", "employee", "👩‍🎨"),
]
DEMO_PROJECTS = [
    ("Website Relaunch", "#8884d8"),
    ("Marketing Q1", "#82ca9d"),
    ("Internal Ops", "#ffc658"),
]
DEMO_PASSWORD = "changeme123"


def seed(session_factory, settings) -> None:
    db = session_factory()
    try:
        users = SQLAlchemyUserRepository(db, User)
        projects = SQLAlchemyProjectRepository(db, Project)

        for name, email, role, avatar in DEMO_USERS:
            if users.get_by_email(email):
                logger.info("Demo user exists", email=email)
                continue
            create_user(users, settings, name=name, email=email, password=DEMO_PASSWORD, role=role, avatar=avatar)
            logger.info("Demo user created", email=email, role=role)

        existing = {p.name for p in projects.list_all()}
        for name, color in DEMO_PROJECTS:
            if name in existing:
                continue
            projects.create({"name": name, "color": color})
            logger.info("Demo project created", name=name)
    finally:
        db.close()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Create Timetrack tables")
    parser.add_argument("--seed", action="store_true", help="insert demo users and projects")
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings)

    engine = create_db_engine(settings.DATABASE_URL)
    try:
        init_db(engine)
        logger.info("Tables created/verified", database=engine.url.render_as_string(hide_password=True))
        if args.seed:
            seed(create_session_factory(engine), settings)
    except Exception:
        logger.exception("Database setup failed")
        return 1
    finally:
        engine.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(main())
