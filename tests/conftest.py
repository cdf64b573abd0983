"""Pytest configuration and fixtures for the Timetrack tests."""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.domain.models.project import Project
from app.domain.models.task import Task
from app.domain.models.time_entry import TimeEntry
from app.domain.models.user import User
from app.domain.models.weekly_assignment import WeeklyAssignment
from app.infrastructure.database import create_db_engine, create_session_factory, init_db
from app.infrastructure.repositories.assignment_repository import SQLAlchemyAssignmentRepository
from app.infrastructure.repositories.catalog_repository import (
    SQLAlchemyProjectRepository,
    SQLAlchemyTaskRepository,
)
from app.infrastructure.repositories.entry_repository import SQLAlchemyEntryRepository
from app.infrastructure.repositories.user_repository import SQLAlchemyUserRepository
from app.application.services.auth_service import create_user
from app.main import create_app

T0 = datetime(2024, 3, 1, 9, 0, 0)


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite://",
        SECRET_KEY="test-secret",
        BCRYPT_ROUNDS=4,
        TIMEZONE="UTC",
        ENVIRONMENT="test",
        LOG_LEVEL="WARNING",
        DEFAULT_ADMIN_EMAIL="",
        DEFAULT_ADMIN_PASSWORD="",
    )


# ============ Service-level fixtures ============

@pytest.fixture
def db_session():
    """Fresh in-memory database and session for each test."""
    engine = create_db_engine("sqlite://")
    init_db(engine)
    session = create_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def users(db_session):
    return SQLAlchemyUserRepository(db_session, User)


@pytest.fixture
def projects(db_session):
    return SQLAlchemyProjectRepository(db_session, Project)


@pytest.fixture
def tasks(db_session):
    return SQLAlchemyTaskRepository(db_session, Task)


@pytest.fixture
def entries(db_session):
    return SQLAlchemyEntryRepository(db_session, TimeEntry)


@pytest.fixture
def assignments(db_session):
    return SQLAlchemyAssignmentRepository(db_session, WeeklyAssignment)


@pytest.fixture
def admin(users, settings):
    return create_user(users, settings, name="Ada Admin", email="ada@example.com", password="secret123", role="admin")


@pytest.fixture
def employee(users, settings):
    return create_user(users, settings, name="Max Dev", email="max@example.com", password="secret123")


@pytest.fixture
def other_employee(users, settings):
    return create_user(users, settings, name="Lisa Design", email="lisa@example.com", password="secret123")


@pytest.fixture
def website(projects, admin):
    return projects.create({"name": "Website", "color": "#8884d8", "created_by": admin.id})


@pytest.fixture
def ops(projects, admin):
    return projects.create({"name": "Ops", "color": "#ffc658", "created_by": admin.id})


@pytest.fixture
def standup(tasks, ops):
    return tasks.create({"name": "Standup", "project_id": ops.id})


# ============ API fixtures ============

@pytest.fixture
def client(settings):
    """TestClient bound to an app with its own in-memory database."""
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


def register(client, name, email, password="secret123"):
    response = client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
    assert response.status_code == 201, response.text
    return response.json()


def login_headers(client, email, password="secret123"):
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def admin_headers(client):
    register(client, "Ada Admin", "ada@example.com")
    return login_headers(client, "ada@example.com")


@pytest.fixture
def employee_headers(client, admin_headers):
    register(client, "Max Dev", "max@example.com")
    return login_headers(client, "max@example.com")
