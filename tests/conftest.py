"""Pytest fixtures and configuration for trackl tests."""

import pytest
from datetime import datetime, timedelta
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from trackl.database.database import Base, set_sqlite_pragmas
from trackl.database import models  # noqa: F401
from trackl.database.repository import SQLTaskStore
from trackl.models.context import RequestContext
from trackl.models.event import Event
from trackl.models.task import Task


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def db_engine():
    """Create an in-memory SQLite engine with the trackl schema.

    StaticPool keeps a single connection so every session sees the same database.
    """
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )
    event.listen(engine, "connect", set_sqlite_pragmas)

    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def task_store(db_engine):
    """Create a SQLTaskStore instance for testing."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    return SQLTaskStore(TestingSessionLocal)


@pytest.fixture
def test_namespace():
    """Namespace used by most tests."""
    return "test-namespace"


@pytest.fixture
def ctx(test_namespace):
    """Request context for direct store calls."""
    return RequestContext(namespace=test_namespace)


@pytest.fixture
def now():
    """Fixed reference instant for progress calculations."""
    return datetime(2026, 10, 19, 12, 0, 0)


@pytest.fixture
def sample_task(test_namespace):
    """Create a sample Task object for testing."""
    return Task(namespace=test_namespace, icon="🧹", description="Clean the kitchen")


@pytest.fixture
def sample_event(test_namespace, now):
    """Event with a 20 day window, half of it elapsed."""
    return Event(
        namespace=test_namespace,
        icon="🎄",
        date=now + timedelta(days=10),
        reference_date=now - timedelta(days=10),
    )


@pytest.fixture
def test_client(task_store):
    """Create a FastAPI test client backed by the in-memory store."""
    from trackl.api.app import create_app

    app = create_app(store=task_store)
    with TestClient(app) as client:
        yield client
