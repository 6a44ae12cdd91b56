"""Shared pytest fixtures for device registry tests.

Provides an in-memory database, sample devices, and a FastAPI test client
for both unit and integration tests.
"""

import os

# CRITICAL: Point the app at an in-memory database BEFORE importing config
os.environ["DATABASE_URL"] = "sqlite://"

import uuid
from datetime import datetime
from typing import Generator
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db, init_db
from models.device import Brand, Device, State
from services.device_repository import DeviceRepository


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture(scope="function")
def test_engine():
    """Create a fresh in-memory SQLite engine with all tables.

    StaticPool keeps the single connection alive so the TestClient thread
    sees the same database as the test.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(test_engine) -> Generator[Session, None, None]:
    """Create a database session bound to the test engine."""
    session_factory = sessionmaker(bind=test_engine, autoflush=False)
    session = session_factory()

    yield session

    session.close()


@pytest.fixture
def repository(db_session: Session) -> DeviceRepository:
    return DeviceRepository(db_session)


@pytest.fixture
def mock_repository() -> MagicMock:
    """Create a mocked repository for service unit tests."""
    return MagicMock(spec=DeviceRepository)


# ============================================================================
# Device Fixtures
# ============================================================================

@pytest.fixture
def creation_time() -> datetime:
    return datetime(2025, 1, 15, 9, 30, 0)


@pytest.fixture
def available_device(creation_time: datetime) -> Device:
    return Device.create_with_identity(
        uuid.uuid4(), "Pixel 8", Brand.GOOGLE, State.AVAILABLE, creation_time
    )


@pytest.fixture
def in_use_device(creation_time: datetime) -> Device:
    return Device.create_with_identity(
        uuid.uuid4(), "iPhone 15", Brand.APPLE, State.IN_USE, creation_time
    )


@pytest.fixture
def stored_device(repository: DeviceRepository) -> Device:
    """Persist an available device for integration tests."""
    return repository.save(Device.create_new("Galaxy S24", Brand.SAMSUNG, State.AVAILABLE))


@pytest.fixture
def stored_in_use_device(repository: DeviceRepository) -> Device:
    """Persist an in-use device for integration tests."""
    return repository.save(Device.create_new("iPhone 15", Brand.APPLE, State.IN_USE))


# ============================================================================
# FastAPI Test Client
# ============================================================================

@pytest.fixture
def client(db_session: Session) -> TestClient:
    """Create FastAPI test client with overridden database dependency."""
    # Import app here to avoid loading it for unit tests
    from main import app

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    # Clean up
    app.dependency_overrides.clear()
