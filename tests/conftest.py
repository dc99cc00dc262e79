"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- An isolated in-memory data store per test
- FastAPI test client bound to that store
- Sample payloads
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from jobboard.core.database import DataStore
from main import create_app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture
def store():
    """
    Fresh in-memory store for each test.
    StaticPool keeps the single connection (and so the data) alive.
    """
    engine = create_engine(
        SQLALCHEMY_TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    data_store = DataStore(engine)
    data_store.create_schema()
    yield data_store
    engine.dispose()


@pytest.fixture
def db_session(store):
    """Session for inspecting the store directly from tests."""
    db = store.session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(store):
    """
    FastAPI test client for an app built around the test store.
    """
    app = create_app(store=store)

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def long_cv():
    """A CV long enough to pass validation"""
    return (
        "Backend engineer with eight years of experience building HTTP services "
        "in Python, PostgreSQL schema design and operating containers in production."
    )


@pytest.fixture
def sample_candidate_data(long_cv):
    """Sample candidate payload for testing"""
    return {
        "name": "Ada Lovelace",
        "cv": long_cv,
        "email": "ada@analytical-engines.org",
    }


@pytest.fixture
def create_posting(client):
    """Create a job posting through the API and return its id."""
    def _create(description="Python developer", deadline="2026-12-31"):
        response = client.post("/jobpostings", json={"description": description, "deadline": deadline})
        assert response.status_code == 201
        listing = client.get("/jobpostings", params={"sortField": "id", "sortOrder": "-1", "page": 0, "pageSize": 1})
        return listing.json()["records"][0]["id"]

    return _create
