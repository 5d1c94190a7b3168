"""Shared test fixtures and configuration."""
import pytest
from fastapi.testclient import TestClient

from ballotbox.core.config import Settings
from ballotbox.core.constants import DEFAULT_VOTE_OPTIONS
from ballotbox.db import Database
from ballotbox.main import create_app, open_database


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    """Start every test with empty rate limit counters."""
    from ballotbox.core.rate_limit import limiter

    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture(scope="function")
def test_settings(tmp_path):
    """Settings pointing at a fresh SQLite file for each test."""
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite:///{tmp_path / 'votes.db'}",
        VOTE_OPTIONS=list(DEFAULT_VOTE_OPTIONS),
        ENVIRONMENT="testing",
        SSE_RESULTS_INTERVAL=0,
    )


@pytest.fixture(scope="function")
def database(test_settings):
    """Open, create and seed the test database."""
    database = open_database(test_settings)
    yield database
    database.dispose()


@pytest.fixture(scope="function")
def empty_database(test_settings):
    """A database with tables but no seeded options."""
    database = Database(test_settings.get_database_url())
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture(scope="function")
def db_session(database):
    """Create a new database session for a test."""
    with database.session() as session:
        yield session


@pytest.fixture(scope="function")
def app(test_settings):
    return create_app(test_settings)


@pytest.fixture(scope="function")
def client(app):
    """Create a test client; entering it runs startup seeding."""
    with TestClient(app) as test_client:
        yield test_client

