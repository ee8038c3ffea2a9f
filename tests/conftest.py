# tests/conftest.py
import os

# Must be set before any `app` module reads the settings.
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DB_URL", "sqlite+aiosqlite:///./test_session_calendar.db")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from app.db.session import create_sync_engine_for_tests, reset_schema  # noqa: E402
from app.main import create_app  # noqa: E402


@pytest.fixture(scope="session")
def client() -> TestClient:
    """
    Shared TestClient fixture for all tests.

    Uses the application factory so configuration (DB, deps, etc.)
    remains test-friendly.
    """
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def _reset_db():
    """
    Automatically reset the DB before each test.

    Every test gets a clean schema + empty tables.
    """
    reset_schema()
    yield


@pytest.fixture
def seed():
    """
    Insert ORM objects synchronously, outside of any event loop.

    Usage: `seed(User(id="u1"), ScheduleRule(...))`
    """
    engine = create_sync_engine_for_tests()

    def _seed(*objects):
        with Session(engine) as session:
            session.add_all(objects)
            session.commit()

    yield _seed
    engine.dispose()
