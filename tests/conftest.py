from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from cuebook.auth import create_access_token, ensure_admin
from cuebook.db import get_session, init_db
from cuebook.main import app
from cuebook.registry import ResourceRegistry
from cuebook.scheduler import BookingScheduler, CalendarLocks
from cuebook.store import SqlBookingStore

# Fixed "now" for service-level tests; HTTP tests use the real clock.
NOW = datetime(2030, 3, 14, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def engine():
    # One in-memory database shared by every connection of the test
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def registry(session) -> ResourceRegistry:
    return ResourceRegistry(session)


@pytest.fixture
def store(session) -> SqlBookingStore:
    return SqlBookingStore(session)


@pytest.fixture
def scheduler(registry, store) -> BookingScheduler:
    return BookingScheduler(registry, store, CalendarLocks(), clock=lambda: NOW)


@pytest.fixture
def client(engine):
    def _session_override():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _session_override
    # Not used as a context manager: the lifespan would touch the configured database
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(session) -> dict[str, str]:
    ensure_admin(session, "staff", "cue-ball-123")
    return {"Authorization": f"Bearer {create_access_token('staff')}"}


def future_slot(days: int = 1, hour: int = 18, minutes: int = 60) -> tuple[datetime, datetime]:
    start = (datetime.now(timezone.utc) + timedelta(days=days)).replace(
        hour=hour, minute=0, second=0, microsecond=0
    )
    return start, start + timedelta(minutes=minutes)
