"""
Shared pytest fixtures.

Uses a SQLite database so no Postgres is required for tests, and a
FixedClock-backed civil calendar so "today" never depends on the wall clock.
"""
import os
import uuid
from datetime import datetime, timezone

os.environ.setdefault("DATABASE_URL", "sqlite:///./test_smarty.db")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.clock import CivilCalendar, FixedClock, get_calendar
from app.db.base import Base, get_db
from app.main import app
from app.models import SmartyCheckin, UserBadge  # noqa: F401  (register tables)

SQLITE_URL = "sqlite:///./test_smarty.db"

engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# 12:30 in Nicosia (EET, UTC+2), before the March DST switch.
FIXED_INSTANT = datetime(2026, 3, 10, 10, 30, tzinfo=timezone.utc)
FIXED_DAY = "2026-03-10"


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def clock():
    return FixedClock(FIXED_INSTANT)


@pytest.fixture()
def civil_calendar(clock):
    return CivilCalendar("Europe/Nicosia", clock)


@pytest.fixture()
def user_id():
    """A fresh owner per test so rows never bleed between tests."""
    return f"user-{uuid.uuid4().hex[:12]}"


@pytest.fixture()
def client(civil_calendar):
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_calendar] = lambda: civil_calendar
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
