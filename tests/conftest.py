"""
Test configuration and fixtures.
"""
import os
import pytest
from datetime import datetime, timezone
from typing import Generator
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

# Settings are read once; set them before importing the app
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BUSINESS_TIMEZONE"] = "UTC"
os.environ["JWT_SECRET_KEY"] = "shopfront-test-suite-signing-key-0123456789"

from shopfront.main import app
from shopfront.db.base import Base
from shopfront.db.session import get_db
from shopfront.models.admin import Admin
from shopfront.core.security import hash_password
from shopfront.routers.availability import get_now
import shopfront.models  # noqa: F401


# One in-memory database shared by the test session and the app under test
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Monday 2025-01-06 10:00 UTC
FROZEN_NOW = datetime(2025, 1, 6, 10, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Fresh schema and session for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """Create test client with database session and clock overrides."""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = lambda: FROZEN_NOW

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def admin(db: Session) -> Admin:
    """An admin account with a known password."""
    admin = Admin(
        email="owner@example.com",
        hashed_password=hash_password("testpassword123"),
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin


@pytest.fixture
def auth_headers(client: TestClient, admin: Admin) -> dict:
    """Get auth headers for the admin."""
    response = client.post(
        "/api/auth/login",
        json={"email": "owner@example.com", "password": "testpassword123"}
    )
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_week():
    """
    Build 7 day entries (0=Sunday).

    Every day defaults to open 07:00-15:00; pass {day: None} to close a day
    or {day: ("HH:MM", "HH:MM")} for different hours.
    """
    def _make_week(overrides: dict | None = None, default=("07:00", "15:00")) -> list:
        overrides = overrides or {}
        days = []
        for day in range(7):
            window = overrides.get(day, default)
            days.append({
                "day_of_week": day,
                "is_open": window is not None,
                "open_time": window[0] if window else None,
                "close_time": window[1] if window else None,
            })
        return days

    return _make_week
