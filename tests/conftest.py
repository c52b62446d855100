import os

# Keep the module-level engine off the real data/ directory
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import date, datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app import models  # noqa: F401
from app.db.engine_sync import get_sync_session
from app.services.customer_service import CustomerService


class FakeSender:
    """Records every send; results are consumed in order (default success)."""

    def __init__(self, results=None, failing_numbers=()):
        self.results = list(results or [])
        self.failing_numbers = set(failing_numbers)
        self.sent = []

    def send(self, to, message):
        self.sent.append((to, message))
        if to in self.failing_numbers:
            raise RuntimeError(f"transport down for {to}")
        if self.results:
            result = self.results.pop(0)
            if isinstance(result, Exception):
                raise result
            return result
        return True


class FixedClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def sender():
    return FakeSender()


@pytest.fixture
def make_customer(session):
    def _make(**overrides):
        data = {
            "name": "Ada Lovelace",
            "phone_number": "9876543210",
            "service_type": "Solar",
            "service_date": date(2024, 1, 10),
            "service_duration": 3,
            "service_duration_unit": "months",
        }
        data.update(overrides)
        return CustomerService(session).create_customer(data)

    return _make


@pytest.fixture
def client(engine, sender):
    from app.api.notifications.main import get_sms_sender
    from app.main import app

    def _session_override():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_sync_session] = _session_override
    app.dependency_overrides[get_sms_sender] = lambda: sender
    yield TestClient(app)
    app.dependency_overrides.clear()
