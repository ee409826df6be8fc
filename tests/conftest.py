"""Shared fixtures: a controllable clock, both store backends, and an API test client.

Timestamps are fixed so window and bucket assertions do not depend on when
the suite runs.
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.feedback.sql_store import SqlFeedbackStore
from app.feedback.store import InMemoryFeedbackStore
from app.main import create_app
from app.models.schemas import FeedbackSubmission

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def set(self, when: datetime) -> None:
        self.now = when

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


# ── Mock Data ────────────────────────────────────────────────────────

VALID_PAYLOAD = {
    "name": "Priya Nair",
    "email": "priya@campus.edu",
    "eventName": "Intro to Rust",
    "eventType": "Workshop",
    "rating": 5,
    "comments": "Hands-on and well paced.",
}


def _make_submission(**overrides) -> FeedbackSubmission:
    data = {
        "name": "Priya Nair",
        "email": "priya@campus.edu",
        "event_name": "Intro to Rust",
        "event_type": "Workshop",
        "rating": 5,
        "comments": "Hands-on and well paced.",
    }
    data.update(overrides)
    return FeedbackSubmission(**data)


# ── Fixtures ─────────────────────────────────────────────────────────

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_submission():
    return _make_submission


@pytest.fixture
def valid_payload() -> dict:
    return dict(VALID_PAYLOAD)


@pytest.fixture(params=["memory", "sql"])
def store(request, clock):
    if request.param == "memory":
        s = InMemoryFeedbackStore(clock=clock)
    else:
        s = SqlFeedbackStore("sqlite:///:memory:", clock=clock)
    yield s
    s.close()


@pytest.fixture
def memory_store(clock) -> InMemoryFeedbackStore:
    return InMemoryFeedbackStore(clock=clock)


@pytest.fixture
def api(memory_store, clock):
    app = create_app(Settings(storage_backend="memory", _env_file=None))
    with TestClient(app) as client:
        app.state.feedback_store = memory_store
        app.state.clock = clock
        yield client
