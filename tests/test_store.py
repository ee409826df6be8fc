"""Tests for the feedback stores. Each test runs against both backends."""

from datetime import datetime, timedelta, timezone

import pytest

from app.config import Settings
from app.feedback.errors import StorageError
from app.feedback.factory import create_store
from app.feedback.sql_store import FeedbackRow, SqlFeedbackStore
from app.feedback.store import InMemoryFeedbackStore


def test_insert_stamps_creation_time(store, clock, make_submission):
    record = store.insert(make_submission())
    assert record.created_at == clock.now
    assert record.created_at.tzinfo is not None


def test_round_trip_unchanged_except_timestamp(store, make_submission):
    submission = make_submission(event_type="Talk", rating=2, comments="Audio was hard to follow.")
    stored = store.insert(submission)
    [fetched] = store.query()
    assert fetched == stored
    assert {
        "name": fetched.name,
        "email": fetched.email,
        "event_name": fetched.event_name,
        "event_type": fetched.event_type,
        "rating": fetched.rating,
        "comments": fetched.comments,
    } == submission.model_dump()


def test_ids_are_unique(store, make_submission):
    ids = {store.insert(make_submission()).id for _ in range(5)}
    assert len(ids) == 5


def test_query_without_bound_returns_everything(store, clock, make_submission):
    for _ in range(3):
        store.insert(make_submission())
        clock.advance(days=40)
    assert len(store.query()) == 3
    assert store.count() == 3


def test_lower_bound_is_inclusive(store, clock, make_submission):
    boundary = datetime(2026, 1, 1, tzinfo=timezone.utc)
    clock.set(boundary - timedelta(seconds=1))
    store.insert(make_submission(name="before"))
    clock.set(boundary)
    store.insert(make_submission(name="at"))
    clock.set(boundary + timedelta(days=3))
    store.insert(make_submission(name="after"))

    names = {r.name for r in store.query(boundary)}
    assert names == {"at", "after"}


def test_query_is_monotonic_in_bound(store, clock, make_submission):
    start = clock.now
    for _ in range(10):
        store.insert(make_submission())
        clock.advance(hours=13)

    sizes = [len(store.query(start + timedelta(hours=h))) for h in range(0, 150, 10)]
    assert sizes == sorted(sizes, reverse=True)
    assert sizes[0] == 10


def test_query_accepts_non_utc_bound(store, clock, make_submission):
    store.insert(make_submission())
    plus_two = timezone(timedelta(hours=2))
    assert len(store.query(clock.now.astimezone(plus_two))) == 1
    assert store.query((clock.now + timedelta(seconds=1)).astimezone(plus_two)) == []


def test_records_are_immutable(store, make_submission):
    record = store.insert(make_submission())
    with pytest.raises(AttributeError):
        record.rating = 1


def test_memory_query_returns_snapshot(memory_store, make_submission):
    memory_store.insert(make_submission())
    snapshot = memory_store.query()
    memory_store.insert(make_submission())
    assert len(snapshot) == 1


def test_sql_store_persists_across_instances(tmp_path, clock, make_submission):
    url = f"sqlite:///{tmp_path / 'feedback.db'}"
    first = SqlFeedbackStore(url, clock=clock)
    first.insert(make_submission(event_name="Career Fair"))
    first.close()

    second = SqlFeedbackStore(url, clock=clock)
    try:
        [record] = second.query()
        assert record.event_name == "Career Fair"
        assert record.created_at == clock.now
    finally:
        second.close()


def test_sql_store_wraps_backend_errors(tmp_path):
    with pytest.raises(StorageError):
        SqlFeedbackStore(f"sqlite:///{tmp_path / 'missing-dir' / 'feedback.db'}")


def test_create_store_selects_backend():
    memory = create_store(Settings(storage_backend="memory", _env_file=None))
    assert isinstance(memory, InMemoryFeedbackStore)

    sql = create_store(Settings(storage_backend="sql", database_url="sqlite:///:memory:", _env_file=None))
    try:
        assert isinstance(sql, SqlFeedbackStore)
        assert sql.count() == 0
    finally:
        sql.close()


@pytest.fixture
def broken_sql_store(clock):
    s = SqlFeedbackStore("sqlite:///:memory:", clock=clock)
    FeedbackRow.__table__.drop(s._engine)
    yield s
    s.close()


def test_sql_insert_wraps_backend_errors(broken_sql_store, make_submission):
    with pytest.raises(StorageError):
        broken_sql_store.insert(make_submission())


def test_sql_query_wraps_backend_errors(broken_sql_store):
    with pytest.raises(StorageError):
        broken_sql_store.query()
    with pytest.raises(StorageError):
        broken_sql_store.query(datetime(2026, 1, 1, tzinfo=timezone.utc))


def test_sql_count_wraps_backend_errors(broken_sql_store):
    with pytest.raises(StorageError):
        broken_sql_store.count()
