"""Feedback record store: the interface and its in-memory implementation."""

import itertools
import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone

from app.models.schemas import FeedbackSubmission

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class FeedbackRecord:
    id: int
    name: str
    email: str
    event_name: str
    event_type: str
    rating: int
    comments: str
    created_at: datetime


class FeedbackStore(ABC):
    """Holds feedback records for the lifetime of the process or the database.

    Records are append-only: there is no update or delete.
    """

    backend_name: str = "abstract"

    @abstractmethod
    def insert(self, submission: FeedbackSubmission) -> FeedbackRecord:
        """Stamp ``created_at`` with the current time and store the record."""

    @abstractmethod
    def query(self, lower_bound: datetime | None = None) -> list[FeedbackRecord]:
        """Return records created at or after ``lower_bound``, in no particular order."""

    @abstractmethod
    def count(self) -> int: ...

    def close(self) -> None:
        pass


@dataclass
class InMemoryFeedbackStore(FeedbackStore):
    clock: Clock = utc_now
    records: list[FeedbackRecord] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _ids: itertools.count = field(default_factory=lambda: itertools.count(1), repr=False)

    backend_name = "memory"

    def insert(self, submission: FeedbackSubmission) -> FeedbackRecord:
        with self._lock:
            record = FeedbackRecord(
                id=next(self._ids),
                created_at=self.clock().astimezone(timezone.utc),
                **submission.model_dump(),
            )
            self.records.append(record)
        logger.info("Stored feedback %d for event %r", record.id, record.event_name)
        return record

    def query(self, lower_bound: datetime | None = None) -> list[FeedbackRecord]:
        with self._lock:
            snapshot = list(self.records)
        if lower_bound is None:
            return snapshot
        return [r for r in snapshot if r.created_at >= lower_bound]

    def count(self) -> int:
        with self._lock:
            return len(self.records)

    def close(self) -> None:
        logger.info("Discarding %d in-memory feedback records", self.count())
