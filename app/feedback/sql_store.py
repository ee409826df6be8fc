"""SQLAlchemy-backed feedback store for durable deployments."""

import logging
from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, Text, create_engine, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker
from sqlalchemy.pool import StaticPool

from app.feedback.errors import StorageError
from app.feedback.store import Clock, FeedbackRecord, FeedbackStore, utc_now
from app.models.schemas import FeedbackSubmission

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class FeedbackRow(Base):
    __tablename__ = "feedback"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(200))
    email: Mapped[str] = mapped_column(String(320))
    event_name: Mapped[str] = mapped_column(String(200))
    event_type: Mapped[str] = mapped_column(String(100), index=True)
    rating: Mapped[int] = mapped_column(Integer)                     # 1-5
    comments: Mapped[str] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, index=True)  # naive UTC


def _to_naive_utc(ts: datetime) -> datetime:
    if ts.tzinfo is None:
        return ts
    return ts.astimezone(timezone.utc).replace(tzinfo=None)


def _to_record(row: FeedbackRow) -> FeedbackRecord:
    return FeedbackRecord(
        id=row.id,
        name=row.name,
        email=row.email,
        event_name=row.event_name,
        event_type=row.event_type,
        rating=row.rating,
        comments=row.comments,
        created_at=row.created_at.replace(tzinfo=timezone.utc),
    )


class SqlFeedbackStore(FeedbackStore):
    backend_name = "sql"

    def __init__(self, database_url: str, clock: Clock = utc_now) -> None:
        self._clock = clock
        engine_kwargs: dict = {}
        if database_url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in database_url or database_url.rstrip("/") == "sqlite:":
                # One shared connection, otherwise every session sees an empty database
                engine_kwargs["poolclass"] = StaticPool
        try:
            self._engine = create_engine(database_url, **engine_kwargs)
            Base.metadata.create_all(self._engine)
        except SQLAlchemyError as e:
            raise StorageError(f"Could not initialise feedback database: {e}") from e
        self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
        logger.info("Feedback database ready (%s)", self._engine.url.render_as_string(hide_password=True))

    def insert(self, submission: FeedbackSubmission) -> FeedbackRecord:
        row = FeedbackRow(created_at=_to_naive_utc(self._clock()), **submission.model_dump())
        try:
            with self._session_factory() as session:
                session.add(row)
                session.commit()
                session.refresh(row)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to insert feedback: {e}") from e
        logger.info("Stored feedback %d for event %r", row.id, row.event_name)
        return _to_record(row)

    def query(self, lower_bound: datetime | None = None) -> list[FeedbackRecord]:
        stmt = select(FeedbackRow)
        if lower_bound is not None:
            stmt = stmt.where(FeedbackRow.created_at >= _to_naive_utc(lower_bound))
        try:
            with self._session_factory() as session:
                rows = session.scalars(stmt).all()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to query feedback: {e}") from e
        return [_to_record(r) for r in rows]

    def count(self) -> int:
        try:
            with self._session_factory() as session:
                return session.scalar(select(func.count()).select_from(FeedbackRow)) or 0
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to count feedback: {e}") from e

    def close(self) -> None:
        self._engine.dispose()
        logger.info("Feedback database connections closed")
