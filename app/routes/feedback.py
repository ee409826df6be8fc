"""Feedback submission and analytics endpoints."""

import logging
from datetime import tzinfo
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Request, status

from app.feedback.aggregator import event_type_summary, sentiment_summary, trend_summary
from app.feedback.store import Clock, FeedbackStore
from app.feedback.time_window import TimeWindow, resolve_time_window
from app.feedback.validation import validate_submission
from app.models.schemas import (
    EventTypeSummary,
    FeedbackOut,
    SentimentSummary,
    SubmitFeedbackResponse,
    TrendPoint,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def get_store(request: Request) -> FeedbackStore:
    return request.app.state.feedback_store


def get_report_tz(request: Request) -> tzinfo:
    return request.app.state.report_tz


def get_clock(request: Request) -> Clock:
    return request.app.state.clock


def get_time_window(
    time_range: str | None = Query(default=None, alias="timeRange"),
    tz: tzinfo = Depends(get_report_tz),
    clock: Clock = Depends(get_clock),
) -> TimeWindow:
    """Resolved fresh on every request since "now" moves."""
    return resolve_time_window(time_range, now=clock(), tz=tz)


@router.post("", response_model=SubmitFeedbackResponse, status_code=status.HTTP_201_CREATED)
def submit_feedback(
    payload: Any = Body(...),
    store: FeedbackStore = Depends(get_store),
):
    submission = validate_submission(payload)
    record = store.insert(submission)
    return SubmitFeedbackResponse(
        message="Feedback submitted successfully",
        feedback=FeedbackOut.model_validate(record),
    )


@router.get("", response_model=list[FeedbackOut])
def list_feedback(
    window: TimeWindow = Depends(get_time_window),
    store: FeedbackStore = Depends(get_store),
):
    records = sorted(store.query(window.lower_bound), key=lambda r: r.created_at, reverse=True)
    return [FeedbackOut.model_validate(r) for r in records]


@router.get("/stats", response_model=SentimentSummary)
def get_sentiment_stats(
    window: TimeWindow = Depends(get_time_window),
    store: FeedbackStore = Depends(get_store),
):
    return sentiment_summary(store.query(window.lower_bound))


@router.get("/stats/event-types", response_model=list[EventTypeSummary])
def get_event_type_stats(store: FeedbackStore = Depends(get_store)):
    """All-time breakdown: ``timeRange`` is deliberately not applied here."""
    return event_type_summary(store.query())


@router.get("/stats/trends", response_model=list[TrendPoint])
def get_trends(
    window: TimeWindow = Depends(get_time_window),
    store: FeedbackStore = Depends(get_store),
    tz: tzinfo = Depends(get_report_tz),
):
    return trend_summary(store.query(window.lower_bound), window.granularity, tz)
