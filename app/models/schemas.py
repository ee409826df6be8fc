"""Request/Response Pydantic models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Submissions ──────────────────────────────────────────────────────
class FeedbackSubmission(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    name: str = Field(..., min_length=1, description="Submitter name")
    email: EmailStr = Field(..., description="Submitter email")
    event_name: str = Field(..., min_length=1)
    event_type: str = Field(..., min_length=1, description="Free-form category label, e.g. Workshop")
    rating: int = Field(..., ge=1, le=5, strict=True)
    comments: str = Field(..., min_length=1)


class FeedbackOut(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    event_name: str
    event_type: str
    rating: int
    comments: str
    created_at: datetime


class SubmitFeedbackResponse(BaseModel):
    message: str
    feedback: FeedbackOut


# ── Analytics ────────────────────────────────────────────────────────
class SentimentSummary(CamelModel):
    total: int = 0
    positive: int = 0
    neutral: int = 0
    negative: int = 0
    positive_percentage: int = 0
    neutral_percentage: int = 0
    negative_percentage: int = 0


class EventTypeSummary(CamelModel):
    name: str
    count: int
    avg_rating: float


class TrendPoint(CamelModel):
    date: str  # YYYY-MM-DD, or YYYY-MM for monthly buckets
    count: int
    avg_rating: float


class HealthResponse(BaseModel):
    status: str
    service: str
    storage_backend: str
    records: int | None = None  # None when storage is unreachable
