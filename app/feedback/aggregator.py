"""Sentiment, event-type and trend aggregation over feedback records.

Every function here is pure: it reads an already time-filtered record set and
returns fresh summaries, so nothing can drift from the stored records.
"""

from collections.abc import Iterable
from datetime import timezone, tzinfo
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from app.feedback.store import FeedbackRecord
from app.feedback.time_window import Granularity
from app.models.schemas import EventTypeSummary, SentimentSummary, TrendPoint


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


def classify_sentiment(rating: int) -> Sentiment:
    if rating >= 4:
        return Sentiment.POSITIVE
    if rating == 3:
        return Sentiment.NEUTRAL
    return Sentiment.NEGATIVE


def round_half_up(numerator: int, denominator: int, places: int = 0) -> Decimal:
    """Exact ``numerator / denominator`` rounded half away from zero; 0 when denominator is 0."""
    if denominator == 0:
        return Decimal(0)
    quantum = Decimal(1).scaleb(-places)
    return (Decimal(numerator) / Decimal(denominator)).quantize(quantum, rounding=ROUND_HALF_UP)


def _percentage(part: int, total: int) -> int:
    return int(round_half_up(part * 100, total))


def _average(total: int, count: int) -> float:
    return float(round_half_up(total, count, places=1))


def sentiment_summary(records: Iterable[FeedbackRecord]) -> SentimentSummary:
    counts = {s: 0 for s in Sentiment}
    for r in records:
        counts[classify_sentiment(r.rating)] += 1
    total = sum(counts.values())

    return SentimentSummary(
        total=total,
        positive=counts[Sentiment.POSITIVE],
        neutral=counts[Sentiment.NEUTRAL],
        negative=counts[Sentiment.NEGATIVE],
        positive_percentage=_percentage(counts[Sentiment.POSITIVE], total),
        neutral_percentage=_percentage(counts[Sentiment.NEUTRAL], total),
        negative_percentage=_percentage(counts[Sentiment.NEGATIVE], total),
    )


def _group_ratings(pairs: Iterable[tuple[str, int]]) -> dict[str, list[int]]:
    groups: dict[str, list[int]] = {}
    for key, rating in pairs:
        groups.setdefault(key, []).append(rating)
    return groups


def event_type_summary(records: Iterable[FeedbackRecord]) -> list[EventTypeSummary]:
    """One entry per event type present, in order of first appearance."""
    groups = _group_ratings((r.event_type, r.rating) for r in records)
    return [
        EventTypeSummary(name=name, count=len(ratings), avg_rating=_average(sum(ratings), len(ratings)))
        for name, ratings in groups.items()
    ]


def trend_summary(
    records: Iterable[FeedbackRecord],
    granularity: Granularity = Granularity.DAY,
    tz: tzinfo = timezone.utc,
) -> list[TrendPoint]:
    """Count and average rating per calendar bucket, oldest first.

    Only buckets with at least one record appear; gaps are not filled.
    """
    groups = _group_ratings((granularity.bucket_key(r.created_at, tz), r.rating) for r in records)
    return [
        TrendPoint(date=key, count=len(groups[key]), avg_rating=_average(sum(groups[key]), len(groups[key])))
        for key in sorted(groups)
    ]
