"""Resolve named time range tokens into query bounds and trend granularity."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo
from enum import Enum
from zoneinfo import ZoneInfo


class TimeRange(str, Enum):
    LAST_7_DAYS = "last7days"
    LAST_30_DAYS = "last30days"
    LAST_90_DAYS = "last90days"
    THIS_YEAR = "thisYear"

    @classmethod
    def parse(cls, token: str | None) -> "TimeRange | None":
        """Unknown or missing tokens mean "all time", never an error."""
        if not token:
            return None
        try:
            return cls(token)
        except ValueError:
            return None


class Granularity(str, Enum):
    DAY = "day"
    MONTH = "month"

    def bucket_key(self, ts: datetime, tz: tzinfo = timezone.utc) -> str:
        local = ts.astimezone(tz)
        if self is Granularity.MONTH:
            return local.strftime("%Y-%m")
        return local.strftime("%Y-%m-%d")


ROLLING_WINDOWS = {
    TimeRange.LAST_7_DAYS: timedelta(days=7),
    TimeRange.LAST_30_DAYS: timedelta(days=30),
    TimeRange.LAST_90_DAYS: timedelta(days=90),
}


@dataclass(frozen=True)
class TimeWindow:
    lower_bound: datetime | None
    granularity: Granularity
    time_range: TimeRange | None = None


def get_report_timezone(name: str) -> tzinfo:
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def resolve_time_window(
    token: str | TimeRange | None,
    now: datetime | None = None,
    tz: tzinfo = timezone.utc,
) -> TimeWindow:
    """Map a range token to an inclusive lower bound and a bucketing granularity.

    ``thisYear`` starts at local midnight on January 1st in ``tz`` and buckets
    by month; every other token buckets by day. ``now`` defaults to the current
    time and must be re-evaluated per request.
    """
    time_range = token if isinstance(token, TimeRange) else TimeRange.parse(token)
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    if time_range is None:
        return TimeWindow(lower_bound=None, granularity=Granularity.DAY)

    if time_range is TimeRange.THIS_YEAR:
        local_now = now.astimezone(tz)
        start_of_year = datetime(local_now.year, 1, 1, tzinfo=tz)
        return TimeWindow(
            lower_bound=start_of_year.astimezone(timezone.utc),
            granularity=Granularity.MONTH,
            time_range=time_range,
        )

    return TimeWindow(
        lower_bound=now - ROLLING_WINDOWS[time_range],
        granularity=Granularity.DAY,
        time_range=time_range,
    )
