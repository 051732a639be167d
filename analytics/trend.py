"""
analytics/trend.py

Time-bucketed failure counts.

``failure_trend`` zero-fills every calendar day of the trailing window so the
consumer receives ``window_days + 1`` ascending labels (fewer only when the
window would begin before ``date.min``).
``monthly_severity_trend`` buckets dated records by ``YYYY-MM`` with one
series per severity level.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Iterable

from analytics.view_builder import build_time_series
from app.domain.failure_record import SEVERITY_LEVELS, FailureRecord
from app.schemas.view_models import TimeSeries

TREND_SERIES_NAME = "Failures"


def _utc_today() -> date:
    return datetime.now(tz=timezone.utc).date()


def _utc_date(value: datetime) -> date:
    if value.tzinfo is None:
        return value.date()
    return value.astimezone(timezone.utc).date()


def failure_trend(
    records: Iterable[FailureRecord],
    window_days: int = 30,
    *,
    today: date | None = None,
) -> TimeSeries:
    """
    Count records per UTC calendar day over ``[today - window_days, today]``.

    Undated and out-of-window records are ignored. A window reaching past
    ``date.min`` starts at ``date.min``.
    """

    end = today or _utc_today()
    window_days = min(max(0, window_days), (end - date.min).days)
    start = end - timedelta(days=window_days)

    buckets: dict[date, int] = {start + timedelta(days=offset): 0 for offset in range(window_days + 1)}
    for record in records:
        if record.date is None:
            continue
        day = _utc_date(record.date)
        if day in buckets:
            buckets[day] += 1

    labels = [day.isoformat() for day in buckets]
    return build_time_series(labels, {TREND_SERIES_NAME: list(buckets.values())})


def monthly_severity_trend(records: Iterable[FailureRecord]) -> TimeSeries:
    """
    Count dated records per month and canonical severity level.

    Months with no records between the first and last observed month are
    not inserted; records with a non-canonical severity count toward no series.
    """

    counts: dict[str, dict[str, int]] = {}
    for record in records:
        if record.date is None:
            continue
        month = _utc_date(record.date).strftime("%Y-%m")
        per_level = counts.setdefault(month, {level: 0 for level in SEVERITY_LEVELS})
        if record.severity in per_level:
            per_level[record.severity] += 1

    months = sorted(counts)
    return build_time_series(
        months,
        {level: [counts[month][level] for month in months] for level in SEVERITY_LEVELS},
    )
