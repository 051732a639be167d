"""
analytics/recency.py

Most-recent-first projection of failure records for tabular display.
"""

from __future__ import annotations

from typing import Sequence

from analytics.counting import bucket
from app.domain.failure_record import FailureRecord
from app.schemas.view_models import RecentFailure


def _to_recent(record: FailureRecord) -> RecentFailure:
    return RecentFailure(
        id=record.id,
        title=record.title,
        description=record.description,
        date=record.date.date().isoformat() if record.date is not None else "",
        severity=bucket(record.severity),
        status=bucket(record.status),
        source=bucket(record.source),
        priority=bucket(record.priority),
    )


def recent_failures(records: Sequence[FailureRecord], limit: int = 10) -> list[RecentFailure]:
    """
    Return up to *limit* records ordered by date descending.

    Equal dates keep their input order; undated records come last, also in
    input order.
    """

    if limit <= 0:
        return []
    dated = [record for record in records if record.date is not None]
    undated = [record for record in records if record.date is None]
    dated.sort(key=lambda record: record.date, reverse=True)
    return [_to_recent(record) for record in (dated + undated)[:limit]]
