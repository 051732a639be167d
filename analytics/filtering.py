"""
analytics/filtering.py

Source and date-range restriction applied before any aggregation.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timezone
from typing import Iterable

from app.domain.failure_record import FailureRecord, FilterCriteria

logger = logging.getLogger(__name__)


def _date_start(value: date) -> datetime:
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def _date_end(value: date) -> datetime:
    return datetime.combine(value, time.max, tzinfo=timezone.utc)


def matches_source(record: FailureRecord, sources: frozenset[str]) -> bool:
    """
    True when *sources* is empty or the record's source contains any token.
    """

    if not sources:
        return True
    if not record.source:
        return False
    haystack = record.source.lower()
    return any(token in haystack for token in sources)


def matches_date(
    record: FailureRecord,
    start: datetime | None,
    end: datetime | None,
) -> bool:
    if start is None and end is None:
        return True
    if record.date is None:
        return False
    if start is not None and record.date < start:
        return False
    if end is not None and record.date > end:
        return False
    return True


def filter_records(
    records: Iterable[FailureRecord],
    criteria: FilterCriteria | None = None,
) -> list[FailureRecord]:
    """
    Return the records passing both the source and the date predicate.

    The date interval is inclusive on both ends; ``end`` covers its whole
    UTC calendar day. Input order is preserved and the operation is
    idempotent.
    """

    criteria = criteria or FilterCriteria()
    start = _date_start(criteria.start) if criteria.start is not None else None
    end = _date_end(criteria.end) if criteria.end is not None else None

    selected = [
        record
        for record in records
        if matches_source(record, criteria.sources) and matches_date(record, start, end)
    ]
    logger.debug(
        "Filtered failure records kept=%d sources=%s start=%s end=%s",
        len(selected),
        sorted(criteria.sources),
        criteria.start,
        criteria.end,
    )
    return selected
