"""
analytics/summary.py

Scalar summary figures for a filtered record set.

Formulas
--------
Total Failures           = len(records)
Critical Failures        = count(severity == Critical)        (case-insensitive)
Resolved Failures        = count(status == Resolved)          (case-insensitive)
Average Resolution Days  = mean(ceil((resolved_date - date) / 1 day))
                           over Resolved records with both dates; 0 when none
Percentage               = round(count / total * 100, 1);     0 when total == 0

Aggregators return raw counts only; percentages are derived here and
nowhere else.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from app.domain.failure_record import FailureRecord
from app.schemas.view_models import HeadlineMetrics, SummaryPercentages, SummaryStats

SERVICENOW_TOKEN = "servicenow"

_SECONDS_PER_DAY = 86_400


def resolution_days(record: FailureRecord) -> int | None:
    """
    Whole days from creation to resolution, rounded up; None when not applicable.
    """

    if not record.is_resolved or record.date is None or record.resolved_date is None:
        return None
    elapsed = (record.resolved_date - record.date).total_seconds()
    return math.ceil(elapsed / _SECONDS_PER_DAY)


def summarize(records: Sequence[FailureRecord]) -> SummaryStats:
    durations = [days for days in (resolution_days(record) for record in records) if days is not None]
    average = float(np.mean(durations)) if durations else 0.0

    return SummaryStats(
        total_failures=len(records),
        critical_failures=sum(1 for record in records if record.is_critical),
        resolved_failures=sum(1 for record in records if record.is_resolved),
        average_resolution_days=average,
    )


def percentage(count: int, total: int) -> float:
    if total == 0:
        return 0.0
    return round(count / total * 100, 1)


def derive_percentages(stats: SummaryStats) -> SummaryPercentages:
    return SummaryPercentages(
        critical_percentage=percentage(stats.critical_failures, stats.total_failures),
        resolved_percentage=percentage(stats.resolved_failures, stats.total_failures),
    )


def headline_metrics(records: Sequence[FailureRecord]) -> HeadlineMetrics:
    """
    Count unresolved work by urgency class.

    ``major_issues``         High severity or P1 priority, not Resolved.
    ``servicenow_incidents`` source mentions ServiceNow, not Resolved.
    ``critical_bugs``        Critical severity, not Resolved.
    """

    open_records = [record for record in records if not record.is_resolved]
    return HeadlineMetrics(
        total_defects=len(records),
        major_issues=sum(
            1
            for record in open_records
            if (record.severity or "").lower() == "high" or (record.priority or "").upper() == "P1"
        ),
        servicenow_incidents=sum(
            1 for record in open_records if SERVICENOW_TOKEN in (record.source or "").lower()
        ),
        critical_bugs=sum(1 for record in open_records if record.is_critical),
    )
