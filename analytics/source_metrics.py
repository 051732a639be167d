"""
analytics/source_metrics.py

Per-source health counts.

Records are grouped by their exact source string (``"Unknown"`` when
missing). Every figure is a raw count; :func:`resolution_rate` is the
explicit presentation helper for the resolved share.
"""

from __future__ import annotations

from typing import Sequence

from analytics.counting import bucket
from analytics.summary import percentage
from app.domain.failure_record import FailureRecord
from app.schemas.view_models import SourceMetrics, SourceMetricsEntry

_STATUS_FIELDS: dict[str, str] = {
    "open": "open",
    "in progress": "in_progress",
    "resolved": "resolved",
}
_SEVERITY_FIELDS = ("critical", "high", "medium", "low")
_PRIORITY_FIELDS = ("p1", "p2", "p3", "p4")


def _new_counts() -> dict:
    counts: dict = {"total": 0, "defect_types": {}, "lobs": {}}
    for name in (*_STATUS_FIELDS.values(), *_SEVERITY_FIELDS, *_PRIORITY_FIELDS):
        counts[name] = 0
    return counts


def metrics_by_source(records: Sequence[FailureRecord]) -> SourceMetrics:
    grouped: dict[str, dict] = {}
    for record in records:
        counts = grouped.setdefault(bucket(record.source), _new_counts())
        counts["total"] += 1

        status_field = _STATUS_FIELDS.get((record.status or "").strip().lower())
        if status_field:
            counts[status_field] += 1

        severity = (record.severity or "").strip().lower()
        if severity in _SEVERITY_FIELDS:
            counts[severity] += 1

        priority = (record.priority or "").strip().lower()
        if priority in _PRIORITY_FIELDS:
            counts[priority] += 1

        defect_type = bucket(record.defect_type)
        counts["defect_types"][defect_type] = counts["defect_types"].get(defect_type, 0) + 1
        lob = bucket(record.lob)
        counts["lobs"][lob] = counts["lobs"].get(lob, 0) + 1

    return SourceMetrics(
        per_source={source: SourceMetricsEntry(**grouped[source]) for source in sorted(grouped)}
    )


def resolution_rate(entry: SourceMetricsEntry) -> float:
    """Resolved share of *entry* as a percentage rounded to one decimal."""

    return percentage(entry.resolved, entry.total)
