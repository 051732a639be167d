"""
analytics/categorical.py

Categorical distributions over a filtered record set.

Every view is a thin projection of :func:`analytics.counting.count_by` or
:func:`analytics.counting.cross_tabulate`; missing values group under
``"Unknown"`` and unrecognized literals group under their own label.
"""

from __future__ import annotations

from typing import Sequence

from analytics.counting import count_by, cross_tabulate, ordered_levels, top_n
from analytics.view_builder import build_distribution, build_single_distribution
from app.domain.failure_record import PRIORITY_LEVELS, SEVERITY_LEVELS, STATUS_LEVELS, FailureRecord
from app.schemas.view_models import CategoryDistribution


def _defect_type(record: FailureRecord) -> str | None:
    return record.defect_type


def _lob(record: FailureRecord) -> str | None:
    return record.lob


def _source(record: FailureRecord) -> str | None:
    return record.source


def _severity(record: FailureRecord) -> str | None:
    return record.severity


def _priority(record: FailureRecord) -> str | None:
    return record.priority


def _status(record: FailureRecord) -> str | None:
    return record.status


def defect_type_distribution(records: Sequence[FailureRecord], top: int = 5) -> CategoryDistribution:
    """Top defect types by count, one series ``"Defect Count"``."""

    return build_single_distribution("Defect Count", top_n(count_by(records, _defect_type), top))


def status_distribution(records: Sequence[FailureRecord]) -> CategoryDistribution:
    """
    Counts for exactly ``Open``, ``In Progress`` and ``Resolved``.

    Labels are fixed and zero categories are kept. Statuses outside these
    three are not shown.
    """

    counts = count_by(records, _status)
    pairs = [(level, counts.get(level, 0)) for level in STATUS_LEVELS]
    return build_single_distribution("Failures", pairs)


def lob_distribution(records: Sequence[FailureRecord], top: int = 3) -> CategoryDistribution:
    """Top lines of business by count, one series ``"Failure Count"``."""

    return build_single_distribution("Failure Count", top_n(count_by(records, _lob), top))


def severity_distribution(records: Sequence[FailureRecord]) -> CategoryDistribution:
    return build_single_distribution(
        "Failures", ordered_levels(count_by(records, _severity), SEVERITY_LEVELS)
    )


def priority_distribution(records: Sequence[FailureRecord]) -> CategoryDistribution:
    return build_single_distribution(
        "Failures", ordered_levels(count_by(records, _priority), PRIORITY_LEVELS)
    )


def source_distribution(records: Sequence[FailureRecord], top: int = 6) -> CategoryDistribution:
    """Failures per source, largest first."""

    return build_single_distribution("Failures", top_n(count_by(records, _source), top))


def _levels_by_source(
    records: Sequence[FailureRecord],
    level_key,
    levels: Sequence[str],
) -> CategoryDistribution:
    table = cross_tabulate(records, _source, level_key)
    sources = sorted(table)
    return build_distribution(
        sources,
        {level: [table[source].get(level, 0) for source in sources] for level in levels},
    )


def severity_by_source(records: Sequence[FailureRecord]) -> CategoryDistribution:
    """Sorted source labels with one aligned series per severity level."""

    return _levels_by_source(records, _severity, SEVERITY_LEVELS)


def priority_by_source(records: Sequence[FailureRecord]) -> CategoryDistribution:
    """Sorted source labels with one aligned series per priority level."""

    return _levels_by_source(records, _priority, PRIORITY_LEVELS)
