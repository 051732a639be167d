"""
tests/test_summary.py

Pytest unit tests for summary statistics, percentages and headline metrics.
"""

from __future__ import annotations

import pytest

from analytics.summary import derive_percentages, headline_metrics, percentage, summarize
from app.schemas.view_models import SummaryStats


class TestSummarize:
    def test_empty_is_all_zero(self) -> None:
        stats = summarize([])

        assert stats == SummaryStats(
            total_failures=0,
            critical_failures=0,
            resolved_failures=0,
            average_resolution_days=0,
        )

    def test_counts_case_insensitively(self, make_record) -> None:
        records = [
            make_record(severity="critical", status="RESOLVED"),
            make_record(severity="Critical", status="Open"),
            make_record(severity="High", status="Resolved"),
        ]

        stats = summarize(records)

        assert stats.total_failures == 3
        assert stats.critical_failures == 2
        assert stats.resolved_failures == 2

    def test_average_resolution_rounds_each_record_up(self, make_record) -> None:
        records = [
            make_record(status="Resolved", date="2024-01-01", resolved_date="2024-01-03T12:00:00"),
            make_record(status="Resolved", date="2024-01-01", resolved_date="2024-01-02"),
            make_record(status="Open", date="2024-01-01", resolved_date="2024-03-01"),
            make_record(status="Resolved", date=None, resolved_date="2024-01-05"),
        ]

        assert summarize(records).average_resolution_days == pytest.approx(2.0)

    def test_no_qualifying_records(self, make_record) -> None:
        records = [make_record(status="Resolved", date="2024-01-01")]

        assert summarize(records).average_resolution_days == 0


class TestPercentages:
    @pytest.mark.parametrize(
        ("count", "total", "expected"),
        [(0, 0, 0.0), (1, 3, 33.3), (2, 3, 66.7), (5, 5, 100.0)],
    )
    def test_percentage(self, count: int, total: int, expected: float) -> None:
        assert percentage(count, total) == expected

    def test_derive_percentages(self) -> None:
        stats = SummaryStats(total_failures=8, critical_failures=2, resolved_failures=6)

        derived = derive_percentages(stats)

        assert derived.critical_percentage == 25.0
        assert derived.resolved_percentage == 75.0


class TestHeadlineMetrics:
    def test_counts_unresolved_work(self, make_record) -> None:
        records = [
            make_record(severity="High", priority="P3", status="Open", source="Rally"),
            make_record(severity="Low", priority="P1", status="In Progress", source="Jira"),
            make_record(severity="High", status="Resolved", source="Rally"),
            make_record(severity="Critical", status="Open", source="ServiceNow Prod"),
            make_record(severity="Low", status="Resolved", source="ServiceNow"),
        ]

        headline = headline_metrics(records)

        assert headline.total_defects == 5
        assert headline.major_issues == 2
        assert headline.servicenow_incidents == 1
        assert headline.critical_bugs == 1
