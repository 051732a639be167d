from __future__ import annotations

import unittest
from datetime import datetime, timezone

from analytics.source_metrics import metrics_by_source, resolution_rate
from app.domain.failure_record import FailureRecord
from app.schemas.view_models import SourceMetricsEntry


def _record(record_id: str, **fields) -> FailureRecord:
    return FailureRecord(id=record_id, date=datetime(2024, 3, 1, tzinfo=timezone.utc), **fields)


class TestMetricsBySource(unittest.TestCase):
    def setUp(self) -> None:
        self.records = [
            _record("1", source="Rally", status="Open", severity="Critical", priority="P1", defect_type="UI", lob="Retail"),
            _record("2", source="Rally", status="Resolved", severity="Low", priority="P4", defect_type="UI", lob=None),
            _record("3", source="Jira", status="In Progress", severity="High", priority="P2", defect_type=None),
            _record("4", source=None, status="Closed", severity="Blocker", priority="Urgent"),
        ]

    def test_groups_by_exact_source(self) -> None:
        metrics = metrics_by_source(self.records)

        self.assertEqual(list(metrics.per_source), ["Jira", "Rally", "Unknown"])

    def test_raw_counts(self) -> None:
        rally = metrics_by_source(self.records).per_source["Rally"]

        self.assertEqual(rally.total, 2)
        self.assertEqual(rally.open, 1)
        self.assertEqual(rally.resolved, 1)
        self.assertEqual(rally.in_progress, 0)
        self.assertEqual(rally.critical, 1)
        self.assertEqual(rally.low, 1)
        self.assertEqual(rally.p1, 1)
        self.assertEqual(rally.p4, 1)
        self.assertEqual(rally.defect_types, {"UI": 2})
        self.assertEqual(rally.lobs, {"Retail": 1, "Unknown": 1})

    def test_unrecognized_values_count_only_toward_total(self) -> None:
        unknown = metrics_by_source(self.records).per_source["Unknown"]

        self.assertEqual(unknown.total, 1)
        self.assertEqual(unknown.open + unknown.in_progress + unknown.resolved, 0)
        self.assertEqual(unknown.critical + unknown.high + unknown.medium + unknown.low, 0)

    def test_empty_input(self) -> None:
        self.assertEqual(metrics_by_source([]).per_source, {})

    def test_resolution_rate(self) -> None:
        self.assertEqual(resolution_rate(SourceMetricsEntry(total=3, resolved=1)), 33.3)
        self.assertEqual(resolution_rate(SourceMetricsEntry()), 0.0)


if __name__ == "__main__":
    unittest.main()
