from __future__ import annotations

import csv
import io
import unittest
from datetime import date, datetime, timezone

from app.domain.failure_record import FailureRecord, FilterCriteria
from app.services.export_service import EXPORT_FIELDS, ExportService, export_filename


class TestExportService(unittest.TestCase):
    def setUp(self) -> None:
        self.service = ExportService()
        self.records = [
            FailureRecord(
                id="R-1",
                title="Login, then crash",
                date=datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc),
                severity="High",
                source="Rally",
            ),
            FailureRecord(id="J-1", title="Timeout", date=None, source="Jira"),
        ]

    def test_flattens_records_in_fixed_column_order(self) -> None:
        result = self.service.export(self.records)

        self.assertEqual(result.fields, list(EXPORT_FIELDS))
        self.assertEqual(result.rows[0]["date"], "2024-03-01T09:30:00+00:00")
        self.assertIsNone(result.rows[1]["date"])
        self.assertIsNone(result.rows[0]["status"])

    def test_applies_filter(self) -> None:
        result = self.service.export(self.records, FilterCriteria(sources=frozenset({"jira"})))

        self.assertEqual([row["id"] for row in result.rows], ["J-1"])

    def test_csv_round_trips_through_reader(self) -> None:
        text = ExportService.to_csv(self.service.export(self.records))

        rows = list(csv.DictReader(io.StringIO(text)))
        self.assertEqual(rows[0]["title"], "Login, then crash")
        self.assertEqual(rows[1]["date"], "")

    def test_filename(self) -> None:
        self.assertEqual(
            export_filename(date(2024, 3, 1), date(2024, 3, 31)),
            "failure-data-2024-03-01-to-2024-03-31.csv",
        )
        self.assertEqual(export_filename(None, None, extension="json"), "failure-data-all-to-all.json")


if __name__ == "__main__":
    unittest.main()
