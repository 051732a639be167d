"""
tests/test_record_validator.py

Pytest unit tests for row coercion into FailureRecord values.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from app.validators.record_validator import (
    RecordValidator,
    canonical_priority,
    canonical_severity,
    canonical_status,
    parse_timestamp,
)


@pytest.fixture()
def validator() -> RecordValidator:
    return RecordValidator()


class TestParseTimestamp:
    @pytest.mark.parametrize(
        "raw",
        ["2024-03-01", "2024/03/01", "03/01/2024", "2024-03-01T00:00:00Z", "2024-03-01 00:00:00"],
    )
    def test_accepted_formats(self, raw: str) -> None:
        assert parse_timestamp(raw) == datetime(2024, 3, 1, tzinfo=timezone.utc)

    def test_offset_is_converted_to_utc(self) -> None:
        assert parse_timestamp("2024-03-01T02:00:00+02:00") == datetime(2024, 3, 1, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        "raw",
        [
            None,
            "",
            "   ",
            "not-a-date",
            "2024-13-45",
            "0001-01-01T00:00:00+01:00",
            "9999-12-31T23:00:00-02:00",
        ],
    )
    def test_unreadable_values_return_none(self, raw: str | None) -> None:
        assert parse_timestamp(raw) is None


class TestCanonicalLabels:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("critical", "Critical"),
            (" HIGH ", "High"),
            ("med", "Medium"),
            ("1 - Critical", "Critical"),
            ("2 - High", "High"),
            ("3 - Moderate", "Medium"),
            ("4-Low", "Low"),
            ("5 - Planning", "5 - Planning"),
            ("Blocker", "Blocker"),
            ("", None),
        ],
    )
    def test_severity(self, raw: str, expected: str | None) -> None:
        assert canonical_severity(raw) == expected

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("open", "Open"), ("in progress", "In Progress"), ("In-Progress", "In Progress"), ("Closed", "Closed")],
    )
    def test_status(self, raw: str, expected: str) -> None:
        assert canonical_status(raw) == expected

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("P1", "P1"),
            ("p2", "P2"),
            ("3", "P3"),
            ("Priority 4", "P4"),
            ("1 - Critical", "P1"),
            ("2 - High", "P2"),
            ("5 - Planning", "5 - Planning"),
            ("Urgent", "Urgent"),
            (None, None),
        ],
    )
    def test_priority(self, raw: str | None, expected: str | None) -> None:
        assert canonical_priority(raw) == expected


class TestBuildRecord:
    def test_builds_normalized_record(self, validator: RecordValidator) -> None:
        record, errors = validator.build_record(
            mapped_row={
                "id": " D-1 ",
                "title": "Login fails",
                "date": "2024-03-01",
                "resolved_date": "2024-03-04",
                "severity": "critical",
                "status": "resolved",
                "priority": "1",
                "source": "Rally",
                "defect_type": "UI",
                "lob": "",
            },
            row_number=2,
            ordinal=1,
        )

        assert errors == []
        assert record.id == "D-1"
        assert record.severity == "Critical"
        assert record.status == "Resolved"
        assert record.priority == "P1"
        assert record.lob is None
        assert record.description == ""
        assert record.is_resolved and record.is_critical

    def test_unparseable_date_keeps_record(self, validator: RecordValidator) -> None:
        record, errors = validator.build_record(
            mapped_row={"id": "D-2", "date": "yesterday"},
            row_number=5,
            ordinal=3,
        )

        assert record.date is None
        assert [error.code for error in errors] == ["date_unparseable"]
        assert errors[0].row_number == 5
        assert errors[0].value == "yesterday"

    def test_resolution_before_creation_is_dropped(self, validator: RecordValidator) -> None:
        record, errors = validator.build_record(
            mapped_row={"id": "D-3", "date": "2024-03-05", "resolved_date": "2024-03-01"},
            row_number=4,
            ordinal=2,
        )

        assert record.resolved_date is None
        assert record.date == datetime(2024, 3, 5, tzinfo=timezone.utc)
        assert [error.code for error in errors] == ["resolved_before_created"]

    def test_missing_id_uses_row_ordinal(self, validator: RecordValidator) -> None:
        record, _ = validator.build_record(mapped_row={"title": "x"}, row_number=9, ordinal=7)

        assert record.id == "ROW-7"

    def test_empty_row_detection(self, validator: RecordValidator) -> None:
        assert validator.is_completely_empty_row(["", "  ", ""])
        assert validator.is_completely_empty_row({"id": None, "title": " "})
        assert not validator.is_completely_empty_row(["", "x"])
