"""
tests/test_filtering.py

Pytest unit tests for source and date-range record filtering.
"""

from __future__ import annotations

from datetime import date

import pytest

from analytics.filtering import filter_records
from app.domain.failure_record import FilterCriteria


@pytest.fixture()
def records(make_record):
    return [
        make_record(id="A", source="Rally Enterprise Workspace", date="2024-03-01T10:00:00"),
        make_record(id="B", source="Jira", date="2024-03-31T23:30:00"),
        make_record(id="C", source="ServiceNow", date="2024-04-01T00:00:00"),
        make_record(id="D", source=None, date=None),
    ]


class TestSourceFilter:
    def test_empty_sources_match_everything(self, records) -> None:
        assert [r.id for r in filter_records(records, FilterCriteria())] == ["A", "B", "C", "D"]

    def test_substring_case_insensitive(self, records) -> None:
        criteria = FilterCriteria(sources=frozenset({"RALLY"}))

        assert [r.id for r in filter_records(records, criteria)] == ["A"]

    def test_any_token_matches(self, records) -> None:
        criteria = FilterCriteria(sources=frozenset({"jira", "servicenow"}))

        assert [r.id for r in filter_records(records, criteria)] == ["B", "C"]

    def test_missing_source_fails_non_empty_filter(self, records) -> None:
        criteria = FilterCriteria(sources=frozenset({"rally", "jira", "servicenow"}))

        assert "D" not in [r.id for r in filter_records(records, criteria)]


class TestDateFilter:
    def test_end_bound_covers_whole_day(self, records) -> None:
        criteria = FilterCriteria(start=date(2024, 3, 1), end=date(2024, 3, 31))

        assert [r.id for r in filter_records(records, criteria)] == ["A", "B"]

    def test_open_start_bound(self, records) -> None:
        criteria = FilterCriteria(end=date(2024, 3, 1))

        assert [r.id for r in filter_records(records, criteria)] == ["A"]

    def test_undated_records_fail_any_date_bound(self, records) -> None:
        criteria = FilterCriteria(start=date(2000, 1, 1))

        assert "D" not in [r.id for r in filter_records(records, criteria)]

    def test_last_days_criteria(self, records) -> None:
        criteria = FilterCriteria.last_days(1, today=date(2024, 4, 1))

        assert criteria.start == date(2024, 3, 31)
        assert [r.id for r in filter_records(records, criteria)] == ["B", "C"]


class TestFilterProperties:
    def test_idempotent(self, records) -> None:
        criteria = FilterCriteria(sources=frozenset({"a"}), start=date(2024, 3, 1))
        once = filter_records(records, criteria)

        assert filter_records(once, criteria) == once

    def test_preserves_order(self, records) -> None:
        reversed_records = list(reversed(records))

        assert [r.id for r in filter_records(reversed_records)] == ["D", "C", "B", "A"]
