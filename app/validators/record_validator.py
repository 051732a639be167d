"""
app/validators/record_validator.py

Row-level type coercion for failure records.

Every mapped row produces a record. Data-quality problems (unparseable
dates, a resolution date earlier than the creation date) are reported as
:class:`RowValidationError` entries while the record itself is kept with
the offending field cleared.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Mapping

from app.domain.failure_record import FailureRecord, RowValidationError

TIMESTAMP_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d %H:%M:%S",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
)

_SEVERITY_ALIASES: dict[str, str] = {
    "critical": "Critical",
    "high": "High",
    "medium": "Medium",
    "med": "Medium",
    "moderate": "Medium",
    "low": "Low",
}

_STATUS_ALIASES: dict[str, str] = {
    "open": "Open",
    "inprogress": "In Progress",
    "resolved": "Resolved",
}

_PRIORITY_PATTERN = re.compile(r"^(?:p|priority)?([1-4])$")

# ServiceNow-style levels such as "1 - Critical" or "3 - Moderate".
_RANKED_LEVEL_PATTERN = re.compile(r"^([1-4])\s*-\s*(\S.*)$")


def parse_timestamp(value: Any) -> datetime | None:
    """
    Parse a raw cell into a UTC-aware datetime, or ``None`` when it cannot be read.
    """

    if _is_blank(value):
        return None

    raw = str(value).strip()
    normalized = raw[:-1] + "+00:00" if raw.endswith("Z") else raw
    try:
        parsed = datetime.fromisoformat(normalized)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        pass

    for fmt in TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(raw, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue
    return None


def canonical_severity(value: Any) -> str | None:
    if _is_blank(value):
        return None
    raw = str(value).strip()
    canonical = _SEVERITY_ALIASES.get(raw.lower())
    if canonical is None:
        ranked = _RANKED_LEVEL_PATTERN.match(raw)
        if ranked:
            canonical = _SEVERITY_ALIASES.get(ranked.group(2).strip().lower())
    return canonical or raw


def canonical_status(value: Any) -> str | None:
    if _is_blank(value):
        return None
    raw = str(value).strip()
    key = "".join(ch for ch in raw.lower() if ch.isalnum())
    return _STATUS_ALIASES.get(key, raw)


def canonical_priority(value: Any) -> str | None:
    if _is_blank(value):
        return None
    raw = str(value).strip()
    key = "".join(ch for ch in raw.lower() if ch.isalnum())
    match = _PRIORITY_PATTERN.match(key) or _RANKED_LEVEL_PATTERN.match(raw)
    if match:
        return f"P{match.group(1)}"
    return raw


class RecordValidator:
    """
    Coerces canonical mapped rows into :class:`FailureRecord` values.
    """

    def is_completely_empty_row(self, row: Mapping[str, Any] | list[str]) -> bool:
        """
        Return True when all values in the row are empty or whitespace.
        """

        values = row.values() if isinstance(row, Mapping) else row
        return all(_is_blank(value) for value in values)

    def build_record(
        self,
        *,
        mapped_row: Mapping[str, str | None],
        row_number: int,
        ordinal: int,
    ) -> tuple[FailureRecord, list[RowValidationError]]:
        """
        Build one record from a canonical mapped row.

        *row_number* locates the row in the source text for error reports;
        *ordinal* is the 1-based data-row position used to fill a missing id.
        """

        errors: list[RowValidationError] = []

        created = self._parse_date_field(
            mapped_row=mapped_row,
            column="date",
            code="date_unparseable",
            row_number=row_number,
            errors=errors,
        )
        resolved = self._parse_date_field(
            mapped_row=mapped_row,
            column="resolved_date",
            code="resolved_date_unparseable",
            row_number=row_number,
            errors=errors,
        )
        if created is not None and resolved is not None and resolved < created:
            errors.append(
                RowValidationError(
                    row_number=row_number,
                    code="resolved_before_created",
                    column="resolved_date",
                    message="Resolution date precedes creation date; resolution date dropped.",
                    value=_stringify(mapped_row.get("resolved_date")),
                )
            )
            resolved = None

        record_id = _optional_string(mapped_row.get("id")) or f"ROW-{ordinal}"

        record = FailureRecord(
            id=record_id,
            title=_optional_string(mapped_row.get("title")) or "",
            description=_optional_string(mapped_row.get("description")) or "",
            date=created,
            resolved_date=resolved,
            severity=canonical_severity(mapped_row.get("severity")),
            status=canonical_status(mapped_row.get("status")),
            priority=canonical_priority(mapped_row.get("priority")),
            source=_optional_string(mapped_row.get("source")),
            defect_type=_optional_string(mapped_row.get("defect_type")),
            lob=_optional_string(mapped_row.get("lob")),
        )
        return record, errors

    @staticmethod
    def _parse_date_field(
        *,
        mapped_row: Mapping[str, str | None],
        column: str,
        code: str,
        row_number: int,
        errors: list[RowValidationError],
    ) -> datetime | None:
        raw = mapped_row.get(column)
        if _is_blank(raw):
            return None

        parsed = parse_timestamp(raw)
        if parsed is None:
            errors.append(
                RowValidationError(
                    row_number=row_number,
                    code=code,
                    column=column,
                    message="Invalid date/time format.",
                    value=_stringify(raw),
                )
            )
        return parsed


def _optional_string(value: Any) -> str | None:
    if _is_blank(value):
        return None
    return str(value).strip()


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    return str(value).strip() == ""


def _stringify(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)
