"""
app/domain/failure_record.py

Domain models shared by the parser, the filter, and the aggregators.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Iterable

UNKNOWN_LABEL = "Unknown"

SEVERITY_LEVELS: tuple[str, ...] = ("Critical", "High", "Medium", "Low")
STATUS_LEVELS: tuple[str, ...] = ("Open", "In Progress", "Resolved")
PRIORITY_LEVELS: tuple[str, ...] = ("P1", "P2", "P3", "P4")


@dataclass(frozen=True)
class FailureRecord:
    """
    One normalized defect or incident observation.

    Categorical fields hold the canonical label when the raw value was
    recognized, the literal raw value when it was not, and ``None`` when the
    cell was empty. ``date`` is ``None`` when the raw value could not be parsed.
    """

    id: str
    title: str = ""
    description: str = ""
    date: datetime | None = None
    resolved_date: datetime | None = None
    severity: str | None = None
    status: str | None = None
    priority: str | None = None
    source: str | None = None
    defect_type: str | None = None
    lob: str | None = None

    @property
    def is_resolved(self) -> bool:
        return (self.status or "").strip().lower() == "resolved"

    @property
    def is_critical(self) -> bool:
        return (self.severity or "").strip().lower() == "critical"


@dataclass(frozen=True)
class FilterCriteria:
    """
    Active source and date selection applied before aggregation.

    ``sources`` holds lower-cased substrings; an empty set matches every
    record. ``start`` and ``end`` bound the creation date inclusively.
    """

    sources: frozenset[str] = frozenset()
    start: date | None = None
    end: date | None = None

    def __post_init__(self) -> None:
        normalized = frozenset(
            token.strip().lower() for token in self.sources if token and token.strip()
        )
        object.__setattr__(self, "sources", normalized)

    @property
    def has_date_filter(self) -> bool:
        return self.start is not None or self.end is not None

    @classmethod
    def last_days(
        cls,
        days: int,
        *,
        sources: Iterable[str] = (),
        today: date | None = None,
    ) -> "FilterCriteria":
        """
        Build criteria covering the last *days* calendar days up to *today*.
        """

        end = today or datetime.now(tz=timezone.utc).date()
        return cls(
            sources=frozenset(sources),
            start=end - timedelta(days=max(0, days)),
            end=end,
        )


@dataclass(frozen=True)
class RowValidationError:
    """
    One per-row data-quality issue absorbed during parsing.
    """

    row_number: int
    code: str
    message: str
    column: str | None = None
    value: str | None = None


@dataclass(frozen=True)
class ParseResult:
    """
    End-of-run parse summary together with the parsed records.
    """

    records: tuple[FailureRecord, ...]
    rows_skipped: int = 0
    dates_unparseable: int = 0
    header_row_number: int = 1
    validation_errors: list[RowValidationError] = field(default_factory=list)

    @property
    def rows_parsed(self) -> int:
        return len(self.records)
