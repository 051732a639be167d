"""
app/services/export_service.py

Re-serializes a filtered failure record set for download.

Every record becomes one flat row with a fixed column order; dates are
rendered as UTC ISO-8601 strings and missing values as ``None`` (written
as empty CSV cells).
"""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from functools import lru_cache
from typing import Any, Iterable, Sequence

from analytics.filtering import filter_records
from app.domain.failure_record import FailureRecord, FilterCriteria

logger = logging.getLogger(__name__)

EXPORT_FIELDS: tuple[str, ...] = (
    "id",
    "title",
    "description",
    "date",
    "resolved_date",
    "severity",
    "status",
    "priority",
    "source",
    "defect_type",
    "lob",
)


@dataclass
class ExportResult:
    """
    Flat tabular data ready for CSV or JSON serialisation.

    Attributes
    ----------
    rows:   Flat dict per record; all values are strings or None.
    fields: Ordered column names, identical for every export.
    """

    rows: list[dict[str, Any]] = field(default_factory=list)
    fields: list[str] = field(default_factory=lambda: list(EXPORT_FIELDS))


def _iso(dt: datetime | None) -> str | None:
    """Return UTC ISO-8601 string or None."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat()


def export_filename(start: date | None, end: date | None, *, extension: str = "csv") -> str:
    """
    Return ``failure-data-<start>-to-<end>.<extension>``.

    Open bounds are written as ``all``.
    """

    start_label = start.isoformat() if start is not None else "all"
    end_label = end.isoformat() if end is not None else "all"
    return f"failure-data-{start_label}-to-{end_label}.{extension}"


class ExportService:
    """
    Flattens failure records; read-only and stateless.
    """

    def export(
        self,
        records: Iterable[FailureRecord],
        criteria: FilterCriteria | None = None,
    ) -> ExportResult:
        """
        Filter *records* by *criteria* and flatten the survivors in input order.
        """

        rows = [self._flatten_record(record) for record in filter_records(records, criteria)]
        logger.info("Failure export rows=%d", len(rows))
        return ExportResult(rows=rows)

    @staticmethod
    def _flatten_record(record: FailureRecord) -> dict[str, Any]:
        return {
            "id": record.id,
            "title": record.title,
            "description": record.description,
            "date": _iso(record.date),
            "resolved_date": _iso(record.resolved_date),
            "severity": record.severity,
            "status": record.status,
            "priority": record.priority,
            "source": record.source,
            "defect_type": record.defect_type,
            "lob": record.lob,
        }

    @staticmethod
    def to_csv(result: ExportResult, *, fields: Sequence[str] | None = None) -> str:
        """
        Render *result* as CSV text with a header row; None becomes an empty cell.
        """

        buf = io.StringIO()
        writer = csv.DictWriter(
            buf,
            fieldnames=list(fields or result.fields),
            extrasaction="ignore",
            restval="",
            lineterminator="\r\n",
        )
        writer.writeheader()
        for row in result.rows:
            writer.writerow({key: ("" if value is None else value) for key, value in row.items()})
        return buf.getvalue()


@lru_cache(maxsize=1)
def get_export_service() -> ExportService:
    return ExportService()
