"""
app/services/record_parser_service.py

Parses delimited tracker exports into normalized failure records.

The header row is located by scanning the leading non-blank rows for the
first one in which enough columns resolve to canonical fields. Once found,
every following row is mapped and coerced independently:

    * blank lines are ignored;
    * rows with the wrong number of cells, with only blank cells, or that
      the csv module cannot read, are skipped and recorded;
    * rows with an unparseable date are kept with ``date=None`` and recorded.

Only a missing or unrecognizable header aborts the parse.
"""

from __future__ import annotations

import csv
import io
import logging
from functools import lru_cache
from typing import Any, Iterator, Mapping, Sequence

from app.config import get_parser_settings
from app.domain.failure_record import FailureRecord, ParseResult, RowValidationError
from app.mappers.schema_mapper import MappingResolution, SchemaMapper
from app.validators.mapping_validator import MappingErrorDetail, SchemaMappingError
from app.validators.record_validator import RecordValidator

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ParseError(ValueError):
    """
    Raised when the input has no locatable header row or cannot be decoded.

    No partial result accompanies this error.
    """

    def __init__(self, message: str, *, errors: Sequence[MappingErrorDetail] = ()) -> None:
        super().__init__(message)
        self.errors = tuple(errors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": str(self),
            "errors": [error.to_dict() for error in self.errors],
        }


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class RecordParserService:
    """
    Coordinates header location, mapping, and per-row coercion.
    """

    def __init__(
        self,
        *,
        header_scan_rows: int = 10,
        max_validation_errors: int = 500,
        log_validation_errors: bool = True,
        delimiter: str = ",",
        mapper: SchemaMapper | None = None,
        validator: RecordValidator | None = None,
    ) -> None:
        self._header_scan_rows = max(1, header_scan_rows)
        self._max_validation_errors = max(1, max_validation_errors)
        self._log_validation_errors = log_validation_errors
        self._delimiter = delimiter
        self._mapper = mapper or SchemaMapper()
        self._validator = validator or RecordValidator()

    def parse_bytes(
        self,
        raw: bytes,
        *,
        manual_mapping: Mapping[str, str] | None = None,
    ) -> ParseResult:
        """
        Decode UTF-8 (with or without BOM) bytes and parse them.
        """

        try:
            text = raw.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ParseError("Input must be UTF-8 encoded.") from exc
        return self.parse_text(text, manual_mapping=manual_mapping)

    def parse_text(
        self,
        text: str,
        *,
        manual_mapping: Mapping[str, str] | None = None,
    ) -> ParseResult:
        """
        Parse delimited *text* with a header row into a :class:`ParseResult`.

        Args:
            text:           Raw delimited text, already fetched by the caller.
            manual_mapping: Optional ``{canonical_field: header}`` overrides.

        Raises:
            ParseError: when the text is empty or no header row is recognized.
        """

        if text is None or not text.strip():
            raise ParseError("Input is empty; no header row to locate.")

        reader = csv.reader(io.StringIO(text.lstrip("\ufeff"), newline=""), delimiter=self._delimiter)

        mapping: MappingResolution | None = None
        header_row_number = 0
        header_width = 0
        scanned = 0
        last_mapping_error: SchemaMappingError | None = None

        records: list[FailureRecord] = []
        captured_errors: list[RowValidationError] = []
        rows_skipped = 0
        dates_unparseable = 0
        ordinal = 0

        for row_number, row, read_error in _iter_rows(reader):
            if read_error is not None:
                if mapping is None:
                    scanned += 1
                    if scanned >= self._header_scan_rows:
                        break
                    continue
                ordinal += 1
                rows_skipped += 1
                self._record_error(
                    captured_errors,
                    RowValidationError(
                        row_number=row_number,
                        code="malformed_row",
                        message=f"Row could not be read: {read_error}",
                    ),
                )
                continue

            if _is_blank_line(row) or (mapping is None and self._validator.is_completely_empty_row(row)):
                continue

            if mapping is None:
                scanned += 1
                try:
                    mapping = self._mapper.resolve_mapping(row, manual_overrides=manual_mapping)
                except SchemaMappingError as exc:
                    last_mapping_error = exc
                    if scanned >= self._header_scan_rows:
                        break
                    continue
                header_row_number = row_number
                header_width = len(_strip_trailing_blanks(row))
                logger.debug(
                    "Header located row=%d fields=%s strategies=%s",
                    row_number,
                    mapping.canonical_to_source,
                    mapping.match_strategies,
                )
                continue

            ordinal += 1
            cells = _trim_trailing_blanks(row, header_width)

            if len(cells) != header_width:
                rows_skipped += 1
                self._record_error(
                    captured_errors,
                    RowValidationError(
                        row_number=row_number,
                        code="column_count_mismatch",
                        message=f"Expected {header_width} columns, found {len(cells)}.",
                    ),
                )
                continue

            if self._validator.is_completely_empty_row(cells):
                rows_skipped += 1
                self._record_error(
                    captured_errors,
                    RowValidationError(
                        row_number=row_number,
                        code="empty_row",
                        message="Row contains only blank cells.",
                    ),
                )
                continue

            mapped_row = self._mapper.map_row(raw_row=cells, mapping=mapping)
            record, row_errors = self._validator.build_record(
                mapped_row=mapped_row,
                row_number=row_number,
                ordinal=ordinal,
            )
            for error in row_errors:
                if error.code == "date_unparseable":
                    dates_unparseable += 1
                self._record_error(captured_errors, error)
            records.append(record)

        if mapping is None:
            errors = last_mapping_error.errors if last_mapping_error is not None else ()
            raise ParseError(
                f"No header row found in the first {self._header_scan_rows} non-blank rows.",
                errors=errors,
            )

        logger.info(
            "Parsed failure records rows_parsed=%d rows_skipped=%d dates_unparseable=%d header_row=%d",
            len(records),
            rows_skipped,
            dates_unparseable,
            header_row_number,
        )
        return ParseResult(
            records=tuple(records),
            rows_skipped=rows_skipped,
            dates_unparseable=dates_unparseable,
            header_row_number=header_row_number,
            validation_errors=captured_errors,
        )

    def _record_error(
        self,
        captured_errors: list[RowValidationError],
        error: RowValidationError,
    ) -> None:
        if self._log_validation_errors:
            logger.warning(
                "Record row issue row=%s code=%s column=%s message=%s value=%r",
                error.row_number,
                error.code,
                error.column,
                error.message,
                error.value,
            )

        if len(captured_errors) < self._max_validation_errors:
            captured_errors.append(error)


def _iter_rows(reader: Iterator[list[str]]) -> Iterator[tuple[int, list[str], str | None]]:
    """
    Yield ``(line_number, cells, read_error)`` per row.

    A row the csv module rejects (for example a cell over the field size
    limit) is yielded with empty cells and the error text so that reading
    continues with the next row.
    """

    while True:
        try:
            row = next(reader)
        except StopIteration:
            return
        except csv.Error as exc:
            yield reader.line_num, [], str(exc)
            continue
        yield reader.line_num, row, None


def _strip_trailing_blanks(row: list[str]) -> list[str]:
    end = len(row)
    while end > 0 and not row[end - 1].strip():
        end -= 1
    return row[:end]


def _is_blank_line(row: list[str]) -> bool:
    return not row or (len(row) == 1 and not row[0].strip())


def _trim_trailing_blanks(row: list[str], width: int) -> list[str]:
    """
    Drop surplus trailing cells when they are all blank (trailing delimiters).
    """

    if len(row) > width and all(not cell.strip() for cell in row[width:]):
        return row[:width]
    return row


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_record_parser_service() -> RecordParserService:
    """
    Build and cache the parser service with env-driven settings.
    """

    settings = get_parser_settings()
    return RecordParserService(
        header_scan_rows=settings.header_scan_rows,
        max_validation_errors=settings.max_validation_errors,
        log_validation_errors=settings.log_validation_errors,
        delimiter=settings.delimiter,
        mapper=SchemaMapper(fuzzy_threshold=settings.fuzzy_threshold),
    )
