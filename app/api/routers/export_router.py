"""
app/api/routers/export_router.py

Filtered failure record export endpoint.

POST /export

Query parameters
----------------
format  : "csv" | "json"                         (default: "csv")
sources : repeatable source token filter
start   : optional ISO date lower bound  (YYYY-MM-DD, inclusive)
end     : optional ISO date upper bound  (YYYY-MM-DD, inclusive)

Responses
---------
CSV  -> StreamingResponse, Content-Type: text/csv
        Content-Disposition: attachment; filename=failure-data-<start>-to-<end>.csv
JSON -> JSONResponse, Content-Type: application/json
        Body: {"rows": int, "fields": list[str], "data": list[dict]}

All flattening lives in ExportService; the router only handles HTTP
plumbing (serialisation, content-type, error mapping).
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, UploadFile, status
from fastapi.responses import JSONResponse, StreamingResponse

from app.api.dependencies import build_filter_criteria, get_csv_upload, read_upload_bytes
from app.domain.failure_record import FilterCriteria
from app.services.export_service import ExportResult, ExportService, export_filename, get_export_service
from app.services.record_parser_service import ParseError, RecordParserService, get_record_parser_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["export"])

_VALID_FORMATS = frozenset({"csv", "json"})


def _to_csv_streaming(result: ExportResult, filename: str) -> StreamingResponse:
    """Stream *result* as a UTF-8 CSV file download."""

    return StreamingResponse(
        content=iter([ExportService.to_csv(result)]),
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "X-Row-Count": str(len(result.rows)),
        },
    )


def _to_json_response(result: ExportResult) -> JSONResponse:
    """Return *result* as a structured JSON response."""
    return JSONResponse(
        content={
            "rows": len(result.rows),
            "fields": result.fields,
            "data": result.rows,
        }
    )


@router.post("/export", response_model=None, summary="Export filtered failure records")
def export_records(
    file: UploadFile = Depends(get_csv_upload),
    criteria: FilterCriteria = Depends(build_filter_criteria),
    output_format: str = Query(
        default="csv",
        alias="format",
        description='Output format: "csv" (file download) or "json".',
    ),
    parser: RecordParserService = Depends(get_record_parser_service),
    service: ExportService = Depends(get_export_service),
) -> StreamingResponse | JSONResponse:
    """
    Parse one uploaded export, apply the filter and return the normalized rows.
    """
    if output_format not in _VALID_FORMATS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid format {output_format!r}. Must be one of: {sorted(_VALID_FORMATS)}.",
        )

    try:
        parsed = parser.parse_bytes(read_upload_bytes(file))
    except ParseError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=exc.to_dict(),
        ) from exc

    result = service.export(parsed.records, criteria)
    logger.info(
        "Failure export format=%r sources=%s rows=%d",
        output_format,
        sorted(criteria.sources),
        len(result.rows),
    )

    if output_format == "csv":
        return _to_csv_streaming(result, export_filename(criteria.start, criteria.end))
    return _to_json_response(result)
