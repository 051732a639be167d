"""
app/api/routers/dashboard_router.py

Dashboard and parse HTTP endpoints.

POST /dashboard   upload a delimited export, receive every chart view
POST /parse       upload a delimited export, receive parse statistics only
GET  /sources     configured source tokens offered as filter choices
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, UploadFile, status

from app.api.dependencies import build_filter_criteria, get_csv_upload, read_upload_bytes
from app.domain.failure_record import FilterCriteria, ParseResult
from app.schemas.dashboard import DashboardResponse, ParseSummaryResponse, RowValidationErrorResponse
from app.services.dashboard_service import DashboardService, get_dashboard_service
from app.services.record_parser_service import ParseError, RecordParserService, get_record_parser_service

router = APIRouter(tags=["dashboard"])


def _parse_upload(file: UploadFile, parser: RecordParserService) -> ParseResult:
    try:
        return parser.parse_bytes(read_upload_bytes(file))
    except ParseError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=exc.to_dict(),
        ) from exc


def _parse_summary(result: ParseResult) -> ParseSummaryResponse:
    return ParseSummaryResponse(
        rows_parsed=result.rows_parsed,
        rows_skipped=result.rows_skipped,
        dates_unparseable=result.dates_unparseable,
        header_row_number=result.header_row_number,
        validation_errors=[
            RowValidationErrorResponse(
                row_number=error.row_number,
                code=error.code,
                column=error.column,
                message=error.message,
                value=error.value,
            )
            for error in result.validation_errors
        ],
    )


@router.post("/dashboard", response_model=DashboardResponse)
def build_dashboard(
    file: UploadFile = Depends(get_csv_upload),
    criteria: FilterCriteria = Depends(build_filter_criteria),
    window_days: int | None = Query(default=None, ge=0, le=3650, description="Trend window in days."),
    recent_limit: int | None = Query(default=None, ge=1, le=1000, description="Recent failures to list."),
    today: date | None = Query(default=None, description="Trend anchor date; defaults to the current UTC date."),
    parser: RecordParserService = Depends(get_record_parser_service),
    dashboard_service: DashboardService = Depends(get_dashboard_service),
) -> DashboardResponse:
    """
    Parse one uploaded export and build every dashboard view from it.
    """

    result = _parse_upload(file, parser)
    view_model = dashboard_service.build(
        result.records,
        criteria,
        today=today,
        window_days=window_days,
        recent_limit=recent_limit,
    )
    return DashboardResponse(parse=_parse_summary(result), dashboard=view_model)


@router.post("/parse", response_model=ParseSummaryResponse)
def parse_upload(
    file: UploadFile = Depends(get_csv_upload),
    parser: RecordParserService = Depends(get_record_parser_service),
) -> ParseSummaryResponse:
    """
    Parse one uploaded export and report row-level data-quality issues.
    """

    return _parse_summary(_parse_upload(file, parser))


@router.get("/sources")
def list_sources(
    dashboard_service: DashboardService = Depends(get_dashboard_service),
) -> dict[str, list[str]]:
    return {"sources": list(dashboard_service.settings.default_sources)}
