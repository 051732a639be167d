"""
app/schemas/dashboard.py

Response schemas for dashboard and parse endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from app.schemas.view_models import DashboardViewModel


class RowValidationErrorResponse(BaseModel):
    """
    API response model for one row-level data-quality issue.
    """

    row_number: int = Field(..., ge=1)
    code: str
    message: str
    column: str | None = None
    value: str | None = None


class ParseSummaryResponse(BaseModel):
    """
    API response model for a parse run.
    """

    rows_parsed: int = Field(..., ge=0)
    rows_skipped: int = Field(..., ge=0)
    dates_unparseable: int = Field(..., ge=0)
    header_row_number: int = Field(..., ge=1)
    validation_errors: list[RowValidationErrorResponse] = Field(default_factory=list)


class DashboardResponse(BaseModel):
    """
    API response model bundling parse statistics with the dashboard views.
    """

    parse: ParseSummaryResponse
    dashboard: DashboardViewModel
