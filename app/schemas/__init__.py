"""
app/schemas package marker.
"""

from app.schemas.dashboard import DashboardResponse, ParseSummaryResponse, RowValidationErrorResponse
from app.schemas.view_models import (
    CategoryDistribution,
    DashboardViewModel,
    HeadlineMetrics,
    RecentFailure,
    SeriesPayload,
    SourceMetrics,
    SourceMetricsEntry,
    SummaryPercentages,
    SummaryStats,
    TimeSeries,
)

__all__ = [
    "CategoryDistribution",
    "DashboardResponse",
    "DashboardViewModel",
    "HeadlineMetrics",
    "ParseSummaryResponse",
    "RecentFailure",
    "RowValidationErrorResponse",
    "SeriesPayload",
    "SourceMetrics",
    "SourceMetricsEntry",
    "SummaryPercentages",
    "SummaryStats",
    "TimeSeries",
]
