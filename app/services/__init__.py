"""
app/services package marker.
"""

from app.services.dashboard_service import DashboardBuild, DashboardService, get_dashboard_service
from app.services.export_service import ExportResult, ExportService, export_filename, get_export_service
from app.services.record_parser_service import (
    ParseError,
    RecordParserService,
    get_record_parser_service,
)

__all__ = [
    "DashboardBuild",
    "DashboardService",
    "get_dashboard_service",
    "ExportResult",
    "ExportService",
    "export_filename",
    "get_export_service",
    "ParseError",
    "RecordParserService",
    "get_record_parser_service",
]
