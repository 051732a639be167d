"""
app/domain package marker.
"""

from app.domain.failure_record import (
    PRIORITY_LEVELS,
    SEVERITY_LEVELS,
    STATUS_LEVELS,
    UNKNOWN_LABEL,
    FailureRecord,
    FilterCriteria,
    ParseResult,
    RowValidationError,
)

__all__ = [
    "FailureRecord",
    "FilterCriteria",
    "ParseResult",
    "PRIORITY_LEVELS",
    "RowValidationError",
    "SEVERITY_LEVELS",
    "STATUS_LEVELS",
    "UNKNOWN_LABEL",
]
