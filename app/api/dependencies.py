"""
app/api/dependencies.py

Shared FastAPI dependencies for request validation.
"""

from __future__ import annotations

from datetime import date

from fastapi import File, HTTPException, Query, UploadFile, status

from app.domain.failure_record import FilterCriteria

CSV_CONTENT_TYPES = {
    "text/csv",
    "application/csv",
    "application/vnd.ms-excel",
}


def get_csv_upload(file: UploadFile = File(...)) -> UploadFile:
    """
    Validate that the uploaded file is a CSV by extension or MIME type.
    """

    filename = (file.filename or "").strip().lower()
    content_type = (file.content_type or "").strip().lower()

    is_csv_filename = filename.endswith(".csv")
    is_csv_content_type = content_type in CSV_CONTENT_TYPES

    if not is_csv_filename and not is_csv_content_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only CSV files are allowed.",
        )

    return file


def read_upload_bytes(file: UploadFile) -> bytes:
    """
    Read the full upload body and close the underlying file.
    """

    try:
        return file.file.read()
    finally:
        file.file.close()


def build_filter_criteria(
    sources: list[str] | None = Query(
        default=None,
        description="Source tokens; a record passes when its source contains any of them.",
    ),
    start: date | None = Query(default=None, description="Inclusive start date (YYYY-MM-DD)."),
    end: date | None = Query(default=None, description="Inclusive end date (YYYY-MM-DD)."),
) -> FilterCriteria:
    """
    Build :class:`FilterCriteria` from query parameters.
    """

    if start and end and start > end:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="start must not be later than end.",
        )
    return FilterCriteria(sources=frozenset(sources or ()), start=start, end=end)
