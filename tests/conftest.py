"""
tests/conftest.py

Shared fixtures for analytics tests.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable

import pytest

from app.domain.failure_record import FailureRecord


def _utc(value: str | None) -> datetime | None:
    if value is None:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@pytest.fixture()
def make_record() -> Callable[..., FailureRecord]:
    """
    Factory building FailureRecord values; dates are given as ISO strings.
    """

    counter = {"next": 0}

    def _make(
        *,
        date: str | None = None,
        resolved_date: str | None = None,
        **fields: Any,
    ) -> FailureRecord:
        counter["next"] += 1
        fields.setdefault("id", f"F-{counter['next']}")
        return FailureRecord(date=_utc(date), resolved_date=_utc(resolved_date), **fields)

    return _make
