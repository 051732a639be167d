"""
app/services/dashboard_service.py

Dashboard orchestration: filter once, then run every aggregator.

Pipeline
--------
    raw text -> RecordParserService -> records
    records  -> filter_records(criteria)  -> filtered tuple
    filtered -> trend / categorical / summary / source metrics / recency
             -> DashboardViewModel

Aggregators share no state and each receives the same immutable tuple, so
the order in which they run does not affect the result. Nothing is cached;
every call recomputes from the records it is given.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from functools import lru_cache
from typing import Mapping, Sequence

from analytics.categorical import (
    defect_type_distribution,
    lob_distribution,
    priority_by_source,
    priority_distribution,
    severity_by_source,
    severity_distribution,
    source_distribution,
    status_distribution,
)
from analytics.filtering import filter_records
from analytics.recency import recent_failures
from analytics.source_metrics import metrics_by_source
from analytics.summary import derive_percentages, headline_metrics, summarize
from analytics.trend import failure_trend, monthly_severity_trend
from app.config import DashboardSettings, get_dashboard_settings
from app.domain.failure_record import FailureRecord, FilterCriteria, ParseResult
from app.schemas.view_models import DashboardViewModel
from app.services.record_parser_service import RecordParserService, get_record_parser_service

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardBuild:
    """
    Parse statistics together with the view model built from them.
    """

    parse_result: ParseResult
    view_model: DashboardViewModel


class DashboardService:
    """
    Builds :class:`DashboardViewModel` values from failure records.
    """

    def __init__(
        self,
        *,
        settings: DashboardSettings | None = None,
        parser: RecordParserService | None = None,
    ) -> None:
        self._settings = settings or DashboardSettings()
        self._parser = parser or RecordParserService()

    @property
    def settings(self) -> DashboardSettings:
        return self._settings

    def build(
        self,
        records: Sequence[FailureRecord],
        criteria: FilterCriteria | None = None,
        *,
        today: date | None = None,
        window_days: int | None = None,
        recent_limit: int | None = None,
    ) -> DashboardViewModel:
        """
        Filter *records* by *criteria* and derive every dashboard view.

        ``today`` anchors the trend window (current UTC date when omitted).
        ``window_days`` and ``recent_limit`` override the configured defaults.
        """

        settings = self._settings
        filtered = tuple(filter_records(records, criteria))
        window = settings.trend_window_days if window_days is None else window_days
        limit = settings.recent_limit if recent_limit is None else recent_limit

        summary = summarize(filtered)
        view_model = DashboardViewModel(
            record_count=len(records),
            filtered_count=len(filtered),
            trend=failure_trend(filtered, window, today=today),
            monthly_severity_trend=monthly_severity_trend(filtered),
            defect_types=defect_type_distribution(filtered, settings.defect_type_top_n),
            status=status_distribution(filtered),
            lob=lob_distribution(filtered, settings.lob_top_n),
            severity=severity_distribution(filtered),
            priority=priority_distribution(filtered),
            sources=source_distribution(filtered, settings.source_top_n),
            severity_by_source=severity_by_source(filtered),
            priority_by_source=priority_by_source(filtered),
            summary=summary,
            summary_percentages=derive_percentages(summary),
            headline=headline_metrics(filtered),
            source_metrics=metrics_by_source(filtered),
            recent_failures=recent_failures(filtered, limit),
        )

        logger.info(
            "Dashboard built records=%d filtered=%d critical=%d resolved=%d window_days=%d",
            len(records),
            len(filtered),
            summary.critical_failures,
            summary.resolved_failures,
            window,
        )
        return view_model

    def build_from_text(
        self,
        text: str,
        criteria: FilterCriteria | None = None,
        *,
        today: date | None = None,
        window_days: int | None = None,
        recent_limit: int | None = None,
        manual_mapping: Mapping[str, str] | None = None,
    ) -> DashboardBuild:
        """
        Parse *text* and build the dashboard from the resulting records.

        Raises:
            ParseError: when no header row can be located.
        """

        parse_result = self._parser.parse_text(text, manual_mapping=manual_mapping)
        view_model = self.build(
            parse_result.records,
            criteria,
            today=today,
            window_days=window_days,
            recent_limit=recent_limit,
        )
        return DashboardBuild(parse_result=parse_result, view_model=view_model)


@lru_cache(maxsize=1)
def get_dashboard_service() -> DashboardService:
    """
    Build and cache the dashboard service with env-driven settings.
    """

    return DashboardService(
        settings=get_dashboard_settings(),
        parser=get_record_parser_service(),
    )
