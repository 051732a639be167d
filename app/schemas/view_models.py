"""
app/schemas/view_models.py

Chart-ready output contracts consumed by the rendering layer.

Every label/series pair is aligned by index: ``series[i].values[j]`` is the
value for ``labels[j]``. Models are frozen once constructed.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SeriesPayload(BaseModel):
    """One named numeric series aligned to its parent's labels."""

    model_config = ConfigDict(frozen=True)

    name: str
    values: list[int | float] = Field(default_factory=list)
    color: str


class TimeSeries(BaseModel):
    """Ordered date labels with one or more aligned series."""

    model_config = ConfigDict(frozen=True)

    labels: list[str] = Field(default_factory=list)
    series: list[SeriesPayload] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_alignment(self) -> "TimeSeries":
        _ensure_aligned(self.labels, self.series)
        return self


class CategoryDistribution(BaseModel):
    """
    Ordered category labels with aligned series.

    ``colors`` carries one color per label for single-series (pie/bar)
    charts; each series also carries its own color for grouped charts.
    """

    model_config = ConfigDict(frozen=True)

    labels: list[str] = Field(default_factory=list)
    series: list[SeriesPayload] = Field(default_factory=list)
    colors: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_alignment(self) -> "CategoryDistribution":
        _ensure_aligned(self.labels, self.series)
        if len(self.colors) != len(self.labels):
            raise ValueError("colors must align with labels")
        return self


class SourceMetricsEntry(BaseModel):
    """Raw per-source counts. Percentages are derived by the consumer."""

    model_config = ConfigDict(frozen=True)

    total: int = 0
    open: int = 0
    in_progress: int = 0
    resolved: int = 0
    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0
    p1: int = 0
    p2: int = 0
    p3: int = 0
    p4: int = 0
    defect_types: dict[str, int] = Field(default_factory=dict)
    lobs: dict[str, int] = Field(default_factory=dict)


class SourceMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    per_source: dict[str, SourceMetricsEntry] = Field(default_factory=dict)


class SummaryStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_failures: int = 0
    critical_failures: int = 0
    resolved_failures: int = 0
    average_resolution_days: float = 0.0


class SummaryPercentages(BaseModel):
    """Percent-of-total figures derived from :class:`SummaryStats`."""

    model_config = ConfigDict(frozen=True)

    critical_percentage: float = 0.0
    resolved_percentage: float = 0.0


class HeadlineMetrics(BaseModel):
    """Unresolved-work counters shown above the charts."""

    model_config = ConfigDict(frozen=True)

    total_defects: int = 0
    major_issues: int = 0
    servicenow_incidents: int = 0
    critical_bugs: int = 0


class RecentFailure(BaseModel):
    """Flat display projection of one record."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str
    date: str
    severity: str
    status: str
    source: str
    priority: str


class DashboardViewModel(BaseModel):
    """Every view derived from one filtered record set."""

    model_config = ConfigDict(frozen=True)

    record_count: int
    filtered_count: int
    trend: TimeSeries
    monthly_severity_trend: TimeSeries
    defect_types: CategoryDistribution
    status: CategoryDistribution
    lob: CategoryDistribution
    severity: CategoryDistribution
    priority: CategoryDistribution
    sources: CategoryDistribution
    severity_by_source: CategoryDistribution
    priority_by_source: CategoryDistribution
    summary: SummaryStats
    summary_percentages: SummaryPercentages
    headline: HeadlineMetrics
    source_metrics: SourceMetrics
    recent_failures: list[RecentFailure] = Field(default_factory=list)


def _ensure_aligned(labels: list[str], series: list[SeriesPayload]) -> None:
    for item in series:
        if len(item.values) != len(labels):
            raise ValueError(
                f"series {item.name!r} has {len(item.values)} values for {len(labels)} labels"
            )
