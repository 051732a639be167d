"""
analytics/view_builder.py

Assembles chart-ready view models from labels and aligned value lists.
"""

from __future__ import annotations

from typing import Mapping, Sequence

from analytics.palette import color_for, colors_for
from app.schemas.view_models import CategoryDistribution, SeriesPayload, TimeSeries


def build_series(name: str, values: Sequence[int | float], *, color: str | None = None) -> SeriesPayload:
    return SeriesPayload(name=name, values=list(values), color=color or color_for(name))


def build_time_series(
    labels: Sequence[str],
    series: Mapping[str, Sequence[int | float]],
) -> TimeSeries:
    """
    Build a :class:`TimeSeries` with one payload per ``{name: values}`` entry.
    """

    return TimeSeries(
        labels=list(labels),
        series=[build_series(name, values) for name, values in series.items()],
    )


def build_distribution(
    labels: Sequence[str],
    series: Mapping[str, Sequence[int | float]],
) -> CategoryDistribution:
    """
    Build a :class:`CategoryDistribution`; slice colors follow the labels.
    """

    return CategoryDistribution(
        labels=list(labels),
        series=[build_series(name, values) for name, values in series.items()],
        colors=colors_for(labels),
    )


def build_single_distribution(
    series_name: str,
    pairs: Sequence[tuple[str, int]],
) -> CategoryDistribution:
    labels = [label for label, _ in pairs]
    return build_distribution(labels, {series_name: [count for _, count in pairs]})
