"""
tests/test_view_builder.py

Pytest unit tests for colors and view-model assembly.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from analytics.palette import FALLBACK_PALETTE, KNOWN_COLORS, color_for
from analytics.view_builder import build_distribution, build_time_series
from app.schemas.view_models import CategoryDistribution, SeriesPayload


class TestPalette:
    def test_known_labels_use_fixed_table(self) -> None:
        assert color_for("Critical") == KNOWN_COLORS["critical"]
        assert color_for("servicenow") == KNOWN_COLORS["servicenow"]

    def test_unknown_label_is_stable(self) -> None:
        color = color_for("Payments Platform")

        assert color in FALLBACK_PALETTE
        assert color_for("Payments Platform") == color


class TestBuilders:
    def test_distribution_aligns_colors_to_labels(self) -> None:
        dist = build_distribution(["High", "Low"], {"Failures": [3, 1]})

        assert dist.colors == [color_for("High"), color_for("Low")]
        assert dist.series[0].color == color_for("Failures")

    def test_time_series_multiple_series(self) -> None:
        series = build_time_series(["2024-01", "2024-02"], {"Critical": [1, 0], "Low": [0, 2]})

        assert [item.name for item in series.series] == ["Critical", "Low"]

    def test_misaligned_series_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CategoryDistribution(
                labels=["a", "b"],
                series=[SeriesPayload(name="x", values=[1], color="#000")],
                colors=["#111", "#222"],
            )

    def test_view_models_are_frozen(self) -> None:
        payload = SeriesPayload(name="x", values=[1], color="#000")

        with pytest.raises(ValidationError):
            payload.name = "y"
