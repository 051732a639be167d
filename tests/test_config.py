"""
tests/test_config.py

Pytest unit tests for env-driven settings.
"""

from __future__ import annotations

import pytest

from app.config import DEFAULT_SOURCES, get_dashboard_settings, get_parser_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_dashboard_settings.cache_clear()
    get_parser_settings.cache_clear()
    yield
    get_dashboard_settings.cache_clear()
    get_parser_settings.cache_clear()


class TestDashboardSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("DASHBOARD_DEFAULT_SOURCES", "DASHBOARD_TREND_WINDOW_DAYS", "DASHBOARD_RECENT_LIMIT"):
            monkeypatch.delenv(name, raising=False)

        settings = get_dashboard_settings()

        assert settings.default_sources == DEFAULT_SOURCES
        assert settings.trend_window_days == 30
        assert settings.recent_limit == 10

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DASHBOARD_DEFAULT_SOURCES", "Rally, Bugzilla")
        monkeypatch.setenv("DASHBOARD_TREND_WINDOW_DAYS", "14")
        monkeypatch.setenv("DASHBOARD_LOB_TOP_N", "0")

        settings = get_dashboard_settings()

        assert settings.default_sources == ("rally", "bugzilla")
        assert settings.trend_window_days == 14
        assert settings.lob_top_n == 1

    def test_invalid_number_falls_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DASHBOARD_RECENT_LIMIT", "many")

        assert get_dashboard_settings().recent_limit == 10


class TestParserSettings:
    def test_tab_delimiter_keyword(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PARSER_DELIMITER", "tab")

        assert get_parser_settings().delimiter == "\t"

    def test_threshold_is_clamped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PARSER_FUZZY_THRESHOLD", "1.7")
        monkeypatch.setenv("PARSER_LOG_VALIDATION_ERRORS", "off")

        settings = get_parser_settings()

        assert settings.fuzzy_threshold == 1.0
        assert settings.log_validation_errors is False
