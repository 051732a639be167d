"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

DEFAULT_SOURCES: tuple[str, ...] = ("rally", "jira", "servicenow")


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    project_root = Path(__file__).resolve().parents[1]
    for filename in (".env", ".env.local"):
        env_path = project_root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_csv_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """
    Read a comma-separated list of lower-cased tokens with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    tokens = tuple(token.strip().lower() for token in value.split(",") if token.strip())
    return tokens or default


@dataclass(frozen=True)
class DashboardSettings:
    """
    Aggregation defaults applied when a caller does not override them.
    """

    default_sources: tuple[str, ...] = DEFAULT_SOURCES
    trend_window_days: int = 30
    recent_limit: int = 10
    defect_type_top_n: int = 5
    lob_top_n: int = 3
    source_top_n: int = 6


@dataclass(frozen=True)
class ParserSettings:
    """
    Runtime settings for delimited-text record parsing.
    """

    header_scan_rows: int = 10
    fuzzy_threshold: float = 0.84
    max_validation_errors: int = 500
    log_validation_errors: bool = True
    delimiter: str = ","


@lru_cache(maxsize=1)
def get_dashboard_settings() -> DashboardSettings:
    """
    Return cached dashboard settings from environment variables.
    """

    return DashboardSettings(
        default_sources=_get_csv_env("DASHBOARD_DEFAULT_SOURCES", DEFAULT_SOURCES),
        trend_window_days=max(0, _get_int_env("DASHBOARD_TREND_WINDOW_DAYS", 30)),
        recent_limit=max(1, _get_int_env("DASHBOARD_RECENT_LIMIT", 10)),
        defect_type_top_n=max(1, _get_int_env("DASHBOARD_DEFECT_TYPE_TOP_N", 5)),
        lob_top_n=max(1, _get_int_env("DASHBOARD_LOB_TOP_N", 3)),
        source_top_n=max(1, _get_int_env("DASHBOARD_SOURCE_TOP_N", 6)),
    )


@lru_cache(maxsize=1)
def get_parser_settings() -> ParserSettings:
    """
    Return cached parser settings from environment variables.
    """

    delimiter = _get_str_env("PARSER_DELIMITER", ",")
    if delimiter.lower() in {"tab", "\\t"}:
        delimiter = "\t"
    return ParserSettings(
        header_scan_rows=max(1, _get_int_env("PARSER_HEADER_SCAN_ROWS", 10)),
        fuzzy_threshold=min(1.0, max(0.0, _get_float_env("PARSER_FUZZY_THRESHOLD", 0.84))),
        max_validation_errors=max(1, _get_int_env("PARSER_MAX_VALIDATION_ERRORS", 500)),
        log_validation_errors=_get_bool_env("PARSER_LOG_VALIDATION_ERRORS", True),
        delimiter=delimiter[0],
    )
