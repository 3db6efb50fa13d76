"""
app/config.py

Application-level configuration helpers.

Library modules never read configuration; only the service layer does,
and passes values down as keyword arguments.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

_PROJECT_ROOT = Path(__file__).resolve().parents[1]


def load_env_files(root: Path | None = None) -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    project_root = root or _PROJECT_ROOT
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


@dataclass(frozen=True)
class AnalyticsSettings:
    """
    Tunables for dashboard and growth reports.
    """

    big_win_threshold: float = 500.0
    max_wins: int = 10
    template_workflow: str = "lara"
    recent_resolutions: int = 5


@dataclass(frozen=True)
class LoggingSettings:
    """
    Root logging configuration for the API process.
    """

    level: str = "INFO"


@lru_cache(maxsize=1)
def get_analytics_settings() -> AnalyticsSettings:
    """
    Return cached analytics settings from environment variables.
    """

    return AnalyticsSettings(
        big_win_threshold=max(0.0, _get_float_env("ANALYTICS_BIG_WIN_THRESHOLD", 500.0)),
        max_wins=max(0, _get_int_env("ANALYTICS_MAX_WINS", 10)),
        template_workflow=_get_str_env("ANALYTICS_TEMPLATE_WORKFLOW", "lara"),
        recent_resolutions=max(0, _get_int_env("ANALYTICS_RECENT_RESOLUTIONS", 5)),
    )


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """
    Return cached logging settings from environment variables.
    """

    return LoggingSettings(level=_get_str_env("LOG_LEVEL", "INFO").upper())
