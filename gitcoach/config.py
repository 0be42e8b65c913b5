"""Read-only JSON config helpers.

Holds UI preferences (tooltips, theme, output style) and loop timing.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "gitcoach"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_MESSAGE_LOG_SIZE = 50
DEFAULT_POLL_TIMEOUT_MS = 50
DEFAULT_IDLE_SLEEP_SECONDS = 0.02
DEFAULT_STATUS_REFRESH_SECONDS = 5.0


@dataclass(frozen=True)
class AppConfig:
    """Resolved user preferences with every field validated."""

    tooltips_enabled: bool = True
    theme: str = "default"
    output_style: str = "monokai"
    message_log_size: int = DEFAULT_MESSAGE_LOG_SIZE
    poll_timeout_ms: int = DEFAULT_POLL_TIMEOUT_MS
    idle_sleep_seconds: float = DEFAULT_IDLE_SLEEP_SECONDS
    status_refresh_seconds: float = DEFAULT_STATUS_REFRESH_SECONDS


def load_config(path: Path | None = None) -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = path if path is not None else CONFIG_PATH
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _coerce_bool(value: object, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def _coerce_positive_int(value: object, default: int) -> int:
    """Booleans and non-integers are treated as invalid."""
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return value if value >= 1 else default


def _coerce_nonnegative_float(value: object, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return float(value) if value >= 0 else default


def _coerce_name(value: object, default: str) -> str:
    if not isinstance(value, str):
        return default
    stripped = value.strip()
    return stripped if stripped else default


def load_app_config(path: Path | None = None) -> AppConfig:
    """Build an :class:`AppConfig` from the config file, field by field."""
    data = load_config(path)
    defaults = AppConfig()
    return AppConfig(
        tooltips_enabled=_coerce_bool(data.get("tooltips_enabled"), defaults.tooltips_enabled),
        theme=_coerce_name(data.get("theme"), defaults.theme),
        output_style=_coerce_name(data.get("output_style"), defaults.output_style),
        message_log_size=_coerce_positive_int(data.get("message_log_size"), defaults.message_log_size),
        poll_timeout_ms=_coerce_positive_int(data.get("poll_timeout_ms"), defaults.poll_timeout_ms),
        idle_sleep_seconds=_coerce_nonnegative_float(data.get("idle_sleep_seconds"), defaults.idle_sleep_seconds),
        status_refresh_seconds=_coerce_nonnegative_float(
            data.get("status_refresh_seconds"),
            defaults.status_refresh_seconds,
        ),
    )
