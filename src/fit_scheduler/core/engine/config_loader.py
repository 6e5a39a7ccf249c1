"""
YAML → runtime settings loader.

Reads optional user overrides from ~/.fit-scheduler/config.yaml (the
directory can be moved with FIT_SCHEDULER_HOME) and merges them over the
Python defaults from config.py.

Usage:
    from fit_scheduler.core.engine.config_loader import load_settings
    settings = load_settings()
    weeks = settings.recent_weeks

If the user file exists but cannot be parsed, a warning is emitted and the
defaults are used.
"""

from __future__ import annotations

import os
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from ..config import (
    DEFAULT_RECENT_WEEKS,
    REMOTE_MAX_TOKENS,
    REMOTE_MODEL,
    REMOTE_TEMPERATURE,
    REMOTE_TIMEOUT_SECONDS,
)

HOME_ENV_VAR = "FIT_SCHEDULER_HOME"

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML mapping; warn and return {} if it cannot be read."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(f"fit-scheduler: ignoring {path} ({exc})", stacklevel=2)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        warnings.warn(f"fit-scheduler: ignoring {path} (not a mapping)", stacklevel=2)
        return {}
    return data


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = deep_merge(result[k], v)
        else:
            result[k] = v
    return result


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Settings:
    """Effective runtime settings."""

    recent_weeks: int = DEFAULT_RECENT_WEEKS
    remote_model: str = REMOTE_MODEL
    remote_temperature: float = REMOTE_TEMPERATURE
    remote_max_tokens: int = REMOTE_MAX_TOKENS
    remote_timeout_seconds: float = REMOTE_TIMEOUT_SECONDS


def get_app_home() -> Path:
    """Return the data/config directory (FIT_SCHEDULER_HOME or ~/.fit-scheduler)."""
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".fit-scheduler"


def get_user_config_path() -> Path | None:
    """Return the user config.yaml if it exists, else None."""
    p = get_app_home() / "config.yaml"
    return p if p.exists() else None


def settings_from_dict(data: dict[str, Any]) -> Settings:
    """
    Build Settings from a parsed config mapping.

    Unknown keys are ignored; values of the wrong type fall back to the
    default with a warning.
    """
    defaults = Settings()
    analysis = data.get("analysis") or {}
    remote = data.get("remote") or {}

    def _get(section: dict, key: str, cast, default):
        if key not in section:
            return default
        try:
            return cast(section[key])
        except (TypeError, ValueError):
            warnings.warn(
                f"fit-scheduler: invalid value for {key!r}: {section[key]!r}; using {default!r}",
                stacklevel=3,
            )
            return default

    recent_weeks = _get(analysis, "recent_weeks", int, defaults.recent_weeks)
    if recent_weeks < 1:
        warnings.warn(
            f"fit-scheduler: recent_weeks must be >= 1, got {recent_weeks}; "
            f"using {defaults.recent_weeks}",
            stacklevel=2,
        )
        recent_weeks = defaults.recent_weeks

    return Settings(
        recent_weeks=recent_weeks,
        remote_model=_get(remote, "model", str, defaults.remote_model),
        remote_temperature=_get(remote, "temperature", float, defaults.remote_temperature),
        remote_max_tokens=_get(remote, "max_tokens", int, defaults.remote_max_tokens),
        remote_timeout_seconds=_get(
            remote, "timeout_seconds", float, defaults.remote_timeout_seconds
        ),
    )


def load_settings(path: Path | None = None) -> Settings:
    """
    Load settings, merging the user YAML file over defaults.

    Args:
        path: Explicit config file (default: ~/.fit-scheduler/config.yaml)

    Returns:
        Settings; defaults when no file is present.
    """
    config_path = path if path is not None else get_user_config_path()
    if config_path is None or not config_path.exists():
        return Settings()
    return settings_from_dict(load_yaml_file(config_path))
