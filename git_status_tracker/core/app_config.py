"""Configuration loading for the store location and open-retry budget."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

HOME_ENV = "GIT_STATUS_TRACKER_HOME"
CONFIG_FILENAME = "config.toml"
STORE_FILENAME = "status.sqlite"
DEFAULT_OPEN_ATTEMPTS = 10
DEFAULT_RETRY_DELAY_MS = 100


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Store effective store location and retry settings."""

    config_dir: Path
    store_dir: Path
    open_attempts: int = DEFAULT_OPEN_ATTEMPTS
    retry_delay_ms: int = DEFAULT_RETRY_DELAY_MS

    @property
    def retry_delay(self) -> float:
        return self.retry_delay_ms / 1000.0


def default_config_dir() -> Path:
    override = os.environ.get(HOME_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "git-status-tracker"


def _load_toml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
        return data if isinstance(data, dict) else {}
    except (OSError, ValueError):
        return {}


def _clamp_int(value: Any, *, default: int, low: int, high: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return max(low, min(parsed, high))


def _resolve_store_dir(value: Any, config_dir: Path) -> Path:
    if not isinstance(value, str) or not value.strip():
        return config_dir
    candidate = Path(value.strip()).expanduser()
    if not candidate.is_absolute():
        candidate = config_dir / candidate
    return candidate


@lru_cache(maxsize=8)
def load(config_dir: Path | None = None) -> AppConfig:
    """Load ``config.toml`` from the config directory, falling back to defaults."""
    base = config_dir if config_dir is not None else default_config_dir()
    data = _load_toml(base / CONFIG_FILENAME)
    store = data.get("store", {})
    if not isinstance(store, dict):
        store = {}
    return AppConfig(
        config_dir=base,
        store_dir=_resolve_store_dir(store.get("directory"), base),
        open_attempts=_clamp_int(
            store.get("open_attempts"),
            default=DEFAULT_OPEN_ATTEMPTS,
            low=1,
            high=100,
        ),
        retry_delay_ms=_clamp_int(
            store.get("retry_delay_ms"),
            default=DEFAULT_RETRY_DELAY_MS,
            low=0,
            high=10_000,
        ),
    )
