"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local secrets and env overrides (gitignored)
  4. Environment variables        — ``PROVIDER_RANKER_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The store factory, the watcher and every CLI command receive an
``AppConfig`` instance — never raw dicts or individual env var lookups.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_POLL_INTERVAL_MS = 5000
DEFAULT_STORE_KEY = "providers"

# ── Sub-config models ─────────────────────────────────────────────────────────


class StoreConfig(BaseModel):
    """Key-value store holding the serialized provider set."""

    model_config = ConfigDict(frozen=True)

    backend: Literal["json", "sqlite"] = "json"
    path: str = "data/store/providers.json"
    key: str = DEFAULT_STORE_KEY
    busy_timeout_ms: int = 5000

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Store key must be a non-empty string.")
        return v


class WatcherConfig(BaseModel):
    """Change-detection polling settings."""

    model_config = ConfigDict(frozen=True)

    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS
    refresh_on_start: bool = True

    @field_validator("poll_interval_ms")
    @classmethod
    def validate_interval(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"poll_interval_ms must be positive, got {v}.")
        return v


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration — the single source of truth."""

    model_config = ConfigDict(frozen=True)

    store: StoreConfig = StoreConfig()
    watcher: WatcherConfig = WatcherConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the specified ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    # 3. Apply PROVIDER_RANKER_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply PROVIDER_RANKER_* env vars to the raw config dict.

    Supported overrides:
      PROVIDER_RANKER_STORE_PATH        → raw["store"]["path"]
      PROVIDER_RANKER_STORE_BACKEND     → raw["store"]["backend"]
      PROVIDER_RANKER_POLL_INTERVAL_MS  → raw["watcher"]["poll_interval_ms"]
      PROVIDER_RANKER_LOG_LEVEL         → raw["logging"]["level"]
      PROVIDER_RANKER_DEBUG             → raw["debug"]
    """
    if store_path := os.environ.get("PROVIDER_RANKER_STORE_PATH"):
        raw.setdefault("store", {})["path"] = store_path

    if backend := os.environ.get("PROVIDER_RANKER_STORE_BACKEND"):
        raw.setdefault("store", {})["backend"] = backend

    if interval := os.environ.get("PROVIDER_RANKER_POLL_INTERVAL_MS"):
        raw.setdefault("watcher", {})["poll_interval_ms"] = int(interval)

    if log_level := os.environ.get("PROVIDER_RANKER_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("PROVIDER_RANKER_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    return AppConfig(
        store=StoreConfig(**raw.get("store", {})),
        watcher=WatcherConfig(**raw.get("watcher", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
