# src/task_tracker/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing required at import time: every setting has a default.
- Local, never-committed overrides via config_local.py.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASK_TRACKER"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _normalize_prefix(prefix: str) -> str:
    prefix = prefix.strip()
    if not prefix or prefix == "/":
        return ""
    if not prefix.startswith("/"):
        prefix = f"/{prefix}"
    return prefix.rstrip("/")


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path

    # ---- HTTP ----
    host: str
    port: int
    api_prefix: str
    docs_enabled: bool

    # ---- Task rules / tuning ----
    max_title_length: int
    lock_stripes: int

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "task-tracker").strip() or "task-tracker"
        log_level = _env(_k("LOG_LEVEL"), "INFO").strip().upper() or "INFO"
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/task_tracker"))

        host = _env(_k("HOST"), "127.0.0.1").strip() or "127.0.0.1"
        port = _env_int(_k("PORT"), 8000)
        api_prefix = _normalize_prefix(_env(_k("API_PREFIX"), ""))
        docs_enabled = _env_bool(_k("DOCS_ENABLED"), True)

        max_title_length = max(1, _env_int(_k("MAX_TITLE_LENGTH"), 100))
        lock_stripes = max(1, _env_int(_k("LOCK_STRIPES"), 64))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            host=host,
            port=port,
            api_prefix=api_prefix,
            docs_enabled=docs_enabled,
            max_title_length=max_title_length,
            lock_stripes=lock_stripes,
        )


SETTINGS = Settings.from_env()

# ---- Optional local overrides (never committed) ----
# Prefer .env; use config_local.py only for safe overrides.
try:
    import config_local as _config_local  # type: ignore
except ImportError:
    _config_local = None

if _config_local is not None:
    # Simple overrides for selected names. Keep it explicit.
    for _name in ("HOST", "PORT", "DOCS_ENABLED", "LOG_LEVEL"):
        if hasattr(_config_local, _name):
            object.__setattr__(SETTINGS, _name.lower(), getattr(_config_local, _name))  # type: ignore[misc]


def get_settings() -> Settings:
    return SETTINGS
