"""
Task List Settings
==================
Environment-driven configuration for the server process.

Variables:
    PORT                 — Listen port (default 3000)
    HOST                 — Bind address (default 0.0.0.0, all interfaces)
    TASKLIST_LOG_LEVEL   — Logging level name (default INFO)
    TASKLIST_LOG_FILE    — Optional path for a full debug log
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
DEFAULT_LOG_LEVEL = "INFO"


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_str(env: Mapping[str, str], name: str, default: str) -> str:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip()


@dataclass(frozen=True)
class Settings:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Optional[str] = None


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from `env` (defaults to os.environ)."""
    if env is None:
        env = os.environ
    return Settings(
        host=_env_str(env, "HOST", DEFAULT_HOST),
        port=_env_int(env, "PORT", DEFAULT_PORT),
        log_level=_env_str(env, "TASKLIST_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        log_file=env.get("TASKLIST_LOG_FILE") or None,
    )
