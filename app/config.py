"""Centralize defaults and environment lookups for the task interpreter."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict

from dotenv import load_dotenv

load_dotenv()

# ---------------------------------------------------------------------------
# Default configuration values
# ---------------------------------------------------------------------------
_DEFAULT_TASKS_PATH = "data/tasks.json"
_DEFAULT_LOGGING_ENABLED: bool = True
_DEFAULT_LOG_DIR = "logs"
_COMMAND_LOG_FILENAME = "commands.jsonl"
_DEFAULT_LOG_MAX_BYTES = 1_000_000
_DEFAULT_LOG_BACKUP_COUNT = 5
_DEFAULT_LOG_LEVEL = "WARNING"
_DEFAULT_UNDO_DEPTH = 20
_DEFAULT_SYNC_TIMEOUT = 8.0
_DEFAULT_WEB_HOST = "127.0.0.1"
_DEFAULT_WEB_PORT = 9000

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}
_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _source(env: Dict[str, str] | None) -> Dict[str, str]:
    return env if env is not None else os.environ  # type: ignore[return-value]


def _read_int(env: Dict[str, str] | None, key: str, default: int) -> int:
    raw = _source(env).get(key)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------
def get_tasks_path(env: Dict[str, str] | None = None) -> Path:
    """Return the JSON file that holds the task list.

    Args:
        env: Optional mapping used instead of ``os.environ`` to simplify testing.
    """

    override = _source(env).get("TASKS_PATH")
    return Path(override) if override else Path(_DEFAULT_TASKS_PATH)


def get_undo_depth(env: Dict[str, str] | None = None) -> int:
    """Return how many mutating commands ``undo`` can step back through."""

    return max(_read_int(env, "UNDO_DEPTH", _DEFAULT_UNDO_DEPTH), 1)


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
def is_logging_enabled(env: Dict[str, str] | None = None) -> bool:
    """Determine whether the command history log is written."""

    raw = _source(env).get("LOGGING_ENABLED")
    if raw is None:
        return _DEFAULT_LOGGING_ENABLED

    normalized = raw.strip().lower()
    if normalized in _FALSE_VALUES:
        return False
    if normalized in _TRUE_VALUES:
        return True
    return _DEFAULT_LOGGING_ENABLED


def get_log_dir(env: Dict[str, str] | None = None) -> Path:
    """Return the base directory for the command log."""

    override = _source(env).get("LOG_DIR")
    return Path(override) if override else Path(_DEFAULT_LOG_DIR)


def get_command_log_path(env: Dict[str, str] | None = None) -> Path:
    """Return the full path for the command log JSONL file."""

    return get_log_dir(env) / _COMMAND_LOG_FILENAME


def get_log_max_bytes(env: Dict[str, str] | None = None) -> int:
    """Return the maximum size in bytes before rotating log files."""

    return max(_read_int(env, "LOG_MAX_BYTES", _DEFAULT_LOG_MAX_BYTES), 0)


def get_log_backup_count(env: Dict[str, str] | None = None) -> int:
    """Return the number of rotated log files to retain."""

    return max(_read_int(env, "LOG_BACKUP_COUNT", _DEFAULT_LOG_BACKUP_COUNT), 0)


def get_log_level(env: Dict[str, str] | None = None) -> str:
    """Return the stdlib logging level name for console output."""

    raw = _source(env).get("LOG_LEVEL")
    if raw is None:
        return _DEFAULT_LOG_LEVEL
    normalized = raw.strip().upper()
    return normalized if normalized in _LOG_LEVELS else _DEFAULT_LOG_LEVEL


# ---------------------------------------------------------------------------
# Sync
# ---------------------------------------------------------------------------
def get_sync_url(env: Dict[str, str] | None = None) -> str | None:
    """Return the endpoint ``sync`` posts to, or ``None`` when sync is off."""

    raw = _source(env).get("SYNC_URL")
    return raw.strip() if raw and raw.strip() else None


def get_sync_timeout(env: Dict[str, str] | None = None) -> float:
    raw = _source(env).get("SYNC_TIMEOUT")
    if raw is None:
        return _DEFAULT_SYNC_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        return _DEFAULT_SYNC_TIMEOUT
    return value if value > 0 else _DEFAULT_SYNC_TIMEOUT


# ---------------------------------------------------------------------------
# Web API
# ---------------------------------------------------------------------------
def get_web_host(env: Dict[str, str] | None = None) -> str:
    return _source(env).get("WEB_HOST", _DEFAULT_WEB_HOST)


def get_web_port(env: Dict[str, str] | None = None) -> int:
    value = _read_int(env, "WEB_PORT", _DEFAULT_WEB_PORT)
    return value if 0 < value <= 65535 else _DEFAULT_WEB_PORT
