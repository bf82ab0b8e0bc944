"""
Single place to:
- Load a local .env if present
- Read the server URL, timeouts and logging options from the environment
- Fail fast with a clear message when a value makes no sense

Why: the client and the controller get plain values and never touch os.environ.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_BASE_URL = "https://mastermind.darkube.app"
DEFAULT_REQUEST_TIMEOUT = 30.0
# How long shutdown waits for DELETE /game/{id} before giving up
DEFAULT_DELETE_TIMEOUT = 10.0
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_BASE_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    delete_wait_seconds: float = DEFAULT_DELETE_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Optional[str] = None


def _read_seconds(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a number of seconds, got {raw!r}.") from exc
    if value <= 0:
        raise RuntimeError(f"{name} must be greater than zero, got {raw!r}.")
    return value


def _read_log_level(name: str, default: str) -> str:
    level = (os.getenv(name) or default).strip().upper()
    # getLevelName maps known names to ints and unknown ones to "Level X"
    if not isinstance(logging.getLevelName(level), int):
        raise RuntimeError(f"{name} must be a logging level like DEBUG or INFO, got {level!r}.")
    return level


def load_settings(use_dotenv: bool = True) -> Settings:
    # dev convenience; a real shell environment always wins over .env
    if use_dotenv:
        load_dotenv()

    base_url = (os.getenv("MASTERMIND_API_URL") or DEFAULT_BASE_URL).strip().rstrip("/")

    return Settings(
        base_url=base_url,
        request_timeout=_read_seconds("MASTERMIND_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
        delete_wait_seconds=_read_seconds("MASTERMIND_DELETE_TIMEOUT", DEFAULT_DELETE_TIMEOUT),
        log_level=_read_log_level("MASTERMIND_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        log_file=os.getenv("MASTERMIND_LOG_FILE") or None,
    )
