"""Runtime settings for the explorer, read from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass


logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://pokeapi.co/api/v2"
DEFAULT_PAGE_LIMIT = 150
DEFAULT_REQUEST_TIMEOUT = 10.0


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer, using %s", name, raw, default)
        return default
    if value < 1:
        logger.warning("Ignoring %s=%r: must be positive, using %s", name, raw, default)
        return default
    return value


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number, using %s", name, raw, default)
        return default
    if value <= 0:
        logger.warning("Ignoring %s=%r: must be positive, using %s", name, raw, default)
        return default
    return value


@dataclass(frozen=True)
class Settings:
    """Settings for one explorer process.

    ``page_limit`` is the size of the single page of entries fetched at
    start-up; filtering rescans the whole page on every change, so it is
    expected to stay small.
    """

    api_base_url: str = DEFAULT_API_BASE_URL
    page_limit: int = DEFAULT_PAGE_LIMIT
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            api_base_url=(os.getenv("EXPLORER_API_BASE_URL") or DEFAULT_API_BASE_URL).rstrip("/"),
            page_limit=_env_int("EXPLORER_PAGE_LIMIT", DEFAULT_PAGE_LIMIT),
            request_timeout=_env_float("EXPLORER_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
            log_level=(os.getenv("EXPLORER_LOG_LEVEL") or "INFO").strip().upper(),
            host=os.getenv("EXPLORER_HOST") or "127.0.0.1",
            port=_env_int("EXPLORER_PORT", 8000),
        )
