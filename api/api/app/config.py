from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from api.app.data.generator import DEFAULT_LOOKBACK_YEARS

logger = logging.getLogger(__name__)

SEED_ENV = "DASHBOARD_SEED"
LOOKBACK_ENV = "DASHBOARD_LOOKBACK_YEARS"
CACHE_TTL_ENV = "DASHBOARD_CACHE_TTL_SECONDS"
CORS_ENV = "API_CORS_ORIGINS"

DEFAULT_CACHE_TTL_SECONDS = 300


@dataclass
class ServerSettings:
    seed: Optional[int]
    lookback_years: int
    cache_ttl_seconds: int
    cors_origins: str


def _int_env(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r (not an integer); using %s", name, raw, default)
        return default


def get_server_settings() -> ServerSettings:
    """Load server settings from environment variables, falling back to defaults."""

    lookback = _int_env(LOOKBACK_ENV, DEFAULT_LOOKBACK_YEARS)
    if lookback is None or lookback <= 0:
        logger.warning("%s must be positive; using %s", LOOKBACK_ENV, DEFAULT_LOOKBACK_YEARS)
        lookback = DEFAULT_LOOKBACK_YEARS

    cache_ttl = _int_env(CACHE_TTL_ENV, DEFAULT_CACHE_TTL_SECONDS)
    if cache_ttl is None or cache_ttl < 0:
        logger.warning("%s must not be negative; using %s", CACHE_TTL_ENV, DEFAULT_CACHE_TTL_SECONDS)
        cache_ttl = DEFAULT_CACHE_TTL_SECONDS

    return ServerSettings(
        seed=_int_env(SEED_ENV, None),
        lookback_years=lookback,
        cache_ttl_seconds=cache_ttl,
        cors_origins=os.getenv(CORS_ENV, "*"),
    )


__all__ = ["ServerSettings", "get_server_settings"]
