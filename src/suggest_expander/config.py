"""Runtime settings read from the environment."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class TemporalPolicy(str, Enum):
    CURRENT = "current"  # current month + current year
    FULL = "full"  # every month + previous/current/next year


DEFAULT_TEMPORAL_POLICY = TemporalPolicy.CURRENT

SUGGEST_URL = "https://suggestqueries.google.com/complete/search"
DEFAULT_CLIENT = "chrome"
DEFAULT_TIMEOUT = 8.0
DEFAULT_MAX_WORKERS = 8
LOG_KEY_PREFIX = "search_log:"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("invalid %s=%r, using %s", name, raw, default)
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("invalid %s=%r, using %s", name, raw, default)
        return default
    return value if value > 0 else default


def _env_policy(name: str, default: TemporalPolicy) -> TemporalPolicy:
    raw = (os.getenv(name) or "").strip().lower()
    if not raw:
        return default
    try:
        return TemporalPolicy(raw)
    except ValueError:
        logger.warning("invalid %s=%r, using %s", name, raw, default.value)
        return default


@dataclass(frozen=True)
class Settings:
    client: str = DEFAULT_CLIENT
    timeout: float = DEFAULT_TIMEOUT
    max_workers: int = DEFAULT_MAX_WORKERS
    temporal_policy: TemporalPolicy = DEFAULT_TEMPORAL_POLICY
    log_dir: Optional[Path] = None
    export_password: Optional[str] = None
    log_file: Optional[Path] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        log_dir = os.getenv("SEARCH_LOG_DIR")
        log_file = os.getenv("SUGGEST_LOG_FILE")
        return cls(
            client=(os.getenv("SUGGEST_CLIENT") or DEFAULT_CLIENT).strip().lower(),
            timeout=_env_float("SUGGEST_TIMEOUT", DEFAULT_TIMEOUT),
            max_workers=_env_int("SUGGEST_MAX_WORKERS", DEFAULT_MAX_WORKERS),
            temporal_policy=_env_policy("SUGGEST_TEMPORAL_POLICY", DEFAULT_TEMPORAL_POLICY),
            log_dir=Path(log_dir) if log_dir else None,
            export_password=os.getenv("EXPORT_PASSWORD") or None,
            log_file=Path(log_file) if log_file else None,
            log_level=(os.getenv("SUGGEST_LOG_LEVEL") or "INFO").upper(),
        )
