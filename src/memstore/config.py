from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from .core.registry.state import DEFAULT_STRIPES

ENV_MAX_WORKERS = "MEMSTORE_MAX_WORKERS"
ENV_STRIPES = "MEMSTORE_STRIPES"
ENV_BARRIER_TIMEOUT = "MEMSTORE_BARRIER_TIMEOUT"
ENV_LOG_LEVEL = "MEMSTORE_LOG_LEVEL"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _read_positive_int(env: Mapping[str, str], name: str) -> int | None:
    raw = env.get(name, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be > 0, got {value}")
    return value


def _read_timeout(env: Mapping[str, str], name: str) -> float | None:
    raw = env.get(name, "").strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number of seconds, got {raw!r}") from None
    if not value > 0:
        raise ValueError(f"{name} must be > 0, got {raw!r}")
    return value


def normalize_log_level(level: str) -> str:
    v = str(level).strip().upper()
    if v not in _LOG_LEVELS:
        raise ValueError(f"Unsupported log level {level!r}. Use one of: {', '.join(_LOG_LEVELS)}")
    return v


@dataclass(frozen=True)
class Settings:
    """Runtime knobs, normally read from ``MEMSTORE_*`` environment variables.

    Notes:
    - ``max_workers=None`` lets ``ThreadPoolExecutor`` pick its default size.
    - ``barrier_timeout=None`` waits on the producer barrier forever.
    """

    max_workers: int | None = None
    stripes: int = DEFAULT_STRIPES
    barrier_timeout: float | None = None
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if env is None else env
        stripes = _read_positive_int(env, ENV_STRIPES)
        raw_level = env.get(ENV_LOG_LEVEL, "").strip()
        return cls(
            max_workers=_read_positive_int(env, ENV_MAX_WORKERS),
            stripes=stripes if stripes is not None else DEFAULT_STRIPES,
            barrier_timeout=_read_timeout(env, ENV_BARRIER_TIMEOUT),
            log_level=normalize_log_level(raw_level) if raw_level else "WARNING",
        )
