# src/readability_bridge/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from multiprocessing import cpu_count
from pathlib import Path
from typing import Mapping, Optional

from .extractor.constants import (
    DEFAULT_MAX_CONCURRENCY,
    DEFAULT_RETRIES,
    DEFAULT_TIMEOUT_S,
    ENV_PREFIX,
)

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _env_int(env: Mapping[str, str], name: str, default: int, minimum: int = 0) -> int:
    raw = env.get(ENV_PREFIX + name)
    if raw and raw.strip().isdigit():
        return max(minimum, int(raw))
    return default


def _env_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = (env.get(ENV_PREFIX + name) or "").strip().lower()
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    return default


@dataclass
class Settings:
    """Runtime settings; READABILITY_BRIDGE_* variables override defaults."""

    timeout_s: int = DEFAULT_TIMEOUT_S
    retries: int = DEFAULT_RETRIES
    headless: bool = True
    log_level: str = "WARNING"
    script_dir: Optional[Path] = None

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        script_dir = env.get(ENV_PREFIX + "SCRIPT_DIR")
        return cls(
            timeout_s=_env_int(env, "TIMEOUT_S", DEFAULT_TIMEOUT_S, minimum=1),
            retries=_env_int(env, "RETRIES", DEFAULT_RETRIES),
            headless=_env_bool(env, "HEADLESS", True),
            log_level=(env.get(ENV_PREFIX + "LOG_LEVEL") or "WARNING").upper(),
            script_dir=Path(script_dir) if script_dir else None,
        )


def decide_concurrency(mode: str, env: Optional[Mapping[str, str]] = None) -> int:
    """Resolve page concurrency from preset mode with optional env override."""
    env = os.environ if env is None else env
    if mode == "safe":
        pages = 2
    elif mode == "aggressive":
        pages = 12
    else:
        # auto
        cpu = max(1, cpu_count())
        pages = min(DEFAULT_MAX_CONCURRENCY, max(2, cpu))

    return _env_int(env, "MAX_CONCURRENCY", pages, minimum=1)
