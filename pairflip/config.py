"""Application configuration (environment variables, read once)."""

from __future__ import annotations
import os
from dataclasses import dataclass
from functools import lru_cache


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


@dataclass(frozen=True)
class Config:
    match_delay: float = 0.6  # seconds before a matching pair resolves
    mismatch_delay: float = 1.0  # seconds before a mismatching pair flips back
    session_max_age: float = 3600.0
    log_level: str = "INFO"
    allowed_origins: tuple[str, ...] = ("*",)
    debug: bool = False


@lru_cache
def get_config() -> Config:
    return Config(
        match_delay=_env_float("PAIRFLIP_MATCH_DELAY", 0.6),
        mismatch_delay=_env_float("PAIRFLIP_MISMATCH_DELAY", 1.0),
        session_max_age=_env_float("PAIRFLIP_SESSION_MAX_AGE", 3600.0),
        log_level=os.environ.get("PAIRFLIP_LOG_LEVEL", "INFO").upper(),
        allowed_origins=tuple(os.environ.get("ALLOWED_ORIGINS", "*").split(",")),
        debug=os.environ.get("DEBUG", "0").lower() in ("1", "true", "yes"),
    )


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
