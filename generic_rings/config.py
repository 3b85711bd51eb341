"""
Process-wide defaults, read from the environment.

  GENERIC_RINGS_REAL_PREC   bits of precision for RealField / ComplexField (53)
  GENERIC_RINGS_PADIC_PREC  p-adic digits for PadicField / QadicField (20)
  GENERIC_RINGS_LOG_LEVEL   DEBUG / INFO / WARNING / ERROR (WARNING)

Invalid values raise; there is no silent downgrade to the default.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional, Tuple

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVELS: Tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR")


def _env_int(name: str, *, default: int) -> int:
    """Read an env var as a base-10 int, strictly."""
    raw = os.getenv(name)
    if raw is None or not str(raw).strip():
        return int(default)
    try:
        return int(str(raw).strip(), 10)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer (base-10), got {raw!r}") from e


def _env_strict_enum(name: str, *, allowed: Tuple[str, ...], default: str) -> str:
    raw = os.getenv(name)
    if raw is None or not str(raw).strip():
        return str(default)
    val = str(raw).strip().upper()
    if val not in allowed:
        raise ValueError(f"{name} must be one of {list(allowed)}, got {raw!r}")
    return val


@dataclass(frozen=True)
class RingDefaults:
    real_prec: int = 53
    padic_prec: int = 20
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if not isinstance(self.real_prec, int) or self.real_prec < 2:
            raise ValueError(f"real_prec must be int >= 2, got {self.real_prec!r}")
        if not isinstance(self.padic_prec, int) or self.padic_prec < 1:
            raise ValueError(f"padic_prec must be int >= 1, got {self.padic_prec!r}")
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {list(LOG_LEVELS)}, got {self.log_level!r}")


def load_defaults() -> RingDefaults:
    return RingDefaults(
        real_prec=_env_int("GENERIC_RINGS_REAL_PREC", default=53),
        padic_prec=_env_int("GENERIC_RINGS_PADIC_PREC", default=20),
        log_level=_env_strict_enum("GENERIC_RINGS_LOG_LEVEL", allowed=LOG_LEVELS, default="WARNING"),
    )


def configure_logging(level: Optional[str] = None) -> None:
    """Install a root handler. Only entry points call this; the library never does."""
    if level is None:
        level = load_defaults().log_level
    level = str(level).strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"log level must be one of {list(LOG_LEVELS)}, got {level!r}")
    logging.basicConfig(level=getattr(logging, level), format=LOG_FORMAT)
