import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from settlement import DEFAULT_TOLERANCE, DEFAULT_ZERO_EPSILON

load_dotenv()

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _read_float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{key} must be a number, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{key} must not be negative, got {raw!r}")
    return value


@dataclass
class Settings:
    tolerance: float = DEFAULT_TOLERANCE  # validate_settlement threshold
    zero_epsilon: float = DEFAULT_ZERO_EPSILON  # below this a balance counts as settled
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Read settings from the environment (``.env`` already loaded)."""
        env = os.environ if env is None else env
        log_level = env.get("SETTLEMENT_LOG_LEVEL", "WARNING").strip().upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(f"Unknown SETTLEMENT_LOG_LEVEL: {log_level!r}")
        return cls(
            tolerance=_read_float(env, "SETTLEMENT_TOLERANCE", DEFAULT_TOLERANCE),
            zero_epsilon=_read_float(
                env, "SETTLEMENT_ZERO_EPSILON", DEFAULT_ZERO_EPSILON
            ),
            log_level=log_level,
        )

    def configure_logging(self, level: Optional[str] = None) -> None:
        logging.basicConfig(
            level=getattr(logging, (level or self.log_level).upper()),
            format="%(levelname)s %(name)s: %(message)s",
        )
