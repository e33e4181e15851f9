"""Application settings, read from the environment whenever Settings is constructed without explicit values."""

import logging
import os
import random
from dataclasses import dataclass, field
from typing import Optional

DEFAULT_TOP_CANDIDATES = 3
DEFAULT_LOG_LEVEL = "INFO"


def _read_optional_int(name: str) -> Optional[int]:
    value = os.getenv(name, "").strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


def _read_int(name: str, default: int) -> int:
    value = _read_optional_int(name)
    return default if value is None else value


@dataclass
class Settings:
    """
    Knobs for the automated opponent + logging
    ----

    * top_candidates: the opponent samples uniformly among this many of its best scored moves
    * seed: fix the opponent's random choices (None --> unseeded)
    * log_level: passed on to `configure_logging()`
    """

    top_candidates: int = field(
        default_factory=lambda: _read_int(
            "SOLO_CHESS_TOP_CANDIDATES", DEFAULT_TOP_CANDIDATES
        )
    )
    seed: Optional[int] = field(
        default_factory=lambda: _read_optional_int("SOLO_CHESS_SEED")
    )
    log_level: str = field(
        default_factory=lambda: os.getenv("SOLO_CHESS_LOG_LEVEL", DEFAULT_LOG_LEVEL)
    )

    def __post_init__(self) -> None:
        if self.top_candidates < 1:
            raise ValueError(
                f"top_candidates must be at least 1, got {self.top_candidates}"
            )

    def rng(self) -> random.Random:
        """Source of randomness for the opponent. Seeded if a seed was configured."""
        return random.Random(self.seed)


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Basic logging setup for whoever drives the service (a UI, a script, ...)"""
    settings = settings or Settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
