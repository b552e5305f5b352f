from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from ...engine.rules import RuleSet
from ...search.selector import Difficulty


ENV_PREFIX = "CHESS_"
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Settings:
    """Service configuration.

    Attributes:
        ai_difficulty (Difficulty): Policy used when a request names none.
        ai_move_delay_ms (int): Pause before the AI answers, for pacing.
        castling_transit_check (bool): See :class:`RuleSet`.
        ai_seed (Optional[int]): Seed for the AI random source; unseeded if None.
        log_level (str): Root logging level name.
    """

    ai_difficulty: Difficulty = Difficulty.MEDIUM
    ai_move_delay_ms: int = 0
    castling_transit_check: bool = False
    ai_seed: Optional[int] = None
    log_level: str = "INFO"

    @property
    def rules(self) -> RuleSet:
        return RuleSet(castling_transit_check=self.castling_transit_check)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``CHESS_*`` variables, falling back to defaults.

        Raises:
            ValueError: If a variable holds a value of the wrong shape.
        """
        env = os.environ if environ is None else environ

        def get(name: str) -> Optional[str]:
            return env.get(ENV_PREFIX + name)

        kwargs: dict = {}
        v = get("AI_DIFFICULTY")
        if v is not None:
            kwargs["ai_difficulty"] = Difficulty(v.strip().lower())
        v = get("AI_MOVE_DELAY_MS")
        if v is not None:
            delay = int(v)
            if delay < 0:
                raise ValueError("CHESS_AI_MOVE_DELAY_MS must be >= 0")
            kwargs["ai_move_delay_ms"] = delay
        v = get("CASTLING_TRANSIT_CHECK")
        if v is not None:
            kwargs["castling_transit_check"] = _parse_bool("CASTLING_TRANSIT_CHECK", v)
        v = get("AI_SEED")
        if v is not None and v.strip():
            kwargs["ai_seed"] = int(v)
        v = get("LOG_LEVEL")
        if v is not None:
            kwargs["log_level"] = v.strip().upper()
        return cls(**kwargs)


def _parse_bool(name: str, value: str) -> bool:
    v = value.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ValueError(f"{ENV_PREFIX}{name} must be a boolean, got {value!r}")
