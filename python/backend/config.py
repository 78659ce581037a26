"""Tunable game settings."""

from __future__ import annotations

from dataclasses import dataclass

from backend.engine.gamegenerator import DEFAULT_OPTION_COUNT

# Seconds the correct/incorrect feedback stays up before the next question.
DEFAULT_ADVANCE_DELAY = 1.5


@dataclass(frozen=True)
class GameConfig:
    option_count: int = DEFAULT_OPTION_COUNT
    advance_delay: float = DEFAULT_ADVANCE_DELAY

    def __post_init__(self) -> None:
        if self.option_count < 2:
            raise ValueError(
                f"option_count must be at least 2, got {self.option_count}."
            )
        if self.advance_delay < 0:
            raise ValueError(
                f"advance_delay cannot be negative, got {self.advance_delay}."
            )
