"""Question, status and mode types shared by the engine and frontends."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class GameMode(StrEnum):
    IDENTIFY = "identify"
    RECALL = "recall"
    LOCATE = "locate"


class GameStatus(StrEnum):
    PLAYING = "playing"
    CORRECT = "correct"
    INCORRECT = "incorrect"
    FINISHED = "finished"


class QuestionType(StrEnum):
    REGION = "region"
    SETTLEMENT = "settlement"


class Verdict(StrEnum):
    CORRECT = "correct"
    INCORRECT = "incorrect"


@dataclass(frozen=True)
class Question:
    """A single quiz prompt.

    ``options`` is empty in locate mode.  In identify mode it holds the
    target's display name plus distractors, in shuffled order.
    """

    question_type: QuestionType
    target_id: str
    target_name: str
    options: tuple[str, ...] = ()
