"""Generates quiz questions from the entity catalog."""

from __future__ import annotations

import random
from collections.abc import Collection

from backend.models.catalog import Catalog
from backend.models.entity import Entity
from backend.models.question import GameMode, Question, QuestionType

DEFAULT_OPTION_COUNT = 4


class GameGenerator:
    """Picks the next target, skipping every entity already found."""

    @staticmethod
    def candidates(
        catalog: Catalog, found_names: Collection[str]
    ) -> dict[QuestionType, list[Entity]]:
        """Return the un-found entities of each variant (empty variants omitted)."""
        pool: dict[QuestionType, list[Entity]] = {}
        for question_type in QuestionType:
            eligible = [
                e for e in catalog.entities_of(question_type) if e.name not in found_names
            ]
            if eligible:
                pool[question_type] = eligible
        return pool

    @staticmethod
    def next_question(
        catalog: Catalog,
        found_names: Collection[str],
        mode: GameMode,
        option_count: int = DEFAULT_OPTION_COUNT,
        rng: random.Random | None = None,
    ) -> Question | None:
        """Return a fresh question for *mode*, or ``None`` once every entity is found."""
        rng = rng or random.Random()
        pool = GameGenerator.candidates(catalog, found_names)
        if not pool:
            return None

        # A variant with nothing left is never chosen, so one exhausted
        # variant cannot starve the other.
        question_type = rng.choice(sorted(pool))
        target = rng.choice(pool[question_type])

        options: tuple[str, ...] = ()
        if mode is GameMode.IDENTIFY:
            options = GameGenerator.build_options(
                catalog.names_of(question_type), target.name, option_count, rng
            )

        return Question(
            question_type=question_type,
            target_id=target.id,
            target_name=target.name,
            options=options,
        )

    @staticmethod
    def build_options(
        names: list[str],
        target_name: str,
        option_count: int,
        rng: random.Random,
    ) -> tuple[str, ...]:
        """Return *target_name* plus up to ``option_count - 1`` distinct distractors, shuffled.

        Distractors come from the full variant list, found entities included.
        """
        others = sorted({n for n in names if n != target_name})
        distractors = rng.sample(others, min(option_count - 1, len(others)))
        options = [target_name, *distractors]
        rng.shuffle(options)
        return tuple(options)
