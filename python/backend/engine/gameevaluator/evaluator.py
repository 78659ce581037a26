"""Answer evaluation for the three play modes.

Every check is pure: it returns a :class:`Verdict` and leaves all state
changes to :class:`~backend.engine.gameplay.GamePlay`.
"""

from __future__ import annotations

from backend.models.entity import Entity, Region, Settlement
from backend.models.question import Question, QuestionType, Verdict
from backend.utils.text import normalize_input


def _verdict(ok: bool) -> Verdict:
    return Verdict.CORRECT if ok else Verdict.INCORRECT


class AnswerEvaluator:
    """Stateless evaluator — all methods are static."""

    @staticmethod
    def identify(question: Question, chosen: str) -> Verdict:
        """Multiple choice: option labels are canonical names, so match exactly."""
        return _verdict(chosen == question.target_name)

    @staticmethod
    def locate(question: Question, clicked: Entity) -> Verdict:
        """Map click: the variant must agree, then either the id or the name.

        Boundary ids are not always consistent with the question's source
        (``"on"`` vs ``"ON"``), so the display name is the fallback.
        """
        match clicked:
            case Region(id=clicked_id, name=name):
                ok = question.question_type is QuestionType.REGION and (
                    clicked_id == question.target_id or name == question.target_name
                )
            case Settlement(name=name):
                ok = question.question_type is QuestionType.SETTLEMENT and (
                    name == question.target_id or name == question.target_name
                )
            case _:
                ok = False
        return _verdict(ok)

    @staticmethod
    def recall(target: Entity, typed: str) -> Verdict:
        """Typed answer: compare after normalisation."""
        return _verdict(normalize_input(typed) == normalize_input(target.name))
