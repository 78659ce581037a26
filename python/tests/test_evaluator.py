"""Answer evaluation for identify, locate and recall."""

from __future__ import annotations

from backend.engine.gameevaluator import AnswerEvaluator
from backend.models.entity import Region, Settlement
from backend.models.question import Question, QuestionType, Verdict

ONTARIO_Q = Question(QuestionType.REGION, "ON", "Ontario", ("Ontario", "Quebec"))
OTTAWA_Q = Question(QuestionType.SETTLEMENT, "Ottawa", "Ottawa")


# -- identify -----------------------------------------------------------------


def test_identify_exact_match() -> None:
    assert AnswerEvaluator.identify(ONTARIO_Q, "Ontario") is Verdict.CORRECT
    assert AnswerEvaluator.identify(ONTARIO_Q, "Quebec") is Verdict.INCORRECT


def test_identify_is_case_sensitive() -> None:
    assert AnswerEvaluator.identify(ONTARIO_Q, "ontario") is Verdict.INCORRECT


# -- locate -------------------------------------------------------------------


def test_locate_matches_by_id() -> None:
    assert AnswerEvaluator.locate(ONTARIO_Q, Region("ON", "Ontario")) is Verdict.CORRECT


def test_locate_falls_back_to_name_when_id_differs() -> None:
    clicked = Region("on", "Ontario")
    assert AnswerEvaluator.locate(ONTARIO_Q, clicked) is Verdict.CORRECT


def test_locate_matches_by_id_when_name_differs() -> None:
    clicked = Region("ON", "Ontario (boundary)")
    assert AnswerEvaluator.locate(ONTARIO_Q, clicked) is Verdict.CORRECT


def test_locate_wrong_region() -> None:
    assert AnswerEvaluator.locate(ONTARIO_Q, Region("QC", "Quebec")) is Verdict.INCORRECT


def test_locate_requires_matching_variant() -> None:
    # A city sharing the region's name is still the wrong kind of place.
    assert AnswerEvaluator.locate(ONTARIO_Q, Settlement("Ontario")) is Verdict.INCORRECT
    assert AnswerEvaluator.locate(OTTAWA_Q, Region("Ottawa", "Ottawa")) is Verdict.INCORRECT


def test_locate_settlement_by_name() -> None:
    assert AnswerEvaluator.locate(OTTAWA_Q, Settlement("Ottawa", "ON")) is Verdict.CORRECT
    assert AnswerEvaluator.locate(OTTAWA_Q, Settlement("Toronto", "ON")) is Verdict.INCORRECT


# -- recall -------------------------------------------------------------------


def test_recall_normalises_apostrophes_and_periods() -> None:
    target = Settlement("St. John's", "NL")
    assert AnswerEvaluator.recall(target, "st. john’s") is Verdict.CORRECT
    assert AnswerEvaluator.recall(target, "  ST JOHN'S ") is Verdict.CORRECT


def test_recall_wrong_name() -> None:
    assert AnswerEvaluator.recall(Region("ON", "Ontario"), "Quebec") is Verdict.INCORRECT


def test_recall_empty_answer_is_incorrect() -> None:
    assert AnswerEvaluator.recall(Region("ON", "Ontario"), "") is Verdict.INCORRECT
