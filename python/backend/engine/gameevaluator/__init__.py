from backend.engine.gameevaluator.evaluator import AnswerEvaluator

__all__ = ["AnswerEvaluator"]
