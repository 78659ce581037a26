from backend.engine.gameplay.game import FeedbackSink, GamePlay, NullFeedback
from backend.engine.gameplay.scheduler import DeferredQueue, Scheduler

__all__ = ["DeferredQueue", "FeedbackSink", "GamePlay", "NullFeedback", "Scheduler"]
