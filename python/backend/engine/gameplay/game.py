"""Core gameplay logic — mode switching, answer routing and progress."""

from __future__ import annotations

import logging
import random
from typing import Protocol

from backend.config import GameConfig
from backend.engine.gameevaluator import AnswerEvaluator
from backend.engine.gamegenerator import GameGenerator
from backend.engine.gameplay.scheduler import DeferredQueue, Scheduler
from backend.engine.gamestate import Progress, is_complete
from backend.models.catalog import Catalog
from backend.models.entity import Entity
from backend.models.question import GameMode, GameStatus, Question, Verdict

logger = logging.getLogger("geo-quiz.game")


class FeedbackSink(Protocol):
    def on_correct(self) -> None: ...

    def on_incorrect(self) -> None: ...

    def on_finished(self) -> None: ...


class NullFeedback:
    """Feedback sink that does nothing."""

    def on_correct(self) -> None:
        pass

    def on_incorrect(self) -> None:
        pass

    def on_finished(self) -> None:
        pass


class GamePlay:
    """Orchestrates one quiz session per selected mode.

    All state changes happen here; the generator and evaluator are pure.
    Each mode session carries an epoch number.  Deferred advances capture
    it when scheduled and do nothing if it has moved on by the time they
    fire, so a timer from an old session can never touch the new one.
    A per-question generation does the same within a session, so a skip
    cannot be undone by the advance it replaced.
    """

    def __init__(
        self,
        catalog: Catalog,
        config: GameConfig | None = None,
        scheduler: Scheduler | None = None,
        feedback: FeedbackSink | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.catalog = catalog
        self.config = config or GameConfig()
        self.scheduler = scheduler or DeferredQueue()
        self.feedback = feedback or NullFeedback()
        self._rng = rng or random.Random()

        self.mode: GameMode | None = None
        self.progress = Progress()
        self.current_question: Question | None = None
        # Idle also reports PLAYING; check is_idle to tell the two apart.
        self.game_status = GameStatus.PLAYING
        self.highlighted_id: str | None = None
        self.active_recall_target: Entity | None = None
        self._epoch = 0
        self._generation = 0

    # -- read-only surface ----------------------------------------------------

    @property
    def score(self) -> int:
        return self.progress.score

    @property
    def found_names(self) -> frozenset[str]:
        return self.progress.found_names

    @property
    def is_idle(self) -> bool:
        return self.mode is None

    @property
    def is_finished(self) -> bool:
        return self.game_status is GameStatus.FINISHED

    @property
    def epoch(self) -> int:
        return self._epoch

    # -- mode switching -------------------------------------------------------

    def select_mode(self, mode: GameMode) -> None:
        """Start a fresh session in *mode*; progress never carries over."""
        self._new_session(mode)
        logger.info("Mode %s selected (session %d)", mode, self._epoch)
        self._advance()

    def quit_mode(self) -> None:
        """Return to idle, discarding the session and any pending advance."""
        self._new_session(None)

    def _new_session(self, mode: GameMode | None) -> None:
        self._epoch += 1
        self.scheduler.cancel_all()
        self.mode = mode
        self.progress = Progress()
        self.current_question = None
        self.game_status = GameStatus.PLAYING
        self.highlighted_id = None
        self.active_recall_target = None

    def next_question(self) -> None:
        """Skip straight to a new question in the current session."""
        if self.mode is None or self.is_finished:
            return
        self.scheduler.cancel_all()
        self._advance()

    # -- answers --------------------------------------------------------------

    def submit_answer(self, answer: str | Entity) -> None:
        """Route *answer* to the evaluator for the current mode.

        Identify takes an option label, locate takes the clicked entity and
        recall takes the typed text.  Ignored unless a question is active.
        """
        if self.mode is GameMode.RECALL:
            if isinstance(answer, str):
                self.submit_recall_answer(answer)
            return

        question = self.current_question
        if question is None or self.game_status is not GameStatus.PLAYING:
            logger.debug("Ignoring answer %r: no active question", answer)
            return

        if self.mode is GameMode.IDENTIFY:
            if not isinstance(answer, str):
                return
            verdict = AnswerEvaluator.identify(question, answer)
        else:
            if isinstance(answer, str):
                return
            if self.progress.is_found(answer.name):
                logger.debug("Ignoring click on found entity %r", answer.name)
                return
            verdict = AnswerEvaluator.locate(question, answer)

        if verdict is Verdict.INCORRECT and self.mode is GameMode.LOCATE:
            self.highlighted_id = question.target_id
        self._apply_verdict(verdict, question.target_name)

    def select_recall_target(self, entity: Entity) -> bool:
        """Make *entity* the recall target.  Returns False if not allowed."""
        if self.mode is not GameMode.RECALL or self.is_finished:
            return False
        if self.progress.is_found(entity.name):
            return False
        self.active_recall_target = entity
        return True

    def submit_recall_answer(self, text: str) -> None:
        target = self.active_recall_target
        if target is None or self.game_status is not GameStatus.PLAYING:
            logger.debug("Ignoring recall answer %r: no active target", text)
            return
        self.active_recall_target = None
        self._apply_verdict(AnswerEvaluator.recall(target, text), target.name)

    def cancel_recall(self) -> None:
        self.active_recall_target = None

    # -- helpers --------------------------------------------------------------

    def _apply_verdict(self, verdict: Verdict, target_name: str) -> None:
        if verdict is Verdict.CORRECT:
            self.game_status = GameStatus.CORRECT
            self.progress = self.progress.record_correct(target_name)
            self.feedback.on_correct()
        else:
            self.game_status = GameStatus.INCORRECT
            self.progress = self.progress.record_incorrect()
            self.feedback.on_incorrect()
        logger.debug("%s: %s (score %d)", target_name, verdict, self.score)
        self._schedule_advance()

    def _schedule_advance(self) -> None:
        epoch, mode, generation = self._epoch, self.mode, self._generation

        def fire() -> None:
            if epoch != self._epoch or mode is not self.mode:
                logger.debug("Dropping stale advance from session %d", epoch)
                return
            if generation != self._generation:
                logger.debug("Dropping advance for replaced question %d", generation)
                return
            self._advance()

        self.scheduler.call_later(self.config.advance_delay, fire)

    def _advance(self) -> None:
        """Generate the next question, or finish when nothing is left."""
        if self.mode is None:
            return
        self._generation += 1
        self.highlighted_id = None

        if self.mode is GameMode.RECALL:
            # Recall has no question: the player picks targets on the map.
            self.current_question = None
            exhausted = is_complete(self.found_names, self.catalog)
        else:
            self.current_question = GameGenerator.next_question(
                self.catalog,
                self.found_names,
                self.mode,
                self.config.option_count,
                self._rng,
            )
            exhausted = self.current_question is None
            if self.mode is GameMode.IDENTIFY and self.current_question:
                self.highlighted_id = self.current_question.target_id

        if exhausted:
            self._finish()
        else:
            self.game_status = GameStatus.PLAYING

    def _finish(self) -> None:
        if self.is_finished:
            return
        self.game_status = GameStatus.FINISHED
        self.active_recall_target = None
        logger.info("Session %d finished with score %d", self._epoch, self.score)
        self.feedback.on_finished()
