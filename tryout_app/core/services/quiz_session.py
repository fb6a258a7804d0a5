"""Service for one quiz-taking attempt: position, answers and scoring."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
import logging

from tryout_app.constants.quiz_constants import FALSE_LABEL, TRUE_LABEL
from tryout_app.core.errors import ConfigurationError
from tryout_app.core.models import Question, QuestionId, SessionState

logger = logging.getLogger(__name__)

_VALID_LABELS = frozenset({TRUE_LABEL, FALSE_LABEL})


class QuizSession:
    """State machine moving from NOT_STARTED through IN_PROGRESS to SUBMITTED.

    Refused transitions are no-ops that return ``False`` (``None`` for
    :meth:`submit`); only starting an empty session raises.
    """

    def __init__(self, questions: list[Question] | None = None) -> None:
        self._questions: list[Question] = [replace(q) for q in questions or []]
        self._state = SessionState.NOT_STARTED
        self._position: int = 0
        self._answers: dict[QuestionId, frozenset[str]] = {}
        self._score: int | None = None
        self._started_at: datetime | None = None
        self._submitted_at: datetime | None = None

    # --- Lifecycle ---

    @property
    def state(self) -> SessionState:
        return self._state

    def start(self) -> bool:
        """Begin the attempt; only a NOT_STARTED session can start."""
        if self._state is not SessionState.NOT_STARTED:
            return False
        if not self._questions:
            raise ConfigurationError("This tryout has no questions to answer.")
        self._state = SessionState.IN_PROGRESS
        self._position = 0
        self._answers = {}
        self._score = None
        self._started_at = datetime.now(timezone.utc)
        self._submitted_at = None
        return True

    def reset(self) -> None:
        """Abandon the attempt and return to NOT_STARTED."""
        self._state = SessionState.NOT_STARTED
        self._position = 0
        self._answers = {}
        self._score = None
        self._started_at = None
        self._submitted_at = None

    def is_in_progress(self) -> bool:
        return self._state is SessionState.IN_PROGRESS

    def is_submitted(self) -> bool:
        return self._state is SessionState.SUBMITTED

    # --- Answers ---

    def answer(self, question_id: QuestionId, selection: str | set[str] | frozenset[str]) -> bool:
        if not self.is_in_progress():
            return False
        if not any(q.id == question_id for q in self._questions):
            raise KeyError(f"Unknown question {question_id}")
        labels = frozenset({selection}) if isinstance(selection, str) else frozenset(selection)
        unknown = labels - _VALID_LABELS
        if unknown:
            raise ValueError(f"Unsupported answer labels: {sorted(unknown)}")
        self._answers[question_id] = labels
        return True

    def answer_current(self, selection: str | set[str] | frozenset[str]) -> bool:
        current = self.current_question
        if current is None:
            return False
        return self.answer(current.id, selection)

    def is_answered(self, question_id: QuestionId) -> bool:
        return question_id in self._answers

    def selection_for(self, question_id: QuestionId) -> frozenset[str]:
        return self._answers.get(question_id, frozenset())

    @property
    def answered_count(self) -> int:
        return len(self._answers)

    # --- Navigation ---

    @property
    def position(self) -> int:
        return self._position

    @property
    def question_count(self) -> int:
        return len(self._questions)

    @property
    def current_question(self) -> Question | None:
        if self._state is SessionState.NOT_STARTED or not self._questions:
            return None
        return self._questions[self._position]

    def question_at(self, index: int) -> Question:
        return self._questions[index]

    def is_on_last_question(self) -> bool:
        return bool(self._questions) and self._position == len(self._questions) - 1

    def can_go_next(self) -> bool:
        current = self.current_question
        return (
            self.is_in_progress()
            and current is not None
            and not self.is_on_last_question()
            and self.is_answered(current.id)
        )

    def can_submit(self) -> bool:
        current = self.current_question
        return (
            self.is_in_progress()
            and current is not None
            and self.is_on_last_question()
            and self.is_answered(current.id)
        )

    def next(self) -> bool:
        if not self.can_go_next():
            return False
        self._position += 1
        return True

    def previous(self) -> bool:
        if not self.is_in_progress() or self._position == 0:
            return False
        self._position -= 1
        return True

    def go_to(self, index: int) -> bool:
        """Jump to a question, clamping the index into range."""
        if not self.is_in_progress():
            return False
        self._position = max(0, min(len(self._questions) - 1, index))
        return True

    # --- Scoring ---

    @property
    def total_points(self) -> int:
        return sum(q.points for q in self._questions)

    @property
    def score(self) -> int | None:
        return self._score

    def submit(self) -> int | None:
        if not self.can_submit():
            return None
        self._score = self._compute_score()
        self._state = SessionState.SUBMITTED
        self._submitted_at = datetime.now(timezone.utc)
        logger.info(
            "Tryout submitted with score %s/%s (%s of %s answered)",
            self._score,
            self.total_points,
            self.answered_count,
            self.question_count,
        )
        return self._score

    def elapsed_seconds(self) -> float | None:
        if self._started_at is None:
            return None
        end = self._submitted_at or datetime.now(timezone.utc)
        return (end - self._started_at).total_seconds()

    def _compute_score(self) -> int:
        return sum(
            question.points
            for question in self._questions
            if self._answers.get(question.id) == frozenset({question.answer_label})
        )
