"""Service holding the editable question list of one tryout."""

from __future__ import annotations

from dataclasses import replace
import logging
from threading import Lock

from tryout_app.constants.quiz_constants import (
    DEFAULT_QUESTION_ANSWER,
    DEFAULT_QUESTION_CONTENT_TEMPLATE,
    DEFAULT_QUESTION_POINTS,
)
from tryout_app.core.api_client import TryoutApiClient
from tryout_app.core.errors import (
    ConfigurationError,
    PersistenceError,
    SaveAllError,
    SaveInProgressError,
    UpstreamError,
    ValidationError,
)
from tryout_app.core.models import Question, QuestionId
from tryout_app.core.schemas import QuestionCreatePayload, QuestionUpdatePayload

logger = logging.getLogger(__name__)


class QuestionEditor:
    """Ordered questions of a tryout with dirty tracking and backend sync.

    Questions added locally carry a temporary id until their first save, which
    creates them on the backend and swaps in the persisted id. Only one
    save or delete may be in flight per question; a second request for the
    same question is refused with :class:`SaveInProgressError` instead of
    reaching the backend.
    """

    def __init__(self, client: TryoutApiClient, tryout_id: str | None = None) -> None:
        self._client = client
        self._tryout_id = tryout_id
        self._lock = Lock()
        self._questions: list[Question] = []
        self._selected_id: QuestionId | None = None
        self._in_flight: set[QuestionId] = set()
        # Temporary ids that have since been created on the backend.
        self._promoted: dict[QuestionId, QuestionId] = {}
        # Last state the backend confirmed, per persisted id.
        self._persisted: dict[QuestionId, Question] = {}

    # --- Collection state ---

    @property
    def tryout_id(self) -> str | None:
        return self._tryout_id

    def bind_tryout(self, tryout_id: str) -> None:
        """Attach the editor to the tryout new questions are created under."""
        with self._lock:
            self._tryout_id = tryout_id

    def load(self, questions: list[Question]) -> None:
        """Replace the collection with already persisted questions."""
        with self._lock:
            self._questions = [replace(question, is_dirty=False) for question in questions]
            self._persisted = {question.id: replace(question) for question in self._questions}
            self._promoted.clear()
            self._selected_id = self._questions[0].id if self._questions else None

    def get_questions(self) -> list[Question]:
        with self._lock:
            return [replace(question) for question in self._questions]

    def get_persisted_questions(self) -> list[Question]:
        """Return the last saved state of every persisted question, in list order.

        Unsaved local edits and questions that were never created are left out.
        """
        with self._lock:
            return [replace(self._persisted[q.id]) for q in self._questions if q.id in self._persisted]

    def get_question(self, question_id: QuestionId) -> Question:
        with self._lock:
            return replace(self._find(question_id))

    def get_question_count(self) -> int:
        with self._lock:
            return len(self._questions)

    def has_unsaved_changes(self) -> bool:
        with self._lock:
            return any(question.is_dirty for question in self._questions)

    def is_saving(self, question_id: QuestionId) -> bool:
        with self._lock:
            return self._resolve(question_id) in self._in_flight

    def filter_questions(self, query: str) -> list[Question]:
        """Return questions whose content contains ``query``, ignoring case."""
        needle = query.strip().lower()
        with self._lock:
            return [replace(q) for q in self._questions if needle in q.content.lower()]

    # --- Selection ---

    @property
    def selected_id(self) -> QuestionId | None:
        with self._lock:
            return self._selected_id

    def get_selected_question(self) -> Question | None:
        with self._lock:
            if self._selected_id is None:
                return None
            return replace(self._find(self._selected_id))

    def select_question(self, question_id: QuestionId | None) -> None:
        with self._lock:
            if question_id is None:
                self._selected_id = None
                return
            self._selected_id = self._find(question_id).id

    # --- Local edits ---

    def add_question(self) -> Question:
        with self._lock:
            question = Question(
                id=QuestionId.temporary(),
                content=DEFAULT_QUESTION_CONTENT_TEMPLATE.format(number=len(self._questions) + 1),
                answer=DEFAULT_QUESTION_ANSWER,
                points=DEFAULT_QUESTION_POINTS,
                tryout_id=self._tryout_id,
                is_dirty=True,
            )
            self._questions.append(question)
            self._selected_id = question.id
            return replace(question)

    def update_question(
        self,
        question_id: QuestionId,
        *,
        content: str | None = None,
        answer: bool | None = None,
        points: int | None = None,
    ) -> Question:
        if points is not None and points < 1:
            raise ValidationError("Points must be at least 1.", field_name="points")
        with self._lock:
            question = self._find(question_id)
            self._ensure_idle(question.id)
            if content is not None:
                question.content = content
            if answer is not None:
                question.answer = answer
            if points is not None:
                question.points = points
            question.is_dirty = True
            return replace(question)

    # --- Backend sync ---

    def save_question(self, question_id: QuestionId) -> Question:
        """Create or update one question and clear its dirty flag."""
        with self._lock:
            question = self._find(question_id)
            self._ensure_idle(question.id)
            if question.id.is_temporary and self._tryout_id is None:
                raise ConfigurationError("Create the tryout before saving its questions.")
            position = self._questions.index(question) + 1
            snapshot = replace(question)
            tryout_id = self._tryout_id
            self._in_flight.add(snapshot.id)

        try:
            if snapshot.id.is_temporary:
                payload = QuestionCreatePayload(
                    content=snapshot.content.strip()
                    or DEFAULT_QUESTION_CONTENT_TEMPLATE.format(number=position),
                    answer=snapshot.answer,
                    points=snapshot.points,
                )
                saved = self._client.create_question(tryout_id, payload)
                logger.info("Created question %s (was %s) in tryout %s", saved.id.value, snapshot.id, tryout_id)
            else:
                payload = QuestionUpdatePayload(
                    content=snapshot.content, answer=snapshot.answer, points=snapshot.points
                )
                saved = self._client.update_question(snapshot.id.value, payload)
                logger.info("Updated question %s", saved.id.value)
        except UpstreamError as exc:
            raise PersistenceError(f"Failed to save question {position}: {exc}", snapshot.id) from exc
        else:
            with self._lock:
                self._store_saved(snapshot.id, saved)
            return replace(saved)
        finally:
            with self._lock:
                self._in_flight.discard(snapshot.id)

    def delete_question(self, question_id: QuestionId) -> None:
        """Remove a question; persisted questions are removed only after the backend agrees."""
        with self._lock:
            question = self._find(question_id)
            self._ensure_idle(question.id)
            if question.id.is_temporary:
                self._remove_local(question.id)
                logger.debug("Discarded unsaved question %s", question.id)
                return
            target = question.id
            self._in_flight.add(target)

        try:
            self._client.delete_question(target.value)
        except UpstreamError as exc:
            raise PersistenceError(f"Failed to delete question: {exc}", target) from exc
        else:
            with self._lock:
                self._remove_local(target)
            logger.info("Deleted question %s", target.value)
        finally:
            with self._lock:
                self._in_flight.discard(target)

    def save_all(self) -> list[Question]:
        """Save every dirty question in list order.

        A failing question stays dirty and does not stop the others. If any
        failed, :class:`SaveAllError` names the first one once the pass is over;
        nothing already saved is rolled back.
        """
        with self._lock:
            pending = [(index + 1, q.id) for index, q in enumerate(self._questions) if q.is_dirty]

        saved: list[Question] = []
        failures: list[tuple[int, QuestionId, PersistenceError]] = []
        for position, question_id in pending:
            try:
                saved.append(self.save_question(question_id))
            except PersistenceError as exc:
                logger.warning("Bulk save could not save question %s: %s", position, exc)
                failures.append((position, question_id, exc))

        if failures:
            position, question_id, cause = failures[0]
            raise SaveAllError(
                question_id,
                position,
                len(saved),
                cause,
                failed_ids=[failed_id for _, failed_id, _ in failures],
            ) from cause
        return saved

    # --- Internals (lock must be held) ---

    def _resolve(self, question_id: QuestionId) -> QuestionId:
        return self._promoted.get(question_id, question_id)

    def _find(self, question_id: QuestionId) -> Question:
        resolved = self._resolve(question_id)
        for question in self._questions:
            if question.id == resolved:
                return question
        raise KeyError(f"Unknown question {question_id}")

    def _ensure_idle(self, question_id: QuestionId) -> None:
        if question_id in self._in_flight:
            raise SaveInProgressError(
                f"Question {question_id} is still being saved.", question_id
            )

    def _store_saved(self, previous_id: QuestionId, saved: Question) -> None:
        for index, question in enumerate(self._questions):
            if question.id == previous_id:
                self._questions[index] = replace(saved, is_dirty=False)
                break
        self._persisted[saved.id] = replace(saved, is_dirty=False)
        if previous_id != saved.id:
            self._promoted[previous_id] = saved.id
        if self._selected_id == previous_id:
            self._selected_id = saved.id

    def _remove_local(self, question_id: QuestionId) -> None:
        self._questions = [q for q in self._questions if q.id != question_id]
        self._persisted.pop(question_id, None)
        self._promoted = {old: new for old, new in self._promoted.items() if new != question_id}
        if self._selected_id == question_id:
            self._selected_id = self._questions[0].id if self._questions else None
