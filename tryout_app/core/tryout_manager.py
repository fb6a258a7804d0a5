"""Business logic for authoring and taking tryouts, shared by the UI panels."""

from __future__ import annotations

import logging
from threading import Lock

from tryout_app.core.api_client import TryoutApiClient
from tryout_app.core.errors import ConfigurationError, ValidationError
from tryout_app.core.models import Question, QuestionId, Tryout, TryoutDraft, TryoutFilters
from tryout_app.core.schemas import TryoutCreatePayload, TryoutUpdatePayload
from tryout_app.core.services.question_editor import QuestionEditor
from tryout_app.core.services.quiz_session import QuizSession
from tryout_app.core.services.tryout_stats import TryoutSummary, summarize

logger = logging.getLogger(__name__)


class TryoutManager:
    """Facade for tryout services: data client, QuestionEditor and QuizSession.

    The lock guards which tryout, editor and session are current. Network
    calls run outside it; per-question single-flight is the editor's job.
    """

    def __init__(self, client: TryoutApiClient) -> None:
        self._lock = Lock()
        self._client = client
        self._current_tryout: Tryout | None = None
        self._editor = QuestionEditor(client)
        self._session = QuizSession()

    @property
    def client(self) -> TryoutApiClient:
        return self._client

    @property
    def editor(self) -> QuestionEditor:
        with self._lock:
            return self._editor

    @property
    def session(self) -> QuizSession:
        with self._lock:
            return self._session

    # --- Tryouts ---

    def list_tryouts(self, filters: TryoutFilters | None = None) -> list[Tryout]:
        return self._client.list_tryouts(filters)

    def open_tryout(self, tryout_id: str) -> Tryout:
        """Fetch a tryout with its questions and make it the current one."""
        tryout = self._client.get_tryout(tryout_id)
        questions = self._client.list_questions(tryout_id)
        editor = QuestionEditor(self._client, tryout.id)
        editor.load(questions)
        with self._lock:
            self._current_tryout = tryout
            self._editor = editor
            self._session = QuizSession()
        logger.info("Opened tryout %s with %s questions", tryout.id, len(questions))
        return tryout

    def new_draft(self) -> None:
        """Start authoring a tryout that does not exist on the backend yet."""
        with self._lock:
            self._current_tryout = None
            self._editor = QuestionEditor(self._client)
            self._session = QuizSession()

    def get_current_tryout(self) -> Tryout | None:
        with self._lock:
            return self._current_tryout

    def has_open_tryout(self) -> bool:
        with self._lock:
            return self._current_tryout is not None

    def get_current_draft(self) -> TryoutDraft:
        with self._lock:
            if self._current_tryout is None:
                return TryoutDraft()
            return TryoutDraft.from_tryout(self._current_tryout)

    @staticmethod
    def validate_draft(draft: TryoutDraft, *, question_count: int | None = None) -> TryoutDraft:
        """Return a whitespace-normalized copy of ``draft`` or raise ValidationError.

        ``question_count`` is checked only when given (the create flow needs at
        least one question; editing settings does not).
        """
        title = draft.title.strip()
        category = draft.category.strip()
        if not title:
            raise ValidationError("Please enter a title for the tryout", field_name="title")
        if not category:
            raise ValidationError("Please enter a category for the tryout", field_name="category")
        if draft.time_limit < 1:
            raise ValidationError("Time limit must be at least 1 minute", field_name="time_limit")
        if question_count is not None and question_count == 0:
            raise ValidationError("Please add at least one question", field_name="questions")
        return TryoutDraft(
            title=title,
            description=draft.description.strip(),
            category=category,
            time_limit=draft.time_limit,
        )

    def create_tryout(self, draft: TryoutDraft) -> Tryout:
        """Create the tryout, then every drafted question under it.

        If a question fails, the tryout and the questions before it stay
        created and the SaveAllError propagates; saving again resumes.
        """
        with self._lock:
            if self._current_tryout is not None:
                raise ConfigurationError("This tryout already exists; save changes instead.")
            editor = self._editor
        validated = self.validate_draft(draft, question_count=editor.get_question_count())

        tryout = self._client.create_tryout(
            TryoutCreatePayload(
                title=validated.title,
                description=validated.description,
                category=validated.category,
                time_limit=validated.time_limit,
            )
        )
        logger.info("Created tryout %s", tryout.id)
        with self._lock:
            self._current_tryout = tryout
            editor.bind_tryout(tryout.id)

        editor.save_all()
        return self._refresh_count(tryout, editor)

    def update_tryout(self, draft: TryoutDraft) -> Tryout:
        with self._lock:
            current = self._current_tryout
        if current is None:
            raise ConfigurationError("Create the tryout before updating it.")
        validated = self.validate_draft(draft)
        updated = self._client.update_tryout(
            current.id,
            TryoutUpdatePayload(
                title=validated.title,
                description=validated.description,
                category=validated.category,
                time_limit=validated.time_limit,
            ),
        )
        with self._lock:
            if self._current_tryout is not None and self._current_tryout.id == updated.id:
                self._current_tryout = updated
        logger.info("Updated tryout %s", updated.id)
        return updated

    def save_tryout(self, draft: TryoutDraft) -> Tryout:
        """Create the tryout if it is new, otherwise update it and save dirty questions."""
        if not self.has_open_tryout():
            return self.create_tryout(draft)
        tryout = self.update_tryout(draft)
        editor = self.editor
        editor.save_all()
        return self._refresh_count(tryout, editor)

    def delete_tryout(self, tryout_id: str) -> None:
        self._client.delete_tryout(tryout_id)
        logger.info("Deleted tryout %s", tryout_id)
        with self._lock:
            is_current = self._current_tryout is not None and self._current_tryout.id == tryout_id
        if is_current:
            self.new_draft()

    def get_summary(self) -> TryoutSummary:
        with self._lock:
            tryout = self._current_tryout
            editor = self._editor
        if tryout is None:
            raise ConfigurationError("No tryout is open.")
        return summarize(tryout, self._persisted_questions(editor))

    # --- Question editing delegation ---

    def get_questions(self) -> list[Question]:
        return self.editor.get_questions()

    def filter_questions(self, query: str) -> list[Question]:
        return self.editor.filter_questions(query)

    def get_selected_question(self) -> Question | None:
        return self.editor.get_selected_question()

    def select_question(self, question_id: QuestionId | None) -> None:
        self.editor.select_question(question_id)

    def add_question(self) -> Question:
        return self.editor.add_question()

    def update_question(
        self,
        question_id: QuestionId,
        *,
        content: str | None = None,
        answer: bool | None = None,
        points: int | None = None,
    ) -> Question:
        return self.editor.update_question(question_id, content=content, answer=answer, points=points)

    def save_question(self, question_id: QuestionId) -> Question:
        return self.editor.save_question(question_id)

    def delete_question(self, question_id: QuestionId) -> None:
        self.editor.delete_question(question_id)

    def save_all_questions(self) -> list[Question]:
        return self.editor.save_all()

    def check_unsaved_changes(self) -> bool:
        return self.editor.has_unsaved_changes()

    # --- Quiz session delegation ---

    def start_quiz(self) -> QuizSession:
        """Begin a fresh attempt over the last saved state of the open tryout's questions."""
        with self._lock:
            editor = self._editor
        session = QuizSession(self._persisted_questions(editor))
        session.start()
        with self._lock:
            self._session = session
        return session

    def abandon_quiz(self) -> None:
        self.session.reset()

    def answer_current_question(self, selection: str) -> bool:
        return self.session.answer_current(selection)

    def move_to_next_question(self) -> bool:
        return self.session.next()

    def move_to_previous_question(self) -> bool:
        return self.session.previous()

    def go_to_question(self, index: int) -> bool:
        return self.session.go_to(index)

    def submit_quiz(self) -> int | None:
        return self.session.submit()

    # --- Internals ---

    @staticmethod
    def _persisted_questions(editor: QuestionEditor) -> list[Question]:
        return editor.get_persisted_questions()

    def _refresh_count(self, tryout: Tryout, editor: QuestionEditor) -> Tryout:
        tryout.question_count = len(self._persisted_questions(editor))
        with self._lock:
            if self._current_tryout is not None and self._current_tryout.id == tryout.id:
                self._current_tryout = tryout
        return tryout
