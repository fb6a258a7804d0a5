"""Thread-safe in-memory storage behind the reference backend."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from threading import Lock
from uuid import uuid4


class RecordNotFound(LookupError):
    """Raised when a tryout or question id is unknown."""

    def __init__(self, resource: str, record_id: str) -> None:
        self.resource = resource
        self.record_id = record_id
        super().__init__(f"{resource.capitalize()} {record_id} not found")


@dataclass(slots=True)
class StoredTryout:
    id: str
    title: str
    description: str
    category: str
    time_limit: int
    is_public: bool
    created_at: datetime
    updated_at: datetime


@dataclass(slots=True)
class StoredQuestion:
    id: str
    tryout_id: str
    content: str
    answer: bool
    points: int
    created_at: datetime
    updated_at: datetime


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid4().hex[:12]


class TryoutStore:
    """Keeps tryouts and their questions in insertion order."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._tryouts: dict[str, StoredTryout] = {}
        self._questions: dict[str, StoredQuestion] = {}

    # --- Tryouts ---

    def list_tryouts(
        self,
        *,
        title: str | None = None,
        created_from: datetime | None = None,
        created_before: datetime | None = None,
        is_public: bool | None = None,
    ) -> list[StoredTryout]:
        """Filter by title substring (any case), creation window [from, before) and visibility."""
        needle = title.lower() if title else None
        with self._lock:
            matches = []
            for tryout in self._tryouts.values():
                if needle and needle not in tryout.title.lower():
                    continue
                if created_from is not None and tryout.created_at < created_from:
                    continue
                if created_before is not None and tryout.created_at >= created_before:
                    continue
                if is_public is not None and tryout.is_public != is_public:
                    continue
                matches.append(replace(tryout))
            return matches

    def get_tryout(self, tryout_id: str) -> StoredTryout:
        with self._lock:
            return replace(self._require_tryout(tryout_id))

    def create_tryout(
        self,
        *,
        title: str,
        description: str,
        category: str,
        time_limit: int,
        is_public: bool,
    ) -> StoredTryout:
        now = _now()
        tryout = StoredTryout(
            id=_new_id(),
            title=title,
            description=description,
            category=category,
            time_limit=time_limit,
            is_public=is_public,
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self._tryouts[tryout.id] = tryout
            return replace(tryout)

    def update_tryout(self, tryout_id: str, changes: dict[str, object]) -> StoredTryout:
        with self._lock:
            tryout = self._require_tryout(tryout_id)
            for name, value in changes.items():
                setattr(tryout, name, value)
            tryout.updated_at = _now()
            return replace(tryout)

    def delete_tryout(self, tryout_id: str) -> None:
        with self._lock:
            self._require_tryout(tryout_id)
            del self._tryouts[tryout_id]
            orphaned = [qid for qid, q in self._questions.items() if q.tryout_id == tryout_id]
            for question_id in orphaned:
                del self._questions[question_id]

    def count_questions(self, tryout_id: str) -> int:
        with self._lock:
            return sum(1 for q in self._questions.values() if q.tryout_id == tryout_id)

    # --- Questions ---

    def list_questions(self, tryout_id: str) -> list[StoredQuestion]:
        with self._lock:
            self._require_tryout(tryout_id)
            return [replace(q) for q in self._questions.values() if q.tryout_id == tryout_id]

    def get_question(self, question_id: str) -> StoredQuestion:
        with self._lock:
            return replace(self._require_question(question_id))

    def create_question(self, tryout_id: str, *, content: str, answer: bool, points: int) -> StoredQuestion:
        now = _now()
        with self._lock:
            self._require_tryout(tryout_id)
            question = StoredQuestion(
                id=_new_id(),
                tryout_id=tryout_id,
                content=content,
                answer=answer,
                points=points,
                created_at=now,
                updated_at=now,
            )
            self._questions[question.id] = question
            return replace(question)

    def update_question(self, question_id: str, changes: dict[str, object]) -> StoredQuestion:
        with self._lock:
            question = self._require_question(question_id)
            for name, value in changes.items():
                setattr(question, name, value)
            question.updated_at = _now()
            return replace(question)

    def delete_question(self, question_id: str) -> None:
        with self._lock:
            self._require_question(question_id)
            del self._questions[question_id]

    # --- Internals (lock must be held) ---

    def _require_tryout(self, tryout_id: str) -> StoredTryout:
        tryout = self._tryouts.get(tryout_id)
        if tryout is None:
            raise RecordNotFound("tryout", tryout_id)
        return tryout

    def _require_question(self, question_id: str) -> StoredQuestion:
        question = self._questions.get(question_id)
        if question is None:
            raise RecordNotFound("question", question_id)
        return question
