"""Domain models for the tryout application."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum, auto
import itertools
import time

from tryout_app.constants.quiz_constants import (
    DEFAULT_QUESTION_ANSWER,
    DEFAULT_QUESTION_POINTS,
    DEFAULT_TIME_LIMIT_MINUTES,
    FALSE_LABEL,
    TRUE_LABEL,
)

# Seeded from the wall clock so ids stay distinct across restarts of the editor.
_temporary_counter = itertools.count(time.time_ns() // 1_000_000)


class QuestionIdKind(Enum):
    """Whether a question id was assigned locally or by the backend."""

    TEMPORARY = auto()
    PERSISTED = auto()


@dataclass(frozen=True, slots=True)
class QuestionId:
    """Tagged question identifier; the kind is never inferred from the value."""

    kind: QuestionIdKind
    value: str

    @classmethod
    def temporary(cls) -> QuestionId:
        return cls(QuestionIdKind.TEMPORARY, str(next(_temporary_counter)))

    @classmethod
    def persisted(cls, value: str) -> QuestionId:
        return cls(QuestionIdKind.PERSISTED, value)

    @property
    def is_temporary(self) -> bool:
        return self.kind is QuestionIdKind.TEMPORARY

    def __str__(self) -> str:
        prefix = "tmp" if self.is_temporary else "id"
        return f"{prefix}:{self.value}"


@dataclass(slots=True)
class Question:
    """True/false statement worth a number of points."""

    id: QuestionId
    content: str
    answer: bool = DEFAULT_QUESTION_ANSWER
    points: int = DEFAULT_QUESTION_POINTS
    tryout_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    is_dirty: bool = False

    @property
    def answer_label(self) -> str:
        return TRUE_LABEL if self.answer else FALSE_LABEL


@dataclass(slots=True)
class Tryout:
    """Quiz entity as returned by the backend."""

    id: str
    title: str
    description: str = ""
    category: str = ""
    time_limit: int = DEFAULT_TIME_LIMIT_MINUTES
    created_at: datetime | None = None
    updated_at: datetime | None = None
    is_public: bool = True
    question_count: int | None = None
    questions: list[Question] = field(default_factory=list)


@dataclass(slots=True)
class TryoutDraft:
    """Author-editable tryout settings, before or between saves."""

    title: str = ""
    description: str = ""
    category: str = ""
    time_limit: int = DEFAULT_TIME_LIMIT_MINUTES

    @classmethod
    def from_tryout(cls, tryout: Tryout) -> TryoutDraft:
        return cls(
            title=tryout.title,
            description=tryout.description or "",
            category=tryout.category or "",
            time_limit=tryout.time_limit or DEFAULT_TIME_LIMIT_MINUTES,
        )


@dataclass(slots=True)
class TryoutFilters:
    """Optional filters for the tryout collection endpoint."""

    title: str | None = None
    start_date: date | datetime | None = None
    end_date: date | datetime | None = None
    is_public: bool | None = None

    def to_query_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.title:
            params["title"] = self.title
        if self.start_date is not None:
            params["startDate"] = self.start_date.isoformat()
        if self.end_date is not None:
            params["endDate"] = self.end_date.isoformat()
        if self.is_public is not None:
            params["isPublic"] = "true" if self.is_public else "false"
        return params


class SessionState(Enum):
    """Lifecycle of a single quiz-taking attempt."""

    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    SUBMITTED = auto()
