"""Pydantic schemas for the JSON wire shapes shared by client and server.

The backend speaks camelCase; the Python side uses snake_case field names and
an alias generator bridges the two. ``to_model`` converts a decoded record into
the dataclasses in ``tryout_app.core.models``.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from tryout_app.constants.quiz_constants import DEFAULT_QUESTION_POINTS, DEFAULT_TIME_LIMIT_MINUTES
from tryout_app.core.models import Question, QuestionId, Tryout


class WireModel(BaseModel):
    """Base schema using camelCase aliases on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, object]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class QuestionCreatePayload(WireModel):
    content: str
    answer: bool
    points: int = Field(default=DEFAULT_QUESTION_POINTS, ge=1)


class QuestionUpdatePayload(WireModel):
    content: str | None = None
    answer: bool | None = None
    points: int | None = Field(default=None, ge=1)


class QuestionRecord(WireModel):
    id: str
    content: str
    answer: bool
    points: int = DEFAULT_QUESTION_POINTS
    tryout_id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_model(self) -> Question:
        return Question(
            id=QuestionId.persisted(self.id),
            content=self.content,
            answer=self.answer,
            points=self.points,
            tryout_id=self.tryout_id,
            created_at=self.created_at,
            updated_at=self.updated_at,
            is_dirty=False,
        )


class TryoutCreatePayload(WireModel):
    title: str
    description: str = ""
    category: str = ""
    time_limit: int = Field(default=DEFAULT_TIME_LIMIT_MINUTES, ge=1)
    is_public: bool = True


class TryoutUpdatePayload(WireModel):
    title: str | None = None
    description: str | None = None
    category: str | None = None
    time_limit: int | None = Field(default=None, ge=1)
    is_public: bool | None = None


class QuestionCount(WireModel):
    questions: int = 0


class TryoutRecord(WireModel):
    id: str
    title: str
    description: str | None = ""
    category: str | None = ""
    time_limit: int = DEFAULT_TIME_LIMIT_MINUTES
    is_public: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None
    count: QuestionCount | None = Field(default=None, alias="_count")
    questions: list[QuestionRecord] | None = None

    def to_model(self) -> Tryout:
        questions = [record.to_model() for record in self.questions or []]
        question_count = self.count.questions if self.count is not None else None
        if question_count is None and self.questions is not None:
            question_count = len(questions)
        return Tryout(
            id=self.id,
            title=self.title,
            description=self.description or "",
            category=self.category or "",
            time_limit=self.time_limit,
            created_at=self.created_at,
            updated_at=self.updated_at,
            is_public=self.is_public,
            question_count=question_count,
            questions=questions,
        )
