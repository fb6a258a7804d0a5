"""Summary figures shown on the tryout start and details views."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
import math

from tryout_app.core.models import Question, Tryout


@dataclass(slots=True)
class TryoutSummary:
    """Immutable snapshot of a tryout's size and scoring."""

    question_count: int
    total_points: int
    time_limit: int
    average_minutes_per_question: int


def summarize(tryout: Tryout, questions: list[Question]) -> TryoutSummary:
    question_count = len(questions)
    return TryoutSummary(
        question_count=question_count,
        total_points=sum(question.points for question in questions),
        time_limit=tryout.time_limit,
        average_minutes_per_question=average_minutes_per_question(tryout.time_limit, question_count),
    )


def average_minutes_per_question(time_limit: int, question_count: int) -> int:
    """Time limit split evenly across questions, rounded half up; zero questions count as one."""
    return math.floor(time_limit / (question_count or 1) + 0.5)


def format_relative_time(moment: datetime | None, now: datetime | None = None) -> str:
    """Render a timestamp as e.g. ``"3 days ago"``; unknown times read as ``"recently"``."""
    if moment is None:
        return "recently"
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    seconds = (now - moment).total_seconds()
    if seconds < 60:
        return "less than a minute ago"

    for unit, size in (("year", 31_536_000), ("month", 2_592_000), ("day", 86_400), ("hour", 3_600)):
        if seconds >= size:
            count = int(seconds // size)
            return f"{count} {unit}{'s' if count != 1 else ''} ago"
    minutes = int(seconds // 60)
    return f"{minutes} minute{'s' if minutes != 1 else ''} ago"
