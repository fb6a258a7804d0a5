"""Question rendering utilities for the editor preview and the quiz view."""

from __future__ import annotations

from tryout_app.core.markdown_renderer import renderer
from tryout_app.core.models import Question


def render_statement(question: Question, position: int, total: int, font_size: int = 14, *, show_answer: bool = False) -> str:
    """Render a true/false statement as a full HTML page.

    Args:
        question: The question to display (content supports Markdown and LaTeX)
        position: 1-indexed position of the question in the tryout
        total: Number of questions in the tryout
        font_size: Font size in points for the statement
        show_answer: Append the correct answer, used by the authoring preview

    Returns:
        HTML string ready for display in QWebEngineView
    """
    points_label = "point" if question.points == 1 else "points"
    meta = f"Question {position} of {total} · {question.points} {points_label}"
    if show_answer:
        meta += f" · Answer: {'True' if question.answer else 'False'}"
    body = (
        f'<div class="statement">{renderer.render_fragment(question.content)}</div>'
        f'<div class="meta">{meta}</div>'
    )
    return renderer.wrap_with_mathjax(body, font_size=font_size)
