"""End-to-end tests of the tryout manager against the reference backend."""

from __future__ import annotations

import pytest

from tryout_app.core.errors import ConfigurationError, SaveAllError, ValidationError
from tryout_app.core.models import SessionState, TryoutDraft
from tryout_app.core.schemas import QuestionCreatePayload
from tryout_app.core.tryout_manager import TryoutManager

DRAFT = TryoutDraft(title="  Solar system  ", description="Planets", category="Astronomy", time_limit=12)


def _author(manager, specs):
    """Add questions described as (content, answer, points) to the open editor."""
    for content, answer, points in specs:
        question = manager.add_question()
        manager.update_question(question.id, content=content, answer=answer, points=points)


@pytest.mark.parametrize(
    ("draft", "field_name"),
    [
        (TryoutDraft(title="   ", category="Math"), "title"),
        (TryoutDraft(title="Quiz", category=""), "category"),
        (TryoutDraft(title="Quiz", category="Math", time_limit=0), "time_limit"),
    ],
)
def test_validate_draft_requires_fields(draft, field_name):
    with pytest.raises(ValidationError) as excinfo:
        TryoutManager.validate_draft(draft)

    assert excinfo.value.field_name == field_name


def test_create_requires_at_least_one_question(manager, store):
    manager.new_draft()

    with pytest.raises(ValidationError, match="at least one question"):
        manager.create_tryout(DRAFT)

    assert store.list_tryouts() == []


def test_create_tryout_persists_questions_round_trip(manager, api_client):
    manager.new_draft()
    _author(manager, [("Mercury is closest to the Sun", True, 1), ("Pluto is a planet", False, 2)])

    tryout = manager.save_tryout(DRAFT)

    assert tryout.title == "Solar system"
    assert tryout.question_count == 2
    assert manager.has_open_tryout()
    assert not manager.check_unsaved_changes()
    fetched = api_client.get_tryout(tryout.id)
    assert fetched.question_count == 2
    assert sum(q.points for q in api_client.list_questions(tryout.id)) == 3


def test_create_twice_is_refused(manager):
    manager.new_draft()
    _author(manager, [("Venus is hot", True, 1)])
    manager.create_tryout(DRAFT)

    with pytest.raises(ConfigurationError):
        manager.create_tryout(DRAFT)


def test_open_tryout_loads_persisted_questions(manager, api_client, saved_tryout):
    for content in ("One", "Two"):
        api_client.create_question(saved_tryout.id, QuestionCreatePayload(content=content, answer=True, points=2))

    opened = manager.open_tryout(saved_tryout.id)

    assert opened.id == saved_tryout.id
    assert [q.content for q in manager.get_questions()] == ["One", "Two"]
    assert manager.get_selected_question().content == "One"
    summary = manager.get_summary()
    assert summary.question_count == 2
    assert summary.total_points == 4
    assert summary.average_minutes_per_question == 15


def test_save_tryout_updates_settings_and_dirty_questions(manager, api_client, saved_tryout):
    api_client.create_question(saved_tryout.id, QuestionCreatePayload(content="Old text", answer=True))
    manager.open_tryout(saved_tryout.id)
    existing = manager.get_questions()[0]
    manager.update_question(existing.id, content="New text")
    manager.add_question()

    updated = manager.save_tryout(TryoutDraft(title="Renamed", category="Science", time_limit=40))

    assert updated.title == "Renamed"
    assert updated.question_count == 2
    assert [q.content for q in api_client.list_questions(saved_tryout.id)] == ["New text", "Question 2"]


def test_save_tryout_reports_partially_failed_questions(manager, api_client, saved_tryout, store):
    api_client.create_question(saved_tryout.id, QuestionCreatePayload(content="Doomed", answer=True))
    manager.open_tryout(saved_tryout.id)
    doomed = manager.get_questions()[0]
    manager.update_question(doomed.id, content="Doomed edit")
    added = manager.add_question()
    store.delete_question(doomed.id.value)

    with pytest.raises(SaveAllError) as excinfo:
        manager.save_tryout(TryoutDraft(title="Physics basics", category="Science"))

    assert excinfo.value.question_id == doomed.id
    questions = manager.get_questions()
    assert questions[0].is_dirty
    assert not questions[1].is_dirty and not questions[1].id.is_temporary
    assert manager.editor.get_question(added.id).id == questions[1].id


def test_delete_current_tryout_resets_to_new_draft(manager, saved_tryout):
    manager.open_tryout(saved_tryout.id)

    manager.delete_tryout(saved_tryout.id)

    assert not manager.has_open_tryout()
    assert manager.get_questions() == []
    assert manager.list_tryouts() == []


def test_quiz_runs_over_persisted_questions_only(manager, api_client, saved_tryout):
    for content, answer, points in (("A", True, 1), ("B", False, 2), ("C", True, 3)):
        api_client.create_question(
            saved_tryout.id, QuestionCreatePayload(content=content, answer=answer, points=points)
        )
    manager.open_tryout(saved_tryout.id)
    manager.add_question()

    session = manager.start_quiz()

    assert session.question_count == 3
    assert manager.move_to_next_question() is False
    for _ in range(3):
        assert manager.answer_current_question("true")
        manager.move_to_next_question()
    assert manager.submit_quiz() == 4
    assert manager.session.state is SessionState.SUBMITTED


def test_start_quiz_without_questions_keeps_previous_session(manager, saved_tryout):
    manager.open_tryout(saved_tryout.id)
    previous = manager.session

    with pytest.raises(ConfigurationError):
        manager.start_quiz()

    assert manager.session is previous


def test_abandon_quiz_resets_session(manager, api_client, saved_tryout):
    api_client.create_question(saved_tryout.id, QuestionCreatePayload(content="Only", answer=False))
    manager.open_tryout(saved_tryout.id)
    manager.start_quiz()
    manager.answer_current_question("false")

    manager.abandon_quiz()

    assert manager.session.state is SessionState.NOT_STARTED
    assert manager.session.answered_count == 0


def test_quiz_uses_last_saved_state_not_unsaved_edits(manager, api_client, saved_tryout):
    api_client.create_question(saved_tryout.id, QuestionCreatePayload(content="Ice floats", answer=True, points=2))
    manager.open_tryout(saved_tryout.id)
    question = manager.get_questions()[0]
    manager.update_question(question.id, content="Ice sinks", answer=False)

    session = manager.start_quiz()
    manager.answer_current_question("false")

    assert session.current_question.content == "Ice floats"
    assert session.current_question.answer is True
    assert manager.submit_quiz() == 0
    assert manager.check_unsaved_changes()


def test_summary_ignores_unsaved_point_changes(manager, api_client, saved_tryout):
    api_client.create_question(saved_tryout.id, QuestionCreatePayload(content="Ice floats", answer=True, points=2))
    manager.open_tryout(saved_tryout.id)
    manager.update_question(manager.get_questions()[0].id, points=9)

    assert manager.get_summary().total_points == 2
