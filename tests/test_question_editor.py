"""Tests for local question editing and its backend synchronization."""

from __future__ import annotations

import threading

import pytest

from tryout_app.core.errors import (
    ConfigurationError,
    PersistenceError,
    SaveAllError,
    SaveInProgressError,
    ValidationError,
)
from tryout_app.core.models import Question, QuestionId
from tryout_app.core.services.question_editor import QuestionEditor


def test_add_question_appends_dirty_temporary_question(editor):
    question = editor.add_question()

    assert editor.get_question_count() == 1
    assert question.id.is_temporary
    assert question.is_dirty
    assert question.content == "Question 1"
    assert question.answer is True
    assert question.points == 1
    assert editor.get_selected_question().id == question.id


def test_add_and_delete_sequence_keeps_count_and_unique_ids(editor, scripted_backend):
    added = [editor.add_question() for _ in range(5)]
    editor.delete_question(added[1].id)
    editor.delete_question(added[3].id)
    added.append(editor.add_question())

    questions = editor.get_questions()
    assert len(questions) == 6 - 2
    assert len({question.id for question in questions}) == len(questions)
    assert scripted_backend.requests == []


def test_update_question_marks_dirty(editor, scripted_backend):
    question = editor.add_question()
    editor.save_question(question.id)

    updated = editor.update_question(question.id, content="Water boils at 100 °C", answer=False, points=3)

    assert updated.is_dirty
    assert updated.content == "Water boils at 100 °C"
    assert updated.answer is False
    assert updated.points == 3
    assert editor.has_unsaved_changes()


def test_update_question_rejects_points_below_one(editor):
    question = editor.add_question()

    with pytest.raises(ValidationError):
        editor.update_question(question.id, points=0)

    assert editor.get_question(question.id).points == 1


def test_unknown_question_id_raises_key_error(editor):
    with pytest.raises(KeyError):
        editor.get_question(QuestionId.persisted("missing"))


def test_save_temporary_question_creates_and_swaps_id(editor, scripted_backend):
    question = editor.add_question()
    editor.update_question(question.id, content="The Earth is round")

    saved = editor.save_question(question.id)

    assert not saved.id.is_temporary
    assert saved.id.value == "q1"
    assert not saved.is_dirty
    assert editor.get_selected_question().id == saved.id
    assert scripted_backend.count("POST") == 1
    assert scripted_backend.requests[0].url.path == "/api/v1/tryouts/t1/questions"


def test_repeated_save_does_not_create_twice(editor, scripted_backend):
    question = editor.add_question()

    first = editor.save_question(question.id)
    # The stale temporary id still resolves to the created question.
    second = editor.save_question(question.id)

    assert first.id == second.id
    assert scripted_backend.count("POST") == 1
    assert scripted_backend.count("PATCH") == 1
    assert editor.get_question_count() == 1


def test_concurrent_save_of_same_question_is_refused(editor, scripted_backend):
    question = editor.add_question()
    scripted_backend.gate = threading.Event()
    errors: list[Exception] = []

    def save_in_background() -> None:
        try:
            editor.save_question(question.id)
        except Exception as exc:  # pragma: no cover - surfaced through the assertion below
            errors.append(exc)

    worker = threading.Thread(target=save_in_background)
    worker.start()
    assert scripted_backend.entered.wait(timeout=5)

    assert editor.is_saving(question.id)
    with pytest.raises(SaveInProgressError):
        editor.save_question(question.id)
    with pytest.raises(SaveInProgressError):
        editor.update_question(question.id, content="edited mid-save")

    scripted_backend.gate.set()
    worker.join(timeout=5)

    assert errors == []
    assert scripted_backend.count("POST") == 1
    assert not editor.is_saving(question.id)


def test_save_without_bound_tryout_is_configuration_error(scripted_client, scripted_backend):
    editor = QuestionEditor(scripted_client)
    question = editor.add_question()

    with pytest.raises(ConfigurationError):
        editor.save_question(question.id)

    assert scripted_backend.requests == []
    assert not editor.is_saving(question.id)


def test_failed_save_leaves_question_dirty(editor, scripted_backend):
    question = editor.add_question()
    editor.update_question(question.id, content="Broken statement")
    scripted_backend.failing_contents.add("Broken statement")

    with pytest.raises(PersistenceError) as excinfo:
        editor.save_question(question.id)

    assert excinfo.value.question_id == question.id
    current = editor.get_question(question.id)
    assert current.id.is_temporary
    assert current.is_dirty
    assert editor.selected_id == question.id
    assert not editor.is_saving(question.id)


def test_blank_content_is_saved_with_default_statement(editor, scripted_backend):
    editor.add_question()
    second = editor.add_question()
    editor.update_question(second.id, content="   ")

    saved = editor.save_question(second.id)

    assert saved.content == "Question 2"


def test_delete_temporary_question_issues_no_call(editor, scripted_backend):
    question = editor.add_question()

    editor.delete_question(question.id)

    assert editor.get_question_count() == 0
    assert editor.get_selected_question() is None
    assert scripted_backend.requests == []


def test_delete_persisted_question_issues_exactly_one_call(editor, scripted_backend):
    saved = editor.save_question(editor.add_question().id)
    other = editor.add_question()

    editor.delete_question(saved.id)

    assert scripted_backend.count("DELETE") == 1
    assert scripted_backend.requests[-1].url.path == "/api/v1/questions/q1"
    assert [q.id for q in editor.get_questions()] == [other.id]


def test_failed_delete_keeps_question(editor, scripted_backend):
    saved = editor.save_question(editor.add_question().id)
    scripted_backend.fail_deletes = True

    with pytest.raises(PersistenceError):
        editor.delete_question(saved.id)

    assert scripted_backend.count("DELETE") == 1
    assert editor.get_question(saved.id).id == saved.id


def test_save_all_continues_after_failure_and_names_first_failed(editor, scripted_backend):
    first = editor.add_question()
    second = editor.add_question()
    editor.update_question(first.id, content="A fails")
    editor.update_question(second.id, content="B succeeds")
    scripted_backend.failing_contents.add("A fails")

    with pytest.raises(SaveAllError) as excinfo:
        editor.save_all()

    error = excinfo.value
    assert error.question_id == first.id
    assert error.position == 1
    assert error.saved_count == 1
    assert error.failed_ids == [first.id]

    a, b = editor.get_questions()
    assert a.id.is_temporary and a.is_dirty
    assert not b.id.is_temporary and not b.is_dirty
    assert b.content == "B succeeds"


def test_save_all_only_saves_dirty_questions(editor, scripted_backend):
    editor.load(
        [
            Question(id=QuestionId.persisted("q10"), content="Clean", tryout_id="t1"),
            Question(id=QuestionId.persisted("q11"), content="Also clean", tryout_id="t1"),
        ]
    )
    editor.update_question(QuestionId.persisted("q11"), answer=False)

    saved = editor.save_all()

    assert [q.id.value for q in saved] == ["q11"]
    assert scripted_backend.count("PATCH") == 1
    assert not editor.has_unsaved_changes()


def test_filter_questions_is_case_insensitive(editor):
    first = editor.add_question()
    editor.add_question()
    editor.update_question(first.id, content="Photosynthesis needs LIGHT")

    matches = editor.filter_questions("light")

    assert [q.id for q in matches] == [first.id]


def test_persisted_questions_keep_last_saved_state(editor, scripted_backend):
    saved = editor.save_question(editor.add_question().id)
    editor.add_question()
    editor.update_question(saved.id, content="Edited locally", answer=False)

    persisted = editor.get_persisted_questions()

    assert [q.id for q in persisted] == [saved.id]
    assert persisted[0].content == "Question 1"
    assert persisted[0].answer is True
    assert not persisted[0].is_dirty


def test_deleted_question_no_longer_resolves_from_its_temporary_id(editor, scripted_backend):
    question = editor.add_question()
    saved = editor.save_question(question.id)

    editor.delete_question(saved.id)

    assert editor.get_persisted_questions() == []
    with pytest.raises(KeyError):
        editor.get_question(question.id)
    assert editor.selected_id is None
