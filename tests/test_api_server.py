"""Tests for the reference backend, driven through the real data client."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from tryout_app.core.errors import UpstreamError
from tryout_app.core.models import TryoutFilters
from tryout_app.core.schemas import (
    QuestionCreatePayload,
    QuestionUpdatePayload,
    TryoutCreatePayload,
    TryoutUpdatePayload,
)


def test_created_tryout_is_returned_with_camel_case_fields(backend, saved_tryout):
    response = backend.get(f"/api/v1/tryouts/{saved_tryout.id}")

    assert response.status_code == 200
    body = response.json()
    assert body["timeLimit"] == 30
    assert body["isPublic"] is True
    assert body["_count"] == {"questions": 0}
    assert "createdAt" in body


def test_round_trip_question_count_and_points(api_client, saved_tryout):
    points = [1, 2, 5, 3]
    for index, value in enumerate(points):
        api_client.create_question(
            saved_tryout.id,
            QuestionCreatePayload(content=f"Statement {index}", answer=index % 2 == 0, points=value),
        )

    fetched = api_client.get_tryout(saved_tryout.id)
    questions = api_client.list_questions(saved_tryout.id)

    assert fetched.question_count == len(points)
    assert len(questions) == len(points)
    assert sum(question.points for question in questions) == sum(points)
    assert [question.content for question in questions] == [f"Statement {i}" for i in range(4)]


def test_update_question_changes_only_given_fields(api_client, saved_tryout):
    created = api_client.create_question(
        saved_tryout.id, QuestionCreatePayload(content="Ice floats", answer=True, points=2)
    )

    updated = api_client.update_question(created.id.value, QuestionUpdatePayload(answer=False))

    assert updated.content == "Ice floats"
    assert updated.answer is False
    assert updated.points == 2


def test_update_tryout_patches_settings(api_client, saved_tryout):
    updated = api_client.update_tryout(saved_tryout.id, TryoutUpdatePayload(title="Physics II", time_limit=50))

    assert updated.title == "Physics II"
    assert updated.time_limit == 50
    assert updated.category == "Science"


def test_delete_tryout_removes_its_questions(api_client, store, saved_tryout):
    question = api_client.create_question(
        saved_tryout.id, QuestionCreatePayload(content="Mars is red", answer=True)
    )

    api_client.delete_tryout(saved_tryout.id)

    with pytest.raises(UpstreamError) as excinfo:
        api_client.get_tryout(saved_tryout.id)
    assert excinfo.value.status_code == 404
    with pytest.raises(UpstreamError):
        api_client.get_question(question.id.value)
    assert store.count_questions(saved_tryout.id) == 0


def test_delete_unknown_question_is_not_found(api_client):
    with pytest.raises(UpstreamError) as excinfo:
        api_client.delete_question("does-not-exist")

    assert excinfo.value.status_code == 404


def test_invalid_payload_is_rejected(backend, saved_tryout):
    response = backend.post(
        f"/api/v1/tryouts/{saved_tryout.id}/questions",
        json={"content": "Zero points", "answer": True, "points": 0},
    )

    assert response.status_code == 422


def test_list_filters_by_title_and_visibility(api_client):
    api_client.create_tryout(TryoutCreatePayload(title="Algebra I", category="Math"))
    api_client.create_tryout(TryoutCreatePayload(title="Biology", category="Science"))
    api_client.create_tryout(TryoutCreatePayload(title="algebra II", category="Math", is_public=False))

    by_title = api_client.list_tryouts(TryoutFilters(title="ALGEBRA"))
    public_only = api_client.list_tryouts(TryoutFilters(is_public=True))

    assert [t.title for t in by_title] == ["Algebra I", "algebra II"]
    assert [t.title for t in public_only] == ["Algebra I", "Biology"]


def test_list_filters_by_creation_window(api_client, store):
    api_client.create_tryout(TryoutCreatePayload(title="Old", category="History"))
    api_client.create_tryout(TryoutCreatePayload(title="New", category="History"))
    old_id = store.list_tryouts(title="Old")[0].id
    store.update_tryout(old_id, {"created_at": datetime(2020, 3, 15, 9, 30, tzinfo=timezone.utc)})
    today = datetime.now(timezone.utc).date()

    in_2020 = api_client.list_tryouts(TryoutFilters(start_date=date(2020, 1, 1), end_date=date(2020, 3, 15)))
    recent = api_client.list_tryouts(TryoutFilters(start_date=today - timedelta(days=1)))

    assert [t.title for t in in_2020] == ["Old"]
    assert [t.title for t in recent] == ["New"]


def test_malformed_date_filter_is_rejected(backend):
    response = backend.get("/api/v1/tryouts", params={"startDate": "yesterday"})

    assert response.status_code == 422
