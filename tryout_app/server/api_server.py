"""FastAPI reference backend exposing the tryout and question resources."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
import logging
from threading import Thread

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query, Request, Response
from fastapi.responses import JSONResponse
import uvicorn

from tryout_app.constants.network_constants import API_PREFIX, DEFAULT_BACKEND_HOST, DEFAULT_BACKEND_PORT
from tryout_app.core.schemas import (
    QuestionCount,
    QuestionCreatePayload,
    QuestionRecord,
    QuestionUpdatePayload,
    TryoutCreatePayload,
    TryoutRecord,
    TryoutUpdatePayload,
)
from tryout_app.server.tryout_store import RecordNotFound, StoredQuestion, StoredTryout, TryoutStore

logger = logging.getLogger(__name__)


def _parse_date_bound(raw: str | None, *, name: str, end_of_day: bool) -> datetime | None:
    """Turn an ISO date or datetime query value into an aware UTC bound.

    Date-only end bounds cover the whole day, so they become the following
    midnight (exclusive).
    """
    if not raw:
        return None
    try:
        if len(raw) == 10:
            day = date.fromisoformat(raw)
            if end_of_day:
                day += timedelta(days=1)
            return datetime.combine(day, time.min, tzinfo=timezone.utc)
        moment = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=f"{name} must be an ISO date or datetime") from exc
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    if end_of_day:
        # Explicit datetimes are inclusive upper bounds.
        moment += timedelta(microseconds=1)
    return moment


def _tryout_record(store: TryoutStore, tryout: StoredTryout) -> TryoutRecord:
    return TryoutRecord(
        id=tryout.id,
        title=tryout.title,
        description=tryout.description,
        category=tryout.category,
        time_limit=tryout.time_limit,
        is_public=tryout.is_public,
        created_at=tryout.created_at,
        updated_at=tryout.updated_at,
        count=QuestionCount(questions=store.count_questions(tryout.id)),
    )


def _question_record(question: StoredQuestion) -> QuestionRecord:
    return QuestionRecord(
        id=question.id,
        content=question.content,
        answer=question.answer,
        points=question.points,
        tryout_id=question.tryout_id,
        created_at=question.created_at,
        updated_at=question.updated_at,
    )


def _get_store_dependency(store: TryoutStore):
    def dependency() -> TryoutStore:
        return store

    return dependency


def create_api_app(store: TryoutStore | None = None) -> FastAPI:
    """Create a FastAPI application wired to the provided store."""
    store = store or TryoutStore()
    app = FastAPI(title="Tryouts API", version="0.1.0")
    store_dep = _get_store_dependency(store)
    router = APIRouter(prefix=API_PREFIX)

    @app.exception_handler(RecordNotFound)
    def handle_not_found(_request: Request, exc: RecordNotFound) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    # --- Tryouts ---

    @router.get("/tryouts", response_model=list[TryoutRecord], response_model_exclude_none=True)
    def list_tryouts(
        title: str | None = None,
        start_date: str | None = Query(default=None, alias="startDate"),
        end_date: str | None = Query(default=None, alias="endDate"),
        is_public: bool | None = Query(default=None, alias="isPublic"),
        tryouts: TryoutStore = Depends(store_dep),
    ) -> list[TryoutRecord]:
        matches = tryouts.list_tryouts(
            title=title,
            created_from=_parse_date_bound(start_date, name="startDate", end_of_day=False),
            created_before=_parse_date_bound(end_date, name="endDate", end_of_day=True),
            is_public=is_public,
        )
        return [_tryout_record(tryouts, tryout) for tryout in matches]

    @router.get("/tryouts/{tryout_id}", response_model=TryoutRecord, response_model_exclude_none=True)
    def get_tryout(tryout_id: str, tryouts: TryoutStore = Depends(store_dep)) -> TryoutRecord:
        return _tryout_record(tryouts, tryouts.get_tryout(tryout_id))

    @router.post(
        "/tryouts", status_code=201, response_model=TryoutRecord, response_model_exclude_none=True
    )
    def create_tryout(payload: TryoutCreatePayload, tryouts: TryoutStore = Depends(store_dep)) -> TryoutRecord:
        created = tryouts.create_tryout(
            title=payload.title,
            description=payload.description,
            category=payload.category,
            time_limit=payload.time_limit,
            is_public=payload.is_public,
        )
        logger.info("Created tryout %s", created.id)
        return _tryout_record(tryouts, created)

    @router.patch("/tryouts/{tryout_id}", response_model=TryoutRecord, response_model_exclude_none=True)
    def update_tryout(
        tryout_id: str,
        payload: TryoutUpdatePayload,
        tryouts: TryoutStore = Depends(store_dep),
    ) -> TryoutRecord:
        updated = tryouts.update_tryout(tryout_id, payload.model_dump(exclude_none=True))
        return _tryout_record(tryouts, updated)

    @router.delete("/tryouts/{tryout_id}", status_code=204)
    def delete_tryout(tryout_id: str, tryouts: TryoutStore = Depends(store_dep)) -> Response:
        tryouts.delete_tryout(tryout_id)
        logger.info("Deleted tryout %s", tryout_id)
        return Response(status_code=204)

    # --- Questions ---

    @router.get(
        "/tryouts/{tryout_id}/questions",
        response_model=list[QuestionRecord],
        response_model_exclude_none=True,
    )
    def list_questions(tryout_id: str, tryouts: TryoutStore = Depends(store_dep)) -> list[QuestionRecord]:
        return [_question_record(question) for question in tryouts.list_questions(tryout_id)]

    @router.post(
        "/tryouts/{tryout_id}/questions",
        status_code=201,
        response_model=QuestionRecord,
        response_model_exclude_none=True,
    )
    def create_question(
        tryout_id: str,
        payload: QuestionCreatePayload,
        tryouts: TryoutStore = Depends(store_dep),
    ) -> QuestionRecord:
        created = tryouts.create_question(
            tryout_id, content=payload.content, answer=payload.answer, points=payload.points
        )
        return _question_record(created)

    @router.get("/questions/{question_id}", response_model=QuestionRecord, response_model_exclude_none=True)
    def get_question(question_id: str, tryouts: TryoutStore = Depends(store_dep)) -> QuestionRecord:
        return _question_record(tryouts.get_question(question_id))

    @router.patch("/questions/{question_id}", response_model=QuestionRecord, response_model_exclude_none=True)
    def update_question(
        question_id: str,
        payload: QuestionUpdatePayload,
        tryouts: TryoutStore = Depends(store_dep),
    ) -> QuestionRecord:
        updated = tryouts.update_question(question_id, payload.model_dump(exclude_none=True))
        return _question_record(updated)

    @router.delete("/questions/{question_id}", status_code=204)
    def delete_question(question_id: str, tryouts: TryoutStore = Depends(store_dep)) -> Response:
        tryouts.delete_question(question_id)
        return Response(status_code=204)

    app.include_router(router)
    return app


def start_api_server(
    store: TryoutStore | None = None,
    host: str = DEFAULT_BACKEND_HOST,
    port: int = DEFAULT_BACKEND_PORT,
) -> Thread:
    """Start the reference backend in a background daemon thread."""
    app = create_api_app(store)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="TryoutApiServer", daemon=True)
    thread.start()
    return thread
