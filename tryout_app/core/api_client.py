"""HTTP client for the tryout and question REST resources."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError as PydanticValidationError

from tryout_app.constants.network_constants import DEFAULT_API_BASE_URL, DEFAULT_REQUEST_TIMEOUT_SECONDS
from tryout_app.core.errors import UpstreamError
from tryout_app.core.models import Question, Tryout, TryoutFilters
from tryout_app.core.schemas import (
    QuestionCreatePayload,
    QuestionRecord,
    QuestionUpdatePayload,
    TryoutCreatePayload,
    TryoutRecord,
    TryoutUpdatePayload,
)

logger = logging.getLogger(__name__)

TRYOUT_RESOURCE = "tryout"
QUESTION_RESOURCE = "question"


class TryoutApiClient:
    """Thin wrapper exposing list/get/create/update/delete for tryouts and questions.

    Any non-2xx answer, transport failure or undecodable body is raised as
    :class:`UpstreamError` carrying the resource kind and the operation name.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE_URL,
        *,
        http_client: httpx.Client | None = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(timeout=timeout)

    @property
    def base_url(self) -> str:
        return self._base_url

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> TryoutApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # --- Tryouts ---

    def list_tryouts(self, filters: TryoutFilters | None = None) -> list[Tryout]:
        params = filters.to_query_params() if filters else {}
        body = self._request(TRYOUT_RESOURCE, "list", "GET", "/tryouts", params=params)
        records = self._decode_list(TRYOUT_RESOURCE, "list", TryoutRecord, body)
        return [record.to_model() for record in records]

    def get_tryout(self, tryout_id: str) -> Tryout:
        body = self._request(TRYOUT_RESOURCE, "get", "GET", f"/tryouts/{tryout_id}")
        return self._decode(TRYOUT_RESOURCE, "get", TryoutRecord, body).to_model()

    def create_tryout(self, payload: TryoutCreatePayload) -> Tryout:
        body = self._request(TRYOUT_RESOURCE, "create", "POST", "/tryouts", json=payload.to_wire())
        return self._decode(TRYOUT_RESOURCE, "create", TryoutRecord, body).to_model()

    def update_tryout(self, tryout_id: str, payload: TryoutUpdatePayload) -> Tryout:
        body = self._request(
            TRYOUT_RESOURCE, "update", "PATCH", f"/tryouts/{tryout_id}", json=payload.to_wire()
        )
        return self._decode(TRYOUT_RESOURCE, "update", TryoutRecord, body).to_model()

    def delete_tryout(self, tryout_id: str) -> None:
        self._request(TRYOUT_RESOURCE, "delete", "DELETE", f"/tryouts/{tryout_id}")

    # --- Questions ---

    def list_questions(self, tryout_id: str) -> list[Question]:
        body = self._request(QUESTION_RESOURCE, "list", "GET", f"/tryouts/{tryout_id}/questions")
        records = self._decode_list(QUESTION_RESOURCE, "list", QuestionRecord, body)
        return [record.to_model() for record in records]

    def get_question(self, question_id: str) -> Question:
        body = self._request(QUESTION_RESOURCE, "get", "GET", f"/questions/{question_id}")
        return self._decode(QUESTION_RESOURCE, "get", QuestionRecord, body).to_model()

    def create_question(self, tryout_id: str, payload: QuestionCreatePayload) -> Question:
        body = self._request(
            QUESTION_RESOURCE, "create", "POST", f"/tryouts/{tryout_id}/questions", json=payload.to_wire()
        )
        return self._decode(QUESTION_RESOURCE, "create", QuestionRecord, body).to_model()

    def update_question(self, question_id: str, payload: QuestionUpdatePayload) -> Question:
        body = self._request(
            QUESTION_RESOURCE, "update", "PATCH", f"/questions/{question_id}", json=payload.to_wire()
        )
        return self._decode(QUESTION_RESOURCE, "update", QuestionRecord, body).to_model()

    def delete_question(self, question_id: str) -> None:
        self._request(QUESTION_RESOURCE, "delete", "DELETE", f"/questions/{question_id}")

    # --- Internals ---

    def _request(
        self,
        resource: str,
        operation: str,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: dict[str, object] | None = None,
    ) -> object:
        url = f"{self._base_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            response = self._http.request(method, url, params=params or None, json=json)
        except httpx.HTTPError as exc:
            logger.warning("Error trying to %s %s: %s", operation, resource, exc)
            raise UpstreamError(resource, operation, detail=str(exc)) from exc

        if not response.is_success:
            logger.warning("Failed to %s %s: HTTP %s", operation, resource, response.status_code)
            raise UpstreamError(resource, operation, status_code=response.status_code)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamError(
                resource, operation, status_code=response.status_code, detail="response body is not JSON"
            ) from exc

    @staticmethod
    def _decode(resource: str, operation: str, schema: type, body: object):
        try:
            return schema.model_validate(body)
        except PydanticValidationError as exc:
            raise UpstreamError(resource, operation, detail=f"unexpected response shape: {exc}") from exc

    @classmethod
    def _decode_list(cls, resource: str, operation: str, schema: type, body: object) -> list:
        if not isinstance(body, list):
            raise UpstreamError(resource, operation, detail="expected a JSON array")
        return [cls._decode(resource, operation, schema, item) for item in body]
