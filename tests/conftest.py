"""Shared fixtures: a scripted httpx backend and the in-process reference backend."""

from __future__ import annotations

import itertools
import json
import threading

from fastapi.testclient import TestClient
import httpx
import pytest

from tryout_app.core.api_client import TryoutApiClient
from tryout_app.core.schemas import TryoutCreatePayload
from tryout_app.core.services.question_editor import QuestionEditor
from tryout_app.core.tryout_manager import TryoutManager
from tryout_app.server.api_server import create_api_app
from tryout_app.server.tryout_store import TryoutStore

SCRIPTED_BASE_URL = "http://api.test/api/v1"
TESTSERVER_BASE_URL = "http://testserver/api/v1"


class ScriptedBackend:
    """httpx MockTransport handler serving question writes and recording every request.

    Statements listed in ``failing_contents`` are answered with HTTP 500;
    ``fail_deletes`` does the same for DELETE. Setting ``gate`` parks each
    request until the test releases it, with ``entered`` signalling arrival.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.failing_contents: set[str] = set()
        self.fail_deletes = False
        self.gate: threading.Event | None = None
        self.entered = threading.Event()
        self._ids = itertools.count(1)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.gate is not None:
            self.entered.set()
            self.gate.wait(timeout=5)

        if request.method == "DELETE":
            if self.fail_deletes:
                return httpx.Response(500, json={"detail": "delete failed"})
            return httpx.Response(204)

        body = json.loads(request.content) if request.content else {}
        if body.get("content") in self.failing_contents:
            return httpx.Response(500, json={"detail": "write failed"})

        segments = request.url.path.strip("/").split("/")
        if request.method == "POST":
            record = {"id": f"q{next(self._ids)}", "tryoutId": segments[-2], **body}
            return httpx.Response(201, json=record)
        if request.method == "PATCH":
            record = {"id": segments[-1], "tryoutId": "t1", **body}
            return httpx.Response(200, json=record)
        return httpx.Response(404, json={"detail": "not scripted"})

    def count(self, method: str) -> int:
        return sum(1 for request in self.requests if request.method == method)


@pytest.fixture
def scripted_backend():
    """Create a fresh scripted backend."""
    return ScriptedBackend()


@pytest.fixture
def scripted_client(scripted_backend):
    """Create an API client whose HTTP traffic goes to the scripted backend."""
    http_client = httpx.Client(transport=httpx.MockTransport(scripted_backend))
    client = TryoutApiClient(SCRIPTED_BASE_URL, http_client=http_client)
    yield client
    http_client.close()


@pytest.fixture
def editor(scripted_client):
    """Create a question editor bound to tryout ``t1`` on the scripted backend."""
    return QuestionEditor(scripted_client, tryout_id="t1")


@pytest.fixture
def store():
    """Create an empty in-memory store for the reference backend."""
    return TryoutStore()


@pytest.fixture
def backend(store):
    """Run the reference backend in-process."""
    with TestClient(create_api_app(store)) as http_client:
        yield http_client


@pytest.fixture
def api_client(backend):
    """Create an API client talking to the in-process reference backend."""
    return TryoutApiClient(TESTSERVER_BASE_URL, http_client=backend)


@pytest.fixture
def manager(api_client):
    """Create a tryout manager on top of the reference backend."""
    return TryoutManager(api_client)


@pytest.fixture
def saved_tryout(api_client):
    """Create one tryout on the reference backend."""
    return api_client.create_tryout(
        TryoutCreatePayload(title="Physics basics", description="Warm-up", category="Science", time_limit=30)
    )
