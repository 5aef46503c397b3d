import json
from typing import List, Optional, Union

import pytest
from fastapi.testclient import TestClient

from main import app
from oncocare.errors import EmptyCompletionError
from oncocare.gateway import get_gateway
from oncocare.quiz import QuizStore, get_quiz_store


class StubGateway:
    """Deterministic stand-in for ModelGateway: returns queued replies in order."""

    def __init__(self, replies: Optional[List[Union[str, Exception]]] = None, default: str = "stub reply"):
        self.replies = list(replies or [])
        self.default = default
        self.calls = []

    def queue(self, *replies):
        self.replies.extend(replies)

    def queue_json(self, obj):
        self.replies.append(json.dumps(obj))

    async def complete(self, system_prompt: str, user_prompt: str, json_mode: bool = False) -> str:
        self.calls.append({"system": system_prompt, "user": user_prompt, "json_mode": json_mode})
        reply = self.replies.pop(0) if self.replies else self.default
        if isinstance(reply, Exception):
            raise reply
        if not reply:
            raise EmptyCompletionError("Provider returned an empty completion.")
        return reply


@pytest.fixture
def gateway():
    return StubGateway()


@pytest.fixture
def store():
    return QuizStore()


@pytest.fixture
def client(gateway, store):
    app.dependency_overrides[get_gateway] = lambda: gateway
    app.dependency_overrides[get_quiz_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
