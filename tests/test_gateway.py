import asyncio
from types import SimpleNamespace

import httpx
import pytest
from openai import APIConnectionError

from oncocare.errors import EmptyCompletionError, ProviderError
from oncocare.gateway import ModelGateway, parse_json_object


class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.kwargs = None

    async def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _gateway_with(completions):
    gw = ModelGateway(api_key="test-key", model="test-model")
    gw._client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return gw


def test_parse_pure_json():
    result = parse_json_object('{"urgencyLevel": "low"}')
    assert result.ok
    assert result.value == {"urgencyLevel": "low"}


def test_parse_json_embedded_in_text():
    result = parse_json_object('Sure! Here it is:\n```json\n{"a": 1}\n```')
    assert result.ok
    assert result.value == {"a": 1}


@pytest.mark.parametrize("text", [None, "", "   ", "not json", "[1, 2, 3]", "{broken: json"])
def test_parse_failures_yield_empty_default(text):
    result = parse_json_object(text)
    assert not result.ok
    assert result.value == {}


def test_complete_sends_system_and_user_messages():
    completions = FakeCompletions(content="  hello  ")
    text = asyncio.run(_gateway_with(completions).complete("sys", "user"))
    assert text == "hello"
    assert completions.kwargs["model"] == "test-model"
    assert completions.kwargs["messages"] == [
        {"role": "system", "content": "sys"},
        {"role": "user", "content": "user"},
    ]
    assert "response_format" not in completions.kwargs


def test_complete_json_mode_requests_json_object():
    completions = FakeCompletions(content="{}")
    asyncio.run(_gateway_with(completions).complete("sys", "user", json_mode=True))
    assert completions.kwargs["response_format"] == {"type": "json_object"}


def test_empty_completion_raises():
    completions = FakeCompletions(content="")
    with pytest.raises(EmptyCompletionError):
        asyncio.run(_gateway_with(completions).complete("sys", "user"))


def test_api_error_becomes_provider_error():
    error = APIConnectionError(request=httpx.Request("POST", "https://api.groq.com/openai/v1/chat/completions"))
    completions = FakeCompletions(error=error)
    with pytest.raises(ProviderError):
        asyncio.run(_gateway_with(completions).complete("sys", "user"))


def test_missing_api_key_is_provider_error():
    gw = ModelGateway(api_key="")
    with pytest.raises(ProviderError):
        asyncio.run(gw.complete("sys", "user"))


@pytest.mark.parametrize("system,user", [("", "user"), ("sys", "  ")])
def test_blank_prompts_rejected(system, user):
    with pytest.raises(ValueError):
        asyncio.run(_gateway_with(FakeCompletions(content="x")).complete(system, user))
