import asyncio
import json

import pytest

from oncocare import handlers
from oncocare.errors import InputError, NoActiveQuestionError, ProviderError
from oncocare.prompts import DISCLAIMER_INSTRUCTION, TEMPLATES, get_template
from oncocare.quiz import QuizStore
from oncocare.schemas import GuidanceRequest
from tests.conftest import StubGateway


def _guidance(gateway, severity=3):
    req = GuidanceRequest(symptomType="nausea", severity=severity, notes="after lunch")
    return asyncio.run(handlers.get_guidance(req, gateway))


def test_guidance_normalises_urgency_case():
    gw = StubGateway([json.dumps({"urgencyLevel": "HIGH", "response": "r", "recommendations": ["a", "b"]})])
    assert _guidance(gw).urgencyLevel == "high"


def test_guidance_truncates_long_recommendation_lists():
    gw = StubGateway([json.dumps({"urgencyLevel": "low", "response": "r", "recommendations": list("abcde")})])
    assert _guidance(gw).recommendations == ["a", "b", "c"]


def test_guidance_schema_violation_falls_back_to_empty():
    gw = StubGateway([json.dumps({"urgencyLevel": "critical", "response": "r", "recommendations": ["a"]})])
    assert _guidance(gw).model_dump(exclude_none=True) == {}


def test_guidance_empty_completion_falls_back_to_empty():
    gw = StubGateway([""])
    assert _guidance(gw).model_dump(exclude_none=True) == {}


def test_guidance_provider_error_propagates():
    gw = StubGateway([ProviderError("401")])
    with pytest.raises(ProviderError):
        _guidance(gw)


def test_check_answer_requires_answer():
    with pytest.raises(InputError):
        asyncio.run(handlers.check_quiz_answer(None, StubGateway(), QuizStore()))


def test_check_answer_without_question():
    with pytest.raises(NoActiveQuestionError):
        asyncio.run(handlers.check_quiz_answer("A", StubGateway(), QuizStore()))


def test_wrong_answer_still_clears_slot():
    store = QuizStore()
    store.open("Q?", "B")
    gw = StubGateway([ProviderError("down")])
    result = asyncio.run(handlers.check_quiz_answer("A", gw, store))
    assert result.feedback == handlers.QUIZ_WRONG_FALLBACK
    assert store.peek() is None


def test_mindcare_empty_completion_uses_placeholder():
    gw = StubGateway([""])
    result = asyncio.run(handlers.mindcare_chat("hello there", gw))
    assert result.message == handlers.CHAT_FALLBACK


def test_shared_disclaimer_in_support_prompts():
    for capability in ("guidance", "chat", "mindcare_chat"):
        assert DISCLAIMER_INSTRUCTION in TEMPLATES[capability].system


def test_quiz_question_prompt_renders_example_json():
    _, user = get_template("quiz_question").render()
    assert '{"question":' in user


def test_unknown_template():
    with pytest.raises(KeyError):
        get_template("horoscope")
