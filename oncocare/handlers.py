"""
Request handlers, one per capability.

Each handler takes validated input plus the model gateway and returns a
response model; the quiz question is passed through as a plain dict.
Recoverable provider problems (empty completions, malformed JSON) are absorbed
here; other ProviderErrors propagate to the route.
"""
from typing import Any, Dict, Optional

from loguru import logger
from pydantic import ValidationError

from oncocare.errors import EmptyCompletionError, InputError, NoActiveQuestionError, ProviderError
from oncocare.gateway import ModelGateway, parse_json_object
from oncocare.prompts import get_template
from oncocare.quiz import QuizStore
from oncocare.safety import check_crisis as run_crisis_filter
from oncocare.safety import match_mindcare_intent
from oncocare.schemas import (
    ChatResponse,
    CrisisCheckResponse,
    GuidanceRequest,
    GuidanceResponse,
    MindcareResponse,
    QuizAnswerResponse,
    SimplifyNoteResponse,
)

SIMPLIFY_FALLBACK = "Sorry, I couldn't simplify that note."
CHAT_FALLBACK = "I'm sorry, I couldn't generate a response. Please try again."
QUIZ_CORRECT_FEEDBACK = "✅ Correct! Great job!"
QUIZ_WRONG_FALLBACK = "That's a good guess, but it wasn't the correct answer. Try again next time!"

MAX_RECOMMENDATIONS = 3


async def _complete(gateway: ModelGateway, capability: str, **fields) -> str:
    template = get_template(capability)
    system_prompt, user_prompt = template.render(**fields)
    return await gateway.complete(system_prompt, user_prompt, json_mode=template.json_mode)


async def _complete_json(gateway: ModelGateway, capability: str, **fields) -> dict:
    try:
        raw = await _complete(gateway, capability, **fields)
    except EmptyCompletionError:
        raw = ""
    parsed = parse_json_object(raw)
    if not parsed.ok:
        logger.warning("Provider returned non-JSON output for '{}'; using empty default", capability)
    return parsed.value


async def get_guidance(req: GuidanceRequest, gateway: ModelGateway) -> GuidanceResponse:
    payload = await _complete_json(
        gateway, "guidance", symptom_type=req.symptomType, severity=req.severity, notes=req.notes
    )
    recs = payload.get("recommendations")
    if isinstance(recs, list) and len(recs) > MAX_RECOMMENDATIONS:
        payload["recommendations"] = recs[:MAX_RECOMMENDATIONS]
    try:
        return GuidanceResponse.model_validate(payload)
    except ValidationError as e:
        logger.warning("Guidance payload failed validation ({} errors); using empty default", e.error_count())
        return GuidanceResponse()


async def simplify_note(original_text: str, gateway: ModelGateway) -> SimplifyNoteResponse:
    try:
        text = await _complete(gateway, "simplify_note", text=original_text)
    except EmptyCompletionError:
        text = SIMPLIFY_FALLBACK
    return SimplifyNoteResponse(simplifiedText=text)


async def chat_response(user_message: str, gateway: ModelGateway) -> ChatResponse:
    try:
        text = await _complete(gateway, "chat", text=user_message)
    except EmptyCompletionError:
        text = CHAT_FALLBACK
    return ChatResponse(aiResponse=text)


def _as_text(value) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


async def get_quiz_question(gateway: ModelGateway, store: QuizStore, session_id: Optional[str] = None) -> Dict[str, Any]:
    """Return the provider's quiz object as-is; only question and correctAnswer are kept for grading."""
    payload = await _complete_json(gateway, "quiz_question")
    question = _as_text(payload.get("question"))
    correct_answer = _as_text(payload.get("correctAnswer"))
    if correct_answer is None:
        logger.warning("Quiz payload has no correctAnswer; no question is open")
    store.open(question, correct_answer, session_id=session_id)
    return payload


async def check_quiz_answer(
    user_answer: Optional[str],
    gateway: ModelGateway,
    store: QuizStore,
    session_id: Optional[str] = None,
) -> QuizAnswerResponse:
    if user_answer is None or not user_answer.strip():
        raise InputError("user_answer is required for check_answer.")

    # The slot is cleared whatever the outcome
    state = store.take(session_id)
    if state is None:
        raise NoActiveQuestionError()

    is_correct = user_answer.strip().upper() == state.correct_answer.strip().upper()
    if is_correct:
        return QuizAnswerResponse(is_correct=True, feedback=QUIZ_CORRECT_FEEDBACK)

    try:
        feedback = await _complete(
            gateway,
            "quiz_explanation",
            question=state.question or "",
            correct_answer=state.correct_answer,
            user_answer=user_answer,
        )
    except ProviderError:
        logger.exception("Quiz explanation call failed")
        feedback = QUIZ_WRONG_FALLBACK
    return QuizAnswerResponse(is_correct=False, feedback=feedback)


def check_crisis(message: str) -> CrisisCheckResponse:
    return run_crisis_filter(message)


async def mindcare_chat(message: str, gateway: ModelGateway) -> MindcareResponse:
    canned = match_mindcare_intent(message)
    if canned is not None:
        return MindcareResponse(message=canned)
    try:
        text = await _complete(gateway, "mindcare_chat", text=message)
    except EmptyCompletionError:
        text = CHAT_FALLBACK
    return MindcareResponse(message=text)
