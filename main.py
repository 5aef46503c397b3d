import sys

from fastapi import APIRouter, Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from oncocare import __version__, config, handlers
from oncocare.errors import InputError, ProviderError
from oncocare.gateway import ModelGateway, get_gateway
from oncocare.quiz import QuizStore, get_quiz_store
from oncocare.schemas import (
    ChatRequest,
    ChatResponse,
    CrisisCheckResponse,
    GuidanceRequest,
    GuidanceResponse,
    MindcareRequest,
    MindcareResponse,
    QuizRequest,
    SimplifyNoteRequest,
    SimplifyNoteResponse,
)

logger.remove()
logger.add(sys.stderr, level=config.LOG_LEVEL)

app = FastAPI(title=config.APP_NAME, version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

router = APIRouter(prefix="/api")


def _require_text(value: str, field: str) -> str:
    text = (value or "").strip()
    if not text:
        raise HTTPException(status_code=400, detail=f"'{field}' must not be empty")
    return value


@app.get("/health")
def health():
    return {"ok": True, "model": config.MODEL_NAME}


@router.post("/guidance", response_model=GuidanceResponse, response_model_exclude_none=True)
@router.post("/get-ai-guidance", response_model=GuidanceResponse, response_model_exclude_none=True, include_in_schema=False)
async def guidance(req: GuidanceRequest, gateway: ModelGateway = Depends(get_gateway)):
    try:
        return await handlers.get_guidance(req, gateway)
    except ProviderError:
        logger.exception("Guidance provider error")
        raise HTTPException(status_code=500, detail="Failed to get AI guidance.")


@router.post("/simplify-note", response_model=SimplifyNoteResponse)
async def simplify_note(req: SimplifyNoteRequest, gateway: ModelGateway = Depends(get_gateway)):
    text = _require_text(req.originalText, "originalText")
    try:
        return await handlers.simplify_note(text, gateway)
    except ProviderError:
        logger.exception("Note simplification provider error")
        raise HTTPException(status_code=500, detail="Failed to simplify note.")


@router.post("/chat-response", response_model=ChatResponse)
async def chat_response(req: ChatRequest, gateway: ModelGateway = Depends(get_gateway)):
    text = _require_text(req.userMessage, "userMessage")
    try:
        return await handlers.chat_response(text, gateway)
    except ProviderError:
        logger.exception("Chat provider error")
        raise HTTPException(status_code=500, detail="Failed to get a chat response.")


@router.post("/quiz")
async def quiz(
    req: QuizRequest,
    gateway: ModelGateway = Depends(get_gateway),
    store: QuizStore = Depends(get_quiz_store),
):
    try:
        if req.action == "get_question":
            question = await handlers.get_quiz_question(gateway, store, session_id=req.session_id)
            return question
        if req.action == "check_answer":
            answer = await handlers.check_quiz_answer(req.user_answer, gateway, store, session_id=req.session_id)
            return answer.model_dump()
    except InputError as e:
        raise HTTPException(status_code=400, detail=e.detail)
    except ProviderError:
        logger.exception("Quiz provider error")
        raise HTTPException(status_code=500, detail="Failed to process quiz request.")
    raise HTTPException(status_code=400, detail="Invalid action.")


@router.post("/mindcare/check-crisis", response_model=CrisisCheckResponse)
def check_crisis(req: MindcareRequest):
    return handlers.check_crisis(req.message)


@router.post("/mindcare/chat", response_model=MindcareResponse)
async def mindcare_chat(req: MindcareRequest, gateway: ModelGateway = Depends(get_gateway)):
    text = _require_text(req.message, "message")
    try:
        return await handlers.mindcare_chat(text, gateway)
    except ProviderError:
        logger.exception("MindCare chat provider error")
        raise HTTPException(status_code=500, detail="Failed to get a chat response.")


app.include_router(router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=config.PORT)
