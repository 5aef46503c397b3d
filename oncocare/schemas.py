from pydantic import BaseModel, Field, field_validator
from typing import Annotated, Optional, List, Literal

SymptomType = Literal["pain", "fatigue", "nausea", "dizziness", "other"]
UrgencyLevel = Literal["low", "medium", "high"]
Recommendations = Annotated[List[str], Field(min_length=2, max_length=3)]


class GuidanceRequest(BaseModel):
    symptomType: SymptomType
    severity: int  # 1-5 scale, forwarded to the model as-is
    notes: str = ""


class GuidanceResponse(BaseModel):
    # All optional: a malformed provider payload degrades to {}
    urgencyLevel: Optional[UrgencyLevel] = None
    response: Optional[str] = None
    recommendations: Optional[Recommendations] = None

    @field_validator("urgencyLevel", mode="before")
    @classmethod
    def _lower_urgency(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class SimplifyNoteRequest(BaseModel):
    originalText: str


class SimplifyNoteResponse(BaseModel):
    simplifiedText: str


class ChatRequest(BaseModel):
    userMessage: str


class ChatResponse(BaseModel):
    aiResponse: str


class QuizRequest(BaseModel):
    action: str  # "get_question" | "check_answer"
    user_answer: Optional[str] = None
    session_id: Optional[str] = None  # omit to share the process-wide quiz slot


class QuizAnswerResponse(BaseModel):
    is_correct: bool
    feedback: str


class MindcareRequest(BaseModel):
    message: str


class CrisisCheckResponse(BaseModel):
    isCrisis: bool
    message: str = ""


class MindcareResponse(BaseModel):
    message: str
