"""
Client service layer for the OncoCare API.

Wraps each backend endpoint in a plain function call and adapts responses to
the shapes the UI expects. Any requests-compatible session can be injected
(FastAPI's TestClient included).
"""
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional, Tuple

import requests
from loguru import logger

from oncocare import config
from oncocare.errors import ClientError

CONNECTION_FALLBACK = "Sorry, I'm having trouble connecting right now. Please try again later."
QUICK_ACTION_FALLBACK = "Sorry, I couldn't get a response. Try again."


class OncoCareClient:
    def __init__(self, base_url: Optional[str] = None, session: Optional[Any] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or config.ONCOCARE_API_URL).rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout if timeout is not None else config.CLIENT_TIMEOUT

    def _post(self, path: str, payload: Dict[str, Any], error_message: str, required: Tuple[str, ...] = ()) -> Dict[str, Any]:
        url = f"{self.base_url}/api{path}"
        try:
            resp = self.session.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("Request to {} failed: {}", path, e)
            raise ClientError(error_message) from e
        if resp.status_code >= 400:
            logger.error("Server responded with an error ({}) for {}: {}", resp.status_code, path, resp.text)
            raise ClientError(error_message)
        try:
            data = resp.json()
        except ValueError as e:
            logger.error("Non-JSON response for {}: {}", path, resp.text)
            raise ClientError(error_message) from e
        if not isinstance(data, dict) or any(key not in data for key in required):
            logger.error("Unexpected response shape for {}: {}", path, data)
            raise ClientError(error_message)
        return data

    def generate_guidance(self, symptom_type: str, severity: int, notes: str, symptom_id: str = "") -> Dict[str, Any]:
        data = self._post(
            "/guidance",
            {"symptomType": symptom_type, "severity": severity, "notes": notes},
            "Failed to get guidance from AI. Please try again.",
        )
        return {
            "id": f"guidance-{int(time.time() * 1000)}",
            "symptomId": symptom_id,
            "response": data.get("response"),
            "urgencyLevel": data.get("urgencyLevel"),
            "recommendations": data.get("recommendations"),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    def simplify_note(self, original_text: str) -> str:
        data = self._post("/simplify-note", {"originalText": original_text}, "Failed to simplify note. Please try again.",
                          required=("simplifiedText",))
        return data["simplifiedText"]

    def get_chat_response(self, user_message: str) -> str:
        data = self._post("/chat-response", {"userMessage": user_message}, "Failed to get a chat response. Please try again.",
                          required=("aiResponse",))
        return data["aiResponse"]

    def get_quiz_question(self, session_id: Optional[str] = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"action": "get_question"}
        if session_id:
            payload["session_id"] = session_id
        return self._post("/quiz", payload, "Failed to load quiz question from AI. Please try again.")

    def check_quiz_answer(self, user_answer: str, session_id: Optional[str] = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"action": "check_answer", "user_answer": user_answer}
        if session_id:
            payload["session_id"] = session_id
        return self._post("/quiz", payload, "Failed to check answer with AI. Please try again.")

    def get_mindcare_response(self, message: str) -> Dict[str, Any]:
        return self._post("/mindcare/chat", {"message": message}, "Failed to get a MindCare response.",
                          required=("message",))

    def check_crisis_message(self, message: str) -> Dict[str, Any]:
        return self._post("/mindcare/check-crisis", {"message": message}, "Failed to check message.",
                          required=("isCrisis", "message"))


@dataclass
class ChatExchange:
    role: Literal["user", "ai"]
    message: str


@dataclass
class MindcareSession:
    """Client-held MindCare conversation; the log only ever grows."""

    client: OncoCareClient
    log: List[ChatExchange] = field(default_factory=list)

    def _append(self, role: str, message: str) -> None:
        self.log.append(ChatExchange(role=role, message=message))

    def send(self, message: str) -> Optional[str]:
        """Crisis check first; the mindcare chat is only called when it is not a crisis."""
        if not message.strip():
            return None
        self._append("user", message)
        try:
            crisis = self.client.check_crisis_message(message)
            if crisis.get("isCrisis"):
                reply = crisis["message"]
            else:
                reply = self.client.get_mindcare_response(message)["message"]
        except ClientError:
            reply = CONNECTION_FALLBACK
        self._append("ai", reply)
        return reply

    def quick_action(self, action: str) -> str:
        self._append("user", action)
        try:
            reply = self.client.get_mindcare_response(action)["message"]
        except ClientError:
            reply = QUICK_ACTION_FALLBACK
        self._append("ai", reply)
        return reply
