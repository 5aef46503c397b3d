import os
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv(dotenv_path=".env")


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def _origins_env(name: str) -> List[str]:
    origins_env = os.getenv(name, "")
    if origins_env:
        return [o.strip() for o in origins_env.split(",") if o.strip()]
    return ["*"]  # relax for demo


APP_NAME = "OncoCare Backend"

GROQ_API_KEY: Optional[str] = os.getenv("GROQ_API_KEY")
LLM_BASE_URL: str = os.getenv("LLM_BASE_URL", "https://api.groq.com/openai/v1").rstrip("/")
MODEL_NAME: str = os.getenv("MODEL_NAME", "llama-3.1-8b-instant")

# Outbound calls are not retried unless LLM_MAX_RETRIES says so.
LLM_TIMEOUT: float = _float_env("LLM_TIMEOUT", 60.0)
LLM_MAX_RETRIES: int = _int_env("LLM_MAX_RETRIES", 0)

ALLOWED_ORIGINS: List[str] = _origins_env("ALLOWED_ORIGINS")
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
PORT: int = _int_env("PORT", 3001)

ONCOCARE_API_URL: str = os.getenv("ONCOCARE_API_URL", "http://localhost:3001").rstrip("/")
# Client-side wait for the backend; separate from LLM_TIMEOUT since one backend
# request can wrap a full provider call.
CLIENT_TIMEOUT: float = _float_env("ONCOCARE_CLIENT_TIMEOUT", 90.0)
