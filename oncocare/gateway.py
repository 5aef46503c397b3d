"""Model gateway: the only place that talks to the LLM provider.

The provider is Groq, reached through its OpenAI-compatible endpoint with the
``openai`` SDK. Calls are not retried (``LLM_MAX_RETRIES`` defaults to 0).
"""
import json
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from loguru import logger
from openai import APIError, AsyncOpenAI

from oncocare import config
from oncocare.errors import EmptyCompletionError, ProviderError


@dataclass
class ParseResult:
    ok: bool
    value: Dict[str, Any] = field(default_factory=dict)


_JSON_RE = re.compile(r"\{.*\}", re.DOTALL)


def parse_json_object(text: Optional[str]) -> ParseResult:
    """
    Accepts either pure JSON or a text blob containing a JSON object.
    Anything that does not yield a JSON object comes back as ParseResult(ok=False, value={}).
    """
    text = (text or "").strip()
    if not text:
        return ParseResult(ok=False)
    try:
        value = json.loads(text)
    except ValueError:
        m = _JSON_RE.search(text)
        if not m:
            return ParseResult(ok=False)
        try:
            value = json.loads(m.group(0))
        except ValueError:
            return ParseResult(ok=False)
    if not isinstance(value, dict):
        return ParseResult(ok=False)
    return ParseResult(ok=True, value=value)


class ModelGateway:
    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
    ):
        self.api_key = api_key if api_key is not None else config.GROQ_API_KEY
        self.base_url = base_url or config.LLM_BASE_URL
        self.model = model or config.MODEL_NAME
        self.timeout = timeout if timeout is not None else config.LLM_TIMEOUT
        self.max_retries = max_retries if max_retries is not None else config.LLM_MAX_RETRIES
        self._client: Optional[AsyncOpenAI] = None

    def _get_client(self) -> AsyncOpenAI:
        # Lazy so the app starts without a key in dev
        if self._client is None:
            if not self.api_key:
                raise ProviderError("GROQ_API_KEY is not set.")
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
                max_retries=self.max_retries,
            )
        return self._client

    async def complete(self, system_prompt: str, user_prompt: str, json_mode: bool = False) -> str:
        """Return the primary completion text, or raise ProviderError."""
        if not system_prompt or not system_prompt.strip():
            raise ValueError("system_prompt must be a non-empty string")
        if not user_prompt or not user_prompt.strip():
            raise ValueError("user_prompt must be a non-empty string")

        client = self._get_client()
        kwargs: Dict[str, Any] = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            resp = await client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                **kwargs,
            )
        except APIError as e:
            raise ProviderError(f"Provider call failed: {e}") from e

        content = resp.choices[0].message.content if resp.choices else None
        if not content or not content.strip():
            raise EmptyCompletionError("Provider returned an empty completion.")

        logger.debug("Completion received (model={}, json_mode={}, chars={})", self.model, json_mode, len(content))
        return content.strip()


_gateway: Optional[ModelGateway] = None


def get_gateway() -> ModelGateway:
    """Process-wide gateway; routes take it as a FastAPI dependency."""
    global _gateway
    if _gateway is None:
        _gateway = ModelGateway()
    return _gateway
