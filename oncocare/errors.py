from typing import Any, Optional


class OncoCareError(Exception):
    """Base class for errors raised by the OncoCare backend."""


class InputError(OncoCareError):
    """A required field is missing or invalid. Maps to HTTP 400."""

    def __init__(self, message: str, detail: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail if detail is not None else message


class NoActiveQuestionError(InputError):
    def __init__(self):
        super().__init__(
            "No active quiz question",
            detail={
                "feedback": "No question was asked yet. Please start a new battle.",
                "is_correct": False,
            },
        )


class ProviderError(OncoCareError):
    """The LLM provider call failed (network, auth, rate limit, non-2xx)."""


class EmptyCompletionError(ProviderError):
    """The provider answered but the completion carried no text."""


class ClientError(OncoCareError):
    """Raised by the client service layer when a backend call fails."""
