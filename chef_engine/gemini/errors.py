"""Exception hierarchy for Gemini generation calls.

All failures raised by the invoker and orchestrator derive from GenerationError.
An empty extraction is not an exception; see chef_engine.gemini.extractor.NotFound.
"""

from typing import Optional


class GenerationError(Exception):
    """Base class for recipe/image generation failures."""


class InputValidationError(GenerationError, ValueError):
    """Input or configuration rejected before any network call (empty ingredients, missing key)."""


class NetworkError(GenerationError, ConnectionError):
    """Transport-level failure: no HTTP response was received. Never retried."""


class HttpError(GenerationError):
    """Upstream returned a non-2xx status.

    Attributes:
        status: HTTP status code.
        body: Parsed JSON body, or {} when the body was not JSON.
        message: `body.error.message` when present, else "API error: <status>".
    """

    def __init__(self, status: int, body: Optional[dict] = None, message: Optional[str] = None) -> None:
        self.status = status
        self.body = body if isinstance(body, dict) else {}
        self.message = message or error_message_from_body(self.body, status)
        super().__init__(self.message)

    @property
    def error(self) -> dict:
        """Upstream `error` object, or a minimal one built from the message."""
        upstream = self.body.get("error")
        if isinstance(upstream, dict):
            return upstream
        return {"message": self.message}


class RateLimitExhausted(HttpError):
    """HTTP 429 persisted after every retry was spent."""

    def __init__(self, status: int, body: Optional[dict] = None, attempts: int = 0) -> None:
        super().__init__(status, body)
        self.attempts = attempts


def error_message_from_body(body: dict, status: int) -> str:
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return f"API error: {status}"
