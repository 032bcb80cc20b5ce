"""Content extraction from Gemini response envelopes.

The raw JSON body is not validated as a whole. `candidates[0].content.parts`
is walked in order and each part is decoded only when reached, stopping at the
first part of the requested kind. Later candidates are never consulted.

An envelope with nothing usable yields NOT_FOUND rather than raising; callers
branch on the result:

    result = extract_text(body)
    if isinstance(result, Found):
        markdown = result.value
"""

import base64
import binascii
from dataclasses import dataclass
from typing import Generic, Iterator, NamedTuple, Optional, TypeVar, Union

from pydantic import ValidationError

from chef_engine.models.models import GenerationResponse, Part
from chef_engine.utils.logger import logger

T = TypeVar("T")

@dataclass(frozen=True)
class Found(Generic[T]):
    value: T

class NotFound:
    """The service produced nothing usable. A normal outcome, not an error."""

    _instance: Optional["NotFound"] = None

    def __new__(cls) -> "NotFound":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOT_FOUND"

    def __bool__(self) -> bool:
        return False

NOT_FOUND = NotFound()

Extraction = Union[Found[T], NotFound]

class InlineImage(NamedTuple):
    data: bytes
    mime_type: str

def _first_candidate_parts(envelope) -> Iterator[Part]:
    """Yield the parts of `candidates[0]`, validating each one only when reached.

    Later candidates and parts after the first match are never decoded, so a
    malformed fragment there cannot hide usable content. Parts that do not
    validate are logged and skipped.
    """
    if isinstance(envelope, GenerationResponse):
        if envelope.candidates and envelope.candidates[0].content:
            yield from envelope.candidates[0].content.parts
        return

    candidates = envelope.get("candidates") if isinstance(envelope, dict) else None
    if not isinstance(candidates, list) or not candidates:
        if candidates is not None:
            logger.warning(f"Unrecognised response envelope: candidates is {type(candidates).__name__}")
        return

    first = candidates[0]
    content = first.get("content") if isinstance(first, dict) else None
    raw_parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(raw_parts, list):
        return

    for index, raw_part in enumerate(raw_parts):
        try:
            yield Part.model_validate(raw_part)
        except ValidationError as e:
            logger.warning(f"Skipping unrecognised response part {index}: {e.error_count()} validation error(s)")


def extract_text(envelope) -> Extraction[str]:
    """Return the first text fragment of the first candidate."""
    for part in _first_candidate_parts(envelope):
        if part.text is not None:
            return Found(part.text)
    return NOT_FOUND

def extract_inline_binary(envelope) -> Extraction[InlineImage]:
    """Return the first inline binary fragment of the first candidate, base64-decoded."""
    for part in _first_candidate_parts(envelope):
        if part.inline_data is not None and part.inline_data.data:
            try:
                data = base64.b64decode(part.inline_data.data, validate=True)
            except (binascii.Error, ValueError) as e:
                logger.warning(f"Inline data is not valid base64: {e}")
                return NOT_FOUND
            return Found(InlineImage(data=data, mime_type=part.inline_data.mime_type))
    return NOT_FOUND
