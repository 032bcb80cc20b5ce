"""Data models and schemas for the recipe generation service.

Defines Pydantic models for the Gemini generateContent wire format (request and
response envelope), the generation result handed to callers, and the HTTP
route bodies. All models use Pydantic v2.
"""

from typing import Annotated, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


# ============================================================================
# Request side
# ============================================================================


class TextPart(BaseModel):
    """A single text fragment of a request message."""

    model_config = ConfigDict(frozen=True)

    text: str


class Message(BaseModel):
    """Role-tagged message; the service only ever receives user-role messages here."""

    model_config = ConfigDict(frozen=True)

    role: str = "user"
    parts: List[TextPart]


class GenerationRequest(BaseModel):
    """Body of a generateContent call. Built fresh per call and never mutated."""

    model_config = ConfigDict(frozen=True)

    contents: List[Message]

    @classmethod
    def from_prompt(cls, prompt: str) -> "GenerationRequest":
        """Wrap a prompt as a single user-role message with one text part."""
        return cls(contents=[Message(role="user", parts=[TextPart(text=prompt)])])

    def to_payload(self) -> dict:
        return self.model_dump()


# ============================================================================
# Response envelope
# ============================================================================


class InlineData(BaseModel):
    """Base64-encoded binary embedded in a response part.

    Accepts both the camelCase (`mimeType`) and snake_case (`mime_type`) spellings.
    """

    model_config = ConfigDict(populate_by_name=True)

    data: str
    mime_type: Annotated[
        str,
        Field(
            "image/png",
            validation_alias=AliasChoices("mimeType", "mime_type"),
            serialization_alias="mimeType",
        ),
    ]


class Part(BaseModel):
    """One content part: either `text` or inline binary data."""

    model_config = ConfigDict(populate_by_name=True)

    text: Optional[str] = None
    inline_data: Annotated[
        Optional[InlineData],
        Field(
            None,
            validation_alias=AliasChoices("inlineData", "inline_data"),
            serialization_alias="inlineData",
        ),
    ]


class Content(BaseModel):
    role: Optional[str] = None
    parts: List[Part] = Field(default_factory=list)

    @field_validator("parts", mode="before")
    @classmethod
    def null_parts_as_empty(cls, v):
        return [] if v is None else v


class Candidate(BaseModel):
    content: Optional[Content] = None
    finish_reason: Annotated[
        Optional[str],
        Field(None, validation_alias=AliasChoices("finishReason", "finish_reason")),
    ]


class GenerationResponse(BaseModel):
    """Top-level envelope returned by generateContent.

    Zero candidates is a valid envelope: it means the service produced nothing usable.
    """

    candidates: List[Candidate] = Field(default_factory=list)

    @field_validator("candidates", mode="before")
    @classmethod
    def null_candidates_as_empty(cls, v):
        return [] if v is None else v


# ============================================================================
# Generation result
# ============================================================================


class GeneratedRecipe(BaseModel):
    """Result of one recipe generation.

    `text` is presentation HTML, never raw markdown. `image` is a PNG data URI,
    or None when the illustration could not be produced.
    """

    text: Annotated[str, Field(description="Recipe rendered as HTML")]
    image: Annotated[Optional[str], Field(None, description="data:image/png;base64,... URI or None")]
    markdown: Annotated[str, Field(description="Markdown text extracted from the model response")]


# ============================================================================
# HTTP route bodies
# ============================================================================


class ImagePromptRequest(BaseModel):
    """Body of POST /api/image."""

    model_config = ConfigDict(str_strip_whitespace=True)

    prompt: Annotated[str, Field(min_length=1, max_length=4000, description="Dish description")]


class RecipeRequest(BaseModel):
    """Body of POST /api/recipe.

    `ingredients` accepts a list or a comma-separated string. Order and duplicates are preserved.
    """

    ingredients: Annotated[List[str], Field(description="Ingredient tokens as typed by the user")]

    @field_validator("ingredients", mode="before")
    @classmethod
    def split_comma_string(cls, v):
        if isinstance(v, str):
            return [token.strip() for token in v.split(",") if token.strip()]
        return v
