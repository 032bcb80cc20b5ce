"""Recipe generation orchestrator.

Composes prompts, the retrying invoker, envelope extraction and markdown
conversion into one call:

1. Validate input (non-empty ingredients, configured API key) - fail fast
2. Text request to TEXT_MODEL - any failure propagates, no image call is made
3. Extract text (fallback "No response generated.") and render HTML
4. Image request to IMAGE_MODEL - any failure degrades to image=None

The image step never raises: a missing illustration is reported as None so
callers cannot mistake it for a failed generation.
"""

import base64
from typing import Optional, Sequence, Union

from chef_engine.gemini.errors import GenerationError, InputValidationError
from chef_engine.gemini.extractor import Extraction, Found, InlineImage, extract_inline_binary, extract_text
from chef_engine.gemini.invoker import RetryingInvoker
from chef_engine.formatting.markup import convert
from chef_engine.models.models import GeneratedRecipe, GenerationRequest
from chef_engine.prompts.prompts import (
    NO_RESPONSE_TEXT,
    format_ingredients,
    get_food_photography_prompt,
    get_image_prompt,
    get_recipe_prompt,
)
from chef_engine.utils.config import Config, config
from chef_engine.utils.logger import logger


def to_data_uri(image: InlineImage) -> str:
    """PNG data URI for an extracted image (payload re-encoded from the decoded bytes)."""
    return f"data:image/png;base64,{base64.b64encode(image.data).decode('ascii')}"


class RecipeGenerator:
    """Turns an ingredient list into a rendered recipe and an optional illustration."""

    def __init__(self, invoker: Optional[RetryingInvoker] = None, settings: Optional[Config] = None) -> None:
        self.settings = settings or config
        self.invoker = invoker or RetryingInvoker()

    def _require_api_key(self) -> None:
        if not self.settings.GEMINI_API_KEY:
            raise InputValidationError("Missing API key! Set GEMINI_API_KEY in your environment or .env file.")

    @staticmethod
    def _validate_ingredients(ingredients: Union[str, Sequence[str]]) -> list[str]:
        tokens = [ingredients] if isinstance(ingredients, str) else list(ingredients or [])
        if not any(isinstance(token, str) and token.strip() for token in tokens):
            raise InputValidationError("Please enter at least one ingredient.")
        return tokens

    async def generate_recipe(self, ingredients: Union[str, Sequence[str]]) -> GeneratedRecipe:
        """Generate a recipe for the ingredients.

        Args:
            ingredients: Ingredient tokens, passed verbatim (order and duplicates kept).
                A plain string is treated as a single token.

        Returns:
            GeneratedRecipe with HTML text, source markdown and optional PNG data URI.

        Raises:
            InputValidationError: Empty ingredients or no API key. No request is sent.
            NetworkError / HttpError / RateLimitExhausted: Text request failed.
        """
        tokens = self._validate_ingredients(ingredients)
        self._require_api_key()

        logger.info(f"Generating recipe for {len(tokens)} ingredient(s)", extra={"model": self.settings.TEXT_MODEL})
        request = GenerationRequest.from_prompt(get_recipe_prompt(tokens))
        body = await self.invoker.invoke(self.settings.endpoint_for(self.settings.TEXT_MODEL), request.to_payload())

        extracted = extract_text(body)
        if isinstance(extracted, Found) and extracted.value:
            markdown = extracted.value
        else:
            logger.warning("Text response contained no text part, using fallback")
            markdown = NO_RESPONSE_TEXT
        html = convert(markdown)

        image = None
        if self.settings.ENABLE_IMAGE_GENERATION:
            image = await self.generate_image(get_food_photography_prompt(format_ingredients(tokens)))

        return GeneratedRecipe(text=html, image=image, markdown=markdown)

    async def fetch_image(self, description: str) -> Extraction[InlineImage]:
        """Request an illustration and extract its inline data.

        Raises:
            InputValidationError: No API key.
            NetworkError / HttpError / RateLimitExhausted: Image request failed.
        """
        self._require_api_key()
        request = GenerationRequest.from_prompt(get_image_prompt(description))
        logger.info("Requesting dish illustration", extra={"model": self.settings.IMAGE_MODEL})
        body = await self.invoker.invoke(self.settings.endpoint_for(self.settings.IMAGE_MODEL), request.to_payload())
        return extract_inline_binary(body)

    async def generate_image(self, description: str) -> Optional[str]:
        """Illustration as a PNG data URI, or None on any failure (logged, never raised)."""
        try:
            result = await self.fetch_image(description)
        except GenerationError as e:
            logger.warning(f"Image generation failed, continuing without image: {e}")
            return None
        except Exception as e:
            # Illustration is optional
            logger.warning(f"Unexpected image generation error, continuing without image: {e}", exc_info=True)
            return None

        if not isinstance(result, Found):
            logger.warning("No inline image data found in image response")
            return None
        return to_data_uri(result.value)
