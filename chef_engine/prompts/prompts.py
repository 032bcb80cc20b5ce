"""Prompt templates for recipe and illustration generation.

Factory functions return the exact text sent to the model. The recipe prompt
fixes a five-part output format; the image prompt asks for a single PNG as
inline base64 data with photographic style and negative constraints.
"""

from typing import Sequence

NO_RESPONSE_TEXT = "No response generated."

RECIPE_SYSTEM_INSTRUCTIONS = """You are a world-class chef. Format with:
1. Recipe Title
2. Ingredients
3. Instructions
4. Flavor Enhancements
5. YouTube Search Keyword."""


def format_ingredients(ingredients: Sequence[str]) -> str:
    """Join ingredient tokens verbatim, in order, duplicates kept."""
    return ", ".join(ingredients)


def get_user_query(ingredients: Sequence[str]) -> str:
    return f"Using these ingredients: {format_ingredients(ingredients)}. Create a flavorful recipe."


def get_recipe_prompt(ingredients: Sequence[str]) -> str:
    """System instructions followed by the ingredient query, as one user message."""
    return RECIPE_SYSTEM_INSTRUCTIONS + "\n\n" + get_user_query(ingredients)


def get_food_photography_prompt(dish_description: str) -> str:
    """Photography style brief for the dish."""
    return f"""
High-quality, ultra-realistic food photography of the dish described below.
It should look delicious, well-plated, and ready to serve in a restaurant setting.

Dish description: {dish_description}

Style details:
- Studio lighting, 50mm lens depth-of-field blur
- Natural shadows and highlights
- Top-down or 45° angle shot
- Rich color tones and appetizing textures
- White plate, wooden table, soft background bokeh
- No people, no text overlay, no borders
"""


def get_image_prompt(description: str) -> str:
    """Wrap a dish description in the inline-PNG image request."""
    return f"""
Generate a single high-quality image of this dish.
Return the image as base64 inline_data (PNG only).

Dish description:
{description}

Make it realistic, restaurant-quality, no text, no people, no borders.
"""
