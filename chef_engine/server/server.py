"""HTTP boundary for the recipe generator.

Routes:
- POST /api/generate: forward an arbitrary generateContent body to the text model (single attempt)
- POST /api/image:    {prompt} -> {image: data URI}, image request built server-side
- POST /api/recipe:   {ingredients} -> {text, image, markdown} via RecipeGenerator
- GET  /ping:         liveness

Failures are returned as {"error": {"message": ...}} with the upstream status code.
The API key stays on the server; clients never see it.
"""

from fastapi import Body, Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from chef_engine.gemini.errors import HttpError, InputValidationError, NetworkError
from chef_engine.gemini.extractor import Found
from chef_engine.gemini.invoker import RetryingInvoker
from chef_engine.models.models import GeneratedRecipe, ImagePromptRequest, RecipeRequest
from chef_engine.services.orchestrator import RecipeGenerator, to_data_uri
from chef_engine.utils.config import config
from chef_engine.utils.logger import logger

app = FastAPI(
    title="Chef Engine API",
    description="Recipe and dish illustration generation backed by Gemini.",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_generator() -> RecipeGenerator:
    return RecipeGenerator()


def get_proxy_invoker() -> RetryingInvoker:
    # Clients run their own backoff against this route, so forward exactly once
    return RetryingInvoker(max_retries=0)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": {"message": message}})


@app.get("/ping", tags=["Health"])
async def ping() -> dict:
    return {"status": "ok"}


@app.post("/api/generate", tags=["Recipe"])
async def generate(payload: dict = Body(...), invoker: RetryingInvoker = Depends(get_proxy_invoker)):
    """Proxy a generateContent body verbatim to the text model."""
    try:
        return await invoker.invoke(config.endpoint_for(config.TEXT_MODEL), payload)
    except HttpError as e:
        logger.error(f"Text API error: {e.message}", extra={"status": e.status})
        return JSONResponse(status_code=e.status, content={"error": e.error})
    except NetworkError as e:
        logger.error(f"Server /api/generate error: {e}")
        return error_response(500, "Server error while generating recipe")


@app.post("/api/image", tags=["Image"])
async def image(request: ImagePromptRequest, generator: RecipeGenerator = Depends(get_generator)):
    """Generate a dish illustration and return it as a PNG data URI."""
    try:
        result = await generator.fetch_image(request.prompt)
    except InputValidationError as e:
        return error_response(500, str(e))
    except HttpError as e:
        logger.error(f"Image API error: {e.message}", extra={"status": e.status})
        return JSONResponse(status_code=e.status, content={"error": e.error})
    except NetworkError as e:
        logger.error(f"Server /api/image error: {e}")
        return error_response(500, "Server error while generating image")

    if not isinstance(result, Found):
        logger.warning("No inline_data image found in Gemini response.")
        return error_response(500, "No image returned from Gemini")
    return {"image": to_data_uri(result.value)}


@app.post("/api/recipe", tags=["Recipe"], response_model=GeneratedRecipe)
async def recipe(request: RecipeRequest, generator: RecipeGenerator = Depends(get_generator)):
    """Run the full generation: rendered recipe plus optional illustration."""
    try:
        return await generator.generate_recipe(request.ingredients)
    except InputValidationError as e:
        return error_response(400, str(e))
    except HttpError as e:
        return JSONResponse(status_code=e.status, content={"error": e.error})
    except NetworkError as e:
        logger.error(f"Server /api/recipe error: {e}")
        return error_response(502, "Server error while generating recipe")
