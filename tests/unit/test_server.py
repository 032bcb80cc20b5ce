"""Unit tests for the HTTP boundary (FastAPI routes)."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from chef_engine.gemini.errors import HttpError, InputValidationError, NetworkError, RateLimitExhausted
from chef_engine.gemini.extractor import NOT_FOUND, Found, InlineImage
from chef_engine.models.models import GeneratedRecipe
from chef_engine.server.server import app, get_generator, get_proxy_invoker

UPSTREAM_BODY = {"candidates": [{"content": {"parts": [{"text": "**Soup**"}]}}]}


@pytest.fixture
def generator():
    fake = MagicMock()
    fake.fetch_image = AsyncMock()
    fake.generate_recipe = AsyncMock()
    app.dependency_overrides[get_generator] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_generator, None)


@pytest.fixture
def invoker():
    fake = MagicMock()
    fake.invoke = AsyncMock()
    app.dependency_overrides[get_proxy_invoker] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_proxy_invoker, None)


@pytest.fixture
def client():
    return TestClient(app)


class TestPing:
    def test_ping(self, client):
        assert client.get("/ping").json() == {"status": "ok"}


class TestGenerateProxy:
    """POST /api/generate forwards the body unchanged."""

    def test_forwards_payload_verbatim(self, client, invoker):
        invoker.invoke.return_value = UPSTREAM_BODY
        payload = {"contents": [{"role": "user", "parts": [{"text": "soup"}]}], "generationConfig": {"x": 1}}

        response = client.post("/api/generate", json=payload)

        assert response.status_code == 200
        assert response.json() == UPSTREAM_BODY
        endpoint, forwarded = invoker.invoke.await_args.args
        assert ":generateContent?key=" in endpoint
        assert forwarded == payload

    def test_upstream_error_status_passed_through(self, client, invoker):
        upstream_error = {"code": 400, "message": "API key not valid", "status": "INVALID_ARGUMENT"}
        invoker.invoke.side_effect = HttpError(400, {"error": upstream_error})

        response = client.post("/api/generate", json={"contents": []})

        assert response.status_code == 400
        assert response.json() == {"error": upstream_error}

    def test_rate_limited_passed_through(self, client, invoker):
        invoker.invoke.side_effect = RateLimitExhausted(429, {}, attempts=1)

        response = client.post("/api/generate", json={"contents": []})

        assert response.status_code == 429
        assert response.json() == {"error": {"message": "API error: 429"}}

    def test_network_failure(self, client, invoker):
        invoker.invoke.side_effect = NetworkError("down")

        response = client.post("/api/generate", json={"contents": []})

        assert response.status_code == 500
        assert response.json() == {"error": {"message": "Server error while generating recipe"}}

    def test_proxy_invoker_does_not_retry(self):
        assert get_proxy_invoker().max_retries == 0


class TestImageRoute:
    """POST /api/image builds the image request server-side."""

    def test_returns_data_uri(self, client, generator):
        generator.fetch_image.return_value = Found(InlineImage(b"abc", "image/png"))

        response = client.post("/api/image", json={"prompt": "Tomato soup"})

        assert response.status_code == 200
        assert response.json() == {"image": "data:image/png;base64,YWJj"}
        generator.fetch_image.assert_awaited_once_with("Tomato soup")

    def test_no_inline_image(self, client, generator):
        generator.fetch_image.return_value = NOT_FOUND

        response = client.post("/api/image", json={"prompt": "Tomato soup"})

        assert response.status_code == 500
        assert response.json() == {"error": {"message": "No image returned from Gemini"}}

    def test_upstream_error(self, client, generator):
        generator.fetch_image.side_effect = HttpError(503, {"error": {"message": "overloaded"}})

        response = client.post("/api/image", json={"prompt": "Tomato soup"})

        assert response.status_code == 503
        assert response.json()["error"]["message"] == "overloaded"

    def test_network_failure(self, client, generator):
        generator.fetch_image.side_effect = NetworkError("down")

        response = client.post("/api/image", json={"prompt": "Tomato soup"})

        assert response.status_code == 500
        assert response.json() == {"error": {"message": "Server error while generating image"}}

    def test_missing_prompt_rejected(self, client, generator):
        assert client.post("/api/image", json={}).status_code == 422
        generator.fetch_image.assert_not_awaited()


class TestRecipeRoute:
    """POST /api/recipe runs the full generation."""

    def test_success(self, client, generator):
        generator.generate_recipe.return_value = GeneratedRecipe(
            text='<p class="ce-p"><strong>Soup</strong></p>', image=None, markdown="**Soup**"
        )

        response = client.post("/api/recipe", json={"ingredients": "tomato, basil"})

        assert response.status_code == 200
        assert response.json() == {
            "text": '<p class="ce-p"><strong>Soup</strong></p>',
            "image": None,
            "markdown": "**Soup**",
        }
        generator.generate_recipe.assert_awaited_once_with(["tomato", "basil"])

    def test_validation_error(self, client, generator):
        generator.generate_recipe.side_effect = InputValidationError("Please enter at least one ingredient.")

        response = client.post("/api/recipe", json={"ingredients": []})

        assert response.status_code == 400
        assert response.json() == {"error": {"message": "Please enter at least one ingredient."}}

    def test_upstream_error(self, client, generator):
        generator.generate_recipe.side_effect = RateLimitExhausted(429, {"error": {"message": "quota"}}, attempts=4)

        response = client.post("/api/recipe", json={"ingredients": ["egg"]})

        assert response.status_code == 429
        assert response.json() == {"error": {"message": "quota"}}

    def test_network_failure(self, client, generator):
        generator.generate_recipe.side_effect = NetworkError("down")

        response = client.post("/api/recipe", json={"ingredients": ["egg"]})

        assert response.status_code == 502
