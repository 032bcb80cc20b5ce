"""Pytest configuration and fixtures for integration tests.

Loads .env from the project root and skips the whole directory when no
GEMINI_API_KEY is available, since these tests call the live Gemini API.
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv


def pytest_configure(config):
    """Load environment variables before test collection."""
    env_path = Path(__file__).parent.parent.parent / ".env"
    load_dotenv(env_path)

    print("\n" + "=" * 70)
    print("Note: These tests require a valid GEMINI_API_KEY")
    print(f"Environment loaded from: {env_path}")
    print("=" * 70 + "\n")


@pytest.fixture(scope="session", autouse=True)
def check_api_key():
    """Skip integration tests when the Gemini key is not configured."""
    if not (os.getenv("GEMINI_API_KEY") or os.getenv("VITE_GEMINI_API_KEY")):
        pytest.skip(
            "Integration tests skipped. Missing GEMINI_API_KEY. Please set it in your .env file.",
            allow_module_level=True,
        )
