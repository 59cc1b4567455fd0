"""Pytest configuration and fixtures for integration tests.

Ensures environment variables are loaded and skips the suite when the
completion API key is not configured.
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv


def pytest_configure(config):
    """Load .env from the project root before test collection."""
    env_path = Path(__file__).parent.parent.parent / ".env"
    load_dotenv(env_path)

    print("\n" + "=" * 70)
    print("Note: Integration tests call the real completion API and require OPENAI_API_KEY")
    print(f"Environment loaded from: {env_path}")
    print("=" * 70 + "\n")


@pytest.fixture(scope="session", autouse=True)
def check_api_key():
    """Skip integration tests if OPENAI_API_KEY is not configured."""
    if not os.getenv("OPENAI_API_KEY"):
        pytest.skip(
            "Integration tests skipped. Missing OPENAI_API_KEY. Please set it in your .env file.",
            allow_module_level=True,
        )
