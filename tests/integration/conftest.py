"""Pytest configuration and fixtures for integration tests."""

from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from dotenv import load_dotenv

from pylifxcloud.const import DEFAULT_BASE_URL


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator


# Load .env file from project root
env_path = Path(__file__).parents[2] / ".env"
load_dotenv(env_path)


@pytest.fixture(scope="session")
def integration_config() -> dict[str, str]:
    """Load integration test configuration from environment.

    Returns:
        Dictionary with the access token and base URL.

    Raises:
        ValueError: If required environment variables are missing.
    """
    token = os.getenv("LIFX_TOKEN")
    base_url = os.getenv("LIFX_API_BASE_URL", DEFAULT_BASE_URL)

    if not token:
        msg = "Missing required environment variables. Please create .env file with LIFX_TOKEN"
        raise ValueError(msg)

    return {"token": token, "base_url": base_url}


@pytest.fixture(scope="session")
def test_selector() -> str | None:
    """Get the selector for state-changing tests from environment if available.

    Returns:
        Selector text, or None to skip tests that change light state.
    """
    return os.getenv("LIFX_TEST_SELECTOR")


@pytest.fixture(autouse=True)
async def rate_limit_delay(request: pytest.FixtureRequest) -> AsyncGenerator[None]:
    """Add delay between integration tests to stay under the API rate limit."""
    yield
    if "integration" in request.keywords:
        await asyncio.sleep(1.0)
