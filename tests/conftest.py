"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from aiohttp import ClientSession, web

from pylifxcloud.api import LifxAPI
from pylifxcloud.models import ApiResponse


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable

    from aiohttp.test_utils import TestClient


TEST_TOKEN = "test-token"  # noqa: S105


@pytest.fixture
async def mock_session() -> AsyncGenerator[ClientSession]:
    """Create a mock aiohttp ClientSession.

    Yields:
        Mock ClientSession for testing.
    """
    session = AsyncMock(spec=ClientSession)
    session.closed = False

    async def mock_close() -> None:
        session.closed = True

    session.close = mock_close

    yield session

    if not session.closed:
        await session.close()


@pytest.fixture
def mock_api() -> MagicMock:
    """Create a mock LifxAPI whose send() returns an empty 200 response.

    Returns:
        Mock LifxAPI for builder tests.
    """
    api = MagicMock(spec=LifxAPI)
    api.send = AsyncMock(return_value=ApiResponse(status=200, url="https://api.lifx.com/v1/lights/all"))
    return api


@pytest.fixture
def make_api(
    aiohttp_client: Callable[[web.Application], Awaitable[TestClient]],
) -> Callable[..., Awaitable[LifxAPI]]:
    """Factory creating a LifxAPI wired to an in-process fake server.

    Returns:
        Coroutine function taking an ``aiohttp.web.Application`` plus LifxAPI
        keyword arguments.
    """

    async def _make_api(app: web.Application, **kwargs: Any) -> LifxAPI:
        client = await aiohttp_client(app)
        return LifxAPI(
            TEST_TOKEN,
            session=client.session,
            base_url=str(client.make_url("")),
            **kwargs,
        )

    return _make_api


@pytest.fixture
def json_app() -> Callable[..., web.Application]:
    """Factory building a fake API that answers one route with fixed JSON.

    Returns:
        Function taking ``(path, payload, *, method="GET", status=200)``.
    """

    def _json_app(path: str, payload: Any, *, method: str = "GET", status: int = 200) -> web.Application:
        app = web.Application()

        async def handler(request: web.Request) -> web.Response:
            return web.json_response(payload, status=status)

        app.router.add_route(method, f"/v1{path}", handler)
        return app

    return _json_app
