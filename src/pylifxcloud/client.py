"""High-level entry point for the LIFX cloud API.

This module ties together the execution engine, the request builders and the
response parsers.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from aiohttp import ClientSession  # noqa: TC002 - Used at runtime in signatures

from pylifxcloud.api import LifxAPI
from pylifxcloud.builders import Scenes, Selected, SetStates, validate_request
from pylifxcloud.const import DEFAULT_ATTEMPTS, DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from pylifxcloud.parsers import parse_lights, parse_scenes


if TYPE_CHECKING:
    from types import TracebackType

    from pylifxcloud.builders import LifxRequest
    from pylifxcloud.color import Color
    from pylifxcloud.models import Light, Scene
    from pylifxcloud.resilience import RateLimiter
    from pylifxcloud.selector import Select

_LOGGER = logging.getLogger(__name__)


class LifxClient:
    """Client for the LIFX cloud API.

    The client owns a :class:`LifxAPI` engine and hands out request builders.
    Nothing is sent until ``send()`` is awaited on a builder or request.

    Example:
        Basic usage with automatic session management:

        ```python
        from pylifxcloud import LifxClient, Selector, State, RED

        async with LifxClient("token") as client:
            lights = await client.get_lights(Selector.all())
            for light in lights:
                print(light.label, light.power)

            await client.select(Selector.label("Desk")).set_state().color(RED).send()
        ```

        Session injection and a custom rate-limit fallback:

        ```python
        from aiohttp import ClientSession
        from pylifxcloud import LifxClient
        from pylifxcloud.resilience import RateLimiter

        async with ClientSession() as session:
            client = LifxClient(
                "token",
                session=session,
                rate_limiter=RateLimiter(default_retry_delay=30.0),
            )
            async with client:
                await client.select("all").toggle().retries(3).send()
        ```

    Attributes:
        api: Low-level LifxAPI instance for HTTP communication.
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        *,
        session: ClientSession | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        rate_limiter: RateLimiter | None = None,
    ) -> None:
        """Initialize the LIFX client.

        Args:
            token: LIFX personal access token.
            base_url: Base URL for the API. Defaults to the LIFX production API.
            session: Optional aiohttp ClientSession. If not provided, one will be
                created when entering the context manager.
            timeout: Total timeout for each HTTP round trip, in seconds.
            rate_limiter: Optional RateLimiter for handling 429 responses.
        """
        self._api = LifxAPI(
            token,
            session=session,
            base_url=base_url,
            timeout=timeout,
            rate_limiter=rate_limiter,
        )

    @property
    def api(self) -> LifxAPI:
        """Get the underlying execution engine.

        Returns:
            LifxAPI instance.
        """
        return self._api

    async def __aenter__(self) -> LifxClient:
        """Enter the context manager, creating a session if needed."""
        await self._api.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the context manager and close the session if the client owns it."""
        await self._api.__aexit__(exc_type, exc_val, exc_tb)

    def select(self, selector: Select | str) -> Selected:
        """Target the lights named by ``selector``.

        Args:
            selector: A selector, or its text form (parsed with :meth:`Selector.parse`).

        Returns:
            Operations on the selected lights.

        Raises:
            SelectorParseError: If ``selector`` is text that does not parse.
        """
        return Selected(self._api, selector)

    def set_states(self) -> SetStates:
        """Start a request setting several states in one call."""
        return SetStates(self._api)

    def validate(self, color: Color | str) -> LifxRequest:
        """Ask the API whether it understands a color string."""
        return validate_request(self._api, color)

    def scenes(self) -> Scenes:
        """Scene operations."""
        return Scenes(self._api)

    async def get_lights(self, selector: Select | str = "all", *, attempts: int = DEFAULT_ATTEMPTS) -> list[Light]:
        """Describe the lights named by ``selector``.

        Args:
            selector: Lights to describe (default: all).
            attempts: Attempt budget for the request.

        Returns:
            Parsed lights, in the order the API returned them.

        Raises:
            LifxError: If the request fails.
        """
        response = await self.select(selector).list().retries(attempts).send()
        lights = parse_lights(response.data)
        _LOGGER.debug("Fetched %d lights for %s", len(lights), selector)
        return lights

    async def get_scenes(self, *, attempts: int = DEFAULT_ATTEMPTS) -> list[Scene]:
        """List the account's scenes.

        Raises:
            LifxError: If the request fails.
        """
        response = await self.scenes().list().retries(attempts).send()
        return parse_scenes(response.data)
