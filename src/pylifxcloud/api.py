"""Low-level execution engine for the LIFX HTTP API.

This module sends finished :class:`LifxRequest` descriptors, classifies the
HTTP outcome into the exception hierarchy from :mod:`pylifxcloud.exceptions`
and retries according to each request's attempt budget.
"""

from __future__ import annotations

import json
import logging
from functools import partial
from http import HTTPStatus
from typing import TYPE_CHECKING, Any

from aiohttp import (
    ClientConnectionError,
    ClientError,
    ClientSession,
    ClientTimeout,
    TooManyRedirects,
)

from pylifxcloud.const import (
    API_VERSION_PATH,
    DEFAULT_ATTEMPTS,
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    RATE_LIMIT_RESET_HEADER,
)
from pylifxcloud.exceptions import (
    BadAccessTokenError,
    BadOAuthScopeError,
    BadRequestError,
    LifxClientError,
    LifxConnectionError,
    LifxError,
    LifxServerError,
    LifxTimeoutError,
    LifxUnknownError,
    NotFoundError,
    RateLimitError,
    RedirectError,
    SerializationError,
)
from pylifxcloud.models import ApiResponse
from pylifxcloud.resilience import RateLimiter, compute_reset_deadline, retry_with_attempts


if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

    from aiohttp import ClientResponse

    from pylifxcloud.builders import LifxRequest

_LOGGER = logging.getLogger(__name__)


def classify_response(status: int, url: str, headers: Mapping[str, str]) -> LifxError | None:
    """Map a non-2xx HTTP status to an exception.

    Args:
        status: HTTP status code.
        url: Request URL (carried by :class:`NotFoundError`).
        headers: Response headers (``x-ratelimit-reset`` is read on 429).

    Returns:
        The exception to raise, or None for a 2xx status.
    """
    if HTTPStatus.OK <= status < HTTPStatus.MULTIPLE_CHOICES:
        return None

    if status == HTTPStatus.TOO_MANY_REQUESTS:
        reset_at = compute_reset_deadline(headers.get(RATE_LIMIT_RESET_HEADER))
        return RateLimitError(f"Rate limited by {url}", reset_at=reset_at)
    if status in (HTTPStatus.BAD_REQUEST, HTTPStatus.UNPROCESSABLE_ENTITY):
        return BadRequestError(f"Bad request ({status}) for {url}", status=status)
    if status == HTTPStatus.UNAUTHORIZED:
        return BadAccessTokenError("Access token rejected", status=status)
    if status == HTTPStatus.FORBIDDEN:
        return BadOAuthScopeError("Access token lacks the required scope", status=status)
    if status == HTTPStatus.NOT_FOUND:
        return NotFoundError(f"Not found: {url}", url=url)
    if HTTPStatus.BAD_REQUEST <= status < HTTPStatus.INTERNAL_SERVER_ERROR:
        return LifxClientError(f"Client error ({status}) for {url}", status=status)
    if status >= HTTPStatus.INTERNAL_SERVER_ERROR:
        return LifxServerError(f"Server error ({status}) for {url}", status=status)
    return LifxUnknownError(f"Unexpected status {status} for {url}")


class LifxAPI:
    """Low-level execution engine for the LIFX cloud API.

    This class handles raw HTTP communication: URL construction, the bearer
    token header, JSON bodies, status classification and the retry loop.
    Request descriptors are built by :mod:`pylifxcloud.builders`.

    Example:
        ```python
        from pylifxcloud.api import LifxAPI
        from pylifxcloud.builders import LifxRequest

        async with LifxAPI("token") as api:
            request = LifxRequest(api, "GET", "/lights/all").retries(3)
            response = await api.send(request)
            print(response.data)
        ```

    Attributes:
        base_url: Base URL for the API (default: https://api.lifx.com).
    """

    def __init__(
        self,
        token: str,
        *,
        session: ClientSession | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        rate_limiter: RateLimiter | None = None,
    ) -> None:
        """Initialize the API engine.

        Args:
            token: LIFX personal access token.
            session: Optional aiohttp ClientSession. If not provided, one will be
                created when entering the context manager.
            base_url: Base URL for the API. Defaults to the LIFX production API.
            timeout: Total timeout for each HTTP round trip, in seconds.
            rate_limiter: Optional RateLimiter for handling 429 responses.
        """
        self._token = token
        self._session = session
        self._owns_session = session is None
        self._base_url = base_url.rstrip("/")
        self._timeout = ClientTimeout(total=timeout)
        self._rate_limiter = rate_limiter or RateLimiter()

    @property
    def base_url(self) -> str:
        """Base URL requests are sent to."""
        return self._base_url

    @property
    def rate_limiter(self) -> RateLimiter:
        """Rate limiter consulted on 429 responses."""
        return self._rate_limiter

    def set_session(self, session: ClientSession) -> None:
        """Use an externally managed session (not closed by this engine)."""
        self._session = session
        self._owns_session = False

    async def __aenter__(self) -> LifxAPI:
        """Enter the context manager, creating a session if needed."""
        if self._session is None:
            self._session = ClientSession()
            self._owns_session = True
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the context manager.

        Closes session if it was created by this engine.
        """
        await self.close()

    async def close(self) -> None:
        """Close the session if this engine owns it."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    def url_for(self, path: str) -> str:
        """Compose the absolute URL for a relative API path."""
        return f"{self._base_url}{API_VERSION_PATH}{path}"

    async def send(self, request: LifxRequest) -> ApiResponse:
        """Send a request, retrying per its attempt budget.

        Args:
            request: Finished request descriptor.

        Returns:
            The first successful response.

        Raises:
            LifxClientError: On a non-retryable 4xx, or a 429 on the last attempt.
            LifxError: The last failure once the attempt budget is exhausted.
            RuntimeError: If no session is available.
        """
        return await self.request(
            request.method,
            request.path,
            json_data=request.body,
            attempts=request.attempts,
        )

    async def request(
        self,
        method: str,
        path: str,
        *,
        json_data: Any = None,
        attempts: int = DEFAULT_ATTEMPTS,
    ) -> ApiResponse:
        """Make an authenticated API request with retries.

        Args:
            method: HTTP method (GET, PUT, POST).
            path: API path relative to ``/v1`` (e.g., "/lights/all").
            json_data: JSON-serializable body, or None for no body.
            attempts: Total attempt budget.

        Returns:
            The first successful response.
        """
        return await retry_with_attempts(
            partial(self._send_once, method, path, json_data),
            attempts=attempts,
            rate_limiter=self._rate_limiter,
        )

    async def _send_once(self, method: str, path: str, json_data: Any) -> ApiResponse:
        if self._session is None:
            msg = "Session not initialized. Use 'async with' or provide a session."
            raise RuntimeError(msg)

        if self._session.closed:
            msg = "Session is closed. Cannot make request."
            raise RuntimeError(msg)

        url = self.url_for(path)
        headers = {"Authorization": f"Bearer {self._token}"}
        body = None
        if json_data is not None:
            try:
                body = json.dumps(json_data)
            except (TypeError, ValueError) as err:
                msg = f"Request body for {url} is not JSON serializable: {err}"
                raise SerializationError(msg) from err
            headers["Content-Type"] = "application/json"
        _LOGGER.debug("Sending %s %s", method, url)

        try:
            async with self._session.request(
                method,
                url,
                data=body,
                headers=headers,
                timeout=self._timeout,
            ) as response:
                return await self._handle_response(response, url)

        except TimeoutError as err:
            _LOGGER.exception("Request to %s timed out", url)
            msg = f"Request to {url} timed out"
            raise LifxTimeoutError(msg) from err

        except TooManyRedirects as err:
            msg = f"Too many redirects for {url}"
            raise RedirectError(msg) from err

        except ClientConnectionError as err:
            _LOGGER.exception("Connection error for %s", url)
            msg = f"Connection error for {url}: {err}"
            raise LifxConnectionError(msg) from err

        except ClientError as err:
            msg = f"Unexpected HTTP client error for {url}: {err}"
            raise LifxUnknownError(msg) from err

    async def _handle_response(self, response: ClientResponse, url: str) -> ApiResponse:
        headers = dict(response.headers)
        error = classify_response(response.status, url, response.headers)
        if error is not None:
            _LOGGER.debug("%s returned status %d", url, response.status)
            raise error

        data = None
        # Substring match handles charset parameters
        if "application/json" in response.content_type:
            try:
                data = await response.json()
            except ValueError as err:
                msg = f"Invalid JSON in response from {url}: {err}"
                raise SerializationError(msg) from err

        return ApiResponse(status=response.status, url=url, headers=headers, data=data)
