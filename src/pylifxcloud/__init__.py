"""Python client library for the LIFX cloud HTTP API.

This package provides an async client for controlling LIFX lights through
``https://api.lifx.com/v1``.

The library is organized into three layers:
1. **Value Layer** (pylifxcloud.selector, pylifxcloud.color, pylifxcloud.state):
   selectors, colors and light states with text encodings and validation
2. **Builder Layer** (pylifxcloud.builders): fluent request builders producing
   immutable request descriptors
3. **API Layer** (pylifxcloud.api): execution engine with status
   classification, attempt budgets and rate-limit handling

Example:
    Basic usage:

    ```python
    from pylifxcloud import LifxClient, Selector, Color

    async with LifxClient("token") as client:
        # Describe lights
        lights = await client.get_lights()

        # Control lights
        kitchen = client.select(Selector.group("Kitchen"))
        await kitchen.set_state().power(True).color(Color.kelvin(2700)).transition(1.5).send()

        # Zoned and randomized selectors
        strip = Selector.label("Strip").zoned(range(0, 8)).random()
        await client.select(strip).pulse("red").cycles(3).retry().send()
    ```
"""

from __future__ import annotations

from pylifxcloud.api import LifxAPI
from pylifxcloud.builders import LifxRequest
from pylifxcloud.client import LifxClient
from pylifxcloud.color import BLUE, GREEN, ORANGE, PINK, PURPLE, RED, WHITE, YELLOW, Color, ColorKind
from pylifxcloud.exceptions import (
    BadAccessTokenError,
    BadOAuthScopeError,
    BadRequestError,
    ColorParseError,
    ColorParseErrorKind,
    ColorValidationError,
    ColorValidationErrorKind,
    InvalidParameterError,
    LifxClientError,
    LifxConnectionError,
    LifxError,
    LifxServerError,
    LifxTimeoutError,
    LifxUnknownError,
    NotFoundError,
    RateLimitError,
    RedirectError,
    SelectorParseError,
    SelectorParseErrorKind,
    SerializationError,
    is_client_error,
)
from pylifxcloud.models import ApiResponse, Light, NamedRef, OperationResult, Product, Reachability, Scene
from pylifxcloud.parsers import parse_lights, parse_results, parse_scenes
from pylifxcloud.resilience import RateLimiter
from pylifxcloud.selector import Random, Selector, SelectorKind, Zoned
from pylifxcloud.state import State, StateChange


__version__ = "0.1.0"

__all__ = [
    "BLUE",
    "GREEN",
    "ORANGE",
    "PINK",
    "PURPLE",
    "RED",
    "WHITE",
    "YELLOW",
    "ApiResponse",
    "BadAccessTokenError",
    "BadOAuthScopeError",
    "BadRequestError",
    "Color",
    "ColorKind",
    "ColorParseError",
    "ColorParseErrorKind",
    "ColorValidationError",
    "ColorValidationErrorKind",
    "InvalidParameterError",
    "LifxAPI",
    "LifxClient",
    "LifxClientError",
    "LifxConnectionError",
    "LifxError",
    "LifxRequest",
    "LifxServerError",
    "LifxTimeoutError",
    "LifxUnknownError",
    "Light",
    "NamedRef",
    "NotFoundError",
    "OperationResult",
    "Product",
    "RateLimitError",
    "RateLimiter",
    "Reachability",
    "Random",
    "RedirectError",
    "Scene",
    "Selector",
    "SelectorKind",
    "SelectorParseError",
    "SelectorParseErrorKind",
    "SerializationError",
    "State",
    "StateChange",
    "Zoned",
    "__version__",
    "is_client_error",
    "parse_lights",
    "parse_results",
    "parse_scenes",
]
