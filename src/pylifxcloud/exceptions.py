"""Custom exceptions for pylifxcloud library.

Two families live here and never mix:

* Local errors (:class:`SelectorParseError`, :class:`ColorParseError`,
  :class:`ColorValidationError`, :class:`InvalidParameterError`) are raised
  before any request leaves the process. They describe caller mistakes and are
  never retried.
* Network errors (everything under :class:`LifxClientError`,
  :class:`LifxServerError`, :class:`LifxConnectionError` and friends) are
  raised while sending a request. :func:`is_client_error` decides whether the
  retry loop gives up on them.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class LifxError(Exception):
    """Base exception for all LIFX errors."""


class InvalidParameterError(LifxError, ValueError):
    """Exception raised for invalid parameter values.

    Attributes:
        parameter_name: Optional name of the invalid parameter.
        value: Optional value that was invalid.
    """

    def __init__(
        self,
        message: str = "",
        parameter_name: str | None = None,
        value: Any = None,
    ) -> None:
        """Initialize InvalidParameterError.

        Args:
            message: Error message.
            parameter_name: Optional name of the invalid parameter.
            value: Optional value that was invalid.
        """
        super().__init__(message)
        self.parameter_name = parameter_name
        self.value = value


# -----------------------------------------------------------------------------
# Local (syntax and semantic) errors
# -----------------------------------------------------------------------------


class SelectorParseErrorKind(Enum):
    """Reasons a selector string could not be parsed."""

    NO_LABEL = "no_label"
    NO_VALUE = "no_value"
    UNKNOWN_LABEL = "unknown_label"


class SelectorParseError(LifxError, ValueError):
    """Exception raised when a selector string does not match the grammar.

    Attributes:
        kind: Which part of the grammar was violated.
        text: The offending input.
    """

    _MESSAGES = {
        SelectorParseErrorKind.NO_LABEL: "Selector {text!r} has no label (expected 'label:value' or 'all').",
        SelectorParseErrorKind.NO_VALUE: "Selector {text!r} has a label but no value.",
        SelectorParseErrorKind.UNKNOWN_LABEL: "Selector {text!r} uses an unknown label.",
    }

    def __init__(self, kind: SelectorParseErrorKind, text: str) -> None:
        """Initialize SelectorParseError.

        Args:
            kind: Which part of the grammar was violated.
            text: The offending input.
        """
        super().__init__(self._MESSAGES[kind].format(text=text))
        self.kind = kind
        self.text = text


class ColorParseErrorKind(Enum):
    """Reasons a color string could not be parsed."""

    NO_HUE = "no_hue"
    NON_NUMERIC_HUE = "non_numeric_hue"
    NO_SATURATION = "no_saturation"
    NON_NUMERIC_SATURATION = "non_numeric_saturation"
    NO_BRIGHTNESS = "no_brightness"
    NON_NUMERIC_BRIGHTNESS = "non_numeric_brightness"
    NO_KELVIN = "no_kelvin"
    NON_NUMERIC_KELVIN = "non_numeric_kelvin"
    NO_RED = "no_red"
    NON_NUMERIC_RED = "non_numeric_red"
    NO_GREEN = "no_green"
    NON_NUMERIC_GREEN = "non_numeric_green"
    NO_BLUE = "no_blue"
    NON_NUMERIC_BLUE = "non_numeric_blue"
    SHORT_STRING = "short_string"
    LONG_STRING = "long_string"


_COLOR_PARSE_MESSAGES = {
    ColorParseErrorKind.NO_HUE: "Expected hue after hue: label.",
    ColorParseErrorKind.NON_NUMERIC_HUE: "Failed to parse hue as integer",
    ColorParseErrorKind.NO_SATURATION: "Expected saturation after saturation: label.",
    ColorParseErrorKind.NON_NUMERIC_SATURATION: "Failed to parse saturation as float",
    ColorParseErrorKind.NO_BRIGHTNESS: "Expected brightness after brightness: label.",
    ColorParseErrorKind.NON_NUMERIC_BRIGHTNESS: "Failed to parse brightness as float",
    ColorParseErrorKind.NO_KELVIN: "Expected color temperature after kelvin: label.",
    ColorParseErrorKind.NON_NUMERIC_KELVIN: "Failed to parse color temperature as integer",
    ColorParseErrorKind.NO_RED: "Expected red component after rgb: label.",
    ColorParseErrorKind.NON_NUMERIC_RED: "Failed to parse red component as integer",
    ColorParseErrorKind.NO_GREEN: "Expected green component after comma.",
    ColorParseErrorKind.NON_NUMERIC_GREEN: "Failed to parse green component as integer",
    ColorParseErrorKind.NO_BLUE: "Expected blue component after comma.",
    ColorParseErrorKind.NON_NUMERIC_BLUE: "Failed to parse blue component as integer",
    ColorParseErrorKind.SHORT_STRING: (
        "String is too short to be an RGB string and was not recognized as a keyword."
    ),
    ColorParseErrorKind.LONG_STRING: (
        "String is too long to be an RGB string and was not recognized as a keyword."
    ),
}


class ColorParseError(LifxError, ValueError):
    """Exception raised when a color string cannot be decomposed.

    Attributes:
        kind: Which component was missing or malformed.
        cause: Underlying numeric parse failure for the ``NON_NUMERIC_*`` kinds.
    """

    def __init__(self, kind: ColorParseErrorKind, cause: ValueError | None = None) -> None:
        """Initialize ColorParseError.

        Args:
            kind: Which component was missing or malformed.
            cause: Underlying numeric parse failure, if any.
        """
        message = _COLOR_PARSE_MESSAGES[kind]
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.kind = kind
        self.cause = cause


class ColorValidationErrorKind(Enum):
    """Ways a syntactically valid color can fall outside accepted ranges."""

    HUE = "hue"
    SATURATION_HIGH = "saturation_high"
    SATURATION_LOW = "saturation_low"
    BRIGHTNESS_HIGH = "brightness_high"
    BRIGHTNESS_LOW = "brightness_low"
    KELVIN_HIGH = "kelvin_high"
    KELVIN_LOW = "kelvin_low"
    RGB_STR_SHORT = "rgb_str_short"
    RGB_STR_LONG = "rgb_str_long"


class ColorValidationError(InvalidParameterError):
    """Exception raised when a color value is out of the accepted range.

    Attributes:
        kind: Which range was violated.
        has_hash: For RGB strings, whether a leading ``#`` was present.
    """

    def __init__(
        self,
        message: str,
        kind: ColorValidationErrorKind,
        value: Any,
        *,
        has_hash: bool = False,
    ) -> None:
        """Initialize ColorValidationError.

        Args:
            message: Error message.
            kind: Which range was violated.
            value: The offending value.
            has_hash: For RGB strings, whether a leading ``#`` was present.
        """
        super().__init__(message, parameter_name="color", value=value)
        self.kind = kind
        self.has_hash = has_hash


# -----------------------------------------------------------------------------
# Network errors
# -----------------------------------------------------------------------------


class LifxClientError(LifxError):
    """Exception raised for HTTP 4xx responses.

    The request should not be retried without modification.

    Attributes:
        status: HTTP status code, if known.
    """

    def __init__(self, message: str = "", status: int | None = None) -> None:
        """Initialize LifxClientError.

        Args:
            message: Error message.
            status: HTTP status code, if known.
        """
        super().__init__(message)
        self.status = status


class RateLimitError(LifxClientError):
    """Exception raised when API rate limit is exceeded (HTTP 429).

    Attributes:
        reset_at: Optional ``time.monotonic()`` deadline after which the limit
            is expected to clear.
    """

    def __init__(self, message: str = "", reset_at: float | None = None) -> None:
        """Initialize RateLimitError.

        Args:
            message: Error message.
            reset_at: Optional monotonic deadline for the limit to clear.
        """
        super().__init__(message, status=429)
        self.reset_at = reset_at


class BadRequestError(LifxClientError):
    """Exception raised for malformed requests (HTTP 400 or 422)."""


class BadAccessTokenError(LifxClientError):
    """Exception raised when the access token is rejected (HTTP 401)."""


class BadOAuthScopeError(LifxClientError):
    """Exception raised when the token lacks the required scope (HTTP 403)."""


class NotFoundError(LifxClientError):
    """Exception raised when a selector or scene matched nothing (HTTP 404).

    Attributes:
        url: Request URL, to help with troubleshooting.
    """

    def __init__(self, message: str = "", url: str | None = None) -> None:
        """Initialize NotFoundError.

        Args:
            message: Error message.
            url: Request URL, if known.
        """
        super().__init__(message, status=404)
        self.url = url


class LifxServerError(LifxError):
    """Exception raised for HTTP 5xx responses.

    Attributes:
        status: HTTP status code, if known.
    """

    def __init__(self, message: str = "", status: int | None = None) -> None:
        """Initialize LifxServerError.

        Args:
            message: Error message.
            status: HTTP status code, if known.
        """
        super().__init__(message)
        self.status = status


class LifxConnectionError(LifxError):
    """Exception raised for connection failures (DNS, TLS, refused, reset)."""


class LifxTimeoutError(LifxConnectionError):
    """Exception raised when API requests timeout."""


class SerializationError(LifxError):
    """Exception raised when a body cannot be encoded or a response decoded."""


class RedirectError(LifxError):
    """Exception raised for redirect loops or invalid redirects."""


class LifxUnknownError(LifxError):
    """Exception raised for any other HTTP stack failure."""


def is_client_error(error: BaseException) -> bool:
    """Check whether an error means the request must not be retried as-is.

    Args:
        error: The exception raised by an attempt.

    Returns:
        True for rate limiting, bad request, bad token, bad scope, not found
        and other 4xx errors.
    """
    return isinstance(error, LifxClientError)
