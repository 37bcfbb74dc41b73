"""Serialization of request bodies and wire value types.

This module provides stateless functions for converting between typed values
(:class:`State`, :class:`StateChange`, :class:`Color`, power flags, durations)
and their JSON wire forms. Unset (None) fields are always omitted, never
defaulted.

Design Philosophy:
    - Stateless functions (no classes, no state)
    - Single responsibility (serialization only)
    - Output is plain ``dict``/``list``/``str``/``float`` for ``aiohttp``'s
      JSON encoder
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING, Any

from pylifxcloud.color import Color
from pylifxcloud.exceptions import InvalidParameterError
from pylifxcloud.state import State


if TYPE_CHECKING:
    from pylifxcloud.state import Duration, StateChange


__all__ = [
    "deserialize_color",
    "deserialize_duration",
    "deserialize_power",
    "deserialize_state",
    "drop_unset",
    "serialize_duration",
    "serialize_power",
    "serialize_state",
    "serialize_state_change",
]


def drop_unset(payload: dict[str, Any]) -> dict[str, Any]:
    """Remove keys whose value is None.

    Args:
        payload: Candidate body.

    Returns:
        A new dict without the None-valued keys.
    """
    return {key: value for key, value in payload.items() if value is not None}


def serialize_power(on: bool) -> str:
    """Encode a power flag as the API's ``"on"``/``"off"`` string."""
    return "on" if on else "off"


def deserialize_power(value: str) -> bool:
    """Decode a power string; anything other than ``"on"`` means off."""
    return value == "on"


def serialize_duration(duration: Duration) -> float:
    """Encode a transition time as seconds with millisecond precision.

    Args:
        duration: Seconds as a number, or a ``timedelta``.

    Returns:
        Seconds as a float.

    Raises:
        InvalidParameterError: If the duration is negative.

    Example:
        >>> serialize_duration(timedelta(seconds=1, microseconds=250_400))
        1.25
    """
    if isinstance(duration, timedelta):
        whole = duration // timedelta(seconds=1)
        millis = (duration - timedelta(seconds=whole)) // timedelta(milliseconds=1)
        seconds = whole + millis / 1000
    else:
        seconds = float(duration)
    if seconds < 0:
        msg = f"Duration {duration!r} is negative"
        raise InvalidParameterError(msg, parameter_name="duration", value=duration)
    return seconds


def deserialize_duration(value: float) -> timedelta:
    """Decode seconds into a ``timedelta`` truncated to milliseconds."""
    return timedelta(milliseconds=int(value * 1000))


def deserialize_color(value: str | dict[str, Any]) -> Color:
    """Decode a color string or an HSBK object.

    Responses describe colors as objects (``{"hue": 120, "saturation": 1, "kelvin": 3500}``).
    These have no single-setting equivalent, so they become a custom color
    string combining the components, which the API accepts as input.

    Raises:
        ColorParseError: If the string is not a recognized color.
    """
    if isinstance(value, dict):
        parts = [f"{key}:{value[key]}" for key in ("hue", "saturation", "brightness", "kelvin") if key in value]
        return Color.custom(" ".join(parts))
    return Color.parse(value)


def serialize_state(state: State) -> dict[str, Any]:
    """Serialize a state for ``PUT /lights/{selector}/state`` and friends.

    Example:
        >>> serialize_state(State(power=True, brightness=0.5))
        {'power': 'on', 'brightness': 0.5}
    """
    return drop_unset(
        {
            "power": None if state.power is None else serialize_power(state.power),
            "color": None if state.color is None else str(state.color),
            "brightness": state.brightness,
            "duration": None if state.duration is None else serialize_duration(state.duration),
            "infrared": state.infrared,
        }
    )


def serialize_state_change(change: StateChange) -> dict[str, Any]:
    """Serialize a state delta for ``POST /lights/{selector}/state/delta``."""
    return drop_unset(
        {
            "power": None if change.power is None else serialize_power(change.power),
            "duration": None if change.duration is None else serialize_duration(change.duration),
            "infrared": change.infrared,
            "hue": change.hue,
            "saturation": change.saturation,
            "brightness": change.brightness,
            "kelvin": change.kelvin,
        }
    )


def deserialize_state(data: dict[str, Any]) -> State:
    """Deserialize a state in its wire form (as stored in scenes).

    Args:
        data: Wire-form state, e.g. ``{"power": "on", "color": "hue:120", "brightness": 0.5}``.

    Returns:
        State with the fields that were present.

    Raises:
        ColorParseError: If the color string is not recognized.
    """
    power = data.get("power")
    color = data.get("color")
    duration = data.get("duration")
    return State(
        power=None if power is None else deserialize_power(power),
        color=None if color is None else deserialize_color(color),
        brightness=data.get("brightness"),
        duration=None if duration is None else deserialize_duration(duration),
        infrared=data.get("infrared"),
    )
