"""Absolute and relative light state descriptions.

:class:`State` is a target configuration; :class:`StateChange` is a set of
deltas applied by the server to whatever the lights are currently doing.
Every field is optional and unset fields are left out of the request body.

Example:
    ```python
    from datetime import timedelta

    from pylifxcloud import RED, State, StateChange

    warm = State(power=True, color=RED, brightness=0.4, duration=timedelta(seconds=2))
    dimmer = StateChange(brightness=-0.1, kelvin=-200)
    ```
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta  # noqa: TC003 - Used at runtime in dataclass fields

from pylifxcloud.color import Color  # noqa: TC001 - Used at runtime in dataclass fields
from pylifxcloud.exceptions import InvalidParameterError


__all__ = ["Duration", "State", "StateChange"]

Duration = float | timedelta
"""A transition length: seconds as a number, or a ``timedelta``."""


def _check_fraction(name: str, value: float | None) -> None:
    if value is not None and not 0.0 <= value <= 1.0:
        msg = f"{name.capitalize()} {value} is outside 0.0-1.0"
        raise InvalidParameterError(msg, parameter_name=name, value=value)


def _check_delta(name: str, value: float | None) -> None:
    if value is not None and not -1.0 <= value <= 1.0:
        msg = f"{name.capitalize()} delta {value} is outside -1.0-1.0"
        raise InvalidParameterError(msg, parameter_name=name, value=value)


@dataclass(frozen=True)
class State:
    """Target state for one or more lights.

    Attributes:
        power: Turn lights on (True) or off (False).
        color: Color to set.
        brightness: Brightness override (0.0-1.0), applied after ``color``.
        duration: Transition time.
        infrared: Maximum infrared level (0.0-1.0) for lights that support it.
    """

    power: bool | None = None
    color: Color | None = None
    brightness: float | None = None
    duration: Duration | None = None
    infrared: float | None = None

    def validate(self) -> None:
        """Check the color and fractional fields against API ranges.

        Raises:
            ColorValidationError: If the color is out of range.
            InvalidParameterError: If brightness or infrared is outside 0.0-1.0.
        """
        if self.color is not None:
            self.color.validate()
        _check_fraction("brightness", self.brightness)
        _check_fraction("infrared", self.infrared)


@dataclass(frozen=True)
class StateChange:
    """Relative adjustments for one or more lights.

    Attributes:
        power: Turn lights on (True) or off (False).
        duration: Transition time.
        infrared: Infrared level delta.
        hue: Hue delta in degrees (may be negative).
        saturation: Saturation delta.
        brightness: Brightness delta.
        kelvin: Temperature delta in kelvin (may be negative).
    """

    power: bool | None = None
    duration: Duration | None = None
    infrared: float | None = None
    hue: int | None = None
    saturation: float | None = None
    brightness: float | None = None
    kelvin: int | None = None

    def validate(self) -> None:
        """Check the fractional deltas against API ranges.

        Hue and kelvin deltas are unbounded; the server wraps or clamps them.

        Raises:
            InvalidParameterError: If a saturation, brightness or infrared delta
                is outside -1.0-1.0.
        """
        _check_delta("saturation", self.saturation)
        _check_delta("brightness", self.brightness)
        _check_delta("infrared", self.infrared)
