"""Color settings for LIFX lights.

HSBK is the preferred way of specifying colors (RGB represents color poorly),
so hue, saturation, brightness and kelvin are the most useful settings here.
RGB colors are converted by the API.

Parsing and validation are separate passes. :meth:`Color.parse` only checks
that a string decomposes into a known shape; :meth:`Color.validate` checks
that the decomposed numbers are within the ranges the API accepts. A parsed
color is not validated automatically.

Example:
    ```python
    from pylifxcloud import Color

    color = Color.parse("kelvin:2700")
    color.validate()
    assert str(color) == "kelvin:2700"

    Color.hue(400).validate()  # raises ColorValidationError
    ```
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, TypeVar, cast

from pylifxcloud.const import (
    BRIGHTNESS_MAX,
    BRIGHTNESS_MIN,
    HUE_MAX,
    HUE_MIN,
    KELVIN_MAX,
    KELVIN_MIN,
    RGB_STR_LENGTH,
    SATURATION_MAX,
    SATURATION_MIN,
)
from pylifxcloud.exceptions import (
    ColorParseError,
    ColorParseErrorKind,
    ColorValidationError,
    ColorValidationErrorKind,
    InvalidParameterError,
)


if TYPE_CHECKING:
    from collections.abc import Callable


__all__ = [
    "BLUE",
    "GREEN",
    "ORANGE",
    "PINK",
    "PURPLE",
    "RED",
    "WHITE",
    "YELLOW",
    "Color",
    "ColorKind",
]

_T = TypeVar("_T")

_UINT16_MAX = 0xFFFF
_BYTE_MAX = 0xFF


class ColorKind(Enum):
    """Color setting discriminants."""

    RED = "red"
    ORANGE = "orange"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"
    PURPLE = "purple"
    PINK = "pink"
    WHITE = "white"
    HUE = "hue"
    SATURATION = "saturation"
    BRIGHTNESS = "brightness"
    KELVIN = "kelvin"
    RGB = "rgb"
    RGB_STR = "rgb_str"
    CUSTOM = "custom"


NAMED_KINDS = frozenset(
    {
        ColorKind.RED,
        ColorKind.ORANGE,
        ColorKind.YELLOW,
        ColorKind.GREEN,
        ColorKind.BLUE,
        ColorKind.PURPLE,
        ColorKind.PINK,
        ColorKind.WHITE,
    }
)
_NAMED_BY_KEYWORD = {kind.value: kind for kind in NAMED_KINDS}

# Payload type required by each non-named kind.
_PAYLOAD_TYPES: dict[ColorKind, type | tuple[type, ...]] = {
    ColorKind.HUE: int,
    ColorKind.SATURATION: (int, float),
    ColorKind.BRIGHTNESS: (int, float),
    ColorKind.KELVIN: int,
    ColorKind.RGB: tuple,
    ColorKind.RGB_STR: str,
    ColorKind.CUSTOM: str,
}


def _parse_unsigned(text: str, maximum: int) -> int:
    """Parse a base-10 unsigned integer no larger than ``maximum``."""
    digits = text[1:] if text.startswith("+") else text
    if not digits.isascii() or not digits.isdigit():
        msg = f"invalid digit found in string {text!r}"
        raise ValueError(msg)
    value = int(digits)
    if value > maximum:
        msg = f"number {text!r} too large to fit in target type"
        raise ValueError(msg)
    return value


def _uint16(text: str) -> int:
    return _parse_unsigned(text, _UINT16_MAX)


def _byte(text: str) -> int:
    return _parse_unsigned(text, _BYTE_MAX)


def _float(text: str) -> float:
    if text != text.strip():
        msg = f"invalid float literal {text!r}"
        raise ValueError(msg)
    return float(text)


def _component(
    spec: str,
    missing: ColorParseErrorKind,
    non_numeric: ColorParseErrorKind,
    convert: Callable[[str], _T],
) -> _T:
    if not spec:
        raise ColorParseError(missing)
    try:
        return convert(spec)
    except ValueError as err:
        raise ColorParseError(non_numeric, err) from err


@dataclass(frozen=True)
class Color:
    """A color setting.

    Build instances with the constructors (``Color.hue(120)``,
    ``Color.rgb(255, 0, 0)``, ``Color.parse("pink")``) or use the module-level
    named colors (``RED``, ``WHITE``, ...).

    Construction only checks the payload *type*. Numeric ranges are checked by
    :meth:`validate`, which must be called explicitly.

    Attributes:
        kind: Which setting this is.
        value: Payload; ``None`` for named colors, a number for component
            setters, an ``(r, g, b)`` tuple for RGB and a string for RGB
            strings and custom keywords.
    """

    kind: ColorKind
    value: int | float | str | tuple[int, int, int] | None = None

    def __post_init__(self) -> None:
        """Check that the payload matches the kind."""
        if self.kind in NAMED_KINDS:
            if self.value is not None:
                msg = f"Named color {self.kind.value!r} takes no value"
                raise TypeError(msg)
            return
        expected = _PAYLOAD_TYPES[self.kind]
        if isinstance(self.value, bool) or not isinstance(self.value, expected):
            msg = f"Color {self.kind.value!r} cannot hold {self.value!r}"
            raise TypeError(msg)

    @classmethod
    def named(cls, name: str) -> Color:
        """Get a named color by keyword (``"red"``, ``"white"``, ...).

        Raises:
            InvalidParameterError: If the keyword is not a named color.
        """
        kind = _NAMED_BY_KEYWORD.get(name)
        if kind is None:
            msg = f"Unknown color name {name!r}"
            raise InvalidParameterError(msg, parameter_name="color", value=name)
        return cls(kind)

    @classmethod
    def hue(cls, hue: int) -> Color:
        """Set the hue (0-360), leaving all else untouched."""
        return cls(ColorKind.HUE, hue)

    @classmethod
    def saturation(cls, saturation: float) -> Color:
        """Set the saturation (0.0-1.0), leaving all else untouched."""
        return cls(ColorKind.SATURATION, saturation)

    @classmethod
    def brightness(cls, brightness: float) -> Color:
        """Set the brightness (0.0-1.0), leaving all else untouched."""
        return cls(ColorKind.BRIGHTNESS, brightness)

    @classmethod
    def kelvin(cls, kelvin: int) -> Color:
        """Set the temperature (1500-9000 K) and zero saturation."""
        return cls(ColorKind.KELVIN, kelvin)

    @classmethod
    def rgb(cls, red: int, green: int, blue: int) -> Color:
        """Set an RGB color from numeric components.

        Preferred over :meth:`rgb_str` where possible.

        Raises:
            InvalidParameterError: If a component is not a byte (0-255).
        """
        for name, component in (("red", red), ("green", green), ("blue", blue)):
            if not 0 <= component <= _BYTE_MAX:
                msg = f"RGB {name} component {component} is not a byte"
                raise InvalidParameterError(msg, parameter_name=name, value=component)
        return cls(ColorKind.RGB, (red, green, blue))

    @classmethod
    def rgb_str(cls, spec: str) -> Color:
        """Set an RGB color from a hex string (``"#ff0000"`` or ``"ff0000"``)."""
        return cls(ColorKind.RGB_STR, spec)

    @classmethod
    def custom(cls, keyword: str) -> Color:
        """Forward an arbitrary color string to the API unchanged.

        This is an unchecked escape hatch for keywords the API understands but
        this library does not model. It is never parsed and always passes
        :meth:`validate`; use :meth:`LifxClient.validate` to have the server
        check it.
        """
        return cls(ColorKind.CUSTOM, keyword)

    @classmethod
    def parse(cls, text: str) -> Color:
        """Parse a color string.

        Args:
            text: Color string such as ``"red"``, ``"hue:120"``,
                ``"rgb:0,128,255"`` or ``"#00ff00"``.

        Returns:
            The parsed color. It has not been range-checked.

        Raises:
            ColorParseError: If the string does not decompose into a known shape.
        """
        named = _NAMED_BY_KEYWORD.get(text)
        if named is not None:
            return cls(named)

        prefix, sep, spec = text.partition(":")
        if sep:
            if prefix == "hue":
                hue = _component(spec, ColorParseErrorKind.NO_HUE, ColorParseErrorKind.NON_NUMERIC_HUE, _uint16)
                return cls.hue(hue)
            if prefix == "saturation":
                saturation = _component(
                    spec,
                    ColorParseErrorKind.NO_SATURATION,
                    ColorParseErrorKind.NON_NUMERIC_SATURATION,
                    _float,
                )
                return cls.saturation(saturation)
            if prefix == "brightness":
                brightness = _component(
                    spec,
                    ColorParseErrorKind.NO_BRIGHTNESS,
                    ColorParseErrorKind.NON_NUMERIC_BRIGHTNESS,
                    _float,
                )
                return cls.brightness(brightness)
            if prefix == "kelvin":
                kelvin = _component(
                    spec,
                    ColorParseErrorKind.NO_KELVIN,
                    ColorParseErrorKind.NON_NUMERIC_KELVIN,
                    _uint16,
                )
                return cls.kelvin(kelvin)
            if prefix == "rgb":
                return cls._parse_rgb(spec)

        expected = RGB_STR_LENGTH + 1 if text.startswith("#") else RGB_STR_LENGTH
        if len(text) < expected:
            raise ColorParseError(ColorParseErrorKind.SHORT_STRING)
        if len(text) > expected:
            raise ColorParseError(ColorParseErrorKind.LONG_STRING)
        return cls.rgb_str(text)

    @classmethod
    def _parse_rgb(cls, spec: str) -> Color:
        # Three components, each with its own missing/non-numeric error. Extra
        # commas stay in the blue component and fail to parse there.
        parts = spec.split(",", 2)
        parts += [""] * (3 - len(parts))
        red, green, blue = parts
        if not red:
            raise ColorParseError(ColorParseErrorKind.NO_RED)
        if not green:
            raise ColorParseError(ColorParseErrorKind.NO_GREEN)
        if not blue:
            raise ColorParseError(ColorParseErrorKind.NO_BLUE)
        return cls.rgb(
            _component(red, ColorParseErrorKind.NO_RED, ColorParseErrorKind.NON_NUMERIC_RED, _byte),
            _component(green, ColorParseErrorKind.NO_GREEN, ColorParseErrorKind.NON_NUMERIC_GREEN, _byte),
            _component(blue, ColorParseErrorKind.NO_BLUE, ColorParseErrorKind.NON_NUMERIC_BLUE, _byte),
        )

    def validate(self) -> None:
        """Check that the color is within the ranges the API accepts.

        Named colors, RGB triples and custom keywords are always valid.

        Raises:
            ColorValidationError: If a component is out of range.
        """
        kind = self.kind

        if kind is ColorKind.HUE:
            hue = cast("int", self.value)
            if not HUE_MIN <= hue <= HUE_MAX:
                msg = f"Hue {hue} is out of range (max: {HUE_MAX})."
                raise ColorValidationError(msg, ColorValidationErrorKind.HUE, hue)

        elif kind is ColorKind.SATURATION:
            saturation = cast("float", self.value)
            if saturation > SATURATION_MAX:
                msg = f"Saturation {saturation} is too large (max: {SATURATION_MAX})."
                raise ColorValidationError(msg, ColorValidationErrorKind.SATURATION_HIGH, saturation)
            if saturation < SATURATION_MIN:
                msg = f"Saturation {saturation} is negative."
                raise ColorValidationError(msg, ColorValidationErrorKind.SATURATION_LOW, saturation)

        elif kind is ColorKind.BRIGHTNESS:
            brightness = cast("float", self.value)
            if brightness > BRIGHTNESS_MAX:
                msg = f"Brightness {brightness} is too large (max: {BRIGHTNESS_MAX})."
                raise ColorValidationError(msg, ColorValidationErrorKind.BRIGHTNESS_HIGH, brightness)
            if brightness < BRIGHTNESS_MIN:
                msg = f"Brightness {brightness} is negative."
                raise ColorValidationError(msg, ColorValidationErrorKind.BRIGHTNESS_LOW, brightness)

        elif kind is ColorKind.KELVIN:
            kelvin = cast("int", self.value)
            if kelvin < KELVIN_MIN:
                msg = f"Temperature {kelvin} K is too small (min: {KELVIN_MIN} K)."
                raise ColorValidationError(msg, ColorValidationErrorKind.KELVIN_LOW, kelvin)
            if kelvin > KELVIN_MAX:
                msg = f"Temperature {kelvin} K is too large (max: {KELVIN_MAX} K)."
                raise ColorValidationError(msg, ColorValidationErrorKind.KELVIN_HIGH, kelvin)

        elif kind is ColorKind.RGB_STR:
            spec = cast("str", self.value)
            has_hash = spec.startswith("#")
            expected = RGB_STR_LENGTH + 1 if has_hash else RGB_STR_LENGTH
            if len(spec) < expected:
                msg = f"RGB string {spec} is too short ({len(spec)} chars; expected {expected})."
                raise ColorValidationError(msg, ColorValidationErrorKind.RGB_STR_SHORT, spec, has_hash=has_hash)
            if len(spec) > expected:
                msg = f"RGB string {spec} is too long ({len(spec)} chars; expected {expected})."
                raise ColorValidationError(msg, ColorValidationErrorKind.RGB_STR_LONG, spec, has_hash=has_hash)

    def is_valid(self) -> bool:
        """Check whether :meth:`validate` would pass."""
        try:
            self.validate()
        except ColorValidationError:
            return False
        return True

    def __str__(self) -> str:
        kind = self.kind
        if kind in NAMED_KINDS:
            return kind.value
        if kind in (ColorKind.SATURATION, ColorKind.BRIGHTNESS):
            # Shortest repr that round-trips through float().
            return f"{kind.value}:{float(cast('float', self.value))!r}"
        if kind in (ColorKind.HUE, ColorKind.KELVIN):
            return f"{kind.value}:{self.value}"
        if kind is ColorKind.RGB:
            red, green, blue = cast("tuple[int, int, int]", self.value)
            return f"rgb:{red},{green},{blue}"
        spec = cast("str", self.value)
        if kind is ColorKind.RGB_STR and not spec.startswith("#"):
            return f"#{spec}"
        return spec


RED = Color(ColorKind.RED)
ORANGE = Color(ColorKind.ORANGE)
YELLOW = Color(ColorKind.YELLOW)
GREEN = Color(ColorKind.GREEN)
BLUE = Color(ColorKind.BLUE)
PURPLE = Color(ColorKind.PURPLE)
PINK = Color(ColorKind.PINK)
WHITE = Color(ColorKind.WHITE)
