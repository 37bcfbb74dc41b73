"""Selectors identify one or more lights belonging to an account.

All resolutions of selectors are treated as sets, even if they are logically a
single device, for consistency with the API.

Example:
    ```python
    from pylifxcloud import Selector

    # Devices in the "Living Room" group in zones 0 or 1, one picked at random.
    sel = Selector.group("Living Room").zoned(range(0, 2)).random()
    assert str(sel) == "group:Living Room|0|1:random"

    # Round trip
    assert Selector.parse("label:Desk") == Selector.label("Desk")
    ```
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from pylifxcloud.const import ZONE_MAX, ZONE_MIN
from pylifxcloud.exceptions import InvalidParameterError, SelectorParseError, SelectorParseErrorKind


__all__ = [
    "Random",
    "Select",
    "Selector",
    "SelectorKind",
    "Zoned",
    "ZoneSpec",
    "expand_zones",
]

ZoneSpec = int | range | slice | Iterable[int]


class SelectorKind(Enum):
    """Selector discriminants; values are the wire labels."""

    ALL = "all"
    LABEL = "label"
    ID = "id"
    GROUP_ID = "group_id"
    GROUP = "group"
    LOCATION_ID = "location_id"
    LOCATION = "location"
    SCENE_ID = "scene_id"


_KINDS_BY_LABEL = {kind.value: kind for kind in SelectorKind if kind is not SelectorKind.ALL}


def _check_zone(zone: int) -> int:
    if not ZONE_MIN <= zone <= ZONE_MAX:
        msg = f"Zone {zone} is outside {ZONE_MIN}-{ZONE_MAX}"
        raise InvalidParameterError(msg, parameter_name="zone", value=zone)
    return zone


def expand_zones(spec: ZoneSpec) -> tuple[int, ...]:
    """Expand a zone specification into an explicit tuple of zone indices.

    Accepted shapes:
        * a single ``int``;
        * a ``range`` (``range(3, 6)`` for 3-5 inclusive, ``range(0, 2)`` for 0-1);
        * a ``slice`` with open ends (``slice(254, None)`` for 254-255,
          ``slice(None, 3)`` for 0-2);
        * any other iterable of ints, kept in the given order.

    Ranges and slices are clipped to 0-255. Explicit ints outside that range
    raise :class:`InvalidParameterError`.

    Args:
        spec: Zone specification.

    Returns:
        Zone indices in rendering order.
    """
    if isinstance(spec, bool):
        msg = "Zone must be an integer, not a bool"
        raise InvalidParameterError(msg, parameter_name="zone", value=spec)
    if isinstance(spec, int):
        return (_check_zone(spec),)
    if isinstance(spec, slice):
        start = ZONE_MIN if spec.start is None else spec.start
        stop = ZONE_MAX + 1 if spec.stop is None else spec.stop
        spec = range(start, stop)
    if isinstance(spec, range):
        return tuple(zone for zone in spec if ZONE_MIN <= zone <= ZONE_MAX)
    return tuple(_check_zone(zone) for zone in spec)


@dataclass(frozen=True)
class Selector:
    """A pure selector: one discriminant plus (except for ``ALL``) a value.

    Attributes:
        kind: Which collection the selector names.
        value: Label, id or name; ``None`` only for ``ALL``.
    """

    kind: SelectorKind
    value: str | None = None

    def __post_init__(self) -> None:
        """Enforce the discriminant/payload invariant."""
        if self.kind is SelectorKind.ALL:
            if self.value is not None:
                msg = "The 'all' selector takes no value"
                raise InvalidParameterError(msg, parameter_name="selector", value=self.value)
        elif self.value is None:
            msg = f"The {self.kind.value!r} selector requires a value"
            raise InvalidParameterError(msg, parameter_name="selector", value=self.value)

    @classmethod
    def all(cls) -> Selector:
        """All devices on the account."""
        return cls(SelectorKind.ALL)

    @classmethod
    def label(cls, label: str) -> Selector:
        """The device with the given label."""
        return cls(SelectorKind.LABEL, label)

    @classmethod
    def id(cls, serial: str) -> Selector:
        """The device with the given ID/serial number."""
        return cls(SelectorKind.ID, serial)

    @classmethod
    def group_id(cls, group_id: str) -> Selector:
        """The devices in the group with the given ID."""
        return cls(SelectorKind.GROUP_ID, group_id)

    @classmethod
    def group(cls, name: str) -> Selector:
        """The devices in the group with the given label."""
        return cls(SelectorKind.GROUP, name)

    @classmethod
    def location_id(cls, location_id: str) -> Selector:
        """The devices at the location with the given ID."""
        return cls(SelectorKind.LOCATION_ID, location_id)

    @classmethod
    def location(cls, name: str) -> Selector:
        """The devices at the location with the given label."""
        return cls(SelectorKind.LOCATION, name)

    @classmethod
    def scene_id(cls, scene_id: str) -> Selector:
        """The devices in the scene with the given ID."""
        return cls(SelectorKind.SCENE_ID, scene_id)

    @classmethod
    def parse(cls, text: str) -> Selector:
        """Parse a pure selector from its string form.

        The label is everything before the first ``:``, so values may
        themselves contain colons. Zoning and randomization are not parsed.

        Args:
            text: Selector string such as ``"all"`` or ``"group:Kitchen"``.

        Returns:
            The parsed selector.

        Raises:
            SelectorParseError: If the text does not match the grammar.
        """
        if text == SelectorKind.ALL.value:
            return cls.all()
        label, sep, value = text.partition(":")
        if not sep:
            raise SelectorParseError(SelectorParseErrorKind.NO_LABEL, text)
        if not value:
            raise SelectorParseError(SelectorParseErrorKind.NO_VALUE, text)
        kind = _KINDS_BY_LABEL.get(label)
        if kind is None:
            raise SelectorParseError(SelectorParseErrorKind.UNKNOWN_LABEL, text)
        return cls(kind, value)

    def zoned(self, zones: ZoneSpec) -> Zoned:
        """Constrain the selector to the given zone(s).

        Args:
            zones: Zone specification, see :func:`expand_zones`.

        Returns:
            A zoned selector.
        """
        return Zoned(self, expand_zones(zones))

    def random(self) -> Random:
        """Choose one random device from those matching this selector."""
        return Random(self)

    def __str__(self) -> str:
        if self.kind is SelectorKind.ALL:
            return SelectorKind.ALL.value
        return f"{self.kind.value}:{self.value}"


@dataclass(frozen=True)
class Zoned:
    """A selector constrained to specific zones of multizone devices.

    Attributes:
        selector: Base selector.
        zones: Zone indices, rendered in this order.
    """

    selector: Selector
    zones: tuple[int, ...]

    def __post_init__(self) -> None:
        """Only pure, unzoned selectors can be zoned."""
        if not isinstance(self.selector, Selector):
            msg = f"Only a Selector can be zoned, not {type(self.selector).__name__}"
            raise TypeError(msg)

    def random(self) -> Random:
        """Choose one random device from those matching this zoned selector."""
        return Random(self)

    def __str__(self) -> str:
        return str(self.selector) + "".join(f"|{zone}" for zone in self.zones)


@dataclass(frozen=True)
class Random:
    """A selector that chooses a single random device from its matches.

    Attributes:
        inner: The non-randomized selector being wrapped.
    """

    inner: Selector | Zoned

    def __post_init__(self) -> None:
        """Reject double randomization."""
        if not isinstance(self.inner, Selector | Zoned):
            msg = f"Only a Selector or Zoned selector can be randomized, not {type(self.inner).__name__}"
            raise TypeError(msg)

    def __str__(self) -> str:
        return f"{self.inner}:random"


Select = Selector | Zoned | Random
"""Anything that can identify devices in a request path or body."""
