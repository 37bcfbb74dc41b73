"""Request builders for the LIFX HTTP API.

Builders are mutable accumulators: each setter records one optional field and
returns the builder, so calls chain. :meth:`RequestBuilder.build` copies the
accumulated fields into an immutable :class:`LifxRequest`. Builders never
perform I/O; :meth:`RequestBuilder.send` is ``build()`` followed by the
engine's :meth:`LifxAPI.send`.

Example:
    ```python
    from pylifxcloud import BLUE, LifxClient, Selector

    async with LifxClient("token") as client:
        lamps = client.select(Selector.group("Kitchen"))
        await lamps.set_state().power(True).color(BLUE).transition(2).retries(3).send()
        await lamps.breathe(BLUE).cycles(5).period(1.5).send()
    ```
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, ClassVar, Self
from urllib.parse import quote

from pylifxcloud.color import Color
from pylifxcloud.const import CYCLE_BACKWARD, CYCLE_FORWARD, DEFAULT_ATTEMPTS, MAX_ATTEMPTS
from pylifxcloud.exceptions import InvalidParameterError
from pylifxcloud.selector import Random, Selector, Zoned
from pylifxcloud.serializers import (
    drop_unset,
    serialize_duration,
    serialize_state,
    serialize_state_change,
)
from pylifxcloud.state import State, StateChange


if TYPE_CHECKING:
    from pylifxcloud.api import LifxAPI
    from pylifxcloud.models import ApiResponse
    from pylifxcloud.selector import Select
    from pylifxcloud.state import Duration


__all__ = [
    "Activate",
    "Breathe",
    "ChangeState",
    "Cycle",
    "LifxRequest",
    "Pulse",
    "RequestBuilder",
    "Scenes",
    "Selected",
    "SetState",
    "SetStates",
    "Toggle",
    "validate_request",
]

_LOGGER = logging.getLogger(__name__)

_RETRY_ATTEMPTS = 2


def _check_attempts(attempts: int) -> int:
    if isinstance(attempts, bool) or not isinstance(attempts, int) or not 1 <= attempts <= MAX_ATTEMPTS:
        msg = f"Attempt budget must be an integer between 1 and {MAX_ATTEMPTS}, got {attempts!r}"
        raise InvalidParameterError(msg, parameter_name="attempts", value=attempts)
    return attempts


def _to_select(selector: Select | str) -> Select:
    if isinstance(selector, str):
        return Selector.parse(selector)
    if isinstance(selector, Selector | Zoned | Random):
        return selector
    msg = f"Expected a selector, got {type(selector).__name__}"
    raise TypeError(msg)


def _to_color(color: Color | str) -> Color:
    return Color.parse(color) if isinstance(color, str) else color


def _lights_path(selector: Select) -> str:
    # "#", "?" and "/" in labels stay inside the path segment
    return f"/lights/{quote(str(selector), safe=':|')}"


@dataclass(frozen=True)
class LifxRequest:
    """Immutable, ready-to-send request descriptor.

    Attributes:
        api: Engine that will execute the request.
        method: HTTP method.
        path: Path relative to ``/v1``, with the selector rendered verbatim.
        body: JSON-ready body, or None to send no body.
        attempts: Attempt budget (1-255).
    """

    api: LifxAPI = field(repr=False, compare=False)
    method: str
    path: str
    body: dict[str, Any] | None = None
    attempts: int = DEFAULT_ATTEMPTS

    def __post_init__(self) -> None:
        """Validate the attempt budget."""
        _check_attempts(self.attempts)

    def retry(self) -> LifxRequest:
        """Return a copy allowing one retry (two attempts in total)."""
        return replace(self, attempts=_RETRY_ATTEMPTS)

    def retries(self, attempts: int) -> LifxRequest:
        """Return a copy with the given attempt budget.

        Raises:
            InvalidParameterError: If ``attempts`` is outside 1-255.
        """
        return replace(self, attempts=_check_attempts(attempts))

    async def send(self) -> ApiResponse:
        """Execute the request through its engine."""
        return await self.api.send(self)


class RequestBuilder:
    """Base class for mutable request builders.

    Subclasses set :attr:`method` and implement :attr:`path` and :meth:`body`.
    """

    method: ClassVar[str]

    def __init__(self, api: LifxAPI) -> None:
        """Initialize the builder.

        Args:
            api: Engine the finished request will be sent through.
        """
        self._api = api
        self._attempts = DEFAULT_ATTEMPTS

    @property
    def path(self) -> str:
        """Path relative to ``/v1``."""
        raise NotImplementedError

    def body(self) -> dict[str, Any] | None:
        """Build the JSON body from the accumulated fields."""
        raise NotImplementedError

    def retry(self) -> Self:
        """Allow one retry (two attempts in total)."""
        self._attempts = _RETRY_ATTEMPTS
        return self

    def retries(self, attempts: int) -> Self:
        """Set the attempt budget.

        Args:
            attempts: Total attempts, including the first (1-255).

        Raises:
            InvalidParameterError: If ``attempts`` is outside 1-255.
        """
        self._attempts = _check_attempts(attempts)
        return self

    def build(self) -> LifxRequest:
        """Copy the accumulated fields into an immutable request."""
        return LifxRequest(
            api=self._api,
            method=self.method,
            path=self.path,
            body=self.body(),
            attempts=self._attempts,
        )

    async def send(self) -> ApiResponse:
        """Build the request and execute it."""
        return await self._api.send(self.build())


class _SelectedBuilder(RequestBuilder):
    """Builder targeting the lights named by a selector."""

    endpoint: ClassVar[str]

    def __init__(self, api: LifxAPI, selector: Select) -> None:
        super().__init__(api)
        self._selector = selector

    @property
    def path(self) -> str:
        """Path relative to ``/v1``."""
        return _lights_path(self._selector) + self.endpoint


class SetState(_SelectedBuilder):
    """``PUT /lights/{selector}/state``: set an absolute state."""

    method = "PUT"
    endpoint = "/state"

    def __init__(self, api: LifxAPI, selector: Select) -> None:
        super().__init__(api, selector)
        self._state = State()

    def power(self, on: bool) -> Self:
        """Turn the lights on or off."""
        self._state = replace(self._state, power=on)
        return self

    def color(self, color: Color | str) -> Self:
        """Set the color; strings are parsed with :meth:`Color.parse`."""
        self._state = replace(self._state, color=_to_color(color))
        return self

    def brightness(self, brightness: float) -> Self:
        """Set the brightness (0.0-1.0), overriding any brightness in the color."""
        self._state = replace(self._state, brightness=brightness)
        return self

    def transition(self, duration: Duration) -> Self:
        """Set the transition time."""
        self._state = replace(self._state, duration=duration)
        return self

    def infrared(self, level: float) -> Self:
        """Set the maximum infrared level (0.0-1.0)."""
        self._state = replace(self._state, infrared=level)
        return self

    def body(self) -> dict[str, Any]:
        """Serialized state."""
        return serialize_state(self._state)


class ChangeState(_SelectedBuilder):
    """``POST /lights/{selector}/state/delta``: adjust the current state."""

    method = "POST"
    endpoint = "/state/delta"

    def __init__(self, api: LifxAPI, selector: Select) -> None:
        super().__init__(api, selector)
        self._change = StateChange()

    def power(self, on: bool) -> Self:
        """Turn the lights on or off."""
        self._change = replace(self._change, power=on)
        return self

    def transition(self, duration: Duration) -> Self:
        """Set the transition time."""
        self._change = replace(self._change, duration=duration)
        return self

    def hue(self, degrees: int) -> Self:
        """Rotate the hue by ``degrees`` (may be negative)."""
        self._change = replace(self._change, hue=degrees)
        return self

    def saturation(self, delta: float) -> Self:
        """Change the saturation by ``delta``."""
        self._change = replace(self._change, saturation=delta)
        return self

    def brightness(self, delta: float) -> Self:
        """Change the brightness by ``delta``."""
        self._change = replace(self._change, brightness=delta)
        return self

    def kelvin(self, delta: int) -> Self:
        """Change the color temperature by ``delta`` kelvin (may be negative)."""
        self._change = replace(self._change, kelvin=delta)
        return self

    def infrared(self, delta: float) -> Self:
        """Change the infrared level by ``delta``."""
        self._change = replace(self._change, infrared=delta)
        return self

    def body(self) -> dict[str, Any]:
        """Serialized state change."""
        return serialize_state_change(self._change)


class Toggle(_SelectedBuilder):
    """``POST /lights/{selector}/toggle``: flip the power state."""

    method = "POST"
    endpoint = "/toggle"

    def __init__(self, api: LifxAPI, selector: Select) -> None:
        super().__init__(api, selector)
        self._duration: Duration | None = None

    def transition(self, duration: Duration) -> Self:
        """Set the transition time."""
        self._duration = duration
        return self

    def body(self) -> dict[str, Any] | None:
        """``{"duration": seconds}`` when a transition is set, else no body."""
        if self._duration is None:
            return None
        return {"duration": serialize_duration(self._duration)}


class _Waveform(_SelectedBuilder):
    """Shared options of the breathe and pulse effects."""

    method = "POST"

    def __init__(self, api: LifxAPI, selector: Select, color: Color | str) -> None:
        super().__init__(api, selector)
        self._color = _to_color(color)
        self._from_color: Color | None = None
        self._period: Duration | None = None
        self._cycles: float | None = None
        self._persist: bool | None = None
        self._power_on: bool | None = None

    def from_color(self, color: Color | str) -> Self:
        """Start from ``color`` instead of the current color."""
        self._from_color = _to_color(color)
        return self

    def period(self, period: Duration) -> Self:
        """Set the length of one cycle."""
        self._period = period
        return self

    def cycles(self, count: float) -> Self:
        """Set the number of cycles."""
        self._cycles = count
        return self

    def persist(self, keep: bool) -> Self:
        """Keep the last color of the effect when it finishes."""
        self._persist = keep
        return self

    def power(self, force: bool) -> Self:
        """Turn the lights on if they are off."""
        self._power_on = force
        return self

    def body(self) -> dict[str, Any]:
        """Effect options; unset ones are omitted."""
        return drop_unset(
            {
                "selector": str(self._selector),
                "color": str(self._color),
                "from_color": None if self._from_color is None else str(self._from_color),
                "period": None if self._period is None else serialize_duration(self._period),
                "cycles": self._cycles,
                "persist": self._persist,
                "power_on": self._power_on,
            }
        )


class Breathe(_Waveform):
    """``POST /lights/{selector}/effects/breathe``: fade between two colors."""

    endpoint = "/effects/breathe"

    def __init__(self, api: LifxAPI, selector: Select, color: Color | str) -> None:
        super().__init__(api, selector, color)
        self._peak: float | None = None

    def peak(self, fraction: float) -> Self:
        """Set where in each cycle the target color is at its maximum (0.0-1.0)."""
        self._peak = fraction
        return self

    def body(self) -> dict[str, Any]:
        """Effect options including ``peak``."""
        return drop_unset({**super().body(), "peak": self._peak})


class Pulse(_Waveform):
    """``POST /lights/{selector}/effects/pulse``: switch abruptly between two colors."""

    endpoint = "/effects/pulse"


class Cycle(_SelectedBuilder):
    """``POST /lights/{selector}/cycle``: step through a list of states.

    Each request moves the lights to the state after the one closest to their
    current state; :meth:`rev` steps the other way.
    """

    method = "POST"
    endpoint = "/cycle"

    def __init__(self, api: LifxAPI, selector: Select) -> None:
        super().__init__(api, selector)
        self._states: list[State] = []
        self._defaults: State | None = None
        self._direction = CYCLE_FORWARD

    def add(self, state: State) -> Self:
        """Append a state to the cycle."""
        self._states.append(state)
        return self

    def default(self, state: State) -> Self:
        """Set defaults applied to every state in the cycle."""
        self._defaults = state
        return self

    def rev(self) -> Self:
        """Flip the direction between forward and backward."""
        self._direction = CYCLE_BACKWARD if self._direction == CYCLE_FORWARD else CYCLE_FORWARD
        return self

    def body(self) -> dict[str, Any]:
        """Selector, direction, states and defaults."""
        return drop_unset(
            {
                "selector": str(self._selector),
                "direction": self._direction,
                "states": [serialize_state(state) for state in self._states] or None,
                "defaults": None if self._defaults is None else serialize_state(self._defaults),
            }
        )


class SetStates(RequestBuilder):
    """``PUT /lights/states``: set different states on several selectors at once."""

    method = "PUT"

    def __init__(self, api: LifxAPI) -> None:
        super().__init__(api)
        self._states: list[tuple[str, State]] = []
        self._defaults: State | None = None

    @property
    def path(self) -> str:
        """Path relative to ``/v1``."""
        return "/lights/states"

    def add(self, selector: Select | str, state: State) -> Self:
        """Apply ``state`` to the lights named by ``selector``."""
        self._states.append((str(_to_select(selector)), state))
        return self

    def default(self, state: State) -> Self:
        """Set defaults for fields missing from individual states."""
        self._defaults = state
        return self

    def body(self) -> dict[str, Any]:
        """States (each with its selector) and defaults."""
        states = [{"selector": selector, **serialize_state(state)} for selector, state in self._states]
        return drop_unset(
            {
                "states": states or None,
                "defaults": None if self._defaults is None else serialize_state(self._defaults),
            }
        )


class Activate(RequestBuilder):
    """``PUT /scenes/scene_id:{uuid}/activate``: apply a stored scene."""

    method = "PUT"

    def __init__(self, api: LifxAPI, uuid: str) -> None:
        super().__init__(api)
        self._uuid = uuid
        self._duration: Duration | None = None
        self._ignore: list[str] = []
        self._overrides: State | None = None

    @property
    def path(self) -> str:
        """Path relative to ``/v1``."""
        return f"/scenes/scene_id:{self._uuid}/activate"

    def transition(self, duration: Duration) -> Self:
        """Set the transition time."""
        self._duration = duration
        return self

    def ignore(self, selector: Select | str) -> Self:
        """Leave the lights named by ``selector`` untouched."""
        self._ignore.append(str(_to_select(selector)))
        return self

    def overwrite(self, state: State) -> Self:
        """Override properties of every light in the scene."""
        self._overrides = state
        return self

    def body(self) -> dict[str, Any]:
        """Duration, ignored selectors and overrides."""
        return drop_unset(
            {
                "duration": None if self._duration is None else serialize_duration(self._duration),
                "ignore": list(self._ignore) or None,
                "overrides": None if self._overrides is None else serialize_state(self._overrides),
            }
        )


class Selected:
    """Operations on the lights named by one selector.

    Example:
        ```python
        lights = client.select("group:Living Room")
        response = await lights.list().send()
        await lights.toggle().transition(1).send()
        ```
    """

    def __init__(self, api: LifxAPI, selector: Select | str) -> None:
        """Initialize with an engine and a selector (parsed if given as text).

        Raises:
            SelectorParseError: If ``selector`` is text that does not parse.
        """
        self._api = api
        self.selector = _to_select(selector)

    def list(self) -> LifxRequest:
        """``GET /lights/{selector}``: describe the selected lights."""
        return LifxRequest(self._api, "GET", _lights_path(self.selector))

    def set_state(self) -> SetState:
        """Start a set-state request."""
        return SetState(self._api, self.selector)

    def change_state(self) -> ChangeState:
        """Start a state-delta request."""
        return ChangeState(self._api, self.selector)

    def toggle(self) -> Toggle:
        """Start a toggle-power request."""
        return Toggle(self._api, self.selector)

    def breathe(self, color: Color | str) -> Breathe:
        """Start a breathe effect towards ``color``."""
        return Breathe(self._api, self.selector, color)

    def pulse(self, color: Color | str) -> Pulse:
        """Start a pulse effect towards ``color``."""
        return Pulse(self._api, self.selector, color)

    def cycle(self) -> Cycle:
        """Start a cycle request."""
        return Cycle(self._api, self.selector)


class Scenes:
    """Scene operations."""

    def __init__(self, api: LifxAPI) -> None:
        self._api = api

    def list(self) -> LifxRequest:
        """``GET /scenes``: list the account's scenes."""
        return LifxRequest(self._api, "GET", "/scenes")

    def activate(self, uuid: str) -> Activate:
        """Start a scene activation request."""
        return Activate(self._api, uuid)


def validate_request(api: LifxAPI, color: Color | str) -> LifxRequest:
    """Build ``GET /color?string=...``, asking the API to validate a color.

    The color text is sent as-is, without local parsing or validation.
    """
    text = str(color)
    _LOGGER.debug("Building color validation request for %r", text)
    return LifxRequest(api, "GET", f"/color?string={quote(text, safe=':')}")
