"""Tests for request builders and request descriptors."""

from __future__ import annotations

import dataclasses
from datetime import timedelta
from typing import TYPE_CHECKING

import pytest

from pylifxcloud.builders import (
    Activate,
    Breathe,
    Cycle,
    LifxRequest,
    Pulse,
    Scenes,
    Selected,
    SetStates,
    validate_request,
)
from pylifxcloud.color import BLUE, RED, Color
from pylifxcloud.exceptions import InvalidParameterError, SelectorParseError
from pylifxcloud.selector import Selector
from pylifxcloud.state import State


if TYPE_CHECKING:
    from unittest.mock import MagicMock


class TestLifxRequest:
    """Test the immutable request descriptor."""

    def test_defaults(self, mock_api: MagicMock) -> None:
        """Test that a request has no body and one attempt by default."""
        request = LifxRequest(mock_api, "GET", "/lights/all")

        assert request.body is None
        assert request.attempts == 1

    def test_is_immutable(self, mock_api: MagicMock) -> None:
        """Test that fields cannot be reassigned."""
        request = LifxRequest(mock_api, "GET", "/lights/all")

        with pytest.raises(dataclasses.FrozenInstanceError):
            request.attempts = 3  # type: ignore[misc]

    def test_retry_returns_copy(self, mock_api: MagicMock) -> None:
        """Test that retry() means two attempts and leaves the original untouched."""
        request = LifxRequest(mock_api, "GET", "/lights/all")

        retried = request.retry()

        assert retried.attempts == 2
        assert request.attempts == 1
        assert retried.path == request.path

    def test_retries(self, mock_api: MagicMock) -> None:
        """Test setting an explicit attempt budget."""
        request = LifxRequest(mock_api, "GET", "/lights/all")

        assert request.retries(1).attempts == 1
        assert request.retries(255).attempts == 255

    @pytest.mark.parametrize("attempts", [0, 256, -1, True])
    def test_invalid_budget(self, mock_api: MagicMock, attempts: int) -> None:
        """Test that budgets outside 1-255 are rejected."""
        with pytest.raises(InvalidParameterError):
            LifxRequest(mock_api, "GET", "/lights/all").retries(attempts)
        with pytest.raises(InvalidParameterError):
            LifxRequest(mock_api, "GET", "/lights/all", attempts=attempts)

    async def test_send_delegates_to_engine(self, mock_api: MagicMock) -> None:
        """Test that send() hands the request to its engine."""
        request = LifxRequest(mock_api, "GET", "/lights/all")

        response = await request.send()

        mock_api.send.assert_awaited_once_with(request)
        assert response.status == 200


class TestSelected:
    """Test operations on a selection."""

    def test_list(self, mock_api: MagicMock) -> None:
        """Test the list request."""
        request = Selected(mock_api, Selector.all()).list()

        assert (request.method, request.path, request.body) == ("GET", "/lights/all", None)

    def test_selector_text_is_parsed(self, mock_api: MagicMock) -> None:
        """Test that selectors given as text are parsed."""
        selected = Selected(mock_api, "group:Kitchen")

        assert selected.selector == Selector.group("Kitchen")

    def test_bad_selector_text(self, mock_api: MagicMock) -> None:
        """Test that unparseable selector text fails before any request."""
        with pytest.raises(SelectorParseError):
            Selected(mock_api, "Kitchen")

        mock_api.send.assert_not_called()

    def test_wrong_selector_type(self, mock_api: MagicMock) -> None:
        """Test that non-selectors are rejected."""
        with pytest.raises(TypeError):
            Selected(mock_api, 42)  # type: ignore[arg-type]

    def test_zoned_random_selector_in_path(self, mock_api: MagicMock) -> None:
        """Test that decorated selectors keep their separators in the path."""
        selector = Selector.group("Living Room").zoned([0, 1]).random()

        request = Selected(mock_api, selector).set_state().power(True).build()

        assert request.path == "/lights/group:Living%20Room|0|1:random/state"

    def test_reserved_characters_in_label_are_escaped(self, mock_api: MagicMock) -> None:
        """Test that '#', '?' and '/' in a label cannot split the path."""
        lights = Selected(mock_api, Selector.label("Room #1/A?"))

        assert lights.list().path == "/lights/label:Room%20%231%2FA%3F"
        assert lights.toggle().build().path == "/lights/label:Room%20%231%2FA%3F/toggle"


class TestSetState:
    """Test PUT /lights/{selector}/state."""

    def test_full_body(self, mock_api: MagicMock) -> None:
        """Test that every setter lands in the body."""
        request = (
            Selected(mock_api, Selector.label("Desk"))
            .set_state()
            .power(True)
            .color(RED)
            .brightness(0.5)
            .transition(timedelta(seconds=1, milliseconds=500))
            .infrared(0.2)
            .build()
        )

        assert request.method == "PUT"
        assert request.path == "/lights/label:Desk/state"
        assert request.body == {
            "power": "on",
            "color": "red",
            "brightness": 0.5,
            "duration": 1.5,
            "infrared": 0.2,
        }

    def test_empty_body(self, mock_api: MagicMock) -> None:
        """Test that an untouched builder sends an empty object."""
        assert Selected(mock_api, Selector.all()).set_state().build().body == {}

    def test_color_text_is_parsed(self, mock_api: MagicMock) -> None:
        """Test that a color string is parsed and re-rendered."""
        request = Selected(mock_api, Selector.all()).set_state().color("saturation:1").build()

        assert request.body == {"color": "saturation:1.0"}

    def test_setters_chain_on_same_builder(self, mock_api: MagicMock) -> None:
        """Test that setters return the builder itself."""
        builder = Selected(mock_api, Selector.all()).set_state()

        assert builder.power(False) is builder
        assert builder.retries(3) is builder

    def test_build_snapshots_fields(self, mock_api: MagicMock) -> None:
        """Test that later mutation does not change an already built request."""
        builder = Selected(mock_api, Selector.all()).set_state().power(True)
        first = builder.build()

        builder.power(False).retry()

        assert first.body == {"power": "on"}
        assert first.attempts == 1
        assert builder.build().body == {"power": "off"}
        assert builder.build().attempts == 2

    def test_invalid_retries(self, mock_api: MagicMock) -> None:
        """Test that builders reject budgets outside 1-255."""
        with pytest.raises(InvalidParameterError):
            Selected(mock_api, Selector.all()).set_state().retries(0)

    async def test_send_builds_and_sends(self, mock_api: MagicMock) -> None:
        """Test that send() on a builder sends the built request."""
        await Selected(mock_api, Selector.all()).set_state().power(True).retry().send()

        (request,) = mock_api.send.await_args.args
        assert request == LifxRequest(mock_api, "PUT", "/lights/all/state", {"power": "on"}, attempts=2)


class TestChangeState:
    """Test POST /lights/{selector}/state/delta."""

    def test_body(self, mock_api: MagicMock) -> None:
        """Test that signed deltas are sent."""
        request = (
            Selected(mock_api, Selector.all())
            .change_state()
            .power(True)
            .transition(2)
            .hue(-60)
            .saturation(0.1)
            .brightness(-0.2)
            .kelvin(-500)
            .infrared(0.3)
            .build()
        )

        assert request.method == "POST"
        assert request.path == "/lights/all/state/delta"
        assert request.body == {
            "power": "on",
            "duration": 2.0,
            "hue": -60,
            "saturation": 0.1,
            "brightness": -0.2,
            "kelvin": -500,
            "infrared": 0.3,
        }


class TestToggle:
    """Test POST /lights/{selector}/toggle."""

    def test_without_transition(self, mock_api: MagicMock) -> None:
        """Test that a plain toggle sends no body."""
        request = Selected(mock_api, Selector.id("d073d5000001")).toggle().build()

        assert request.method == "POST"
        assert request.path == "/lights/id:d073d5000001/toggle"
        assert request.body is None

    def test_with_transition(self, mock_api: MagicMock) -> None:
        """Test that a transition is sent as duration."""
        request = Selected(mock_api, Selector.all()).toggle().transition(timedelta(seconds=3)).build()

        assert request.body == {"duration": 3.0}


class TestEffects:
    """Test breathe and pulse effects."""

    def test_breathe(self, mock_api: MagicMock) -> None:
        """Test every breathe option."""
        builder = (
            Selected(mock_api, Selector.all())
            .breathe(RED)
            .from_color("blue")
            .period(2)
            .cycles(3)
            .persist(False)
            .power(True)
            .peak(0.25)
        )

        request = builder.build()

        assert isinstance(builder, Breathe)
        assert request.method == "POST"
        assert request.path == "/lights/all/effects/breathe"
        assert request.body == {
            "selector": "all",
            "color": "red",
            "from_color": "blue",
            "period": 2.0,
            "cycles": 3,
            "persist": False,
            "power_on": True,
            "peak": 0.25,
        }

    def test_breathe_minimal(self, mock_api: MagicMock) -> None:
        """Test that unset options are omitted."""
        request = Selected(mock_api, Selector.all()).breathe(BLUE).build()

        assert request.body == {"selector": "all", "color": "blue"}

    def test_pulse(self, mock_api: MagicMock) -> None:
        """Test the pulse effect."""
        builder = Selected(mock_api, Selector.label("Porch")).pulse(Color.hue(30)).cycles(5).period(0.5)

        request = builder.build()

        assert isinstance(builder, Pulse)
        assert request.path == "/lights/label:Porch/effects/pulse"
        assert request.body == {"selector": "label:Porch", "color": "hue:30", "period": 0.5, "cycles": 5}

    def test_pulse_has_no_peak(self) -> None:
        """Test that peak is a breathe-only option."""
        assert not hasattr(Pulse, "peak")


class TestCycle:
    """Test POST /lights/{selector}/cycle."""

    def test_default_direction(self, mock_api: MagicMock) -> None:
        """Test that cycles go forward by default."""
        builder = Selected(mock_api, Selector.all()).cycle()

        request = builder.build()

        assert isinstance(builder, Cycle)
        assert request.method == "POST"
        assert request.path == "/lights/all/cycle"
        assert request.body == {"selector": "all", "direction": "forward"}

    def test_rev_flips_direction(self, mock_api: MagicMock) -> None:
        """Test that rev() toggles between forward and backward."""
        builder = Selected(mock_api, Selector.all()).cycle()

        assert builder.rev().build().body["direction"] == "backward"  # type: ignore[index]
        assert builder.rev().build().body["direction"] == "forward"  # type: ignore[index]

    def test_states_and_defaults(self, mock_api: MagicMock) -> None:
        """Test that states keep their order and defaults are sent."""
        request = (
            Selected(mock_api, Selector.all())
            .cycle()
            .add(State(color=RED))
            .add(State(color=BLUE, brightness=0.5))
            .default(State(power=True, duration=1))
            .build()
        )

        assert request.body == {
            "selector": "all",
            "direction": "forward",
            "states": [{"color": "red"}, {"color": "blue", "brightness": 0.5}],
            "defaults": {"power": "on", "duration": 1.0},
        }


class TestSetStates:
    """Test PUT /lights/states."""

    def test_body(self, mock_api: MagicMock) -> None:
        """Test per-selector states with defaults."""
        request = (
            SetStates(mock_api)
            .add(Selector.label("Desk"), State(power=True))
            .add("group:Kitchen", State(brightness=0.5))
            .default(State(duration=1))
            .build()
        )

        assert request.method == "PUT"
        assert request.path == "/lights/states"
        assert request.body == {
            "states": [
                {"selector": "label:Desk", "power": "on"},
                {"selector": "group:Kitchen", "brightness": 0.5},
            ],
            "defaults": {"duration": 1.0},
        }

    def test_empty(self, mock_api: MagicMock) -> None:
        """Test that empty lists and unset defaults are omitted."""
        assert SetStates(mock_api).build().body == {}


class TestScenes:
    """Test scene listing and activation."""

    def test_list(self, mock_api: MagicMock) -> None:
        """Test the scene list request."""
        request = Scenes(mock_api).list()

        assert (request.method, request.path, request.body) == ("GET", "/scenes", None)

    def test_activate(self, mock_api: MagicMock) -> None:
        """Test activation with every option."""
        builder = (
            Scenes(mock_api)
            .activate("0b6e4d1c")
            .transition(2.5)
            .ignore(Selector.label("Hall"))
            .ignore("group:Garage")
            .overwrite(State(brightness=0.3))
        )

        request = builder.build()

        assert isinstance(builder, Activate)
        assert request.method == "PUT"
        assert request.path == "/scenes/scene_id:0b6e4d1c/activate"
        assert request.body == {
            "duration": 2.5,
            "ignore": ["label:Hall", "group:Garage"],
            "overrides": {"brightness": 0.3},
        }

    def test_activate_minimal(self, mock_api: MagicMock) -> None:
        """Test that an activation without options sends an empty object."""
        assert Scenes(mock_api).activate("0b6e4d1c").build().body == {}


class TestValidateRequest:
    """Test GET /color?string=..."""

    def test_named_color(self, mock_api: MagicMock) -> None:
        """Test validating a named color."""
        request = validate_request(mock_api, RED)

        assert (request.method, request.path) == ("GET", "/color?string=red")

    def test_text_is_escaped(self, mock_api: MagicMock) -> None:
        """Test that characters with URL meaning are percent-encoded."""
        assert validate_request(mock_api, "#ff0000").path == "/color?string=%23ff0000"
        assert validate_request(mock_api, "hue:120 saturation:1.0").path == "/color?string=hue:120%20saturation:1.0"

    def test_custom_text_is_not_parsed(self, mock_api: MagicMock) -> None:
        """Test that arbitrary text is sent for server-side validation."""
        assert validate_request(mock_api, "not a color").path == "/color?string=not%20a%20color"
