"""Tests for state models and wire serialization."""

from __future__ import annotations

from datetime import timedelta

import pytest

from pylifxcloud.color import RED, Color
from pylifxcloud.exceptions import ColorParseError, ColorValidationError, InvalidParameterError
from pylifxcloud.serializers import (
    deserialize_color,
    deserialize_duration,
    deserialize_power,
    deserialize_state,
    drop_unset,
    serialize_duration,
    serialize_power,
    serialize_state,
    serialize_state_change,
)
from pylifxcloud.state import State, StateChange


class TestPowerAndDuration:
    """Test scalar wire types."""

    def test_power(self) -> None:
        """Test the on/off encoding."""
        assert serialize_power(True) == "on"
        assert serialize_power(False) == "off"
        assert deserialize_power("on") is True
        assert deserialize_power("off") is False

    def test_duration_numbers(self) -> None:
        """Test that numeric durations are sent as float seconds."""
        assert serialize_duration(2) == 2.0
        assert serialize_duration(0.75) == 0.75

    def test_duration_timedelta_truncates_to_milliseconds(self) -> None:
        """Test that sub-millisecond precision is dropped."""
        assert serialize_duration(timedelta(seconds=1, microseconds=250_400)) == 1.25
        assert serialize_duration(timedelta(minutes=1)) == 60.0

    def test_negative_duration(self) -> None:
        """Test that negative durations are rejected."""
        with pytest.raises(InvalidParameterError):
            serialize_duration(-1)
        with pytest.raises(InvalidParameterError):
            serialize_duration(timedelta(seconds=-1))

    def test_deserialize_duration(self) -> None:
        """Test decoding seconds into a timedelta."""
        assert deserialize_duration(1.5) == timedelta(milliseconds=1500)

    def test_drop_unset(self) -> None:
        """Test that only None values are dropped."""
        assert drop_unset({"a": None, "b": False, "c": 0}) == {"b": False, "c": 0}


class TestSerializeState:
    """Test absolute state bodies."""

    def test_empty_state(self) -> None:
        """Test that an empty state serializes to an empty body."""
        assert serialize_state(State()) == {}

    def test_full_state(self) -> None:
        """Test that every set field is encoded."""
        state = State(
            power=True,
            color=Color.hue(120),
            brightness=0.5,
            duration=timedelta(seconds=2),
            infrared=0.25,
        )

        assert serialize_state(state) == {
            "power": "on",
            "color": "hue:120",
            "brightness": 0.5,
            "duration": 2.0,
            "infrared": 0.25,
        }

    def test_partial_state_omits_unset(self) -> None:
        """Test that unset fields are omitted, not defaulted."""
        assert serialize_state(State(power=False)) == {"power": "off"}


class TestSerializeStateChange:
    """Test relative state bodies."""

    def test_signed_deltas(self) -> None:
        """Test that negative deltas are kept."""
        change = StateChange(hue=-30, kelvin=-500, brightness=-0.1)

        assert serialize_state_change(change) == {"hue": -30, "kelvin": -500, "brightness": -0.1}

    def test_power_and_duration(self) -> None:
        """Test power and duration on a delta."""
        change = StateChange(power=True, duration=1, saturation=0.2, infrared=0.1)

        assert serialize_state_change(change) == {
            "power": "on",
            "duration": 1.0,
            "saturation": 0.2,
            "infrared": 0.1,
        }


class TestStateValidation:
    """Test State.validate()."""

    def test_valid_state(self) -> None:
        """Test that a state within ranges validates."""
        State(color=RED, brightness=1.0, infrared=0.0).validate()

    def test_invalid_color(self) -> None:
        """Test that the color is validated."""
        with pytest.raises(ColorValidationError):
            State(color=Color.kelvin(100)).validate()

    @pytest.mark.parametrize("field", ["brightness", "infrared"])
    def test_fraction_out_of_range(self, field: str) -> None:
        """Test that fractional fields must lie within 0.0-1.0."""
        with pytest.raises(InvalidParameterError) as exc_info:
            State(**{field: 1.5}).validate()

        assert exc_info.value.parameter_name == field


class TestStateChangeValidation:
    """Test StateChange.validate()."""

    def test_valid_change(self) -> None:
        """Test that negative deltas and large hue/kelvin shifts validate."""
        StateChange(hue=-720, kelvin=-5000, saturation=-1.0, brightness=1.0, infrared=-0.5).validate()

    @pytest.mark.parametrize(("field", "value"), [("saturation", -1.5), ("brightness", 1.1), ("infrared", 2.0)])
    def test_delta_out_of_range(self, field: str, value: float) -> None:
        """Test that fractional deltas must lie within -1.0-1.0."""
        with pytest.raises(InvalidParameterError) as exc_info:
            StateChange(**{field: value}).validate()

        assert exc_info.value.parameter_name == field


class TestDeserialize:
    """Test decoding wire forms."""

    def test_deserialize_state(self) -> None:
        """Test decoding a stored state."""
        state = deserialize_state({"power": "on", "color": "kelvin:2700", "brightness": 0.4, "duration": 1.5})

        assert state == State(
            power=True,
            color=Color.kelvin(2700),
            brightness=0.4,
            duration=timedelta(milliseconds=1500),
        )

    def test_deserialize_color_object(self) -> None:
        """Test that HSBK objects become custom color strings."""
        color = deserialize_color({"hue": 120.0, "saturation": 1.0, "kelvin": 3500})

        assert color == Color.custom("hue:120.0 saturation:1.0 kelvin:3500")

    def test_deserialize_color_string(self) -> None:
        """Test that color strings are parsed."""
        assert deserialize_color("#ff0000") == Color.rgb_str("#ff0000")

    def test_deserialize_bad_color_string(self) -> None:
        """Test that unparseable strings raise ColorParseError."""
        with pytest.raises(ColorParseError):
            deserialize_color("hue:")
