"""Parsing utilities for LIFX API responses.

This module converts raw JSON responses into the data models used by
:class:`LifxClient`.
"""

from __future__ import annotations

import logging
from typing import Any

from pylifxcloud.models import Light, NamedRef, OperationResult, Product, Reachability, Scene
from pylifxcloud.serializers import deserialize_power, deserialize_state


__all__ = [
    "parse_light",
    "parse_lights",
    "parse_results",
    "parse_scene",
    "parse_scenes",
]

_LOGGER = logging.getLogger(__name__)

_REACHABILITY_BY_STATUS = {reachability.value: reachability for reachability in Reachability}


def _parse_ref(data: dict[str, Any] | None) -> NamedRef | None:
    if not data:
        return None
    return NamedRef(id=data.get("id", ""), name=data.get("name", ""))


def parse_light(data: dict[str, Any]) -> Light:
    """Parse a single light from the list endpoint.

    Args:
        data: Raw light data from API in format:
              {"id": str, "label": str, "connected": bool, "power": "on"|"off",
               "color": {"hue": float, "saturation": float, "kelvin": int},
               "brightness": float, "group": {...}, "location": {...},
               "product": {"name": str, ...}, "seconds_since_seen": float}

    Returns:
        Light instance.
    """
    color = data.get("color") or {}
    product_name = (data.get("product") or {}).get("name")
    product = Product.from_name(product_name) if product_name else None
    if product_name and product is None:
        _LOGGER.debug("Unknown product %r for light %s", product_name, data.get("id"))

    return Light(
        id=data.get("id", ""),
        uuid=data.get("uuid"),
        label=data.get("label", ""),
        connected=data.get("connected", False),
        power=deserialize_power(data.get("power", "off")),
        brightness=data.get("brightness"),
        hue=color.get("hue"),
        saturation=color.get("saturation"),
        kelvin=color.get("kelvin"),
        group=_parse_ref(data.get("group")),
        location=_parse_ref(data.get("location")),
        product_name=product_name,
        product=product,
        seconds_since_seen=data.get("seconds_since_seen"),
        raw_data=data,
    )


def parse_lights(data: list[dict[str, Any]] | None) -> list[Light]:
    """Parse the list endpoint's response.

    Args:
        data: Raw JSON array from ``GET /lights/{selector}``.

    Returns:
        Lights in response order.
    """
    return [parse_light(item) for item in data or []]


def parse_scene(data: dict[str, Any]) -> Scene:
    """Parse a single scene.

    Args:
        data: Raw scene data from API in format:
              {"uuid": str, "name": str,
               "states": [{"selector": str, "power": "on", "color": {...}, "brightness": float}]}

    Returns:
        Scene instance with states keyed by selector string.
    """
    states = {}
    for entry in data.get("states", []):
        selector = entry.get("selector")
        if selector is None:
            continue
        states[selector] = deserialize_state(entry)

    return Scene(uuid=data.get("uuid", ""), name=data.get("name", ""), states=states)


def parse_scenes(data: list[dict[str, Any]] | None) -> list[Scene]:
    """Parse the scenes endpoint's response."""
    return [parse_scene(item) for item in data or []]


def parse_results(data: dict[str, Any] | None) -> list[OperationResult]:
    """Parse the per-device results returned by state-changing endpoints.

    Args:
        data: Raw response in format:
              {"results": [{"id": str, "label": str, "status": "ok"|"timed_out"|"offline"}]}

    Returns:
        One result per device. Unknown status strings give ``status=None``.
    """
    results = []
    for entry in (data or {}).get("results", []):
        raw_status = entry.get("status", "")
        results.append(
            OperationResult(
                id=entry.get("id", ""),
                label=entry.get("label", ""),
                status=_REACHABILITY_BY_STATUS.get(raw_status),
                raw_status=raw_status,
            )
        )
    return results
