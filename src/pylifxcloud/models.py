"""Data models for LIFX API responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from pylifxcloud.state import State  # noqa: TC001 - Used at runtime in dataclass fields


if TYPE_CHECKING:
    from collections.abc import Mapping


__all__ = [
    "ApiResponse",
    "Light",
    "NamedRef",
    "OperationResult",
    "Product",
    "Reachability",
    "Scene",
]


@dataclass(frozen=True)
class ApiResponse:
    """Successful (2xx) response from the API.

    Attributes:
        status: HTTP status code.
        url: Request URL.
        headers: Response headers.
        data: Decoded JSON body, or None if the response had no JSON body.
    """

    status: int
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    data: Any = None


class Reachability(Enum):
    """Whether a device acknowledged a request."""

    OK = "ok"  # Reachable and received the request
    TIMED_OUT = "timed_out"  # Did not acknowledge the request
    OFFLINE = "offline"  # Powered off or unreachable over the network


class Product(Enum):
    """LIFX products with their vendor/product IDs and capabilities.

    Each value is ``(product_id, display_name)``; the vendor ID is always 1.
    """

    ORIGINAL_1000 = (1, "Original 1000")
    COLOR_650 = (3, "Color 650")
    WHITE_800_LV = (10, "White 800 (Low Voltage)")
    WHITE_800_HV = (11, "White 800 (High Voltage)")
    WHITE_900_BR30 = (18, "White 900 BR30 (Low Voltage)")
    COLOR_1000_BR30 = (20, "Color 1000 BR30")
    COLOR_1000 = (22, "Color 1000")
    A19 = (27, "LIFX A19")
    BR30 = (28, "LIFX BR30")
    PLUS_A19 = (29, "LIFX+ A19")
    PLUS_BR30 = (30, "LIFX+ BR30")
    Z = (31, "LIFX Z")
    Z_2 = (32, "LIFX Z 2")
    DOWNLIGHT = (36, "LIFX Downlight")
    BEAM = (38, "LIFX Beam")
    MINI = (49, "LIFX Mini")
    MINI_DAY_DUSK = (50, "LIFX Mini Day and Dusk")
    MINI_WHITE = (51, "LIFX Mini White")
    GU10 = (52, "LIFX GU10")
    TILE = (55, "LIFX Tile")

    @property
    def vendor_id(self) -> int:
        """Vendor ID (always 1 for LIFX)."""
        return 1

    @property
    def product_id(self) -> int:
        """Product ID."""
        return self.value[0]

    @property
    def display_name(self) -> str:
        """Consumer-friendly product name."""
        return self.value[1]

    @property
    def has_color(self) -> bool:
        """Whether the product supports color."""
        return self not in _WHITE_ONLY

    @property
    def has_infrared(self) -> bool:
        """Whether the product supports infrared."""
        return self in _INFRARED

    @property
    def has_multizone(self) -> bool:
        """Whether the product supports multizone addressing."""
        return self in _MULTIZONE

    @classmethod
    def from_product_id(cls, product_id: int) -> Product | None:
        """Look up a product by product ID."""
        return next((product for product in cls if product.product_id == product_id), None)

    @classmethod
    def from_name(cls, name: str) -> Product | None:
        """Look up a product by display name."""
        return next((product for product in cls if product.display_name == name), None)


_WHITE_ONLY = frozenset(
    {
        Product.WHITE_800_LV,
        Product.WHITE_800_HV,
        Product.WHITE_900_BR30,
        Product.MINI_DAY_DUSK,
        Product.MINI_WHITE,
    }
)
_INFRARED = frozenset({Product.PLUS_A19, Product.PLUS_BR30})
_MULTIZONE = frozenset({Product.Z, Product.Z_2, Product.BEAM})


@dataclass
class NamedRef:
    """Group or location reference.

    Attributes:
        id: Unique identifier.
        name: User-friendly name.
    """

    id: str
    name: str


@dataclass
class Light:
    """Light description from the list endpoint.

    Attributes:
        id: Device serial number.
        uuid: Device UUID.
        label: User-assigned label.
        connected: Whether the device is reachable by the cloud.
        power: Whether the light is on.
        brightness: Brightness (0.0-1.0).
        hue: Hue in degrees (0-360).
        saturation: Saturation (0.0-1.0).
        kelvin: Color temperature.
        group: Group the light belongs to.
        location: Location the light belongs to.
        product_name: Product name reported by the API.
        product: Matching catalogue entry, if known.
        seconds_since_seen: Seconds since the cloud last heard from the device.
        raw_data: Original API response data for debugging.
    """

    id: str
    uuid: str | None
    label: str
    connected: bool
    power: bool
    brightness: float | None = None
    hue: float | None = None
    saturation: float | None = None
    kelvin: int | None = None
    group: NamedRef | None = None
    location: NamedRef | None = None
    product_name: str | None = None
    product: Product | None = None
    seconds_since_seen: float | None = None
    raw_data: dict[str, Any] = field(default_factory=dict)


@dataclass
class Scene:
    """Scene description from the scenes endpoint.

    Attributes:
        uuid: Scene UUID, used with ``scene_id:`` selectors and activation.
        name: User-friendly name.
        states: Per-selector states stored in the scene, keyed by selector string.
    """

    uuid: str
    name: str
    states: dict[str, State] = field(default_factory=dict)


@dataclass
class OperationResult:
    """Per-device outcome of a state-changing request.

    Attributes:
        id: Device serial number.
        label: Device label.
        status: Reachability, or None if the API returned an unknown status.
        raw_status: Status string as returned by the API.
    """

    id: str
    label: str
    status: Reachability | None
    raw_status: str

    @property
    def ok(self) -> bool:
        """Check if the device acknowledged the request."""
        return self.status is Reachability.OK
