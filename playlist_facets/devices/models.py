"""
View models for normalized device dashboard data.

Every transform in devices.transforms returns a DeviceView whose value
is one of the frozen value classes below. Numbers are always numbers
(never None) except for air sensor readings, where None means "sensor
did not report this quantity".

to_dict() renders a DeviceView with the key names the dashboard API
uses ('in', 'out', 'updatedAt'), so JSON output can be fed back to it.
"""

from dataclasses import asdict, dataclass, field
from typing import Any

Number = int | float

# Python field name -> dashboard API key
_API_KEYS = {
    "in_count": "in",
    "out_count": "out",
    "updated_at": "updatedAt",
}


@dataclass(frozen=True)
class PeopleCounterValue:
    in_count: Number
    out_count: Number
    battery: Number
    updated_at: str | None


@dataclass(frozen=True)
class LiquidLevelValue:
    """level is one of 'high', 'medium', 'low'."""
    level: str
    battery: Number
    updated_at: str | None


@dataclass(frozen=True)
class CaptureValue:
    """status is 'occupied' or 'vacant'."""
    status: str
    battery: Number
    distance: Number
    updated_at: str | None


@dataclass(frozen=True)
class DoorWindowValue:
    """status is 'open' or 'closed'; deployed defaults to '00'."""
    status: str
    battery: Number
    deployed: str
    updated_at: str | None


@dataclass(frozen=True)
class ToiletPaperValue:
    percent: Number
    battery: Number
    distance: Number
    updated_at: str | None


@dataclass(frozen=True)
class AirSensorValue:
    temperature: Number | None
    humidity: Number | None
    co2: Number | None
    updated_at: str | None

    @property
    def is_empty(self) -> bool:
        """True when none of the three readings is present."""
        return self.temperature is None and self.humidity is None and self.co2 is None


DeviceValue = (
    PeopleCounterValue
    | LiquidLevelValue
    | CaptureValue
    | DoorWindowValue
    | ToiletPaperValue
    | AirSensorValue
)


@dataclass(frozen=True)
class DeviceView:
    """
    A device with its normalized current value.

    Attributes:
        id: Device ID as given by the dashboard API.
        name: Device display name.
        type: Device type as given by the dashboard API.
        value: Normalized current reading.
        history: History entries. Raw mappings for most devices,
                 AirSensorValue items for air sensors.
    """
    id: Any
    name: Any
    type: Any
    value: DeviceValue
    history: tuple[Any, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Render as a JSON-ready dict using dashboard API key names."""
        return _rename_keys(asdict(self))


def _rename_keys(data: Any) -> Any:
    if isinstance(data, dict):
        return {_API_KEYS.get(key, key): _rename_keys(value) for key, value in data.items()}
    if isinstance(data, (list, tuple)):
        return [_rename_keys(item) for item in data]
    return data
