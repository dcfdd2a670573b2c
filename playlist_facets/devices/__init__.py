"""
Device dashboard data transforms.

Normalizes heterogeneous IoT sensor payloads (people counters, liquid
level, occupancy capture, door/window, toilet paper level, air sensors)
into uniform DeviceView objects.

Usage:
    from playlist_facets.devices import transform_device

    view = transform_device(payload, "door_window")
    print(view.value.status, view.value.battery)
"""

from playlist_facets.devices.models import (
    AirSensorValue,
    CaptureValue,
    DeviceView,
    DoorWindowValue,
    LiquidLevelValue,
    PeopleCounterValue,
    ToiletPaperValue,
)
from playlist_facets.devices.transforms import (
    DEVICE_TRANSFORMS,
    ensure_number,
    transform_air_sensor,
    transform_capture,
    transform_device,
    transform_door_window,
    transform_liquid_level,
    transform_people_counter,
    transform_toilet_paper,
)

__all__ = [
    "AirSensorValue",
    "CaptureValue",
    "DeviceView",
    "DoorWindowValue",
    "LiquidLevelValue",
    "PeopleCounterValue",
    "ToiletPaperValue",
    "DEVICE_TRANSFORMS",
    "ensure_number",
    "transform_air_sensor",
    "transform_capture",
    "transform_device",
    "transform_door_window",
    "transform_liquid_level",
    "transform_people_counter",
    "transform_toilet_paper",
]
