"""
Normalization of loosely typed device payloads.

Dashboard devices report payloads of the form

    {"id": ..., "name": ..., "type": ..., "value": {...}, "history": [...]}

where the fields inside 'value' may be missing, null, strings or NaN
depending on the sensor firmware. The transforms here coerce each
payload into a DeviceView with well-typed values:

    - numeric fields go through ensure_number(): anything that is not a
      real number becomes the fallback (0)
    - enumerated fields fall back to a fixed default
    - a missing or non-object 'value' is read as an empty object

Transforms never raise on bad field contents. Only a payload that is
not an object at all, or an unknown device kind, is rejected.
"""

import math
from datetime import datetime, timezone
from typing import Any, Callable, Mapping

from playlist_facets.core.exceptions import InputError
from playlist_facets.devices.models import (
    AirSensorValue,
    CaptureValue,
    DeviceView,
    DoorWindowValue,
    LiquidLevelValue,
    Number,
    PeopleCounterValue,
    ToiletPaperValue,
)

LIQUID_LEVELS = ("high", "medium", "low")
DEFAULT_LIQUID_LEVEL = "high"
DEFAULT_DEPLOYED = "00"


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a reading
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value)


def ensure_number(value: Any, default: Number = 0) -> Number:
    """
    Return value if it is a real number, else default.

    Examples:
        ensure_number(42)            # 42
        ensure_number(3.5)           # 3.5
        ensure_number("42")          # 0
        ensure_number(float("nan"))  # 0
        ensure_number(None, -1)      # -1
    """
    return value if _is_number(value) else default


def _optional_number(value: Any) -> Number | None:
    return value if _is_number(value) else None


def _value_of(payload: Mapping[str, Any]) -> Mapping[str, Any]:
    value = payload.get("value")
    return value if isinstance(value, Mapping) else {}


def _history_of(payload: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    history = payload.get("history")
    if not isinstance(history, list):
        return []
    return [item for item in history if isinstance(item, Mapping)]


def _view(payload: Mapping[str, Any], value: Any) -> DeviceView:
    return DeviceView(
        id=payload.get("id"),
        name=payload.get("name"),
        type=payload.get("type"),
        value=value,
        history=tuple(_history_of(payload)),
    )


def _timestamp(raw: Any) -> float:
    """Seconds since epoch of an ISO-8601 '_time'; -inf when unparsable."""
    if not isinstance(raw, str):
        return float("-inf")
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return float("-inf")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


def transform_people_counter(payload: Mapping[str, Any]) -> DeviceView:
    value = _value_of(payload)
    return _view(payload, PeopleCounterValue(
        in_count=ensure_number(value.get("in")),
        out_count=ensure_number(value.get("out")),
        battery=ensure_number(value.get("battery")),
        updated_at=value.get("updatedAt"),
    ))


def transform_liquid_level(payload: Mapping[str, Any]) -> DeviceView:
    value = _value_of(payload)
    level = value.get("level")
    return _view(payload, LiquidLevelValue(
        level=level if level in LIQUID_LEVELS else DEFAULT_LIQUID_LEVEL,
        battery=ensure_number(value.get("battery")),
        updated_at=value.get("updatedAt"),
    ))


def transform_capture(payload: Mapping[str, Any]) -> DeviceView:
    value = _value_of(payload)
    return _view(payload, CaptureValue(
        status="occupied" if value.get("status") else "vacant",
        battery=ensure_number(value.get("battery")),
        distance=ensure_number(value.get("distance")),
        updated_at=value.get("updatedAt"),
    ))


def transform_door_window(payload: Mapping[str, Any]) -> DeviceView:
    """
    Normalize a door/window sensor.

    Door sensors only report battery now and then. When the current
    value has none (or 0), the battery of the newest history entry
    that has one is used instead.
    """
    value = _value_of(payload)

    battery = ensure_number(value.get("battery"))
    if not battery:
        with_battery = [
            item for item in _history_of(payload) if _is_number(item.get("battery"))
        ]
        if with_battery:
            latest = max(with_battery, key=lambda item: _timestamp(item.get("_time")))
            battery = ensure_number(latest.get("battery"))

    deployed = value.get("deployed")

    return _view(payload, DoorWindowValue(
        status="open" if value.get("status") == "open" else "closed",
        battery=battery,
        deployed=str(deployed) if deployed else DEFAULT_DEPLOYED,
        updated_at=value.get("updatedAt"),
    ))


def transform_toilet_paper(payload: Mapping[str, Any]) -> DeviceView:
    value = _value_of(payload)
    return _view(payload, ToiletPaperValue(
        percent=ensure_number(value.get("percent")),
        battery=ensure_number(value.get("battery")),
        distance=ensure_number(value.get("distance")),
        updated_at=value.get("updatedAt"),
    ))


def _air_reading(item: Mapping[str, Any], updated_at: Any) -> AirSensorValue:
    return AirSensorValue(
        temperature=_optional_number(item.get("temperature")),
        humidity=_optional_number(item.get("humidity")),
        co2=_optional_number(item.get("co2")),
        updated_at=updated_at,
    )


def transform_air_sensor(payload: Mapping[str, Any]) -> DeviceView:
    """
    Normalize an air quality sensor.

    Readings that are not numbers become None instead of 0, since 0 is
    a valid temperature. History entries carrying no reading at all are
    dropped, and entries without 'updatedAt' use their '_time'.
    """
    value = _value_of(payload)

    history = []
    for item in _history_of(payload):
        reading = _air_reading(item, item.get("updatedAt") or item.get("_time"))
        if not reading.is_empty:
            history.append(reading)

    return DeviceView(
        id=payload.get("id"),
        name=payload.get("name"),
        type=payload.get("type"),
        value=_air_reading(value, value.get("updatedAt")),
        history=tuple(history),
    )


DEVICE_TRANSFORMS: dict[str, Callable[[Mapping[str, Any]], DeviceView]] = {
    "people_counter": transform_people_counter,
    "liquid_level": transform_liquid_level,
    "capture": transform_capture,
    "door_window": transform_door_window,
    "toilet_paper": transform_toilet_paper,
    "air_sensor": transform_air_sensor,
}


def transform_device(payload: Any, kind: str) -> DeviceView:
    """
    Normalize a device payload with the transform for its kind.

    Args:
        payload: Decoded JSON object of one device.
        kind: One of DEVICE_TRANSFORMS' keys.

    Raises:
        InputError: If the kind is unknown or the payload is not an object.
    """
    transform = DEVICE_TRANSFORMS.get(kind)
    if transform is None:
        raise InputError(
            f"Unknown device kind: {kind}",
            details={"kind": kind, "known_kinds": sorted(DEVICE_TRANSFORMS)}
        )
    if not isinstance(payload, Mapping):
        raise InputError(
            "Device payload must be a JSON object",
            details={"kind": kind}
        )
    return transform(payload)
