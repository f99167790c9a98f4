"""Bounding-box geofence for pickup, dropoff and live coordinates."""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Any

from logitrack.config import (
    DEFAULT_MAX_LATITUDE,
    DEFAULT_MAX_LONGITUDE,
    DEFAULT_MIN_LATITUDE,
    DEFAULT_MIN_LONGITUDE,
    Settings,
)


@dataclass(frozen=True)
class BoundingBox:
    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float

    @classmethod
    def from_settings(cls, settings: Settings) -> BoundingBox:
        return cls(
            min_latitude=settings.geofence_min_latitude,
            max_latitude=settings.geofence_max_latitude,
            min_longitude=settings.geofence_min_longitude,
            max_longitude=settings.geofence_max_longitude,
        )

    def contains(self, latitude: float, longitude: float) -> bool:
        # Edges are inside.
        return (
            self.min_latitude <= latitude <= self.max_latitude
            and self.min_longitude <= longitude <= self.max_longitude
        )


NEPAL = BoundingBox(
    min_latitude=DEFAULT_MIN_LATITUDE,
    max_latitude=DEFAULT_MAX_LATITUDE,
    min_longitude=DEFAULT_MIN_LONGITUDE,
    max_longitude=DEFAULT_MAX_LONGITUDE,
)


def _parse_degrees(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(parsed):
        return None
    return parsed


def is_within_region(latitude: Any, longitude: Any, box: BoundingBox = NEPAL) -> bool:
    """Return True when the pair parses as decimal degrees inside ``box``.

    Missing or non-numeric input is reported as outside the region rather
    than raised.
    """
    parsed_latitude = _parse_degrees(latitude)
    parsed_longitude = _parse_degrees(longitude)
    if parsed_latitude is None or parsed_longitude is None:
        return False
    return box.contains(parsed_latitude, parsed_longitude)
