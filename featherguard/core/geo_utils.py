"""
FeatherGuard - Geospatial Utilities
Coordinate type shared by reports, geolocation and maps.
"""

from dataclasses import dataclass
from typing import Any, Optional, Tuple


@dataclass(frozen=True)
class Coordinates:
    """Geographic point with latitude and longitude in decimal degrees."""
    latitude: float
    longitude: float

    def __post_init__(self):
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"Longitude out of range: {self.longitude}")

    def to_tuple(self) -> Tuple[float, float]:
        return (self.latitude, self.longitude)

    @property
    def is_origin(self) -> bool:
        """0/0 is the "no position" marker of legacy rows, never a reading."""
        return self.latitude == 0.0 and self.longitude == 0.0


def coordinates_from_columns(
    latitude: Any,
    longitude: Any
) -> Optional[Coordinates]:
    """
    Build coordinates from a pair of stored columns.

    Rows written by the first version of the app stored 0/0 when no
    position was captured, so that pair is read as "no location". Position
    readings of 0/0 are rejected before they reach a report.

    Args:
        latitude: Stored latitude (number, numeric string or None)
        longitude: Stored longitude (number, numeric string or None)

    Returns:
        Coordinates, or None when the location is absent or unusable
    """
    if latitude is None or longitude is None:
        return None

    try:
        lat = float(latitude)
        lon = float(longitude)
    except (TypeError, ValueError):
        return None

    try:
        position = Coordinates(latitude=lat, longitude=lon)
    except ValueError:
        return None

    return None if position.is_origin else position
