"""WGS84 coordinates and elevation value types.

Both types are frozen pydantic models that validate on construction, so there is
no way to hold an out-of-range instance. Arithmetic on :class:`Elevation` returns
new instances and re-validates the result.
"""

from __future__ import annotations

import math
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator

from . import config


def check_number(name: str, value: object) -> float:
    """Return ``value`` as a float, rejecting non-numeric and non-finite input."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number, got: {value!r}")
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got: {value}")
    return float(value)


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def _positional_fields(names: tuple[str, ...], args: tuple, data: dict) -> dict:
    if len(args) > len(names):
        raise TypeError(f"Expected at most {len(names)} positional arguments, got {len(args)}")
    for name, value in zip(names, args):
        if name in data:
            raise TypeError(f"Got multiple values for argument '{name}'")
        data[name] = value
    return data


class ElevationUnit(str, Enum):
    METERS = "meters"
    FEET = "feet"
    KILOMETERS = "kilometers"
    MILES = "miles"


class Coordinates(BaseModel):
    """A latitude/longitude pair in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float

    def __init__(self, *args: object, **data: object):
        """Accept ``Coordinates(lat, lng)`` as well as keyword arguments."""
        super().__init__(**_positional_fields(("latitude", "longitude"), args, data))

    @field_validator("latitude", mode="before")
    @classmethod
    def _validate_latitude(cls, value: object) -> float:
        latitude = check_number("Latitude", value)
        if not -90.0 <= latitude <= 90.0:
            raise ValueError(f"Latitude must be between -90 and 90 degrees, got: {latitude}")
        return latitude

    @field_validator("longitude", mode="before")
    @classmethod
    def _validate_longitude(cls, value: object) -> float:
        longitude = check_number("Longitude", value)
        if not -180.0 <= longitude <= 180.0:
            raise ValueError(f"Longitude must be between -180 and 180 degrees, got: {longitude}")
        return longitude

    @classmethod
    def create(cls, latitude: float, longitude: float) -> Coordinates:
        return cls(latitude=latitude, longitude=longitude)

    @classmethod
    def from_google_earth_string(cls, text: str) -> Coordinates:
        """Parse a ``lng,lat[,alt]`` string as written in KML ``<coordinates>`` blocks."""
        parts = text.strip().split(",")
        if len(parts) < 2:
            raise ValueError(
                f'Invalid Google Earth coordinate format: "{text}". Expected "lng,lat" or "lng,lat,alt"'
            )
        try:
            longitude = float(parts[0])
            latitude = float(parts[1])
        except ValueError:
            raise ValueError(f'Invalid coordinate values in: "{text}"') from None
        return cls(latitude=latitude, longitude=longitude)

    @property
    def latitude_radians(self) -> float:
        return math.radians(self.latitude)

    @property
    def longitude_radians(self) -> float:
        return math.radians(self.longitude)

    def distance_to(self, other: Coordinates) -> float:
        """Great-circle distance in meters (Haversine)."""
        lat1 = self.latitude_radians
        lat2 = other.latitude_radians
        d_lat = lat2 - lat1
        d_lng = other.longitude_radians - self.longitude_radians

        a = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
        return config.EARTH_RADIUS_M * c

    def equals(self, other: Coordinates, precision: int = config.COORDINATE_PRECISION) -> bool:
        epsilon = 10.0 ** -precision
        return (
            abs(self.latitude - other.latitude) < epsilon
            and abs(self.longitude - other.longitude) < epsilon
        )

    def is_same_hemisphere(self, other: Coordinates) -> dict[str, bool]:
        return {
            "latitude": _sign(self.latitude) == _sign(other.latitude),
            "longitude": _sign(self.longitude) == _sign(other.longitude),
        }

    def to_google_earth_string(self) -> str:
        return f"{self.longitude},{self.latitude}"

    def to_dict(self) -> dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}

    def __str__(self) -> str:
        return f"Coordinates(lat: {self.latitude}, lng: {self.longitude})"


class Elevation(BaseModel):
    """Altitude above mean sea level, stored in meters."""

    model_config = ConfigDict(frozen=True)

    meters: float

    def __init__(self, *args: object, **data: object):
        super().__init__(**_positional_fields(("meters",), args, data))

    @field_validator("meters", mode="before")
    @classmethod
    def _validate_meters(cls, value: object) -> float:
        meters = check_number("Elevation", value)
        if meters < config.MIN_ELEVATION_M:
            raise ValueError(
                f"Elevation too low: {meters}m. Minimum: {config.MIN_ELEVATION_M:g}m (below sea level)"
            )
        if meters > config.MAX_ELEVATION_M:
            raise ValueError(
                f"Elevation too high: {meters}m. Maximum: {config.MAX_ELEVATION_M:g}m (above Mt. Everest)"
            )
        return meters

    @classmethod
    def from_meters(cls, meters: float) -> Elevation:
        return cls(meters=meters)

    @classmethod
    def from_feet(cls, feet: float) -> Elevation:
        return cls(meters=check_number("Elevation", feet) * config.FT_TO_M)

    @classmethod
    def from_kilometers(cls, kilometers: float) -> Elevation:
        return cls(meters=check_number("Elevation", kilometers) * 1000)

    @classmethod
    def sea_level(cls) -> Elevation:
        return cls(meters=0.0)

    @property
    def feet(self) -> float:
        return self.meters * config.M_TO_FT

    @property
    def kilometers(self) -> float:
        return self.meters / 1000

    @property
    def miles(self) -> float:
        return self.meters * config.M_TO_MILES

    @property
    def is_sea_level(self) -> bool:
        return abs(self.meters) < config.SEA_LEVEL_TOLERANCE_M

    @property
    def is_below_sea_level(self) -> bool:
        return self.meters < -config.SEA_LEVEL_TOLERANCE_M

    @property
    def is_above_sea_level(self) -> bool:
        return self.meters > config.SEA_LEVEL_TOLERANCE_M

    def difference_to(self, other: Elevation) -> float:
        """Signed difference ``self - other`` in meters."""
        return self.meters - other.meters

    def is_higher_than(self, other: Elevation) -> bool:
        return self.meters > other.meters

    def is_lower_than(self, other: Elevation) -> bool:
        return self.meters < other.meters

    def equals(self, other: Elevation) -> bool:
        return abs(self.meters - other.meters) < config.ELEVATION_EPSILON_M

    def max(self, other: Elevation) -> Elevation:
        return self if self.meters > other.meters else other

    def min(self, other: Elevation) -> Elevation:
        return self if self.meters < other.meters else other

    def add(self, meters: float) -> Elevation:
        return Elevation(meters=self.meters + check_number("Elevation delta", meters))

    def subtract(self, meters: float) -> Elevation:
        return Elevation(meters=self.meters - check_number("Elevation delta", meters))

    def format(self, unit: ElevationUnit = ElevationUnit.METERS, decimals: int = 2) -> str:
        value, symbol = {
            ElevationUnit.METERS: (self.meters, "m"),
            ElevationUnit.FEET: (self.feet, "ft"),
            ElevationUnit.KILOMETERS: (self.kilometers, "km"),
            ElevationUnit.MILES: (self.miles, "mi"),
        }[ElevationUnit(unit)]
        return f"{value:.{decimals}f} {symbol}"

    def __str__(self) -> str:
        return f"Elevation({self.meters:.2f}m / {self.feet:.2f}ft)"
