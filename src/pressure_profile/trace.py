"""Trace aggregate: an ordered, indexed path of surveyed points."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence

from pydantic import BaseModel, ConfigDict, PrivateAttr, field_validator

from .geo import Coordinates, Elevation, check_number

logger = logging.getLogger(__name__)


class TracePoint(BaseModel):
    """A point along the trace with its accumulated distance from the start."""

    model_config = ConfigDict(frozen=True)

    index: int
    coordinates: Coordinates
    elevation: Elevation
    distance_from_start: float

    _segment_distance: float | None = PrivateAttr(default=None)

    @field_validator("index", mode="before")
    @classmethod
    def _validate_index(cls, value: object) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"TracePoint index must be an integer, got: {value!r}")
        if value < 0:
            raise ValueError(f"TracePoint index must be non-negative, got: {value}")
        return value

    @field_validator("distance_from_start", mode="before")
    @classmethod
    def _validate_distance(cls, value: object) -> float:
        distance = check_number("Distance from start", value)
        if distance < 0:
            raise ValueError(f"Distance from start must be non-negative, got: {distance}")
        return distance

    @classmethod
    def create(
        cls,
        index: int,
        coordinates: Coordinates,
        elevation: Elevation,
        distance_from_start: float,
        *,
        segment_distance: float | None = None,
    ) -> TracePoint:
        point = cls(
            index=index,
            coordinates=coordinates,
            elevation=elevation,
            distance_from_start=distance_from_start,
        )
        if segment_distance is not None:
            point.set_segment_distance(segment_distance)
        return point

    @classmethod
    def create_start(cls, coordinates: Coordinates, elevation: Elevation) -> TracePoint:
        return cls.create(0, coordinates, elevation, 0.0)

    @property
    def segment_distance(self) -> float | None:
        """Distance to the previous point in meters; ``None`` on a start point."""
        return self._segment_distance

    def set_segment_distance(self, distance: float) -> None:
        """Record the distance to the previous point. Allowed once."""
        if self._segment_distance is not None:
            raise ValueError(f"Segment distance already recorded for point {self.index}")
        distance = check_number("Segment distance", distance)
        if distance < 0:
            raise ValueError(f"Segment distance must be non-negative, got: {distance}")
        self._segment_distance = distance

    @property
    def latitude(self) -> float:
        return self.coordinates.latitude

    @property
    def longitude(self) -> float:
        return self.coordinates.longitude

    @property
    def elevation_meters(self) -> float:
        return self.elevation.meters

    @property
    def is_start(self) -> bool:
        return self.index == 0

    def distance_to(self, other: TracePoint) -> float:
        return self.coordinates.distance_to(other.coordinates)

    def elevation_difference_to(self, other: TracePoint) -> float:
        return self.elevation.difference_to(other.elevation)

    def is_before(self, other: TracePoint) -> bool:
        return self.index < other.index

    def is_after(self, other: TracePoint) -> bool:
        return self.index > other.index

    def equals(self, other: TracePoint) -> bool:
        return (
            self.index == other.index
            and self.coordinates.equals(other.coordinates)
            and self.elevation.equals(other.elevation)
        )

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "elevation_m": self.elevation_meters,
            "distance_from_start_m": self.distance_from_start,
            "segment_distance_m": self._segment_distance,
        }

    def __str__(self) -> str:
        return (
            f"TracePoint #{self.index} ({self.latitude:.6f}, {self.longitude:.6f}) "
            f"elevation: {self.elevation_meters:.2f}m, distance: {self.distance_from_start:.2f}m"
        )


class ElevationProfile(BaseModel):
    """Elevation summary over all points of a trace."""

    model_config = ConfigDict(frozen=True)

    min: Elevation
    max: Elevation
    start: Elevation
    end: Elevation
    difference: float  # end - start, negative means downhill


class Trace:
    """An ordered, non-empty sequence of :class:`TracePoint`.

    Construction enforces that ``points[i].index == i`` and that
    ``distance_from_start`` never decreases. The trace keeps its own copies of
    the points in a tuple and only exposes them read-only.
    """

    def __init__(self, points: Iterable[TracePoint]):
        points = tuple(points)
        _validate_points(points)
        self._points = tuple(p.model_copy() for p in points)

    @classmethod
    def create(cls, points: Iterable[TracePoint]) -> Trace:
        return cls(points)

    @classmethod
    def from_coordinates_and_elevations(
        cls, pairs: Sequence[tuple[Coordinates, Elevation]]
    ) -> Trace:
        """Build a trace from ordered (coordinates, elevation) pairs.

        Indices follow input order. Distance from start accumulates the
        great-circle distance between consecutive pairs, and every point after the
        first records its segment distance.
        """
        if len(pairs) == 0:
            raise ValueError("Cannot create trace from empty data")

        points: list[TracePoint] = []
        accumulated = 0.0
        previous: Coordinates | None = None

        for i, (coordinates, elevation) in enumerate(pairs):
            segment = None
            if previous is not None:
                segment = previous.distance_to(coordinates)
                accumulated += segment
            points.append(
                TracePoint.create(i, coordinates, elevation, accumulated, segment_distance=segment)
            )
            previous = coordinates

        logger.debug("Built trace with %d points over %.1f m", len(points), accumulated)
        return cls(points)

    @property
    def points(self) -> tuple[TracePoint, ...]:
        return self._points

    @property
    def point_count(self) -> int:
        return len(self._points)

    @property
    def start_point(self) -> TracePoint:
        return self._points[0]

    @property
    def end_point(self) -> TracePoint:
        return self._points[-1]

    @property
    def total_distance(self) -> float:
        return self.end_point.distance_from_start

    @property
    def total_distance_km(self) -> float:
        return self.total_distance / 1000

    @property
    def elevation_profile(self) -> ElevationProfile:
        start = self.start_point.elevation
        end = self.end_point.elevation
        lowest = highest = start
        for point in self._points:
            if point.elevation.is_lower_than(lowest):
                lowest = point.elevation
            if point.elevation.is_higher_than(highest):
                highest = point.elevation
        return ElevationProfile(
            min=lowest, max=highest, start=start, end=end, difference=end.difference_to(start)
        )

    @property
    def min_elevation(self) -> Elevation:
        return self.elevation_profile.min

    @property
    def max_elevation(self) -> Elevation:
        return self.elevation_profile.max

    @property
    def elevation_difference(self) -> float:
        return self.elevation_profile.difference

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self):
        return iter(self._points)

    def get_point_at(self, index: int) -> TracePoint:
        if not 0 <= index < len(self._points):
            raise IndexError(
                f"Point index out of bounds: {index}. Valid range: 0-{len(self._points) - 1}"
            )
        return self._points[index]

    def get_point_closest_to_distance(self, distance: float) -> TracePoint:
        """Return the first point whose distance from start is closest to ``distance``."""
        return min(self._points, key=lambda p: abs(p.distance_from_start - distance))

    def get_points_in_range(self, start_distance: float, end_distance: float) -> list[TracePoint]:
        return [
            p for p in self._points if start_distance <= p.distance_from_start <= end_distance
        ]

    def generate_points_at_interval(self, interval: float) -> list[TracePoint]:
        """Resample the trace every ``interval`` meters.

        Returns a new list: the start point at distance 0, one linearly
        interpolated point at each multiple of ``interval`` strictly below the
        total distance, and the real end point when the last generated point does
        not already match it. Generated points are numbered from 1. The trace
        itself is left untouched.
        """
        if isinstance(interval, bool) or not isinstance(interval, (int, float)):
            raise ValueError(f"Interval must be a positive number, got: {interval!r}")
        if not math.isfinite(interval) or interval <= 0:
            raise ValueError(f"Interval must be positive, got: {interval}")

        start = self.start_point
        result = [TracePoint.create(0, start.coordinates, start.elevation, 0.0)]
        total = self.total_distance

        step = 1
        distance = interval * step
        while distance < total:
            coordinates, elevation = self._interpolate_at(distance)
            result.append(TracePoint.create(step, coordinates, elevation, distance))
            step += 1
            distance = interval * step

        end = self.end_point
        if not result[-1].equals(end):
            result.append(
                TracePoint.create(step, end.coordinates, end.elevation, end.distance_from_start)
            )

        logger.debug(
            "Resampled %d points into %d at %.1f m interval",
            len(self._points), len(result), interval,
        )
        return result

    def _interpolate_at(self, distance: float) -> tuple[Coordinates, Elevation]:
        before: TracePoint | None = None
        after: TracePoint | None = None
        for point in self._points:
            if point.distance_from_start <= distance:
                before = point
            else:
                after = point
                break

        if before is None:
            return self.start_point.coordinates, self.start_point.elevation
        if after is None:
            return self.end_point.coordinates, self.end_point.elevation

        ratio = (distance - before.distance_from_start) / (
            after.distance_from_start - before.distance_from_start
        )
        latitude = before.latitude + (after.latitude - before.latitude) * ratio
        longitude = before.longitude + (after.longitude - before.longitude) * ratio
        meters = before.elevation_meters + (after.elevation_meters - before.elevation_meters) * ratio
        return Coordinates.create(latitude, longitude), Elevation.from_meters(meters)

    def to_dict(self) -> dict:
        profile = self.elevation_profile
        return {
            "points": [p.to_dict() for p in self._points],
            "total_distance_m": self.total_distance,
            "point_count": self.point_count,
            "elevation_profile": {
                "min_m": profile.min.meters,
                "max_m": profile.max.meters,
                "start_m": profile.start.meters,
                "end_m": profile.end.meters,
                "difference_m": profile.difference,
            },
        }

    def __repr__(self) -> str:
        return (
            f"Trace({self.point_count} points, {self.total_distance_km:.2f}km, "
            f"elevation: {self.start_point.elevation_meters:.0f}m -> {self.end_point.elevation_meters:.0f}m)"
        )


def _validate_points(points: tuple[TracePoint, ...]) -> None:
    if not points:
        raise ValueError("Trace must have at least one point")

    for i, point in enumerate(points):
        if not isinstance(point, TracePoint):
            raise ValueError(f"Trace expects TracePoint items, got {type(point).__name__} at position {i}")
        if point.index != i:
            raise ValueError(f"Point index mismatch at position {i}: expected {i}, got {point.index}")

    for prev, curr in zip(points, points[1:]):
        if curr.distance_from_start < prev.distance_from_start:
            raise ValueError(
                f"Distance must be non-decreasing: point {curr.index} has distance "
                f"{curr.distance_from_start}m < {prev.distance_from_start}m"
            )
