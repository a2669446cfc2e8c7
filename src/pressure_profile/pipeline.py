"""Survey points to pressure profile, end to end."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from .calculator import calculate_pressure_profile
from .geo import Coordinates, Elevation
from .models import CalculationResult, SurveyPoint
from .parameters import HydraulicParameters
from .trace import Trace

logger = logging.getLogger(__name__)


def build_trace(survey_points: Iterable[SurveyPoint | Mapping]) -> Trace:
    """Build a :class:`Trace` from ``{latitude, longitude, elevation_m}`` records."""
    pairs = []
    for item in survey_points:
        point = item if isinstance(item, SurveyPoint) else SurveyPoint.model_validate(item)
        pairs.append(
            (Coordinates.create(point.latitude, point.longitude), Elevation.from_meters(point.elevation_m))
        )
    return Trace.from_coordinates_and_elevations(pairs)


def run_profile(
    survey_points: Iterable[SurveyPoint | Mapping], params: HydraulicParameters
) -> CalculationResult:
    """Build the trace, resample it at ``params.interval_m`` and calculate."""
    trace = build_trace(survey_points)
    sampled = trace.generate_points_at_interval(params.interval_m)
    logger.info("Running profile for %r at %.0f m interval", trace, params.interval_m)
    return calculate_pressure_profile(sampled, params)
