"""Hydraulic pressure profile along surveyed pipeline traces."""

from .calculator import calculate_pressure_profile
from .coefficients import get_coefficient_table, interpolate_coefficient
from .geo import Coordinates, Elevation, ElevationUnit
from .models import (
    CalculationPointResult,
    CalculationResult,
    CalculationSummary,
    HydraulicWarning,
    PressureAlarm,
    ProfileRequest,
    SurveyPoint,
)
from .parameters import FlexiDiameter, HydraulicParameters
from .pipeline import build_trace, run_profile
from .trace import ElevationProfile, Trace, TracePoint

__all__ = [
    "CalculationPointResult",
    "CalculationResult",
    "CalculationSummary",
    "Coordinates",
    "Elevation",
    "ElevationProfile",
    "ElevationUnit",
    "FlexiDiameter",
    "HydraulicParameters",
    "HydraulicWarning",
    "PressureAlarm",
    "ProfileRequest",
    "SurveyPoint",
    "Trace",
    "TracePoint",
    "build_trace",
    "calculate_pressure_profile",
    "get_coefficient_table",
    "interpolate_coefficient",
    "run_profile",
]
