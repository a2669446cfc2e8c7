"""Pressure propagation along a sampled trace, with pump and valve placement."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from . import config
from .coefficients import get_coefficient_table, interpolate_coefficient
from .models import (
    CalculationPointResult,
    CalculationResult,
    CalculationSummary,
    HydraulicWarning,
    PressureAlarm,
)
from .parameters import HydraulicParameters
from .trace import Trace, TracePoint

logger = logging.getLogger(__name__)

# Hose length unit for the coefficient tables: 100 ft.
_HUNDRED_FT_PER_MILE = config.FEET_PER_MILE / 100


def calculate_pressure_profile(
    points: Sequence[TracePoint] | Trace,
    params: HydraulicParameters,
) -> CalculationResult:
    """Compute the pressure profile of ``points`` and place pumps, valves and alarms.

    Args:
        points: Ordered trace points, normally the output of
            :meth:`Trace.generate_points_at_interval`. A :class:`Trace` is also accepted.
        params: Hydraulic parameters of the run.

    Raises:
        ValueError: if ``points`` is not a non-empty sequence, ``params`` is
            missing, or there is no coefficient table for the hose diameter.
    """
    if isinstance(points, Trace):
        points = points.points
    if not isinstance(points, (list, tuple)):
        raise ValueError("calculate_pressure_profile: points must be a list or tuple")
    if params is None:
        raise ValueError("calculate_pressure_profile: params is required")
    if len(points) == 0:
        raise ValueError("calculate_pressure_profile: points cannot be empty")

    table = get_coefficient_table(params.diameter)
    bpm_per_line = params.flow_rate_per_line_bpm
    coefficient = interpolate_coefficient(bpm_per_line, table)
    logger.debug(
        'Coefficient %.6f for %.3f BPM per line on %s" hose',
        coefficient, bpm_per_line, params.diameter.value,
    )

    results, warnings = _propagate_pressure(points, coefficient)
    pumps, valves, alarms = _place_devices(results, params.pump_pressure_kgcm2)

    summary = CalculationSummary(
        total_distance_km=points[-1].distance_from_start / 1000,
        elevation_difference_m=points[-1].elevation_meters - points[0].elevation_meters,
        pump_count=len(pumps),
        valve_count=len(valves),
    )
    logger.info(
        "Pressure profile: %d points, %d pumps, %d valves, %d alarms, %d warnings",
        len(results), len(pumps), len(valves), len(alarms), len(warnings),
    )
    return CalculationResult(
        points=results,
        pumps=pumps,
        valves=valves,
        alarms=alarms,
        warnings=warnings,
        summary=summary,
    )


def _propagate_pressure(
    points: Sequence[TracePoint], coefficient: float
) -> tuple[list[CalculationPointResult], list[HydraulicWarning]]:
    """Single forward pass computing K, M, N, O and P for every point."""
    results: list[CalculationPointResult] = []
    warnings: list[HydraulicWarning] = []
    accumulated = 0.0

    for i, point in enumerate(points):
        distance = point.distance_from_start
        elevation = point.elevation_meters

        friction = (distance / config.METERS_PER_MILE) * _HUNDRED_FT_PER_MILE * coefficient

        static = 0.0
        if i > 0:
            static = -((points[i - 1].elevation_meters - elevation) / config.STATIC_HEAD_M_PER_KGCM2)

        accumulated += static
        if i == 0:
            combined_psi = accumulated + friction
        else:
            combined_psi = friction + accumulated * config.COMBINED_PRESSURE_PSI_FACTOR
        combined_kgcm2 = combined_psi / config.PSI_PER_KGCM2_OUTPUT

        warnings.extend(_check_bounds(point.index, distance, combined_psi))
        results.append(
            CalculationPointResult(
                index=point.index,
                distance_m=distance,
                latitude=point.latitude,
                longitude=point.longitude,
                elevation_m=elevation,
                friction_loss_psi=friction,
                static_pressure_kgcm2=static,
                accumulated_height_kgcm2=accumulated,
                combined_pressure_psi=combined_psi,
                combined_pressure_kgcm2=combined_kgcm2,
            )
        )

    return results, warnings


def _check_bounds(index: int, distance: float, pressure_psi: float) -> list[HydraulicWarning]:
    warnings = []
    if pressure_psi > config.MAX_PRESSURE_PSI:
        warnings.append(
            HydraulicWarning(
                type="BOUNDS_EXCEEDED",
                message=f"Pressure O exceeds maximum limit at point {index}",
                context={"index": index, "distance_m": distance, "O": pressure_psi,
                         "max_psi": config.MAX_PRESSURE_PSI},
            )
        )
    if pressure_psi < config.MIN_PRESSURE_PSI:
        warnings.append(
            HydraulicWarning(
                type="BOUNDS_EXCEEDED",
                message=f"Pressure O below minimum (dangerous vacuum) at point {index}",
                context={"index": index, "distance_m": distance, "O": pressure_psi,
                         "min_psi": config.MIN_PRESSURE_PSI},
            )
        )
    for warning in warnings:
        logger.warning("%s (O=%.2f PSI at %.1f m)", warning.message, pressure_psi, distance)
    return warnings


def _place_devices(
    results: list[CalculationPointResult], pump_pressure_kgcm2: float
) -> tuple[list[CalculationPointResult], list[CalculationPointResult], list[PressureAlarm]]:
    """Second pass: pumps where P has risen by the pump pressure, valves on deep N, alarms."""
    pumps = [results[0]]
    valves: list[CalculationPointResult] = []
    alarms: list[PressureAlarm] = []
    last_pump_pressure = 0.0

    for result in results[1:]:
        if result.combined_pressure_kgcm2 >= last_pump_pressure + pump_pressure_kgcm2:
            pumps.append(result)
            last_pump_pressure = result.combined_pressure_kgcm2

        if result.accumulated_height_kgcm2 < -pump_pressure_kgcm2:
            valves.append(result)

        pressure = result.combined_pressure_psi
        if pressure > config.CRITICAL_PRESSURE_PSI or pressure < -config.CRITICAL_PRESSURE_PSI:
            alarms.append(
                PressureAlarm(
                    index=result.index,
                    distance_m=result.distance_m,
                    value=pressure,
                    message="Pressure outside safe range",
                )
            )

    return pumps, valves, alarms
