"""Friction coefficient tables for flexi hose, keyed by per-line flow in BPM."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

import numpy as np

from .parameters import FlexiDiameter

# Friction loss per 100 ft of hose. Values as calibrated in the field tables,
# including the 40 BPM entry of the 12" table.
COEFFICIENTS_12: Mapping[float, float] = MappingProxyType({
    12: 0.026, 13: 0.030, 14: 0.039, 15: 0.048, 17: 0.056, 18: 0.065,
    19: 0.074, 20: 0.082, 21: 0.091, 23: 0.100, 24: 0.113, 26: 0.130,
    29: 0.152, 31: 0.173, 33: 0.199, 36: 0.229, 38: 0.260, 40: 0.377,
    43: 0.325, 45: 0.359, 48: 0.398, 60: 0.628, 71: 0.887, 83: 1.190,
})

COEFFICIENTS_10: Mapping[float, float] = MappingProxyType({
    12: 0.069, 13: 0.082, 14: 0.090, 15: 0.112, 17: 0.129, 18: 0.151,
    19: 0.168, 20: 0.190, 21: 0.212, 23: 0.233, 24: 0.260, 26: 0.311,
    29: 0.367, 31: 0.429, 33: 0.498, 36: 0.558, 38: 0.636, 40: 0.718,
    43: 0.797, 45: 0.887, 48: 0.978, 60: 1.560, 71: 2.200, 83: 2.970,
})

COEFFICIENT_TABLES: Mapping[FlexiDiameter, Mapping[float, float]] = MappingProxyType({
    FlexiDiameter.TEN_INCH: COEFFICIENTS_10,
    FlexiDiameter.TWELVE_INCH: COEFFICIENTS_12,
})


def get_coefficient_table(
    diameter: FlexiDiameter | str,
    tables: Mapping[FlexiDiameter, Mapping[float, float]] | None = None,
) -> Mapping[float, float]:
    """Return the coefficient table for ``diameter``.

    Raises:
        ValueError: if no non-empty table exists for the diameter class.
    """
    try:
        key = FlexiDiameter(diameter)
    except ValueError:
        raise ValueError(f"Missing coefficient table for diameter {diameter!r}") from None
    if tables is None:
        tables = COEFFICIENT_TABLES
    table = tables.get(key)
    if not table:
        raise ValueError(f"Missing coefficient table for diameter {key.value}\"")
    return table


def interpolate_coefficient(bpm: float, table: Mapping[float, float]) -> float:
    """Linearly interpolate the friction coefficient for a per-line flow.

    Flows at or beyond either end of the table clamp to that end's coefficient;
    an exact key match returns the key's coefficient unchanged.
    """
    keys = sorted(table)
    if not keys:
        raise ValueError("Coefficient table is empty")

    values = [table[k] for k in keys]
    return float(np.interp(bpm, keys, values))
