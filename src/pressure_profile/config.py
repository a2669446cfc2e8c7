"""Physical constants, parameter ranges and runtime settings."""

import os
from typing import Final

# Geodesy
EARTH_RADIUS_M: Final[float] = 6_371_000.0
COORDINATE_PRECISION: Final[int] = 6  # decimal places, ~0.11 m

# Elevation range (m)
MIN_ELEVATION_M: Final[float] = -500.0
MAX_ELEVATION_M: Final[float] = 9000.0
ELEVATION_EPSILON_M: Final[float] = 0.01
SEA_LEVEL_TOLERANCE_M: Final[float] = 0.1

# Unit factors
M_TO_FT: Final[float] = 3.28084
FT_TO_M: Final[float] = 0.3048
M_TO_MILES: Final[float] = 0.000621371
M3H_TO_BPM: Final[float] = 0.1048
KGCM2_TO_PSI: Final[float] = 14.2233
METERS_PER_MILE: Final[float] = 1609.34
FEET_PER_MILE: Final[float] = 5280.0

# Hydraulic parameter ranges
FLOW_RATE_RANGE_M3H: Final[tuple[float, float]] = (1.0, 1000.0)
PUMP_PRESSURE_RANGE_KGCM2: Final[tuple[float, float]] = (1.0, 20.0)
LINES_RANGE: Final[tuple[int, int]] = (1, 10)
INTERVAL_RANGE_M: Final[tuple[float, float]] = (10.0, 500.0)

# Pressure profile. The O column uses its own PSI factor, distinct from KGCM2_TO_PSI.
COMBINED_PRESSURE_PSI_FACTOR: Final[float] = 14.8
PSI_PER_KGCM2_OUTPUT: Final[float] = 14.5
STATIC_HEAD_M_PER_KGCM2: Final[float] = 10.0
MAX_PRESSURE_PSI: Final[float] = 150.0
MIN_PRESSURE_PSI: Final[float] = -100.0
CRITICAL_PRESSURE_PSI: Final[float] = 200.0

# Runtime
HOST: Final[str] = os.environ.get("PRESSURE_PROFILE_HOST", "0.0.0.0")
PORT: Final[int] = int(os.environ.get("PRESSURE_PROFILE_PORT", "8000"))
LOG_LEVEL: Final[str] = os.environ.get("PRESSURE_PROFILE_LOG_LEVEL", "INFO").upper()
