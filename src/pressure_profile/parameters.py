"""Hydraulic parameter set for a pressure profile run."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator

from . import config
from .geo import check_number


class FlexiDiameter(str, Enum):
    """Flexi hose diameter class, in inches."""

    TEN_INCH = "10"
    TWELVE_INCH = "12"


def _check_range(name: str, value: float, bounds: tuple[float, float], unit: str) -> float:
    low, high = bounds
    if value < low:
        raise ValueError(f"{name} too low: {value}{unit}. Minimum: {low:g}{unit}")
    if value > high:
        raise ValueError(f"{name} too high: {value}{unit}. Maximum: {high:g}{unit}")
    return value


class HydraulicParameters(BaseModel):
    """Flow rate, hose class, pump pressure, parallel lines and sampling interval."""

    model_config = ConfigDict(frozen=True)

    flow_rate_m3h: float
    diameter: FlexiDiameter
    pump_pressure_kgcm2: float
    lines: int
    interval_m: float

    @field_validator("flow_rate_m3h", mode="before")
    @classmethod
    def _validate_flow_rate(cls, value: object) -> float:
        flow = check_number("Flow rate", value)
        return _check_range("Flow rate", flow, config.FLOW_RATE_RANGE_M3H, "m³/h")

    @field_validator("diameter", mode="before")
    @classmethod
    def _validate_diameter(cls, value: object) -> FlexiDiameter:
        if isinstance(value, int) and not isinstance(value, bool):
            value = str(value)
        try:
            return FlexiDiameter(value)
        except ValueError:
            options = ", ".join(d.value for d in FlexiDiameter)
            raise ValueError(f'Invalid flexi diameter: "{value}". Valid options: {options}') from None

    @field_validator("pump_pressure_kgcm2", mode="before")
    @classmethod
    def _validate_pump_pressure(cls, value: object) -> float:
        pressure = check_number("Pumping pressure", value)
        return _check_range("Pumping pressure", pressure, config.PUMP_PRESSURE_RANGE_KGCM2, "kg/cm²")

    @field_validator("lines", mode="before")
    @classmethod
    def _validate_lines(cls, value: object) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Number of lines must be an integer, got: {value!r}")
        return int(_check_range("Number of lines", value, config.LINES_RANGE, ""))

    @field_validator("interval_m", mode="before")
    @classmethod
    def _validate_interval(cls, value: object) -> float:
        interval = check_number("Calculation interval", value)
        return _check_range("Calculation interval", interval, config.INTERVAL_RANGE_M, "m")

    @property
    def flow_rate_bpm(self) -> float:
        return self.flow_rate_m3h * config.M3H_TO_BPM

    @property
    def flow_rate_per_line_m3h(self) -> float:
        return self.flow_rate_m3h / self.lines

    @property
    def flow_rate_per_line_bpm(self) -> float:
        """Per-line flow used to look up the friction coefficient."""
        return self.flow_rate_per_line_m3h * config.M3H_TO_BPM

    @property
    def diameter_inches(self) -> int:
        return int(self.diameter.value)

    @property
    def pump_pressure_psi(self) -> float:
        return self.pump_pressure_kgcm2 * config.KGCM2_TO_PSI

    @property
    def has_multiple_lines(self) -> bool:
        return self.lines > 1

    def equals(self, other: HydraulicParameters) -> bool:
        return (
            abs(self.flow_rate_m3h - other.flow_rate_m3h) < 0.01
            and self.diameter == other.diameter
            and abs(self.pump_pressure_kgcm2 - other.pump_pressure_kgcm2) < 0.01
            and self.lines == other.lines
            and abs(self.interval_m - other.interval_m) < 0.1
        )

    def with_flow_rate(self, flow_rate_m3h: float) -> HydraulicParameters:
        return HydraulicParameters(**{**self.model_dump(), "flow_rate_m3h": flow_rate_m3h})

    def with_lines(self, lines: int) -> HydraulicParameters:
        return HydraulicParameters(**{**self.model_dump(), "lines": lines})

    def with_interval(self, interval_m: float) -> HydraulicParameters:
        return HydraulicParameters(**{**self.model_dump(), "interval_m": interval_m})

    def to_summary(self) -> dict:
        return {
            "flow_rate": {
                "total_m3h": self.flow_rate_m3h,
                "total_bpm": self.flow_rate_bpm,
                "per_line_m3h": self.flow_rate_per_line_m3h,
                "per_line_bpm": self.flow_rate_per_line_bpm,
            },
            "flexi": {
                "diameter": self.diameter.value,
                "diameter_inches": self.diameter_inches,
            },
            "pump_pressure": {
                "kgcm2": self.pump_pressure_kgcm2,
                "psi": self.pump_pressure_psi,
            },
            "lines": self.lines,
            "interval_m": self.interval_m,
        }

    def __str__(self) -> str:
        return (
            f"HydraulicParameters(flow: {self.flow_rate_m3h}m³/h ({self.flow_rate_bpm:.2f}BPM), "
            f'flexi: {self.diameter.value}", '
            f"pressure: {self.pump_pressure_kgcm2}kg/cm² ({self.pump_pressure_psi:.2f}PSI), "
            f"lines: {self.lines}, interval: {self.interval_m}m)"
        )
