"""Pydantic data models for pressure profile input and results."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .parameters import HydraulicParameters


class SurveyPoint(BaseModel):
    """A surveyed trace vertex handed over by the parsing/elevation step."""

    latitude: float
    longitude: float
    elevation_m: float


class ProfileRequest(BaseModel):
    """Body of a pressure profile calculation request."""

    points: list[SurveyPoint]
    parameters: HydraulicParameters


class CalculationPointResult(BaseModel):
    """Pressure figures at one sampled point.

    Serialized under the column letters of the field worksheet (K, M, N, O, P).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    index: int
    distance_m: float
    latitude: float
    longitude: float
    elevation_m: float
    friction_loss_psi: float = Field(alias="K")
    static_pressure_kgcm2: float = Field(alias="M")
    accumulated_height_kgcm2: float = Field(alias="N")
    combined_pressure_psi: float = Field(alias="O")
    combined_pressure_kgcm2: float = Field(alias="P")


class HydraulicWarning(BaseModel):
    """A non-fatal condition found while calculating."""

    type: Literal["BOUNDS_EXCEEDED", "UNUSUAL_CONDITION", "DATA_QUALITY"]
    message: str
    context: dict[str, int | float] = Field(default_factory=dict)


class PressureAlarm(BaseModel):
    """Critical pressure at a point, beyond what the equipment can take."""

    type: Literal["PRESION_CRITICA"] = "PRESION_CRITICA"
    index: int
    distance_m: float
    value: float
    message: str


class CalculationSummary(BaseModel):
    total_distance_km: float
    elevation_difference_m: float
    pump_count: int
    valve_count: int


class CalculationResult(BaseModel):
    """Complete result of a pressure profile calculation."""

    points: list[CalculationPointResult]
    pumps: list[CalculationPointResult]
    valves: list[CalculationPointResult]
    alarms: list[PressureAlarm]
    warnings: list[HydraulicWarning]
    summary: CalculationSummary
