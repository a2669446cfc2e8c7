import pytest

from pressure_profile import Coordinates, Elevation, FlexiDiameter, HydraulicParameters, TracePoint


@pytest.fixture
def params_12in():
    return HydraulicParameters(
        flow_rate_m3h=120,
        diameter=FlexiDiameter.TWELVE_INCH,
        pump_pressure_kgcm2=8,
        lines=1,
        interval_m=50,
    )


@pytest.fixture
def params_10in():
    return HydraulicParameters(
        flow_rate_m3h=500,
        diameter=FlexiDiameter.TEN_INCH,
        pump_pressure_kgcm2=2,
        lines=1,
        interval_m=50,
    )


@pytest.fixture
def two_point_scenario():
    """Start and end of a short downhill survey in Neuquén, 343 m apart."""
    return [
        TracePoint.create_start(Coordinates.create(-38.233023, -68.629742), Elevation.from_meters(545)),
        TracePoint.create(1, Coordinates.create(-38.23531, -68.627113), Elevation.from_meters(535), 343),
    ]


@pytest.fixture
def survey_records():
    return [
        {"latitude": -38.233023, "longitude": -68.629742, "elevation_m": 545},
        {"latitude": -38.23531, "longitude": -68.627113, "elevation_m": 535},
    ]


@pytest.fixture
def make_points():
    """Factory for TracePoints at fixed spacing with the given elevations."""

    def factory(elevations, spacing_m, start=(-38.2330, -68.6297), step_deg=0.0001):
        lat, lng = start
        return [
            TracePoint.create(
                i,
                Coordinates.create(lat - i * step_deg, lng + i * step_deg),
                Elevation.from_meters(elevation),
                i * spacing_m,
            )
            for i, elevation in enumerate(elevations)
        ]

    return factory
