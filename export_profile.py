"""Compute the pressure profile of a surveyed trace CSV: export the result table and plot the profile.

The input CSV needs ``latitude``, ``longitude`` and ``elevation_m`` columns in path
order. This script uses the pressure_profile library for the calculation and adds
CSV export and a matplotlib profile plot on top.
"""

import argparse
import csv
import logging
from pathlib import Path

import matplotlib.pyplot as plt

from pressure_profile import CalculationResult, HydraulicParameters, config, run_profile

logger = logging.getLogger("export_profile")


def read_survey_csv(path: Path) -> list[dict]:
    """Read survey points from a CSV file."""
    with open(path, newline="") as f:
        return [
            {
                "latitude": float(row["latitude"]),
                "longitude": float(row["longitude"]),
                "elevation_m": float(row["elevation_m"]),
            }
            for row in csv.DictReader(f)
        ]


def export_csv(result: CalculationResult, path: Path) -> None:
    """Write the per-point table to a CSV file, flagging pump and valve sites."""
    pump_indices = {p.index for p in result.pumps}
    valve_indices = {v.index for v in result.valves}
    rows = []
    for point in result.points:
        row = point.model_dump(by_alias=True)
        row["pump"] = point.index in pump_indices
        row["valve"] = point.index in valve_indices
        rows.append(row)

    with open(path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
        writer.writeheader()
        writer.writerows(rows)
    logger.info("CSV exported: %s", path)


def plot_profile(result: CalculationResult, path: Path, title: str = "Pipeline Pressure Profile") -> None:
    """Plot elevation and combined pressure against distance, marking pumps and valves."""
    km = [p.distance_m / 1000 for p in result.points]
    elevations = [p.elevation_m for p in result.points]
    pressures = [p.combined_pressure_kgcm2 for p in result.points]

    fig, (ax_elev, ax_pres) = plt.subplots(2, 1, figsize=(14, 8), sharex=True)

    ax_elev.fill_between(km, elevations, min(elevations) - 5, alpha=0.3, color="peru")
    ax_elev.plot(km, elevations, color="saddlebrown", linewidth=0.8)
    ax_elev.set_ylabel("Elevation (m)")
    ax_elev.set_title(title)
    ax_elev.grid(True, alpha=0.3)

    ax_pres.plot(km, pressures, color="steelblue", linewidth=1.0, label="P (kg/cm²)")
    ax_pres.scatter(
        [p.distance_m / 1000 for p in result.pumps],
        [p.combined_pressure_kgcm2 for p in result.pumps],
        marker="^", color="green", zorder=3, label=f"Pumps ({len(result.pumps)})",
    )
    ax_pres.scatter(
        [v.distance_m / 1000 for v in result.valves],
        [v.combined_pressure_kgcm2 for v in result.valves],
        marker="v", color="crimson", zorder=3, label=f"Valves ({len(result.valves)})",
    )
    ax_pres.axhline(0, color="black", linewidth=0.5, linestyle="--", alpha=0.5)
    ax_pres.set_xlabel("Distance (km)")
    ax_pres.set_ylabel("Pressure (kg/cm²)")
    ax_pres.grid(True, alpha=0.3)
    ax_pres.legend()

    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)
    logger.info("Plot saved: %s", path)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("survey", type=Path, help="CSV with latitude, longitude, elevation_m columns")
    parser.add_argument("--flow-rate", type=float, required=True, help="Flow rate in m³/h")
    parser.add_argument("--diameter", choices=["10", "12"], default="12", help="Flexi hose diameter (inches)")
    parser.add_argument("--pump-pressure", type=float, required=True, help="Pump pressure in kg/cm²")
    parser.add_argument("--lines", type=int, default=1, help="Number of parallel lines")
    parser.add_argument("--interval", type=float, default=50.0, help="Sampling interval in meters")
    parser.add_argument("--output-csv", type=Path, default=Path("pressure_profile.csv"))
    parser.add_argument("--output-plot", type=Path, default=Path("pressure_profile.png"))
    return parser.parse_args(argv)


def main(argv: list[str] | None = None):
    logging.basicConfig(level=config.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")
    args = parse_args(argv)

    params = HydraulicParameters(
        flow_rate_m3h=args.flow_rate,
        diameter=args.diameter,
        pump_pressure_kgcm2=args.pump_pressure,
        lines=args.lines,
        interval_m=args.interval,
    )
    survey = read_survey_csv(args.survey)
    logger.info("Loaded %d survey points from %s", len(survey), args.survey)
    logger.info("Parameters: %s", params)

    result = run_profile(survey, params)
    summary = result.summary
    logger.info("Total length:  %.2f km", summary.total_distance_km)
    logger.info("Elevation:     %+.1f m (end - start)", summary.elevation_difference_m)
    logger.info("Pumps: %d  Valves: %d  Alarms: %d", summary.pump_count, summary.valve_count, len(result.alarms))
    for warning in result.warnings:
        logger.warning(warning.message)

    export_csv(result, args.output_csv)
    plot_profile(result, args.output_plot)


if __name__ == "__main__":
    main()
