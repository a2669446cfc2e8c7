"""FastAPI server for pressure profile calculation."""

from __future__ import annotations

import csv
import io
import logging

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import StreamingResponse

from .models import CalculationPointResult, CalculationResult, ProfileRequest
from .pipeline import run_profile

logger = logging.getLogger(__name__)

app = FastAPI(title="Pressure Profile", version="0.1.0")

CSV_FIELDS = [
    "index", "distance_m", "latitude", "longitude", "elevation_m",
    "K", "M", "N", "O", "P",
]


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/calculate", response_model=CalculationResult)
def calculate(
    request: ProfileRequest,
    format: str = Query("json", pattern="^(csv|json)$"),
):
    """Calculate the pressure profile of a surveyed trace.

    The body carries the ordered trace points with their elevations and the
    hydraulic parameters. Returns the full result as JSON, or the per-point
    table as CSV.
    """
    try:
        result = run_profile(request.points, request.parameters)
    except ValueError as exc:
        logger.warning("Rejected calculation request: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    if format == "csv":
        return _points_to_csv_response(result.points)
    return result


def _points_to_csv_response(points: list[CalculationPointResult]) -> StreamingResponse:
    """Convert the per-point table to a streaming CSV response."""

    def generate():
        buf = io.StringIO()
        writer = csv.DictWriter(buf, fieldnames=CSV_FIELDS)
        writer.writeheader()
        yield buf.getvalue()
        buf.seek(0)
        buf.truncate(0)

        for point in points:
            writer.writerow(point.model_dump(by_alias=True))
            yield buf.getvalue()
            buf.seek(0)
            buf.truncate(0)

    return StreamingResponse(
        generate(),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=pressure_profile.csv"},
    )
