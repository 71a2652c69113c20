"""FastAPI application for Quallaa ROI tracking -- baseline, ROI, snapshots, trends."""

from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import Body, Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import Field

from quallaa.config.settings import get_settings
from quallaa.engine.calculator import ROICalculator
from quallaa.engine.result import ROITrend
from quallaa.engine.trends import TrendAnalyzer
from quallaa.errors import (
    ConfigurationError,
    InsufficientDataError,
    NotFoundError,
    QuallaaError,
    ValidationError,
)
from quallaa.models.base import CamelModel
from quallaa.models.metrics import CurrentMetrics
from quallaa.models.snapshot import SnapshotPeriod
from quallaa.reports.roi_report import render_roi_report
from quallaa.storage import FileStorage, StorageBackend
from quallaa.tracking.baseline import BaselineStore
from quallaa.tracking.snapshots import SnapshotStore

logging.basicConfig(level=get_settings().log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Quallaa ROI API", version="0.1.0")

# CORS -- allow the local dashboard dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_STATUS_BY_ERROR: list[tuple[type[QuallaaError], int]] = [
    (ValidationError, 422),
    (NotFoundError, 404),
    (InsufficientDataError, 409),
    (ConfigurationError, 409),
]


class SnapshotRequest(CamelModel):
    current: CurrentMetrics
    period: Optional[SnapshotPeriod] = None
    confidence_level: Optional[float] = Field(default=None, gt=0, lt=1)


def get_storage() -> StorageBackend:
    return FileStorage(get_settings().project_path)


def get_calculator() -> ROICalculator:
    return ROICalculator()


@app.exception_handler(QuallaaError)
async def quallaa_error_handler(request: Request, exc: QuallaaError) -> JSONResponse:
    status = next(
        (code for error_type, code in _STATUS_BY_ERROR if isinstance(exc, error_type)),
        400,
    )
    logger.info("%s %s -> %d: %s", request.method, request.url.path, status, exc.message)
    return JSONResponse(status_code=status, content={"error": exc.message, "code": exc.code})


def _trend_payload(trend: ROITrend) -> dict[str, Any]:
    return {
        "metric": trend.metric,
        "category": trend.category.value,
        "trend": trend.trend.value,
        "trendConfidence": trend.trend_confidence,
        "values": [
            {
                "timestamp": point.timestamp.isoformat(),
                "value": point.value,
                "confidenceInterval": point.confidence_interval.to_json_dict(),
            }
            for point in trend.values
        ],
    }


@app.post("/api/baseline")
async def establish_baseline(
    body: dict[str, Any] = Body(...),
    storage: StorageBackend = Depends(get_storage),
):
    """Establish (or replace) the project's ROI baseline."""
    baseline = await BaselineStore(storage).establish_baseline(body)
    return baseline.to_json_dict()


@app.get("/api/baseline")
async def get_baseline(storage: StorageBackend = Depends(get_storage)):
    baseline = await BaselineStore(storage).get_baseline()
    if baseline is None:
        return JSONResponse(status_code=404, content={"error": "Baseline not found"})
    return baseline.to_json_dict()


@app.patch("/api/baseline")
async def update_baseline(
    body: dict[str, Any] = Body(...),
    storage: StorageBackend = Depends(get_storage),
):
    baseline = await BaselineStore(storage).update_baseline(body)
    return baseline.to_json_dict()


@app.get("/api/baseline/health")
async def baseline_health(storage: StorageBackend = Depends(get_storage)):
    store = BaselineStore(storage)
    baseline = await store.require_baseline()
    return asdict(store.calculate_baseline_health(baseline))


@app.get("/api/baseline/report", response_class=PlainTextResponse)
async def baseline_report(storage: StorageBackend = Depends(get_storage)):
    return await BaselineStore(storage).generate_baseline_report()


@app.post("/api/roi/calculate")
async def calculate_roi(
    current: CurrentMetrics,
    confidence_level: Optional[float] = Query(default=None, gt=0, lt=1),
    storage: StorageBackend = Depends(get_storage),
    calculator: ROICalculator = Depends(get_calculator),
):
    """Calculate ROI for fresh measurements without recording a snapshot."""
    baseline = await BaselineStore(storage).require_baseline()
    metrics = calculator.calculate_roi(baseline, current, confidence_level)
    return metrics.to_json_dict()


@app.post("/api/projects/{project_id}/snapshots")
async def create_snapshot(
    project_id: str,
    body: SnapshotRequest,
    storage: StorageBackend = Depends(get_storage),
    calculator: ROICalculator = Depends(get_calculator),
):
    """Calculate ROI for fresh measurements and append it to the snapshot log.

    Without an explicit period the snapshot covers baseline -> now.
    """
    baseline = await BaselineStore(storage).require_baseline()
    metrics = calculator.calculate_roi(baseline, body.current, body.confidence_level)
    period = body.period or SnapshotPeriod(
        start_date=baseline.established_at,
        end_date=datetime.now(tz=timezone.utc),
    )
    snapshot = await SnapshotStore(storage).create_snapshot(
        project_id, baseline, metrics, period
    )
    return snapshot.to_json_dict()


@app.get("/api/projects/{project_id}/snapshots")
async def list_snapshots(project_id: str, storage: StorageBackend = Depends(get_storage)):
    snapshots = await SnapshotStore(storage).get_snapshots(project_id)
    return [s.to_json_dict() for s in snapshots]


@app.get("/api/projects/{project_id}/trends")
async def get_trends(
    project_id: str,
    metric: str = Query(default="financial.current_roi"),
    storage: StorageBackend = Depends(get_storage),
):
    trend = await TrendAnalyzer(SnapshotStore(storage)).calculate_trends(project_id, metric)
    return _trend_payload(trend)


@app.get("/api/projects/{project_id}/report", response_class=PlainTextResponse)
async def project_report(project_id: str, storage: StorageBackend = Depends(get_storage)):
    baseline = await BaselineStore(storage).require_baseline()
    snapshots = await SnapshotStore(storage).get_snapshots(project_id)
    return render_roi_report(baseline, snapshots)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}
