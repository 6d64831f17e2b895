"""
Read-only REST API over the loaded facility dataset, plus CSV upload.

Mounted under /api by the main FastAPI app. Every handler reads the
DatasetStore held on app.state; nothing here mutates a loaded result.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, File, HTTPException, Query, Request, UploadFile, status

from api.schemas import FacilityPage, IngestResponse, RegionAnalysisResponse, StatusResponse
from src.facility_insights.errors import DatasetLoadError
from src.facility_insights.models import DataSummary, Facility, QualityReport
from src.facility_insights.pipeline import DatasetResult, DatasetStore, LoadState

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["facilities"])


# ── helpers ──────────────────────────────────────────────────────────────────


def _store(request: Request) -> DatasetStore:
    return request.app.state.store


def _result(request: Request) -> DatasetResult:
    """Loaded dataset, or 503 while loading / after a load error."""
    try:
        return _store(request).require_result()
    except DatasetLoadError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


# ── Status ───────────────────────────────────────────────────────────────────


@router.get("/status", response_model=StatusResponse)
def dataset_status(request: Request):
    """Current load state of the dataset."""
    return StatusResponse(**_store(request).status())


# ── Facilities ───────────────────────────────────────────────────────────────


@router.get("/facilities", response_model=FacilityPage)
def list_facilities(
    request: Request,
    offset: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    """Facilities in CSV order, paginated."""
    result = _result(request)
    items = list(result.facilities[offset : offset + limit])
    return FacilityPage(total=len(result.facilities), offset=offset, limit=limit, items=items)


@router.get("/facilities/{facility_id}", response_model=Facility)
def get_facility(facility_id: str, request: Request):
    """Return a single facility by ID."""
    facility = _result(request).facility_by_id(facility_id)
    if facility is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Facility {facility_id!r} not found")
    return facility


# ── Analytics ────────────────────────────────────────────────────────────────


@router.get("/summary", response_model=DataSummary)
def get_summary(request: Request):
    return _result(request).summary


@router.get("/regions", response_model=RegionAnalysisResponse)
def get_regions(request: Request):
    """Region risk table, largest regions first."""
    result = _result(request)
    return RegionAnalysisResponse(
        regions=list(result.regions),
        risk_level_counts=result.quality.risk_level_counts,
    )


@router.get("/quality", response_model=QualityReport)
def get_quality(request: Request):
    return _result(request).quality


# ── Ingest ───────────────────────────────────────────────────────────────────


@router.post("/ingest", response_model=IngestResponse)
async def ingest_upload(
    request: Request,
    file: UploadFile = File(..., description="CSV export of the facility survey"),
):
    """
    Replace the loaded dataset with an uploaded CSV.
    Returns the new summary; the previous result is discarded.
    """
    if not file.filename or not file.filename.lower().endswith(".csv"):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Upload must be a CSV file")
    try:
        content = await file.read()
    except Exception as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Could not read file: {e}")

    store = _store(request)
    state = store.replace_with_content(content, source=file.filename)
    if state != LoadState.READY:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=store.error)
    result = store.require_result()
    logger.info(f"📥 Ingested {file.filename}: {len(result.facilities)} facilities")
    return IngestResponse(
        source=result.source,
        facilities=len(result.facilities),
        regions=len(result.regions),
        summary=result.summary,
    )
