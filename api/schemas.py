"""
API Request / Response Models — Pydantic schemas for the REST API.

Facility, summary and region payloads reuse the pipeline models directly;
this module only adds the envelopes around them.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from src.facility_insights.models import DataSummary, Facility, RegionRisk


class StatusResponse(BaseModel):
    """Dataset load state."""

    state: str = Field(..., description="loading, ready or error")
    error: Optional[str] = Field(None, description="Load error message when state is error")
    source: str = Field(..., description="CSV path or upload name the data came from")
    facilities: int = Field(0, description="Number of facilities loaded")


class FacilityPage(BaseModel):
    """One page of the facility list."""

    total: int
    offset: int
    limit: int
    items: List[Facility] = Field(default_factory=list)


class RegionAnalysisResponse(BaseModel):
    """Region risk table plus per-tier counts."""

    regions: List[RegionRisk] = Field(default_factory=list)
    risk_level_counts: dict = Field(default_factory=dict)


class IngestResponse(BaseModel):
    """Result of replacing the dataset with an uploaded CSV."""

    source: str
    facilities: int
    regions: int
    summary: DataSummary
