"""JSON data files for the map/dashboard frontend (facilities.json, analysis.json)."""

import json
import logging
from pathlib import Path
from typing import Sequence

from .models import Facility
from .pipeline import DatasetResult
from .regions import facilities_in_risk_areas, regions_without_emergency, regions_without_hospitals

logger = logging.getLogger(__name__)


def specialty_regions(facilities: Sequence[Facility]) -> dict:
    """Per-specialty total and regional breakdown, most common first."""
    dist: dict = {}
    for f in facilities:
        for spec in f.specialties:
            if spec not in dist:
                dist[spec] = {"total": 0, "regions": {}}
            dist[spec]["total"] += 1
            r = f.grouping_key
            dist[spec]["regions"][r] = dist[spec]["regions"].get(r, 0) + 1
    return dict(sorted(dist.items(), key=lambda x: x[1]["total"], reverse=True))


def build_analysis(result: DatasetResult) -> dict:
    regions = list(result.regions)
    return {
        "source": result.source,
        "summary": result.summary.model_dump(by_alias=True),
        "regionAnalysis": [r.model_dump(by_alias=True) for r in regions],
        "riskLevelCounts": result.quality.risk_level_counts,
        "regionsWithoutEmergency": [r.region for r in regions_without_emergency(regions)],
        "regionsWithoutHospitals": [r.region for r in regions_without_hospitals(regions)],
        "facilitiesInRiskAreas": [f.id for f in facilities_in_risk_areas(result.facilities, regions)],
        "specialtyDistribution": specialty_regions(result.facilities),
        "quality": result.quality.model_dump(by_alias=True),
    }


def write_map_data(result: DatasetResult, out_dir: Path) -> tuple[Path, Path]:
    """Write facilities.json and analysis.json into out_dir; returns both paths."""
    out_dir.mkdir(parents=True, exist_ok=True)
    facilities_path = out_dir / "facilities.json"
    analysis_path = out_dir / "analysis.json"

    with open(facilities_path, "w", encoding="utf-8") as f:
        json.dump([fac.model_dump(by_alias=True) for fac in result.facilities], f, ensure_ascii=False, indent=None)
    logger.info(f"Wrote {facilities_path} ({len(result.facilities)} records)")

    with open(analysis_path, "w", encoding="utf-8") as f:
        json.dump(build_analysis(result), f, ensure_ascii=False, indent=None)
    logger.info(f"Wrote {analysis_path}")
    return facilities_path, analysis_path
