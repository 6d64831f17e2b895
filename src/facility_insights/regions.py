"""Deterministic regional aggregation for medical desert risk."""

import logging
from collections import defaultdict
from typing import Dict, List, Sequence

from .models import RISK_LEVELS, Facility, RegionRisk, RiskLevel
from .scoring import REGION_EMERGENCY_KEYWORDS, has_emergency_capability, round_half_up

logger = logging.getLogger(__name__)

AT_RISK_LEVELS: tuple = ("CRITICAL", "HIGH")


def classify_risk(with_emergency: int, hospitals: int) -> RiskLevel:
    """
    Risk tier for one region. Rules are checked in order, first match wins:
    no emergency care and no hospital is CRITICAL, no emergency care is HIGH,
    fewer than two hospitals is MEDIUM, anything else is LOW.
    """
    if with_emergency == 0 and hospitals == 0:
        return "CRITICAL"
    if with_emergency == 0:
        return "HIGH"
    if hospitals < 2:
        return "MEDIUM"
    return "LOW"


def analyze_regions(facilities: Sequence[Facility]) -> List[RegionRisk]:
    """
    Group facilities by region (falling back to city, then "Unknown") and
    classify each group. Largest regions first.
    """
    grouped: Dict[str, List[Facility]] = defaultdict(list)
    for facility in facilities:
        grouped[facility.grouping_key].append(facility)

    assessments: List[RegionRisk] = []
    for region, region_facilities in grouped.items():
        hospitals = sum(1 for f in region_facilities if f.facility_type == "hospital")
        clinics = sum(1 for f in region_facilities if f.facility_type == "clinic")
        with_doctors = sum(1 for f in region_facilities if f.number_of_doctors and f.number_of_doctors > 0)
        with_beds = sum(1 for f in region_facilities if f.bed_capacity and f.bed_capacity > 0)
        with_emergency = sum(
            1 for f in region_facilities if has_emergency_capability(f, REGION_EMERGENCY_KEYWORDS)
        )
        total_completeness = sum(f.data_completeness_score for f in region_facilities)

        assessments.append(
            RegionRisk(
                region=region,
                total_facilities=len(region_facilities),
                hospitals=hospitals,
                clinics=clinics,
                with_doctors=with_doctors,
                with_beds=with_beds,
                with_emergency=with_emergency,
                avg_completeness=round_half_up(total_completeness / len(region_facilities)),
                risk_level=classify_risk(with_emergency, hospitals),
            )
        )

    assessments.sort(key=lambda r: r.total_facilities, reverse=True)
    logger.debug(f"Classified {len(assessments)} region(s): {risk_level_counts(assessments)}")
    return assessments


def risk_level_counts(regions: Sequence[RegionRisk]) -> Dict[RiskLevel, int]:
    """Number of regions per tier; every tier is present."""
    counts: Dict[RiskLevel, int] = {level: 0 for level in RISK_LEVELS}
    for region in regions:
        counts[region.risk_level] += 1
    return counts


def regions_without_emergency(regions: Sequence[RegionRisk]) -> List[RegionRisk]:
    return [r for r in regions if r.with_emergency == 0]


def regions_without_hospitals(regions: Sequence[RegionRisk]) -> List[RegionRisk]:
    return [r for r in regions if r.hospitals == 0]


def facilities_in_risk_areas(facilities: Sequence[Facility], regions: Sequence[RegionRisk]) -> List[Facility]:
    """Facilities whose region is classified CRITICAL or HIGH."""
    at_risk = {r.region for r in regions if r.risk_level in AT_RISK_LEVELS}
    return [f for f in facilities if f.grouping_key in at_risk]
