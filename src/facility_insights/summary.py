"""Fold a facility collection into DataSummary statistics."""

from typing import Sequence

from .config import INCOMPLETE_SCORE_THRESHOLD
from .models import FACILITY_TYPES, DataSummary, Facility
from .scoring import SUMMARY_EMERGENCY_KEYWORDS, has_emergency_capability, round_half_up


def generate_summary(facilities: Sequence[Facility], incomplete_threshold: int = INCOMPLETE_SCORE_THRESHOLD) -> DataSummary:
    """
    Single pass over the facilities.

    Every facility type is reported (zero when absent). Region and specialty
    counts only contain keys that occur. Facilities group under region, else
    city, else "Unknown".
    """
    by_facility_type = {t: 0 for t in FACILITY_TYPES}
    by_region: dict[str, int] = {}
    by_specialty: dict[str, int] = {}

    total_score = 0
    with_doctors = 0
    with_beds = 0
    with_emergency = 0
    incomplete = 0
    no_medical_data = 0

    for facility in facilities:
        by_facility_type[facility.facility_type] += 1

        region = facility.grouping_key
        by_region[region] = by_region.get(region, 0) + 1

        for specialty in facility.specialties:
            by_specialty[specialty] = by_specialty.get(specialty, 0) + 1

        total_score += facility.data_completeness_score
        if facility.number_of_doctors and facility.number_of_doctors > 0:
            with_doctors += 1
        if facility.bed_capacity and facility.bed_capacity > 0:
            with_beds += 1
        if has_emergency_capability(facility, SUMMARY_EMERGENCY_KEYWORDS):
            with_emergency += 1
        if facility.data_completeness_score < incomplete_threshold:
            incomplete += 1
        if not facility.has_medical_data:
            no_medical_data += 1

    return DataSummary(
        total_facilities=len(facilities),
        by_facility_type=by_facility_type,
        by_region=by_region,
        by_specialty=by_specialty,
        facilities_with_doctors=with_doctors,
        facilities_with_beds=with_beds,
        facilities_with_emergency_capability=with_emergency,
        average_completeness_score=round_half_up(total_score / len(facilities)) if facilities else 0,
        facilities_with_incomplete_data=incomplete,
        facilities_with_no_medical_data=no_medical_data,
    )


def _top(counts: dict[str, int], n: int) -> list[tuple[str, int]]:
    # sorted() is stable, so equal counts keep first-seen order
    return sorted(counts.items(), key=lambda kv: kv[1], reverse=True)[:n]


def top_regions(summary: DataSummary, n: int = 15) -> list[tuple[str, int]]:
    return _top(summary.by_region, n)


def top_specialties(summary: DataSummary, n: int = 20) -> list[tuple[str, int]]:
    return _top(summary.by_specialty, n)
