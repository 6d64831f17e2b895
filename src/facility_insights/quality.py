"""Data-quality breakdowns: score buckets, missing-data counts, flagged facilities, specialty spread."""

from typing import List, Sequence

from .config import INCOMPLETE_SCORE_THRESHOLD
from .models import (
    Facility,
    IssueCounts,
    QualityIssue,
    QualityReport,
    RegionRisk,
    ScoreBucket,
    SpecialtyStat,
)
from .regions import risk_level_counts
from .scoring import missing_fields

# Inclusive bounds on completeness_percent.
SCORE_BUCKETS: tuple = ((0, 20), (21, 40), (41, 60), (61, 80), (81, 100))


def score_distribution(facilities: Sequence[Facility]) -> List[ScoreBucket]:
    buckets = [ScoreBucket(label=f"{lo}-{hi}%", min=lo, max=hi) for lo, hi in SCORE_BUCKETS]
    counts = [0] * len(buckets)
    for facility in facilities:
        for i, bucket in enumerate(buckets):
            if bucket.min <= facility.completeness_percent <= bucket.max:
                counts[i] += 1
                break
    return [b.model_copy(update={"count": c}) for b, c in zip(buckets, counts)]


def issue_counts(facilities: Sequence[Facility]) -> IssueCounts:
    return IssueCounts(
        missing_address=sum(1 for f in facilities if not f.has_complete_address),
        missing_contact=sum(1 for f in facilities if not f.has_contact_info),
        missing_medical_data=sum(1 for f in facilities if not f.has_medical_data),
        missing_capacity=sum(1 for f in facilities if not f.has_capacity_data),
    )


def facility_issues(facility: Facility) -> List[str]:
    issues = []
    if not facility.has_complete_address:
        issues.append("Missing Address")
    if not facility.has_contact_info:
        issues.append("No Contact Info")
    if not facility.has_medical_data:
        issues.append("No Medical Data")
    if not facility.has_capacity_data:
        issues.append("No Capacity Data")
    return issues


def _to_issue(facility: Facility) -> QualityIssue:
    return QualityIssue(
        id=facility.id,
        name=facility.name,
        city=facility.city,
        completeness_score=facility.data_completeness_score,
        has_complete_address=facility.has_complete_address,
        has_contact_info=facility.has_contact_info,
        has_medical_data=facility.has_medical_data,
        has_capacity_data=facility.has_capacity_data,
        issues=facility_issues(facility),
        missing_fields=missing_fields(facility),
    )


def quality_issues(
    facilities: Sequence[Facility], incomplete_threshold: int = INCOMPLETE_SCORE_THRESHOLD
) -> List[QualityIssue]:
    """Facilities below the threshold or without medical data, lowest score first."""
    flagged = [
        f for f in facilities if f.data_completeness_score < incomplete_threshold or not f.has_medical_data
    ]
    flagged.sort(key=lambda f: f.data_completeness_score)
    return [_to_issue(f) for f in flagged]


def lowest_scoring(facilities: Sequence[Facility], limit: int = 20) -> List[Facility]:
    return sorted(facilities, key=lambda f: f.data_completeness_score)[:limit]


def specialty_distribution(facilities: Sequence[Facility], sample_size: int = 5) -> List[SpecialtyStat]:
    """Facility count per specialty with the first few facility names, most common first."""
    counts: dict[str, int] = {}
    samples: dict[str, List[str]] = {}
    for facility in facilities:
        for specialty in facility.specialties:
            counts[specialty] = counts.get(specialty, 0) + 1
            names = samples.setdefault(specialty, [])
            if len(names) < sample_size:
                names.append(facility.name)
    stats = [SpecialtyStat(specialty=s, count=c, sample_facilities=samples[s]) for s, c in counts.items()]
    stats.sort(key=lambda s: s.count, reverse=True)
    return stats


def rare_specialties(stats: Sequence[SpecialtyStat], max_count: int = 5) -> List[SpecialtyStat]:
    return [s for s in stats if s.count <= max_count]


def build_quality_report(
    facilities: Sequence[Facility],
    regions: Sequence[RegionRisk],
    incomplete_threshold: int = INCOMPLETE_SCORE_THRESHOLD,
) -> QualityReport:
    return QualityReport(
        score_distribution=score_distribution(facilities),
        issue_counts=issue_counts(facilities),
        issues=quality_issues(facilities, incomplete_threshold),
        specialty_distribution=specialty_distribution(facilities),
        risk_level_counts=risk_level_counts(regions),
    )
