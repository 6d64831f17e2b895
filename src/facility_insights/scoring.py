"""Completeness scoring and emergency-capability detection for cleaned facilities."""

import math
from typing import Iterable

from .models import UNKNOWN, Facility

COMPLETENESS_WEIGHTS: dict[str, int] = {
    "name": 10,
    "address": 10,
    "city": 5,
    "region": 5,
    "phone_numbers": 10,
    "email": 5,
    "website": 5,
    "specialties": 15,
    "procedures": 10,
    "equipment": 10,
    "capabilities": 10,
    "number_of_doctors": 5,
    "bed_capacity": 5,
}

# Weights are not normalized: a fully populated record scores 105.
MAX_COMPLETENESS_SCORE = sum(COMPLETENESS_WEIGHTS.values())

# The dataset summary counts ambulance services as emergency coverage; the
# regional risk tally does not. Both lists are kept as the dashboards report them.
SUMMARY_EMERGENCY_KEYWORDS: tuple = ("emergency", "24/7", "24 hour", "trauma", "ambulance", "urgent")
REGION_EMERGENCY_KEYWORDS: tuple = ("emergency", "24/7", "24 hour", "trauma", "urgent")


def _contributions(facility: Facility) -> dict[str, bool]:
    # The name check compares against "Unknown", not the "Unknown Facility"
    # default, so a defaulted name still earns its weight.
    return {
        "name": bool(facility.name) and facility.name != UNKNOWN,
        "address": bool(facility.address) and facility.address != UNKNOWN,
        "city": bool(facility.city) and facility.city != UNKNOWN,
        "region": bool(facility.region),
        "phone_numbers": len(facility.phone_numbers) > 0,
        "email": bool(facility.email),
        "website": bool(facility.website),
        "specialties": len(facility.specialties) > 0,
        "procedures": len(facility.procedures) > 0,
        "equipment": len(facility.equipment) > 0,
        "capabilities": len(facility.capabilities) > 0,
        # A filled-in but non-numeric count is present, just unusable.
        "number_of_doctors": (
            facility.number_of_doctors is not None or "number_of_doctors" in facility.unparsed_numbers
        ),
        "bed_capacity": facility.bed_capacity is not None or "bed_capacity" in facility.unparsed_numbers,
    }


def round_half_up(value: float) -> int:
    """Round .5 upwards, as the dashboard percentages do."""
    return int(math.floor(value + 0.5))


def completeness_score(facility: Facility) -> int:
    """Weighted sum of populated fields, 0..MAX_COMPLETENESS_SCORE."""
    return sum(COMPLETENESS_WEIGHTS[field] for field, present in _contributions(facility).items() if present)


def missing_fields(facility: Facility) -> list[str]:
    """Scored fields that did not contribute, heaviest first."""
    missing = [field for field, present in _contributions(facility).items() if not present]
    return sorted(missing, key=lambda f: -COMPLETENESS_WEIGHTS[f])


def completeness_percent(score: int) -> int:
    """Raw score rescaled to 0-100."""
    return round_half_up(score * 100 / MAX_COMPLETENESS_SCORE)


def has_emergency_capability(facility: Facility, keywords: Iterable[str] = SUMMARY_EMERGENCY_KEYWORDS) -> bool:
    """Case-insensitive keyword match over capabilities and specialties."""
    text = " ".join([*facility.capabilities, *facility.specialties]).lower()
    return any(keyword in text for keyword in keywords)
