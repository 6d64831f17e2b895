"""Pure field normalizers: raw CSV strings -> typed facility values. None of these raise."""

import json
import logging
import re

from .models import AFFILIATION_TYPES, UNKNOWN, AffiliationType, FacilityType, OperatorType

logger = logging.getLogger(__name__)

# First match wins, so order matters ("dentist" before "doctor").
_FACILITY_TYPE_ORDER: tuple = ("hospital", "clinic", "pharmacy", "dentist", "doctor")

_QUOTED = re.compile(r'"([^"]+)"')
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_CAMEL_BOUNDARY = re.compile(r"([A-Z])")


def parse_json_array(value: str | None) -> list[str]:
    """
    Parse a JSON-like list string from the CSV into a list of strings.

    '["a","b"]' and "['a','b']" both parse. Falsy entries are dropped. When the
    structured parse fails, every double-quoted substring is extracted; with no
    quoted substrings the raw value becomes a one-element list. A value that
    does not start with '[' is a one-element list.
    """
    if not value or value in ("null", "[]"):
        return []
    if not value.startswith("["):
        return [value]
    try:
        parsed = json.loads(value.replace("'", '"'))
    except (ValueError, RecursionError):
        matches = _QUOTED.findall(value)
        if matches:
            return matches
        return [value]
    if not isinstance(parsed, list):
        return []
    return [str(x) for x in parsed if x]


def normalize_facility_type(value: str | None) -> FacilityType:
    if not value:
        return "unknown"
    lower = value.lower()
    for facility_type in _FACILITY_TYPE_ORDER:
        if facility_type in lower:
            return facility_type
    return "unknown"


def normalize_operator_type(value: str | None) -> OperatorType:
    if not value:
        return "unknown"
    lower = value.lower()
    if "public" in lower or "government" in lower:
        return "public"
    if "private" in lower:
        return "private"
    return "unknown"


def parse_affiliations(value: str | None) -> list[AffiliationType]:
    """Affiliation tags from a JSON-like list; tags outside the known set are dropped."""
    return [a for a in parse_json_array(value) if a in AFFILIATION_TYPES]


def clean_specialty(specialty: str) -> str:
    """camelCase -> Title Case with spaces ("bloodBank" -> "Blood Bank")."""
    spaced = _CAMEL_BOUNDARY.sub(r" \1", specialty)
    if spaced:
        spaced = spaced[0].upper() + spaced[1:]
    return spaced.strip()


def build_address(
    line1: str | None,
    line2: str | None,
    line3: str | None,
    city: str | None,
    region: str | None,
) -> str:
    """Join the non-empty address parts with ', '; 'Unknown' when all are empty."""
    parts = [p for p in (line1, line2, line3, city, region) if p]
    return ", ".join(parts) or UNKNOWN


def parse_int(value: str | None) -> int | None:
    """
    Leading integer of a string ("12 beds" -> 12, "3.5" -> 3).

    Values with no leading digits return None instead of raising.
    """
    if not value:
        return None
    match = _LEADING_INT.match(value)
    if not match:
        logger.debug(f"Non-numeric integer field {value!r}")
        return None
    return int(match.group(1))


def parse_bool(value: str | None) -> bool | None:
    """Literal 'true'/'false' only; anything else is unknown."""
    if value == "true":
        return True
    if value == "false":
        return False
    return None


def first_website(official: str | None, websites: str | None) -> str | None:
    """Explicit website, else the first entry of the comma-joined websites list."""
    if official:
        return official
    if not websites:
        return None
    first = re.sub(r'[\[\]"]', "", websites).split(",")[0].strip()
    return first or None
