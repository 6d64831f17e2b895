"""Build one cleaned Facility from one validated CSV row."""

from .models import UNKNOWN, UNKNOWN_FACILITY_NAME, Facility, RawRow
from .normalizers import (
    build_address,
    clean_specialty,
    first_website,
    normalize_facility_type,
    normalize_operator_type,
    parse_affiliations,
    parse_bool,
    parse_int,
    parse_json_array,
)
from .scoring import completeness_percent, completeness_score


def build_facility(row: RawRow, index: int) -> Facility:
    """
    Convert one RawRow into a Facility.

    index is only used to synthesize an id when the row carries none. The
    completeness score is computed from the assembled record, so it is set in
    a second step once every other field is in place.
    """
    specialties = [clean_specialty(s) for s in parse_json_array(row.specialties)]
    procedures = parse_json_array(row.procedure)
    equipment = parse_json_array(row.equipment)
    capabilities = parse_json_array(row.capability)
    phone_numbers = parse_json_array(row.phone_numbers)

    numbers = {
        "year_established": (row.year_established, parse_int(row.year_established)),
        "number_of_doctors": (row.number_doctors, parse_int(row.number_doctors)),
        "bed_capacity": (row.capacity, parse_int(row.capacity)),
    }
    unparsed_numbers = [field for field, (raw, parsed) in numbers.items() if raw and parsed is None]

    facility = Facility(
        id=row.unique_id or row.pk_unique_id or f"facility-{index}",
        name=row.name or UNKNOWN_FACILITY_NAME,
        organization_type=row.organization_type or "facility",
        facility_type=normalize_facility_type(row.facility_type_id),
        operator_type=normalize_operator_type(row.operator_type_id),
        affiliations=parse_affiliations(row.affiliation_type_ids),
        address=build_address(
            row.address_line1,
            row.address_line2,
            row.address_line3,
            row.address_city,
            row.address_state_or_region,
        ),
        city=row.address_city or UNKNOWN,
        region=row.address_state_or_region or "",
        country=row.address_country or "Ghana",
        country_code=row.address_country_code or "GH",
        phone_numbers=phone_numbers,
        email=row.email,
        website=first_website(row.official_website, row.websites),
        specialties=specialties,
        procedures=procedures,
        equipment=equipment,
        capabilities=capabilities,
        description=row.description,
        year_established=numbers["year_established"][1],
        number_of_doctors=numbers["number_of_doctors"][1],
        bed_capacity=numbers["bed_capacity"][1],
        accepts_volunteers=parse_bool(row.accepts_volunteers),
        unparsed_numbers=unparsed_numbers,
        has_complete_address=bool(row.address_city and row.address_line1),
        has_contact_info=len(phone_numbers) > 0 or bool(row.email),
        has_medical_data=bool(specialties or procedures or equipment or capabilities),
        has_capacity_data=bool(row.number_doctors or row.capacity),
        source_url=row.source_url,
    )

    score = completeness_score(facility)
    return facility.model_copy(
        update={"data_completeness_score": score, "completeness_percent": completeness_percent(score)}
    )
