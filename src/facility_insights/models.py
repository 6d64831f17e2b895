"""Pydantic models for raw CSV rows, cleaned facilities and derived analytics."""

from typing import Dict, List, Literal, Mapping, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

FacilityType = Literal["hospital", "clinic", "pharmacy", "doctor", "dentist", "unknown"]
OperatorType = Literal["public", "private", "unknown"]
AffiliationType = Literal["faith-tradition", "philanthropy-legacy", "community", "academic", "government"]
RiskLevel = Literal["LOW", "MEDIUM", "HIGH", "CRITICAL"]

FACILITY_TYPES: tuple = ("hospital", "clinic", "pharmacy", "doctor", "dentist", "unknown")
AFFILIATION_TYPES: tuple = ("faith-tradition", "philanthropy-legacy", "community", "academic", "government")
RISK_LEVELS: tuple = ("CRITICAL", "HIGH", "MEDIUM", "LOW")

UNKNOWN = "Unknown"
UNKNOWN_FACILITY_NAME = "Unknown Facility"


# Recognized CSV headers, matched exactly, and the RawRow field each one fills.
RAW_COLUMNS: Dict[str, str] = {
    "unique_id": "unique_id",
    "pk_unique_id": "pk_unique_id",
    "name": "name",
    "organization_type": "organization_type",
    "facilityTypeId": "facility_type_id",
    "operatorTypeId": "operator_type_id",
    "affiliationTypeIds": "affiliation_type_ids",
    "address_line1": "address_line1",
    "address_line2": "address_line2",
    "address_line3": "address_line3",
    "address_city": "address_city",
    "address_stateOrRegion": "address_state_or_region",
    "address_country": "address_country",
    "address_countryCode": "address_country_code",
    "phone_numbers": "phone_numbers",
    "email": "email",
    "officialWebsite": "official_website",
    "websites": "websites",
    "specialties": "specialties",
    "procedure": "procedure",
    "equipment": "equipment",
    "capability": "capability",
    "description": "description",
    "yearEstablished": "year_established",
    "numberDoctors": "number_doctors",
    "capacity": "capacity",
    "acceptsVolunteers": "accepts_volunteers",
    "source_url": "source_url",
}


class RawRow(BaseModel):
    """One CSV row restricted to the recognized columns. Blank values are None."""

    unique_id: Optional[str] = None
    pk_unique_id: Optional[str] = None
    name: Optional[str] = None
    organization_type: Optional[str] = None
    facility_type_id: Optional[str] = None
    operator_type_id: Optional[str] = None
    affiliation_type_ids: Optional[str] = None
    address_line1: Optional[str] = None
    address_line2: Optional[str] = None
    address_line3: Optional[str] = None
    address_city: Optional[str] = None
    address_state_or_region: Optional[str] = None
    address_country: Optional[str] = None
    address_country_code: Optional[str] = None
    phone_numbers: Optional[str] = None
    email: Optional[str] = None
    official_website: Optional[str] = None
    websites: Optional[str] = None
    specialties: Optional[str] = None
    procedure: Optional[str] = None
    equipment: Optional[str] = None
    capability: Optional[str] = None
    description: Optional[str] = None
    year_established: Optional[str] = None
    number_doctors: Optional[str] = None
    capacity: Optional[str] = None
    accepts_volunteers: Optional[str] = None
    source_url: Optional[str] = None

    class Config:
        str_strip_whitespace = True
        extra = "ignore"
        frozen = True

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> "RawRow":
        """Validate a header->value mapping; headers not in RAW_COLUMNS are dropped."""
        data = {RAW_COLUMNS[header]: value for header, value in mapping.items() if header in RAW_COLUMNS}
        return cls(**data)


class _CamelModel(BaseModel):
    """Snake_case attributes, camelCase JSON (the dashboard's field names)."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        frozen = True


class Facility(_CamelModel):
    """One cleaned facility. data_completeness_score is derived from the other fields."""

    # Identity
    id: str
    name: str = UNKNOWN_FACILITY_NAME
    organization_type: str = "facility"
    facility_type: FacilityType = "unknown"
    operator_type: OperatorType = "unknown"
    affiliations: List[AffiliationType] = Field(default_factory=list)

    # Location
    address: str = UNKNOWN
    city: str = UNKNOWN
    region: str = ""
    country: str = "Ghana"
    country_code: str = "GH"

    # Contact
    phone_numbers: List[str] = Field(default_factory=list)
    email: Optional[str] = None
    website: Optional[str] = None

    # Medical data
    specialties: List[str] = Field(default_factory=list)
    procedures: List[str] = Field(default_factory=list)
    equipment: List[str] = Field(default_factory=list)
    capabilities: List[str] = Field(default_factory=list)

    # Metadata
    description: Optional[str] = None
    year_established: Optional[int] = None
    number_of_doctors: Optional[int] = None
    bed_capacity: Optional[int] = None
    accepts_volunteers: Optional[bool] = None
    # Numeric fields that were filled in but held no number ("several", "n/a").
    unparsed_numbers: List[str] = Field(default_factory=list)

    # Quality flags
    has_complete_address: bool = False
    has_contact_info: bool = False
    has_medical_data: bool = False
    has_capacity_data: bool = False
    data_completeness_score: int = Field(0, ge=0)
    completeness_percent: int = Field(0, ge=0, le=100)

    source_url: Optional[str] = None

    @property
    def grouping_key(self) -> str:
        """Region if set, else city, else 'Unknown'. Used for every per-region rollup."""
        return self.region or self.city or UNKNOWN


class DataSummary(_CamelModel):
    """Aggregate statistics over a facility collection."""

    total_facilities: int = 0
    by_facility_type: Dict[FacilityType, int] = Field(default_factory=lambda: {t: 0 for t in FACILITY_TYPES})
    by_region: Dict[str, int] = Field(default_factory=dict)
    by_specialty: Dict[str, int] = Field(default_factory=dict)

    # Medical desert coverage
    facilities_with_doctors: int = 0
    facilities_with_beds: int = 0
    facilities_with_emergency_capability: int = 0

    # Data quality
    average_completeness_score: int = 0
    facilities_with_incomplete_data: int = 0
    facilities_with_no_medical_data: int = 0


class RegionRisk(_CamelModel):
    """Coverage tallies and medical-desert risk tier for one region grouping."""

    region: str
    total_facilities: int
    hospitals: int = 0
    clinics: int = 0
    with_doctors: int = 0
    with_beds: int = 0
    with_emergency: int = 0
    avg_completeness: int = 0
    risk_level: RiskLevel


class ScoreBucket(_CamelModel):
    label: str
    min: int
    max: int
    count: int = 0


class IssueCounts(_CamelModel):
    missing_address: int = 0
    missing_contact: int = 0
    missing_medical_data: int = 0
    missing_capacity: int = 0


class QualityIssue(_CamelModel):
    """A facility flagged for follow-up, with the human-readable reasons."""

    id: str
    name: str
    city: str
    completeness_score: int
    has_complete_address: bool
    has_contact_info: bool
    has_medical_data: bool
    has_capacity_data: bool
    issues: List[str] = Field(default_factory=list)
    missing_fields: List[str] = Field(default_factory=list)


class SpecialtyStat(_CamelModel):
    specialty: str
    count: int
    sample_facilities: List[str] = Field(default_factory=list)


class QualityReport(_CamelModel):
    """Data-quality breakdowns shown alongside the summary."""

    score_distribution: List[ScoreBucket] = Field(default_factory=list)
    issue_counts: IssueCounts = Field(default_factory=IssueCounts)
    issues: List[QualityIssue] = Field(default_factory=list)
    specialty_distribution: List[SpecialtyStat] = Field(default_factory=list)
    risk_level_counts: Dict[RiskLevel, int] = Field(default_factory=lambda: {r: 0 for r in RISK_LEVELS})
