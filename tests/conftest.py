"""Shared fixtures: a small facility CSV covering every risk tier."""

from pathlib import Path

import pytest

from src.facility_insights.pipeline import analyze, process_dataset

SAMPLE_HEADER = (
    "unique_id,name,facilityTypeId,operatorTypeId,affiliationTypeIds,address_line1,address_city,"
    "address_stateOrRegion,phone_numbers,email,officialWebsite,websites,specialties,procedure,equipment,"
    "capability,numberDoctors,capacity,acceptsVolunteers,source_url"
)

SAMPLE_ROWS = [
    # Fully populated teaching hospital (score 105)
    'kb-1,Korle Bu Teaching Hospital,hospital,public,"[""academic"",""government""]",Guggisberg Ave,Accra,'
    'Greater Accra,"[""+233302665401""]",info@kbth.gov.gh,https://kbth.gov.gh,,'
    '"[""cardiology"",""emergencyMedicine""]","[""Open heart surgery""]","[""CT scanner""]",'
    '"[""24/7 Emergency Unit""]",350,2000,true,https://example.org/kbth',
    # Second Accra hospital, ambulance only (score 65)
    'rh-2,Ridge Hospital,hospital,government,,Castle Rd,Accra,Greater Accra,,,,"[""ridge.gov.gh"",""ridge.org""]",'
    '"[""internalMedicine""]",,,"[""Ambulance service""]",,120,,',
    # No id, no region, no medical data (score 25)
    ",St. Mary Clinic,clinic,private,,,Kumasi,,,,,,[],,,,,,,",
    # Pharmacy with urgent care in Northern (score 40)
    'tp-4,Tamale Pharmacy,pharmacy,,,Market St,Tamale,Northern,,,,,,,,"[""Urgent care""]",,,,',
    # Hospital without emergency keywords in Upper East (score 50)
    'bh-5,Bolgatanga Regional Hospital,hospital,public,,,Bolgatanga,Upper East,,,,,"[""generalSurgery""]",,,,12,,,',
]

SAMPLE_CSV = "\n".join([SAMPLE_HEADER, *SAMPLE_ROWS]) + "\n"


@pytest.fixture
def sample_csv() -> str:
    return SAMPLE_CSV


@pytest.fixture
def sample_facilities():
    return process_dataset(SAMPLE_CSV)


@pytest.fixture
def sample_result(sample_facilities):
    return analyze(sample_facilities, source="sample.csv")


@pytest.fixture
def sample_csv_path(tmp_path) -> Path:
    path = tmp_path / "facilities.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path
