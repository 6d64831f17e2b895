"""Region risk classifier tests: rule order, grouping and sorting.

Usage: pytest tests/test_regions.py -v
"""

import pytest

from src.facility_insights.builder import build_facility
from src.facility_insights.models import RISK_LEVELS, RawRow
from src.facility_insights.regions import (
    analyze_regions,
    classify_risk,
    facilities_in_risk_areas,
    regions_without_emergency,
    regions_without_hospitals,
    risk_level_counts,
)
from src.facility_insights.scoring import (
    REGION_EMERGENCY_KEYWORDS,
    SUMMARY_EMERGENCY_KEYWORDS,
    has_emergency_capability,
)
from src.facility_insights.summary import generate_summary


def _facility(index, **values):
    return build_facility(RawRow(**values), index)


class TestClassifyRisk:
    @pytest.mark.parametrize(
        "with_emergency,hospitals,expected",
        [
            (0, 0, "CRITICAL"),
            (0, 1, "HIGH"),
            (0, 5, "HIGH"),
            (1, 0, "MEDIUM"),
            (3, 1, "MEDIUM"),
            (1, 2, "LOW"),
            (4, 9, "LOW"),
        ],
    )
    def test_rule_order(self, with_emergency, hospitals, expected):
        assert classify_risk(with_emergency, hospitals) == expected


class TestAnalyzeRegions:
    def test_sample_regions(self, sample_facilities):
        regions = analyze_regions(sample_facilities)
        by_name = {r.region: r for r in regions}
        assert set(by_name) == {"Greater Accra", "Kumasi", "Northern", "Upper East"}

        accra = by_name["Greater Accra"]
        assert accra.total_facilities == 2
        assert accra.hospitals == 2
        assert accra.with_doctors == 1
        assert accra.with_beds == 2
        # Ridge only lists an ambulance service, which the regional tally ignores.
        assert accra.with_emergency == 1
        assert accra.avg_completeness == 85
        assert accra.risk_level == "LOW"

        assert by_name["Kumasi"].risk_level == "CRITICAL"
        assert by_name["Kumasi"].clinics == 1
        assert by_name["Northern"].risk_level == "MEDIUM"
        assert by_name["Upper East"].risk_level == "HIGH"
        assert by_name["Upper East"].with_doctors == 1

    def test_sorted_by_size_then_first_seen(self, sample_facilities):
        regions = analyze_regions(sample_facilities)
        assert [r.region for r in regions] == ["Greater Accra", "Kumasi", "Northern", "Upper East"]

    def test_every_region_has_one_tier(self, sample_facilities):
        for region in analyze_regions(sample_facilities):
            assert region.risk_level in RISK_LEVELS

    def test_no_hospital_no_emergency_is_critical_regardless_of_size(self):
        facilities = [
            _facility(i, name=f"Clinic {i}", facility_type_id="clinic", address_state_or_region="Oti",
                      number_doctors="4", capacity="10")
            for i in range(6)
        ]
        [oti] = analyze_regions(facilities)
        assert oti.total_facilities == 6
        assert oti.with_doctors == 6
        assert oti.risk_level == "CRITICAL"

    def test_emergency_keyword_from_capabilities(self):
        f = _facility(0, name="Kumasi Polyclinic", facility_type_id="clinic", address_city="Kumasi",
                      capability='["24/7 Emergency Unit"]')
        [kumasi] = analyze_regions([f])
        assert kumasi.region == "Kumasi"
        assert kumasi.with_emergency == 1
        assert kumasi.risk_level == "MEDIUM"
        assert generate_summary([f]).facilities_with_emergency_capability == 1

    def test_ambulance_counts_for_summary_but_not_region(self):
        f = _facility(0, name="Ho Hospital", facility_type_id="hospital", address_state_or_region="Volta",
                      capability='["Ambulance on call"]')
        assert has_emergency_capability(f, SUMMARY_EMERGENCY_KEYWORDS)
        assert not has_emergency_capability(f, REGION_EMERGENCY_KEYWORDS)
        [volta] = analyze_regions([f])
        assert volta.with_emergency == 0
        assert volta.risk_level == "HIGH"

    def test_emergency_keyword_in_specialties(self):
        f = _facility(0, name="A", specialties='["traumaSurgery"]')
        assert has_emergency_capability(f, REGION_EMERGENCY_KEYWORDS)

    def test_empty(self):
        assert analyze_regions([]) == []


class TestRegionHelpers:
    def test_risk_level_counts(self, sample_facilities):
        counts = risk_level_counts(analyze_regions(sample_facilities))
        assert counts == {"CRITICAL": 1, "HIGH": 1, "MEDIUM": 1, "LOW": 1}

    def test_risk_level_counts_empty_has_all_tiers(self):
        assert risk_level_counts([]) == {"CRITICAL": 0, "HIGH": 0, "MEDIUM": 0, "LOW": 0}

    def test_regions_without(self, sample_facilities):
        regions = analyze_regions(sample_facilities)
        assert [r.region for r in regions_without_emergency(regions)] == ["Kumasi", "Upper East"]
        assert [r.region for r in regions_without_hospitals(regions)] == ["Kumasi", "Northern"]

    def test_facilities_in_risk_areas(self, sample_facilities):
        regions = analyze_regions(sample_facilities)
        ids = [f.id for f in facilities_in_risk_areas(sample_facilities, regions)]
        assert ids == ["facility-2", "bh-5"]

    def test_camel_case_json(self, sample_facilities):
        data = analyze_regions(sample_facilities)[0].model_dump(by_alias=True)
        assert data["totalFacilities"] == 2
        assert data["riskLevel"] == "LOW"
        assert data["avgCompleteness"] == 85
