"""
Tests for subsidy eligibility evaluators.

Covers:
- Waarde Check Bon (postcode allow-list, validity)
- NIP (four criteria, tiered amount, unknown inputs)
- Stimuleringslening (postcode, building age)
- ISDE (property type, range estimates)
- Programme registry
"""

import pytest
from dataclasses import replace
from datetime import date

from energiebuddy.core.errors import UnknownProgramError
from energiebuddy.core.models import (
    Address,
    EnergyLabel,
    GlassType,
    HouseholdProfile,
    PropertyType,
)
from energiebuddy.subsidies import (
    CriterionStatus,
    ProgramKind,
    PROGRAMS,
    estimate_heat_pump_subsidy,
    estimate_insulation_subsidy,
    evaluate_all,
    evaluate_isde,
    evaluate_nip,
    evaluate_program,
    evaluate_stimuleringslening,
    evaluate_waarde_check,
    get_program,
)
from energiebuddy.subsidies.waarde_check import WAARDE_CHECK_POSTCODES, area_name


class TestWaardeCheck:
    """Tests for the area voucher."""

    def test_eligible_in_area(self, voucher_address):
        result = evaluate_waarde_check(None, voucher_address)

        assert result.eligible
        assert result.amount == 2000
        assert result.details["area"] == "Zevenbergschen Hoek"
        assert result.details["valid_until"] == "2026-12-31"

    def test_outside_area(self, outside_address):
        result = evaluate_waarde_check(None, outside_address)

        assert not result.eligible
        assert result.amount == 0
        assert "1234" in result.reason

    def test_prefix_eligible_iff_in_allow_list(self):
        for number in range(1000, 10000):
            prefix = str(number)
            result = evaluate_waarde_check(None, Address(postal_code=f"{prefix} XY"))
            assert result.eligible == (prefix in WAARDE_CHECK_POSTCODES)
            if not result.eligible:
                assert result.amount == 0

    def test_missing_address_is_unknown(self):
        result = evaluate_waarde_check(None, None)

        assert not result.eligible
        assert result.needs_more_info
        assert result.criteria[0].status is CriterionStatus.UNKNOWN

    def test_profile_is_ignored(self, voucher_address, row_house_1965):
        assert evaluate_waarde_check(row_house_1965, voucher_address) == \
            evaluate_waarde_check(None, voucher_address)

    def test_validity_window(self, voucher_address):
        assert evaluate_waarde_check(None, voucher_address, as_of=date(2026, 12, 31)).eligible
        expired = evaluate_waarde_check(None, voucher_address, as_of=date(2027, 1, 1))
        assert not expired.eligible
        assert expired.amount == 0

    def test_area_name(self):
        assert area_name("4781 AA") == "Moerdijk"
        assert area_name("9999") == "Onbekend"
        assert area_name(None) == "Onbekend"


class TestNIP:
    """Tests for the national insulation subsidy."""

    def test_row_house_eligible(self, row_house_1965):
        result = evaluate_nip(row_house_1965)

        assert result.eligible
        assert result.amount == 2000
        assert len(result.explanation) == 4
        assert all(line.startswith("✓") for line in result.explanation)

    def test_built_after_cutoff_never_eligible(self, row_house_1965):
        for year in (1993, 1994, 2005, 2024):
            result = evaluate_nip(replace(row_house_1965, construction_year=year))
            assert not result.eligible
            assert result.amount == 0

    def test_only_year_known(self):
        result = evaluate_nip(HouseholdProfile(construction_year=2005))

        assert not result.eligible
        assert "1993" in result.reason
        assert result.criteria[1].status is CriterionStatus.FAIL
        assert result.explanation[1].startswith("✗")

    @pytest.mark.parametrize("woz,amount", [
        (250_000, 2000),
        (400_000, 2000),
        (400_001, 1000),
        (476_999, 1000),
    ])
    def test_tiered_amount(self, row_house_1965, woz, amount):
        result = evaluate_nip(replace(row_house_1965, woz_value=woz))
        assert result.eligible
        assert result.amount == amount

    def test_woz_at_ceiling(self, row_house_1965):
        result = evaluate_nip(replace(row_house_1965, woz_value=477_000))
        assert not result.eligible
        assert result.criteria[2].status is CriterionStatus.FAIL

    @pytest.mark.parametrize("property_type", [PropertyType.APPARTEMENT, PropertyType.MAISONNETTE])
    def test_multi_unit_excluded(self, row_house_1965, property_type):
        result = evaluate_nip(replace(row_house_1965, property_type=property_type))
        assert not result.eligible
        assert result.criteria[0].status is CriterionStatus.FAIL

    def test_good_label_with_poor_parts(self, row_house_1965):
        # Label B but wall, roof and glazing poor
        result = evaluate_nip(replace(row_house_1965, energy_label=EnergyLabel.B))
        assert result.eligible

    def test_good_label_well_insulated(self, row_house_1965):
        profile = replace(
            row_house_1965,
            energy_label=EnergyLabel.B,
            wall_insulation=True,
            roof_insulation=True,
            floor_insulation=True,
            glass_type=GlassType.DUBBEL,
        )
        result = evaluate_nip(profile)

        assert not result.eligible
        assert result.criteria[3].status is CriterionStatus.FAIL
        assert not result.needs_more_info

    def test_unknown_label_and_insulation(self, row_house_1965):
        profile = replace(
            row_house_1965,
            energy_label=None,
            wall_insulation=None,
            roof_insulation=None,
            glass_type=None,
        )
        result = evaluate_nip(profile)

        assert not result.eligible
        assert result.needs_more_info
        assert result.criteria[3].status is CriterionStatus.UNKNOWN

    def test_empty_profile_does_not_raise(self):
        result = evaluate_nip(HouseholdProfile())

        assert not result.eligible
        assert result.amount == 0
        assert result.needs_more_info
        assert [c.key for c in result.criteria] == [
            "property_type", "construction_year", "woz_value", "label_or_insulation",
        ]

    def test_none_profile_does_not_raise(self):
        assert not evaluate_nip(None).eligible

    def test_deterministic(self, row_house_1965):
        assert evaluate_nip(row_house_1965) == evaluate_nip(row_house_1965)


class TestStimuleringslening:
    """Tests for loan eligibility."""

    def test_eligible(self, row_house_1965, voucher_address):
        result = evaluate_stimuleringslening(row_house_1965, voucher_address)

        assert result.eligible
        assert result.amount == 0
        assert result.details["interest_rate"] == 0.017
        assert result.details["min_amount"] == 2500
        assert result.details["max_amount"] == 35000
        assert result.details["terms_years"] == [10, 15]

    def test_municipality_outside_voucher_area(self, row_house_1965):
        result = evaluate_stimuleringslening(row_house_1965, Address(postal_code="4791 AB"))
        assert result.eligible

    def test_outside_municipality(self, row_house_1965, outside_address):
        assert not evaluate_stimuleringslening(row_house_1965, outside_address).eligible

    def test_building_age(self, voucher_address):
        as_of = date(2025, 6, 1)
        young = evaluate_stimuleringslening(
            HouseholdProfile(construction_year=2016), voucher_address, as_of=as_of,
        )
        old_enough = evaluate_stimuleringslening(
            HouseholdProfile(construction_year=2015), voucher_address, as_of=as_of,
        )

        assert not young.eligible
        assert old_enough.eligible

    def test_reference_year_from_settings(self, voucher_address, strict_settings):
        profile = HouseholdProfile(construction_year=2015)
        assert evaluate_stimuleringslening(profile, voucher_address).eligible

        strict_settings.reference_year = 2020
        assert not evaluate_stimuleringslening(profile, voucher_address).eligible

    def test_unknown_year(self, voucher_address):
        result = evaluate_stimuleringslening(HouseholdProfile(), voucher_address)
        assert not result.eligible
        assert result.needs_more_info


class TestISDE:
    """Tests for the statutory reimbursement."""

    def test_eligible(self, row_house_1965):
        result = evaluate_isde(row_house_1965)

        assert result.eligible
        assert result.amount == 3250
        assert result.details["per_measure"]["warmtepomp"] == 2350

    def test_overig_excluded(self):
        result = evaluate_isde(HouseholdProfile(property_type=PropertyType.OVERIG))
        assert not result.eligible
        assert result.amount == 0

    def test_unknown_type(self):
        result = evaluate_isde(HouseholdProfile())
        assert not result.eligible
        assert result.needs_more_info

    def test_heat_pump_ranges(self):
        assert estimate_heat_pump_subsidy("hybride").average == 2350
        assert estimate_heat_pump_subsidy("grond_water").max == 5600
        assert estimate_heat_pump_subsidy("onbekend") is None

    @pytest.mark.parametrize("measure,area,amount", [
        ("glas", 10, 750),
        ("glas", 1, 200),
        ("glas", 100, 3000),
        ("spouwmuur", 50, 300),
        ("vloer", 50, 600),
        ("dak", 0, 0),
        ("onbekend", 50, 0),
    ])
    def test_insulation_rates(self, measure, area, amount):
        assert estimate_insulation_subsidy(measure, area) == amount


class TestRegistry:
    """Tests for the programme registry."""

    def test_registered_programs(self):
        assert set(PROGRAMS) == {"waarde_check", "nip", "isde", "stimuleringslening"}
        assert get_program("nip").kind is ProgramKind.SINGLE_USE
        assert get_program("waarde_check").kind is ProgramKind.SPLITTABLE
        assert get_program("isde").kind is ProgramKind.PER_MEASURE_ESTIMATE
        assert get_program("stimuleringslening").kind is None

    def test_evaluate_program(self, row_house_1965, voucher_address):
        result = evaluate_program("nip", row_house_1965, voucher_address)
        assert result.program_id == "nip"
        assert result.amount == 2000

    def test_unknown_program(self, row_house_1965):
        with pytest.raises(UnknownProgramError):
            evaluate_program("bogus", row_house_1965)

    def test_unknown_program_is_key_error(self, row_house_1965):
        with pytest.raises(KeyError):
            evaluate_program("bogus", row_house_1965)

    def test_evaluate_all(self, row_house_1965, voucher_address):
        results = evaluate_all(row_house_1965, voucher_address)

        assert set(results) == set(PROGRAMS)
        assert results["waarde_check"].amount == 2000
        assert results["nip"].amount == 2000
        assert results["stimuleringslening"].eligible

    def test_evaluate_all_never_raises_on_empty_input(self):
        results = evaluate_all(None, None)
        assert not any(r.eligible for r in results.values())
