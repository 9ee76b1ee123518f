"""
Tests for Dutch building periods and profile inference.

Covers:
- Period lookup and boundaries
- Non-overlapping ranges
- Profile inference (explicit fields win)
- Poorly insulated part counting
"""

import pytest

from energiebuddy.baseline import (
    BUILDING_PERIODS,
    BuildingPeriodTable,
    count_poorly_insulated_parts,
    get_building_period,
    infer_profile,
)
from energiebuddy.core.errors import NoReferenceDataError
from energiebuddy.core.models import (
    GlassType,
    HeatingType,
    HouseholdProfile,
    ImprovementPotential,
    WallType,
)


class TestBuildingPeriodTable:
    """Tests for period lookup."""

    @pytest.fixture
    def table(self):
        return BuildingPeriodTable()

    @pytest.mark.parametrize("year,code", [
        (1900, "tot_1925"),
        (1924, "tot_1925"),
        (1925, "1925_1945"),
        (1945, "1925_1945"),
        (1946, "1945_1975"),
        (1965, "1945_1975"),
        (1975, "1945_1975"),
        (1976, "1975_1987"),
        (1987, "1975_1987"),
        (1988, "1987_1992"),
        (1992, "1987_1992"),
        (1993, "1992_2014"),
        (2014, "1992_2014"),
        (2015, "2015_2018"),
        (2018, "2015_2018"),
        (2023, "2019_2023"),
        (2024, "vanaf_2024"),
        (2060, "vanaf_2024"),
    ])
    def test_lookup_boundaries(self, table, year, code):
        assert table.lookup(year).code == code

    def test_every_year_in_exactly_one_period(self, table):
        """Ranges are non-overlapping and leave no gaps."""
        for year in range(1800, 2100):
            containing = [p for p in table.periods if p.contains(year)]
            assert len(containing) == 1, year

    def test_periods_are_ordered(self):
        starts = [p.year_from for p in BUILDING_PERIODS]
        assert starts == sorted(starts)
        assert BUILDING_PERIODS[0].code == "tot_1925"
        assert BUILDING_PERIODS[-1].year_to is None

    def test_unknown_year_not_found(self, table):
        assert table.lookup(None) is None
        assert table.lookup(-5) is None

    def test_require_raises_when_not_found(self, table):
        with pytest.raises(NoReferenceDataError):
            table.require(-5)

    def test_require_error_is_lookup_error(self, table):
        with pytest.raises(LookupError):
            table.require(None)

    def test_improvement_potential_decreases_over_time(self):
        ranks = [p.improvement_potential.rank for p in BUILDING_PERIODS]
        assert ranks == sorted(ranks, reverse=True)
        assert BUILDING_PERIODS[0].improvement_potential is ImprovementPotential.ZEER_HOOG
        assert BUILDING_PERIODS[-1].improvement_potential is ImprovementPotential.GEEN

    def test_improvement_potential_has_seven_levels(self):
        assert len(ImprovementPotential) == 7
        assert ImprovementPotential.LAAG < ImprovementPotential.HOOG

    def test_convenience_lookup(self):
        assert get_building_period(1965).characteristics.wall_type is WallType.SPOUW_LEEG


class TestInferProfile:
    """Tests for filling unknown fields from period defaults."""

    def test_fills_unknown_fields(self):
        result = infer_profile(HouseholdProfile(construction_year=1965))

        assert result.period.code == "1945_1975"
        assert result.profile.wall_insulation is False
        assert result.profile.glass_type is GlassType.ENKEL
        assert "roof_insulation" in result.inferred_fields

    def test_explicit_fields_win(self):
        profile = HouseholdProfile(
            construction_year=1965,
            wall_insulation=True,
            glass_type=GlassType.HR_PLUS_PLUS,
        )
        result = infer_profile(profile)

        assert result.profile.wall_insulation is True
        assert result.profile.glass_type is GlassType.HR_PLUS_PLUS
        assert "wall_insulation" not in result.inferred_fields
        assert "glass_type" not in result.inferred_fields

    def test_systems_inferred_only_for_recent_periods(self):
        old = infer_profile(HouseholdProfile(construction_year=1965))
        new = infer_profile(HouseholdProfile(construction_year=2020))

        assert old.profile.heating_type is None
        assert new.profile.heating_type is HeatingType.WARMTEPOMP
        assert new.profile.solar_panels is True

    def test_shared_boundary_year_uses_earlier_period(self):
        """1975 and 1992 take the older, less insulated defaults."""
        mid_seventies = infer_profile(HouseholdProfile(construction_year=1975))
        early_nineties = infer_profile(HouseholdProfile(construction_year=1992))

        assert mid_seventies.profile.wall_insulation is False
        assert mid_seventies.period.improvement_potential is ImprovementPotential.ZEER_HOOG
        assert early_nineties.profile.glass_type is GlassType.DUBBEL
        assert early_nineties.period.improvement_potential is ImprovementPotential.GEMIDDELD

    def test_unknown_year_leaves_profile_untouched(self):
        profile = HouseholdProfile(wall_insulation=False)
        result = infer_profile(profile)

        assert result.period is None
        assert result.profile == profile
        assert result.inferred_fields == []


class TestPoorlyInsulatedParts:
    """Tests for counting poorly insulated building parts."""

    def test_row_house(self, row_house_1965):
        # wall, roof and double glazing; floor unknown
        assert count_poorly_insulated_parts(row_house_1965) == 3

    def test_unknown_does_not_count(self):
        assert count_poorly_insulated_parts(HouseholdProfile()) == 0

    def test_good_glazing_does_not_count(self):
        profile = HouseholdProfile(wall_insulation=False, glass_type=GlassType.HR_PLUS_PLUS)
        assert count_poorly_insulated_parts(profile) == 1
