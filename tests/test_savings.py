"""
Tests for the insulation savings estimator.
"""

from energiebuddy.core.models import GlassType, HouseholdProfile
from energiebuddy.roi import estimate_insulation_savings, total_saving


class TestInsulationSavings:
    """Tests for per-measure savings."""

    def test_row_house(self, row_house_1965):
        estimates = estimate_insulation_savings(2000, row_house_1965)

        assert [e.measure_id for e in estimates] == ["spouwmuur", "dak", "vloer", "glas"]
        assert [e.saving_m3 for e in estimates] == [400, 300, 160, 200]
        assert [e.saving_euro for e in estimates] == [580, 435, 232, 290]

    def test_completed_measures_omitted(self):
        profile = HouseholdProfile(
            wall_insulation=True,
            roof_insulation=True,
            floor_insulation=False,
            glass_type=GlassType.HR_PLUS_PLUS,
        )
        estimates = estimate_insulation_savings(2000, profile)

        assert [e.measure_id for e in estimates] == ["vloer"]

    def test_everything_done(self):
        profile = HouseholdProfile(
            wall_insulation=True,
            roof_insulation=True,
            floor_insulation=True,
            glass_type=GlassType.TRIPLE,
        )
        assert estimate_insulation_savings(2000, profile) == []

    def test_unknown_glazing_not_estimated(self):
        estimates = estimate_insulation_savings(1000, HouseholdProfile())
        assert "glas" not in [e.measure_id for e in estimates]
        assert len(estimates) == 3

    def test_single_glazing_triggers(self):
        profile = HouseholdProfile(
            wall_insulation=True,
            roof_insulation=True,
            floor_insulation=True,
            glass_type=GlassType.ENKEL,
        )
        assert [e.measure_id for e in estimate_insulation_savings(1000, profile)] == ["glas"]

    def test_custom_gas_price(self, row_house_1965):
        estimates = estimate_insulation_savings(1000, row_house_1965, gas_price=2.0)
        assert estimates[0].saving_euro == 400

    def test_total(self, row_house_1965):
        estimates = estimate_insulation_savings(2000, row_house_1965)
        assert total_saving(estimates) == (1060, 1537)

    def test_zero_consumption(self, row_house_1965):
        estimates = estimate_insulation_savings(0, row_house_1965)
        assert total_saving(estimates) == (0, 0)
