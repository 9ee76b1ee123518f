"""
Baseline Module - Reference data for Dutch dwellings.

- Building periods: expected insulation state by construction year
- Reference consumption: expected gas/electricity use for similar homes
"""

from .building_periods import (
    BuildingPeriod,
    BuildingPeriodTable,
    PeriodCharacteristics,
    InferredProfile,
    BUILDING_PERIODS,
    get_building_period,
    infer_profile,
    count_poorly_insulated_parts,
)
from .reference_consumption import (
    ReferenceConsumption,
    ReferenceConsumptionTable,
    ConsumptionComparison,
    EnergyCostEstimate,
    Band,
    REFERENCE_CONSUMPTION,
    build_period_code,
    get_reference_consumption,
    compare_with_reference,
    estimate_energy_costs,
)

__all__ = [
    "BuildingPeriod",
    "BuildingPeriodTable",
    "PeriodCharacteristics",
    "InferredProfile",
    "BUILDING_PERIODS",
    "get_building_period",
    "infer_profile",
    "count_poorly_insulated_parts",
    "ReferenceConsumption",
    "ReferenceConsumptionTable",
    "ConsumptionComparison",
    "EnergyCostEstimate",
    "Band",
    "REFERENCE_CONSUMPTION",
    "build_period_code",
    "get_reference_consumption",
    "compare_with_reference",
    "estimate_energy_costs",
]
