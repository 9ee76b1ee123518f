"""
Reference Energy Consumption

Expected gas and electricity use for Dutch households by dwelling type and
construction period (CBS / Milieu Centraal). Used to compare a household's
bill with similar homes.

When no reference row exists for a household the lookup returns None and
callers must hide the comparison instead of inventing a band.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple
from enum import Enum
import logging

from ..core.config import settings
from ..core.models import ConsumptionRecord, HouseholdProfile, PropertyType

logger = logging.getLogger(__name__)

# Generic rows that apply to any dwelling type in a period
ALL_TYPES = "alle"


@dataclass(frozen=True)
class ReferenceConsumption:
    """Expected annual consumption range."""
    property_type: str  # PropertyType value or ALL_TYPES
    build_period: str
    gas_min: float
    gas_max: float
    gas_avg: float
    elec_min: float
    elec_max: float
    elec_avg: float
    notes: str = ""


def _ref(property_type, period, gas, elec, notes) -> ReferenceConsumption:
    key = property_type.value if isinstance(property_type, PropertyType) else property_type
    return ReferenceConsumption(
        property_type=key,
        build_period=period,
        gas_min=gas[0], gas_max=gas[1], gas_avg=gas[2],
        elec_min=elec[0], elec_max=elec[1], elec_avg=elec[2],
        notes=notes,
    )


# (min, max, avg) for gas m³ and electricity kWh
REFERENCE_CONSUMPTION: Tuple[ReferenceConsumption, ...] = (
    # Vrijstaande woningen
    _ref(PropertyType.VRIJSTAAND, "voor_1975", (2800, 3500, 3150), (4000, 5000, 4500),
         "Slechte isolatie, groot woonoppervlak"),
    _ref(PropertyType.VRIJSTAAND, "1975_1995", (2000, 2600, 2300), (3500, 4500, 4000),
         "Enige isolatie aanwezig"),
    _ref(PropertyType.VRIJSTAAND, "1995_2015", (1400, 1800, 1600), (3200, 4000, 3600),
         "Goede isolatie"),

    # Twee-onder-een-kap
    _ref(PropertyType.TWEE_ONDER_EEN_KAP, "voor_1975", (2200, 2800, 2500), (3500, 4500, 4000),
         "Beperkte isolatie"),
    _ref(PropertyType.TWEE_ONDER_EEN_KAP, "1975_1995", (1600, 2100, 1850), (3000, 4000, 3500),
         "Matige isolatie"),
    _ref(PropertyType.TWEE_ONDER_EEN_KAP, "1995_2015", (1100, 1500, 1300), (2800, 3600, 3200),
         "Goede isolatie"),

    # Tussenwoningen
    _ref(PropertyType.TUSSENWONING, "voor_1975", (1600, 2000, 1800), (3000, 4000, 3500),
         "Voordeel van aangrenzende woningen"),
    _ref(PropertyType.TUSSENWONING, "1975_1995", (1200, 1600, 1400), (2800, 3600, 3200),
         "Gemiddeld verbruik"),
    _ref(PropertyType.TUSSENWONING, "1995_2015", (900, 1200, 1050), (2600, 3400, 3000),
         "Goede isolatie"),

    # Hoekwoningen
    _ref(PropertyType.HOEKWONING, "voor_1975", (1800, 2200, 2000), (3200, 4200, 3700),
         "Extra buitenmuur, beperkte isolatie"),
    _ref(PropertyType.HOEKWONING, "1975_1995", (1400, 1800, 1600), (2900, 3700, 3300),
         "Extra buitenmuur, matige isolatie"),
    _ref(PropertyType.HOEKWONING, "1995_2015", (1000, 1300, 1150), (2700, 3500, 3100),
         "Goede isolatie"),

    # Appartementen
    _ref(PropertyType.APPARTEMENT, "voor_1975", (1000, 1400, 1200), (2500, 3500, 3000),
         "Kleinere warmtevraag"),
    _ref(PropertyType.APPARTEMENT, "1975_1995", (800, 1100, 950), (2300, 3200, 2750),
         "Relatief zuinig"),
    _ref(PropertyType.APPARTEMENT, "1995_2015", (600, 900, 750), (2100, 2900, 2500),
         "Goede isolatie, compact"),

    # Generic rows
    _ref(ALL_TYPES, "1995_2015", (800, 1200, 1000), (2800, 3500, 3150),
         "HR-glas en goede schil"),
    _ref(ALL_TYPES, "2019_heden", (0, 300, 150), (2500, 3500, 3000),
         "Vaak (hybride) warmtepomp"),
    _ref(ALL_TYPES, "2024_heden", (0, 0, 0), (0, 500, 250),
         "Netto verbruik door zonnepanelen"),
)


def build_period_code(year: int) -> str:
    """Map a construction year onto the reference-table period code."""
    if year < 1975:
        return "voor_1975"
    if year < 1995:
        return "1975_1995"
    if year < 2015:
        return "1995_2015"
    if year < 2019:
        return "2015_2019"
    if year < 2024:
        return "2019_heden"
    return "2024_heden"


class ReferenceConsumptionTable:
    """Lookup of expected consumption keyed by (property type, period)."""

    def __init__(self, rows: Tuple[ReferenceConsumption, ...] = None):
        rows = rows if rows is not None else REFERENCE_CONSUMPTION
        self._index: Dict[Tuple[str, str], ReferenceConsumption] = {
            (r.property_type, r.build_period): r for r in rows
        }

    def lookup(
        self,
        property_type: Optional[PropertyType],
        construction_year: Optional[int],
    ) -> Optional[ReferenceConsumption]:
        """
        Return the reference row, or None when no reference is available.

        Falls back from the specific dwelling type to the generic row for the
        same period; never substitutes a different period.
        """
        if property_type is None or construction_year is None:
            return None

        period = build_period_code(construction_year)
        match = self._index.get((property_type.value, period))
        if match is None:
            match = self._index.get((ALL_TYPES, period))
        if match is None:
            logger.debug(f"No reference consumption for {property_type.value}/{period}")
        return match


def get_reference_consumption(
    property_type: Optional[PropertyType],
    construction_year: Optional[int],
) -> Optional[ReferenceConsumption]:
    """Convenience lookup against the default table."""
    return ReferenceConsumptionTable().lookup(property_type, construction_year)


class Band(Enum):
    """Position of actual consumption relative to the reference range."""
    BELOW = "onder"
    AVERAGE = "gemiddeld"
    ABOVE = "boven"


@dataclass(frozen=True)
class ConsumptionComparison:
    """Household consumption versus the reference for similar homes."""
    reference: ReferenceConsumption
    gas_band: Optional[Band]
    gas_percentage: Optional[int]   # Actual as % of reference average
    elec_band: Optional[Band]
    elec_percentage: Optional[int]


def _band(actual: float, low: float, high: float) -> Band:
    if actual < low:
        return Band.BELOW
    if actual > high:
        return Band.ABOVE
    return Band.AVERAGE


def _percentage(actual: float, average: float) -> Optional[int]:
    if average <= 0:
        return None
    return round(actual / average * 100)


def compare_with_reference(
    record: ConsumptionRecord,
    profile: HouseholdProfile,
    table: ReferenceConsumptionTable = None,
) -> Optional[ConsumptionComparison]:
    """
    Compare a bill with the reference for similar homes.

    Returns None when there is no reference row; a fuel with no reading on
    the bill gets no band.
    """
    table = table or ReferenceConsumptionTable()
    reference = table.lookup(profile.property_type, profile.construction_year)
    if reference is None:
        return None

    gas_band = gas_pct = elec_band = elec_pct = None
    if record.gas_m3 is not None:
        gas_band = _band(record.gas_m3, reference.gas_min, reference.gas_max)
        gas_pct = _percentage(record.gas_m3, reference.gas_avg)
    if record.electricity_kwh is not None:
        elec_band = _band(record.electricity_kwh, reference.elec_min, reference.elec_max)
        elec_pct = _percentage(record.electricity_kwh, reference.elec_avg)

    return ConsumptionComparison(
        reference=reference,
        gas_band=gas_band,
        gas_percentage=gas_pct,
        elec_band=elec_band,
        elec_percentage=elec_pct,
    )


@dataclass(frozen=True)
class EnergyCostEstimate:
    """Annual energy cost in whole euros."""
    gas_cost: int
    electricity_cost: int
    return_value: int
    total_cost: int


def estimate_energy_costs(record: ConsumptionRecord) -> EnergyCostEstimate:
    """Estimate annual costs from volumes at the configured prices."""
    gas_cost = round((record.gas_m3 or 0) * settings.gas_price_per_m3)
    electricity_cost = round((record.electricity_kwh or 0) * settings.electricity_price_per_kwh)
    return_value = round((record.electricity_returned_kwh or 0) * settings.return_price_per_kwh)

    return EnergyCostEstimate(
        gas_cost=gas_cost,
        electricity_cost=electricity_cost,
        return_value=return_value,
        total_cost=gas_cost + electricity_cost - return_value,
    )
