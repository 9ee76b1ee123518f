"""
ISDE - Investeringssubsidie Duurzame Energie en Energiebesparing.

Statutory reimbursement for heat pumps, solar boilers and insulation.
In the roadmap ISDE is a per-measure estimate: a fixed amount per measure
type, added independently of any shared pool.

Also provides the standalone range estimates used on the subsidy page
(heat-pump types and per-m² insulation rates with min/max clamps).
"""

from dataclasses import dataclass
from typing import Dict, Optional
from datetime import date
import logging

from ..core.models import Address, HouseholdProfile, PropertyType
from .models import CriterionCheck, CriterionStatus, EligibilityResult, build_result

logger = logging.getLogger(__name__)

PROGRAM_ID = "isde"

# Roadmap estimates per measure id
ISDE_PER_MEASURE: Dict[str, float] = {
    "warmtepomp": 2350,
    "glas": 500,
    "dak": 200,
    "vloer": 200,
}

ISDE_EXCLUDED_TYPES = frozenset({PropertyType.OVERIG})
ISDE_INFO_URL = "https://www.rvo.nl/subsidies-financiering/isde"


@dataclass(frozen=True)
class SubsidyRange:
    """Typical subsidy range for one installation type."""
    min: float
    max: float
    average: float
    description: str = ""


@dataclass(frozen=True)
class InsulationRate:
    """Per-m² subsidy with a minimum and maximum payout."""
    per_m2: float
    min_amount: float
    max_amount: float
    description: str = ""


HEAT_PUMP_SUBSIDIES: Dict[str, SubsidyRange] = {
    "lucht_water": SubsidyRange(2100, 3700, 2900, "Lucht-water warmtepomp"),
    "hybride": SubsidyRange(1900, 2800, 2350, "Hybride warmtepomp"),
    "grond_water": SubsidyRange(3400, 5600, 4500, "Bodem-water warmtepomp"),
    "water_water": SubsidyRange(3400, 5600, 4500, "Water-water warmtepomp"),
}

SOLAR_BOILER_SUBSIDY = SubsidyRange(500, 1500, 1000, "Zonneboiler")

INSULATION_SUBSIDIES: Dict[str, InsulationRate] = {
    "glas": InsulationRate(75, 200, 3000, "HR++ of triple glas"),
    "spouwmuur": InsulationRate(6, 0, 500, "Spouwmuurisolatie"),
    "dak": InsulationRate(20, 200, 2000, "Dakisolatie"),
    "vloer": InsulationRate(12, 150, 1500, "Vloer-/bodemisolatie"),
}


def estimate_heat_pump_subsidy(pump_type: str) -> Optional[SubsidyRange]:
    """Subsidy range for a heat-pump type, None when unknown."""
    return HEAT_PUMP_SUBSIDIES.get(pump_type)


def estimate_insulation_subsidy(measure: str, area_m2: float) -> float:
    """
    Per-m² insulation subsidy clamped to the measure's min/max.

    Returns 0 for an unknown measure or a non-positive area.
    """
    rate = INSULATION_SUBSIDIES.get(measure)
    if rate is None or area_m2 <= 0:
        return 0
    amount = rate.per_m2 * area_m2
    return min(max(amount, rate.min_amount), rate.max_amount)


def evaluate_isde(
    profile: Optional[HouseholdProfile],
    address: Optional[Address] = None,
    as_of: Optional[date] = None,
) -> EligibilityResult:
    """
    Check ISDE eligibility.

    Any known dwelling type except 'overig' qualifies. The amount is the sum
    of the per-measure estimates; the roadmap applies them per measure.
    """
    profile = profile or HouseholdProfile()

    if profile.property_type is None:
        check = CriterionCheck("property_type", CriterionStatus.UNKNOWN, "Woningtype onbekend")
    elif profile.property_type in ISDE_EXCLUDED_TYPES:
        check = CriterionCheck(
            "property_type", CriterionStatus.FAIL,
            "Woningtype 'overig' komt niet in aanmerking voor ISDE",
        )
    else:
        check = CriterionCheck(
            "property_type", CriterionStatus.PASS,
            f"Woningtype: {profile.property_type.value}",
        )

    total = sum(ISDE_PER_MEASURE.values())
    result = build_result(
        PROGRAM_ID,
        [check],
        amount=total,
        eligible_reason="U kunt ISDE subsidie aanvragen voor warmtepomp, glas en isolatie",
        details={
            "per_measure": dict(ISDE_PER_MEASURE),
            "info_url": ISDE_INFO_URL,
        },
    )
    logger.debug(f"ISDE: eligible={result.eligible}")
    return result
