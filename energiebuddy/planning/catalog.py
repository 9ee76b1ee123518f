"""
Measure Catalog - The fixed, priority-ordered improvement roadmap.

Order follows "reduce demand -> electrify -> generate": insulation first,
then the heat pump, then solar panels.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple
from enum import Enum
import logging

from ..core.models import HeatingType, HouseholdProfile

logger = logging.getLogger(__name__)


class MeasureCategory(Enum):
    ISOLATIE = "isolatie"          # Insulation
    INSTALLATIE = "installatie"    # Heating installation
    OPWEK = "opwek"                # Generation


@dataclass(frozen=True)
class Measure:
    """One improvement measure in the roadmap."""
    id: str
    name: str
    category: MeasureCategory
    base_cost: float               # EUR incl. installation
    annual_saving: float           # EUR per year
    co2_reduction_kg: float        # kg CO2 per year
    priority: int                  # 1 = first
    eligible_programs: Tuple[str, ...] = ()
    description: str = ""
    reason: str = ""


DEFAULT_MEASURE_CATALOG: Tuple[Measure, ...] = (
    Measure(
        id="spouwmuur",
        name="Spouwmuurisolatie",
        category=MeasureCategory.ISOLATIE,
        base_cost=1800,
        annual_saving=450,
        co2_reduction_kg=570,
        priority=1,
        eligible_programs=("waarde_check", "nip"),
        description="Isolatie van de spouwmuur door inspuiten",
        reason="Grootste impact, laagste kosten, subsidie beschikbaar",
    ),
    Measure(
        id="dak",
        name="Dakisolatie",
        category=MeasureCategory.ISOLATIE,
        base_cost=4000,
        annual_saving=375,
        co2_reduction_kg=475,
        priority=2,
        eligible_programs=("waarde_check", "nip", "isde"),
        description="Isolatie van het dak aan binnen- of buitenzijde",
        reason="Tot 30% warmteverlies via het dak",
    ),
    Measure(
        id="vloer",
        name="Vloerisolatie",
        category=MeasureCategory.ISOLATIE,
        base_cost=1500,
        annual_saving=180,
        co2_reduction_kg=230,
        priority=3,
        eligible_programs=("waarde_check", "nip", "isde"),
        description="Isolatie van de vloer (kruipruimte)",
        reason="Comfort verbetering, geen koude voeten meer",
    ),
    Measure(
        id="glas",
        name="HR++ Glas",
        category=MeasureCategory.ISOLATIE,
        base_cost=5000,
        annual_saving=225,
        co2_reduction_kg=285,
        priority=4,
        eligible_programs=("waarde_check", "isde"),
        description="Vervang enkel/dubbel glas door HR++",
        reason="Comfort en isolatie, minder condensatie",
    ),
    Measure(
        id="warmtepomp",
        name="Hybride Warmtepomp",
        category=MeasureCategory.INSTALLATIE,
        base_cost=5500,
        annual_saving=750,
        co2_reduction_kg=950,
        priority=5,
        eligible_programs=("waarde_check", "isde"),
        description="Combinatie warmtepomp + CV-ketel",
        reason="Na isolatie: efficiënt verwarmen met minder gas",
    ),
    Measure(
        id="zonnepanelen",
        name="Zonnepanelen",
        category=MeasureCategory.OPWEK,
        base_cost=7000,
        annual_saving=700,
        co2_reduction_kg=1500,
        priority=6,
        eligible_programs=("waarde_check",),
        description="10-12 panelen voor gemiddeld huishouden",
        reason="Eigen stroom opwekken, salderen tot 2027",
    ),
)


def _is_done(measure: Measure, profile: HouseholdProfile) -> bool:
    """True only when the profile explicitly shows the measure is done."""
    if measure.id == "spouwmuur":
        return profile.wall_insulation is True
    if measure.id == "dak":
        return profile.roof_insulation is True
    if measure.id == "vloer":
        return profile.floor_insulation is True
    if measure.id == "glas":
        return profile.glass_type is not None and not profile.glass_type.is_poor
    if measure.id == "warmtepomp":
        return profile.heating_type in (HeatingType.WARMTEPOMP, HeatingType.HYBRIDE)
    if measure.id == "zonnepanelen":
        return profile.solar_panels is True
    return False


def select_measures(
    catalog: Tuple[Measure, ...] = DEFAULT_MEASURE_CATALOG,
    profile: Optional[HouseholdProfile] = None,
) -> List[Measure]:
    """
    Measures still to do for a household, in priority order.

    Unknown state keeps the measure in the roadmap.
    """
    ordered = sorted(catalog, key=lambda m: m.priority)
    if profile is None:
        return ordered

    selected = [m for m in ordered if not _is_done(m, profile)]
    skipped = [m.id for m in ordered if m not in selected]
    if skipped:
        logger.debug(f"Skipping completed measures: {skipped}")
    return selected
