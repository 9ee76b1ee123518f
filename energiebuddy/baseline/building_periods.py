"""
Dutch Building Periods

Reference data for Dutch housing insulation by construction year, based on
Milieu Centraal / RVO voorbeeldwoningen and the Bouwbesluit revisions.

Each period defines:
- Typical wall construction and insulation state
- Roof / floor insulation state
- Typical glazing
- Improvement potential (seven-level ordinal rank)

Used to estimate insulation status when a homeowner doesn't know the details.
Explicit profile fields always take precedence over period defaults.

Usage:
    table = BuildingPeriodTable()
    period = table.lookup(1965)          # None when no range contains the year
    profile, inferred = infer_profile(profile)
"""

from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple
import logging

from ..core.models import (
    HouseholdProfile,
    WallType,
    GlassType,
    HeatingType,
    ImprovementPotential,
)
from ..core.errors import NoReferenceDataError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PeriodCharacteristics:
    """Expected envelope and systems for a construction period."""
    wall_type: WallType
    wall_insulation: bool
    roof_insulation: bool
    floor_insulation: bool
    floor_type: str
    glass_type: GlassType

    # Insulation thickness / Rc-values where known
    wall_insulation_cm: Optional[float] = None
    roof_insulation_cm: Optional[float] = None
    rc_wall: Optional[float] = None
    rc_roof: Optional[float] = None
    rc_floor: Optional[float] = None

    # Systems (newer periods only)
    has_gas_connection: Optional[bool] = None
    heating_type: Optional[HeatingType] = None
    has_solar_panels: Optional[bool] = None
    has_battery: Optional[bool] = None


@dataclass(frozen=True)
class BuildingPeriod:
    """A construction-year range with its typical characteristics."""
    code: str
    name: str
    year_from: int
    year_to: Optional[int]  # None = open-ended (most recent period)
    characteristics: PeriodCharacteristics
    description: str
    improvement_potential: ImprovementPotential

    def contains(self, year: int) -> bool:
        if year < self.year_from:
            return False
        return self.year_to is None or year <= self.year_to


# =============================================================================
# DUTCH BUILDING PERIOD TABLE
# =============================================================================

BUILDING_PERIODS: Tuple[BuildingPeriod, ...] = (
    BuildingPeriod(
        code="tot_1925",
        name="Tot 1925 - Massieve muren",
        year_from=0,
        year_to=1924,
        characteristics=PeriodCharacteristics(
            wall_type=WallType.MASSIEF,
            wall_insulation=False,
            roof_insulation=False,
            floor_insulation=False,
            floor_type="hout",
            glass_type=GlassType.ENKEL,
        ),
        description="Massieve muren (steens/anderhalfsteens), vochtdoorslag, geen isolatie",
        improvement_potential=ImprovementPotential.ZEER_HOOG,
    ),
    BuildingPeriod(
        code="1925_1945",
        name="1925-1945 - Begin spouwmuren",
        year_from=1925,
        year_to=1945,
        characteristics=PeriodCharacteristics(
            wall_type=WallType.SPOUW_LEEG,
            wall_insulation=False,
            roof_insulation=False,
            floor_insulation=False,
            floor_type="hout",
            glass_type=GlassType.ENKEL,
        ),
        description="Begin spouwmuren (jaren 30), nog geen isolatie",
        improvement_potential=ImprovementPotential.ZEER_HOOG,
    ),
    BuildingPeriod(
        code="1945_1975",
        name="1945-1975 - Spouwmuren standaard",
        year_from=1946,
        year_to=1975,
        characteristics=PeriodCharacteristics(
            wall_type=WallType.SPOUW_LEEG,
            wall_insulation=False,
            roof_insulation=False,
            floor_insulation=False,
            floor_type="beton",
            glass_type=GlassType.ENKEL,
        ),
        description="Standaard spouwmuren, betonvloeren (jaren 60), geen isolatie",
        improvement_potential=ImprovementPotential.ZEER_HOOG,
    ),
    BuildingPeriod(
        code="1975_1987",
        name="1975-1987 - Eerste isolatie",
        year_from=1976,
        year_to=1987,
        characteristics=PeriodCharacteristics(
            wall_type=WallType.SPOUW_GEDEELTELIJK,
            wall_insulation=True,
            wall_insulation_cm=2,
            roof_insulation=True,
            roof_insulation_cm=3,
            floor_insulation=False,
            floor_type="beton",
            glass_type=GlassType.DUBBEL,
        ),
        description="Eerste isolatiemaatregelen: ~2cm spouw, wisselende dakisolatie, dubbel glas BG",
        improvement_potential=ImprovementPotential.HOOG,
    ),
    BuildingPeriod(
        code="1987_1992",
        name="1987-1992 - Redelijke isolatie",
        year_from=1988,
        year_to=1992,
        characteristics=PeriodCharacteristics(
            wall_type=WallType.SPOUW_VOL,
            wall_insulation=True,
            roof_insulation=True,
            floor_insulation=True,
            floor_type="beton_geisoleerd",
            glass_type=GlassType.DUBBEL,
        ),
        description="Volledig geïsoleerde spouw, redelijke dak/vloer isolatie",
        improvement_potential=ImprovementPotential.GEMIDDELD,
    ),
    BuildingPeriod(
        code="1992_2014",
        name="1992-2014 - Bouwbesluit isolatie",
        year_from=1993,
        year_to=2014,
        characteristics=PeriodCharacteristics(
            wall_type=WallType.SPOUW_VOL,
            wall_insulation=True,
            roof_insulation=True,
            floor_insulation=True,
            floor_type="beton_geisoleerd",
            glass_type=GlassType.HR_PLUS_PLUS,
        ),
        description="Goede isolatie door Bouwbesluit 1992, HR++ glas standaard vanaf 2000",
        improvement_potential=ImprovementPotential.LAAG,
    ),
    BuildingPeriod(
        code="2015_2018",
        name="2015-2018 - Hoge isolatie",
        year_from=2015,
        year_to=2018,
        characteristics=PeriodCharacteristics(
            wall_type=WallType.SPOUW_VOL,
            wall_insulation=True,
            rc_wall=4.5,
            roof_insulation=True,
            rc_roof=6.0,
            floor_insulation=True,
            rc_floor=3.5,
            floor_type="beton_geisoleerd",
            glass_type=GlassType.HR_PLUS_PLUS,
        ),
        description="Zeer hoge isolatiewaardes (Bouwbesluit 2012), introductie triple glas",
        improvement_potential=ImprovementPotential.ZEER_LAAG,
    ),
    BuildingPeriod(
        code="2019_2023",
        name="2019-2023 - BENG",
        year_from=2019,
        year_to=2023,
        characteristics=PeriodCharacteristics(
            wall_type=WallType.SPOUW_VOL,
            wall_insulation=True,
            rc_wall=4.7,
            roof_insulation=True,
            rc_roof=6.3,
            floor_insulation=True,
            rc_floor=3.7,
            floor_type="beton_geisoleerd",
            glass_type=GlassType.TRIPLE,
            has_gas_connection=False,
            heating_type=HeatingType.WARMTEPOMP,
            has_solar_panels=True,
        ),
        description="BENG-eisen, geen gas, warmtepomp standaard, triple glas",
        improvement_potential=ImprovementPotential.MINIMAAL,
    ),
    BuildingPeriod(
        code="vanaf_2024",
        name="Vanaf 2024 - Nul-op-de-Meter",
        year_from=2024,
        year_to=None,
        characteristics=PeriodCharacteristics(
            wall_type=WallType.SPOUW_VOL,
            wall_insulation=True,
            rc_wall=5.0,
            roof_insulation=True,
            rc_roof=7.0,
            floor_insulation=True,
            rc_floor=4.0,
            floor_type="beton_geisoleerd",
            glass_type=GlassType.TRIPLE,
            has_gas_connection=False,
            heating_type=HeatingType.WARMTEPOMP,
            has_solar_panels=True,
            has_battery=True,
        ),
        description="Energieneutraal (NOM), zeer luchtdicht, thuisbatterij",
        improvement_potential=ImprovementPotential.GEEN,
    ),
)


class BuildingPeriodTable:
    """
    Ordered, non-overlapping construction-year ranges.

    Period codes name their nominal span; a year shared by two spans
    (1945, 1975, ...) belongs to the earlier period.

    Lookups never extrapolate: a year outside every range is "not found".
    """

    def __init__(self, periods: Tuple[BuildingPeriod, ...] = None):
        self.periods = tuple(periods if periods is not None else BUILDING_PERIODS)

    def lookup(self, year: Optional[int]) -> Optional[BuildingPeriod]:
        """Return the single period containing ``year``, or None."""
        if year is None:
            return None
        for period in self.periods:
            if period.contains(year):
                return period
        return None

    def require(self, year: Optional[int]) -> BuildingPeriod:
        """Like ``lookup`` but raises NoReferenceDataError when not found."""
        period = self.lookup(year)
        if period is None:
            raise NoReferenceDataError("building period", year)
        return period

    def list_codes(self) -> List[str]:
        return [p.code for p in self.periods]


def get_building_period(year: Optional[int]) -> Optional[BuildingPeriod]:
    """Convenience lookup against the default table."""
    return BuildingPeriodTable().lookup(year)


@dataclass(frozen=True)
class InferredProfile:
    """A profile with period defaults filled in, plus provenance."""
    profile: HouseholdProfile
    period: Optional[BuildingPeriod]
    inferred_fields: List[str] = field(default_factory=list)


def infer_profile(
    profile: HouseholdProfile,
    table: BuildingPeriodTable = None,
) -> InferredProfile:
    """
    Fill unset envelope fields from the building-period defaults.

    Only fields that are None on the profile are filled; anything the
    homeowner entered explicitly is kept.
    """
    table = table or BuildingPeriodTable()
    period = table.lookup(profile.construction_year)
    if period is None:
        return InferredProfile(profile=profile, period=None)

    chars = period.characteristics
    defaults = {
        "wall_type": chars.wall_type,
        "wall_insulation": chars.wall_insulation,
        "roof_insulation": chars.roof_insulation,
        "floor_insulation": chars.floor_insulation,
        "glass_type": chars.glass_type,
        "heating_type": chars.heating_type,
        "solar_panels": chars.has_solar_panels,
    }

    updates = {}
    for name, default in defaults.items():
        if default is None:
            continue
        if getattr(profile, name) is None:
            updates[name] = default

    if updates:
        logger.debug(f"Inferred {sorted(updates)} from period {period.code}")

    return InferredProfile(
        profile=replace(profile, **updates),
        period=period,
        inferred_fields=sorted(updates),
    )


def count_poorly_insulated_parts(profile: HouseholdProfile) -> int:
    """
    Count building parts that are explicitly poorly insulated.

    Wall/floor/roof count only when explicitly False (unknown does not count);
    glazing counts when single or plain double.
    """
    count = 0
    if profile.wall_insulation is False:
        count += 1
    if profile.floor_insulation is False:
        count += 1
    if profile.roof_insulation is False:
        count += 1
    if profile.glass_type is not None and profile.glass_type.is_poor:
        count += 1
    return count
