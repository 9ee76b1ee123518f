"""
Household Data Models.

Read-only inputs to the subsidy engine. Records are created by the portal
(intake form, energy bill upload) and handed to the engine as-is; the engine
never mutates or persists them.

Insulation flags are tri-state: True (done), False (not done), None (unknown).
"""

from dataclasses import dataclass
from typing import Optional
from enum import Enum
import re


class PropertyType(Enum):
    """Dutch dwelling type (woningtype)."""
    VRIJSTAAND = "vrijstaand"                   # Detached
    TWEE_ONDER_EEN_KAP = "twee_onder_een_kap"   # Semi-detached
    HOEKWONING = "hoekwoning"                   # End of terrace
    TUSSENWONING = "tussenwoning"               # Row house
    APPARTEMENT = "appartement"
    MAISONNETTE = "maisonnette"
    OVERIG = "overig"


class WallType(Enum):
    """Wall construction."""
    MASSIEF = "massief"                         # Solid, no cavity
    SPOUW_LEEG = "spouw_leeg"                   # Empty cavity
    SPOUW_GEDEELTELIJK = "spouw_gedeeltelijk"   # Partially filled cavity
    SPOUW_VOL = "spouw_vol"                     # Fully insulated cavity


class GlassType(Enum):
    """Glazing type."""
    ENKEL = "enkel"
    DUBBEL = "dubbel"
    HR = "hr"
    HR_PLUS = "hr_plus"
    HR_PLUS_PLUS = "hr_plus_plus"
    TRIPLE = "triple"

    @property
    def is_poor(self) -> bool:
        """Single and plain double glazing count as poorly insulated."""
        return self in (GlassType.ENKEL, GlassType.DUBBEL)


class HeatingType(Enum):
    """Primary heating system."""
    CV_KETEL = "cv_ketel"                 # Gas boiler
    WARMTEPOMP = "warmtepomp"             # All-electric heat pump
    HYBRIDE = "hybride"                   # Hybrid heat pump + boiler
    STADSVERWARMING = "stadsverwarming"   # District heating
    ELEKTRISCH = "elektrisch"
    OVERIG = "overig"


class EnergyLabel(Enum):
    """Dutch energy label."""
    A4 = "A++++"
    A3 = "A+++"
    A2 = "A++"
    A1 = "A+"
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"
    G = "G"


_IMPROVEMENT_ORDER = [
    "geen", "minimaal", "zeer_laag", "laag", "gemiddeld", "hoog", "zeer_hoog",
]


class ImprovementPotential(Enum):
    """Ordinal improvement potential of a building-period cohort."""
    GEEN = "geen"
    MINIMAAL = "minimaal"
    ZEER_LAAG = "zeer_laag"
    LAAG = "laag"
    GEMIDDELD = "gemiddeld"
    HOOG = "hoog"
    ZEER_HOOG = "zeer_hoog"

    @property
    def rank(self) -> int:
        return _IMPROVEMENT_ORDER.index(self.value)

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")

    def __lt__(self, other):
        if not isinstance(other, ImprovementPotential):
            return NotImplemented
        return self.rank < other.rank


@dataclass(frozen=True)
class HouseholdProfile:
    """Physical and energy characteristics of a dwelling (huisdossier)."""
    property_type: Optional[PropertyType] = None
    construction_year: Optional[int] = None
    living_area_m2: Optional[float] = None
    woz_value: Optional[float] = None          # Assessed value (EUR)
    energy_label: Optional[EnergyLabel] = None

    wall_type: Optional[WallType] = None
    wall_insulation: Optional[bool] = None
    floor_insulation: Optional[bool] = None
    roof_insulation: Optional[bool] = None
    glass_type: Optional[GlassType] = None

    heating_type: Optional[HeatingType] = None
    solar_panels: Optional[bool] = None
    solar_panels_count: Optional[int] = None


_PREFIX_RE = re.compile(r"^\s*(\d{4})")


@dataclass(frozen=True)
class Address:
    """Postal address; only the 4-digit postcode prefix is used by the engine."""
    postal_code: Optional[str] = None
    city: Optional[str] = None

    @property
    def postal_prefix(self) -> Optional[str]:
        """First four digits of a Dutch postcode ('4765 AB' -> '4765')."""
        if not self.postal_code:
            return None
        match = _PREFIX_RE.match(self.postal_code)
        return match.group(1) if match else None


@dataclass(frozen=True)
class ConsumptionRecord:
    """Annual energy consumption from a bill (jaarafrekening)."""
    year: int
    gas_m3: Optional[float] = None
    gas_cost_euro: Optional[float] = None
    electricity_kwh: Optional[float] = None
    electricity_kwh_high: Optional[float] = None
    electricity_kwh_low: Optional[float] = None
    electricity_cost_euro: Optional[float] = None
    electricity_returned_kwh: Optional[float] = None
