"""Core models, configuration and errors."""

from .models import (
    PropertyType,
    WallType,
    GlassType,
    HeatingType,
    EnergyLabel,
    ImprovementPotential,
    HouseholdProfile,
    Address,
    ConsumptionRecord,
)
from .config import Settings, settings
from .errors import (
    EngineError,
    NoReferenceDataError,
    UnknownProgramError,
    InvariantViolation,
)

__all__ = [
    "PropertyType",
    "WallType",
    "GlassType",
    "HeatingType",
    "EnergyLabel",
    "ImprovementPotential",
    "HouseholdProfile",
    "Address",
    "ConsumptionRecord",
    "Settings",
    "settings",
    "EngineError",
    "NoReferenceDataError",
    "UnknownProgramError",
    "InvariantViolation",
]
