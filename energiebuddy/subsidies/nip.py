"""
NIP Subsidie - Nationaal Isolatieprogramma 2025.

Insulation subsidy for owners of older, modestly valued homes. The amount
depends on the WOZ value: €2000 up to €400 000, €1000 up to €477 000.

Criteria (all must hold, reported in this order):
    1. Dwelling type is not an apartment/maisonnette (VvE)
    2. Built before 1993
    3. WOZ value below €477 000
    4. Energy label D/E/F/G, or at least 2 poorly insulated parts
"""

from dataclasses import dataclass
from typing import Optional
from datetime import date
import logging

from ..core.models import Address, EnergyLabel, HouseholdProfile, PropertyType
from ..baseline.building_periods import count_poorly_insulated_parts
from .models import CriterionCheck, CriterionStatus, EligibilityResult, build_result

logger = logging.getLogger(__name__)

PROGRAM_ID = "nip"


@dataclass(frozen=True)
class NIPConfig:
    """NIP thresholds and amounts."""
    woz_ceiling: float = 477_000       # WOZ must be below this
    woz_low_threshold: float = 400_000  # At or below: higher amount
    amount_low_woz: float = 2000
    amount_high_woz: float = 1000
    build_year_cutoff: int = 1993      # Built strictly before
    min_poor_parts: int = 2
    eligible_labels: frozenset = frozenset(
        {EnergyLabel.D, EnergyLabel.E, EnergyLabel.F, EnergyLabel.G}
    )
    excluded_property_types: frozenset = frozenset(
        {PropertyType.APPARTEMENT, PropertyType.MAISONNETTE}
    )
    woz_reference_date: str = "2024-01-01"
    info_url: str = "https://www.rvo.nl/subsidies-financiering/nip"


NIP_CONFIG = NIPConfig()

# Measures NIP may be spent on
NIP_MEASURES = ["spouwmuur", "vloer", "dak"]


def _eur(value: float) -> str:
    return f"€{value:,.0f}".replace(",", ".")


def _check_property_type(profile: HouseholdProfile, config: NIPConfig) -> CriterionCheck:
    if profile.property_type is None:
        return CriterionCheck("property_type", CriterionStatus.UNKNOWN, "Woningtype onbekend")
    if profile.property_type in config.excluded_property_types:
        return CriterionCheck(
            "property_type", CriterionStatus.FAIL,
            "VvE/appartement komt niet in aanmerking voor NIP subsidie",
        )
    return CriterionCheck(
        "property_type", CriterionStatus.PASS,
        f"Woningtype: {profile.property_type.value} (geen VvE/appartement)",
    )


def _check_build_year(profile: HouseholdProfile, config: NIPConfig) -> CriterionCheck:
    year = profile.construction_year
    if year is None:
        return CriterionCheck(
            "construction_year", CriterionStatus.UNKNOWN,
            f"Bouwjaar onbekend (moet vóór {config.build_year_cutoff})",
        )
    if year < config.build_year_cutoff:
        return CriterionCheck(
            "construction_year", CriterionStatus.PASS,
            f"Bouwjaar: {year} (vóór {config.build_year_cutoff})",
        )
    return CriterionCheck(
        "construction_year", CriterionStatus.FAIL,
        f"Bouwjaar: {year} (NIP geldt alleen voor woningen vóór {config.build_year_cutoff})",
    )


def _check_woz(profile: HouseholdProfile, config: NIPConfig) -> CriterionCheck:
    woz = profile.woz_value
    if woz is None:
        return CriterionCheck(
            "woz_value", CriterionStatus.UNKNOWN,
            f"WOZ-waarde onbekend (moet onder {_eur(config.woz_ceiling)})",
        )
    if woz < config.woz_ceiling:
        band = (
            f"≤ {_eur(config.woz_low_threshold)}" if woz <= config.woz_low_threshold
            else f"< {_eur(config.woz_ceiling)}"
        )
        return CriterionCheck("woz_value", CriterionStatus.PASS, f"WOZ-waarde: {_eur(woz)} ({band})")
    return CriterionCheck(
        "woz_value", CriterionStatus.FAIL,
        f"WOZ-waarde {_eur(woz)} is niet lager dan {_eur(config.woz_ceiling)}",
    )


def _check_label_or_insulation(profile: HouseholdProfile, config: NIPConfig) -> CriterionCheck:
    label = profile.energy_label
    poor = count_poorly_insulated_parts(profile)
    unknown_parts = sum(
        value is None for value in (
            profile.wall_insulation,
            profile.floor_insulation,
            profile.roof_insulation,
            profile.glass_type,
        )
    )
    label_text = label.value if label else "onbekend"
    summary = f"Energielabel {label_text}, slecht geïsoleerde onderdelen: {poor}"

    if label is not None and label in config.eligible_labels:
        return CriterionCheck("label_or_insulation", CriterionStatus.PASS, f"{summary} (D/E/F/G)")
    if poor >= config.min_poor_parts:
        return CriterionCheck(
            "label_or_insulation", CriterionStatus.PASS,
            f"{summary} (minimaal {config.min_poor_parts})",
        )
    # Still open if the label is unknown or unknown parts could reach the minimum
    if label is None or poor + unknown_parts >= config.min_poor_parts:
        return CriterionCheck(
            "label_or_insulation", CriterionStatus.UNKNOWN,
            f"{summary} (label D/E/F/G of minimaal {config.min_poor_parts} nodig; gegevens onvolledig)",
        )
    return CriterionCheck(
        "label_or_insulation", CriterionStatus.FAIL,
        f"{summary} (label D/E/F/G of minimaal {config.min_poor_parts} nodig)",
    )


def nip_amount(woz_value: float, config: NIPConfig = NIP_CONFIG) -> float:
    """Tiered amount for an otherwise eligible household."""
    if woz_value <= config.woz_low_threshold:
        return config.amount_low_woz
    return config.amount_high_woz


def evaluate_nip(
    profile: Optional[HouseholdProfile],
    address: Optional[Address] = None,
    as_of: Optional[date] = None,
    config: NIPConfig = NIP_CONFIG,
) -> EligibilityResult:
    """
    Evaluate NIP eligibility and amount.

    Every criterion is evaluated so the explanation always lists all four,
    in order. A missing field makes its criterion UNKNOWN (not met).
    Address and as_of are accepted for the uniform evaluator signature.
    """
    profile = profile or HouseholdProfile()

    checks = [
        _check_property_type(profile, config),
        _check_build_year(profile, config),
        _check_woz(profile, config),
        _check_label_or_insulation(profile, config),
    ]

    amount = nip_amount(profile.woz_value, config) if profile.woz_value is not None else 0
    result = build_result(
        PROGRAM_ID,
        checks,
        amount=amount,
        eligible_reason=f"Uw woning komt in aanmerking voor {_eur(amount)} NIP subsidie!",
        details={
            "woz_value": profile.woz_value,
            "construction_year": profile.construction_year,
            "energy_label": profile.energy_label.value if profile.energy_label else None,
            "poorly_insulated_parts": count_poorly_insulated_parts(profile),
            "woz_reference_date": config.woz_reference_date,
            "eligible_measures": list(NIP_MEASURES),
        },
    )
    logger.debug(f"NIP: eligible={result.eligible} amount={result.amount}")
    return result
