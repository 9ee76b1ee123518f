"""
Insulation Savings Estimator.

Estimates annual gas savings for insulation measures that are not yet done,
as a fixed share of current gas consumption. Completed measures are left out
of the result entirely.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple
import logging

from ..core.config import settings
from ..core.models import HouseholdProfile

logger = logging.getLogger(__name__)

# (measure id, display name, share of current gas use saved)
SAVING_FACTORS: Tuple[Tuple[str, str, float], ...] = (
    ("spouwmuur", "Spouwmuurisolatie", 0.20),
    ("dak", "Dakisolatie", 0.15),
    ("vloer", "Vloerisolatie", 0.08),
    ("glas", "HR++ glas", 0.10),
)


@dataclass(frozen=True)
class SavingEstimate:
    """Estimated annual saving for one measure."""
    measure_id: str
    name: str
    saving_m3: int
    saving_euro: int


def _is_open(profile: HouseholdProfile, measure_id: str) -> bool:
    """Whether the profile shows the measure still has to be done."""
    if measure_id == "spouwmuur":
        return profile.wall_insulation is not True
    if measure_id == "dak":
        return profile.roof_insulation is not True
    if measure_id == "vloer":
        return profile.floor_insulation is not True
    if measure_id == "glas":
        return profile.glass_type is not None and profile.glass_type.is_poor
    return False


def estimate_insulation_savings(
    gas_m3: float,
    profile: Optional[HouseholdProfile],
    gas_price: Optional[float] = None,
) -> List[SavingEstimate]:
    """
    Estimate savings per open insulation measure.

    Unknown wall/roof/floor insulation counts as not done; glazing only
    counts when single or plain double.

    Args:
        gas_m3: Current annual gas consumption
        profile: Current insulation and glazing state
        gas_price: EUR per m³, defaults to the configured price

    Returns:
        One SavingEstimate per open measure, in fixed order
    """
    profile = profile or HouseholdProfile()
    price = settings.gas_price_per_m3 if gas_price is None else gas_price
    gas_m3 = max(gas_m3 or 0, 0)

    estimates = []
    for measure_id, name, factor in SAVING_FACTORS:
        if not _is_open(profile, measure_id):
            continue
        saving_m3 = round(gas_m3 * factor)
        estimates.append(SavingEstimate(
            measure_id=measure_id,
            name=name,
            saving_m3=saving_m3,
            saving_euro=round(saving_m3 * price),
        ))

    logger.debug(f"Savings for {gas_m3} m³: {[e.measure_id for e in estimates]}")
    return estimates


def total_saving(estimates: List[SavingEstimate]) -> Tuple[int, int]:
    """Total (m³, euro) over a list of estimates."""
    return (
        sum(e.saving_m3 for e in estimates),
        sum(e.saving_euro for e in estimates),
    )
