"""
Waarde Check Bon - €2000 credit from Windmolens A16.

Homeowners in the postcode areas around the A16 wind farm receive a €2000
voucher to spend on energy-saving measures. Address-only: no profile fields
are needed.
"""

from typing import Optional
from datetime import date
import logging

from ..core.models import Address, HouseholdProfile
from .models import CriterionCheck, CriterionStatus, EligibilityResult, build_result

logger = logging.getLogger(__name__)

PROGRAM_ID = "waarde_check"

WAARDE_CHECK_POSTCODES = {
    "4765": "Zevenbergschen Hoek",
    "4781": "Moerdijk",
    "4782": "Moerdijk",
    "4767": "Langeweg",
}

WAARDE_CHECK_AMOUNT = 2000
WAARDE_CHECK_VALID_UNTIL = date(2026, 12, 31)
WAARDE_CHECK_SPONSOR = "Windmolens A16"

# Measures the voucher may be spent on
WAARDE_CHECK_MEASURES = [
    "spouwmuur",
    "vloer",
    "dak",
    "glas",
    "zonnepanelen",
    "warmtepomp",
    "energiecoach_advies",
]


def area_name(postal_code: Optional[str]) -> str:
    """Name of the voucher area for a postcode, 'Onbekend' otherwise."""
    prefix = Address(postal_code=postal_code).postal_prefix
    return WAARDE_CHECK_POSTCODES.get(prefix, "Onbekend")


def evaluate_waarde_check(
    profile: Optional[HouseholdProfile],
    address: Optional[Address],
    as_of: Optional[date] = None,
) -> EligibilityResult:
    """
    Check voucher eligibility by postcode prefix.

    Args:
        profile: Ignored; present for the uniform evaluator signature
        address: Household address
        as_of: Optional date; a voucher past its end date is ineligible

    Returns:
        EligibilityResult with a fixed amount when eligible
    """
    prefix = address.postal_prefix if address else None
    checks = []

    if prefix is None:
        checks.append(CriterionCheck(
            "postcode", CriterionStatus.UNKNOWN,
            "Postcode onbekend",
        ))
    elif prefix in WAARDE_CHECK_POSTCODES:
        checks.append(CriterionCheck(
            "postcode", CriterionStatus.PASS,
            f"Postcode {prefix} ligt in {WAARDE_CHECK_POSTCODES[prefix]}",
        ))
    else:
        checks.append(CriterionCheck(
            "postcode", CriterionStatus.FAIL,
            f"Postcode {prefix} komt niet in aanmerking voor de Waarde Check Bon",
        ))

    if as_of is not None:
        if as_of <= WAARDE_CHECK_VALID_UNTIL:
            checks.append(CriterionCheck(
                "validity", CriterionStatus.PASS,
                f"Geldig tot {WAARDE_CHECK_VALID_UNTIL.isoformat()}",
            ))
        else:
            checks.append(CriterionCheck(
                "validity", CriterionStatus.FAIL,
                f"Verlopen op {WAARDE_CHECK_VALID_UNTIL.isoformat()}",
            ))

    result = build_result(
        PROGRAM_ID,
        checks,
        amount=WAARDE_CHECK_AMOUNT,
        eligible_reason=f"U heeft €{WAARDE_CHECK_AMOUNT} tegoed van de Waarde Check Bon!",
        details={
            "postal_prefix": prefix,
            "area": WAARDE_CHECK_POSTCODES.get(prefix, "Onbekend"),
            "valid_until": WAARDE_CHECK_VALID_UNTIL.isoformat(),
            "sponsor": WAARDE_CHECK_SPONSOR,
            "eligible_measures": list(WAARDE_CHECK_MEASURES),
        },
    )
    logger.debug(f"Waarde Check for {prefix}: eligible={result.eligible}")
    return result
