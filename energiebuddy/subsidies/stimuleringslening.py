"""
Stimuleringslening Moerdijk - Low-interest sustainability loan.

Municipal loan via SVn for energy-saving measures. The engine only decides
eligibility; monthly payments come from roi.loan.

Conditions:
    - Address within the municipality (postcode prefix list)
    - Building at least 10 years old
    - Principal €2500 - €35 000 at a fixed 1.7%
    - Term 10 years up to €12 500, 15 years above
"""

from typing import Optional
from datetime import date
import logging

from ..core.config import settings
from ..core.models import Address, HouseholdProfile
from .models import CriterionCheck, CriterionStatus, EligibilityResult, build_result

logger = logging.getLogger(__name__)

PROGRAM_ID = "stimuleringslening"

LOAN_INTEREST_RATE = 0.017
LOAN_MIN_AMOUNT = 2500
LOAN_MAX_AMOUNT = 35000
LOAN_MIN_BUILDING_AGE = 10

# Principal upper bound -> term in years
LOAN_TERM_BREAKPOINTS = [
    (12500, 10),
    (LOAN_MAX_AMOUNT, 15),
]

LOAN_SELECTABLE_AMOUNTS = [3000, 5000, 10000, 15000, 25000]

MOERDIJK_POSTCODES = {
    "4765": "Zevenbergschen Hoek",
    "4781": "Moerdijk",
    "4782": "Moerdijk",
    "4767": "Langeweg",
    "4761": "Zevenbergen",
    "4791": "Klundert",
    "4793": "Fijnaart",
    "4794": "Heijningen",
    "4795": "Standdaarbuiten",
    "4797": "Willemstad",
}

LOAN_PROVIDER = "SVn (Stimuleringsfonds Volkshuisvesting)"
LOAN_INFO_URL = "https://www.svn.nl/moerdijk"


def evaluate_stimuleringslening(
    profile: Optional[HouseholdProfile],
    address: Optional[Address],
    as_of: Optional[date] = None,
) -> EligibilityResult:
    """
    Check loan eligibility.

    Building age is measured against ``as_of`` when given, else against
    ``settings.reference_year``. The result amount is always 0: the loan is
    financing, not a grant.
    """
    profile = profile or HouseholdProfile()
    reference_year = as_of.year if as_of is not None else settings.reference_year
    prefix = address.postal_prefix if address else None

    checks = []
    if prefix is None:
        checks.append(CriterionCheck("postcode", CriterionStatus.UNKNOWN, "Postcode onbekend"))
    elif prefix in MOERDIJK_POSTCODES:
        checks.append(CriterionCheck(
            "postcode", CriterionStatus.PASS,
            f"Adres in gemeente Moerdijk ({MOERDIJK_POSTCODES[prefix]})",
        ))
    else:
        checks.append(CriterionCheck(
            "postcode", CriterionStatus.FAIL,
            f"Postcode {prefix} valt buiten de gemeente Moerdijk",
        ))

    year = profile.construction_year
    if year is None:
        checks.append(CriterionCheck(
            "building_age", CriterionStatus.UNKNOWN,
            f"Bouwjaar onbekend (woning moet minimaal {LOAN_MIN_BUILDING_AGE} jaar oud zijn)",
        ))
    else:
        age = reference_year - year
        status = CriterionStatus.PASS if age >= LOAN_MIN_BUILDING_AGE else CriterionStatus.FAIL
        checks.append(CriterionCheck(
            "building_age", status,
            f"Woning is {age} jaar oud (minimaal {LOAN_MIN_BUILDING_AGE} jaar)",
        ))

    result = build_result(
        PROGRAM_ID,
        checks,
        amount=0,
        eligible_reason=(
            f"U komt in aanmerking voor een lening van €{LOAN_MIN_AMOUNT} "
            f"tot €{LOAN_MAX_AMOUNT} tegen {LOAN_INTEREST_RATE * 100:.1f}% rente"
        ),
        details={
            "interest_rate": LOAN_INTEREST_RATE,
            "min_amount": LOAN_MIN_AMOUNT,
            "max_amount": LOAN_MAX_AMOUNT,
            "terms_years": sorted({term for _, term in LOAN_TERM_BREAKPOINTS}),
            "selectable_amounts": list(LOAN_SELECTABLE_AMOUNTS),
            "reference_year": reference_year,
            "provider": LOAN_PROVIDER,
        },
    )
    logger.debug(f"Stimuleringslening for {prefix}: eligible={result.eligible}")
    return result
