"""
Loan Calculator - Fixed-rate amortization for the Stimuleringslening.

The term follows from the principal (10 years up to €12 500, 15 above);
the principal is clamped to the programme's min/max.

Usage:
    quote = quote_loan(5000)
    quote.monthly_payment        # unrounded
    quote.display()              # whole euros for presentation
"""

from dataclasses import dataclass
from typing import Dict, List, Optional
import logging

from ..subsidies.stimuleringslening import (
    LOAN_INTEREST_RATE,
    LOAN_MIN_AMOUNT,
    LOAN_MAX_AMOUNT,
    LOAN_TERM_BREAKPOINTS,
    LOAN_SELECTABLE_AMOUNTS,
)

logger = logging.getLogger(__name__)

# Principals shown in the example table
EXAMPLE_PRINCIPALS = [3000, 8000, 15000, 25000]


def calculate_monthly_payment(principal: float, annual_rate: float, term_years: int) -> float:
    """
    Annuity payment per month.

    monthly = P * r / (1 - (1 + r)^-n), with r = annual_rate / 12 and
    n = term_years * 12. At r == 0 the limit P / n is used.
    """
    n = term_years * 12
    if principal <= 0 or n <= 0:
        return 0.0

    r = annual_rate / 12
    if r == 0:
        return principal / n

    return principal * r / (1 - (1 + r) ** -n)


def term_for_principal(principal: float) -> int:
    """Term in years allowed for a principal."""
    for upper, term in LOAN_TERM_BREAKPOINTS:
        if principal <= upper:
            return term
    return LOAN_TERM_BREAKPOINTS[-1][1]


def clamp_principal(principal: float) -> float:
    return min(max(principal, LOAN_MIN_AMOUNT), LOAN_MAX_AMOUNT)


@dataclass(frozen=True)
class LoanQuote:
    """Amortization result; amounts are unrounded floats."""
    principal: float
    annual_rate: float
    term_years: int
    monthly_payment: float
    total_interest: float
    total_payment: float

    @property
    def n_payments(self) -> int:
        return self.term_years * 12

    def display(self) -> Dict[str, object]:
        """Whole-euro rendering for presentation."""
        return {
            "principal": round(self.principal),
            "annual_rate_percent": round(self.annual_rate * 100, 2),
            "term_years": self.term_years,
            "monthly_payment": round(self.monthly_payment),
            "total_interest": round(self.total_interest),
            "total_payment": round(self.total_payment),
        }


def quote_loan(principal: float, annual_rate: Optional[float] = None) -> LoanQuote:
    """
    Quote the Stimuleringslening for a principal.

    Args:
        principal: Requested amount; clamped to the allowed range
        annual_rate: Override of the programme rate (e.g. 0 for the limit case)

    Returns:
        LoanQuote with monthly payment, total interest and total payment
    """
    rate = LOAN_INTEREST_RATE if annual_rate is None else annual_rate
    amount = clamp_principal(principal)
    if amount != principal:
        logger.debug(f"Principal {principal} clamped to {amount}")
    elif amount not in LOAN_SELECTABLE_AMOUNTS:
        logger.debug(f"Principal {amount} is not one of the selectable amounts")

    term = term_for_principal(amount)
    monthly = calculate_monthly_payment(amount, rate, term)
    total_payment = monthly * term * 12

    return LoanQuote(
        principal=amount,
        annual_rate=rate,
        term_years=term,
        monthly_payment=monthly,
        total_interest=total_payment - amount,
        total_payment=total_payment,
    )


def example_quotes(principals: List[float] = None) -> List[LoanQuote]:
    """Quotes for the example principals shown on the loan page."""
    return [quote_loan(p) for p in (principals or EXAMPLE_PRINCIPALS)]
