"""
ROI Module - Loan quotes and savings estimates.
"""

from .loan import (
    LoanQuote,
    EXAMPLE_PRINCIPALS,
    calculate_monthly_payment,
    term_for_principal,
    clamp_principal,
    quote_loan,
    example_quotes,
)
from .savings import (
    SavingEstimate,
    SAVING_FACTORS,
    estimate_insulation_savings,
    total_saving,
)

__all__ = [
    "LoanQuote",
    "EXAMPLE_PRINCIPALS",
    "calculate_monthly_payment",
    "term_for_principal",
    "clamp_principal",
    "quote_loan",
    "example_quotes",
    "SavingEstimate",
    "SAVING_FACTORS",
    "estimate_insulation_savings",
    "total_saving",
]
