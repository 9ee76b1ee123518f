"""
Subsidies Module - Eligibility evaluators for Dutch energy subsidies.

- Waarde Check Bon (area voucher, splittable)
- NIP (national insulation subsidy, single use)
- ISDE (statutory reimbursement, per-measure estimate)
- Stimuleringslening (low-interest loan, eligibility only)
"""

from .models import (
    ProgramKind,
    CriterionStatus,
    CriterionCheck,
    EligibilityResult,
    SubsidyProgram,
)
from .waarde_check import evaluate_waarde_check
from .nip import evaluate_nip
from .isde import evaluate_isde, estimate_heat_pump_subsidy, estimate_insulation_subsidy
from .stimuleringslening import evaluate_stimuleringslening
from .registry import PROGRAMS, get_program, list_programs, evaluate_program, evaluate_all

__all__ = [
    "ProgramKind",
    "CriterionStatus",
    "CriterionCheck",
    "EligibilityResult",
    "SubsidyProgram",
    "evaluate_waarde_check",
    "evaluate_nip",
    "evaluate_isde",
    "estimate_heat_pump_subsidy",
    "estimate_insulation_subsidy",
    "evaluate_stimuleringslening",
    "PROGRAMS",
    "get_program",
    "list_programs",
    "evaluate_program",
    "evaluate_all",
]
