"""
Subsidy Programme Data Models.

Eligibility results are ephemeral: recomputed on every call, never stored.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple
from datetime import date
from enum import Enum

from ..core.models import Address, HouseholdProfile


class ProgramKind(Enum):
    """How a programme's amount is allocated across roadmap measures."""
    SINGLE_USE = "single_use"                       # One measure takes it all
    SPLITTABLE = "splittable"                       # Shared running balance
    PER_MEASURE_ESTIMATE = "per_measure_estimate"   # Fixed amount per measure type

    @property
    def allocation_order(self) -> int:
        return _KIND_ORDER.index(self)


_KIND_ORDER = [
    ProgramKind.SINGLE_USE,
    ProgramKind.SPLITTABLE,
    ProgramKind.PER_MEASURE_ESTIMATE,
]


class CriterionStatus(Enum):
    """Outcome of a single eligibility criterion."""
    PASS = "pass"
    FAIL = "fail"
    UNKNOWN = "unknown"  # Required input missing; counts as not met

    @property
    def symbol(self) -> str:
        return {"pass": "✓", "fail": "✗", "unknown": "?"}[self.value]


@dataclass(frozen=True)
class CriterionCheck:
    """One explained eligibility criterion."""
    key: str
    status: CriterionStatus
    message: str

    @property
    def passed(self) -> bool:
        return self.status is CriterionStatus.PASS

    def line(self) -> str:
        return f"{self.status.symbol} {self.message}"


@dataclass(frozen=True)
class EligibilityResult:
    """Verdict of one programme for one household."""
    program_id: str
    eligible: bool
    amount: float
    reason: str
    criteria: Tuple[CriterionCheck, ...] = ()
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def explanation(self) -> List[str]:
        """Ordered explanation lines, one per criterion."""
        return [c.line() for c in self.criteria]

    @property
    def needs_more_info(self) -> bool:
        """True when a criterion could not be decided for lack of input."""
        return any(c.status is CriterionStatus.UNKNOWN for c in self.criteria)


Evaluator = Callable[..., EligibilityResult]


@dataclass(frozen=True)
class SubsidyProgram:
    """A registered subsidy or financing programme."""
    id: str
    name: str
    evaluate: Evaluator
    kind: Optional[ProgramKind]           # None = financing, never allocated
    valid_until: Optional[date] = None
    sponsor: str = ""
    info_url: str = ""
    per_measure_amounts: Dict[str, float] = field(default_factory=dict)

    def __call__(
        self,
        profile: Optional[HouseholdProfile],
        address: Optional[Address] = None,
        **kwargs,
    ) -> EligibilityResult:
        return self.evaluate(profile, address, **kwargs)


def build_result(
    program_id: str,
    checks: List[CriterionCheck],
    amount: float,
    eligible_reason: str,
    details: Dict[str, Any] = None,
) -> EligibilityResult:
    """
    Combine criterion checks: eligible iff every check passed.

    The reason for an ineligible result is the first hard failure, or the
    first unknown criterion when nothing failed outright.
    """
    eligible = all(c.passed for c in checks)
    if eligible:
        reason = eligible_reason
    else:
        failed = [c for c in checks if c.status is CriterionStatus.FAIL]
        unknown = [c for c in checks if c.status is CriterionStatus.UNKNOWN]
        reason = (failed or unknown)[0].message

    return EligibilityResult(
        program_id=program_id,
        eligible=eligible,
        amount=amount if eligible else 0,
        reason=reason,
        criteria=tuple(checks),
        details=dict(details or {}),
    )
