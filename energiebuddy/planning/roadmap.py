"""
Roadmap Allocator - Waterfall allocation of subsidies over measures.

Single forward pass over the measures in priority order. Per measure the
eligible programmes are applied by kind:

    1. SINGLE_USE            whole amount on the first eligible measure,
                             capped at its cost; the excess is forfeited
    2. SPLITTABLE            draws min(remaining balance, uncovered cost)
    3. PER_MEASURE_ESTIMATE  fixed amount per measure type, no shared pool

final_cost = max(0, base_cost - allocated). The allocator keeps no state
between calls.

Usage:
    results = evaluate_all(profile, address)
    roadmap = build_roadmap(select_measures(profile=profile), results)
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union
import logging

from ..core.config import settings
from ..core.errors import InvariantViolation
from ..subsidies.models import EligibilityResult, ProgramKind, SubsidyProgram
from ..subsidies.registry import PROGRAMS
from .catalog import DEFAULT_MEASURE_CATALOG, Measure

logger = logging.getLogger(__name__)

Results = Union[Mapping[str, EligibilityResult], Iterable[EligibilityResult]]


@dataclass(frozen=True)
class SubsidyAllocation:
    """Amount one programme contributes to one measure."""
    program_id: str
    kind: ProgramKind
    amount: float


@dataclass(frozen=True)
class RoadmapStep:
    """A measure with its subsidy breakdown and net cost."""
    measure: Measure
    allocations: Tuple[SubsidyAllocation, ...]
    final_cost: float

    @property
    def subsidy_amount(self) -> float:
        return sum(a.amount for a in self.allocations)

    @property
    def fully_subsidized(self) -> bool:
        return self.final_cost == 0

    @property
    def payback_years(self) -> float:
        return simple_payback(self.final_cost, self.measure.annual_saving)

    def breakdown(self) -> Dict[str, float]:
        return {a.program_id: a.amount for a in self.allocations}


@dataclass(frozen=True)
class Roadmap:
    """Allocated roadmap with totals."""
    steps: Tuple[RoadmapStep, ...]
    total_base_cost: float
    total_final_cost: float
    total_annual_saving: float
    total_co2_reduction_kg: float
    drawn_by_program: Dict[str, float] = field(default_factory=dict)
    remaining_balances: Dict[str, float] = field(default_factory=dict)
    forfeited: Dict[str, float] = field(default_factory=dict)

    @property
    def total_subsidy(self) -> float:
        return sum(self.drawn_by_program.values())

    @property
    def payback_years(self) -> float:
        return simple_payback(self.total_final_cost, self.total_annual_saving)


def simple_payback(cost: float, annual_saving: float) -> float:
    """Years to recover ``cost``, one decimal; 0 when nothing is saved."""
    if annual_saving <= 0:
        return 0.0
    return round(cost / annual_saving, 1)


def _index_results(results: Results) -> Dict[str, EligibilityResult]:
    if isinstance(results, Mapping):
        return dict(results)
    return {r.program_id: r for r in results}


class RoadmapAllocator:
    """
    Allocate eligible subsidy amounts across an ordered measure list.

    Usage:
        allocator = RoadmapAllocator()
        roadmap = allocator.allocate(catalog, results)
    """

    def __init__(
        self,
        programs: Mapping[str, SubsidyProgram] = None,
        strict: Optional[bool] = None,
    ):
        self.programs = programs if programs is not None else PROGRAMS
        self._strict = strict

    @property
    def strict(self) -> bool:
        return settings.strict_invariants if self._strict is None else self._strict

    def allocate(
        self,
        catalog: Iterable[Measure],
        results: Results,
    ) -> Roadmap:
        """
        Run the waterfall over ``catalog`` in priority order.

        Args:
            catalog: Measures to fund (sorted by priority here)
            results: Eligibility results, by programme id or as a list

        Returns:
            Roadmap with one step per measure
        """
        by_id = _index_results(results)
        measures = sorted(catalog, key=lambda m: m.priority)

        # Eligible, allocatable programmes only; loans have no kind
        active: Dict[str, Tuple[SubsidyProgram, EligibilityResult]] = {}
        for program_id, result in by_id.items():
            program = self.programs.get(program_id)
            if program is None or program.kind is None:
                continue
            if result.eligible and result.amount > 0:
                active[program_id] = (program, result)

        balances = {
            pid: result.amount for pid, (program, result) in active.items()
            if program.kind is ProgramKind.SPLITTABLE
        }
        consumed = set()
        forfeited: Dict[str, float] = {}
        drawn: Dict[str, float] = {pid: 0 for pid in active}

        steps = []
        for measure in measures:
            candidates = [
                (pid,) + active[pid] for pid in measure.eligible_programs if pid in active
            ]
            candidates.sort(key=lambda c: c[1].kind.allocation_order)

            allocated = 0.0
            allocations = []
            for program_id, program, result in candidates:
                uncovered = max(0.0, measure.base_cost - allocated)

                if program.kind is ProgramKind.SINGLE_USE:
                    if program_id in consumed:
                        continue
                    amount = min(result.amount, uncovered)
                    if amount <= 0:
                        continue
                    consumed.add(program_id)
                    if result.amount > amount:
                        forfeited[program_id] = result.amount - amount
                        logger.debug(
                            f"{program_id}: {result.amount - amount} forfeited on {measure.id}"
                        )

                elif program.kind is ProgramKind.SPLITTABLE:
                    amount = min(balances[program_id], uncovered)
                    if amount <= 0:
                        continue
                    balances[program_id] -= amount

                else:
                    amount = program.per_measure_amounts.get(measure.id, 0)
                    if amount <= 0:
                        continue

                allocated += amount
                drawn[program_id] += amount
                allocations.append(SubsidyAllocation(program_id, program.kind, amount))
                logger.debug(f"{measure.id}: {program_id} allocates {amount}")

            pooled = sum(
                a.amount for a in allocations
                if a.kind is not ProgramKind.PER_MEASURE_ESTIMATE
            )
            self._check(
                measure.base_cost >= 0 and pooled <= measure.base_cost,
                f"{measure.id}: pooled subsidy {pooled} against cost {measure.base_cost}",
            )

            final_cost = max(0.0, measure.base_cost - allocated)
            steps.append(RoadmapStep(
                measure=measure,
                allocations=tuple(allocations),
                final_cost=final_cost,
            ))

        for program_id, (program, result) in active.items():
            if program.kind is ProgramKind.PER_MEASURE_ESTIMATE:
                continue
            self._check(
                drawn[program_id] <= result.amount,
                f"{program_id} allocated {drawn[program_id]} of {result.amount}",
            )

        roadmap = Roadmap(
            steps=tuple(steps),
            total_base_cost=sum(m.base_cost for m in measures),
            total_final_cost=sum(s.final_cost for s in steps),
            total_annual_saving=sum(m.annual_saving for m in measures),
            total_co2_reduction_kg=sum(m.co2_reduction_kg for m in measures),
            drawn_by_program={pid: amount for pid, amount in drawn.items() if amount > 0},
            remaining_balances=balances,
            forfeited=forfeited,
        )
        logger.info(
            f"Roadmap: {len(steps)} steps, subsidy {roadmap.total_subsidy:.0f}, "
            f"final cost {roadmap.total_final_cost:.0f}"
        )
        return roadmap

    def _check(self, condition: bool, message: str) -> None:
        """Raise in strict mode; otherwise log a warning."""
        if condition:
            return
        if self.strict:
            raise InvariantViolation(message)
        logger.warning(f"Allocation invariant violated: {message}")


def build_roadmap(
    catalog: Iterable[Measure] = DEFAULT_MEASURE_CATALOG,
    results: Results = (),
) -> Roadmap:
    """Allocate ``results`` over ``catalog`` with the registered programmes."""
    return RoadmapAllocator().allocate(catalog, results)
