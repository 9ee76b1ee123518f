"""
Subsidy programme registry.

Single entry point for evaluating programmes by id. Programmes are registered
once at import time and never mutated afterwards.
"""

from typing import Dict, List, Optional
from datetime import date
import logging

from ..core.errors import UnknownProgramError
from ..core.models import Address, HouseholdProfile
from .models import EligibilityResult, ProgramKind, SubsidyProgram
from . import isde, nip, stimuleringslening, waarde_check

logger = logging.getLogger(__name__)


PROGRAMS: Dict[str, SubsidyProgram] = {
    waarde_check.PROGRAM_ID: SubsidyProgram(
        id=waarde_check.PROGRAM_ID,
        name="Waarde Check Bon",
        evaluate=waarde_check.evaluate_waarde_check,
        kind=ProgramKind.SPLITTABLE,
        valid_until=waarde_check.WAARDE_CHECK_VALID_UNTIL,
        sponsor=waarde_check.WAARDE_CHECK_SPONSOR,
    ),
    nip.PROGRAM_ID: SubsidyProgram(
        id=nip.PROGRAM_ID,
        name="NIP Subsidie",
        evaluate=nip.evaluate_nip,
        kind=ProgramKind.SINGLE_USE,
        sponsor="Rijksoverheid",
        info_url=nip.NIP_CONFIG.info_url,
    ),
    isde.PROGRAM_ID: SubsidyProgram(
        id=isde.PROGRAM_ID,
        name="ISDE Subsidie",
        evaluate=isde.evaluate_isde,
        kind=ProgramKind.PER_MEASURE_ESTIMATE,
        sponsor="RVO",
        info_url=isde.ISDE_INFO_URL,
        per_measure_amounts=dict(isde.ISDE_PER_MEASURE),
    ),
    stimuleringslening.PROGRAM_ID: SubsidyProgram(
        id=stimuleringslening.PROGRAM_ID,
        name="Stimuleringslening Moerdijk",
        evaluate=stimuleringslening.evaluate_stimuleringslening,
        kind=None,
        sponsor=stimuleringslening.LOAN_PROVIDER,
        info_url=stimuleringslening.LOAN_INFO_URL,
    ),
}


def get_program(program_id: str) -> SubsidyProgram:
    """Look up a registered programme."""
    try:
        return PROGRAMS[program_id]
    except KeyError:
        raise UnknownProgramError(program_id) from None


def list_programs() -> List[SubsidyProgram]:
    return list(PROGRAMS.values())


def evaluate_program(
    program_id: str,
    profile: Optional[HouseholdProfile],
    address: Optional[Address] = None,
    as_of: Optional[date] = None,
) -> EligibilityResult:
    """
    Evaluate one programme for a household.

    Raises:
        UnknownProgramError: if ``program_id`` is not registered
    """
    program = get_program(program_id)
    return program(profile, address, as_of=as_of)


def evaluate_all(
    profile: Optional[HouseholdProfile],
    address: Optional[Address] = None,
    as_of: Optional[date] = None,
) -> Dict[str, EligibilityResult]:
    """Evaluate every registered programme, keyed by programme id."""
    results = {
        program_id: program(profile, address, as_of=as_of)
        for program_id, program in PROGRAMS.items()
    }
    eligible = [pid for pid, r in results.items() if r.eligible]
    logger.info(f"Evaluated {len(results)} programmes, eligible: {eligible}")
    return results
