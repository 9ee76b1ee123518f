"""
EnergieBuddy REST API - FastAPI Application.

Portal-facing read surface over the subsidy engine. The engine itself is
pure; this module only converts request bodies to engine inputs and engine
results to JSON.

Endpoints:
    GET  /                                  - API info and health check
    GET  /programs                          - Registered subsidy programmes
    POST /subsidies/evaluate                - Evaluate all programmes
    POST /subsidies/{program_id}/evaluate   - Evaluate one programme
    POST /roadmap                           - Subsidised improvement roadmap
    GET  /loan/quote?principal=             - Stimuleringslening quote
    GET  /loan/examples                     - Example loan table
    POST /savings/insulation                - Insulation savings estimate
    GET  /portal/overview?token=            - Household overview by token

Usage:
    uvicorn energiebuddy.api.main:app --reload --port 8000
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Protocol

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .. import __version__
from ..core.config import settings
from ..core.errors import UnknownProgramError
from ..core.models import (
    Address,
    ConsumptionRecord,
    EnergyLabel,
    GlassType,
    HeatingType,
    HouseholdProfile,
    PropertyType,
    WallType,
)
from ..baseline.building_periods import infer_profile
from ..baseline.reference_consumption import compare_with_reference, estimate_energy_costs
from ..subsidies.models import EligibilityResult
from ..subsidies.registry import evaluate_all, evaluate_program, list_programs
from ..planning.catalog import DEFAULT_MEASURE_CATALOG, select_measures
from ..planning.roadmap import Roadmap, build_roadmap
from ..roi.loan import LoanQuote, example_quotes, quote_loan
from ..roi.savings import estimate_insulation_savings, total_saving

logger = logging.getLogger(__name__)


# =============================================================================
# PYDANTIC MODELS
# =============================================================================

class ProfileIn(BaseModel):
    """Household profile; every field is optional."""
    property_type: Optional[PropertyType] = Field(None, description="Woningtype", examples=["tussenwoning"])
    construction_year: Optional[int] = Field(None, description="Bouwjaar", examples=[1965])
    living_area_m2: Optional[float] = Field(None, description="Woonoppervlak in m²")
    woz_value: Optional[float] = Field(None, description="WOZ-waarde (EUR)", examples=[350000])
    energy_label: Optional[EnergyLabel] = None
    wall_type: Optional[WallType] = None
    wall_insulation: Optional[bool] = Field(None, description="None = onbekend")
    floor_insulation: Optional[bool] = None
    roof_insulation: Optional[bool] = None
    glass_type: Optional[GlassType] = None
    heating_type: Optional[HeatingType] = None
    solar_panels: Optional[bool] = None
    solar_panels_count: Optional[int] = None

    def to_profile(self) -> HouseholdProfile:
        return HouseholdProfile(**self.model_dump())


class AddressIn(BaseModel):
    postal_code: Optional[str] = Field(None, examples=["4765 AB"])
    city: Optional[str] = None

    def to_address(self) -> Address:
        return Address(postal_code=self.postal_code, city=self.city)


class EvaluateRequest(BaseModel):
    """Household to evaluate."""
    profile: ProfileIn = Field(default_factory=ProfileIn)
    address: AddressIn = Field(default_factory=AddressIn)
    as_of: Optional[date] = Field(None, description="Evaluation date for validity windows")


class SavingsRequest(BaseModel):
    gas_m3: float = Field(..., ge=0, description="Current annual gas use (m³)")
    profile: ProfileIn = Field(default_factory=ProfileIn)


class CriterionOut(BaseModel):
    key: str
    status: str
    message: str


class EligibilityOut(BaseModel):
    """One programme verdict."""
    program_id: str
    eligible: bool
    amount: float
    reason: str
    needs_more_info: bool
    explanation: List[str]
    criteria: List[CriterionOut]
    details: Dict[str, Any] = {}


class ProgramInfo(BaseModel):
    id: str
    name: str
    kind: Optional[str]
    valid_until: Optional[date] = None
    sponsor: str = ""
    info_url: str = ""


class StepOut(BaseModel):
    measure_id: str
    name: str
    category: str
    base_cost: float
    subsidies: Dict[str, float]
    subsidy_amount: float
    final_cost: float
    fully_subsidized: bool
    annual_saving: float
    co2_reduction_kg: float
    payback_years: float


class RoadmapOut(BaseModel):
    """Allocated roadmap with totals."""
    steps: List[StepOut]
    total_base_cost: float
    total_final_cost: float
    total_subsidy: float
    total_annual_saving: float
    total_co2_reduction_kg: float
    payback_years: float
    remaining_balances: Dict[str, float]
    forfeited: Dict[str, float]


class LoanQuoteOut(BaseModel):
    principal: float
    annual_rate: float
    term_years: int
    monthly_payment: float
    total_interest: float
    total_payment: float
    display: Dict[str, Any]


class SavingOut(BaseModel):
    measure_id: str
    name: str
    saving_m3: int
    saving_euro: int


class SavingsOut(BaseModel):
    savings: List[SavingOut]
    total_m3: int
    total_euro: int


# =============================================================================
# CONVERSION
# =============================================================================

def eligibility_out(result: EligibilityResult) -> EligibilityOut:
    return EligibilityOut(
        program_id=result.program_id,
        eligible=result.eligible,
        amount=result.amount,
        reason=result.reason,
        needs_more_info=result.needs_more_info,
        explanation=result.explanation,
        criteria=[
            CriterionOut(key=c.key, status=c.status.value, message=c.message)
            for c in result.criteria
        ],
        details=result.details,
    )


def roadmap_out(roadmap: Roadmap) -> RoadmapOut:
    return RoadmapOut(
        steps=[
            StepOut(
                measure_id=step.measure.id,
                name=step.measure.name,
                category=step.measure.category.value,
                base_cost=step.measure.base_cost,
                subsidies=step.breakdown(),
                subsidy_amount=step.subsidy_amount,
                final_cost=step.final_cost,
                fully_subsidized=step.fully_subsidized,
                annual_saving=step.measure.annual_saving,
                co2_reduction_kg=step.measure.co2_reduction_kg,
                payback_years=step.payback_years,
            )
            for step in roadmap.steps
        ],
        total_base_cost=roadmap.total_base_cost,
        total_final_cost=roadmap.total_final_cost,
        total_subsidy=roadmap.total_subsidy,
        total_annual_saving=roadmap.total_annual_saving,
        total_co2_reduction_kg=roadmap.total_co2_reduction_kg,
        payback_years=roadmap.payback_years,
        remaining_balances=roadmap.remaining_balances,
        forfeited=roadmap.forfeited,
    )


def loan_out(quote: LoanQuote) -> LoanQuoteOut:
    return LoanQuoteOut(
        principal=quote.principal,
        annual_rate=quote.annual_rate,
        term_years=quote.term_years,
        monthly_payment=quote.monthly_payment,
        total_interest=quote.total_interest,
        total_payment=quote.total_payment,
        display=quote.display(),
    )


def savings_out(gas_m3: float, profile: HouseholdProfile) -> SavingsOut:
    estimates = estimate_insulation_savings(gas_m3, profile)
    total_m3, total_euro = total_saving(estimates)
    return SavingsOut(
        savings=[
            SavingOut(
                measure_id=e.measure_id,
                name=e.name,
                saving_m3=e.saving_m3,
                saving_euro=e.saving_euro,
            )
            for e in estimates
        ],
        total_m3=total_m3,
        total_euro=total_euro,
    )


# =============================================================================
# HOUSEHOLD STORE
# =============================================================================

@dataclass
class HouseholdRecord:
    """Everything the portal knows about one household."""
    profile: HouseholdProfile
    address: Address
    consumption: List[ConsumptionRecord] = field(default_factory=list)

    @property
    def latest_consumption(self) -> Optional[ConsumptionRecord]:
        if not self.consumption:
            return None
        return max(self.consumption, key=lambda r: r.year)


class HouseholdRepository(Protocol):
    """Loads households by portal token. Persistence lives with the caller."""

    def get(self, token: str) -> Optional[HouseholdRecord]:
        ...


class InMemoryHouseholdRepository:
    """Dict-backed repository (for demo and tests; use a DB in production)."""

    def __init__(self, records: Dict[str, HouseholdRecord] = None):
        self._records: Dict[str, HouseholdRecord] = dict(records or {})

    def add(self, token: str, record: HouseholdRecord) -> None:
        self._records[token] = record

    def get(self, token: str) -> Optional[HouseholdRecord]:
        return self._records.get(token)


HOUSEHOLDS = InMemoryHouseholdRepository()


def get_repository() -> HouseholdRepository:
    return HOUSEHOLDS


# =============================================================================
# FASTAPI APPLICATION
# =============================================================================

app = FastAPI(
    title=settings.api_title,
    description="Subsidie- en actieplan-engine voor Nederlandse woningen",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# ENDPOINTS
# =============================================================================

@app.get("/", tags=["General"])
async def root():
    """API info and health check."""
    return {
        "name": settings.api_title,
        "version": __version__,
        "status": "healthy",
        "endpoints": {
            "programs": "GET /programs",
            "evaluate": "POST /subsidies/evaluate",
            "evaluate_one": "POST /subsidies/{program_id}/evaluate",
            "roadmap": "POST /roadmap",
            "loan_quote": "GET /loan/quote?principal=",
            "loan_examples": "GET /loan/examples",
            "savings": "POST /savings/insulation",
            "overview": "GET /portal/overview?token=",
        },
        "documentation": "/docs",
    }


@app.get("/programs", response_model=List[ProgramInfo], tags=["Subsidies"])
async def programs():
    """List registered subsidy and loan programmes."""
    return [
        ProgramInfo(
            id=p.id,
            name=p.name,
            kind=p.kind.value if p.kind else None,
            valid_until=p.valid_until,
            sponsor=p.sponsor,
            info_url=p.info_url,
        )
        for p in list_programs()
    ]


@app.post("/subsidies/evaluate", response_model=List[EligibilityOut], tags=["Subsidies"])
async def evaluate_subsidies(request: EvaluateRequest):
    """Evaluate every programme for a household."""
    results = evaluate_all(
        request.profile.to_profile(),
        request.address.to_address(),
        as_of=request.as_of,
    )
    return [eligibility_out(r) for r in results.values()]


@app.post("/subsidies/{program_id}/evaluate", response_model=EligibilityOut, tags=["Subsidies"])
async def evaluate_one(program_id: str, request: EvaluateRequest):
    """Evaluate a single programme."""
    try:
        result = evaluate_program(
            program_id,
            request.profile.to_profile(),
            request.address.to_address(),
            as_of=request.as_of,
        )
    except UnknownProgramError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return eligibility_out(result)


@app.post("/roadmap", response_model=RoadmapOut, tags=["Planning"])
async def roadmap(request: EvaluateRequest):
    """Build the subsidised roadmap for the measures still to do."""
    profile = request.profile.to_profile()
    results = evaluate_all(profile, request.address.to_address(), as_of=request.as_of)
    measures = select_measures(DEFAULT_MEASURE_CATALOG, profile)
    return roadmap_out(build_roadmap(measures, results))


@app.get("/loan/quote", response_model=LoanQuoteOut, tags=["Loan"])
async def loan_quote(principal: float = Query(..., gt=0, description="Loan amount (EUR)")):
    """Quote the Stimuleringslening; the principal is clamped to the allowed range."""
    return loan_out(quote_loan(principal))


@app.get("/loan/examples", response_model=List[LoanQuoteOut], tags=["Loan"])
async def loan_examples():
    return [loan_out(q) for q in example_quotes()]


@app.post("/savings/insulation", response_model=SavingsOut, tags=["Savings"])
async def insulation_savings(request: SavingsRequest):
    """Estimated gas savings for insulation measures not yet done."""
    return savings_out(request.gas_m3, request.profile.to_profile())


@app.get("/portal/overview", tags=["Portal"])
async def portal_overview(
    token: Optional[str] = Query(None, description="Household portal token"),
    repository: HouseholdRepository = Depends(get_repository),
):
    """
    Household overview for the customer portal.

    The reference comparison is omitted when no reference data exists for
    the household. Roadmap steps and savings both use the profile with
    building-period defaults filled in; eligibility uses only what the
    household stated.
    """
    if not token:
        raise HTTPException(status_code=401, detail="Geen geldige toegangstoken")

    record = repository.get(token)
    if record is None:
        raise HTTPException(status_code=404, detail="Household not found")

    profile = record.profile
    inferred = infer_profile(profile)
    results = evaluate_all(profile, record.address)
    measures = select_measures(DEFAULT_MEASURE_CATALOG, inferred.profile)

    overview: Dict[str, Any] = {
        "building_period": None,
        "inferred_fields": inferred.inferred_fields,
        "evaluations": [eligibility_out(r) for r in results.values()],
        "roadmap": roadmap_out(build_roadmap(measures, results)),
    }
    if inferred.period is not None:
        overview["building_period"] = {
            "code": inferred.period.code,
            "name": inferred.period.name,
            "description": inferred.period.description,
            "improvement_potential": inferred.period.improvement_potential.value,
        }

    latest = record.latest_consumption
    if latest is not None:
        costs = estimate_energy_costs(latest)
        overview["energy_costs"] = {
            "year": latest.year,
            "gas_cost": costs.gas_cost,
            "electricity_cost": costs.electricity_cost,
            "return_value": costs.return_value,
            "total_cost": costs.total_cost,
        }
        comparison = compare_with_reference(latest, profile)
        if comparison is not None:
            overview["comparison"] = {
                "reference_period": comparison.reference.build_period,
                "gas_band": comparison.gas_band.value if comparison.gas_band else None,
                "gas_percentage": comparison.gas_percentage,
                "electricity_band": comparison.elec_band.value if comparison.elec_band else None,
                "electricity_percentage": comparison.elec_percentage,
            }
        if latest.gas_m3 is not None:
            overview["savings"] = savings_out(latest.gas_m3, inferred.profile)

    logger.info(f"Overview served for household with {len(measures)} open measures")
    return overview


@app.get("/health", tags=["General"])
async def health_check():
    return {"status": "healthy", "version": __version__}


# =============================================================================
# CLI ENTRY POINT
# =============================================================================

def main():
    """Run the API server."""
    import uvicorn
    uvicorn.run(
        "energiebuddy.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
    return 0


if __name__ == "__main__":
    import sys
    sys.exit(main())
