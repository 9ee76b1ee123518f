"""
EnergieBuddy CLI.

Command-line interface for subsidy checks, loan quotes and savings estimates.

Household files are JSON, either a bare profile or an object with
"profile" and "address" keys:

    {"profile": {"property_type": "tussenwoning", "construction_year": 1965},
     "address": {"postal_code": "4765 AB"}}
"""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional, Tuple

import typer
from pydantic import TypeAdapter, ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .core.config import settings
from .core.models import Address, HouseholdProfile
from .baseline.building_periods import BUILDING_PERIODS
from .subsidies.models import CriterionStatus
from .subsidies.registry import evaluate_all
from .planning.catalog import DEFAULT_MEASURE_CATALOG, select_measures
from .planning.roadmap import build_roadmap
from .roi.loan import example_quotes, quote_loan
from .roi.savings import estimate_insulation_savings, total_saving

app = typer.Typer(
    name="energiebuddy",
    help="EnergieBuddy - Subsidies en actieplan voor uw woning",
    add_completion=False,
)
console = Console()

_STATUS_STYLE = {
    CriterionStatus.PASS: "green",
    CriterionStatus.FAIL: "red",
    CriterionStatus.UNKNOWN: "yellow",
}


def _eur(value: float) -> str:
    return f"€{value:,.0f}".replace(",", ".")


def load_household(path: Path) -> Tuple[HouseholdProfile, Address]:
    """Read a household JSON file into engine inputs."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if "profile" in data or "address" in data:
        profile_data = data.get("profile") or {}
        address_data = data.get("address") or {}
    else:
        profile_data, address_data = data, {}

    profile = TypeAdapter(HouseholdProfile).validate_python(profile_data)
    address = TypeAdapter(Address).validate_python(address_data)
    return profile, address


def _load_or_exit(path: Path) -> Tuple[HouseholdProfile, Address]:
    try:
        return load_household(path)
    except FileNotFoundError:
        console.print(f"[red]File not found:[/red] {path}")
    except json.JSONDecodeError as e:
        console.print(f"[red]Invalid JSON:[/red] {e}")
    except ValidationError as e:
        console.print(f"[red]Invalid household data:[/red]\n{e}")
    raise typer.Exit(code=1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Configure logging for all commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


@app.command()
def evaluate(
    household_file: Path = typer.Argument(..., help="Household JSON file"),
    as_of: Optional[str] = typer.Option(None, "--as-of", help="Evaluation date (YYYY-MM-DD)"),
):
    """
    Check all subsidy programmes and print the roadmap.
    """
    profile, address = _load_or_exit(household_file)
    try:
        as_of_date = date.fromisoformat(as_of) if as_of else None
    except ValueError:
        console.print(f"[red]Invalid date for --as-of:[/red] {as_of} (expected YYYY-MM-DD)")
        raise typer.Exit(code=1)

    console.print(Panel.fit(
        "[bold blue]EnergieBuddy[/bold blue]\n"
        "Subsidiecheck en actieplan",
        border_style="blue",
    ))

    results = evaluate_all(profile, address, as_of=as_of_date)
    for result in results.values():
        style = "green" if result.eligible else "red"
        console.print(
            f"\n[bold]{result.program_id}[/bold] "
            f"[{style}]{'eligible' if result.eligible else 'not eligible'}[/{style}]"
            + (f" - {_eur(result.amount)}" if result.amount else "")
        )
        console.print(f"  {result.reason}")
        for check in result.criteria:
            console.print(f"  [{_STATUS_STYLE[check.status]}]{check.line()}[/{_STATUS_STYLE[check.status]}]")

    roadmap = build_roadmap(select_measures(DEFAULT_MEASURE_CATALOG, profile), results)

    table = Table(title="Actieplan")
    table.add_column("#", justify="right")
    table.add_column("Maatregel", style="cyan")
    table.add_column("Kosten", justify="right")
    table.add_column("Subsidie", justify="right")
    table.add_column("Netto", justify="right")
    table.add_column("Besparing/jr", justify="right")
    table.add_column("Terugverdientijd", justify="right")

    for i, step in enumerate(roadmap.steps, 1):
        subsidies = ", ".join(f"{pid} {_eur(amount)}" for pid, amount in step.breakdown().items())
        net = "[green]gratis[/green]" if step.fully_subsidized else _eur(step.final_cost)
        table.add_row(
            str(i),
            step.measure.name,
            _eur(step.measure.base_cost),
            subsidies or "-",
            net,
            _eur(step.measure.annual_saving),
            f"{step.payback_years} jr",
        )
    console.print()
    console.print(table)

    console.print(
        f"\n[bold]Totaal:[/bold] {_eur(roadmap.total_base_cost)} -> {_eur(roadmap.total_final_cost)} "
        f"(subsidie {_eur(roadmap.total_subsidy)}), besparing {_eur(roadmap.total_annual_saving)}/jr, "
        f"terugverdientijd {roadmap.payback_years} jr, "
        f"CO₂ -{roadmap.total_co2_reduction_kg:,.0f} kg/jr"
    )


@app.command()
def loan(
    principal: Optional[float] = typer.Argument(None, help="Loan amount (EUR)"),
):
    """
    Quote the Stimuleringslening, or show the example table.
    """
    quotes = [quote_loan(principal)] if principal is not None else example_quotes()

    table = Table(title="Stimuleringslening")
    table.add_column("Bedrag", justify="right", style="cyan")
    table.add_column("Rente", justify="right")
    table.add_column("Looptijd", justify="right")
    table.add_column("Per maand", justify="right")
    table.add_column("Totale rente", justify="right")

    for quote in quotes:
        shown = quote.display()
        table.add_row(
            _eur(shown["principal"]),
            f"{shown['annual_rate_percent']}%",
            f"{shown['term_years']} jaar",
            _eur(shown["monthly_payment"]),
            _eur(shown["total_interest"]),
        )
    console.print(table)


@app.command()
def periods():
    """
    Show the Dutch building-period table.
    """
    table = Table(title="Bouwperiodes")
    table.add_column("Code", style="cyan")
    table.add_column("Jaren")
    table.add_column("Muur")
    table.add_column("Glas")
    table.add_column("Verbeterpotentieel")

    for period in BUILDING_PERIODS:
        years = (
            f"{period.year_from}-{period.year_to}" if period.year_to is not None
            else f"vanaf {period.year_from}"
        )
        if period.year_from == 0:
            years = f"tot {period.year_to + 1}"
        chars = period.characteristics
        table.add_row(
            period.code,
            years,
            chars.wall_type.value,
            chars.glass_type.value,
            period.improvement_potential.label,
        )
    console.print(table)


@app.command()
def savings(
    gas_m3: float = typer.Argument(..., min=0, help="Current annual gas use (m³)"),
    household_file: Path = typer.Argument(..., help="Household JSON file"),
):
    """
    Estimate savings for insulation measures not yet done.
    """
    profile, _ = _load_or_exit(household_file)
    estimates = estimate_insulation_savings(gas_m3, profile)

    if not estimates:
        console.print("[green]Alle isolatiemaatregelen zijn al uitgevoerd.[/green]")
        return

    table = Table(title=f"Besparing bij {gas_m3:,.0f} m³ gas")
    table.add_column("Maatregel", style="cyan")
    table.add_column("m³/jr", justify="right")
    table.add_column("€/jr", justify="right")
    for e in estimates:
        table.add_row(e.name, str(e.saving_m3), _eur(e.saving_euro))

    total_m3, total_euro = total_saving(estimates)
    table.add_row("[bold]Totaal[/bold]", f"[bold]{total_m3}[/bold]", f"[bold]{_eur(total_euro)}[/bold]")
    console.print(table)


if __name__ == "__main__":
    app()
