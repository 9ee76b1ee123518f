"""
Pytest configuration and fixtures for EnergieBuddy tests.

Provides reusable test fixtures for:
- Household profiles and addresses
- Eligibility results
- Strict allocation invariants
"""

import pytest
from pathlib import Path

# Add project root to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from energiebuddy.core.config import settings
from energiebuddy.core.models import (
    Address,
    EnergyLabel,
    GlassType,
    HouseholdProfile,
    PropertyType,
)


# =============================================================================
# SETTINGS FIXTURES
# =============================================================================

@pytest.fixture(autouse=True)
def strict_settings(monkeypatch):
    """Fail loudly on allocation defects and pin the reference year."""
    monkeypatch.setattr(settings, "strict_invariants", True)
    monkeypatch.setattr(settings, "reference_year", 2025)
    yield settings


# =============================================================================
# HOUSEHOLD FIXTURES
# =============================================================================

@pytest.fixture
def row_house_1965() -> HouseholdProfile:
    """Row house from 1965 with uninsulated wall and roof, floor unknown."""
    return HouseholdProfile(
        property_type=PropertyType.TUSSENWONING,
        construction_year=1965,
        woz_value=350_000,
        energy_label=EnergyLabel.E,
        wall_insulation=False,
        roof_insulation=False,
        floor_insulation=None,
        glass_type=GlassType.DUBBEL,
    )


@pytest.fixture
def voucher_address() -> Address:
    """Address inside the Waarde Check area (Zevenbergschen Hoek)."""
    return Address(postal_code="4765 AB", city="Zevenbergschen Hoek")


@pytest.fixture
def outside_address() -> Address:
    """Address outside every geography-gated programme."""
    return Address(postal_code="1234 AB", city="Amsterdam")


@pytest.fixture
def scenario_a_json() -> dict:
    """Row-house household as a request body."""
    return {
        "profile": {
            "property_type": "tussenwoning",
            "construction_year": 1965,
            "woz_value": 350000,
            "energy_label": "E",
            "wall_insulation": False,
            "roof_insulation": False,
            "floor_insulation": None,
            "glass_type": "dubbel",
        },
        "address": {"postal_code": "4765 AB"},
    }
