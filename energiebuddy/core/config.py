"""
Configuration management for the EnergieBuddy subsidy engine.
"""

from datetime import date
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings.

    Can be configured via environment variables or .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="EB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Energy prices (2024/2025 Dutch averages)
    gas_price_per_m3: float = Field(default=1.45, description="Gas price (EUR/m³)")
    electricity_price_per_kwh: float = Field(default=0.40, description="Electricity price (EUR/kWh)")
    return_price_per_kwh: float = Field(default=0.12, description="Feed-in compensation (EUR/kWh)")

    # Building-age checks compare against this year, not the wall clock
    reference_year: int = Field(
        default_factory=lambda: date.today().year,
        description="Year used for building-age eligibility checks",
    )

    # Allocation invariants: raise instead of clamp
    strict_invariants: bool = Field(default=False, description="Raise on allocation invariant violations")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")

    # API
    api_title: str = Field(default="EnergieBuddy API")


# Global settings instance
settings = Settings()
