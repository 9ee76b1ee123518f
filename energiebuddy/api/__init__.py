"""
EnergieBuddy REST API.

FastAPI-based read surface over the subsidy engine.

Usage:
    uvicorn energiebuddy.api.main:app --reload

    # Or directly
    python -m energiebuddy.api.main
"""

from .main import app

__all__ = ["app"]
