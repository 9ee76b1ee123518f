"""
EnergieBuddy - Subsidy eligibility and improvement roadmap engine for Dutch homes.
"""

__version__ = "0.1.0"
