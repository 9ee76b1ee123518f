"""
Planning Module - Improvement roadmap with subsidy allocation.

Components:
- catalog: the fixed, priority-ordered measure list
- roadmap: waterfall allocation of eligible subsidies over the measures
"""

from .catalog import (
    Measure,
    MeasureCategory,
    DEFAULT_MEASURE_CATALOG,
    select_measures,
)
from .roadmap import (
    SubsidyAllocation,
    RoadmapStep,
    Roadmap,
    RoadmapAllocator,
    build_roadmap,
    simple_payback,
)

__all__ = [
    "Measure",
    "MeasureCategory",
    "DEFAULT_MEASURE_CATALOG",
    "select_measures",
    "SubsidyAllocation",
    "RoadmapStep",
    "Roadmap",
    "RoadmapAllocator",
    "build_roadmap",
    "simple_payback",
]
