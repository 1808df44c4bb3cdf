"""Core math package for throughput and error impact calculations."""

from .models import (
    ErrorImpactInput,
    ErrorImpactResult,
    ExperienceLevel,
    ThroughputInput,
    ThroughputResult,
    WorkCalendar,
)
from .validation import DivisionDegenerate, InvalidInput
from .conversions import error_impact_input_from_mapping, throughput_input_from_mapping
from .engine import (
    compute_error_impact,
    compute_throughput,
)
from .rows import CalculationRows

__all__ = [
    "ErrorImpactInput",
    "ErrorImpactResult",
    "ExperienceLevel",
    "ThroughputInput",
    "ThroughputResult",
    "WorkCalendar",
    "DivisionDegenerate",
    "InvalidInput",
    "error_impact_input_from_mapping",
    "throughput_input_from_mapping",
    "compute_error_impact",
    "compute_throughput",
    "CalculationRows",
]
