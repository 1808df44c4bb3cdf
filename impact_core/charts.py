"""Three-bucket chart series for result display."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .models import ErrorImpactResult, ThroughputResult

BLUE = "#3B82F6"
GREEN = "#10B981"
PURPLE = "#8B5CF6"
RED = "#EF4444"


@dataclass(frozen=True)
class ChartBar:
    name: str
    value: float
    color: str


def throughput_chart(result: ThroughputResult) -> Tuple[ChartBar, ChartBar, ChartBar]:
    """Expected vs. actual vs. difference, in annual hours or in value."""

    if result.is_hours_mode:
        return (
            ChartBar("Expected\nAnnual Hours", result.expected_annual_hours, BLUE),
            ChartBar(
                "Actual\nAnnual Hours",
                result.actual_annual_hours,
                GREEN if result.productivity_percent >= 100 else PURPLE,
            ),
            ChartBar(
                "Hours\nDifference",
                result.annual_hours_difference,
                GREEN if result.hours_difference >= 0 else RED,
            ),
        )
    return (
        ChartBar("Average\nWage", result.annual_cost, BLUE),
        ChartBar(
            "Value\nProduced",
            result.value_produced,
            GREEN if result.value_produced >= result.expected_value else PURPLE,
        ),
        ChartBar("Cost/\nBenefit", result.true_cost, GREEN if result.true_cost >= 0 else RED),
    )


def error_impact_chart(result: ErrorImpactResult) -> Tuple[ChartBar, ChartBar, ChartBar]:
    """Expected vs. lost vs. net, per user, in annual hours or in value."""

    if result.is_hours_mode:
        return (
            ChartBar("Expected\nAnnual Hours", result.annual_work_hours, BLUE),
            ChartBar("Annual\nHours Lost", result.distraction_hours_per_user, RED),
            ChartBar("Net Productive\nHours/Year", result.net_productive_hours, GREEN),
        )
    return (
        ChartBar("Expected\nAnnual Value", result.expected_annual_value, BLUE),
        ChartBar("Annual\nValue Lost", abs(result.value_impact_per_user), RED),
        ChartBar("Net Annual\nValue", result.actual_annual_value, GREEN),
    )
