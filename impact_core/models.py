"""Domain models for throughput and error impact computations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Tuple


class ExperienceLevel(str, Enum):
    """Experience of the employees working with an interface."""

    BEGINNER = "Beginner"
    SEASONED = "Seasoned"
    EXPERT = "Expert"


# Throughput multiplier: more experience means more clicks per minute.
EXPERTISE_MULTIPLIERS: Mapping[ExperienceLevel, float] = {
    ExperienceLevel.BEGINNER: 0.15,
    ExperienceLevel.SEASONED: 0.20,
    ExperienceLevel.EXPERT: 0.25,
}

# Minutes needed to recover from a single interface error.
DISTRACTION_MINUTES: Mapping[ExperienceLevel, int] = {
    ExperienceLevel.EXPERT: 15,
    ExperienceLevel.SEASONED: 18,
    ExperienceLevel.BEGINNER: 23,
}

MINUTES_PER_DAY = 360  # 6 working hours
STANDARD_HOURS_PER_DAY = 8
EXPECTED_VALUE_MULTIPLIER = 1.5  # fully loaded value of an employee vs. cost
WEEKS_PER_YEAR = 52
MAX_WEEKLY_ERRORS = 100_000
MAX_INTERFACE_NAME_LENGTH = 255

# Expected page time in seconds, 0.3 ... 4.0 in 0.1 steps
PAGE_TIME_CHOICES: Tuple[float, ...] = tuple(round(step / 10.0, 1) for step in range(3, 41))


class WorkCalendar(Enum):
    """Working days per year for the two employment regimes."""

    FULL_TIME = 250
    PART_TIME = 175

    @classmethod
    def for_employment(cls, is_full_time: bool) -> "WorkCalendar":
        return cls.FULL_TIME if is_full_time else cls.PART_TIME

    @property
    def days_per_year(self) -> int:
        return self.value


@dataclass(frozen=True)
class ThroughputInput:
    """Staffing and task execution parameters for one role."""

    role: str
    annual_cost: float  # per employee
    employees: int
    expected_tasks_per_day: int
    clicks_per_task: int
    expected_page_time_seconds: float
    experience: ExperienceLevel
    is_hours_mode: bool = False
    is_full_time: bool = True
    hours_per_day: float = 8.0


@dataclass(frozen=True)
class ThroughputResult:
    """Echo of a ``ThroughputInput`` plus every derived throughput metric."""

    role: str
    annual_cost: float
    employees: int
    expected_tasks_per_day: int
    clicks_per_task: int
    expected_page_time_seconds: float
    experience: ExperienceLevel
    is_hours_mode: bool
    is_full_time: bool
    hours_per_day: float

    clicks_per_minute: float
    max_clicks_per_day: int
    actual_tasks_per_day: int
    productivity_percent: float
    working_days_per_year: int
    expected_value: float
    value_produced: float
    true_cost: float  # negative: employer pays more than the value received
    total_role_value: float
    actual_hours_per_day: float
    hours_difference: float
    annual_hours_difference: float
    expected_annual_hours: float
    actual_annual_hours: float
    standard_hours_per_day: int
    standard_annual_hours: int


@dataclass(frozen=True)
class ErrorImpactInput:
    """Error rate and staffing parameters for one interface."""

    experience: ExperienceLevel
    annual_wage_8hr_basis: float
    daily_hours: float
    weekly_errors_all_users: int
    employees: int
    is_full_time: bool = True
    is_hours_mode: bool = False
    interface_name: str = ""


@dataclass(frozen=True)
class ErrorImpactResult:
    """Echo of an ``ErrorImpactInput`` plus every derived error impact metric."""

    interface_name: str
    experience: ExperienceLevel
    annual_wage_8hr_basis: float
    daily_hours: float
    is_full_time: bool
    is_hours_mode: bool
    weekly_errors_all_users: int
    employees: int

    annual_errors: int
    errors_per_user: float
    errors_per_day: float
    distraction_time_per_error_minutes: int
    working_days_per_year: int
    annual_work_hours: float
    total_distraction_hours: float
    distraction_hours_per_user: float
    daily_distraction_hours_per_user: float
    net_productive_hours: float
    productivity_loss_percent: float
    max_achievable_productivity_percent: float
    true_labor_cost: float  # negative: wage-equivalent value lost to errors
    standard_hours_per_day: int
    error_impact_hours: float
    expected_annual_value: float
    actual_annual_value: float
    value_impact_per_user: float
