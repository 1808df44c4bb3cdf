"""Pure math routines for throughput and error impact calculations."""

from __future__ import annotations

import logging
import math

from .models import (
    DISTRACTION_MINUTES,
    EXPECTED_VALUE_MULTIPLIER,
    EXPERTISE_MULTIPLIERS,
    ErrorImpactInput,
    ErrorImpactResult,
    ExperienceLevel,
    MINUTES_PER_DAY,
    STANDARD_HOURS_PER_DAY,
    ThroughputInput,
    ThroughputResult,
    WEEKS_PER_YEAR,
    WorkCalendar,
)
from .validation import validate_error_impact_input, validate_throughput_input

logger = logging.getLogger(__name__)


def compute_throughput(inputs: ThroughputInput) -> ThroughputResult:
    """Return the productivity ratio of a role and its financial/time consequences.

    The clicks-per-minute model is an empirical blend of the natural log of the
    inverse page time and the experience-scaled theoretical maximum. The daily
    window is fixed at ``MINUTES_PER_DAY`` regardless of ``hours_per_day``.

    Raises ``InvalidInput`` (or ``DivisionDegenerate``) before computing when
    ``inputs`` violates its contract.
    """

    validate_throughput_input(inputs)

    ept = float(inputs.expected_page_time_seconds)
    annual_cost = float(inputs.annual_cost)
    hours_per_day = float(inputs.hours_per_day)
    employees = int(inputs.employees)

    clicks_per_minute = _clicks_per_minute(ept, inputs.experience)
    max_clicks_per_day = math.floor(clicks_per_minute * MINUTES_PER_DAY)
    actual_tasks_per_day = math.floor(max_clicks_per_day / int(inputs.clicks_per_task))
    productivity_percent = (actual_tasks_per_day / int(inputs.expected_tasks_per_day)) * 100

    working_days = WorkCalendar.for_employment(bool(inputs.is_full_time)).days_per_year

    expected_value = annual_cost * EXPECTED_VALUE_MULTIPLIER
    value_produced = (productivity_percent / 100) * expected_value
    true_cost = value_produced - expected_value
    total_role_value = true_cost * employees

    actual_hours_per_day = (productivity_percent / 100) * hours_per_day
    hours_difference = actual_hours_per_day - hours_per_day
    annual_hours_difference = hours_difference * working_days

    logger.debug(
        "throughput %s: %.4f clicks/min, %d tasks/day, %.2f%%",
        inputs.role,
        clicks_per_minute,
        actual_tasks_per_day,
        productivity_percent,
    )

    return ThroughputResult(
        role=inputs.role,
        annual_cost=annual_cost,
        employees=employees,
        expected_tasks_per_day=int(inputs.expected_tasks_per_day),
        clicks_per_task=int(inputs.clicks_per_task),
        expected_page_time_seconds=ept,
        experience=inputs.experience,
        is_hours_mode=bool(inputs.is_hours_mode),
        is_full_time=bool(inputs.is_full_time),
        hours_per_day=hours_per_day,
        clicks_per_minute=clicks_per_minute,
        max_clicks_per_day=max_clicks_per_day,
        actual_tasks_per_day=actual_tasks_per_day,
        productivity_percent=productivity_percent,
        working_days_per_year=working_days,
        expected_value=expected_value,
        value_produced=value_produced,
        true_cost=true_cost,
        total_role_value=total_role_value,
        actual_hours_per_day=actual_hours_per_day,
        hours_difference=hours_difference,
        annual_hours_difference=annual_hours_difference,
        expected_annual_hours=hours_per_day * working_days,
        actual_annual_hours=actual_hours_per_day * working_days,
        standard_hours_per_day=STANDARD_HOURS_PER_DAY,
        standard_annual_hours=STANDARD_HOURS_PER_DAY * working_days,
    )


def compute_error_impact(inputs: ErrorImpactInput) -> ErrorImpactResult:
    """Return the productivity lost to error recovery and its financial/time consequences."""

    validate_error_impact_input(inputs)

    employees = int(inputs.employees)
    weekly_errors = int(inputs.weekly_errors_all_users)
    wage = float(inputs.annual_wage_8hr_basis)
    daily_hours = float(inputs.daily_hours)

    annual_errors = weekly_errors * WEEKS_PER_YEAR
    errors_per_user = annual_errors / employees
    distraction_minutes = DISTRACTION_MINUTES[inputs.experience]
    working_days = WorkCalendar.for_employment(bool(inputs.is_full_time)).days_per_year
    annual_work_hours = daily_hours * working_days

    total_distraction_hours = (annual_errors * distraction_minutes) / 60
    daily_distraction_hours = (total_distraction_hours / employees) / working_days
    distraction_hours_per_user = total_distraction_hours / employees

    net_productive_hours = annual_work_hours - distraction_hours_per_user
    productivity_loss_percent = (distraction_hours_per_user / annual_work_hours) * 100
    max_achievable_percent = 100 - productivity_loss_percent

    true_labor_cost = wage * (max_achievable_percent / 100) - wage
    errors_per_day = errors_per_user / working_days

    expected_annual_value = wage * EXPECTED_VALUE_MULTIPLIER
    actual_annual_value = expected_annual_value * (max_achievable_percent / 100)

    logger.debug(
        "error impact %s: %d errors/year, %.4f%% loss",
        inputs.interface_name or "<unnamed>",
        annual_errors,
        productivity_loss_percent,
    )

    return ErrorImpactResult(
        interface_name=inputs.interface_name,
        experience=inputs.experience,
        annual_wage_8hr_basis=wage,
        daily_hours=daily_hours,
        is_full_time=bool(inputs.is_full_time),
        is_hours_mode=bool(inputs.is_hours_mode),
        weekly_errors_all_users=weekly_errors,
        employees=employees,
        annual_errors=annual_errors,
        errors_per_user=errors_per_user,
        errors_per_day=errors_per_day,
        distraction_time_per_error_minutes=distraction_minutes,
        working_days_per_year=working_days,
        annual_work_hours=annual_work_hours,
        total_distraction_hours=total_distraction_hours,
        distraction_hours_per_user=distraction_hours_per_user,
        daily_distraction_hours_per_user=daily_distraction_hours,
        net_productive_hours=net_productive_hours,
        productivity_loss_percent=productivity_loss_percent,
        max_achievable_productivity_percent=max_achievable_percent,
        true_labor_cost=true_labor_cost,
        standard_hours_per_day=STANDARD_HOURS_PER_DAY,
        error_impact_hours=-distraction_hours_per_user,
        expected_annual_value=expected_annual_value,
        actual_annual_value=actual_annual_value,
        value_impact_per_user=actual_annual_value - expected_annual_value,
    )


def _clicks_per_minute(ept: float, experience: ExperienceLevel) -> float:
    theoretical_max = 60 / ept
    x = theoretical_max * EXPERTISE_MULTIPLIERS[experience]
    return math.log(1 / ept) + x
