"""Input contracts enforced before any computation runs."""

from __future__ import annotations

import math

import numpy as np

from .models import (
    ErrorImpactInput,
    ExperienceLevel,
    MAX_INTERFACE_NAME_LENGTH,
    MAX_WEEKLY_ERRORS,
    PAGE_TIME_CHOICES,
    ThroughputInput,
)


class InvalidInput(ValueError):
    """Raised when an input value lies outside its declared domain."""


class DivisionDegenerate(InvalidInput):
    """Raised when an input would end up as a zero denominator."""


def validate_throughput_input(inputs: ThroughputInput) -> None:
    """Raise ``InvalidInput`` unless ``inputs`` can be computed safely."""

    context = inputs.role if isinstance(inputs.role, str) and inputs.role.strip() else "role"
    if not isinstance(inputs.role, str):
        raise InvalidInput(f"{context}: role must be a string.")

    _check_amount(inputs.annual_cost, "annual cost", context)
    _check_count(inputs.employees, "employees", context)
    _check_count(inputs.expected_tasks_per_day, "expected tasks per day", context, divisor=True)
    _check_count(inputs.clicks_per_task, "clicks per task", context, divisor=True)
    _check_experience(inputs.experience, context)
    _check_flag(inputs.is_hours_mode, "hours mode", context)
    _check_flag(inputs.is_full_time, "full time", context)
    _check_hours(inputs.hours_per_day, "hours per day", context)

    if not is_page_time_choice(inputs.expected_page_time_seconds):
        raise InvalidInput(
            f"{context}: expected page time must be one of 0.3 ... 4.0 s in 0.1 s steps, "
            f"got {inputs.expected_page_time_seconds!r}."
        )


def validate_error_impact_input(inputs: ErrorImpactInput) -> None:
    """Raise ``InvalidInput`` unless ``inputs`` can be computed safely."""

    name = inputs.interface_name
    if not isinstance(name, str):
        raise InvalidInput("interface: interface name must be a string.")
    if len(name) > MAX_INTERFACE_NAME_LENGTH:
        raise InvalidInput(
            f"interface: interface name exceeds {MAX_INTERFACE_NAME_LENGTH} characters."
        )
    context = name if name.strip() else "interface"

    _check_experience(inputs.experience, context)
    _check_amount(inputs.annual_wage_8hr_basis, "annual wage", context)
    _check_hours(inputs.daily_hours, "daily hours", context)
    _check_flag(inputs.is_full_time, "full time", context)
    _check_flag(inputs.is_hours_mode, "hours mode", context)
    _check_count(inputs.employees, "employees", context)

    weekly = inputs.weekly_errors_all_users
    if not is_integer(weekly):
        raise InvalidInput(f"{context}: weekly errors must be a whole number, got {weekly!r}.")
    if not 0 <= weekly <= MAX_WEEKLY_ERRORS:
        raise InvalidInput(
            f"{context}: weekly errors must lie within [0, {MAX_WEEKLY_ERRORS}], got {weekly}."
        )


def is_page_time_choice(value: object) -> bool:
    if not is_number(value):
        return False
    return any(math.isclose(float(value), choice, abs_tol=1e-9) for choice in PAGE_TIME_CHOICES)


def is_integer(value: object) -> bool:
    if isinstance(value, (bool, np.bool_)):
        return False
    return isinstance(value, (int, np.integer))


def is_number(value: object) -> bool:
    if isinstance(value, (bool, np.bool_)):
        return False
    if not isinstance(value, (int, float, np.integer, np.floating)):
        return False
    try:
        return math.isfinite(float(value))
    except OverflowError:
        return False


def _check_amount(value: object, label: str, context: str) -> None:
    if not is_number(value):
        raise InvalidInput(f"{context}: {label} must be a finite number, got {value!r}.")
    if value < 0:
        raise InvalidInput(f"{context}: {label} must be non-negative.")


def _check_count(value: object, label: str, context: str, divisor: bool = False) -> None:
    if not is_integer(value):
        raise InvalidInput(f"{context}: {label} must be a whole number, got {value!r}.")
    if value == 0 and divisor:
        raise DivisionDegenerate(f"{context}: {label} must not be zero.")
    if value <= 0:
        raise InvalidInput(f"{context}: {label} must be greater than zero.")


def _check_hours(value: object, label: str, context: str) -> None:
    if not is_number(value):
        raise InvalidInput(f"{context}: {label} must be a finite number, got {value!r}.")
    if value == 0:
        raise DivisionDegenerate(f"{context}: {label} must not be zero.")
    if value < 0:
        raise InvalidInput(f"{context}: {label} must be greater than zero.")


def _check_experience(value: object, context: str) -> None:
    if not isinstance(value, ExperienceLevel):
        raise InvalidInput(f"{context}: unknown experience level {value!r}.")


def _check_flag(value: object, label: str, context: str) -> None:
    if not isinstance(value, (bool, np.bool_)):
        raise InvalidInput(f"{context}: {label} must be a boolean, got {value!r}.")
