"""Helpers that turn loosely typed form/scenario data into engine inputs."""

from __future__ import annotations

import math
import re
from typing import Dict, Mapping, Optional

import numpy as np

from .models import (
    ErrorImpactInput,
    ExperienceLevel,
    PAGE_TIME_CHOICES,
    ThroughputInput,
)
from .validation import (
    InvalidInput,
    is_number,
    validate_error_impact_input,
    validate_throughput_input,
)

THROUGHPUT_ALIASES: Mapping[str, str] = {
    "cost": "annual_cost",
    "tasks_per_day": "expected_tasks_per_day",
    "ept": "expected_page_time_seconds",
    "hours_mode": "is_hours_mode",
    "full_time": "is_full_time",
}

ERROR_IMPACT_ALIASES: Mapping[str, str] = {
    "interface": "interface_name",
    "name": "interface_name",
    "wage": "annual_wage_8hr_basis",
    "weekly_errors": "weekly_errors_all_users",
    "hours_mode": "is_hours_mode",
    "full_time": "is_full_time",
}

_TRUE_WORDS = {"true", "yes", "y", "1", "on"}
_FALSE_WORDS = {"false", "no", "n", "0", "off"}


def normalize_keys(raw: Mapping[str, object], aliases: Mapping[str, str]) -> Dict[str, object]:
    """Return ``raw`` with alias keys renamed to their canonical names.

    An ``employment`` entry (``full-time``/``part-time``) becomes
    ``is_full_time``. Canonical keys win over aliases given in the same mapping.
    """

    normalized: Dict[str, object] = {}
    for key, value in raw.items():
        name = str(key).strip()
        canonical = "is_full_time" if name == "employment" else aliases.get(name, name)
        if canonical != name and canonical in raw:
            continue
        if name == "employment":
            value = _parse_employment(value)
        normalized[canonical] = value
    return normalized


def throughput_input_from_mapping(raw: Mapping[str, object]) -> ThroughputInput:
    """Return a validated ``ThroughputInput`` built from ``raw``.

    Keys are the ``ThroughputInput`` field names or the aliases in
    ``THROUGHPUT_ALIASES``. Numbers may be given as strings; booleans as
    yes/no, true/false or 1/0. The page time is snapped onto the 0.1 s grid.
    """

    data = normalize_keys(raw, THROUGHPUT_ALIASES)
    role = data.get("role")
    role = "" if role is None else str(role)
    context = role.strip() or "role"

    inputs = ThroughputInput(
        role=role,
        annual_cost=_required_float(data, "annual_cost", context),
        employees=_required_int(data, "employees", context),
        expected_tasks_per_day=_required_int(data, "expected_tasks_per_day", context),
        clicks_per_task=_required_int(data, "clicks_per_task", context),
        expected_page_time_seconds=_snap_page_time(
            _required_float(data, "expected_page_time_seconds", context)
        ),
        experience=parse_experience(data.get("experience"), context),
        is_hours_mode=_optional_bool(data, "is_hours_mode", context, False),
        is_full_time=_optional_bool(data, "is_full_time", context, True),
        hours_per_day=_optional_float(data, "hours_per_day", context, 8.0),
    )
    validate_throughput_input(inputs)
    return inputs


def error_impact_input_from_mapping(raw: Mapping[str, object]) -> ErrorImpactInput:
    """Return a validated ``ErrorImpactInput`` built from ``raw``.

    Keys are the ``ErrorImpactInput`` field names or the aliases in
    ``ERROR_IMPACT_ALIASES``.
    """

    data = normalize_keys(raw, ERROR_IMPACT_ALIASES)
    name = data.get("interface_name")
    name = "" if name is None else str(name)
    context = name.strip() or "interface"

    inputs = ErrorImpactInput(
        interface_name=name,
        experience=parse_experience(data.get("experience"), context),
        annual_wage_8hr_basis=_required_float(data, "annual_wage_8hr_basis", context),
        daily_hours=_required_float(data, "daily_hours", context),
        weekly_errors_all_users=_required_int(data, "weekly_errors_all_users", context),
        employees=_required_int(data, "employees", context),
        is_full_time=_optional_bool(data, "is_full_time", context, True),
        is_hours_mode=_optional_bool(data, "is_hours_mode", context, False),
    )
    validate_error_impact_input(inputs)
    return inputs


def parse_experience(value: object, context: str = "input") -> ExperienceLevel:
    if isinstance(value, ExperienceLevel):
        return value
    if isinstance(value, str):
        wanted = value.strip().lower()
        for level in ExperienceLevel:
            if level.value.lower() == wanted:
                return level
    raise InvalidInput(
        f"{context}: experience must be one of "
        f"{', '.join(level.value for level in ExperienceLevel)}, got {value!r}."
    )


def _parse_employment(value: object) -> object:
    if isinstance(value, str):
        key = value.strip().lower().replace("_", "-").replace(" ", "-")
        if key in ("full-time", "fulltime"):
            return True
        if key in ("part-time", "parttime"):
            return False
    raise InvalidInput(f"employment must be 'full-time' or 'part-time', got {value!r}.")


def _snap_page_time(value: float) -> float:
    for choice in PAGE_TIME_CHOICES:
        if math.isclose(value, choice, abs_tol=1e-9):
            return choice
    return value


def _present(data: Mapping[str, object], key: str) -> object:
    value = data.get(key)
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _required_float(data: Mapping[str, object], key: str, context: str) -> float:
    value = _optional_float(data, key, context, None)
    if value is None:
        raise InvalidInput(f"{context}: missing value for '{key}'.")
    return value


def _optional_float(
    data: Mapping[str, object],
    key: str,
    context: str,
    default: Optional[float],
) -> Optional[float]:
    value = _present(data, key)
    if value is None:
        return default
    if isinstance(value, (bool, np.bool_)):
        raise InvalidInput(f"{context}: invalid numeric value for '{key}'.")
    try:
        number = float(value.strip() if isinstance(value, str) else value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        raise InvalidInput(f"{context}: invalid numeric value for '{key}'.")
    if not math.isfinite(number):
        raise InvalidInput(f"{context}: '{key}' must be finite.")
    return number


def _required_int(data: Mapping[str, object], key: str, context: str) -> int:
    value = _present(data, key)
    if value is None:
        raise InvalidInput(f"{context}: missing value for '{key}'.")
    if isinstance(value, str):
        text = value.strip()
        if re.fullmatch(r"-?[0-9]+", text) is None:
            raise InvalidInput(f"{context}: '{key}' must be a whole number, got {value!r}.")
        try:
            return int(text)
        except ValueError:
            raise InvalidInput(f"{context}: '{key}' must be a whole number of sensible size.")
    if not is_number(value) or float(value) != int(value):  # type: ignore[arg-type]
        raise InvalidInput(f"{context}: '{key}' must be a whole number, got {value!r}.")
    return int(value)  # type: ignore[arg-type]


def _optional_bool(data: Mapping[str, object], key: str, context: str, default: bool) -> bool:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        raise InvalidInput(f"{context}: '{key}' must be yes/no or true/false, got {value!r}.")
    if is_number(value) and float(value) in (0.0, 1.0):  # type: ignore[arg-type]
        return bool(value)
    raise InvalidInput(f"{context}: '{key}' must be a boolean, got {value!r}.")
