"""Scenario files: YAML input rows for both calculators and YAML result dumps."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Sequence

import numpy as np
import yaml

from .conversions import (
    ERROR_IMPACT_ALIASES,
    THROUGHPUT_ALIASES,
    error_impact_input_from_mapping,
    normalize_keys,
    throughput_input_from_mapping,
)
from .engine import compute_error_impact, compute_throughput
from .models import ErrorImpactInput, ErrorImpactResult, ThroughputInput, ThroughputResult
from .rows import CalculationRows
from .validation import InvalidInput

logger = logging.getLogger(__name__)

# Form defaults of the calculators; scenario files may override them.
THROUGHPUT_DEFAULTS: Mapping[str, Any] = {
    "role": "Service Agent",
    "annual_cost": 45000,
    "employees": 1000,
    "expected_page_time_seconds": 2.4,
    "expected_tasks_per_day": 80,
    "clicks_per_task": 30,
    "experience": "Seasoned",
    "is_hours_mode": False,
    "is_full_time": True,
    "hours_per_day": 8,
}

ERROR_IMPACT_DEFAULTS: Mapping[str, Any] = {
    "interface_name": "",
    "experience": "Seasoned",
    "annual_wage_8hr_basis": 45000,
    "daily_hours": 7,
    "is_full_time": True,
    "is_hours_mode": False,
    "weekly_errors_all_users": 300,
    "employees": 1000,
}


class NumpySafeDumper(yaml.SafeDumper):
    def represent_data(self, data):
        if isinstance(data, (np.integer, np.floating)):
            return super().represent_data(data.item())
        if isinstance(data, Enum):
            return super().represent_data(data.value)
        return super().represent_data(data)


@dataclass
class ScenarioSet:
    """Ordered input rows for both calculators."""

    throughput: List[ThroughputInput] = field(default_factory=list)
    error_impact: List[ErrorImpactInput] = field(default_factory=list)

    def evaluate(self) -> "ScenarioResults":
        throughput_rows = CalculationRows(compute_throughput)
        for inputs in self.throughput:
            throughput_rows.add(inputs)
        error_rows = CalculationRows(compute_error_impact)
        for inputs in self.error_impact:
            error_rows.add(inputs)
        return ScenarioResults(throughput=throughput_rows, error_impact=error_rows)


@dataclass
class ScenarioResults:
    throughput: CalculationRows[ThroughputInput, ThroughputResult]
    error_impact: CalculationRows[ErrorImpactInput, ErrorImpactResult]


def scenarios_from_mapping(data: Mapping[str, Any]) -> ScenarioSet:
    """Build a ``ScenarioSet`` from a parsed scenario document.

    Expected layout::

        defaults:
          throughput: {...}
          error_impact: {...}
        throughput: [{...}, ...]
        error_impact: [{...}, ...]

    Each row is merged over the built-in form defaults and then over the
    document's ``defaults`` section.
    """

    if not isinstance(data, Mapping):
        raise InvalidInput("scenario file: top level must be a mapping.")
    defaults = data.get("defaults") or {}
    if not isinstance(defaults, Mapping):
        raise InvalidInput("scenario file: 'defaults' must be a mapping.")

    throughput_base = {**THROUGHPUT_DEFAULTS, **normalize_keys(_section(defaults, "throughput"), THROUGHPUT_ALIASES)}
    error_base = {**ERROR_IMPACT_DEFAULTS, **normalize_keys(_section(defaults, "error_impact"), ERROR_IMPACT_ALIASES)}

    scenarios = ScenarioSet()
    for index, row in enumerate(_rows(data, "throughput")):
        try:
            scenarios.throughput.append(throughput_input_from_mapping(
                {**throughput_base, **normalize_keys(row, THROUGHPUT_ALIASES)}
            ))
        except InvalidInput as exc:
            raise InvalidInput(f"throughput row {index + 1}: {exc}") from exc
    for index, row in enumerate(_rows(data, "error_impact")):
        try:
            scenarios.error_impact.append(error_impact_input_from_mapping(
                {**error_base, **normalize_keys(row, ERROR_IMPACT_ALIASES)}
            ))
        except InvalidInput as exc:
            raise InvalidInput(f"error_impact row {index + 1}: {exc}") from exc
    return scenarios


def load_scenarios(path: str) -> ScenarioSet:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    scenarios = scenarios_from_mapping(data)
    logger.info(
        "Loaded %d throughput and %d error impact rows from %s",
        len(scenarios.throughput),
        len(scenarios.error_impact),
        path,
    )
    return scenarios


def results_payload(
    throughput_results: Sequence[ThroughputResult] = (),
    error_results: Sequence[ErrorImpactResult] = (),
) -> Dict[str, Any]:
    return {
        "throughput": [asdict(r) for r in throughput_results],
        "error_impact": [asdict(r) for r in error_results],
    }


def dump_results(
    path: str,
    throughput_results: Sequence[ThroughputResult] = (),
    error_results: Sequence[ErrorImpactResult] = (),
) -> None:
    payload = results_payload(throughput_results, error_results)
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(payload, f, sort_keys=False, allow_unicode=True, Dumper=NumpySafeDumper)
    logger.info("Results written to %s", path)


def _section(defaults: Mapping[str, Any], key: str) -> Dict[str, Any]:
    section = defaults.get(key) or {}
    if not isinstance(section, Mapping):
        raise InvalidInput(f"scenario file: 'defaults.{key}' must be a mapping.")
    return dict(section)


def _rows(data: Mapping[str, Any], key: str) -> List[Dict[str, Any]]:
    rows = data.get(key) or []
    if not isinstance(rows, list):
        raise InvalidInput(f"scenario file: '{key}' must be a list of rows.")
    for index, row in enumerate(rows):
        if not isinstance(row, Mapping):
            raise InvalidInput(f"{key} row {index + 1}: each row must be a mapping.")
    return [dict(row) for row in rows]
