#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Batch front end for the productivity and error impact calculators.

Reads a scenario YAML file, computes every row and writes the requested
exports (CSV per calculator, Excel workbook, HTML report, YAML results).
"""

import argparse
import logging
import os
import sys
from typing import List, Optional, Sequence

import yaml

from impact_core import ErrorImpactResult, InvalidInput, ThroughputResult
from impact_core.export import (
    export_error_impact_csv,
    export_html_report,
    export_throughput_csv,
    export_workbook,
)
from impact_core.scenarios import ScenarioResults, dump_results, load_scenarios

THROUGHPUT_CSV = "productivity_analysis.csv"
ERROR_IMPACT_CSV = "error_impact_analysis.csv"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Estimate the business impact of task speed and interface errors.",
    )
    parser.add_argument("scenarios", help="Scenario file (YAML)")
    parser.add_argument("--csv-dir", help=f"Directory for {THROUGHPUT_CSV} and {ERROR_IMPACT_CSV}")
    parser.add_argument("--xlsx", help="Excel workbook to write")
    parser.add_argument("--html", help="Print-friendly HTML report to write")
    parser.add_argument("--yaml", help="YAML file receiving all computed fields")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every computation")
    return parser


def summary_lines(
    throughput_results: Sequence[ThroughputResult],
    error_results: Sequence[ErrorImpactResult],
) -> List[str]:
    lines: List[str] = []
    if throughput_results:
        lines.append("Speed")
        for r in throughput_results:
            lines.append(
                f"  {r.role or 'Role':<24} {r.productivity_percent:7.2f}%  "
                f"{r.actual_tasks_per_day:>4}/{r.expected_tasks_per_day:<4} tasks  "
                f"true cost {r.true_cost:>12,.2f}  total {r.total_role_value:>16,.2f}"
            )
    if error_results:
        lines.append("Errors")
        for r in error_results:
            lines.append(
                f"  {r.interface_name.strip() or 'Unnamed':<24} {r.max_achievable_productivity_percent:7.2f}%  "
                f"{r.annual_errors:>8} errors/yr  "
                f"true labor cost {r.true_labor_cost:>10,.2f}  "
                f"lost {r.distraction_hours_per_user:8.2f} hrs/user"
            )
    return lines


def write_exports(args: argparse.Namespace, results: ScenarioResults) -> None:
    throughput_results = results.throughput.results
    error_results = results.error_impact.results
    if args.csv_dir:
        os.makedirs(args.csv_dir, exist_ok=True)
        export_throughput_csv(throughput_results, os.path.join(args.csv_dir, THROUGHPUT_CSV))
        export_error_impact_csv(error_results, os.path.join(args.csv_dir, ERROR_IMPACT_CSV))
    if args.xlsx:
        export_workbook(args.xlsx, throughput_results, error_results)
    if args.html:
        export_html_report(args.html, throughput_results, error_results)
    if args.yaml:
        dump_results(args.yaml, throughput_results, error_results)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        results = load_scenarios(args.scenarios).evaluate()
    except (OSError, yaml.YAMLError) as e:
        print(f"Could not load '{args.scenarios}': {e}", file=sys.stderr)
        return 1
    except InvalidInput as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 2

    for line in summary_lines(results.throughput.results, results.error_impact.results):
        print(line)

    try:
        write_exports(args, results)
    except OSError as e:
        print(f"Export failed: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
