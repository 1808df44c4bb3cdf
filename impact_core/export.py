"""CSV, Excel and HTML exports of calculation results.

Formatting only: every figure is read from a result object. The single
exception is the enterprise rollup (``true_labor_cost * employees``), which
is a plain multiplication of a per-employee field.
"""

from __future__ import annotations

import html
import logging
from datetime import datetime
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

import pandas as pd
from openpyxl.utils import get_column_letter

from .charts import ChartBar, error_impact_chart, throughput_chart
from .models import ErrorImpactResult, ThroughputResult

logger = logging.getLogger(__name__)

TEXT, PLAIN, FIXED, FLAG = "text", "plain", "fixed", "flag"

ColumnSpec = Tuple[str, Callable[[Any], Any], str]

THROUGHPUT_COLUMNS: Sequence[ColumnSpec] = (
    ("Role", lambda r: r.role, TEXT),
    ("Cost/Employee", lambda r: r.annual_cost, PLAIN),
    ("Employees", lambda r: r.employees, PLAIN),
    ("Expected Tasks/Day", lambda r: r.expected_tasks_per_day, PLAIN),
    ("Actual Tasks/Day", lambda r: r.actual_tasks_per_day, PLAIN),
    ("Productivity %", lambda r: r.productivity_percent, FIXED),
    ("Value Produced", lambda r: r.value_produced, FIXED),
    ("Expected Value", lambda r: r.expected_value, FIXED),
    ("True Cost", lambda r: r.true_cost, FIXED),
    ("Total Role Value", lambda r: r.total_role_value, FIXED),
    ("Experience Level", lambda r: r.experience.value, TEXT),
    ("Hours Mode", lambda r: r.is_hours_mode, FLAG),
    ("Hours/Day", lambda r: r.hours_per_day, PLAIN),
    ("Hours Difference", lambda r: r.hours_difference, FIXED),
    ("Annual Hours Difference", lambda r: r.annual_hours_difference, FIXED),
    ("Full Time", lambda r: r.is_full_time, FLAG),
    ("Working Days/Year", lambda r: r.working_days_per_year, PLAIN),
)

ERROR_IMPACT_COLUMNS: Sequence[ColumnSpec] = (
    ("Interface", lambda r: r.interface_name.strip() or "Unnamed", TEXT),
    ("Experience", lambda r: r.experience.value, TEXT),
    ("Annual Wage", lambda r: r.annual_wage_8hr_basis, PLAIN),
    ("Daily Hours", lambda r: r.daily_hours, PLAIN),
    ("Weekly Errors", lambda r: r.weekly_errors_all_users, PLAIN),
    ("Annual Errors", lambda r: r.annual_errors, PLAIN),
    ("Errors per User", lambda r: r.errors_per_user, FIXED),
    ("Distraction Time/Error", lambda r: r.distraction_time_per_error_minutes, PLAIN),
    ("Annual Work Hours", lambda r: r.annual_work_hours, PLAIN),
    ("Total Distraction Time", lambda r: r.total_distraction_hours, FIXED),
    ("Net Productive Time", lambda r: r.net_productive_hours, FIXED),
    ("Productivity Loss %", lambda r: r.productivity_loss_percent, FIXED),
    ("Max Achievable %", lambda r: r.max_achievable_productivity_percent, FIXED),
    ("True Labor Cost", lambda r: r.true_labor_cost, FIXED),
    ("Enterprise Impact", lambda r: r.true_labor_cost * r.employees, FIXED),
    ("Full Time", lambda r: r.is_full_time, FLAG),
)


def throughput_frame(results: Iterable[ThroughputResult], formatted: bool = True) -> pd.DataFrame:
    """Return one row per result in the fixed throughput column order.

    With ``formatted`` the cells are CSV-ready strings; otherwise numbers are
    kept numeric (rounded to two decimals where the CSV shows two).
    """
    return _frame(results, THROUGHPUT_COLUMNS, formatted)


def error_impact_frame(results: Iterable[ErrorImpactResult], formatted: bool = True) -> pd.DataFrame:
    """Return one row per result in the fixed error impact column order."""
    return _frame(results, ERROR_IMPACT_COLUMNS, formatted)


def export_throughput_csv(results: Iterable[ThroughputResult], path: Optional[str] = None) -> Optional[str]:
    """Write the throughput CSV to ``path``, or return it as text when ``path`` is None."""
    return _to_csv(throughput_frame(results), path)


def export_error_impact_csv(results: Iterable[ErrorImpactResult], path: Optional[str] = None) -> Optional[str]:
    """Write the error impact CSV to ``path``, or return it as text when ``path`` is None."""
    return _to_csv(error_impact_frame(results), path)


def export_workbook(
    path: str,
    throughput_results: Iterable[ThroughputResult] = (),
    error_results: Iterable[ErrorImpactResult] = (),
) -> None:
    """Write both result lists to an Excel workbook, one sheet per calculator."""

    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        throughput_frame(throughput_results, formatted=False).to_excel(writer, sheet_name="Speed", index=False)
        error_impact_frame(error_results, formatted=False).to_excel(writer, sheet_name="Errors", index=False)
        for worksheet in writer.sheets.values():
            _fit_columns(worksheet)
    logger.info("Workbook written to %s", path)


def build_html_report(
    throughput_results: Sequence[ThroughputResult] = (),
    error_results: Sequence[ErrorImpactResult] = (),
    generated_at: Optional[datetime] = None,
) -> str:
    '''Build a self-contained, print-friendly HTML report of all results.'''

    stamp = (generated_at or datetime.now()).strftime('%Y-%m-%d %H:%M')

    def esc(x):
        return html.escape('' if x is None else str(x))

    def money(x):
        return f"{float(x):,.2f}"

    def hours(x):
        return f"{float(x):,.1f} hrs"

    def pct(x):
        return f"{float(x):.1f}%"

    def bars(chart: Sequence[ChartBar], fmt) -> str:
        scale = max((abs(bar.value) for bar in chart), default=0.0) or 1.0
        rows = []
        for bar in chart:
            width = 100.0 * abs(bar.value) / scale
            rows.append(
                f"<tr><td class='lbl'>{esc(bar.name.replace(chr(10), ' '))}</td>"
                f"<td class='bar'><span style='width:{width:.1f}%;background:{esc(bar.color)}'></span></td>"
                f"<td class='num'>{esc(fmt(bar.value))}</td></tr>"
            )
        return "<table class='chart'>" + "".join(rows) + "</table>"

    def table(frame: pd.DataFrame) -> str:
        if frame.empty:
            return "<p class='muted'>No calculations.</p>"
        return frame.to_html(index=False, classes="grid", border=0, escape=True)

    css = '''
    body { font: 13px/1.45 -apple-system, Segoe UI, Roboto, Helvetica, Arial, sans-serif; color: #111; margin: 0; background: #fff; }
    .page { padding: 24px 28px 40px; }
    h1 { font-size: 22px; margin: 0 0 4px; }
    h2 { font-size: 17px; margin: 28px 0 10px; border-bottom: 1px solid #e5e7eb; padding-bottom: 4px; }
    .muted { color: #6b7280; }
    .card { border: 1px solid #e5e7eb; border-radius: 8px; padding: 12px 14px; margin: 10px 0; page-break-inside: avoid; }
    .card h3 { margin: 0 0 6px; font-size: 15px; }
    .headline { font-size: 20px; font-weight: 600; color: #1d4ed8; }
    table.grid { border-collapse: collapse; width: 100%; font-size: 11px; }
    table.grid th, table.grid td { border: 1px solid #e5e7eb; padding: 3px 6px; text-align: right; }
    table.grid th { background: #f3f4f6; }
    table.chart { border-collapse: collapse; width: 100%; margin-top: 6px; }
    table.chart td { padding: 2px 6px; }
    td.lbl { width: 28%; }
    td.num { width: 18%; text-align: right; }
    td.bar span { display: inline-block; height: 10px; border-radius: 2px; }
    @media print { .page { padding: 0; } }
    '''

    parts: List[str] = [
        "<!DOCTYPE html><html><head><meta charset='utf-8'>",
        "<title>Productivity &amp; Error Impact Report</title>",
        f"<style>{css}</style></head><body><div class='page'>",
        "<h1>Productivity &amp; Error Impact Report</h1>",
        f"<div class='muted'>Generated {esc(stamp)}</div>",
        "<h2>Speed</h2>",
    ]
    for r in throughput_results:
        fmt = hours if r.is_hours_mode else money
        parts.append(
            "<div class='card'>"
            f"<h3>{esc(r.role or 'Role')}</h3>"
            f"<div class='headline'>{esc(pct(r.productivity_percent))} productivity</div>"
            f"<div class='muted'>{esc(r.actual_tasks_per_day)} of {esc(r.expected_tasks_per_day)} tasks/day, "
            f"{esc(r.max_clicks_per_day)} clicks/day max, {esc(r.experience.value)}, "
            f"{esc(r.employees)} employees, total role value {esc(money(r.total_role_value))}</div>"
            f"{bars(throughput_chart(r), fmt)}</div>"
        )
    parts.append(table(throughput_frame(throughput_results)))

    parts.append("<h2>Errors</h2>")
    for r in error_results:
        fmt = hours if r.is_hours_mode else money
        parts.append(
            "<div class='card'>"
            f"<h3>{esc(r.interface_name.strip() or 'Unnamed')}</h3>"
            f"<div class='headline'>{esc(pct(r.max_achievable_productivity_percent))} max achievable</div>"
            f"<div class='muted'>{esc(r.annual_errors)} errors/year "
            f"({esc(round(r.errors_per_user))} per user), "
            f"{esc(r.distraction_time_per_error_minutes)} min per error, "
            f"enterprise impact {esc(money(r.true_labor_cost * r.employees))}</div>"
            f"{bars(error_impact_chart(r), fmt)}</div>"
        )
    parts.append(table(error_impact_frame(error_results)))

    parts.append("</div></body></html>")
    return "\n".join(parts)


def export_html_report(
    path: str,
    throughput_results: Sequence[ThroughputResult] = (),
    error_results: Sequence[ErrorImpactResult] = (),
) -> None:
    with open(path, 'w', encoding='utf-8') as f:
        f.write(build_html_report(throughput_results, error_results))
    logger.info("HTML report written to %s", path)


def _frame(results: Iterable[Any], columns: Sequence[ColumnSpec], formatted: bool) -> pd.DataFrame:
    rows = [[_cell(getter(r), kind, formatted) for _, getter, kind in columns] for r in results]
    return pd.DataFrame(rows, columns=[name for name, _, _ in columns], dtype=object)


def _cell(value: Any, kind: str, formatted: bool) -> Any:
    if kind == FLAG:
        return "Yes" if value else "No"
    if kind == TEXT:
        return value
    if kind == FIXED:
        return f"{float(value):.2f}" if formatted else round(float(value), 2)
    if formatted:
        return _plain_number(value)
    return value


def _plain_number(value: Any) -> str:
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)


def _to_csv(frame: pd.DataFrame, path: Optional[str]) -> Optional[str]:
    text = frame.to_csv(index=False, lineterminator="\n")
    if path is None:
        return text
    with open(path, 'w', encoding='utf-8', newline='') as f:
        f.write(text)
    logger.info("CSV written to %s (%d rows)", path, len(frame))
    return None


def _fit_columns(worksheet) -> None:
    for index, column in enumerate(worksheet.iter_cols(), start=1):
        width = max((len(str(cell.value)) for cell in column if cell.value is not None), default=0)
        worksheet.column_dimensions[get_column_letter(index)].width = min(width + 2, 60)
    worksheet.freeze_panes = "A2"
