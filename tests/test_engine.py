import math
from dataclasses import replace

import pytest

from impact_core.engine import compute_error_impact, compute_throughput
from impact_core.models import (
    DISTRACTION_MINUTES,
    EXPERTISE_MULTIPLIERS,
    ErrorImpactInput,
    ExperienceLevel,
    PAGE_TIME_CHOICES,
    ThroughputInput,
)
from impact_core.validation import DivisionDegenerate, InvalidInput


def test_compute_throughput_matches_reference_scenario(service_agent: ThroughputInput) -> None:
    result = compute_throughput(service_agent)

    expected_cpm = math.log(1 / 2.4) + (60 / 2.4) * 0.20
    assert math.isclose(result.clicks_per_minute, expected_cpm)
    assert math.isclose(result.clicks_per_minute, 4.1245, abs_tol=1e-4)
    assert result.max_clicks_per_day == 1484
    assert result.actual_tasks_per_day == 49
    assert result.productivity_percent == pytest.approx(61.25)
    assert result.working_days_per_year == 250
    assert result.expected_value == pytest.approx(67500.0)
    assert result.value_produced == pytest.approx(41343.75)
    assert result.true_cost == pytest.approx(-26156.25)
    assert result.hours_difference == pytest.approx(-3.1)
    assert result.annual_hours_difference == pytest.approx(-775.0)
    assert result.expected_annual_hours == pytest.approx(2000.0)
    assert result.actual_annual_hours == pytest.approx(1225.0)
    assert result.standard_annual_hours == 2000


def test_compute_throughput_echoes_inputs(service_agent: ThroughputInput) -> None:
    result = compute_throughput(service_agent)

    assert result.role == "Service Agent"
    assert result.annual_cost == 45000.0
    assert result.employees == 1000
    assert result.expected_tasks_per_day == 80
    assert result.clicks_per_task == 30
    assert result.expected_page_time_seconds == 2.4
    assert result.experience is ExperienceLevel.SEASONED
    assert result.is_hours_mode is False
    assert result.is_full_time is True
    assert result.hours_per_day == 8.0


def test_total_role_value_is_true_cost_times_employees(service_agent: ThroughputInput) -> None:
    result = compute_throughput(replace(service_agent, employees=37))
    assert result.total_role_value == result.true_cost * 37


def test_part_time_uses_shorter_calendar(service_agent: ThroughputInput) -> None:
    result = compute_throughput(replace(service_agent, is_full_time=False))
    assert result.working_days_per_year == 175
    assert result.annual_hours_difference == pytest.approx(result.hours_difference * 175)
    assert result.standard_annual_hours == 8 * 175


def test_hours_mode_does_not_change_figures(service_agent: ThroughputInput) -> None:
    value_mode = compute_throughput(service_agent)
    hours_mode = compute_throughput(replace(service_agent, is_hours_mode=True))
    assert hours_mode.productivity_percent == value_mode.productivity_percent
    assert hours_mode.true_cost == value_mode.true_cost
    assert hours_mode.annual_hours_difference == value_mode.annual_hours_difference


def test_hours_per_day_does_not_change_click_window(service_agent: ThroughputInput) -> None:
    short_day = compute_throughput(replace(service_agent, hours_per_day=4.0))
    long_day = compute_throughput(replace(service_agent, hours_per_day=10.0))
    assert short_day.max_clicks_per_day == long_day.max_clicks_per_day == 1484


def test_productivity_can_drop_to_zero(service_agent: ThroughputInput) -> None:
    result = compute_throughput(replace(service_agent, clicks_per_task=5000))
    assert result.actual_tasks_per_day == 0
    assert result.productivity_percent == 0
    assert result.true_cost == pytest.approx(-result.expected_value)


def test_productivity_can_exceed_hundred(service_agent: ThroughputInput) -> None:
    result = compute_throughput(replace(service_agent, expected_tasks_per_day=10))
    assert result.productivity_percent > 100
    assert result.true_cost > 0
    assert result.hours_difference > 0


@pytest.mark.parametrize("experience", list(ExperienceLevel))
def test_click_counts_are_non_negative_integers(service_agent: ThroughputInput, experience: ExperienceLevel) -> None:
    for ept in PAGE_TIME_CHOICES:
        result = compute_throughput(replace(service_agent, expected_page_time_seconds=ept, experience=experience))
        assert isinstance(result.max_clicks_per_day, int)
        assert isinstance(result.actual_tasks_per_day, int)
        assert result.max_clicks_per_day >= 0
        assert result.actual_tasks_per_day >= 0


@pytest.mark.parametrize("experience", list(ExperienceLevel))
def test_faster_pages_never_lower_productivity(service_agent: ThroughputInput, experience: ExperienceLevel) -> None:
    fastest_first = sorted(PAGE_TIME_CHOICES)
    values = [
        compute_throughput(
            replace(service_agent, expected_page_time_seconds=ept, experience=experience)
        ).productivity_percent
        for ept in fastest_first
    ]
    assert all(a >= b for a, b in zip(values, values[1:]))


def test_fewer_clicks_never_lower_productivity(service_agent: ThroughputInput) -> None:
    values = [
        compute_throughput(replace(service_agent, clicks_per_task=clicks)).productivity_percent
        for clicks in range(1, 200)
    ]
    assert all(a >= b for a, b in zip(values, values[1:]))


def test_more_experience_raises_throughput(service_agent: ThroughputInput) -> None:
    levels = (ExperienceLevel.BEGINNER, ExperienceLevel.SEASONED, ExperienceLevel.EXPERT)
    clicks = [compute_throughput(replace(service_agent, experience=lvl)).clicks_per_minute for lvl in levels]
    assert clicks == sorted(clicks)
    assert [EXPERTISE_MULTIPLIERS[lvl] for lvl in levels] == [0.15, 0.20, 0.25]


def test_compute_throughput_is_idempotent(service_agent: ThroughputInput) -> None:
    assert compute_throughput(service_agent) == compute_throughput(service_agent)


@pytest.mark.parametrize("ept", [0.2, 2.45, 4.1, 0.0, -1.0, float("nan")])
def test_page_time_off_the_grid_is_rejected(service_agent: ThroughputInput, ept: float) -> None:
    with pytest.raises(InvalidInput):
        compute_throughput(replace(service_agent, expected_page_time_seconds=ept))


@pytest.mark.parametrize(
    "changes",
    [
        {"employees": 0},
        {"employees": -5},
        {"annual_cost": -1.0},
        {"annual_cost": float("inf")},
        {"clicks_per_task": 2.5},
        {"employees": True},
        {"experience": "Seasoned"},
        {"hours_per_day": -8.0},
        {"role": None},
    ],
)
def test_compute_throughput_rejects_invalid_input(service_agent: ThroughputInput, changes: dict) -> None:
    with pytest.raises(InvalidInput):
        compute_throughput(replace(service_agent, **changes))


@pytest.mark.parametrize(
    "changes",
    [{"expected_tasks_per_day": 0}, {"clicks_per_task": 0}, {"hours_per_day": 0.0}],
)
def test_compute_throughput_rejects_zero_denominators(service_agent: ThroughputInput, changes: dict) -> None:
    with pytest.raises(DivisionDegenerate):
        compute_throughput(replace(service_agent, **changes))


def test_compute_error_impact_matches_reference_scenario(case_console: ErrorImpactInput) -> None:
    result = compute_error_impact(case_console)

    assert result.annual_errors == 15600
    assert result.errors_per_user == pytest.approx(15.6)
    assert result.distraction_time_per_error_minutes == 18
    assert result.working_days_per_year == 250
    assert result.annual_work_hours == pytest.approx(1750.0)
    assert result.total_distraction_hours == pytest.approx(4680.0)
    assert result.distraction_hours_per_user == pytest.approx(4.68)
    assert result.daily_distraction_hours_per_user == pytest.approx(4.68 / 250)
    assert result.net_productive_hours == pytest.approx(1745.32)
    assert result.productivity_loss_percent == pytest.approx(0.2674, abs=1e-4)
    assert result.max_achievable_productivity_percent == pytest.approx(99.7326, abs=1e-4)
    assert result.true_labor_cost == pytest.approx(-120.342857, abs=1e-6)
    assert result.errors_per_day == pytest.approx(15.6 / 250)
    assert result.error_impact_hours == pytest.approx(-4.68)
    assert result.standard_hours_per_day == 8


def test_error_impact_value_figures(case_console: ErrorImpactInput) -> None:
    result = compute_error_impact(case_console)

    assert result.expected_annual_value == pytest.approx(67500.0)
    assert result.actual_annual_value == pytest.approx(67500.0 * result.max_achievable_productivity_percent / 100)
    assert result.value_impact_per_user == pytest.approx(result.actual_annual_value - 67500.0)
    assert result.value_impact_per_user < 0


def test_annual_errors_use_integer_arithmetic(case_console: ErrorImpactInput) -> None:
    result = compute_error_impact(replace(case_console, weekly_errors_all_users=99_999))
    assert isinstance(result.annual_errors, int)
    assert result.annual_errors == 99_999 * 52


@pytest.mark.parametrize("weekly_errors", [0, 1, 300, 4321, 100_000])
@pytest.mark.parametrize("experience", list(ExperienceLevel))
def test_loss_and_max_achievable_add_up(case_console: ErrorImpactInput, weekly_errors: int, experience: ExperienceLevel) -> None:
    result = compute_error_impact(
        replace(case_console, weekly_errors_all_users=weekly_errors, experience=experience, employees=7)
    )
    assert math.isclose(
        result.max_achievable_productivity_percent + result.productivity_loss_percent, 100.0, abs_tol=1e-9
    )


def test_no_errors_means_full_productivity(case_console: ErrorImpactInput) -> None:
    result = compute_error_impact(replace(case_console, weekly_errors_all_users=0))
    assert result.productivity_loss_percent == 0
    assert result.max_achievable_productivity_percent == 100
    assert result.true_labor_cost == 0
    assert result.net_productive_hours == result.annual_work_hours


def test_more_experience_recovers_faster(case_console: ErrorImpactInput) -> None:
    losses = {
        level: compute_error_impact(replace(case_console, experience=level)).productivity_loss_percent
        for level in ExperienceLevel
    }
    assert losses[ExperienceLevel.EXPERT] < losses[ExperienceLevel.SEASONED] < losses[ExperienceLevel.BEGINNER]
    assert DISTRACTION_MINUTES[ExperienceLevel.BEGINNER] == 23


def test_part_time_error_impact(case_console: ErrorImpactInput) -> None:
    result = compute_error_impact(replace(case_console, is_full_time=False))
    assert result.working_days_per_year == 175
    assert result.annual_work_hours == pytest.approx(7 * 175)
    assert result.errors_per_day == pytest.approx(15.6 / 175)


def test_compute_error_impact_is_idempotent(case_console: ErrorImpactInput) -> None:
    assert compute_error_impact(case_console) == compute_error_impact(case_console)


def test_zero_employees_raises_instead_of_nan(case_console: ErrorImpactInput) -> None:
    with pytest.raises(InvalidInput, match="employees"):
        compute_error_impact(replace(case_console, employees=0))


@pytest.mark.parametrize(
    "changes",
    [
        {"weekly_errors_all_users": -1},
        {"weekly_errors_all_users": 100_001},
        {"weekly_errors_all_users": 12.5},
        {"annual_wage_8hr_basis": -100.0},
        {"daily_hours": -7.0},
        {"interface_name": "x" * 256},
        {"experience": "Guru"},
        {"is_full_time": "yes"},
    ],
)
def test_compute_error_impact_rejects_invalid_input(case_console: ErrorImpactInput, changes: dict) -> None:
    with pytest.raises(InvalidInput):
        compute_error_impact(replace(case_console, **changes))


def test_zero_daily_hours_is_degenerate(case_console: ErrorImpactInput) -> None:
    with pytest.raises(DivisionDegenerate):
        compute_error_impact(replace(case_console, daily_hours=0.0))


def test_interface_name_at_limit_is_accepted(case_console: ErrorImpactInput) -> None:
    result = compute_error_impact(replace(case_console, interface_name="x" * 255))
    assert len(result.interface_name) == 255


def test_oversized_wage_raises_invalid_input(case_console: ErrorImpactInput) -> None:
    with pytest.raises(InvalidInput, match="annual wage"):
        compute_error_impact(replace(case_console, annual_wage_8hr_basis=10 ** 400))


@pytest.mark.parametrize("field", ["annual_cost", "hours_per_day"])
def test_oversized_throughput_amounts_raise_invalid_input(service_agent: ThroughputInput, field: str) -> None:
    with pytest.raises(InvalidInput):
        compute_throughput(replace(service_agent, **{field: 10 ** 400}))
