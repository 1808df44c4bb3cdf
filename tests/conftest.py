import pytest

from impact_core.models import ErrorImpactInput, ExperienceLevel, ThroughputInput


@pytest.fixture
def service_agent() -> ThroughputInput:
    """Default throughput form values used across unit tests."""
    return ThroughputInput(
        role="Service Agent",
        annual_cost=45000.0,
        employees=1000,
        expected_tasks_per_day=80,
        clicks_per_task=30,
        expected_page_time_seconds=2.4,
        experience=ExperienceLevel.SEASONED,
        is_hours_mode=False,
        is_full_time=True,
        hours_per_day=8.0,
    )


@pytest.fixture
def case_console() -> ErrorImpactInput:
    """Default error impact form values used across unit tests."""
    return ErrorImpactInput(
        interface_name="",
        experience=ExperienceLevel.SEASONED,
        annual_wage_8hr_basis=45000.0,
        daily_hours=7.0,
        is_full_time=True,
        is_hours_mode=False,
        weekly_errors_all_users=300,
        employees=1000,
    )
