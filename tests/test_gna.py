from datetime import date

import pytest
from erp_engine.gna import (
    calculate_base_monthly_cost, calculate_personnel_monthly_cost, is_active_in_month,
    calculate_prorated_monthly_cost, calculate_monthly_aggregate, calculate_annual_cost, sum_annual_cost,
)
from erp_engine.models import Personnel, PersonnelType, RateType


def employee(**overrides):
    p = Personnel(
        id="e1", name="Avery", role="Operations", type=PersonnelType.EMPLOYEE,
        rate=10000, rate_type=RateType.MONTHLY, start_date=date(2025, 1, 1),
    )
    return p.with_overrides(**overrides)


def contractor(**overrides):
    p = Personnel(
        id="c1", name="Jordan", role="Bookkeeping", type=PersonnelType.CONTRACTOR,
        rate=50, rate_type=RateType.HOURLY, start_date=date(2025, 1, 1), burden_rate=1.0,
    )
    return p.with_overrides(**overrides)


def test_monthly_employee_cost_with_burden():
    cost = calculate_personnel_monthly_cost(employee())
    assert cost.personnel_id == "e1"
    assert cost.base_cost == 10000
    assert cost.burden_cost == pytest.approx(3000)
    assert cost.total_cost == pytest.approx(13000)


def test_hourly_rate_uses_default_hours():
    assert calculate_base_monthly_cost(contractor()) == pytest.approx(50 * 173.33)
    assert calculate_base_monthly_cost(contractor(hours_per_month=100)) == 5000
    assert calculate_personnel_monthly_cost(contractor()).burden_cost == 0


def test_active_in_month():
    p = employee(start_date=date(2025, 3, 15), end_date=date(2025, 6, 10))
    assert not is_active_in_month(p, 2025, 2)
    assert is_active_in_month(p, 2025, 3)
    assert is_active_in_month(p, 2025, 6)
    assert not is_active_in_month(p, 2025, 7)
    assert is_active_in_month(employee(), 2030, 12)


def test_proration_by_calendar_days():
    p = employee(start_date=date(2025, 1, 16), end_date=date(2025, 6, 10))
    assert calculate_prorated_monthly_cost(p, 2025, 1).total_cost == pytest.approx(13000 * 16 / 31)
    assert calculate_prorated_monthly_cost(p, 2025, 3).total_cost == pytest.approx(13000)
    assert calculate_prorated_monthly_cost(p, 2025, 6).total_cost == pytest.approx(13000 * 10 / 30)

    idle = calculate_prorated_monthly_cost(p, 2025, 8)
    assert (idle.base_cost, idle.burden_cost, idle.total_cost) == (0, 0, 0)


def test_leap_february():
    p = employee(start_date=date(2024, 2, 15))
    assert calculate_prorated_monthly_cost(p, 2024, 2).base_cost == pytest.approx(10000 * 15 / 29)


def test_monthly_aggregate_splits_by_type():
    staff = [employee(), employee(id="e2", start_date=date(2025, 5, 1)), contractor(hours_per_month=100)]
    agg = calculate_monthly_aggregate(staff, 2025, 3)
    assert agg.employee_count == 1
    assert agg.contractor_count == 1
    assert agg.employee_cost == pytest.approx(13000)
    assert agg.contractor_cost == pytest.approx(5000)
    assert agg.total_cost == pytest.approx(18000)


def test_aggregate_without_proration_bills_full_month():
    p = employee(start_date=date(2025, 1, 16))
    assert calculate_monthly_aggregate([p], 2025, 1, prorate=False).total_cost == pytest.approx(13000)
    assert calculate_monthly_aggregate([p], 2025, 1).total_cost == pytest.approx(13000 * 16 / 31)


def test_annual_cost():
    months = calculate_annual_cost([employee(start_date=date(2025, 4, 1))], 2025)
    assert [m.month for m in months] == list(range(1, 13))
    assert months[0].total_cost == 0
    assert sum_annual_cost(months) == pytest.approx(9 * 13000)
    assert sum_annual_cost([]) == 0
