"""G&A personnel cost: monthly burdened cost per person, prorated by active days"""
import calendar
from dataclasses import dataclass
from datetime import date
from typing import List

from config.default_params import DEFAULT_HOURS_PER_MONTH
from .models import Personnel, PersonnelType, RateType


@dataclass(frozen=True)
class PersonnelMonthlyCost:
    personnel_id: str
    base_cost: float
    burden_cost: float     # payroll taxes and benefits on top of base
    total_cost: float


@dataclass(frozen=True)
class MonthlyAggregateCost:
    year: int
    month: int
    employee_cost: float
    contractor_cost: float
    total_cost: float
    employee_count: int
    contractor_count: int


def _month_bounds(year: int, month: int):
    return date(year, month, 1), date(year, month, calendar.monthrange(year, month)[1])


def calculate_base_monthly_cost(person: Personnel) -> float:
    if person.rate_type == RateType.MONTHLY:
        return person.rate
    hours = person.hours_per_month if person.hours_per_month is not None else DEFAULT_HOURS_PER_MONTH
    return person.rate * hours


def calculate_personnel_monthly_cost(person: Personnel) -> PersonnelMonthlyCost:
    base = calculate_base_monthly_cost(person)
    burden = base * (person.burden_rate - 1)
    return PersonnelMonthlyCost(person.id, base, burden, base + burden)


def is_active_in_month(person: Personnel, year: int, month: int) -> bool:
    """Active if employment overlaps any day of the month"""
    month_start, month_end = _month_bounds(year, month)
    if person.start_date > month_end:
        return False
    return person.end_date is None or person.end_date >= month_start


def calculate_prorated_monthly_cost(person: Personnel, year: int, month: int) -> PersonnelMonthlyCost:
    """
    Monthly cost scaled by the share of calendar days worked

    A January 16 start in a 31-day month bills 16/31 of the full month.
    Months outside employment cost nothing.
    """
    if not is_active_in_month(person, year, month):
        return PersonnelMonthlyCost(person.id, 0.0, 0.0, 0.0)

    full = calculate_personnel_monthly_cost(person)
    month_start, month_end = _month_bounds(year, month)
    start = max(person.start_date, month_start)
    end = min(person.end_date, month_end) if person.end_date else month_end

    active_days = max(0, (end - start).days + 1)
    factor = active_days / month_end.day
    return PersonnelMonthlyCost(
        person.id,
        full.base_cost * factor,
        full.burden_cost * factor,
        full.total_cost * factor,
    )


def calculate_monthly_aggregate(
    personnel: List[Personnel],
    year: int,
    month: int,
    prorate: bool = True,
) -> MonthlyAggregateCost:
    employee_cost = contractor_cost = 0.0
    employee_count = contractor_count = 0

    for person in personnel:
        if not is_active_in_month(person, year, month):
            continue
        if prorate:
            cost = calculate_prorated_monthly_cost(person, year, month)
        else:
            cost = calculate_personnel_monthly_cost(person)

        if person.type == PersonnelType.EMPLOYEE:
            employee_cost += cost.total_cost
            employee_count += 1
        else:
            contractor_cost += cost.total_cost
            contractor_count += 1

    return MonthlyAggregateCost(
        year=year,
        month=month,
        employee_cost=employee_cost,
        contractor_cost=contractor_cost,
        total_cost=employee_cost + contractor_cost,
        employee_count=employee_count,
        contractor_count=contractor_count,
    )


def calculate_annual_cost(personnel: List[Personnel], year: int, prorate: bool = True) -> List[MonthlyAggregateCost]:
    """Twelve monthly aggregates, January first"""
    return [calculate_monthly_aggregate(personnel, year, m, prorate) for m in range(1, 13)]


def sum_annual_cost(monthly_costs: List[MonthlyAggregateCost]) -> float:
    return sum(m.total_cost for m in monthly_costs)
