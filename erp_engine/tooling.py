"""Tooling amortization and re-tooling cycle planning"""
from dataclasses import dataclass
from datetime import date
from typing import List, Optional


@dataclass(frozen=True)
class ToolingYearProjection:
    year: int
    amortization_expense: float
    retooling_investment: float
    is_retooling_year: bool


@dataclass(frozen=True)
class ToolingProjection:
    years: List[ToolingYearProjection]
    total_amortization: float
    total_retooling_investments: float


def calculate_tooling_amortization(tooling_cost: float, retooling_years: int) -> float:
    """Straight-line annual amortization over the re-tooling cycle"""
    if retooling_years <= 0:
        return 0.0
    return tooling_cost / retooling_years


def is_retooling_year(year_index: int, retooling_years: int) -> bool:
    """Re-tooling falls at the end of each full cycle, never in year 1"""
    return retooling_years > 0 and (year_index + 1) % retooling_years == 0 and year_index > 0


def generate_tooling_projections(
    tooling_cost: float,
    retooling_years: int,
    projection_years: int,
    start_year: Optional[int] = None,
) -> ToolingProjection:
    """
    Annual tooling expense schedule

    Args:
        tooling_cost: Initial tooling investment; each re-tool costs the same
        retooling_years: Cycle length (also the amortization period)
        projection_years: Number of years to project
        start_year: First calendar year (defaults to the current year)

    Returns:
        ToolingProjection with one row per year and totals
    """
    if start_year is None:
        start_year = date.today().year
    annual = calculate_tooling_amortization(tooling_cost, retooling_years)

    years = []
    for i in range(projection_years):
        retool = is_retooling_year(i, retooling_years)
        years.append(ToolingYearProjection(
            year=start_year + i,
            amortization_expense=annual,
            retooling_investment=tooling_cost if retool else 0.0,
            is_retooling_year=retool,
        ))

    return ToolingProjection(
        years=years,
        total_amortization=sum(y.amortization_expense for y in years),
        total_retooling_investments=sum(y.retooling_investment for y in years),
    )


def calculate_tooling_cost_per_unit(annual_amortization: float, annual_units: float) -> float:
    if annual_units <= 0:
        return 0.0
    return annual_amortization / annual_units
