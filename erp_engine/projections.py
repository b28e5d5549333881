"""Unit and revenue projections by adoption scenario"""
from dataclasses import dataclass
from typing import Dict, List

from config.default_params import BASE_PRICE, DEFAULT_DISCOUNT_RATE, PROJECTION_TABLE
from .revenue import calculate_revenue

SCENARIO_NAMES = ['max', 'upside', 'base', 'downside', 'min']


@dataclass(frozen=True)
class YearRevenue:
    year: int            # 1-based
    units: int
    gross_revenue: float
    discount_amount: float
    net_revenue: float


@dataclass(frozen=True)
class ScenarioRevenue:
    scenario: str
    years: List[YearRevenue]
    total_units: int
    total_gross_revenue: float
    total_net_revenue: float


def get_annual_projections(scenario: str, years: int) -> List[int]:
    """
    Annual units for a scenario (case-insensitive name). The table covers
    years 1-6, so a longer horizon returns only the years it has.
    """
    table = PROJECTION_TABLE.get(scenario.lower())
    if table is None:
        raise ValueError(f"Unknown scenario: {scenario}")
    return list(table[:years])


def calculate_scenario_revenue(
    scenario: str,
    years: int,
    price: float = BASE_PRICE,
    discount_rate: float = DEFAULT_DISCOUNT_RATE,
) -> ScenarioRevenue:
    rows = []
    for i, units in enumerate(get_annual_projections(scenario, years)):
        gross = units * price
        net = calculate_revenue(units, price, discount_rate)
        rows.append(YearRevenue(
            year=i + 1,
            units=units,
            gross_revenue=gross,
            discount_amount=gross - net,
            net_revenue=net,
        ))

    return ScenarioRevenue(
        scenario=scenario,
        years=rows,
        total_units=sum(r.units for r in rows),
        total_gross_revenue=sum(r.gross_revenue for r in rows),
        total_net_revenue=sum(r.net_revenue for r in rows),
    )


def calculate_all_scenarios_revenue(
    years: int,
    price: float = BASE_PRICE,
    discount_rate: float = DEFAULT_DISCOUNT_RATE,
) -> List[ScenarioRevenue]:
    return [calculate_scenario_revenue(s, years, price, discount_rate) for s in SCENARIO_NAMES]


def get_revenue_matrix(
    years: int,
    price: float = BASE_PRICE,
    discount_rate: float = DEFAULT_DISCOUNT_RATE,
) -> Dict[str, List[float]]:
    """scenario -> net revenue per year"""
    return {
        result.scenario: [y.net_revenue for y in result.years]
        for result in calculate_all_scenarios_revenue(years, price, discount_rate)
    }
