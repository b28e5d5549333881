from typing import Optional

from .models import Assumptions
from .cogs import calculate_cogs_breakdown, config_for_year
from .metrics import gross_margin
from .projections import SCENARIO_NAMES, get_annual_projections
from .revenue import calculate_revenue
from .tooling import generate_tooling_projections


def compute_scenario(
    scenario: str,
    years: int = 10,
    assumptions: Optional[Assumptions] = None,
    start_year: Optional[int] = None,
):
    """
    Year-by-year unit economics for one adoption scenario

    Args:
        scenario: Adoption scenario name (max, upside, base, downside, min)
        years: Requested horizon; capped at the years the unit table covers
        assumptions: Price, discount, COGS split and tooling assumptions
        start_year: First calendar year for the tooling schedule

    Returns:
        dict with "years" rows and a "summary" roll-up
    """
    a = assumptions or Assumptions()
    units_by_year = get_annual_projections(scenario, years)
    tooling = generate_tooling_projections(a.tooling_cost, a.retooling_years, len(units_by_year), start_year)

    rows = []
    for i, units in enumerate(units_by_year):
        gross = units * a.base_price
        net = calculate_revenue(units, a.base_price, a.discount_rate)

        # Per-unit COGS keeps stepping down each year even with no volume
        year_cogs = config_for_year(a.cogs, i, a.annual_cost_reduction)
        cogs_per_unit = year_cogs.total_per_unit
        cogs_total = calculate_cogs_breakdown(units, year_cogs).total_cost if units > 0 else 0.0

        tool = tooling.years[i]
        gross_profit = net - cogs_total
        rows.append({
            "year": i + 1,
            "calendar_year": tool.year,
            "units": units,
            "gross_revenue": gross,
            "net_revenue": net,
            "cogs_per_unit": cogs_per_unit,
            "cogs_total": cogs_total,
            "gross_profit": gross_profit,
            "gross_margin": gross_margin(net, cogs_total),
            "tooling_amortization": tool.amortization_expense,
            "retooling_investment": tool.retooling_investment,
            "contribution": gross_profit - tool.amortization_expense,
        })

    margins = [r["gross_margin"] for r in rows if r["net_revenue"] > 0]
    first_profitable = next((r["year"] for r in rows if r["contribution"] > 0), None)

    return {
        "scenario": scenario,
        "years": rows,
        "summary": {
            "scenario": scenario,
            "total_units": sum(r["units"] for r in rows),
            "total_net_revenue": sum(r["net_revenue"] for r in rows),
            "total_cogs": sum(r["cogs_total"] for r in rows),
            "total_gross_profit": sum(r["gross_profit"] for r in rows),
            "total_tooling": tooling.total_amortization,
            "total_retooling": tooling.total_retooling_investments,
            "total_contribution": sum(r["contribution"] for r in rows),
            "avg_gross_margin": sum(margins) / len(margins) if margins else 0.0,
            "first_profitable_year": first_profitable,
        },
    }


def compare_scenarios(years: int = 10, assumptions: Optional[Assumptions] = None, start_year: Optional[int] = None):
    """Summary roll-up for every adoption scenario, best case first"""
    return [compute_scenario(s, years, assumptions, start_year)["summary"] for s in SCENARIO_NAMES]
