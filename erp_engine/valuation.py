"""Scenario DCF valuation: units -> P&L -> free cash flow -> enterprise value"""
import logging
from typing import Dict, List, Optional

from .dcf import calculate_discount_factor, calculate_gordon_growth_tv
from .models import ValuationAssumptions
from .projections import SCENARIO_NAMES, get_annual_projections

logger = logging.getLogger(__name__)

DEFAULT_VALUATION_YEARS = 10


def _cogs(units: float, a: ValuationAssumptions, i: int) -> float:
    unit_cost = a.unit_cost * (1 - a.cost_reduction_per_year) ** i
    return units * (unit_cost + a.shipping_per_unit)


def _marketing(net_revenue: float, a: ValuationAssumptions) -> float:
    return a.marketing_base_budget + net_revenue * a.marketing_percent_of_revenue


def _gna(a: ValuationAssumptions, i: int) -> float:
    salary = a.avg_salary * (1 + a.salary_growth_rate) ** i
    return a.headcount * salary * a.benefits_multiplier + a.office_and_ops


def _pct(value: float, base: float) -> float:
    return value / base * 100 if base > 0 else 0.0


def project_fcf_by_scenario(
    scenario: str,
    assumptions: Optional[ValuationAssumptions] = None,
    years: int = DEFAULT_VALUATION_YEARS,
):
    """
    Year-by-year free cash flow build for one adoption scenario

    FCF = NOPAT + depreciation - capex - change in working capital. Taxes are
    charged only on positive EBIT and depreciation is zero (no fixed asset
    base). The horizon stops where the unit table does.

    Returns:
        dict with "years" rows and a "summary" roll-up
    """
    if years < 1:
        raise ValueError("Years must be at least 1")
    a = assumptions or ValuationAssumptions()
    units_by_year = get_annual_projections(scenario, years)

    rows = []
    previous_wc = 0.0
    cumulative_fcf = 0.0
    cumulative_pv = 0.0
    break_even_year = None
    growth_rates = []

    for i, units in enumerate(units_by_year):
        year = i + 1
        price = a.price_per_unit * (1 + a.annual_price_increase) ** i
        net_revenue = units * price * (1 - a.discount_rate)

        cogs = _cogs(units, a, i)
        gross_profit = net_revenue - cogs
        marketing = _marketing(net_revenue, a)
        gna = _gna(a, i)
        ebitda = gross_profit - marketing - gna

        depreciation = 0.0
        ebit = ebitda - depreciation
        taxes = ebit * a.tax_rate if ebit > 0 else 0.0
        nopat = ebit - taxes

        capex = a.capex_year1 * (1 + a.capex_growth_rate) ** i
        working_capital = net_revenue * a.working_capital_percent
        wc_change = working_capital - previous_wc
        previous_wc = working_capital

        fcf = nopat + depreciation - capex - wc_change
        factor = calculate_discount_factor(a.wacc, year)
        pv = fcf * factor

        cumulative_fcf += fcf
        cumulative_pv += pv
        if break_even_year is None and cumulative_fcf > 0:
            break_even_year = year
        if rows and rows[-1]["fcf"] != 0:
            prior = rows[-1]["fcf"]
            growth_rates.append((fcf - prior) / abs(prior))

        rows.append({
            "year": year,
            "units": units,
            "revenue": net_revenue,
            "cogs": cogs,
            "gross_profit": gross_profit,
            "gross_margin_pct": _pct(gross_profit, net_revenue),
            "marketing": marketing,
            "gna": gna,
            "ebitda": ebitda,
            "ebitda_margin_pct": _pct(ebitda, net_revenue),
            "depreciation": depreciation,
            "ebit": ebit,
            "taxes": taxes,
            "nopat": nopat,
            "capex": capex,
            "working_capital": working_capital,
            "working_capital_change": wc_change,
            "fcf": fcf,
            "fcf_margin_pct": _pct(fcf, net_revenue),
            "discount_factor": factor,
            "present_value": pv,
            "cumulative_fcf": cumulative_fcf,
            "cumulative_pv": cumulative_pv,
        })

    first_fcf = rows[0]["fcf"] if rows else 0.0
    last_fcf = rows[-1]["fcf"] if rows else 0.0
    fcf_cagr = 0.0
    if first_fcf > 0 and last_fcf > 0 and len(rows) > 1:
        fcf_cagr = (last_fcf / first_fcf) ** (1 / (len(rows) - 1)) - 1

    total_revenue = sum(r["revenue"] for r in rows)
    total_fcf = sum(r["fcf"] for r in rows)

    return {
        "scenario": scenario,
        "years": rows,
        "summary": {
            "scenario": scenario,
            "total_revenue": total_revenue,
            "total_ebitda": sum(r["ebitda"] for r in rows),
            "total_capex": sum(r["capex"] for r in rows),
            "total_wc_change": sum(r["working_capital_change"] for r in rows),
            "total_taxes": sum(r["taxes"] for r in rows),
            "total_fcf": total_fcf,
            "total_pv": cumulative_pv,
            "avg_fcf_margin_pct": _pct(total_fcf, total_revenue),
            "fcf_cagr": fcf_cagr,
            "fcf_growth_rates": growth_rates,
            "break_even_year": break_even_year,
        },
    }


def calculate_dcf(
    scenario: str,
    assumptions: Optional[ValuationAssumptions] = None,
    years: int = DEFAULT_VALUATION_YEARS,
):
    """
    Enterprise value for one scenario: discounted FCF plus a Gordon Growth
    terminal value on the final year, discounted from the last projection year.
    Equity value equals enterprise value (no net debt).
    """
    a = assumptions or ValuationAssumptions()
    projection = project_fcf_by_scenario(scenario, a, years)
    rows = projection["years"]
    final = rows[-1]
    horizon = len(rows)

    terminal_value = calculate_gordon_growth_tv(final["fcf"], a.terminal_growth_rate, a.wacc)
    terminal_value_pv = terminal_value * calculate_discount_factor(a.wacc, horizon)
    enterprise_value = projection["summary"]["total_pv"] + terminal_value_pv

    logger.debug(
        "DCF %s over %d years: PV %.0f, TV PV %.0f, EV %.0f",
        scenario, horizon, projection["summary"]["total_pv"], terminal_value_pv, enterprise_value,
    )

    return {
        "scenario": scenario,
        "years": rows,
        "projection_years": horizon,
        "terminal_value": terminal_value,
        "terminal_value_pv": terminal_value_pv,
        "enterprise_value": enterprise_value,
        "equity_value": enterprise_value,
        "ev_to_revenue": enterprise_value / final["revenue"] if final["revenue"] > 0 else 0.0,
        "ev_to_ebitda": enterprise_value / final["ebitda"] if final["ebitda"] > 0 else 0.0,
    }


def calculate_all_dcf(
    assumptions: Optional[ValuationAssumptions] = None,
    years: int = DEFAULT_VALUATION_YEARS,
) -> Dict[str, dict]:
    return {s: calculate_dcf(s, assumptions, years) for s in SCENARIO_NAMES}


def compare_fcf_scenarios(
    assumptions: Optional[ValuationAssumptions] = None,
    years: int = DEFAULT_VALUATION_YEARS,
):
    """Best and worst scenario by total FCF, plus the base case"""
    summaries: List[dict] = [project_fcf_by_scenario(s, assumptions, years)["summary"] for s in SCENARIO_NAMES]
    ranked = sorted(summaries, key=lambda s: s["total_fcf"], reverse=True)
    base = next(s for s in summaries if s["scenario"] == "base")
    return {
        "scenarios": summaries,
        "best_case": ranked[0],
        "worst_case": ranked[-1],
        "base_case": base,
    }


def get_valuation_summary(result: dict) -> str:
    return (
        f"{result['scenario'].title()} scenario: enterprise value ${result['enterprise_value']:,.0f} "
        f"({result['ev_to_revenue']:.1f}x final-year revenue), "
        f"terminal value ${result['terminal_value']:,.0f} "
        f"(PV ${result['terminal_value_pv']:,.0f})"
    )
