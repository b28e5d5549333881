"""Discounted cash flow math: NPV, IRR, free cash flow, terminal value, payback"""
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from config.default_params import COMPARABLE_COMPANIES
from .models import TerminalValueMethod

MAX_ITERATIONS = 100
TOLERANCE = 1e-10
INITIAL_GUESS = 0.1

# Rate search bounds for IRR (-99% .. 1000%)
IRR_LOWER_BOUND = -0.99
IRR_UPPER_BOUND = 10.0


@dataclass(frozen=True)
class PeriodCashFlow:
    period: int
    fcf: float
    discount_factor: float
    present_value: float


@dataclass(frozen=True)
class NPVResult:
    npv: float
    cash_flows: List[PeriodCashFlow]
    discount_rate: float


@dataclass(frozen=True)
class IRRResult:
    irr: float           # nan when there is no solution
    converged: bool
    iterations: int


@dataclass(frozen=True)
class TerminalValueResult:
    terminal_value: float
    present_value: float
    method: TerminalValueMethod


@dataclass(frozen=True)
class ComparableCompany:
    name: str
    ticker: str
    ev_ebitda: float
    ev_revenue: float
    sector: str
    market_cap: float    # $M


@dataclass(frozen=True)
class MultipleStats:
    mean: float
    median: float
    min: float
    max: float


# --- Present value ----------------------------------------------------------

def calculate_discount_factor(rate: float, period: float) -> float:
    """1 / (1 + r)^t"""
    if rate < -1:
        raise ValueError("Discount rate cannot be less than -100%")
    if period < 0:
        raise ValueError("Period must be non-negative")
    return 1 / (1 + rate) ** period


def calculate_present_value(cash_flow: float, rate: float, period: float) -> float:
    return cash_flow * calculate_discount_factor(rate, period)


def calculate_npv(cash_flows: Sequence[float], discount_rate: float, initial_investment: float = 0) -> NPVResult:
    """
    Net present value of end-of-period cash flows

    Args:
        cash_flows: Flows for periods 1..n
        discount_rate: Per-period rate
        initial_investment: Outflow at period 0, entered as a positive number

    Returns:
        NPVResult with one row per period (period 0 only when there is an investment)
    """
    if discount_rate < -1:
        raise ValueError("Discount rate cannot be less than -100%")

    rows = []
    npv = -initial_investment
    if initial_investment != 0:
        rows.append(PeriodCashFlow(0, -initial_investment, 1.0, -initial_investment))

    for period, cf in enumerate(cash_flows, start=1):
        factor = calculate_discount_factor(discount_rate, period)
        pv = cf * factor
        rows.append(PeriodCashFlow(period, cf, factor, pv))
        npv += pv

    return NPVResult(npv=npv, cash_flows=rows, discount_rate=discount_rate)


def calculate_npv_with_periods(flows: Sequence[Tuple[float, float]], discount_rate: float) -> NPVResult:
    """NPV of (fcf, period) pairs at arbitrary periods; rows come back sorted by period"""
    if discount_rate < -1:
        raise ValueError("Discount rate cannot be less than -100%")

    rows = []
    for fcf, period in flows:
        factor = calculate_discount_factor(discount_rate, period)
        rows.append(PeriodCashFlow(period, fcf, factor, fcf * factor))

    rows.sort(key=lambda r: r.period)
    return NPVResult(npv=sum(r.present_value for r in rows), cash_flows=rows, discount_rate=discount_rate)


# --- IRR --------------------------------------------------------------------

def _npv_at(cash_flows: Sequence[float], rate: float) -> float:
    # cash_flows[0] is period 0
    return sum(cf / (1 + rate) ** t for t, cf in enumerate(cash_flows))


def _npv_derivative(cash_flows: Sequence[float], rate: float) -> float:
    return sum(-t * cf / (1 + rate) ** (t + 1) for t, cf in enumerate(cash_flows) if t > 0)


def _bisection_irr(cash_flows: Sequence[float]) -> IRRResult:
    low, high = IRR_LOWER_BOUND, IRR_UPPER_BOUND
    npv_low = _npv_at(cash_flows, low)
    npv_high = _npv_at(cash_flows, high)
    if npv_low * npv_high > 0:
        return IRRResult(math.nan, False, 0)

    for i in range(MAX_ITERATIONS):
        mid = (low + high) / 2
        npv_mid = _npv_at(cash_flows, mid)
        if abs(npv_mid) < TOLERANCE or (high - low) / 2 < TOLERANCE:
            return IRRResult(mid, True, i + 1)
        if npv_mid * npv_low < 0:
            high = mid
        else:
            low, npv_low = mid, npv_mid

    return IRRResult((low + high) / 2, False, MAX_ITERATIONS)


def calculate_irr(cash_flows: Sequence[float], initial_guess: float = INITIAL_GUESS) -> IRRResult:
    """
    Internal rate of return by Newton-Raphson, falling back to bisection

    cash_flows[0] is the period-0 flow (usually the negative investment).
    Flows with no sign change have no IRR and return nan, not converged.
    """
    if len(cash_flows) < 2:
        raise ValueError("At least 2 cash flows required to calculate IRR")

    if not (any(cf > 0 for cf in cash_flows) and any(cf < 0 for cf in cash_flows)):
        return IRRResult(math.nan, False, 0)

    rate = initial_guess
    for i in range(MAX_ITERATIONS):
        npv = _npv_at(cash_flows, rate)
        if abs(npv) < TOLERANCE:
            return IRRResult(rate, True, i + 1)

        derivative = _npv_derivative(cash_flows, rate)
        if abs(derivative) < 1e-15:
            break
        rate = min(max(rate - npv / derivative, IRR_LOWER_BOUND), IRR_UPPER_BOUND)

    return _bisection_irr(cash_flows)


def calculate_mirr(cash_flows: Sequence[float], finance_rate: float, reinvest_rate: float) -> float:
    """Modified IRR: outflows discounted at the finance rate, inflows compounded at the reinvestment rate"""
    n = len(cash_flows) - 1
    pv_negative = 0.0
    fv_positive = 0.0
    for t, cf in enumerate(cash_flows):
        if cf < 0:
            pv_negative += cf / (1 + finance_rate) ** t
        else:
            fv_positive += cf * (1 + reinvest_rate) ** (n - t)

    if pv_negative >= 0:
        raise ValueError("No negative cash flows found")
    return (fv_positive / abs(pv_negative)) ** (1 / n) - 1


# --- Free cash flow ---------------------------------------------------------

def calculate_fcf(ebitda: float, capex: float, working_capital_change: float, taxes: float) -> float:
    """FCF = EBITDA - CapEx - change in working capital - taxes"""
    for label, value in (("EBITDA", ebitda), ("CapEx", capex),
                         ("Working capital change", working_capital_change), ("Taxes", taxes)):
        if math.isnan(value):
            raise ValueError(f"{label} must be a valid number")
    return ebitda - capex - working_capital_change - taxes


def project_fcf(base_fcf: float, growth_rate: float, years: int) -> List[float]:
    """Compound a base FCF forward; the first entry is already one year of growth"""
    if years < 1:
        raise ValueError("Years must be at least 1")
    if growth_rate < -1:
        raise ValueError("Growth rate cannot be less than -100%")

    out = []
    fcf = base_fcf
    for _ in range(years):
        fcf *= 1 + growth_rate
        out.append(fcf)
    return out


# --- Terminal value ---------------------------------------------------------

def calculate_gordon_growth_tv(final_year_fcf: float, growth_rate: float, discount_rate: float) -> float:
    """TV = FCF * (1 + g) / (r - g)"""
    if growth_rate >= discount_rate:
        raise ValueError("Growth rate must be less than discount rate for Gordon Growth model")
    if discount_rate <= 0:
        raise ValueError("Discount rate must be positive")
    return final_year_fcf * (1 + growth_rate) / (discount_rate - growth_rate)


def calculate_exit_multiple_tv(final_year_ebitda: float, exit_multiple: float) -> float:
    if exit_multiple <= 0:
        raise ValueError("Exit multiple must be positive")
    return final_year_ebitda * exit_multiple


def calculate_terminal_value(
    method: TerminalValueMethod,
    discount_rate: float,
    projection_years: int,
    final_year_fcf: Optional[float] = None,
    growth_rate: Optional[float] = None,
    final_year_ebitda: Optional[float] = None,
    exit_multiple: Optional[float] = None,
) -> TerminalValueResult:
    """Terminal value by either method, discounted back from the last projection year"""
    method = TerminalValueMethod(method)
    if method == TerminalValueMethod.GORDON_GROWTH:
        if final_year_fcf is None:
            raise ValueError("final_year_fcf required for Gordon Growth method")
        if growth_rate is None:
            raise ValueError("growth_rate required for Gordon Growth method")
        tv = calculate_gordon_growth_tv(final_year_fcf, growth_rate, discount_rate)
    else:
        if final_year_ebitda is None:
            raise ValueError("final_year_ebitda required for Exit Multiple method")
        if exit_multiple is None:
            raise ValueError("exit_multiple required for Exit Multiple method")
        tv = calculate_exit_multiple_tv(final_year_ebitda, exit_multiple)

    return TerminalValueResult(
        terminal_value=tv,
        present_value=tv * calculate_discount_factor(discount_rate, projection_years),
        method=method,
    )


def calculate_implied_multiple(gordon_tv: float, final_year_ebitda: float) -> float:
    if final_year_ebitda <= 0:
        raise ValueError("EBITDA must be positive")
    return gordon_tv / final_year_ebitda


def calculate_implied_growth_rate(exit_multiple_tv: float, final_year_fcf: float, discount_rate: float) -> float:
    """Growth rate the Gordon model would need to reproduce an exit-multiple TV"""
    return (exit_multiple_tv * discount_rate - final_year_fcf) / (exit_multiple_tv + final_year_fcf)


def compare_terminal_value_methods(
    final_year_fcf: float,
    final_year_ebitda: float,
    growth_rate: float,
    discount_rate: float,
    exit_multiple: float,
    projection_years: int,
) -> Dict[str, Dict[str, float]]:
    factor = calculate_discount_factor(discount_rate, projection_years)

    gordon_tv = calculate_gordon_growth_tv(final_year_fcf, growth_rate, discount_rate)
    exit_tv = calculate_exit_multiple_tv(final_year_ebitda, exit_multiple)
    tv_diff = exit_tv - gordon_tv

    return {
        "gordon_growth": {
            "terminal_value": gordon_tv,
            "present_value": gordon_tv * factor,
            "implied_ebitda_multiple": calculate_implied_multiple(gordon_tv, final_year_ebitda),
        },
        "exit_multiple": {
            "terminal_value": exit_tv,
            "present_value": exit_tv * factor,
            "implied_growth_rate": calculate_implied_growth_rate(exit_tv, final_year_fcf, discount_rate),
        },
        "difference": {
            "terminal_value": tv_diff,
            "present_value": (exit_tv - gordon_tv) * factor,
            "percent_difference": tv_diff / gordon_tv * 100 if gordon_tv != 0 else 0.0,
        },
    }


# --- Comparables ------------------------------------------------------------

def get_comparable_companies(
    sector: Optional[str] = None,
    min_multiple: Optional[float] = None,
    max_multiple: Optional[float] = None,
) -> List[ComparableCompany]:
    """Public comps filtered by sector substring (case-insensitive) and EV/EBITDA range"""
    companies = [ComparableCompany(**c) for c in COMPARABLE_COMPANIES]
    if sector:
        companies = [c for c in companies if sector.lower() in c.sector.lower()]
    if min_multiple is not None:
        companies = [c for c in companies if c.ev_ebitda >= min_multiple]
    if max_multiple is not None:
        companies = [c for c in companies if c.ev_ebitda <= max_multiple]
    return companies


def _stats(values: List[float]) -> MultipleStats:
    values = sorted(values)
    mid = len(values) // 2
    median = values[mid] if len(values) % 2 else (values[mid - 1] + values[mid]) / 2
    return MultipleStats(sum(values) / len(values), median, values[0], values[-1])


def get_comparable_multiple_stats(companies: Optional[List[ComparableCompany]] = None) -> Dict[str, MultipleStats]:
    if companies is None:
        companies = get_comparable_companies()
    if not companies:
        zero = MultipleStats(0.0, 0.0, 0.0, 0.0)
        return {"ev_ebitda": zero, "ev_revenue": zero}
    return {
        "ev_ebitda": _stats([c.ev_ebitda for c in companies]),
        "ev_revenue": _stats([c.ev_revenue for c in companies]),
    }


# --- Payback ----------------------------------------------------------------

def _payback(flows: Sequence[float]) -> Optional[float]:
    cumulative = 0.0
    for t, cf in enumerate(flows):
        previous = cumulative
        cumulative += cf
        if previous < 0 and cumulative >= 0:
            # Linear fraction of the year in which the balance turns
            return (t - 1) + (-previous / cf) if cf != 0 else float(t)
    return None


def calculate_payback_period(cash_flows: Sequence[float]) -> Optional[float]:
    """Years until cumulative cash turns non-negative; None if never recovered"""
    return _payback(cash_flows)


def calculate_discounted_payback_period(cash_flows: Sequence[float], discount_rate: float) -> Optional[float]:
    return _payback([cf / (1 + discount_rate) ** t for t, cf in enumerate(cash_flows)])
