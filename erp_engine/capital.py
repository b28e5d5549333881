"""Capital raise scenarios: dilution, runway and raise recommendation"""
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from config.default_params import (
    DEFAULT_RAISE_AMOUNTS, DEFAULT_PRE_MONEY_VALUATION, FOUNDER_STARTING_OWNERSHIP,
)
from .models import BurnRateComponents, RaiseInstrument, RaiseScenarioInput, RunwayRisk
from .money import format_currency, round_half_up

PER_100K = 100_000


@dataclass(frozen=True)
class DilutionResult:
    dilution_percent: float        # fraction, 0..1
    post_money_valuation: float


@dataclass(frozen=True)
class RaiseScenarioResult:
    raise_amount: float
    instrument: RaiseInstrument
    pre_money_valuation: float
    post_money_valuation: float
    dilution_percent: float        # effective dilution after instrument adjustment
    runway_months: float           # whole months, inf when there is no burn
    founder_ownership_post: float
    investor_ownership_post: float
    dilution_per_100k: float
    months_per_100k: float
    runway_risk_level: RunwayRisk


@dataclass(frozen=True)
class RaiseScenarioMatrix:
    scenarios: List[RaiseScenarioResult]
    burn_rate: BurnRateComponents
    current_cash: float
    recommended_scenario: Optional[RaiseScenarioResult]
    recommendation_reason: str


def calculate_dilution(raise_amount: float, pre_money_valuation: float) -> DilutionResult:
    """Dilution = raise / (pre-money + raise)"""
    if pre_money_valuation <= 0:
        raise ValueError("Pre-money valuation must be positive")
    if raise_amount < 0:
        raise ValueError("Raise amount cannot be negative")

    post_money = pre_money_valuation + raise_amount
    return DilutionResult(dilution_percent=raise_amount / post_money, post_money_valuation=post_money)


def calculate_runway(total_cash: float, monthly_burn: float) -> float:
    if monthly_burn <= 0:
        return math.inf
    return math.floor(total_cash / monthly_burn)


def assess_runway_risk(runway_months: float) -> RunwayRisk:
    if runway_months < 6:
        return RunwayRisk.CRITICAL
    if runway_months < 12:
        return RunwayRisk.LOW
    if runway_months < 18:
        return RunwayRisk.MODERATE
    if runway_months < 24:
        return RunwayRisk.COMFORTABLE
    return RunwayRisk.EXTENDED


def calculate_burn_rate(
    headcount: int,
    avg_salary: float,
    benefits_multiplier: float,
    monthly_marketing: float,
    monthly_operations: float,
    monthly_cogs: float = 0.0,
) -> BurnRateComponents:
    """Monthly burn; payroll is annual salary loaded by benefits, spread over 12 months"""
    payroll = headcount * avg_salary * benefits_multiplier / 12
    return BurnRateComponents(
        payroll=payroll,
        marketing=monthly_marketing,
        operations=monthly_operations,
        cogs=monthly_cogs,
        total=payroll + monthly_marketing + monthly_operations + monthly_cogs,
    )


def _effective_dilution(inp: RaiseScenarioInput, dilution: float) -> float:
    # Conversion discounts issue extra shares; approximated as half the discount on top
    if inp.instrument == RaiseInstrument.SAFE:
        terms = inp.safe_terms
    elif inp.instrument == RaiseInstrument.CONVERTIBLE_DEBT:
        terms = inp.convertible_terms
    elif inp.instrument == RaiseInstrument.EQUITY:
        terms = None
    else:
        raise ValueError(f"Unhandled raise instrument: {inp.instrument}")

    if terms is not None and terms.discount_rate:
        return dilution * (1 + terms.discount_rate * 0.5)
    return dilution


def calculate_raise_scenario(
    inp: RaiseScenarioInput,
    burn_rate: BurnRateComponents,
    current_cash: float,
    founder_current_ownership: float = FOUNDER_STARTING_OWNERSHIP,
) -> RaiseScenarioResult:
    """
    Evaluate one raise amount

    Args:
        inp: Raise amount, instrument, pre-money valuation and instrument terms
        burn_rate: Monthly burn components
        current_cash: Cash on hand before the raise
        founder_current_ownership: Founder stake before the raise (fraction)

    Returns:
        RaiseScenarioResult with dilution, runway and per-$100k metrics
    """
    dilution = calculate_dilution(inp.raise_amount, inp.pre_money_valuation)
    effective = _effective_dilution(inp, dilution.dilution_percent)

    runway = calculate_runway(current_cash + inp.raise_amount, burn_rate.total)

    if inp.raise_amount > 0:
        dilution_per_100k = effective / inp.raise_amount * PER_100K
        months_per_100k = runway / inp.raise_amount * PER_100K
    else:
        dilution_per_100k = 0.0
        months_per_100k = 0.0

    return RaiseScenarioResult(
        raise_amount=inp.raise_amount,
        instrument=inp.instrument,
        pre_money_valuation=inp.pre_money_valuation,
        post_money_valuation=dilution.post_money_valuation,
        dilution_percent=effective,
        runway_months=runway,
        founder_ownership_post=founder_current_ownership * (1 - effective),
        investor_ownership_post=effective,
        dilution_per_100k=dilution_per_100k,
        months_per_100k=months_per_100k,
        runway_risk_level=assess_runway_risk(runway),
    )


def score_scenario(scenario: RaiseScenarioResult) -> int:
    """Additive score: runway band + dilution band + founder ownership band"""
    score = 0
    runway = scenario.runway_months

    # 18-24 months is the target; longer means over-capitalized
    if 18 <= runway <= 24:
        score += 50
    elif 12 <= runway < 18:
        score += 30
    elif runway > 24:
        score += 25
    elif runway >= 6:
        score += 10

    dilution = scenario.dilution_percent
    if dilution <= 0.10:
        score += 40
    elif dilution <= 0.15:
        score += 30
    elif dilution <= 0.20:
        score += 20
    elif dilution <= 0.25:
        score += 10

    if scenario.founder_ownership_post >= 0.80:
        score += 15
    elif scenario.founder_ownership_post >= 0.70:
        score += 10

    return score


def _runway_text(runway: float) -> str:
    if math.isinf(runway):
        return "provides unlimited runway"
    if 18 <= runway <= 24:
        return "provides optimal 18-24 month runway"
    if runway > 24:
        return f"provides {runway} months runway (may be over-capitalized)"
    return f"provides {runway} months runway"


def generate_recommendation(scenario: RaiseScenarioResult) -> str:
    dilution_pct = f"{scenario.dilution_percent * 100:.1f}%"
    if scenario.dilution_percent <= 0.15:
        dilution_text = f"minimal dilution at {dilution_pct}"
    elif scenario.dilution_percent <= 0.25:
        dilution_text = f"moderate dilution at {dilution_pct}"
    else:
        dilution_text = f"significant dilution at {dilution_pct}"

    reasons = [
        _runway_text(scenario.runway_months),
        dilution_text,
        f"post-money valuation of {format_currency(scenario.post_money_valuation)}",
    ]
    raise_k = round_half_up(scenario.raise_amount / 1000)
    return f"Recommended: ${raise_k}K raise - {', '.join(reasons)}."


def build_raise_scenario_matrix(
    burn_rate: BurnRateComponents,
    current_cash: float,
    pre_money_valuation: float = DEFAULT_PRE_MONEY_VALUATION,
    raise_amounts: Sequence[float] = DEFAULT_RAISE_AMOUNTS,
    instrument: RaiseInstrument = RaiseInstrument.EQUITY,
    founder_current_ownership: float = FOUNDER_STARTING_OWNERSHIP,
) -> RaiseScenarioMatrix:
    """Evaluate each raise amount and recommend the highest-scoring one (first wins ties)"""
    scenarios = [
        calculate_raise_scenario(
            RaiseScenarioInput(raise_amount=amount, instrument=instrument,
                               pre_money_valuation=pre_money_valuation),
            burn_rate,
            current_cash,
            founder_current_ownership,
        )
        for amount in raise_amounts
    ]

    if not scenarios:
        return RaiseScenarioMatrix(scenarios, burn_rate, current_cash, None, "No raise amounts to compare.")

    best, best_score = scenarios[0], score_scenario(scenarios[0])
    for scenario in scenarios[1:]:
        score = score_scenario(scenario)
        if score > best_score:
            best, best_score = scenario, score

    return RaiseScenarioMatrix(
        scenarios=scenarios,
        burn_rate=burn_rate,
        current_cash=current_cash,
        recommended_scenario=best,
        recommendation_reason=generate_recommendation(best),
    )
