import math

import pytest
from erp_engine.capital import (
    calculate_dilution, calculate_runway, assess_runway_risk, calculate_burn_rate,
    calculate_raise_scenario, score_scenario, build_raise_scenario_matrix,
)
from erp_engine.models import (
    BurnRateComponents, RaiseInstrument, RaiseScenarioInput, RunwayRisk, SAFETerms,
    ConvertibleDebtTerms,
)


def base_burn():
    return BurnRateComponents(payroll=20000, marketing=5000, operations=5000, cogs=0, total=30000)


def test_dilution():
    res = calculate_dilution(500000, 2000000)
    assert res.post_money_valuation == 2500000
    assert abs(res.dilution_percent - 0.20) < 1e-12


def test_dilution_bounds():
    for raise_amount in (0, 1, 250_000, 10_000_000, 1e12):
        d = calculate_dilution(raise_amount, 2_000_000).dilution_percent
        assert 0 <= d < 1


def test_dilution_validation():
    with pytest.raises(ValueError, match="Pre-money valuation must be positive"):
        calculate_dilution(100, 0)
    with pytest.raises(ValueError, match="Raise amount cannot be negative"):
        calculate_dilution(-1, 1000)


def test_runway_and_risk():
    assert calculate_runway(125000, 10000) == 12
    assert calculate_runway(125000, 0) == math.inf
    assert assess_runway_risk(5) == RunwayRisk.CRITICAL
    assert assess_runway_risk(6) == RunwayRisk.LOW
    assert assess_runway_risk(12) == RunwayRisk.MODERATE
    assert assess_runway_risk(18) == RunwayRisk.COMFORTABLE
    assert assess_runway_risk(24) == RunwayRisk.EXTENDED
    assert assess_runway_risk(math.inf) == RunwayRisk.EXTENDED


def test_burn_rate():
    burn = calculate_burn_rate(3, 80000, 1.3, 2500, 5000)
    assert abs(burn.payroll - 26000) < 1e-6
    assert abs(burn.total - 33500) < 1e-6
    assert burn.cogs == 0


def test_equity_scenario():
    res = calculate_raise_scenario(
        RaiseScenarioInput(500000, RaiseInstrument.EQUITY, 2000000), base_burn(), 60000
    )
    assert res.runway_months == 18
    assert res.runway_risk_level == RunwayRisk.COMFORTABLE
    assert abs(res.founder_ownership_post - 0.8) < 1e-12
    assert abs(res.investor_ownership_post - 0.2) < 1e-12
    assert abs(res.months_per_100k - 3.6) < 1e-9
    assert abs(res.dilution_per_100k - 0.04) < 1e-12


def test_safe_discount_increases_dilution():
    safe = RaiseScenarioInput(
        500000, RaiseInstrument.SAFE, 2000000, safe_terms=SAFETerms(valuation_cap=5e6, discount_rate=0.2)
    )
    res = calculate_raise_scenario(safe, base_burn(), 0, founder_current_ownership=0.9)
    assert abs(res.dilution_percent - 0.22) < 1e-12
    assert abs(res.founder_ownership_post - 0.9 * 0.78) < 1e-12


def test_convertible_without_discount_matches_equity():
    note = RaiseScenarioInput(
        500000, RaiseInstrument.CONVERTIBLE_DEBT, 2000000,
        convertible_terms=ConvertibleDebtTerms(0.05, 24, 5e6, 0.0),
    )
    res = calculate_raise_scenario(note, base_burn(), 0)
    assert abs(res.dilution_percent - 0.2) < 1e-12


def test_zero_raise_has_zero_per_100k_metrics():
    res = calculate_raise_scenario(RaiseScenarioInput(0, RaiseInstrument.EQUITY, 2000000), base_burn(), 90000)
    assert res.dilution_per_100k == 0
    assert res.months_per_100k == 0
    assert res.runway_months == 3


def test_scores():
    scenarios = build_raise_scenario_matrix(base_burn(), 60000).scenarios
    # 100K: 5 mo / 4.8% ; 250K: 10 mo / 11.1% ; 500K: 18 mo / 20% ; 1M: 35 mo / 33%
    assert [s.runway_months for s in scenarios] == [5, 10, 18, 35]
    assert [score_scenario(s) for s in scenarios] == [55, 55, 85, 25]


def test_matrix_recommendation():
    matrix = build_raise_scenario_matrix(base_burn(), 60000)
    assert matrix.recommended_scenario.raise_amount == 500000
    assert matrix.recommendation_reason == (
        "Recommended: $500K raise - provides optimal 18-24 month runway, "
        "moderate dilution at 20.0%, post-money valuation of $2,500,000."
    )


def test_matrix_tie_goes_to_first():
    matrix = build_raise_scenario_matrix(base_burn(), 60000, raise_amounts=[100000, 250000])
    assert matrix.recommended_scenario.raise_amount == 100000
    assert matrix.recommendation_reason.startswith("Recommended: $100K raise - provides 5 months runway")


def test_matrix_over_capitalized_reason():
    matrix = build_raise_scenario_matrix(base_burn(), 60000, raise_amounts=[1000000])
    assert "35 months runway (may be over-capitalized)" in matrix.recommendation_reason
    assert "significant dilution at 33.3%" in matrix.recommendation_reason


def test_empty_matrix():
    matrix = build_raise_scenario_matrix(base_burn(), 60000, raise_amounts=[])
    assert matrix.recommended_scenario is None
    assert matrix.recommendation_reason == "No raise amounts to compare."
