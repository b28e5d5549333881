import math

import pytest
from erp_engine.dcf import (
    calculate_discount_factor, calculate_present_value, calculate_npv, calculate_npv_with_periods,
    calculate_irr, calculate_mirr, calculate_fcf, project_fcf,
    calculate_gordon_growth_tv, calculate_exit_multiple_tv, calculate_terminal_value,
    calculate_implied_multiple, calculate_implied_growth_rate, compare_terminal_value_methods,
    get_comparable_companies, get_comparable_multiple_stats,
    calculate_payback_period, calculate_discounted_payback_period,
)
from erp_engine.models import TerminalValueMethod


# --- Present value ----------------------------------------------------------

def test_discount_factor_and_present_value():
    assert calculate_discount_factor(0.10, 0) == 1
    assert calculate_discount_factor(0.10, 2) == pytest.approx(1 / 1.21)
    assert calculate_present_value(121, 0.10, 2) == pytest.approx(100)


def test_discount_factor_validation():
    with pytest.raises(ValueError, match="Discount rate cannot be less than -100%"):
        calculate_discount_factor(-1.5, 1)
    with pytest.raises(ValueError, match="Period must be non-negative"):
        calculate_discount_factor(0.1, -1)


def test_npv_end_of_period_flows():
    res = calculate_npv([100, 150, 200], 0.10)
    assert res.npv == pytest.approx(100 / 1.1 + 150 / 1.21 + 200 / 1.331)
    assert [r.period for r in res.cash_flows] == [1, 2, 3]
    assert res.discount_rate == 0.10


def test_npv_with_initial_investment():
    res = calculate_npv([100, 150, 200], 0.10, initial_investment=300)
    assert res.npv == pytest.approx(365.1389932 - 300)
    first = res.cash_flows[0]
    assert first.period == 0
    assert first.fcf == -300
    assert first.discount_factor == 1
    assert len(res.cash_flows) == 4


def test_npv_with_periods_sorted():
    res = calculate_npv_with_periods([(100, 2), (50, 1)], 0.0)
    assert res.npv == 150
    assert [r.period for r in res.cash_flows] == [1, 2]
    with pytest.raises(ValueError):
        calculate_npv_with_periods([(1, 1)], -2)


# --- IRR --------------------------------------------------------------------

def test_irr_level_annuity():
    res = calculate_irr([-1000, 400, 400, 400, 400])
    assert res.converged
    assert res.irr == pytest.approx(0.2186, abs=1e-4)
    # NPV at the IRR is zero
    assert sum(cf / (1 + res.irr) ** t for t, cf in enumerate([-1000, 400, 400, 400, 400])) == pytest.approx(0, abs=1e-6)


def test_irr_single_period():
    assert calculate_irr([-100, 110]).irr == pytest.approx(0.10)


def test_irr_without_sign_change_is_nan():
    res = calculate_irr([100, 100, 100])
    assert math.isnan(res.irr)
    assert not res.converged
    assert res.iterations == 0


def test_irr_needs_two_flows():
    with pytest.raises(ValueError, match="At least 2 cash flows required to calculate IRR"):
        calculate_irr([-100])


def test_mirr():
    # FV of inflows at 10%: 605 + 550 + 500
    assert calculate_mirr([-1000, 500, 500, 500], 0.10, 0.10) == pytest.approx(1.655 ** (1 / 3) - 1)
    with pytest.raises(ValueError, match="No negative cash flows found"):
        calculate_mirr([100, 200], 0.1, 0.1)


# --- FCF --------------------------------------------------------------------

def test_fcf():
    assert calculate_fcf(ebitda=1000, capex=200, working_capital_change=50, taxes=100) == 650
    with pytest.raises(ValueError, match="EBITDA must be a valid number"):
        calculate_fcf(math.nan, 0, 0, 0)


def test_project_fcf_compounds():
    assert project_fcf(100, 0.10, 3) == pytest.approx([110, 121, 133.1])
    with pytest.raises(ValueError, match="Years must be at least 1"):
        project_fcf(100, 0.1, 0)
    with pytest.raises(ValueError, match="Growth rate cannot be less than -100%"):
        project_fcf(100, -2, 3)


# --- Terminal value ---------------------------------------------------------

def test_gordon_growth():
    assert calculate_gordon_growth_tv(500_000, 0.02, 0.10) == pytest.approx(6_375_000)
    with pytest.raises(ValueError, match="Growth rate must be less than discount rate"):
        calculate_gordon_growth_tv(500_000, 0.10, 0.10)
    with pytest.raises(ValueError, match="Discount rate must be positive"):
        calculate_gordon_growth_tv(500_000, -0.05, 0)


def test_exit_multiple():
    assert calculate_exit_multiple_tv(100_000, 8) == 800_000
    with pytest.raises(ValueError, match="Exit multiple must be positive"):
        calculate_exit_multiple_tv(100_000, 0)


def test_terminal_value_discounted_from_last_year():
    res = calculate_terminal_value(TerminalValueMethod.GORDON_GROWTH, 0.10, 5,
                                   final_year_fcf=500_000, growth_rate=0.02)
    assert res.terminal_value == pytest.approx(6_375_000)
    assert res.present_value == pytest.approx(6_375_000 / 1.1 ** 5)

    res = calculate_terminal_value("exit-multiple", 0.10, 5, final_year_ebitda=100_000, exit_multiple=8)
    assert res.method == TerminalValueMethod.EXIT_MULTIPLE
    assert res.terminal_value == 800_000


def test_terminal_value_missing_inputs():
    with pytest.raises(ValueError, match="final_year_fcf required"):
        calculate_terminal_value(TerminalValueMethod.GORDON_GROWTH, 0.10, 5, growth_rate=0.02)
    with pytest.raises(ValueError, match="exit_multiple required"):
        calculate_terminal_value(TerminalValueMethod.EXIT_MULTIPLE, 0.10, 5, final_year_ebitda=1)
    with pytest.raises(ValueError):
        calculate_terminal_value("perpetuity", 0.10, 5)


def test_implied_multiple_and_growth_are_inverse():
    assert calculate_implied_multiple(6_375_000, 1_000_000) == pytest.approx(6.375)
    assert calculate_implied_growth_rate(6_375_000, 500_000, 0.10) == pytest.approx(0.02)
    with pytest.raises(ValueError, match="EBITDA must be positive"):
        calculate_implied_multiple(1, 0)


def test_compare_methods():
    cmp = compare_terminal_value_methods(500_000, 1_000_000, 0.02, 0.10, 8, 5)
    assert cmp["gordon_growth"]["terminal_value"] == pytest.approx(6_375_000)
    assert cmp["exit_multiple"]["terminal_value"] == 8_000_000
    assert cmp["difference"]["terminal_value"] == pytest.approx(1_625_000)
    assert cmp["difference"]["percent_difference"] == pytest.approx(1_625_000 / 6_375_000 * 100)


# --- Comparables ------------------------------------------------------------

def test_comparable_filters():
    assert len(get_comparable_companies()) == 8
    assert {c.ticker for c in get_comparable_companies(sector="OUTDOOR")} == {"YETI", "VSTO", "CLAR"}
    assert {c.ticker for c in get_comparable_companies(min_multiple=10)} == {"PTON", "MODG", "YETI", "GOLF"}
    assert {c.ticker for c in get_comparable_companies(max_multiple=8)} == {"VSTO", "DTC"}


def test_comparable_stats():
    stats = get_comparable_multiple_stats()["ev_ebitda"]
    assert stats.mean == pytest.approx(80.9 / 8)
    assert stats.median == pytest.approx(10.0)
    assert (stats.min, stats.max) == (6.5, 14.8)

    empty = get_comparable_multiple_stats([])
    assert empty["ev_revenue"].median == 0


# --- Payback ----------------------------------------------------------------

def test_payback_period():
    assert calculate_payback_period([-1000, 400, 400, 400]) == pytest.approx(2.5)
    assert calculate_payback_period([-1000, 100, 100]) is None
    assert calculate_payback_period([]) is None


def test_discounted_payback_is_later():
    flows = [-1000, 600, 600]
    assert calculate_payback_period(flows) == pytest.approx(1 + 400 / 600)
    assert calculate_discounted_payback_period(flows, 0.10) == pytest.approx(1 + (1000 - 600 / 1.1) / (600 / 1.21))
