"""Pre-order deposit impact and raise scenario tab."""

import streamlit as st

from config.default_params import DEFAULT_BURN_INPUTS, DEFAULT_PRE_MONEY_VALUATION, DEFAULT_RAISE_AMOUNTS
from erp_engine.capital import build_raise_scenario_matrix, calculate_burn_rate
from erp_engine.deposit import (
    build_deposit_sensitivity_table,
    calculate_deposit_impact,
    calculate_self_funding_deposit,
)
from erp_engine.models import DepositImpactInput, RaiseInstrument
from erp_engine.money import format_compact_currency, format_currency, format_percent
from utils.export import XLSX_MIME, to_excel_bytes
from utils.frames import deposit_cash_flow_frame, deposit_sensitivity_frame, raise_matrix_frame
from utils.visualizations import (
    create_deposit_cash_flow_chart,
    create_deposit_sensitivity_chart,
    create_raise_matrix_chart,
)


def render_deposit_section():
    st.markdown("### Pre-Order Deposits")
    col1, col2 = st.columns([1, 3])

    with col1:
        inp = DepositImpactInput().with_overrides(
            deposit_amount=st.number_input("Deposit ($)", 0.0, 1000.0, 200.0, step=25.0),
            conversion_rate=st.slider("Conversion Rate", 0.5, 1.0, 0.85, step=0.05),
            pre_order_count=st.number_input("Pre-Orders", 0, 10_000, 250, step=50),
            fulfillment_start_month=st.slider("Fulfillment Start Month", 2, 18, 7),
        )

    result = calculate_deposit_impact(inp)
    cash_df = deposit_cash_flow_frame(result)
    sensitivity_df = deposit_sensitivity_frame(build_deposit_sensitivity_table(inp))
    self_funding = calculate_self_funding_deposit(inp)

    with col2:
        m = st.columns(4)
        m[0].metric("Peak Capital (with deposits)", format_currency(result.peak_capital_with_deposits))
        m[1].metric("Peak Capital (no deposits)", format_currency(result.peak_capital_without_deposits))
        m[2].metric("Capital Reduction", format_percent(result.capital_reduction_percent))
        m[3].metric("Break-even", f"Month {result.break_even_month}" if result.break_even_month else "n/a")

        if self_funding.is_possible:
            st.success(f"Self-funding at a deposit of {format_currency(self_funding.deposit_amount)}")
        else:
            st.warning("Deposits alone cannot fund production at any deposit up to full price")

        st.plotly_chart(create_deposit_cash_flow_chart(cash_df), use_container_width=True)
        st.plotly_chart(create_deposit_sensitivity_chart(sensitivity_df), use_container_width=True)
    return cash_df, sensitivity_df


def render_raise_section():
    st.markdown("### Raise Scenarios")
    col1, col2 = st.columns([1, 3])

    with col1:
        current_cash = st.number_input("Current Cash ($)", 0.0, 10_000_000.0, 50_000.0, step=10_000.0)
        pre_money = st.number_input("Pre-Money Valuation ($)", 100_000.0, 50_000_000.0,
                                    float(DEFAULT_PRE_MONEY_VALUATION), step=250_000.0)
        instrument = RaiseInstrument(st.selectbox("Instrument", [i.value for i in RaiseInstrument]))
        headcount = st.number_input("Headcount", 0, 100, DEFAULT_BURN_INPUTS['headcount'])

    burn = calculate_burn_rate(
        headcount,
        DEFAULT_BURN_INPUTS['avg_salary'],
        DEFAULT_BURN_INPUTS['benefits_multiplier'],
        DEFAULT_BURN_INPUTS['monthly_marketing'],
        DEFAULT_BURN_INPUTS['monthly_operations'],
    )
    matrix = build_raise_scenario_matrix(burn, current_cash, pre_money, DEFAULT_RAISE_AMOUNTS, instrument)
    matrix_df = raise_matrix_frame(matrix)

    with col2:
        st.metric("Monthly Burn", format_currency(burn.total))
        st.info(matrix.recommendation_reason)
        st.plotly_chart(create_raise_matrix_chart(matrix_df), use_container_width=True)
        display = matrix_df.copy()
        display['raise_amount'] = display['raise_amount'].map(format_compact_currency)
        st.dataframe(display, use_container_width=True, hide_index=True)
    return matrix_df


def render_capital_tab():
    cash_df, sensitivity_df = render_deposit_section()
    matrix_df = render_raise_section()
    st.download_button(
        "Capital Plan (Excel)",
        data=to_excel_bytes({
            "Deposit Cash Flow": cash_df.reset_index(),
            "Deposit Sensitivity": sensitivity_df,
            "Raise Matrix": matrix_df,
        }),
        file_name="capital_plan.xlsx",
        mime=XLSX_MIME,
    )
