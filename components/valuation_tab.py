"""DCF valuation and G&A personnel tab."""

from datetime import date

import pandas as pd
import streamlit as st

from erp_engine.dcf import compare_terminal_value_methods, get_comparable_multiple_stats
from erp_engine.gna import calculate_annual_cost, sum_annual_cost
from erp_engine.models import Personnel, PersonnelType, RateType, ValuationAssumptions
from erp_engine.money import format_compact_currency, format_currency, format_percent
from erp_engine.projections import SCENARIO_NAMES
from erp_engine.valuation import calculate_all_dcf, calculate_dcf, get_valuation_summary
from utils.export import XLSX_MIME, to_excel_bytes
from utils.frames import gna_monthly_frame, valuation_comparison_frame, valuation_years_frame
from utils.visualizations import create_fcf_chart, create_gna_chart

DEFAULT_ROSTER = pd.DataFrame([
    {"name": "Founder / CEO", "role": "CEO", "type": "employee", "rate": 10000.0, "rate_type": "monthly",
     "start_date": date(2025, 1, 1), "burden_rate": 1.3},
    {"name": "Ops Lead", "role": "Operations", "type": "employee", "rate": 7500.0, "rate_type": "monthly",
     "start_date": date(2025, 4, 1), "burden_rate": 1.3},
    {"name": "Bookkeeper", "role": "Finance", "type": "contractor", "rate": 45.0, "rate_type": "hourly",
     "start_date": date(2025, 1, 1), "burden_rate": 1.0},
])


def render_dcf_section(settings):
    st.markdown("### Discounted Cash Flow")
    col1, col2 = st.columns([1, 3])

    defaults = ValuationAssumptions()
    with col1:
        scenario = st.selectbox("Scenario", SCENARIO_NAMES, index=SCENARIO_NAMES.index('base'), key="dcf_scenario")
        a = defaults.with_overrides(
            wacc=st.slider("Discount Rate (WACC)", 0.05, 0.30, defaults.wacc, step=0.01),
            terminal_growth_rate=st.slider("Terminal Growth", 0.0, 0.05, defaults.terminal_growth_rate, step=0.005),
            tax_rate=st.slider("Tax Rate", 0.0, 0.40, defaults.tax_rate, step=0.01),
            exit_multiple=st.number_input("Exit Multiple (EV/EBITDA)", 1.0, 30.0, defaults.exit_multiple, step=0.5),
        )

    if a.terminal_growth_rate >= a.wacc:
        st.error("Terminal growth must be below the discount rate")
        return

    result = calculate_dcf(scenario, a, settings.projection_years)
    years_df = valuation_years_frame(result)
    comparison_df = valuation_comparison_frame(calculate_all_dcf(a, settings.projection_years))

    with col2:
        m = st.columns(4)
        m[0].metric("Enterprise Value", format_currency(result['enterprise_value']))
        m[1].metric("Terminal Value (PV)", format_currency(result['terminal_value_pv']))
        m[2].metric("EV / Revenue", f"{result['ev_to_revenue']:.1f}x")
        m[3].metric("EV / EBITDA", f"{result['ev_to_ebitda']:.1f}x")
        st.caption(get_valuation_summary(result))

        st.plotly_chart(create_fcf_chart(years_df), use_container_width=True)
        st.dataframe(years_df, use_container_width=True, hide_index=True)

        final = result['years'][-1]
        if final['ebitda'] > 0:
            tv = compare_terminal_value_methods(
                final['fcf'], final['ebitda'], a.terminal_growth_rate, a.wacc,
                a.exit_multiple, result['projection_years'],
            )
            stats = get_comparable_multiple_stats()
            st.markdown("#### Terminal Value Methods")
            t = st.columns(3)
            t[0].metric("Gordon Growth TV", format_compact_currency(tv['gordon_growth']['terminal_value']),
                        help=f"Implied {tv['gordon_growth']['implied_ebitda_multiple']:.1f}x EBITDA")
            t[1].metric("Exit Multiple TV", format_compact_currency(tv['exit_multiple']['terminal_value']),
                        help=f"Implied growth {format_percent(tv['exit_multiple']['implied_growth_rate'])}")
            t[2].metric("Comparables Median", f"{stats['ev_ebitda'].median:.1f}x")

        st.markdown("#### All Scenarios")
        st.dataframe(comparison_df, use_container_width=True, hide_index=True)
        st.download_button(
            "Valuation (Excel)",
            data=to_excel_bytes({"Cash Flows": years_df, "Scenarios": comparison_df}),
            file_name=f"dcf_{scenario}.xlsx",
            mime=XLSX_MIME,
        )


def _roster_to_personnel(roster_df):
    people = []
    for i, row in roster_df.dropna(subset=["name", "rate", "start_date"]).iterrows():
        people.append(Personnel(
            id=f"p{i}",
            name=row["name"],
            role=row["role"],
            type=PersonnelType(row["type"]),
            rate=float(row["rate"]),
            rate_type=RateType(row["rate_type"]),
            start_date=pd.Timestamp(row["start_date"]).date(),
            burden_rate=float(row["burden_rate"]),
        ))
    return people


def render_gna_section(settings):
    st.markdown("### G&A Personnel")
    roster = st.data_editor(DEFAULT_ROSTER, num_rows="dynamic", use_container_width=True, key="gna_roster")
    monthly = calculate_annual_cost(_roster_to_personnel(roster), settings.start_year)
    gna_df = gna_monthly_frame(monthly)

    st.metric(f"Annual Personnel Cost ({settings.start_year})", format_compact_currency(sum_annual_cost(monthly)))
    st.plotly_chart(create_gna_chart(gna_df), use_container_width=True)


def render_valuation_tab(settings):
    render_dcf_section(settings)
    st.divider()
    render_gna_section(settings)
