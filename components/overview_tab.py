"""Scenario overview tab: revenue and unit economics by adoption scenario."""

import pandas as pd
import streamlit as st

from erp_engine.compute import compare_scenarios, compute_scenario
from erp_engine.projections import SCENARIO_NAMES, get_revenue_matrix
from utils.export import XLSX_MIME, to_csv_bytes, to_excel_bytes
from utils.frames import scenario_revenue_frame, scenario_years_frame
from utils.visualizations import create_scenario_revenue_chart


def render_overview_tab(assumptions, settings):
    years = settings.projection_years
    scenario = st.selectbox("Adoption Scenario", SCENARIO_NAMES, index=SCENARIO_NAMES.index('base'))

    result = compute_scenario(scenario, years, assumptions, settings.start_year)
    summary = result["summary"]

    m = st.columns(4)
    m[0].metric("Units", f"{summary['total_units']:,}")
    m[1].metric("Net Revenue", f"${summary['total_net_revenue']:,.0f}")
    m[2].metric("Avg Gross Margin", f"{summary['avg_gross_margin'] * 100:.1f}%")
    first = summary['first_profitable_year']
    m[3].metric("First Profitable Year", f"Y{first}" if first else "n/a")

    revenue_df = scenario_revenue_frame(get_revenue_matrix(years, assumptions.base_price, assumptions.discount_rate))
    st.plotly_chart(create_scenario_revenue_chart(revenue_df), use_container_width=True)

    years_df = scenario_years_frame(result)
    st.dataframe(years_df, use_container_width=True, hide_index=True)

    comparison_df = pd.DataFrame(compare_scenarios(years, assumptions, settings.start_year))
    st.markdown("#### Scenario Comparison")
    st.dataframe(comparison_df, use_container_width=True, hide_index=True)

    c1, c2 = st.columns(2)
    with c1:
        st.download_button("Scenario (CSV)", data=to_csv_bytes(years_df),
                           file_name=f"scenario_{scenario}.csv", mime="text/csv")
    with c2:
        st.download_button(
            "All Scenarios (Excel)",
            data=to_excel_bytes({"Comparison": comparison_df, "Net Revenue": revenue_df.reset_index()}),
            file_name="scenarios.xlsx",
            mime=XLSX_MIME,
        )
    return result
