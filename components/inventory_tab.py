"""Inventory reorder simulation tab."""

import streamlit as st

from config.default_params import SCENARIO_ANNUAL_UNITS
from erp_engine.inventory import (
    calculate_daily_sales_rate,
    calculate_reorder_point,
    calculate_working_capital,
    project_inventory_timeline,
)
from erp_engine.models import InventoryConfig
from utils.export import XLSX_MIME, to_excel_bytes
from utils.frames import inventory_monthly_frame, inventory_timeline_frame
from utils.visualizations import create_inventory_chart


def render_inventory_tab():
    col1, col2 = st.columns([1, 3])

    with col1:
        st.subheader("Inventory Settings")
        scenario = st.selectbox("Demand Scenario", list(SCENARIO_ANNUAL_UNITS), index=1)
        cfg = InventoryConfig().with_overrides(
            moq=st.number_input("MOQ (units)", 100, 10_000, 1000, step=100),
            unit_cost=st.number_input("Unit Cost ($)", 1.0, 2000.0, 200.0, step=10.0),
            lead_time_days=st.slider("Lead Time (days)", 15, 180, 90, step=5),
            safety_days=st.slider("Safety Stock (days)", 0, 90, 30, step=5),
        )
        years = st.slider("Years", 1, 3, 1)

    daily_rate = calculate_daily_sales_rate(SCENARIO_ANNUAL_UNITS[scenario])
    reorder_point = calculate_reorder_point(daily_rate, cfg.lead_time_days, cfg.safety_days)
    timeline = project_inventory_timeline(scenario, cfg, years)
    timeline_df = inventory_timeline_frame(timeline)
    monthly_df = inventory_monthly_frame(timeline)

    with col2:
        m = st.columns(4)
        m[0].metric("Daily Sales", f"{daily_rate:,.1f}")
        m[1].metric("Reorder Point", f"{reorder_point:,}")
        m[2].metric("Orders Placed", f"{int(timeline_df['reorder_event'].sum())}")
        m[3].metric("Peak Working Capital",
                    f"${calculate_working_capital(timeline_df['inventory_level'].max(), cfg.unit_cost):,.0f}")

        st.plotly_chart(create_inventory_chart(timeline_df, reorder_point), use_container_width=True)
        st.dataframe(monthly_df, use_container_width=True, hide_index=True)
        st.download_button(
            "Inventory (Excel)",
            data=to_excel_bytes({"Monthly": monthly_df, "Daily": timeline_df}),
            file_name=f"inventory_{scenario}.xlsx",
            mime=XLSX_MIME,
        )
