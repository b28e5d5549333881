"""
SportsProd Planning Model - Streamlit UI
Thin caller over the erp_engine calculators
"""

import logging

import streamlit as st

from config.settings import get_settings
from erp_engine.models import Assumptions, COGSBreakdownConfig
from erp_engine.projections import get_annual_projections
from components.overview_tab import render_overview_tab
from components.costs_tab import render_cogs_tab, render_tooling_tab
from components.inventory_tab import render_inventory_tab
from components.marketing_tab import render_marketing_tab
from components.capital_tab import render_capital_tab
from components.valuation_tab import render_valuation_tab

settings = get_settings()
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

st.set_page_config(
    page_title="SportsProd Planning Model",
    page_icon="📦",
    layout="wide"
)


def get_assumptions_from_ui():
    """Sidebar assumption block."""
    defaults = Assumptions()
    st.sidebar.header("Assumptions")
    base_price = st.sidebar.number_input("Base Price ($)", 100.0, 5000.0, defaults.base_price, step=50.0)
    discount_rate = st.sidebar.slider("Average Discount", 0.0, 0.30, defaults.discount_rate, step=0.01)
    annual_cost_reduction = st.sidebar.slider(
        "Annual COGS Reduction", 0.0, 0.15, defaults.annual_cost_reduction, step=0.01,
        help="Applied to manufacturing, freight and packaging each year; duties do not scale"
    )

    st.sidebar.subheader("Tooling")
    tooling_cost = st.sidebar.number_input("Tooling Cost ($)", 0.0, 1_000_000.0, defaults.tooling_cost, step=5000.0)
    retooling_years = st.sidebar.slider("Re-tooling Cycle (years)", 1, 10, defaults.retooling_years)

    return defaults.with_overrides(
        base_price=base_price,
        discount_rate=discount_rate,
        cogs=COGSBreakdownConfig(),
        annual_cost_reduction=annual_cost_reduction,
        tooling_cost=tooling_cost,
        retooling_years=retooling_years,
    )


def main():
    st.title("📦 SportsProd Planning Model")
    st.caption(f"{settings.projection_years}-year plan starting {settings.start_year}")

    assumptions = get_assumptions_from_ui()
    logger.debug("Assumptions: %s", assumptions)

    tabs = st.tabs([
        "📊 Scenario Overview", "🏭 COGS", "📦 Inventory", "📣 Marketing", "💰 Capital", "🔧 Tooling", "📈 Valuation",
    ])

    with tabs[0]:
        result = render_overview_tab(assumptions, settings)
    with tabs[1]:
        render_cogs_tab(assumptions)
    with tabs[2]:
        render_inventory_tab()
    with tabs[3]:
        render_marketing_tab()
    with tabs[4]:
        render_capital_tab()
    with tabs[5]:
        units = get_annual_projections(result["scenario"], settings.projection_years)
        render_tooling_tab(assumptions, settings, units)
    with tabs[6]:
        render_valuation_tab(settings)


if __name__ == "__main__":
    main()
