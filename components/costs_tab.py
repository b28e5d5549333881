"""Unit cost, COGS and tooling tabs."""

import streamlit as st

from erp_engine.cogs import LINE_ITEMS, create_breakdown_calculator, project_cogs_breakdown
from erp_engine.interpolation import cost_curve, create_interpolator
from erp_engine.models import COGSBreakdownConfig, InterpolationConfig
from erp_engine.tooling import calculate_tooling_cost_per_unit, generate_tooling_projections
from utils.export import XLSX_MIME, to_csv_bytes, to_excel_bytes
from utils.frames import cogs_breakdown_frame, cogs_projection_frame, cost_curve_frame, tooling_frame
from utils.visualizations import (
    create_cogs_breakdown_chart,
    create_cogs_projection_chart,
    create_cost_curve_chart,
    create_tooling_chart,
)

CURVE_VOLUMES = [500, 1000, 1500, 2000, 2500, 3000, 3500, 4000, 4500, 5000, 6000, 8000]


def render_cogs_tab(assumptions):
    """Render the unit cost curve and COGS breakdown."""
    col1, col2 = st.columns([1, 3])

    with col1:
        st.subheader("COGS per Unit")
        base = assumptions.cogs
        cfg = COGSBreakdownConfig(
            manufacturing_cost=st.number_input("Manufacturing", 0.0, 1000.0, base.manufacturing_cost, step=5.0),
            freight_cost=st.number_input("Overseas Freight", 0.0, 500.0, base.freight_cost, step=1.0),
            packaging_cost=st.number_input("Packaging & Materials", 0.0, 200.0, base.packaging_cost, step=1.0),
            duties_cost=st.number_input("Import Duties", 0.0, 200.0, base.duties_cost, step=1.0),
        )
        volume = st.number_input("Order Volume (units)", 1, 100_000, 1000, step=100)
        floor = st.number_input("Unit Cost Floor ($)", 0.0, 200.0, 82.0, step=1.0)

    calculator = create_breakdown_calculator(cfg)
    breakdown = calculator(volume)
    interpolator = create_interpolator(InterpolationConfig(min_cost_floor=floor))
    unit_cost = interpolator(volume)

    with col2:
        m = st.columns(3)
        m[0].metric("COGS / Unit", f"${breakdown.total_per_unit:,.2f}")
        m[1].metric("Total COGS", f"${breakdown.total_cost:,.0f}")
        m[2].metric("Interpolated Unit Cost", f"${unit_cost.cost_per_unit:,.2f}",
                    delta="at floor" if unit_cost.at_floor else None)

        breakdown_df = cogs_breakdown_frame(breakdown)
        st.plotly_chart(create_cogs_breakdown_chart(breakdown_df), use_container_width=True)
        st.dataframe(breakdown_df, use_container_width=True, hide_index=True)

        curve_df = cost_curve_frame(cost_curve(CURVE_VOLUMES, interpolator))
        st.plotly_chart(create_cost_curve_chart(curve_df), use_container_width=True)

        st.markdown("#### Scale Reduction by Year")
        volumes = [volume] * 5
        projection_df = cogs_projection_frame(
            project_cogs_breakdown(volumes, cfg, assumptions.annual_cost_reduction)
        )
        st.plotly_chart(
            create_cogs_projection_chart(projection_df, [name for _, name, _ in LINE_ITEMS]),
            use_container_width=True,
        )
        st.dataframe(projection_df, use_container_width=True, hide_index=True)

        st.download_button(
            "COGS (Excel)",
            data=to_excel_bytes({"Breakdown": breakdown_df, "By Year": projection_df, "Cost Curve": curve_df}),
            file_name="cogs.xlsx",
            mime=XLSX_MIME,
        )


def render_tooling_tab(assumptions, settings, annual_units):
    """Render the tooling amortization schedule."""
    projection = generate_tooling_projections(
        assumptions.tooling_cost,
        assumptions.retooling_years,
        settings.projection_years,
        settings.start_year,
    )
    df = tooling_frame(projection)
    # Years past the unit table have no volume to spread the expense over
    df['cost_per_unit'] = [
        calculate_tooling_cost_per_unit(row.amortization_expense, annual_units[i] if i < len(annual_units) else 0)
        for i, row in enumerate(projection.years)
    ]

    m = st.columns(3)
    m[0].metric("Annual Amortization", f"${projection.years[0].amortization_expense:,.0f}" if projection.years else "$0")
    m[1].metric("Total Amortization", f"${projection.total_amortization:,.0f}")
    m[2].metric("Re-tooling Investment", f"${projection.total_retooling_investments:,.0f}")

    st.plotly_chart(create_tooling_chart(df), use_container_width=True)
    st.dataframe(df, use_container_width=True, hide_index=True)
    st.download_button("Tooling (CSV)", data=to_csv_bytes(df), file_name="tooling.csv", mime="text/csv")
