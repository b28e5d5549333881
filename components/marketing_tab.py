"""Marketing CAC / ROAS tab."""

import pandas as pd
import streamlit as st

from erp_engine.cac import calculate_blended_cac, calculate_cac_by_channel
from erp_engine.cac_alerts import (
    DEFAULT_CAC_TARGET,
    calculate_cac_efficiency,
    check_blended_cac_target,
    check_cac_targets,
    get_cac_recommendation,
)
from erp_engine.channels import allocate_budget, get_channel_by_id
from erp_engine.models import ConversionData, MarketingSpend, RevenueAttribution
from erp_engine.roas import calculate_roas_by_channel, evaluate_roas_health, rank_channels_by_roas
from utils.export import to_csv_bytes
from utils.frames import alerts_frame

PERIOD = "current"


def render_marketing_tab():
    col1, col2 = st.columns([1, 3])

    with col1:
        st.subheader("Budget")
        total_budget = st.number_input("Monthly Marketing Budget ($)", 0.0, 1_000_000.0, 20_000.0, step=1000.0)
        avg_order_value = st.number_input("Avg Order Value ($)", 0.0, 5000.0, 900.0, step=50.0)

    budgets = allocate_budget(total_budget)
    base = pd.DataFrame([{
        'channel_id': b.channel,
        'channel': get_channel_by_id(b.channel).name,
        'spend': b.budget,
        'new_customers': 0,
    } for b in budgets])

    with col2:
        st.markdown("#### Channel Results")
        st.caption("Enter customers acquired per channel for the period")
        edited = st.data_editor(base, use_container_width=True, hide_index=True,
                                disabled=['channel_id', 'channel', 'spend'])

        spends = [MarketingSpend(r.channel_id, PERIOD, r.spend) for r in edited.itertuples()]
        conversions = [ConversionData(r.channel_id, PERIOD, int(r.new_customers)) for r in edited.itertuples()]
        attributions = [
            RevenueAttribution(r.channel_id, PERIOD, int(r.new_customers) * avg_order_value)
            for r in edited.itertuples()
        ]

        cac_by_channel = calculate_cac_by_channel(spends, conversions, PERIOD)
        roas_by_channel = calculate_roas_by_channel(spends, attributions, PERIOD)
        blended = calculate_blended_cac(spends, conversions, PERIOD)

        m = st.columns(3)
        m[0].metric("Blended CAC", f"${blended.cac:,.0f}" if blended.cac > 0 else "n/a")
        m[1].metric("CAC Efficiency", f"{calculate_cac_efficiency(blended.cac, DEFAULT_CAC_TARGET.target_cac)}")
        blended_alert = check_blended_cac_target(blended)
        m[2].metric("Blended Status", blended_alert.severity.value if blended_alert else "on target")

        rows = []
        for channel_id in rank_channels_by_roas(roas_by_channel):
            cac = cac_by_channel[channel_id].cac
            target = DEFAULT_CAC_TARGET.channel_targets.get(channel_id, DEFAULT_CAC_TARGET.target_cac)
            rows.append({
                'Channel': channel_id,
                'Spend': cac_by_channel[channel_id].total_spend,
                'Customers': cac_by_channel[channel_id].new_customers,
                'CAC': cac,
                'Target': target,
                'ROAS': roas_by_channel[channel_id].roas,
                'ROAS Health': evaluate_roas_health(roas_by_channel[channel_id].roas).value,
                'Recommendation': get_cac_recommendation(cac, target, channel_id) if cac > 0 else '',
            })
        channel_df = pd.DataFrame(rows)
        st.dataframe(channel_df, use_container_width=True, hide_index=True)

        st.markdown("#### Alerts")
        alerts = check_cac_targets(cac_by_channel.values())
        for alert in alerts:
            if alert.severity.value == 'critical':
                st.error(alert.message)
            elif alert.severity.value == 'warning':
                st.warning(alert.message)
            else:
                st.info(alert.message)
        if not alerts:
            st.success("All channels at or under target CAC")

        st.download_button("Alerts (CSV)", data=to_csv_bytes(alerts_frame(alerts)),
                           file_name="cac_alerts.csv", mime="text/csv")
