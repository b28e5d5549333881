"""Plotly chart builders for the planning dashboards."""

import plotly.graph_objects as go


def create_cost_curve_chart(curve_df):
    """Unit cost by order volume, floor points highlighted."""
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=curve_df['Volume'],
        y=curve_df['Cost / Unit'],
        mode='lines+markers',
        name='Cost per Unit',
        line=dict(color='blue', width=2)
    ))
    floor = curve_df[curve_df['At Floor']]
    if not floor.empty:
        fig.add_trace(go.Scatter(
            x=floor['Volume'],
            y=floor['Cost / Unit'],
            mode='markers',
            name='At Floor',
            marker=dict(color='red', size=9)
        ))
    fig.update_layout(
        title='Unit Cost vs Volume',
        xaxis_title='Units',
        yaxis_title='Cost per Unit ($)',
        height=400
    )
    return fig


def create_cogs_breakdown_chart(breakdown_df):
    """Per-unit COGS split as a donut."""
    fig = go.Figure(go.Pie(
        labels=breakdown_df['Category'],
        values=breakdown_df['Per Unit'],
        hole=0.45,
        name='COGS'
    ))
    fig.update_layout(title='COGS per Unit by Category', height=400)
    return fig


def create_cogs_projection_chart(projection_df, categories):
    """Stacked per-unit COGS by year."""
    fig = go.Figure()
    for category in categories:
        fig.add_trace(go.Bar(
            x=projection_df['Year'],
            y=projection_df[category],
            name=category
        ))
    fig.update_layout(
        barmode='stack',
        title='Per-Unit COGS by Year',
        xaxis_title='Year',
        yaxis_title='Cost per Unit ($)',
        height=400
    )
    return fig


def create_inventory_chart(timeline_df, reorder_point=None):
    """Daily inventory level with order events."""
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=timeline_df['day'],
        y=timeline_df['inventory_level'],
        mode='lines',
        name='Inventory Level',
        line=dict(color='green', width=2)
    ))
    orders = timeline_df[timeline_df['reorder_event']]
    fig.add_trace(go.Scatter(
        x=orders['day'],
        y=orders['inventory_level'],
        mode='markers',
        name='Order Placed',
        marker=dict(color='orange', size=8, symbol='triangle-up')
    ))
    if reorder_point is not None:
        fig.add_hline(y=reorder_point, line_dash="dash", line_color="gray", annotation_text="Reorder Point")
    fig.update_layout(
        title='Inventory Level',
        xaxis_title='Day',
        yaxis_title='Units on Hand',
        height=400
    )
    return fig


def create_deposit_cash_flow_chart(cash_flow_df):
    """Monthly inflows/outflows as bars with cumulative cash line."""
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=cash_flow_df.index,
        y=cash_flow_df['total_inflows'],
        name='Inflows',
        marker_color='green'
    ))
    fig.add_trace(go.Bar(
        x=cash_flow_df.index,
        y=-cash_flow_df['total_outflows'],
        name='Outflows',
        marker_color='red'
    ))
    fig.add_trace(go.Scatter(
        x=cash_flow_df.index,
        y=cash_flow_df['cumulative_cash_flow'],
        mode='lines+markers',
        name='Cumulative Cash',
        line=dict(color='blue', width=2)
    ))
    fig.add_hline(y=0, line_dash="dash", line_color="gray")
    fig.update_layout(
        barmode='relative',
        title='Pre-Order Cash Flow',
        xaxis_title='Month',
        yaxis_title='Amount ($)',
        height=400
    )
    return fig


def create_deposit_sensitivity_chart(sensitivity_df):
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=sensitivity_df['Deposit'],
        y=sensitivity_df['Peak Capital'],
        mode='lines+markers',
        name='Peak Capital Needed',
        line=dict(color='red', width=2)
    ))
    fig.add_trace(go.Scatter(
        x=sensitivity_df['Deposit'],
        y=sensitivity_df['Capital Reduction'],
        mode='lines+markers',
        name='Capital Reduction',
        line=dict(color='green', width=2, dash='dash')
    ))
    fig.update_layout(
        title='Deposit Sensitivity',
        xaxis_title='Deposit per Pre-Order ($)',
        yaxis_title='Amount ($)',
        height=400
    )
    return fig


def create_raise_matrix_chart(matrix_df):
    """Dilution vs runway for each candidate raise."""
    fig = go.Figure()
    labels = [f"${amount / 1000:,.0f}K" for amount in matrix_df['raise_amount']]
    fig.add_trace(go.Bar(
        x=labels,
        y=matrix_df['dilution_percent'] * 100,
        name='Dilution %',
        marker_color='orange',
        yaxis='y'
    ))
    fig.add_trace(go.Scatter(
        x=labels,
        y=matrix_df['runway_months'],
        mode='lines+markers',
        name='Runway (months)',
        line=dict(color='blue', width=2),
        yaxis='y2'
    ))
    fig.update_layout(
        title='Raise Scenarios',
        xaxis_title='Raise Amount',
        yaxis=dict(title='Dilution (%)'),
        yaxis2=dict(title='Runway (months)', overlaying='y', side='right'),
        height=400
    )
    return fig


def create_scenario_revenue_chart(revenue_df):
    """Net revenue per year, one line per adoption scenario."""
    fig = go.Figure()
    for scenario in revenue_df.columns:
        fig.add_trace(go.Scatter(
            x=revenue_df.index,
            y=revenue_df[scenario],
            mode='lines+markers',
            name=scenario.capitalize()
        ))
    fig.update_layout(
        title='Net Revenue by Scenario',
        xaxis_title='Year',
        yaxis_title='Net Revenue ($)',
        height=400
    )
    return fig


def create_tooling_chart(tooling_df):
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=tooling_df['year'],
        y=tooling_df['amortization_expense'],
        name='Amortization',
        marker_color='purple'
    ))
    fig.add_trace(go.Bar(
        x=tooling_df['year'],
        y=tooling_df['retooling_investment'],
        name='Re-tooling Investment',
        marker_color='gray'
    ))
    fig.update_layout(
        barmode='group',
        title='Tooling Costs',
        xaxis_title='Year',
        yaxis_title='Amount ($)',
        height=350
    )
    return fig


def create_fcf_chart(valuation_df):
    """Annual free cash flow bars with cumulative present value."""
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=valuation_df['label'],
        y=valuation_df['fcf'],
        name='Free Cash Flow',
        marker_color=['green' if v >= 0 else 'red' for v in valuation_df['fcf']]
    ))
    fig.add_trace(go.Scatter(
        x=valuation_df['label'],
        y=valuation_df['cumulative_pv'],
        mode='lines+markers',
        name='Cumulative PV',
        line=dict(color='blue', width=2)
    ))
    fig.update_layout(
        title='Free Cash Flow',
        xaxis_title='Year',
        yaxis_title='Amount ($)',
        height=400
    )
    return fig


def create_gna_chart(gna_df):
    fig = go.Figure()
    fig.add_trace(go.Bar(x=gna_df['label'], y=gna_df['employee_cost'], name='Employees', marker_color='steelblue'))
    fig.add_trace(go.Bar(x=gna_df['label'], y=gna_df['contractor_cost'], name='Contractors', marker_color='orange'))
    fig.update_layout(
        barmode='stack',
        title='G&A Personnel Cost by Month',
        xaxis_title='Month',
        yaxis_title='Cost ($)',
        height=350
    )
    return fig
