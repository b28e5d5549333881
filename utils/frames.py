"""DataFrame views of engine results for tables, charts and exports."""

from dataclasses import asdict
from enum import Enum

import pandas as pd

from erp_engine.inventory import summarize_inventory_by_month


def rows_to_frame(rows):
    """Dataclass or dict rows to a DataFrame (enum values rendered as strings)."""
    records = [r if isinstance(r, dict) else asdict(r) for r in rows]
    df = pd.DataFrame(records)
    for col in df.columns:
        if df[col].map(lambda v: isinstance(v, Enum)).any():
            df[col] = df[col].map(lambda v: v.value if isinstance(v, Enum) else v)
    return df


def cost_curve_frame(results):
    df = rows_to_frame(results)
    return df.rename(columns={
        'volume': 'Volume',
        'cost_per_unit': 'Cost / Unit',
        'total_cost': 'Total Cost',
        'at_floor': 'At Floor',
    })


def cogs_breakdown_frame(result):
    """One row per COGS line item."""
    df = pd.DataFrame([{
        'Category': item.name,
        'Per Unit': item.per_unit,
        'Total': item.total,
        'Share %': item.percentage,
    } for item in result.line_items])
    return df


def cogs_projection_frame(results):
    """Per-unit line items by projection year."""
    rows = []
    for year, result in enumerate(results, start=1):
        row = {'Year': year, 'Volume': result.volume}
        for item in result.line_items:
            row[item.name] = item.per_unit
        row['Total / Unit'] = result.total_per_unit
        row['Total Cost'] = result.total_cost
        rows.append(row)
    return pd.DataFrame(rows)


def inventory_timeline_frame(timeline):
    return rows_to_frame(timeline)


def inventory_monthly_frame(timeline):
    """30-day monthly roll-up of a daily inventory timeline."""
    return rows_to_frame(summarize_inventory_by_month(timeline))


def deposit_cash_flow_frame(result):
    df = rows_to_frame(result.cash_flow_timeline)
    return df.set_index('month_label')


def deposit_sensitivity_frame(table):
    df = rows_to_frame(table.rows)
    return df.rename(columns={
        'deposit_amount': 'Deposit',
        'capital_reduction': 'Capital Reduction',
        'capital_reduction_percent': 'Reduction %',
        'peak_capital_needed': 'Peak Capital',
        'break_even_month': 'Break-even Month',
    })


def raise_matrix_frame(matrix):
    df = rows_to_frame(matrix.scenarios)
    recommended = matrix.recommended_scenario
    df['recommended'] = [
        recommended is not None and s is recommended for s in matrix.scenarios
    ]
    return df


def scenario_revenue_frame(matrix):
    """get_revenue_matrix output as a year x scenario table."""
    df = pd.DataFrame(matrix)
    df.index = [f"Y{i + 1}" for i in range(len(df))]
    return df


def scenario_years_frame(scenario_result):
    return pd.DataFrame(scenario_result['years'])


def tooling_frame(projection):
    return rows_to_frame(projection.years)


def alerts_frame(alerts):
    if not alerts:
        return pd.DataFrame(columns=['channel_id', 'period', 'severity', 'message',
                                     'current_cac', 'target_cac', 'percent_over_target'])
    df = rows_to_frame(alerts)
    return df[['channel_id', 'period', 'severity', 'message',
               'current_cac', 'target_cac', 'percent_over_target']]


def valuation_years_frame(dcf_result):
    df = pd.DataFrame(dcf_result['years'])
    df.insert(0, 'label', [f"Y{y}" for y in df['year']])
    return df


def valuation_comparison_frame(all_results):
    """calculate_all_dcf output as one row per scenario."""
    return pd.DataFrame([
        {
            'scenario': name,
            'enterprise_value': r['enterprise_value'],
            'terminal_value_pv': r['terminal_value_pv'],
            'ev_to_revenue': r['ev_to_revenue'],
            'ev_to_ebitda': r['ev_to_ebitda'],
        }
        for name, r in all_results.items()
    ])


def gna_monthly_frame(monthly_costs):
    df = rows_to_frame(monthly_costs)
    df.insert(0, 'label', [f"{m.year}-{m.month:02d}" for m in monthly_costs])
    return df
