from datetime import date
from io import BytesIO

import pytest
from openpyxl import load_workbook

from erp_engine.capital import build_raise_scenario_matrix
from erp_engine.cac_alerts import check_cac_targets
from erp_engine.cac import CACResult
from erp_engine.cogs import LINE_ITEMS, calculate_cogs_breakdown, project_cogs_breakdown
from erp_engine.compute import compute_scenario
from erp_engine.deposit import build_deposit_sensitivity_table, calculate_deposit_impact
from erp_engine.interpolation import cost_curve
from erp_engine.inventory import project_inventory_timeline
from erp_engine.models import BurnRateComponents, DepositImpactInput, Personnel, PersonnelType, RateType
from erp_engine.projections import SCENARIO_NAMES, get_revenue_matrix
from erp_engine.tooling import generate_tooling_projections
from erp_engine.valuation import calculate_all_dcf, calculate_dcf
from erp_engine.gna import calculate_annual_cost
from utils import frames
from utils.export import to_csv_bytes, to_excel_bytes
from utils import visualizations as viz


def burn():
    return BurnRateComponents(20000, 5000, 5000, 0, 30000)


def test_raise_matrix_frame_marks_recommendation():
    df = frames.raise_matrix_frame(build_raise_scenario_matrix(burn(), 60000))
    assert len(df) == 4
    assert df['recommended'].tolist() == [False, False, True, False]
    # enums rendered as plain strings
    assert df['instrument'].tolist() == ['equity'] * 4
    assert df['runway_risk_level'].iloc[2] == 'comfortable'


def test_inventory_frames():
    tl = project_inventory_timeline("moderate")
    daily = frames.inventory_timeline_frame(tl)
    monthly = frames.inventory_monthly_frame(tl)
    assert len(daily) == 365
    assert len(monthly) == 13
    assert (daily['inventory_level'] >= 0).all()


def test_deposit_frames():
    res = calculate_deposit_impact(DepositImpactInput())
    df = frames.deposit_cash_flow_frame(res)
    assert df.index[0] == "Jan Y1"
    sens = frames.deposit_sensitivity_frame(build_deposit_sensitivity_table(DepositImpactInput()))
    assert list(sens.columns) == ['Deposit', 'Capital Reduction', 'Reduction %', 'Peak Capital', 'Break-even Month']


def test_cogs_frames():
    df = frames.cogs_breakdown_frame(calculate_cogs_breakdown(1000))
    assert df['Category'].tolist()[0] == 'Manufacturing Cost'
    proj = frames.cogs_projection_frame(project_cogs_breakdown([100, 100]))
    assert proj['Total / Unit'].iloc[0] == 200


def test_revenue_matrix_frame():
    df = frames.scenario_revenue_frame(get_revenue_matrix(3))
    assert list(df.columns) == SCENARIO_NAMES
    assert list(df.index) == ['Y1', 'Y2', 'Y3']


def test_alerts_frame_empty_and_populated():
    assert frames.alerts_frame([]).empty
    alerts = check_cac_targets([CACResult("email", "p", 800, 10, 80)])
    df = frames.alerts_frame(alerts)
    assert df['severity'].tolist() == ['critical']


def test_excel_export_roundtrip():
    df = frames.scenario_years_frame(compute_scenario("base", 3, start_year=2025))
    xlsx = to_excel_bytes({"Base Scenario": df, "A very long sheet name that exceeds limits": df})
    wb = load_workbook(BytesIO(xlsx), data_only=True)
    assert wb.sheetnames == ["Base Scenario", "A very long sheet name that exc"]
    ws = wb["Base Scenario"]
    assert ws.cell(1, 1).value == "year"
    assert ws.cell(2, 1).value == 1
    assert ws.max_row == 4


def test_excel_export_requires_sheet():
    with pytest.raises(ValueError):
        to_excel_bytes({})


def test_csv_export():
    df = frames.tooling_frame(generate_tooling_projections(50000, 5, 5, 2025))
    text = to_csv_bytes(df).decode("utf-8")
    assert text.splitlines()[0] == "year,amortization_expense,retooling_investment,is_retooling_year"
    assert len(text.splitlines()) == 6


def test_chart_builders():
    curve = frames.cost_curve_frame(cost_curve([1000, 3000, 5000, 8000]))
    fig = viz.create_cost_curve_chart(curve)
    assert [t.name for t in fig.data] == ['Cost per Unit', 'At Floor']

    breakdown = frames.cogs_breakdown_frame(calculate_cogs_breakdown(1000))
    assert len(viz.create_cogs_breakdown_chart(breakdown).data) == 1

    proj = frames.cogs_projection_frame(project_cogs_breakdown([100, 100, 100]))
    fig = viz.create_cogs_projection_chart(proj, [name for _, name, _ in LINE_ITEMS])
    assert len(fig.data) == 4

    tl = frames.inventory_timeline_frame(project_inventory_timeline("moderate"))
    assert len(viz.create_inventory_chart(tl, 3288).data) == 2

    cash = frames.deposit_cash_flow_frame(calculate_deposit_impact(DepositImpactInput()))
    assert [t.name for t in viz.create_deposit_cash_flow_chart(cash).data] == ['Inflows', 'Outflows', 'Cumulative Cash']

    sens = frames.deposit_sensitivity_frame(build_deposit_sensitivity_table(DepositImpactInput()))
    assert len(viz.create_deposit_sensitivity_chart(sens).data) == 2

    matrix = frames.raise_matrix_frame(build_raise_scenario_matrix(burn(), 60000))
    assert len(viz.create_raise_matrix_chart(matrix).data) == 2

    revenue = frames.scenario_revenue_frame(get_revenue_matrix(5))
    assert [t.name for t in viz.create_scenario_revenue_chart(revenue).data] == [s.capitalize() for s in SCENARIO_NAMES]

    tooling = frames.tooling_frame(generate_tooling_projections(50000, 5, 10, 2025))
    assert len(viz.create_tooling_chart(tooling).data) == 2


def test_valuation_frames_and_charts():
    years_df = frames.valuation_years_frame(calculate_dcf("base"))
    assert years_df['label'].tolist() == [f"Y{i}" for i in range(1, 7)]
    assert [t.name for t in viz.create_fcf_chart(years_df).data] == ['Free Cash Flow', 'Cumulative PV']

    comparison = frames.valuation_comparison_frame(calculate_all_dcf())
    assert comparison['scenario'].tolist() == SCENARIO_NAMES


def test_gna_frame_and_chart():
    person = Personnel("e1", "Avery", "Ops", PersonnelType.EMPLOYEE, 10000, RateType.MONTHLY, date(2025, 1, 1))
    df = frames.gna_monthly_frame(calculate_annual_cost([person], 2025))
    assert df['label'].iloc[0] == "2025-01"
    assert len(df) == 12
    assert len(viz.create_gna_chart(df).data) == 2
