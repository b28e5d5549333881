"""Pre-order deposit impact on cash flow timing and capital needs"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from config.default_params import DEFAULT_DEPOSIT_AMOUNTS, DEFAULT_PREORDER_SCENARIOS as _SCENARIOS
from .models import DepositImpactInput, PreOrderScenario
from .money import round_half_up

logger = logging.getLogger(__name__)

MONTH_NAMES = ['Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
               'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec']

DEFAULT_PREORDER_SCENARIOS = [PreOrderScenario(**s) for s in _SCENARIOS]


@dataclass(frozen=True)
class MonthlyCashFlow:
    month: int
    month_label: str

    # Inflows
    deposits_received: float
    balance_payments_received: float
    total_inflows: float

    # Outflows
    production_costs: float
    fulfillment_costs: float
    refunds_issued: float
    total_outflows: float

    net_cash_flow: float
    cumulative_cash_flow: float
    deposits_held: float         # customer deposit liability, never negative

    pre_orders_this_month: int
    cumulative_pre_orders: int
    units_produced: int
    units_delivered: int


@dataclass(frozen=True)
class DepositImpactResult:
    input: DepositImpactInput
    cash_flow_timeline: List[MonthlyCashFlow]

    total_deposits_collected: float
    total_refunds_issued: float
    net_deposits_retained: float

    peak_capital_without_deposits: float
    peak_capital_with_deposits: float
    capital_reduction: float
    capital_reduction_percent: float   # fraction of the no-deposit baseline
    break_even_month: Optional[int]
    peak_negative_month: int

    min_cumulative_cash: float
    ending_cumulative_cash: float


@dataclass(frozen=True)
class DepositSensitivityRow:
    deposit_amount: float
    capital_reduction: float
    capital_reduction_percent: float
    peak_capital_needed: float
    break_even_month: Optional[int]


@dataclass(frozen=True)
class DepositSensitivityTable:
    rows: List[DepositSensitivityRow]
    base_case: DepositSensitivityRow
    conversion_rate: float
    pre_order_count: int


@dataclass(frozen=True)
class SelfFundingResult:
    deposit_amount: float
    is_possible: bool
    max_deposit: float


def get_month_label(month: int) -> str:
    """1 -> 'Jan Y1', 13 -> 'Jan Y2'"""
    year = (month + 11) // 12
    return f"{MONTH_NAMES[(month - 1) % 12]} Y{year}"


def distribute_evenly(total: int, months: int) -> List[int]:
    """Split a count over months; the remainder goes to the earliest months"""
    if months <= 0:
        return []
    per_month, remainder = divmod(total, months)
    return [per_month + (1 if i < remainder else 0) for i in range(months)]


def _in_window(values: List[int], month: int, start: int) -> int:
    idx = month - start
    return values[idx] if 0 <= idx < len(values) else 0


def calculate_deposit_impact(inp: DepositImpactInput) -> DepositImpactResult:
    """
    Month-by-month cash flow for a pre-order campaign.

    Deposits arrive over the pre-order window, production is spread over the
    months between production start and fulfillment start, and balances are
    collected as units are delivered. Cancelled orders are refunded as one
    lump in the first fulfillment month.
    """
    end_month = max(
        inp.pre_order_start_month + inp.pre_order_duration_months,
        inp.fulfillment_start_month + inp.fulfillment_duration_months,
    ) + 2

    converted_orders = round_half_up(inp.pre_order_count * inp.conversion_rate)
    cancelled_orders = inp.pre_order_count - converted_orders
    balance_per_unit = inp.full_price - inp.deposit_amount

    pre_orders_per_month = distribute_evenly(inp.pre_order_count, inp.pre_order_duration_months)
    production_months = max(1, inp.fulfillment_start_month - inp.production_start_month)
    production_per_month = distribute_evenly(converted_orders, production_months)
    delivery_per_month = distribute_evenly(converted_orders, inp.fulfillment_duration_months)

    refund_month = inp.fulfillment_start_month
    total_refunds = cancelled_orders * inp.deposit_amount

    logger.debug(
        "Deposit impact: %d months, %d converted, %d cancelled, deposit=%.2f",
        end_month, converted_orders, cancelled_orders, inp.deposit_amount,
    )

    timeline = []
    cumulative_cash = 0.0
    cumulative_pre_orders = 0
    deposits_held = 0.0
    total_deposits_collected = 0.0

    for month in range(1, end_month + 1):
        pre_orders = _in_window(pre_orders_per_month, month, inp.pre_order_start_month)
        deposits_received = pre_orders * inp.deposit_amount
        total_deposits_collected += deposits_received
        cumulative_pre_orders += pre_orders

        units_delivered = _in_window(delivery_per_month, month, inp.fulfillment_start_month)
        balance_payments = units_delivered * balance_per_unit

        units_produced = _in_window(production_per_month, month, inp.production_start_month)
        production_costs = units_produced * inp.unit_production_cost
        fulfillment_costs = units_delivered * inp.fulfillment_cost_per_unit
        refunds = total_refunds if month == refund_month else 0.0

        deposits_held += deposits_received
        if month >= inp.fulfillment_start_month:
            released = units_delivered * inp.deposit_amount
            deposits_held = max(0.0, deposits_held - released)
        if month == refund_month:
            deposits_held = max(0.0, deposits_held - total_refunds)

        total_inflows = deposits_received + balance_payments
        total_outflows = production_costs + fulfillment_costs + refunds
        net_cash_flow = total_inflows - total_outflows
        cumulative_cash += net_cash_flow

        timeline.append(MonthlyCashFlow(
            month=month,
            month_label=get_month_label(month),
            deposits_received=deposits_received,
            balance_payments_received=balance_payments,
            total_inflows=total_inflows,
            production_costs=production_costs,
            fulfillment_costs=fulfillment_costs,
            refunds_issued=refunds,
            total_outflows=total_outflows,
            net_cash_flow=net_cash_flow,
            cumulative_cash_flow=cumulative_cash,
            deposits_held=deposits_held,
            pre_orders_this_month=pre_orders,
            cumulative_pre_orders=cumulative_pre_orders,
            units_produced=units_produced,
            units_delivered=units_delivered,
        ))

    min_cash = min(row.cumulative_cash_flow for row in timeline)
    peak_with = abs(min(0.0, min_cash))
    peak_negative_month = next(row.month for row in timeline if row.cumulative_cash_flow == min_cash)

    # Baseline: every cost paid up front, no deposit inflows
    peak_without = (
        converted_orders * inp.unit_production_cost
        + converted_orders * inp.fulfillment_cost_per_unit
        + total_refunds
    )
    capital_reduction = peak_without - peak_with

    break_even_month = None
    was_negative = False
    for row in timeline:
        if row.cumulative_cash_flow < 0:
            was_negative = True
        elif was_negative:
            break_even_month = row.month
            break

    return DepositImpactResult(
        input=inp,
        cash_flow_timeline=timeline,
        total_deposits_collected=total_deposits_collected,
        total_refunds_issued=total_refunds,
        net_deposits_retained=converted_orders * inp.deposit_amount,
        peak_capital_without_deposits=peak_without,
        peak_capital_with_deposits=peak_with,
        capital_reduction=capital_reduction,
        capital_reduction_percent=capital_reduction / peak_without if peak_without > 0 else 0.0,
        break_even_month=break_even_month,
        peak_negative_month=peak_negative_month,
        min_cumulative_cash=min_cash,
        ending_cumulative_cash=timeline[-1].cumulative_cash_flow,
    )


def calculate_sensitivity_row(base_input: DepositImpactInput, deposit_amount: float) -> DepositSensitivityRow:
    result = calculate_deposit_impact(base_input.with_overrides(deposit_amount=deposit_amount))
    return DepositSensitivityRow(
        deposit_amount=deposit_amount,
        capital_reduction=result.capital_reduction,
        capital_reduction_percent=result.capital_reduction_percent,
        peak_capital_needed=result.peak_capital_with_deposits,
        break_even_month=result.break_even_month,
    )


def build_deposit_sensitivity_table(
    base_input: DepositImpactInput,
    deposit_amounts: Sequence[float] = DEFAULT_DEPOSIT_AMOUNTS,
) -> DepositSensitivityTable:
    """Re-run the full projection once per candidate deposit"""
    return DepositSensitivityTable(
        rows=[calculate_sensitivity_row(base_input, amount) for amount in deposit_amounts],
        base_case=calculate_sensitivity_row(base_input, base_input.deposit_amount),
        conversion_rate=base_input.conversion_rate,
        pre_order_count=base_input.pre_order_count,
    )


def calculate_volume_scenarios(base_input: DepositImpactInput, volumes: Sequence[int]) -> List[DepositImpactResult]:
    return [calculate_deposit_impact(base_input.with_overrides(pre_order_count=v)) for v in volumes]


def find_optimal_deposit(
    base_input: DepositImpactInput,
    target_capital_needed: float,
    min_deposit: float = 50,
    max_deposit: float = 1000,
) -> float:
    """
    Binary search for the smallest deposit whose peak capital need is at or
    under the target. Converges to within $10 and returns the upper bound.
    """
    low, high = min_deposit, max_deposit
    while high - low > 10:
        mid = round_half_up((low + high) / 2)
        result = calculate_deposit_impact(base_input.with_overrides(deposit_amount=mid))
        if result.peak_capital_with_deposits > target_capital_needed:
            low = mid
        else:
            high = mid
    return high


def calculate_self_funding_deposit(base_input: DepositImpactInput) -> SelfFundingResult:
    """Smallest deposit that needs no outside capital, if any deposit up to full price does"""
    max_deposit = base_input.full_price
    at_max = calculate_deposit_impact(base_input.with_overrides(deposit_amount=max_deposit))
    if at_max.peak_capital_with_deposits > 0:
        return SelfFundingResult(deposit_amount=max_deposit, is_possible=False, max_deposit=max_deposit)

    return SelfFundingResult(
        deposit_amount=find_optimal_deposit(base_input, 0, 0, max_deposit),
        is_possible=True,
        max_deposit=max_deposit,
    )
