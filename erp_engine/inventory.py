"""Batch ordering with MOQ constraints and a day-by-day reorder simulation"""
import logging
import math
from dataclasses import dataclass
from typing import List, Optional

from config.default_params import SCENARIO_ANNUAL_UNITS, DEFAULT_INVENTORY_SCENARIO
from .models import InventoryConfig
from .money import round_half_up

logger = logging.getLogger(__name__)

DAYS_PER_YEAR = 365
DAYS_PER_MONTH = 30


@dataclass
class PendingOrder:
    order_date: int      # day number
    arrival_date: int    # order_date + lead time
    units: int
    cost: float


@dataclass(frozen=True)
class InventoryTimelineEntry:
    day: int
    month: int
    year: int
    inventory_level: int
    reorder_event: bool
    order_placed: Optional[int]
    order_arrived: Optional[int]
    cash_outflow: float
    cumulative_cash_outflow: float


@dataclass(frozen=True)
class MonthlyInventorySummary:
    month: int
    avg_inventory: int
    min_inventory: int
    max_inventory: int
    orders_placed: int
    total_cash_outflow: float


def calculate_daily_sales_rate(annual_units: float) -> float:
    return annual_units / DAYS_PER_YEAR


def calculate_safety_stock(daily_rate: float, safety_days: float) -> int:
    return math.ceil(daily_rate * safety_days)


def calculate_reorder_point(daily_rate: float, lead_time_days: float, safety_days: float) -> int:
    """Reorder point = lead-time demand + safety stock, in whole units"""
    lead_time_demand = daily_rate * lead_time_days
    return math.ceil(lead_time_demand + calculate_safety_stock(daily_rate, safety_days))


def calculate_working_capital(inventory_units: float, unit_cost: float) -> float:
    return inventory_units * unit_cost


def should_reorder(current_inventory: float, reorder_point: float) -> bool:
    return current_inventory <= reorder_point


def calculate_order_quantity(target_inventory: float, current_inventory: float, moq: int) -> int:
    """Units needed to reach target, rounded up to a whole multiple of MOQ"""
    needed = target_inventory - current_inventory
    if needed <= 0:
        return 0
    return math.ceil(needed / moq) * moq


def scenario_annual_units(scenario: str) -> int:
    """Annual units for a scenario name; unknown names fall back to moderate"""
    units = SCENARIO_ANNUAL_UNITS.get(scenario)
    if units is None:
        logger.warning("Unknown inventory scenario %r, using %s", scenario, DEFAULT_INVENTORY_SCENARIO)
        units = SCENARIO_ANNUAL_UNITS[DEFAULT_INVENTORY_SCENARIO]
    return units


def project_inventory_timeline(
    scenario: str,
    config: Optional[InventoryConfig] = None,
    years: int = 1,
) -> List[InventoryTimelineEntry]:
    """
    Simulate inventory one day at a time.

    Each day: receive any order arriving today, reorder if effective
    inventory (on hand + in transit) is at or below the reorder point and no
    order is outstanding, then consume one day of demand (floored at zero).
    The opening stock sits at target and its purchase seeds cumulative cash
    outflow without appearing as an order event.
    """
    config = config or InventoryConfig()
    daily_rate = calculate_daily_sales_rate(scenario_annual_units(scenario))
    reorder_point = calculate_reorder_point(daily_rate, config.lead_time_days, config.safety_days)
    target_inventory = reorder_point + config.moq
    total_days = years * DAYS_PER_YEAR

    logger.debug(
        "Inventory sim %s: daily_rate=%.3f reorder_point=%d target=%d days=%d",
        scenario, daily_rate, reorder_point, target_inventory, total_days,
    )

    timeline = []
    pending: List[PendingOrder] = []
    current_inventory = float(target_inventory)
    cumulative_cash_outflow = current_inventory * config.unit_cost

    for day in range(1, total_days + 1):
        order_placed = None
        order_arrived = None
        cash_outflow = 0.0
        reorder_event = False

        arriving = [o for o in pending if o.arrival_date == day]
        for order in arriving:
            current_inventory += order.units
            order_arrived = order.units
        pending = [o for o in pending if o.arrival_date != day]

        effective_inventory = current_inventory + sum(o.units for o in pending)
        if should_reorder(effective_inventory, reorder_point) and not pending:
            qty = calculate_order_quantity(target_inventory, current_inventory, config.moq)
            if qty > 0:
                cost = qty * config.unit_cost
                pending.append(PendingOrder(
                    order_date=day,
                    arrival_date=day + config.lead_time_days,
                    units=qty,
                    cost=cost,
                ))
                order_placed = qty
                cash_outflow = cost
                cumulative_cash_outflow += cost
                reorder_event = True
                logger.debug("Day %d: ordered %d units ($%.2f)", day, qty, cost)

        current_inventory = max(0.0, current_inventory - daily_rate)

        timeline.append(InventoryTimelineEntry(
            day=day,
            month=math.ceil(day / DAYS_PER_MONTH),
            year=math.ceil(day / DAYS_PER_YEAR),
            inventory_level=round_half_up(current_inventory),
            reorder_event=reorder_event,
            order_placed=order_placed,
            order_arrived=order_arrived,
            cash_outflow=cash_outflow,
            cumulative_cash_outflow=cumulative_cash_outflow,
        ))

    return timeline


def summarize_inventory_by_month(timeline: List[InventoryTimelineEntry]) -> List[MonthlyInventorySummary]:
    """Roll the daily timeline up into 30-day months"""
    by_month = {}
    for entry in timeline:
        by_month.setdefault(entry.month, []).append(entry)

    summaries = []
    for month, entries in by_month.items():
        levels = [e.inventory_level for e in entries]
        summaries.append(MonthlyInventorySummary(
            month=month,
            avg_inventory=round_half_up(sum(levels) / len(levels)),
            min_inventory=min(levels),
            max_inventory=max(levels),
            orders_placed=sum(1 for e in entries if e.order_placed is not None),
            total_cash_outflow=sum(e.cash_outflow for e in entries),
        ))
    return summaries
