"""Sports-calendar seasonality: monthly revenue and demand multipliers"""
import calendar
from dataclasses import dataclass
from typing import List, Tuple

from config.default_params import SEASONALITY_PROFILES

CALENDAR_TYPES = list(SEASONALITY_PROFILES)
QUARTER_MONTHS = {1: (1, 2, 3), 2: (4, 5, 6), 3: (7, 8, 9), 4: (10, 11, 12)}


@dataclass(frozen=True)
class MonthlySeasonality:
    month: int
    month_name: str
    period: str
    revenue_multiplier: float
    demand_multiplier: float


def _profile(calendar_type: str):
    profile = SEASONALITY_PROFILES.get(calendar_type)
    if profile is None:
        raise ValueError(f"Unknown calendar type: {calendar_type}")
    return profile


def get_period_for_month(month: int, calendar_type: str) -> str:
    for period, cfg in _profile(calendar_type).items():
        if month in cfg['months']:
            return period
    return 'off_season'


def get_monthly_seasonality(calendar_type: str) -> List[MonthlySeasonality]:
    profile = _profile(calendar_type)
    out = []
    for month in range(1, 13):
        period = get_period_for_month(month, calendar_type)
        out.append(MonthlySeasonality(
            month=month,
            month_name=calendar.month_name[month],
            period=period,
            revenue_multiplier=profile[period]['revenue'],
            demand_multiplier=profile[period]['demand'],
        ))
    return out


def get_revenue_multiplier(month: int, calendar_type: str) -> float:
    return get_monthly_seasonality(calendar_type)[month - 1].revenue_multiplier


def distribute_annually(annual_value: float, calendar_type: str, multiplier_type: str = 'revenue') -> List[float]:
    """
    Split an annual figure into 12 months weighted by the multipliers, so the
    months always sum back to the annual value.
    """
    if multiplier_type not in ('revenue', 'demand'):
        raise ValueError(f"Unknown multiplier type: {multiplier_type}")
    weights = [getattr(m, f"{multiplier_type}_multiplier") for m in get_monthly_seasonality(calendar_type)]
    total = sum(weights)
    return [annual_value * w / total for w in weights]


def get_quarterly_multiplier(quarter: int, calendar_type: str) -> float:
    if quarter not in QUARTER_MONTHS:
        raise ValueError("Quarter must be 1-4")
    monthly = get_monthly_seasonality(calendar_type)
    return sum(monthly[m - 1].revenue_multiplier for m in QUARTER_MONTHS[quarter]) / 3


def get_average_multiplier(calendar_type: str) -> float:
    return sum(m.revenue_multiplier for m in get_monthly_seasonality(calendar_type)) / 12


def get_peak_trough_months(calendar_type: str) -> Tuple[int, int]:
    """(peak, trough) months by revenue multiplier; ties go to the earlier month"""
    monthly = get_monthly_seasonality(calendar_type)
    peak = max(monthly, key=lambda m: m.revenue_multiplier)
    trough = min(monthly, key=lambda m: m.revenue_multiplier)
    return peak.month, trough.month
