"""Customer Acquisition Cost: CAC = marketing spend / new customers"""
import math
from dataclasses import dataclass
from typing import Dict, List, Sequence

from .models import ConversionData, HealthRating, MarketingSpend
from .metrics import calculate_ltv_to_cac_ratio

BLENDED = "blended"


@dataclass(frozen=True)
class CACResult:
    channel_id: str      # channel id or "blended"
    period: str
    total_spend: float
    new_customers: int
    cac: float           # 0 when there were no new customers


def _cac(spend: float, customers: int) -> float:
    # zero customers -> 0 as the "undefined" sentinel
    return spend / customers if customers > 0 else 0.0


def calculate_channel_cac(spend: MarketingSpend, conversions: ConversionData) -> CACResult:
    if spend.channel_id != conversions.channel_id:
        raise ValueError("Channel ID mismatch between spend and conversions")
    if spend.period != conversions.period:
        raise ValueError("Period mismatch between spend and conversions")

    return CACResult(
        channel_id=spend.channel_id,
        period=spend.period,
        total_spend=spend.amount,
        new_customers=conversions.new_customers,
        cac=_cac(spend.amount, conversions.new_customers),
    )


def calculate_blended_cac(
    spends: Sequence[MarketingSpend],
    conversions: Sequence[ConversionData],
    period: str,
) -> CACResult:
    """Totals spend and customers across every channel before dividing"""
    total_spend = sum(s.amount for s in spends if s.period == period)
    total_customers = sum(c.new_customers for c in conversions if c.period == period)
    return CACResult(
        channel_id=BLENDED,
        period=period,
        total_spend=total_spend,
        new_customers=total_customers,
        cac=_cac(total_spend, total_customers),
    )


def calculate_cac_trend(
    spends: Sequence[MarketingSpend],
    conversions: Sequence[ConversionData],
    periods: Sequence[str],
) -> List[CACResult]:
    return [calculate_blended_cac(spends, conversions, p) for p in periods]


def calculate_cac_by_channel(
    spends: Sequence[MarketingSpend],
    conversions: Sequence[ConversionData],
    period: str,
) -> Dict[str, CACResult]:
    results = {}
    for spend in spends:
        if spend.period != period:
            continue
        conversion = next(
            (c for c in conversions if c.channel_id == spend.channel_id and c.period == period),
            None,
        )
        if conversion is not None:
            results[spend.channel_id] = calculate_channel_cac(spend, conversion)
        else:
            results[spend.channel_id] = CACResult(spend.channel_id, period, spend.amount, 0, 0.0)
    return results


def calculate_cac_payback(cac: float, monthly_arpu: float, gross_margin: float) -> float:
    """Months to recover CAC from gross profit per customer"""
    if monthly_arpu <= 0 or gross_margin <= 0:
        return math.inf
    return cac / (monthly_arpu * gross_margin)


def evaluate_cac_health(cac: float, ltv: float, payback_months: float) -> HealthRating:
    ratio = calculate_ltv_to_cac_ratio(ltv, cac)
    if ratio >= 3 and payback_months <= 12:
        return HealthRating.EXCELLENT
    if ratio >= 2 and payback_months <= 18:
        return HealthRating.GOOD
    if ratio >= 1 and payback_months <= 24:
        return HealthRating.FAIR
    return HealthRating.POOR
