"""Return on Ad Spend: ROAS = attributed revenue / ad spend"""
import math
from dataclasses import dataclass
from typing import Dict, List, Sequence

from .models import HealthRating, MarketingSpend, RevenueAttribution
from .cac import BLENDED


@dataclass(frozen=True)
class ROASResult:
    channel_id: str
    period: str
    ad_spend: float
    revenue: float
    roas: float           # 0 when there was no spend
    roas_percent: float


def _result(channel_id: str, period: str, spend: float, revenue: float) -> ROASResult:
    roas = revenue / spend if spend > 0 else 0.0
    return ROASResult(channel_id, period, spend, revenue, roas, roas * 100)


def calculate_channel_roas(spend: MarketingSpend, attribution: RevenueAttribution) -> ROASResult:
    if spend.channel_id != attribution.channel_id:
        raise ValueError("Channel ID mismatch between spend and attribution")
    if spend.period != attribution.period:
        raise ValueError("Period mismatch between spend and attribution")
    return _result(spend.channel_id, spend.period, spend.amount, attribution.revenue)


def calculate_blended_roas(
    spends: Sequence[MarketingSpend],
    attributions: Sequence[RevenueAttribution],
    period: str,
) -> ROASResult:
    total_spend = sum(s.amount for s in spends if s.period == period)
    total_revenue = sum(a.revenue for a in attributions if a.period == period)
    return _result(BLENDED, period, total_spend, total_revenue)


def calculate_roas_trend(
    spends: Sequence[MarketingSpend],
    attributions: Sequence[RevenueAttribution],
    periods: Sequence[str],
) -> List[ROASResult]:
    return [calculate_blended_roas(spends, attributions, p) for p in periods]


def calculate_roas_by_channel(
    spends: Sequence[MarketingSpend],
    attributions: Sequence[RevenueAttribution],
    period: str,
) -> Dict[str, ROASResult]:
    results = {}
    for spend in spends:
        if spend.period != period:
            continue
        attribution = next(
            (a for a in attributions if a.channel_id == spend.channel_id and a.period == period),
            None,
        )
        if attribution is not None:
            results[spend.channel_id] = calculate_channel_roas(spend, attribution)
        else:
            results[spend.channel_id] = _result(spend.channel_id, period, spend.amount, 0.0)
    return results


def evaluate_roas_health(roas: float) -> HealthRating:
    if roas >= 4:
        return HealthRating.EXCELLENT
    if roas >= 2:
        return HealthRating.GOOD
    if roas >= 1:
        return HealthRating.FAIR
    return HealthRating.POOR


def calculate_break_even_roas(gross_margin: float) -> float:
    """Minimum ROAS that covers product cost at the given margin"""
    if gross_margin <= 0:
        return math.inf
    return 1 / gross_margin


def calculate_incremental_roas(additional_spend: float, projected_additional_revenue: float) -> float:
    if additional_spend <= 0:
        return 0.0
    return projected_additional_revenue / additional_spend


def rank_channels_by_roas(results: Dict[str, ROASResult]) -> List[str]:
    """Channel ids ordered from best to worst ROAS"""
    ranked = sorted(results.items(), key=lambda item: item[1].roas, reverse=True)
    return [channel_id for channel_id, _ in ranked]
