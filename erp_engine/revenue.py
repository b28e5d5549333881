"""Discount-adjusted revenue, customer discount tiers and promo codes"""
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence

from config.default_params import BASE_PRICE, DEFAULT_DISCOUNT_RATE, DISCOUNT_TIERS
from .models import DiscountTier, DiscountType


def calculate_revenue(units: float, price: float, discount_rate: float) -> float:
    """Net revenue = units * price * (1 - discount)"""
    return units * price * (1 - discount_rate)


def project_revenue(
    units_by_year: Sequence[float],
    base_price: float = BASE_PRICE,
    avg_discount: float = DEFAULT_DISCOUNT_RATE,
) -> List[float]:
    return [calculate_revenue(units, base_price, avg_discount) for units in units_by_year]


def total_projected_revenue(
    units_by_year: Sequence[float],
    base_price: float = BASE_PRICE,
    avg_discount: float = DEFAULT_DISCOUNT_RATE,
) -> float:
    return sum(project_revenue(units_by_year, base_price, avg_discount))


def get_discount_range(tier: DiscountTier):
    """(min, max) discount for a customer segment"""
    return DISCOUNT_TIERS[DiscountTier(tier).value]


def get_average_discount(tier: DiscountTier) -> float:
    low, high = get_discount_range(tier)
    return (low + high) / 2


@dataclass(frozen=True)
class PromoCode:
    code: str
    discount_type: DiscountType
    discount_value: float                 # percent points for PERCENT, dollars for FIXED
    channel: str                          # pt, doctor, influencer, ad, organic
    expires_at: Optional[datetime] = None
    max_uses: Optional[int] = None
    used_count: int = 0


def is_promo_code_valid(promo: PromoCode, now: Optional[datetime] = None) -> bool:
    now = now or datetime.now()
    if promo.expires_at is not None and now > promo.expires_at:
        return False
    if promo.max_uses is not None and promo.used_count >= promo.max_uses:
        return False
    return True


def calculate_promo_discount(promo: PromoCode, price: float, now: Optional[datetime] = None) -> float:
    """Dollar discount off `price`; 0 for an expired or used-up code"""
    if not is_promo_code_valid(promo, now):
        return 0.0
    if promo.discount_type == DiscountType.PERCENT:
        return price * (promo.discount_value / 100)
    if promo.discount_type == DiscountType.FIXED:
        return min(promo.discount_value, price)
    raise ValueError(f"Unhandled discount type: {promo.discount_type}")
