import math


def calculate_ltv_to_cac_ratio(ltv: float, cac: float) -> float:
    """Lifetime value per dollar of acquisition cost"""
    return ltv / cac if cac > 0 else math.inf


def gross_margin(revenue: float, cogs: float) -> float:
    """Gross margin as a fraction of revenue"""
    return (revenue - cogs) / revenue if revenue > 0 else 0.0
