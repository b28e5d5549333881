"""Rounding and display helpers shared by the calculators"""
import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity (JS Math.round)"""
    return int(math.floor(value + 0.5))


def round_cents(value: float) -> float:
    """Round a dollar amount to cents with half-up semantics"""
    return math.floor(value * 100 + 0.5) / 100


def format_currency(value: float) -> str:
    """Whole-dollar currency string, e.g. $1,234 or -$500"""
    sign = "-" if value < 0 else ""
    return f"{sign}${round_half_up(abs(value)):,}"


def format_percent(value: float) -> str:
    """Fraction to one-decimal percent, e.g. 0.1234 -> 12.3%"""
    return f"{value * 100:.1f}%"


def format_compact_currency(value: float) -> str:
    """Compact currency for matrix tables: $1.25M, $250K, $900"""
    if value >= 1_000_000:
        return f"${value / 1_000_000:.2f}M"
    if value >= 1_000:
        return f"${value / 1_000:.0f}K"
    return f"${value:.0f}"
