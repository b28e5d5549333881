"""COGS breakdown by line item and year-over-year scale reduction"""
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Union

from config.default_params import DEFAULT_ANNUAL_COST_REDUCTION
from .models import COGSBreakdownConfig
from .money import round_cents

ConfigLike = Union[COGSBreakdownConfig, Mapping[str, float], None]

# (category, display name, config field)
LINE_ITEMS = (
    ("manufacturing", "Manufacturing Cost", "manufacturing_cost"),
    ("freight", "Overseas Freight", "freight_cost"),
    ("packaging", "Packaging & Materials", "packaging_cost"),
    ("duties", "Import Duties", "duties_cost"),
)


@dataclass(frozen=True)
class COGSLineItem:
    category: str
    name: str
    per_unit: float
    total: float
    percentage: float   # share of total per-unit COGS, 0..100


@dataclass(frozen=True)
class COGSBreakdownResult:
    volume: float
    line_items: List[COGSLineItem]
    total_per_unit: float
    total_cost: float
    summary: Dict[str, float]   # category -> total dollars


def resolve_config(config: ConfigLike = None) -> COGSBreakdownConfig:
    """Merge a partial override mapping onto the default split"""
    if config is None:
        return COGSBreakdownConfig()
    if isinstance(config, COGSBreakdownConfig):
        return config
    return COGSBreakdownConfig().with_overrides(**dict(config))


def calculate_cogs_breakdown(volume: float, config: ConfigLike = None) -> COGSBreakdownResult:
    if volume <= 0:
        raise ValueError("Volume must be greater than 0")

    cfg = resolve_config(config)
    total_per_unit = cfg.total_per_unit

    line_items = []
    summary = {}
    for category, name, attr in LINE_ITEMS:
        per_unit = getattr(cfg, attr)
        line_items.append(COGSLineItem(
            category=category,
            name=name,
            per_unit=per_unit,
            total=volume * per_unit,
            percentage=(per_unit / total_per_unit) * 100 if total_per_unit > 0 else 0.0,
        ))
        summary[category] = volume * per_unit

    return COGSBreakdownResult(
        volume=volume,
        line_items=line_items,
        total_per_unit=total_per_unit,
        total_cost=volume * total_per_unit,
        summary=summary,
    )


@dataclass(frozen=True)
class BreakdownCalculator:
    """Breakdown calculator bound to a fixed configuration"""
    config: COGSBreakdownConfig

    def __call__(self, volume: float) -> COGSBreakdownResult:
        return calculate_cogs_breakdown(volume, self.config)


def create_breakdown_calculator(config: ConfigLike = None) -> BreakdownCalculator:
    return BreakdownCalculator(resolve_config(config))


def apply_cost_reduction(config: COGSBreakdownConfig, reduction_rate: float) -> COGSBreakdownConfig:
    """One year of scale economies; duties do not scale"""
    factor = 1 - reduction_rate
    return COGSBreakdownConfig(
        manufacturing_cost=round_cents(config.manufacturing_cost * factor),
        freight_cost=round_cents(config.freight_cost * factor),
        packaging_cost=round_cents(config.packaging_cost * factor),
        duties_cost=config.duties_cost,
    )


def project_cogs_breakdown(
    volumes_by_year: Sequence[float],
    base_config: ConfigLike = None,
    annual_cost_reduction: float = DEFAULT_ANNUAL_COST_REDUCTION,
) -> List[COGSBreakdownResult]:
    """
    Multi-year breakdown where each year's reduction compounds on the
    previous year's (already reduced) config rather than the base.
    """
    current = resolve_config(base_config)
    results = []
    for year_index, volume in enumerate(volumes_by_year):
        if year_index > 0:
            current = apply_cost_reduction(current, annual_cost_reduction)
        results.append(calculate_cogs_breakdown(volume, current))
    return results


def config_for_year(
    base_config: ConfigLike,
    year_index: int,
    annual_cost_reduction: float = DEFAULT_ANNUAL_COST_REDUCTION,
) -> COGSBreakdownConfig:
    """Per-unit config after `year_index` compounding reduction steps"""
    current = resolve_config(base_config)
    for _ in range(year_index):
        current = apply_cost_reduction(current, annual_cost_reduction)
    return current
