"""Volume -> unit cost lookup by piecewise-linear interpolation

Default anchors: $96 @ 1,000 units and $82 @ 5,000 units. Below the first
anchor the first anchor's cost applies (no extrapolation); at or above the
last anchor the cost is clamped to the floor.
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from .models import CostPoint, InterpolationConfig, default_cost_points
from .money import round_cents


@dataclass(frozen=True)
class CostCalculationResult:
    volume: float
    cost_per_unit: float
    total_cost: float
    at_floor: bool   # True when the cost was clamped to the floor


def _sorted_points(points: Iterable[CostPoint]) -> List[CostPoint]:
    return sorted(points, key=lambda p: p.volume)


def calculate_cost(
    volume: float,
    points: Optional[Sequence[CostPoint]] = None,
    min_cost_floor: Optional[float] = None,
) -> CostCalculationResult:
    """
    Calculate cost per unit for a volume using linear interpolation

    Args:
        volume: Units ordered, must be > 0
        points: Calibration anchors (default table when omitted)
        min_cost_floor: Lowest allowed unit cost (defaults to the cheapest anchor)

    Returns:
        CostCalculationResult rounded to cents
    """
    if volume <= 0:
        raise ValueError("Volume must be greater than 0")

    anchors = _sorted_points(points if points is not None else default_cost_points())
    if len(anchors) < 2:
        raise ValueError("At least 2 cost points are required for interpolation")
    floor = min_cost_floor if min_cost_floor is not None else min(p.cost_per_unit for p in anchors)

    at_floor = False
    if volume <= anchors[0].volume:
        cost_per_unit = anchors[0].cost_per_unit
    elif volume >= anchors[-1].volume:
        cost_per_unit = floor
        at_floor = True
    else:
        lower, upper = anchors[0], anchors[1]
        for left, right in zip(anchors, anchors[1:]):
            if left.volume <= volume <= right.volume:
                lower, upper = left, right
                break

        volume_range = upper.volume - lower.volume
        cost_range = upper.cost_per_unit - lower.cost_per_unit
        cost_per_unit = lower.cost_per_unit + cost_range * (volume - lower.volume) / volume_range

        if cost_per_unit < floor:
            cost_per_unit = floor
            at_floor = True

    return CostCalculationResult(
        volume=volume,
        cost_per_unit=round_cents(cost_per_unit),
        total_cost=round_cents(volume * cost_per_unit),
        at_floor=at_floor,
    )


@dataclass(frozen=True)
class CostInterpolator:
    """Reusable cost lookup over a fixed, pre-sorted anchor set"""
    points: tuple
    min_cost_floor: float

    def __call__(self, volume: float) -> CostCalculationResult:
        return calculate_cost(volume, self.points, self.min_cost_floor)


def create_interpolator(config: Optional[InterpolationConfig] = None) -> CostInterpolator:
    config = config or InterpolationConfig()
    points = tuple(_sorted_points(config.points))
    if len(points) < 2:
        raise ValueError("At least 2 cost points are required for interpolation")

    floor = config.min_cost_floor
    if floor is None:
        floor = min(p.cost_per_unit for p in points)
    return CostInterpolator(points=points, min_cost_floor=floor)


def cost_curve(volumes: Iterable[float], interpolator: Optional[CostInterpolator] = None):
    """Evaluate the interpolator over a list of volumes (for charting)"""
    interpolator = interpolator or create_interpolator()
    return [interpolator(v) for v in volumes]
