"""Logistic (sigmoid) adoption curves behind the scenario unit tables"""
import math
from typing import Dict, List

from config.default_params import ADOPTION_BASE_PARAMS, ADOPTION_SCENARIO_ADJUSTMENTS


def sigmoid(x: float, L: float, x0: float, k: float, b: float = 0.0) -> float:
    """L / (1 + e^(-k (x - x0))) + b"""
    return L / (1 + math.exp(-k * (x - x0))) + b


def get_scenario_params(scenario: str) -> Dict[str, float]:
    """Base curve shifted, steepened and offset for one scenario"""
    adj = ADOPTION_SCENARIO_ADJUSTMENTS.get(scenario)
    if adj is None:
        valid = ", ".join(ADOPTION_SCENARIO_ADJUSTMENTS)
        raise ValueError(f"Unknown scenario: {scenario}. Valid scenarios: {valid}")
    return {
        'L': ADOPTION_BASE_PARAMS['L'],
        'x0': ADOPTION_BASE_PARAMS['x0'] + adj['x0_shift'],
        'k': ADOPTION_BASE_PARAMS['k'] * adj['k_multiplier'],
        'b': adj['b'],
    }


def adoption_curve(scenario: str, years: List[float]) -> List[float]:
    p = get_scenario_params(scenario)
    return [sigmoid(x, p['L'], p['x0'], p['k'], p['b']) for x in years]
