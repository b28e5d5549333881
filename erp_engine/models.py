from dataclasses import dataclass, field, replace
from enum import Enum
from datetime import date
from typing import List, Mapping, Optional, Tuple

from config.default_params import (
    DEFAULT_COST_POINTS, DEFAULT_COGS_BREAKDOWN, DEFAULT_INVENTORY_CONFIG,
    DEFAULT_CAC_TARGET, DEFAULT_DEPOSIT_INPUT, DEFAULT_ASSUMPTIONS,
    DEFAULT_VALUATION_ASSUMPTIONS, DEFAULT_EMPLOYEE_BURDEN_RATE,
)


class _Overridable:
    def with_overrides(self, **fields):
        """Copy with the given fields replaced; unset fields keep their values"""
        return replace(self, **fields)


# --- Enumerations -----------------------------------------------------------

class AlertSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


class RunwayRisk(str, Enum):
    CRITICAL = "critical"          # < 6 months
    LOW = "low"                    # < 12
    MODERATE = "moderate"          # < 18
    COMFORTABLE = "comfortable"    # < 24
    EXTENDED = "extended"          # >= 24


class RaiseInstrument(str, Enum):
    EQUITY = "equity"
    SAFE = "safe"
    CONVERTIBLE_DEBT = "convertible_debt"


class ChannelCategory(str, Enum):
    DIGITAL = "digital"
    FIELD = "field"
    INFLUENCER = "influencer"
    CONTENT = "content"


class HealthRating(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class CACStatus(str, Enum):
    UNDER = "under"
    AT = "at"
    OVER = "over"
    CRITICAL = "critical"


class DiscountTier(str, Enum):
    INDIVIDUAL = "individual"
    PT = "pt"
    DOCTOR = "doctor"
    WHOLESALER = "wholesaler"


class DiscountType(str, Enum):
    PERCENT = "percent"
    FIXED = "fixed"


class TerminalValueMethod(str, Enum):
    GORDON_GROWTH = "gordon-growth"
    EXIT_MULTIPLE = "exit-multiple"


class PersonnelType(str, Enum):
    EMPLOYEE = "employee"
    CONTRACTOR = "contractor"


class RateType(str, Enum):
    MONTHLY = "monthly"
    HOURLY = "hourly"


# --- COGS -------------------------------------------------------------------

@dataclass(frozen=True)
class CostPoint:
    volume: float
    cost_per_unit: float


def default_cost_points() -> List[CostPoint]:
    return [CostPoint(p['volume'], p['cost_per_unit']) for p in DEFAULT_COST_POINTS]


@dataclass(frozen=True)
class InterpolationConfig(_Overridable):
    points: Optional[Tuple[CostPoint, ...]] = None   # defaults to the built-in table
    min_cost_floor: Optional[float] = None  # defaults to the lowest anchor cost

    def __post_init__(self):
        if self.points is None:
            object.__setattr__(self, 'points', tuple(default_cost_points()))
        else:
            object.__setattr__(self, 'points', tuple(self.points))


@dataclass(frozen=True)
class COGSBreakdownConfig(_Overridable):
    # Per-unit dollars
    manufacturing_cost: float = DEFAULT_COGS_BREAKDOWN['manufacturing_cost']
    freight_cost: float = DEFAULT_COGS_BREAKDOWN['freight_cost']
    packaging_cost: float = DEFAULT_COGS_BREAKDOWN['packaging_cost']
    duties_cost: float = DEFAULT_COGS_BREAKDOWN['duties_cost']   # not reduced by scale

    @property
    def total_per_unit(self) -> float:
        return self.manufacturing_cost + self.freight_cost + self.packaging_cost + self.duties_cost


# --- Inventory --------------------------------------------------------------

@dataclass(frozen=True)
class InventoryConfig(_Overridable):
    moq: int = DEFAULT_INVENTORY_CONFIG['moq']                        # minimum order quantity
    unit_cost: float = DEFAULT_INVENTORY_CONFIG['unit_cost']
    lead_time_days: int = DEFAULT_INVENTORY_CONFIG['lead_time_days']  # manufacturing lead time
    safety_days: int = DEFAULT_INVENTORY_CONFIG['safety_days']        # safety stock in days of demand


# --- Marketing --------------------------------------------------------------

@dataclass(frozen=True)
class MarketingSpend:
    channel_id: str
    period: str          # e.g. "2024-Q1" or "2024-01"
    amount: float
    budget: float = 0.0


@dataclass(frozen=True)
class ConversionData:
    channel_id: str
    period: str
    new_customers: int
    leads: int = 0
    conversion_rate: float = 0.0


@dataclass(frozen=True)
class RevenueAttribution:
    channel_id: str
    period: str
    revenue: float


@dataclass(frozen=True)
class CACTarget(_Overridable):
    target_cac: float = DEFAULT_CAC_TARGET['target_cac']
    warning_threshold: float = DEFAULT_CAC_TARGET['warning_threshold']    # fraction above target
    critical_threshold: float = DEFAULT_CAC_TARGET['critical_threshold']
    channel_targets: Mapping[str, float] = field(default_factory=dict)   # per-channel overrides


# --- Pre-order deposits -----------------------------------------------------

@dataclass(frozen=True)
class DepositImpactInput(_Overridable):
    deposit_amount: float = DEFAULT_DEPOSIT_INPUT['deposit_amount']
    conversion_rate: float = DEFAULT_DEPOSIT_INPUT['conversion_rate']    # 0..1
    pre_order_count: int = DEFAULT_DEPOSIT_INPUT['pre_order_count']

    # Timing, months (1 = Jan Y1)
    pre_order_start_month: int = DEFAULT_DEPOSIT_INPUT['pre_order_start_month']
    pre_order_duration_months: int = DEFAULT_DEPOSIT_INPUT['pre_order_duration_months']
    production_start_month: int = DEFAULT_DEPOSIT_INPUT['production_start_month']
    fulfillment_start_month: int = DEFAULT_DEPOSIT_INPUT['fulfillment_start_month']
    fulfillment_duration_months: int = DEFAULT_DEPOSIT_INPUT['fulfillment_duration_months']

    # Costs and price
    unit_production_cost: float = DEFAULT_DEPOSIT_INPUT['unit_production_cost']
    fulfillment_cost_per_unit: float = DEFAULT_DEPOSIT_INPUT['fulfillment_cost_per_unit']
    full_price: float = DEFAULT_DEPOSIT_INPUT['full_price']


@dataclass(frozen=True)
class PreOrderScenario:
    name: str
    pre_order_count: int
    monthly_growth_rate: float = 0.0


# --- Capital raise ----------------------------------------------------------

@dataclass(frozen=True)
class SAFETerms:
    valuation_cap: float
    discount_rate: float          # e.g. 0.20 = 20% discount to next round
    mfn_clause: bool = False
    pro_rata_rights: bool = False


@dataclass(frozen=True)
class ConvertibleDebtTerms:
    interest_rate: float
    maturity_months: int
    valuation_cap: float
    discount_rate: float


@dataclass(frozen=True)
class EquityTerms:
    pre_money_valuation: float
    option_pool_increase: float = 0.0
    liquidation_preference: float = 1.0
    participating: bool = False


@dataclass(frozen=True)
class RaiseScenarioInput(_Overridable):
    raise_amount: float
    instrument: RaiseInstrument
    pre_money_valuation: float
    safe_terms: Optional[SAFETerms] = None
    convertible_terms: Optional[ConvertibleDebtTerms] = None
    equity_terms: Optional[EquityTerms] = None


@dataclass(frozen=True)
class BurnRateComponents:
    payroll: float
    marketing: float
    operations: float
    cogs: float
    total: float


# --- Scenario pipeline ------------------------------------------------------

@dataclass(frozen=True)
class Assumptions(_Overridable):
    base_price: float = DEFAULT_ASSUMPTIONS['base_price']
    discount_rate: float = DEFAULT_ASSUMPTIONS['discount_rate']
    cogs: COGSBreakdownConfig = field(default_factory=COGSBreakdownConfig)
    annual_cost_reduction: float = DEFAULT_ASSUMPTIONS['annual_cost_reduction']
    tooling_cost: float = DEFAULT_ASSUMPTIONS['tooling_cost']
    retooling_years: int = DEFAULT_ASSUMPTIONS['retooling_years']


# --- Valuation --------------------------------------------------------------

@dataclass(frozen=True)
class ValuationAssumptions(_Overridable):
    # Revenue
    price_per_unit: float = DEFAULT_VALUATION_ASSUMPTIONS['price_per_unit']
    annual_price_increase: float = DEFAULT_VALUATION_ASSUMPTIONS['annual_price_increase']
    discount_rate: float = DEFAULT_VALUATION_ASSUMPTIONS['discount_rate']

    # COGS
    unit_cost: float = DEFAULT_VALUATION_ASSUMPTIONS['unit_cost']
    cost_reduction_per_year: float = DEFAULT_VALUATION_ASSUMPTIONS['cost_reduction_per_year']
    shipping_per_unit: float = DEFAULT_VALUATION_ASSUMPTIONS['shipping_per_unit']

    # Operating expenses
    marketing_base_budget: float = DEFAULT_VALUATION_ASSUMPTIONS['marketing_base_budget']
    marketing_percent_of_revenue: float = DEFAULT_VALUATION_ASSUMPTIONS['marketing_percent_of_revenue']
    headcount: int = DEFAULT_VALUATION_ASSUMPTIONS['headcount']
    avg_salary: float = DEFAULT_VALUATION_ASSUMPTIONS['avg_salary']
    salary_growth_rate: float = DEFAULT_VALUATION_ASSUMPTIONS['salary_growth_rate']
    benefits_multiplier: float = DEFAULT_VALUATION_ASSUMPTIONS['benefits_multiplier']
    office_and_ops: float = DEFAULT_VALUATION_ASSUMPTIONS['office_and_ops']

    # Capital
    working_capital_percent: float = DEFAULT_VALUATION_ASSUMPTIONS['working_capital_percent']
    capex_year1: float = DEFAULT_VALUATION_ASSUMPTIONS['capex_year1']
    capex_growth_rate: float = DEFAULT_VALUATION_ASSUMPTIONS['capex_growth_rate']

    # Corporate
    tax_rate: float = DEFAULT_VALUATION_ASSUMPTIONS['tax_rate']
    wacc: float = DEFAULT_VALUATION_ASSUMPTIONS['wacc']
    terminal_growth_rate: float = DEFAULT_VALUATION_ASSUMPTIONS['terminal_growth_rate']
    exit_multiple: float = DEFAULT_VALUATION_ASSUMPTIONS['exit_multiple']


# --- G&A personnel ----------------------------------------------------------

@dataclass(frozen=True)
class Personnel(_Overridable):
    id: str
    name: str
    role: str
    type: PersonnelType
    rate: float                       # per month or per hour, see rate_type
    rate_type: RateType
    start_date: date
    end_date: Optional[date] = None
    hours_per_month: Optional[float] = None    # hourly staff only
    burden_rate: float = DEFAULT_EMPLOYEE_BURDEN_RATE   # 1.3 = 30% taxes and benefits
