"""Default parameters for the SportsProd planning engine."""

# Volume -> unit cost calibration anchors
DEFAULT_COST_POINTS = [
    {'volume': 1000, 'cost_per_unit': 96.0},
    {'volume': 5000, 'cost_per_unit': 82.0},
]

# Per-unit COGS split (sums to $200: 70 / 17.5 / 7.5 / 5 %)
DEFAULT_COGS_BREAKDOWN = {
    'manufacturing_cost': 140.0,
    'freight_cost': 35.0,
    'packaging_cost': 15.0,
    'duties_cost': 10.0,
}

DEFAULT_ANNUAL_COST_REDUCTION = 0.05

# Inventory simulator
SCENARIO_ANNUAL_UNITS = {
    'conservative': 5000,
    'moderate': 10000,
    'aggressive': 20000,
}
DEFAULT_INVENTORY_SCENARIO = 'moderate'

DEFAULT_INVENTORY_CONFIG = {
    'moq': 1000,
    'unit_cost': 200.0,
    'lead_time_days': 90,
    'safety_days': 30,
}

# Annual unit projections by adoption scenario, years 1-6
PROJECTION_TABLE = {
    'max':      [700, 4400, 9800, 15200, 18700, 20400],
    'upside':   [400, 1800, 4000, 6900, 10300, 13700],
    'base':     [200, 900, 2000, 3600, 5600, 8200],
    'downside': [0, 400, 1100, 2000, 3200, 4700],
    'min':      [0, 400, 1000, 1700, 2400, 3100],
}

BASE_PRICE = 1000.0
DEFAULT_DISCOUNT_RATE = 0.10

# Average discount ranges by customer segment (min, max)
DISCOUNT_TIERS = {
    'individual': (0.0, 0.0),
    'pt': (0.05, 0.10),
    'doctor': (0.10, 0.15),
    'wholesaler': (0.15, 0.25),
}

# Marketing
DEFAULT_CAC_TARGET = {
    'target_cac': 100.0,
    'warning_threshold': 0.15,
    'critical_threshold': 0.30,
    'channel_targets': {
        'paid-search': 120.0,
        'paid-social': 150.0,
        'display': 180.0,
        'email': 50.0,
        'seo': 30.0,
        'events': 200.0,
        'direct-sales': 250.0,
        'partnerships': 100.0,
        'athlete-endorsements': 300.0,
        'coach-ambassadors': 200.0,
        'social-influencers': 180.0,
        'blog': 40.0,
        'video': 80.0,
        'podcast': 100.0,
        'webinars': 90.0,
    },
}

DEFAULT_BUDGET_ALLOCATION = {
    'digital': 0.45,
    'field': 0.25,
    'influencer': 0.15,
    'content': 0.15,
}

# Pre-order deposits
DEFAULT_DEPOSIT_INPUT = {
    'deposit_amount': 200.0,
    'conversion_rate': 0.85,
    'pre_order_count': 250,
    'pre_order_start_month': 1,
    'pre_order_duration_months': 6,
    'production_start_month': 4,
    'fulfillment_start_month': 7,
    'fulfillment_duration_months': 3,
    'unit_production_cost': 200.0,
    'fulfillment_cost_per_unit': 25.0,
    'full_price': 1000.0,
}

DEFAULT_DEPOSIT_AMOUNTS = [50, 100, 150, 200, 250, 300, 400, 500]

DEFAULT_PREORDER_SCENARIOS = [
    {'name': 'Conservative', 'pre_order_count': 100, 'monthly_growth_rate': 0.0},
    {'name': 'Base', 'pre_order_count': 250, 'monthly_growth_rate': 0.0},
    {'name': 'Optimistic', 'pre_order_count': 500, 'monthly_growth_rate': 0.0},
    {'name': 'Aggressive', 'pre_order_count': 1000, 'monthly_growth_rate': 0.0},
]

# Capital raise
DEFAULT_RAISE_AMOUNTS = [100_000, 250_000, 500_000, 1_000_000]
DEFAULT_PRE_MONEY_VALUATION = 2_000_000
FOUNDER_STARTING_OWNERSHIP = 1.0

# G&A burn used by the raise matrix when no burn is supplied
DEFAULT_BURN_INPUTS = {
    'headcount': 3,
    'avg_salary': 80000.0,
    'benefits_multiplier': 1.3,
    'monthly_marketing': 2500.0,
    'monthly_operations': 5000.0,
}

# Scenario assumption block used by the composed pipeline
DEFAULT_ASSUMPTIONS = {
    'base_price': BASE_PRICE,
    'discount_rate': 0.05,
    'annual_cost_reduction': DEFAULT_ANNUAL_COST_REDUCTION,
    'tooling_cost': 50000.0,
    'retooling_years': 5,
}

# Discounted cash flow valuation
DEFAULT_VALUATION_ASSUMPTIONS = {
    'price_per_unit': BASE_PRICE,
    'annual_price_increase': 0.0,
    'discount_rate': 0.05,             # customer discount off list price
    'unit_cost': 200.0,
    'cost_reduction_per_year': 0.05,
    'shipping_per_unit': 25.0,
    'marketing_base_budget': 30000.0,
    'marketing_percent_of_revenue': 0.15,
    'headcount': 3,
    'avg_salary': 80000.0,
    'salary_growth_rate': 0.03,
    'benefits_multiplier': 1.3,
    'office_and_ops': 50000.0,
    'working_capital_percent': 0.10,
    'capex_year1': 50000.0,
    'capex_growth_rate': 0.10,
    'tax_rate': 0.25,
    'wacc': 0.12,
    'terminal_growth_rate': 0.03,
    'exit_multiple': 8.0,
}

# Public comparables for exit multiples (market cap in $M)
COMPARABLE_COMPANIES = [
    {'name': 'Peloton Interactive', 'ticker': 'PTON', 'ev_ebitda': 12.5, 'ev_revenue': 1.8,
     'sector': 'Connected Fitness', 'market_cap': 2500},
    {'name': 'Callaway Golf (Topgolf)', 'ticker': 'MODG', 'ev_ebitda': 10.2, 'ev_revenue': 2.1,
     'sector': 'Sports Equipment', 'market_cap': 6800},
    {'name': 'YETI Holdings', 'ticker': 'YETI', 'ev_ebitda': 14.8, 'ev_revenue': 3.2,
     'sector': 'Outdoor/Consumer Products', 'market_cap': 4200},
    {'name': 'Vista Outdoor', 'ticker': 'VSTO', 'ev_ebitda': 6.5, 'ev_revenue': 0.9,
     'sector': 'Outdoor Products', 'market_cap': 2100},
    {'name': 'Brunswick Corporation', 'ticker': 'BC', 'ev_ebitda': 8.3, 'ev_revenue': 1.4,
     'sector': 'Marine/Recreation', 'market_cap': 5400},
    {'name': 'Acushnet Holdings', 'ticker': 'GOLF', 'ev_ebitda': 11.6, 'ev_revenue': 2.4,
     'sector': 'Golf Equipment', 'market_cap': 4100},
    {'name': 'Clarus Corporation', 'ticker': 'CLAR', 'ev_ebitda': 9.8, 'ev_revenue': 1.6,
     'sector': 'Outdoor Equipment', 'market_cap': 450},
    {'name': 'Solo Brands', 'ticker': 'DTC', 'ev_ebitda': 7.2, 'ev_revenue': 1.1,
     'sector': 'DTC Consumer Products', 'market_cap': 280},
]

# G&A personnel
DEFAULT_HOURS_PER_MONTH = 173.33
DEFAULT_EMPLOYEE_BURDEN_RATE = 1.3
DEFAULT_CONTRACTOR_BURDEN_RATE = 1.0

# Monthly seasonality: period -> months and revenue / demand multipliers
SEASONALITY_PROFILES = {
    'pro': {
        'spring_training': {'months': [2, 3], 'revenue': 1.2, 'demand': 1.3},
        'regular_season': {'months': [4, 5, 6, 7, 8, 9], 'revenue': 1.5, 'demand': 1.6},
        'playoffs': {'months': [10], 'revenue': 1.8, 'demand': 1.4},
        'off_season': {'months': [11, 12, 1], 'revenue': 0.5, 'demand': 0.4},
    },
    'youth': {
        'spring_training': {'months': [3, 4], 'revenue': 1.4, 'demand': 1.5},
        'regular_season': {'months': [5, 6, 7], 'revenue': 1.6, 'demand': 1.7},
        'playoffs': {'months': [8], 'revenue': 1.3, 'demand': 1.2},
        'off_season': {'months': [9, 10, 11, 12, 1, 2], 'revenue': 0.6, 'demand': 0.5},
    },
}

# Logistic adoption curve, fitted on market-size history
ADOPTION_BASE_PARAMS = {'L': 42.14, 'x0': 2018.97, 'k': 0.48}
ADOPTION_SCENARIO_ADJUSTMENTS = {
    'max':      {'x0_shift': -4, 'k_multiplier': 2.0, 'b': -3.0},
    'upside':   {'x0_shift': -2, 'k_multiplier': 1.2, 'b': -2.0},
    'base':     {'x0_shift': 0, 'k_multiplier': 1.0, 'b': -0.66},
    'downside': {'x0_shift': 2, 'k_multiplier': 0.8, 'b': -0.66},
    'min':      {'x0_shift': 2, 'k_multiplier': 0.25, 'b': -10.75},
}
