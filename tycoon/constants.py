"""
Central configuration constants for the venture simulation.

Defines the economic model's rates, thresholds, and intervals used across
the metrics, pipeline, workforce, and market modules.
"""

# ============================================================================
# Venture Defaults
# ============================================================================

STARTING_DAY = 1
STARTING_USERS = 100
STARTING_GROWTH = [0.01]  # Seed entry for quarterly_growth
DEFAULT_COMPANY_NAME = "New Venture"
DEFAULT_STARTUP_TYPE = "SaaS"  # Fallback feature template for unknown types


# ============================================================================
# Burn & Revenue (Metrics Calculator)
# ============================================================================

DAYS_PER_MONTH = 30  # Monthly salary -> daily salary divisor

# Server cost tiers: (max_users_inclusive, daily_cost). Zero users costs nothing.
SERVER_BURN_TIERS = [
    (100, 10.0),
    (1000, 50.0),
    (10000, 200.0),
]
SERVER_BURN_MAX = 500.0

SOFTWARE_TIER_REVENUE_THRESHOLD = 100.0  # Daily revenue that unlocks tooling spend
SOFTWARE_TIER_COST = 50.0
OFFICE_DAILY_COST = 100.0
DEBT_DAILY_INTEREST = 0.005

SCALE_ISSUE_REVENUE_PENALTY = 0.5  # Venture-wide while any feature NeedsScale

# Valuation
VALUATION_FLOOR = 25000.0
VALUATION_PER_USER = 20.0
VALUATION_MULTIPLES = {
    'Bull': 800.0,
    'Bear': 300.0,
    'Steady': 500.0,
}
GROWTH_PREMIUM_FACTOR = 10.0


# ============================================================================
# Feature Pipeline
# ============================================================================

SCALE_COST_FRACTION = 0.6      # remaining_cost on scale-up, fraction of base cost
SCALE_CAPACITY_MULTIPLIER = 2.5

# Locked features are never re-evaluated against their prerequisites unless
# this is enabled (or overridden per advance_day call)
AUTO_UNLOCK_PREREQUISITES = False


# ============================================================================
# Workforce
# ============================================================================

BASELINE_VELOCITY = 0.25  # Founder-only development speed
VELOCITY_DIVISOR = 100.0

RECRUITING_FEE_DIVISOR = 3  # Fee = salary / 3, charged up front
HIRING_DAYS = 3

NEW_HIRE_MORALE = 80.0
NEW_HIRE_LOYALTY = 80.0
JUNIOR_SKILL = 50.0
SENIOR_SKILL = 75.0
SENIOR_ROLE_MARKER = "Senior"

PAYROLL_INTERVAL_DAYS = 30
PAYROLL_MORALE_BOOST = 5.0
MISSED_PAYROLL_QUIT_CHANCE = 0.2
MISSED_PAYROLL_MORALE_HIT = 30.0

MORALE_MIN = 0.0
MORALE_MAX = 100.0
MORALE_DAILY_DECAY = -0.5
MORALE_PROFIT_THRESHOLD = 100.0  # Net daily profit above this lifts morale
MORALE_PROFIT_BONUS = 1.0
MORALE_LOW_CASH_THRESHOLD = 5000.0
MORALE_LOW_CASH_PENALTY = -2.0

SKILL_GROWTH_INTERVAL_DAYS = 10
SKILL_GROWTH_AMOUNT = 0.5


# ============================================================================
# Market & Fundraising
# ============================================================================

BASE_GROWTH = 0.005
GROWTH_JITTER = 0.01  # Uniform [0, GROWTH_JITTER) added to BASE_GROWTH
ACCELERATOR_GROWTH_MULTIPLIER = 1.1

MARKET_CYCLE_DAYS = 60
BULL_ROLL_ABOVE = 0.7
BEAR_ROLL_BELOW = 0.3

GROWTH_HISTORY_LIMIT = 30  # Max entries kept in quarterly_growth

CHANNEL_UNLOCK_COST = 5000.0
FATIGUE_PER_CAMPAIGN = 0.15
FATIGUE_MIN = 0.1
FATIGUE_MAX = 1.0

PITCH_THRESHOLDS = {
    'Bull': 20.0,
    'Bear': 60.0,
    'Steady': 40.0,
}
PITCH_OFFER_FRACTION = 0.15
PITCH_EQUITY_COST = 15.0  # Flat percentage points, independent of offer size


# ============================================================================
# Host Reporting
# ============================================================================

TICK_TIME_WINDOW = 100   # Number of ticks to average
EVENT_LOG_LIMIT = 200    # Events retained by VentureSimulation
DAY_SUMMARY_INTERVAL = 30
