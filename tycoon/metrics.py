"""
Derived venture metrics.

Pure functions over a VentureState snapshot: burn, revenue, valuation and
runway. Nothing here mutates state or draws random numbers.
"""

import math
from typing import Iterable, Optional

from .venture import Employee, VentureState
from .data_types import FeatureStatus
from .constants import (
    DAYS_PER_MONTH,
    SERVER_BURN_TIERS,
    SERVER_BURN_MAX,
    SOFTWARE_TIER_REVENUE_THRESHOLD,
    SOFTWARE_TIER_COST,
    OFFICE_DAILY_COST,
    DEBT_DAILY_INTEREST,
    SCALE_ISSUE_REVENUE_PENALTY,
    VALUATION_FLOOR,
    VALUATION_PER_USER,
    VALUATION_MULTIPLES,
    GROWTH_PREMIUM_FACTOR,
)


def daily_salaries(team: Iterable[Employee]) -> float:
    """Sum of monthly salaries spread over a 30-day month (unrounded)"""
    return sum(member.salary / DAYS_PER_MONTH for member in team)


def monthly_payroll(team: Iterable[Employee]) -> float:
    return sum(member.salary for member in team)


def server_burn(users: int) -> float:
    """
    Tiered infrastructure cost.

    Discontinuous on purpose: crossing a tier boundary jumps the bill.
    """
    if users == 0:
        return 0.0
    for max_users, cost in SERVER_BURN_TIERS:
        if users <= max_users:
            return cost
    return SERVER_BURN_MAX


def daily_revenue(state: VentureState) -> float:
    """
    Users x summed revenue_per_user of Live features.

    Any NeedsScale feature halves revenue venture-wide (outage penalty).
    """
    revenue_per_user = sum(
        f.revenue_per_user for f in state.features if f.status == FeatureStatus.LIVE
    )
    has_scale_issues = any(f.status == FeatureStatus.NEEDS_SCALE for f in state.features)
    penalty = SCALE_ISSUE_REVENUE_PENALTY if has_scale_issues else 1.0
    return state.users * revenue_per_user * penalty


def total_burn(state: VentureState) -> float:
    """Daily spend: salaries, servers, tooling tier, office and debt interest"""
    salaries = daily_salaries(state.team)
    server = server_burn(state.users)
    software = SOFTWARE_TIER_COST if daily_revenue(state) > SOFTWARE_TIER_REVENUE_THRESHOLD else 0.0
    office = OFFICE_DAILY_COST if state.office_rented else 0.0
    interest = state.debt_amount * DEBT_DAILY_INTEREST
    return salaries + server + software + office + interest


def net_daily(state: VentureState) -> float:
    return daily_revenue(state) - total_burn(state)


def valuation(state: VentureState) -> float:
    """
    Market-adjusted valuation.

    users x 20 + revenue x market multiple x growth premium, floored at 25k.
    """
    multiple = VALUATION_MULTIPLES[state.market_condition.value]
    growth_premium = 1 + state.last_growth * GROWTH_PREMIUM_FACTOR
    value = state.users * VALUATION_PER_USER + daily_revenue(state) * multiple * growth_premium
    return max(VALUATION_FLOOR, value)


def runway_days(state: VentureState) -> Optional[int]:
    """
    Days of cash left at the current net rate.

    Returns:
        None when the venture is cash-flow positive (infinite runway),
        else floor(cash / daily loss), never below 0
    """
    net = net_daily(state)
    if net >= 0:
        return None
    return max(0, math.floor(state.cash / abs(net)))


def summarize(state: VentureState) -> dict:
    """Dashboard metrics for a snapshot"""
    revenue = daily_revenue(state)
    burn = total_burn(state)
    return {
        'day': state.day,
        'cash': state.cash,
        'users': state.users,
        'daily_revenue': revenue,
        'daily_burn': burn,
        'net_daily': revenue - burn,
        'runway_days': runway_days(state),
        'valuation': valuation(state),
        'equity': state.equity,
        'team_size': len(state.team),
        'market_condition': state.market_condition.value,
    }
