"""
Test derived metrics: salaries, server tiers, revenue, burn, valuation, runway.
"""

import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from tycoon.initializer import create_venture
from tycoon.venture import Employee
from tycoon.data_types import StartupType, StartingPath, FeatureStatus, MarketCondition
from tycoon.metrics import (
    daily_salaries, server_burn, daily_revenue, total_burn, valuation,
    runway_days, summarize, monthly_payroll
)


def make_employee(idx: int, salary: float = 4000, morale: float = 80, skill: float = 50) -> Employee:
    return Employee(id=f"hire-{idx:04d}", name=f"Emp {idx}", role="Junior Dev", salary=salary,
                    morale=morale, loyalty=80, tenure=0, skill=skill)


def saas_venture(path=StartingPath.BOOTSTRAP):
    return create_venture("Metrics Co", StartupType.SAAS, path)


def set_status(state, feature_id, status):
    state.find_feature(feature_id).status = status


def test_daily_salaries():
    team = [make_employee(1, 4000), make_employee(2, 8000)]
    assert daily_salaries(team) == pytest.approx(12000 / 30)
    assert daily_salaries([]) == 0
    assert monthly_payroll(team) == 12000


@pytest.mark.parametrize(
    "users,expected",
    [
        pytest.param(0, 0, id="no-users"),
        pytest.param(1, 10, id="tier-1-low"),
        pytest.param(100, 10, id="tier-1-edge"),
        pytest.param(101, 50, id="tier-2-low"),
        pytest.param(1000, 50, id="tier-2-edge"),
        pytest.param(1001, 200, id="tier-3-low"),
        pytest.param(10000, 200, id="tier-3-edge"),
        pytest.param(10001, 500, id="top-tier"),
    ],
)
def test_server_burn_tiers(users, expected):
    assert server_burn(users) == expected


def test_daily_revenue_live_features_only():
    state = saas_venture()
    state.users = 1000
    assert daily_revenue(state) == 0

    set_status(state, 'auth', FeatureStatus.LIVE)
    assert daily_revenue(state) == pytest.approx(1000 * 0.05)

    # Developing features earn nothing
    set_status(state, 'billing', FeatureStatus.DEVELOPING)
    assert daily_revenue(state) == pytest.approx(1000 * 0.05)


def test_scale_issue_halves_revenue_venture_wide():
    state = saas_venture()
    state.users = 1000
    set_status(state, 'auth', FeatureStatus.LIVE)
    set_status(state, 'analytics', FeatureStatus.NEEDS_SCALE)

    # Only auth earns, but the penalty applies to everything
    assert daily_revenue(state) == pytest.approx(1000 * 0.05 * 0.5)


def test_total_burn_components():
    state = saas_venture()
    assert total_burn(state) == pytest.approx(10)

    state.office_rented = True
    assert total_burn(state) == pytest.approx(110)

    state.team = [make_employee(1, 3000)]
    assert total_burn(state) == pytest.approx(110 + 100)


def test_total_burn_debt_interest():
    state = saas_venture(StartingPath.BANK_LOAN)
    print(f"Bank loan burn: {total_burn(state):.2f}")
    assert total_burn(state) == pytest.approx(10 + 50000 * 0.005)


def test_software_tier_unlocked_by_revenue():
    state = saas_venture()
    state.users = 3000
    set_status(state, 'auth', FeatureStatus.LIVE)

    assert daily_revenue(state) == pytest.approx(150)
    assert total_burn(state) == pytest.approx(200 + 50)


def test_valuation_floor():
    state = saas_venture()
    assert valuation(state) == 25000


@pytest.mark.parametrize(
    "condition,multiple",
    [
        pytest.param(MarketCondition.BULL, 800, id="bull"),
        pytest.param(MarketCondition.BEAR, 300, id="bear"),
        pytest.param(MarketCondition.STEADY, 500, id="steady"),
    ],
)
def test_valuation_market_multiple(condition, multiple):
    state = saas_venture()
    state.users = 10000
    state.market_condition = condition
    set_status(state, 'auth', FeatureStatus.LIVE)

    revenue = 10000 * 0.05
    growth_premium = 1 + 0.01 * 10
    assert valuation(state) == pytest.approx(10000 * 20 + revenue * multiple * growth_premium)


def test_valuation_without_growth_history():
    state = saas_venture()
    state.users = 10000
    state.quarterly_growth = []
    set_status(state, 'auth', FeatureStatus.LIVE)

    assert valuation(state) == pytest.approx(200000 + 500 * 500)


def test_runway():
    state = saas_venture()
    assert runway_days(state) == 5000

    # 500/day revenue against 250/day burn
    state.users = 10000
    set_status(state, 'auth', FeatureStatus.LIVE)
    assert runway_days(state) is None


def test_runway_never_negative():
    state = saas_venture()
    state.cash = -500
    assert runway_days(state) == 0


def test_summarize():
    summary = summarize(saas_venture())
    assert summary['cash'] == 50000
    assert summary['daily_burn'] == pytest.approx(10)
    assert summary['net_daily'] == pytest.approx(-10)
    assert summary['market_condition'] == 'Steady'


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
