"""
Market and fundraising.

Organic user growth, the macro market cycle, marketing campaigns with
channel fatigue, and investor pitches.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .venture import VentureState
from .data_types import MarketCondition, StartingPath
from .events import Event, success, info, error, format_money
from .errors import (
    ActionError, ActionResult, InsufficientFunds, InvalidTransition,
    ChannelLocked, GameOver, failed
)
from .metrics import daily_revenue, valuation
from .rng import RandomSource
from .constants import (
    BASE_GROWTH,
    GROWTH_JITTER,
    ACCELERATOR_GROWTH_MULTIPLIER,
    BULL_ROLL_ABOVE,
    BEAR_ROLL_BELOW,
    CHANNEL_UNLOCK_COST,
    FATIGUE_PER_CAMPAIGN,
    FATIGUE_MIN,
    FATIGUE_MAX,
    PITCH_THRESHOLDS,
    PITCH_OFFER_FRACTION,
    PITCH_EQUITY_COST,
)


# ============================================================================
# Growth & Market Cycle
# ============================================================================

def daily_growth(starting_path: StartingPath, rng: RandomSource) -> float:
    """Organic growth rate for one day: 0.5-1.5%, boosted 10% for accelerator ventures"""
    base = BASE_GROWTH + rng.uniform(0.0, GROWTH_JITTER)
    multiplier = ACCELERATOR_GROWTH_MULTIPLIER if starting_path == StartingPath.ACCELERATOR else 1.0
    return base * multiplier


def grow_users(users: int, growth: float) -> int:
    return math.floor(users * (1 + growth))


def roll_market_condition(rng: RandomSource) -> MarketCondition:
    r = rng.random()
    if r > BULL_ROLL_ABOVE:
        return MarketCondition.BULL
    if r < BEAR_ROLL_BELOW:
        return MarketCondition.BEAR
    return MarketCondition.STEADY


# ============================================================================
# Marketing
# ============================================================================

def campaign_gain(cost: float, effectiveness: float, fatigue: float) -> int:
    return math.floor(cost * effectiveness * fatigue)


def run_marketing_campaign(state: VentureState, channel_id: str) -> ActionResult:
    """
    Player action: spend on one campaign in an unlocked channel.

    Gain is floor(cost x effectiveness x fatigue); each campaign then tires
    the channel by 0.15 (never below 0.1), so repeats pay less.
    """
    if state.is_game_over:
        return failed(state, GameOver())

    channel = state.find_channel(channel_id)
    if channel is None:
        return failed(state, InvalidTransition(f"Unknown marketing channel '{channel_id}'"))
    if not channel.unlocked:
        return failed(state, ChannelLocked(f"{channel.name} is locked"))
    if state.cash < channel.cost:
        return failed(state, InsufficientFunds(
            channel.cost, state.cash, "Insufficient funds for campaign"
        ))

    gain = campaign_gain(channel.cost, channel.effectiveness, channel.fatigue)

    next_state = state.copy()
    target = next_state.find_channel(channel_id)
    next_state.cash -= target.cost
    next_state.users += gain
    target.fatigue = max(FATIGUE_MIN, min(FATIGUE_MAX, target.fatigue - FATIGUE_PER_CAMPAIGN))

    return ActionResult(next_state=next_state, events=[success(f"Campaign gained {gain} users!")])


def unlock_marketing_channel(state: VentureState, channel_id: str) -> ActionResult:
    """Player action: unlock a channel for a flat fee, regardless of its campaign cost"""
    if state.is_game_over:
        return failed(state, GameOver())

    channel = state.find_channel(channel_id)
    if channel is None:
        return failed(state, InvalidTransition(f"Unknown marketing channel '{channel_id}'"))
    if channel.unlocked:
        return failed(state, InvalidTransition(f"{channel.name} is already unlocked"))
    if state.cash < CHANNEL_UNLOCK_COST:
        return failed(state, InsufficientFunds(
            CHANNEL_UNLOCK_COST, state.cash,
            f"Need {format_money(CHANNEL_UNLOCK_COST)} to unlock channel"
        ))

    next_state = state.copy()
    next_state.cash -= CHANNEL_UNLOCK_COST
    next_state.find_channel(channel_id).unlocked = True

    return ActionResult(next_state=next_state, events=[success(f"{channel.name} unlocked")])


# ============================================================================
# Fundraising
# ============================================================================

class PitchOutcome(str, Enum):
    ACCEPTED = "Accepted"
    DECLINED = "Declined"  # Offer made, founder said no
    REJECTED = "Rejected"  # Investors passed


@dataclass
class PitchAssessment:
    """How investors see the venture right now"""
    score: float
    threshold: float
    valuation: float
    offer: Optional[int] = None  # Set only when score clears the threshold

    @property
    def passed(self) -> bool:
        return self.offer is not None


@dataclass
class PitchResult:
    outcome: PitchOutcome
    next_state: VentureState
    assessment: PitchAssessment
    events: List[Event] = field(default_factory=list)
    error: Optional[ActionError] = None

    @property
    def offer(self) -> Optional[int]:
        return self.assessment.offer


def evaluate_pitch(state: VentureState) -> PitchAssessment:
    """
    Score the venture against the market's bar.

    score = last growth x 100 + users / 1000 + daily revenue / 100; the bar
    is 20 in a bull market, 60 in a bear market, 40 otherwise. Clearing it
    earns an offer of 15% of valuation.
    """
    value = valuation(state)
    score = state.last_growth * 100 + state.users / 1000 + daily_revenue(state) / 100
    threshold = PITCH_THRESHOLDS[state.market_condition.value]

    offer = None
    if score >= threshold:
        offer = math.floor(value * PITCH_OFFER_FRACTION)

    return PitchAssessment(score=score, threshold=threshold, valuation=value, offer=offer)


def pitch_investors(state: VentureState, accept: bool = True) -> PitchResult:
    """
    Player action: pitch investors and optionally take the offer.

    Accepting adds the offer to cash and costs a flat 15 points of founder
    equity whatever the offer size. Declined and rejected pitches return the
    input state unchanged.

    Args:
        state: Current venture
        accept: Whether the founder takes an offer if one is made
    """
    assessment = evaluate_pitch(state)

    if state.is_game_over:
        rejected = failed(state, GameOver())
        return PitchResult(PitchOutcome.REJECTED, state, assessment, rejected.events, rejected.error)

    if not assessment.passed:
        return PitchResult(
            PitchOutcome.REJECTED, state, assessment,
            [error("Pitch failed. Metrics are too weak.")],
        )

    if state.equity < PITCH_EQUITY_COST:
        rejected = failed(state, InvalidTransition(
            f"Only {state.equity:g}% equity left, investors want {PITCH_EQUITY_COST:g}%"
        ))
        return PitchResult(PitchOutcome.REJECTED, state, assessment, rejected.events, rejected.error)

    if not accept:
        return PitchResult(
            PitchOutcome.DECLINED, state, assessment,
            [info(f"Declined {format_money(assessment.offer)} for {PITCH_EQUITY_COST:g}% equity")],
        )

    next_state = state.copy()
    next_state.cash += assessment.offer
    next_state.equity -= PITCH_EQUITY_COST

    return PitchResult(
        PitchOutcome.ACCEPTED, next_state, assessment,
        [success(f"Funding secured! {format_money(assessment.offer)} for {PITCH_EQUITY_COST:g}% equity")],
    )
