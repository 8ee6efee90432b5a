"""
Startup Tycoon Simulation

A turn-based startup simulator. Player actions and day ticks are pure
transitions over a VentureState, returning the next state plus events.

Architecture: the host owns the state. Rendering and persistence are consumers.
"""

__version__ = "0.1.0"

from .data_types import MarketCondition, StartupType, StartingPath, FeatureStatus
from .venture import VentureState, Employee, Feature, MarketingChannel, HiringRequest
from .events import Event, Severity
from .errors import (
    ActionError, ActionResult, InsufficientFunds, InvalidTransition, ChannelLocked, GameOver
)
from .initializer import create_venture
from .features import start_developing_feature
from .workforce import start_hiring
from .market import (
    run_marketing_campaign, unlock_marketing_channel, pitch_investors, evaluate_pitch,
    PitchOutcome, PitchResult
)
from .simulation import advance_day, DayResult, VentureSimulation
