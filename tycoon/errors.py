"""
Typed action failures and result containers.

Action entry points never raise for player-facing conditions. They return
an ActionResult whose error field holds one of the ActionError subclasses
below, with next_state left as the untouched input state.
"""

from dataclasses import dataclass, field
from typing import List, Optional, TYPE_CHECKING

from .events import Event, error as error_event

if TYPE_CHECKING:
    from .venture import VentureState


class ActionError(Exception):
    """Base class for recoverable, user-facing action failures"""
    pass


class InsufficientFunds(ActionError):
    """Attempted spend exceeds available cash"""

    def __init__(self, required: float, available: float, message: Optional[str] = None):
        self.required = required
        self.available = available
        super().__init__(message or f"Need ${required:,.2f}, have ${available:,.2f}")


class InvalidTransition(ActionError):
    """Action attempted against a feature, channel or state that is not eligible"""
    pass


class ChannelLocked(ActionError):
    """Campaign attempted on a channel that has not been unlocked"""
    pass


class GameOver(ActionError):
    """Action attempted after the venture went bankrupt"""

    def __init__(self, message: str = "The venture is bankrupt"):
        super().__init__(message)


@dataclass
class ActionResult:
    """Outcome of a player action"""
    next_state: 'VentureState'
    events: List[Event] = field(default_factory=list)
    error: Optional[ActionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> 'ActionResult':
        """Raise the carried failure, for hosts that prefer exceptions"""
        if self.error is not None:
            raise self.error
        return self


def failed(state: 'VentureState', error: ActionError) -> ActionResult:
    """Result for a rejected action: input state untouched, one error event"""
    return ActionResult(next_state=state, events=[error_event(str(error))], error=error)
