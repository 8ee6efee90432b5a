"""
Venture simulation kernel.

advance_day() is the day-tick transition. VentureSimulation is an optional
host that owns the single live VentureState, applies player actions, keeps
an event log, and reports progress to the console.
"""

import time
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional

from .venture import VentureState
from .data_types import Catalog, StartupType, StartingPath
from .events import Event, error, info
from .errors import ActionResult
from .features import advance_features, unlock_ready_features, start_developing_feature
from .workforce import velocity, run_payroll, apply_daily_drift, advance_hiring, start_hiring
from .market import (
    daily_growth, grow_users, roll_market_condition,
    run_marketing_campaign, unlock_marketing_channel, pitch_investors, PitchResult
)
from .metrics import daily_revenue, total_burn, summarize
from .initializer import create_venture
from .loader import default_catalog
from .rng import RandomSource, VentureRng
from . import constants
from .constants import (
    PAYROLL_INTERVAL_DAYS,
    MARKET_CYCLE_DAYS,
    GROWTH_HISTORY_LIMIT,
    TICK_TIME_WINDOW,
    EVENT_LOG_LIMIT,
    DAY_SUMMARY_INTERVAL,
)


@dataclass
class DayResult:
    next_state: VentureState
    events: List[Event] = field(default_factory=list)


def advance_day(
    state: VentureState,
    rng: Optional[RandomSource] = None,
    unlock_prerequisites: Optional[bool] = None
) -> DayResult:
    """
    Advance the venture by exactly one day.

    FIXED STEP ORDER (Critical Invariant):

    1. Cash flow from revenue and burn of the pre-tick state
    2. Organic user growth
    3. Feature development at the pre-tick team's velocity, launch bonuses
    4. Payroll on every 30th day
    5. Morale / skill / tenure drift (sees payroll's morale change)
    6. Hiring queue; new hires join after drift
    7. Market re-roll on every 60th day
    8. Growth history append, trimmed to the last 30 entries
    9. Bankruptcy check: cash <= 0 ends the game

    Revenue and burn read feature statuses before development runs, and
    payroll reads morale before drift, so reordering changes results.
    Day-interval checks use the day being entered.

    Never fails: a bankrupt venture is returned unchanged with no events.

    Args:
        state: Current venture (not mutated)
        rng: Random source for growth, attrition and market draws
        unlock_prerequisites: Promote Locked features whose prerequisites
                              are Live before development runs. None reads
                              constants.AUTO_UNLOCK_PREREQUISITES at call time

    Returns:
        DayResult with the next state and the day's events
    """
    if state.is_game_over:
        return DayResult(next_state=state)

    if unlock_prerequisites is None:
        unlock_prerequisites = constants.AUTO_UNLOCK_PREREQUISITES
    rng = rng or VentureRng()
    events: List[Event] = []
    nxt = state.copy()
    nxt.day = state.day + 1

    # 1. Cash flow
    revenue = daily_revenue(state)
    burn = total_burn(state)
    net = revenue - burn
    nxt.cash = state.cash + net

    # 2. Growth
    growth = daily_growth(state.starting_path, rng)
    nxt.users = grow_users(state.users, growth)

    # 3. Features
    features = nxt.features
    if unlock_prerequisites:
        unlocked = unlock_ready_features(features)
        features = unlocked.features
        events.extend(unlocked.events)

    pipeline = advance_features(features, nxt.users, velocity(state.team))
    nxt.features = pipeline.features
    nxt.users += pipeline.bonus_users
    events.extend(pipeline.events)

    # 4. Payroll
    if nxt.day % PAYROLL_INTERVAL_DAYS == 0:
        payroll = run_payroll(nxt.team, nxt.cash, rng)
        nxt.team = payroll.team
        nxt.cash = payroll.cash
        events.extend(payroll.events)

    # 5. Drift
    nxt.team = apply_daily_drift(nxt.team, nxt.day, net, nxt.cash)

    # 6. Hiring
    hiring = advance_hiring(nxt.hiring_queue)
    nxt.hiring_queue = hiring.queue
    nxt.team = nxt.team + hiring.hires
    events.extend(hiring.events)

    # 7. Market
    if nxt.day % MARKET_CYCLE_DAYS == 0:
        nxt.market_condition = roll_market_condition(rng)
        events.append(info(f"Market shifted to {nxt.market_condition.value}"))

    # 8. Growth history
    nxt.quarterly_growth = (nxt.quarterly_growth + [growth])[-GROWTH_HISTORY_LIMIT:]

    # 9. Bankruptcy
    nxt.is_game_over = nxt.cash <= 0
    if nxt.is_game_over:
        events.append(error(f"{nxt.company_name} has run out of runway. Bankrupt on day {nxt.day}."))

    return DayResult(next_state=nxt, events=events)


class VentureSimulation:
    """
    Host for a single live venture.

    Owns the current VentureState, routes player actions and day ticks
    through the pure transition functions, and keeps a rolling event log.
    """

    def __init__(
        self,
        name: str,
        startup_type: StartupType,
        starting_path: StartingPath,
        seed: Optional[int] = None,
        rng: Optional[RandomSource] = None,
        catalog: Optional[Catalog] = None,
        unlock_prerequisites: Optional[bool] = None,
        verbose: bool = True
    ):
        """
        Start a new venture.

        Args:
            name: Company name
            startup_type: Feature template selector
            starting_path: Funding path selector
            seed: Optional world seed; combined with the name via make_seed
            rng: Explicit random source (overrides seed)
            catalog: Data pack (bundled catalog when omitted)
            unlock_prerequisites: Enable prerequisite unlocking on each tick
                                  (None follows AUTO_UNLOCK_PREREQUISITES)
            verbose: Print initialization and summary lines
        """
        self.verbose = verbose
        self.catalog: Catalog = catalog or default_catalog()
        if rng is None:
            rng = VentureRng.for_venture(seed, name) if seed is not None else VentureRng()
        self.rng: RandomSource = rng
        self.unlock_prerequisites = unlock_prerequisites

        self.state: VentureState = create_venture(name, startup_type, starting_path, self.catalog)
        self.event_log: List[Event] = []

        # Wall-clock seconds of the most recent ticks
        self._tick_times: Deque[float] = deque(maxlen=TICK_TIME_WINDOW)

        if self.verbose:
            print(f"[OK] Venture initialized: {self.state.company_name} "
                  f"({self.state.startup_type.value}, {self.state.starting_path.value}), "
                  f"cash ${self.state.cash:,.0f}, {len(self.state.features)} features")

    @classmethod
    def from_snapshot(
        cls,
        snapshot: dict,
        rng: Optional[RandomSource] = None,
        catalog: Optional[Catalog] = None,
        unlock_prerequisites: Optional[bool] = None,
        verbose: bool = True
    ) -> 'VentureSimulation':
        """
        Resume a venture from a dict produced by get_snapshot() or VentureState.to_dict().

        An explicit unlock_prerequisites wins over the one saved in the
        snapshot's settings.
        """
        state = VentureState.from_dict(snapshot.get('state', snapshot))
        if unlock_prerequisites is None:
            unlock_prerequisites = snapshot.get('settings', {}).get('unlock_prerequisites')

        sim = cls(state.company_name, state.startup_type, state.starting_path,
                  rng=rng, catalog=catalog, unlock_prerequisites=unlock_prerequisites,
                  verbose=False)
        sim.state = state
        sim.verbose = verbose
        return sim

    def _record(self, events: List[Event]):
        self.event_log.extend(events)
        if len(self.event_log) > EVENT_LOG_LIMIT:
            del self.event_log[:len(self.event_log) - EVENT_LOG_LIMIT]

    def _apply(self, result: ActionResult) -> ActionResult:
        self.state = result.next_state
        self._record(result.events)
        return result

    # ------------------------------------------------------------------
    # Day ticks
    # ------------------------------------------------------------------

    def tick(self) -> List[Event]:
        """
        Advance one day.

        Returns:
            Events emitted this day (empty once the venture is bankrupt)
        """
        if self.state.is_game_over:
            return []

        start_time = time.perf_counter()
        result = advance_day(self.state, self.rng, self.unlock_prerequisites)
        self._record_tick_time(time.perf_counter() - start_time)

        self.state = result.next_state
        self._record(result.events)

        if self.verbose and (self.state.day % DAY_SUMMARY_INTERVAL == 0 or self.state.is_game_over):
            self.print_day_summary()

        return result.events

    def run(self, days: int) -> int:
        """Tick up to `days` times, stopping early on bankruptcy. Returns days simulated."""
        simulated = 0
        for _ in range(days):
            if self.state.is_game_over:
                break
            self.tick()
            simulated += 1
        return simulated

    # ------------------------------------------------------------------
    # Player actions
    # ------------------------------------------------------------------

    def hire(self, role: str, salary: float) -> ActionResult:
        return self._apply(start_hiring(self.state, role, salary, self.rng, self.catalog))

    def develop(self, feature_id: str) -> ActionResult:
        return self._apply(start_developing_feature(self.state, feature_id))

    def run_campaign(self, channel_id: str) -> ActionResult:
        return self._apply(run_marketing_campaign(self.state, channel_id))

    def unlock_channel(self, channel_id: str) -> ActionResult:
        return self._apply(unlock_marketing_channel(self.state, channel_id))

    def pitch(self, accept: bool = True) -> PitchResult:
        result = pitch_investors(self.state, accept)
        self.state = result.next_state
        self._record(result.events)
        return result

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def get_tick_stats(self) -> dict:
        """Day plus mean and latest advance_day wall time in ms over the last TICK_TIME_WINDOW ticks."""
        avg_ms = 0.0
        last_ms = 0.0
        if self._tick_times:
            avg_ms = 1000.0 * sum(self._tick_times) / len(self._tick_times)
            last_ms = 1000.0 * self._tick_times[-1]

        return {
            'day': self.state.day,
            'avg_tick_time_ms': avg_ms,
            'last_tick_time_ms': last_ms
        }

    def _record_tick_time(self, elapsed: float):
        self._tick_times.append(elapsed)

    def get_snapshot(self) -> dict:
        """
        Get complete venture snapshot.

        Returns:
            Dict with state, host settings, metrics, recent events, timing
        """
        return {
            'state': self.state.to_dict(),
            'settings': {'unlock_prerequisites': self.unlock_prerequisites},
            'metrics': summarize(self.state),
            'events': [e.to_dict() for e in self.event_log],
            'timing': self.get_tick_stats()
        }

    def print_day_summary(self):
        """Print one-line venture summary to console"""
        m = summarize(self.state)
        runway = "inf" if m['runway_days'] is None else f"{m['runway_days']}d"
        print(f"Day {m['day']:4d} | "
              f"Cash: ${m['cash']:>12,.0f} | "
              f"Users: {m['users']:7d} | "
              f"Net: ${m['net_daily']:>9,.2f}/d | "
              f"Runway: {runway:>6} | "
              f"Team: {m['team_size']:2d} | "
              f"{m['market_condition']}"
              + (" | BANKRUPT" if self.state.is_game_over else ""))
