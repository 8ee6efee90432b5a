"""
Workforce manager.

Recruiting pipeline, monthly payroll, and daily morale/skill/tenure drift.
All functions return new lists; Employee objects are replaced, never edited.
"""

from dataclasses import dataclass, field, replace
from typing import List, Optional

from .venture import Employee, HiringRequest, VentureState
from .data_types import Catalog
from .events import Event, success, info, error, format_money
from .errors import ActionResult, InsufficientFunds, InvalidTransition, GameOver, failed
from .loader import default_catalog
from .rng import RandomSource, VentureRng
from .constants import (
    BASELINE_VELOCITY,
    VELOCITY_DIVISOR,
    RECRUITING_FEE_DIVISOR,
    HIRING_DAYS,
    NEW_HIRE_MORALE,
    NEW_HIRE_LOYALTY,
    JUNIOR_SKILL,
    SENIOR_SKILL,
    SENIOR_ROLE_MARKER,
    PAYROLL_MORALE_BOOST,
    MISSED_PAYROLL_QUIT_CHANCE,
    MISSED_PAYROLL_MORALE_HIT,
    MORALE_MIN,
    MORALE_MAX,
    MORALE_DAILY_DECAY,
    MORALE_PROFIT_THRESHOLD,
    MORALE_PROFIT_BONUS,
    MORALE_LOW_CASH_THRESHOLD,
    MORALE_LOW_CASH_PENALTY,
    SKILL_GROWTH_INTERVAL_DAYS,
    SKILL_GROWTH_AMOUNT,
)


def clamp_morale(value: float) -> float:
    return max(MORALE_MIN, min(MORALE_MAX, value))


def velocity(team: List[Employee]) -> float:
    """
    Development speed in cost units per day.

    Sum of skill x morale fraction over the team, divided by 100. An empty
    (or fully demoralized) team develops at the founder-only baseline.
    """
    strength = sum(member.skill * (member.morale / 100.0) for member in team)
    if strength > 0:
        return strength / VELOCITY_DIVISOR
    return BASELINE_VELOCITY


def recruiting_fee(salary: float) -> float:
    return salary / RECRUITING_FEE_DIVISOR


# ============================================================================
# Recruiting
# ============================================================================

def start_hiring(
    state: VentureState,
    role: str,
    salary: float,
    rng: Optional[RandomSource] = None,
    catalog: Optional[Catalog] = None
) -> ActionResult:
    """
    Player action: open a recruiting request.

    Charges a non-refundable fee of salary / 3 up front and queues a
    candidate (random name from the pool) who joins after 3 days.

    Args:
        state: Current venture
        role: Role title; "Senior" roles hire at higher skill
        salary: Monthly salary
        rng: Random source for the candidate name
        catalog: Data pack supplying the name pool

    Returns:
        ActionResult; error is InsufficientFunds when cash < fee
    """
    if state.is_game_over:
        return failed(state, GameOver())
    if salary <= 0:
        return failed(state, InvalidTransition(f"Salary must be positive, got {salary}"))

    fee = recruiting_fee(salary)
    if state.cash < fee:
        return failed(state, InsufficientFunds(
            fee, state.cash, f"Need {format_money(fee)} for recruiting"
        ))

    rng = rng or VentureRng()
    catalog = catalog or default_catalog()
    name = rng.choice(catalog.names)

    next_state = state.copy()
    next_state.hires_started += 1
    next_state.cash -= fee
    next_state.hiring_queue.append(HiringRequest(
        id=f"hire-{next_state.hires_started:04d}",
        name=name,
        role=role,
        salary=salary,
        days_remaining=HIRING_DAYS,
    ))

    return ActionResult(next_state=next_state, events=[info(f"Started recruiting {role}")])


def hire(request: HiringRequest) -> Employee:
    """Convert a completed hiring request into a team member"""
    skill = SENIOR_SKILL if SENIOR_ROLE_MARKER in request.role else JUNIOR_SKILL
    return Employee(
        id=request.id,
        name=request.name,
        role=request.role,
        salary=request.salary,
        morale=NEW_HIRE_MORALE,
        loyalty=NEW_HIRE_LOYALTY,
        tenure=0,
        skill=skill,
        experience=0.0,
    )


@dataclass
class HiringTickResult:
    queue: List[HiringRequest]
    hires: List[Employee] = field(default_factory=list)
    events: List[Event] = field(default_factory=list)


def advance_hiring(queue: List[HiringRequest]) -> HiringTickResult:
    """Count every request down one day; requests reaching zero are hired"""
    result = HiringTickResult(queue=[])

    for request in queue:
        ticked = replace(request, days_remaining=request.days_remaining - 1)
        if ticked.days_remaining <= 0:
            result.hires.append(hire(ticked))
            result.events.append(success(f"{ticked.name} joined as {ticked.role}"))
        else:
            result.queue.append(ticked)

    return result


# ============================================================================
# Payroll
# ============================================================================

@dataclass
class PayrollResult:
    team: List[Employee]
    cash: float
    paid: bool
    events: List[Event] = field(default_factory=list)


def run_payroll(team: List[Employee], cash: float, rng: RandomSource) -> PayrollResult:
    """
    Pay one month of salaries.

    When cash covers the bill it is deducted and everyone gains 5 morale.
    Otherwise nothing is deducted: each employee independently quits with
    20% probability (one draw per employee, roster order) and the rest lose
    30 morale. Missed payroll is attrition, not game over.
    """
    if not team:
        return PayrollResult(team=[], cash=cash, paid=True)

    total = sum(member.salary for member in team)
    if cash >= total:
        paid_team = [replace(m, morale=clamp_morale(m.morale + PAYROLL_MORALE_BOOST)) for m in team]
        return PayrollResult(
            team=paid_team,
            cash=cash - total,
            paid=True,
            events=[success(f"Paid {format_money(total)} in salaries")],
        )

    result = PayrollResult(team=[], cash=cash, paid=False, events=[error("CRISIS: Missed payroll!")])
    for member in team:
        if rng.random() < MISSED_PAYROLL_QUIT_CHANCE:
            result.events.append(error(f"{member.name} quit due to unpaid salary"))
            continue
        result.team.append(replace(member, morale=clamp_morale(member.morale - MISSED_PAYROLL_MORALE_HIT)))

    return result


# ============================================================================
# Daily Drift
# ============================================================================

def morale_change(net_daily: float, cash: float) -> float:
    """Daily morale delta: slow decay, lifted by profit, dragged by low cash"""
    change = MORALE_DAILY_DECAY
    if net_daily > MORALE_PROFIT_THRESHOLD:
        change += MORALE_PROFIT_BONUS
    if cash < MORALE_LOW_CASH_THRESHOLD:
        change += MORALE_LOW_CASH_PENALTY
    return change


def apply_daily_drift(team: List[Employee], day: int, net_daily: float, cash: float) -> List[Employee]:
    """
    Daily morale, skill and tenure update for every employee.

    Args:
        team: Roster after payroll
        day: The day being entered
        net_daily: Revenue minus burn computed at the start of the tick
        cash: Cash after today's cash flow and payroll
    """
    delta = morale_change(net_daily, cash)
    skill_gain = SKILL_GROWTH_AMOUNT if day % SKILL_GROWTH_INTERVAL_DAYS == 0 else 0.0

    return [
        replace(
            member,
            morale=clamp_morale(member.morale + delta),
            skill=member.skill + skill_gain,
            tenure=member.tenure + 1,
        )
        for member in team
    ]
