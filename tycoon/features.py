"""
Feature pipeline.

Lifecycle: Locked -> Available -> Developing -> Live -> NeedsScale ->
Developing (scale-up) -> Live. Development burns remaining_cost down by the
team's velocity each day; launches grant a one-time user bonus.
"""

from dataclasses import dataclass, field, replace
from typing import List

from .venture import Feature, VentureState
from .data_types import FeatureStatus
from .events import Event, success, info, error
from .errors import ActionResult, InvalidTransition, GameOver, failed
from .constants import SCALE_COST_FRACTION, SCALE_CAPACITY_MULTIPLIER


DEVELOPABLE = (FeatureStatus.AVAILABLE, FeatureStatus.NEEDS_SCALE)


@dataclass
class FeatureTickResult:
    """Outcome of one day of feature development"""
    features: List[Feature]
    bonus_users: int = 0
    events: List[Event] = field(default_factory=list)


def start_developing(feature: Feature) -> Feature:
    """
    Move a feature into development.

    From NeedsScale this is a scale-up: remaining_cost becomes 60% of the
    base cost and capacity is raised 2.5x immediately. From Available the
    full cost is due.

    Raises:
        InvalidTransition: feature is Locked, Developing or Live
    """
    if feature.status not in DEVELOPABLE:
        raise InvalidTransition(
            f"Cannot develop '{feature.name}' while {feature.status.value}"
        )

    if feature.status == FeatureStatus.NEEDS_SCALE:
        return replace(
            feature,
            status=FeatureStatus.DEVELOPING,
            remaining_cost=feature.cost * SCALE_COST_FRACTION,
            capacity=feature.capacity * SCALE_CAPACITY_MULTIPLIER,
            was_scaling=True,
        )

    return replace(
        feature,
        status=FeatureStatus.DEVELOPING,
        remaining_cost=feature.cost,
        was_scaling=False,
    )


def advance_features(features: List[Feature], users: int, velocity: float) -> FeatureTickResult:
    """
    Advance every feature by one day.

    Developing features lose `velocity` of remaining cost and go Live at
    zero, queueing their user_bonus. Live features over capacity degrade to
    NeedsScale. A feature launched this tick is not capacity-checked until
    the next one.

    Args:
        features: Current features (not mutated)
        users: User count after today's organic growth
        velocity: Team development speed

    Returns:
        FeatureTickResult with new feature list, total bonus users and events
    """
    result = FeatureTickResult(features=[])

    for feature in features:
        if feature.status == FeatureStatus.DEVELOPING:
            remaining = feature.remaining_cost - velocity
            if remaining <= 0:
                result.features.append(replace(feature, status=FeatureStatus.LIVE, remaining_cost=0))
                result.bonus_users += feature.user_bonus
                if feature.was_scaling:
                    result.events.append(success(f"Infrastructure scaled: {feature.name}"))
                else:
                    result.events.append(success(f"Feature Launched: {feature.name}"))
            else:
                result.features.append(replace(feature, remaining_cost=remaining))
        elif feature.status == FeatureStatus.LIVE and users > feature.capacity:
            result.features.append(replace(feature, status=FeatureStatus.NEEDS_SCALE))
            result.events.append(error(f"{feature.name} is over capacity and needs scaling"))
        else:
            result.features.append(feature)

    return result


def unlock_ready_features(features: List[Feature]) -> FeatureTickResult:
    """
    Promote Locked features whose prerequisites are all Live.

    Only runs when prerequisite unlocking is switched on; by default Locked
    features stay Locked for the life of the venture.
    """
    live_ids = {f.id for f in features if f.status == FeatureStatus.LIVE}
    result = FeatureTickResult(features=[])

    for feature in features:
        if feature.status == FeatureStatus.LOCKED and all(p in live_ids for p in feature.prerequisites):
            result.features.append(replace(feature, status=FeatureStatus.AVAILABLE))
            result.events.append(info(f"Feature unlocked: {feature.name}"))
        else:
            result.features.append(feature)

    return result


def start_developing_feature(state: VentureState, feature_id: str) -> ActionResult:
    """Player action: begin (or scale) development of a feature"""
    if state.is_game_over:
        return failed(state, GameOver())

    if state.find_feature(feature_id) is None:
        return failed(state, InvalidTransition(f"Unknown feature '{feature_id}'"))

    next_state = state.copy()
    feature = next_state.find_feature(feature_id)
    try:
        developing = start_developing(feature)
    except InvalidTransition as e:
        return failed(state, e)

    next_state.features = [developing if f.id == feature_id else f for f in next_state.features]

    if developing.was_scaling:
        message = f"Scaling started: {feature.name}"
    else:
        message = f"Development started: {feature.name}"
    return ActionResult(next_state=next_state, events=[info(message)])
