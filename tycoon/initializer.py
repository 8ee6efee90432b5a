"""
Venture initializer.

Builds a fresh VentureState from the chosen startup type and funding path
using the catalog's terms table, feature templates and channel list.
"""

from typing import Optional, Union

from .venture import VentureState, Feature, MarketingChannel
from .data_types import Catalog, FeatureTemplate, StartupType, StartingPath, FeatureStatus, MarketCondition
from .loader import default_catalog, DataLoadError
from .constants import (
    STARTING_DAY,
    STARTING_USERS,
    STARTING_GROWTH,
    DEFAULT_COMPANY_NAME,
    DEFAULT_STARTUP_TYPE,
)


def instantiate_feature(template: FeatureTemplate) -> Feature:
    """Root features (no prerequisites) start Available, the rest Locked"""
    status = FeatureStatus.AVAILABLE if not template.prerequisites else FeatureStatus.LOCKED
    return Feature(
        id=template.id,
        name=template.name,
        description=template.description,
        cost=template.cost,
        remaining_cost=template.cost,
        capacity=template.capacity,
        revenue_per_user=template.revenue_per_user,
        user_bonus=template.user_bonus,
        status=status,
        prerequisites=list(template.prerequisites),
    )


def create_venture(
    name: str,
    startup_type: Union[StartupType, str],
    starting_path: Union[StartingPath, str],
    catalog: Optional[Catalog] = None
) -> VentureState:
    """
    Create a new venture on day 1.

    Args:
        name: Company name (blank falls back to "New Venture")
        startup_type: Selects the feature template
        starting_path: Selects cash / equity / debt terms
        catalog: Data pack (bundled catalog when omitted)

    Returns:
        Initial VentureState: 100 users, Steady market, all channels locked

    Example:
        state = create_venture("Acme", StartupType.SAAS, StartingPath.BOOTSTRAP)
    """
    catalog = catalog or default_catalog()
    startup_type = StartupType(startup_type)
    starting_path = StartingPath(starting_path)

    terms = catalog.paths.get(starting_path.value)
    if terms is None:
        raise DataLoadError(f"No starting terms for path '{starting_path.value}'")

    templates = catalog.features_for(startup_type.value, DEFAULT_STARTUP_TYPE)

    return VentureState(
        day=STARTING_DAY,
        cash=float(terms.cash),
        users=STARTING_USERS,
        company_name=name or DEFAULT_COMPANY_NAME,
        startup_type=startup_type,
        starting_path=starting_path,
        equity=float(terms.equity),
        debt_amount=float(terms.debt),
        office_rented=False,
        market_condition=MarketCondition.STEADY,
        is_game_over=False,
        quarterly_growth=list(STARTING_GROWTH),
        features=[instantiate_feature(t) for t in templates],
        marketing_channels=[
            MarketingChannel(
                id=c.id,
                name=c.name,
                cost=c.cost,
                effectiveness=c.effectiveness,
                fatigue=c.fatigue,
                unlocked=False,
            )
            for c in catalog.channels
        ],
    )
