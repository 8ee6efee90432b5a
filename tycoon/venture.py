"""
Venture runtime representation.

VentureState is the single root aggregate a host owns. It is created by
initializer.create_venture(), replaced by every transition, and
round-trips through plain dicts for persistence.
"""

import copy
from dataclasses import dataclass, field
from typing import List, Optional

from .data_types import MarketCondition, StartupType, StartingPath, FeatureStatus


@dataclass
class Employee:
    """
    Team member on payroll.

    Attributes:
        id: Unique identifier, inherited from the HiringRequest
        name: Display name
        role: Role title (e.g., "Senior Dev")
        salary: Monthly salary, fixed at hire
        morale: 0-100, clamped
        loyalty: Loyalty score (informational)
        tenure: Days employed
        skill: Development skill, never decreases
        experience: Experience score (informational)
    """
    id: str
    name: str
    role: str
    salary: float
    morale: float
    loyalty: float
    tenure: int
    skill: float
    experience: float = 0.0

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'role': self.role,
            'salary': self.salary,
            'morale': self.morale,
            'loyalty': self.loyalty,
            'tenure': self.tenure,
            'skill': self.skill,
            'experience': self.experience,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Employee':
        return cls(
            id=data['id'],
            name=data['name'],
            role=data['role'],
            salary=data['salary'],
            morale=data['morale'],
            loyalty=data['loyalty'],
            tenure=data['tenure'],
            skill=data['skill'],
            experience=data.get('experience', 0.0),
        )


@dataclass
class Feature:
    """
    Product feature instantiated from a FeatureTemplate.

    Attributes:
        id: Template id, unique within the venture
        cost: Nominal development cost
        remaining_cost: Effort left while Developing
        capacity: User ceiling before NeedsScale (grows on scale-up)
        revenue_per_user: Daily revenue per user while Live
        user_bonus: One-time user gain on launch
        status: Lifecycle state
        prerequisites: Feature ids that gate this one
        was_scaling: True when the current development run is a scale-up
    """
    id: str
    name: str
    cost: float
    remaining_cost: float
    capacity: float
    revenue_per_user: float
    user_bonus: int
    status: FeatureStatus
    prerequisites: List[str] = field(default_factory=list)
    description: str = ""
    was_scaling: bool = False

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'cost': self.cost,
            'remaining_cost': self.remaining_cost,
            'capacity': self.capacity,
            'revenue_per_user': self.revenue_per_user,
            'user_bonus': self.user_bonus,
            'status': self.status.value,
            'prerequisites': list(self.prerequisites),
            'was_scaling': self.was_scaling,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Feature':
        return cls(
            id=data['id'],
            name=data['name'],
            description=data.get('description', ""),
            cost=data['cost'],
            remaining_cost=data['remaining_cost'],
            capacity=data['capacity'],
            revenue_per_user=data['revenue_per_user'],
            user_bonus=data['user_bonus'],
            status=FeatureStatus(data['status']),
            prerequisites=list(data.get('prerequisites', [])),
            was_scaling=data.get('was_scaling', False),
        )


@dataclass
class MarketingChannel:
    """Acquisition channel; fatigue in [0.1, 1.0] scales campaign yield"""
    id: str
    name: str
    cost: float
    effectiveness: float
    fatigue: float = 1.0
    unlocked: bool = False

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'cost': self.cost,
            'effectiveness': self.effectiveness,
            'fatigue': self.fatigue,
            'unlocked': self.unlocked,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'MarketingChannel':
        return cls(
            id=data['id'],
            name=data['name'],
            cost=data['cost'],
            effectiveness=data['effectiveness'],
            fatigue=data.get('fatigue', 1.0),
            unlocked=data.get('unlocked', False),
        )


@dataclass
class HiringRequest:
    """Candidate in the recruiting pipeline"""
    id: str
    name: str
    role: str
    salary: float
    days_remaining: int

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'role': self.role,
            'salary': self.salary,
            'days_remaining': self.days_remaining,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'HiringRequest':
        return cls(
            id=data['id'],
            name=data['name'],
            role=data['role'],
            salary=data['salary'],
            days_remaining=data['days_remaining'],
        )


@dataclass
class VentureState:
    """
    Complete snapshot of one venture.

    Transitions never mutate a VentureState they receive; they work on
    copy() and return the result.
    """
    day: int
    cash: float
    users: int
    company_name: str
    startup_type: StartupType
    starting_path: StartingPath
    equity: float
    debt_amount: float = 0.0
    office_rented: bool = False
    market_condition: MarketCondition = MarketCondition.STEADY
    is_game_over: bool = False
    quarterly_growth: List[float] = field(default_factory=list)
    team: List[Employee] = field(default_factory=list)
    features: List[Feature] = field(default_factory=list)
    marketing_channels: List[MarketingChannel] = field(default_factory=list)
    hiring_queue: List[HiringRequest] = field(default_factory=list)
    hires_started: int = 0  # Monotonic counter for hiring request ids

    def copy(self) -> 'VentureState':
        """Deep copy, safe to mutate inside a transition"""
        return copy.deepcopy(self)

    def find_feature(self, feature_id: str) -> Optional[Feature]:
        for feature in self.features:
            if feature.id == feature_id:
                return feature
        return None

    def find_channel(self, channel_id: str) -> Optional[MarketingChannel]:
        for channel in self.marketing_channels:
            if channel.id == channel_id:
                return channel
        return None

    @property
    def last_growth(self) -> float:
        """Most recent daily growth rate (0.0 when no history)"""
        return self.quarterly_growth[-1] if self.quarterly_growth else 0.0

    def to_dict(self) -> dict:
        """
        Serialize venture to JSON-compatible dict.

        Enums are stored by value; list order is preserved.
        """
        return {
            'day': self.day,
            'cash': self.cash,
            'users': self.users,
            'company_name': self.company_name,
            'startup_type': self.startup_type.value,
            'starting_path': self.starting_path.value,
            'equity': self.equity,
            'debt_amount': self.debt_amount,
            'office_rented': self.office_rented,
            'market_condition': self.market_condition.value,
            'is_game_over': self.is_game_over,
            'quarterly_growth': list(self.quarterly_growth),
            'team': [e.to_dict() for e in self.team],
            'features': [f.to_dict() for f in self.features],
            'marketing_channels': [c.to_dict() for c in self.marketing_channels],
            'hiring_queue': [h.to_dict() for h in self.hiring_queue],
            'hires_started': self.hires_started,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'VentureState':
        """
        Deserialize venture from dict.

        Args:
            data: Dict produced by to_dict()

        Returns:
            VentureState instance
        """
        return cls(
            day=data['day'],
            cash=data['cash'],
            users=data['users'],
            company_name=data['company_name'],
            startup_type=StartupType(data['startup_type']),
            starting_path=StartingPath(data['starting_path']),
            equity=data['equity'],
            debt_amount=data.get('debt_amount', 0.0),
            office_rented=data.get('office_rented', False),
            market_condition=MarketCondition(data.get('market_condition', 'Steady')),
            is_game_over=data.get('is_game_over', False),
            quarterly_growth=list(data.get('quarterly_growth', [])),
            team=[Employee.from_dict(e) for e in data.get('team', [])],
            features=[Feature.from_dict(f) for f in data.get('features', [])],
            marketing_channels=[MarketingChannel.from_dict(c) for c in data.get('marketing_channels', [])],
            hiring_queue=[HiringRequest.from_dict(h) for h in data.get('hiring_queue', [])],
            hires_started=data.get('hires_started', 0),
        )
