"""
Data types mirroring YAML catalog structures.

These dataclasses are populated by loader.py from the data pack.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional
from enum import Enum


# ============================================================================
# Enumerations
# ============================================================================

class MarketCondition(str, Enum):
    BULL = "Bull"
    BEAR = "Bear"
    STEADY = "Steady"


class StartupType(str, Enum):
    SAAS = "SaaS"
    GAMING = "Gaming"
    FINTECH = "FinTech"
    ECOMMERCE = "E-commerce"
    AI_ML = "AI/ML"


class StartingPath(str, Enum):
    BOOTSTRAP = "Bootstrap"
    ANGEL = "Angel"
    VC_PRE_SEED = "VC Pre-Seed"
    BANK_LOAN = "Bank Loan"
    ACCELERATOR = "Accelerator"


class FeatureStatus(str, Enum):
    LOCKED = "Locked"
    AVAILABLE = "Available"
    DEVELOPING = "Developing"
    LIVE = "Live"
    NEEDS_SCALE = "NeedsScale"


# ============================================================================
# Feature Templates
# ============================================================================

@dataclass
class FeatureTemplate:
    """Catalog definition of a feature, copied into each new venture"""
    id: str
    name: str
    cost: float  # Development effort units, consumed by team velocity
    capacity: int  # User ceiling before NeedsScale
    revenue_per_user: float  # Daily revenue per user while Live
    user_bonus: int  # One-time user gain on launch
    prerequisites: List[str] = field(default_factory=list)
    description: str = ""


# ============================================================================
# Marketing Channels
# ============================================================================

@dataclass
class ChannelTemplate:
    """Catalog definition of a marketing channel"""
    id: str
    name: str
    cost: float  # Per-campaign spend
    effectiveness: float  # Users gained per dollar at full freshness
    fatigue: float = 1.0


# ============================================================================
# Funding Paths & Roles
# ============================================================================

@dataclass
class StartingTerms:
    """Opening balance sheet for a funding path"""
    path: str
    cash: float
    equity: float
    debt: float = 0.0
    description: Optional[str] = None


@dataclass
class HireRole:
    """Recruitable role offered to the player"""
    role: str
    salary: float  # Monthly


# ============================================================================
# Catalog
# ============================================================================

@dataclass
class Catalog:
    """Complete data pack used by the initializer and workforce manager"""
    features: Dict[str, List[FeatureTemplate]]  # startup_type -> ordered templates
    channels: List[ChannelTemplate]
    paths: Dict[str, StartingTerms]
    roles: List[HireRole]
    names: List[str]

    def features_for(self, startup_type: str, fallback: str) -> List[FeatureTemplate]:
        """Feature templates for a startup type, falling back to another type"""
        if startup_type in self.features:
            return self.features[startup_type]
        return self.features[fallback]
