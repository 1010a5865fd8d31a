"""Domain models - pure Python dataclasses representing purchase evaluations"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class ItemType(str, Enum):
    """Broad kind of item, used to pick context-aware scoring tables"""

    CONSUMABLE = "consumable"
    SERVICE = "service"
    DIGITAL = "digital"
    DURABLE = "durable"


class Category(str, Enum):
    """Criterion category buckets"""

    FINANCIAL = "financial"
    UTILITY = "utility"
    PSYCHOLOGICAL = "psychological"
    RISK = "risk"


class CriterionId(str, Enum):
    """Closed set of decision criteria, in canonical order"""

    AFFORDABILITY = "affordability"
    VALUE_FOR_MONEY = "valueForMoney"
    OPPORTUNITY_COST = "opportunityCost"
    FINANCIAL_GOAL_ALIGNMENT = "financialGoalAlignment"
    NECESSITY = "necessity"
    FREQUENCY_OF_USE = "frequencyOfUse"
    LONGEVITY = "longevity"
    EMOTIONAL_VALUE = "emotionalValue"
    SOCIAL_FACTORS = "socialFactors"
    BUYERS_REMORSE = "buyersRemorse"
    FINANCIAL_RISK = "financialRisk"
    ALTERNATIVE_AVAILABILITY = "alternativeAvailability"


BUY = "Buy"
DONT_BUY = "Don't Buy"


@dataclass
class ProfileSummary:
    """Derived financial metrics for a user"""

    monthly_net_income: float = 0.0  # income - expenses - debt payments
    debt_to_income_ratio: float = 0.0  # percent
    emergency_fund_months: float = 0.0
    health_score: int = 50
    has_emergency_fund: bool = False


@dataclass
class FinancialProfile:
    """User's financial profile as supplied by the caller"""

    summary: Optional[ProfileSummary] = None
    risk_tolerance: str = "moderate"  # "low" | "moderate" | "high"
    financial_goal: str = "balance"  # "save" | "debt" | "invest" | "balance"


@dataclass
class Alternative:
    """A cheaper option the user is also considering"""

    name: str
    price: float


@dataclass(frozen=True)
class CriterionDefinition:
    """Static criterion metadata with its final absolute weight"""

    id: CriterionId
    name: str
    description: str
    category: Category
    weight: float


@dataclass(frozen=True)
class Criterion:
    """A scored criterion"""

    id: CriterionId
    name: str
    description: str
    category: Category
    weight: float
    score: float
    weighted_score: float


@dataclass(frozen=True)
class DecisionResult:
    """Output of a single purchase evaluation"""

    scores: Dict[CriterionId, Criterion]
    final_score: float
    decision: str  # BUY or DONT_BUY
    confidence: str  # "Low" | "Medium" | "High"
    item_type: ItemType


@dataclass
class Recommendation:
    """Human-readable recommendation built from a DecisionResult"""

    decision: str
    reasoning: str
    summary: str
    analysis_details: Dict[str, object] = field(default_factory=dict)


@dataclass
class MatrixEntry:
    """Single row of the display decision matrix"""

    criterion: str
    score: float
    weight: str  # percentage string, e.g. "15%"
    impact: str  # "Positive" | "Negative" | "Neutral"


@dataclass
class PurchaseClassification:
    """Result of purchase category classification"""

    category: str
    cached: bool


DecisionMatrix = Dict[str, List[MatrixEntry]]
