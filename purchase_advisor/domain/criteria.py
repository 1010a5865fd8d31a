"""Decision criteria table and risk-tolerance weight derivation"""

import math
from dataclasses import dataclass
from typing import Dict, Optional

from purchase_advisor.domain.models import Category, CriterionDefinition, CriterionId

BASE_CATEGORY_WEIGHTS: Dict[Category, float] = {
    Category.FINANCIAL: 0.40,
    Category.UTILITY: 0.30,
    Category.PSYCHOLOGICAL: 0.20,
    Category.RISK: 0.10,
}

# Overrides applied on top of the base weights; financial never moves.
RISK_TOLERANCE_ADJUSTMENTS: Dict[str, Dict[Category, float]] = {
    "low": {
        Category.RISK: 0.15,
        Category.UTILITY: 0.27,
        Category.PSYCHOLOGICAL: 0.18,
    },
    "high": {
        Category.RISK: 0.07,
        Category.UTILITY: 0.32,
        Category.PSYCHOLOGICAL: 0.21,
    },
}

DEFAULT_RISK_TOLERANCE = "moderate"


@dataclass(frozen=True)
class _BaseCriterion:
    name: str
    description: str
    category: Category
    relative_weight: float  # share of the category bucket


# Canonical order. The last entry absorbs weight rounding error.
BASE_CRITERIA: Dict[CriterionId, _BaseCriterion] = {
    CriterionId.AFFORDABILITY: _BaseCriterion(
        "Affordability", "Can you afford this without financial strain?", Category.FINANCIAL, 0.375
    ),
    CriterionId.VALUE_FOR_MONEY: _BaseCriterion(
        "Value for Money", "Does the price match the expected value?", Category.FINANCIAL, 0.25
    ),
    CriterionId.OPPORTUNITY_COST: _BaseCriterion(
        "Opportunity Cost", "What else could you do with this money?", Category.FINANCIAL, 0.25
    ),
    CriterionId.FINANCIAL_GOAL_ALIGNMENT: _BaseCriterion(
        "Financial Goal Alignment", "Does this align with your financial goals?", Category.FINANCIAL, 0.125
    ),
    CriterionId.NECESSITY: _BaseCriterion(
        "Necessity", "How necessary is this item?", Category.UTILITY, 0.333
    ),
    CriterionId.FREQUENCY_OF_USE: _BaseCriterion(
        "Frequency of Use", "How often will you use it?", Category.UTILITY, 0.333
    ),
    CriterionId.LONGEVITY: _BaseCriterion(
        "Longevity", "How long will this item last?", Category.UTILITY, 0.333
    ),
    CriterionId.EMOTIONAL_VALUE: _BaseCriterion(
        "Emotional Value", "Will this purchase bring lasting satisfaction?", Category.PSYCHOLOGICAL, 0.25
    ),
    CriterionId.SOCIAL_FACTORS: _BaseCriterion(
        "Social Factors", "Are you buying for the right reasons?", Category.PSYCHOLOGICAL, 0.25
    ),
    CriterionId.BUYERS_REMORSE: _BaseCriterion(
        "Buyer's Remorse Risk", "Will you regret this purchase?", Category.PSYCHOLOGICAL, 0.5
    ),
    CriterionId.FINANCIAL_RISK: _BaseCriterion(
        "Financial Risk", "Risk to your financial stability", Category.RISK, 0.5
    ),
    CriterionId.ALTERNATIVE_AVAILABILITY: _BaseCriterion(
        "Alternative Availability", "Are there better alternatives?", Category.RISK, 0.5
    ),
}


def round_half_up(value: float, places: int) -> float:
    """Round to a number of decimal places with ties going up"""
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor


def category_weights(risk_tolerance: Optional[str]) -> Dict[Category, float]:
    """
    Category weights for a risk tolerance tier.

    "moderate", None and unrecognised values keep the base weights. If the
    adjusted weights drift from 1.0 they are renormalised to 5 places.
    """
    weights = dict(BASE_CATEGORY_WEIGHTS)
    weights.update(RISK_TOLERANCE_ADJUSTMENTS.get(risk_tolerance or DEFAULT_RISK_TOLERANCE, {}))

    total = sum(weights.values())
    if abs(total - 1.0) > 0.00001:
        weights = {category: round_half_up(weight / total, 5) for category, weight in weights.items()}

    return weights


def build_criteria(risk_tolerance: Optional[str] = None) -> Dict[CriterionId, CriterionDefinition]:
    """
    Build the ordered table of twelve weighted criteria.

    Each absolute weight is category weight x relative weight, normalised by
    the total. Every criterion except the last is rounded to 4 places and
    the last one is set to 1.0 minus the others, so all rounding error lands
    on a single fixed criterion and the weights sum to exactly 1.0.
    """
    weights_by_category = category_weights(risk_tolerance)

    raw_weights = {
        criterion_id: weights_by_category[base.category] * base.relative_weight
        for criterion_id, base in BASE_CRITERIA.items()
    }
    total_weight = sum(raw_weights.values())

    ids = list(BASE_CRITERIA)
    final_weights: Dict[CriterionId, float] = {}
    for criterion_id in ids[:-1]:
        final_weights[criterion_id] = round_half_up(raw_weights[criterion_id] / total_weight, 4)

    last_id = ids[-1]
    final_weights[last_id] = round_half_up(1.0 - sum(final_weights.values()), 4)

    return {
        criterion_id: CriterionDefinition(
            id=criterion_id,
            name=base.name,
            description=base.description,
            category=base.category,
            weight=final_weights[criterion_id],
        )
        for criterion_id, base in BASE_CRITERIA.items()
    }
