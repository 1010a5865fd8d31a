"""Purchase decision scoring engine - core business logic for Buy / Don't Buy"""

import math
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from purchase_advisor.domain.classifier import (
    as_text,
    classify_item_type,
    combined_text,
    contains_any,
)
from purchase_advisor.domain.criteria import DEFAULT_RISK_TOLERANCE, build_criteria
from purchase_advisor.domain.models import (
    BUY,
    DONT_BUY,
    Alternative,
    Criterion,
    CriterionId,
    DecisionResult,
    FinancialProfile,
    ItemType,
    ProfileSummary,
)

NEUTRAL_SCORE = 5
BUY_THRESHOLD = 60.0

NECESSITY_KEYWORDS = ("food", "medicine", "health", "safety", "work", "education", "repair")
LUXURY_KEYWORDS = ("entertainment", "luxury", "want", "desire", "upgrade", "collection")
DURABLE_KEYWORDS = ("appliance", "furniture", "tool", "equipment", "device", "medicine")
EMOTIONAL_KEYWORDS = ("gift", "special", "celebrate", "memorial", "dream", "health", "medicine")
NEGATIVE_EMOTION_KEYWORDS = ("impulse", "bored", "sad", "angry", "revenge", "status")
SOCIAL_PRESSURE_KEYWORDS = ("everyone has", "peer", "trend", "popular", "status")

CONSUMABLE_FREQUENCY_SCORES = {
    "Daily": 6,  # daily eating out adds up
    "Weekly": 8,
    "Monthly": 9,
    "Rarely": 10,
    "One-time": 8,  # a single meal is normal
}
DEFAULT_CONSUMABLE_FREQUENCY_SCORE = 7

FREQUENCY_SCORES = {
    "Daily": 10,
    "Weekly": 8,
    "Monthly": 6,
    "Rarely": 3,
    "One-time": 2,
}
DEFAULT_FREQUENCY_SCORE = 5


def to_number(value, default: float = 0.0) -> float:
    """Coerce loosely typed numeric input; None, NaN, inf and junk become default"""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def coerce_cost(cost) -> float:
    """Cost that is not a non-negative finite number is treated as 0"""
    return max(to_number(cost), 0.0)


def alternative_price(alternative: Optional[Alternative]) -> Optional[float]:
    """Price of the alternative, or None when there is no usable price"""
    if alternative is None:
        return None
    price = to_number(alternative.price, default=math.nan)
    return None if math.isnan(price) else price


def _summary_of(financial_profile: Optional[FinancialProfile]) -> Optional[ProfileSummary]:
    if financial_profile is None:
        return None
    return financial_profile.summary


def _cost_percentage(cost: float, monthly_net_income: float) -> float:
    return (cost / monthly_net_income) * 100


# Financial criteria


def score_affordability(cost: float, financial_profile: Optional[FinancialProfile]) -> int:
    """Cost as a share of monthly net income; non-positive income scores 0"""
    if cost == 0:
        return 10

    summary = _summary_of(financial_profile)
    if summary is None:
        return NEUTRAL_SCORE

    monthly_net_income = to_number(summary.monthly_net_income)
    if monthly_net_income <= 0:
        return 0

    cost_percentage = _cost_percentage(cost, monthly_net_income)
    if cost_percentage <= 5:
        return 10
    if cost_percentage <= 10:
        return 8
    if cost_percentage <= 18:
        return 7
    if cost_percentage <= 20:
        return 6
    if cost_percentage <= 30:
        return 4
    if cost_percentage <= 50:
        return 2
    return 0


def score_value_for_money(cost: float, alternative: Optional[Alternative]) -> int:
    """Penalise the item by how much a cheaper alternative would save"""
    price = alternative_price(alternative)
    if price is not None and 0 < cost and price < cost:
        savings = ((cost - price) / cost) * 100
        if savings > 50:
            return 2
        if savings > 30:
            return 4
        if savings > 20:
            return 6
        if savings > 10:
            return 7
    return 8


def score_opportunity_cost(cost: float, financial_profile: Optional[FinancialProfile]) -> int:
    """Thin emergency fund or outstanding debt raises the cost of spending"""
    summary = _summary_of(financial_profile)
    if summary is None:
        return NEUTRAL_SCORE

    if cost == 0:
        return 10

    emergency_fund_months = to_number(summary.emergency_fund_months)
    debt_ratio = to_number(summary.debt_to_income_ratio)
    has_debt = debt_ratio > 0

    if emergency_fund_months < 3 and has_debt:
        return 2
    if emergency_fund_months < 3:
        return 4
    if has_debt and debt_ratio > 30:
        return 4
    if has_debt:
        return 6
    if emergency_fund_months >= 6:
        return 10
    return 8


def score_financial_goal_alignment(financial_profile: Optional[FinancialProfile], purpose) -> int:
    if financial_profile is None:
        return NEUTRAL_SCORE

    goal = financial_profile.financial_goal or "balance"

    if goal in ("save", "debt"):
        return 3
    if goal == "invest" and "investment" in as_text(purpose).lower():
        return 9
    if goal == "balance":
        return 6
    return NEUTRAL_SCORE


# Utility criteria


def score_necessity(item_name, purpose) -> int:
    text = combined_text(item_name, purpose)

    if contains_any(text, NECESSITY_KEYWORDS):
        return 9
    if contains_any(text, LUXURY_KEYWORDS):
        return 3
    return 6


def score_frequency_of_use(frequency, item_type: ItemType) -> int:
    """
    Usage frequency score.

    For consumables a rare purchase is the healthy pattern, so the table is
    inverted relative to durable goods where daily use justifies the cost.
    """
    if item_type == ItemType.CONSUMABLE:
        return CONSUMABLE_FREQUENCY_SCORES.get(frequency, DEFAULT_CONSUMABLE_FREQUENCY_SCORE)
    return FREQUENCY_SCORES.get(frequency, DEFAULT_FREQUENCY_SCORE)


def score_longevity(item_name, cost: float, purpose, item_type: Optional[ItemType] = None) -> int:
    if item_type is None:
        item_type = classify_item_type(item_name, purpose)

    if item_type == ItemType.CONSUMABLE:
        # Judged as a reasonable meal expense rather than lifespan
        if cost <= 20:
            return 8
        if cost <= 50:
            return 6
        if cost <= 100:
            return 4
        return 2

    if item_type == ItemType.SERVICE:
        return 5

    if item_type == ItemType.DIGITAL:
        return 8

    # Durable goods look at the item name only
    lower_item = as_text(item_name).lower()
    if "medicine" in lower_item:
        return 10
    if contains_any(lower_item, DURABLE_KEYWORDS):
        return 9 if cost > 100 else 7
    return 6


# Psychological criteria


def score_emotional_value(purpose) -> int:
    lower_purpose = as_text(purpose).lower()

    if "health" in lower_purpose or "medicine" in lower_purpose:
        return 9
    if contains_any(lower_purpose, EMOTIONAL_KEYWORDS):
        return 8
    if contains_any(lower_purpose, NEGATIVE_EMOTION_KEYWORDS):
        return 2
    return NEUTRAL_SCORE


def score_social_factors(item_name, purpose) -> int:
    if contains_any(combined_text(item_name, purpose), SOCIAL_PRESSURE_KEYWORDS):
        return 3
    return 7


def score_buyers_remorse(
    cost: float,
    financial_profile: Optional[FinancialProfile],
    frequency,
    item_type: ItemType,
) -> int:
    """
    Likelihood of regretting the purchase (10 = very unlikely).

    Consumables are tiered by price alone. Other items start neutral and are
    adjusted by cost relative to income and by how often they will be used.
    Any cost against zero or negative income scores 0.
    """
    if cost == 0:
        return 10

    if item_type == ItemType.CONSUMABLE:
        if cost <= 15:
            return 9
        if cost <= 30:
            return 8
        if cost <= 50:
            return 7
        if cost <= 100:
            return 5
        return 3

    score = NEUTRAL_SCORE

    summary = _summary_of(financial_profile)
    if summary is not None:
        monthly_net_income = to_number(summary.monthly_net_income)
        if monthly_net_income <= 0:
            return 0

        cost_percentage = _cost_percentage(cost, monthly_net_income)
        if cost_percentage > 30:
            score -= 3
        elif cost_percentage > 20:
            score -= 2
        elif cost_percentage > 10:
            score -= 1
        elif cost_percentage <= 1:
            score += 3

    if frequency == "Daily":
        score += 2
    elif frequency in ("Rarely", "One-time"):
        score -= 2

    return max(0, min(10, score))


# Risk criteria


def score_financial_risk(financial_profile: Optional[FinancialProfile]) -> int:
    summary = _summary_of(financial_profile)
    if summary is None:
        return NEUTRAL_SCORE

    emergency_fund_months = to_number(summary.emergency_fund_months)
    debt_ratio = to_number(summary.debt_to_income_ratio)

    if debt_ratio >= 100:
        return 0

    score = 10
    if emergency_fund_months < 3:
        score -= 3
    if debt_ratio > 40:
        score -= 3
    elif debt_ratio > 30:
        score -= 2
    elif debt_ratio > 20:
        score -= 1

    return max(0, score)


def score_alternative_availability(alternative: Optional[Alternative]) -> int:
    """Having no priced alternative is the best case"""
    if alternative_price(alternative):
        return 3
    return 10


@dataclass(frozen=True)
class PurchaseContext:
    """Normalised inputs shared by all scoring functions"""

    item_name: str
    cost: float
    purpose: str
    frequency: Optional[str]
    financial_profile: Optional[FinancialProfile]
    alternative: Optional[Alternative]
    item_type: ItemType


SCORING_FUNCTIONS: Dict[CriterionId, Callable[[PurchaseContext], int]] = {
    CriterionId.AFFORDABILITY: lambda ctx: score_affordability(ctx.cost, ctx.financial_profile),
    CriterionId.VALUE_FOR_MONEY: lambda ctx: score_value_for_money(ctx.cost, ctx.alternative),
    CriterionId.OPPORTUNITY_COST: lambda ctx: score_opportunity_cost(ctx.cost, ctx.financial_profile),
    CriterionId.FINANCIAL_GOAL_ALIGNMENT: lambda ctx: score_financial_goal_alignment(
        ctx.financial_profile, ctx.purpose
    ),
    CriterionId.NECESSITY: lambda ctx: score_necessity(ctx.item_name, ctx.purpose),
    CriterionId.FREQUENCY_OF_USE: lambda ctx: score_frequency_of_use(ctx.frequency, ctx.item_type),
    CriterionId.LONGEVITY: lambda ctx: score_longevity(ctx.item_name, ctx.cost, ctx.purpose, ctx.item_type),
    CriterionId.EMOTIONAL_VALUE: lambda ctx: score_emotional_value(ctx.purpose),
    CriterionId.SOCIAL_FACTORS: lambda ctx: score_social_factors(ctx.item_name, ctx.purpose),
    CriterionId.BUYERS_REMORSE: lambda ctx: score_buyers_remorse(
        ctx.cost, ctx.financial_profile, ctx.frequency, ctx.item_type
    ),
    CriterionId.FINANCIAL_RISK: lambda ctx: score_financial_risk(ctx.financial_profile),
    CriterionId.ALTERNATIVE_AVAILABILITY: lambda ctx: score_alternative_availability(ctx.alternative),
}

if set(SCORING_FUNCTIONS) != set(CriterionId):
    raise RuntimeError("every criterion needs a scoring function")


def determine_confidence(final_score: float) -> str:
    """
    Confidence bands, checked High first:
    - High:   >= 80 or <= 20
    - Medium: >= 65 or <= 35
    - Low:    everything in between
    """
    if final_score >= 80 or final_score <= 20:
        return "High"
    if final_score >= 65 or final_score <= 35:
        return "Medium"
    return "Low"


def determine_decision(final_score: float) -> str:
    """Hard threshold, no hysteresis"""
    return BUY if final_score >= BUY_THRESHOLD else DONT_BUY


def resolve_risk_tolerance(
    financial_profile: Optional[FinancialProfile],
    risk_tolerance_override: Optional[str] = None,
) -> str:
    if risk_tolerance_override:
        return risk_tolerance_override
    if financial_profile is not None and financial_profile.risk_tolerance:
        return financial_profile.risk_tolerance
    return DEFAULT_RISK_TOLERANCE


def score_decision(
    item_name,
    cost,
    purpose,
    frequency,
    financial_profile: Optional[FinancialProfile] = None,
    alternative: Optional[Alternative] = None,
    risk_tolerance_override: Optional[str] = None,
) -> DecisionResult:
    """
    Main entry point: score a prospective purchase across all twelve criteria.

    final_score = (sum of weighted scores / sum of weights) x 10, on 0-100.
    Never raises for missing or malformed optional input.
    """
    item_name = as_text(item_name)
    purpose = as_text(purpose)
    cost = coerce_cost(cost)
    frequency = frequency if isinstance(frequency, str) else None

    item_type = classify_item_type(item_name, purpose)
    criteria = build_criteria(resolve_risk_tolerance(financial_profile, risk_tolerance_override))

    context = PurchaseContext(
        item_name=item_name,
        cost=cost,
        purpose=purpose,
        frequency=frequency,
        financial_profile=financial_profile,
        alternative=alternative,
        item_type=item_type,
    )

    scores: Dict[CriterionId, Criterion] = {}
    total_weighted_score = 0.0
    total_weight = 0.0

    for criterion_id, definition in criteria.items():
        score = SCORING_FUNCTIONS[criterion_id](context)
        weighted_score = score * definition.weight

        scores[criterion_id] = Criterion(
            id=criterion_id,
            name=definition.name,
            description=definition.description,
            category=definition.category,
            weight=definition.weight,
            score=score,
            weighted_score=weighted_score,
        )
        total_weighted_score += weighted_score
        total_weight += definition.weight

    final_score = (total_weighted_score / total_weight) * 10

    return DecisionResult(
        scores=scores,
        final_score=final_score,
        decision=determine_decision(final_score),
        confidence=determine_confidence(final_score),
        item_type=item_type,
    )
