"""Recommendation text, summary and display matrix built from a DecisionResult"""

from typing import Dict, List, Optional

from purchase_advisor.domain.classifier import classify_item_type
from purchase_advisor.domain.criteria import round_half_up
from purchase_advisor.domain.models import (
    BUY,
    Alternative,
    Category,
    Criterion,
    CriterionId,
    DecisionMatrix,
    DecisionResult,
    ItemType,
    MatrixEntry,
    Recommendation,
)
from purchase_advisor.domain.scoring import alternative_price, coerce_cost

POSITIVE_SCORE = 7
NEGATIVE_SCORE = 4
TOP_FACTOR_COUNT = 3

EXPLANATIONS: Dict[CriterionId, Dict[str, str]] = {
    CriterionId.AFFORDABILITY: {
        "high": "Well within your budget",
        "medium": "Manageable expense",
        "low": "Significant financial impact",
    },
    CriterionId.VALUE_FOR_MONEY: {
        "high": "Excellent value proposition",
        "medium": "Fair market value",
        "low": "Overpriced compared to alternatives",
    },
    CriterionId.OPPORTUNITY_COST: {
        "high": "Minimal impact on other goals",
        "medium": "Some trade-offs required",
        "low": "Significant opportunity cost",
    },
    CriterionId.FINANCIAL_GOAL_ALIGNMENT: {
        "high": "Aligns well with financial goals",
        "medium": "Neutral impact on goals",
        "low": "May detract from financial goals",
    },
    CriterionId.NECESSITY: {
        "high": "Essential item",
        "medium": "Useful but not critical",
        "low": "Luxury or want",
    },
    CriterionId.FREQUENCY_OF_USE: {
        "high": "Will be used regularly",
        "medium": "Moderate usage expected",
        "low": "Limited usage anticipated",
    },
    CriterionId.LONGEVITY: {
        "high": "Durable and long-lasting",
        "medium": "Average lifespan",
        "low": "Consumable or short-lived",
    },
    CriterionId.EMOTIONAL_VALUE: {
        "high": "High potential for satisfaction",
        "medium": "Some emotional benefit",
        "low": "Low emotional return",
    },
    CriterionId.SOCIAL_FACTORS: {
        "high": "Purchase is internally motivated",
        "medium": "Some social influence",
        "low": "Likely driven by social pressure",
    },
    CriterionId.BUYERS_REMORSE: {
        "high": "Low risk of regret",
        "medium": "Some risk of regret",
        "low": "High risk of buyer's remorse",
    },
    CriterionId.FINANCIAL_RISK: {
        "high": "Low risk to financial stability",
        "medium": "Moderate financial impact",
        "low": "High risk to financial health",
    },
    CriterionId.ALTERNATIVE_AVAILABILITY: {
        "high": "This is a good option",
        "medium": "Alternatives exist but are comparable",
        "low": "Better alternatives are likely available",
    },
}

# Food-specific wording
CONSUMABLE_EXPLANATIONS: Dict[CriterionId, Dict[str, str]] = {
    CriterionId.FREQUENCY_OF_USE: {
        "high": "Reasonable dining frequency",
        "medium": "Moderate dining expense",
        "low": "Consider frequency of eating out",
    },
    CriterionId.LONGEVITY: {
        "high": "Reasonable meal cost",
        "medium": "Moderate dining expense",
        "low": "Expensive for a meal",
    },
    CriterionId.BUYERS_REMORSE: {
        "high": "Unlikely to regret this meal",
        "medium": "Some concern about meal cost",
        "low": "May regret spending this much on food",
    },
}

QUOTES: Dict[str, List[str]] = {
    "strong_buy": [
        "Price is what you pay. Value is what you get.",
        "The best investment you can make is in yourself.",
        "Opportunities come infrequently. When it rains gold, put out the bucket, not the thimble.",
    ],
    "buy": [
        "It's far better to buy a wonderful company at a fair price than a fair company at a wonderful price.",
        "The big money is not in the buying and selling, but in the owning.",
        "Time is the friend of the wonderful company, the enemy of the mediocre.",
    ],
    "dont_buy": [
        "The big money is not in the buying and selling, but in the waiting.",
        "You don't have to swing at everything - you can wait for your pitch.",
        "The first rule of compounding: Never interrupt it unnecessarily.",
    ],
    "strong_dont_buy": [
        "It's better to be roughly right than precisely wrong.",
        "The iron rule of nature is: you get what you reward for.",
        "Simplicity has a way of improving performance by enabling us to better understand what we are doing.",
    ],
}

MATRIX_CATEGORY_ORDER = (Category.FINANCIAL, Category.PSYCHOLOGICAL, Category.RISK, Category.UTILITY)


def score_level(score: float) -> str:
    if score >= 7:
        return "high"
    if score >= 4:
        return "medium"
    return "low"


def explain_score(criterion_id: CriterionId, score: float, item_type: ItemType) -> str:
    """Human-readable explanation for a criterion score"""
    explanations = EXPLANATIONS.get(criterion_id)
    if item_type == ItemType.CONSUMABLE and criterion_id in CONSUMABLE_EXPLANATIONS:
        explanations = CONSUMABLE_EXPLANATIONS[criterion_id]

    if explanations is None:
        return f"Score: {score}/10"
    return explanations[score_level(score)]


def impact_label(score: float) -> str:
    if score >= POSITIVE_SCORE:
        return "Positive"
    if score <= NEGATIVE_SCORE:
        return "Negative"
    return "Neutral"


def _impact(criterion: Criterion) -> float:
    return abs(criterion.score - 5) * criterion.weight


def top_positive_factors(scores: Dict[CriterionId, Criterion], limit: int = TOP_FACTOR_COUNT) -> List[Criterion]:
    """Highest weighted scores among criteria scoring 7 or more"""
    ranked = sorted(scores.values(), key=lambda c: c.weighted_score, reverse=True)
    return [c for c in ranked if c.score >= POSITIVE_SCORE][:limit]


def top_negative_factors(scores: Dict[CriterionId, Criterion], limit: int = TOP_FACTOR_COUNT) -> List[Criterion]:
    """Lowest weighted scores among criteria scoring 4 or less"""
    ranked = sorted(scores.values(), key=lambda c: c.weighted_score)
    return [c for c in ranked if c.score <= NEGATIVE_SCORE][:limit]


def generate_summary(result: DecisionResult) -> str:
    """
    Two-sentence summary keyed off the most impactful positive and negative
    factor, where impact = |score - 5| x weight.
    """
    by_impact = sorted(result.scores.values(), key=_impact, reverse=True)

    top_positive = next((c for c in by_impact if c.score >= POSITIVE_SCORE), None)
    top_negative = next((c for c in by_impact if c.score <= NEGATIVE_SCORE), None)

    positive_reason = top_positive.name.lower() if top_positive else "its potential utility"
    negative_reason = top_negative.name.lower() if top_negative else "the overall cost"

    if result.decision == BUY:
        return (
            f"This appears to be a reasonable purchase, primarily due to its {positive_reason}. "
            f"However, carefully consider the concern of {negative_reason} before making a final decision."
        )
    return (
        f"It might be wise to hold off on this purchase, mainly because of concerns about {negative_reason}. "
        f"While its {positive_reason} is a point in its favor, it may not be the right time to buy."
    )


def format_amount(amount: float) -> str:
    """Plain dollar figure without trailing zeros (400 -> "400", 39.5 -> "39.5")"""
    text = f"{amount:.2f}".rstrip("0").rstrip(".")
    return text or "0"


def format_recommendation(
    result: DecisionResult,
    item_name,
    cost,
    alternative: Optional[Alternative] = None,
    purpose=None,
) -> Recommendation:
    """
    Build reasoning text, summary and analysis details for a decision.

    The reasoning is the long-form explanation (positive factors, concerns,
    overall assessment and an optional cheaper-alternative note); the
    summary is the short two-sentence version shown to the user.
    """
    cost = coerce_cost(cost)
    item_type = classify_item_type(item_name, purpose)

    positives = top_positive_factors(result.scores)
    negatives = top_negative_factors(result.scores)

    lines = [f"Based on a comprehensive decision analysis using {len(result.scores)} criteria:", ""]

    if positives:
        lines.append("**Positive factors:**")
        for criterion in positives:
            lines.append(f"• {criterion.name}: {explain_score(criterion.id, criterion.score, item_type)}")
        lines.append("")

    if negatives:
        lines.append("**Concerns:**")
        for criterion in negatives:
            lines.append(f"• {criterion.name}: {explain_score(criterion.id, criterion.score, item_type)}")
        lines.append("")

    lines.append(
        f"**Overall Assessment:** The weighted score is {result.final_score:.1f}/100 "
        f"({result.confidence} confidence)."
    )
    lines.append("")

    if result.decision == BUY:
        lines.append(
            "This purchase appears to be well-justified based on your financial situation and the item's utility."
        )
    else:
        lines.append("This purchase may not be optimal at this time. Consider waiting or exploring alternatives.")

    reasoning = "\n".join(lines)

    price = alternative_price(alternative)
    if price is not None and price < cost:
        reasoning += (
            f"\n\n**Note:** A cheaper alternative ({alternative.name}) is available for "
            f"${format_amount(price)}, which could save you ${cost - price:.2f}."
        )

    return Recommendation(
        decision=result.decision,
        reasoning=reasoning,
        summary=generate_summary(result),
        analysis_details={
            "final_score": f"{result.final_score:.1f}",
            "confidence": result.confidence,
            "top_factors": {
                "positive": [c.name for c in positives],
                "negative": [c.name for c in negatives],
            },
        },
    )


def format_decision_matrix(scores: Dict[CriterionId, Criterion]) -> DecisionMatrix:
    """Group scored criteria by category for display"""
    matrix: DecisionMatrix = {category.value: [] for category in MATRIX_CATEGORY_ORDER}

    for criterion in scores.values():
        matrix[criterion.category.value].append(
            MatrixEntry(
                criterion=criterion.name,
                score=criterion.score,
                weight=f"{round_half_up(criterion.weight * 100, 0):.0f}%",
                impact=impact_label(criterion.score),
            )
        )

    return matrix


def select_quote(decision: str, final_score: float) -> str:
    """
    Pick a closing quote for the decision.

    Buckets: strong buy (Buy, >= 80), buy, strong don't buy (<= 30), don't
    buy. Within a bucket the quote is chosen from the integer score so the
    same decision always gets the same quote.
    """
    if decision == BUY and final_score >= 80:
        bucket = "strong_buy"
    elif decision == BUY:
        bucket = "buy"
    elif final_score <= 30:
        bucket = "strong_dont_buy"
    else:
        bucket = "dont_buy"

    quotes = QUOTES[bucket]
    return quotes[int(final_score) % len(quotes)]
