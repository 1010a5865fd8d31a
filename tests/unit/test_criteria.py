"""Unit tests for the criteria table and weight derivation"""

import pytest
from purchase_advisor.domain.criteria import build_criteria, category_weights, round_half_up
from purchase_advisor.domain.models import Category, CriterionId


def _category_total(criteria, category):
    return sum(c.weight for c in criteria.values() if c.category == category)


def test_weights_sum_to_one_for_every_tolerance():
    """Twelve weights sum to 1.0 for all tiers, including missing/unknown"""
    for tolerance in ("low", "moderate", "high", None, "reckless"):
        criteria = build_criteria(tolerance)
        assert len(criteria) == 12
        assert sum(c.weight for c in criteria.values()) == pytest.approx(1.0, abs=1e-4)


def test_criteria_in_canonical_order():
    assert list(build_criteria("moderate")) == list(CriterionId)


def test_category_weights_by_tolerance():
    """Financial stays at 40%; risk/utility/psychological shift with tolerance"""
    assert category_weights("moderate") == pytest.approx(
        {Category.FINANCIAL: 0.40, Category.UTILITY: 0.30, Category.PSYCHOLOGICAL: 0.20, Category.RISK: 0.10}
    )
    assert category_weights("low") == pytest.approx(
        {Category.FINANCIAL: 0.40, Category.UTILITY: 0.27, Category.PSYCHOLOGICAL: 0.18, Category.RISK: 0.15}
    )
    assert category_weights("high") == pytest.approx(
        {Category.FINANCIAL: 0.40, Category.UTILITY: 0.32, Category.PSYCHOLOGICAL: 0.21, Category.RISK: 0.07}
    )
    assert category_weights(None) == category_weights("moderate")


def test_risk_bucket_follows_tolerance():
    assert _category_total(build_criteria("low"), Category.RISK) == pytest.approx(0.15, abs=0.005)
    assert _category_total(build_criteria("moderate"), Category.RISK) == pytest.approx(0.10, abs=0.005)
    assert _category_total(build_criteria("high"), Category.RISK) == pytest.approx(0.07, abs=0.005)


def test_moderate_weights_golden_values():
    """
    Moderate tier: utility relative weights sum to 0.999, so raw weights are
    divided by 0.9997 before rounding. The last criterion absorbs the
    leftover: 1 - 0.9497 = 0.0503.
    """
    criteria = build_criteria("moderate")

    assert criteria[CriterionId.AFFORDABILITY].weight == pytest.approx(0.15)
    assert criteria[CriterionId.VALUE_FOR_MONEY].weight == pytest.approx(0.10)
    assert criteria[CriterionId.NECESSITY].weight == pytest.approx(0.0999)
    assert criteria[CriterionId.BUYERS_REMORSE].weight == pytest.approx(0.10)
    assert criteria[CriterionId.FINANCIAL_RISK].weight == pytest.approx(0.05)
    assert criteria[CriterionId.ALTERNATIVE_AVAILABILITY].weight == pytest.approx(0.0503)


def test_criterion_metadata():
    criteria = build_criteria()
    affordability = criteria[CriterionId.AFFORDABILITY]
    assert affordability.name == "Affordability"
    assert affordability.category == Category.FINANCIAL
    assert criteria[CriterionId.BUYERS_REMORSE].name == "Buyer's Remorse Risk"


def test_round_half_up_ties_go_up():
    # Python's round() would give 0.12 and 2.0 here
    assert round_half_up(0.125, 2) == 0.13
    assert round_half_up(2.5, 0) == 3.0
    assert round_half_up(0.12344, 4) == 0.1234
