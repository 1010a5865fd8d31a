"""Derive a ProfileSummary from raw monthly figures"""

from purchase_advisor.domain.models import ProfileSummary
from purchase_advisor.domain.scoring import to_number


def calculate_health_score(income: float, expenses: float, debt: float, emergency_fund_months: float) -> int:
    """
    Financial health score from 0 to 100, starting at 50.

    - Income vs expenses: > 1.3x +20, > 1.1x +10, below expenses -20
    - Emergency fund: >= 3 months +20, >= 1 month +10, otherwise -10
    - Debt payments / income (only with income): none +10, < 20% +5, > 40% -15
    """
    score = 50

    if income > expenses * 1.3:
        score += 20
    elif income > expenses * 1.1:
        score += 10
    elif income < expenses:
        score -= 20

    if emergency_fund_months >= 3:
        score += 20
    elif emergency_fund_months >= 1:
        score += 10
    else:
        score -= 10

    if income > 0:
        debt_ratio = debt / income
        if debt_ratio == 0:
            score += 10
        elif debt_ratio < 0.2:
            score += 5
        elif debt_ratio > 0.4:
            score -= 15

    return max(0, min(100, score))


def summarize_profile(
    monthly_income,
    monthly_expenses,
    debt_payments,
    current_savings,
    debt_included_in_expenses: bool = False,
) -> ProfileSummary:
    """
    Build the summary metrics the scoring engine reads.

    Expenses should exclude debt payments; if the user included them, pass
    debt_included_in_expenses=True and they are backed out first. The
    emergency fund is measured against the monthly must-pay burn
    (expenses + debt).
    """
    income = to_number(monthly_income)
    expenses_input = to_number(monthly_expenses)
    debt = to_number(debt_payments)
    savings = to_number(current_savings)

    expenses = max(0.0, expenses_input - debt) if debt_included_in_expenses else expenses_input

    monthly_net_income = income - expenses - debt
    debt_to_income_ratio = (debt / income) * 100 if income > 0 and debt > 0 else 0.0

    monthly_burn = max(0.0, expenses + debt)
    emergency_fund_months = savings / monthly_burn if monthly_burn > 0 else 0.0

    return ProfileSummary(
        monthly_net_income=monthly_net_income,
        debt_to_income_ratio=debt_to_income_ratio,
        emergency_fund_months=emergency_fund_months,
        health_score=calculate_health_score(income, expenses_input, debt, emergency_fund_months),
        has_emergency_fund=emergency_fund_months >= 3,
    )
