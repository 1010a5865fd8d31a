"""POST /v1/profile/summary - derive profile metrics from monthly figures"""

from fastapi import APIRouter

from purchase_advisor.api.v1.schemas import ProfileSummaryRequest, ProfileSummarySchema
from purchase_advisor.domain.profile import summarize_profile

router = APIRouter()


@router.post("/profile/summary", response_model=ProfileSummarySchema)
def create_profile_summary(request_body: ProfileSummaryRequest):
    """
    Compute net income, debt-to-income ratio, emergency fund months and a
    0-100 health score. The result can be sent back as
    financial_profile.summary on POST /v1/decision.
    """
    summary = summarize_profile(
        monthly_income=request_body.monthly_income,
        monthly_expenses=request_body.monthly_expenses,
        debt_payments=request_body.debt_payments,
        current_savings=request_body.current_savings,
        debt_included_in_expenses=request_body.debt_included_in_expenses,
    )
    return ProfileSummarySchema(
        monthly_net_income=summary.monthly_net_income,
        debt_to_income_ratio=summary.debt_to_income_ratio,
        emergency_fund_months=summary.emergency_fund_months,
        health_score=summary.health_score,
        has_emergency_fund=summary.has_emergency_fund,
    )
