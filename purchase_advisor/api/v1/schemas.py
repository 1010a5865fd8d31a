"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Literal, Optional

RiskTolerance = Literal["low", "moderate", "high"]
FinancialGoal = Literal["save", "debt", "invest", "balance"]


class ProfileSummarySchema(BaseModel):
    """Derived financial metrics"""

    monthly_net_income: float = 0.0
    debt_to_income_ratio: float = 0.0
    emergency_fund_months: float = 0.0
    health_score: int = 50
    has_emergency_fund: bool = False


class FinancialProfileSchema(BaseModel):
    """User's financial profile; summary may be omitted"""

    summary: Optional[ProfileSummarySchema] = None
    risk_tolerance: RiskTolerance = "moderate"
    financial_goal: FinancialGoal = "balance"


class AlternativeSchema(BaseModel):
    """Cheaper option under consideration"""

    name: str
    price: float = Field(..., ge=0)


class DecisionRequest(BaseModel):
    """Request body for POST /v1/decision"""

    user_id: Optional[str] = Field(None, description="User identifier for history")
    item_name: str = Field(..., min_length=1, description="Item being considered")
    cost: float = Field(..., ge=0, description="Item price in dollars")
    purpose: str = ""
    frequency: Optional[str] = Field(None, description="Daily, Weekly, Monthly, Rarely or One-time")
    financial_profile: Optional[FinancialProfileSchema] = None
    alternative: Optional[AlternativeSchema] = None
    risk_tolerance: Optional[RiskTolerance] = Field(None, description="Overrides the profile's risk tolerance")


class MatrixEntrySchema(BaseModel):
    """Single criterion row in the decision matrix"""

    criterion: str
    score: float
    weight: str
    impact: str


class TopFactorsSchema(BaseModel):
    positive: List[str]
    negative: List[str]


class AnalysisDetailsSchema(BaseModel):
    final_score: str
    confidence: str
    top_factors: TopFactorsSchema
    purchase_category: str
    item_name: str
    item_cost: float


class DecisionResponse(BaseModel):
    """Response for POST /v1/decision"""

    decision_id: str
    decision: str
    summary: str
    reasoning: str
    quote: str
    analysis_details: AnalysisDetailsSchema
    decision_matrix: Dict[str, List[MatrixEntrySchema]]
    alternative: Optional[AlternativeSchema] = None


class StoredDecisionResponse(BaseModel):
    """Response for GET /v1/decision/{decision_id}"""

    decision_id: str
    user_id: Optional[str] = None
    item_name: str
    cost: float
    decision: str
    final_score: float
    confidence: str
    item_type: str
    purchase_category: Optional[str] = None
    summary: Optional[str] = None
    scores: Dict[str, Dict[str, Any]]
    created_at: str


class HistoryItem(BaseModel):
    """Single decision in history"""

    decision_id: str
    item_name: str
    cost: float
    decision: str
    final_score: float
    confidence: str
    created_at: str


class HistoryResponse(BaseModel):
    """Response for GET /v1/decision/history"""

    user_id: str
    decisions: List[HistoryItem]


class ProfileSummaryRequest(BaseModel):
    """Request body for POST /v1/profile/summary"""

    monthly_income: float = 0.0
    monthly_expenses: float = 0.0
    debt_payments: float = 0.0
    current_savings: float = 0.0
    debt_included_in_expenses: bool = False


class ClassifyRequest(BaseModel):
    """Request body for POST /v1/classify"""

    item_name: str
    cost: float


class ClassifyResponse(BaseModel):
    """Response for POST /v1/classify"""

    category: str
    cached: bool
