"""POST /v1/decision - purchase Buy / Don't Buy recommendation endpoint"""

import time
import uuid
import logging
from dataclasses import asdict
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from purchase_advisor.api.v1.schemas import (
    AlternativeSchema,
    DecisionRequest,
    DecisionResponse,
    FinancialProfileSchema,
    StoredDecisionResponse,
)
from purchase_advisor.api.dependencies import get_classification_cache, get_request_id
from purchase_advisor.infrastructure.database.session import get_db
from purchase_advisor.infrastructure.database.repositories import DecisionRepository
from purchase_advisor.domain.exceptions import InvalidPurchaseError
from purchase_advisor.domain.models import (
    Alternative,
    FinancialProfile,
    ProfileSummary,
    PurchaseClassification,
)
from purchase_advisor.domain.purchase_category import (
    ClassificationCache,
    classify_purchase,
    price_fallback_category,
)
from purchase_advisor.domain.scoring import score_decision
from purchase_advisor.domain.recommendation import (
    format_decision_matrix,
    format_recommendation,
    select_quote,
)
from purchase_advisor.infrastructure.observability.metrics import record_classification, record_decision
from purchase_advisor.infrastructure.observability.logging import log_decision

router = APIRouter()


def to_financial_profile(schema: Optional[FinancialProfileSchema]) -> Optional[FinancialProfile]:
    if schema is None:
        return None
    summary = ProfileSummary(**schema.summary.model_dump()) if schema.summary is not None else None
    return FinancialProfile(
        summary=summary,
        risk_tolerance=schema.risk_tolerance,
        financial_goal=schema.financial_goal,
    )


def to_alternative(schema: Optional[AlternativeSchema]) -> Optional[Alternative]:
    if schema is None:
        return None
    return Alternative(name=schema.name, price=schema.price)


@router.post("/decision", response_model=DecisionResponse)
def create_decision(
    request_body: DecisionRequest,
    request: Request,
    db: Session = Depends(get_db),
    cache: ClassificationCache = Depends(get_classification_cache),
):
    """
    Evaluate a prospective purchase.

    Flow:
    1. Classify the purchase category (cached)
    2. Score all twelve criteria and aggregate into a decision
    3. Build reasoning, summary, decision matrix and quote
    4. Persist the decision
    5. Return the recommendation
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        # 1. Purchase category; invalid input must not block scoring
        try:
            classification = classify_purchase(request_body.item_name, request_body.cost, cache=cache)
        except InvalidPurchaseError as e:
            logging.warning(f"Invalid purchase, using price category: {e}", extra={"request_id": request_id})
            classification = PurchaseClassification(
                category=price_fallback_category(request_body.cost),
                cached=False,
            )

        # 2. Score
        alternative = to_alternative(request_body.alternative)
        result = score_decision(
            request_body.item_name,
            request_body.cost,
            request_body.purpose,
            request_body.frequency,
            to_financial_profile(request_body.financial_profile),
            alternative,
            request_body.risk_tolerance,
        )

        # 3. Format
        recommendation = format_recommendation(
            result,
            request_body.item_name,
            request_body.cost,
            alternative,
            request_body.purpose,
        )
        decision_matrix = format_decision_matrix(result.scores)

        # 4. Persist
        decision_repo = DecisionRepository(db)
        record = decision_repo.create_decision(
            user_id=request_body.user_id,
            item_name=request_body.item_name,
            cost=request_body.cost,
            purpose=request_body.purpose,
            frequency=request_body.frequency,
            result=result,
            recommendation=recommendation,
            purchase_category=classification.category,
        )
        db.commit()

        # Record metrics and logs
        duration_ms = (time.time() - start_time) * 1000
        record_classification(classification.category, classification.cached)
        record_decision(result.decision, result.confidence, result.final_score)
        log_decision(
            request_id,
            request_body.item_name,
            result.decision,
            result.final_score,
            result.confidence,
            classification.category,
            duration_ms,
        )

        return DecisionResponse(
            decision_id=str(record.id),
            decision=recommendation.decision,
            summary=recommendation.summary,
            reasoning=recommendation.reasoning,
            quote=select_quote(result.decision, result.final_score),
            analysis_details={
                **recommendation.analysis_details,
                "purchase_category": classification.category,
                "item_name": request_body.item_name,
                "item_cost": request_body.cost,
            },
            decision_matrix={
                category: [asdict(entry) for entry in entries] for category, entries in decision_matrix.items()
            },
            alternative=request_body.alternative,
        )

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/decision/{decision_id}", response_model=StoredDecisionResponse)
def get_decision(decision_id: str, db: Session = Depends(get_db)):
    """
    Retrieve a stored decision with its per-criterion breakdown.
    """
    try:
        decision_uuid = uuid.UUID(decision_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid decision ID format")

    record = DecisionRepository(db).get_decision_by_id(decision_uuid)

    if not record:
        raise HTTPException(status_code=404, detail="Decision not found")

    return StoredDecisionResponse(
        decision_id=str(record.id),
        user_id=record.user_id,
        item_name=record.item_name,
        cost=record.cost,
        decision=record.decision,
        final_score=record.final_score,
        confidence=record.confidence,
        item_type=record.item_type,
        purchase_category=record.purchase_category,
        summary=record.summary,
        scores=record.scores or {},
        created_at=record.created_at.isoformat(),
    )
