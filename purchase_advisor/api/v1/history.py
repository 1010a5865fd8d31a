"""GET /v1/decision/history - Fetch user's purchase decision history"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from purchase_advisor.api.v1.schemas import HistoryResponse, HistoryItem
from purchase_advisor.config import settings
from purchase_advisor.infrastructure.database.session import get_db
from purchase_advisor.infrastructure.database.repositories import DecisionRepository

router = APIRouter()


@router.get("/decision/history", response_model=HistoryResponse)
def get_decision_history(
    user_id: str = Query(..., description="User identifier"),
    db: Session = Depends(get_db),
):
    """
    Retrieve recent purchase decisions for a user, newest first.
    """
    decision_repo = DecisionRepository(db)
    decisions = decision_repo.get_decisions_by_user(user_id, limit=settings.history_limit)

    history_items = [
        HistoryItem(
            decision_id=str(d.id),
            item_name=d.item_name,
            cost=d.cost,
            decision=d.decision,
            final_score=d.final_score,
            confidence=d.confidence,
            created_at=d.created_at.isoformat(),
        )
        for d in decisions
    ]

    return HistoryResponse(user_id=user_id, decisions=history_items)
