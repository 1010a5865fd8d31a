"""Data access layer for purchase decisions"""

import uuid
from typing import List, Optional
from sqlalchemy.orm import Session
from purchase_advisor.infrastructure.database.models import PurchaseDecisionRecord
from purchase_advisor.domain.models import DecisionResult, Recommendation


class DecisionRepository:
    """Repository for purchase decisions"""

    def __init__(self, db: Session):
        self.db = db

    def create_decision(
        self,
        user_id: Optional[str],
        item_name: str,
        cost: float,
        purpose: Optional[str],
        frequency: Optional[str],
        result: DecisionResult,
        recommendation: Recommendation,
        purchase_category: Optional[str],
    ) -> PurchaseDecisionRecord:
        """Persist an evaluated purchase to the database"""
        record = PurchaseDecisionRecord(
            user_id=user_id,
            item_name=item_name,
            cost=cost,
            purpose=purpose,
            frequency=frequency,
            decision=result.decision,
            final_score=result.final_score,
            confidence=result.confidence,
            item_type=result.item_type.value,
            purchase_category=purchase_category,
            summary=recommendation.summary,
            scores={
                criterion_id.value: {
                    "name": criterion.name,
                    "category": criterion.category.value,
                    "weight": criterion.weight,
                    "score": criterion.score,
                    "weighted_score": criterion.weighted_score,
                }
                for criterion_id, criterion in result.scores.items()
            },
        )
        self.db.add(record)
        self.db.flush()  # Get ID without committing
        return record

    def get_decisions_by_user(self, user_id: str, limit: int = 10) -> List[PurchaseDecisionRecord]:
        """Fetch recent decisions for a user"""
        return (
            self.db.query(PurchaseDecisionRecord)
            .filter(PurchaseDecisionRecord.user_id == user_id)
            .order_by(PurchaseDecisionRecord.created_at.desc(), PurchaseDecisionRecord.id.desc())
            .limit(limit)
            .all()
        )

    def get_decision_by_id(self, decision_id: uuid.UUID) -> Optional[PurchaseDecisionRecord]:
        """Fetch a single stored decision"""
        return (
            self.db.query(PurchaseDecisionRecord)
            .filter(PurchaseDecisionRecord.id == decision_id)
            .first()
        )
