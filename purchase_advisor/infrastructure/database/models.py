"""SQLAlchemy ORM models for stored purchase decisions"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, Float, DateTime, Text, JSON, Uuid
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _utcnow() -> datetime:
    # Microsecond precision; SQLite CURRENT_TIMESTAMP only has seconds
    return datetime.now(timezone.utc)


class PurchaseDecisionRecord(Base):
    """Evaluated purchase with its final score and per-criterion breakdown"""

    __tablename__ = "purchase_decision"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=True, index=True)
    item_name = Column(Text, nullable=False)
    cost = Column(Float, nullable=False)
    purpose = Column(Text, nullable=True)
    frequency = Column(Text, nullable=True)
    decision = Column(Text, nullable=False)
    final_score = Column(Float, nullable=False)
    confidence = Column(Text, nullable=False)
    item_type = Column(Text, nullable=False)
    purchase_category = Column(Text, nullable=True)
    summary = Column(Text, nullable=True)
    scores = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
