"""Pytest fixtures for testing"""

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from purchase_advisor.api.main import create_app
from purchase_advisor.api.dependencies import get_classification_cache
from purchase_advisor.infrastructure.database.models import Base
from purchase_advisor.infrastructure.database.session import get_db
from purchase_advisor.domain.models import FinancialProfile
from purchase_advisor.domain.profile import summarize_profile
from purchase_advisor.domain.purchase_category import ClassificationCache


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database and a fresh classification cache"""
    app = create_app()
    cache = ClassificationCache()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_classification_cache] = lambda: cache
    return TestClient(app)


def make_profile(
    monthly_income: float,
    monthly_expenses: float,
    current_savings: float,
    debt_payments: float,
    risk_tolerance: str,
    financial_goal: str,
) -> FinancialProfile:
    return FinancialProfile(
        summary=summarize_profile(monthly_income, monthly_expenses, debt_payments, current_savings),
        risk_tolerance=risk_tolerance,
        financial_goal=financial_goal,
    )


@pytest.fixture
def struggling_student() -> FinancialProfile:
    """Net $100/month, 0.29 months of savings, 13% debt-to-income"""
    return make_profile(1500, 1200, 400, 200, "low", "save")


@pytest.fixture
def high_earner() -> FinancialProfile:
    """Net $3000/month, 0.56 months of savings, 25% debt-to-income"""
    return make_profile(12000, 6000, 5000, 3000, "high", "balance")


@pytest.fixture
def balanced_budgeter() -> FinancialProfile:
    """Net $2000/month, 5 months of savings, 10% debt-to-income"""
    return make_profile(5000, 2500, 15000, 500, "moderate", "invest")


@pytest.fixture
def zero_income() -> FinancialProfile:
    """No income, $1000/month expenses, 2 months of savings, no debt"""
    return make_profile(0, 1000, 2000, 0, "low", "save")


@pytest.fixture
def high_debt() -> FinancialProfile:
    """Net $500/month, 0.14 months of savings, 50% debt-to-income"""
    return make_profile(4000, 1500, 500, 2000, "low", "debt")


@pytest.fixture
def wealthy() -> FinancialProfile:
    """Net $17000/month, 18.75 months of savings, no debt"""
    return make_profile(25000, 8000, 150000, 0, "high", "invest")


@pytest.fixture
def negative_cash_flow() -> FinancialProfile:
    """Net -$300/month, 0.3 months of savings, 26.7% debt-to-income"""
    return make_profile(3000, 2500, 1000, 800, "moderate", "balance")
