"""Integration tests for API endpoints"""

import uuid
import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def comfortable_profile():
    """Net $4000/month, 6 months saved, no debt"""
    return {
        "summary": {
            "monthly_net_income": 4000,
            "debt_to_income_ratio": 0,
            "emergency_fund_months": 6,
            "health_score": 100,
            "has_emergency_fund": True,
        },
        "risk_tolerance": "moderate",
        "financial_goal": "balance",
    }


@pytest.fixture
def stretched_profile():
    """Net $300/month, half a month saved, 45% debt-to-income"""
    return {
        "summary": {
            "monthly_net_income": 300,
            "debt_to_income_ratio": 45,
            "emergency_fund_months": 0.5,
            "health_score": 20,
            "has_emergency_fund": False,
        },
        "risk_tolerance": "low",
        "financial_goal": "debt",
    }


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    client.post("/v1/decision", json={"item_name": "Desk lamp", "cost": 40})

    response = client.get("/metrics")
    assert response.status_code == 200
    assert "purchase_decision_total" in response.text
    assert "purchase_classification_cache_total" in response.text


def test_request_id_is_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"

    generated = client.get("/health").headers["X-Request-ID"]
    assert uuid.UUID(generated)


def test_decision_endpoint_buy(client: TestClient, comfortable_profile: dict):
    """Test POST /v1/decision for an affordable, useful item"""
    response = client.post(
        "/v1/decision",
        json={
            "user_id": "user_comfortable",
            "item_name": "Office chair",
            "cost": 150,
            "purpose": "Work from home",
            "frequency": "Daily",
            "financial_profile": comfortable_profile,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["decision"] == "Buy"
    assert data["decision_id"]
    assert data["summary"].startswith("This appears to be a reasonable purchase")
    assert data["reasoning"].startswith("Based on a comprehensive decision analysis using 12 criteria:")
    assert data["quote"]
    assert data["analysis_details"]["purchase_category"] == "DISCRETIONARY_MEDIUM"
    assert data["analysis_details"]["item_name"] == "Office chair"
    assert data["analysis_details"]["item_cost"] == 150
    assert float(data["analysis_details"]["final_score"]) >= 60
    assert "Affordability" in data["analysis_details"]["top_factors"]["positive"]


def test_decision_endpoint_dont_buy(client: TestClient, stretched_profile: dict):
    """Test POST /v1/decision for an expensive impulse buy on a tight budget"""
    response = client.post(
        "/v1/decision",
        json={
            "user_id": "user_stretched",
            "item_name": "Designer sneakers",
            "cost": 450,
            "purpose": "Impulse, they are popular",
            "frequency": "Rarely",
            "financial_profile": stretched_profile,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["decision"] == "Don't Buy"
    assert data["summary"].startswith("It might be wise to hold off on this purchase")
    assert data["analysis_details"]["purchase_category"] == "HIGH_VALUE"
    assert "Affordability" in data["analysis_details"]["top_factors"]["negative"]


def test_decision_without_profile(client: TestClient):
    """Only item name and cost are required"""
    response = client.post("/v1/decision", json={"item_name": "Desk lamp", "cost": 40})

    assert response.status_code == 200
    data = response.json()
    assert data["decision"] in ("Buy", "Don't Buy")
    assert data["alternative"] is None


def test_decision_matrix_shape(client: TestClient):
    response = client.post("/v1/decision", json={"item_name": "Desk lamp", "cost": 40, "frequency": "Daily"})

    matrix = response.json()["decision_matrix"]
    assert list(matrix) == ["financial", "psychological", "risk", "utility"]
    assert sum(len(entries) for entries in matrix.values()) == 12
    for entries in matrix.values():
        for entry in entries:
            assert entry["weight"].endswith("%")
            assert entry["impact"] in ("Positive", "Negative", "Neutral")


def test_decision_with_cheaper_alternative(client: TestClient):
    response = client.post(
        "/v1/decision",
        json={
            "item_name": "Laptop",
            "cost": 1000,
            "purpose": "Work",
            "frequency": "Daily",
            "alternative": {"name": "Budget laptop", "price": 400},
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["reasoning"].endswith(
        "**Note:** A cheaper alternative (Budget laptop) is available for $400, which could save you $600.00."
    )
    assert data["alternative"] == {"name": "Budget laptop", "price": 400}

    financial = {entry["criterion"]: entry for entry in data["decision_matrix"]["financial"]}
    assert financial["Value for Money"]["score"] == 2


def test_decision_risk_tolerance_override(client: TestClient, stretched_profile: dict):
    body = {
        "item_name": "Desk lamp",
        "cost": 40,
        "frequency": "Daily",
        "financial_profile": stretched_profile,
    }

    low = client.post("/v1/decision", json=body).json()
    high = client.post("/v1/decision", json={**body, "risk_tolerance": "high"}).json()

    low_risk = {entry["criterion"]: entry for entry in low["decision_matrix"]["risk"]}
    high_risk = {entry["criterion"]: entry for entry in high["decision_matrix"]["risk"]}
    assert low_risk["Financial Risk"]["weight"] == "8%"
    assert high_risk["Financial Risk"]["weight"] == "4%"


def test_decision_rejects_invalid_input(client: TestClient):
    """Negative cost, empty item names and missing fields are 422s"""
    assert client.post("/v1/decision", json={"item_name": "Lamp", "cost": -5}).status_code == 422
    assert client.post("/v1/decision", json={"item_name": "", "cost": 5}).status_code == 422
    assert client.post("/v1/decision", json={"cost": 5}).status_code == 422
    assert (
        client.post(
            "/v1/decision",
            json={"item_name": "Lamp", "cost": 5, "financial_profile": {"risk_tolerance": "yolo"}},
        ).status_code
        == 422
    )


def test_decision_with_blank_item_name_still_scores(client: TestClient):
    """A whitespace-only name fails category validation but still gets a decision"""
    cheap = client.post("/v1/decision", json={"item_name": "   ", "cost": 20, "frequency": "Daily"})
    pricey = client.post("/v1/decision", json={"item_name": "   ", "cost": 450, "frequency": "Daily"})

    assert cheap.status_code == 200
    assert cheap.json()["decision"] in ("Buy", "Don't Buy")
    assert cheap.json()["analysis_details"]["purchase_category"] == "DISCRETIONARY_SMALL"
    assert pricey.status_code == 200
    assert pricey.json()["analysis_details"]["purchase_category"] == "HIGH_VALUE"


def test_get_decision_by_id(client: TestClient, comfortable_profile: dict):
    """Test GET /v1/decision/{decision_id}"""
    created = client.post(
        "/v1/decision",
        json={
            "user_id": "user_lookup",
            "item_name": "Pepperoni pizza",
            "cost": 18,
            "purpose": "Dinner",
            "frequency": "Weekly",
            "financial_profile": comfortable_profile,
        },
    ).json()

    response = client.get(f"/v1/decision/{created['decision_id']}")

    assert response.status_code == 200
    data = response.json()
    assert data["decision_id"] == created["decision_id"]
    assert data["user_id"] == "user_lookup"
    assert data["item_name"] == "Pepperoni pizza"
    assert data["decision"] == created["decision"]
    assert data["item_type"] == "consumable"
    assert data["purchase_category"] == "DISCRETIONARY_SMALL"
    assert data["summary"] == created["summary"]
    assert len(data["scores"]) == 12
    assert data["scores"]["affordability"]["score"] == 10
    assert data["scores"]["affordability"]["category"] == "financial"


def test_get_decision_not_found(client: TestClient):
    response = client.get(f"/v1/decision/{uuid.uuid4()}")
    assert response.status_code == 404


def test_get_decision_invalid_id(client: TestClient):
    response = client.get("/v1/decision/not-a-uuid")
    assert response.status_code == 400


def test_history_endpoint(client: TestClient):
    """Test GET /v1/decision/history, newest first"""
    posted_ids = []
    for item_name in ("Desk lamp", "Coffee", "Headphones"):
        response = client.post("/v1/decision", json={"user_id": "user_history", "item_name": item_name, "cost": 30})
        posted_ids.append(response.json()["decision_id"])
    client.post("/v1/decision", json={"user_id": "someone_else", "item_name": "Desk lamp", "cost": 30})

    response = client.get("/v1/decision/history?user_id=user_history")

    assert response.status_code == 200
    data = response.json()
    assert data["user_id"] == "user_history"
    assert [d["decision_id"] for d in data["decisions"]] == list(reversed(posted_ids))
    assert [d["item_name"] for d in data["decisions"]] == ["Headphones", "Coffee", "Desk lamp"]
    assert all(d["cost"] == 30 for d in data["decisions"])


def test_history_endpoint_empty(client: TestClient):
    response = client.get("/v1/decision/history?user_id=nobody")

    assert response.status_code == 200
    assert response.json()["decisions"] == []


def test_history_requires_user_id(client: TestClient):
    assert client.get("/v1/decision/history").status_code == 422


def test_profile_summary_endpoint(client: TestClient):
    """Test POST /v1/profile/summary"""
    response = client.post(
        "/v1/profile/summary",
        json={
            "monthly_income": 25000,
            "monthly_expenses": 8000,
            "debt_payments": 0,
            "current_savings": 150000,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["monthly_net_income"] == 17000
    assert data["emergency_fund_months"] == pytest.approx(18.75)
    assert data["health_score"] == 100
    assert data["has_emergency_fund"] is True


def test_profile_summary_feeds_decision(client: TestClient):
    summary = client.post(
        "/v1/profile/summary",
        json={"monthly_income": 1500, "monthly_expenses": 1200, "debt_payments": 200, "current_savings": 400},
    ).json()

    response = client.post(
        "/v1/decision",
        json={
            "item_name": "Gaming console",
            "cost": 500,
            "purpose": "Entertainment",
            "frequency": "Weekly",
            "financial_profile": {"summary": summary, "risk_tolerance": "low", "financial_goal": "save"},
        },
    )

    assert response.status_code == 200
    assert response.json()["decision"] == "Don't Buy"


def test_classify_endpoint(client: TestClient):
    """Test POST /v1/classify, second identical call is served from the cache"""
    first = client.post("/v1/classify", json={"item_name": "Television", "cost": 800})
    second = client.post("/v1/classify", json={"item_name": "television ", "cost": 800})

    assert first.status_code == 200
    assert first.json() == {"category": "HIGH_VALUE", "cached": False}
    assert second.json() == {"category": "HIGH_VALUE", "cached": True}


def test_classify_small_items(client: TestClient):
    assert client.post("/v1/classify", json={"item_name": "Cat food", "cost": 20}).json()["category"] == "ESSENTIAL_DAILY"
    assert client.post("/v1/classify", json={"item_name": "Candy bar", "cost": 3}).json()["category"] == (
        "DISCRETIONARY_SMALL"
    )


def test_classify_rejects_invalid_purchase(client: TestClient):
    assert client.post("/v1/classify", json={"item_name": "", "cost": 20}).status_code == 422
    assert client.post("/v1/classify", json={"item_name": "Coffee", "cost": -1}).status_code == 422
