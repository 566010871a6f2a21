"""Integration tests for API endpoints"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sme_readiness.api.dependencies import get_assessment_repository

WORST_RUNWAY = "Less than 15 days - Critical danger"


class FailingRepository:
    """Stand-in for a repository whose database is unavailable"""

    def get_latest_by_owner(self, owner_id):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    def save(self, owner_id, answers, result):
        raise OperationalError("INSERT", {}, Exception("database is locked"))


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.json()["catalog_version"] == "ghana-sme-2.0"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    client.post("/v1/assessment", json={"owner_id": "biz_metrics", "answers": {}})

    response = client.get("/metrics")
    assert response.status_code == 200
    assert "sme_assessment_total" in response.text


def test_assessment_endpoint_persists(client: TestClient, best_answers):
    """Test POST /v1/assessment with a full answer batch"""
    response = client.post("/v1/assessment", json={"owner_id": "biz_good", "answers": best_answers})

    assert response.status_code == 200
    data = response.json()
    assert data["persisted"] is True
    assert data["assessment_id"] is not None
    assert data["overall_score"] == pytest.approx(100)
    assert data["risk_level"] == "Low Risk"
    assert data["funding_readiness"]["score"] == 100
    assert data["comparison"] is None
    assert set(data["category_scores"]) == {
        "financial_health",
        "operational_resilience",
        "market_position",
        "compliance_risk",
        "growth_readiness",
    }


def test_assessment_endpoint_empty_batch(client: TestClient):
    """Test empty answers still produce a well-formed result"""
    response = client.post("/v1/assessment", json={"owner_id": "biz_empty", "answers": {}})

    assert response.status_code == 200
    data = response.json()
    assert data["overall_score"] == 0
    assert data["risk_level"] == "Critical Risk"
    assert data["critical_issues"] == []


def test_assessment_endpoint_critical_issue(client: TestClient):
    response = client.post(
        "/v1/assessment",
        json={"owner_id": "biz_cash", "answers": {"cash_runway_days": WORST_RUNWAY, "unknown": 1}},
    )

    assert response.status_code == 200
    issues = response.json()["critical_issues"]
    assert len(issues) == 1
    assert issues[0]["severity"] == "urgent"
    assert issues[0]["timeframe"] == "Immediate"
    assert response.json()["compound_risks"] == []
    assert response.json()["outlook"]["recovery_time_estimate"] == "3-6 months with minor adjustments"


def test_second_assessment_includes_comparison(client: TestClient, best_answers):
    """Test progress against the owner's previous stored assessment"""
    client.post("/v1/assessment", json={"owner_id": "biz_progress", "answers": {"cash_runway_days": WORST_RUNWAY}})

    response = client.post("/v1/assessment", json={"owner_id": "biz_progress", "answers": best_answers})

    comparison = response.json()["comparison"]
    assert comparison is not None
    assert comparison["previous_overall_score"] == pytest.approx(10)
    assert comparison["overall_delta"] == pytest.approx(90)
    assert "financial_health" in comparison["improved"]


def test_persistence_failure_still_returns_result(client: TestClient):
    """Test storage failure is reported, never turned into an error response"""
    client.app.dependency_overrides[get_assessment_repository] = lambda: FailingRepository()

    response = client.post(
        "/v1/assessment",
        json={"owner_id": "biz_offline", "answers": {"cash_runway_days": WORST_RUNWAY}},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["persisted"] is False
    assert data["assessment_id"] is None
    assert data["overall_score"] == pytest.approx(10)


def test_assessment_requires_owner_id(client: TestClient):
    response = client.post("/v1/assessment", json={"answers": {}})
    assert response.status_code == 422


def test_request_id_is_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_history_endpoint(client: TestClient, best_answers):
    """Test GET /v1/assessment/history returns newest first"""
    client.post("/v1/assessment", json={"owner_id": "biz_history", "answers": {}})
    client.post("/v1/assessment", json={"owner_id": "biz_history", "answers": best_answers})
    client.post("/v1/assessment", json={"owner_id": "someone_else", "answers": {}})

    response = client.get("/v1/assessment/history", params={"owner_id": "biz_history"})

    assert response.status_code == 200
    data = response.json()
    assert data["owner_id"] == "biz_history"
    assert [a["risk_level"] for a in data["assessments"]] == ["Low Risk", "Critical Risk"]


def test_history_requires_owner_id(client: TestClient):
    response = client.get("/v1/assessment/history")
    assert response.status_code == 422


def test_questions_endpoint(client: TestClient):
    """Test GET /v1/questions lists the catalog in order"""
    response = client.get("/v1/questions")

    assert response.status_code == 200
    data = response.json()
    assert data["version"] == "ghana-sme-2.0"
    assert len(data["questions"]) == 17
    first = data["questions"][0]
    assert first["id"] == "cash_runway_days"
    assert first["business_killer"] is True
    assert WORST_RUNWAY in first["options"]


def test_assessment_endpoint_compound_risk(client: TestClient):
    """Test compound risks and the survival outlook are returned and stored"""
    answers = {"customer_concentration_risk": 75, "competitive_differentiation": "Lower prices than competitors"}

    response = client.post("/v1/assessment", json={"owner_id": "biz_trap", "answers": answers})

    assert response.status_code == 200
    data = response.json()
    assert [r["id"] for r in data["compound_risks"]] == ["customer_concentration_trap"]
    assert data["compound_risks"][0]["severity"] == "critical"
    assert "Emergency customer diversification plan" in data["outlook"]["critical_interventions"]
    assert data["persisted"] is True
