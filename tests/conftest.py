"""Pytest fixtures for testing"""

import pytest
from typing import Any, Dict, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sme_readiness.api.main import create_app
from sme_readiness.domain.catalog import QuestionCatalog, load_catalog, parse_catalog
from sme_readiness.domain.models import QuestionType
from sme_readiness.infrastructure.database.models import Base
from sme_readiness.infrastructure.database.session import get_db


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
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture(scope="session")
def catalog() -> QuestionCatalog:
    """Bundled question catalog"""
    return load_catalog()


@pytest.fixture
def best_answers(catalog: QuestionCatalog) -> Dict[str, Any]:
    """Most favorable answer for every catalog question"""
    answers: Dict[str, Any] = {}
    for question in catalog:
        if question.type == QuestionType.CHOICE:
            answers[question.id] = max(question.options, key=lambda o: o.score).label
        elif question.type == QuestionType.SCALE:
            answers[question.id] = 5
        elif question.type == QuestionType.BOOLEAN:
            answers[question.id] = "yes"
        elif question.critical_threshold is not None:
            answers[question.id] = 0
        else:
            answers[question.id] = 100
    return answers


@pytest.fixture
def mini_catalog() -> QuestionCatalog:
    """Small hand-built catalog with one question per scoring path"""
    return parse_catalog(
        {
            "version": "test-1",
            "questions": [
                {
                    "id": "cash_runway",
                    "prompt": "Cash runway?",
                    "category": "financial_health",
                    "type": "choice",
                    "weight": 0.2,
                    "business_killer": True,
                    "options": [
                        {"label": "90+ days", "score": 100, "risk_tier": "low"},
                        {"label": "30-59 days", "score": 50, "risk_tier": "medium"},
                        {"label": "15-29 days", "score": 25, "risk_tier": "high"},
                        {"label": "Under 15 days", "score": 10, "risk_tier": "critical"},
                    ],
                    "issue": {
                        "title": "Cash Flow Crisis Risk",
                        "impact": "Could force business closure within weeks",
                        "remedy": "Reduce expenses and establish a credit line",
                    },
                    "strength": "Strong cash reserves",
                },
                {
                    "id": "old_receivables",
                    "prompt": "Receivables older than 90 days (%)?",
                    "category": "financial_health",
                    "type": "percentage",
                    "weight": 0.1,
                    "business_killer": True,
                    "critical_threshold": 30,
                    "issue": {
                        "title": "Severe Collection Problems",
                        "impact": "Cash stuck in receivables",
                        "remedy": "Tighten collection policy",
                    },
                },
                {
                    "id": "tax_status",
                    "prompt": "Tax status?",
                    "category": "compliance_risk",
                    "type": "choice",
                    "weight": 0.15,
                    "business_killer": True,
                    "options": [
                        {"label": "Current", "score": 100, "risk_tier": "low"},
                        {"label": "Behind 3-6 months", "score": 40, "risk_tier": "high"},
                        {"label": "Never filed", "score": 5, "risk_tier": "critical"},
                    ],
                },
                {
                    "id": "team_rating",
                    "prompt": "Team capability 1-5",
                    "category": "operational_resilience",
                    "type": "scale",
                    "weight": 0.1,
                },
                {
                    "id": "has_plan",
                    "prompt": "Written growth plan?",
                    "category": "growth_readiness",
                    "type": "boolean",
                    "weight": 0.1,
                },
                {
                    "id": "digital_share",
                    "prompt": "Digital payments share (%)?",
                    "category": "market_position",
                    "type": "percentage",
                    "weight": 0.05,
                },
            ],
        }
    )
