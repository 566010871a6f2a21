"""Unit tests for risk level and funding readiness"""

import pytest
from sme_readiness.domain.classifier import (
    RESOLVE_CRITICAL_RISKS,
    assess_funding_readiness,
    classify,
    determine_risk_level,
)
from sme_readiness.domain.models import Category, CriticalIssue, Severity


def make_scores(financial=0.0, compliance=0.0, growth=0.0):
    scores = {c: 0.0 for c in Category}
    scores[Category.FINANCIAL_HEALTH] = financial
    scores[Category.COMPLIANCE_RISK] = compliance
    scores[Category.GROWTH_READINESS] = growth
    return scores


def make_issue(severity: Severity) -> CriticalIssue:
    return CriticalIssue(
        question_id="cash_runway",
        title="Cash Flow Crisis Risk",
        severity=severity,
        impact="impact",
        remedy="remedy",
        timeframe="Immediate",
        category=Category.FINANCIAL_HEALTH,
    )


@pytest.mark.parametrize(
    "score, expected",
    [
        (100, "Low Risk"),
        (80, "Low Risk"),
        (79.999, "Moderate Risk"),
        (60, "Moderate Risk"),
        (59.999, "High Risk"),
        (40, "High Risk"),
        (39.999, "Critical Risk"),
        (0, "Critical Risk"),
    ],
)
def test_risk_level_boundaries(score, expected):
    """Test band lower bounds are inclusive"""
    assert determine_risk_level(score) == expected


def test_funding_score_weights():
    """Test 0.4 financial + 0.2 compliance + 0.4 growth"""
    readiness = assess_funding_readiness(make_scores(financial=90, compliance=50, growth=70))

    # 36 + 10 + 28 = 74
    assert readiness.score == 74
    assert readiness.recommendation == "Address key issues before approaching investors"
    assert readiness.required_improvements == ("Improve financial documentation",)


def test_funding_ignores_other_categories():
    scores = make_scores(financial=100, compliance=100, growth=100)
    scores[Category.MARKET_POSITION] = 0
    scores[Category.OPERATIONAL_RESILIENCE] = 0

    readiness = assess_funding_readiness(scores)

    assert readiness.score == 100
    assert readiness.recommendation == "Ready for investment discussions"
    assert readiness.required_improvements == ()


def test_low_funding_score_needs_fundamentals():
    readiness = assess_funding_readiness(make_scores(financial=20, compliance=20, growth=20))

    assert readiness.score == 20
    assert readiness.recommendation == "Focus on fundamentals before seeking investment"
    assert readiness.required_improvements == ("Establish stable cash flow", "Ensure regulatory compliance")


def test_urgent_issue_adds_required_improvement():
    """Test urgent issues always add the resolve-risks improvement"""
    scores = make_scores(financial=100, compliance=100, growth=100)

    urgent = assess_funding_readiness(scores, [make_issue(Severity.URGENT)])
    important = assess_funding_readiness(scores, [make_issue(Severity.IMPORTANT)])

    assert urgent.required_improvements == (RESOLVE_CRITICAL_RISKS,)
    assert important.required_improvements == ()


def test_classify_returns_both():
    risk_level, readiness = classify(65, make_scores(financial=60, compliance=60, growth=60))

    assert risk_level == "Moderate Risk"
    assert readiness.score == 60
