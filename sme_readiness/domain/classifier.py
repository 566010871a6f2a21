"""Risk level and funding readiness classification"""

from typing import Iterable, List, Mapping, Tuple

from sme_readiness.domain.models import Category, CriticalIssue, FundingReadiness, Severity

LOW_RISK = "Low Risk"
MODERATE_RISK = "Moderate Risk"
HIGH_RISK = "High Risk"
CRITICAL_RISK = "Critical Risk"

# Funding readiness only looks at these categories
FUNDING_WEIGHTS = {
    Category.FINANCIAL_HEALTH: 0.4,
    Category.COMPLIANCE_RISK: 0.2,
    Category.GROWTH_READINESS: 0.4,
}

RESOLVE_CRITICAL_RISKS = "Resolve critical business risks immediately"


def determine_risk_level(overall_score: float) -> str:
    """
    Map overall score to a four-band risk label.

    Bands (lower bound inclusive):
    - 80+:   Low Risk
    - 60-80: Moderate Risk
    - 40-60: High Risk
    - <40:   Critical Risk
    """
    if overall_score >= 80:
        return LOW_RISK
    elif overall_score >= 60:
        return MODERATE_RISK
    elif overall_score >= 40:
        return HIGH_RISK
    else:
        return CRITICAL_RISK


def assess_funding_readiness(
    category_scores: Mapping[Category, float],
    critical_issues: Iterable[CriticalIssue] = (),
) -> FundingReadiness:
    """Funding sub-score from financial health, compliance and growth readiness"""
    score = round(sum(category_scores.get(c, 0.0) * w for c, w in FUNDING_WEIGHTS.items()))

    improvements: List[str] = []
    if score >= 80:
        recommendation = "Ready for investment discussions"
    elif score >= 60:
        recommendation = "Address key issues before approaching investors"
        improvements.append("Improve financial documentation")
    else:
        recommendation = "Focus on fundamentals before seeking investment"
        improvements.append("Establish stable cash flow")
        improvements.append("Ensure regulatory compliance")

    if any(issue.severity == Severity.URGENT for issue in critical_issues):
        improvements.append(RESOLVE_CRITICAL_RISKS)

    return FundingReadiness(
        score=score,
        recommendation=recommendation,
        required_improvements=tuple(improvements),
    )


def classify(
    overall_score: float,
    category_scores: Mapping[Category, float],
    critical_issues: Iterable[CriticalIssue] = (),
) -> Tuple[str, FundingReadiness]:
    """Returns: (risk_level, funding_readiness)"""
    return determine_risk_level(overall_score), assess_funding_readiness(category_scores, critical_issues)
