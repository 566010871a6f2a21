"""Critical issue detection for business-killer questions"""

from typing import Iterable, List

from sme_readiness.domain.catalog import QuestionCatalog
from sme_readiness.domain.models import CriticalIssue, IssueText, RiskTier, ScoredAnswer, Severity

GENERIC_ISSUE_TEXT = IssueText(
    title="Business Risk Identified",
    impact="Significant business risk",
    remedy="Address this risk immediately",
)

SEVERITY_BY_TIER = {
    RiskTier.CRITICAL: Severity.URGENT,
    RiskTier.HIGH: Severity.IMPORTANT,
}

TIMEFRAMES = {
    Severity.URGENT: "Immediate",
    Severity.IMPORTANT: "30 days",
}


def detect(scored_answers: Iterable[ScoredAnswer], catalog: QuestionCatalog) -> List[CriticalIssue]:
    """
    Flag business-killer questions answered at high or critical risk.

    Ordering: urgent before important, then by descending question weight.
    Ties keep the order of scored_answers, which is catalog order for assess().
    """
    found = []
    for scored in scored_answers:
        question = catalog.get(scored.question_id)
        if question is None or not question.is_business_killer:
            continue
        severity = SEVERITY_BY_TIER.get(scored.risk_tier)
        if severity is None:
            continue

        text = question.issue_text or GENERIC_ISSUE_TEXT
        issue = CriticalIssue(
            question_id=question.id,
            title=text.title,
            severity=severity,
            impact=text.impact,
            remedy=text.remedy,
            timeframe=TIMEFRAMES[severity],
            category=question.category,
        )
        found.append((issue, question.weight))

    found.sort(key=lambda pair: (pair[0].severity != Severity.URGENT, -pair[1]))
    return [issue for issue, _ in found]
