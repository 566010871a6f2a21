"""Remediation planning - bucket remedies into time horizons"""

from typing import Mapping, Sequence

from sme_readiness.domain.models import Category, CriticalIssue, NextSteps, Severity

BOOKKEEPING_STEP = "Implement professional bookkeeping system"
DIFFERENTIATION_STEP = "Develop clear market differentiation strategy"
GROWTH_PLAN_STEP = "Create detailed business growth plan"


def plan(critical_issues: Sequence[CriticalIssue], category_scores: Mapping[Category, float]) -> NextSteps:
    """
    Build immediate / short-term / strategic next steps.

    Remedies keep the order the issues were detected in.
    """
    immediate = [i.remedy for i in critical_issues if i.severity == Severity.URGENT]
    short_term = [i.remedy for i in critical_issues if i.severity == Severity.IMPORTANT]
    strategic = []

    if category_scores.get(Category.FINANCIAL_HEALTH, 0.0) < 60:
        short_term.append(BOOKKEEPING_STEP)
    if category_scores.get(Category.MARKET_POSITION, 0.0) < 60:
        strategic.append(DIFFERENTIATION_STEP)
    if category_scores.get(Category.GROWTH_READINESS, 0.0) < 70:
        strategic.append(GROWTH_PLAN_STEP)

    return NextSteps(immediate=tuple(immediate), short_term=tuple(short_term), strategic=tuple(strategic))
