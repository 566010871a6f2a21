"""Assessment engine - core business logic for investment readiness"""

from datetime import datetime
from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Sequence

from sme_readiness.domain.aggregation import aggregate
from sme_readiness.domain.catalog import QuestionCatalog
from sme_readiness.domain.classifier import classify
from sme_readiness.domain.compound_risks import detect_compound_risks, forecast
from sme_readiness.domain.issues import detect
from sme_readiness.domain.models import (
    AssessmentResult,
    BenchmarkComparison,
    Category,
    ScoredAnswer,
)
from sme_readiness.domain.normalizer import normalize
from sme_readiness.domain.planner import plan
from sme_readiness.utils.date_utils import utc_now

STRENGTH_MIN_SCORE = 80
MAX_STRENGTHS = 5

# Benchmarks for the SME market
INDUSTRY_AVERAGE = 65.0
TOP_PERFORMERS = 85.0

CATEGORY_STRENGTHS = {
    Category.FINANCIAL_HEALTH: "Strong financial management and cash flow control",
    Category.OPERATIONAL_RESILIENCE: "Robust operational processes and efficiency",
    Category.MARKET_POSITION: "Strong market position and customer relationships",
    Category.COMPLIANCE_RISK: "Excellent regulatory compliance",
    Category.GROWTH_READINESS: "Well-positioned for growth and expansion",
}


def score_answers(catalog: QuestionCatalog, answers: Mapping[str, Any]) -> List[ScoredAnswer]:
    """
    Normalize every answer the catalog knows about.

    Walks the catalog rather than the answers so results never depend on
    answer order; unknown ids and malformed values simply drop out.
    """
    scored = []
    for question in catalog:
        if question.id not in answers:
            continue
        result = normalize(question, answers[question.id])
        if result is not None:
            scored.append(result)
    return scored


def identify_strengths(
    scored_answers: Sequence[ScoredAnswer],
    catalog: QuestionCatalog,
    limit: int = MAX_STRENGTHS,
) -> List[str]:
    """Descriptions for answers scoring 80+, de-duplicated, capped at limit"""
    strengths: List[str] = []
    for scored in scored_answers:
        if scored.numeric_score < STRENGTH_MIN_SCORE:
            continue
        question = catalog.get(scored.question_id)
        if question is None:
            continue
        description = question.strength or CATEGORY_STRENGTHS[question.category]
        if description not in strengths:
            strengths.append(description)
    return strengths[:limit]


def identify_advantages(scored_answers: Sequence[ScoredAnswer], catalog: QuestionCatalog) -> List[str]:
    advantages = []
    for scored in scored_answers:
        question = catalog.get(scored.question_id)
        if question and question.advantage and scored.numeric_score >= question.advantage.min_score:
            advantages.append(question.advantage.text)
    return advantages


def benchmark(overall_score: float) -> BenchmarkComparison:
    """Position against market benchmarks; percentile is clamped to 10-90"""
    return BenchmarkComparison(
        your_score=overall_score,
        industry_average=INDUSTRY_AVERAGE,
        top_performers=TOP_PERFORMERS,
        percentile=max(10, min(90, round(overall_score))),
    )


def assess(
    catalog: QuestionCatalog,
    answers: Mapping[str, Any],
    now: Optional[datetime] = None,
    max_strengths: int = MAX_STRENGTHS,
) -> AssessmentResult:
    """
    Main entry point: score an answer batch against the catalog.

    Pipeline: normalize -> aggregate -> detect critical issues ->
    classify risk and funding readiness -> plan next steps, with compound
    risks and the survival outlook reported alongside.

    Pure apart from the timestamp; an empty or fully malformed batch yields a
    well-formed "Critical Risk" result with all scores at 0.
    """
    scored = score_answers(catalog, answers)
    overall_score, category_scores = aggregate(scored, catalog)
    critical_issues = detect(scored, catalog)
    risk_level, funding_readiness = classify(overall_score, category_scores, critical_issues)
    next_steps = plan(critical_issues, category_scores)
    compound_risks = detect_compound_risks(scored)

    return AssessmentResult(
        overall_score=overall_score,
        risk_level=risk_level,
        category_scores=MappingProxyType(category_scores),
        critical_issues=tuple(critical_issues),
        strengths=tuple(identify_strengths(scored, catalog, max_strengths)),
        competitive_advantages=tuple(identify_advantages(scored, catalog)),
        benchmark=benchmark(overall_score),
        funding_readiness=funding_readiness,
        next_steps=next_steps,
        compound_risks=tuple(compound_risks),
        outlook=forecast(scored, compound_risks),
        catalog_version=catalog.version,
        timestamp=now or utc_now(),
    )
