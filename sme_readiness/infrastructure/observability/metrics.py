"""Prometheus metrics for monitoring assessment outcomes and persistence health"""

from prometheus_client import Counter, Histogram

from sme_readiness.domain.models import AssessmentResult

# Assessment metrics
assessment_counter = Counter(
    "sme_assessment_total",
    "Total readiness assessments computed",
    ["risk_level"],  # Low Risk | Moderate Risk | High Risk | Critical Risk
)

critical_issue_counter = Counter(
    "sme_critical_issue_total",
    "Critical issues raised by assessments",
    ["severity", "question_id"],
)

compound_risk_counter = Counter(
    "sme_compound_risk_total",
    "Compound risks detected by assessments",
    ["risk_id"],
)

overall_score_histogram = Histogram(
    "sme_assessment_overall_score",
    "Distribution of overall assessment scores",
    buckets=[20, 40, 60, 80, 100],
)

# Persistence metrics
persistence_failure_counter = Counter(
    "sme_assessment_persistence_failures_total",
    "Assessment results that could not be stored",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_assessment(result: AssessmentResult) -> None:
    """Record outcome metrics for risk-level distribution and recurring critical issues"""
    assessment_counter.labels(risk_level=result.risk_level).inc()
    overall_score_histogram.observe(result.overall_score)

    for issue in result.critical_issues:
        critical_issue_counter.labels(severity=issue.severity.value, question_id=issue.question_id).inc()

    for risk in result.compound_risks:
        compound_risk_counter.labels(risk_id=risk.id).inc()
