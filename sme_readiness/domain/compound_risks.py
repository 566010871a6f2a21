"""Compound risk detection and failure outlook from combinations of weak answers"""

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from sme_readiness.domain.models import CompoundRisk, RiskTier, ScoredAnswer, SurvivalOutlook

Answers = Mapping[str, ScoredAnswer]

# Failure probability of a typical small business before any risk is counted
BASELINE_FAILURE_PROBABILITY = 0.15
MAX_FAILURE_PROBABILITY = 0.95

# Cumulative failure probability grows with the horizon
HORIZON_MULTIPLIERS = {
    "3_months": 1.0,
    "6_months": 1.2,
    "12_months": 1.5,
}

# Choice scores at or below this mean the business has no real edge
WEAK_DIFFERENTIATION_SCORE = 50
WEAK_OWNER_INDEPENDENCE_SCORE = 50
STRONG_SCORE = 80


def _score(answers: Answers, question_id: str) -> Optional[float]:
    scored = answers.get(question_id)
    return scored.numeric_score if scored else None


def _at_risk(answers: Answers, question_id: str) -> bool:
    scored = answers.get(question_id)
    return scored is not None and scored.risk_tier in (RiskTier.HIGH, RiskTier.CRITICAL)


def _low_risk(answers: Answers, question_id: str) -> bool:
    scored = answers.get(question_id)
    return scored is not None and scored.risk_tier == RiskTier.LOW


def _at_most(answers: Answers, question_id: str, limit: float) -> bool:
    score = _score(answers, question_id)
    return score is not None and score <= limit


def _at_least(answers: Answers, question_id: str, limit: float) -> bool:
    score = _score(answers, question_id)
    return score is not None and score >= limit


@dataclass(frozen=True)
class CompoundRiskRule:
    risk: CompoundRisk
    # Added to the baseline failure probability when the rule fires
    failure_weight: float
    applies: Callable[[Answers], bool]


RULES = (
    CompoundRiskRule(
        risk=CompoundRisk(
            id="cash_flow_crisis",
            name="Imminent Cash Flow Collapse",
            severity=RiskTier.CRITICAL,
            factors=("Less than 30 days cash runway", "High receivables aging", "Thin profit margins"),
            probability=0.95,
            impact="Business failure within 60-90 days without immediate action",
            mitigation=(
                "Emergency cash flow management plan",
                "Aggressive collections on outstanding receivables",
                "Immediate cost reduction measures",
                "Emergency funding search (family, friends, emergency loans)",
            ),
        ),
        failure_weight=0.40,
        applies=lambda a: _at_risk(a, "cash_runway_days")
        and (_at_risk(a, "receivables_aging") or _at_risk(a, "profit_margin_reality")),
    ),
    CompoundRiskRule(
        risk=CompoundRisk(
            id="customer_concentration_trap",
            name="Customer Concentration Death Spiral",
            severity=RiskTier.CRITICAL,
            factors=("Over 60% revenue from top 3 customers", "No competitive differentiation"),
            probability=0.85,
            impact="Loss of a major customer could immediately destroy the business",
            mitigation=(
                "Emergency customer diversification plan",
                "Strengthen relationships with existing major customers",
                "Develop unique value propositions",
                "Build emergency customer pipeline",
            ),
        ),
        failure_weight=0.30,
        applies=lambda a: _at_risk(a, "customer_concentration_risk")
        and _at_most(a, "competitive_differentiation", WEAK_DIFFERENTIATION_SCORE),
    ),
    CompoundRiskRule(
        risk=CompoundRisk(
            id="owner_dependency_crisis",
            name="Critical Owner Dependency",
            severity=RiskTier.HIGH,
            factors=("Business struggles without owner", "No documented processes", "Single point of failure"),
            probability=0.75,
            impact="Owner illness or absence could immediately halt operations",
            mitigation=(
                "Document all critical processes immediately",
                "Train key team members",
                "Create succession plan",
                "Implement systems and procedures",
            ),
        ),
        failure_weight=0.20,
        applies=lambda a: _at_most(a, "key_person_dependency", WEAK_OWNER_INDEPENDENCE_SCORE),
    ),
    CompoundRiskRule(
        risk=CompoundRisk(
            id="compliance_shutdown",
            name="Regulatory Shutdown Risk",
            severity=RiskTier.CRITICAL,
            factors=("Behind on GRA tax obligations", "Tax payment delays"),
            probability=0.80,
            impact="Government agencies could shut down the business without warning",
            mitigation=(
                "Immediate compliance audit",
                "Engage tax advisor/accountant",
                "Set up payment plans with authorities",
                "Complete all outstanding registrations",
            ),
        ),
        failure_weight=0.35,
        applies=lambda a: _at_risk(a, "gra_tax_compliance"),
    ),
    CompoundRiskRule(
        risk=CompoundRisk(
            id="profitability_death_spiral",
            name="Unsustainable Business Model",
            severity=RiskTier.HIGH,
            factors=("Margins below 10%", "No pricing power"),
            probability=0.70,
            impact="Business cannot survive economic shocks or invest in growth",
            mitigation=(
                "Immediate cost analysis and reduction",
                "Price optimization strategy",
                "Value-added service development",
                "Operational efficiency improvements",
            ),
        ),
        failure_weight=0.25,
        applies=lambda a: _at_risk(a, "profit_margin_reality")
        and _at_most(a, "competitive_differentiation", WEAK_DIFFERENTIATION_SCORE),
    ),
)

SURVIVAL_FACTORS = (
    (
        "Strong financial foundation provides resilience",
        lambda a: _at_least(a, "cash_runway_days", STRONG_SCORE) and _at_least(a, "profit_margin_reality", STRONG_SCORE),
    ),
    (
        "Good governance and compliance reduce regulatory risks",
        lambda a: _at_least(a, "financial_record_quality", STRONG_SCORE) and _low_risk(a, "gra_tax_compliance"),
    ),
    (
        "Diversified customer base provides stability",
        lambda a: _low_risk(a, "customer_concentration_risk"),
    ),
    (
        "Clear competitive advantage protects market position",
        lambda a: _at_least(a, "competitive_differentiation", 75),
    ),
    (
        "Digital payment adoption improves cash flow and reduces risks",
        lambda a: (_score(a, "mobile_money_integration") or 0) > 50,
    ),
)


def _by_question(scored_answers: Iterable[ScoredAnswer]) -> Dict[str, ScoredAnswer]:
    return {s.question_id: s for s in scored_answers}


def detect_compound_risks(scored_answers: Iterable[ScoredAnswer]) -> List[CompoundRisk]:
    """
    Match fixed answer combinations against the scored answers.

    Ordering: descending probability. Rules whose questions were not answered
    never fire.
    """
    answers = _by_question(scored_answers)
    found = [rule.risk for rule in RULES if rule.applies(answers)]
    return sorted(found, key=lambda risk: -risk.probability)


def forecast(scored_answers: Iterable[ScoredAnswer], compound_risks: Sequence[CompoundRisk]) -> SurvivalOutlook:
    """Failure probabilities by horizon, survival factors and recovery time"""
    answers = _by_question(scored_answers)
    detected = {risk.id for risk in compound_risks}
    base = BASELINE_FAILURE_PROBABILITY + sum(r.failure_weight for r in RULES if r.risk.id in detected)

    failure_probability = {
        horizon: round(min(MAX_FAILURE_PROBABILITY, base * multiplier), 4)
        for horizon, multiplier in HORIZON_MULTIPLIERS.items()
    }

    interventions: List[str] = []
    for risk in compound_risks:
        if risk.severity != RiskTier.CRITICAL:
            continue
        for mitigation in risk.mitigation:
            if mitigation not in interventions:
                interventions.append(mitigation)

    return SurvivalOutlook(
        failure_probability=failure_probability,
        survival_factors=tuple(text for text, holds in SURVIVAL_FACTORS if holds(answers)),
        critical_interventions=tuple(interventions),
        recovery_time_estimate=estimate_recovery_time(failure_probability["6_months"]),
    )


def estimate_recovery_time(six_month_failure_probability: float) -> str:
    if six_month_failure_probability > 0.8:
        return "12-18 months with aggressive intervention"
    elif six_month_failure_probability > 0.6:
        return "8-12 months with focused improvements"
    elif six_month_failure_probability > 0.4:
        return "6-9 months with moderate changes"
    else:
        return "3-6 months with minor adjustments"
