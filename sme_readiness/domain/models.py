"""Domain models - immutable dataclasses for the readiness assessment"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple


class Category(str, Enum):
    FINANCIAL_HEALTH = "financial_health"
    OPERATIONAL_RESILIENCE = "operational_resilience"
    MARKET_POSITION = "market_position"
    COMPLIANCE_RISK = "compliance_risk"
    GROWTH_READINESS = "growth_readiness"


class QuestionType(str, Enum):
    CHOICE = "choice"
    PERCENTAGE = "percentage"
    NUMBER = "number"
    SCALE = "scale"
    BOOLEAN = "boolean"


class RiskTier(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        """0 for low up to 3 for critical"""
        return _TIER_RANK[self]


_TIER_RANK = {RiskTier.LOW: 0, RiskTier.MEDIUM: 1, RiskTier.HIGH: 2, RiskTier.CRITICAL: 3}


class Severity(str, Enum):
    URGENT = "urgent"
    IMPORTANT = "important"


@dataclass(frozen=True)
class ChoiceOption:
    """One selectable answer of a choice question"""

    label: str
    score: float
    risk_tier: RiskTier


@dataclass(frozen=True)
class IssueText:
    """Fixed wording used when a question raises a critical issue"""

    title: str
    impact: str
    remedy: str


@dataclass(frozen=True)
class Advantage:
    """Competitive advantage unlocked when a question scores at least min_score"""

    text: str
    min_score: float


@dataclass(frozen=True)
class Question:
    """Catalog entry - loaded once, never mutated"""

    id: str
    prompt: str
    category: Category
    type: QuestionType
    weight: float
    is_business_killer: bool = False
    critical_threshold: Optional[float] = None
    options: Tuple[ChoiceOption, ...] = ()
    insight: str = ""
    context: Mapping[str, str] = field(default_factory=dict)
    issue_text: Optional[IssueText] = None
    strength: Optional[str] = None
    advantage: Optional[Advantage] = None

    def option_for(self, label: str) -> Optional[ChoiceOption]:
        for option in self.options:
            if option.label == label:
                return option
        return None


@dataclass(frozen=True)
class ScoredAnswer:
    """Normalized answer: 0-100 score plus the qualitative risk tier"""

    question_id: str
    numeric_score: float
    risk_tier: RiskTier


@dataclass(frozen=True)
class CriticalIssue:
    """Business-killer question answered at high or critical risk"""

    question_id: str
    title: str
    severity: Severity
    impact: str
    remedy: str
    timeframe: str
    category: Category


@dataclass(frozen=True)
class FundingReadiness:
    score: int
    recommendation: str
    required_improvements: Tuple[str, ...]


@dataclass(frozen=True)
class NextSteps:
    immediate: Tuple[str, ...]
    short_term: Tuple[str, ...]
    strategic: Tuple[str, ...]


@dataclass(frozen=True)
class BenchmarkComparison:
    your_score: float
    industry_average: float
    top_performers: float
    percentile: int


@dataclass(frozen=True)
class CompoundRisk:
    """Combination of weak answers that is more dangerous than any one of them"""

    id: str
    name: str
    severity: RiskTier
    factors: Tuple[str, ...]
    probability: float
    impact: str
    mitigation: Tuple[str, ...]


@dataclass(frozen=True)
class SurvivalOutlook:
    """Failure likelihood by horizon, with what protects the business and what must happen first"""

    failure_probability: Mapping[str, float]
    survival_factors: Tuple[str, ...]
    critical_interventions: Tuple[str, ...]
    recovery_time_estimate: str


@dataclass(frozen=True)
class AssessmentResult:
    """Output of one assessment run"""

    overall_score: float
    risk_level: str
    category_scores: Mapping[Category, float]
    critical_issues: Tuple[CriticalIssue, ...]
    strengths: Tuple[str, ...]
    competitive_advantages: Tuple[str, ...]
    benchmark: BenchmarkComparison
    funding_readiness: FundingReadiness
    next_steps: NextSteps
    compound_risks: Tuple[CompoundRisk, ...]
    outlook: SurvivalOutlook
    catalog_version: str
    timestamp: datetime

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict of primitives, safe for JSON and the database"""
        return {
            "overall_score": self.overall_score,
            "risk_level": self.risk_level,
            "category_scores": {c.value: s for c, s in self.category_scores.items()},
            "critical_issues": [_issue_to_dict(issue) for issue in self.critical_issues],
            "strengths": list(self.strengths),
            "competitive_advantages": list(self.competitive_advantages),
            "benchmark": {
                "your_score": self.benchmark.your_score,
                "industry_average": self.benchmark.industry_average,
                "top_performers": self.benchmark.top_performers,
                "percentile": self.benchmark.percentile,
            },
            "funding_readiness": {
                "score": self.funding_readiness.score,
                "recommendation": self.funding_readiness.recommendation,
                "required_improvements": list(self.funding_readiness.required_improvements),
            },
            "next_steps": {
                "immediate": list(self.next_steps.immediate),
                "short_term": list(self.next_steps.short_term),
                "strategic": list(self.next_steps.strategic),
            },
            "compound_risks": [_compound_risk_to_dict(risk) for risk in self.compound_risks],
            "outlook": {
                "failure_probability": dict(self.outlook.failure_probability),
                "survival_factors": list(self.outlook.survival_factors),
                "critical_interventions": list(self.outlook.critical_interventions),
                "recovery_time_estimate": self.outlook.recovery_time_estimate,
            },
            "catalog_version": self.catalog_version,
            "timestamp": self.timestamp.isoformat(),
        }


def _issue_to_dict(issue: CriticalIssue) -> Dict[str, str]:
    return {
        "question_id": issue.question_id,
        "title": issue.title,
        "severity": issue.severity.value,
        "impact": issue.impact,
        "remedy": issue.remedy,
        "timeframe": issue.timeframe,
        "category": issue.category.value,
    }


def _compound_risk_to_dict(risk: CompoundRisk) -> Dict[str, Any]:
    return {
        "id": risk.id,
        "name": risk.name,
        "severity": risk.severity.value,
        "factors": list(risk.factors),
        "probability": risk.probability,
        "impact": risk.impact,
        "mitigation": list(risk.mitigation),
    }


@dataclass(frozen=True)
class ProgressComparison:
    """Score movement against an owner's previous assessment"""

    previous_overall_score: float
    overall_delta: float
    category_deltas: Mapping[str, float]
    previous_timestamp: Optional[str] = None
    improved: Tuple[str, ...] = ()
    declined: Tuple[str, ...] = ()
