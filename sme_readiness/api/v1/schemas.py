"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


class AssessmentRequest(BaseModel):
    """Request body for POST /v1/assessment"""

    owner_id: str = Field(..., min_length=1, description="Business profile identifier (attribution only)")
    answers: Dict[str, Any] = Field(default_factory=dict, description="Question id to raw answer value")


class CriticalIssueSchema(BaseModel):
    question_id: str
    title: str
    severity: str
    impact: str
    remedy: str
    timeframe: str
    category: str


class BenchmarkSchema(BaseModel):
    your_score: float
    industry_average: float
    top_performers: float
    percentile: int


class FundingReadinessSchema(BaseModel):
    score: int
    recommendation: str
    required_improvements: List[str]


class NextStepsSchema(BaseModel):
    immediate: List[str]
    short_term: List[str]
    strategic: List[str]


class CompoundRiskSchema(BaseModel):
    id: str
    name: str
    severity: str
    factors: List[str]
    probability: float
    impact: str
    mitigation: List[str]


class OutlookSchema(BaseModel):
    """Failure probability keyed by horizon (3_months, 6_months, 12_months)"""

    failure_probability: Dict[str, float]
    survival_factors: List[str]
    critical_interventions: List[str]
    recovery_time_estimate: str


class ComparisonSchema(BaseModel):
    """Movement since the owner's previous assessment"""

    previous_overall_score: float
    overall_delta: float
    category_deltas: Dict[str, float]
    previous_timestamp: Optional[str] = None
    improved: List[str] = []
    declined: List[str] = []


class AssessmentResponse(BaseModel):
    """Response for POST /v1/assessment"""

    assessment_id: Optional[str] = None
    persisted: bool
    overall_score: float
    risk_level: str
    category_scores: Dict[str, float]
    critical_issues: List[CriticalIssueSchema]
    strengths: List[str]
    competitive_advantages: List[str]
    benchmark: BenchmarkSchema
    funding_readiness: FundingReadinessSchema
    next_steps: NextStepsSchema
    compound_risks: List[CompoundRiskSchema]
    outlook: OutlookSchema
    catalog_version: str
    timestamp: str
    comparison: Optional[ComparisonSchema] = None


class HistoryItem(BaseModel):
    """Single stored assessment in history"""

    assessment_id: str
    overall_score: float
    risk_level: str
    category_scores: Dict[str, float]
    catalog_version: str
    created_at: str


class HistoryResponse(BaseModel):
    """Response for GET /v1/assessment/history"""

    owner_id: str
    assessments: List[HistoryItem]


class QuestionSchema(BaseModel):
    id: str
    prompt: str
    category: str
    type: str
    weight: float
    business_killer: bool
    critical_threshold: Optional[float] = None
    options: List[str]
    insight: str
    context: Dict[str, str]


class QuestionsResponse(BaseModel):
    """Response for GET /v1/questions"""

    version: str
    questions: List[QuestionSchema]
