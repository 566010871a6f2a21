"""Answer normalization - raw answer to 0-100 score and risk tier"""

import logging
import math
from typing import Any, Callable, Dict, Optional

from sme_readiness.domain.models import Question, QuestionType, RiskTier, ScoredAnswer

logger = logging.getLogger(__name__)

# Score awarded to any threshold question answered at or above its threshold
THRESHOLD_BREACH_SCORE = 30.0
# Floor for answers below the threshold, and the share of the threshold
# above which an answer is flagged medium instead of low
BELOW_THRESHOLD_FLOOR = 70.0
THRESHOLD_WARNING_RATIO = 0.7

SCALE_MIN, SCALE_MAX = 1, 5

Scorer = Callable[[Question, Any], Optional[ScoredAnswer]]


def tier_for_score(score: float) -> RiskTier:
    """
    Risk tier for a caller-supplied 0-100 score.

    Bands line up with threshold scoring: anything at or above the
    below-threshold floor (70) is low risk, a threshold breach (30) is high.
    """
    if score >= 70:
        return RiskTier.LOW
    elif score >= 50:
        return RiskTier.MEDIUM
    elif score >= 30:
        return RiskTier.HIGH
    return RiskTier.CRITICAL


def _to_number(raw_value: Any) -> Optional[float]:
    """Parse ints, floats and numeric strings; bools and non-finite values are rejected"""
    if isinstance(raw_value, bool):
        return None
    if isinstance(raw_value, (int, float)):
        value = float(raw_value)
    elif isinstance(raw_value, str):
        try:
            value = float(raw_value.strip().rstrip("%"))
        except ValueError:
            return None
    else:
        return None
    return value if math.isfinite(value) else None


def score_choice(question: Question, raw_value: Any) -> Optional[ScoredAnswer]:
    if not isinstance(raw_value, str):
        return None
    option = question.option_for(raw_value)
    if option is None:
        return None
    return ScoredAnswer(question.id, option.score, option.risk_tier)


def score_numeric(question: Question, raw_value: Any) -> Optional[ScoredAnswer]:
    value = _to_number(raw_value)
    if value is None or value < 0:
        return None
    if question.type == QuestionType.PERCENTAGE and value > 100:
        return None

    threshold = question.critical_threshold
    if threshold is None:
        # Unconstrained numeric questions carry a caller-supplied score
        if value > 100:
            return None
        return ScoredAnswer(question.id, value, tier_for_score(value))

    if value >= threshold:
        return ScoredAnswer(question.id, THRESHOLD_BREACH_SCORE, RiskTier.HIGH)

    score = max(BELOW_THRESHOLD_FLOOR, 100 - (value / threshold) * 40)
    tier = RiskTier.MEDIUM if value > threshold * THRESHOLD_WARNING_RATIO else RiskTier.LOW
    return ScoredAnswer(question.id, score, tier)


def score_scale(question: Question, raw_value: Any) -> Optional[ScoredAnswer]:
    value = _to_number(raw_value)
    if value is None or not SCALE_MIN <= value <= SCALE_MAX:
        return None

    if value >= 4:
        tier = RiskTier.LOW
    elif value >= 3:
        tier = RiskTier.MEDIUM
    else:
        tier = RiskTier.HIGH
    return ScoredAnswer(question.id, value / SCALE_MAX * 100, tier)


def score_boolean(question: Question, raw_value: Any) -> Optional[ScoredAnswer]:
    # "yes" is always the favorable answer in the catalog
    if isinstance(raw_value, bool):
        answer = raw_value
    elif isinstance(raw_value, str) and raw_value.strip().lower() in ("yes", "no"):
        answer = raw_value.strip().lower() == "yes"
    else:
        return None

    if answer:
        return ScoredAnswer(question.id, 100.0, RiskTier.LOW)
    return ScoredAnswer(question.id, 20.0, RiskTier.HIGH)


SCORERS: Dict[QuestionType, Scorer] = {
    QuestionType.CHOICE: score_choice,
    QuestionType.PERCENTAGE: score_numeric,
    QuestionType.NUMBER: score_numeric,
    QuestionType.SCALE: score_scale,
    QuestionType.BOOLEAN: score_boolean,
}


def normalize(question: Question, raw_value: Any) -> Optional[ScoredAnswer]:
    """
    Convert a raw answer into a ScoredAnswer.

    Returns None for absent or malformed values so the answer is left out of
    aggregation. Never raises.
    """
    if raw_value is None:
        return None

    scored = SCORERS[question.type](question, raw_value)
    if scored is None:
        logger.debug(
            "Answer excluded from scoring",
            extra={"question_id": question.id, "question_type": question.type.value},
        )
    return scored
