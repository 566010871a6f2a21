"""Progress comparison against an owner's previous assessment"""

from typing import Any, Mapping, Optional

from sme_readiness.domain.models import AssessmentResult, Category, ProgressComparison

# Category moves smaller than this are treated as noise
SIGNIFICANT_DELTA = 1.0


def compare_results(
    previous: Mapping[str, Any],
    current: AssessmentResult,
) -> Optional[ProgressComparison]:
    """
    Compare a stored result (plain dict, as persisted) with a fresh one.

    Returns None when the stored result has no usable overall score.
    """
    previous_overall = previous.get("overall_score")
    if isinstance(previous_overall, bool) or not isinstance(previous_overall, (int, float)):
        return None

    previous_categories = previous.get("category_scores") or {}
    category_deltas = {}
    for category in Category:
        before = previous_categories.get(category.value)
        if isinstance(before, (int, float)) and not isinstance(before, bool):
            category_deltas[category.value] = round(current.category_scores[category] - before, 2)

    return ProgressComparison(
        previous_overall_score=float(previous_overall),
        overall_delta=round(current.overall_score - previous_overall, 2),
        category_deltas=category_deltas,
        previous_timestamp=previous.get("timestamp"),
        improved=tuple(c for c, d in category_deltas.items() if d >= SIGNIFICANT_DELTA),
        declined=tuple(c for c, d in category_deltas.items() if d <= -SIGNIFICANT_DELTA),
    )
