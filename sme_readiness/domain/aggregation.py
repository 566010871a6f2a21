"""Weighted score aggregation per category and across the whole instrument"""

from dataclasses import dataclass
from functools import reduce
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Tuple

from sme_readiness.domain.catalog import QuestionCatalog
from sme_readiness.domain.models import Category, ScoredAnswer


@dataclass(frozen=True)
class WeightedSum:
    """Running Σ(score * weight) and Σ(weight)"""

    total: float = 0.0
    weight: float = 0.0

    def add(self, score: float, weight: float) -> "WeightedSum":
        return WeightedSum(self.total + score * weight, self.weight + weight)

    @property
    def mean(self) -> float:
        # No answered questions reads as 0, not as missing
        return self.total / self.weight if self.weight > 0 else 0.0


@dataclass(frozen=True)
class Totals:
    overall: WeightedSum
    by_category: Mapping[Category, WeightedSum]


EMPTY_TOTALS = Totals(
    overall=WeightedSum(),
    by_category=MappingProxyType({c: WeightedSum() for c in Category}),
)


def aggregate(
    scored_answers: Iterable[ScoredAnswer],
    catalog: QuestionCatalog,
) -> Tuple[float, Dict[Category, float]]:
    """
    Compute overall and per-category weighted means (0-100).

    Category scores only use answered questions of that category. The overall
    score uses every answered question with its raw catalog weight, so
    cross-category weights are not re-normalized.

    Returns: (overall_score, category_scores)
    """

    def step(acc: Totals, scored: ScoredAnswer) -> Totals:
        question = catalog.get(scored.question_id)
        if question is None:
            return acc
        by_category = dict(acc.by_category)
        by_category[question.category] = by_category[question.category].add(scored.numeric_score, question.weight)
        return Totals(
            overall=acc.overall.add(scored.numeric_score, question.weight),
            by_category=MappingProxyType(by_category),
        )

    totals = reduce(step, scored_answers, EMPTY_TOTALS)
    category_scores = {category: _bounded(totals.by_category[category].mean) for category in Category}
    return _bounded(totals.overall.mean), category_scores


def _bounded(score: float) -> float:
    # Guards float drift past the 0-100 range on weighted means
    return min(100.0, max(0.0, score))
