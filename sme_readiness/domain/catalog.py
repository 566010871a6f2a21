"""Question catalog - versioned, read-only table of scoring questions"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from sme_readiness.domain.exceptions import CatalogError
from sme_readiness.domain.models import (
    Advantage,
    Category,
    ChoiceOption,
    IssueText,
    Question,
    QuestionType,
    RiskTier,
)

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "data" / "questions.json"

NUMERIC_TYPES = (QuestionType.PERCENTAGE, QuestionType.NUMBER)


@dataclass(frozen=True)
class QuestionCatalog:
    """Immutable question set, shared by every assessment in the process"""

    version: str
    questions: Tuple[Question, ...]
    _by_id: Dict[str, Question] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_by_id", {q.id: q for q in self.questions})

    def __iter__(self) -> Iterator[Question]:
        return iter(self.questions)

    def __len__(self) -> int:
        return len(self.questions)

    def __contains__(self, question_id: object) -> bool:
        return question_id in self._by_id

    def get(self, question_id: str) -> Optional[Question]:
        return self._by_id.get(question_id)

    def by_category(self, category: Category) -> List[Question]:
        return [q for q in self.questions if q.category == category]


def load_catalog(path: Optional[Path | str] = None) -> QuestionCatalog:
    """
    Load and validate the question catalog from a JSON data file.

    Args:
        path: Catalog file location (default: bundled data/questions.json)

    Raises:
        CatalogError: On unreadable files or catalog rule violations
    """
    catalog_path = Path(path) if path else DEFAULT_CATALOG_PATH
    try:
        data = json.loads(catalog_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise CatalogError(f"Cannot read question catalog {catalog_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise CatalogError(f"Question catalog {catalog_path} is not valid JSON: {e}") from e

    catalog = parse_catalog(data)
    logger.info(
        "Question catalog loaded",
        extra={"catalog_version": catalog.version, "question_count": len(catalog), "path": str(catalog_path)},
    )
    return catalog


def parse_catalog(data: Mapping[str, Any]) -> QuestionCatalog:
    """Build a catalog from already-decoded data (validates every entry)"""
    if not isinstance(data, Mapping):
        raise CatalogError("Catalog root must be an object")

    version = data.get("version")
    if not isinstance(version, str) or not version:
        raise CatalogError("Catalog is missing a version string")

    raw_questions = data.get("questions")
    if not isinstance(raw_questions, list) or not raw_questions:
        raise CatalogError("Catalog must contain a non-empty 'questions' list")

    questions: List[Question] = []
    seen: set[str] = set()
    for raw in raw_questions:
        question = _parse_question(raw)
        if question.id in seen:
            raise CatalogError(f"Duplicate question id: {question.id}")
        seen.add(question.id)
        questions.append(question)

    return QuestionCatalog(version=version, questions=tuple(questions))


def _parse_question(raw: Any) -> Question:
    if not isinstance(raw, Mapping):
        raise CatalogError("Each question must be an object")

    question_id = raw.get("id")
    if not isinstance(question_id, str) or not question_id:
        raise CatalogError("Question is missing an id")

    try:
        category = Category(raw.get("category"))
        question_type = QuestionType(raw.get("type"))
    except ValueError as e:
        raise CatalogError(f"{question_id}: {e}") from e

    weight = _number(raw.get("weight"), question_id, "weight")
    if weight <= 0:
        raise CatalogError(f"{question_id}: weight must be positive")

    threshold = raw.get("critical_threshold")
    if threshold is not None:
        if question_type not in NUMERIC_TYPES:
            raise CatalogError(f"{question_id}: critical_threshold only applies to percentage/number questions")
        threshold = _number(threshold, question_id, "critical_threshold")
        if threshold <= 0:
            raise CatalogError(f"{question_id}: critical_threshold must be positive")

    options = tuple(_parse_option(o, question_id) for o in raw.get("options") or [])
    if question_type == QuestionType.CHOICE:
        if not options:
            raise CatalogError(f"{question_id}: choice questions need options")
        _check_option_tiers(options, question_id)
    elif options:
        raise CatalogError(f"{question_id}: only choice questions may define options")

    is_business_killer = bool(raw.get("business_killer", False))
    issue_text = _parse_issue(raw.get("issue"), question_id)
    if is_business_killer and issue_text is None:
        # Detector falls back to generic wording for these
        logger.warning("Business-killer question has no issue text", extra={"question_id": question_id})

    return Question(
        id=question_id,
        prompt=str(raw.get("prompt", "")),
        category=category,
        type=question_type,
        weight=weight,
        is_business_killer=is_business_killer,
        critical_threshold=threshold,
        options=options,
        insight=str(raw.get("insight", "")),
        context=_parse_context(raw.get("context"), question_id),
        issue_text=issue_text,
        strength=_parse_strength(raw.get("strength"), question_id),
        advantage=_parse_advantage(raw.get("advantage"), question_id),
    )


def _parse_option(raw: Any, question_id: str) -> ChoiceOption:
    if not isinstance(raw, Mapping) or not isinstance(raw.get("label"), str):
        raise CatalogError(f"{question_id}: option needs a label")
    score = _number(raw.get("score"), question_id, "option score")
    if not 0 <= score <= 100:
        raise CatalogError(f"{question_id}: option score {score} outside 0-100")
    try:
        tier = RiskTier(raw.get("risk_tier"))
    except ValueError as e:
        raise CatalogError(f"{question_id}: {e}") from e
    return ChoiceOption(label=raw["label"], score=score, risk_tier=tier)


def _check_option_tiers(options: Tuple[ChoiceOption, ...], question_id: str) -> None:
    """A lower-scoring option must never carry a lower risk tier"""
    ranked = sorted(options, key=lambda o: o.score, reverse=True)
    for better, worse in zip(ranked, ranked[1:]):
        if worse.risk_tier.rank < better.risk_tier.rank:
            raise CatalogError(
                f"{question_id}: option '{worse.label}' scores lower than '{better.label}' "
                f"but has a lower risk tier"
            )


def _parse_issue(raw: Any, question_id: str) -> Optional[IssueText]:
    if raw is None:
        return None
    if not isinstance(raw, Mapping) or not all(isinstance(raw.get(k), str) for k in ("title", "impact", "remedy")):
        raise CatalogError(f"{question_id}: issue needs title, impact and remedy text")
    return IssueText(title=raw["title"], impact=raw["impact"], remedy=raw["remedy"])


def _parse_context(raw: Any, question_id: str) -> Mapping[str, str]:
    if raw is None:
        return MappingProxyType({})
    if not isinstance(raw, Mapping) or not all(isinstance(k, str) and isinstance(v, str) for k, v in raw.items()):
        raise CatalogError(f"{question_id}: context must map names to text")
    return MappingProxyType(dict(raw))


def _parse_strength(raw: Any, question_id: str) -> Optional[str]:
    if raw is not None and not isinstance(raw, str):
        raise CatalogError(f"{question_id}: strength must be text")
    return raw


def _parse_advantage(raw: Any, question_id: str) -> Optional[Advantage]:
    if raw is None:
        return None
    if not isinstance(raw, Mapping) or not isinstance(raw.get("text"), str):
        raise CatalogError(f"{question_id}: advantage needs text")
    min_score = _number(raw.get("min_score"), question_id, "advantage min_score")
    if not 0 <= min_score <= 100:
        raise CatalogError(f"{question_id}: advantage min_score outside 0-100")
    return Advantage(text=raw["text"], min_score=min_score)


def _number(value: Any, question_id: str, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise CatalogError(f"{question_id}: {name} must be a number")
    return float(value)


def question_summary(question: Question) -> Dict[str, Any]:
    """Catalog entry as primitives for the question listing"""
    return {
        "id": question.id,
        "prompt": question.prompt,
        "category": question.category.value,
        "type": question.type.value,
        "weight": question.weight,
        "business_killer": question.is_business_killer,
        "critical_threshold": question.critical_threshold,
        "options": [o.label for o in question.options],
        "insight": question.insight,
        "context": dict(question.context),
    }
