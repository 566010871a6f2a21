"""GET /v1/assessment/history - Fetch an owner's assessment history"""

from fastapi import APIRouter, Depends, Query

from sme_readiness.api.v1.schemas import HistoryResponse, HistoryItem
from sme_readiness.api.dependencies import get_assessment_repository
from sme_readiness.config import settings
from sme_readiness.infrastructure.database.repositories import AssessmentRepository

router = APIRouter()


@router.get("/assessment/history", response_model=HistoryResponse)
def get_assessment_history(
    owner_id: str = Query(..., min_length=1, description="Business profile identifier"),
    repository: AssessmentRepository = Depends(get_assessment_repository),
):
    """
    Retrieve recent stored assessments for an owner.

    Returns:
        Newest first, up to the configured history limit
    """
    records = repository.get_history_by_owner(owner_id, limit=settings.history_limit)

    history_items = [
        HistoryItem(
            assessment_id=str(r.id),
            overall_score=r.overall_score,
            risk_level=r.risk_level,
            category_scores=r.category_scores,
            catalog_version=r.catalog_version,
            created_at=r.created_at.isoformat(),
        )
        for r in records
    ]

    return HistoryResponse(owner_id=owner_id, assessments=history_items)
