"""POST /v1/assessment - Investment readiness assessment endpoint"""

import time
import logging
from dataclasses import asdict
from fastapi import APIRouter, Depends, Request

from sme_readiness.api.v1.schemas import AssessmentRequest, AssessmentResponse
from sme_readiness.api.dependencies import get_assessment_repository, get_catalog, get_request_id
from sme_readiness.config import settings
from sme_readiness.domain.catalog import QuestionCatalog
from sme_readiness.domain.comparison import compare_results
from sme_readiness.domain.scoring import assess
from sme_readiness.infrastructure.database.repositories import AssessmentRepository
from sme_readiness.infrastructure.observability.metrics import record_assessment, persistence_failure_counter
from sme_readiness.infrastructure.observability.logging import log_assessment

router = APIRouter()


@router.post("/assessment", response_model=AssessmentResponse)
def create_assessment(
    request_body: AssessmentRequest,
    request: Request,
    catalog: QuestionCatalog = Depends(get_catalog),
    repository: AssessmentRepository = Depends(get_assessment_repository),
):
    """
    Score a completed answer batch.

    Flow:
    1. Run the assessment engine (pure, in memory)
    2. Compare with the owner's previous stored assessment, if any
    3. Persist answers + result
    4. Return the result

    Steps 2 and 3 may fail without affecting the computed result; failures
    are logged and the response reports persisted=false.
    """
    start_time = time.time()
    request_id = get_request_id(request)
    owner_id = request_body.owner_id

    # 1. Compute the result before touching storage
    result = assess(catalog, request_body.answers, max_strengths=settings.max_strengths)

    # 2. Compare with previous assessment
    comparison = None
    try:
        previous = repository.get_latest_by_owner(owner_id)
        if previous is not None:
            comparison = compare_results(previous.result or {}, result)
    except Exception as e:
        logging.warning(f"Previous assessment lookup failed: {e}", extra={"request_id": request_id})

    # 3. Persist
    assessment_id = None
    try:
        record = repository.save(owner_id, request_body.answers, result)
        assessment_id = str(record.id)
    except Exception as e:
        persistence_failure_counter.inc()
        logging.error(f"Failed to save assessment: {e}", extra={"request_id": request_id, "owner_id": owner_id})

    # Record metrics and logs
    duration_ms = (time.time() - start_time) * 1000
    record_assessment(result)
    log_assessment(
        request_id,
        owner_id,
        result.overall_score,
        result.risk_level,
        len(result.critical_issues),
        assessment_id is not None,
        duration_ms,
    )

    return AssessmentResponse(
        **result.to_dict(),
        assessment_id=assessment_id,
        persisted=assessment_id is not None,
        comparison=asdict(comparison) if comparison else None,
    )
