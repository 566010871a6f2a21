"""GET /v1/questions - Question catalog listing for assessment forms"""

from fastapi import APIRouter, Depends

from sme_readiness.api.v1.schemas import QuestionsResponse
from sme_readiness.api.dependencies import get_catalog
from sme_readiness.domain.catalog import QuestionCatalog, question_summary

router = APIRouter()


@router.get("/questions", response_model=QuestionsResponse)
def list_questions(catalog: QuestionCatalog = Depends(get_catalog)):
    """Catalog questions in presentation order"""
    return QuestionsResponse(
        version=catalog.version,
        questions=[question_summary(q) for q in catalog],
    )
