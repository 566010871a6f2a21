"""Dependency injection for FastAPI endpoints"""

from functools import lru_cache

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from sme_readiness.config import settings
from sme_readiness.domain.catalog import QuestionCatalog, load_catalog
from sme_readiness.infrastructure.database.repositories import AssessmentRepository
from sme_readiness.infrastructure.database.session import get_db


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


@lru_cache(maxsize=1)
def get_catalog() -> QuestionCatalog:
    """Question catalog, loaded once per process"""
    return load_catalog(settings.catalog_path)


def get_assessment_repository(db: Session = Depends(get_db)) -> AssessmentRepository:
    """Provide assessment persistence collaborator"""
    return AssessmentRepository(db)
