"""Data access layer for assessment records"""

from typing import Any, List, Mapping, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sme_readiness.infrastructure.database.models import AssessmentRecord
from sme_readiness.domain.models import AssessmentResult


class AssessmentRepository:
    """Repository for assessment results - the engine's persistence collaborator"""

    def __init__(self, db: Session):
        self.db = db

    def save(
        self,
        owner_id: str,
        answers: Mapping[str, Any],
        result: AssessmentResult,
    ) -> AssessmentRecord:
        """Persist answers and computed result, committing immediately"""
        payload = result.to_dict()
        record = AssessmentRecord(
            owner_id=owner_id,
            catalog_version=result.catalog_version,
            answers=dict(answers),
            overall_score=result.overall_score,
            risk_level=result.risk_level,
            category_scores=payload["category_scores"],
            result=payload,
        )
        try:
            self.db.add(record)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return record

    def get_latest_by_owner(self, owner_id: str) -> Optional[AssessmentRecord]:
        """Most recent stored assessment for an owner"""
        return (
            self.db.query(AssessmentRecord)
            .filter(AssessmentRecord.owner_id == owner_id)
            .order_by(AssessmentRecord.created_at.desc())
            .first()
        )

    def get_history_by_owner(self, owner_id: str, limit: int = 20) -> List[AssessmentRecord]:
        """Fetch recent assessments for an owner"""
        return (
            self.db.query(AssessmentRecord)
            .filter(AssessmentRecord.owner_id == owner_id)
            .order_by(AssessmentRecord.created_at.desc())
            .limit(limit)
            .all()
        )
