"""SQLAlchemy ORM models for stored assessments"""

import uuid
from sqlalchemy import Column, String, Float, DateTime, Text, JSON, Uuid
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func
from sme_readiness.utils.date_utils import utc_now

Base = declarative_base()


class AssessmentRecord(Base):
    """One submitted answer batch and the result computed from it"""

    __tablename__ = "assessment_record"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id = Column(Text, nullable=False, index=True)
    catalog_version = Column(String(64), nullable=False)
    answers = Column(JSON, nullable=False)
    overall_score = Column(Float, nullable=False)
    risk_level = Column(String(32), nullable=False)
    category_scores = Column(JSON, nullable=False)
    result = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, server_default=func.now())
