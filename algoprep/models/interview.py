# algoprep/models/interview.py
import uuid

from sqlalchemy import Column, Integer, String, DateTime, JSON, Index, func
from algoprep.db.base import Base


class Interview(Base):
    __tablename__ = "interviews"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), nullable=False, index=True)  # = auth.users.id

    duration = Column(Integer, nullable=False)  # minutes
    difficulty = Column(String(10), nullable=False)
    topics = Column(JSON, nullable=False, default=list)
    company_type = Column(String(50), nullable=True)
    target_companies = Column(JSON, nullable=False, default=list)
    problems = Column(JSON, nullable=False, default=list)  # problem ids

    start_time = Column(DateTime(timezone=True), nullable=False)
    status = Column(String(20), nullable=False, default="in_progress")  # in_progress|completed
    completed_at = Column(DateTime(timezone=True), nullable=True)
    feedback = Column(JSON, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index("ix_interviews_user_id_start_time", "user_id", "start_time"),
    )
