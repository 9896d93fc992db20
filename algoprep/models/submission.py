# algoprep/models/submission.py
import uuid

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON, UniqueConstraint
from algoprep.db.base import Base


class Submission(Base):
    __tablename__ = "interview_submissions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    interview_id = Column(String(36), ForeignKey("interviews.id"), nullable=False, index=True)
    problem_id = Column(String(36), ForeignKey("problems.id", ondelete="CASCADE"), nullable=False)

    code = Column(Text, nullable=False)
    language = Column(String(30), nullable=False, default="python")
    submitted_at = Column(DateTime(timezone=True), nullable=False)
    status = Column(String(20), nullable=False, default="pending")  # pending|reviewed

    # filled in by the background review
    score = Column(Integer, nullable=True)
    time_complexity = Column(String(100), nullable=True)
    space_complexity = Column(String(100), nullable=True)
    feedback = Column(Text, nullable=True)
    suggestions = Column(JSON, nullable=True)

    __table_args__ = (
        UniqueConstraint("interview_id", "problem_id", name="uq_submission_interview_problem"),
    )
