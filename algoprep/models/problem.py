# algoprep/models/problem.py
import uuid

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, JSON, func
from sqlalchemy.orm import relationship
from algoprep.db.base import Base


class ProblemPattern(Base):
    __tablename__ = "problem_patterns"

    problem_id = Column(String(36), ForeignKey("problems.id", ondelete="CASCADE"), primary_key=True)
    pattern_id = Column(String(64), ForeignKey("patterns.id"), primary_key=True, index=True)


class ProblemTopic(Base):
    __tablename__ = "problem_topics"

    problem_id = Column(String(36), ForeignKey("problems.id", ondelete="CASCADE"), primary_key=True)
    topic_id = Column(String(64), ForeignKey("topics.id"), primary_key=True, index=True)


class Problem(Base):
    __tablename__ = "problems"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    difficulty = Column(String(10), nullable=False, index=True)  # easy|medium|hard
    category = Column(String(100), nullable=True)

    examples = Column(JSON, nullable=False, default=list)      # [{input, output, explanation?}]
    constraints = Column(JSON, nullable=False, default=list)   # [str]
    test_cases = Column(JSON, nullable=False, default=list)    # [{input, output}]

    time_complexity = Column(String(100), nullable=True)
    space_complexity = Column(String(100), nullable=True)
    context = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=func.now())

    # association rows go with the problem
    patterns = relationship(
        "Pattern",
        secondary=ProblemPattern.__table__,
        lazy="selectin",
        order_by="Pattern.name",
    )
    topics = relationship(
        "Topic",
        secondary=ProblemTopic.__table__,
        lazy="selectin",
        order_by="Topic.name",
    )
