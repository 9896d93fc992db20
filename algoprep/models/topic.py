# algoprep/models/topic.py
# subject area tag (arrays, graphs, ...), seeded externally
from sqlalchemy import Column, String, Text, DateTime, func
from algoprep.db.base import Base


class Topic(Base):
    __tablename__ = "topics"

    id = Column(String(64), primary_key=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=func.now())
