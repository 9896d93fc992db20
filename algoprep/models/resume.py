# algoprep/models/resume.py
import uuid

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, JSON, func
from sqlalchemy.orm import relationship
from algoprep.db.base import Base


def _uuid() -> str:
    return str(uuid.uuid4())


class ResumeProfile(Base):
    __tablename__ = "resume_profiles"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), nullable=False, unique=True, index=True)
    profile_data = Column(JSON, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class Resume(Base):
    __tablename__ = "resumes"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), nullable=False, index=True)
    profile_id = Column(String(36), ForeignKey("resume_profiles.id"), nullable=True)

    title = Column(String(200), nullable=False)
    company_name = Column(String(200), nullable=False)
    job_description = Column(Text, nullable=False)
    content = Column(JSON, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=func.now())

    cover_letters = relationship("CoverLetter", back_populates="resume", lazy="selectin")


class ResumeVersion(Base):
    __tablename__ = "resume_versions"

    id = Column(String(36), primary_key=True, default=_uuid)
    resume_id = Column(String(36), ForeignKey("resumes.id"), nullable=False, index=True)
    content = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class CoverLetter(Base):
    __tablename__ = "cover_letters"

    id = Column(String(36), primary_key=True, default=_uuid)
    resume_id = Column(String(36), ForeignKey("resumes.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    resume = relationship("Resume", back_populates="cover_letters")
