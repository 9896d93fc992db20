from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


# -- Request --

class ResumeCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    company_name: Optional[str] = Field(None, alias="companyName")
    job_description: Optional[str] = Field(None, alias="jobDescription")


class AnalyzeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    resume_id: Optional[str] = Field(None, alias="resumeId")
    profile_data: Optional[Dict[str, Any]] = Field(None, alias="profileData")
    job_description: Optional[str] = Field(None, alias="jobDescription")


class CoverLetterCustomizations(BaseModel):
    introduction: Optional[str] = None
    body: Optional[str] = None
    closing: Optional[str] = None


class CoverLetterRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    resume_id: Optional[str] = Field(None, alias="resumeId")
    company_name: Optional[str] = Field(None, alias="companyName")
    job_description: Optional[str] = Field(None, alias="jobDescription")
    customizations: Optional[CoverLetterCustomizations] = None


class UpdateResponsesRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    resume_id: Optional[str] = Field(None, alias="resumeId")
    responses: Optional[Dict[str, Any]] = None


# -- LLM output --

class FollowUpQuestion(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    type: Literal["text", "textarea"] = "text"
    label: str
    description: str = ""
    placeholder: str = ""
    required: bool = False


class ResumeAnalysis(BaseModel):
    model_config = ConfigDict(extra="ignore")

    tailoredContent: Dict[str, Any]
    missingInformation: List[FollowUpQuestion]
    suggestions: List[str]


# -- Response --

class ResumeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    profile_id: Optional[str] = None
    title: str
    company_name: str
    job_description: str
    content: Dict[str, Any]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CoverLetterOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    resume_id: str
    content: str
    created_at: Optional[datetime] = None
