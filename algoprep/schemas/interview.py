from datetime import datetime
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# -- Request --

class InterviewCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    duration: int = Field(45, ge=1, le=600, description="minutes")
    difficulty: Optional[str] = None
    topics: Optional[List[str]] = None
    company_type: Optional[str] = Field(None, alias="companyType")
    target_companies: List[str] = Field(default_factory=list, alias="targetCompanies")


class SolutionSubmitRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    code: str
    problem_id: str = Field(..., alias="problemId")
    language: str = "python"


class ClientSubmission(BaseModel):
    """A submission the browser kept for a mock interview."""
    model_config = ConfigDict(populate_by_name=True)

    problem_id: str = Field(..., alias="problemId")
    title: str = ""
    submitted_at: Optional[datetime] = Field(None, alias="submittedAt")
    status: Optional[str] = None
    score: Optional[float] = None
    feedback: Optional[str] = None
    suggestions: List[str] = Field(default_factory=list)
    time_complexity: Optional[str] = Field(None, alias="timeComplexity")
    space_complexity: Optional[str] = Field(None, alias="spaceComplexity")


class QuestionRef(BaseModel):
    id: str
    title: str = ""


class CompleteRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # real interviews read submissions from the store; these fields serve mock ones
    # list of ClientSubmission, or the browser's {problemId: code} map
    submissions: Union[List[ClientSubmission], Dict[str, Optional[str]], None] = None
    questions: List[QuestionRef] = Field(default_factory=list)
    duration: Optional[int] = None
    start_time: Optional[datetime] = Field(None, alias="startTime")


# -- Response --

class QuestionFeedback(BaseModel):
    id: str
    title: str
    status: str
    timeSpent: int
    feedback: str
    suggestions: List[str]
    complexity: Dict[str, str]
    score: Union[int, float]


class FeedbackReport(BaseModel):
    overallScore: int
    timeSpent: int
    questionFeedback: List[QuestionFeedback]
    strengths: List[str]
    improvements: List[str]
    recommendations: List[str]


class InterviewFeedbackOut(FeedbackReport):
    id: str
    duration: int
    isMockInterview: Optional[bool] = None
