from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Rating = Literal["good", "fair", "poor"]


# -- Request --

class ReviewExample(BaseModel):
    input: str
    output: str


class ExpectedComplexity(BaseModel):
    time: Optional[str] = None
    space: Optional[str] = None


class ReviewProblem(BaseModel):
    title: str
    description: str
    constraints: Optional[List[str]] = None
    examples: Optional[List[ReviewExample]] = None
    expectedComplexity: Optional[ExpectedComplexity] = None


class ReviewSubmission(BaseModel):
    code: str
    language: str


class ReviewRequest(BaseModel):
    problem: ReviewProblem
    submission: ReviewSubmission


# -- LLM output --

class QuickReview(BaseModel):
    model_config = ConfigDict(extra="ignore")
    score: float = Field(..., ge=0, le=100)
    initialFeedback: str
    timeComplexity: str
    spaceComplexity: str


class Approach(BaseModel):
    rating: Rating
    feedback: str
    details: str


class Performance(BaseModel):
    time: str
    space: str
    feedback: str
    analysis: str


class BestPractices(BaseModel):
    pros: List[str] = Field(..., min_length=1)
    cons: List[str] = Field(..., min_length=1)
    details: str


class FullReview(BaseModel):
    model_config = ConfigDict(extra="ignore")
    score: float = Field(..., ge=0, le=100)
    approach: Approach
    performance: Performance
    bestPractices: BestPractices
    improvements: List[str] = Field(..., min_length=1)
    overallFeedback: str
