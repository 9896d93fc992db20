from datetime import datetime
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Difficulty = Literal["easy", "medium", "hard"]


# -- Request --

class Example(BaseModel):
    input: str
    output: str
    explanation: Optional[str] = None


class TestCase(BaseModel):
    input: Any = None
    output: Any = None


class ProblemIn(BaseModel):
    # title/description/difficulty are checked by the route so a missing one is a plain 400
    title: Optional[str] = None
    description: Optional[str] = None
    difficulty: Optional[str] = None
    category: Optional[str] = None
    examples: List[Example] = Field(default_factory=list)
    constraints: List[str] = Field(default_factory=list)
    test_cases: List[TestCase] = Field(default_factory=list)
    time_complexity: Optional[str] = None
    space_complexity: Optional[str] = None
    context: Optional[str] = None
    pattern_ids: List[str] = Field(default_factory=list)
    topic_ids: List[str] = Field(default_factory=list)


# -- Response --

class TagOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProblemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    title: str
    description: str
    difficulty: str
    category: Optional[str] = None
    examples: List[Any] = Field(default_factory=list)
    constraints: List[str] = Field(default_factory=list)
    test_cases: List[Any] = Field(default_factory=list)
    time_complexity: Optional[str] = None
    space_complexity: Optional[str] = None
    context: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    patterns: List[TagOut] = Field(default_factory=list)
    topics: List[TagOut] = Field(default_factory=list)
