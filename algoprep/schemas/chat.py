from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict


class ChatMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")  # the browser also sends id/createdAt

    role: Literal["system", "user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    messages: Optional[List[ChatMessage]] = None
    title: Optional[str] = None
    description: Optional[str] = None
    code: Optional[str] = None
    topic: Optional[str] = None
    language: Optional[str] = None
