# models.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GenerateRequest(BaseModel):
    # all optional so an empty or missing field is rejected with our 400, not a 422
    topic: Optional[str] = Field(None, description="What the post is about")
    platform: Optional[str] = Field(None, description="Target social network, e.g. Instagram")
    tone: Optional[str] = Field(None, description="Voice of the post, e.g. Excited")


class GenerateResponse(BaseModel):
    chatId: str
    userRequest: str
    response: str


class ConversationSummary(BaseModel):
    # any other stored attributes are passed through as-is
    model_config = ConfigDict(extra="allow")

    id: str
    title: Optional[str] = None
    createdAt: Optional[str] = None


class MessageOut(BaseModel):
    model_config = ConfigDict(extra="allow")

    role: str
    text: str
    createdAt: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
