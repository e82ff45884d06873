from typing import List, Optional

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    # Plain str: messages with roles other than user/assistant are dropped, not rejected
    role: str = Field(..., description="Role of the message sender: 'user' or 'assistant'")
    content: str = Field(default="", description="Content of the message")


class ChatRequest(BaseModel):
    messages: List[ChatMessage] = Field(default_factory=list, description="Conversation so far, oldest first")


class SimpleChatRequest(BaseModel):
    message: str = Field(..., description="The user's message")


class SimpleChatResponse(BaseModel):
    response: str


class ErrorResponse(BaseModel):
    """Standardized error response format."""
    error: str
    detail: str | None = None
    timestamp: str
    path: str | None = None


class HealthResponse(BaseModel):
    """Health check response format."""
    status: str
    service: str
    version: str
    environment: str
    checks: dict[str, bool]
    backend: Optional[str] = None
