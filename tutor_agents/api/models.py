"""Pydantic models for API request/response."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Literal, Optional


class ChatHistoryMessage(BaseModel):
    """A single message in the chat history."""

    role: Literal["user", "assistant"] = Field(..., description="Either 'user' or 'assistant'")
    content: str


class ChatRequest(BaseModel):
    """Request model for chat endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    messages: List[ChatHistoryMessage] = Field(..., description="Conversation so far, oldest first")
    session_id: Optional[str] = Field(default=None, alias="sessionId", description="Session to store the exchange in")


class ChatResponse(BaseModel):
    """Response model for chat endpoint."""

    response: str
    agent: str


class AgentsResponse(BaseModel):
    """Agent discovery response."""

    available_agents: List[str]
    status: str


class CreateSessionRequest(BaseModel):
    """Create a chat session."""

    title: str = Field(..., min_length=1)


class SessionResponse(BaseModel):
    session: Dict[str, Any]


class SessionListResponse(BaseModel):
    sessions: List[Dict[str, Any]]


class MessageListResponse(BaseModel):
    messages: List[Dict[str, Any]]


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    message: str
