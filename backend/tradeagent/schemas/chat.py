"""
CONTRACT 3: Chat Relay

Input: ChatRequest
Output: streamed completion (text/event-stream)
"""

from typing import Optional
from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    role: str
    content: str


class ChatDocument(BaseModel):
    """User-uploaded document used as RAG context."""

    name: str
    content: str


class ChatRequest(BaseModel):
    messages: list[ChatMessage] = Field(default_factory=list)
    documents: Optional[list[ChatDocument]] = None
    asset: Optional[str] = Field(
        default=None,
        description="Explicit symbol to fetch live indicators for",
    )


class ChatContext(BaseModel):
    """Assembled per request, never cached."""

    system_prompt: str
    rag_documents: list[tuple[str, str]] = Field(default_factory=list)
    live_summaries: list[str] = Field(default_factory=list)
