"""
app/schemas/messages.py

Request and response schemas for message-log endpoints.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from records.models import HistoryEntry


class CleanMessagesRequest(BaseModel):
    contents: list[str | None] = Field(default_factory=list)


class CleanMessagesResponse(BaseModel):
    contents: list[str]


class HistoryRow(BaseModel):
    """
    One chat-history row; ``message`` holds ``{"type": ..., "content": ...}``.
    """

    model_config = ConfigDict(extra="ignore")

    id: int
    session_id: str
    created_at: str | None = None
    message: dict[str, Any] | str = Field(default_factory=dict)

    def to_record(self) -> HistoryEntry:
        return HistoryEntry.from_mapping(self.model_dump())


class ConversationsRequest(BaseModel):
    history: list[HistoryRow] = Field(default_factory=list)


class ConversationMessageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    sender: str
    text: str
    sent_at: datetime | None = None


class ConversationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    initials: str
    platform: str
    status: str
    messages: list[ConversationMessageResponse]
    latest_message_at: datetime | None = None


class ConversationsResponse(BaseModel):
    conversations: list[ConversationResponse]
