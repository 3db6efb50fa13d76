"""
app/services/message_service.py

Message-log operations over pre-fetched chat history.
"""

from __future__ import annotations

from collections.abc import Sequence
from functools import lru_cache

from messages.conversations import Conversation, group_conversations
from messages.sanitizer import clean_message_content
from records.models import HistoryEntry


class MessageService:
    """
    Stateless facade over the sanitizer and conversation grouping.
    """

    def clean(self, contents: Sequence[str | None]) -> list[str]:
        return [clean_message_content(content) for content in contents]

    def conversations(self, history: Sequence[HistoryEntry]) -> list[Conversation]:
        return group_conversations(history)


@lru_cache(maxsize=1)
def get_message_service() -> MessageService:
    """
    Build and cache the message service.
    """

    return MessageService()
