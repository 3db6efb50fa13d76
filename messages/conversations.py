"""
messages/conversations.py

Grouping of raw chat history rows into per-guest conversations.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone

from messages.sanitizer import clean_message_content
from normalization.normalizer import normalize_platform
from records.models import HistoryEntry

logger = logging.getLogger(__name__)

_VISIBLE_TYPES = frozenset({"human", "ai"})
_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class ConversationMessage:
    id: str
    sender: str
    text: str
    sent_at: datetime | None = None


@dataclass(frozen=True)
class Conversation:
    """
    Messages of one chat session in chronological order.

    ``latest_message_at`` is the timestamp of the message with the highest
    history id.
    """

    id: str
    name: str
    initials: str
    platform: str
    status: str = "Active"
    messages: list[ConversationMessage] = field(default_factory=list)
    latest_message_at: datetime | None = None


def is_visible(entry: HistoryEntry) -> bool:
    """
    Tool messages are never shown; AI messages are hidden when nothing
    user-facing survives sanitizing.
    """
    message_type = entry.message.type
    if message_type not in _VISIBLE_TYPES:
        return False
    if message_type == "ai" and not clean_message_content(entry.message.content):
        return False
    return True


def group_conversations(history: Sequence[HistoryEntry]) -> list[Conversation]:
    """
    Group visible history rows by ``session_id``.

    Rows are processed in ascending id order; conversations are returned
    most recently active first.
    """
    visible = [entry for entry in sorted(history, key=lambda e: e.id) if is_visible(entry)]
    sessions: dict[str, list[HistoryEntry]] = {}
    for entry in visible:
        sessions.setdefault(entry.session_id, []).append(entry)

    platform = normalize_platform("whatsapp")
    conversations = [
        Conversation(
            id=session_id,
            name=session_id,
            initials=session_id[:2],
            platform=platform,
            messages=[
                ConversationMessage(
                    id=str(entry.id),
                    sender="guest" if entry.message.type == "human" else "agent",
                    text=clean_message_content(entry.message.content),
                    sent_at=entry.created_at,
                )
                for entry in entries
            ],
            # entries are id-ordered, so the last one is the latest
            latest_message_at=entries[-1].created_at,
        )
        for session_id, entries in sessions.items()
    ]

    logger.debug(
        "Grouped %d/%d history rows into %d conversations",
        len(visible),
        len(history),
        len(conversations),
    )
    return sorted(
        conversations,
        key=lambda c: c.latest_message_at or _EPOCH,
        reverse=True,
    )
