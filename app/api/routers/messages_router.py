"""
app/api/routers/messages_router.py

Message-log endpoints: content sanitizing and conversation grouping.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status

from app.logging_utils import log_event
from app.schemas.messages import (
    CleanMessagesRequest,
    CleanMessagesResponse,
    ConversationResponse,
    ConversationsRequest,
    ConversationsResponse,
)
from app.services.message_service import MessageService, get_message_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["messages"])


@router.post(
    "/messages/clean",
    response_model=CleanMessagesResponse,
    status_code=status.HTTP_200_OK,
)
def clean_messages(
    body: CleanMessagesRequest,
    message_service: MessageService = Depends(get_message_service),
) -> CleanMessagesResponse:
    """
    Return the guest-facing text of each message, ``""`` for internal entries.
    """
    cleaned = message_service.clean(body.contents)
    log_event(
        logger,
        logging.DEBUG,
        "messages_cleaned",
        received=len(body.contents),
        rejected=sum(1 for text in cleaned if not text),
    )
    return CleanMessagesResponse(contents=cleaned)


@router.post(
    "/messages/conversations",
    response_model=ConversationsResponse,
    status_code=status.HTTP_200_OK,
)
def list_conversations(
    body: ConversationsRequest,
    message_service: MessageService = Depends(get_message_service),
) -> ConversationsResponse:
    """
    Group chat history rows into conversations, most recent first.
    """
    conversations = message_service.conversations([row.to_record() for row in body.history])
    log_event(
        logger,
        logging.INFO,
        "conversations_grouped",
        rows=len(body.history),
        conversations=len(conversations),
    )
    return ConversationsResponse(
        conversations=[ConversationResponse.model_validate(c) for c in conversations]
    )
