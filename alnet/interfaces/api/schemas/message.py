"""Message and conversation schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from alnet.domain.entities import MessageStatus

from .common import PaginationRead, UserSummaryRead

MAX_MESSAGE_LENGTH = 5000


class MessageCreate(BaseModel):
    receiver_id: int = Field(..., ge=1)
    content: str = Field(..., min_length=1, max_length=MAX_MESSAGE_LENGTH)

    model_config = ConfigDict(extra="forbid")


class MessageRead(BaseModel):
    id: int
    sender_id: int
    receiver_id: int
    content: str
    status: MessageStatus
    read_at: datetime | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class ConversationPageRead(BaseModel):
    data: list[MessageRead]
    pagination: PaginationRead


class ConversationRead(BaseModel):
    partner_id: int
    partner: UserSummaryRead | None = None
    last_message: str
    last_message_id: int
    last_message_at: datetime | None = None
    unread: bool


class ConversationListRead(BaseModel):
    data: list[ConversationRead]
    pagination: PaginationRead


__all__ = [
    "MAX_MESSAGE_LENGTH",
    "ConversationListRead",
    "ConversationPageRead",
    "ConversationRead",
    "MessageCreate",
    "MessageRead",
]
