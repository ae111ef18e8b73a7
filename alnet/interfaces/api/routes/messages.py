"""Endpoints and websocket entry point for direct messages."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, WebSocket, status
from sqlalchemy.orm import Session

from alnet.application.use_cases.messages import (
    delete_message as delete_message_uc,
    get_conversation as get_conversation_uc,
    list_conversations as list_conversations_uc,
    mark_message_delivered,
    mark_message_read as mark_message_read_uc,
    send_message as send_message_uc,
)
from alnet.domain.entities import User
from alnet.domain.errors import DomainError
from alnet.infrastructure.database import get_db
from alnet.infrastructure.realtime import message_connections, message_publisher
from alnet.interfaces.api.dependencies import get_current_user
from alnet.interfaces.api.gateways import messages_gateway
from alnet.interfaces.api.routes_helpers import to_http_exception
from alnet.interfaces.api.schemas import (
    ConversationListRead,
    ConversationPageRead,
    ConversationRead,
    MessageCreate,
    MessageRead,
    PaginationRead,
    UserSummaryRead,
)

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post("", response_model=MessageRead, status_code=status.HTTP_201_CREATED)
def send_message(
    payload: MessageCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageRead:
    """Send a message and push it to the receiver's open sessions."""

    try:
        message = send_message_uc(
            db,
            sender_id=current_user.id,
            receiver_id=payload.receiver_id,
            content=payload.content,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc

    if message_connections.is_online(message.receiver_id):
        message_publisher.dispatch_new(message)
        message = mark_message_delivered(
            db, message_id=message.id, receiver_id=message.receiver_id
        )
    return MessageRead.model_validate(message)


@router.get("/conversation/{user_id}", response_model=ConversationPageRead)
def get_conversation(
    user_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ConversationPageRead:
    result = get_conversation_uc(
        db, user_id=current_user.id, partner_id=user_id, page=page, limit=limit
    )
    return ConversationPageRead(
        data=[MessageRead.model_validate(message) for message in result.items],
        pagination=PaginationRead.from_page(result),
    )


@router.get("", response_model=ConversationListRead)
def list_conversations(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ConversationListRead:
    result = list_conversations_uc(db, user_id=current_user.id, page=page, limit=limit)
    return ConversationListRead(
        data=[
            ConversationRead(
                partner_id=conversation.partner_id,
                partner=UserSummaryRead.from_entity(conversation.partner),
                last_message=conversation.last_message.content,
                last_message_id=conversation.last_message.id,
                last_message_at=conversation.last_message.created_at,
                unread=conversation.unread,
            )
            for conversation in result.items
        ],
        pagination=PaginationRead.from_page(result),
    )


@router.put("/{message_id}/read", response_model=MessageRead)
def mark_message_read(
    message_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageRead:
    try:
        message = mark_message_read_uc(db, message_id=message_id, reader_id=current_user.id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    message_publisher.dispatch_read(message, reader_id=current_user.id)
    return MessageRead.model_validate(message)


@router.delete("/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_message(
    message_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> None:
    try:
        delete_message_uc(db, message_id=message_id, requester_id=current_user.id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc


@router.websocket("/ws")
async def messages_websocket(websocket: WebSocket) -> None:
    """Bidirectional channel for message, typing and read events."""

    await messages_gateway.serve(websocket)
