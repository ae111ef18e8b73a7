"""Endpoints for connection requests between users."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from alnet.application.use_cases.connections import (
    ConnectionWithPartner,
    block_user as block_user_uc,
    get_connection_status as get_connection_status_uc,
    list_connections as list_connections_uc,
    list_pending_requests as list_pending_requests_uc,
    remove_connection as remove_connection_uc,
    respond_to_connection as respond_to_connection_uc,
    send_connection_request as send_connection_request_uc,
)
from alnet.domain.entities import Page, User
from alnet.domain.errors import DomainError
from alnet.infrastructure.database import get_db
from alnet.interfaces.api.dependencies import get_current_user
from alnet.interfaces.api.routes_helpers import to_http_exception
from alnet.interfaces.api.schemas import (
    ConnectionCreate,
    ConnectionListRead,
    ConnectionRead,
    ConnectionRespond,
    ConnectionStatusRead,
    ConnectionWithPartnerRead,
    PaginationRead,
    UserSummaryRead,
)

router = APIRouter(prefix="/connections", tags=["connections"])


def _to_list_read(page: Page[ConnectionWithPartner]) -> ConnectionListRead:
    return ConnectionListRead(
        data=[
            ConnectionWithPartnerRead(
                connection=ConnectionRead.model_validate(item.connection),
                partner=UserSummaryRead.from_entity(item.partner),
            )
            for item in page.items
        ],
        pagination=PaginationRead.from_page(page),
    )


@router.post("", response_model=ConnectionRead, status_code=status.HTTP_201_CREATED)
def send_connection_request(
    payload: ConnectionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ConnectionRead:
    """Send a connection request to another user."""

    try:
        connection = send_connection_request_uc(
            db,
            requester_id=current_user.id,
            receiver_id=payload.receiver_id,
            message=payload.message,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ConnectionRead.model_validate(connection)


@router.put("/{connection_id}", response_model=ConnectionRead)
def respond_to_connection(
    connection_id: int,
    payload: ConnectionRespond,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ConnectionRead:
    """Accept or reject a request addressed to the current user."""

    try:
        connection = respond_to_connection_uc(
            db,
            connection_id=connection_id,
            responder_id=current_user.id,
            accepted=payload.accepted,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ConnectionRead.model_validate(connection)


@router.get("", response_model=ConnectionListRead)
def list_connections(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ConnectionListRead:
    return _to_list_read(
        list_connections_uc(db, user_id=current_user.id, page=page, limit=limit)
    )


@router.get("/pending", response_model=ConnectionListRead)
def list_pending_requests(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ConnectionListRead:
    return _to_list_read(
        list_pending_requests_uc(db, user_id=current_user.id, page=page, limit=limit)
    )


@router.get(
    "/status/{user_id}", response_model=ConnectionStatusRead, response_model_exclude_none=True
)
def get_connection_status(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ConnectionStatusRead:
    view = get_connection_status_uc(db, user_id=current_user.id, other_user_id=user_id)
    return ConnectionStatusRead(**view.as_dict())


@router.post("/block/{user_id}", response_model=ConnectionRead)
def block_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ConnectionRead:
    try:
        connection = block_user_uc(db, blocker_id=current_user.id, blocked_id=user_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ConnectionRead.model_validate(connection)


@router.delete("/{connection_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_connection(
    connection_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> None:
    try:
        remove_connection_uc(db, user_id=current_user.id, connection_id=connection_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
