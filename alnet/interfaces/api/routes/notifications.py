"""Endpoints and websocket handler for in-app notifications."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket, status
from sqlalchemy.orm import Session

from alnet.application.use_cases.notifications import (
    delete_notification as delete_notification_uc,
    get_or_create_preferences,
    get_unread_count as get_unread_count_uc,
    list_notifications as list_notifications_uc,
    mark_all_notifications_read as mark_all_notifications_read_uc,
    mark_notification_read as mark_notification_read_uc,
    register_push_token as register_push_token_uc,
    update_preferences as update_preferences_uc,
)
from alnet.domain.entities import NotificationPreference, User
from alnet.domain.errors import DomainError
from alnet.infrastructure.database import get_db
from alnet.interfaces.api.dependencies import get_current_user
from alnet.interfaces.api.gateways import notifications_gateway
from alnet.interfaces.api.routes_helpers import to_http_exception
from alnet.interfaces.api.schemas import (
    MarkAllReadResponse,
    NotificationListRead,
    NotificationPreferenceRead,
    NotificationPreferenceUpdate,
    NotificationRead,
    PushTokenRegister,
    UnreadCountRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _preference_to_schema(preference: NotificationPreference) -> NotificationPreferenceRead:
    return NotificationPreferenceRead(
        user_id=preference.user_id,
        email_enabled=preference.email_enabled,
        push_enabled=preference.push_enabled,
        in_app_enabled=preference.in_app_enabled,
        type_preferences=dict(preference.type_preferences),
        quiet_hours_enabled=preference.quiet_hours_enabled,
        quiet_hours_start=preference.quiet_hours_start,
        quiet_hours_end=preference.quiet_hours_end,
        digest_enabled=preference.digest_enabled,
        digest_frequency=preference.digest_frequency,
        push_platform=preference.push_platform,
        has_push_token=bool(preference.push_token),
    )


@router.get("", response_model=NotificationListRead)
def list_notifications(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    unread_only: bool = Query(False),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationListRead:
    """Return the authenticated user's inbox, newest first."""

    inbox = list_notifications_uc(
        db, user_id=current_user.id, page=page, limit=limit, unread_only=unread_only
    )
    return NotificationListRead(
        data=[NotificationRead.model_validate(item) for item in inbox.data],
        total=inbox.total,
        page=inbox.page,
        total_pages=inbox.total_pages,
        unread_count=inbox.unread_count,
    )


@router.get("/unread-count", response_model=UnreadCountRead)
def get_unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UnreadCountRead:
    return UnreadCountRead(count=get_unread_count_uc(db, user_id=current_user.id))


@router.post("/read-all", response_model=MarkAllReadResponse)
def mark_all_notifications_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MarkAllReadResponse:
    return MarkAllReadResponse(
        updated=mark_all_notifications_read_uc(db, user_id=current_user.id)
    )


@router.get("/preferences", response_model=NotificationPreferenceRead)
def get_preferences(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationPreferenceRead:
    return _preference_to_schema(get_or_create_preferences(db, user_id=current_user.id))


@router.post("/preferences", response_model=NotificationPreferenceRead)
def update_preferences(
    payload: NotificationPreferenceUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationPreferenceRead:
    """Apply a partial update; omitted fields keep their current value."""

    try:
        preference = update_preferences_uc(
            db, user_id=current_user.id, updates=payload.model_dump(exclude_unset=True)
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _preference_to_schema(preference)


@router.post("/push-token", response_model=NotificationPreferenceRead)
def register_push_token(
    payload: PushTokenRegister,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationPreferenceRead:
    try:
        preference = register_push_token_uc(
            db, user_id=current_user.id, token=payload.token, platform=payload.platform
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _preference_to_schema(preference)


@router.post("/{notification_id}/read", response_model=NotificationRead)
def mark_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationRead:
    try:
        notification = mark_notification_read_uc(
            db, notification_id=notification_id, user_id=current_user.id
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return NotificationRead.model_validate(notification)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> None:
    if not delete_notification_uc(db, notification_id=notification_id, user_id=current_user.id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found"
        )


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams notifications to the joined user."""

    await notifications_gateway.serve(websocket)
