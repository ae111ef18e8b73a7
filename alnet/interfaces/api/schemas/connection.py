"""Connection schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from alnet.domain.entities import ConnectionStatus

from .common import PaginationRead, UserSummaryRead


class ConnectionCreate(BaseModel):
    receiver_id: int = Field(..., ge=1)
    message: str | None = Field(default=None, max_length=500)

    model_config = ConfigDict(extra="forbid")


class ConnectionRespond(BaseModel):
    accepted: bool

    model_config = ConfigDict(extra="forbid")


class ConnectionRead(BaseModel):
    id: int
    requester_id: int
    receiver_id: int
    status: ConnectionStatus
    message: str | None = None
    created_at: datetime | None = None
    responded_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class ConnectionWithPartnerRead(BaseModel):
    connection: ConnectionRead
    partner: UserSummaryRead | None = None


class ConnectionListRead(BaseModel):
    data: list[ConnectionWithPartnerRead]
    pagination: PaginationRead


class ConnectionStatusRead(BaseModel):
    status: str
    initiator: str | None = None
    connection_id: int | None = None


__all__ = [
    "ConnectionCreate",
    "ConnectionListRead",
    "ConnectionRead",
    "ConnectionRespond",
    "ConnectionStatusRead",
    "ConnectionWithPartnerRead",
]
