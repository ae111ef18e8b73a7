"""Schemas of the payloads carried by delivery jobs.

Each job kind is a tagged variant; the ``kind`` field selects the schema
when a payload is read back from the queue table.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from alnet.domain.entities import EMAIL_DELIVERY_QUEUE, NOTIFICATION_DELIVERY_QUEUE


class _DeliveryJobBase(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    notification_id: int = Field(gt=0)
    user_id: int = Field(gt=0)

    @property
    def dedupe_key(self) -> str:
        return f"{self.kind}:{self.notification_id}"


class EmailDeliveryJob(_DeliveryJobBase):
    kind: Literal["email"] = "email"


class PushDeliveryJob(_DeliveryJobBase):
    kind: Literal["push"] = "push"
    token: str = Field(min_length=1)
    platform: Literal["ios", "android", "web"] | None = None


DeliveryPayload = Annotated[
    Union[EmailDeliveryJob, PushDeliveryJob], Field(discriminator="kind")
]

_payload_adapter: TypeAdapter[DeliveryPayload] = TypeAdapter(DeliveryPayload)

QUEUE_FOR_KIND: dict[str, str] = {
    "email": EMAIL_DELIVERY_QUEUE,
    "push": NOTIFICATION_DELIVERY_QUEUE,
}


class InvalidJobPayload(ValueError):
    """Raised when a stored payload does not match any job schema."""


def parse_job_payload(data: object) -> EmailDeliveryJob | PushDeliveryJob:
    try:
        return _payload_adapter.validate_python(data)
    except ValidationError as exc:
        raise InvalidJobPayload(str(exc)) from exc


__all__ = [
    "DeliveryPayload",
    "EmailDeliveryJob",
    "InvalidJobPayload",
    "PushDeliveryJob",
    "QUEUE_FOR_KIND",
    "parse_job_payload",
]
