from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from messaging_service.api.v1.schemas.user import UserSummaryResponse
from messaging_service.domain.value_objects.ids import MAX_USER_ID


class SendMessageRequest(BaseModel):
    # Both optional so that missing fields reach the service's own validation.
    recipient_id: int | None = Field(default=None, ge=1, le=MAX_USER_ID)
    content: str | None = None


class MessageResponse(BaseModel):
    id: UUID
    sender_id: int
    recipient_id: int
    content: str
    is_read: bool
    created_at: datetime
    sender: UserSummaryResponse | None = None
    recipient: UserSummaryResponse | None = None

    model_config = {"from_attributes": True}


class ThreadResponse(BaseModel):
    messages: list[MessageResponse]
    other_user: UserSummaryResponse

    model_config = {"from_attributes": True}
