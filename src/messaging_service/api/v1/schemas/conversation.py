from __future__ import annotations

from pydantic import BaseModel

from messaging_service.api.v1.schemas.message import MessageResponse
from messaging_service.api.v1.schemas.user import UserSummaryResponse


class ConversationResponse(BaseModel):
    user: UserSummaryResponse
    last_message: MessageResponse | None
    unread_count: int

    model_config = {"from_attributes": True}
