from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from messaging_service.domain.entities.message import Message
from messaging_service.domain.entities.user import UserSummary
from messaging_service.domain.value_objects.ids import MessageId, UserId


@dataclass(frozen=True, slots=True)
class MessageView:
    """A message enriched with the display projections of its parties."""

    id: MessageId
    sender_id: UserId
    recipient_id: UserId
    content: str
    is_read: bool
    created_at: datetime
    sender: UserSummary | None = None
    recipient: UserSummary | None = None

    @classmethod
    def of(
        cls,
        message: Message,
        *,
        sender: UserSummary | None = None,
        recipient: UserSummary | None = None,
    ) -> MessageView:
        return cls(
            id=message.id,
            sender_id=message.sender_id,
            recipient_id=message.recipient_id,
            content=message.content,
            is_read=message.is_read,
            created_at=message.created_at,
            sender=sender,
            recipient=recipient,
        )
