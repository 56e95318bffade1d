from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

from messaging_service.domain.value_objects.ids import MessageId, UserId


@dataclass(frozen=True, slots=True)
class Message:
    id: MessageId
    sender_id: UserId
    recipient_id: UserId
    content: str
    is_read: bool
    created_at: datetime

    @property
    def sort_key(self) -> tuple[datetime, str]:
        return self.created_at, str(self.id)

    def involves(self, user_id: int) -> bool:
        return self.sender_id == user_id or self.recipient_id == user_id

    def counterpart_of(self, user_id: int) -> UserId:
        return self.recipient_id if self.sender_id == user_id else self.sender_id

    def is_unread_for(self, user_id: int) -> bool:
        # Only the recipient ever sees a message as unread.
        return self.recipient_id == user_id and not self.is_read

    def as_read(self) -> Message:
        return self if self.is_read else replace(self, is_read=True)
