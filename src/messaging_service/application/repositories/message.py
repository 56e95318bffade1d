from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol
from uuid import UUID

from messaging_service.domain.entities.message import Message


class MessageReader(Protocol):
    async def get_by_id(self, message_id: UUID) -> Message | None: ...

    async def list_between(self, user_id: int, other_user_id: int) -> list[Message]:
        """Messages exchanged by the two users, ascending by (created_at, id)."""
        ...


class MessageWriter(Protocol):
    async def create(self, message: Message) -> Message: ...

    async def mark_read(self, message_ids: Sequence[UUID]) -> int:
        """Flip is_read to true for the given ids. Returns rows actually changed."""
        ...
