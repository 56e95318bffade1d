from __future__ import annotations

from typing import Protocol

from messaging_service.application.repositories.conversation import ConversationIndex
from messaging_service.application.repositories.message import MessageReader, MessageWriter
from messaging_service.application.repositories.user import UserReader, UserWriter


class UnitOfWork(Protocol):
    users: UserReader
    users_w: UserWriter
    messages: MessageReader
    messages_w: MessageWriter
    conversations: ConversationIndex

    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...
    async def flush(self) -> None: ...
