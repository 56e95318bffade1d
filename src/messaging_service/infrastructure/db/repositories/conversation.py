from __future__ import annotations

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from messaging_service.domain.services.conversations import (
    ConversationDigest,
    digest_conversations,
)
from messaging_service.infrastructure.db.errors import translate_storage_errors
from messaging_service.infrastructure.db.mappers import message as mapper
from messaging_service.infrastructure.db.models.message import MessageModel


class ScanConversationIndex:
    """Builds digests from one pass over every message touching the user."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @translate_storage_errors
    async def list_digests(self, user_id: int) -> list[ConversationDigest]:
        stmt = (
            select(MessageModel)
            .where(
                or_(
                    MessageModel.sender_id == user_id,
                    MessageModel.recipient_id == user_id,
                )
            )
            .order_by(MessageModel.created_at.asc(), MessageModel.id.asc())
        )
        result = await self._session.execute(stmt)
        messages = (mapper.model_to_entity(m) for m in result.scalars().all())
        return digest_conversations(user_id, messages)
