from __future__ import annotations

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import ColumnElement, and_, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from messaging_service.domain.entities.message import Message
from messaging_service.infrastructure.db.errors import translate_storage_errors
from messaging_service.infrastructure.db.mappers import message as mapper
from messaging_service.infrastructure.db.models.message import MessageModel


def between(user_id: int, other_user_id: int) -> ColumnElement[bool]:
    return or_(
        and_(MessageModel.sender_id == user_id, MessageModel.recipient_id == other_user_id),
        and_(MessageModel.sender_id == other_user_id, MessageModel.recipient_id == user_id),
    )


class MessageReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @translate_storage_errors
    async def get_by_id(self, message_id: UUID) -> Message | None:
        result = await self._session.get(MessageModel, message_id)
        return mapper.model_to_entity(result) if result else None

    @translate_storage_errors
    async def list_between(self, user_id: int, other_user_id: int) -> list[Message]:
        stmt = (
            select(MessageModel)
            .where(between(user_id, other_user_id))
            .order_by(MessageModel.created_at.asc(), MessageModel.id.asc())
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]


class MessageWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @translate_storage_errors
    async def create(self, message: Message) -> Message:
        model = mapper.entity_to_model(message)
        self._session.add(model)
        await self._session.flush()
        return mapper.model_to_entity(model)

    @translate_storage_errors
    async def mark_read(self, message_ids: Sequence[UUID]) -> int:
        if not message_ids:
            return 0
        stmt = (
            update(MessageModel)
            .where(
                MessageModel.id.in_(list(message_ids)),
                MessageModel.is_read.is_(False),
            )
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount or 0
