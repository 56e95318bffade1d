from __future__ import annotations

from messaging_service.domain.entities.message import Message
from messaging_service.domain.value_objects.ids import MessageId, UserId
from messaging_service.infrastructure.db.models.message import MessageModel


def model_to_entity(model: MessageModel) -> Message:
    return Message(
        id=MessageId(model.id),
        sender_id=UserId(model.sender_id),
        recipient_id=UserId(model.recipient_id),
        content=model.content,
        is_read=model.is_read,
        created_at=model.created_at,
    )


def entity_to_model(entity: Message) -> MessageModel:
    return MessageModel(
        id=entity.id,
        sender_id=entity.sender_id,
        recipient_id=entity.recipient_id,
        content=entity.content,
        is_read=entity.is_read,
        created_at=entity.created_at,
    )
