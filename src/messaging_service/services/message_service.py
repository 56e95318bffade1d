from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from messaging_service.application.dto.conversation import ThreadDTO
from messaging_service.application.dto.message import MessageView
from messaging_service.application.dto.principal import Principal
from messaging_service.application.exceptions import NotFoundError, ValidationError
from messaging_service.application.policies.permissions import assert_message_recipient
from messaging_service.application.uow import UnitOfWork
from messaging_service.domain.entities.message import Message
from messaging_service.domain.value_objects.ids import MessageId

logger = logging.getLogger(__name__)


async def send_message(
    principal: Principal,
    recipient_id: int | None,
    content: str | None,
    uow: UnitOfWork,
) -> MessageView:
    """Persist a direct message from the principal to recipient_id.

    All checks run before anything is written: missing fields, unknown
    recipient, then messaging oneself.
    """
    body = content.strip() if content else ""
    if not recipient_id or not body:
        raise ValidationError("Recipient ID and content are required")

    recipient = await uow.users.get_by_id(recipient_id)
    if recipient is None:
        raise NotFoundError("Recipient not found")

    if principal.subject_id == recipient.id:
        raise ValidationError("You cannot send a message to yourself")

    profiles = await uow.users.get_summaries([principal.subject_id, recipient.id])

    msg = Message(
        id=MessageId(uuid.uuid4()),
        sender_id=principal.subject_id,
        recipient_id=recipient.id,
        content=body,
        is_read=False,
        created_at=datetime.now(timezone.utc),
    )
    msg = await uow.messages_w.create(msg)
    await uow.commit()
    logger.info("Message %s sent %s -> %s", msg.id, msg.sender_id, msg.recipient_id)

    return MessageView.of(
        msg,
        sender=profiles.get(msg.sender_id),
        recipient=recipient.summary(),
    )


async def get_thread(
    principal: Principal,
    other_user_id: int,
    uow: UnitOfWork,
) -> ThreadDTO:
    """Return the ordered history with other_user_id and mark inbound unread as read.

    The returned messages are the snapshot read before the update, so their
    is_read flags show the state the viewer opened the thread in. Only ids in
    that snapshot are flipped; anything that arrives afterwards stays unread.
    """
    other = await uow.users.get_by_id(other_user_id)
    if other is None:
        raise NotFoundError("User not found")

    messages = await uow.messages.list_between(principal.subject_id, other.id)
    profiles = await uow.users.get_summaries([principal.subject_id, other.id])
    views = [MessageView.of(m, sender=profiles.get(m.sender_id)) for m in messages]

    unread_ids = [
        m.id for m in messages
        if m.sender_id == other.id and m.is_unread_for(principal.subject_id)
    ]
    if unread_ids:
        marked = await uow.messages_w.mark_read(unread_ids)
        await uow.commit()
        logger.info(
            "Marked %d message(s) from %s to %s as read",
            marked, other.id, principal.subject_id,
        )

    return ThreadDTO(messages=views, other_user=other.summary())


async def mark_as_read(
    principal: Principal,
    message_id: uuid.UUID,
    uow: UnitOfWork,
) -> Message:
    """Mark one received message read. Re-marking is a successful no-op."""
    message = await uow.messages.get_by_id(message_id)
    message = assert_message_recipient(principal, message)

    if not message.is_read:
        await uow.messages_w.mark_read([message.id])
        await uow.commit()
        logger.info("Message %s marked read by %s", message.id, principal.subject_id)

    return message.as_read()
