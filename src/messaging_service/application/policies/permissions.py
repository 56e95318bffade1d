from __future__ import annotations

from messaging_service.application.dto.principal import Principal
from messaging_service.application.exceptions import ForbiddenError, NotFoundError
from messaging_service.domain.entities.message import Message


def assert_message_recipient(
    principal: Principal,
    message: Message | None,
) -> Message:
    """Raise unless the message exists and was sent to the principal."""
    if message is None:
        raise NotFoundError("Message not found")

    if message.recipient_id != principal.subject_id:
        raise ForbiddenError("You can only mark your own received messages as read")

    return message
