from __future__ import annotations

from messaging_service.application.dto.conversation import ConversationSummaryDTO
from messaging_service.application.dto.message import MessageView
from messaging_service.application.dto.principal import Principal
from messaging_service.application.uow import UnitOfWork
from messaging_service.domain.entities.user import UserSummary


async def list_conversations(
    principal: Principal,
    uow: UnitOfWork,
) -> list[ConversationSummaryDTO]:
    """Summaries of every conversation the principal takes part in, newest first.

    Partner and sender profiles are resolved with a single batched lookup.
    """
    digests = await uow.conversations.list_digests(principal.subject_id)
    if not digests:
        return []

    wanted = {d.partner_id for d in digests}
    wanted.update(d.last_message.sender_id for d in digests if d.last_message)
    profiles = await uow.users.get_summaries(wanted)

    summaries: list[ConversationSummaryDTO] = []
    for digest in digests:
        partner = profiles.get(digest.partner_id)
        if partner is None:
            # Profile lookup missed; keep the id so the entry still renders.
            partner = UserSummary(id=digest.partner_id, name="", alias=None)
        last = None
        if digest.last_message is not None:
            last = MessageView.of(
                digest.last_message,
                sender=profiles.get(digest.last_message.sender_id),
            )
        summaries.append(
            ConversationSummaryDTO(
                user=partner,
                last_message=last,
                unread_count=digest.unread_count,
            )
        )
    return summaries
