"""Derive per-partner conversation digests from a flat message list.

A conversation is never stored: it is the set of messages exchanged between
two users. Given every message touching a viewer, one pass groups them by
counterpart, keeping the latest message and the viewer's unread count.
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timezone

from messaging_service.domain.entities.message import Message
from messaging_service.domain.value_objects.ids import UserId

_OLDEST = (datetime.min.replace(tzinfo=timezone.utc), "")


@dataclass(frozen=True, slots=True)
class ConversationDigest:
    partner_id: UserId
    last_message: Message | None
    unread_count: int


def digest_conversations(
    viewer_id: int,
    messages: Iterable[Message],
) -> list[ConversationDigest]:
    """Group messages by counterpart and order the result by recency.

    Messages that do not involve the viewer, or that a user sent to
    themselves, are ignored.
    """
    latest: dict[UserId, Message] = {}
    unread: dict[UserId, int] = {}

    for msg in messages:
        if not msg.involves(viewer_id) or msg.sender_id == msg.recipient_id:
            continue
        partner_id = msg.counterpart_of(viewer_id)
        current = latest.get(partner_id)
        if current is None or msg.sort_key > current.sort_key:
            latest[partner_id] = msg
        unread.setdefault(partner_id, 0)
        if msg.is_unread_for(viewer_id):
            unread[partner_id] += 1

    digests = [
        ConversationDigest(
            partner_id=partner_id,
            last_message=latest.get(partner_id),
            unread_count=count,
        )
        for partner_id, count in unread.items()
    ]
    return sort_by_recency(digests)


def sort_by_recency(digests: Iterable[ConversationDigest]) -> list[ConversationDigest]:
    """Most recent conversation first; digests without a message go last."""
    return sorted(
        digests,
        key=lambda d: (
            d.last_message is not None,
            d.last_message.sort_key if d.last_message is not None else _OLDEST,
        ),
        reverse=True,
    )
