from __future__ import annotations

from typing import Protocol

from messaging_service.domain.services.conversations import ConversationDigest


class ConversationIndex(Protocol):
    """Per-partner view over a user's messages.

    The default implementation scans messages; a denormalized index keyed by
    the unordered user pair can replace it without touching callers.
    """

    async def list_digests(self, user_id: int) -> list[ConversationDigest]:
        """One digest per partner, most recent first."""
        ...
