from __future__ import annotations

from dataclasses import dataclass

from messaging_service.application.dto.message import MessageView
from messaging_service.domain.entities.user import UserSummary


@dataclass(frozen=True, slots=True)
class ConversationSummaryDTO:
    user: UserSummary
    last_message: MessageView | None
    unread_count: int


@dataclass(frozen=True, slots=True)
class ThreadDTO:
    messages: list[MessageView]
    other_user: UserSummary
