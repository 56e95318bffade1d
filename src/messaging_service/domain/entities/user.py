from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from messaging_service.domain.value_objects.ids import UserId


@dataclass(frozen=True, slots=True)
class User:
    id: UserId
    email: str
    password_hash: str
    name: str
    alias: str | None
    bio: str | None
    created_at: datetime
    updated_at: datetime

    def summary(self) -> UserSummary:
        return UserSummary(id=self.id, name=self.name, alias=self.alias)

    def public_profile(self) -> PublicProfile:
        return PublicProfile(
            id=self.id,
            name=self.name,
            alias=self.alias,
            bio=self.bio,
            created_at=self.created_at,
        )


@dataclass(frozen=True, slots=True)
class UserSummary:
    """Display projection embedded in message and conversation payloads."""

    id: UserId
    name: str
    alias: str | None


@dataclass(frozen=True, slots=True)
class PublicProfile:
    """What other users may see when browsing the directory."""

    id: UserId
    name: str
    alias: str | None
    bio: str | None
    created_at: datetime
