from __future__ import annotations

from dataclasses import dataclass

from messaging_service.domain.entities.user import User


@dataclass(frozen=True, slots=True)
class NewUserDTO:
    email: str
    password_hash: str
    name: str
    alias: str | None = None
    bio: str | None = None


@dataclass(frozen=True, slots=True)
class AuthResultDTO:
    user: User
    token: str
