from __future__ import annotations

from typing import Protocol

from messaging_service.application.dto.principal import Principal


class TokenVerifier(Protocol):
    async def verify(self, token: str) -> Principal: ...


class TokenIssuer(Protocol):
    def issue(self, subject_id: int) -> str: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...

    def verify(self, password: str, password_hash: str) -> bool: ...
