from __future__ import annotations

from collections.abc import Collection
from typing import Protocol

from messaging_service.application.dto.user import NewUserDTO
from messaging_service.domain.entities.user import User, UserSummary


class UserReader(Protocol):
    async def get_by_id(self, user_id: int) -> User | None: ...

    async def get_by_email(self, email: str) -> User | None: ...

    async def get_summaries(self, user_ids: Collection[int]) -> dict[int, UserSummary]:
        """Batch lookup of display projections. Unknown ids are omitted."""
        ...

    async def search(
        self, *, exclude_id: int, term: str | None = None, limit: int = 50,
    ) -> list[User]:
        """Users other than exclude_id, newest first, optionally filtered by term."""
        ...


class UserWriter(Protocol):
    async def create(self, new_user: NewUserDTO) -> User: ...
