from __future__ import annotations

from messaging_service.application.dto.principal import Principal
from messaging_service.application.exceptions import NotFoundError
from messaging_service.application.uow import UnitOfWork
from messaging_service.domain.entities.user import PublicProfile


async def search_users(
    principal: Principal,
    search: str | None,
    limit: int,
    uow: UnitOfWork,
) -> list[PublicProfile]:
    """People the principal could message, excluding themselves."""
    term = search.strip() if search else None
    users = await uow.users.search(
        exclude_id=principal.subject_id, term=term or None, limit=limit,
    )
    return [u.public_profile() for u in users]


async def get_user(
    user_id: int,
    uow: UnitOfWork,
) -> PublicProfile:
    user = await uow.users.get_by_id(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user.public_profile()
