from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Path, Query

from messaging_service.api.deps import CurrentPrincipal, UoWDep
from messaging_service.api.v1.schemas.user import PublicProfileResponse
from messaging_service.config import settings
from messaging_service.domain.value_objects.ids import MAX_USER_ID
from messaging_service.services import user_service

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("", response_model=list[PublicProfileResponse])
async def search_users(
    principal: CurrentPrincipal,
    uow: UoWDep,
    search: str | None = Query(None, max_length=100),
) -> list[PublicProfileResponse]:
    users = await user_service.search_users(
        principal, search, settings.USER_SEARCH_LIMIT, uow,
    )
    return [PublicProfileResponse.model_validate(u, from_attributes=True) for u in users]


@router.get("/{user_id}", response_model=PublicProfileResponse)
async def get_user(
    user_id: Annotated[int, Path(ge=1, le=MAX_USER_ID)],
    _principal: CurrentPrincipal,
    uow: UoWDep,
) -> PublicProfileResponse:
    user = await user_service.get_user(user_id, uow)
    return PublicProfileResponse.model_validate(user, from_attributes=True)
