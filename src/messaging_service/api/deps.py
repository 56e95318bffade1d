"""FastAPI dependency injection helpers."""
from __future__ import annotations

from datetime import timedelta
from typing import Annotated, AsyncIterator

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from messaging_service.application.dto.principal import Principal
from messaging_service.application.ports.auth import PasswordHasher
from messaging_service.config import settings
from messaging_service.infrastructure.auth.hs256 import HS256TokenCodec
from messaging_service.infrastructure.auth.password import BcryptPasswordHasher
from messaging_service.infrastructure.db.session import AsyncSessionLocal
from messaging_service.infrastructure.db.uow import SqlAlchemyUoW

_bearer_scheme = HTTPBearer(auto_error=False)


async def get_uow() -> AsyncIterator[SqlAlchemyUoW]:
    async with AsyncSessionLocal() as session:
        async with SqlAlchemyUoW(session) as uow:
            yield uow


UoWDep = Annotated[SqlAlchemyUoW, Depends(get_uow)]


_token_codec: HS256TokenCodec | None = None
_password_hasher: PasswordHasher | None = None


def get_token_codec() -> HS256TokenCodec:
    global _token_codec  # noqa: PLW0603
    if _token_codec is None:
        _token_codec = HS256TokenCodec(
            settings.JWT_SECRET,
            settings.JWT_ALGORITHM,
            timedelta(seconds=settings.JWT_EXPIRES_SECONDS),
        )
    return _token_codec


def get_password_hasher() -> PasswordHasher:
    global _password_hasher  # noqa: PLW0603
    if _password_hasher is None:
        _password_hasher = BcryptPasswordHasher(settings.PASSWORD_HASH_ROUNDS)
    return _password_hasher


TokenCodecDep = Annotated[HS256TokenCodec, Depends(get_token_codec)]
PasswordHasherDep = Annotated[PasswordHasher, Depends(get_password_hasher)]


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_principal(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer_scheme)],
    codec: TokenCodecDep,
    uow: UoWDep,
) -> Principal:
    if credentials is None:
        raise _unauthorized("No token provided. Please authenticate.")
    try:
        principal = await codec.verify(credentials.credentials)
    except (jwt.PyJWTError, ValueError) as exc:
        raise _unauthorized("Invalid or expired token") from exc

    if await uow.users.get_by_id(principal.subject_id) is None:
        raise _unauthorized("User not found. Token may be invalid.")
    return principal


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
