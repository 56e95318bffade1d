from __future__ import annotations

import logging

from messaging_service.application.dto.principal import Principal
from messaging_service.application.dto.user import AuthResultDTO, NewUserDTO
from messaging_service.application.exceptions import (
    ConflictError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from messaging_service.application.ports.auth import PasswordHasher, TokenIssuer
from messaging_service.application.uow import UnitOfWork
from messaging_service.domain.entities.user import User

logger = logging.getLogger(__name__)

_BAD_CREDENTIALS = "Invalid email or password"


def _normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def _optional(value: str | None) -> str | None:
    value = value.strip() if value else None
    return value or None


async def register(
    email: str | None,
    password: str | None,
    name: str | None,
    alias: str | None,
    bio: str | None,
    hasher: PasswordHasher,
    issuer: TokenIssuer,
    uow: UnitOfWork,
) -> AuthResultDTO:
    email = _normalize_email(email)
    name = (name or "").strip()
    if not email or not password or not name:
        raise ValidationError("Email, password, and name are required")

    if await uow.users.get_by_email(email) is not None:
        raise ConflictError("User with this email already exists")

    user = await uow.users_w.create(
        NewUserDTO(
            email=email,
            password_hash=hasher.hash(password),
            name=name,
            alias=_optional(alias),
            bio=_optional(bio),
        )
    )
    await uow.commit()
    logger.info("Registered user %s", user.id)
    return AuthResultDTO(user=user, token=issuer.issue(user.id))


async def login(
    email: str | None,
    password: str | None,
    hasher: PasswordHasher,
    issuer: TokenIssuer,
    uow: UnitOfWork,
) -> AuthResultDTO:
    email = _normalize_email(email)
    if not email or not password:
        raise ValidationError("Email and password are required")

    user = await uow.users.get_by_email(email)
    if user is None or not hasher.verify(password, user.password_hash):
        raise UnauthorizedError(_BAD_CREDENTIALS)

    return AuthResultDTO(user=user, token=issuer.issue(user.id))


async def get_me(
    principal: Principal,
    uow: UnitOfWork,
) -> User:
    user = await uow.users.get_by_id(principal.subject_id)
    if user is None:
        raise NotFoundError("User not found")
    return user
