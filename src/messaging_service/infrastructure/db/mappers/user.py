from __future__ import annotations

from messaging_service.domain.entities.user import User, UserSummary
from messaging_service.domain.value_objects.ids import UserId
from messaging_service.infrastructure.db.models.user import UserModel


def model_to_entity(model: UserModel) -> User:
    return User(
        id=UserId(model.id),
        email=model.email,
        password_hash=model.password_hash,
        name=model.name,
        alias=model.alias,
        bio=model.bio,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def row_to_summary(row: tuple[int, str, str | None]) -> UserSummary:
    user_id, name, alias = row
    return UserSummary(id=UserId(user_id), name=name, alias=alias)
