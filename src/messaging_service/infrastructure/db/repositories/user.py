from __future__ import annotations

from collections.abc import Collection

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from messaging_service.application.dto.user import NewUserDTO
from messaging_service.domain.entities.user import User, UserSummary
from messaging_service.infrastructure.db.errors import translate_storage_errors
from messaging_service.infrastructure.db.mappers import user as mapper
from messaging_service.infrastructure.db.models.user import UserModel


class UserReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @translate_storage_errors
    async def get_by_id(self, user_id: int) -> User | None:
        result = await self._session.get(UserModel, user_id)
        return mapper.model_to_entity(result) if result else None

    @translate_storage_errors
    async def get_by_email(self, email: str) -> User | None:
        stmt = select(UserModel).where(UserModel.email == email)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return mapper.model_to_entity(model) if model else None

    @translate_storage_errors
    async def get_summaries(self, user_ids: Collection[int]) -> dict[int, UserSummary]:
        if not user_ids:
            return {}
        stmt = select(UserModel.id, UserModel.name, UserModel.alias).where(
            UserModel.id.in_(list(user_ids))
        )
        result = await self._session.execute(stmt)
        summaries = (mapper.row_to_summary(tuple(row)) for row in result.all())
        return {s.id: s for s in summaries}

    @translate_storage_errors
    async def search(
        self,
        *,
        exclude_id: int,
        term: str | None = None,
        limit: int = 50,
    ) -> list[User]:
        stmt = select(UserModel).where(UserModel.id != exclude_id)
        if term:
            stmt = stmt.where(
                or_(
                    UserModel.name.icontains(term, autoescape=True),
                    UserModel.alias.icontains(term, autoescape=True),
                    UserModel.email.icontains(term, autoescape=True),
                )
            )
        stmt = stmt.order_by(UserModel.created_at.desc(), UserModel.id.desc()).limit(limit)
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]


class UserWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @translate_storage_errors
    async def create(self, new_user: NewUserDTO) -> User:
        model = UserModel(
            email=new_user.email,
            password_hash=new_user.password_hash,
            name=new_user.name,
            alias=new_user.alias,
            bio=new_user.bio,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return mapper.model_to_entity(model)
