"""Seed development data: two users and a short conversation between them."""
from __future__ import annotations

import asyncio
import logging

from messaging_service.application.dto.principal import Principal
from messaging_service.config import settings
from messaging_service.infrastructure.auth.hs256 import HS256TokenCodec
from messaging_service.infrastructure.auth.password import BcryptPasswordHasher
from messaging_service.infrastructure.db.session import AsyncSessionLocal, engine
from messaging_service.infrastructure.db.uow import SqlAlchemyUoW
from messaging_service.log_config import configure_logging
from messaging_service.services import auth_service, message_service

logger = logging.getLogger(__name__)

DEV_PASSWORD = "password123"

USERS = [
    ("alice@example.com", "Alice", "quiet_fox", "Here to listen."),
    ("bob@example.com", "Bob", None, None),
]

MESSAGES = [
    (0, 1, "Hi Bob, how was your week?"),
    (1, 0, "Better than the last one, thanks for asking."),
    (0, 1, "Glad to hear it!"),
]


async def seed() -> None:
    hasher = BcryptPasswordHasher(settings.PASSWORD_HASH_ROUNDS)
    codec = HS256TokenCodec(settings.JWT_SECRET, settings.JWT_ALGORITHM)

    async with AsyncSessionLocal() as session:
        async with SqlAlchemyUoW(session) as uow:
            principals: list[Principal] = []
            for email, name, alias, bio in USERS:
                existing = await uow.users.get_by_email(email)
                if existing is None:
                    result = await auth_service.register(
                        email, DEV_PASSWORD, name, alias, bio, hasher, codec, uow,
                    )
                    existing = result.user
                principals.append(Principal(subject_id=existing.id))

            for sender, recipient, content in MESSAGES:
                await message_service.send_message(
                    principals[sender], principals[recipient].subject_id, content, uow,
                )

    await engine.dispose()
    logger.info("Seeded %d users and %d messages", len(USERS), len(MESSAGES))


def main() -> None:
    configure_logging(settings.LOG_LEVEL)
    asyncio.run(seed())


if __name__ == "__main__":
    main()
