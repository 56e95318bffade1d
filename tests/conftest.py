"""Shared test fixtures."""
from __future__ import annotations

import itertools
import uuid
from collections.abc import Collection, Sequence
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from uuid import UUID

import pytest

from messaging_service.application.dto.principal import Principal
from messaging_service.application.dto.user import NewUserDTO
from messaging_service.domain.entities.message import Message
from messaging_service.domain.entities.user import User, UserSummary
from messaging_service.domain.services.conversations import (
    ConversationDigest,
    digest_conversations,
)
from messaging_service.domain.value_objects.ids import MessageId, UserId

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class PlainTextHasher:
    """Reversible stand-in so unit tests don't pay for bcrypt."""

    def hash(self, password: str) -> str:
        return f"plain${password}"

    def verify(self, password: str, password_hash: str) -> bool:
        return password_hash == f"plain${password}"


class StaticTokenIssuer:
    def issue(self, subject_id: int) -> str:
        return f"token-{subject_id}"


def make_user(
    user_id: int,
    *,
    name: str | None = None,
    email: str | None = None,
    alias: str | None = None,
    bio: str | None = None,
    created_at: datetime | None = None,
) -> User:
    ts = created_at or BASE_TIME + timedelta(minutes=user_id)
    return User(
        id=UserId(user_id),
        email=email or f"user{user_id}@example.com",
        password_hash="plain$secret",
        name=name or f"User {user_id}",
        alias=alias,
        bio=bio,
        created_at=ts,
        updated_at=ts,
    )


def make_message(
    *,
    sender_id: int,
    recipient_id: int,
    content: str = "hello",
    is_read: bool = False,
    created_at: datetime | None = None,
    offset_seconds: int = 0,
) -> Message:
    return Message(
        id=MessageId(uuid.uuid4()),
        sender_id=UserId(sender_id),
        recipient_id=UserId(recipient_id),
        content=content,
        is_read=is_read,
        created_at=created_at or BASE_TIME + timedelta(seconds=offset_seconds),
    )


@pytest.fixture
def alice() -> Principal:
    return Principal(subject_id=UserId(1))


@pytest.fixture
def bob() -> Principal:
    return Principal(subject_id=UserId(2))


@dataclass
class FakeUserReader:
    _users: dict[int, User] = field(default_factory=dict)

    async def get_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    async def get_by_email(self, email: str) -> User | None:
        return next((u for u in self._users.values() if u.email == email), None)

    async def get_summaries(self, user_ids: Collection[int]) -> dict[int, UserSummary]:
        return {uid: self._users[uid].summary() for uid in user_ids if uid in self._users}

    async def search(
        self, *, exclude_id: int, term: str | None = None, limit: int = 50,
    ) -> list[User]:
        needle = term.lower() if term else None
        found = [
            u for u in self._users.values()
            if u.id != exclude_id
            and (
                needle is None
                or any(needle in (v or "").lower() for v in (u.name, u.alias, u.email))
            )
        ]
        found.sort(key=lambda u: (u.created_at, u.id), reverse=True)
        return found[:limit]


@dataclass
class FakeUserWriter:
    _reader: FakeUserReader
    _ids: itertools.count = field(default_factory=lambda: itertools.count(1000))

    async def create(self, new_user: NewUserDTO) -> User:
        user = make_user(
            next(self._ids),
            name=new_user.name,
            email=new_user.email,
            alias=new_user.alias,
            bio=new_user.bio,
            created_at=datetime.now(timezone.utc),
        )
        user = replace(user, password_hash=new_user.password_hash)
        self._reader._users[user.id] = user
        return user


@dataclass
class FakeMessageReader:
    _messages: list[Message] = field(default_factory=list)

    async def get_by_id(self, message_id: UUID) -> Message | None:
        return next((m for m in self._messages if m.id == message_id), None)

    async def list_between(self, user_id: int, other_user_id: int) -> list[Message]:
        pair = {user_id, other_user_id}
        found = [
            m for m in self._messages
            if {m.sender_id, m.recipient_id} == pair and m.sender_id != m.recipient_id
        ]
        return sorted(found, key=lambda m: m.sort_key)


@dataclass
class FakeMessageWriter:
    _reader: FakeMessageReader
    mark_calls: list[list[UUID]] = field(default_factory=list)

    async def create(self, message: Message) -> Message:
        self._reader._messages.append(message)
        return message

    async def mark_read(self, message_ids: Sequence[UUID]) -> int:
        self.mark_calls.append(list(message_ids))
        wanted = set(message_ids)
        changed = 0
        for i, m in enumerate(self._reader._messages):
            if m.id in wanted and not m.is_read:
                self._reader._messages[i] = m.as_read()
                changed += 1
        return changed


@dataclass
class FakeConversationIndex:
    _reader: FakeMessageReader

    async def list_digests(self, user_id: int) -> list[ConversationDigest]:
        return digest_conversations(user_id, self._reader._messages)


@dataclass
class FakeUoW:
    """In-memory UoW for unit tests."""
    users: FakeUserReader = field(default_factory=FakeUserReader)
    users_w: FakeUserWriter | None = None
    messages: FakeMessageReader = field(default_factory=FakeMessageReader)
    messages_w: FakeMessageWriter | None = None
    conversations: FakeConversationIndex | None = None
    commits: int = 0

    def __post_init__(self) -> None:
        if self.users_w is None:
            self.users_w = FakeUserWriter(self.users)
        if self.messages_w is None:
            self.messages_w = FakeMessageWriter(self.messages)
        if self.conversations is None:
            self.conversations = FakeConversationIndex(self.messages)

    @property
    def _committed(self) -> bool:
        return self.commits > 0

    def add_users(self, *users: User) -> None:
        for user in users:
            self.users._users[user.id] = user

    def add_messages(self, *messages: Message) -> None:
        self.messages._messages.extend(messages)

    async def flush(self) -> None:
        pass

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        pass


@pytest.fixture
def uow() -> FakeUoW:
    """Alice (1), Bob (2) and Carol (3), no messages yet."""
    fake = FakeUoW()
    fake.add_users(
        make_user(1, name="Alice", alias="quiet_fox"),
        make_user(2, name="Bob"),
        make_user(3, name="Carol", bio="Night owl"),
    )
    return fake
