from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt

from messaging_service.application.dto.principal import Principal
from messaging_service.domain.value_objects.ids import MAX_USER_ID, UserId


class HS256TokenCodec:
    """Issue and verify JWTs signed with a shared HS256 secret."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_in: timedelta = timedelta(days=7),
    ) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._expires_in = expires_in

    def issue(self, subject_id: int) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(subject_id),
            "iat": now,
            "exp": now + self._expires_in,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    async def verify(self, token: str) -> Principal:
        payload = jwt.decode(
            token,
            self._secret,
            algorithms=[self._algorithm],
            options={"require": ["sub", "exp"]},
        )
        subject_id = int(payload["sub"])
        if not 1 <= subject_id <= MAX_USER_ID:
            raise jwt.InvalidTokenError("Token subject is out of range")
        return Principal(subject_id=UserId(subject_id))
