from __future__ import annotations

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", int)
MessageId = NewType("MessageId", UUID)

# Users are keyed by a signed 64-bit identity column.
MAX_USER_ID = 2**63 - 1
