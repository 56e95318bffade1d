from __future__ import annotations

from dataclasses import dataclass

from messaging_service.domain.value_objects.ids import UserId


@dataclass(frozen=True, slots=True)
class Principal:
    """Authenticated caller identity extracted from JWT."""

    subject_id: UserId
