from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class UserSummaryResponse(BaseModel):
    id: int
    name: str
    alias: str | None

    model_config = {"from_attributes": True}


class PublicProfileResponse(BaseModel):
    id: int
    name: str
    alias: str | None
    bio: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class SelfProfileResponse(BaseModel):
    id: int
    email: str
    name: str
    alias: str | None
    bio: str | None
    created_at: datetime

    model_config = {"from_attributes": True}
