from __future__ import annotations

from pydantic import BaseModel

from messaging_service.api.v1.schemas.user import SelfProfileResponse


class RegisterRequest(BaseModel):
    email: str | None = None
    password: str | None = None
    name: str | None = None
    alias: str | None = None
    bio: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class AuthResponse(BaseModel):
    user: SelfProfileResponse
    token: str

    model_config = {"from_attributes": True}
