from __future__ import annotations

from fastapi import APIRouter

from messaging_service.api.deps import (
    CurrentPrincipal,
    PasswordHasherDep,
    TokenCodecDep,
    UoWDep,
)
from messaging_service.api.v1.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from messaging_service.api.v1.schemas.user import SelfProfileResponse
from messaging_service.services import auth_service

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    body: RegisterRequest,
    uow: UoWDep,
    hasher: PasswordHasherDep,
    codec: TokenCodecDep,
) -> AuthResponse:
    result = await auth_service.register(
        body.email,
        body.password,
        body.name,
        body.alias,
        body.bio,
        hasher,
        codec,
        uow,
    )
    return AuthResponse.model_validate(result, from_attributes=True)


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    uow: UoWDep,
    hasher: PasswordHasherDep,
    codec: TokenCodecDep,
) -> AuthResponse:
    result = await auth_service.login(body.email, body.password, hasher, codec, uow)
    return AuthResponse.model_validate(result, from_attributes=True)


@router.get("/me", response_model=SelfProfileResponse)
async def me(
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> SelfProfileResponse:
    user = await auth_service.get_me(principal, uow)
    return SelfProfileResponse.model_validate(user, from_attributes=True)
