from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path

from messaging_service.api.deps import CurrentPrincipal, UoWDep
from messaging_service.api.v1.schemas.conversation import ConversationResponse
from messaging_service.api.v1.schemas.message import (
    MessageResponse,
    SendMessageRequest,
    ThreadResponse,
)
from messaging_service.domain.value_objects.ids import MAX_USER_ID
from messaging_service.services import conversation_service, message_service

router = APIRouter(prefix="/api/v1/messages", tags=["messages"])

# Static paths are registered before /{other_user_id}.


@router.post("", response_model=MessageResponse, status_code=201)
async def send_message(
    body: SendMessageRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> MessageResponse:
    msg = await message_service.send_message(
        principal, body.recipient_id, body.content, uow,
    )
    return MessageResponse.model_validate(msg, from_attributes=True)


@router.get("/conversations", response_model=list[ConversationResponse])
async def list_conversations(
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> list[ConversationResponse]:
    summaries = await conversation_service.list_conversations(principal, uow)
    return [ConversationResponse.model_validate(s, from_attributes=True) for s in summaries]


@router.patch("/{message_id}/read", response_model=MessageResponse)
async def mark_as_read(
    message_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> MessageResponse:
    msg = await message_service.mark_as_read(principal, message_id, uow)
    return MessageResponse.model_validate(msg, from_attributes=True)


@router.get("/{other_user_id}", response_model=ThreadResponse)
async def get_thread(
    other_user_id: Annotated[int, Path(ge=1, le=MAX_USER_ID)],
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> ThreadResponse:
    thread = await message_service.get_thread(principal, other_user_id, uow)
    return ThreadResponse.model_validate(thread, from_attributes=True)
