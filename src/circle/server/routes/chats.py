"""Direct message routes."""

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field

from circle.server.deps import Actor, Service

router = APIRouter()


class TextMessage(BaseModel):
    text: str | None = None


class VoiceMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    audio_data: str | None = Field(default=None, alias="audioData")


@router.get("/chats")
async def list_chats(actor: Actor, service: Service) -> list[dict[str, Any]]:
    chats = await service.list_chats(actor.id)
    return [
        {
            "friend": chat["friend"],
            "lastMessage": chat["lastMessage"].to_dict()
            if chat["lastMessage"]
            else None,
        }
        for chat in chats
    ]


@router.get("/chats/{peer_id}")
async def list_messages(
    peer_id: str, actor: Actor, service: Service
) -> list[dict[str, Any]]:
    messages = await service.list_messages(actor.id, peer_id)
    return [m.to_dict() for m in messages]


@router.post("/chats/{peer_id}/message")
async def send_text_message(
    peer_id: str, body: TextMessage, actor: Actor, service: Service
) -> dict[str, Any]:
    message = await service.send_text_message(actor.id, peer_id, body.text)
    return message.to_dict()


@router.post("/chats/{peer_id}/voice")
async def send_voice_message(
    peer_id: str, body: VoiceMessage, actor: Actor, service: Service
) -> dict[str, Any]:
    message = await service.send_voice_message(actor.id, peer_id, body.audio_data)
    return message.to_dict()
