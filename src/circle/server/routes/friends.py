"""Friend and friend request routes."""

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field

from circle.errors import MissingField
from circle.server.deps import Actor, Service

router = APIRouter()


class FriendRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    to_user_id: str | None = Field(default=None, alias="toUserId")


@router.get("/friends")
async def list_friends(actor: Actor, service: Service) -> list[dict[str, Any]]:
    return await service.list_friends(actor.id)


@router.get("/friend-requests")
async def list_requests(actor: Actor, service: Service) -> dict[str, list[str]]:
    return await service.list_requests(actor.id)


@router.post("/friend-requests")
async def send_request(
    body: FriendRequest, actor: Actor, service: Service
) -> dict[str, bool]:
    if not body.to_user_id:
        raise MissingField("toUserId is required")
    await service.send_request(actor.id, body.to_user_id)
    return {"success": True}


@router.post("/friend-requests/{from_user_id}/accept")
async def accept_request(
    from_user_id: str, actor: Actor, service: Service
) -> dict[str, bool]:
    await service.accept_request(actor.id, from_user_id)
    return {"success": True}


@router.post("/friend-requests/{from_user_id}/decline")
async def decline_request(
    from_user_id: str, actor: Actor, service: Service
) -> dict[str, bool]:
    await service.decline_request(actor.id, from_user_id)
    return {"success": True}
